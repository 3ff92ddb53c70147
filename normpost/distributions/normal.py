# distributions/normal.py
from __future__ import annotations

from typing import Any

import numpy as np
from scipy.stats import norm

from ..array_backend.utils import _ensure_finite
from ..custom_types import Array, ArrayLike, PRNG
from ..errors import InvalidInput
from .distribution import Distribution

__all__ = [
    "Normal",
]


def _to_1d_vector(values: ArrayLike) -> Array:
    """Normalizes scalar, (n,) or (n, 1) input to a 1-D float vector (n,)."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 1:
        return arr
    if arr.ndim == 2 and arr.shape[1] == 1:
        return arr[:, 0]
    raise ValueError("values must be scalar, (n,), or (n,1).")


class Normal(Distribution[np.floating]):
    """
    Univariate Normal N(mu, sigma^2) backed by scipy.stats.norm.

    Shape policy:
      - sample(n) -> (n,)
      - density, inv_cdf -> (n,) for scalar, (n,) or (n,1) input
    """

    def __init__(self,
                 mu: float,
                 sigma: float,
                 *,
                 rng: PRNG | None = None):
        mu = _ensure_finite(mu, name="mu")
        sigma = _ensure_finite(sigma, name="sigma")
        if sigma <= 0:
            raise InvalidInput("sigma must be > 0")
        self._mu = mu
        self._sigma = sigma
        self._rng = rng or np.random.default_rng()
        self._dist = norm(loc=mu, scale=sigma)

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    # ------------------------ Distribution core ------------------------

    def sample(self, n_samples: int = 1) -> Array:
        """
        Draw (n,) samples using the stored Generator.
        """
        n_samples = int(n_samples)
        if n_samples < 0:
            raise InvalidInput(f"n_samples must be >= 0, got {n_samples}")
        x = self._dist.rvs(size=n_samples, random_state=self._rng)
        return np.asarray(x, dtype=float).reshape(-1)

    def density(self, values: ArrayLike) -> Array:
        return self._dist.pdf(_to_1d_vector(values))

    def inv_cdf(self, u: ArrayLike) -> Array:
        u = _to_1d_vector(u)
        if np.any((u < 0.0) | (u > 1.0)):
            raise ValueError("inv_cdf: u must lie in [0, 1]")
        return self._dist.ppf(u)

    @classmethod
    def from_samples(cls, samples: ArrayLike, *, rng: PRNG | None = None) -> Normal:
        """Moment-match a Normal to 1-D samples (ddof=1 standard deviation)."""
        x = _to_1d_vector(samples)
        if x.size < 2:
            raise InvalidInput("from_samples requires at least two samples.")
        return cls(mu=float(x.mean()), sigma=float(x.std(ddof=1)), rng=rng)

    @classmethod
    def from_distribution(cls, convert_from: Distribution, **fit_kwargs: Any) -> Normal:
        """
        Fit mean and standard deviation from samples drawn from another distribution.
        """
        n = int(fit_kwargs.get("n", 4000))
        return cls.from_samples(convert_from.sample(n), rng=fit_kwargs.get("rng"))

    def __repr__(self) -> str:
        return f"Normal(mu={self._mu!r}, sigma={self._sigma!r})"
