# core/sampler.py
from __future__ import annotations

import logging
from typing import Iterator, Optional

import numpy as np

from .specs import PosteriorResult
from ..array_backend.utils import _ensure_count, _ensure_nonnegative
from ..config import DEFAULTS
from ..custom_types import Array, Seed
from ..errors import InvalidInput

__all__ = [
    "PosteriorSampler",
]

logger = logging.getLogger(__name__)


class PosteriorSampler:
    """Seeded normal draws from a posterior, for density comparisons.

    Every call to `draw` (or `sample`) starts a fresh
    `np.random.default_rng(seed)`, so two calls with the same seed and count
    give the same values. PCG64 streams are identical across platforms for a
    fixed integer seed.

    Args:
        posterior: Result of an update.
        seed: Integer seed. `None` draws fresh OS entropy on every call, which
            gives up reproducibility.
        sd: Dispersion to use instead of `posterior.sd`. Required for
            sample-size posteriors, which carry no sd.
        chunk_size: Variates generated per batch by `draw`.
    """

    def __init__(self,
                 posterior: PosteriorResult,
                 *,
                 seed: Seed = None,
                 sd: Optional[float] = None,
                 chunk_size: int | None = None):
        if not isinstance(posterior, PosteriorResult):
            raise InvalidInput(f"posterior must be a PosteriorResult, got {type(posterior).__name__}")

        sigma = posterior.sd if sd is None else _ensure_nonnegative(sd, name="sd")
        if sigma is None:
            raise InvalidInput(
                "PosteriorSampler: posterior has no sd; pass sd= explicitly (e.g. the prior's sd)."
            )
        if sigma == 0:
            raise InvalidInput("PosteriorSampler: sd must be > 0")

        chunk = DEFAULTS.SAMPLER_CHUNK_SIZE if chunk_size is None else _ensure_count(chunk_size, name="chunk_size")
        if chunk == 0:
            raise InvalidInput("PosteriorSampler: chunk_size must be > 0")

        self._posterior = posterior
        self._mean = posterior.mean
        self._sd = float(sigma)
        self._seed = seed
        self._chunk_size = chunk

    @property
    def posterior(self) -> PosteriorResult:
        return self._posterior

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def sd(self) -> float:
        """Dispersion actually used for sampling."""
        return self._sd

    @property
    def seed(self) -> Seed:
        return self._seed

    def draw(self, n_samples: int) -> Iterator[float]:
        """Lazily yield `n_samples` independent variates as Python floats."""
        n_samples = _ensure_count(n_samples, name="n_samples")
        logger.debug("Drawing %d samples from N(%.6g, %.6g^2), seed=%r",
                     n_samples, self._mean, self._sd, self._seed)
        return self._generate(n_samples)

    def _generate(self, n_samples: int) -> Iterator[float]:
        dist = self._posterior.to_normal(self._sd, rng=np.random.default_rng(self._seed))
        remaining = n_samples
        while remaining > 0:
            size = min(self._chunk_size, remaining)
            for x in dist.sample(size):
                yield float(x)
            remaining -= size

    def sample(self, n_samples: int) -> Array:
        """The same sequence as `draw(n_samples)`, as a (n,) float array."""
        n_samples = _ensure_count(n_samples, name="n_samples")
        return np.fromiter(self.draw(n_samples), dtype=float, count=n_samples)

    def __repr__(self) -> str:
        return f"PosteriorSampler(mean={self._mean!r}, sd={self._sd!r}, seed={self._seed!r})"
