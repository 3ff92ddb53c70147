# diagnostics.py
"""
Monte Carlo comparison of posterior densities.

Samples are drawn from each posterior with `PosteriorSampler`, smoothed with
a Gaussian KDE and evaluated next to the analytic normal pdf on one shared
grid, ready for an external plotting layer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import numpy as np
from scipy.stats import gaussian_kde

from .array_backend.utils import _ensure_count, _ensure_nonnegative
from .config import DEFAULTS
from .core.sampler import PosteriorSampler
from .core.specs import PosteriorResult
from .custom_types import Array, ArrayLike, Seed
from .distributions.normal import Normal
from .errors import InvalidInput

__all__ = [
    "DensityComparison",
    "compare_densities",
    "default_grid",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DensityComparison:
    """Densities of several posteriors evaluated on a common grid.

    Attributes:
        grid: (m,) evaluation points.
        analytic: name -> (m,) normal pdf values.
        kde: name -> (m,) Gaussian KDE of the drawn samples.
        samples: name -> (n,) drawn samples.
        fitted: name -> Normal moment-matched to the drawn samples.
    """
    grid: Array
    analytic: Dict[str, Array]
    kde: Dict[str, Array]
    samples: Dict[str, Array]
    fitted: Dict[str, Normal]


def _resolve_sd(name: str, posterior: PosteriorResult, fallback_sd: Optional[float]) -> float:
    if posterior.sd is not None:
        return posterior.sd
    if fallback_sd is None:
        raise InvalidInput(
            f"compare_densities: posterior {name!r} has no sd and no fallback_sd was given"
        )
    return fallback_sd


def default_grid(posteriors: Mapping[str, PosteriorResult], *,
                 fallback_sd: Optional[float] = None,
                 num_points: int | None = None,
                 width: float | None = None) -> Array:
    """Evenly spaced grid covering mean +/- width*sd of every posterior."""
    num_points = DEFAULTS.KDE_NUM_POINTS if num_points is None else _ensure_count(num_points, name="num_points")
    width = DEFAULTS.KDE_GRID_WIDTH if width is None else _ensure_nonnegative(width, name="width")
    if num_points < 2:
        raise InvalidInput("default_grid: num_points must be >= 2")

    lows, highs = [], []
    for name, post in posteriors.items():
        sd = _resolve_sd(name, post, fallback_sd)
        lows.append(post.mean - width * sd)
        highs.append(post.mean + width * sd)
    return np.linspace(min(lows), max(highs), num_points)


def compare_densities(posteriors: Mapping[str, PosteriorResult],
                      n_samples: int,
                      *,
                      seed: Seed = None,
                      grid: ArrayLike | None = None,
                      num_points: int | None = None,
                      fallback_sd: Optional[float] = None) -> DensityComparison:
    """
    Draw `n_samples` from each posterior and compare KDE to analytic densities.

    Parameters
    ----------
    posteriors : mapping of str -> PosteriorResult
        Posteriors to compare, typically one per update method.
    n_samples : int
        Draws per posterior (at least 2 for the KDE).
    seed : int, optional
        Base seed. Entry `i` (in mapping order) uses `seed + i`, so entries
        are independent and the whole comparison is reproducible.
    grid : array-like, optional
        Evaluation points; defaults to `default_grid(...)`.
    fallback_sd : float, optional
        Dispersion used for posteriors without an sd (sample-size method).

    Returns
    -------
    DensityComparison
    """
    if not posteriors:
        raise InvalidInput("compare_densities: no posteriors given")
    n_samples = _ensure_count(n_samples, name="n_samples")
    if n_samples < 2:
        raise InvalidInput("compare_densities: n_samples must be >= 2")
    if fallback_sd is not None:
        fallback_sd = _ensure_nonnegative(fallback_sd, name="fallback_sd")

    if grid is None:
        xs = default_grid(posteriors, fallback_sd=fallback_sd, num_points=num_points)
    else:
        xs = np.asarray(grid, dtype=float).reshape(-1)

    analytic, kde, samples, fitted = {}, {}, {}, {}
    for i, (name, post) in enumerate(posteriors.items()):
        sd = _resolve_sd(name, post, fallback_sd)
        entry_seed = None if seed is None else seed + i
        sampler = PosteriorSampler(post, seed=entry_seed, sd=sd)
        draws = sampler.sample(n_samples)

        samples[name] = draws
        analytic[name] = post.to_normal(sd).density(xs)
        kde[name] = gaussian_kde(draws)(xs)
        fitted[name] = Normal.from_samples(draws)
        logger.debug("Density comparison for %r: %d draws, sd=%.6g", name, n_samples, sd)

    return DensityComparison(grid=xs, analytic=analytic, kde=kde,
                             samples=samples, fitted=fitted)
