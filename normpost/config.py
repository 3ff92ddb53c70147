"""
Numeric defaults for posterior updates, sampling and diagnostics.

Every function that reads one of these values also accepts an explicit
keyword override, so the singleton below is only ever read.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NormPostConfig:
    """Package-wide defaults."""

    # Two-tailed 97.5th percentile of the standard normal
    CREDIBLE_Z95: float = 1.959964

    # Variates generated per batch by PosteriorSampler.draw
    SAMPLER_CHUNK_SIZE: int = 1024

    # Grid used by compare_densities when none is supplied
    KDE_NUM_POINTS: int = 200
    KDE_GRID_WIDTH: float = 4.0

    # Relative tolerance used when comparing equivalent formulations
    REL_TOL: float = 1e-9

    # Team label used for a traded player's combined season row
    SPLIT_TEAM_LABEL: str = "TOT"


# Singleton instance
DEFAULTS = NormPostConfig()


def get_config() -> NormPostConfig:
    """Get the package defaults."""
    return DEFAULTS
