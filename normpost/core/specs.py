# core/specs.py
"""
Value objects passed to and returned from the update methods.

`PriorSpec` and `ObservationSpec` carry the scalar aggregates that an update
consumes. Each field other than `mean` is optional; which ones must be
present depends on the method (see `required_fields`). Construction checks
types and signs only, so a zero standard deviation is representable here and
is rejected by the method that would divide by it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..array_backend.utils import _ensure_finite, _ensure_nonnegative, _ensure_count
from ..config import DEFAULTS
from ..custom_types import PRNG
from ..errors import InvalidInput

__all__ = [
    "UpdateMethod",
    "PriorSpec",
    "ObservationSpec",
    "PosteriorResult",
    "required_fields",
]


class UpdateMethod(str, Enum):
    """Which information regime an update uses."""

    SAMPLE_SIZE = "sample_size"   # Method 1: counts only
    MEAN_SD = "mean_sd"           # Method 2: mean +/- sd only
    FULL = "full"                 # Method 3: prior sd, nuisance sd, observed count

    @classmethod
    def coerce(cls, method: "UpdateMethod | str") -> "UpdateMethod":
        """Accept an enum member, its value or its name (case-insensitive)."""
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            key = method.strip()
            for member in cls:
                if key.lower() in (member.value, member.name.lower()):
                    return member
        valid = ", ".join(m.value for m in cls)
        raise InvalidInput(f"Unknown update method {method!r}. Expected one of: {valid}")


# (prior fields, observation fields) each method needs
_REQUIRED = {
    UpdateMethod.SAMPLE_SIZE: (("mean", "sample_size"), ("mean", "sample_size")),
    UpdateMethod.MEAN_SD: (("mean", "sd"), ("mean", "sd")),
    UpdateMethod.FULL: (("mean", "sd", "nuisance_sd"), ("mean", "sample_size")),
}


def required_fields(method: UpdateMethod | str) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Return `(prior_fields, observation_fields)` that `method` requires."""
    return _REQUIRED[UpdateMethod.coerce(method)]


def _optional(value, check, name):
    return None if value is None else check(value, name=name)


@dataclass(frozen=True)
class PriorSpec:
    """Population-level prior belief about a mean.

    Attributes:
        mean: Prior mean.
        sample_size: Number of observations the prior mean is based on.
        sd: Standard deviation of the prior *mean* (its standard error).
        nuisance_sd: Fixed population standard deviation ("tau").
    """
    mean: float
    sample_size: Optional[int] = None
    sd: Optional[float] = None
    nuisance_sd: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "mean", _ensure_finite(self.mean, name="prior.mean"))
        object.__setattr__(self, "sample_size",
                           _optional(self.sample_size, _ensure_count, "prior.sample_size"))
        object.__setattr__(self, "sd", _optional(self.sd, _ensure_nonnegative, "prior.sd"))
        object.__setattr__(self, "nuisance_sd",
                           _optional(self.nuisance_sd, _ensure_nonnegative, "prior.nuisance_sd"))

    @property
    def precision(self) -> Optional[float]:
        """1 / sd**2, or None if sd is absent or zero."""
        if not self.sd:
            return None
        return 1.0 / (self.sd * self.sd)


@dataclass(frozen=True)
class ObservationSpec:
    """Summary of a newly observed sample.

    Attributes:
        mean: Observed sample mean.
        sample_size: Number of observations.
        sd: Standard deviation of the observed mean.
    """
    mean: float
    sample_size: Optional[int] = None
    sd: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "mean", _ensure_finite(self.mean, name="observation.mean"))
        object.__setattr__(self, "sample_size",
                           _optional(self.sample_size, _ensure_count, "observation.sample_size"))
        object.__setattr__(self, "sd", _optional(self.sd, _ensure_nonnegative, "observation.sd"))

    @property
    def precision(self) -> Optional[float]:
        """1 / sd**2, or None if sd is absent or zero."""
        if not self.sd:
            return None
        return 1.0 / (self.sd * self.sd)


@dataclass(frozen=True)
class PosteriorResult:
    """Outcome of a single update.

    `credible_interval95` is derived from `sd` and is present iff `sd` is.
    """
    mean: float
    sd: Optional[float] = None
    method: Optional[UpdateMethod] = None
    credible_interval95: Optional[Tuple[float, float]] = field(init=False, default=None)

    def __post_init__(self):
        object.__setattr__(self, "mean", _ensure_finite(self.mean, name="posterior.mean"))
        if self.method is not None:
            object.__setattr__(self, "method", UpdateMethod.coerce(self.method))
        if self.sd is not None:
            sd = _ensure_nonnegative(self.sd, name="posterior.sd")
            object.__setattr__(self, "sd", sd)
            half = DEFAULTS.CREDIBLE_Z95 * sd
            object.__setattr__(self, "credible_interval95", (self.mean - half, self.mean + half))

    @property
    def precision(self) -> Optional[float]:
        if not self.sd:
            return None
        return 1.0 / (self.sd * self.sd)

    def credible_interval(self, level: float = 0.95) -> Tuple[float, float]:
        """
        Central normal credible interval at `level` (0 < level < 1).

        Uses the exact normal quantiles of `to_normal()`, so
        `credible_interval(0.95)` agrees with `credible_interval95` to about
        six significant digits.
        """
        if self.sd is None:
            raise InvalidInput("credible_interval: posterior has no sd (sample-size method).")
        level = _ensure_finite(level, name="level")
        if not 0.0 < level < 1.0:
            raise InvalidInput(f"credible_interval: level must be in (0, 1), got {level!r}")
        low, high = self.to_normal().inv_cdf([0.5 - level / 2.0, 0.5 + level / 2.0])
        return (float(low), float(high))

    def to_normal(self, sd: Optional[float] = None, *, rng: PRNG | None = None):
        """
        Normal distribution for this posterior.

        `sd` overrides the posterior sd and must be given when the posterior
        has none (Method 1); the engine never fabricates a dispersion.
        """
        from ..distributions.normal import Normal

        sigma = self.sd if sd is None else _ensure_nonnegative(sd, name="sd")
        if sigma is None:
            raise InvalidInput(
                "to_normal: posterior has no sd; pass an explicit sd (e.g. the prior's)."
            )
        if sigma == 0:
            raise InvalidInput("to_normal: sd must be > 0")
        return Normal(mu=self.mean, sigma=sigma, rng=rng or np.random.default_rng())
