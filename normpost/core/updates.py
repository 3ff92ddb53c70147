# core/updates.py
"""
Closed-form conjugate updates of a normal mean.

Three information regimes are supported:

    Method 1 (`update_sample_size`)
        Only means and sample sizes are known. The posterior mean is the
        count-weighted average; no posterior sd exists.

    Method 2 (`update_mean_sd`)
        Means and standard deviations are known. Precisions 1/sd^2 are
        summed and used as weights:

            tau_post = 1/sd_prior^2 + 1/sd_obs^2
            mu_post  = (mu_prior/sd_prior^2 + mu_obs/sd_obs^2) / tau_post

    Method 3 (`update_full`)
        Prior sd, a fixed population sd (tau) and the observed count are
        known. The observation contributes n/tau^2 of precision:

            tau_post = 1/sd_prior^2 + n/tau^2
            mu_post  = (1/sd_prior^2)/tau_post * mu_prior + (n/tau^2)/tau_post * mu_obs

Every method validates its required fields before any arithmetic and
raises `InvalidInput` or `NumericalDegeneracy`; there is no partial result.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Dict

from .specs import (
    UpdateMethod,
    PriorSpec,
    ObservationSpec,
    PosteriorResult,
    required_fields,
)
from ..errors import InvalidInput, NumericalDegeneracy

__all__ = [
    "update_sample_size",
    "update_mean_sd",
    "update_full",
    "update",
]

logger = logging.getLogger(__name__)


def _check_required(method: UpdateMethod, prior: PriorSpec, observation: ObservationSpec) -> None:
    if not isinstance(prior, PriorSpec):
        raise InvalidInput(f"{method.value}: prior must be a PriorSpec, got {type(prior).__name__}")
    if not isinstance(observation, ObservationSpec):
        raise InvalidInput(
            f"{method.value}: observation must be an ObservationSpec, got {type(observation).__name__}"
        )
    prior_fields, obs_fields = required_fields(method)
    missing = [f"prior.{f}" for f in prior_fields if getattr(prior, f) is None]
    missing += [f"observation.{f}" for f in obs_fields if getattr(observation, f) is None]
    if missing:
        raise InvalidInput(f"{method.value}: missing required field(s): {', '.join(missing)}")


def _precision(sd: float, name: str, method: UpdateMethod) -> float:
    """1/sd^2 for a strictly positive sd."""
    if sd <= 0:
        raise InvalidInput(f"{method.value}: {name} must be > 0, got {sd!r}")
    var = sd * sd
    if var == 0.0:
        raise NumericalDegeneracy(f"{method.value}: {name}={sd!r} squares to zero")
    prec = 1.0 / var
    if not math.isfinite(prec):
        raise NumericalDegeneracy(f"{method.value}: precision of {name}={sd!r} is not finite")
    return prec


def _finite(value: float, what: str, method: UpdateMethod) -> float:
    if not math.isfinite(value):
        raise NumericalDegeneracy(f"{method.value}: {what} is not finite ({value!r})")
    return value


def _combine(prior_mean: float, prior_prec: float, obs_mean: float, obs_prec: float,
             method: UpdateMethod) -> PosteriorResult:
    post_prec = _finite(prior_prec + obs_prec, "posterior precision", method)
    mean = (prior_prec / post_prec) * prior_mean + (obs_prec / post_prec) * obs_mean
    mean = _finite(mean, "posterior mean", method)
    sd = _finite(math.sqrt(1.0 / post_prec), "posterior sd", method)
    if sd == 0.0:
        raise NumericalDegeneracy(f"{method.value}: posterior sd underflowed to zero")
    return PosteriorResult(mean=mean, sd=sd, method=method)


def update_sample_size(prior: PriorSpec, observation: ObservationSpec) -> PosteriorResult:
    """Method 1: weight the prior and observed means by their sample sizes.

    Args:
        prior: needs `mean` and `sample_size`.
        observation: needs `mean` and `sample_size`.

    Returns:
        PosteriorResult with `sd` and `credible_interval95` set to None.

    Raises:
        InvalidInput: a required field is missing or both sample sizes are zero.
    """
    method = UpdateMethod.SAMPLE_SIZE
    _check_required(method, prior, observation)

    total = observation.sample_size + prior.sample_size
    if total <= 0:
        raise InvalidInput(f"{method.value}: prior and observed sample sizes are both zero")

    # int / int stays exact for counts too large to convert to float
    w_obs = observation.sample_size / total
    w_prior = prior.sample_size / total
    mean = w_obs * observation.mean + w_prior * prior.mean
    result = PosteriorResult(mean=_finite(mean, "posterior mean", method), method=method)
    logger.debug("%s update: n_prior=%d n_obs=%d -> mean=%.6g",
                 method.value, prior.sample_size, observation.sample_size, result.mean)
    return result


def update_mean_sd(prior: PriorSpec, observation: ObservationSpec) -> PosteriorResult:
    """Method 2: inverse-variance weighting of prior and observed means.

    Sample sizes are ignored.

    Raises:
        InvalidInput: `prior.sd` or `observation.sd` is missing or zero.
        NumericalDegeneracy: the precisions do not combine to a finite result.
    """
    method = UpdateMethod.MEAN_SD
    _check_required(method, prior, observation)

    prior_prec = _precision(prior.sd, "prior.sd", method)
    obs_prec = _precision(observation.sd, "observation.sd", method)
    result = _combine(prior.mean, prior_prec, observation.mean, obs_prec, method)
    logger.debug("%s update: prior_prec=%.6g obs_prec=%.6g -> mean=%.6g sd=%.6g",
                 method.value, prior_prec, obs_prec, result.mean, result.sd)
    return result


def update_full(prior: PriorSpec, observation: ObservationSpec) -> PosteriorResult:
    """Method 3: prior precision plus n / tau^2 from the observed sample.

    The observed contribution grows with `observation.sample_size`, so the
    posterior concentrates on `observation.mean` as the count increases. A
    count of zero returns the prior unchanged.

    Raises:
        InvalidInput: a required field is missing, or `prior.sd` or
            `prior.nuisance_sd` is zero.
        NumericalDegeneracy: the precisions do not combine to a finite result.
    """
    method = UpdateMethod.FULL
    _check_required(method, prior, observation)

    prior_prec = _precision(prior.sd, "prior.sd", method)
    tau_prec = _precision(prior.nuisance_sd, "prior.nuisance_sd", method)

    if observation.sample_size == 0:
        logger.debug("%s update: empty observation, returning prior", method.value)
        return PosteriorResult(mean=prior.mean, sd=prior.sd, method=method)

    try:
        n_obs = float(observation.sample_size)
    except OverflowError as e:
        raise NumericalDegeneracy(
            f"{method.value}: observation.sample_size is too large for a finite precision"
        ) from e
    obs_prec = _finite(n_obs * tau_prec, "observed precision", method)
    result = _combine(prior.mean, prior_prec, observation.mean, obs_prec, method)
    logger.debug("%s update: prior_prec=%.6g obs_prec=%.6g -> mean=%.6g sd=%.6g",
                 method.value, prior_prec, obs_prec, result.mean, result.sd)
    return result


_DISPATCH: Dict[UpdateMethod, Callable[[PriorSpec, ObservationSpec], PosteriorResult]] = {
    UpdateMethod.SAMPLE_SIZE: update_sample_size,
    UpdateMethod.MEAN_SD: update_mean_sd,
    UpdateMethod.FULL: update_full,
}


def update(prior: PriorSpec, observation: ObservationSpec,
           method: UpdateMethod | str) -> PosteriorResult:
    """Run the update named by `method` (an `UpdateMethod` or its string value)."""
    return _DISPATCH[UpdateMethod.coerce(method)](prior, observation)
