import logging

from normpost.errors import NormPostError, InvalidInput, NumericalDegeneracy
from normpost.config import NormPostConfig, DEFAULTS, get_config

from normpost.core.specs import (
    UpdateMethod,
    PriorSpec,
    ObservationSpec,
    PosteriorResult,
    required_fields,
)
from normpost.core.updates import update_sample_size, update_mean_sd, update_full, update
from normpost.core.sampler import PosteriorSampler

from normpost.distributions import Distribution, Normal
from normpost.diagnostics import DensityComparison, compare_densities

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
