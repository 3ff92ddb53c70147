from .specs import (
    UpdateMethod,
    PriorSpec,
    ObservationSpec,
    PosteriorResult,
    required_fields,
)
from .updates import update_sample_size, update_mean_sd, update_full, update
from .sampler import PosteriorSampler

__all__ = [
    "UpdateMethod",
    "PriorSpec",
    "ObservationSpec",
    "PosteriorResult",
    "required_fields",
    "update_sample_size",
    "update_mean_sd",
    "update_full",
    "update",
    "PosteriorSampler",
]
