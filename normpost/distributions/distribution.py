# distributions/distribution.py
from __future__ import annotations

from typing import Generic, TypeVar, Any
from abc import ABC, abstractmethod

import numpy as np

from ..custom_types import Array, ArrayLike, Float

__all__ = [
    "Distribution",
]

T = TypeVar("T", bound=np.number)


# -------------------------- Abstract Classes ----------------------------


class Distribution(Generic[T], ABC):
    """
    Abstract base class for any distribution class.
    """

    def sample(self, n_samples: int = 1) -> Array[T]:
        """
        Optional. If a subclass can't sample, it may leave this unimplemented.

        Sample n_samples items from the distribution.
        Returns a ndarray of T.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def density(self, data: ArrayLike) -> Array[Float]:
        """
        Optional. Compute p(data) under this distribution.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    @classmethod
    @abstractmethod
    def from_distribution(cls, other: Distribution, **fit_kwargs: Any) -> Distribution[T]:
        """
        Convert the distribution `other` into a distribution of type `cls`. This will
        typically be an approximation, e.g. moment matching on samples drawn from `other`.
        """
        raise NotImplementedError("This method should be implemented by subclasses")
