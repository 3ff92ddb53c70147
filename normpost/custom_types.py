# custom_types.py
"""
Type aliases shared across normpost.

We generally follow the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
- Scalars that come back from a computation are plain Python floats
"""
from __future__ import annotations
from typing import TypeAlias, Union
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

from numpy import floating as NumpyFloating

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
Float: TypeAlias = NumpyFloating
PRNG: TypeAlias = NumpyRNG
Seed: TypeAlias = Union[int, None]
