# array_backend/utils.py
"""
Scalar canonicalization used to validate the fields of the value objects.

All helpers accept Python scalars, numpy scalars and 0-D (or size-1) arrays,
and hand back plain Python numbers. Failures raise `InvalidInput`, which is
a `ValueError`, with the offending field name in the message.
"""

from __future__ import annotations

import math
import numbers
from typing import Any

import numpy as np

from ..custom_types import Array
from ..errors import InvalidInput


def _is_numpy_scalar(x: Any) -> bool:
    """Return true if object is a numpy generic or Python scalar"""
    return np.isscalar(x) or isinstance(x, np.generic)


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x)
    except Exception as e:
        raise TypeError(
            f"Could not convert input to array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _ensure_real_scalar(x: Any, *, name: str = "value") -> float | int:
    """
    Return a Python scalar for inputs that contain a single real value.

    Accepts:
      - Python scalars (int, float)
      - numpy scalar types (np.float64(...), np.int32(...))
      - 0-D numpy arrays and size-1 arrays

    Raises:
      InvalidInput if input contains more than one element, is complex,
      boolean, or not numeric at all.
    """
    if isinstance(x, (bool, np.bool_)):
        raise InvalidInput(f"{name}: expected a real number, got a boolean {x!r}")

    if _is_numpy_scalar(x):
        if isinstance(x, (str, bytes)):
            raise InvalidInput(f"{name}: expected a real number, got {type(x).__name__} {x!r}")
        if np.iscomplexobj(x):
            raise InvalidInput(f"{name}: input is complex-valued: {x!r}")
        if isinstance(x, np.generic):
            return x.item()
        return x

    try:
        arr = _as_array(x)
    except TypeError as e:
        raise InvalidInput(f"{name}: {e}") from e
    if arr.size != 1:
        raise InvalidInput(f"{name}: input must contain exactly one element; got size={arr.size}, shape={arr.shape}")
    if np.iscomplexobj(arr):
        raise InvalidInput(f"{name}: input is complex-valued (shape={arr.shape}).")
    if not np.issubdtype(arr.dtype, np.number):
        raise InvalidInput(f"{name}: expected a real number, got dtype {arr.dtype}")
    return arr.item()


def _ensure_finite(x: Any, *, name: str = "value") -> float:
    """Real scalar that is neither NaN nor infinite, as a float."""
    val = float(_ensure_real_scalar(x, name=name))
    if not math.isfinite(val):
        raise InvalidInput(f"{name}: must be finite, got {val!r}")
    return val


def _ensure_nonnegative(x: Any, *, name: str = "value") -> float:
    """Finite real scalar >= 0, as a float."""
    val = _ensure_finite(x, name=name)
    if val < 0:
        raise InvalidInput(f"{name}: must be >= 0, got {val!r}")
    return val


def _ensure_count(x: Any, *, name: str = "count") -> int:
    """
    Non-negative integer. Integral floats (e.g. 91.0) are accepted and
    converted; fractional values are rejected.
    """
    val = _ensure_real_scalar(x, name=name)
    if isinstance(val, numbers.Integral):
        out = int(val)
    else:
        if not math.isfinite(val) or not float(val).is_integer():
            raise InvalidInput(f"{name}: must be a whole number, got {val!r}")
        out = int(val)
    if out < 0:
        raise InvalidInput(f"{name}: must be >= 0, got {out!r}")
    return out
