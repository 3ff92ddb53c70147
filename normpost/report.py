"""Tabular summary of posterior results."""
from __future__ import annotations

from typing import Mapping

import numpy as np
import pandas as pd

from .core.specs import PosteriorResult

__all__ = ["summarize"]

COLUMNS = ["method", "mean", "sd", "ci_low", "ci_high"]


def summarize(results: Mapping[str, PosteriorResult]) -> pd.DataFrame:
    """One row per named result; NaN where a method has no sd or interval."""
    rows = []
    for name, res in results.items():
        low, high = res.credible_interval95 if res.credible_interval95 is not None else (np.nan, np.nan)
        rows.append({
            "name": name,
            "method": res.method.value if res.method is not None else None,
            "mean": res.mean,
            "sd": res.sd if res.sd is not None else np.nan,
            "ci_low": low,
            "ci_high": high,
        })
    return pd.DataFrame(rows, columns=["name"] + COLUMNS).set_index("name")
