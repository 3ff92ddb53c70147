"""
Estimate prior and observation summaries from player-season rows.

The update methods only ever see scalars; this module is where those scalars
come from:

    prior.mean         mean of `stat` over all historical rows
    prior.sample_size  number of historical rows
    prior.sd           sample sd of the per-group means (group = season by default),
                       i.e. how much the mean itself moves between seasons
    prior.nuisance_sd  mean of the per-entity sample sds (entity = player),
                       i.e. the typical spread of one player's values
"""

import logging
from typing import Optional

import pandas as pd

from ..core.specs import PriorSpec, ObservationSpec
from ..errors import InvalidInput

logger = logging.getLogger(__name__)


def _stat_values(df: pd.DataFrame, stat: str) -> pd.Series:
    if stat not in df.columns:
        raise InvalidInput(f"Column {stat!r} not found; available: {list(df.columns)}")
    values = pd.to_numeric(df[stat], errors="coerce").dropna().astype(float)
    if values.empty:
        raise InvalidInput(f"No numeric values in column {stat!r}")
    return values


def _between_group_sd(df: pd.DataFrame, stat: str, group: Optional[str]) -> Optional[float]:
    if group is None or group not in df.columns:
        return None
    means = df.groupby(group)[stat].mean().dropna()
    if len(means) < 2:
        return None
    return float(means.std(ddof=1))


def _within_entity_sd(df: pd.DataFrame, stat: str, entity: Optional[str]) -> Optional[float]:
    if entity is None or entity not in df.columns:
        return None
    sds = df.groupby(entity)[stat].std(ddof=1).dropna()
    if sds.empty:
        return None
    return float(sds.mean())


def prior_from_history(df: pd.DataFrame, stat: str = "per", *,
                       group: Optional[str] = "season",
                       entity: Optional[str] = "player") -> PriorSpec:
    """Build a PriorSpec from historical rows.

    Args:
        df: Historical rows (already filtered).
        stat: Column to summarize.
        group: Column whose group means give the prior sd. None to skip.
        entity: Column whose per-entity sds give the nuisance sd. None to skip.

    Returns:
        PriorSpec. `sd` is None with fewer than two groups and `nuisance_sd`
        is None when no entity has two or more rows.
    """
    values = _stat_values(df, stat)
    rows = df.loc[values.index].assign(**{stat: values})

    prior = PriorSpec(
        mean=float(values.mean()),
        sample_size=int(values.size),
        sd=_between_group_sd(rows, stat, group),
        nuisance_sd=_within_entity_sd(rows, stat, entity),
    )
    logger.info("Prior from %d rows: mean=%.4g sd=%s tau=%s",
                prior.sample_size, prior.mean, prior.sd, prior.nuisance_sd)
    return prior


def observation_from_rows(df: pd.DataFrame, stat: str = "per") -> ObservationSpec:
    """Mean, count and sample sd (None for a single row) of `stat`."""
    values = _stat_values(df, stat)
    sd = float(values.std(ddof=1)) if values.size > 1 else None
    obs = ObservationSpec(mean=float(values.mean()), sample_size=int(values.size), sd=sd)
    logger.info("Observation from %d rows: mean=%.4g sd=%s", obs.sample_size, obs.mean, obs.sd)
    return obs
