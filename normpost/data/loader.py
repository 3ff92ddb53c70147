#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Loading and cleaning of player-season statistics.

Rows are (season, player, position, age, team, games, minutes_played, per).
Header spellings from common exports (e.g. "Tm", "MP", "PER") are mapped to
these canonical names.
"""

import logging
from pathlib import Path
from typing import IO, Iterable, Optional, Union

import numpy as np
import pandas as pd

from ..config import DEFAULTS
from ..errors import InvalidInput

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS = [
    "season", "player", "position", "age", "team", "games", "minutes_played", "per",
]
REQUIRED_COLUMNS = ["season", "player", "per"]
NUMERIC_COLUMNS = ["age", "games", "minutes_played", "per"]

# lower-cased source header -> canonical name
COLUMN_ALIASES = {
    "season": "season",
    "year": "season",
    "player": "player",
    "name": "player",
    "pos": "position",
    "position": "position",
    "age": "age",
    "tm": "team",
    "team": "team",
    "g": "games",
    "games": "games",
    "mp": "minutes_played",
    "minutes": "minutes_played",
    "minutes_played": "minutes_played",
    "per": "per",
}


def clean_player_stats(raw: pd.DataFrame, *, keep_combined_rows: bool = True,
                       split_team_label: Optional[str] = None) -> pd.DataFrame:
    """Normalize an already-loaded frame of player-season rows.

    Args:
        raw: Frame with any of the headers in COLUMN_ALIASES.
        keep_combined_rows: For a player traded mid-season, keep only the
            combined row (team == split_team_label) and drop the per-team rows.
        split_team_label: Label of the combined row; defaults to "TOT".

    Returns:
        Copy with canonical columns (those present, in canonical order),
        numeric columns coerced and rows without a `per` value dropped.

    Raises:
        InvalidInput: If season, player or per cannot be found.
    """
    label = DEFAULTS.SPLIT_TEAM_LABEL if split_team_label is None else split_team_label

    renamed = {}
    for col in raw.columns:
        key = str(col).strip().lower()
        if key in COLUMN_ALIASES and COLUMN_ALIASES[key] not in renamed.values():
            renamed[col] = COLUMN_ALIASES[key]
    df = raw.rename(columns=renamed)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidInput(f"Player stats are missing required column(s): {', '.join(missing)}")

    df = df[[c for c in CANONICAL_COLUMNS if c in df.columns]].copy()

    # blank strings -> NaN, strip whitespace and hall-of-fame markers from names
    df = df.replace(r'^\s*$', np.nan, regex=True)
    for col in ("player", "position", "team"):
        if col in df.columns:
            df[col] = df[col].astype("string").str.strip()
    df["player"] = df["player"].str.rstrip("*")

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")

    before = len(df)
    df = df.dropna(subset=["player", "per"])
    if len(df) < before:
        logger.info("Dropped %d rows without player or per", before - len(df))

    if keep_combined_rows and "team" in df.columns:
        has_combined = (df["team"] == label).groupby([df["season"], df["player"]]).transform("any")
        has_combined = has_combined.fillna(False).astype(bool)
        split_rows = has_combined & (df["team"] != label).fillna(True).astype(bool)
        if split_rows.any():
            logger.info("Dropped %d per-team rows of traded players", int(split_rows.sum()))
        df = df[~split_rows]

    return df.reset_index(drop=True)


def load_player_stats(source: Union[str, Path, IO[str]], **clean_kwargs) -> pd.DataFrame:
    """Read a CSV of player-season statistics and clean it.

    Args:
        source: Path or open text buffer.
        **clean_kwargs: Forwarded to `clean_player_stats`.

    Raises:
        FileNotFoundError: If a path does not exist.
        InvalidInput: If required columns are missing.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Could not find {path}")
        raw = pd.read_csv(path)
    else:
        raw = pd.read_csv(source)

    df = clean_player_stats(raw, **clean_kwargs)
    logger.info("Loaded %d player-season rows (%d raw)", len(df), len(raw))
    return df


def filter_rows(df: pd.DataFrame, *,
                seasons: Optional[Iterable] = None,
                min_minutes: Optional[float] = None,
                min_games: Optional[int] = None,
                positions: Optional[Iterable[str]] = None,
                players: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """Return the rows matching every given criterion (a copy)."""
    mask = pd.Series(True, index=df.index)
    if seasons is not None:
        mask &= df["season"].isin(list(seasons))
    if min_minutes is not None:
        mask &= df["minutes_played"] >= min_minutes
    if min_games is not None:
        mask &= df["games"] >= min_games
    if positions is not None:
        mask &= df["position"].isin(list(positions))
    if players is not None:
        mask &= df["player"].isin(list(players))
    return df[mask.fillna(False).astype(bool)].copy()
