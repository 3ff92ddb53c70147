from .loader import load_player_stats, clean_player_stats, filter_rows, CANONICAL_COLUMNS
from .aggregate import prior_from_history, observation_from_rows

__all__ = [
    "load_player_stats",
    "clean_player_stats",
    "filter_rows",
    "CANONICAL_COLUMNS",
    "prior_from_history",
    "observation_from_rows",
]
