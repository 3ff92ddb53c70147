"""
Example: three ways of updating a PER prior
-------------------------------------------

A league-wide prior for player efficiency rating (PER) is combined with a
small observed sample under each information regime, and the resulting
posteriors are compared by Monte Carlo.

    python examples/example_updates.py            # built-in summary numbers
    python examples/example_updates.py stats.csv  # estimate from a CSV
"""

import logging
import sys

from normpost import (
    PriorSpec,
    ObservationSpec,
    UpdateMethod,
    update,
    compare_densities,
)
from normpost.data import load_player_stats, filter_rows, prior_from_history, observation_from_rows
from normpost.report import summarize


def specs_from_csv(path):
    df = load_player_stats(path)
    seasons = sorted(df["season"].unique())
    history = filter_rows(df, seasons=seasons[:-1], min_minutes=500)
    latest = filter_rows(df, seasons=seasons[-1:], min_minutes=0)
    return prior_from_history(history), observation_from_rows(latest)


def main(argv):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(argv) > 1:
        prior, obs = specs_from_csv(argv[1])
    else:
        prior = PriorSpec(mean=14.79, sample_size=1448, sd=1.57, nuisance_sd=4.53)
        obs = ObservationSpec(mean=1.9, sample_size=91, sd=1.19)

    results = {m.value: update(prior, obs, m) for m in UpdateMethod}
    print(summarize(results).to_string())

    comparison = compare_densities(results, 5000, seed=2024, fallback_sd=prior.sd)
    for name in results:
        peak = comparison.grid[comparison.kde[name].argmax()]
        print(f"{name:>12}: KDE mode ~ {peak:.3f}")


if __name__ == "__main__":
    main(sys.argv)
