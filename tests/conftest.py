import io

import numpy as np
import pandas as pd
import pytest

from normpost import PriorSpec, ObservationSpec


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def per_prior():
    """League PER prior with every optional field filled in."""
    return PriorSpec(mean=14.79, sample_size=1448, sd=1.57, nuisance_sd=4.53)


@pytest.fixture
def per_observation():
    return ObservationSpec(mean=1.9, sample_size=91, sd=1.19)


@pytest.fixture
def player_rows():
    """Cleaned player-season rows across two seasons."""
    return pd.DataFrame({
        "season": [2019, 2019, 2020, 2020, 2020],
        "player": ["Alice Smith", "Bob Jones", "Alice Smith", "Bob Jones", "Dan Rook"],
        "position": ["PG", "C", "PG", "C", "SG"],
        "age": [25, 28, 26, 29, 20],
        "team": ["BOS", "TOT", "BOS", "MIA", "NYK"],
        "games": [70, 60, 72, 65, 20],
        "minutes_played": [2000, 1500, 2100, 1600, 300],
        "per": [18.5, 15.0, 20.5, 13.0, 9.0],
    })


@pytest.fixture
def raw_csv():
    return io.StringIO(
        "Season,Player,Pos,Age,Tm,G,MP,PER\n"
        "2019,Alice Smith*,PG,25,BOS,70,2000,18.5\n"
        "2019,Bob Jones,C,28,TOT,60,1500,15.0\n"
        "2019,Bob Jones,C,28,LAL,30,700,14.0\n"
        "2019,Bob Jones,C,28,MIA,30,800,16.0\n"
        "2019,Carl Young,SF,22,NYK,10,90,\n"
        "2020,Alice Smith,PG,26,BOS,72,2100,20.5\n"
        "2020,Bob Jones,C,29,MIA,65,1600,13.0\n"
        "2020,Dan Rook,SG,20,NYK,20,300,9.0\n"
    )
