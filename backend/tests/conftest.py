"""
Shared fixtures.

The environment is pinned before courtside is imported so a developer's
.env cannot point the suite at a real database.
"""
import os

os.environ["DATABASE_URL"] = ""
os.environ["DATA_SOURCE"] = "local"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["RATE_LIMIT"] = "1000/minute"

import numpy as np
import pytest
import pytest_asyncio

from courtside.schemas import Match, Player
from courtside.services.data_source import reset_data_source_router
from courtside.services.local_client import LocalDataClient, get_local_client
from courtside.services.sql_client import SqlDataClient


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def player1():
    return Player(
        id="player-1",
        display_name="Carlos Alcaraz",
        nationality="ESP",
        current_rank=2,
        elo_rating=2100,
        hard_elo=2080,
        clay_elo=2150,
        first_serve_win_pct=75,
        first_return_win_pct=35,
        break_points_converted_pct=45,
        hard_court_win_pct=80,
        clay_court_win_pct=88,
        grass_court_win_pct=85,
        recent_form=["W", "W", "L", "W", "W"],
        fatigue_index=20,
        injury_risk=5,
    )


@pytest.fixture
def player2():
    return Player(
        id="player-2",
        display_name="Daniil Medvedev",
        nationality="RUS",
        current_rank=8,
        elo_rating=1950,
        hard_elo=2000,
        clay_elo=1800,
        first_serve_win_pct=72,
        first_return_win_pct=33,
        break_points_converted_pct=40,
        hard_court_win_pct=75,
        clay_court_win_pct=55,
        grass_court_win_pct=65,
        recent_form=["L", "W", "L", "L", "W"],
        fatigue_index=30,
        injury_risk=10,
    )


@pytest.fixture
def match(player1, player2):
    return Match(
        id="match-1",
        player1_id=player1.id,
        player2_id=player2.id,
        surface="hard",
        tournament_name="Australian Open",
        round="QF",
        best_of=3,
    )


@pytest.fixture
def local_client():
    return LocalDataClient()


@pytest.fixture
def shared_local_client():
    """The process-wide in-memory client used by the API, emptied around each test"""
    client = get_local_client()
    client.reset()
    reset_data_source_router()
    yield client
    client.reset()
    reset_data_source_router()


@pytest_asyncio.fixture(params=["local", "sql"])
async def data_client(request):
    """Each contract test runs against the in-memory and the relational client"""
    if request.param == "local":
        yield LocalDataClient()
        return

    client = SqlDataClient("sqlite+aiosqlite:///:memory:")
    await client.create_tables()
    yield client
    await client.close()
