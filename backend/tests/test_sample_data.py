"""
Tests for sample data seeding.
"""

import numpy as np
import pytest

from courtside.services.sample_data import build_sample_players, seed_sample_data


class TestBuildSamplePlayers:

    def test_ranked_and_named(self, rng):
        players = build_sample_players(14, rng)
        assert [p["current_rank"] for p in players] == list(range(1, 15))
        assert players[0]["display_name"] == "Carlos Alcaraz"
        assert players[0]["slug"] == "carlos-alcaraz"
        assert all(len(p["recent_form"]) == 5 for p in players)

    def test_seeded_rng_is_reproducible(self):
        assert build_sample_players(4, np.random.default_rng(1)) == build_sample_players(4, np.random.default_rng(1))


class TestSeedSampleData:

    @pytest.mark.asyncio
    async def test_counts(self, data_client, rng):
        counts = await seed_sample_data(data_client, player_count=4, rng=rng)
        assert counts == {"players": 4, "matches": 2, "predictions": 8, "compliance": 2, "model_weights": 1}

        predictions = await data_client.predictions.list()
        assert len(predictions) == 8
        assert all(p.actual_winner_id is not None and p.was_correct is not None for p in predictions)

        # One row on create and one once the result is recorded
        assert len(await data_client.model_feedback.list()) == 16

        active = await data_client.model_weights.get_active()
        assert active.model_version == "v4.2"

    @pytest.mark.asyncio
    async def test_matches_are_completed(self, local_client, rng):
        await seed_sample_data(local_client, player_count=6, rng=rng)
        matches = await local_client.matches.list()
        assert len(matches) == 3
        assert {m.status for m in matches} == {"completed"}
