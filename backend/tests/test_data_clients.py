"""
Contract tests for the data clients.

Every test runs against both the in-memory client and the relational
client on in-memory SQLite (see the data_client fixture).
"""

import pytest

from courtside.services.data_client import ListOptions, NotFoundError
from courtside.services.prediction_service import result_payload
from courtside.services.sample_data import DEFAULT_MODEL_WEIGHTS


async def create_match(client):
    player1 = await client.players.create({"display_name": "Carlos Alcaraz", "current_rank": 2})
    player2 = await client.players.create({"display_name": "Jannik Sinner", "current_rank": 1})
    match = await client.matches.create({"player1_id": player1.id, "player2_id": player2.id})
    return match, player1, player2


class TestCrud:

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_defaults(self, data_client):
        match, player1, player2 = await create_match(data_client)

        assert match.id
        assert match.surface == "hard"
        assert match.status == "scheduled"
        assert match.tournament_name == "Local Tournament"
        assert match.round == "R16"
        assert match.best_of == 3
        assert match.utc_start is not None
        assert player1.slug == "carlos-alcaraz"

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, data_client):
        assert await data_client.players.get("missing") is None

    @pytest.mark.asyncio
    async def test_update_is_partial(self, data_client):
        player = await data_client.players.create({"display_name": "Holger Rune", "current_rank": 12, "nationality": "DEN"})
        updated = await data_client.players.update(player.id, {"current_rank": 9})

        assert updated.current_rank == 9
        assert updated.display_name == "Holger Rune"
        assert updated.nationality == "DEN"
        assert (await data_client.players.get(player.id)).current_rank == 9

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, data_client):
        with pytest.raises(NotFoundError) as excinfo:
            await data_client.matches.update("missing", {"status": "completed"})
        assert excinfo.value.collection == "matches"
        assert "missing" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_remove(self, data_client):
        player = await data_client.players.create({"display_name": "Taylor Fritz"})
        await data_client.players.remove(player.id)
        await data_client.players.remove(player.id)
        assert await data_client.players.get(player.id) is None

    @pytest.mark.asyncio
    async def test_match_odds_round_trip(self, data_client):
        match, _, _ = await create_match(data_client)
        await data_client.matches.update(match.id, {"odds": {"player1_odds": 1.5, "player2_odds": 2.6}})

        stored = await data_client.matches.get(match.id)
        assert stored.odds.player1_odds == pytest.approx(1.5)
        assert stored.odds.player2_odds == pytest.approx(2.6)

    @pytest.mark.asyncio
    async def test_feedback_metadata_round_trip(self, data_client):
        row = await data_client.model_feedback.create({"model_type": "elo", "metadata": {"source": "manual"}})
        assert (await data_client.model_feedback.get(row.id)).metadata == {"source": "manual"}


class TestList:

    @pytest.mark.asyncio
    async def test_newest_first_without_sort(self, data_client):
        first = await data_client.players.create({"display_name": "First Player"})
        second = await data_client.players.create({"display_name": "Second Player"})
        assert [p.id for p in await data_client.players.list()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_sort_nulls_last_and_limit(self, data_client):
        await data_client.players.create({"display_name": "Ranked Three", "current_rank": 3})
        await data_client.players.create({"display_name": "Unranked"})
        await data_client.players.create({"display_name": "Ranked One", "current_rank": 1})

        ascending = await data_client.players.list("current_rank")
        assert [p.current_rank for p in ascending] == [1, 3, None]

        descending = await data_client.players.list(ListOptions(sort="-current_rank", limit=2))
        assert [p.current_rank for p in descending] == [3, 1]

    @pytest.mark.asyncio
    async def test_filters(self, data_client):
        await data_client.players.create({"display_name": "Rafael Nadal", "nationality": "ESP"})
        await data_client.players.create({"display_name": "Carlos Alcaraz", "nationality": "ESP"})
        await data_client.players.create({"display_name": "Novak Djokovic", "nationality": "SRB"})

        spanish = await data_client.players.list({"filters": {"nationality": "ESP"}, "sort": "display_name"})
        assert [p.display_name for p in spanish] == ["Carlos Alcaraz", "Rafael Nadal"]

        search = await data_client.players.list({"filters": {"display_name": {"$contains": "djok"}}})
        assert [p.display_name for p in search] == ["Novak Djokovic"]

        either = await data_client.players.list({
            "filters": {"$or": [{"nationality": "SRB"}, {"display_name": {"$contains": "nadal"}}]},
            "sort": "display_name",
            "limit": 1,
        })
        assert [p.display_name for p in either] == ["Novak Djokovic"]


class TestFeedbackDerivation:

    @pytest.mark.asyncio
    async def test_create_and_result_each_derive_a_row(self, data_client):
        match, player1, _ = await create_match(data_client)
        prediction = await data_client.predictions.create({
            "match_id": match.id,
            "model_type": "balanced",
            "player1_win_probability": 0.7,
            "player2_win_probability": 0.3,
            "predicted_winner_id": player1.id,
        })

        rows = await data_client.model_feedback.list()
        assert len(rows) == 1
        assert rows[0].prediction_id == prediction.id
        assert rows[0].calibration_error is None
        assert rows[0].was_correct is None
        assert rows[0].feature_snapshot == pytest.approx({"probability_delta": 0.4})

        await data_client.predictions.update(prediction.id, result_payload(player1.id, player1.id))

        graded = await data_client.model_feedback.list({"filters": {"was_correct": True}})
        assert len(graded) == 1
        assert graded[0].calibration_error == pytest.approx(30.0)
        assert graded[0].surface == "hard"
        assert len(await data_client.model_feedback.list()) == 2

    @pytest.mark.asyncio
    async def test_percentage_models_are_normalized(self, data_client):
        match, player1, player2 = await create_match(data_client)
        prediction = await data_client.predictions.create({
            "match_id": match.id,
            "model_type": "elo",
            "player1_win_probability": 76.0,
            "player2_win_probability": 24.0,
            "predicted_winner_id": player1.id,
        })
        await data_client.predictions.update(prediction.id, result_payload(player1.id, player2.id))

        graded = await data_client.model_feedback.list({"filters": {"was_correct": False}})
        assert graded[0].calibration_error == pytest.approx(76.0)

    @pytest.mark.asyncio
    async def test_unknown_match_derives_nothing(self, data_client):
        await data_client.predictions.create({
            "match_id": "no-such-match",
            "model_type": "ml",
            "player1_win_probability": 0.5,
            "player2_win_probability": 0.5,
        })
        assert await data_client.model_feedback.list() == []


class TestModelWeights:

    @pytest.mark.asyncio
    async def test_single_active_row(self, data_client):
        first = await data_client.model_weights.create({**DEFAULT_MODEL_WEIGHTS, "model_version": "v1"})
        second = await data_client.model_weights.create({**DEFAULT_MODEL_WEIGHTS, "model_version": "v2"})

        assert (await data_client.model_weights.get(first.id)).is_active is False
        assert (await data_client.model_weights.get_active()).id == second.id

        activated = await data_client.model_weights.activate(first.id)
        assert activated.is_active is True
        assert (await data_client.model_weights.get(second.id)).is_active is False
        assert (await data_client.model_weights.get_active()).model_version == "v1"

    @pytest.mark.asyncio
    async def test_activate_missing_raises(self, data_client):
        with pytest.raises(NotFoundError):
            await data_client.model_weights.activate("missing")

    @pytest.mark.asyncio
    async def test_invalid_weights_rejected(self, data_client):
        with pytest.raises(ValueError):
            await data_client.model_weights.create({**DEFAULT_MODEL_WEIGHTS, "ranking_weight": 0.9})

    @pytest.mark.asyncio
    async def test_no_active_weights(self, data_client):
        assert await data_client.model_weights.get_active() is None
