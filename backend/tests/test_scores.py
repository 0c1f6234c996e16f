import random

import pytest

from leaderboard.models import Game
from leaderboard.schemas.scores import ScoreCreate
from leaderboard.services.score_service import ScoreService


class TestScoreSubmission:
    def test_champion_follows_the_highest_score(self, client, make_game, submit_score):
        game = make_game("Godzilla", "pinball")
        assert game["currentHighScore"] == 0
        assert game["topScorerName"] is None

        assert submit_score(game["id"], "X", 500).status_code == 201
        data = client.get(f"/api/games/{game['id']}").json()
        assert data["currentHighScore"] == 500
        assert data["topScorerName"] == "X"

        assert submit_score(game["id"], "Y", 300).status_code == 201
        data = client.get(f"/api/games/{game['id']}").json()
        assert data["currentHighScore"] == 500
        assert data["topScorerName"] == "X"

        assert submit_score(game["id"], "Z", 700).status_code == 201
        data = client.get(f"/api/games/{game['id']}").json()
        assert data["currentHighScore"] == 700
        assert data["topScorerName"] == "Z"

    def test_equal_score_does_not_take_the_title(self, client, make_game, submit_score):
        game = make_game()
        submit_score(game["id"], "First", 1000)
        before = client.get(f"/api/games/{game['id']}").json()

        submit_score(game["id"], "Second", 1000)
        after = client.get(f"/api/games/{game['id']}").json()

        assert after["currentHighScore"] == 1000
        assert after["topScorerName"] == "First"
        assert after["topScoreDate"] == before["topScoreDate"]

    def test_top_score_date_is_the_submission_time(self, client, make_game, submit_score):
        game = make_game()
        response = submit_score(game["id"], "Ann", 42, submittedAt="2025-02-14T19:30:00Z")
        assert response.status_code == 201

        data = client.get(f"/api/games/{game['id']}").json()
        assert data["topScoreDate"].startswith("2025-02-14T19:30:00")

    def test_returns_stored_score(self, make_game, submit_score):
        game = make_game()
        response = submit_score(game["id"], "  Ann  ", 1234, imageUrl="/uploads/proof.jpg")

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["gameId"] == game["id"]
        assert data["playerName"] == "Ann"
        assert data["score"] == 1234
        assert data["imageUrl"] == "/uploads/proof.jpg"
        assert data["submittedAt"]

    def test_unknown_game_is_404(self, client, submit_score):
        response = submit_score(999, "Ann", 10)
        assert response.status_code == 404
        assert response.json() == {"message": "Game not found"}

    @pytest.mark.parametrize(
        "override, field",
        [
            ({"phoneNumber": "not-a-phone"}, "phoneNumber"),
            ({"phoneNumber": "+0123"}, "phoneNumber"),
            ({"latitude": 91}, "latitude"),
            ({"longitude": -180.5}, "longitude"),
            ({"score": -1}, "score"),
            ({"playerName": "   "}, "playerName"),
        ],
    )
    def test_invalid_input_is_400_with_field_errors(self, client, make_game, override, field):
        game = make_game()
        body = {
            "gameId": game["id"],
            "playerName": "Ann",
            "score": 10,
            "phoneNumber": "+15551234567",
            "latitude": 0,
            "longitude": 0,
            **override,
        }
        response = client.post("/api/scores", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Invalid score data"
        assert field in [e["field"] for e in data["errors"]]

        game_after = client.get(f"/api/games/{game['id']}").json()
        assert game_after["currentHighScore"] == 0
        assert client.get(f"/api/games/{game['id']}/scores").json() == []

    def test_scores_beyond_32_bits_are_accepted(self, client, make_game, submit_score):
        game = make_game("Godzilla", "pinball")

        response = submit_score(game["id"], "Wizard", 3_000_000_000)

        assert response.status_code == 201
        assert response.json()["score"] == 3_000_000_000
        assert client.get(f"/api/games/{game['id']}").json()["currentHighScore"] == 3_000_000_000

    def test_score_above_column_range_is_400(self, client, make_game, submit_score):
        game = make_game()

        response = submit_score(game["id"], "Overflow", 2**63)

        assert response.status_code == 400
        assert "score" in [e["field"] for e in response.json()["errors"]]
        assert client.get(f"/api/games/{game['id']}/scores").json() == []

    def test_zero_score_does_not_take_an_empty_title(self, client, make_game, submit_score):
        game = make_game()

        assert submit_score(game["id"], "Nobody", 0).status_code == 201

        data = client.get(f"/api/games/{game['id']}").json()
        assert data["currentHighScore"] == 0
        assert data["topScorerName"] is None
        assert client.post("/api/admin/reconcile-champions").json()["updated"] == 0

    def test_missing_fields_are_all_reported(self, client):
        response = client.post("/api/scores", json={"gameId": 1})

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"playerName", "score", "phoneNumber", "latitude", "longitude"} <= fields


class TestChampionInvariant:
    def test_random_sequences_keep_cache_at_maximum(self, run_db):
        rng = random.Random(1234)

        async def scenario(db):
            game = Game(name="Medieval Madness", type="pinball", display_order=1)
            db.add(game)
            await db.commit()

            service = ScoreService(db)
            best = 0
            best_name = None
            for i in range(40):
                value = rng.randint(0, 10_000)
                name = f"player-{i}"
                await service.submit_score(
                    ScoreCreate(
                        game_id=game.id,
                        player_name=name,
                        score=value,
                        phone_number="+15551234567",
                        latitude=0,
                        longitude=0,
                    )
                )
                if value > best:
                    best, best_name = value, name

                await db.refresh(game)
                assert game.current_high_score == best
                assert game.top_scorer_name == best_name

        run_db(scenario)


class TestScoreListing:
    def test_scores_sorted_descending(self, client, make_game, submit_score):
        game = make_game()
        for name, value in [("a", 10), ("b", 300), ("c", 50)]:
            submit_score(game["id"], name, value)

        scores = client.get(f"/api/games/{game['id']}/scores").json()
        assert [s["score"] for s in scores] == [300, 50, 10]

    def test_ties_rank_first_recorded_score_first(self, client, make_game, submit_score):
        game = make_game()
        submit_score(game["id"], "first", 100, submittedAt="2025-03-01T12:00:00Z")
        submit_score(game["id"], "second", 100, submittedAt="2025-01-01T12:00:00Z")

        scores = client.get(f"/api/games/{game['id']}/scores").json()
        assert [s["playerName"] for s in scores] == ["first", "second"]
        assert client.get(f"/api/games/{game['id']}").json()["topScorerName"] == "first"

    def test_scores_are_scoped_to_their_game(self, client, make_game, submit_score):
        first = make_game("One")
        second = make_game("Two")
        submit_score(first["id"], "a", 1)
        submit_score(second["id"], "b", 2)

        scores = client.get(f"/api/games/{first['id']}/scores").json()
        assert [s["playerName"] for s in scores] == ["a"]


class TestScoreDeletion:
    def test_deleting_champion_score_falls_back_to_next_best(
        self, client, make_game, submit_score
    ):
        game = make_game()
        submit_score(game["id"], "low", 100)
        top = submit_score(game["id"], "high", 900).json()

        response = client.delete(f"/api/scores/{top['id']}")
        assert response.status_code == 204

        data = client.get(f"/api/games/{game['id']}").json()
        assert data["currentHighScore"] == 100
        assert data["topScorerName"] == "low"

    def test_deleting_last_score_resets_champion(self, client, make_game, submit_score):
        game = make_game()
        only = submit_score(game["id"], "solo", 500).json()

        client.delete(f"/api/scores/{only['id']}")

        data = client.get(f"/api/games/{game['id']}").json()
        assert data["currentHighScore"] == 0
        assert data["topScorerName"] is None
        assert data["topScoreDate"] is None

    def test_tied_champion_survives_unrelated_deletion(self, client, make_game, submit_score):
        game = make_game()
        submit_score(game["id"], "A", 100, submittedAt="2025-03-01T12:00:00Z")
        submit_score(game["id"], "B", 100, submittedAt="2025-01-01T12:00:00Z")
        low = submit_score(game["id"], "C", 1).json()
        assert client.get(f"/api/games/{game['id']}").json()["topScorerName"] == "A"

        client.delete(f"/api/scores/{low['id']}")

        data = client.get(f"/api/games/{game['id']}").json()
        assert data["topScorerName"] == "A"
        assert data["topScoreDate"].startswith("2025-03-01T12:00:00")
        assert client.post("/api/admin/reconcile-champions").json()["updated"] == 0

    def test_deleting_unknown_score_is_404(self, client):
        response = client.delete("/api/scores/12345")
        assert response.status_code == 404
        assert response.json()["message"] == "Score not found"
