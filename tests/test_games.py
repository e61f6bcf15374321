# ============================================================================
# Rock Paper Scissors Tests
# ============================================================================
import pytest
from unittest.mock import MagicMock

from app.main import app
from app.api.deps import get_rps_service
from app.models.user import RPSChoice
from app.services.games.rps import RPSGameService, RPSOutcome
from app.services.progression import ProgressionStore

def fixed_rng(choice: RPSChoice):
    rng = MagicMock()
    rng.choice.return_value = choice
    return rng

class TestRPSRules:
    """Tests for round resolution and XP values"""

    @pytest.mark.parametrize("player,opponent,expected", [
        (RPSChoice.ROCK, RPSChoice.SCISSORS, RPSOutcome.WIN),
        (RPSChoice.PAPER, RPSChoice.ROCK, RPSOutcome.WIN),
        (RPSChoice.SCISSORS, RPSChoice.PAPER, RPSOutcome.WIN),
        (RPSChoice.ROCK, RPSChoice.PAPER, RPSOutcome.LOSS),
        (RPSChoice.SCISSORS, RPSChoice.ROCK, RPSOutcome.LOSS),
        (RPSChoice.PAPER, RPSChoice.PAPER, RPSOutcome.DRAW),
    ])
    def test_decide(self, player, opponent, expected):
        assert RPSGameService.decide(player, opponent) == expected

    def test_xp_values(self):
        service = RPSGameService(None, engine=MagicMock())

        assert service.calculate_xp(RPSOutcome.WIN, 1) == 20
        assert service.calculate_xp(RPSOutcome.WIN, 3) == 30
        assert service.calculate_xp(RPSOutcome.WIN, 50) == 70
        assert service.calculate_xp(RPSOutcome.DRAW, 4) == 5
        assert service.calculate_xp(RPSOutcome.LOSS, 0) == 0

class TestRPSGameService:
    """Tests for playing rounds against the database"""

    async def test_win_awards_xp_and_extends_streak(self, db_session, make_user):
        user = await make_user(current_rps_streak=2, highest_rps_streak=2)
        service = RPSGameService(db_session, rng=fixed_rng(RPSChoice.SCISSORS))

        result = await service.play(user, RPSChoice.ROCK)

        assert result["outcome"] == "win"
        assert result["current_streak"] == 3
        assert result["highest_streak"] == 3
        assert result["xp_requested"] == 30
        assert result["progression"]["experience_points"] == 30

        stored = await ProgressionStore(db_session).load_user(user.id)
        assert stored.experience_points == 30
        assert stored.experience_for_day == 970

    async def test_loss_resets_streak(self, db_session, make_user):
        user = await make_user(current_rps_streak=4, highest_rps_streak=6)
        service = RPSGameService(db_session, rng=fixed_rng(RPSChoice.PAPER))

        result = await service.play(user, RPSChoice.ROCK)

        assert result["outcome"] == "loss"
        assert result["current_streak"] == 0
        assert result["highest_streak"] == 6
        assert result["xp_applied"] == 0

    async def test_win_can_level_up(self, db_session, make_user):
        user = await make_user(experience_points=95)
        service = RPSGameService(db_session, rng=fixed_rng(RPSChoice.ROCK))

        result = await service.play(user, RPSChoice.PAPER)

        assert result["leveled_up"] is True
        assert result["progression"]["level"] == 2
        assert result["progression"]["experience_points"] == 15

    async def test_rounds_are_recorded(self, db_session, make_user):
        user = await make_user(username="chipo")
        service = RPSGameService(db_session, rng=fixed_rng(RPSChoice.ROCK))

        await service.play(user, RPSChoice.ROCK)
        await service.play(user, RPSChoice.PAPER)
        history = await service.get_history(user.id)

        assert len(history) == 2
        assert {g["outcome"] for g in history} == {"draw", "win"}

class TestRPSEndpoints:
    """Tests for the game endpoints"""

    async def test_play_endpoint(self, client, db_session, make_user, auth_headers):
        user = await make_user()

        async def override_rps_service():
            return RPSGameService(db_session, rng=fixed_rng(RPSChoice.SCISSORS))

        app.dependency_overrides[get_rps_service] = override_rps_service

        response = await client.post(
            "/api/v1/games/rps/play", json={"choice": "Rock"}, headers=auth_headers(user)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "win"
        assert body["opponent_choice"] == "Scissors"
        assert body["progression"]["experience_points"] == 20

        history = await client.get("/api/v1/games/rps/history", headers=auth_headers(user))
        assert len(history.json()["games"]) == 1

    async def test_invalid_choice(self, client, make_user, auth_headers):
        user = await make_user()

        response = await client.post(
            "/api/v1/games/rps/play", json={"choice": "Lizard"}, headers=auth_headers(user)
        )

        assert response.status_code == 422
