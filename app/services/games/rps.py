# ============================================================================
# Rock Paper Scissors
# ============================================================================
from typing import Dict, List, Optional
from uuid import UUID
from enum import Enum
import logging
import random

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.game import RPSGame
from app.models.user import RPSChoice, User
from app.services.progression.engine import ProgressionEngine

logger = logging.getLogger(__name__)

HOUSE_NAME = "Arcade"

class RPSOutcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"

class RPSGameService:
    """Plays rounds against the house and turns results into XP awards"""

    XP_VALUES = {
        "rps_win": 20,
        "rps_draw": 5,
        "rps_loss": 0,
    }

    # Extra XP per consecutive win, capped
    STREAK_BONUS = 5
    MAX_STREAK_BONUS = 50

    BEATS = {
        RPSChoice.ROCK: RPSChoice.SCISSORS,
        RPSChoice.PAPER: RPSChoice.ROCK,
        RPSChoice.SCISSORS: RPSChoice.PAPER,
    }

    def __init__(
        self,
        db: AsyncSession,
        engine: Optional[ProgressionEngine] = None,
        rng: Optional[random.Random] = None
    ):
        self.db = db
        self.engine = engine or ProgressionEngine(db)
        self.rng = rng or random.Random()

    @classmethod
    def decide(cls, player: RPSChoice, opponent: RPSChoice) -> RPSOutcome:
        if player == opponent:
            return RPSOutcome.DRAW
        if cls.BEATS[player] == opponent:
            return RPSOutcome.WIN
        return RPSOutcome.LOSS

    def calculate_xp(self, outcome: RPSOutcome, streak: int) -> int:
        xp = self.XP_VALUES[f"rps_{outcome.value}"]
        if outcome == RPSOutcome.WIN and streak > 1:
            xp += min((streak - 1) * self.STREAK_BONUS, self.MAX_STREAK_BONUS)
        return xp

    async def play(self, user: User, choice: RPSChoice) -> Dict:
        """Play one round and award XP for it"""
        opponent = self.rng.choice(list(RPSChoice))
        outcome = self.decide(choice, opponent)

        streak = user.current_rps_streak or 0
        if outcome == RPSOutcome.WIN:
            streak += 1
        elif outcome == RPSOutcome.LOSS:
            streak = 0

        user.current_play = choice.value
        user.current_rps_streak = streak
        user.highest_rps_streak = max(user.highest_rps_streak or 0, streak)

        xp = self.calculate_xp(outcome, streak)

        game = RPSGame(
            player_id=user.id,
            player_choice=choice.value,
            opponent_choice=opponent.value,
            outcome=outcome.value,
            xp_awarded=xp,
            game_over=True,
        )
        if outcome == RPSOutcome.WIN:
            game.winner_name, game.winner_choice = user.username, choice.value
            game.loser_name, game.loser_choice = HOUSE_NAME, opponent.value
            game.winner_streak = streak
        elif outcome == RPSOutcome.LOSS:
            game.winner_name, game.winner_choice = HOUSE_NAME, opponent.value
            game.loser_name, game.loser_choice = user.username, choice.value
        self.db.add(game)

        # The engine commits the round together with the award
        award = await self.engine.apply(user.id, xp)

        logger.info(f"{user.username} played {choice.value} vs {opponent.value}: {outcome.value} (+{xp} XP)")

        return {
            "outcome": outcome.value,
            "player_choice": choice.value,
            "opponent_choice": opponent.value,
            "current_streak": streak,
            "highest_streak": user.highest_rps_streak,
            "xp_requested": xp,
            "xp_applied": award.xp_applied,
            "leveled_up": award.leveled_up,
            "buddy_leveled_up": award.buddy_leveled_up,
            "progression": award.record.summary(),
        }

    async def get_history(self, user_id: UUID, limit: int = 10) -> List[Dict]:
        result = await self.db.execute(
            select(RPSGame)
            .where(RPSGame.player_id == user_id)
            .order_by(desc(RPSGame.played_at))
            .limit(limit)
        )
        return [
            {
                "game_id": str(g.id),
                "player_choice": g.player_choice,
                "opponent_choice": g.opponent_choice,
                "outcome": g.outcome,
                "xp_awarded": g.xp_awarded,
                "played_at": g.played_at.isoformat() if g.played_at else None,
            }
            for g in result.scalars().all()
        ]
