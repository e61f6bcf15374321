# ============================================================================
# Game Models
# ============================================================================
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func
import uuid
from app.core.database import Base

class RPSGame(Base):
    """A single Rock Paper Scissors round"""
    __tablename__ = "rps_games"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    player_choice = Column(String(10), nullable=False)
    opponent_choice = Column(String(10), nullable=False)
    outcome = Column(String(10), nullable=False)  # win, loss, draw

    winner_name = Column(String(50), nullable=True)
    winner_choice = Column(String(10), nullable=True)
    winner_streak = Column(Integer, default=0)
    loser_name = Column(String(50), nullable=True)
    loser_choice = Column(String(10), nullable=True)

    xp_awarded = Column(Integer, default=0)
    game_over = Column(Boolean, default=True)
    played_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<RPSGame {self.player_choice} vs {self.opponent_choice} ({self.outcome})>"
