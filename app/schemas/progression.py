# ============================================================================
# Progression & Game Schemas
# ============================================================================
from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID

from app.models.user import RPSChoice

class ProgressionResponse(BaseModel):
    user_id: str
    level: int
    experience_points: int
    experience_for_day: int
    buddy_level: int
    buddy_experience_points: int
    buddy_experience_for_day: int
    xp_to_level_up: int
    buddy_xp_to_level_up: int
    reward_multiplier: int
    daily_baseline: int
    buddy_daily_baseline: int

class AwardRequest(BaseModel):
    user_id: UUID
    xp: int = Field(..., ge=0)

class AwardResponse(BaseModel):
    xp_requested: int
    multiplier: int
    xp_applied: int
    buddy_xp_applied: int
    leveled_up: bool
    buddy_leveled_up: bool
    progression: ProgressionResponse

class RPSPlayRequest(BaseModel):
    choice: RPSChoice

class RPSPlayResponse(BaseModel):
    outcome: str
    player_choice: str
    opponent_choice: str
    current_streak: int
    highest_streak: int
    xp_requested: int
    xp_applied: int
    leveled_up: bool
    buddy_leveled_up: bool
    progression: ProgressionResponse

class RPSHistoryEntry(BaseModel):
    game_id: str
    player_choice: str
    opponent_choice: str
    outcome: str
    xp_awarded: int
    played_at: Optional[str] = None

class RPSHistoryResponse(BaseModel):
    games: List[RPSHistoryEntry]
