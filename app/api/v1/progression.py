# ============================================================================
# Progression Endpoints
# ============================================================================
from fastapi import APIRouter, Depends

from app.api.deps import get_progression_engine, get_sweeper
from app.core.exceptions import UserNotFound
from app.core.security import get_current_active_user, get_current_operator
from app.models.user import User
from app.schemas.progression import AwardRequest, AwardResponse, ProgressionResponse
from app.schemas.user import MessageResponse
from app.services.progression import DailyCapResetSweeper, ProgressionEngine

router = APIRouter(prefix="/progression", tags=["progression"])


@router.get("/me", response_model=ProgressionResponse)
async def get_my_progression(
    current_user: User = Depends(get_current_active_user),
    engine: ProgressionEngine = Depends(get_progression_engine)
):
    """Level, XP, remaining daily budgets and buddy perks"""
    record = await engine.store.load_user(current_user.id)
    if record is None:
        raise UserNotFound(current_user.id)
    return record.summary()


@router.post("/award", response_model=AwardResponse)
async def award_xp(
    request: AwardRequest,
    operator: User = Depends(get_current_operator),
    engine: ProgressionEngine = Depends(get_progression_engine)
):
    """Award XP to any user (operators only)"""
    outcome = await engine.apply(request.user_id, request.xp)
    return {
        "xp_requested": outcome.xp_requested,
        "multiplier": outcome.multiplier,
        "xp_applied": outcome.xp_applied,
        "buddy_xp_applied": outcome.buddy_xp_applied,
        "leveled_up": outcome.leveled_up,
        "buddy_leveled_up": outcome.buddy_leveled_up,
        "progression": outcome.record.summary(),
    }


@router.post("/reset-daily-caps", response_model=MessageResponse)
async def reset_daily_caps(
    operator: User = Depends(get_current_operator),
    sweeper: DailyCapResetSweeper = Depends(get_sweeper)
):
    """Run the daily cap reset immediately (operators only)"""
    await sweeper.reset_all_daily_caps()
    return MessageResponse(message="Daily XP caps reset")
