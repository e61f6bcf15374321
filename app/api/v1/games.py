# ============================================================================
# Game Endpoints
# ============================================================================
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_rps_service
from app.core.security import get_current_active_user
from app.models.user import User
from app.schemas.progression import RPSHistoryResponse, RPSPlayRequest, RPSPlayResponse
from app.services.games.rps import RPSGameService

router = APIRouter(prefix="/games", tags=["games"])


@router.post("/rps/play", response_model=RPSPlayResponse)
async def play_rps(
    request: RPSPlayRequest,
    current_user: User = Depends(get_current_active_user),
    rps: RPSGameService = Depends(get_rps_service)
):
    """Play a round of Rock Paper Scissors against the house"""
    return await rps.play(current_user, request.choice)


@router.get("/rps/history", response_model=RPSHistoryResponse)
async def rps_history(
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_active_user),
    rps: RPSGameService = Depends(get_rps_service)
):
    return {"games": await rps.get_history(current_user.id, limit)}
