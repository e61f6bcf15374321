# ============================================================================
# API Dependencies
# ============================================================================
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.redis import cache
from app.services.accounts.account_service import AccountService
from app.services.social.follow_service import FollowService
from app.services.games.rps import RPSGameService
from app.services.progression import DailyCapResetSweeper, ProgressionEngine


# ============================================================================
# Service Dependencies
# ============================================================================
async def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db, cache)


async def get_follow_service(db: AsyncSession = Depends(get_db)) -> FollowService:
    return FollowService(db)


async def get_progression_engine(db: AsyncSession = Depends(get_db)) -> ProgressionEngine:
    return ProgressionEngine(db)


async def get_sweeper(db: AsyncSession = Depends(get_db)) -> DailyCapResetSweeper:
    return DailyCapResetSweeper(db)


async def get_rps_service(
    engine: ProgressionEngine = Depends(get_progression_engine)
) -> RPSGameService:
    return RPSGameService(engine.db, engine)
