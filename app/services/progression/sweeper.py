# ============================================================================
# Daily Cap Reset Sweeper
# ============================================================================
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.progression.rules import DAILY_CAP_TIERS
from app.services.progression.store import ProgressionStore

logger = logging.getLogger(__name__)

class DailyCapResetSweeper:
    """Restores every user's daily XP budgets to their buddy tier baseline"""

    def __init__(self, db: AsyncSession, store: Optional[ProgressionStore] = None):
        self.db = db
        self.store = store or ProgressionStore(db)

    async def reset_all_daily_caps(self) -> None:
        """Overwrite both daily budgets for every user.

        Tiers are written in ascending threshold order inside one
        transaction, so a user ends up with the baseline of the highest
        tier their buddy level qualifies for. Safe to re-run.
        """
        touched = {}
        try:
            for threshold, primary_cap, buddy_cap in DAILY_CAP_TIERS:
                touched[threshold] = await self.store.update_users_where(
                    User.buddy_level >= threshold,
                    {
                        "experience_for_day": primary_cap,
                        "buddy_experience_for_day": buddy_cap,
                    }
                )
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info(f"Daily caps reset, users per buddy tier: {touched}")
