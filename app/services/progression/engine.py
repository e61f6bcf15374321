# ============================================================================
# Progression Engine
# ============================================================================
from dataclasses import replace
from typing import Optional
from uuid import UUID
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UserNotFound
from app.services.progression.rules import (
    AwardOutcome,
    ProgressionRecord,
    apply_award,
    validate_award,
)
from app.services.progression.store import ProgressionStore

logger = logging.getLogger(__name__)

class ProgressionEngine:
    """Applies XP awards to a user's primary and buddy tracks"""

    def __init__(self, db: AsyncSession, store: Optional[ProgressionStore] = None):
        self.db = db
        self.store = store or ProgressionStore(db)

    async def award_xp(self, user_id: UUID, xp_awarded: int) -> ProgressionRecord:
        """Award XP and return the refreshed progression record"""
        outcome = await self.apply(user_id, xp_awarded)
        return outcome.record

    async def apply(self, user_id: UUID, xp_awarded: int) -> AwardOutcome:
        """Award XP and return the full outcome (applied amounts, level-ups).

        Raises UserNotFound, InvariantViolation, ConflictError or StorageError.
        Nothing is retried here.
        """
        validate_award(xp_awarded)

        snapshot = await self.store.load_user(user_id)
        if snapshot is None:
            raise UserNotFound(user_id)

        outcome = apply_award(snapshot, xp_awarded)

        try:
            await self.store.update_user_fields(
                user_id,
                outcome.record.progress_fields(),
                expected_version=snapshot.version
            )
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        if outcome.clamped:
            logger.info(
                f"Award to {user_id} clamped by daily cap: requested {xp_awarded}x{outcome.multiplier}, "
                f"applied {outcome.xp_applied} (buddy {outcome.buddy_xp_applied})"
            )
        if outcome.leveled_up:
            logger.info(f"User {user_id} reached level {outcome.record.level}")
        if outcome.buddy_leveled_up:
            logger.info(f"Buddy of {user_id} reached level {outcome.record.buddy_level}")

        refreshed = await self.store.load_user(user_id)
        if refreshed is None:
            raise UserNotFound(user_id)

        return replace(outcome, record=refreshed)
