# ============================================================================
# Progression Store
# ============================================================================
from typing import Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, StorageError, UserNotFound
from app.models.user import User
from app.services.progression.rules import ProgressionRecord

logger = logging.getLogger(__name__)

PROGRESSION_COLUMNS = (
    User.id,
    User.level,
    User.experience_points,
    User.experience_for_day,
    User.buddy_level,
    User.buddy_experience_points,
    User.buddy_experience_for_day,
    User.progress_version,
)

class ProgressionStore:
    """Reads and writes the progression columns of the users table.

    Every write bumps `progress_version`. Passing `expected_version` to
    `update_user_fields` makes the write conditional on it, which is how
    concurrent awards to the same user are detected.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_user(self, user_id: UUID) -> Optional[ProgressionRecord]:
        try:
            result = await self.db.execute(
                select(*PROGRESSION_COLUMNS).where(User.id == user_id)
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load progression for {user_id}: {e}")
            raise StorageError(f"Could not load progression for user {user_id}") from e

        if row is None:
            return None

        return ProgressionRecord(
            user_id=row.id,
            level=row.level,
            experience_points=row.experience_points,
            experience_for_day=row.experience_for_day,
            buddy_level=row.buddy_level,
            buddy_experience_points=row.buddy_experience_points,
            buddy_experience_for_day=row.buddy_experience_for_day,
            version=row.progress_version or 0,
        )

    async def update_user_fields(
        self,
        user_id: UUID,
        fields: Dict[str, int],
        expected_version: Optional[int] = None
    ) -> None:
        stmt = update(User).where(User.id == user_id)
        if expected_version is not None:
            stmt = stmt.where(User.progress_version == expected_version)
        stmt = (
            stmt.values(**fields, progress_version=User.progress_version + 1)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.db.execute(stmt)
            if result.rowcount:
                return
            exists = await self.db.scalar(select(User.id).where(User.id == user_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to update progression for {user_id}: {e}")
            raise StorageError(f"Could not update progression for user {user_id}") from e

        if exists is None:
            raise UserNotFound(user_id)
        raise ConflictError(user_id)

    async def update_users_where(self, predicate, fields: Dict[str, int]) -> int:
        """Bulk update every user matching `predicate`; returns matched rows"""
        stmt = (
            update(User)
            .where(predicate)
            .values(**fields, progress_version=User.progress_version + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Bulk progression update failed: {e}")
            raise StorageError("Could not apply bulk progression update") from e
        return result.rowcount

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Progression commit failed: {e}")
            raise StorageError("Could not commit progression changes") from e

    async def rollback(self) -> None:
        await self.db.rollback()
