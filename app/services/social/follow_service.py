# ============================================================================
# Follow Service
# ============================================================================
from typing import Dict, List
from uuid import UUID
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import FollowError, UserNotFound
from app.models.social import Follow
from app.models.user import User

logger = logging.getLogger(__name__)

class FollowService:
    """Manages the follower/following graph"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_follow(self, requester_id: UUID, target_id: UUID):
        result = await self.db.execute(
            select(Follow)
            .where(Follow.requesting_user_id == requester_id)
            .where(Follow.targeted_user_id == target_id)
        )
        return result.scalar_one_or_none()

    async def is_following(self, requester_id: UUID, target_id: UUID) -> bool:
        return await self._get_follow(requester_id, target_id) is not None

    async def follow(self, requester: User, target_id: UUID) -> Follow:
        if requester.id == target_id:
            raise FollowError("You cannot follow yourself")

        target = await self.db.get(User, target_id)
        if not target:
            raise UserNotFound(target_id)

        if await self._get_follow(requester.id, target_id):
            raise FollowError(f"Already following {target.username}")

        follow = Follow(requesting_user_id=requester.id, targeted_user_id=target_id)
        self.db.add(follow)
        await self.db.commit()

        logger.info(f"{requester.username} followed {target.username}")
        return follow

    async def unfollow(self, requester: User, target_id: UUID) -> None:
        target = await self.db.get(User, target_id)
        if not target:
            raise UserNotFound(target_id)

        follow = await self._get_follow(requester.id, target_id)
        if not follow:
            raise FollowError(f"Not following {target.username}")

        await self.db.delete(follow)
        await self.db.commit()

    async def get_following(self, user_id: UUID) -> List[Dict]:
        """Users that `user_id` follows"""
        result = await self.db.execute(
            select(User)
            .join(Follow, Follow.targeted_user_id == User.id)
            .where(Follow.requesting_user_id == user_id)
            .order_by(User.username)
        )
        return [{"user_id": str(u.id), "username": u.username} for u in result.scalars().all()]

    async def get_followers(self, user_id: UUID) -> List[Dict]:
        """Users following `user_id`"""
        result = await self.db.execute(
            select(User)
            .join(Follow, Follow.requesting_user_id == User.id)
            .where(Follow.targeted_user_id == user_id)
            .order_by(User.username)
        )
        return [{"user_id": str(u.id), "username": u.username} for u in result.scalars().all()]

    async def get_counts(self, user_id: UUID) -> Dict[str, int]:
        followers = await self.db.scalar(
            select(func.count(Follow.id)).where(Follow.targeted_user_id == user_id)
        )
        following = await self.db.scalar(
            select(func.count(Follow.id)).where(Follow.requesting_user_id == user_id)
        )
        return {"followers": followers or 0, "following": following or 0}
