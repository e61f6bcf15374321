# ============================================================================
# Account Service
# ============================================================================
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.exceptions import AccountExists, InvalidCredentials, LoginTimeout, UserNotFound
from app.core.redis import RedisCache
from app.core.security import get_password_hash, verify_password
from app.models.social import Follow
from app.models.user import User

logger = logging.getLogger(__name__)

class AccountService:
    """Registration, login throttling and account lifecycle"""

    def __init__(self, db: AsyncSession, cache: Optional[RedisCache] = None):
        self.db = db
        self.cache = cache
        self.settings = get_settings()

    async def register(self, username: str, email: str, password: str) -> User:
        """Create an account with default progression values"""
        email = email.lower()
        result = await self.db.execute(
            select(User).where(or_(User.username == username, User.email == email))
        )
        existing = result.scalars().first()
        if existing:
            raise AccountExists("username" if existing.username == username else "email")

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Registered user {user.username} ({user.id})")
        return user

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------
    @staticmethod
    def _attempts_key(email: str) -> str:
        return f"login_attempts:{email}"

    @staticmethod
    def _timeout_key(email: str) -> str:
        return f"login_timeout:{email}"

    async def authenticate(self, email: str, password: str) -> User:
        """Verify credentials, locking the email out after repeated failures"""
        email = email.lower()

        if self.cache:
            if await self.cache.get(self._timeout_key(email)):
                remaining = await self.cache.ttl(self._timeout_key(email))
                raise LoginTimeout(max(remaining, 0))

        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if not user:
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            await self._record_failed_attempt(email)
            raise InvalidCredentials()

        if self.cache:
            await self.cache.delete(self._attempts_key(email))
        return user

    async def _record_failed_attempt(self, email: str) -> None:
        if not self.cache:
            return

        timeout_seconds = self.settings.LOGIN_TIMEOUT_MINUTES * 60
        attempts = await self.cache.increment(self._attempts_key(email), window=timeout_seconds)

        if attempts >= self.settings.MAX_LOGIN_ATTEMPTS:
            await self.cache.set(self._timeout_key(email), "1", ttl=timeout_seconds)
            await self.cache.delete(self._attempts_key(email))
            logger.warning(f"Login timeout set for {email} after {attempts} failed attempts")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    async def list_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id, populate_existing=True)
        if not user:
            raise UserNotFound(user_id)
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    async def delete_account(self, user: User, email: str, password: str) -> None:
        """Delete the caller's own account after re-checking the password"""
        if user.email != email.lower() or not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        await self.db.execute(
            delete(Follow).where(
                or_(Follow.requesting_user_id == user.id, Follow.targeted_user_id == user.id)
            )
        )
        await self.db.execute(delete(User).where(User.id == user.id))
        await self.db.commit()

        logger.info(f"Deleted account {user.username} ({user.id})")
