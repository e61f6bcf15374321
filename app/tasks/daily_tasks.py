# ============================================================================
# Daily Scheduled Tasks
# ============================================================================
from celery import shared_task
from redis.exceptions import LockError
import asyncio
import logging

logger = logging.getLogger(__name__)

SWEEP_LOCK_NAME = "lock:daily_cap_reset"

def run_async(coro):
    """Helper to run async functions in Celery tasks"""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()

async def reset_daily_caps_once(session_maker, cache, lock_timeout: int) -> bool:
    """Run one sweep unless another is in progress. Returns True if it ran."""
    from app.services.progression import DailyCapResetSweeper

    try:
        async with cache.lock(SWEEP_LOCK_NAME, timeout=lock_timeout):
            async with session_maker() as db:
                await DailyCapResetSweeper(db).reset_all_daily_caps()
    except LockError:
        logger.warning("Daily cap reset already running, skipping")
        return False
    except Exception as e:
        logger.error(f"Daily cap reset failed: {e}")
        raise

    return True

@shared_task(name="app.tasks.daily_tasks.reset_daily_caps")
def reset_daily_caps():
    """Reset every user's daily XP budgets to their buddy tier baseline"""
    async def _reset():
        from app.config import get_settings
        from app.core.database import async_session_maker
        from app.core.redis import cache

        settings = get_settings()
        return await reset_daily_caps_once(
            async_session_maker, cache, settings.SWEEP_LOCK_TIMEOUT_SECONDS
        )

    return run_async(_reset())
