# ============================================================================
# Progression Engine & Sweeper Tests
# ============================================================================
import pytest
from uuid import uuid4
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from app.core.exceptions import ConflictError, InvariantViolation, StorageError, UserNotFound
from app.services.progression import DailyCapResetSweeper, ProgressionEngine, ProgressionStore
from app.tasks.daily_tasks import reset_daily_caps_once

class TestProgressionEngine:
    """Tests for awarding XP against the database"""

    @pytest.fixture
    def engine(self, db_session):
        return ProgressionEngine(db_session)

    async def test_award_levels_up(self, engine, make_user):
        user = await make_user(experience_points=90)

        record = await engine.award_xp(user.id, 20)

        assert record.level == 2
        assert record.experience_points == 10
        assert record.experience_for_day == 980

    async def test_award_clamped_by_daily_cap(self, engine, make_user):
        user = await make_user(experience_for_day=5)

        record = await engine.award_xp(user.id, 50)

        assert record.experience_points == 5
        assert record.experience_for_day == 0

    async def test_buddy_multiplier(self, engine, make_user):
        user = await make_user(buddy_level=10, experience_for_day=100, level=3, experience_points=100)

        record = await engine.award_xp(user.id, 40)

        assert record.experience_for_day == 20
        assert record.experience_points == 180

    async def test_award_persists_and_bumps_version(self, engine, db_session, make_user):
        user = await make_user()

        await engine.award_xp(user.id, 30)
        stored = await ProgressionStore(db_session).load_user(user.id)

        assert stored.experience_points == 30
        assert stored.buddy_experience_points == 30
        assert stored.buddy_experience_for_day == 1970
        assert stored.version == 1

    async def test_unknown_user(self, engine, db_session):
        with pytest.raises(UserNotFound):
            await engine.award_xp(uuid4(), 10)

    async def test_negative_award_rejected_before_read(self, db_session):
        store = MagicMock()
        store.load_user = AsyncMock()
        engine = ProgressionEngine(db_session, store=store)

        with pytest.raises(InvariantViolation):
            await engine.award_xp(uuid4(), -5)

        store.load_user.assert_not_called()

    async def test_budget_never_negative_over_many_awards(self, engine, make_user):
        user = await make_user(experience_for_day=250)

        for amount in [100, 100, 100, 100]:
            record = await engine.award_xp(user.id, amount)
            assert record.experience_for_day >= 0
            assert 0 <= record.experience_points < record.level * 100

        assert record.experience_for_day == 0

    async def test_outcome_reports_level_ups(self, engine, make_user):
        user = await make_user(experience_points=99, buddy_experience_points=9999)

        outcome = await engine.apply(user.id, 1)

        assert outcome.leveled_up is True
        assert outcome.buddy_leveled_up is True
        assert outcome.record.level == 2
        assert outcome.record.buddy_level == 2

    async def test_storage_failure_surfaces_as_storage_error(self):
        db = MagicMock()
        db.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("db down")))
        db.rollback = AsyncMock()
        engine = ProgressionEngine(db)

        with pytest.raises(StorageError):
            await engine.award_xp(uuid4(), 10)

class TestProgressionStore:
    """Tests for conditional updates"""

    async def test_stale_version_conflicts(self, db_session, make_user):
        user = await make_user()
        store = ProgressionStore(db_session)
        snapshot = await store.load_user(user.id)

        # Another award lands between load and write
        await ProgressionEngine(db_session).award_xp(user.id, 10)

        with pytest.raises(ConflictError):
            await store.update_user_fields(
                user.id, {"experience_points": 99}, expected_version=snapshot.version
            )

    async def test_update_missing_user(self, db_session):
        store = ProgressionStore(db_session)

        with pytest.raises(UserNotFound):
            await store.update_user_fields(uuid4(), {"experience_points": 1}, expected_version=0)

    async def test_sweep_invalidates_pending_award(self, db_session, make_user):
        user = await make_user(experience_for_day=0)
        store = ProgressionStore(db_session)
        snapshot = await store.load_user(user.id)

        await DailyCapResetSweeper(db_session).reset_all_daily_caps()

        with pytest.raises(ConflictError):
            await store.update_user_fields(
                user.id, {"experience_for_day": 0}, expected_version=snapshot.version
            )

class TestDailyCapResetSweeper:
    """Tests for the daily budget reset"""

    async def test_resets_to_tier_baselines(self, db_session, make_user):
        users = {
            level: await make_user(buddy_level=level, experience_for_day=0, buddy_experience_for_day=0)
            for level in [1, 2, 5, 6, 9, 10]
        }

        await DailyCapResetSweeper(db_session).reset_all_daily_caps()

        store = ProgressionStore(db_session)
        expected = {
            1: (1000, 2000),
            2: (1500, 2000),
            5: (1500, 2500),
            6: (2000, 2500),
            9: (2000, 3000),
            10: (2000, 3000),
        }
        for level, user in users.items():
            record = await store.load_user(user.id)
            assert (record.experience_for_day, record.buddy_experience_for_day) == expected[level]

    async def test_sweep_leaves_xp_and_levels_alone(self, db_session, make_user):
        user = await make_user(level=4, experience_points=123, buddy_level=3, buddy_experience_points=456)

        await DailyCapResetSweeper(db_session).reset_all_daily_caps()
        record = await ProgressionStore(db_session).load_user(user.id)

        assert record.level == 4
        assert record.experience_points == 123
        assert record.buddy_level == 3
        assert record.buddy_experience_points == 456

    async def test_sweep_discards_unused_budget(self, db_session, make_user):
        user = await make_user(buddy_level=1, experience_for_day=1400)

        await DailyCapResetSweeper(db_session).reset_all_daily_caps()
        record = await ProgressionStore(db_session).load_user(user.id)

        assert record.experience_for_day == 1000

    async def test_sweep_is_idempotent(self, db_session, make_user):
        user = await make_user(buddy_level=9, experience_for_day=3)
        sweeper = DailyCapResetSweeper(db_session)
        store = ProgressionStore(db_session)

        await sweeper.reset_all_daily_caps()
        once = await store.load_user(user.id)
        await sweeper.reset_all_daily_caps()
        twice = await store.load_user(user.id)

        assert once.experience_for_day == twice.experience_for_day == 2000
        assert once.buddy_experience_for_day == twice.buddy_experience_for_day == 3000

    async def test_award_after_sweep_uses_new_budget(self, db_session, make_user):
        user = await make_user(experience_for_day=0)
        engine = ProgressionEngine(db_session)

        assert (await engine.award_xp(user.id, 10)).experience_points == 0
        await DailyCapResetSweeper(db_session).reset_all_daily_caps()
        record = await engine.award_xp(user.id, 10)

        assert record.experience_points == 10
        assert record.experience_for_day == 990

class TestDailyResetTask:
    """Tests for the scheduled sweep wrapper"""

    def _lock_cache(self, lock):
        cache = MagicMock()
        cache.lock = MagicMock(return_value=lock)
        return cache

    async def test_runs_sweep_under_lock(self, db_session, session_maker, make_user):
        user = await make_user(buddy_level=6, experience_for_day=0)
        lock = MagicMock()
        lock.__aenter__ = AsyncMock(return_value=lock)
        lock.__aexit__ = AsyncMock(return_value=False)

        ran = await reset_daily_caps_once(session_maker, self._lock_cache(lock), lock_timeout=60)

        assert ran is True
        record = await ProgressionStore(db_session).load_user(user.id)
        assert record.experience_for_day == 2000

    async def test_skips_when_sweep_already_running(self, db_session, session_maker):
        from redis.exceptions import LockError

        lock = MagicMock()
        lock.__aenter__ = AsyncMock(side_effect=LockError("held"))
        lock.__aexit__ = AsyncMock(return_value=False)

        ran = await reset_daily_caps_once(session_maker, self._lock_cache(lock), lock_timeout=60)

        assert ran is False
