# ============================================================================
# Progression Services Module
# ============================================================================
"""
Experience, level and buddy progression.

- rules: pure award arithmetic, thresholds and daily cap tiers
- store: ProgressionStore, conditional updates over the users table
- engine: ProgressionEngine.award_xp
- sweeper: DailyCapResetSweeper.reset_all_daily_caps
"""

from app.services.progression.rules import (
    AwardOutcome,
    DAILY_CAP_TIERS,
    ProgressionRecord,
    apply_award,
    buddy_xp_to_level_up,
    daily_baselines,
    reward_multiplier,
    xp_to_level_up,
)
from app.services.progression.store import ProgressionStore
from app.services.progression.engine import ProgressionEngine
from app.services.progression.sweeper import DailyCapResetSweeper

__all__ = [
    "AwardOutcome",
    "DAILY_CAP_TIERS",
    "ProgressionRecord",
    "apply_award",
    "buddy_xp_to_level_up",
    "daily_baselines",
    "reward_multiplier",
    "xp_to_level_up",
    "ProgressionStore",
    "ProgressionEngine",
    "DailyCapResetSweeper",
]
