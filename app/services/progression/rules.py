# ============================================================================
# Progression Rules
# ============================================================================
"""
Pure progression arithmetic for the primary and buddy tracks.

Nothing here touches the database: `apply_award` takes a record snapshot and
returns the record that should be persisted, so the engine can write every
changed field in a single conditional update.

Rules:
  - Reward multiplier is 2 once the buddy reaches level 10, otherwise 1.
    It is taken from the buddy level *before* the award.
  - Each track accepts at most its remaining daily budget; anything beyond
    that is discarded, never carried to the next day.
  - A track levels up at most once per award. The clamped total is compared
    to the threshold and the remainder modulo the old threshold is kept.
"""
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Tuple
from uuid import UUID

from app.core.exceptions import InvariantViolation

XP_PER_LEVEL = 100
BUDDY_XP_PER_LEVEL = 10000

MULTIPLIER_BUDDY_LEVEL = 10
BOOSTED_MULTIPLIER = 2

# (buddy_level >=, experience_for_day baseline, buddy_experience_for_day baseline)
# Ascending; the highest matching row wins.
DAILY_CAP_TIERS: List[Tuple[int, int, int]] = [
    (1, 1000, 2000),
    (2, 1500, 2000),
    (5, 1500, 2500),
    (6, 2000, 2500),
    (9, 2000, 3000),
    (10, 2000, 3000),
]


def xp_to_level_up(level: int) -> int:
    return level * XP_PER_LEVEL


def buddy_xp_to_level_up(buddy_level: int) -> int:
    return buddy_level * BUDDY_XP_PER_LEVEL


def reward_multiplier(buddy_level: int) -> int:
    return BOOSTED_MULTIPLIER if buddy_level >= MULTIPLIER_BUDDY_LEVEL else 1


def daily_baselines(buddy_level: int) -> Tuple[int, int]:
    """Return (experience_for_day, buddy_experience_for_day) for a buddy level"""
    primary, buddy = DAILY_CAP_TIERS[0][1], DAILY_CAP_TIERS[0][2]
    for threshold, tier_primary, tier_buddy in DAILY_CAP_TIERS:
        if buddy_level >= threshold:
            primary, buddy = tier_primary, tier_buddy
        else:
            break
    return primary, buddy


def validate_award(xp_awarded) -> int:
    """Reject anything that is not a non-negative integer"""
    if isinstance(xp_awarded, bool) or not isinstance(xp_awarded, int):
        raise InvariantViolation(f"XP award must be an integer, got {xp_awarded!r}")
    if xp_awarded < 0:
        raise InvariantViolation(f"XP award must not be negative, got {xp_awarded}")
    return xp_awarded


@dataclass(frozen=True)
class ProgressionRecord:
    """Snapshot of the progression columns of one user"""
    user_id: UUID
    level: int
    experience_points: int
    experience_for_day: int
    buddy_level: int
    buddy_experience_points: int
    buddy_experience_for_day: int
    version: int = 0

    def progress_fields(self) -> Dict[str, int]:
        """Column values to persist, keyed by User attribute name"""
        return {
            "level": self.level,
            "experience_points": self.experience_points,
            "experience_for_day": self.experience_for_day,
            "buddy_level": self.buddy_level,
            "buddy_experience_points": self.buddy_experience_points,
            "buddy_experience_for_day": self.buddy_experience_for_day,
        }

    def summary(self) -> Dict:
        primary_cap, buddy_cap = daily_baselines(self.buddy_level)
        return {
            "user_id": str(self.user_id),
            **self.progress_fields(),
            "xp_to_level_up": xp_to_level_up(self.level),
            "buddy_xp_to_level_up": buddy_xp_to_level_up(self.buddy_level),
            "reward_multiplier": reward_multiplier(self.buddy_level),
            "daily_baseline": primary_cap,
            "buddy_daily_baseline": buddy_cap,
        }


@dataclass(frozen=True)
class AwardOutcome:
    record: ProgressionRecord
    xp_requested: int
    multiplier: int
    xp_applied: int
    buddy_xp_applied: int
    leveled_up: bool
    buddy_leveled_up: bool

    @property
    def clamped(self) -> bool:
        gain = self.xp_requested * self.multiplier
        return self.xp_applied < gain or self.buddy_xp_applied < gain


def _advance_track(
    level: int,
    xp: int,
    budget: int,
    gain: int,
    threshold: Callable[[int], int],
) -> Tuple[int, int, int, int, bool]:
    applied = min(gain, max(budget, 0))
    new_xp = xp + applied
    new_budget = budget - applied

    required = threshold(level)
    if new_xp >= required:
        return level + 1, new_xp % required, new_budget, applied, True
    return level, new_xp, new_budget, applied, False


def apply_award(record: ProgressionRecord, xp_awarded: int) -> AwardOutcome:
    """Compute the record that results from awarding `xp_awarded` XP"""
    validate_award(xp_awarded)

    multiplier = reward_multiplier(record.buddy_level)
    gain = xp_awarded * multiplier

    level, xp, budget, applied, leveled_up = _advance_track(
        record.level,
        record.experience_points,
        record.experience_for_day,
        gain,
        xp_to_level_up,
    )
    buddy_level, buddy_xp, buddy_budget, buddy_applied, buddy_leveled_up = _advance_track(
        record.buddy_level,
        record.buddy_experience_points,
        record.buddy_experience_for_day,
        gain,
        buddy_xp_to_level_up,
    )

    updated = replace(
        record,
        level=level,
        experience_points=xp,
        experience_for_day=budget,
        buddy_level=buddy_level,
        buddy_experience_points=buddy_xp,
        buddy_experience_for_day=buddy_budget,
    )

    return AwardOutcome(
        record=updated,
        xp_requested=xp_awarded,
        multiplier=multiplier,
        xp_applied=applied,
        buddy_xp_applied=buddy_applied,
        leveled_up=leveled_up,
        buddy_leveled_up=buddy_leveled_up,
    )
