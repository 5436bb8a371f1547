"""
Mechanics module - combat maths, lookahead, order dispatch and victory.

All functions here are stateless: they read units and the battlefield and
either return numbers or apply exactly one unit operation.
"""

from .combat import (
    ENGAGEMENT_SCALE,
    BALANCE_FACTOR,
    hit_rate,
    hit_rate_at,
    base_damage,
    base_damage_at,
    damage_bounds,
    roll_damage,
    single_shot_kill_pct,
    two_shot_kill_pct,
    single_shot_kill_pct_from,
    two_shot_kill_pct_from,
)
from .movement import EngagementProjection, simulate_approach, project_engagement
from .orders import apply_action
from .victory import VictoryResult, check_elimination, check_round_limit, is_eliminated

__all__ = [
    "ENGAGEMENT_SCALE",
    "BALANCE_FACTOR",
    "hit_rate",
    "hit_rate_at",
    "base_damage",
    "base_damage_at",
    "damage_bounds",
    "roll_damage",
    "single_shot_kill_pct",
    "two_shot_kill_pct",
    "single_shot_kill_pct_from",
    "two_shot_kill_pct_from",
    "EngagementProjection",
    "simulate_approach",
    "project_engagement",
    "apply_action",
    "VictoryResult",
    "check_elimination",
    "check_round_limit",
    "is_eliminated",
]
