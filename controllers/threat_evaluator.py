"""
Threat and opportunity scoring.

Pure functions of a ``BattleStateSnapshot`` and a ``ScoringConfig``:
- threat: how dangerous the current situation is for the evaluating unit
- opportunity: how favourable it is to press the attack

Each factor lands on a 0-100 scale and is then weighted. Totals are left
unclamped so a saturated factor still separates close cases.
"""

from __future__ import annotations

from battle.core.types import Stance
from .battle_state import BattleStateSnapshot
from .config import ScoringConfig


# ----------------------------------------------------------------------
# Threat factors
# ----------------------------------------------------------------------
def distance_threat(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    """Maximal inside the danger band, then linear decay to 0 at full range."""
    if state.self_range <= 0:
        return 0.0
    ratio = state.distance_ratio
    if ratio <= config.danger_range:
        return 100.0
    return max(0.0, 100.0 * (1.0 - ratio))


def hp_threat(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    return 100.0 * (1.0 - state.self_hp_ratio) ** config.hp_curve_exponent


def rank_threat(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    """The unit nearest the enemy is the likeliest to be shot at."""
    rank = state.distance_rank
    if rank == 1:
        return config.rank_1_threat
    if rank == 2:
        return config.rank_2_threat
    if rank == 3:
        return config.rank_3_threat
    return config.rank_4_threat


# ----------------------------------------------------------------------
# Opportunity factors
# ----------------------------------------------------------------------
def distance_opportunity(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    """
    Reward holding the optimal band of weapon range.

    Below the band the score ramps up linearly from 0 at point blank; above
    it the score decays linearly to 0 at full range.
    """
    if state.self_range <= 0:
        return 0.0
    ratio = state.distance_ratio
    low, high = config.optimal_range_min, config.optimal_range_max

    if low <= ratio <= high:
        return 100.0
    if ratio < low:
        return 100.0 * (ratio / low)

    remain = 1.0 - high
    if remain <= 0:
        return 0.0
    return max(0.0, 100.0 * (1.0 - (ratio - high) / remain))


def hp_opportunity(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    return 100.0 * state.self_hp_ratio ** config.hp_curve_exponent


# ----------------------------------------------------------------------
# Totals
# ----------------------------------------------------------------------
def evaluate_threat(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    """Weighted threat total; 0.0 when there is no target."""
    if not state.has_target:
        return 0.0
    return (
        distance_threat(state, config) * config.threat_weight_distance
        + hp_threat(state, config) * config.threat_weight_hp
        + rank_threat(state, config) * config.threat_weight_rank
    )


def evaluate_opportunity(state: BattleStateSnapshot, config: ScoringConfig) -> float:
    """Weighted opportunity total; 0.0 when there is no target."""
    if not state.has_target:
        return 0.0
    return (
        distance_opportunity(state, config) * config.opp_weight_distance
        + hp_opportunity(state, config) * config.opp_weight_hp
    )


def select_stance(threat: float, opportunity: float, config: ScoringConfig) -> Stance:
    """Map the threat/opportunity balance onto a stance."""
    balance = threat - opportunity
    if balance > config.defense_threshold:
        return Stance.DEFENSIVE
    if balance < config.attack_threshold:
        return Stance.OFFENSIVE
    return Stance.BALANCED
