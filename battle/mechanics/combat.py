"""
Combat resolution maths.

Pure functions shared by unit attacks and by lookahead scoring:
- hit_rate: cosine falloff between the no-miss radius and max range
- base_damage / damage_bounds / roll_damage: distance-scaled damage model
- single_shot_kill_pct / two_shot_kill_pct: integer kill odds for planning

Nothing here mutates a unit. Attackers and defenders are duck-typed: they
need ``pos``, ``hp``, ``stats`` (for range, no-miss radius, attack and
variance).
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING, Tuple

from ..world.grid import Grid

if TYPE_CHECKING:
    from ..entities.tank import Tank

# Distance scale of the damage curve. Deliberately independent of any
# weapon's max range.
ENGAGEMENT_SCALE = 20.0
BALANCE_FACTOR = 0.5


def hit_rate_at(distance: float, max_range: float, no_miss_radius: float) -> float:
    """
    Probability that a single shot lands at ``distance``.

    Returns 0.0 at or beyond max range (even when the no-miss radius reaches
    past it), 1.0 inside the no-miss radius, and
    ``0.5 * (cos(pi / (R - A) * (D - A)) + 1)`` in between.
    """
    if distance >= max_range:
        return 0.0
    if distance <= no_miss_radius:
        return 1.0
    span = max_range - no_miss_radius
    return 0.5 * (math.cos(math.pi / span * (distance - no_miss_radius)) + 1.0)


def hit_rate(attacker: Tank, defender: Tank) -> float:
    """Hit probability for ``attacker`` firing at ``defender`` from where they stand."""
    distance = Grid.distance(attacker.pos, defender.pos)
    return hit_rate_at(distance, attacker.stats.max_range, attacker.stats.no_miss_radius)


def base_damage_at(distance: float, attack_power: float) -> float:
    """Expected damage before variance; zero once past the engagement scale."""
    if distance >= ENGAGEMENT_SCALE:
        return 0.0
    return max(0.0, (ENGAGEMENT_SCALE - distance) ** 2 * attack_power * BALANCE_FACTOR)


def base_damage(attacker: Tank, target: Tank) -> float:
    """Base damage for ``attacker`` hitting ``target`` at their current distance."""
    return base_damage_at(Grid.distance(attacker.pos, target.pos), attacker.stats.attack)


def damage_bounds(attacker: Tank, target: Tank) -> Tuple[float, float]:
    """(min, max) of the uniform realized-damage interval."""
    base = base_damage(attacker, target)
    variance = attacker.stats.damage_variance
    return base * (1.0 - variance), base * (1.0 + variance)


def roll_damage(attacker: Tank, target: Tank, rng: random.Random) -> int:
    """Draw realized damage uniformly from ``damage_bounds``, truncated to int."""
    base = base_damage(attacker, target)
    variance = attacker.stats.damage_variance
    return int(base * ((1.0 - variance) + 2.0 * variance * rng.random()))


# ============================================================================
# KILL ODDS
# ============================================================================

def _as_pct(probability: float) -> int:
    return max(0, min(100, math.floor(100.0 * probability)))


def single_shot_kill_pct_from(
    hit_probability: float,
    target_hp: float,
    damage_min: float,
    damage_max: float,
) -> int:
    """
    Single-shot kill odds as an integer percentage.

    0 when even the best roll cannot finish the target, otherwise
    ``floor(100 * p_hit * clamp((hp - dmg_min) / (2 * width), 0, 1))``.
    """
    if damage_max <= target_hp:
        return 0
    width = damage_max - damage_min
    if width <= 0:
        fraction = 1.0
    else:
        fraction = max(0.0, min(1.0, (target_hp - damage_min) / (2.0 * width)))
    return _as_pct(hit_probability * fraction)


def two_draw_tail(threshold: float, width: float) -> float:
    """
    P(U1 + U2 >= threshold) for independent U1, U2 ~ Uniform[0, width].

    Area of the part of the [0, w]^2 square above the line u1 + u2 = t.
    """
    if threshold <= 0:
        return 1.0
    if width <= 0 or threshold >= 2.0 * width:
        return 0.0
    w2 = width * width
    if threshold <= width:
        return (w2 - threshold * threshold / 2.0) / w2
    return (2.0 * width - threshold) ** 2 / (2.0 * w2)


def two_shot_kill_pct_from(target_hp: float, damage_min: float, damage_max: float) -> int:
    """
    Odds (integer percent) that the target falls within two shots.

    A target already below two minimum hits counts as certain; otherwise the
    two-uniform-draw tail is evaluated at ``hp - dmg_min``.
    """
    if target_hp < 2.0 * damage_min:
        return 100
    return _as_pct(two_draw_tail(target_hp - damage_min, damage_max - damage_min))


def single_shot_kill_pct(attacker: Tank, target: Tank) -> int:
    damage_min, damage_max = damage_bounds(attacker, target)
    return single_shot_kill_pct_from(hit_rate(attacker, target), target.hp, damage_min, damage_max)


def two_shot_kill_pct(attacker: Tank, target: Tank) -> int:
    damage_min, damage_max = damage_bounds(attacker, target)
    return two_shot_kill_pct_from(target.hp, damage_min, damage_max)
