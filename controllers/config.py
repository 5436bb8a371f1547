"""
Tuning configuration for the decision core.

Both models are frozen: a configuration is built once per scenario and
shared, read-only, by every evaluation. Nothing in the scorer or the turn
controller hardcodes a tuning constant.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ScoringConfig(BaseModel):
    """
    Weights and thresholds for threat / opportunity scoring.

    The three threat weights and the two opportunity weights are each
    expected to sum to 1.0; this is checked by the test-suite rather than
    at runtime so experiments can deliberately over- or under-weight.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Threat factor weights
    threat_weight_distance: float = Field(0.4, ge=0.0)
    threat_weight_hp: float = Field(0.3, ge=0.0)
    threat_weight_rank: float = Field(0.3, ge=0.0)

    # Opportunity factor weights
    opp_weight_distance: float = Field(0.6, ge=0.0)
    opp_weight_hp: float = Field(0.4, ge=0.0)

    # Distance bands, as fractions of own weapon range
    optimal_range_min: float = Field(0.5, ge=0.0)
    optimal_range_max: float = Field(0.7, ge=0.0)
    danger_range: float = Field(0.3, ge=0.0)

    # Threat by distance rank (1 = closest to the enemy)
    rank_1_threat: float = 100.0
    rank_2_threat: float = 50.0
    rank_3_threat: float = 20.0
    rank_4_threat: float = 10.0

    # 1.0 = linear, 2.0 = quadratic
    hp_curve_exponent: float = Field(2.0, gt=0.0)

    # threat - opportunity above defense / below attack picks the stance
    defense_threshold: float = 10.0
    attack_threshold: float = -10.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> ScoringConfig:
        return cls.model_validate(data or {})

    @classmethod
    def load_json(cls, path: str | Path) -> ScoringConfig:
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class TacticsConfig(BaseModel):
    """Constants for the per-unit turn state machine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # HP ratio below low -> CRITICAL, at/above high -> AGGRESSIVE
    hp_low: float = Field(0.30, ge=0.0, le=1.0)
    hp_high: float = Field(0.70, ge=0.0, le=1.0)

    # Preferred standoff band while CAUTIOUS, fractions of weapon range
    optimal_band_min: float = Field(0.60, ge=0.0)
    optimal_band_max: float = Field(0.80, ge=0.0)

    # Retreat while the threat is within this many cells
    danger_distance: float = Field(8.0, ge=0.0)
    max_retreat_steps: int = Field(4, ge=0)
    # Keep retreat destinations this many cells inside the grid edge
    edge_margin: float = Field(1.0, ge=0.0)

    # Target score = hp_ratio * weight + distance (lowest wins)
    target_hp_weight: float = Field(5.0, ge=0.0)

    # "In firing range" means distance <= max_range - margin
    firing_range_margin: float = Field(1.0, ge=0.0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> TacticsConfig:
        return cls.model_validate(data or {})

    @classmethod
    def load_json(cls, path: str | Path) -> TacticsConfig:
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
