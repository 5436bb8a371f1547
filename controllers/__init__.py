"""
Controller interface and implementations for the tank battle simulation.

This module provides:
- BaseController / TurnOutcome: the per-unit turn interface
- RuleBasedController: HP-phase state machine (registered as "rule_based")
- ManualController: plays back queued orders (registered as "manual")
- analyze / evaluate_threat / evaluate_opportunity: decision scoring
- ScoringConfig / TacticsConfig: tuning models
"""

from .base_controller import BaseController, TurnOutcome
from .battle_state import BattleStateSnapshot, analyze
from .config import ScoringConfig, TacticsConfig
from .factory import create_controller_from_spec
from .manual import ManualController
from .registry import CONTROLLER_REGISTRY, register_controller, resolve_controller_class
from .rule_based import RuleBasedController, classify_phase, select_target
from .spec import ControllerSpec
from .threat_evaluator import evaluate_opportunity, evaluate_threat, select_stance

__all__ = [
    "BaseController",
    "TurnOutcome",
    "BattleStateSnapshot",
    "analyze",
    "ScoringConfig",
    "TacticsConfig",
    "create_controller_from_spec",
    "ManualController",
    "CONTROLLER_REGISTRY",
    "register_controller",
    "resolve_controller_class",
    "RuleBasedController",
    "classify_phase",
    "select_target",
    "ControllerSpec",
    "evaluate_opportunity",
    "evaluate_threat",
    "select_stance",
]
