"""
Action commands.

Actions are externally issued commands for a single unit (used by the
manual controller and by scripted scenarios). This module provides:
- Action dataclass with parameter validation
- Action factory methods
- Action serialization
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any
import json

from .types import ActionType


@dataclass
class Action:
    """
    A command that a unit can carry out.

    Use static factory methods for convenient construction:
        - Action.move(x, y)
        - Action.rotate(degrees)
        - Action.attack(target_id)
        - Action.repair()
        - Action.reload(amount)
    """

    type: ActionType
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate action parameters after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate that parameters match the action type.

        Raises:
            ValueError: If parameters are invalid for the action type
        """
        if self.type == ActionType.MOVE:
            for key in ("x", "y"):
                if key not in self.params:
                    raise ValueError(f"MOVE action requires '{key}' parameter")
                if not isinstance(self.params[key], (int, float)):
                    raise ValueError(f"'{key}' must be a number, got {type(self.params[key])}")

        elif self.type == ActionType.ROTATE:
            if not isinstance(self.params.get("degrees"), (int, float)):
                raise ValueError("ROTATE action requires numeric 'degrees' parameter")

        elif self.type == ActionType.ATTACK:
            if "target_id" not in self.params:
                raise ValueError("ATTACK action requires 'target_id' parameter")
            if not isinstance(self.params["target_id"], int):
                raise ValueError(f"'target_id' must be an int, got {type(self.params['target_id'])}")

        elif self.type == ActionType.REPAIR:
            if self.params:
                raise ValueError("REPAIR action should have no parameters")

        elif self.type == ActionType.RELOAD:
            amount = self.params.get("amount")
            if not isinstance(amount, int) or amount <= 0:
                raise ValueError("RELOAD action requires a positive int 'amount' parameter")

    def to_dict(self) -> Dict[str, Any]:
        """Convert action to a JSON-serializable dictionary."""
        return {
            "type": self.type.name,
            "params": dict(self.params),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Action:
        """
        Create an action from a dictionary.

        Raises:
            ValueError: If dictionary format is invalid
        """
        if "type" not in data:
            raise ValueError("Action dictionary must contain 'type'")
        try:
            action_type = ActionType[data["type"]]
        except KeyError:
            raise ValueError(f"Unknown action type: {data['type']}") from None
        return cls(type=action_type, params=dict(data.get("params", {})))

    def to_json(self) -> str:
        """Convert action to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> Action:
        """Create action from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        """Human-readable string representation."""
        if self.type == ActionType.MOVE:
            return f"MOVE toward ({self.params['x']}, {self.params['y']})"
        if self.type == ActionType.ROTATE:
            return f"ROTATE {self.params['degrees']}"
        if self.type == ActionType.ATTACK:
            return f"ATTACK target={self.params['target_id']}"
        if self.type == ActionType.RELOAD:
            return f"RELOAD +{self.params['amount']}"
        return self.type.name

    # FACTORY METHODS
    @staticmethod
    def move(x: float, y: float) -> Action:
        """Create a MOVE action: one cell toward (x, y)."""
        return Action(ActionType.MOVE, {"x": x, "y": y})

    @staticmethod
    def rotate(degrees: float) -> Action:
        """Create a ROTATE action for the turret."""
        return Action(ActionType.ROTATE, {"degrees": degrees})

    @staticmethod
    def attack(target_id: int) -> Action:
        """Create an ATTACK action against the unit with ``target_id``."""
        return Action(ActionType.ATTACK, {"target_id": target_id})

    @staticmethod
    def repair() -> Action:
        """Create a REPAIR action (spends all remaining action points)."""
        return Action(ActionType.REPAIR)

    @staticmethod
    def reload(amount: int = 10) -> Action:
        """Create a RELOAD action."""
        return Action(ActionType.RELOAD, {"amount": amount})
