from __future__ import annotations

from typing import Callable, Dict, Type, TypeVar

from .base_controller import BaseController

CONTROLLER_REGISTRY: Dict[str, Type[BaseController]] = {}

# Keys held back for controller variants that are not implemented yet.
RESERVED_KEYS = frozenset({"learned"})

ControllerType = TypeVar("ControllerType", bound=Type[BaseController])


def register_controller(key: str) -> Callable[[ControllerType], ControllerType]:
    """
    Class decorator that makes a controller selectable by ``key`` from
    scenario files and the command line.

    Raises:
        ValueError: If the key is reserved or already taken by another class
        TypeError: If the decorated class is not a BaseController
    """
    def decorator(cls: ControllerType) -> ControllerType:
        if not (isinstance(cls, type) and issubclass(cls, BaseController)):
            raise TypeError(f"{cls!r} is not a BaseController subclass")
        if key in RESERVED_KEYS:
            raise ValueError(f"Controller key '{key}' is reserved")
        existing = CONTROLLER_REGISTRY.get(key)
        if existing is not None and existing is not cls:
            raise ValueError(f"Controller key '{key}' already registered to {existing.__name__}")
        CONTROLLER_REGISTRY[key] = cls
        return cls

    return decorator


def resolve_controller_class(key: str) -> Type[BaseController]:
    """Look up the controller class registered under ``key``."""
    try:
        return CONTROLLER_REGISTRY[key]
    except KeyError:
        if key in RESERVED_KEYS:
            raise ValueError(f"Controller type '{key}' is reserved and not available") from None
        known = ", ".join(sorted(CONTROLLER_REGISTRY)) or "none"
        raise ValueError(f"Unknown controller type '{key}' (registered: {known})") from None
