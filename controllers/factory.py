from __future__ import annotations

from .base_controller import BaseController
from .registry import resolve_controller_class
from .spec import ControllerSpec


def create_controller_from_spec(spec: ControllerSpec) -> BaseController:
    """Instantiate a controller from a ControllerSpec."""
    cls = resolve_controller_class(spec.type)

    init_kwargs = dict(spec.init_params)
    init_kwargs.setdefault("faction", spec.faction)
    if spec.name is not None:
        init_kwargs.setdefault("name", spec.name)

    controller = cls(**init_kwargs)
    if not isinstance(controller, BaseController):
        raise TypeError(f"Controller {cls} is not a BaseController")

    return controller
