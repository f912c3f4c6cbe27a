"""
Context providers.
Path: page_manager/context/providers.py

A provider is any callable taking the page executable; it publishes contexts
with ``executable.add_context(name, context)``. Providers run in the order
they were registered with the executable.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from .context import Context
from .types import TypeRegistry

logger = structlog.get_logger()

RESERVED_PARAMETERS = {"page"}


@dataclass
class Account:
    """The user making the request."""
    uid: int
    name: str
    roles: List[str] = field(default_factory=list)

    @classmethod
    def anonymous(cls) -> 'Account':
        return cls(uid=0, name="anonymous", roles=["anonymous"])


class CurrentUserContext:
    """Adds the current user as the 'current_user' context."""

    def __init__(self, account_loader: Callable[[], Any]):
        self.account_loader = account_loader

    def __call__(self, executable: Any) -> None:
        context = Context("current_user", "entity:user", label="Current user")
        context.set_value(self.account_loader())
        executable.add_context("current_user", context)


class RouteParamContext:
    """Adds a context for each typed parameter declared on the page path."""

    def __init__(self,
                 route_params: Mapping[str, Any],
                 type_registry: Optional[TypeRegistry] = None,
                 converters: Optional[Dict[str, Callable[[Any], Any]]] = None):
        """
        Args:
            route_params: Raw values extracted from the request path
            type_registry: Used to label parameters without their own label
            converters: Optional type id to callable converting the raw value
        """
        self.route_params = dict(route_params)
        self.type_registry = type_registry or TypeRegistry()
        self.converters = converters or {}

    def __call__(self, executable: Any) -> None:
        for name, definition in executable.get_page().parameters.items():
            if name in RESERVED_PARAMETERS:
                continue

            type_id = definition.get("type", "string")
            context = Context(
                name,
                type_id,
                label=definition.get("label") or self.type_registry.get_label(type_id),
                required=definition.get("required", True),
            )
            if name in self.route_params:
                value = self.route_params[name]
                converter = self.converters.get(type_id)
                if converter is not None:
                    value = converter(value)
                context.set_value(value)
            else:
                # Declared but not present in this request
                logger.debug("context.route_param_missing", page=executable.get_page().id, parameter=name)
            executable.add_context(name, context)
