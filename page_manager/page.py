"""
Page entity.
Path: page_manager/page.py

A page binds a path pattern to an ordered set of variants and a set of
access conditions.
"""

from copy import deepcopy
from typing import Any, Callable, Dict, Optional

import structlog

from page_manager.exceptions import ConfigurationError
from page_manager.plugins.bag import PluginBag, generate_uuid
from page_manager.plugins.registry import PluginRegistry

logger = structlog.get_logger()

DEFAULT_VARIANT = {
    "id": "block_display",
    "label": "Default",
    "weight": 10,
}


class Page:
    """Page configuration entity with its variant and access condition bags."""

    def __init__(self,
                 values: Dict[str, Any],
                 variant_registry: PluginRegistry,
                 condition_registry: PluginRegistry,
                 uuid_generator: Optional[Callable[[], str]] = None):
        """
        Initialize page from stored values.

        Args:
            values: Page values (id, label, path, status, parameters, variants, access)
            variant_registry: Registry used to build variants
            condition_registry: Registry used to build access conditions
            uuid_generator: Callable returning fresh uuids
        """
        if not values.get("id"):
            raise ConfigurationError("Page is missing required field 'id'")

        self.id = values["id"]
        self.label = values.get("label") or self.id
        self.path = values.get("path", "")
        self._status = bool(values.get("status", True))
        self.parameters: Dict[str, Dict[str, Any]] = deepcopy(values.get("parameters") or {})
        self.variant_registry = variant_registry
        self.condition_registry = condition_registry
        self.uuid_generator = uuid_generator or generate_uuid

        self._variant_config = deepcopy(values.get("variants") or [])
        self._access_config = deepcopy(values.get("access") or [])
        self._variant_bag: Optional[PluginBag] = None
        self._access_bag: Optional[PluginBag] = None

    @classmethod
    def create(cls, values: Dict[str, Any], variant_registry: PluginRegistry,
               condition_registry: PluginRegistry,
               uuid_generator: Optional[Callable[[], str]] = None) -> 'Page':
        """Create a new page, adding a default variant when none is supplied."""
        page = cls(values, variant_registry, condition_registry, uuid_generator)
        if not page.get_variants().count():
            page.add_variant(dict(DEFAULT_VARIANT))
            logger.debug("page.default_variant_added", page=page.id)
        return page

    # Status

    def status(self) -> bool:
        return self._status

    def enable(self) -> 'Page':
        self._status = True
        return self

    def disable(self) -> 'Page':
        self._status = False
        return self

    # Variants

    def get_variants(self) -> PluginBag:
        if self._variant_bag is None:
            self._variant_bag = PluginBag(self.variant_registry, self._variant_config,
                                          uuid_generator=self.uuid_generator, name="variant").sort()
        return self._variant_bag

    def add_variant(self, configuration: Dict[str, Any]) -> str:
        variant_id = self.get_variants().add_instance_id(self.uuid_generator(), configuration)
        self.get_variants().sort()
        return variant_id

    def get_variant(self, variant_id: str) -> Any:
        return self.get_variants().get(variant_id)

    def remove_variant(self, variant_id: str) -> 'Page':
        self.get_variants().remove_instance_id(variant_id)
        return self

    # Access conditions

    def get_access_conditions(self) -> PluginBag:
        if self._access_bag is None:
            self._access_bag = PluginBag(self.condition_registry, self._access_config,
                                         uuid_generator=self.uuid_generator, name="access condition")
        return self._access_bag

    def add_access_condition(self, configuration: Dict[str, Any]) -> str:
        return self.get_access_conditions().add_instance_id(self.uuid_generator(), configuration)

    def get_access_condition(self, condition_id: str) -> Any:
        return self.get_access_conditions().get(condition_id)

    def remove_access_condition(self, condition_id: str) -> 'Page':
        self.get_access_conditions().remove_instance_id(condition_id)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Values for persistence."""
        return {
            "id": self.id,
            "label": self.label,
            "path": self.path,
            "status": self._status,
            "parameters": deepcopy(self.parameters),
            "variants": self.get_variants().get_configuration(),
            "access": self.get_access_conditions().get_configuration(),
        }

    @classmethod
    def from_dict(cls, values: Dict[str, Any], variant_registry: PluginRegistry,
                  condition_registry: PluginRegistry,
                  uuid_generator: Optional[Callable[[], str]] = None) -> 'Page':
        return cls(values, variant_registry, condition_registry, uuid_generator)

    def __repr__(self) -> str:
        return f"Page(id={self.id!r}, path={self.path!r})"
