"""
Base plugin contracts and plugin definitions.
Path: page_manager/plugins/base.py
"""

from copy import deepcopy
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, Field

from page_manager.context.context import ContextDefinition


class PluginDefinition(BaseModel):
    """Catalog entry describing a registered plugin implementation."""
    id: str = Field(..., description="Plugin id used in configuration")
    label: str = Field(..., description="Administrative label")
    category: str = Field(default="General", description="Grouping used when listing plugins")
    context: Dict[str, ContextDefinition] = Field(default_factory=dict,
                                                  description="Context slots keyed by slot name")
    plugin_class: Type[Any] = Field(..., description="Class instantiated for this plugin")
    derivative_of: Optional[str] = Field(default=None, description="Base plugin id for derived definitions")

    model_config = {"arbitrary_types_allowed": True}


class PluginBase:
    """Configurable plugin instance built from a definition and configuration."""

    def __init__(self, configuration: Dict[str, Any], plugin_id: str, definition: PluginDefinition):
        """
        Initialize plugin with configuration.

        Args:
            configuration: Instance configuration (id, uuid, weight, settings)
            plugin_id: Plugin id this instance was created from
            definition: Registered definition for plugin_id
        """
        self.plugin_id = plugin_id
        self.plugin_definition = definition
        self.configuration = {}
        self.set_configuration(configuration)

    def default_configuration(self) -> Dict[str, Any]:
        return {}

    def get_plugin_id(self) -> str:
        return self.plugin_id

    def get_plugin_definition(self) -> PluginDefinition:
        return self.plugin_definition

    def get_configuration(self) -> Dict[str, Any]:
        return deepcopy(self.configuration)

    def set_configuration(self, configuration: Dict[str, Any]) -> None:
        merged = self.default_configuration()
        merged.update(deepcopy(configuration))
        merged["id"] = self.plugin_id
        self.configuration = merged

    def uuid(self) -> Optional[str]:
        return self.configuration.get("uuid")

    def weight(self) -> int:
        return self.configuration.get("weight", 0)

    def label(self) -> str:
        return self.configuration.get("label") or self.plugin_definition.label

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.plugin_id!r}, uuid={self.uuid()!r})"


class ContextAwarePluginBase(PluginBase):
    """Plugin that declares context slots and receives bound context values."""

    def __init__(self, configuration: Dict[str, Any], plugin_id: str, definition: PluginDefinition):
        super().__init__(configuration, plugin_id, definition)
        self._context_values: Dict[str, Any] = {}

    def get_context_definitions(self) -> Dict[str, ContextDefinition]:
        return dict(self.plugin_definition.context)

    def set_context_value(self, slot: str, value: Any) -> None:
        self._context_values[slot] = value

    def get_context_value(self, slot: str, default: Any = None) -> Any:
        return self._context_values.get(slot, default)

    def clear_context_values(self) -> None:
        self._context_values = {}


def field_value(value: Any, name: str) -> Optional[Any]:
    """Read a named field from a dict or an object."""
    if value is None:
        return None
    if isinstance(value, dict):
        return value.get(name)
    return getattr(value, name, None)
