"""
Block plugins placed into the regions of a block variant.
Path: page_manager/plugins/blocks.py
"""

from typing import Any, Dict

from .base import ContextAwarePluginBase, field_value
from .conditions import entity_type_deriver
from .registry import PluginRegistry


class BlockPluginBase(ContextAwarePluginBase):
    """A block that builds a renderable structure from its settings and contexts."""

    def default_configuration(self) -> Dict[str, Any]:
        return {"label": "", "region": None, "weight": 0, "context_assignments": {}}

    def region(self):
        return self.configuration.get("region")

    def build(self) -> Dict[str, Any]:
        raise NotImplementedError("Blocks must implement build method")


class MarkupBlock(BlockPluginBase):
    """Static text configured by the administrator."""

    def build(self) -> Dict[str, Any]:
        return {"markup": self.configuration.get("body", "")}


class EntityViewBlock(BlockPluginBase):
    """Shows an entity taken from a context in a given view mode."""

    def default_configuration(self) -> Dict[str, Any]:
        configuration = super().default_configuration()
        configuration["view_mode"] = "default"
        return configuration

    def build(self) -> Dict[str, Any]:
        entity = self.get_context_value("entity")
        return {
            "entity": entity,
            "title": field_value(entity, "title") or field_value(entity, "name"),
            "view_mode": self.configuration.get("view_mode"),
        }


def register_builtin_blocks(registry: PluginRegistry, entity_types: Dict[str, str]) -> PluginRegistry:
    registry.register("markup", MarkupBlock, "Markup", category="Basic")
    registry.register("entity_view", EntityViewBlock, "Entity view", category="Entity",
                      deriver=entity_type_deriver(entity_types))
    return registry
