"""
Plugin registry for conditions, blocks and variants.

This module provides a registry of plugin implementations, allowing them to
be looked up by id, filtered by the contexts they require and instantiated
from stored configuration.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Type

import structlog

from page_manager.context.context import Context, ContextDefinition
from page_manager.exceptions import PluginNotFoundError
from .base import PluginDefinition

logger = structlog.get_logger()

# Deriver: base definition -> {derivative key: definition overrides}
Deriver = Callable[[PluginDefinition], Dict[str, Dict[str, Any]]]


class PluginRegistry:
    """
    Registry of plugin implementations of one kind (condition, block, variant).

    Collaborators that every instance of this kind needs are given once as
    ``dependencies`` and passed to each plugin constructor as keyword arguments.
    """

    def __init__(self, plugin_type: str, dependencies: Optional[Dict[str, Any]] = None):
        self.plugin_type = plugin_type
        self.dependencies = dependencies or {}
        self._definitions: Dict[str, PluginDefinition] = {}
        self._derivers: Dict[str, Deriver] = {}
        self._derived: Optional[Dict[str, PluginDefinition]] = None

    def register(self,
                 plugin_id: str,
                 plugin_class: Type[Any],
                 label: str,
                 category: str = "General",
                 context: Optional[Mapping[str, Any]] = None,
                 deriver: Optional[Deriver] = None) -> PluginDefinition:
        """
        Register a plugin implementation.

        Args:
            plugin_id: Unique id used in configuration
            plugin_class: Class to instantiate
            label: Administrative label
            category: Optional grouping
            context: Optional slot name to context definition (dict or ContextDefinition)
            deriver: Optional callable producing derived definitions from this one

        Returns:
            The registered definition
        """
        definition = PluginDefinition(
            id=plugin_id,
            label=label,
            category=category,
            context={slot: _as_context_definition(value) for slot, value in (context or {}).items()},
            plugin_class=plugin_class,
        )

        if plugin_id in self._definitions:
            logger.warning("plugin.registry.overwriting_existing_plugin",
                           plugin_type=self.plugin_type,
                           plugin_id=plugin_id,
                           old_class=self._definitions[plugin_id].plugin_class.__name__,
                           new_class=plugin_class.__name__)

        self._definitions[plugin_id] = definition
        self._derivers.pop(plugin_id, None)
        if deriver is not None:
            self._derivers[plugin_id] = deriver
        self._derived = None
        logger.debug("plugin.registry.registered_plugin",
                     plugin_type=self.plugin_type,
                     plugin_id=plugin_id,
                     class_name=plugin_class.__name__)
        return definition

    def get_definitions(self) -> Dict[str, PluginDefinition]:
        """Return all definitions, derived ones in place of their base."""
        if self._derived is None:
            self._derived = self._build_definitions()
        return dict(self._derived)

    def get_definition(self, plugin_id: str) -> PluginDefinition:
        """
        Get the definition for a plugin id.

        Raises:
            PluginNotFoundError: If the id is not registered
        """
        definitions = self.get_definitions()
        if plugin_id not in definitions:
            logger.error("plugin.registry.plugin_not_found", plugin_type=self.plugin_type, plugin_id=plugin_id)
            raise PluginNotFoundError(f"{self.plugin_type.capitalize()} plugin '{plugin_id}' not found in registry")
        return definitions[plugin_id]

    def has_definition(self, plugin_id: str) -> bool:
        return plugin_id in self.get_definitions()

    def get_sorted_definitions(self) -> List[PluginDefinition]:
        """Definitions ordered by category, then label."""
        return sorted(self.get_definitions().values(), key=lambda d: (d.category, d.label))

    def get_definitions_for_contexts(self, contexts: Mapping[str, Context], handler: Any) -> Dict[str, PluginDefinition]:
        """Definitions whose required context slots can be filled from contexts."""
        return handler.get_definitions_for_contexts(self.get_definitions(), contexts)

    def instantiate(self, plugin_id: str, configuration: Optional[Dict[str, Any]] = None) -> Any:
        """
        Instantiate a plugin by id with optional configuration.

        Raises:
            PluginNotFoundError: If plugin_id is not registered
        """
        definition = self.get_definition(plugin_id)
        instance = definition.plugin_class(dict(configuration or {}), plugin_id, definition, **self.dependencies)
        logger.debug("plugin.registry.instantiated_plugin",
                     plugin_type=self.plugin_type,
                     plugin_id=plugin_id,
                     class_name=definition.plugin_class.__name__)
        return instance

    def list_plugins(self) -> List[str]:
        return list(self.get_definitions().keys())

    def _build_definitions(self) -> Dict[str, PluginDefinition]:
        definitions: Dict[str, PluginDefinition] = {}
        for plugin_id, definition in self._definitions.items():
            deriver = self._derivers.get(plugin_id)
            if deriver is None:
                definitions[plugin_id] = definition
                continue
            for key, overrides in deriver(definition).items():
                derived_id = f"{plugin_id}:{key}"
                context = {
                    slot: _as_context_definition(value)
                    for slot, value in overrides.get("context", definition.context).items()
                }
                definitions[derived_id] = definition.model_copy(update=dict(
                    overrides, id=derived_id, derivative_of=plugin_id, context=context
                ))
        return definitions


def _as_context_definition(value: Any) -> ContextDefinition:
    if isinstance(value, ContextDefinition):
        return value
    return ContextDefinition(**value)
