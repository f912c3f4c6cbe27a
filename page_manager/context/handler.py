"""
Context handler: matches plugin context requirements against available contexts.
Path: page_manager/context/handler.py
"""

from typing import Any, Dict, Mapping, Optional

import structlog

from page_manager.exceptions import ContextError
from .context import Context, ContextDefinition
from .types import TypeRegistry

logger = structlog.get_logger()


class ContextHandler:
    """
    Filters contexts and plugin definitions by type compatibility, and binds
    assigned context values onto context-aware plugins.
    """

    def __init__(self, type_registry: Optional[TypeRegistry] = None):
        self.type_registry = type_registry or TypeRegistry()

    def get_valid_contexts(self, contexts: Mapping[str, Context],
                           definition: ContextDefinition) -> Dict[str, Context]:
        """
        Return the contexts whose type satisfies the definition.

        Args:
            contexts: Available contexts keyed by name
            definition: The requirement to satisfy

        Returns:
            Matching contexts keyed by name, empty when nothing matches
        """
        return {
            name: context for name, context in contexts.items()
            if self.type_registry.is_subtype(context.type_id, definition.type_id)
        }

    # Name used by the assignment helpers
    get_matching_contexts = get_valid_contexts

    def get_definitions_for_contexts(self, definitions: Mapping[str, Any],
                                     contexts: Mapping[str, Context]) -> Dict[str, Any]:
        """
        Return the plugin definitions whose required slots can all be filled.

        Args:
            definitions: Plugin definitions keyed by plugin id; each exposes a
                ``context`` mapping of slot name to ContextDefinition
            contexts: Available contexts keyed by name

        Returns:
            The satisfiable subset of definitions, in their original order
        """
        available = {}
        for plugin_id, plugin_definition in definitions.items():
            if self._is_satisfiable(plugin_definition.context, contexts):
                available[plugin_id] = plugin_definition
            else:
                logger.debug("context.handler.definition_unsatisfiable", plugin_id=plugin_id)
        return available

    def apply_context_mapping(self, plugin: Any, contexts: Mapping[str, Context]) -> None:
        """
        Bind context values onto a plugin's declared slots.

        Each slot uses the context named in the plugin's ``context_assignments``
        configuration, or a context with the slot's own name when unassigned.

        Raises:
            ContextError: If a required slot has no compatible context with a value
        """
        assignments = plugin.get_configuration().get("context_assignments") or {}
        for slot, definition in plugin.get_context_definitions().items():
            context_name = assignments.get(slot, slot)
            context = contexts.get(context_name)
            if context is not None and not self.type_registry.is_subtype(context.type_id, definition.type_id):
                logger.warning("context.handler.type_mismatch", slot=slot, context=context_name,
                               context_type=context.type_id, required_type=definition.type_id)
                context = None

            if context is not None and context.has_value():
                plugin.set_context_value(slot, context.get_value())
            elif definition.required:
                raise ContextError(
                    f"Required context slot '{slot}' of plugin '{plugin.get_plugin_id()}' "
                    f"could not be filled from '{context_name}'"
                )

    def _is_satisfiable(self, slots: Mapping[str, ContextDefinition],
                        contexts: Mapping[str, Context]) -> bool:
        for definition in slots.values():
            if definition.required and not self.get_valid_contexts(contexts, definition):
                return False
        return True
