"""
Helpers for assigning available contexts to a plugin's context slots.
Path: page_manager/context/assignment.py

These operate on the plugin passed in rather than on shared state, so any
context-aware plugin (conditions, blocks) can use them.
"""

from typing import Any, Dict, Mapping

import structlog

from .context import Context
from .handler import ContextHandler

logger = structlog.get_logger()


def build_context_assignment_options(plugin: Any, contexts: Mapping[str, Context],
                                     handler: ContextHandler) -> Dict[str, Dict[str, Any]]:
    """
    Describe the choices available for each of a plugin's context slots.

    Args:
        plugin: A context-aware plugin
        contexts: Available contexts keyed by name
        handler: Context handler used to filter compatible contexts

    Returns:
        Mapping of slot name to a dict with ``title``, ``options`` (context
        name to label), ``required`` and ``default_value``
    """
    assignments = plugin.get_configuration().get("context_assignments") or {}
    element = {}
    for slot, definition in plugin.get_context_definitions().items():
        valid_contexts = handler.get_matching_contexts(contexts, definition)
        element[slot] = {
            "title": f"Select a {slot} value:",
            "options": {name: context.label for name, context in valid_contexts.items()},
            "required": definition.required,
            "default_value": assignments.get(slot, ""),
        }
    return element


def submit_context_assignment(plugin: Any, assignments: Mapping[str, str]) -> None:
    """Store slot to context-name assignments in the plugin's configuration."""
    configuration = plugin.get_configuration()
    # Empty selections mean "unassigned"
    configuration["context_assignments"] = {slot: name for slot, name in assignments.items() if name}
    plugin.set_configuration(configuration)
    logger.debug("context.assignment.submitted", plugin_id=plugin.get_plugin_id(),
                 assignments=configuration["context_assignments"])
