"""
Per-execution registry of available contexts.
Path: page_manager/context/registry.py
"""

from typing import Dict, Optional

import structlog

from .context import Context

logger = structlog.get_logger()


class ContextRegistry:
    """Contexts collected for one page execution, keyed by name."""

    def __init__(self):
        self._contexts: Dict[str, Context] = {}

    def add_context(self, name: str, context: Context) -> 'ContextRegistry':
        # Last provider to use a name wins
        if name in self._contexts:
            logger.debug("context.registry.overwriting", name=name,
                         old_type=self._contexts[name].type_id, new_type=context.type_id)
        self._contexts[name] = context
        return self

    def get_context(self, name: str) -> Optional[Context]:
        return self._contexts.get(name)

    def get_contexts(self) -> Dict[str, Context]:
        return dict(self._contexts)

    def __contains__(self, name: str) -> bool:
        return name in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)
