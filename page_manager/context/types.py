"""
Typed data registry used for context type compatibility checks.
Path: page_manager/context/types.py
"""

from typing import Dict, Iterator, List, Optional

import structlog

logger = structlog.get_logger()

DEFAULT_TYPES = {
    "any": {"label": "Any"},
    "string": {"label": "String", "parent": "any"},
    "integer": {"label": "Integer", "parent": "any"},
    "entity": {"label": "Entity", "parent": "any"},
    "entity:user": {"label": "User", "parent": "entity"},
    "entity:node": {"label": "Content", "parent": "entity"},
    "entity:taxonomy_term": {"label": "Taxonomy term", "parent": "entity"},
}


class TypeRegistry:
    """
    Registry of known data types and their parents.

    A type is compatible with a required type when it is the same type, when
    the required type appears in its registered parent chain, or when the
    required type is the base of a "base:derived" id (so 'entity:user' is an
    'entity' even when 'entity:user' was never registered).
    """

    def __init__(self, types: Optional[Dict[str, Dict[str, str]]] = None):
        self._types: Dict[str, Dict[str, str]] = {}
        for type_id, definition in (DEFAULT_TYPES if types is None else types).items():
            self.register(type_id, label=definition.get("label"), parent=definition.get("parent"))

    def register(self, type_id: str, label: Optional[str] = None, parent: Optional[str] = None) -> None:
        if type_id in self._types:
            logger.debug("types.overwriting_existing_type", type_id=type_id)
        previous = self._types.get(type_id, {})
        self._types[type_id] = {"label": label or previous.get("label") or type_id}
        if parent:
            self._types[type_id]["parent"] = parent

    def has(self, type_id: str) -> bool:
        return type_id in self._types

    def get_label(self, type_id: str) -> str:
        definition = self._types.get(type_id)
        if definition:
            return definition["label"]
        return type_id

    def ancestors(self, type_id: str) -> Iterator[str]:
        """Yield the parents of a type, nearest first."""
        seen = {type_id}
        current = type_id
        while True:
            parent = self._parent_of(current)
            if parent is None or parent in seen:
                return
            seen.add(parent)
            yield parent
            current = parent

    def is_subtype(self, type_id: str, required_type_id: str) -> bool:
        """Check whether a value of type_id satisfies required_type_id."""
        if type_id == required_type_id or required_type_id == "any":
            return True
        return required_type_id in self.ancestors(type_id)

    def list_types(self) -> List[str]:
        return list(self._types.keys())

    def _parent_of(self, type_id: str) -> Optional[str]:
        definition = self._types.get(type_id)
        if definition and definition.get("parent"):
            return definition["parent"]
        if ":" in type_id:
            return type_id.rsplit(":", 1)[0]
        return None
