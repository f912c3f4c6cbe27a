"""
Context values and context definitions.
Path: page_manager/context/context.py

A Context is a named, typed value made available to plugins during one page
execution. A ContextDefinition describes what a plugin needs in one of its
slots; it never holds a value.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from page_manager.exceptions import ContextError

_UNSET = object()


class ContextDefinition(BaseModel):
    """Requirement declared by a context-aware plugin for a single slot."""
    type_id: str = Field(..., alias="type", description="Typed data id, e.g. 'entity:user'")
    label: Optional[str] = Field(default=None, description="Human readable label")
    # Unspecified requirements are treated as required
    required: bool = Field(default=True, description="Whether the slot must be filled")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type_id, "required": self.required}
        if self.label is not None:
            data["label"] = self.label
        return data


class Context:
    """A named, typed runtime value."""

    def __init__(self, name: str, type_id: str, label: Optional[str] = None,
                 required: bool = True, value: Any = _UNSET):
        self._name = name
        self._type_id = type_id
        self._label = label or name
        self._required = required
        self._value = _UNSET
        if value is not _UNSET:
            self.set_value(value)

    @property
    def name(self) -> str:
        return self._name

    @property
    def type_id(self) -> str:
        return self._type_id

    @property
    def label(self) -> str:
        return self._label

    @property
    def required(self) -> bool:
        return self._required

    def get_definition(self) -> ContextDefinition:
        return ContextDefinition(type=self._type_id, label=self._label, required=self._required)

    def has_value(self) -> bool:
        return self._value is not _UNSET

    def get_value(self, default: Any = None) -> Any:
        """Return the bound value, or default when nothing has been bound."""
        if self._value is _UNSET:
            return default
        return self._value

    def set_value(self, value: Any) -> 'Context':
        """
        Bind the value for this execution.

        Raises:
            ContextError: If a value has already been bound
        """
        if self._value is not _UNSET:
            raise ContextError(f"Context '{self._name}' already has a value")
        self._value = value
        return self

    def __repr__(self) -> str:
        return f"Context(name={self._name!r}, type_id={self._type_id!r}, has_value={self.has_value()})"
