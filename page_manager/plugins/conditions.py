"""
Condition plugins used for page access and variant selection.
Path: page_manager/plugins/conditions.py
"""

from typing import Any, Dict

from .base import ContextAwarePluginBase, PluginDefinition, field_value
from .registry import PluginRegistry


class ConditionPluginBase(ContextAwarePluginBase):
    """A plugin deciding whether access is granted, from its bound contexts."""

    def default_configuration(self) -> Dict[str, Any]:
        return {"negate": False, "weight": 0, "context_assignments": {}}

    def is_negated(self) -> bool:
        return bool(self.configuration.get("negate"))

    def evaluate(self) -> bool:
        raise NotImplementedError("Conditions must implement evaluate method")

    def execute(self) -> bool:
        """Evaluate the condition and apply the negate setting."""
        result = bool(self.evaluate())
        return not result if self.is_negated() else result

    def summary(self) -> str:
        return self.label()


class UserRoleCondition(ConditionPluginBase):
    """Passes when the user holds any of the configured roles."""

    def default_configuration(self) -> Dict[str, Any]:
        configuration = super().default_configuration()
        configuration["roles"] = []
        return configuration

    def evaluate(self) -> bool:
        roles = set(self.configuration.get("roles") or [])
        if not roles:
            return True
        account = self.get_context_value("user")
        return bool(roles & set(field_value(account, "roles") or []))

    def summary(self) -> str:
        roles = ", ".join(self.configuration.get("roles") or [])
        prefix = "The user is not a member of" if self.is_negated() else "The user is a member of"
        return f"{prefix} {roles}"


class EntityBundleCondition(ConditionPluginBase):
    """Passes when the entity's bundle is one of the configured bundles."""

    def default_configuration(self) -> Dict[str, Any]:
        configuration = super().default_configuration()
        configuration["bundles"] = []
        return configuration

    def evaluate(self) -> bool:
        bundles = set(self.configuration.get("bundles") or [])
        if not bundles:
            return True
        return field_value(self.get_context_value("entity"), "bundle") in bundles


def entity_type_deriver(entity_types: Dict[str, str]):
    """
    Build a deriver yielding one definition per entity type.

    Args:
        entity_types: Entity type id to label
    """
    def derive(base_definition: PluginDefinition) -> Dict[str, Dict[str, Any]]:
        return {
            entity_type_id: {
                "label": f"{base_definition.label} ({label})",
                "context": {"entity": {"type": f"entity:{entity_type_id}", "label": label}},
            }
            for entity_type_id, label in entity_types.items()
        }
    return derive


def register_builtin_conditions(registry: PluginRegistry, entity_types: Dict[str, str]) -> PluginRegistry:
    registry.register("user_role", UserRoleCondition, "User role", category="User",
                      context={"user": {"type": "entity:user", "label": "User"}})
    registry.register("entity_bundle", EntityBundleCondition, "Bundle", category="Entity",
                      deriver=entity_type_deriver(entity_types))
    return registry
