"""
Tests for the builtin condition plugins.
Path: tests/plugins/test_conditions.py
"""

from page_manager.context.providers import Account


def test_user_role_condition(manager):
    condition = manager.condition_registry.instantiate("user_role", {"roles": ["editor", "admin"]})

    condition.set_context_value("user", Account(uid=2, name="ed", roles=["authenticated", "editor"]))
    assert condition.execute() is True

    condition.set_context_value("user", Account(uid=3, name="bob", roles=["authenticated"]))
    assert condition.execute() is False


def test_user_role_without_roles_passes(manager):
    condition = manager.condition_registry.instantiate("user_role", {})
    assert condition.execute() is True


def test_negate(manager):
    condition = manager.condition_registry.instantiate("user_role", {"roles": ["editor"], "negate": True})
    condition.set_context_value("user", {"roles": ["editor"]})

    assert condition.evaluate() is True
    assert condition.execute() is False
    assert condition.summary() == "The user is not a member of editor"


def test_entity_bundle_derivatives(manager):
    definitions = manager.condition_registry.get_definitions()
    assert {"entity_bundle:node", "entity_bundle:user", "entity_bundle:taxonomy_term"} <= set(definitions)
    assert definitions["entity_bundle:node"].context["entity"].type_id == "entity:node"

    condition = manager.condition_registry.instantiate("entity_bundle:node", {"bundles": ["article"]})
    condition.set_context_value("entity", {"bundle": "article"})
    assert condition.execute() is True

    condition.set_context_value("entity", {"bundle": "page"})
    assert condition.execute() is False
