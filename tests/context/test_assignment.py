"""
Tests for context assignment helpers.
Path: tests/context/test_assignment.py
"""

from page_manager.context import build_context_assignment_options, submit_context_assignment
from page_manager.context.context import Context
from page_manager.context.handler import ContextHandler


def test_options_list_compatible_contexts(manager):
    condition = manager.condition_registry.instantiate("user_role", {"context_assignments": {"user": "current_user"}})
    contexts = {
        "current_user": Context("current_user", "entity:user", label="Current user"),
        "author": Context("author", "entity:user", label="Author"),
        "node": Context("node", "entity:node", label="Content"),
    }

    element = build_context_assignment_options(condition, contexts, manager.context_handler)

    assert list(element) == ["user"]
    assert element["user"]["options"] == {"current_user": "Current user", "author": "Author"}
    assert element["user"]["required"] is True
    assert element["user"]["default_value"] == "current_user"
    assert element["user"]["title"] == "Select a user value:"


def test_options_for_plugin_without_assignments(manager):
    condition = manager.condition_registry.instantiate("user_role", {})

    element = build_context_assignment_options(condition, {}, ContextHandler())

    assert element["user"]["options"] == {}
    assert element["user"]["default_value"] == ""


def test_submit_stores_assignments(manager):
    condition = manager.condition_registry.instantiate("user_role", {"roles": ["editor"]})

    submit_context_assignment(condition, {"user": "author", "unused": ""})

    configuration = condition.get_configuration()
    assert configuration["context_assignments"] == {"user": "author"}
    assert configuration["roles"] == ["editor"]
