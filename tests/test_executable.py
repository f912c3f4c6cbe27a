"""
Tests for page execution and the context providers.
Path: tests/test_executable.py
"""

from unittest.mock import MagicMock

from page_manager.context.context import Context
from page_manager.context.providers import Account, CurrentUserContext, RouteParamContext
from page_manager.context.types import TypeRegistry
from page_manager.executable import PageExecutable
from tests.conftest import recording

ARTICLE = {"title": "Hello world", "bundle": "article"}
PAGE = {"id": "article_page", "label": "Article", "path": "/node/{node}/summary",
        "parameters": {"node": {"type": "entity:node"}},
        "variants": [
            {"id": "block_display", "uuid": "editors", "weight": 0,
             "selection_conditions": [{"id": "user_role", "roles": ["editor"],
                                       "context_assignments": {"user": "current_user"}}],
             "blocks": {"view": {"id": "entity_view:node", "region": "top", "view_mode": "full",
                                 "context_assignments": {"entity": "node"}}}},
            {"id": "http_status_code", "uuid": "fallback", "weight": 10, "status_code": 403},
        ],
        "access": [{"id": "user_role", "roles": ["editor", "authenticated"],
                    "context_assignments": {"user": "current_user"}}]}


def provider(name, value, calls):
    def add(executable):
        calls.append(name)
        context = Context(name, "string", value=value)
        executable.add_context("shared", context)
    return add


def test_providers_run_once_in_order(manager):
    calls = []
    page = manager.create_page({"id": "test", "path": "/test"})
    executable = PageExecutable(page, [provider("first", 1, calls), provider("second", 2, calls)],
                                manager.context_handler)

    registry = executable.get_registry()
    executable.get_contexts()
    executable.select_variant()

    assert calls == ["first", "second"]
    # Later providers win on name collisions
    assert registry.get_context("shared").get_value() == 2


def test_contexts_added_directly_are_kept(manager):
    page = manager.create_page({"id": "test", "path": "/test"})
    executable = PageExecutable(page, [], manager.context_handler)
    executable.add_context("extra", Context("extra", "string", value="x"))
    assert executable.get_contexts()["extra"].get_value() == "x"


def test_build_selects_variant_and_binds_contexts(manager):
    page = manager.page_from_dict(PAGE)
    editor = Account(uid=5, name="ed", roles=["editor"])

    result = manager.executable(page, {"node": ARTICLE}, editor).build()

    assert result.found
    assert result.variant.uuid() == "editors"
    block = result.content["regions"]["top"][0]
    assert block["uuid"] == "view"
    assert block["content"] == {"entity": ARTICLE, "title": "Hello world", "view_mode": "full"}
    assert result.content["regions"]["bottom"] == []


def test_build_falls_through_to_next_variant(manager):
    page = manager.page_from_dict(PAGE)
    author = Account(uid=6, name="au", roles=["authenticated"])

    result = manager.executable(page, {"node": ARTICLE}, author).build()

    assert result.variant.uuid() == "fallback"
    assert result.content == {"variant": "fallback", "status_code": 403}


def test_build_denied(manager):
    page = manager.page_from_dict(PAGE)

    result = manager.executable(page, {"node": ARTICLE}).build()

    assert result.access is False
    assert result.variant is None
    assert not result.found


def test_build_without_accessible_variant(manager, recorded_calls):
    page = manager.page_from_dict({"id": "test", "path": "/test",
                                   "variants": [{"id": "block_display", "selection_conditions": [recording("no", False)]}]})

    result = manager.executable(page).build()

    assert result.access is True
    assert result.variant is None
    assert not result.found


def test_current_user_context():
    executable = MagicMock()
    account = Account(uid=3, name="someone", roles=["authenticated"])

    CurrentUserContext(lambda: account)(executable)

    name, context = executable.add_context.call_args[0]
    assert name == "current_user"
    assert context.type_id == "entity:user"
    assert context.label == "Current user"
    assert context.get_value() is account


def test_anonymous_account():
    account = Account.anonymous()
    assert account.uid == 0
    assert account.roles == ["anonymous"]


class TestRouteParamContext:

    def make_executable(self, manager, parameters):
        page = manager.page_from_dict({"id": "test", "path": "/test/{node}", "parameters": parameters})
        return PageExecutable(page, [], manager.context_handler)

    def test_typed_parameters_become_contexts(self, manager):
        executable = self.make_executable(manager, {"node": {"type": "entity:node"},
                                                    "page": {"type": "string"}})

        RouteParamContext({"node": "7", "page": "x"}, manager.type_registry)(executable)

        contexts = executable.get_contexts()
        assert set(contexts) == {"node"}
        assert contexts["node"].type_id == "entity:node"
        assert contexts["node"].label == "Content"
        assert contexts["node"].get_value() == "7"

    def test_missing_parameter_has_no_value(self, manager):
        executable = self.make_executable(manager, {"node": {"type": "entity:node", "label": "Node"}})

        RouteParamContext({}, manager.type_registry)(executable)

        context = executable.get_contexts()["node"]
        assert context.label == "Node"
        assert not context.has_value()

    def test_converter_by_type(self, manager):
        executable = self.make_executable(manager, {"node": {"type": "entity:node"}})
        converters = {"entity:node": lambda raw: {"nid": int(raw)}}

        RouteParamContext({"node": "7"}, manager.type_registry, converters)(executable)

        assert executable.get_contexts()["node"].get_value() == {"nid": 7}

    def test_untyped_parameter_defaults_to_string(self, manager):
        executable = self.make_executable(manager, {"slug": {}})

        RouteParamContext({"slug": "abc"}, TypeRegistry())(executable)

        assert executable.get_contexts()["slug"].type_id == "string"


def test_entity_converters(manager):
    manager.config["entities"] = {"node": {1: ARTICLE}}
    converters = manager.entity_converters()

    assert converters["entity:node"]("1") == ARTICLE
    assert converters["entity:node"]("99") == "99"
