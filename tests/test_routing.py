"""
Tests for path matching.
Path: tests/test_routing.py
"""

import pytest

from page_manager.routing import PathPattern, Router


@pytest.mark.parametrize("path,request_path,expected", [
    ("/about", "/about", {}),
    ("/about", "/about/", {}),
    ("/node/{node}", "/node/5", {"node": "5"}),
    ("/node/{node}/summary", "/node/5/summary", {"node": "5"}),
    ("/node/{node}/summary", "/node/5", None),
    ("/node/{node}", "/node/5/summary", None),
    ("/user/{user}/posts/{page}", "/user/ada/posts/2", {"user": "ada", "page": "2"}),
])
def test_path_pattern(path, request_path, expected):
    assert PathPattern(path).match(request_path) == expected


def test_literal_segments_are_escaped():
    pattern = PathPattern("/files/a.b")
    assert pattern.literal_segments == 2
    assert pattern.match("/files/axb") is None
    assert pattern.match("/files/a.b") == {}


def test_router_prefers_literal_paths(manager):
    generic = manager.page_from_dict({"id": "node_view", "path": "/node/{node}"})
    specific = manager.page_from_dict({"id": "node_add", "path": "/node/add"})
    router = manager.router([generic, specific])

    page, params = router.match("/node/add")
    assert page is specific
    assert params == {}

    page, params = router.match("/node/3")
    assert page is generic
    assert params == {"node": "3"}


def test_router_skips_disabled_pages(manager):
    disabled = manager.page_from_dict({"id": "about_old", "path": "/about", "status": False})
    enabled = manager.page_from_dict({"id": "about_new", "path": "/about"})

    assert Router([disabled, enabled]).match("/about")[0] is enabled
    assert Router([disabled]).match("/about") is None


def test_router_no_match(manager):
    router = Router([manager.page_from_dict({"id": "about", "path": "/about"})])
    assert router.match("/contact") is None
