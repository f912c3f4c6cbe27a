"""
Path pattern matching for pages.
Path: page_manager/routing.py
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple

import structlog

logger = structlog.get_logger()

_PARAMETER_PATTERN: Pattern = re.compile(r'^\{([A-Za-z_][A-Za-z0-9_]*)\}$')


class PathPattern:
    """Compiled form of a path such as '/node/{node}/summary'."""

    def __init__(self, path: str):
        self.path = "/" + path.strip("/")
        self.parameters: List[str] = []
        self.literal_segments = 0

        parts = []
        for segment in self.path.strip("/").split("/"):
            if not segment:
                continue
            match = _PARAMETER_PATTERN.match(segment)
            if match:
                self.parameters.append(match.group(1))
                parts.append(f"(?P<{match.group(1)}>[^/]+)")
            else:
                self.literal_segments += 1
                parts.append(re.escape(segment))
        self._regex = re.compile("^/" + "/".join(parts) + "/?$")

    def match(self, request_path: str) -> Optional[Dict[str, str]]:
        """Return route parameters when request_path matches, else None."""
        match = self._regex.match("/" + request_path.lstrip("/"))
        if not match:
            return None
        return match.groupdict()


class Router:
    """Finds the page serving a request path."""

    def __init__(self, pages: Iterable[Any]):
        routes = [(PathPattern(page.path), page) for page in pages]
        # More literal segments first, then page id
        self._routes: List[Tuple[PathPattern, Any]] = sorted(
            routes, key=lambda route: (-route[0].literal_segments, route[1].id)
        )

    def match(self, request_path: str) -> Optional[Tuple[Any, Dict[str, str]]]:
        """
        Match a request path against the enabled pages.

        Returns:
            (page, route parameters) or None when no page matches
        """
        for pattern, page in self._routes:
            if not page.status():
                continue
            params = pattern.match(request_path)
            if params is not None:
                logger.debug("routing.matched", path=request_path, page=page.id, params=params)
                return page, params
        logger.debug("routing.no_match", path=request_path)
        return None
