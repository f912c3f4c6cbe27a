"""
Runtime execution of a page for one request.
Path: page_manager/executable.py
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

import structlog

from page_manager.context.context import Context
from page_manager.context.handler import ContextHandler
from page_manager.context.registry import ContextRegistry
from page_manager.page import Page
from page_manager.selection import check_access, make_condition_evaluator, select_variant

logger = structlog.get_logger()

ContextProvider = Callable[['PageExecutable'], None]


@dataclass
class PageBuild:
    """Outcome of executing a page."""
    page: Page
    access: bool
    variant: Optional[Any] = None
    content: Optional[Dict[str, Any]] = None

    @property
    def found(self) -> bool:
        return self.access and self.variant is not None


class PageExecutable:
    """
    A page during one request: owns the context registry, runs the providers
    and selects the variant.
    """

    def __init__(self,
                 page: Page,
                 providers: Optional[Iterable[ContextProvider]] = None,
                 context_handler: Optional[ContextHandler] = None):
        self.page = page
        self.providers = list(providers or [])
        self.context_handler = context_handler or ContextHandler()
        self.evaluator = make_condition_evaluator(self.context_handler)
        self._registry = ContextRegistry()
        self._contexts_collected = False

    def get_page(self) -> Page:
        return self.page

    def add_context(self, name: str, context: Context) -> 'PageExecutable':
        self._registry.add_context(name, context)
        return self

    def get_registry(self) -> ContextRegistry:
        self._collect_contexts()
        return self._registry

    def get_contexts(self) -> Dict[str, Context]:
        return self.get_registry().get_contexts()

    def access(self) -> bool:
        return check_access(self.page.get_access_conditions(), self.get_registry(), self.evaluator)

    def select_variant(self) -> Optional[Any]:
        return select_variant(self.page.get_variants(), self.get_registry(), self.evaluator)

    def build(self) -> PageBuild:
        """Check page access, select a variant and build its content."""
        if not self.access():
            logger.info("page.access_denied", page=self.page.id)
            return PageBuild(page=self.page, access=False)

        variant = self.select_variant()
        if variant is None:
            return PageBuild(page=self.page, access=True)

        content = variant.build(self.get_contexts(), self.context_handler)
        return PageBuild(page=self.page, access=True, variant=variant, content=content)

    def _collect_contexts(self) -> None:
        if self._contexts_collected:
            return
        self._contexts_collected = True
        for provider in self.providers:
            provider(self)
        logger.debug("page.contexts_collected", page=self.page.id, contexts=sorted(self._registry.get_contexts()))
