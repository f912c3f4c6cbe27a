"""
Composition root wiring the page manager services together.
Path: page_manager/container.py
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from page_manager.config import DEFAULT_CONFIG
from page_manager.context.handler import ContextHandler
from page_manager.context.providers import Account, CurrentUserContext, RouteParamContext
from page_manager.context.types import TypeRegistry
from page_manager.executable import ContextProvider, PageExecutable
from page_manager.page import Page
from page_manager.plugins.bag import generate_uuid
from page_manager.plugins.blocks import register_builtin_blocks
from page_manager.plugins.conditions import register_builtin_conditions
from page_manager.plugins.registry import PluginRegistry
from page_manager.plugins.variants import register_builtin_variants
from page_manager.routing import Router
from page_manager.storage import PageStorage

logger = structlog.get_logger()


class PageManager:
    """
    Builds and holds the shared services: type registry, context handler,
    plugin registries and page storage.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 uuid_generator: Optional[Callable[[], str]] = None):
        self.config = config or dict(DEFAULT_CONFIG)
        self.uuid_generator = uuid_generator or generate_uuid

        entity_types = self.config.get("entity_types") or DEFAULT_CONFIG["entity_types"]
        self.type_registry = TypeRegistry()
        for entity_type_id, label in entity_types.items():
            self.type_registry.register(f"entity:{entity_type_id}", label=label, parent="entity")
        for type_id, parent in (self.config.get("types") or {}).items():
            self.type_registry.register(type_id, parent=parent)

        self.context_handler = ContextHandler(self.type_registry)
        self.condition_registry = register_builtin_conditions(PluginRegistry("condition"), entity_types)
        self.block_registry = register_builtin_blocks(PluginRegistry("block"), entity_types)
        self.variant_registry = register_builtin_variants(PluginRegistry("variant", dependencies={
            "condition_registry": self.condition_registry,
            "block_registry": self.block_registry,
            "uuid_generator": self.uuid_generator,
        }))
        self.storage = PageStorage(self.config.get("pages_directory", "pages"), self.page_from_dict)
        logger.debug("page_manager.initialized",
                     pages_directory=str(self.storage.directory),
                     conditions=self.condition_registry.list_plugins(),
                     blocks=self.block_registry.list_plugins(),
                     variants=self.variant_registry.list_plugins())

    def create_page(self, values: Dict[str, Any]) -> Page:
        return Page.create(values, self.variant_registry, self.condition_registry, self.uuid_generator)

    def page_from_dict(self, values: Dict[str, Any]) -> Page:
        return Page.from_dict(values, self.variant_registry, self.condition_registry, self.uuid_generator)

    def router(self, pages: Optional[List[Page]] = None) -> Router:
        return Router(self.storage.load_all() if pages is None else pages)

    def providers(self, route_params: Mapping[str, Any], account: Optional[Account] = None,
                  converters: Optional[Dict[str, Callable[[Any], Any]]] = None) -> List[ContextProvider]:
        account = account or Account.anonymous()
        return [
            CurrentUserContext(lambda: account),
            RouteParamContext(route_params, self.type_registry, converters),
        ]

    def entity_converters(self) -> Dict[str, Callable[[Any], Any]]:
        """
        Converters loading route parameter ids from the configured ``entities``
        fixtures (entity type -> id -> values); unknown ids are passed through.
        """
        converters = {}
        for entity_type_id, entities in (self.config.get("entities") or {}).items():
            records = {str(key): value for key, value in (entities or {}).items()}
            converters[f"entity:{entity_type_id}"] = lambda raw, records=records: records.get(str(raw), raw)
        return converters

    def executable(self, page: Page, route_params: Optional[Mapping[str, Any]] = None,
                   account: Optional[Account] = None,
                   converters: Optional[Dict[str, Callable[[Any], Any]]] = None) -> PageExecutable:
        return PageExecutable(page, self.providers(route_params or {}, account, converters), self.context_handler)
