"""
Page variant plugins.
Path: page_manager/plugins/variants.py

A variant is one way of rendering a page, gated by its selection conditions.
The block variant arranges configured blocks into a fixed set of regions.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from page_manager.context.context import Context
from page_manager.context.handler import ContextHandler
from page_manager.exceptions import ContextError
from .bag import BlockPluginBag, PluginBag, generate_uuid
from .base import PluginBase, PluginDefinition
from .registry import PluginRegistry

logger = structlog.get_logger()

DEFAULT_REGIONS = {"top": "Top", "bottom": "Bottom"}


class VariantPluginBase(PluginBase):
    """Variant owning a bag of selection conditions."""

    def __init__(self,
                 configuration: Dict[str, Any],
                 plugin_id: str,
                 definition: PluginDefinition,
                 condition_registry: PluginRegistry,
                 block_registry: Optional[PluginRegistry] = None,
                 uuid_generator: Optional[Callable[[], str]] = None):
        self.condition_registry = condition_registry
        self.block_registry = block_registry
        self.uuid_generator = uuid_generator or generate_uuid
        self._selection_condition_bag: Optional[PluginBag] = None
        super().__init__(configuration, plugin_id, definition)

    def default_configuration(self) -> Dict[str, Any]:
        return {"label": "", "weight": 0, "selection_conditions": []}

    def set_configuration(self, configuration: Dict[str, Any]) -> None:
        super().set_configuration(configuration)
        self._selection_condition_bag = None

    def get_configuration(self) -> Dict[str, Any]:
        configuration = super().get_configuration()
        if self._selection_condition_bag is not None:
            configuration["selection_conditions"] = self._selection_condition_bag.get_configuration()
        return configuration

    def get_selection_conditions(self) -> PluginBag:
        if self._selection_condition_bag is None:
            self._selection_condition_bag = PluginBag(
                self.condition_registry,
                self.configuration.get("selection_conditions") or [],
                uuid_generator=self.uuid_generator,
                name="selection condition",
            ).sort()
        return self._selection_condition_bag

    def add_selection_condition(self, configuration: Dict[str, Any]) -> str:
        return self.get_selection_conditions().add_instance_id(configuration.get("uuid"), configuration)

    def get_selection_condition(self, condition_id: str) -> Any:
        return self.get_selection_conditions().get(condition_id)

    def remove_selection_condition(self, condition_id: str) -> 'VariantPluginBase':
        self.get_selection_conditions().remove_instance_id(condition_id)
        return self

    def build(self, contexts: Mapping[str, Context], handler: ContextHandler) -> Dict[str, Any]:
        raise NotImplementedError("Variants must implement build method")


class BlockVariant(VariantPluginBase):
    """Variant rendering blocks into named regions."""

    def __init__(self, *args, **kwargs):
        self._block_bag: Optional[BlockPluginBag] = None
        super().__init__(*args, **kwargs)

    def default_configuration(self) -> Dict[str, Any]:
        configuration = super().default_configuration()
        configuration["blocks"] = {}
        return configuration

    def set_configuration(self, configuration: Dict[str, Any]) -> None:
        super().set_configuration(configuration)
        self._block_bag = None

    def get_configuration(self) -> Dict[str, Any]:
        configuration = super().get_configuration()
        if self._block_bag is not None:
            configuration["blocks"] = self._block_bag.get_configuration_by_id()
        return configuration

    def get_region_names(self) -> Dict[str, str]:
        return dict(self.configuration.get("regions") or DEFAULT_REGIONS)

    def get_region_name(self, region: str) -> str:
        return self.get_region_names().get(region, "")

    def get_block_bag(self) -> BlockPluginBag:
        if self._block_bag is None:
            if self.block_registry is None:
                raise ValueError(f"Variant '{self.plugin_id}' has no block registry")
            self._block_bag = BlockPluginBag(
                self.block_registry,
                self.configuration.get("blocks") or {},
                uuid_generator=self.uuid_generator,
                name="block",
            ).sort()
        return self._block_bag

    def get_region_assignments(self) -> Dict[str, List[Any]]:
        """
        Blocks of each known region, in weight order.

        Blocks assigned to a region that is not one of the known regions are
        left out of every region; they are still reachable with get_block().
        """
        names = self.get_region_names()
        assignments: Dict[str, List[Any]] = {region: [] for region in names}
        for region, blocks in self.get_block_bag().get_all_by_region().items():
            if region in assignments:
                assignments[region] = list(blocks)
            else:
                logger.warning("variant.blocks_in_unknown_region",
                               variant=self.uuid(),
                               region=region,
                               blocks=[block.uuid() for block in blocks])
        return assignments

    def get_region_assignment(self, block_id: str) -> Optional[str]:
        return self.get_block(block_id).region()

    def set_region_assignment(self, block_id: str, region: str) -> 'BlockVariant':
        block = self.get_block(block_id)
        configuration = block.get_configuration()
        configuration["region"] = region
        block.set_configuration(configuration)
        return self

    def add_block(self, configuration: Dict[str, Any]) -> str:
        block_id = self.get_block_bag().add_instance_id(configuration.get("uuid"), configuration)
        self.get_block_bag().sort()
        return block_id

    def get_block(self, block_id: str) -> Any:
        return self.get_block_bag().get(block_id)

    def update_block(self, block_id: str, configuration: Dict[str, Any]) -> 'BlockVariant':
        bag = self.get_block_bag()
        merged = bag.get(block_id).get_configuration()
        merged.update(configuration)
        bag.set_configuration(block_id, merged)
        bag.sort()
        return self

    def remove_block(self, block_id: str) -> 'BlockVariant':
        self.get_block_bag().remove_instance_id(block_id)
        return self

    def get_block_count(self) -> int:
        return self.get_block_bag().count()

    def build(self, contexts: Mapping[str, Context], handler: ContextHandler) -> Dict[str, Any]:
        regions = {}
        for region, blocks in self.get_region_assignments().items():
            regions[region] = []
            for block in blocks:
                block.clear_context_values()
                try:
                    handler.apply_context_mapping(block, contexts)
                except ContextError as e:
                    logger.warning("variant.block_skipped", block=block.uuid(), error=str(e))
                    continue
                regions[region].append({
                    "uuid": block.uuid(),
                    "plugin_id": block.get_plugin_id(),
                    "label": block.label(),
                    "content": block.build(),
                })
        return {"variant": self.uuid(), "regions": regions}


class HttpStatusCodeVariant(VariantPluginBase):
    """Variant answering with a bare HTTP status code."""

    def default_configuration(self) -> Dict[str, Any]:
        configuration = super().default_configuration()
        configuration["status_code"] = 404
        return configuration

    def build(self, contexts: Mapping[str, Context], handler: ContextHandler) -> Dict[str, Any]:
        return {"variant": self.uuid(), "status_code": int(self.configuration.get("status_code", 404))}


def register_builtin_variants(registry: PluginRegistry) -> PluginRegistry:
    registry.register("block_display", BlockVariant, "Block page", category="Layout")
    registry.register("http_status_code", HttpStatusCodeVariant, "HTTP status code", category="Response")
    return registry
