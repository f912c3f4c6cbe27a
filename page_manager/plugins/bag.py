"""
Ordered, lazily instantiated collection of configured plugins.
Path: page_manager/plugins/bag.py
"""

import uuid
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Union

import structlog

from page_manager.exceptions import InstanceNotFoundError
from .registry import PluginRegistry

logger = structlog.get_logger()


def generate_uuid() -> str:
    return str(uuid.uuid4())


class PluginBag:
    """
    Plugin instances keyed by uuid, built from stored configuration on first access.

    Iteration follows the current order of instance ids: configuration
    declaration order until sort() is called.
    """

    def __init__(self,
                 registry: PluginRegistry,
                 configurations: Optional[Union[Iterable[Dict[str, Any]], Mapping[str, Dict[str, Any]]]] = None,
                 uuid_generator: Optional[Callable[[], str]] = None,
                 name: str = "plugin"):
        """
        Initialize the bag.

        Args:
            registry: Registry used to instantiate plugins
            configurations: Plugin configurations, either a sequence or a
                mapping keyed by uuid
            uuid_generator: Callable returning fresh uuids
            name: Name used in logs and errors
        """
        self.registry = registry
        self.uuid_generator = uuid_generator or generate_uuid
        self.name = name
        self._configurations: Dict[str, Dict[str, Any]] = {}
        self._instances: Dict[str, Any] = {}
        self._instance_ids: List[str] = []

        if isinstance(configurations, Mapping):
            configurations = [dict(config, uuid=config.get("uuid") or key) for key, config in configurations.items()]
        for configuration in configurations or []:
            self.add_instance_id(configuration.get("uuid"), configuration)

    def add_instance_id(self, instance_id: Optional[str], configuration: Optional[Dict[str, Any]] = None) -> str:
        """
        Store a configuration under instance_id, generating one when omitted.

        Returns:
            The instance id used
        """
        instance_id = instance_id or self.uuid_generator()
        configuration = deepcopy(configuration or {})
        configuration["uuid"] = instance_id
        if instance_id not in self._configurations:
            self._instance_ids.append(instance_id)
        self._configurations[instance_id] = configuration
        self._instances.pop(instance_id, None)
        logger.debug("bag.instance_added", bag=self.name, instance_id=instance_id, plugin_id=configuration.get("id"))
        return instance_id

    def get(self, instance_id: str) -> Any:
        """
        Get the plugin instance for instance_id, instantiating it if needed.

        Raises:
            InstanceNotFoundError: If instance_id is not in the bag
        """
        if instance_id not in self._configurations:
            raise InstanceNotFoundError(instance_id, self.name)
        if instance_id not in self._instances:
            configuration = self._configurations[instance_id]
            self._instances[instance_id] = self.registry.instantiate(configuration.get("id"), configuration)
        return self._instances[instance_id]

    def has(self, instance_id: str) -> bool:
        return instance_id in self._configurations

    def remove_instance_id(self, instance_id: str) -> None:
        """
        Remove an instance and its configuration.

        Raises:
            InstanceNotFoundError: If instance_id is not in the bag
        """
        if instance_id not in self._configurations:
            raise InstanceNotFoundError(instance_id, self.name)
        del self._configurations[instance_id]
        self._instances.pop(instance_id, None)
        self._instance_ids.remove(instance_id)
        logger.debug("bag.instance_removed", bag=self.name, instance_id=instance_id)

    def set_configuration(self, instance_id: str, configuration: Dict[str, Any]) -> None:
        """Replace the stored configuration; the next get() rebuilds the instance."""
        if instance_id not in self._configurations:
            raise InstanceNotFoundError(instance_id, self.name)
        self.add_instance_id(instance_id, configuration)

    def sort(self) -> 'PluginBag':
        # sorted() is stable, so equal weights keep their relative order
        self._instance_ids = sorted(self._instance_ids, key=self._weight_of)
        return self

    def instance_ids(self) -> List[str]:
        return list(self._instance_ids)

    def get_configuration(self) -> List[Dict[str, Any]]:
        """Configurations in iteration order, including changes made on live instances."""
        configurations = []
        for instance_id in self._instance_ids:
            if instance_id in self._instances:
                configurations.append(self._instances[instance_id].get_configuration())
            else:
                configurations.append(deepcopy(self._configurations[instance_id]))
        return configurations

    def count(self) -> int:
        return len(self._instance_ids)

    def __len__(self) -> int:
        return len(self._instance_ids)

    def __contains__(self, instance_id: str) -> bool:
        return self.has(instance_id)

    def __iter__(self) -> Iterator[Any]:
        for instance_id in list(self._instance_ids):
            yield self.get(instance_id)

    def _weight_of(self, instance_id: str) -> int:
        if instance_id in self._instances:
            return self._instances[instance_id].weight()
        return self._configurations[instance_id].get("weight", 0) or 0


class BlockPluginBag(PluginBag):
    """Plugin bag of blocks that can group its blocks by region."""

    def get_all_by_region(self) -> Dict[Optional[str], List[Any]]:
        """Blocks grouped by their configured region, in bag order."""
        regions: Dict[Optional[str], List[Any]] = {}
        for block in self:
            regions.setdefault(block.region(), []).append(block)
        return regions

    def get_configuration_by_id(self) -> Dict[str, Dict[str, Any]]:
        return {configuration["uuid"]: configuration for configuration in self.get_configuration()}
