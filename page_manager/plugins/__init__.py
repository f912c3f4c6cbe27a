"""
Plugin implementations and their containers.

This package contains:
- PluginRegistry: plugin catalog and instantiation by id
- PluginBag / BlockPluginBag: ordered, lazily instantiated plugin collections
- Conditions, blocks and variants shipped with the page manager
"""

from .bag import BlockPluginBag, PluginBag
from .base import ContextAwarePluginBase, PluginBase, PluginDefinition
from .registry import PluginRegistry

__all__ = ['BlockPluginBag', 'PluginBag', 'ContextAwarePluginBase', 'PluginBase',
           'PluginDefinition', 'PluginRegistry']
