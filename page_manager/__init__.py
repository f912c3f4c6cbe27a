"""
Page manager: compose paths out of condition-gated variants, with request
contexts matched to plugin requirements by type.
"""

from .context import Context, ContextDefinition, ContextHandler, ContextRegistry, TypeRegistry
from .executable import PageBuild, PageExecutable
from .page import Page
from .plugins import PluginBag, PluginRegistry
from .selection import check_access, select_variant

__version__ = "0.1.0"

__all__ = ['Context', 'ContextDefinition', 'ContextHandler', 'ContextRegistry', 'TypeRegistry',
           'PageBuild', 'PageExecutable', 'Page', 'PluginBag', 'PluginRegistry',
           'check_access', 'select_variant']
