"""
Context module: named runtime values, the per-execution registry, type
compatibility and the providers that publish contexts.
"""

from .assignment import build_context_assignment_options, submit_context_assignment
from .context import Context, ContextDefinition
from .handler import ContextHandler
from .registry import ContextRegistry
from .types import TypeRegistry

__all__ = ['Context', 'ContextDefinition', 'ContextHandler', 'ContextRegistry', 'TypeRegistry',
           'build_context_assignment_options', 'submit_context_assignment']
