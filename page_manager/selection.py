"""
Variant selection and condition evaluation.
Path: page_manager/selection.py
"""

from typing import Any, Callable, Iterable, Optional

import structlog

from page_manager.context.handler import ContextHandler
from page_manager.context.registry import ContextRegistry
from page_manager.exceptions import ContextError

logger = structlog.get_logger()

# evaluator(condition, registry) -> bool
ConditionEvaluator = Callable[[Any, ContextRegistry], bool]


def make_condition_evaluator(handler: ContextHandler) -> ConditionEvaluator:
    """
    Build the default evaluator.

    A condition whose required slots cannot be filled from the registry fails;
    otherwise its (possibly negated) result is returned.
    """
    def evaluate_condition(condition: Any, registry: ContextRegistry) -> bool:
        condition.clear_context_values()
        try:
            handler.apply_context_mapping(condition, registry.get_contexts())
        except ContextError as e:
            logger.debug("selection.condition_unsatisfied",
                         condition=condition.uuid(),
                         plugin_id=condition.get_plugin_id(),
                         error=str(e))
            return False
        return condition.execute()

    return evaluate_condition


def check_access(conditions: Iterable[Any], registry: ContextRegistry,
                 evaluator: Optional[ConditionEvaluator] = None,
                 handler: Optional[ContextHandler] = None) -> bool:
    """
    True when every condition passes; an empty set of conditions passes.

    Without an evaluator, conditions are evaluated with handler (a default
    ContextHandler when omitted, which only knows the built-in types).
    """
    evaluator = evaluator or make_condition_evaluator(handler or ContextHandler())
    for condition in conditions:
        if not evaluator(condition, registry):
            return False
    return True


def select_variant(variants: Iterable[Any], registry: ContextRegistry,
                   evaluator: Optional[ConditionEvaluator] = None,
                   handler: Optional[ContextHandler] = None) -> Optional[Any]:
    """
    Return the first variant, in iteration order, whose selection conditions all pass.

    Args:
        variants: Variants in weight order (usually a sorted PluginBag)
        registry: Contexts available to the conditions
        evaluator: Condition evaluator, defaults to make_condition_evaluator(handler)
        handler: Context handler for the default evaluator

    Returns:
        The selected variant, or None when no variant is accessible
    """
    evaluator = evaluator or make_condition_evaluator(handler or ContextHandler())
    for variant in variants:
        if check_access(variant.get_selection_conditions(), registry, evaluator):
            logger.info("selection.variant_selected", variant=variant.uuid(), plugin_id=variant.get_plugin_id())
            return variant
        logger.debug("selection.variant_rejected", variant=variant.uuid())

    logger.info("selection.no_accessible_variant")
    return None
