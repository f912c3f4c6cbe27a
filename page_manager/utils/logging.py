"""
Logging setup for the page manager.
Path: page_manager/utils/logging.py
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog


def configure_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure structlog from the ``logging`` section of the app configuration.

    Keys: ``level`` (standard level name) and ``renderer`` ("console" or "json").
    Log output goes to stderr so command output on stdout stays clean.
    """
    config = config or {}
    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    renderer = (structlog.processors.JSONRenderer()
                if config.get("renderer") == "json"
                else structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
