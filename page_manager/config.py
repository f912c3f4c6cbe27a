"""
Application configuration loading and merging.
Path: page_manager/config.py
"""
import collections.abc
import os
import re
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
import yaml

logger = structlog.get_logger()

DEFAULT_CONFIG: Dict[str, Any] = {
    "pages_directory": "pages",
    "logging": {
        "level": "INFO",
        "renderer": "console",
    },
    "entity_types": {
        "node": "Content",
        "user": "User",
        "taxonomy_term": "Taxonomy term",
    },
    # Extra type id -> parent type id links
    "types": {},
    # Entity fixtures: entity type -> id -> values
    "entities": {},
}


def get_by_path(data: Dict[str, Any], path: List[str]) -> Any:
    """
    Access dictionary data using a path list.

    Args:
        data: Dictionary to traverse
        path: List of keys forming the path

    Returns:
        Value at path or None if not found
    """
    current = data
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def get_value(data: Dict[str, Any], path_str: str) -> Any:
    """Access dictionary data using a dotted path string (e.g. "logging.level")."""
    return get_by_path(data, path_str.split('.'))


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge dictionaries.
    Rules:
    1. Override values take precedence.
    2. Dictionaries merged recursively.
    3. Lists from override replace lists from base.
    4. None values in override delete keys from base.
    """
    result = deepcopy(base)
    for key, value in override.items():
        if value is None:
            result.pop(key, None)
            continue
        if key in result and isinstance(result[key], collections.abc.Mapping) and isinstance(value, collections.abc.Mapping):
            result[key] = deep_merge(result[key], value)
        elif isinstance(value, Path):
            result[key] = str(value)
        else:
            result[key] = deepcopy(value)
    return result


def expand_env_vars(config: Any) -> Any:
    """Recursively expand ${VAR} references in string values."""
    if isinstance(config, dict):
        return {key: expand_env_vars(value) for key, value in config.items()}
    if isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    if isinstance(config, str) and "${" in config:
        return re.sub(r'\$\{([^}]+)\}', lambda m: os.environ.get(m.group(1), ""), config)
    return config


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML file, returning an empty dict when it is missing or invalid."""
    path = Path(path)
    try:
        logger.debug("config.load.starting", path=str(path))
        if not path.exists():
            logger.warning("config.load.file_not_found", path=str(path))
            return {}
        with open(path) as f:
            config = yaml.safe_load(f) or {}
        logger.debug("config.load.success", path=str(path), keys=list(config.keys()))
        return config
    except yaml.YAMLError as e:
        logger.error("config.load.yaml_error", path=str(path), error=str(e),
                     line=getattr(getattr(e, 'problem_mark', None), 'line', None))
        return {}


def load_app_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Build the effective application configuration.

    Defaults are overridden by the file at path (if any); relative
    pages_directory values are resolved against the file's directory.
    """
    config = deepcopy(DEFAULT_CONFIG)
    if path is None:
        return expand_env_vars(config)

    path = Path(path)
    config = expand_env_vars(deep_merge(config, load_config(path)))
    pages_directory = Path(config["pages_directory"])
    if not pages_directory.is_absolute():
        config["pages_directory"] = str(path.parent / pages_directory)
    logger.info("config.loaded", path=str(path), pages_directory=config["pages_directory"])
    return config
