"""
JSON Schema validation for page documents.
Path: page_manager/utils/schema_validation.py
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
from jsonschema import Draft7Validator

from page_manager.exceptions import ConfigurationError

logger = structlog.get_logger()

PAGE_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "page_v1.json"


class SchemaValidator:
    """
    Validates page documents against the page JSON schema.
    Loaded schemas are cached per path.
    """

    _schema_cache: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def _load_schema(cls, schema_path: Union[str, Path]) -> Dict[str, Any]:
        schema_path_str = str(schema_path)
        if schema_path_str not in cls._schema_cache:
            with open(schema_path, 'r') as f:
                cls._schema_cache[schema_path_str] = json.load(f)
        return cls._schema_cache[schema_path_str]

    @classmethod
    def get_validation_errors(cls, instance: Dict[str, Any],
                              schema_path: Optional[Union[str, Path]] = None) -> List[Dict[str, Any]]:
        """
        Validate an instance and return its errors (empty if valid).

        Each error has ``path`` (dotted location), ``message`` and ``schema_path``.
        """
        schema = cls._load_schema(schema_path or PAGE_SCHEMA_PATH)
        validator = Draft7Validator(schema)
        errors = []
        for error in sorted(validator.iter_errors(instance), key=lambda e: list(e.path)):
            errors.append({
                "path": ".".join(str(p) for p in error.path),
                "message": error.message,
                "schema_path": ".".join(str(p) for p in error.schema_path),
            })
        return errors

    @classmethod
    def validate_page(cls, page_values: Dict[str, Any],
                      schema_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Validate a page document.

        Returns:
            The document, unchanged, when valid

        Raises:
            ConfigurationError: If the document does not match the schema
        """
        errors = cls.get_validation_errors(page_values, schema_path)
        if errors:
            logger.error("schema.validation_failed",
                         schema_type="page",
                         page=page_values.get("id") if isinstance(page_values, dict) else None,
                         errors=errors)
            first = errors[0]
            location = first["path"] or "<root>"
            raise ConfigurationError(f"Invalid page document at {location}: {first['message']}")
        logger.debug("schema.validation_passed", schema_type="page", page=page_values.get("id"))
        return page_values
