"""
Tests for page document validation.
Path: tests/test_schema_validation.py
"""

import unittest

from page_manager.exceptions import ConfigurationError
from page_manager.utils.schema_validation import SchemaValidator


class TestSchemaValidator(unittest.TestCase):

    def test_valid_document(self):
        document = {
            "id": "about",
            "path": "/about",
            "variants": [{"id": "block_display", "blocks": {"b": {"id": "markup", "region": None}}}],
            "access": [{"id": "user_role", "negate": True, "roles": ["editor"]}],
        }
        self.assertEqual(SchemaValidator.get_validation_errors(document), [])
        self.assertIs(SchemaValidator.validate_page(document), document)

    def test_missing_required_fields(self):
        errors = SchemaValidator.get_validation_errors({"label": "Nothing"})
        messages = " ".join(error["message"] for error in errors)
        self.assertIn("'id' is a required property", messages)
        self.assertIn("'path' is a required property", messages)

    def test_error_locations(self):
        errors = SchemaValidator.get_validation_errors({
            "id": "about",
            "path": "/about",
            "variants": [{"id": "block_display", "weight": "heavy"}],
        })
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0]["path"], "variants.0.weight")

    def test_condition_without_plugin_id(self):
        with self.assertRaises(ConfigurationError) as cm:
            SchemaValidator.validate_page({"id": "about", "path": "/about", "access": [{"negate": True}]})
        self.assertIn("access.0", str(cm.exception))

    def test_invalid_id(self):
        with self.assertRaises(ConfigurationError):
            SchemaValidator.validate_page({"id": "About Us", "path": "/about"})
