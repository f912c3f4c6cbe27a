"""
Tests for the PluginRegistry
Path: tests/plugins/test_registry.py
"""

import unittest

from page_manager.context.context import ContextDefinition
from page_manager.exceptions import PluginNotFoundError
from page_manager.plugins.base import PluginBase
from page_manager.plugins.blocks import EntityViewBlock, register_builtin_blocks
from page_manager.plugins.registry import PluginRegistry


class TestPluginRegistry(unittest.TestCase):
    """Test cases for the PluginRegistry class"""

    def setUp(self):
        self.registry = PluginRegistry("block")
        register_builtin_blocks(self.registry, {"node": "Content", "user": "User"})

    def test_derived_definitions_replace_base(self):
        definitions = self.registry.get_definitions()

        self.assertNotIn("entity_view", definitions)
        self.assertIn("entity_view:node", definitions)
        self.assertIn("entity_view:user", definitions)

        node_view = definitions["entity_view:node"]
        self.assertEqual(node_view.label, "Entity view (Content)")
        self.assertEqual(node_view.derivative_of, "entity_view")
        self.assertEqual(node_view.context["entity"].type_id, "entity:node")
        self.assertIs(node_view.plugin_class, EntityViewBlock)

    def test_instantiate_derived_plugin(self):
        block = self.registry.instantiate("entity_view:user", {"uuid": "b1", "region": "top"})

        self.assertIsInstance(block, EntityViewBlock)
        self.assertEqual(block.get_plugin_id(), "entity_view:user")
        self.assertEqual(block.get_configuration()["view_mode"], "default")
        self.assertEqual(block.region(), "top")
        self.assertEqual(set(block.get_context_definitions()), {"entity"})

    def test_unknown_plugin(self):
        with self.assertRaises(PluginNotFoundError) as context:
            self.registry.instantiate("nope")
        self.assertIn("Block plugin 'nope' not found", str(context.exception))

    def test_sorted_definitions(self):
        labels = [definition.label for definition in self.registry.get_sorted_definitions()]
        self.assertEqual(labels, ["Markup", "Entity view (Content)", "Entity view (User)"])

    def test_registering_again_overwrites(self):
        self.registry.register("markup", PluginBase, "Plain")
        definition = self.registry.get_definition("markup")
        self.assertEqual(definition.label, "Plain")
        self.assertIs(definition.plugin_class, PluginBase)

    def test_context_definitions_accept_models(self):
        self.registry.register("typed", PluginBase, "Typed",
                               context={"slot": ContextDefinition(type="string", required=False)})
        self.assertFalse(self.registry.get_definition("typed").context["slot"].required)

    def test_dependencies_are_passed_to_constructors(self):
        received = {}

        class NeedsService(PluginBase):
            def __init__(self, configuration, plugin_id, definition, service=None):
                received["service"] = service
                super().__init__(configuration, plugin_id, definition)

        registry = PluginRegistry("test", dependencies={"service": "svc"})
        registry.register("needs_service", NeedsService, "Needs service")
        registry.instantiate("needs_service")

        self.assertEqual(received, {"service": "svc"})


if __name__ == '__main__':
    unittest.main()
