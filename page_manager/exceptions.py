"""
Exception types raised by the page manager.
Path: page_manager/exceptions.py
"""


class PageManagerError(Exception):
    """Base class for all page manager errors"""


class InstanceNotFoundError(PageManagerError, KeyError):
    """Raised when a plugin instance uuid is not present in a bag"""

    def __init__(self, instance_id: str, bag: str = "plugin"):
        self.instance_id = instance_id
        self.bag = bag
        super().__init__(f"No {bag} instance with id '{instance_id}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class PluginNotFoundError(PageManagerError, ValueError):
    """Raised when a plugin id is not registered"""


class PageNotFoundError(PageManagerError, KeyError):
    """Raised when a page id cannot be found in storage"""

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class ContextError(PageManagerError):
    """Raised when a context cannot be bound to a plugin slot"""


class ConfigurationError(PageManagerError, ValueError):
    """Raised when a page document or plugin configuration is invalid"""
