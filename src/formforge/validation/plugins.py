"""In-process registry of remote validation plugins.

A field lists plugin names under ``validate.plugins``. At validation time the
context's ``validate_remote`` callback receives those names together with the
value. ``PluginRegistry.validate_plugins`` is such a callback, backed by plain
async functions registered by the application.

Example:
    plugins = PluginRegistry()

    @plugins.plugin("kvk-number")
    async def check_kvk(value):
        if not await kvk_client.exists(value):
            return "Unknown KvK number."
        return None

    result = await validate_submission(components, values,
                                       validate_remote=plugins.validate_plugins)
"""

import logging
from typing import Any, Awaitable, Callable

from formforge.validation.types import ConfigurationError

logger = logging.getLogger(__name__)

# plugin(value) -> error message, or None when the value is accepted
Plugin = Callable[[Any], Awaitable[str | None]]


class PluginRegistry:
    """Maps plugin names to async check functions."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}

    def register(self, name: str, plugin: Plugin) -> None:
        """Register a plugin by name.

        Idempotent - re-registering the same name is a no-op.
        """
        if name in self._plugins:
            return
        self._plugins[name] = plugin
        logger.debug("Registered validation plugin '%s'", name)

    def plugin(self, name: str) -> Callable[[Plugin], Plugin]:
        """Decorator form of ``register``."""

        def decorator(fn: Plugin) -> Plugin:
            self.register(name, fn)
            return fn

        return decorator

    def get(self, name: str) -> Plugin:
        """Get a registered plugin by name.

        Raises:
            ConfigurationError: If the plugin is not registered
        """
        if name not in self._plugins:
            raise ConfigurationError(
                f"Validation plugin '{name}' is not registered. "
                "Available plugins: " + ", ".join(self.list_registered())
            )
        return self._plugins[name]

    def is_registered(self, name: str) -> bool:
        return name in self._plugins

    def list_registered(self) -> list[str]:
        return sorted(self._plugins)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._plugins.clear()

    async def validate_plugins(self, plugins: list[str], value: Any) -> str | None:
        """Run the named plugins in order and return the first error message.

        Every name is resolved before any plugin runs, so a misconfigured
        field fails the same way whatever the value.

        Raises:
            ConfigurationError: If any named plugin is not registered
        """
        resolved = [(name, self.get(name)) for name in plugins]
        for name, plugin in resolved:
            message = await plugin(value)
            if message:
                logger.debug("Plugin '%s' rejected the value", name)
                return message
        return None
