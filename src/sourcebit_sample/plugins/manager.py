# src/sourcebit_sample/plugins/manager.py
"""Plugin manager for registration and lookup.

Uses pluggy for hook-based plugin registration.
"""

from dataclasses import dataclass
from typing import Any

import pluggy

from sourcebit_sample.plugins.base import BasePlugin
from sourcebit_sample.plugins.hookspecs import PROJECT_NAME, SourcebitPluginSpec


@dataclass(frozen=True)
class PluginSpec:
    """Registration record for a plugin, used for listings."""

    name: str
    version: str
    option_names: tuple[str, ...]
    private_options: tuple[str, ...]

    @classmethod
    def from_plugin(cls, plugin_cls: type[BasePlugin]) -> "PluginSpec":
        """Create spec from plugin class.

        Raises:
            ValueError: If plugin is missing the required 'name' attribute
        """
        try:
            name = plugin_cls.name
        except AttributeError:
            raise ValueError(
                f"Plugin {plugin_cls.__name__} must define 'name' attribute. "
                f"Add: name = 'your-plugin-name' to the class."
            ) from None

        schema = plugin_cls.options_schema
        return cls(
            name=name,
            version=plugin_cls.plugin_version,
            option_names=tuple(schema),
            private_options=tuple(n for n, spec in schema.items() if spec.private),
        )


class PluginManager:
    """Manages plugin registration and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        plugin_cls = manager.get_plugin_by_name("sourcebit-sample-plugin")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SourcebitPluginSpec)

        # Map name to plugin class for duplicate detection
        self._plugins: dict[str, type[BasePlugin]] = {}

    def register_builtin_plugins(self) -> None:
        """Register all built-in plugin hook implementers."""
        from sourcebit_sample.plugins.sample.hookimpl import builtin_sample

        self.register(builtin_sample)

    def register(self, plugin: Any) -> None:
        """Register a hook implementer.

        Args:
            plugin: Object implementing sourcebit_get_plugins
        """
        self._pm.register(plugin)
        try:
            self._refresh_cache()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_cache(self) -> None:
        """Refresh the name -> class cache from hooks.

        Raises:
            ValueError: If two plugins share a name
        """
        new_plugins: dict[str, type[BasePlugin]] = {}

        # pluggy calls hookimpls in LIFO order; reverse for registration order
        for plugins in reversed(self._pm.hook.sourcebit_get_plugins()):
            for cls in plugins:
                name = cls.name
                if name in new_plugins:
                    raise ValueError(
                        f"Duplicate plugin name: '{name}'. "
                        f"Already registered by {new_plugins[name].__name__}"
                    )
                new_plugins[name] = cls

        self._plugins = new_plugins

    def get_plugins(self) -> list[type[BasePlugin]]:
        """Get all registered plugins, in registration order."""
        return list(self._plugins.values())

    def get_plugin_by_name(self, name: str) -> type[BasePlugin] | None:
        """Get plugin by name."""
        return self._plugins.get(name)

    def get_specs(self) -> list[PluginSpec]:
        """Get registration records for all plugins."""
        return [PluginSpec.from_plugin(cls) for cls in self._plugins.values()]
