"""Plugin system: base class, contexts, typed options and pluggy registration.

- Base class: BasePlugin with bootstrap/transform/close and setup hooks
- Contexts: PluginContext (lifecycle calls), SetupContext (interactive setup)
- Config: PluginConfig for typed option parsing
- Manager/Hookspecs: pluggy-based registration and lookup
"""

from sourcebit_sample.plugins.base import BasePlugin, SetupStep
from sourcebit_sample.plugins.config_base import PluginConfig, PluginConfigError
from sourcebit_sample.plugins.context import PluginContext, SetupContext
from sourcebit_sample.plugins.hookspecs import hookimpl, hookspec
from sourcebit_sample.plugins.manager import PluginManager, PluginSpec

__all__ = [
    # Base class
    "BasePlugin",
    "SetupStep",
    # Config
    "PluginConfig",
    "PluginConfigError",
    # Context
    "PluginContext",
    "SetupContext",
    # Hookspecs
    "hookimpl",
    "hookspec",
    # Manager
    "PluginManager",
    "PluginSpec",
]
