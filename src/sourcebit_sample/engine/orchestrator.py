# src/sourcebit_sample/engine/orchestrator.py
"""Orchestrator: plugin lifecycle management.

Coordinates:
- Option resolution and plugin instantiation
- Bootstrap (once per process)
- The transform chain (once initially, then once per refresh signal)
- Shutdown of plugin background work

Transforms only ever run on the thread that calls run()/transform()/watch().
Plugins signal changes from their own threads via refresh(), which only sets
an event; the watch loop picks it up and re-runs the chain.
"""

import os
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from sourcebit_sample.contracts import DataObject, empty_data
from sourcebit_sample.core.config import SourcebitSettings
from sourcebit_sample.core.context_store import ContextStore
from sourcebit_sample.core.options import resolve_options
from sourcebit_sample.plugins.base import BasePlugin
from sourcebit_sample.plugins.context import PluginContext
from sourcebit_sample.plugins.manager import PluginManager

logger = structlog.get_logger()


@dataclass
class PipelineConfig:
    """Instantiated plugins for a run, in transform-chain order."""

    plugins: list[BasePlugin]


def build_pipeline(
    manager: PluginManager,
    settings: SourcebitSettings,
    *,
    environ: Mapping[str, str] | None = None,
    runtime_parameters: Mapping[str, Any] | None = None,
) -> PipelineConfig:
    """Resolve options and instantiate plugins.

    Plugins named in the settings file run in that order. If the settings
    file names no plugins, every registered plugin runs with defaults.

    Args:
        manager: Manager with plugins registered
        settings: Loaded settings
        environ: Environment for env-sourced options (defaults to os.environ)
        runtime_parameters: Command-line parameters such as {"watch": True}

    Raises:
        ValueError: If settings name a plugin that is not registered
    """
    env = os.environ if environ is None else environ
    params = dict(runtime_parameters or {})

    if settings.plugins:
        plugin_classes = []
        for name in settings.plugins:
            plugin_cls = manager.get_plugin_by_name(name)
            if plugin_cls is None:
                available = [cls.name for cls in manager.get_plugins()]
                raise ValueError(
                    f"Unknown plugin '{name}'. Available plugins: {available}"
                )
            plugin_classes.append(plugin_cls)
    else:
        plugin_classes = manager.get_plugins()

    plugins = [
        plugin_cls(
            resolve_options(
                plugin_cls.options_schema,
                config=settings.options_for(plugin_cls.name),
                environ=env,
                runtime_parameters=params,
            )
        )
        for plugin_cls in plugin_classes
    ]
    return PipelineConfig(plugins=plugins)


class Orchestrator:
    """Drives plugins through bootstrap, transform and shutdown.

    Usage:
        orchestrator = Orchestrator(config, store)
        data = orchestrator.run()          # bootstrap + first transform
        orchestrator.watch(print_data)     # re-transform on every refresh
        orchestrator.close()
    """

    def __init__(self, config: PipelineConfig, store: ContextStore) -> None:
        self._config = config
        self._store = store
        self._refresh_event = threading.Event()
        self._bootstrapped = False
        self._handles: dict[str, Any] = {}
        self.transform_count = 0
        self._contexts = {
            plugin.name: PluginContext(
                plugin_name=plugin.name,
                options=plugin.options,
                store=store,
                refresh_callback=self.refresh,
            )
            for plugin in config.plugins
        }

    @property
    def plugins(self) -> list[BasePlugin]:
        return list(self._config.plugins)

    def context_for(self, plugin_name: str) -> PluginContext:
        """Get the context handed to a plugin's lifecycle calls."""
        return self._contexts[plugin_name]

    def bootstrap(self) -> None:
        """Bootstrap every plugin, in chain order.

        Raises:
            RuntimeError: If called more than once
        """
        if self._bootstrapped:
            raise RuntimeError("Plugins already bootstrapped")
        self._bootstrapped = True

        for plugin in self._config.plugins:
            logger.info("Bootstrapping plugin", plugin=plugin.name)
            handle = plugin.bootstrap(self._contexts[plugin.name])
            if handle is not None:
                self._handles[plugin.name] = handle

    @property
    def watching(self) -> bool:
        """Whether any plugin started background work during bootstrap.

        Such plugins will call refresh(), so the host should keep running
        and watch() for changes.
        """
        return bool(self._handles)

    def transform(self) -> DataObject:
        """Run the transform chain from an empty data object.

        Starting from empty buckets each time keeps repeated runs from
        duplicating objects.
        """
        data = empty_data()
        for plugin in self._config.plugins:
            data = plugin.transform(data, self._contexts[plugin.name])
        self.transform_count += 1
        logger.info(
            "Transform chain complete",
            models=len(data["models"]),
            objects=len(data["objects"]),
            run=self.transform_count,
        )
        return data

    def run(self) -> DataObject:
        """Bootstrap, then run the transform chain once."""
        self.bootstrap()
        return self.transform()

    def refresh(self) -> None:
        """Request a re-run of the transform chain. Never blocks."""
        self._refresh_event.set()

    def wait_for_refresh(self, timeout: float | None = None) -> bool:
        """Wait for a pending refresh and consume it.

        Returns:
            True if a refresh was pending, False on timeout
        """
        if not self._refresh_event.wait(timeout):
            return False
        self._refresh_event.clear()
        return True

    def watch(
        self,
        on_data: Callable[[DataObject], None],
        *,
        stop_event: threading.Event | None = None,
        poll_seconds: float = 0.5,
    ) -> None:
        """Re-run the transform chain after every refresh until stopped.

        Args:
            on_data: Called with each new data object
            stop_event: Set to end the loop; runs until interrupted if None
            poll_seconds: How often to check stop_event while idle
        """
        stop = stop_event or threading.Event()
        while not stop.is_set():
            if self.wait_for_refresh(poll_seconds):
                on_data(self.transform())

    def close(self) -> None:
        """Close every plugin, stopping background tasks.

        Every plugin gets close() even if an earlier one fails; the first
        failure is re-raised afterwards.
        """
        first_error: Exception | None = None
        for plugin in self._config.plugins:
            try:
                plugin.close()
            except Exception as e:
                logger.warning("Plugin close failed", plugin=plugin.name, error=str(e))
                if first_error is None:
                    first_error = e
        self._handles.clear()
        if first_error is not None:
            raise first_error
