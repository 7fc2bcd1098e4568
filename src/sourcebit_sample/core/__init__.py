# src/sourcebit_sample/core/__init__.py
"""Core infrastructure: configuration, option resolution, context store, scheduling, logging."""

from sourcebit_sample.core.config import (
    SourcebitSettings,
    load_settings,
    read_env_file,
    write_env_file,
    write_plugin_options,
)
from sourcebit_sample.core.context_store import (
    ContextStore,
    FilesystemContextStore,
    InMemoryContextStore,
)
from sourcebit_sample.core.logging import (
    configure_logging,
    get_logger,
)
from sourcebit_sample.core.options import (
    OptionSpec,
    resolve_option,
    resolve_options,
    split_private,
)
from sourcebit_sample.core.scheduler import PeriodicTask

__all__ = [
    # Config
    "SourcebitSettings",
    "load_settings",
    "read_env_file",
    "write_env_file",
    "write_plugin_options",
    # Context store
    "ContextStore",
    "FilesystemContextStore",
    "InMemoryContextStore",
    # Logging
    "configure_logging",
    "get_logger",
    # Options
    "OptionSpec",
    "resolve_option",
    "resolve_options",
    "split_private",
    # Scheduling
    "PeriodicTask",
]
