# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/
"""

import os
from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from sourcebit_sample.core.context_store import InMemoryContextStore
from sourcebit_sample.plugins.context import PluginContext

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Helpers
# =============================================================================


class RecordingLogger:
    """Stand-in for a bound structlog logger that keeps messages."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def info(self, event: str, **kw: Any) -> None:
        self.messages.append(event)


class CountingRefresh:
    """Refresh callback that counts calls."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def make_plugin_context(
    plugin_name: str = "sourcebit-sample-plugin",
    *,
    store: InMemoryContextStore | None = None,
    options: dict[str, Any] | None = None,
) -> tuple[PluginContext, InMemoryContextStore, RecordingLogger, CountingRefresh]:
    """Build a PluginContext backed by an in-memory store and recorders."""
    store = store if store is not None else InMemoryContextStore()
    logger = RecordingLogger()
    refresh = CountingRefresh()
    ctx = PluginContext(
        plugin_name=plugin_name,
        options=options or {},
        store=store,
        logger=logger,
        refresh_callback=refresh,
    )
    return ctx, store, logger, refresh


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo configure_logging() calls made by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_context() -> Any:
    """Factory fixture for make_plugin_context()."""
    return make_plugin_context
