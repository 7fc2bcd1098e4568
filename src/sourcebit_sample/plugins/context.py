# src/sourcebit_sample/plugins/context.py
"""Plugin execution and setup contexts.

PluginContext carries everything a plugin needs during bootstrap() and
transform(): its resolved options, access to its persisted context, a
logger and the refresh signal. SetupContext carries the operator-facing
capabilities used during interactive setup.

Both are plain dataclasses built by the host, so tests can construct them
directly with an InMemoryContextStore and a stub refresh callback.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sourcebit_sample.contracts import DataObject, PromptFn, Spinner
    from sourcebit_sample.core.context_store import ContextStore


def _noop_refresh() -> None:
    pass


@dataclass
class PluginContext:
    """Context passed to every plugin lifecycle call.

    Example:
        def bootstrap(self, ctx: PluginContext) -> None:
            state = ctx.get_plugin_context()
            if state is None:
                ctx.set_plugin_context({"entries": []})
                ctx.log("Generated 0 entries")
    """

    plugin_name: str
    options: dict[str, Any]
    store: "ContextStore"

    # structlog logger; bound with plugin=<name> in __post_init__ when None
    logger: Any = None
    refresh_callback: Callable[[], None] = field(default=_noop_refresh)

    def __post_init__(self) -> None:
        if self.logger is None:
            from sourcebit_sample.core.logging import get_logger

            self.logger = get_logger(plugin=self.plugin_name)

    def get_plugin_context(self) -> dict[str, Any] | None:
        """Get this plugin's persisted context (None before first write)."""
        return self.store.get(self.plugin_name)

    def set_plugin_context(self, context: dict[str, Any]) -> None:
        """Replace this plugin's persisted context."""
        self.store.set(self.plugin_name, context)

    def log(self, message: str) -> None:
        """Log a message attributed to this plugin."""
        self.logger.info(message)

    def refresh(self) -> None:
        """Ask the host to re-run the transform chain.

        Fire-and-forget: returns immediately.
        """
        self.refresh_callback()


@dataclass
class SetupContext:
    """Context passed to a plugin's interactive setup hooks.

    Attributes:
        prompt: Asks a list of questions, returns answers keyed by name
        spinner: Factory for a progress indicator with start()/succeed()
        data: Data object produced by plugins earlier in the chain
        shared: Scratch mapping shared by all plugins during one setup run
    """

    prompt: "PromptFn"
    spinner: Callable[[str], "Spinner"]
    data: "DataObject | None" = None
    shared: dict[str, Any] = field(default_factory=dict)

    def get_setup_context(self) -> dict[str, Any]:
        """Get the mapping shared between plugins during setup."""
        return self.shared

    def set_setup_context(self, values: dict[str, Any]) -> None:
        """Replace the mapping shared between plugins during setup."""
        self.shared = dict(values)
