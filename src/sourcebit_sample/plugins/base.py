# src/sourcebit_sample/plugins/base.py
"""Base class for plugin implementations.

A plugin declares its options as a class attribute and implements the
lifecycle methods the host calls:

1. __init__(options) - resolved option values
2. bootstrap(ctx) - once per process, before the first transform
3. transform(data, ctx) - once initially and once per refresh()
4. close() - when the host shuts down

Setup hooks (get_setup, get_options_from_setup) are classmethods: they run
before any options exist, so there is no instance to call them on.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from sourcebit_sample.contracts import Answers, DataObject, Question
from sourcebit_sample.core.options import OptionSpec
from sourcebit_sample.plugins.context import PluginContext, SetupContext

# What get_setup() may return: the questions themselves, or a runner that
# drives its own interaction and returns the answers
SetupStep = list[Question] | Callable[[], Answers]


class BasePlugin(ABC):
    """Base class for source plugins.

    Subclass and implement transform() (and usually bootstrap()).

    Example:
        class CounterPlugin(BasePlugin):
            name = "counter"
            options_schema = {"start": OptionSpec(default=0)}

            def bootstrap(self, ctx: PluginContext) -> None:
                if ctx.get_plugin_context() is None:
                    ctx.set_plugin_context({"count": self.options["start"]})

            def transform(self, data: DataObject, ctx: PluginContext) -> DataObject:
                count = ctx.get_plugin_context()["count"]
                return {**data, "objects": [*data["objects"], {"count": count}]}
    """

    name: ClassVar[str]
    plugin_version: ClassVar[str] = "0.0.0"
    options_schema: ClassVar[dict[str, OptionSpec]] = {}

    def __init__(self, options: dict[str, Any]) -> None:
        """Initialize with resolved options."""
        self.options = options

    def bootstrap(self, ctx: PluginContext) -> Any:  # noqa: B027
        """Called once when the plugin starts.

        Override to load or create state. May return a stop handle for any
        background work it starts.
        """

    @abstractmethod
    def transform(self, data: DataObject, ctx: PluginContext) -> DataObject:
        """Return a new data object with this plugin's contribution.

        Must not mutate `data`.
        """
        ...

    def close(self) -> None:  # noqa: B027
        """Stop background work and release resources."""

    # === Setup Hooks ===

    @classmethod
    def get_setup(cls, ctx: SetupContext) -> SetupStep | None:
        """Describe the interactive setup for this plugin.

        Returns None when the plugin has nothing to ask.
        """
        return None

    @classmethod
    def get_options_from_setup(cls, answers: Answers, ctx: SetupContext) -> dict[str, Any]:
        """Turn setup answers into the options block to persist.

        Default: answers are stored unchanged.
        """
        return dict(answers)
