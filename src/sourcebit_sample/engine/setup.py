# src/sourcebit_sample/engine/setup.py
"""Interactive setup driver.

Runs a plugin's setup hooks and turns the result into what gets written to
disk: public options for the settings file and private options for the
env file. After each plugin is set up it runs once in memory so plugins
later in the chain see the data it produces (SetupContext.data).
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from sourcebit_sample.contracts import Answers, DataObject, empty_data
from sourcebit_sample.core.config import write_env_file, write_plugin_options
from sourcebit_sample.core.context_store import InMemoryContextStore
from sourcebit_sample.core.options import resolve_options, split_private
from sourcebit_sample.plugins.base import BasePlugin
from sourcebit_sample.plugins.context import PluginContext, SetupContext

logger = structlog.get_logger()


@dataclass(frozen=True)
class SetupResult:
    """Outcome of one plugin's setup.

    Attributes:
        plugin_name: Plugin that was set up
        answers: Raw answers from the operator
        options: Public options for the settings file
        private: Private values for the env file, keyed by env variable
    """

    plugin_name: str
    answers: Answers
    options: dict[str, Any]
    private: dict[str, str]


def collect_answers(plugin_cls: type[BasePlugin], ctx: SetupContext) -> Answers:
    """Run the question phase of a plugin's setup.

    get_setup() may return a question list (asked through ctx.prompt), a
    runner callable (which asks its own questions), or None.
    """
    step = plugin_cls.get_setup(ctx)
    if step is None:
        return {}
    if isinstance(step, list):
        return ctx.prompt(step)
    runner: Callable[[], Answers] = step
    return runner()


def run_setup(plugin_cls: type[BasePlugin], ctx: SetupContext) -> SetupResult:
    """Run both setup phases for a plugin.

    Raises:
        ValueError: If the plugin returns a private option with no env name
    """
    answers = collect_answers(plugin_cls, ctx)
    options = plugin_cls.get_options_from_setup(answers, ctx)
    public, private = split_private(plugin_cls.options_schema, options)
    logger.info(
        "Setup complete",
        plugin=plugin_cls.name,
        options=sorted(public),
        private=sorted(private),
    )
    return SetupResult(
        plugin_name=plugin_cls.name,
        answers=answers,
        options=public,
        private=private,
    )


def save_setup(result: SetupResult, *, settings_path: Path, env_path: Path) -> None:
    """Write a setup result to the settings file and env file.

    The env file is only touched when there are private values.
    """
    write_plugin_options(settings_path, result.plugin_name, result.options)
    if result.private:
        write_env_file(env_path, result.private)


def apply_setup(
    plugin_cls: type[BasePlugin],
    result: SetupResult,
    ctx: SetupContext,
    *,
    environ: Mapping[str, str] | None = None,
) -> DataObject:
    """Run a freshly set-up plugin once so later plugins see its data.

    The plugin is bootstrapped against a throwaway in-memory store with the
    options just collected, its transform output becomes ctx.data, and it is
    closed again. Nothing is written to the context cache.
    """
    options = resolve_options(
        plugin_cls.options_schema,
        config=result.options,
        environ={**(environ or {}), **result.private},
    )
    plugin = plugin_cls(options)
    plugin_ctx = PluginContext(
        plugin_name=plugin_cls.name,
        options=options,
        store=InMemoryContextStore(),
    )
    try:
        plugin.bootstrap(plugin_ctx)
        data = plugin.transform(
            ctx.data if ctx.data is not None else empty_data(), plugin_ctx
        )
    finally:
        plugin.close()

    ctx.data = data
    return data
