# src/sourcebit_sample/cli.py
"""sourcebit-sample Command Line Interface.

Entry point for the sourcebit-sample CLI tool.
"""

import json
import os
import threading
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from sourcebit_sample import __version__
from sourcebit_sample.contracts import DataObject
from sourcebit_sample.core.config import SourcebitSettings, load_settings, read_env_file
from sourcebit_sample.core.context_store import FilesystemContextStore
from sourcebit_sample.core.logging import configure_logging
from sourcebit_sample.plugins.config_base import PluginConfigError
from sourcebit_sample.plugins.manager import PluginManager

app = typer.Typer(
    name="sourcebit-sample",
    help="sourcebit-sample: reference source plugin and harness.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sourcebit-sample version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """sourcebit-sample: reference source plugin and harness."""
    pass


def _load_settings_or_exit(settings: str) -> SourcebitSettings:
    try:
        return load_settings(Path(settings))
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _get_plugin_manager() -> PluginManager:
    manager = PluginManager()
    manager.register_builtin_plugins()
    return manager


def _echo_data(data: DataObject) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


@app.command()
def fetch(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Keep running and re-emit data whenever a plugin reports changes.",
    ),
    cache: str | None = typer.Option(
        None,
        "--cache",
        help="Context cache file (overrides cache_path in settings).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show plugin log messages.",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Render log messages as JSON lines on stderr.",
    ),
) -> None:
    """Bootstrap plugins, run the transform chain and print the data as JSON."""
    from sourcebit_sample.engine.orchestrator import Orchestrator, build_pipeline

    configure_logging(verbose=verbose, json_output=log_json)
    config = _load_settings_or_exit(settings)

    # Runtime parameters are only passed when given, so config values apply otherwise
    runtime_parameters: dict[str, Any] = {"watch": True} if watch else {}
    environ = {**os.environ, **read_env_file(config.env_file)}

    try:
        store = FilesystemContextStore(Path(cache) if cache else config.cache_path)
        pipeline = build_pipeline(
            _get_plugin_manager(),
            config,
            environ=environ,
            runtime_parameters=runtime_parameters,
        )
    except (PluginConfigError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    orchestrator = Orchestrator(pipeline, store)
    try:
        _echo_data(orchestrator.run())
        # Plugins may start watching from their settings-file options too
        if watch or orchestrator.watching:
            typer.echo("Watching for changes (Ctrl+C to stop)...", err=True)
            orchestrator.watch(_echo_data, stop_event=threading.Event())
    except KeyboardInterrupt:
        typer.echo("Stopped.", err=True)
    finally:
        orchestrator.close()


@app.command()
def setup(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Settings YAML file to create or update.",
    ),
    plugin: str | None = typer.Option(
        None,
        "--plugin",
        "-p",
        help="Plugin to set up (default: all registered plugins).",
    ),
    env_file: str = typer.Option(
        ".env",
        "--env-file",
        help="File that receives private option values.",
    ),
) -> None:
    """Run the interactive setup and write the plugin options."""
    from sourcebit_sample.engine.setup import apply_setup, run_setup, save_setup
    from sourcebit_sample.ui import make_setup_context

    configure_logging()
    manager = _get_plugin_manager()

    if plugin is not None:
        plugin_cls = manager.get_plugin_by_name(plugin)
        if plugin_cls is None:
            typer.echo(f"Error: Unknown plugin '{plugin}'", err=True)
            raise typer.Exit(1)
        plugin_classes = [plugin_cls]
    else:
        plugin_classes = manager.get_plugins()

    ctx = make_setup_context()
    for plugin_cls in plugin_classes:
        typer.echo(f"Setting up {plugin_cls.name}")
        result = run_setup(plugin_cls, ctx)
        save_setup(result, settings_path=Path(settings), env_path=Path(env_file))
        typer.echo(f"Saved options for {plugin_cls.name} to {settings}")
        if result.private:
            typer.echo(f"Saved private options to {env_file}")
        apply_setup(plugin_cls, result, ctx, environ=os.environ)


@app.command()
def plugins() -> None:
    """List registered plugins and their options."""
    manager = _get_plugin_manager()
    for spec in manager.get_specs():
        typer.echo(f"{spec.name} (v{spec.version})")
        for option in spec.option_names:
            marker = " [private]" if option in spec.private_options else ""
            typer.echo(f"  - {option}{marker}")


if __name__ == "__main__":
    app()
