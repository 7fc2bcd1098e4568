# src/sourcebit_sample/core/options.py
"""Plugin option declarations and resolution.

Every plugin declares its options as a mapping of name -> OptionSpec. At run
time each option is resolved from an ordered list of sources; the first
source that has a value wins:

    1. runtime parameter (e.g. ``--watch``), if the option declares one
    2. configuration file value
    3. environment variable, if the option declares one
    4. declared default

Resolution performs no validation. Typed parsing is the plugin's job
(see PluginConfig).
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

# Sentinel distinguishing "source has no value" from an explicit None
_MISSING: Any = object()


class OptionSpec(BaseModel):
    """Declaration of a single plugin option.

    Example:
        options_schema = {
            "apiKey": OptionSpec(env="API_KEY", private=True),
            "watch": OptionSpec(default=False, runtime_parameter="watch"),
        }
    """

    model_config = {"frozen": True, "extra": "forbid"}

    default: Any = None
    env: str | None = None
    private: bool = False
    runtime_parameter: str | None = None


OptionSource = Callable[[str, OptionSpec], Any]


def _from_runtime(runtime_parameters: Mapping[str, Any]) -> OptionSource:
    def lookup(name: str, spec: OptionSpec) -> Any:
        if spec.runtime_parameter is None:
            return _MISSING
        return runtime_parameters.get(spec.runtime_parameter, _MISSING)

    return lookup


def _from_config(config: Mapping[str, Any]) -> OptionSource:
    def lookup(name: str, spec: OptionSpec) -> Any:
        return config.get(name, _MISSING)

    return lookup


def _from_env(environ: Mapping[str, str]) -> OptionSource:
    def lookup(name: str, spec: OptionSpec) -> Any:
        if spec.env is None:
            return _MISSING
        return environ.get(spec.env, _MISSING)

    return lookup


def _from_default(name: str, spec: OptionSpec) -> Any:
    return spec.default


def option_sources(
    *,
    config: Mapping[str, Any],
    environ: Mapping[str, str],
    runtime_parameters: Mapping[str, Any],
) -> list[OptionSource]:
    """Build the ordered source list, highest precedence first."""
    return [
        _from_runtime(runtime_parameters),
        _from_config(config),
        _from_env(environ),
        _from_default,
    ]


def resolve_option(name: str, spec: OptionSpec, sources: list[OptionSource]) -> Any:
    """Resolve one option against the ordered sources.

    A runtime parameter or config value of None counts as "not supplied";
    None never masks a lower-precedence value.

    Args:
        name: Option name as declared in the schema
        spec: The option's declaration
        sources: Ordered sources from option_sources()

    Returns:
        First value found, or the declared default
    """
    for source in sources:
        value = source(name, spec)
        if value is not _MISSING and value is not None:
            return value
    return spec.default


def resolve_options(
    schema: Mapping[str, OptionSpec],
    *,
    config: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    runtime_parameters: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Resolve every option in a schema.

    Keys in config that the schema does not declare are dropped.

    Args:
        schema: Option name -> OptionSpec
        config: Values from the plugin's block in the settings file
        environ: Environment mapping (defaults to empty, not os.environ)
        runtime_parameters: Parameters from the command line

    Returns:
        Dict with one resolved value per declared option
    """
    sources = option_sources(
        config=config or {},
        environ=environ or {},
        runtime_parameters=runtime_parameters or {},
    )
    return {name: resolve_option(name, spec, sources) for name, spec in schema.items()}


def split_private(
    schema: Mapping[str, OptionSpec],
    options: Mapping[str, Any],
) -> tuple[dict[str, Any], dict[str, str]]:
    """Split options into settings-file values and env-file values.

    Private options are keyed by their environment variable name so they
    resolve through the env source on the next run. A private option
    without an ``env`` name cannot be stored anywhere and is rejected.

    Returns:
        (public options by option name, private values by env var name)

    Raises:
        ValueError: If a private option declares no env variable
    """
    public: dict[str, Any] = {}
    private: dict[str, str] = {}
    for name, value in options.items():
        spec = schema.get(name)
        if spec is not None and spec.private:
            if spec.env is None:
                raise ValueError(
                    f"Private option '{name}' must declare an env variable"
                )
            if value is not None:
                private[spec.env] = str(value)
        else:
            public[name] = value
    return public, private
