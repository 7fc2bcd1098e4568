# src/sourcebit_sample/core/config.py
"""
Settings schema and loading for the sourcebit-sample harness.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

Private plugin options never live in the settings file; setup writes them to
a dotenv-style file which is merged over the process environment at fetch
time.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class SourcebitSettings(BaseModel):
    """Top-level harness configuration."""

    model_config = {"frozen": True}

    plugins: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-plugin option values, keyed by plugin name",
    )
    cache_path: Path = Field(
        default=Path(".sourcebit-cache.json"),
        description="JSON file persisting plugin contexts across runs",
    )
    env_file: Path = Field(
        default=Path(".env"),
        description="Dotenv file holding private option values",
    )

    @field_validator("plugins", mode="before")
    @classmethod
    def empty_blocks_mean_no_options(cls, v: Any) -> Any:
        """Treat `plugins:` or a plugin name with no body as empty."""
        if v is None:
            return {}
        if isinstance(v, Mapping):
            return {name: (block or {}) for name, block in v.items()}
        return v

    def options_for(self, plugin_name: str) -> dict[str, Any]:
        """Get the settings-file options for one plugin (empty if absent)."""
        return dict(self.plugins.get(plugin_name, {}))


def load_settings(config_path: Path) -> SourcebitSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SOURCEBIT_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated SourcebitSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SOURCEBIT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): v
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return SourcebitSettings(**raw_config)


def write_plugin_options(
    config_path: Path,
    plugin_name: str,
    options: Mapping[str, Any],
) -> None:
    """Store a plugin's options in the settings file.

    Other plugin blocks and top-level keys are preserved. The file is
    created if it does not exist.
    """
    raw: dict[str, Any] = {}
    if config_path.exists():
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}

    plugins = raw.get("plugins") or {}
    plugins[plugin_name] = dict(options)
    raw["plugins"] = plugins

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.safe_dump(raw, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )


def read_env_file(env_path: Path) -> dict[str, str]:
    """Read KEY=value lines from a dotenv-style file.

    Blank lines and lines starting with '#' are skipped. Matching single or
    double quotes around a value are stripped. A missing file yields {}.

    Raises:
        ValueError: If a non-comment line has no '='
    """
    if not env_path.exists():
        return {}

    values: dict[str, str] = {}
    for lineno, raw_line in enumerate(
        env_path.read_text(encoding="utf-8").splitlines(), start=1
    ):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ValueError(f"{env_path}:{lineno}: expected KEY=value, got {line!r}")
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def write_env_file(env_path: Path, values: Mapping[str, str]) -> None:
    """Merge values into a dotenv-style file, replacing existing keys."""
    merged = read_env_file(env_path)
    merged.update(values)
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.write_text(
        "".join(f"{key}={value}\n" for key, value in merged.items()),
        encoding="utf-8",
    )
