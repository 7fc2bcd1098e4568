# tests/core/test_config.py
"""Tests for settings loading and the settings/env file writers."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from sourcebit_sample.core.config import (
    SourcebitSettings,
    load_settings,
    read_env_file,
    write_env_file,
    write_plugin_options,
)


class TestSourcebitSettings:
    """Settings model validation."""

    def test_defaults(self) -> None:
        settings = SourcebitSettings()
        assert settings.plugins == {}
        assert settings.cache_path == Path(".sourcebit-cache.json")
        assert settings.env_file == Path(".env")

    def test_settings_are_frozen(self) -> None:
        settings = SourcebitSettings()
        with pytest.raises(ValidationError):
            settings.cache_path = Path("other.json")  # type: ignore[misc]

    def test_plugin_without_options_gets_empty_block(self) -> None:
        settings = SourcebitSettings(plugins={"sample": None})  # type: ignore[dict-item]
        assert settings.plugins == {"sample": {}}

    def test_rejects_non_mapping_plugins(self) -> None:
        with pytest.raises(ValidationError):
            SourcebitSettings(plugins=["sample"])  # type: ignore[arg-type]

    def test_options_for_returns_copy(self) -> None:
        settings = SourcebitSettings(plugins={"sample": {"pointsForJane": 5}})
        options = settings.options_for("sample")
        options["pointsForJane"] = 100

        assert settings.options_for("sample") == {"pointsForJane": 5}
        assert settings.options_for("missing") == {}


class TestLoadSettings:
    """Loading via Dynaconf."""

    def test_loads_plugin_options(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sourcebit.yaml"
        config_file.write_text(
            "plugins:\n"
            "  sourcebit-sample-plugin:\n"
            "    pointsForJane: 5\n"
            "    pointsForJohn: 3\n"
        )

        settings = load_settings(config_file)

        assert settings.options_for("sourcebit-sample-plugin") == {
            "pointsForJane": 5,
            "pointsForJohn": 3,
        }

    def test_loads_cache_path(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sourcebit.yaml"
        config_file.write_text("cache_path: cache/contexts.json\n")

        settings = load_settings(config_file)

        assert settings.cache_path == Path("cache/contexts.json")

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_env_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "sourcebit.yaml"
        config_file.write_text("cache_path: from-file.json\n")
        monkeypatch.setenv("SOURCEBIT_CACHE_PATH", "from-env.json")

        settings = load_settings(config_file)

        assert settings.cache_path == Path("from-env.json")

    def test_invalid_settings_raise_validation_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sourcebit.yaml"
        config_file.write_text("plugins:\n  - sourcebit-sample-plugin\n")

        with pytest.raises(ValidationError):
            load_settings(config_file)


class TestWritePluginOptions:
    """Persisting setup results to the settings file."""

    def test_creates_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sourcebit.yaml"

        write_plugin_options(config_file, "sample", {"pointsForJane": 1})

        assert yaml.safe_load(config_file.read_text()) == {
            "plugins": {"sample": {"pointsForJane": 1}}
        }

    def test_preserves_other_keys(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sourcebit.yaml"
        config_file.write_text(
            "cache_path: c.json\nplugins:\n  other:\n    x: 1\n  sample:\n    old: true\n"
        )

        write_plugin_options(config_file, "sample", {"pointsForJohn": 15})

        raw = yaml.safe_load(config_file.read_text())
        assert raw["cache_path"] == "c.json"
        assert raw["plugins"]["other"] == {"x": 1}
        assert raw["plugins"]["sample"] == {"pointsForJohn": 15}

    def test_written_file_loads_back(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sourcebit.yaml"
        write_plugin_options(config_file, "sample", {"pointsForJane": 20})

        settings = load_settings(config_file)

        assert settings.options_for("sample") == {"pointsForJane": 20}


class TestEnvFile:
    """Dotenv-style private option storage."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert read_env_file(tmp_path / ".env") == {}

    def test_reads_values_and_skips_comments(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# secrets\n\nMY_SECRET=abc\nQUOTED=\"hello world\"\nEQ=a=b\n"
        )

        assert read_env_file(env_file) == {
            "MY_SECRET": "abc",
            "QUOTED": "hello world",
            "EQ": "a=b",
        }

    def test_malformed_line_raises(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("JUSTAKEY\n")

        with pytest.raises(ValueError, match="expected KEY=value"):
            read_env_file(env_file)

    def test_write_merges_existing(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("KEEP=1\nMY_SECRET=old\n")

        write_env_file(env_file, {"MY_SECRET": "new", "ADDED": "x"})

        assert read_env_file(env_file) == {"KEEP": "1", "MY_SECRET": "new", "ADDED": "x"}
