# src/sourcebit_sample/plugins/config_base.py
"""Base class for typed plugin options.

Resolved options arrive as a plain dict keyed by the names declared in the
plugin's options_schema. Plugins parse them into a PluginConfig subclass to
get:
- Type coercion (environment values arrive as strings)
- Rejection of undeclared keys
- Clear error messages

Example usage:
    class MyOptions(PluginConfig):
        api_key: str | None = Field(default=None, alias="apiKey")
        watch: bool = False

    opts = MyOptions.from_dict(resolved)
"""

from typing import Any, Self

from pydantic import BaseModel, ValidationError


class PluginConfigError(Exception):
    """Raised when plugin options are invalid."""

    pass


class PluginConfig(BaseModel):
    """Base class for typed plugin options.

    Field aliases carry the camelCase option names used in settings files;
    Python code uses the snake_case attribute names.
    """

    model_config = {
        "extra": "forbid",  # Reject unknown options
        "frozen": True,
        "populate_by_name": True,
    }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create options from dict with clear error on validation failure.

        None values are dropped first so the field default applies.

        Args:
            config: Resolved option values.

        Returns:
            Validated options instance.

        Raises:
            PluginConfigError: If options are invalid.
        """
        supplied = {k: v for k, v in config.items() if v is not None}
        try:
            return cls(**supplied)
        except ValidationError as e:
            raise PluginConfigError(
                f"Invalid configuration for {cls.__name__}: {e}"
            ) from e
