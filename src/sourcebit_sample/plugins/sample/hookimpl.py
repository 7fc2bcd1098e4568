"""Hook implementation for the built-in sample plugin."""

from typing import Any

from sourcebit_sample.plugins.hookspecs import hookimpl


class SourcebitBuiltinSample:
    """Hook implementer for the built-in sample plugin."""

    @hookimpl
    def sourcebit_get_plugins(self) -> list[type[Any]]:
        """Return built-in plugin classes."""
        from sourcebit_sample.plugins.sample.plugin import SamplePlugin

        return [SamplePlugin]


# Singleton instance for registration
builtin_sample = SourcebitBuiltinSample()
