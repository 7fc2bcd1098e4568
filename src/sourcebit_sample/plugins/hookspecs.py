# src/sourcebit_sample/plugins/hookspecs.py
"""pluggy hook specifications for sourcebit plugins.

Usage (implementing a plugin):
    from sourcebit_sample.plugins.hookspecs import hookimpl

    class MyPlugins:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def sourcebit_get_plugins(self):
            return [MyPlugin]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from sourcebit_sample.plugins.base import BasePlugin

# Project name for pluggy
PROJECT_NAME = "sourcebit"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class SourcebitPluginSpec:
    """Hook specifications for pipeline plugins."""

    @hookspec
    def sourcebit_get_plugins(self) -> list[type["BasePlugin"]]:  # type: ignore[empty-body]
        """Return plugin classes.

        Returns:
            List of plugin classes (not instances)
        """
