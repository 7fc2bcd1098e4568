"""Built-in sample source plugin.

Generates two mock people and, in watch mode, awards them points over time.
"""

from sourcebit_sample.plugins.sample.plugin import (
    PLUGIN_NAME,
    SampleOptions,
    SamplePlugin,
)

__all__ = ["PLUGIN_NAME", "SampleOptions", "SamplePlugin"]
