"""Shared contracts for data crossing the plugin/host boundary.

Import pattern:
    from sourcebit_sample.contracts import Entry, PluginState, DataObject
"""

from sourcebit_sample.contracts.data import (
    DataObject,
    Entry,
    ModelDescriptor,
    NormalizedObject,
    PluginState,
    empty_data,
)
from sourcebit_sample.contracts.setup import Answers, PromptFn, Question, Spinner

__all__ = [
    # Data
    "DataObject",
    "Entry",
    "ModelDescriptor",
    "NormalizedObject",
    "PluginState",
    "empty_data",
    # Setup
    "Answers",
    "PromptFn",
    "Question",
    "Spinner",
]
