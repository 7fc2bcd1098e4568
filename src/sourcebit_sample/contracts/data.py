# src/sourcebit_sample/contracts/data.py
"""Plugin state and normalized data contracts.

Entry and PluginState are the plugin-owned records. They are persisted by
the context store as plain JSON-compatible dicts, so both carry to_dict()
and from_dict() for the round trip.

ModelDescriptor and the DataObject/NormalizedObject TypedDicts describe the
orchestrator-facing shape produced by transform().
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict


@dataclass
class Entry:
    """One record owned by a plugin.

    Attributes:
        id: Stable identifier, unique within the plugin's entry list
        fields: Field name -> value mapping
    """

    id: str
    fields: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted representation."""
        return {"id": self.id, "fields": dict(self.fields)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create from the persisted representation."""
        return cls(id=str(data["id"]), fields=dict(data["fields"]))


@dataclass
class PluginState:
    """Persisted context owned exclusively by a plugin instance.

    Entries keep creation order across runs.
    """

    entries: list[Entry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted representation."""
        return {"entries": [entry.to_dict() for entry in self.entries]}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PluginState | None":
        """Create from the persisted representation.

        Returns None when nothing has been persisted yet.
        """
        if data is None:
            return None
        return cls(entries=[Entry.from_dict(e) for e in data.get("entries") or []])


@dataclass(frozen=True)
class ModelDescriptor:
    """Static metadata describing the objects a source plugin produces."""

    source: str
    model_name: str
    model_label: str
    project_id: str
    project_environment: str
    field_names: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the orchestrator's camelCase model representation."""
        return {
            "source": self.source,
            "modelName": self.model_name,
            "modelLabel": self.model_label,
            "projectId": self.project_id,
            "projectEnvironment": self.project_environment,
            "fieldNames": list(self.field_names),
        }


# Flattened entry fields plus "id" and "__metadata"; field names vary by model
NormalizedObject = dict[str, Any]


class DataObject(TypedDict):
    """Shared data buckets passed along the transform chain."""

    models: list[dict[str, Any]]
    objects: list[NormalizedObject]


def empty_data() -> DataObject:
    """Return a fresh data object with empty buckets."""
    return {"models": [], "objects": []}
