"""Host document boundary.

The design tool's live style/variable store is an external collaborator.
The core reads it only through ``DocumentSource``, which returns raw
records. ``SnapshotSource`` serves those records from a JSON snapshot of
the document:

    {
      "fileKey": "abc123",
      "paintStyles": [{"id", "name", "description", "paints": [...]}],
      "variables": [{"id", "name", "resolvedType", "variableCollectionId",
                     "valuesByMode": {...}}],
      "collections": [{"id", "name", "modes": [...], "defaultModeId"}]
    }
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import SourceNotFoundError
from .models import Mode, Primitive

ALIAS_TYPE = "VARIABLE_ALIAS"
SOLID_PAINT = "SOLID"


@dataclass(frozen=True)
class RGBA:
    """Color record with channels in the 0-1 range."""

    r: float
    g: float
    b: float
    a: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RGBA":
        """Create from a ``{r, g, b, a?}`` record."""
        return cls(r=data["r"], g=data["g"], b=data["b"], a=data.get("a"))


@dataclass(frozen=True)
class VariableAlias:
    """Pointer from one variable value to another variable."""

    id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VariableAlias":
        """Create from a ``{type: VARIABLE_ALIAS, id}`` record."""
        return cls(id=data["id"])


# A variable's value for one mode
RawValue = Primitive | RGBA | VariableAlias


def parse_raw_value(value: Any) -> RawValue:
    """Convert a host JSON value into a typed raw value."""
    if isinstance(value, dict):
        if value.get("type") == ALIAS_TYPE:
            return VariableAlias.from_dict(value)
        if "r" in value:
            return RGBA.from_dict(value)
    return value


@dataclass(frozen=True)
class Paint:
    """A paint entry of a paint style."""

    type: str
    color: RGBA | None = None
    opacity: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Paint":
        """Create from dictionary."""
        color = data.get("color")
        return cls(
            type=data["type"],
            color=RGBA.from_dict(color) if color is not None else None,
            opacity=data.get("opacity"),
        )


@dataclass(frozen=True)
class PaintStyle:
    """A named paint style."""

    id: str
    name: str
    paints: tuple[Paint, ...] = ()
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PaintStyle":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            paints=tuple(Paint.from_dict(p) for p in data.get("paints", [])),
            description=data.get("description") or None,
        )


@dataclass
class RawVariable:
    """A variable record as returned by the host document."""

    id: str
    name: str
    resolved_type: str  # COLOR | FLOAT | STRING | BOOLEAN
    variable_collection_id: str
    values_by_mode: dict[str, RawValue] = field(default_factory=dict)
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawVariable":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            resolved_type=data["resolvedType"],
            variable_collection_id=data["variableCollectionId"],
            values_by_mode={
                mode_id: parse_raw_value(value)
                for mode_id, value in data.get("valuesByMode", {}).items()
            },
            description=data.get("description") or None,
        )


@dataclass
class RawCollection:
    """A variable collection record as returned by the host document."""

    id: str
    name: str
    modes: list[Mode] = field(default_factory=list)
    default_mode_id: str | None = None
    variable_ids: list[str] = field(default_factory=list)

    def mode_name(self, mode_id: str) -> str | None:
        """Display name of a mode of this collection."""
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode.name
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawCollection":
        """Create from dictionary."""
        modes = [Mode.from_dict(m) for m in data.get("modes", [])]
        return cls(
            id=data["id"],
            name=data["name"],
            modes=modes,
            default_mode_id=data.get("defaultModeId")
            or (modes[0].mode_id if modes else None),
            variable_ids=list(data.get("variableIds", [])),
        )


class DocumentSource(ABC):
    """Read-only accessor for the host document's styles and variables."""

    @abstractmethod
    def get_paint_styles(self) -> list[PaintStyle]:
        """Return all local paint styles."""
        ...

    @abstractmethod
    def get_variables(self) -> list[RawVariable]:
        """Return all local variables."""
        ...

    @abstractmethod
    def get_collections(self) -> list[RawCollection]:
        """Return all local variable collections."""
        ...

    def get_collection(self, collection_id: str) -> RawCollection | None:
        """Return one collection by id, or None if it doesn't exist."""
        for collection in self.get_collections():
            if collection.id == collection_id:
                return collection
        return None

    @property
    def file_key(self) -> str | None:
        """Identifier of the host document, if known."""
        return None


class SnapshotSource(DocumentSource):
    """Document source backed by an in-memory snapshot."""

    def __init__(
        self,
        paint_styles: list[PaintStyle] | None = None,
        variables: list[RawVariable] | None = None,
        collections: list[RawCollection] | None = None,
        file_key: str | None = None,
    ):
        self._paint_styles = list(paint_styles or [])
        self._variables = list(variables or [])
        self._collections = list(collections or [])
        self._file_key = file_key

        # Collections may omit variableIds; derive them from the variables
        for collection in self._collections:
            if not collection.variable_ids:
                collection.variable_ids = [
                    v.id for v in self._variables if v.variable_collection_id == collection.id
                ]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SnapshotSource":
        """Create from a snapshot dictionary."""
        return cls(
            paint_styles=[PaintStyle.from_dict(s) for s in data.get("paintStyles", [])],
            variables=[RawVariable.from_dict(v) for v in data.get("variables", [])],
            collections=[RawCollection.from_dict(c) for c in data.get("collections", [])],
            file_key=data.get("fileKey"),
        )

    @classmethod
    def from_file(cls, path: Path | str) -> "SnapshotSource":
        """Load a snapshot from a JSON file.

        Raises:
            SourceNotFoundError: If the file is missing or not valid JSON.
        """
        path = Path(path)
        if not path.exists():
            raise SourceNotFoundError(str(path))
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SourceNotFoundError(str(path), str(e)) from e
        return cls.from_dict(data)

    def get_paint_styles(self) -> list[PaintStyle]:
        return list(self._paint_styles)

    def get_variables(self) -> list[RawVariable]:
        return list(self._variables)

    def get_collections(self) -> list[RawCollection]:
        return list(self._collections)

    @property
    def file_key(self) -> str | None:
        return self._file_key
