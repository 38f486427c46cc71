"""Design token data models.

This module defines the data structures shared by the scanner, the
collection detail builder and the exporters: tokens, nested token sets,
the categorized ``DesignTokens`` tree, lightweight collection indexes and
the per-collection detail table.

Wire dictionaries use the camelCase keys of the host document and the
view layer (``resolvedValue``, ``valuesByMode``, ``$extensions``).
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Terminal, non-referential value held by a token or host variable
Primitive = str | int | float | bool

# Nested mapping of path segment -> TokenSet | Token
TokenSet = dict[str, Any]


class TokenType(Enum):
    """Token type vocabulary."""

    COLOR = "color"
    SPACING = "spacing"
    TYPOGRAPHY = "typography"
    BORDER_RADIUS = "borderRadius"
    NUMBER = "number"


# Types rendered through the unit converter
NUMERIC_TYPES = frozenset(
    [
        TokenType.NUMBER,
        TokenType.SPACING,
        TokenType.BORDER_RADIUS,
        TokenType.TYPOGRAPHY,
    ]
)


class TokenCategory(Enum):
    """Top-level categories of the design token tree."""

    PRIMITIVES = "primitives"  # Raw values, palettes, scales
    SEMANTIC = "semantic"  # Design decisions, mostly aliases
    COMPONENTS = "components"  # Component-specific tokens
    UNCATEGORIZED = "uncategorized"  # Fallback during scan


class ColorFormat(Enum):
    """Color output formats."""

    HEX = "hex"
    RGB = "rgb"
    RGBA = "rgba"
    HSL = "hsl"
    HSLA = "hsla"
    OKLCH = "oklch"


class UnitFormat(Enum):
    """Well-known unit output formats.

    Any other unit string ("%", "vw", "pt") is passed through verbatim.
    """

    PX = "px"
    REM = "rem"
    EM = "em"
    NONE = "none"


class ExportFormat(Enum):
    """Export document formats."""

    CSS = "css"
    SCSS = "scss"
    JSON = "json"
    DTCG = "dtcg"


class AliasMode(Enum):
    """How alias values are rendered on export."""

    RESOLVED = "resolved"  # Fully dereferenced primitive
    ALIAS = "alias"  # Format-specific symbolic reference


def is_reference_value(value: Any) -> bool:
    """Check whether a raw value is an alias pointer like ``{color.blue}``."""
    return isinstance(value, str) and value.startswith("{") and value.endswith("}")


@dataclass
class NormalizationOptions:
    """Per-token export override; ``None`` fields use the global setting."""

    color_format: str | None = None
    unit: str | None = None
    base_font_size: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting unset fields."""
        data: dict[str, Any] = {}
        if self.color_format is not None:
            data["colorFormat"] = self.color_format
        if self.unit is not None:
            data["unit"] = self.unit
        if self.base_font_size is not None:
            data["baseFontSize"] = self.base_font_size
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NormalizationOptions":
        """Create from dictionary."""
        return cls(
            color_format=data.get("colorFormat"),
            unit=data.get("unit"),
            base_font_size=data.get("baseFontSize"),
        )


@dataclass
class TokenExtensions:
    """Source metadata linking a token back to the host document."""

    variable_id: str | None = None
    style_id: str | None = None
    original_path: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ``$extensions`` dictionary."""
        data: dict[str, Any] = {}
        if self.variable_id is not None:
            data["com.figma.variable-id"] = self.variable_id
        if self.style_id is not None:
            data["com.figma.style-id"] = self.style_id
        if self.original_path is not None:
            data["originalPath"] = list(self.original_path)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenExtensions":
        """Create from a ``$extensions`` dictionary."""
        original_path = data.get("originalPath")
        return cls(
            variable_id=data.get("com.figma.variable-id"),
            style_id=data.get("com.figma.style-id"),
            original_path=list(original_path) if original_path is not None else None,
        )


@dataclass
class Token:
    """A named design value.

    A token whose ``value`` has the form ``{dot.path}`` is a reference
    (alias); ``resolved_value`` then holds the fully dereferenced primitive,
    or ``None`` when resolution failed.
    """

    value: Primitive
    type: TokenType
    resolved_value: Primitive | None = None
    description: str | None = None
    normalization: NormalizationOptions | None = None
    extensions: TokenExtensions | None = None

    @property
    def is_reference(self) -> bool:
        """True when the value is an alias pointer."""
        return is_reference_value(self.value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"value": self.value, "type": self.type.value}
        if self.resolved_value is not None:
            data["resolvedValue"] = self.resolved_value
        if self.description is not None:
            data["description"] = self.description
        if self.normalization is not None:
            data["normalization"] = self.normalization.to_dict()
        if self.extensions is not None:
            data["$extensions"] = self.extensions.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Create from dictionary."""
        normalization = data.get("normalization")
        extensions = data.get("$extensions")
        return cls(
            value=data["value"],
            type=TokenType(data["type"]),
            resolved_value=data.get("resolvedValue"),
            description=data.get("description"),
            normalization=(
                NormalizationOptions.from_dict(normalization)
                if normalization is not None
                else None
            ),
            extensions=(
                TokenExtensions.from_dict(extensions) if extensions is not None else None
            ),
        )


def is_token_node(node: Any) -> bool:
    """Check whether a raw dictionary node is a token leaf.

    A node is a leaf iff it carries both ``value`` and ``type``.
    """
    return isinstance(node, dict) and "value" in node and "type" in node


def token_set_to_dict(token_set: TokenSet) -> dict[str, Any]:
    """Serialize a nested token set."""
    result: dict[str, Any] = {}
    for key, node in token_set.items():
        if isinstance(node, Token):
            result[key] = node.to_dict()
        else:
            result[key] = token_set_to_dict(node)
    return result


def token_set_from_dict(data: dict[str, Any]) -> TokenSet:
    """Deserialize a nested token set, skipping non-object entries."""
    result: TokenSet = {}
    for key, node in data.items():
        if is_token_node(node):
            result[key] = Token.from_dict(node)
        elif isinstance(node, dict):
            result[key] = token_set_from_dict(node)
    return result


def iter_token_set(
    token_set: TokenSet, prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], Token]]:
    """Yield ``(path, token)`` for every leaf, depth first."""
    for key, node in token_set.items():
        path = (*prefix, key)
        if isinstance(node, Token):
            yield path, node
        else:
            yield from iter_token_set(node, path)


@dataclass
class DesignTokens:
    """Root token tree.

    Keeps raw values (``primitives``) apart from design decisions
    (``semantic``); ``components`` and ``uncategorized`` complete the
    reserved categories. Other top-level keys are allowed.
    """

    sets: dict[str, TokenSet] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "DesignTokens":
        """Create a tree with all reserved categories present and empty."""
        return cls(sets={category.value: {} for category in TokenCategory})

    def category(self, name: str | TokenCategory, create: bool = False) -> TokenSet | None:
        """Get the token set for a top-level category."""
        key = name.value if isinstance(name, TokenCategory) else name
        if key not in self.sets and create:
            self.sets[key] = {}
        return self.sets.get(key)

    def get(self, path: list[str] | tuple[str, ...]) -> "Token | TokenSet | None":
        """Get the node at a path, or None if any segment is missing."""
        current: Any = self.sets
        for part in path:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return None
        return current

    def set(self, path: list[str] | tuple[str, ...], token: Token) -> None:
        """Set a token at a path, creating (or replacing) intermediate sets."""
        if not path:
            raise ValueError("Token path must not be empty")

        current: dict[str, Any] = self.sets
        for part in path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[path[-1]] = token

    def iter_tokens(self) -> Iterator[tuple[tuple[str, ...], Token]]:
        """Yield ``(path, token)`` for every token in the tree."""
        for key, token_set in self.sets.items():
            yield from iter_token_set(token_set, (key,))

    def remove_empty_categories(self) -> None:
        """Drop top-level categories that hold no entries."""
        for key in [k for k, v in self.sets.items() if not v]:
            del self.sets[key]

    @property
    def total_tokens(self) -> int:
        """Total number of tokens in the tree."""
        return sum(1 for _ in self.iter_tokens())

    @property
    def is_empty(self) -> bool:
        """True when the tree holds no tokens."""
        return self.total_tokens == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {key: token_set_to_dict(value) for key, value in self.sets.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DesignTokens":
        """Create from dictionary."""
        return cls(
            sets={
                key: token_set_from_dict(value)
                for key, value in data.items()
                if isinstance(value, dict)
            }
        )


@dataclass(frozen=True)
class Mode:
    """A named variant dimension of a collection (e.g. light/dark)."""

    mode_id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"modeId": self.mode_id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Mode":
        """Create from dictionary."""
        return cls(mode_id=data["modeId"], name=data["name"])


@dataclass(frozen=True)
class LiteCollection:
    """Lightweight index entry for a variable collection."""

    id: str
    name: str
    modes: tuple[Mode, ...] = ()
    variable_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "modes": [m.to_dict() for m in self.modes],
            "variableIds": list(self.variable_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LiteCollection":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            modes=tuple(Mode.from_dict(m) for m in data.get("modes", [])),
            variable_ids=tuple(data.get("variableIds", [])),
        )


@dataclass(frozen=True)
class LiteVariable:
    """Lightweight index entry for a variable."""

    id: str
    name: str
    resolved_type: str  # COLOR | FLOAT | STRING | BOOLEAN
    collection_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "resolvedType": self.resolved_type,
            "collectionId": self.collection_id,
        }


@dataclass
class ScannedVariableData:
    """Result of the light "load variables" scan."""

    collections: list[LiteCollection] = field(default_factory=list)
    variables: list[LiteVariable] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "collections": [c.to_dict() for c in self.collections],
            "variables": [v.to_dict() for v in self.variables],
        }


@dataclass
class CollectionVariableDetail:
    """One variable of a collection with its per-mode values.

    ``is_alias`` is True when the direct value at any mode is an alias.
    """

    id: str
    name: str
    type: TokenType
    values_by_mode: dict[str, Token] = field(default_factory=dict)
    is_alias: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "valuesByMode": {k: v.to_dict() for k, v in self.values_by_mode.items()},
            "isAlias": self.is_alias,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionVariableDetail":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            type=TokenType(data["type"]),
            values_by_mode={
                k: Token.from_dict(v) for k, v in data.get("valuesByMode", {}).items()
            },
            is_alias=data.get("isAlias", False),
            description=data.get("description"),
        )


@dataclass
class CollectionDetail:
    """Flat per-variable, per-mode value table for one collection."""

    collection_id: str
    name: str
    modes: list[Mode] = field(default_factory=list)
    variables: list[CollectionVariableDetail] = field(default_factory=list)

    def has_aliases(self) -> bool:
        """Check if any variable holds an alias at any mode."""
        return any(
            token.is_reference
            for variable in self.variables
            for token in variable.values_by_mode.values()
        )

    def has_color_variables(self) -> bool:
        """Check if the collection has any color variables."""
        return any(v.type == TokenType.COLOR for v in self.variables)

    def has_numeric_variables(self) -> bool:
        """Check if the collection has any number, spacing or radius variables."""
        return any(
            v.type in (TokenType.NUMBER, TokenType.SPACING, TokenType.BORDER_RADIUS)
            for v in self.variables
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "collectionId": self.collection_id,
            "name": self.name,
            "modes": [m.to_dict() for m in self.modes],
            "variables": [v.to_dict() for v in self.variables],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionDetail":
        """Create from dictionary."""
        return cls(
            collection_id=data["collectionId"],
            name=data["name"],
            modes=[Mode.from_dict(m) for m in data.get("modes", [])],
            variables=[
                CollectionVariableDetail.from_dict(v) for v in data.get("variables", [])
            ],
        )


@dataclass
class TokenMetadata:
    """Metadata stored alongside the last saved token tree."""

    version: str
    last_synced: int  # epoch milliseconds
    file_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"version": self.version, "lastSynced": self.last_synced}
        if self.file_key is not None:
            data["figmaFileKey"] = self.file_key
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenMetadata":
        """Create from dictionary."""
        return cls(
            version=data.get("version", "1.0.0"),
            last_synced=int(data.get("lastSynced", 0)),
            file_key=data.get("figmaFileKey"),
        )
