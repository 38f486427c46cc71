"""Base class and registry for token exporters.

Exporters turn a collection's detail table into a text artifact. Value
rendering is shared; each exporter supplies its alias reference syntax and
its document layout.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..colors import format_color
from ..errors import UnsupportedFormatError
from ..models import (
    NUMERIC_TYPES,
    AliasMode,
    CollectionVariableDetail,
    ExportFormat,
    Mode,
    TokenType,
    is_reference_value,
)
from ..units import DEFAULT_BASE_FONT_SIZE, format_number, format_unit, to_number

_WHITESPACE = re.compile(r"\s+")

# Rendered value: text, a DTCG reference object, or None for "no value"
RenderedValue = str | dict[str, str] | None

NULL_LITERAL = "null"


def dash_name(name: str) -> str:
    """``"Color/Brand Primary"`` -> ``"color-brand-primary"``."""
    return _WHITESPACE.sub("-", name.lower().replace("/", "-"))


def dot_name(name: str) -> str:
    """``"Color/Brand Primary"`` -> ``"color.brand-primary"``."""
    return _WHITESPACE.sub("-", name.lower().replace("/", "."))


def slug(segment: str) -> str:
    """Lowercase a single name segment and replace whitespace with dashes."""
    return _WHITESPACE.sub("-", segment.lower())


@dataclass
class ExportOptions:
    """Options controlling an export.

    ``unit_per_variable`` maps variable ids to a unit that overrides
    ``unit_format`` for that variable.
    """

    format: ExportFormat | str = ExportFormat.CSS
    modes: list[Mode] = field(default_factory=list)
    alias_mode: AliasMode | str = AliasMode.RESOLVED
    color_format: str = "hex"
    unit_format: str = "px"
    base_font_size: float = DEFAULT_BASE_FONT_SIZE
    unit_per_variable: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.alias_mode, str):
            self.alias_mode = AliasMode(self.alias_mode)

    @property
    def format_name(self) -> str:
        """Export format as a plain string."""
        if isinstance(self.format, ExportFormat):
            return self.format.value
        return str(self.format)


class Exporter(ABC):
    """Abstract base class for export formats."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Format identifier, e.g. ``"css"``."""
        ...

    @abstractmethod
    def render_reference(self, target_name: str) -> str | dict[str, str]:
        """Render an alias to ``target_name`` in this format's syntax."""
        ...

    @abstractmethod
    def render_document(
        self,
        variables: list[CollectionVariableDetail],
        options: ExportOptions,
        collection_name: str,
    ) -> str:
        """Render the full export document, one section per mode."""
        ...

    def render_value(
        self,
        variable: CollectionVariableDetail,
        mode_id: str,
        options: ExportOptions,
    ) -> RenderedValue:
        """Render one variable's value for one mode.

        Returns None when there is no value: the mode is missing, or the
        alias could not be resolved in resolved mode.
        """
        token = variable.values_by_mode.get(mode_id)
        if token is None:
            return None

        use_resolved = options.alias_mode == AliasMode.RESOLVED
        candidate: Any = token.value
        if use_resolved and token.resolved_value is not None:
            candidate = token.resolved_value

        if is_reference_value(candidate):
            if not use_resolved:
                return self.render_reference(candidate[1:-1])
            # Broken or cyclic alias
            return None

        normalization = token.normalization

        if variable.type == TokenType.COLOR:
            color_format = options.color_format
            if normalization is not None and normalization.color_format:
                color_format = normalization.color_format
            return format_color(str(candidate), color_format)

        if variable.type in NUMERIC_TYPES and to_number(candidate) is not None:
            unit = options.unit_per_variable.get(variable.id)
            if unit is None and normalization is not None and normalization.unit:
                unit = normalization.unit
            base_font_size = options.base_font_size
            if normalization is not None and normalization.base_font_size:
                base_font_size = normalization.base_font_size
            return format_unit(candidate, unit or options.unit_format, base_font_size)

        if isinstance(candidate, str):
            return candidate
        return format_number(candidate)

    def render_text(
        self,
        variable: CollectionVariableDetail,
        mode_id: str,
        options: ExportOptions,
    ) -> str:
        """Render a value as text, with ``null`` for no value."""
        value = self.render_value(variable, mode_id, options)
        if value is None:
            return NULL_LITERAL
        return str(value)


class ExporterRegistry:
    """Registry mapping format names to exporters."""

    def __init__(self) -> None:
        self._exporters: dict[str, Exporter] = {}

    def register(self, exporter: Exporter) -> None:
        """Register an exporter, replacing any with the same format name."""
        self._exporters[exporter.format_name] = exporter

    def get(self, export_format: ExportFormat | str) -> Exporter:
        """Get the exporter for a format.

        Raises:
            UnsupportedFormatError: If no exporter handles the format.
        """
        name = (
            export_format.value
            if isinstance(export_format, ExportFormat)
            else str(export_format)
        )
        exporter = self._exporters.get(name)
        if exporter is None:
            raise UnsupportedFormatError(name, self.formats)
        return exporter

    @property
    def formats(self) -> list[str]:
        """Registered format names."""
        return list(self._exporters)

    def render(
        self,
        variables: list[CollectionVariableDetail],
        options: ExportOptions,
        collection_name: str,
    ) -> str:
        """Render with the exporter selected by ``options.format``."""
        return self.get(options.format).render_document(
            variables, options, collection_name
        )


_default_registry: ExporterRegistry | None = None


def get_default_registry() -> ExporterRegistry:
    """Get the registry with the CSS, SCSS, JSON and DTCG exporters."""
    global _default_registry
    if _default_registry is None:
        from .css import CSSExporter
        from .dtcg import DTCGExporter
        from .json_tokens import JSONExporter
        from .scss import SCSSExporter

        _default_registry = ExporterRegistry()
        _default_registry.register(CSSExporter())
        _default_registry.register(SCSSExporter())
        _default_registry.register(JSONExporter())
        _default_registry.register(DTCGExporter())
    return _default_registry
