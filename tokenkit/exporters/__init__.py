"""Exporters for rendering collection detail tables as text.

This package provides one exporter per target format:
- CSS custom properties (css.py)
- SCSS variables (scss.py)
- Plain JSON (json_tokens.py)
- W3C Design Tokens Format (dtcg.py)
"""

from ..models import CollectionVariableDetail
from ..tokens_logging import LogCategory, get_category_logger
from .base import (
    Exporter,
    ExporterRegistry,
    ExportOptions,
    dash_name,
    dot_name,
    get_default_registry,
    slug,
)
from .css import CSSExporter
from .dtcg import DTCGExporter
from .json_tokens import JSONExporter
from .scss import SCSSExporter

logger = get_category_logger(LogCategory.EXPORT)


def render(
    variables: list[CollectionVariableDetail],
    options: ExportOptions,
    collection_name: str,
) -> str:
    """Render a collection's variables in the format selected by ``options``.

    Raises:
        UnsupportedFormatError: If the format has no exporter.
    """
    output = get_default_registry().render(variables, options, collection_name)
    logger.info(
        f"Exported {len(variables)} variables from {collection_name} "
        f"as {options.format_name} ({len(options.modes)} modes)"
    )
    return output


__all__ = [
    "Exporter",
    "ExporterRegistry",
    "ExportOptions",
    "get_default_registry",
    "render",
    "dash_name",
    "dot_name",
    "slug",
    "CSSExporter",
    "SCSSExporter",
    "JSONExporter",
    "DTCGExporter",
]
