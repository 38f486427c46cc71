"""Design token scanning, alias resolution and export.

This package turns a design document's color styles and variable
collections into a categorized token tree, builds per-mode detail tables
for collections (resolving alias chains), and renders those tables as CSS,
SCSS, JSON or W3C design token documents.

Main components:
- models: Token tree, collection index and detail table models
- categorizer: Path parsing and primitive/semantic categorization
- resolver: Alias chain resolution across collections and modes
- tree: Scanning styles and color variables into a token tree
- detail: Collection index and per-mode detail tables
- colors / units: Color and unit converters
- exporters: CSS, SCSS, JSON and DTCG renderers
- storage: Persistence of the last known token tree
- manager: Request handling for the view layer
"""

__version__ = "1.0.0"

from .categorizer import camel_case, categorize, parse_path
from .colors import format_color, hex_to_rgba, rgba_to_hex
from .detail import build_detail, get_lite_collections
from .errors import (
    CollectionNotFoundError,
    ConfigurationError,
    InvalidColorError,
    InvalidRequestError,
    SourceNotFoundError,
    StorageError,
    TokenKitError,
    UnsupportedFormatError,
)
from .exporters import ExportOptions, render
from .manager import Response, TokenManager
from .models import (
    AliasMode,
    CollectionDetail,
    CollectionVariableDetail,
    ColorFormat,
    DesignTokens,
    ExportFormat,
    Mode,
    Token,
    TokenCategory,
    TokenType,
)
from .resolver import AliasResolver, resolve_variable_value
from .source import DocumentSource, SnapshotSource
from .storage import JSONFileStore, MemoryStore, TokenStorage
from .tree import scan_all_tokens
from .units import format_unit

__all__ = [
    "__version__",
    # Models
    "AliasMode",
    "CollectionDetail",
    "CollectionVariableDetail",
    "ColorFormat",
    "DesignTokens",
    "ExportFormat",
    "Mode",
    "Token",
    "TokenCategory",
    "TokenType",
    # Core transforms
    "categorize",
    "camel_case",
    "parse_path",
    "AliasResolver",
    "resolve_variable_value",
    "scan_all_tokens",
    "build_detail",
    "get_lite_collections",
    "format_color",
    "hex_to_rgba",
    "rgba_to_hex",
    "format_unit",
    "ExportOptions",
    "render",
    # Sources, storage and requests
    "DocumentSource",
    "SnapshotSource",
    "JSONFileStore",
    "MemoryStore",
    "TokenStorage",
    "Response",
    "TokenManager",
    # Errors
    "TokenKitError",
    "CollectionNotFoundError",
    "ConfigurationError",
    "InvalidColorError",
    "InvalidRequestError",
    "SourceNotFoundError",
    "StorageError",
    "UnsupportedFormatError",
]
