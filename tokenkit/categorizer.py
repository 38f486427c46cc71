"""Path categorization heuristics for style and variable names.

Turns a raw name such as ``"Blue/500"`` or ``"Text/Primary"`` (plus an
optional collection name) into a token category and a normalized
camelCase path. Categorization is total: unmatched names fall through to
``uncategorized``.
"""

import re

from .models import TokenCategory, TokenType

PRIMITIVE_KEYWORDS = ("primitive", "palette", "core", "scale", "base", "ref", "reference")
SEMANTIC_KEYWORDS = ("semantic", "system", "usage", "alias", "light", "dark", "mode")
SEMANTIC_PREFIXES = ("text", "bg", "background", "surface", "border", "fg", "foreground")

COLOR_SEGMENT = "color"

_PATH_DELIMITERS = re.compile(r"[/.\-]+")
_SCALE_SUFFIX = re.compile(r"\d{2,3}$")
_WORD_START = re.compile(r"(?:^\w|[A-Z]|\b\w)", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def categorize(name: str, collection_context: str = "") -> TokenCategory:
    """Determine the token category of a style or variable name.

    Keywords are matched against ``"<collection>/<name>"``; the numeric
    suffix and prefix heuristics look at the name alone.
    """
    full_string = f"{collection_context or ''}/{name}".lower()

    if any(keyword in full_string for keyword in PRIMITIVE_KEYWORDS):
        return TokenCategory.PRIMITIVES
    if any(keyword in full_string for keyword in SEMANTIC_KEYWORDS):
        return TokenCategory.SEMANTIC

    # Scale steps such as "Blue/500" or "Gray 90"
    if _SCALE_SUFFIX.search(name.strip()):
        return TokenCategory.PRIMITIVES

    if name.lower().startswith(SEMANTIC_PREFIXES):
        return TokenCategory.SEMANTIC

    return TokenCategory.UNCATEGORIZED


def camel_case(text: str) -> str:
    """Camel-case a single path segment: ``"Primary Color"`` -> ``"primaryColor"``."""

    def _convert(match: re.Match[str]) -> str:
        word = match.group(0)
        return word.lower() if match.start() == 0 else word.upper()

    return _WHITESPACE.sub("", _WORD_START.sub(_convert, text))


def parse_path(name: str) -> list[str]:
    """Split a name on ``/``, ``.`` and ``-`` into camelCase segments."""
    parts = (part.strip() for part in _PATH_DELIMITERS.split(name))
    return [camel_case(part) for part in parts if part]


def effective_path(path: list[str], token_type: TokenType) -> list[str]:
    """Path under which a token is inserted into the tree.

    Color tokens always live under a ``color`` subtree.
    """
    if token_type == TokenType.COLOR and (not path or path[0] != COLOR_SEGMENT):
        return [COLOR_SEGMENT, *path]
    return list(path)
