"""Token tree builder.

Scans the host document's paint styles and color variables and assembles
them into the categorized ``DesignTokens`` tree.
"""

from .categorizer import categorize, effective_path, parse_path
from .colors import rgba_to_hex
from .models import DesignTokens, Token, TokenCategory, TokenExtensions, TokenType
from .source import RGBA, SOLID_PAINT, DocumentSource, VariableAlias
from .tokens_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.SCAN)

COLOR_VARIABLE_TYPE = "COLOR"


def add_to_tokens(
    tokens: DesignTokens, category: TokenCategory, path: list[str], token: Token
) -> None:
    """Insert a token under its category, prefixing color paths with ``color``.

    Intermediate entries that are not token sets are replaced.
    """
    full_path = effective_path(path, token.type)
    if not full_path:
        logger.debug(f"Skipping token with empty path in {category.value}")
        return
    tokens.category(category, create=True)
    tokens.set([category.value, *full_path], token)


def scan_color_styles(source: DocumentSource, tokens: DesignTokens) -> int:
    """Add solid paint styles to the tree.

    Returns:
        Number of tokens added.
    """
    added = 0
    for style in source.get_paint_styles():
        if not style.paints:
            continue

        paint = style.paints[0]
        if paint.type != SOLID_PAINT or paint.color is None:
            continue

        opacity = paint.opacity if paint.opacity is not None else 1.0
        path = parse_path(style.name)
        token = Token(
            value=rgba_to_hex(paint.color.r, paint.color.g, paint.color.b, opacity),
            type=TokenType.COLOR,
            description=style.description or None,
            extensions=TokenExtensions(style_id=style.id, original_path=path),
        )
        add_to_tokens(tokens, categorize(style.name), path, token)
        added += 1
    return added


def scan_color_variables(source: DocumentSource, tokens: DesignTokens) -> int:
    """Add color variables to the tree using their first mode's value.

    Aliased variables are skipped; the tree only holds primitive colors
    read from variables.

    Returns:
        Number of tokens added.
    """
    collection_names = {c.id: c.name for c in source.get_collections()}
    added = 0

    for variable in source.get_variables():
        if variable.resolved_type != COLOR_VARIABLE_TYPE or not variable.values_by_mode:
            continue

        value = next(iter(variable.values_by_mode.values()))
        if isinstance(value, VariableAlias) or not isinstance(value, RGBA):
            continue

        collection_name = collection_names.get(variable.variable_collection_id, "")
        path = parse_path(variable.name)
        token = Token(
            value=rgba_to_hex(value.r, value.g, value.b, value.a),
            type=TokenType.COLOR,
            description=variable.description or None,
            extensions=TokenExtensions(variable_id=variable.id, original_path=path),
        )
        add_to_tokens(tokens, categorize(variable.name, collection_name), path, token)
        added += 1
    return added


def scan_all_tokens(source: DocumentSource) -> DesignTokens:
    """Scan paint styles and color variables into a fresh token tree.

    Empty categories are dropped from the result. A failure while reading
    variables is logged and the styles-only tree is returned.
    """
    tokens = DesignTokens.empty()

    style_count = scan_color_styles(source, tokens)

    variable_count = 0
    try:
        variable_count = scan_color_variables(source, tokens)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"Error scanning variables: {e}")

    tokens.remove_empty_categories()
    logger.info(
        f"Scanned {style_count} styles and {variable_count} variables "
        f"into {tokens.total_tokens} tokens"
    )
    return tokens
