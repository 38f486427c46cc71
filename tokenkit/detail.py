"""Collection detail builder.

Produces the flat per-variable, per-mode value table for one collection,
annotated with alias status and resolved values, plus the lightweight
index of all collections used for the "load variables" step.
"""

from .colors import rgba_to_hex
from .errors import CollectionNotFoundError
from .models import (
    CollectionDetail,
    CollectionVariableDetail,
    LiteCollection,
    LiteVariable,
    Mode,
    Primitive,
    ScannedVariableData,
    Token,
    TokenType,
)
from .resolver import AliasResolver
from .source import RGBA, DocumentSource, RawValue, RawVariable, VariableAlias
from .tokens_logging import LogCategory, get_category_logger
from .units import format_number

logger = get_category_logger(LogCategory.SCAN)

ALIAS_DESCRIPTION = "Alias"

# Host value kind -> token type; unknown kinds map to number
RESOLVED_TYPE_MAP = {
    "COLOR": TokenType.COLOR,
    "FLOAT": TokenType.NUMBER,
    "STRING": TokenType.TYPOGRAPHY,
}


def map_resolved_type(resolved_type: str) -> TokenType:
    """Map a host variable kind to the token type vocabulary."""
    return RESOLVED_TYPE_MAP.get(resolved_type, TokenType.NUMBER)


def get_lite_collections(source: DocumentSource) -> ScannedVariableData:
    """Light scan of all collections and variables."""
    collections = [
        LiteCollection(
            id=c.id,
            name=c.name,
            modes=tuple(c.modes),
            variable_ids=tuple(c.variable_ids),
        )
        for c in source.get_collections()
    ]
    variables = [
        LiteVariable(
            id=v.id,
            name=v.name,
            resolved_type=v.resolved_type,
            collection_id=v.variable_collection_id,
        )
        for v in source.get_variables()
    ]
    return ScannedVariableData(collections=collections, variables=variables)


def _display_value(value: RawValue) -> Primitive:
    if isinstance(value, RGBA):
        return rgba_to_hex(value.r, value.g, value.b, value.a)
    if isinstance(value, (bool, int, float)):
        return format_number(value)
    return str(value)


def _build_variable_detail(
    variable: RawVariable,
    modes: list[Mode],
    resolver: AliasResolver,
) -> CollectionVariableDetail:
    token_type = map_resolved_type(variable.resolved_type)
    collection = resolver.collections.get(variable.variable_collection_id)
    values_by_mode: dict[str, Token] = {}
    is_alias = False

    for mode in modes:
        raw_value = variable.values_by_mode.get(mode.mode_id)
        if raw_value is None:
            continue

        resolved_value = resolver.resolve(variable, mode.mode_id, collection)

        if isinstance(raw_value, VariableAlias):
            is_alias = True
            target = resolver.variables.get(raw_value.id)
            target_name = target.name if target is not None else raw_value.id
            values_by_mode[mode.mode_id] = Token(
                value=f"{{{target_name}}}",
                resolved_value=resolved_value,
                type=token_type,
                description=ALIAS_DESCRIPTION,
            )
        else:
            values_by_mode[mode.mode_id] = Token(
                value=_display_value(raw_value),
                resolved_value=resolved_value,
                type=token_type,
            )

    return CollectionVariableDetail(
        id=variable.id,
        name=variable.name,
        type=token_type,
        values_by_mode=values_by_mode,
        is_alias=is_alias,
        description=variable.description,
    )


def build_detail(source: DocumentSource, collection_id: str) -> CollectionDetail:
    """Build the detail table for one collection.

    Raises:
        CollectionNotFoundError: If the collection doesn't exist.
    """
    collection = source.get_collection(collection_id)
    if collection is None:
        raise CollectionNotFoundError(collection_id)

    resolver = AliasResolver.from_source(source)

    variables = [
        _build_variable_detail(v, collection.modes, resolver)
        for v in resolver.variables.values()
        if v.variable_collection_id == collection_id
    ]

    logger.info(
        f"Built detail for collection {collection.name}: "
        f"{len(variables)} variables, {len(collection.modes)} modes"
    )

    return CollectionDetail(
        collection_id=collection.id,
        name=collection.name,
        modes=list(collection.modes),
        variables=variables,
    )
