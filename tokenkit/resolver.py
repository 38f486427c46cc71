"""Alias resolution for variables and token references.

Variables may alias other variables, possibly across collections and
modes. The alias graph is keyed by ``(variable_id, mode_id)`` and walked
with an explicit visited set so that cyclic graphs terminate. Broken and
cyclic aliases resolve to ``None``; they are never raised.
"""

from collections.abc import Mapping
from typing import Any

from .colors import rgba_to_hex
from .models import DesignTokens, Primitive, Token, is_reference_value
from .source import RGBA, DocumentSource, RawCollection, RawVariable, VariableAlias
from .tokens_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.RESOLVE)


def _visit_key(variable_id: str, mode_id: str) -> str:
    return f"{variable_id}:{mode_id}"


def target_mode_id(
    mode_id: str, collection: RawCollection, target_collection: RawCollection
) -> str | None:
    """Pick the mode of ``target_collection`` matching ``mode_id`` by name.

    Falls back to the target collection's first declared mode when no mode
    of the same display name exists. The fallback is an approximation: the
    first mode is not necessarily the intended default.
    """
    current_name = collection.mode_name(mode_id)
    if current_name is not None:
        for mode in target_collection.modes:
            if mode.name == current_name:
                return mode.mode_id
    if target_collection.modes:
        return target_collection.modes[0].mode_id
    return None


def resolve_variable_value(
    variable: RawVariable,
    mode_id: str,
    collection: RawCollection,
    variables: Mapping[str, RawVariable],
    collections: Mapping[str, RawCollection],
    visited: set[str] | None = None,
) -> Primitive | None:
    """Follow a variable's alias chain to its terminal primitive.

    Args:
        variable: Variable to resolve.
        mode_id: Mode of ``collection`` to read.
        collection: Collection owning ``variable``.
        variables: All variables keyed by id.
        collections: All collections keyed by id.
        visited: ``"variableId:modeId"`` pairs seen in this resolution.
            Allocated fresh when omitted; pass it only from recursive calls.

    Returns:
        The primitive value (colors as hex/rgba text), or None when the
        chain is broken or cyclic.
    """
    if visited is None:
        visited = set()

    key = _visit_key(variable.id, mode_id)
    if key in visited:
        logger.debug(f"Alias cycle detected at {key}")
        return None
    visited.add(key)

    raw_value = variable.values_by_mode.get(mode_id)

    if isinstance(raw_value, VariableAlias):
        target = variables.get(raw_value.id)
        if target is None:
            logger.debug(f"Broken alias from {variable.name}: {raw_value.id} not found")
            return None

        target_collection = collections.get(target.variable_collection_id)
        if target_collection is None:
            logger.debug(
                f"Broken alias from {variable.name}: collection "
                f"{target.variable_collection_id} not found"
            )
            return None

        next_mode_id = target_mode_id(mode_id, collection, target_collection)
        if next_mode_id is None:
            return None

        return resolve_variable_value(
            target, next_mode_id, target_collection, variables, collections, visited
        )

    if isinstance(raw_value, RGBA):
        return rgba_to_hex(raw_value.r, raw_value.g, raw_value.b, raw_value.a)

    return raw_value


class AliasResolver:
    """Resolves variables against a fixed snapshot of the document.

    Each ``resolve`` call owns its visited set, so resolving different
    variables or modes never shares cycle state.
    """

    def __init__(
        self,
        variables: Mapping[str, RawVariable],
        collections: Mapping[str, RawCollection],
    ):
        self.variables = variables
        self.collections = collections

    @classmethod
    def from_source(cls, source: DocumentSource) -> "AliasResolver":
        """Build lookup maps from a document source."""
        return cls(
            variables={v.id: v for v in source.get_variables()},
            collections={c.id: c for c in source.get_collections()},
        )

    def resolve(
        self, variable: RawVariable, mode_id: str, collection: RawCollection | None = None
    ) -> Primitive | None:
        """Resolve one ``(variable, mode)`` pair to its primitive value."""
        if collection is None:
            collection = self.collections.get(variable.variable_collection_id)
            if collection is None:
                return None
        return resolve_variable_value(
            variable, mode_id, collection, self.variables, self.collections
        )


def is_token_reference(token: Any) -> bool:
    """Check whether a token (or raw token dict) is an alias reference."""
    if isinstance(token, Token):
        return token.is_reference
    if isinstance(token, dict):
        return is_reference_value(token.get("value"))
    return False


def reference_path(ref: str) -> list[str]:
    """Split ``{a.b.c}`` into ``["a", "b", "c"]``."""
    return ref[1:-1].split(".") if is_reference_value(ref) else ref.split(".")


def resolve_token_reference(ref: str, tokens: DesignTokens) -> Primitive | None:
    """Resolve a ``{dot.path}`` reference against a token tree.

    Returns the value of the target token, or None when the path is
    missing, lands on a token set, or lands on another reference.
    """
    node = tokens.get(reference_path(ref))
    if isinstance(node, Token) and not node.is_reference:
        return node.value
    return None
