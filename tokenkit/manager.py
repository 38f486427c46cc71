"""Request handling for the view layer.

``TokenManager`` answers the view layer's requests (scan, load, save,
import/export bundles, collection listing and detail, export rendering).
Every request yields a ``Response``; failures become ``error`` responses
so that one bad request never ends the session.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .detail import build_detail, get_lite_collections
from .errors import InvalidRequestError, TokenKitError
from .exporters import ExportOptions, render
from .models import AliasMode, DesignTokens, Mode, TokenMetadata
from .source import DocumentSource
from .storage import TokenStorage, now_ms
from .tokens_logging import get_logger
from .tree import scan_all_tokens

logger = get_logger()


@dataclass
class Response:
    """Reply to a view-layer request."""

    type: str
    payload: Any = None

    @property
    def is_error(self) -> bool:
        return self.type == "error"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a message dictionary."""
        return {"type": self.type, "payload": self.payload}


def _error(context: str, error: Exception) -> Response:
    message = error.message if isinstance(error, TokenKitError) else str(error)
    logger.error(f"{context}: {message}")
    return Response("error", f"{context}: {message}")


def _require_dict(field_name: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidRequestError(field_name, "an object", value)
    return value


class TokenManager:
    """Coordinates the document source, the core transforms and storage."""

    def __init__(self, source: DocumentSource, storage: TokenStorage):
        self.source = source
        self.storage = storage

    def scan_document(self) -> Response:
        """Scan the document, store the tree and return it with metadata."""
        try:
            tokens = scan_all_tokens(self.source)
            self.storage.save_tokens(tokens)
            metadata = self.storage.load_metadata()
        except (TokenKitError, ValueError, KeyError) as e:
            return _error("Error scanning document", e)

        return Response(
            "tokens-scanned",
            {
                "tokens": tokens.to_dict(),
                "metadata": metadata.to_dict() if metadata else None,
            },
        )

    def load_tokens(self) -> Response:
        """Return the stored tree (empty when nothing is stored)."""
        tokens = self.storage.load_tokens()
        metadata = self.storage.load_metadata()
        return Response(
            "tokens-loaded",
            {
                "tokens": tokens.to_dict() if tokens else {},
                "metadata": metadata.to_dict() if metadata else None,
            },
        )

    def save_tokens(self, tokens: dict[str, Any]) -> Response:
        """Store a tree sent by the view layer."""
        try:
            tree = DesignTokens.from_dict(_require_dict("tokens", tokens))
            self.storage.save_tokens(tree)
        except (TokenKitError, ValueError, KeyError) as e:
            return _error("Error saving tokens", e)
        return Response("tokens-saved")

    def export_tokens(self) -> Response:
        """Bundle the stored tree with its metadata and an export date."""
        tokens = self.storage.load_tokens()
        if tokens is None:
            return Response("error", "No tokens found. Please scan the document first.")

        metadata = self.storage.load_metadata()
        return Response(
            "tokens-exported",
            {
                "tokens": tokens.to_dict(),
                "metadata": metadata.to_dict() if metadata else None,
                "exportDate": datetime.now(UTC).isoformat(),
            },
        )

    def import_tokens(self, bundle: dict[str, Any]) -> Response:
        """Store an exported bundle, refreshing its ``lastSynced`` stamp."""
        try:
            bundle = _require_dict("bundle", bundle)
            tokens = DesignTokens.from_dict(
                _require_dict("tokens", bundle["tokens"])
            )
            self.storage.save_tokens(tokens)

            metadata_data = bundle.get("metadata")
            metadata = None
            if metadata_data:
                metadata = TokenMetadata.from_dict(
                    _require_dict("metadata", metadata_data)
                )
                metadata.last_synced = now_ms()
                metadata.file_key = self.source.file_key
                self.storage.save_metadata(metadata)
        except (TokenKitError, ValueError, KeyError, TypeError) as e:
            return _error("Error importing tokens", e)

        return Response(
            "tokens-imported",
            {
                "tokens": tokens.to_dict(),
                "metadata": metadata.to_dict() if metadata else None,
            },
        )

    def load_variables(self) -> Response:
        """Return the lightweight collection and variable index."""
        try:
            data = get_lite_collections(self.source)
        except (TokenKitError, ValueError, KeyError) as e:
            return _error("Error loading variables", e)
        return Response("variables-loaded", data.to_dict())

    def get_collection_data(self, collection_id: str) -> Response:
        """Return the detail table for one collection."""
        try:
            detail = build_detail(self.source, collection_id)
        except (TokenKitError, ValueError, KeyError) as e:
            return _error("Error loading collection data", e)
        return Response("collection-data-loaded", detail.to_dict())

    def render_export(self, collection_id: str, options: dict[str, Any]) -> Response:
        """Render a collection export.

        ``options`` uses the view layer's keys: ``format``, ``aliasMode``,
        ``colorFormat``, ``unitFormat``, ``baseFontSize``,
        ``unitPerVariable`` and ``modeIds`` (all modes when omitted).
        """
        try:
            options = _require_dict("options", options)
            unit_per_variable = _require_dict(
                "unitPerVariable", options.get("unitPerVariable") or {}
            )
            mode_ids = options.get("modeIds")
            if mode_ids is not None and not isinstance(mode_ids, list):
                raise InvalidRequestError("modeIds", "a list", mode_ids)

            detail = build_detail(self.source, collection_id)
            modes: list[Mode] = (
                [m for m in detail.modes if m.mode_id in mode_ids]
                if mode_ids
                else list(detail.modes)
            )
            export_options = ExportOptions(
                format=options.get("format", "css"),
                modes=modes,
                alias_mode=options.get("aliasMode", AliasMode.RESOLVED.value),
                color_format=options.get("colorFormat", "hex"),
                unit_format=options.get("unitFormat", "px"),
                base_font_size=options.get("baseFontSize", 16),
                unit_per_variable=unit_per_variable,
            )
            text = render(detail.variables, export_options, detail.name)
        except (TokenKitError, ValueError, KeyError, TypeError) as e:
            return _error("Error rendering export", e)
        return Response("export-rendered", text)

    def handle(self, message: dict[str, Any]) -> Response:
        """Dispatch a view-layer message on its ``type``."""
        msg_type = message.get("type")
        if msg_type == "scan-document":
            return self.scan_document()
        if msg_type == "load-tokens":
            return self.load_tokens()
        if msg_type == "save-tokens":
            return self.save_tokens(message.get("tokens") or {})
        if msg_type == "export-tokens":
            return self.export_tokens()
        if msg_type == "import-tokens":
            return self.import_tokens(message.get("tokens") or {})
        if msg_type == "load-variables":
            return self.load_variables()
        if msg_type == "get-collection-data":
            return self.get_collection_data(message.get("collectionId", ""))
        if msg_type == "render-export":
            return self.render_export(
                message.get("collectionId", ""), message.get("options") or {}
            )

        logger.warning(f"Unknown message type: {msg_type}")
        return Response("error", f"Unknown message type: {msg_type}")
