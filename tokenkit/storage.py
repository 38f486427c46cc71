"""Persistence of the last known token tree.

The key-value store is an external collaborator; ``TokenStorage`` only
needs ``get``/``set``/``delete``. ``JSONFileStore`` keeps all keys in a
single JSON document on disk:

    .tokenkit/
        store.json
"""

import json
import time
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any

from .errors import StorageError
from .models import DesignTokens, TokenMetadata
from .tokens_logging import LogCategory, get_category_logger

STORAGE_KEY = "design-tokens"
METADATA_KEY = "design-tokens-metadata"
STORAGE_VERSION = "1.0.0"

logger = get_category_logger(LogCategory.STORAGE)


class KeyValueStore(ABC):
    """Minimal key-value interface for JSON-compatible values."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value for a key, or None if absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value under a key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""
        ...


class MemoryStore(KeyValueStore):
    """In-process store, values are copied through JSON on write."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStore(KeyValueStore):
    """Key-value store persisted as one JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} does not hold an object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class TokenStorage:
    """Saves and loads the token tree and its metadata.

    Reads never raise: failures are logged and yield None. Writes raise
    ``StorageError``.
    """

    def __init__(self, store: KeyValueStore, file_key: str | None = None):
        self.store = store
        self.file_key = file_key

    def save_tokens(self, tokens: DesignTokens) -> TokenMetadata:
        """Save a token tree and stamp fresh metadata."""
        metadata = TokenMetadata(
            version=STORAGE_VERSION, last_synced=now_ms(), file_key=self.file_key
        )
        try:
            self.store.set(STORAGE_KEY, tokens.to_dict())
            self.store.set(METADATA_KEY, metadata.to_dict())
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving tokens: {e}")
            raise StorageError(f"Failed to save tokens: {e}", key=STORAGE_KEY) from e
        logger.debug(f"Saved {tokens.total_tokens} tokens")
        return metadata

    def save_metadata(self, metadata: TokenMetadata) -> None:
        """Overwrite the stored metadata."""
        try:
            self.store.set(METADATA_KEY, metadata.to_dict())
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to save metadata: {e}", key=METADATA_KEY) from e

    def load_tokens(self) -> DesignTokens | None:
        """Load the stored token tree, or None if nothing is stored."""
        try:
            data = self.store.get(STORAGE_KEY)
            if data is None:
                return None
            if not isinstance(data, dict):
                logger.warning(f"Ignoring stored tokens of type {type(data).__name__}")
                return None
            return DesignTokens.from_dict(data)
        except (OSError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Error loading tokens: {e}")
            return None

    def load_metadata(self) -> TokenMetadata | None:
        """Load the stored metadata, or None if nothing is stored."""
        try:
            data = self.store.get(METADATA_KEY)
            if data is None:
                return None
            if not isinstance(data, dict):
                logger.warning(f"Ignoring stored metadata of type {type(data).__name__}")
                return None
            return TokenMetadata.from_dict(data)
        except (OSError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Error loading metadata: {e}")
            return None

    def clear(self) -> None:
        """Delete the stored tokens and metadata."""
        try:
            self.store.delete(STORAGE_KEY)
            self.store.delete(METADATA_KEY)
        except (OSError, ValueError) as e:
            logger.error(f"Error clearing tokens: {e}")
            raise StorageError(f"Failed to clear tokens: {e}") from e
