"""
Shared fixtures for the tokenkit test suite.

Provides test fixtures for:
- A document snapshot with primitive and semantic collections
- Snapshot sources and snapshot files
- In-memory token storage
- Logging reset between tests
"""

import copy
import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from tokenkit.source import SnapshotSource
from tokenkit.storage import MemoryStore, TokenStorage
from tokenkit.tokens_logging import ROOT_LOGGER

# ---------------------------------------------------------------------------
# Document snapshot
# ---------------------------------------------------------------------------

SNAPSHOT: dict[str, Any] = {
    "fileKey": "file-123",
    "paintStyles": [
        {
            "id": "S:brand",
            "name": "Brand/Primary Color",
            "description": "Main brand color",
            "paints": [{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0}, "opacity": 1}],
        },
        {
            "id": "S:scrim",
            "name": "Overlay/Scrim",
            "paints": [{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0}, "opacity": 0.5}],
        },
        {
            "id": "S:gradient",
            "name": "Hero Gradient",
            "paints": [{"type": "GRADIENT_LINEAR"}],
        },
    ],
    "collections": [
        {
            "id": "c-prim",
            "name": "Primitives",
            "modes": [
                {"modeId": "m-light", "name": "Light"},
                {"modeId": "m-dark", "name": "Dark"},
            ],
            "defaultModeId": "m-light",
        },
        {
            "id": "c-sem",
            "name": "Semantic",
            "modes": [
                {"modeId": "s-light", "name": "Light"},
                {"modeId": "s-dark", "name": "Dark"},
            ],
            "defaultModeId": "s-light",
        },
    ],
    "variables": [
        {
            "id": "v-blue",
            "name": "Blue/500",
            "resolvedType": "COLOR",
            "variableCollectionId": "c-prim",
            "valuesByMode": {
                "m-light": {"r": 0, "g": 0.4, "b": 1},
                "m-dark": {"r": 0.2, "g": 0.6, "b": 1},
            },
        },
        {
            "id": "v-space",
            "name": "Spacing/Small",
            "resolvedType": "FLOAT",
            "variableCollectionId": "c-prim",
            "valuesByMode": {"m-light": 8, "m-dark": 8},
        },
        {
            "id": "v-text",
            "name": "Text/Primary",
            "resolvedType": "COLOR",
            "variableCollectionId": "c-sem",
            "description": "Body text",
            "valuesByMode": {
                "s-light": {"type": "VARIABLE_ALIAS", "id": "v-blue"},
                "s-dark": {"type": "VARIABLE_ALIAS", "id": "v-blue"},
            },
        },
        {
            "id": "v-gap",
            "name": "Gap",
            "resolvedType": "FLOAT",
            "variableCollectionId": "c-sem",
            "valuesByMode": {
                "s-light": {"type": "VARIABLE_ALIAS", "id": "v-space"},
                "s-dark": {"type": "VARIABLE_ALIAS", "id": "v-space"},
            },
        },
    ],
}


@pytest.fixture()
def snapshot_data() -> dict[str, Any]:
    """Return a fresh copy of the sample document snapshot."""
    return copy.deepcopy(SNAPSHOT)


@pytest.fixture()
def source(snapshot_data: dict[str, Any]) -> SnapshotSource:
    """Create a snapshot source from the sample document."""
    return SnapshotSource.from_dict(snapshot_data)


@pytest.fixture()
def snapshot_file(tmp_path: Path, snapshot_data: dict[str, Any]) -> Path:
    """Write the sample document snapshot to a JSON file."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture()
def memory_storage() -> TokenStorage:
    """Create token storage over an in-memory store."""
    return TokenStorage(MemoryStore(), file_key="file-123")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_tokenkit_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging so tests stay isolated."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
