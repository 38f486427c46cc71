"""Unit tests for the document snapshot source."""

import pytest

from tokenkit.errors import SourceNotFoundError
from tokenkit.source import (
    RGBA,
    SnapshotSource,
    VariableAlias,
    parse_raw_value,
)


class TestParseRawValue:
    def test_alias(self):
        assert parse_raw_value({"type": "VARIABLE_ALIAS", "id": "v1"}) == VariableAlias("v1")

    def test_color(self):
        assert parse_raw_value({"r": 1, "g": 0.5, "b": 0}) == RGBA(1, 0.5, 0)
        assert parse_raw_value({"r": 1, "g": 0.5, "b": 0, "a": 0.2}).a == 0.2

    @pytest.mark.parametrize("value", [8, 1.5, "Inter", True])
    def test_primitives_unchanged(self, value):
        assert parse_raw_value(value) == value


class TestSnapshotSource:
    """Tests for SnapshotSource."""

    def test_from_dict(self, source):
        assert source.file_key == "file-123"
        assert [s.name for s in source.get_paint_styles()][:2] == [
            "Brand/Primary Color",
            "Overlay/Scrim",
        ]
        text = next(v for v in source.get_variables() if v.id == "v-text")
        assert text.values_by_mode["s-light"] == VariableAlias("v-blue")
        assert text.description == "Body text"

    def test_variable_ids_derived(self, source):
        """Test collections without variableIds list their variables."""
        assert source.get_collection("c-prim").variable_ids == ["v-blue", "v-space"]

    def test_explicit_variable_ids_kept(self, snapshot_data):
        snapshot_data["collections"][0]["variableIds"] = ["v-space"]
        source = SnapshotSource.from_dict(snapshot_data)
        assert source.get_collection("c-prim").variable_ids == ["v-space"]

    def test_get_collection_missing(self, source):
        assert source.get_collection("nope") is None

    def test_mode_name(self, source):
        collection = source.get_collection("c-sem")
        assert collection.mode_name("s-dark") == "Dark"
        assert collection.mode_name("other") is None
        assert collection.default_mode_id == "s-light"

    def test_default_mode_falls_back_to_first(self):
        source = SnapshotSource.from_dict(
            {"collections": [{"id": "c", "name": "C", "modes": [{"modeId": "a", "name": "A"}]}]}
        )
        assert source.get_collection("c").default_mode_id == "a"

    def test_from_file(self, snapshot_file):
        source = SnapshotSource.from_file(snapshot_file)
        assert len(source.get_variables()) == 4

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(SourceNotFoundError, match="not found"):
            SnapshotSource.from_file(tmp_path / "missing.json")

    def test_from_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops")
        with pytest.raises(SourceNotFoundError, match="Cannot read document snapshot"):
            SnapshotSource.from_file(path)
