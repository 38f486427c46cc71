"""Unit tests for CLI functionality."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tokenkit import __version__
from tokenkit.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TOKENKIT_FORMAT", "TOKENKIT_ALIAS_MODE", "TOKENKIT_UNIT", "TOKENKIT_STORE"):
        monkeypatch.delenv(name, raising=False)


def invoke(runner: CliRunner, project: Path, *args: str):
    """Invoke the CLI quietly against a project directory."""
    return runner.invoke(cli, ["--quiet", "--project", str(project), *args])


class TestMainCLI:
    """Test main CLI group functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "design token" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_quiet_and_verbose_conflict(self, runner, tmp_path):
        result = runner.invoke(cli, ["--quiet", "--verbose", "--project", str(tmp_path), "tokens", "show"])
        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_invalid_config_file(self, runner, tmp_path):
        (tmp_path / "tokenkit.config.json").write_text('{"export": {"format": "xml"}}')
        result = invoke(runner, tmp_path, "tokens", "show")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestScanCommand:
    def test_scan_prints_tree(self, runner, tmp_path, snapshot_file):
        result = invoke(runner, tmp_path, "scan", str(snapshot_file))
        assert result.exit_code == 0, result.output
        tree = json.loads(result.output)
        assert tree["primitives"]["color"]["blue"]["500"]["value"] == "#0066ff"
        assert not (tmp_path / ".tokenkit" / "store.json").exists()

    def test_scan_save_then_show(self, runner, tmp_path, snapshot_file):
        """Test --save stores the tree for tokens show."""
        result = invoke(runner, tmp_path, "scan", str(snapshot_file), "--save")
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".tokenkit" / "store.json").exists()

        shown = invoke(runner, tmp_path, "tokens", "show")
        assert shown.exit_code == 0
        data = json.loads(shown.output)
        assert data["metadata"]["figmaFileKey"] == "file-123"
        assert "uncategorized" in data["tokens"]

    def test_scan_missing_snapshot(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "scan", str(tmp_path / "missing.json"))
        assert result.exit_code == 1
        assert "Document snapshot not found" in result.output


class TestTokensCommands:
    def test_show_empty(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "tokens", "show")
        assert result.exit_code == 0
        assert "No tokens found" in result.output

    def test_clear(self, runner, tmp_path, snapshot_file):
        invoke(runner, tmp_path, "scan", str(snapshot_file), "--save")
        result = invoke(runner, tmp_path, "tokens", "clear")
        assert result.exit_code == 0
        assert "Cleared stored tokens" in result.output
        assert "No tokens found" in invoke(runner, tmp_path, "tokens", "show").output


class TestCollectionCommands:
    def test_collections(self, runner, tmp_path, snapshot_file):
        result = invoke(runner, tmp_path, "collections", str(snapshot_file))
        assert result.exit_code == 0
        assert "c-prim  Primitives  (2 variables; modes: Light, Dark)" in result.output
        assert "c-sem  Semantic" in result.output

    def test_collections_empty(self, runner, tmp_path):
        snapshot = tmp_path / "empty.json"
        snapshot.write_text("{}")
        result = invoke(runner, tmp_path, "collections", str(snapshot))
        assert result.exit_code == 0
        assert "No variable collections found" in result.output

    def test_detail(self, runner, tmp_path, snapshot_file):
        result = invoke(runner, tmp_path, "detail", str(snapshot_file), "c-sem")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["collectionId"] == "c-sem"
        assert data["variables"][0]["valuesByMode"]["s-dark"]["resolvedValue"] == "#3399ff"

    def test_detail_missing_collection(self, runner, tmp_path, snapshot_file):
        result = invoke(runner, tmp_path, "detail", str(snapshot_file), "missing")
        assert result.exit_code == 1
        assert "Collection missing not found" in result.output


class TestExportCommand:
    def test_export_css_alias(self, runner, tmp_path, snapshot_file):
        result = invoke(
            runner, tmp_path, "export", str(snapshot_file), "c-sem", "--alias-mode", "alias"
        )
        assert result.exit_code == 0, result.output
        assert "/* Mode: Light */" in result.output
        assert "--text-primary: var(--blue-500);" in result.output

    def test_export_mode_and_unit_override(self, runner, tmp_path, snapshot_file):
        result = invoke(
            runner,
            tmp_path,
            "export",
            str(snapshot_file),
            "c-prim",
            "--format",
            "json",
            "--mode",
            "dark",
            "--unit",
            "rem",
            "--unit-for",
            "v-space=%",
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "dark": {"blue.500": "#3399ff", "spacing.small": "8%"}
        }

    def test_export_uses_config_file(self, runner, tmp_path, snapshot_file):
        (tmp_path / "tokenkit.config.json").write_text(
            json.dumps({"export": {"format": "scss", "color_format": "rgb"}})
        )
        result = invoke(runner, tmp_path, "export", str(snapshot_file), "c-prim")
        assert result.exit_code == 0, result.output
        assert "$blue-500: rgb(0, 102, 255);" in result.output

    def test_export_to_file(self, runner, tmp_path, snapshot_file):
        output = tmp_path / "tokens.json"
        result = invoke(
            runner,
            tmp_path,
            "export",
            str(snapshot_file),
            "c-prim",
            "--format",
            "dtcg",
            "--output",
            str(output),
        )
        assert result.exit_code == 0, result.output
        assert "Wrote dtcg export" in result.output
        data = json.loads(output.read_text())
        assert data["$modes"]["Light"]["blue"]["500"]["$value"] == "#0066ff"

    def test_export_bad_unit_override(self, runner, tmp_path, snapshot_file):
        result = invoke(
            runner, tmp_path, "export", str(snapshot_file), "c-prim", "--unit-for", "v-space"
        )
        assert result.exit_code == 2
        assert "VARIABLE_ID=UNIT" in result.output

    def test_export_unknown_format_choice(self, runner, tmp_path, snapshot_file):
        result = invoke(runner, tmp_path, "export", str(snapshot_file), "c-prim", "--format", "xml")
        assert result.exit_code == 2
