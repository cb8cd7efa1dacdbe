"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from katrin.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


def write_script(tmp_path: Path, text: str, name: str = "scene.kat") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestCheck:
    def test_check_files(self, cli_runner: CliRunner, tmp_path: Path, sample_script: str) -> None:
        script = write_script(tmp_path, sample_script)
        result = cli_runner.invoke(app, ["check", str(script)])
        assert result.exit_code == 0, result.output
        assert "OK: 1 script(s) checked." in result.output

    def test_check_via_manifest(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(
            app, ["check", "--manifest", str(project_dir / "katrin.toml")]
        )
        assert result.exit_code == 0, result.output
        assert "OK: 2 script(s) checked." in result.output

    def test_check_missing_entry(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "scripts" / "main.kat").unlink()
        result = cli_runner.invoke(
            app, ["check", "--manifest", str(project_dir / "katrin.toml")]
        )
        assert result.exit_code == 1
        assert "Entry script scripts/main.kat does not exist" in result.output

    def test_check_missing_manifest(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["check", "--manifest", str(tmp_path / "katrin.toml")])
        assert result.exit_code == 1
        assert "cannot read manifest" in result.output

    def test_check_parse_error(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, "say end\n")
        result = cli_runner.invoke(app, ["check", str(script)])
        assert result.exit_code == 1
        assert "Parse error" in result.output
        assert "Expected string, got keyword 'end'" in result.output

    def test_check_parse_error_vscode_format(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, "\nwait soon\n")
        result = cli_runner.invoke(app, ["check", str(script), "--format", "vscode"])
        assert result.exit_code == 1
        assert ":2:10: error: Expected number or integer, got identifier" in result.output

    def test_check_lint_error(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, 'load_script ""\n')
        result = cli_runner.invoke(app, ["check", str(script)])
        assert result.exit_code == 1
        assert "ERROR: Instruction 1: load_script has an empty path." in result.output

    def test_check_lint_warning_passes(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, "end\nend\n")
        result = cli_runner.invoke(app, ["check", str(script)])
        assert result.exit_code == 0
        assert "WARNING:" in result.output


class TestTokens:
    def test_tokens_table(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, "background forest\n")
        result = cli_runner.invoke(app, ["tokens", str(script)])
        assert result.exit_code == 0, result.output
        assert "BACKGROUND" in result.output
        assert "IDENTIFIER" in result.output
        assert "EOF" in result.output


class TestDump:
    def test_dump_json(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, 'say "Hello"\nwait 500\n')
        result = cli_runner.invoke(app, ["dump", str(script)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["instructions"] == [
            {"kind": "say", "text": "Hello"},
            {"kind": "wait", "duration": "500"},
        ]

    def test_dump_parse_error(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        script = write_script(tmp_path, "jump scene2\n")
        result = cli_runner.invoke(app, ["dump", str(script)])
        assert result.exit_code == 1
        assert "Unknown instruction: 'jump'" in result.output

    def test_dump_missing_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["dump", str(tmp_path / "nope.kat")])
        assert result.exit_code == 1
        assert "cannot read" in result.output


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("katrin ")


def test_non_utf8_script_is_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    script = tmp_path / "broken.kat"
    script.write_bytes(b'say "\xff\xfe"\n')
    for command in ("check", "tokens", "dump"):
        result = cli_runner.invoke(app, [command, str(script)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Error: cannot read" in result.output
