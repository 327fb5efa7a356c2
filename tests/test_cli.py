"""Tests for the assess command and CLI directory resolution."""

import json
import os

from typer.testing import CliRunner

from repo_readiness.cli import _resolve_directory, app
from repo_readiness.utils import configure_logging

runner = CliRunner()


def _make_repo(root):
    (root / "orders.py").write_text("import billing\n\ndef place():\n    return 1\n", encoding="utf-8")
    (root / "billing.py").write_text("import orders\n\ndef charge():\n    return 2\n", encoding="utf-8")
    return root


# --- _resolve_directory ---

def test_resolve_directory_returns_absolute_path():
    """Relative path is resolved to absolute."""
    result = _resolve_directory("my-project")
    assert result == os.path.join(os.getcwd(), "my-project")


def test_resolve_directory_expands_home():
    """Tilde is expanded to the home directory."""
    result = _resolve_directory("~/my-project")
    assert result.startswith(os.path.expanduser("~"))
    assert "~" not in result


def test_resolve_directory_normalizes_path():
    """Paths with .. and . are normalized."""
    result = _resolve_directory("./foo/../bar")
    assert ".." not in result
    assert result.endswith("bar")


# --- assess ---

def test_assess_missing_directory_exits_with_error(tmp_path):
    result = runner.invoke(app, ["assess", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_assess_prints_markdown_report(tmp_path):
    repo = _make_repo(tmp_path)
    result = runner.invoke(app, ["assess", str(repo)])
    assert result.exit_code == 0
    assert "# Repository Readiness Report" in result.output
    assert "**Grade:** B (22/25)" in result.output
    assert result.output.endswith("---\n")
    assert not result.output.endswith("\n\n")


def test_assess_writes_json_report_to_file(tmp_path):
    repo = tmp_path / "repo"
    repo.mkdir()
    _make_repo(repo)
    out = tmp_path / "report.json"

    result = runner.invoke(app, ["assess", str(repo), "--format", "json", "--output", str(out)])

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["repository"] == "repo"
    assert data["score"] == 22
    assert data["metrics"]["circular_dependencies"] == 1
    assert "Report saved to:" in result.output


def test_assess_unwritable_output_exits_with_error(tmp_path):
    repo = tmp_path / "repo"
    repo.mkdir()
    _make_repo(repo)
    out = tmp_path / "missing-dir" / "report.md"

    result = runner.invoke(app, ["assess", str(repo), "--output", str(out)])

    assert result.exit_code == 1
    assert not out.exists()
    assert not isinstance(result.exception, OSError)


def test_assess_rejects_zero_workers(tmp_path):
    result = runner.invoke(app, ["assess", str(tmp_path), "--workers", "0"])
    assert result.exit_code != 0


def test_assess_log_file_receives_progress(tmp_path):
    repo = tmp_path / "repo"
    repo.mkdir()
    _make_repo(repo)
    log_path = tmp_path / "run.log"

    try:
        result = runner.invoke(app, ["assess", str(repo), "--log-file", str(log_path), "--verbose"])
    finally:
        configure_logging()

    assert result.exit_code == 0
    logged = log_path.read_text(encoding="utf-8")
    assert "[CodeComplexity] Assessing Code Complexity & Dependencies..." in logged
    assert "Cycle: billing -> orders -> billing" in logged


def test_version_option():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
