"""Tests for logging helpers."""

import pytest

from repo_readiness.utils import configure_logging, debug, is_verbose, log


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging()


def test_log_appends_to_log_file(tmp_path):
    log_path = tmp_path / "run.log"
    configure_logging(log_file=str(log_path))
    log("CodeComplexity", "first")
    log("CodeComplexity", "second", style="green")
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("[CodeComplexity] first")
    assert lines[1].endswith("[CodeComplexity] second")


def test_debug_is_silent_unless_verbose(tmp_path):
    log_path = tmp_path / "run.log"
    configure_logging(log_file=str(log_path))
    debug("CodeComplexity", "hidden")
    assert not log_path.exists()

    configure_logging(verbose=True, log_file=str(log_path))
    assert is_verbose()
    debug("CodeComplexity", "shown")
    assert "[CodeComplexity]   shown" in log_path.read_text(encoding="utf-8")


def test_unwritable_log_file_does_not_raise(tmp_path):
    configure_logging(log_file=str(tmp_path / "missing-dir" / "run.log"))
    log("CodeComplexity", "still fine")
