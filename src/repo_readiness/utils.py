"""Console output and logging helpers."""

import os
from datetime import datetime

from rich.console import Console

console = Console()
err_console = Console(stderr=True)

_settings = {"verbose": False, "log_file": None}


def configure_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """Set verbosity and an optional file that receives a copy of every log line."""
    _settings["verbose"] = verbose
    _settings["log_file"] = os.path.abspath(log_file) if log_file else None


def is_verbose() -> bool:
    return bool(_settings["verbose"])


def _write_log_entry(log_file: str, text: str) -> None:
    """Append text to a log file. Never raises."""
    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(text)
    except Exception:
        pass  # Never break an assessment over logging


def log(category: str, message: str, style: str = "") -> None:
    """Write a message to stderr (with optional style) and the log file, if any."""
    if style:
        err_console.print(message, style=style, highlight=False)
    else:
        err_console.print(message, highlight=False)

    log_file = _settings["log_file"]
    if log_file:
        now = datetime.now().strftime("%H:%M:%S")
        _write_log_entry(log_file, f"[{now}] [{category}] {message}\n")


def debug(category: str, message: str) -> None:
    """Log a dim detail line, only in verbose mode."""
    if is_verbose():
        log(category, f"  {message}", style="dim")
