"""Version reporting.

Prefers the installed distribution's metadata and appends the short commit
hash when running from a git checkout, so editable installs are traceable.
"""

import os
import subprocess
from importlib.metadata import PackageNotFoundError, version

PACKAGE_NAME = "repo-readiness"
PACKAGE_VERSION = "0.1.0"

_SOURCE_DIR = os.path.dirname(os.path.abspath(__file__))


def _short_commit() -> str | None:
    """Return the short HEAD hash of the checkout holding this file, or None."""
    try:
        result = subprocess.run(
            ["git", "-C", _SOURCE_DIR, "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def get_version() -> str:
    """Return a version string like '0.1.0' or '0.1.0 (g3a7f2c1)'."""
    try:
        base = version(PACKAGE_NAME)
    except PackageNotFoundError:
        base = PACKAGE_VERSION
    commit = _short_commit()
    return f"{base} (g{commit})" if commit else base
