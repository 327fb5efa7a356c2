"""Source file discovery and reading.

Walks a repository once, keeps files whose extension is on the allow-list,
and skips dependency, VCS, and build-output directories. Traversal is sorted
so repeated runs over an unchanged tree yield the same order.
"""

import os
from dataclasses import dataclass

from repo_readiness.config import (
    CODE_EXTENSIONS,
    EXCLUDED_DIRS,
    MINIFIED_MARKER,
    language_for_file,
)


class FileUnreadable(Exception):
    """A source file could not be read (permissions, vanished, not a file)."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class SourceFile:
    """A collected source file. The stem is the dependency graph node key."""

    path: str
    rel_path: str
    language: str
    stem: str

    @classmethod
    def from_path(cls, path: str, root: str) -> "SourceFile":
        abspath = os.path.abspath(path)
        name = os.path.basename(abspath)
        return cls(
            path=abspath,
            rel_path=os.path.relpath(abspath, os.path.abspath(root)),
            language=language_for_file(name),
            stem=os.path.splitext(name)[0],
        )


def is_excluded(rel_path: str) -> bool:
    """Return True if a root-relative path sits under an excluded directory or is minified."""
    parts = rel_path.replace("\\", "/").split("/")
    if any(part in EXCLUDED_DIRS for part in parts[:-1]):
        return True
    return MINIFIED_MARKER in parts[-1]


def collect_source_files(root: str, extensions: list[str] | None = None) -> list[SourceFile]:
    """Collect source files under root, grouped by extension in allow-list order.

    Never raises: an unreadable directory is skipped, and a missing root
    yields an empty list.
    """
    extensions = extensions if extensions is not None else CODE_EXTENSIONS
    buckets: dict[str, list[SourceFile]] = {ext: [] for ext in extensions}
    if not os.path.isdir(root):
        return []

    for dirpath, dirnames, filenames in os.walk(root, onerror=lambda _err: None):
        dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDED_DIRS)
        for name in sorted(filenames):
            ext = os.path.splitext(name)[1].lower()
            if ext not in buckets:
                continue
            full = os.path.join(dirpath, name)
            if is_excluded(os.path.relpath(full, root)):
                continue
            buckets[ext].append(SourceFile.from_path(full, root))

    collected: list[SourceFile] = []
    for ext in extensions:
        collected.extend(buckets[ext])
    return collected


def read_source(source: SourceFile) -> str:
    """Read a source file's text. Raises FileUnreadable on any OS-level failure."""
    try:
        with open(source.path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as exc:
        raise FileUnreadable(source.path, exc.strerror or str(exc)) from exc
