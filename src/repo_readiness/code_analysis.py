"""Regex-based code analysis for repository readiness scoring.

Extracts function-like units from source text, scores their cyclomatic
complexity, and counts import statements. Each language has its own pattern
table in config.LANGUAGE_CONFIGS; nothing here builds a syntax tree, so the
results are heuristics with known false positives and negatives.

Everything in this module is a pure function of its text input.
"""

import re
from dataclasses import dataclass

from repo_readiness.collector import SourceFile
from repo_readiness.config import config_for_language


@dataclass(frozen=True)
class CodeUnit:
    """A function or method candidate and its complexity estimate."""

    file: SourceFile
    text: str
    start: int
    complexity: int


# ---------------------------------------------------------------------------
# Pattern compilation
# ---------------------------------------------------------------------------

_pattern_cache: dict = {}


def _compile(pattern: str, flags: int = 0) -> re.Pattern:
    """Compile a pattern once and reuse it across files."""
    key = (pattern, flags)
    compiled = _pattern_cache.get(key)
    if compiled is None:
        compiled = re.compile(pattern, flags)
        _pattern_cache[key] = compiled
    return compiled


# ---------------------------------------------------------------------------
# Unit boundaries
# ---------------------------------------------------------------------------


def find_block_end(text: str, open_index: int) -> int | None:
    """Return the index of the brace that closes the one at open_index.

    Returns None if the text ends before the braces balance.
    """
    depth = 0
    for i in range(open_index, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def _line_indent(text: str, index: int) -> int:
    """Width of the leading whitespace on the line containing index."""
    line_start = text.rfind("\n", 0, index) + 1
    prefix = text[line_start:index].expandtabs()
    return len(prefix) - len(prefix.lstrip())


def find_indented_block_end(text: str, signature_start: int, signature_end: int) -> int | None:
    """Return the end offset of an indentation-delimited body.

    The body is every following line that is blank or indented deeper than
    the signature line, plus any statement on the signature line itself.
    Returns None when there is no body at all.
    """
    indent = _line_indent(text, signature_start)
    line_end = text.find("\n", signature_end)
    if line_end == -1:
        line_end = len(text)

    end = None
    inline = text[signature_end:line_end].split("#", 1)[0].strip()
    if inline:
        end = line_end

    pos = line_end + 1
    while pos < len(text):
        next_end = text.find("\n", pos)
        if next_end == -1:
            next_end = len(text)
        line = text[pos:next_end]
        if line.strip():
            expanded = line.expandtabs()
            if len(expanded) - len(expanded.lstrip()) <= indent:
                break
            end = next_end
        pos = next_end + 1
    return end


def extract_units(text: str, language: str) -> list[tuple[int, str]]:
    """Return (start offset, text) for each function-like unit, in order of appearance.

    Brace languages end a unit at the brace that balances the first '{' at or
    after the end of the signature; an unbalanced tail is dropped. Indented
    languages end a unit at the last line indented deeper than the signature.
    Nested functions come back as separate, overlapping units.
    """
    config = config_for_language(language)
    pattern = _compile(config["function_pattern"], re.MULTILINE)
    units: list[tuple[int, str]] = []

    for match in pattern.finditer(text):
        if config["block_style"] == "indent":
            end = find_indented_block_end(text, match.start(), match.end())
        else:
            open_index = text.find("{", max(match.end() - 1, match.start()))
            closing = find_block_end(text, open_index) if open_index != -1 else None
            end = closing + 1 if closing is not None else None
        if end is None:
            continue
        units.append((match.start(), text[match.start():end]))

    return units


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------


def measure_cyclomatic_complexity(unit_text: str, language: str) -> int:
    """Approximate cyclomatic complexity: 1 + number of decision points."""
    config = config_for_language(language)
    complexity = 1
    for pattern in config["decision_patterns"]:
        complexity += len(_compile(pattern).findall(unit_text))
    return complexity


def analyze_units(text: str, source: SourceFile) -> list[CodeUnit]:
    """Extract every unit from a file's text and score it."""
    return [
        CodeUnit(
            file=source,
            text=unit_text,
            start=start,
            complexity=measure_cyclomatic_complexity(unit_text, source.language),
        )
        for start, unit_text in extract_units(text, source.language)
    ]


def count_imports(text: str, language: str) -> int:
    """Count import/include statements: the file's coupling estimate."""
    config = config_for_language(language)
    return sum(
        len(_compile(pattern, re.MULTILINE).findall(text))
        for pattern in config["import_count_patterns"]
    )


def extract_import_targets(text: str, language: str) -> list[str]:
    """Return raw import target strings in the order they appear in the text.

    Languages without capture patterns yield an empty list.
    """
    config = config_for_language(language)
    found: list[tuple[int, int, str]] = []
    for order, pattern in enumerate(config["import_target_patterns"]):
        for match in _compile(pattern, re.MULTILINE).finditer(text):
            found.append((match.start(1), order, match.group(1)))
    found.sort()
    return [target for _pos, _order, target in found]
