"""Configuration constants for the repository readiness analyzer.

Language configurations for regex-based code analysis. Each entry maps a
language name to its file extensions, block style, and the pattern tables used
by the extractor, complexity scorer, and import counter in code_analysis.py.
"""

import os

CATEGORY_NAME = "CodeComplexity"
CATEGORY_TITLE = "Code Complexity & Dependencies"
MAX_SCORE = 25


# ---------------------------------------------------------------------------
# File collection
# ---------------------------------------------------------------------------

# Order matters: collected files are grouped by extension in this order.
CODE_EXTENSIONS = [
    ".cs", ".js", ".ts", ".tsx", ".jsx", ".py",
    ".java", ".go", ".rs", ".cpp", ".c", ".h",
]

# Directory names that hold dependencies, VCS metadata, or build output.
EXCLUDED_DIRS = {
    "node_modules",
    ".git",
    "bin",
    "obj",
    "dist",
    "build",
    "__pycache__",
    ".venv",
    "venv",
    "vendor",
    "target",
    "out",
    ".next",
    "coverage",
    "bundle",
    "bundles",
}

MINIFIED_MARKER = ".min."


# ---------------------------------------------------------------------------
# Sampling and scoring
# ---------------------------------------------------------------------------

# Each check looks at its own prefix of the collected file list.
SAMPLE_SIZES = {
    "complexity": 20,
    "coupling": 30,
    "dependencies": 50,
}

# Upper bounds are exclusive for averages ("below"), inclusive for depth.
COMPLEXITY_BANDS = {"excellent": 5, "good": 10, "moderate": 15, "max_alert": 20}
COMPLEXITY_POINTS = {"excellent": 8, "good": 6, "moderate": 3, "high": 0}

COUPLING_BANDS = {"low": 5, "moderate": 10, "high": 15, "max_alert": 20}
COUPLING_POINTS = {"low": 6, "moderate": 4, "high": 2, "very_high": 0}

CYCLE_BANDS = {"few": 2}
CYCLE_POINTS = {"none": 6, "few": 3, "many": 0}

DEPTH_BANDS = {"shallow": 3, "moderate": 5, "deep": 8}
DEPTH_POINTS = {"shallow": 5, "moderate": 3, "deep": 1, "very_deep": 0}

GRADE_CUTOFFS = [(0.9, "A"), (0.8, "B"), (0.7, "C"), (0.6, "D")]

DEFAULT_WORKERS = 1


# ---------------------------------------------------------------------------
# Shared pattern fragments
# ---------------------------------------------------------------------------

_NOT_CONTROL = r"(?!(?:if|for|foreach|while|switch|catch|with|return|function|sizeof|else|do)\b)"

BRACE_DECISION_PATTERNS = [
    r"\bif\s*\(",
    r"\belse\s+if\s*\(",
    r"\bwhile\s*\(",
    r"\bfor\s*\(",
    r"\bforeach\s*\(",
    r"\bcase\s+",
    r"\bcatch\s*\(",
    r"&&",
    r"\|\|",
    r"\?",
]

C_FAMILY_IMPORT_COUNT_PATTERNS = [r"^import\s+", r"^#include\s*[<\"]"]


# ---------------------------------------------------------------------------
# Pattern tables per language
# ---------------------------------------------------------------------------

CSHARP_CONFIG = {
    "file_extensions": {".cs"},
    "block_style": "braces",
    "function_pattern": (
        r"(?:public|private|protected|internal)\s+"
        r"(?:(?:static|async|override|virtual|sealed|new)\s+)*"
        r"\w+(?:<[\w,\s<>]+>)?(?:\[\])?\??\s+\w+\s*\([^)]*\)\s*\{"
    ),
    "decision_patterns": BRACE_DECISION_PATTERNS,
    "import_count_patterns": [r"^using\s+[\w.]+;", r"^using\s+static\s+[\w.]+;"],
    "import_target_patterns": [r"using\s+([\w.]+);"],
}

JAVASCRIPT_CONFIG = {
    "file_extensions": {".js", ".jsx", ".ts", ".tsx"},
    "block_style": "braces",
    "function_pattern": (
        r"function\s+\w+\s*\([^)]*\)\s*\{"
        r"|(?:const|let|var)\s+\w+\s*=\s*(?:async\s*)?\([^)]*\)\s*=>\s*\{"
        r"|\b" + _NOT_CONTROL + r"\w+\s*\([^)]*\)\s*\{"
    ),
    "decision_patterns": BRACE_DECISION_PATTERNS,
    "import_count_patterns": [r"^import\s+.*from\s+['\"]", r"require\s*\(['\"]"],
    "import_target_patterns": [
        r"import.*from\s+['\"]\.\.?/([\w/]+)['\"]",
        r"require\(['\"]\.\.?/([\w/]+)['\"]\)",
    ],
}

PYTHON_CONFIG = {
    "file_extensions": {".py"},
    "block_style": "indent",
    "function_pattern": r"(?:\basync[ \t]+)?\bdef[ \t]+\w+[ \t]*\([^)]*\)[ \t]*(?:->[^:\n]+)?:",
    "decision_patterns": [
        r"\bif\b",
        r"\belif\b",
        r"\bfor\b",
        r"\bwhile\b",
        r"\bexcept\b",
        r"\bcase\b",
        r"\band\b",
        r"\bor\b",
    ],
    "import_count_patterns": [r"^import\s+[\w.]+", r"^from\s+[\w.]+\s+import"],
    "import_target_patterns": [r"\bfrom\s+([\w.]+)\s+import", r"\bimport\s+([\w.]+)"],
}

JAVA_CONFIG = {
    "file_extensions": {".java"},
    "block_style": "braces",
    "function_pattern": (
        r"(?:public|private|protected)\s+(?:static\s+)?(?:final\s+)?"
        r"\w+(?:<[\w,\s]+>)?(?:\[\])?\s+\w+\s*\([^)]*\)\s*"
        r"(?:throws\s+[\w.,\s]+)?\{"
    ),
    "decision_patterns": BRACE_DECISION_PATTERNS,
    "import_count_patterns": [r"^import\s+[\w.]+;"],
    "import_target_patterns": [r"import\s+([\w.]+);"],
}

GO_CONFIG = {
    "file_extensions": {".go"},
    "block_style": "braces",
    "function_pattern": (
        r"func\s+(?:\([\w\s*]+\)\s+)?\w+\s*\([^)]*\)\s*"
        r"(?:\([^)]*\)|[\w\[\]*.]+)?\s*\{"
    ),
    "decision_patterns": [r"\bif\b", r"\bfor\b", r"\bcase\b", r"&&", r"\|\|"],
    "import_count_patterns": [r"^import\s+\(", r"^import\s+\""],
    "import_target_patterns": [],
}

RUST_CONFIG = {
    "file_extensions": {".rs"},
    "block_style": "braces",
    "function_pattern": r"\bfn\s+\w+\s*(?:<[^>{]*>)?\s*\([^)]*\)\s*(?:->\s*[^{;]+)?\{",
    "decision_patterns": [
        r"\bif\b",
        r"\bwhile\b",
        r"\bfor\b",
        r"\bloop\b",
        r"=>",
        r"&&",
        r"\|\|",
        r"\?",
    ],
    "import_count_patterns": [r"^use\s+[\w:]+"],
    "import_target_patterns": [],
}

C_FAMILY_CONFIG = {
    "file_extensions": {".c", ".cpp", ".h"},
    "block_style": "braces",
    "function_pattern": r"\b" + _NOT_CONTROL + r"\w+\s*\([^)]*\)\s*(?:const\s*)?\{",
    "decision_patterns": BRACE_DECISION_PATTERNS,
    "import_count_patterns": C_FAMILY_IMPORT_COUNT_PATTERNS,
    "import_target_patterns": [],
}


# ---------------------------------------------------------------------------
# Combined lookup: language name -> config dict
# ---------------------------------------------------------------------------

LANGUAGE_CONFIGS = {
    "csharp": CSHARP_CONFIG,
    "javascript": JAVASCRIPT_CONFIG,
    "python": PYTHON_CONFIG,
    "java": JAVA_CONFIG,
    "go": GO_CONFIG,
    "rust": RUST_CONFIG,
    "c": C_FAMILY_CONFIG,
}

# Used for an allow-listed extension that no language claims.
FALLBACK_LANGUAGE = "c"


def language_for_file(filepath: str) -> str:
    """Return the language tag for a file's extension."""
    ext = os.path.splitext(filepath)[1].lower()
    for name, config in LANGUAGE_CONFIGS.items():
        if ext in config["file_extensions"]:
            return name
    return FALLBACK_LANGUAGE


def config_for_language(language: str) -> dict:
    """Return the pattern table for a language tag, falling back to the C family."""
    return LANGUAGE_CONFIGS.get(language, LANGUAGE_CONFIGS[FALLBACK_LANGUAGE])
