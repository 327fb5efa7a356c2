"""Code Complexity & Dependencies assessment.

Runs four banded checks over bounded samples of the repository's source files
and merges them into one category result:

1. Cyclomatic complexity (8 points) over the first 20 files.
2. File coupling (6 points) over the first 30 files.
3. Circular dependencies (6 points) over the first 50 files.
4. Dependency depth (5 points) over the same 50 files.

Each check returns its own CheckOutcome; assess_complexity() is the single
entry point and never raises for per-file problems.
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TypeVar

from repo_readiness.code_analysis import (
    CodeUnit,
    analyze_units,
    count_imports,
    extract_import_targets,
)
from repo_readiness.collector import (
    FileUnreadable,
    SourceFile,
    collect_source_files,
    read_source,
)
from repo_readiness.config import (
    CATEGORY_NAME,
    COMPLEXITY_BANDS,
    COMPLEXITY_POINTS,
    COUPLING_BANDS,
    COUPLING_POINTS,
    CYCLE_BANDS,
    CYCLE_POINTS,
    DEFAULT_WORKERS,
    DEPTH_BANDS,
    DEPTH_POINTS,
    GRADE_CUTOFFS,
    MAX_SCORE,
    SAMPLE_SIZES,
)
from repo_readiness.dependency_graph import (
    DependencyGraph,
    build_dependency_graph,
    compute_depths,
    detect_cycles,
)
from repo_readiness.utils import debug, log

T = TypeVar("T")

NO_FILES_MESSAGE = "No code files found to analyze"


# ============================================
# Result types
# ============================================

@dataclass
class CheckOutcome:
    """Points and findings produced by one banded check."""
    points: int = 0
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class CategoryResult:
    """Score and findings for the whole category."""
    category: str
    max_score: int
    score: int = 0
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    metrics: dict = field(default_factory=dict)
    files_analyzed: int = 0

    @property
    def grade(self) -> str:
        return grade_for(self.score, self.max_score)


def grade_for(score: int, max_score: int) -> str:
    """Letter grade for a score as a fraction of its maximum."""
    if max_score <= 0:
        return "F"
    ratio = score / max_score
    for cutoff, letter in GRADE_CUTOFFS:
        if ratio >= cutoff:
            return letter
    return "F"


def merge_outcomes(outcomes: list[CheckOutcome], max_score: int = MAX_SCORE) -> CategoryResult:
    """Combine check outcomes in order, capping the score at max_score."""
    result = CategoryResult(category=CATEGORY_NAME, max_score=max_score)
    total = 0
    for outcome in outcomes:
        total += outcome.points
        result.strengths.extend(outcome.strengths)
        result.weaknesses.extend(outcome.weaknesses)
        result.recommendations.extend(outcome.recommendations)
    result.score = min(total, max_score)
    return result


# ============================================
# File scanning
# ============================================

def scan_files(
    files: list[SourceFile],
    scan: Callable[[str, SourceFile], T],
    workers: int = DEFAULT_WORKERS,
) -> list[T | None]:
    """Read each file and apply scan to its text, preserving input order.

    Unreadable files yield None. With workers > 1 the files are scanned on a
    thread pool; results are still returned in input order.
    """

    def _scan_one(source: SourceFile) -> T | None:
        try:
            text = read_source(source)
        except FileUnreadable as exc:
            debug(CATEGORY_NAME, f"Skipping unreadable file {exc.path}: {exc.reason}")
            return None
        return scan(text, source)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(_scan_one, files))
    return [_scan_one(source) for source in files]


# ============================================
# Checks
# ============================================

def assess_cyclomatic_complexity(
    files: list[SourceFile], workers: int = DEFAULT_WORKERS
) -> tuple[CheckOutcome, dict]:
    """Band the average unit complexity over the complexity sample."""
    sample = files[:SAMPLE_SIZES["complexity"]]
    per_file = scan_files(sample, analyze_units, workers)
    units: list[CodeUnit] = [unit for found in per_file if found for unit in found]

    outcome = CheckOutcome()
    if not units:
        return outcome, {"units_analyzed": 0}

    scores = [unit.complexity for unit in units]
    avg = sum(scores) / len(scores)
    peak = max(scores)
    metrics = {
        "units_analyzed": len(units),
        "average_complexity": round(avg, 2),
        "max_complexity": peak,
    }

    if avg < COMPLEXITY_BANDS["excellent"]:
        outcome.points = COMPLEXITY_POINTS["excellent"]
        outcome.strengths.append(f"Excellent: Average cyclomatic complexity is {avg:.1f} (very simple)")
    elif avg < COMPLEXITY_BANDS["good"]:
        outcome.points = COMPLEXITY_POINTS["good"]
        outcome.strengths.append(f"Good: Average cyclomatic complexity is {avg:.1f} (manageable)")
    elif avg < COMPLEXITY_BANDS["moderate"]:
        outcome.points = COMPLEXITY_POINTS["moderate"]
        outcome.weaknesses.append(f"Moderate complexity: Average cyclomatic complexity is {avg:.1f}")
        outcome.recommendations.append(
            "Consider refactoring complex methods to reduce cyclomatic complexity"
        )
    else:
        outcome.points = COMPLEXITY_POINTS["high"]
        outcome.weaknesses.append(
            f"High complexity: Average cyclomatic complexity is {avg:.1f} (hard for AI)"
        )
        outcome.recommendations.append(
            "Reduce cyclomatic complexity - AI struggles with highly complex methods"
        )

    if peak > COMPLEXITY_BANDS["max_alert"]:
        outcome.weaknesses.append(f"Some methods have very high complexity (max: {peak})")

    return outcome, metrics


def _coupling_of(text: str, source: SourceFile) -> int:
    return count_imports(text, source.language)


def assess_file_coupling(
    files: list[SourceFile], workers: int = DEFAULT_WORKERS
) -> tuple[CheckOutcome, dict]:
    """Band the average import count over the coupling sample."""
    sample = files[:SAMPLE_SIZES["coupling"]]
    counts = [c for c in scan_files(sample, _coupling_of, workers) if c is not None]

    outcome = CheckOutcome()
    if not counts:
        return outcome, {}

    avg = sum(counts) / len(counts)
    peak = max(counts)
    metrics = {"average_coupling": round(avg, 2), "max_coupling": peak}

    if avg < COUPLING_BANDS["low"]:
        outcome.points = COUPLING_POINTS["low"]
        outcome.strengths.append(f"Low coupling: Average {avg:.1f} dependencies per file")
    elif avg < COUPLING_BANDS["moderate"]:
        outcome.points = COUPLING_POINTS["moderate"]
        outcome.strengths.append(f"Moderate coupling: Average {avg:.1f} dependencies per file")
    elif avg < COUPLING_BANDS["high"]:
        outcome.points = COUPLING_POINTS["high"]
        outcome.weaknesses.append(f"High coupling: Average {avg:.1f} dependencies per file")
        outcome.recommendations.append("Reduce file coupling to improve AI context understanding")
    else:
        outcome.points = COUPLING_POINTS["very_high"]
        outcome.weaknesses.append(f"Very high coupling: Average {avg:.1f} dependencies per file")
        outcome.recommendations.append(
            "Refactor to reduce dependencies - exceeds AI context window capacity"
        )

    if peak > COUPLING_BANDS["max_alert"]:
        outcome.weaknesses.append(f"Some files have excessive dependencies (max: {peak})")

    return outcome, metrics


def _targets_of(text: str, source: SourceFile) -> list[str]:
    return extract_import_targets(text, source.language)


def build_sample_graph(
    files: list[SourceFile], workers: int = DEFAULT_WORKERS
) -> DependencyGraph:
    """Build the dependency graph for the dependency-check sample."""
    sample = files[:SAMPLE_SIZES["dependencies"]]
    targets = [found or [] for found in scan_files(sample, _targets_of, workers)]
    return build_dependency_graph(sample, targets)


def assess_circular_dependencies(graph: DependencyGraph) -> tuple[CheckOutcome, dict]:
    """Band the number of cycles found in the dependency graph."""
    cycles = detect_cycles(graph)
    for cycle in cycles:
        debug(CATEGORY_NAME, "Cycle: " + " -> ".join(cycle + cycle[:1]))

    outcome = CheckOutcome()
    count = len(cycles)
    if count == 0:
        outcome.points = CYCLE_POINTS["none"]
        outcome.strengths.append("No circular dependencies detected")
    elif count <= CYCLE_BANDS["few"]:
        outcome.points = CYCLE_POINTS["few"]
        outcome.weaknesses.append(f"Found {count} circular dependency cycle(s)")
        outcome.recommendations.append("Break circular dependencies to improve code clarity")
    else:
        outcome.points = CYCLE_POINTS["many"]
        outcome.weaknesses.append(f"Found {count} circular dependency cycles (confuses AI)")
        outcome.recommendations.append(
            "Significant refactoring needed - circular dependencies prevent clear reasoning"
        )

    return outcome, {"circular_dependencies": count}


def assess_dependency_depth(graph: DependencyGraph) -> tuple[CheckOutcome, dict]:
    """Band the deepest import chain in the dependency graph."""
    depths = compute_depths(graph)
    outcome = CheckOutcome()
    if not depths:
        return outcome, {}

    peak = max(depths.values())
    avg = sum(depths.values()) / len(depths)
    metrics = {"max_dependency_depth": peak, "average_dependency_depth": round(avg, 2)}

    if peak <= DEPTH_BANDS["shallow"]:
        outcome.points = DEPTH_POINTS["shallow"]
        outcome.strengths.append(f"Shallow dependency chains: Max depth {peak} (easy to understand)")
    elif peak <= DEPTH_BANDS["moderate"]:
        outcome.points = DEPTH_POINTS["moderate"]
        outcome.strengths.append(f"Moderate dependency depth: Max {peak} hops")
    elif peak <= DEPTH_BANDS["deep"]:
        outcome.points = DEPTH_POINTS["deep"]
        outcome.weaknesses.append(f"Deep dependency chains: Max depth {peak}")
        outcome.recommendations.append("Flatten dependency chains for better AI comprehension")
    else:
        outcome.points = DEPTH_POINTS["very_deep"]
        outcome.weaknesses.append(
            f"Very deep dependency chains: Max depth {peak} (exceeds AI comprehension budget)"
        )
        outcome.recommendations.append(
            "Critical: Dependency depth requires understanding too much context for AI"
        )

    return outcome, metrics


# ============================================
# Entry point
# ============================================

def assess_complexity(root: str, workers: int = DEFAULT_WORKERS) -> CategoryResult:
    """Assess code complexity and dependencies for the repository at root."""
    log(CATEGORY_NAME, "Assessing Code Complexity & Dependencies...", style="bold yellow")

    files = collect_source_files(root)
    debug(CATEGORY_NAME, f"Collected {len(files)} source files")
    if not files:
        result = merge_outcomes([])
        result.weaknesses.append(NO_FILES_MESSAGE)
        return result

    complexity, complexity_metrics = assess_cyclomatic_complexity(files, workers)
    coupling, coupling_metrics = assess_file_coupling(files, workers)
    graph = build_sample_graph(files, workers)
    cycles, cycle_metrics = assess_circular_dependencies(graph)
    depth, depth_metrics = assess_dependency_depth(graph)

    result = merge_outcomes([complexity, coupling, cycles, depth])
    result.files_analyzed = len(files)
    result.metrics = {
        "files_found": len(files),
        **complexity_metrics,
        **coupling_metrics,
        **cycle_metrics,
        **depth_metrics,
    }
    debug(CATEGORY_NAME, f"Score: {result.score}/{result.max_score}")
    return result
