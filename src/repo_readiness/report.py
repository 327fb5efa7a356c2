"""Markdown and JSON rendering of an assessment result."""

import json
from datetime import datetime

from repo_readiness.assessor import CategoryResult
from repo_readiness.config import CATEGORY_TITLE

_READINESS_BY_GRADE = {
    "A": "easy for an automated reader to reason about, with minimal improvements needed",
    "B": "mostly easy to reason about, with some minor enhancements recommended",
    "C": "moderately approachable but requires several improvements",
    "D": "hard to reason about and needs significant work",
    "F": "very hard to reason about and requires major restructuring",
}

_METRIC_LABELS = {
    "files_found": "Source files found",
    "units_analyzed": "Functions analyzed",
    "average_complexity": "Average cyclomatic complexity",
    "max_complexity": "Max cyclomatic complexity",
    "average_coupling": "Average imports per file",
    "max_coupling": "Max imports per file",
    "circular_dependencies": "Circular dependency cycles",
    "max_dependency_depth": "Max dependency depth",
    "average_dependency_depth": "Average dependency depth",
}


def _finding_lines(title: str, items: list[str], empty: str) -> list[str]:
    lines = [f"**{title}:**"]
    if items:
        lines.extend(f"- {item}" for item in items)
    else:
        lines.append(f"- {empty}")
    lines.append("")
    return lines


def format_markdown_report(
    result: CategoryResult,
    repo_name: str,
    repo_path: str = "",
    generated_at: datetime | None = None,
) -> str:
    """Format the category result as a markdown report."""
    grade = result.grade
    lines = ["# Repository Readiness Report", ""]
    lines.append(f"**Repository:** {repo_name}")
    if repo_path:
        lines.append(f"**Path:** {repo_path}")
    if generated_at is not None:
        lines.append(f"**Date:** {generated_at:%Y-%m-%d %H:%M:%S}")
    lines.append(f"**Grade:** {grade} ({result.score}/{result.max_score})")
    lines.append("")
    lines.append("---")
    lines.append("")
    lines.append("## Executive Summary")
    lines.append("")
    lines.append(
        f"The grade of **{grade}** indicates that the codebase is "
        f"{_READINESS_BY_GRADE.get(grade, _READINESS_BY_GRADE['F'])}."
    )
    lines.append("")

    lines.append(f"### {CATEGORY_TITLE}: {result.score}/{result.max_score}")
    lines.append("")
    lines.extend(_finding_lines("Strengths", result.strengths, "None identified"))
    lines.extend(_finding_lines("Weaknesses", result.weaknesses, "None identified"))
    lines.extend(
        _finding_lines("Recommendations", result.recommendations, "No specific recommendations")
    )

    if result.metrics:
        lines.append("**Metrics:**")
        lines.append("")
        lines.append("| Metric | Value |")
        lines.append("|--------|-------|")
        for key, value in result.metrics.items():
            lines.append(f"| {_METRIC_LABELS.get(key, key)} | {value} |")
        lines.append("")

    lines.append("---")
    return "\n".join(lines) + "\n"


def result_to_dict(result: CategoryResult) -> dict:
    """Plain-data view of a result for JSON output."""
    return {
        "category": result.category,
        "score": result.score,
        "max_score": result.max_score,
        "grade": result.grade,
        "files_analyzed": result.files_analyzed,
        "strengths": list(result.strengths),
        "weaknesses": list(result.weaknesses),
        "recommendations": list(result.recommendations),
        "metrics": dict(result.metrics),
    }


def format_json_report(result: CategoryResult, repo_name: str = "") -> str:
    """Format the category result as an indented JSON document."""
    output = {"repository": repo_name, **result_to_dict(result)}
    return json.dumps(output, indent=2)
