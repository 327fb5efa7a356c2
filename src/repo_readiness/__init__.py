"""Repository readiness analyzer: code complexity and dependency scoring."""

from repo_readiness.assessor import CategoryResult, assess_complexity

__all__ = ["CategoryResult", "assess_complexity"]
