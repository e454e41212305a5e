"""Quality scoring — one 0-100 number from maintainability, security and docs."""

from __future__ import annotations

from typing import Sequence

from codebase_profiler.domain.entities import CodeMetrics, SecurityProfile
from codebase_profiler.domain.weights import DEFAULT_WEIGHTS, HeuristicWeights

DUPLICATION_PENALTY_CAP = 50
DUPLICATION_PENALTY_FACTOR = 2


def mean_documentation(scores: Sequence[int]) -> float:
    """Average per-file documentation score; ``0`` for an empty run."""
    return sum(scores) / len(scores) if scores else 0.0


def quality_score(
    metrics: CodeMetrics,
    security: SecurityProfile,
    documentation_scores: Sequence[int],
    weights: HeuristicWeights = DEFAULT_WEIGHTS,
) -> int:
    penalty = min(DUPLICATION_PENALTY_CAP, metrics.duplicate_code_percentage * DUPLICATION_PENALTY_FACTOR)
    score = (
        metrics.maintainability_index * weights.quality_maintainability
        + security.compliance_level * weights.quality_compliance
        + mean_documentation(documentation_scores) * weights.quality_documentation
        + (100 - penalty) * weights.quality_duplication
    )
    return max(0, min(100, round(score)))
