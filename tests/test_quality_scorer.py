"""Tests for quality_scorer -- the blended 0-100 quality number."""

from codebase_profiler.domain.entities import CodeMetrics, SecurityProfile
from codebase_profiler.domain.weights import HeuristicWeights
from codebase_profiler.services.quality_scorer import mean_documentation, quality_score


def test_mean_documentation():
    assert mean_documentation([]) == 0
    assert mean_documentation([100, 50]) == 75


def test_weighted_blend():
    metrics = CodeMetrics(maintainability_index=80, duplicate_code_percentage=10.0)
    security = SecurityProfile(compliance_level=90)
    # 80*0.4 + 90*0.3 + 60*0.2 + (100 - 20)*0.1
    assert quality_score(metrics, security, [60]) == 79


def test_empty_run_scores_eighty():
    assert quality_score(CodeMetrics(), SecurityProfile(), []) == 80


def test_duplication_penalty_is_capped():
    metrics = CodeMetrics(maintainability_index=0, duplicate_code_percentage=40.0)
    security = SecurityProfile(compliance_level=0)
    assert quality_score(metrics, security, []) == 5


def test_score_is_clamped():
    weights = HeuristicWeights(quality_maintainability=2.0)
    assert quality_score(CodeMetrics(), SecurityProfile(), [100], weights) == 100
