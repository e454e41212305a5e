"""Tests for analyze_codebase -- the end-to-end pipeline and its guarantees."""

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict

import pytest

from codebase_profiler.domain.entities import LanguageInfo, ProjectType, RiskLevel
from codebase_profiler.domain.exceptions import InvalidInputError
from codebase_profiler.domain.weights import HeuristicWeights
from codebase_profiler.services.analyze_codebase import (
    AnalyzeCodebaseUseCase,
    accuracy,
    analyze_codebase,
)

PY_APP = {"filename": "app.py", "content": 'def main():\n    print("hi")\n'}

TSX_APP = {
    "filename": "src/index.tsx",
    "content": (
        "import React from 'react';\n"
        "\n"
        "export default function App() {\n"
        '  return <div className="app">Hello</div>;\n'
        "}\n"
    ),
}

MIXED_PROJECT = [
    TSX_APP,
    PY_APP,
    {"filename": "package.json", "content": '{"dependencies": {"react": "^18.2.0"}}'},
    {"filename": "public/index.html", "content": "<html><body><div id='root'></div></body></html>\n"},
    {"filename": "server/api/handler.py", "content": "import os\n\nos.system('ls')\neval(cmd)\n"},
    {"filename": "Dockerfile", "content": "FROM python:3.12\n"},
    {"filename": "notes.unknownext", "content": "zzz qqq\n"},
]


def _snapshot(result):
    return json.dumps(asdict(result), sort_keys=True, default=str)


# ---------------------------------------------------------------------------
# Empty and degenerate input
# ---------------------------------------------------------------------------


def test_empty_input_returns_a_result():
    result = analyze_codebase([])
    assert result.total_files == 0
    assert result.all_languages == ()
    assert result.primary_language.name == "unknown"
    assert result.primary_language.confidence == 0
    assert result.frameworks == ()
    assert result.project_structure.type is ProjectType.UNKNOWN
    assert result.dependencies == ()
    assert result.code_metrics.total_lines == 0
    assert result.code_metrics.maintainability_index == 100
    assert result.accuracy == 0
    assert result.quality_score == 80


def test_unrecognised_file_still_counts():
    result = analyze_codebase([{"filename": "notes.unknownext", "content": "zzz qqq\nzzz qqq\n"}])
    assert result.total_files == 1
    assert result.all_languages == ()
    assert result.file_analyses[0].language.name == "unknown"
    assert result.code_metrics.total_lines == 2
    assert result.file_analyses[0].duplicate_line_count == 1


@pytest.mark.parametrize("bad", ["app.py", [{"filename": 1, "content": "x"}], [{"filename": "a"}]])
def test_invalid_input_is_rejected(bad):
    with pytest.raises(InvalidInputError):
        analyze_codebase(bad)


# ---------------------------------------------------------------------------
# Detection examples
# ---------------------------------------------------------------------------


def test_python_function():
    result = analyze_codebase([PY_APP])
    assert result.file_analyses[0].language.name == "python"
    assert result.file_analyses[0].language.confidence >= 70
    assert result.primary_language.name == "python"
    assert result.primary_language.confidence == 91
    assert {"extension", "syntax"} <= set(result.detection_methods)
    assert list(result.detection_methods) == sorted(result.detection_methods)


def test_react_typescript_component():
    result = analyze_codebase([TSX_APP])
    assert result.primary_language.name == "typescript"
    react = next(fw for fw in result.frameworks if fw.name == "React")
    assert react.confidence > 60


def test_manifest_dependency():
    result = analyze_codebase(
        [{"filename": "package.json", "content": '{"dependencies": {"express": "^4.18.0"}}'}]
    )
    assert len(result.dependencies) == 1
    assert result.dependencies[0].type.value == "production"
    assert "npm" in result.package_managers


def test_risky_calls_raise_the_risk_level():
    single = analyze_codebase([{"filename": "x.py", "content": "eval(data)\n"}])
    assert single.security_profile.vulnerable_patterns == ("eval() call",)
    assert single.file_analyses[0].security_issue_count >= 1

    many = analyze_codebase([{"filename": "x.py", "content": "eval(a)\neval(b)\nexec(c)\n"}])
    assert many.security_profile.risk_level is RiskLevel.MEDIUM


def test_repeated_line_counts_two_duplicates():
    result = analyze_codebase([{"filename": "x.py", "content": "a = 1\na = 1\na = 1\n"}])
    assert result.file_analyses[0].duplicate_line_count == 2


def test_comment_only_file_has_perfect_maintainability():
    result = analyze_codebase([{"filename": "notes.py", "content": "# nothing to run here\n"}])
    assert result.file_analyses[0].code_lines == 0
    assert result.file_analyses[0].maintainability_index == 100


# ---------------------------------------------------------------------------
# Whole-result properties
# ---------------------------------------------------------------------------


def test_all_confidences_in_range():
    result = analyze_codebase(MIXED_PROJECT)
    scores = [
        *(lang.confidence for lang in result.all_languages),
        *(fw.confidence for fw in result.frameworks),
        *(fa.language.confidence for fa in result.file_analyses),
        result.project_structure.confidence,
        result.accuracy,
        result.quality_score,
        result.security_profile.compliance_level,
        result.code_metrics.maintainability_index,
    ]
    assert all(0 <= s <= 100 for s in scores)


def test_languages_are_ranked_and_primary_is_first():
    result = analyze_codebase(MIXED_PROJECT)
    confidences = [lang.confidence for lang in result.all_languages]
    assert confidences == sorted(confidences, reverse=True)
    assert result.primary_language == result.all_languages[0]
    assert "unknown" not in {lang.name for lang in result.all_languages}


def test_result_shape_for_mixed_project():
    result = analyze_codebase(MIXED_PROJECT)
    assert result.total_files == len(MIXED_PROJECT)
    assert len(result.file_analyses) == len(MIXED_PROJECT)
    assert [fa.filename for fa in result.file_analyses] == [f["filename"] for f in MIXED_PROJECT]
    assert "React" in {fw.name for fw in result.frameworks}
    assert result.project_structure.type is ProjectType.WEB
    assert result.security_profile.risk_level is RiskLevel.LOW
    assert set(result.security_profile.vulnerable_patterns) == {"os.system() call", "eval() call"}


def test_repeated_runs_are_identical(fixed_clock):
    use_case = AnalyzeCodebaseUseCase(clock=fixed_clock)
    assert _snapshot(use_case.execute(MIXED_PROJECT)) == _snapshot(use_case.execute(MIXED_PROJECT))


def test_library_entry_point_is_reproducible_with_a_fixed_clock(fixed_clock):
    first = analyze_codebase(MIXED_PROJECT, clock=fixed_clock)
    second = analyze_codebase(MIXED_PROJECT, clock=fixed_clock)
    assert first.analysis_time_ms == 0.0
    assert _snapshot(first) == _snapshot(second)


def test_executor_gives_the_same_result(fixed_clock):
    sequential = AnalyzeCodebaseUseCase(clock=fixed_clock).execute(MIXED_PROJECT)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = AnalyzeCodebaseUseCase(executor=pool, clock=fixed_clock, parallel_threshold=1).execute(
            MIXED_PROJECT
        )
    assert _snapshot(parallel) == _snapshot(sequential)


def test_analysis_time_comes_from_the_clock():
    ticks = iter([1.0, 1.25])
    result = AnalyzeCodebaseUseCase(clock=lambda: next(ticks)).execute([PY_APP])
    assert result.analysis_time_ms == 250.0


def test_max_files_is_enforced():
    with pytest.raises(InvalidInputError, match="Too many files"):
        AnalyzeCodebaseUseCase(max_files=1).execute([PY_APP, TSX_APP])


def test_custom_weights_reach_the_merger():
    weights = HeuristicWeights(syntax=0.0, pattern=0.0, keyword=0.0)
    result = analyze_codebase([PY_APP], weights=weights)
    assert result.file_analyses[0].language.name == "python"
    assert result.file_analyses[0].language.confidence == 56


# ---------------------------------------------------------------------------
# Accuracy
# ---------------------------------------------------------------------------


def test_accuracy_with_syntax_bonus():
    result = analyze_codebase([PY_APP])
    # 91 * 0.7 + 0 + 5
    assert result.accuracy == pytest.approx(68.7)


def test_accuracy_with_shebang_bonus():
    result = analyze_codebase([{"filename": "bin/run", "content": "#!/usr/bin/env python3\nprint('x')\n"}])
    assert "shebang" in result.detection_methods
    expected = result.primary_language.confidence * 0.7 + 10
    assert result.accuracy == pytest.approx(round(expected, 2))


def test_accuracy_without_languages():
    assert accuracy([], [], frozenset()) == 0


def test_accuracy_weights_mean_language_confidence():
    assert accuracy([LanguageInfo(name="python", confidence=100)] * 2, [], frozenset()) == 70
