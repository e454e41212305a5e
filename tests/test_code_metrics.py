"""Tests for code_metrics -- line classes, complexity, duplication and MI."""

import pytest

from codebase_profiler.domain.entities import CodeMetrics
from codebase_profiler.domain.value_objects import TechnicalDebt
from codebase_profiler.services.code_metrics import (
    classify_lines,
    complexity,
    documentation_score,
    duplicate_line_count,
    maintainability_index,
    measure_file,
    summarize,
)


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------


def test_classify_python_lines():
    counts = classify_lines("x = 1\n# note\n\n", "python")
    assert (counts.total, counts.code, counts.comment, counts.blank) == (3, 1, 1, 1)


def test_classify_c_style_comments():
    counts = classify_lines("/**\n * doc\n */\nint x;\n", "java")
    assert counts.comment == 3
    assert counts.code == 1


def test_unlisted_language_has_no_comment_lines():
    counts = classify_lines("# heading\ntext\n", "markdown")
    assert counts.comment == 0
    assert counts.code == 2


def test_empty_content_has_no_lines():
    assert classify_lines("", "python").total == 0


# ---------------------------------------------------------------------------
# Complexity
# ---------------------------------------------------------------------------


def test_python_complexity_counts_branches():
    content = "if a and b:\n    pass\nelse:\n    pass\n"
    assert complexity(content, "python") == 4


def test_unlisted_language_uses_javascript_tokens():
    assert complexity("if (a && b) {}", "unknown") == 3


def test_straight_line_code_has_complexity_one():
    assert complexity("x = 1\ny = 2\n", "python") == 1


# ---------------------------------------------------------------------------
# Duplication
# ---------------------------------------------------------------------------


def test_three_identical_lines_count_two_duplicates():
    assert duplicate_line_count("a = 1\na = 1\na = 1\n") == 2


def test_duplicates_compare_trimmed_lines_and_skip_blanks():
    assert duplicate_line_count("  foo\nfoo  \n\n\n") == 1


# ---------------------------------------------------------------------------
# Maintainability and documentation
# ---------------------------------------------------------------------------


def test_maintainability_without_code_is_perfect():
    assert maintainability_index(0, 5, 3) == 100


def test_maintainability_known_value():
    assert maintainability_index(100, 20, 0) == 58


def test_maintainability_is_clamped():
    assert maintainability_index(10, 1, 0) == 100
    assert maintainability_index(10_000, 5_000, 0) == 0


def test_comments_raise_maintainability():
    assert maintainability_index(100, 20, 50) > maintainability_index(100, 20, 0)


def test_documentation_score():
    assert documentation_score(0, 5) == 100
    assert documentation_score(10, 5) == 50
    assert documentation_score(1, 5) == 100


def test_comment_only_file_measures_perfect_maintainability():
    metrics = measure_file("# only a comment\n", "python")
    assert metrics.lines.code == 0
    assert metrics.maintainability_index == 100
    assert metrics.documentation_score == 100


# ---------------------------------------------------------------------------
# Run totals
# ---------------------------------------------------------------------------


def test_summarize_folds_per_file_metrics():
    totals = summarize(
        [
            measure_file("a = 1\na = 1\na = 1\n", "python"),
            measure_file("# c\n\n\n", "python"),
        ]
    )
    assert totals.total_lines == 6
    assert totals.code_lines == 3
    assert totals.comment_lines == 1
    assert totals.blank_lines == 2
    assert totals.complexity == 2
    assert totals.duplicate_code_percentage == pytest.approx(33.33)
    assert totals.technical_debt == "4m"


def test_summarize_empty_run():
    assert summarize([]) == CodeMetrics()


# ---------------------------------------------------------------------------
# Technical debt rendering
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "0m"), (45, "45m"), (90, "1.5h"), (2880, "2d")],
)
def test_technical_debt_units(minutes, expected):
    assert str(TechnicalDebt(minutes)) == expected


def test_technical_debt_without_code_is_zero():
    assert str(TechnicalDebt.estimate(0, 10)) == "0m"
    assert TechnicalDebt.estimate(100, 5).minutes == pytest.approx(20)
