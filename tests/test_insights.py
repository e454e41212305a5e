"""Tests for insights -- summary line and recommended analysis tools."""

from dataclasses import replace

import pytest

from codebase_profiler.domain.entities import FrameworkCategory, FrameworkInfo, LanguageInfo
from codebase_profiler.services.analyze_codebase import analyze_codebase
from codebase_profiler.services.insights import UNIVERSAL_TOOLS, language_summary, recommended_tools


@pytest.fixture
def empty_result():
    return analyze_codebase([])


def _framework(name, confidence):
    return FrameworkInfo(
        name=name,
        language="javascript",
        confidence=confidence,
        category=FrameworkCategory.FRONTEND,
        ecosystem="web",
    )


def test_summary_of_empty_run(empty_result):
    assert language_summary(empty_result) == "Primary: unknown (0%)"


def test_summary_lists_two_others_and_two_frameworks(empty_result):
    languages = tuple(
        LanguageInfo(name=name, confidence=conf)
        for name, conf in (("typescript", 82), ("css", 40), ("html", 35), ("json", 20))
    )
    result = replace(
        empty_result,
        primary_language=languages[0],
        all_languages=languages,
        frameworks=(_framework("React", 90), _framework("Next.js", 80), _framework("Vue.js", 55)),
    )
    assert language_summary(result) == (
        "Primary: typescript (82%), Others: css (40%), html (35%), Frameworks: React, Next.js"
    )


def test_recommended_tools_for_python(empty_result):
    result = replace(empty_result, all_languages=(LanguageInfo(name="python", confidence=90),))
    assert recommended_tools(result) == ["Bandit", "PyLint", "Safety", *UNIVERSAL_TOOLS]


def test_recommended_tools_are_deduplicated(empty_result):
    result = replace(
        empty_result,
        all_languages=(
            LanguageInfo(name="typescript", confidence=80),
            LanguageInfo(name="javascript", confidence=40),
        ),
        frameworks=(_framework("React", 90), _framework("Next.js", 80)),
    )
    tools = recommended_tools(result)
    assert tools == [
        "ESLint",
        "SonarJS",
        "React Security",
        "JSX A11y",
        *UNIVERSAL_TOOLS,
    ]


def test_universal_tools_always_recommended(empty_result):
    assert recommended_tools(empty_result) == list(UNIVERSAL_TOOLS)
