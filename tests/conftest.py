"""Shared test fixtures — reduces boilerplate across test modules.

Provides:
- ``make_view`` — builds a ProjectView from ``(filename, content)`` pairs
- ``make_analysis`` — builds a FileAnalysis with only the fields a test cares about
- ``client`` — TestClient against a fresh app, with its lifespan running
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from codebase_profiler.domain.entities import FileAnalysis, LanguageInfo
from codebase_profiler.domain.value_objects import ProjectView
from codebase_profiler.infrastructure.config import get_settings
from codebase_profiler.interface.app import create_app
from codebase_profiler.services.file_intake import file_extension, to_source_file


def build_view(*files: tuple[str, str]) -> ProjectView:
    return ProjectView.of(to_source_file(name, content) for name, content in files)


def build_analysis(
    filename: str,
    language: str,
    confidence: float = 70.0,
    size: int = 100,
    **overrides,
) -> FileAnalysis:
    fields = dict(
        filename=filename,
        extension=file_extension(filename),
        language=LanguageInfo(name=language, confidence=confidence),
        size=size,
        line_count=0,
        code_lines=0,
        comment_lines=0,
        blank_lines=0,
        complexity=1,
        maintainability_index=100,
        duplicate_line_count=0,
        security_issue_count=0,
        documentation_score=100,
    )
    fields.update(overrides)
    return FileAnalysis(**fields)


@pytest.fixture
def make_view():
    return build_view


@pytest.fixture
def make_analysis():
    return build_analysis


@pytest.fixture
def fixed_clock():
    """Clock that never advances, so repeated runs are comparable."""
    return lambda: 0.0


@pytest.fixture
def client():
    get_settings.cache_clear()
    with TestClient(create_app()) as c:
        yield c
