"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field

from codebase_profiler.domain.entities import (
    DependencyType,
    FrameworkCategory,
    LanguageCategory,
    ProjectType,
    RiskLevel,
)

# ── Request ─────────────────────────────────────────────────────────────────


class FileInput(BaseModel):
    filename: str = Field(min_length=1)
    content: str


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /analyze``."""

    files: list[FileInput]
    include_file_analyses: bool = False


# ── Response ────────────────────────────────────────────────────────────────


class LanguageOut(BaseModel):
    name: str
    confidence: float
    extensions: list[str]
    category: LanguageCategory
    ecosystem: str | None = None
    features: list[str] = []


class FrameworkOut(BaseModel):
    name: str
    language: str
    confidence: int
    category: FrameworkCategory
    ecosystem: str
    dependencies: list[str] = []
    config_files: list[str] = []


class ProjectStructureOut(BaseModel):
    type: ProjectType
    confidence: int
    indicators: list[str]


class CodeMetricsOut(BaseModel):
    total_lines: int
    code_lines: int
    comment_lines: int
    blank_lines: int
    complexity: int
    maintainability_index: int
    technical_debt: str
    duplicate_code_percentage: float


class DependencyOut(BaseModel):
    name: str
    version: str | None = None
    type: DependencyType
    ecosystem: str
    license: str | None = None
    source: str


class SecurityProfileOut(BaseModel):
    risk_level: RiskLevel
    vulnerable_patterns: list[str]
    security_features: list[str]
    compliance_level: int
    recommendations: list[str]


class FileAnalysisOut(BaseModel):
    filename: str
    extension: str
    language: LanguageOut
    size: int
    line_count: int
    code_lines: int
    comment_lines: int
    blank_lines: int
    complexity: int
    maintainability_index: int
    duplicate_line_count: int
    security_issue_count: int
    documentation_score: int
    security_findings: list[str]


class AnalyzeResponse(BaseModel):
    """Successful response from ``POST /analyze``."""

    primary_language: LanguageOut
    all_languages: list[LanguageOut]
    frameworks: list[FrameworkOut]
    project_structure: ProjectStructureOut
    build_tools: list[str]
    package_managers: list[str]
    total_files: int
    analysis_time_ms: float
    accuracy: float
    detection_methods: list[str]
    code_metrics: CodeMetricsOut
    dependencies: list[DependencyOut]
    security_profile: SecurityProfileOut
    quality_score: int
    summary: str
    recommended_tools: list[str]
    file_analyses: list[FileAnalysisOut] = []


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
