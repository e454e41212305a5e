"""Domain entities — the records produced and consumed by one analysis run."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class DetectionMethod(str, Enum):
    """Independent heuristic that can claim a file for a language."""

    SHEBANG = "shebang"
    EXTENSION = "extension"
    SYNTAX = "syntax"
    PATTERN = "pattern"
    KEYWORD = "keyword"


class LanguageCategory(str, Enum):
    PROGRAMMING = "programming"
    MARKUP = "markup"
    CONFIG = "config"
    DATA = "data"
    DOCUMENTATION = "documentation"
    QUERY = "query"
    SHELL = "shell"


class FrameworkCategory(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    FULLSTACK = "fullstack"
    MOBILE = "mobile"
    DESKTOP = "desktop"


class ProjectType(str, Enum):
    """Coarse architectural archetype of a project."""

    WEB = "web"
    MOBILE = "mobile"
    LIBRARY = "library"
    MICROSERVICE = "microservice"
    MONOREPO = "monorepo"
    DESKTOP = "desktop"
    UNKNOWN = "unknown"


class DependencyType(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    PEER = "peer"
    OPTIONAL = "optional"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ── Inputs ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A normalised input file, owned by a single analysis run."""

    filename: str
    extension: str
    content: str
    size: int  # UTF-8 bytes
    encoding: str = "ASCII"


@dataclass(frozen=True, slots=True)
class LanguageSignature:
    """Static rule bundle describing how to recognise one language."""

    name: str
    extensions: tuple[str, ...]
    content_patterns: tuple[re.Pattern[str], ...]
    keywords: frozenset[str]
    category: LanguageCategory
    ecosystem: str
    features: tuple[str, ...] = ()
    syntax_shape: re.Pattern[str] | None = None
    shebang: re.Pattern[str] | None = None


@dataclass(frozen=True, slots=True)
class LanguageCandidate:
    """One detection method's claim that a file is written in a language."""

    language: str
    confidence: float
    method: DetectionMethod


# ── Per-file results ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LanguageInfo:
    name: str
    confidence: float
    extensions: tuple[str, ...] = ()
    category: LanguageCategory = LanguageCategory.DATA
    ecosystem: str | None = None
    features: tuple[str, ...] = ()


UNKNOWN_LANGUAGE = LanguageInfo(name="unknown", confidence=0)


@dataclass(frozen=True, slots=True)
class FileAnalysis:
    """Everything the engine learned about a single file."""

    filename: str
    extension: str
    language: LanguageInfo
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
    security_findings: tuple[str, ...] = ()


# ── Project-level results ───────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FrameworkInfo:
    name: str
    language: str
    confidence: int
    category: FrameworkCategory
    ecosystem: str
    dependencies: tuple[str, ...] = ()
    config_files: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProjectStructure:
    type: ProjectType
    confidence: int
    indicators: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeMetrics:
    total_lines: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    complexity: int = 0
    maintainability_index: int = 100
    technical_debt: str = "0m"
    duplicate_code_percentage: float = 0.0


@dataclass(frozen=True, slots=True)
class DependencyInfo:
    """A single dependency declared in a manifest file."""

    name: str
    type: DependencyType
    ecosystem: str
    version: str | None = None
    license: str | None = None
    source: str = ""


@dataclass(frozen=True, slots=True)
class SecurityProfile:
    risk_level: RiskLevel = RiskLevel.LOW
    vulnerable_patterns: tuple[str, ...] = ()
    security_features: tuple[str, ...] = ()
    compliance_level: int = 100
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """The terminal record of one analysis run."""

    primary_language: LanguageInfo
    all_languages: tuple[LanguageInfo, ...]
    frameworks: tuple[FrameworkInfo, ...]
    project_structure: ProjectStructure
    build_tools: tuple[str, ...]
    package_managers: tuple[str, ...]
    total_files: int
    analysis_time_ms: float
    accuracy: float
    detection_methods: tuple[str, ...]
    code_metrics: CodeMetrics
    dependencies: tuple[DependencyInfo, ...]
    security_profile: SecurityProfile
    quality_score: int
    file_analyses: tuple[FileAnalysis, ...] = field(default=(), repr=False)
