"""Analyze-codebase use case — the main orchestration pipeline.

Per-file work (language detection, metrics, risky-call scan) has no shared
mutable state and may be mapped over an executor.  Everything after that
runs once, sequentially, over the collected per-file results.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Sequence

from codebase_profiler.domain.entities import (
    DetectionMethod,
    DetectionResult,
    FileAnalysis,
    FrameworkInfo,
    LanguageInfo,
    SourceFile,
)
from codebase_profiler.domain.exceptions import InvalidInputError
from codebase_profiler.domain.value_objects import ProjectView
from codebase_profiler.domain.weights import DEFAULT_WEIGHTS, HeuristicWeights
from codebase_profiler.services.candidate_generator import generate_candidates
from codebase_profiler.services.candidate_merger import resolve_language
from codebase_profiler.services.code_metrics import FileMetrics, measure_file, summarize
from codebase_profiler.services.dependency_profiler import profile_dependencies
from codebase_profiler.services.file_intake import intake
from codebase_profiler.services.framework_detector import detect_frameworks
from codebase_profiler.services.language_aggregator import aggregate_languages, primary_language
from codebase_profiler.services.quality_scorer import quality_score
from codebase_profiler.services.security_profiler import profile_security, scan_file
from codebase_profiler.services.structure_classifier import classify_structure
from codebase_profiler.services.tooling_detector import detect_build_tools, detect_package_managers

logger = logging.getLogger(__name__)

# ── Accuracy ────────────────────────────────────────────────────────────────

ACCURACY_LANGUAGE_WEIGHT = 0.7
ACCURACY_FRAMEWORK_WEIGHT = 0.2
SHEBANG_BONUS = 10
SYNTAX_BONUS = 5

DEFAULT_PARALLEL_THRESHOLD = 64


def accuracy(
    languages: Sequence[LanguageInfo],
    frameworks: Sequence[FrameworkInfo],
    methods: frozenset[DetectionMethod],
) -> float:
    """Self-assessed confidence in the run as a whole."""
    if not languages:
        return 0.0
    mean_language = sum(lang.confidence for lang in languages) / len(languages)
    mean_framework = sum(fw.confidence for fw in frameworks) / len(frameworks) if frameworks else 0.0
    if DetectionMethod.SHEBANG in methods:
        bonus = SHEBANG_BONUS
    elif DetectionMethod.SYNTAX in methods:
        bonus = SYNTAX_BONUS
    else:
        bonus = 0
    score = mean_language * ACCURACY_LANGUAGE_WEIGHT + mean_framework * ACCURACY_FRAMEWORK_WEIGHT + bonus
    return round(min(100.0, score), 2)


# ── Per-file step ───────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FileOutcome:
    analysis: FileAnalysis
    metrics: FileMetrics
    methods: frozenset[DetectionMethod]


def analyze_file(source: SourceFile, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> FileOutcome:
    """Detect, measure and scan one file.  Safe to run on any worker thread."""
    merged = resolve_language(generate_candidates(source), weights)
    language = merged.language
    metrics = measure_file(source.content, language.name)
    scan = scan_file(source.content, language.name)
    analysis = FileAnalysis(
        filename=source.filename,
        extension=source.extension,
        language=language,
        size=source.size,
        line_count=metrics.lines.total,
        code_lines=metrics.lines.code,
        comment_lines=metrics.lines.comment,
        blank_lines=metrics.lines.blank,
        complexity=metrics.complexity,
        maintainability_index=metrics.maintainability_index,
        duplicate_line_count=metrics.duplicate_lines,
        security_issue_count=scan.issue_count,
        documentation_score=metrics.documentation_score,
        security_findings=scan.findings,
    )
    return FileOutcome(analysis=analysis, metrics=metrics, methods=merged.methods)


# ── Use case ────────────────────────────────────────────────────────────────


class AnalyzeCodebaseUseCase:
    """Orchestrates the full file list → DetectionResult pipeline.

    Parameters
    ----------
    executor:
        Optional pool for the per-file step.  Used only when the run has at
        least *parallel_threshold* files; the caller owns its lifecycle.
    weights:
        Heuristic weights for merging, aggregation and quality scoring.
    clock:
        Monotonic seconds source used to time the run.
    max_files:
        Reject larger inputs with :class:`InvalidInputError`; ``None`` means
        no limit.
    """

    def __init__(
        self,
        executor: Executor | None = None,
        weights: HeuristicWeights = DEFAULT_WEIGHTS,
        clock: Callable[[], float] = time.perf_counter,
        parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
        max_files: int | None = None,
    ) -> None:
        self._executor = executor
        self._weights = weights
        self._clock = clock
        self._parallel_threshold = parallel_threshold
        self._max_files = max_files

    # ── Public entry point ──────────────────────────────────────────────

    def execute(self, files: Any) -> DetectionResult:
        """Validate *files* and run every analysis stage over them."""
        sources = intake(files)
        if self._max_files is not None and len(sources) > self._max_files:
            raise InvalidInputError(
                f"Too many files: {len(sources)} submitted, at most {self._max_files} accepted."
            )

        logger.info("Analysing %d files", len(sources))
        started = self._clock()

        outcomes = self._analyze_files(sources)
        analyses = [o.analysis for o in outcomes]
        methods = frozenset(m for o in outcomes for m in o.methods)

        languages = aggregate_languages(analyses, self._weights)
        view = ProjectView.of(sources)
        frameworks = detect_frameworks(view)
        structure = classify_structure(view)
        code_metrics = summarize(o.metrics for o in outcomes)
        security = profile_security(analyses, view.content)
        dependencies = profile_dependencies(sources)
        quality = quality_score(
            code_metrics,
            security,
            [a.documentation_score for a in analyses],
            self._weights,
        )

        elapsed_ms = round((self._clock() - started) * 1000, 3)
        primary = primary_language(languages)
        logger.info(
            "Analysed %d files in %.1f ms: primary language %s, %d frameworks, quality %d",
            len(sources),
            elapsed_ms,
            primary.name,
            len(frameworks),
            quality,
        )

        return DetectionResult(
            primary_language=primary,
            all_languages=tuple(languages),
            frameworks=tuple(frameworks),
            project_structure=structure,
            build_tools=tuple(detect_build_tools(view)),
            package_managers=tuple(detect_package_managers(view)),
            total_files=len(sources),
            analysis_time_ms=elapsed_ms,
            accuracy=accuracy(languages, frameworks, methods),
            detection_methods=tuple(sorted(m.value for m in methods)),
            code_metrics=code_metrics,
            dependencies=tuple(dependencies),
            security_profile=security,
            quality_score=quality,
            file_analyses=tuple(analyses),
        )

    # ── Internal helpers ────────────────────────────────────────────────

    def _analyze_files(self, sources: list[SourceFile]) -> list[FileOutcome]:
        step = partial(analyze_file, weights=self._weights)
        if self._executor is not None and len(sources) >= self._parallel_threshold:
            logger.debug("Mapping %d files over %s", len(sources), type(self._executor).__name__)
            return list(self._executor.map(step, sources))
        return [step(source) for source in sources]


def analyze_codebase(
    files: Any,
    *,
    weights: HeuristicWeights | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> DetectionResult:
    """Analyse *files* sequentially.

    Only ``analysis_time_ms`` depends on *clock*; pass a constant clock to get
    byte-identical results for identical input.
    """
    return AnalyzeCodebaseUseCase(weights=weights or DEFAULT_WEIGHTS, clock=clock).execute(files)
