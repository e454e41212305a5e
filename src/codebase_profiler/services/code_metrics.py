"""Code metrics — line classification, complexity proxy, duplication and MI.

Everything here is a cheap textual approximation: comment detection looks at
line prefixes only, and complexity counts branching tokens rather than
walking a control-flow graph.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from codebase_profiler.domain.entities import CodeMetrics
from codebase_profiler.domain.value_objects import TechnicalDebt

# ── Comment prefixes ────────────────────────────────────────────────────────

_C_STYLE: tuple[str, ...] = ("//", "/*", "*", "*/")

COMMENT_PREFIXES: dict[str, tuple[str, ...]] = {
    "javascript": _C_STYLE,
    "typescript": _C_STYLE,
    "java": _C_STYLE,
    "csharp": _C_STYLE,
    "go": _C_STYLE,
    "rust": _C_STYLE,
    "cpp": _C_STYLE,
    "c": _C_STYLE,
    "kotlin": _C_STYLE,
    "swift": _C_STYLE,
    "dart": _C_STYLE,
    "php": ("//", "#", "/*", "*", "*/"),
    "python": ("#", '"""', "'''"),
    "ruby": ("#",),
    "bash": ("#",),
    "yaml": ("#",),
    "html": ("<!--", "-->"),
    "xml": ("<!--", "-->"),
    "css": ("/*", "*", "*/"),
    "sql": ("--", "/*", "*", "*/"),
}

# ── Complexity tokens ───────────────────────────────────────────────────────


def _tokens(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


_C_FAMILY_BRANCHES = _tokens(
    r"\bif\b", r"\belse\b", r"\bfor\b", r"\bwhile\b", r"\bswitch\b",
    r"\bcatch\b", r"\?.*:", r"&&", r"\|\|",
)

COMPLEXITY_TOKENS: dict[str, tuple[re.Pattern[str], ...]] = {
    "javascript": _C_FAMILY_BRANCHES,
    "typescript": _C_FAMILY_BRANCHES,
    "java": _C_FAMILY_BRANCHES,
    "csharp": _C_FAMILY_BRANCHES,
    "php": _C_FAMILY_BRANCHES,
    "python": _tokens(
        r"\bif\b", r"\belif\b", r"\belse\b", r"\bfor\b", r"\bwhile\b",
        r"\btry\b", r"\bexcept\b", r"\band\b", r"\bor\b",
    ),
    "ruby": _tokens(
        r"\bif\b", r"\belse\b", r"\bfor\b", r"\bwhile\b", r"\bcase\b",
        r"\brescue\b", r"&&", r"\|\|",
    ),
    "go": _tokens(
        r"\bif\b", r"\belse\b", r"\bfor\b", r"\bswitch\b", r"\bselect\b", r"&&", r"\|\|",
    ),
    "rust": _tokens(
        r"\bif\b", r"\belse\b", r"\bfor\b", r"\bwhile\b", r"\bmatch\b", r"&&", r"\|\|",
    ),
}

FALLBACK_COMPLEXITY_LANGUAGE = "javascript"

# ── Maintainability index coefficients ──────────────────────────────────────

MI_BASE = 171.0
MI_VOLUME_COEFFICIENT = 5.2
MI_COMPLEXITY_COEFFICIENT = 0.23
MI_LINES_COEFFICIENT = 16.2
MI_COMMENT_COEFFICIENT = 50.0
MI_COMMENT_SCALE = 2.4
MI_MAX = 100


@dataclass(frozen=True, slots=True)
class LineCounts:
    total: int
    code: int
    comment: int
    blank: int


@dataclass(frozen=True, slots=True)
class FileMetrics:
    """Per-file numbers that feed both the file record and the run totals."""

    lines: LineCounts
    complexity: int
    maintainability_index: int
    duplicate_lines: int
    documentation_score: int


# ── Primitives ──────────────────────────────────────────────────────────────


def is_comment_line(stripped: str, language: str) -> bool:
    """True when an already-stripped line opens with a comment marker."""
    prefixes = COMMENT_PREFIXES.get(language)
    return bool(prefixes) and stripped.startswith(prefixes)


def classify_lines(content: str, language: str) -> LineCounts:
    code = comment = blank = 0
    lines = content.splitlines()
    for line in lines:
        stripped = line.strip()
        if not stripped:
            blank += 1
        elif is_comment_line(stripped, language):
            comment += 1
        else:
            code += 1
    return LineCounts(total=len(lines), code=code, comment=comment, blank=blank)


def complexity(content: str, language: str) -> int:
    """``1 + branching-token hits``; unlisted languages use the JS token set."""
    tokens = COMPLEXITY_TOKENS.get(language) or COMPLEXITY_TOKENS[FALLBACK_COMPLEXITY_LANGUAGE]
    return 1 + sum(len(token.findall(content)) for token in tokens)


def duplicate_line_count(content: str) -> int:
    """Sum of ``occurrences - 1`` over repeated trimmed non-blank lines."""
    counts = Counter(line.strip() for line in content.splitlines() if line.strip())
    return sum(n - 1 for n in counts.values() if n > 1)


def maintainability_index(code_lines: int, complexity_points: int, comment_lines: int) -> int:
    if code_lines <= 0:
        return MI_MAX
    volume = code_lines * math.log2(code_lines + 1)
    comment_ratio = comment_lines / (code_lines + comment_lines)
    index = (
        MI_BASE
        - MI_VOLUME_COEFFICIENT * math.log(volume)
        - MI_COMPLEXITY_COEFFICIENT * complexity_points
        - MI_LINES_COEFFICIENT * math.log(code_lines)
        + MI_COMMENT_COEFFICIENT * math.sin(math.sqrt(MI_COMMENT_SCALE * comment_ratio))
    )
    return max(0, min(MI_MAX, round(index)))


def documentation_score(code_lines: int, comment_lines: int) -> int:
    if code_lines <= 0:
        return 100
    return min(100, round(comment_lines / code_lines * 100))


# ── Public API ──────────────────────────────────────────────────────────────


def measure_file(content: str, language: str) -> FileMetrics:
    lines = classify_lines(content, language)
    points = complexity(content, language)
    return FileMetrics(
        lines=lines,
        complexity=points,
        maintainability_index=maintainability_index(lines.code, points, lines.comment),
        duplicate_lines=duplicate_line_count(content),
        documentation_score=documentation_score(lines.code, lines.comment),
    )


def summarize(metrics: Iterable[FileMetrics]) -> CodeMetrics:
    """Fold per-file metrics into run-wide totals.

    The maintainability index and technical debt are recomputed from the
    totals rather than averaged.
    """
    total = code = comment = blank = points = duplicates = 0
    for m in metrics:
        total += m.lines.total
        code += m.lines.code
        comment += m.lines.comment
        blank += m.lines.blank
        points += m.complexity
        duplicates += m.duplicate_lines

    duplicate_pct = round(duplicates / total * 100, 2) if total else 0.0
    return CodeMetrics(
        total_lines=total,
        code_lines=code,
        comment_lines=comment,
        blank_lines=blank,
        complexity=points,
        maintainability_index=maintainability_index(code, points, comment),
        technical_debt=str(TechnicalDebt.estimate(code, points)),
        duplicate_code_percentage=duplicate_pct,
    )
