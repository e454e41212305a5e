"""Value objects — confidence bounds, technical debt and the whole-project view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from codebase_profiler.domain.entities import SourceFile

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100

_MINUTES_PER_CODE_LINE = 0.1
_MINUTES_PER_COMPLEXITY_POINT = 2


def clamp_confidence(value: float) -> float:
    """Force *value* into the ``[0, 100]`` confidence range."""
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))


@dataclass(frozen=True, slots=True)
class TechnicalDebt:
    """Estimated remediation time, rendered as minutes, hours or days."""

    minutes: float

    @classmethod
    def estimate(cls, code_lines: int, complexity: int) -> TechnicalDebt:
        """Cost code size and branching at fixed per-unit rates."""
        if code_lines <= 0:
            return cls(minutes=0.0)
        return cls(
            minutes=code_lines * _MINUTES_PER_CODE_LINE
            + complexity * _MINUTES_PER_COMPLEXITY_POINT
        )

    def __str__(self) -> str:
        hours = round(self.minutes / 60, 2)
        if hours < 1:
            return f"{round(self.minutes)}m"
        if hours < 24:
            return f"{hours:g}h"
        return f"{round(hours / 24, 1):g}d"


@dataclass(frozen=True, slots=True)
class ProjectView:
    """Whole-file-set view used by the project-level detectors.

    Paths are lower-cased with forward slashes; ``content`` is every file's
    text joined by newlines, in input order.
    """

    paths: tuple[str, ...]
    basenames: frozenset[str]
    directories: frozenset[str]
    content: str

    @classmethod
    def of(cls, files: Iterable[SourceFile]) -> ProjectView:
        paths: list[str] = []
        texts: list[str] = []
        directories: set[str] = set()
        for source in files:
            path = source.filename.replace("\\", "/").lower()
            paths.append(path)
            texts.append(source.content)
            parts = path.split("/")
            directories.update("/".join(parts[:i]) for i in range(1, len(parts)))
        return cls(
            paths=tuple(paths),
            basenames=frozenset(p.rsplit("/", maxsplit=1)[-1] for p in paths),
            directories=frozenset(directories),
            content="\n".join(texts),
        )

    def has_path(self, fragment: str) -> bool:
        """True when any path contains *fragment*."""
        return any(fragment in path for path in self.paths)

    def has_suffix(self, *suffixes: str) -> bool:
        return any(path.endswith(suffixes) for path in self.paths)

    def has_basename(self, *names: str) -> bool:
        return any(name in self.basenames for name in names)

    def has_segment(self, *segments: str) -> bool:
        """True when any directory component equals one of *segments*."""
        wanted = set(segments)
        return any(d.rsplit("/", maxsplit=1)[-1] in wanted for d in self.directories)
