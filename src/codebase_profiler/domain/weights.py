"""Heuristic weighting constants.

None of these numbers come from a formal model.  They are grouped here so a
caller (or :class:`~codebase_profiler.infrastructure.config.Settings`) can
override them without touching the detectors.
"""

from __future__ import annotations

from dataclasses import dataclass

from codebase_profiler.domain.entities import DetectionMethod

# ── Detector trust weights ──────────────────────────────────────────────────

SHEBANG_WEIGHT = 1.0
EXTENSION_WEIGHT = 0.8
SYNTAX_WEIGHT = 0.9
PATTERN_WEIGHT = 0.7
KEYWORD_WEIGHT = 0.6

# ── Project-level language aggregation ──────────────────────────────────────

AGGREGATION_CONFIDENCE_WEIGHT = 0.4
AGGREGATION_FILE_SHARE_WEIGHT = 0.3
AGGREGATION_BYTE_SHARE_WEIGHT = 0.3

# ── Quality score ───────────────────────────────────────────────────────────

QUALITY_MAINTAINABILITY_WEIGHT = 0.4
QUALITY_COMPLIANCE_WEIGHT = 0.3
QUALITY_DOCUMENTATION_WEIGHT = 0.2
QUALITY_DUPLICATION_WEIGHT = 0.1


@dataclass(frozen=True, slots=True)
class HeuristicWeights:
    """Every tunable weight consumed by one analysis run."""

    shebang: float = SHEBANG_WEIGHT
    extension: float = EXTENSION_WEIGHT
    syntax: float = SYNTAX_WEIGHT
    pattern: float = PATTERN_WEIGHT
    keyword: float = KEYWORD_WEIGHT

    aggregation_confidence: float = AGGREGATION_CONFIDENCE_WEIGHT
    aggregation_file_share: float = AGGREGATION_FILE_SHARE_WEIGHT
    aggregation_byte_share: float = AGGREGATION_BYTE_SHARE_WEIGHT

    quality_maintainability: float = QUALITY_MAINTAINABILITY_WEIGHT
    quality_compliance: float = QUALITY_COMPLIANCE_WEIGHT
    quality_documentation: float = QUALITY_DOCUMENTATION_WEIGHT
    quality_duplication: float = QUALITY_DUPLICATION_WEIGHT

    def method_weight(self, method: DetectionMethod) -> float:
        """Return the trust multiplier for a detection method."""
        return {
            DetectionMethod.SHEBANG: self.shebang,
            DetectionMethod.EXTENSION: self.extension,
            DetectionMethod.SYNTAX: self.syntax,
            DetectionMethod.PATTERN: self.pattern,
            DetectionMethod.KEYWORD: self.keyword,
        }[method]


DEFAULT_WEIGHTS = HeuristicWeights()
