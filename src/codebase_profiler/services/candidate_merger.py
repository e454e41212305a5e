"""Candidate merging — collapse per-method claims into one language per file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from codebase_profiler.domain.entities import (
    UNKNOWN_LANGUAGE,
    DetectionMethod,
    LanguageCandidate,
    LanguageInfo,
    LanguageSignature,
)
from codebase_profiler.domain.signatures import REGISTRY_ORDER, SIGNATURES_BY_NAME
from codebase_profiler.domain.value_objects import clamp_confidence
from codebase_profiler.domain.weights import DEFAULT_WEIGHTS, HeuristicWeights


@dataclass(slots=True)
class MergedCandidate:
    """Accumulator for a single language while a file's candidates are folded."""

    language: str
    confidence: float = 0.0
    methods: list[DetectionMethod] = field(default_factory=list)

    @property
    def claimed_by_extension(self) -> bool:
        return DetectionMethod.EXTENSION in self.methods


@dataclass(frozen=True, slots=True)
class MergeOutcome:
    language: LanguageInfo
    methods: frozenset[DetectionMethod]


def merge_candidates(
    candidates: Iterable[LanguageCandidate],
    weights: HeuristicWeights = DEFAULT_WEIGHTS,
) -> list[MergedCandidate]:
    """Fold candidates by language, keeping the best weighted confidence.

    Result is sorted best-first.  Ties go to the language whose extension list
    claims the file, then to registry order.
    """
    merged: dict[str, MergedCandidate] = {}
    for candidate in candidates:
        entry = merged.get(candidate.language)
        if entry is None:
            entry = merged[candidate.language] = MergedCandidate(candidate.language)
        weighted = clamp_confidence(candidate.confidence * weights.method_weight(candidate.method))
        entry.confidence = max(entry.confidence, weighted)
        if candidate.method not in entry.methods:
            entry.methods.append(candidate.method)

    return sorted(
        merged.values(),
        key=lambda m: (
            -m.confidence,
            not m.claimed_by_extension,
            REGISTRY_ORDER.get(m.language, len(REGISTRY_ORDER)),
        ),
    )


def resolve_language(
    candidates: Iterable[LanguageCandidate],
    weights: HeuristicWeights = DEFAULT_WEIGHTS,
    signatures: Mapping[str, LanguageSignature] = SIGNATURES_BY_NAME,
) -> MergeOutcome:
    """Pick the winning language for a file, or the ``unknown`` sentinel."""
    ranked = merge_candidates(candidates, weights)
    if not ranked:
        return MergeOutcome(language=UNKNOWN_LANGUAGE, methods=frozenset())

    best = ranked[0]
    signature = signatures[best.language]
    return MergeOutcome(
        language=LanguageInfo(
            name=best.language,
            confidence=round(best.confidence, 2),
            extensions=signature.extensions,
            category=signature.category,
            ecosystem=signature.ecosystem,
            features=signature.features,
        ),
        methods=frozenset(best.methods),
    )
