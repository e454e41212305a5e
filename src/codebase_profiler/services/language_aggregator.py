"""Language aggregation — roll per-file winners into a ranked project list."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from codebase_profiler.domain.entities import UNKNOWN_LANGUAGE, FileAnalysis, LanguageInfo
from codebase_profiler.domain.value_objects import clamp_confidence
from codebase_profiler.domain.weights import DEFAULT_WEIGHTS, HeuristicWeights


@dataclass(slots=True)
class _LanguageStats:
    info: LanguageInfo
    file_count: int = 0
    total_bytes: int = 0
    max_confidence: float = 0.0


def aggregate_languages(
    analyses: Sequence[FileAnalysis],
    weights: HeuristicWeights = DEFAULT_WEIGHTS,
) -> list[LanguageInfo]:
    """Score every detected language across the whole file set.

    ``unknown`` files do not get an entry, but they still count towards the
    file and byte totals the shares are computed against.
    """
    stats: dict[str, _LanguageStats] = {}
    for analysis in analyses:
        lang = analysis.language
        if lang.name == UNKNOWN_LANGUAGE.name:
            continue
        entry = stats.get(lang.name)
        if entry is None:
            entry = stats[lang.name] = _LanguageStats(info=lang)
        entry.file_count += 1
        entry.total_bytes += analysis.size
        entry.max_confidence = max(entry.max_confidence, lang.confidence)

    total_files = len(analyses)
    total_bytes = sum(a.size for a in analyses)

    ranked: list[tuple[LanguageInfo, int]] = []
    for entry in stats.values():
        file_share = entry.file_count / total_files
        byte_share = entry.total_bytes / total_bytes if total_bytes else 0.0
        score = round(
            entry.max_confidence * weights.aggregation_confidence
            + file_share * 100 * weights.aggregation_file_share
            + byte_share * 100 * weights.aggregation_byte_share
        )
        ranked.append((replace(entry.info, confidence=clamp_confidence(score)), entry.file_count))

    ranked.sort(key=lambda pair: (-pair[0].confidence, -pair[1], pair[0].name))
    return [info for info, _ in ranked]


def primary_language(languages: Sequence[LanguageInfo]) -> LanguageInfo:
    return languages[0] if languages else UNKNOWN_LANGUAGE
