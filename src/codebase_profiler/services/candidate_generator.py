"""Candidate generation — five independent language detectors per file.

Each detector looks at one kind of evidence and, when it finds any, claims
the file for a language with a raw confidence.  Detectors never see each
other's output; weighting and arbitration happen in the merger.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from codebase_profiler.domain.entities import (
    DetectionMethod,
    LanguageCandidate,
    LanguageSignature,
    SourceFile,
)
from codebase_profiler.domain.signatures import LANGUAGE_SIGNATURES

# ── Raw confidence constants ────────────────────────────────────────────────

SHEBANG_CONFIDENCE = 95.0
EXTENSION_CONFIDENCE = 70.0
SYNTAX_CONFIDENCE_CAP = 85.0
SYNTAX_RATIO_MULTIPLIER = 2.0
PATTERN_CONFIDENCE_CAP = 90.0
KEYWORD_CONFIDENCE_CAP = 80.0

_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _first_line(content: str) -> str:
    return content.split("\n", maxsplit=1)[0].rstrip("\r ")


# ── Individual detectors ────────────────────────────────────────────────────


def shebang_confidence(first_line: str, signature: LanguageSignature) -> float:
    """95 when the interpreter line names this language's interpreter."""
    if signature.shebang is None or not first_line.startswith("#!"):
        return 0.0
    return SHEBANG_CONFIDENCE if signature.shebang.search(first_line) else 0.0


def extension_confidence(extension: str, signature: LanguageSignature) -> float:
    return EXTENSION_CONFIDENCE if extension and extension in signature.extensions else 0.0


def syntax_confidence(lines: Sequence[str], signature: LanguageSignature) -> float:
    """Share of non-empty lines shaped like a declaration of this language."""
    if signature.syntax_shape is None or not lines:
        return 0.0
    matches = sum(1 for line in lines if signature.syntax_shape.match(line))
    ratio = matches / len(lines)
    return min(SYNTAX_CONFIDENCE_CAP, ratio * 100 * SYNTAX_RATIO_MULTIPLIER)


def pattern_confidence(content: str, signature: LanguageSignature) -> float:
    """Share of the signature's content patterns found anywhere in the file."""
    patterns = signature.content_patterns
    if not patterns or not content:
        return 0.0
    matched = sum(1 for pattern in patterns if pattern.search(content))
    return min(PATTERN_CONFIDENCE_CAP, matched / len(patterns) * 100)


def keyword_confidence(words: frozenset[str], signature: LanguageSignature) -> float:
    """Share of the signature's keywords present as whole words."""
    keywords = signature.keywords
    if not keywords or not words:
        return 0.0
    matched = len(keywords & words)
    return min(KEYWORD_CONFIDENCE_CAP, matched / len(keywords) * 100)


# ── Public API ──────────────────────────────────────────────────────────────


def generate_candidates(
    source: SourceFile,
    signatures: Iterable[LanguageSignature] = LANGUAGE_SIGNATURES,
) -> list[LanguageCandidate]:
    """Run every detector against every signature for one file.

    Only detectors with a raw score above zero produce a candidate.
    """
    content = source.content
    first_line = _first_line(content)
    non_empty = [line for line in content.splitlines() if line.strip()]
    words = frozenset(_WORD_RE.findall(content))

    candidates: list[LanguageCandidate] = []
    for signature in signatures:
        scores = (
            (DetectionMethod.SHEBANG, shebang_confidence(first_line, signature)),
            (DetectionMethod.EXTENSION, extension_confidence(source.extension, signature)),
            (DetectionMethod.SYNTAX, syntax_confidence(non_empty, signature)),
            (DetectionMethod.PATTERN, pattern_confidence(content, signature)),
            (DetectionMethod.KEYWORD, keyword_confidence(words, signature)),
        )
        candidates.extend(
            LanguageCandidate(language=signature.name, confidence=score, method=method)
            for method, score in scores
            if score > 0
        )
    return candidates
