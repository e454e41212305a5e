"""Domain exception hierarchy.

Only malformed input is a caller-facing failure.  Everything else the engine
meets (unknown languages, broken manifests) degrades to an empty or
``unknown`` result instead of raising.
"""

from __future__ import annotations


class CodebaseProfilerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidInputError(CodebaseProfilerError):
    """The input is not a list of ``{filename, content}`` text pairs."""


# ── Processing errors ───────────────────────────────────────────────────────


class ManifestParseError(CodebaseProfilerError):
    """A manifest file could not be decoded; the manifest is skipped."""
