"""File intake — validate the raw input list and normalise it into SourceFiles."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, StrictStr, TypeAdapter, ValidationError

from codebase_profiler.domain.entities import SourceFile
from codebase_profiler.domain.exceptions import InvalidInputError

_BOM = "\ufeff"


class RawFile(BaseModel):
    """Shape every input item must have: a filename and decoded text."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    filename: StrictStr
    content: StrictStr


_RAW_FILES = TypeAdapter(list[RawFile])


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render pydantic error dicts as ``loc → msg`` pairs joined by ``; ``."""
    messages = []
    for err in errors:
        loc = " → ".join(str(p) for p in err.get("loc", ())) or "input"
        messages.append(f"{loc}: {err.get('msg', 'validation error')}")
    return "; ".join(messages)


def validate_input(files: Any) -> list[RawFile]:
    """Check that *files* is a list of ``{filename, content}`` string pairs.

    Raises :class:`InvalidInputError` with every offending location listed,
    before any analysis work starts.
    """
    if isinstance(files, (str, bytes)) or not isinstance(files, Sequence):
        raise InvalidInputError(
            f"Expected a list of {{filename, content}} objects, got {type(files).__name__}."
        )
    try:
        return _RAW_FILES.validate_python(list(files))
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid file list: {describe_errors(exc.errors())}") from exc


def basename(filename: str) -> str:
    return filename.replace("\\", "/").rsplit("/", maxsplit=1)[-1]


def file_extension(filename: str) -> str:
    """Lower-cased suffix of the basename, dot included (``""`` if none)."""
    name = basename(filename)
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot:].lower()


def guess_encoding(content: str) -> str:
    if _BOM in content:
        return "UTF-8-BOM"
    if not content.isascii():
        return "UTF-8"
    return "ASCII"


def to_source_file(filename: str, content: str) -> SourceFile:
    return SourceFile(
        filename=filename,
        extension=file_extension(filename),
        content=content,
        size=len(content.encode("utf-8", errors="replace")),
        encoding=guess_encoding(content),
    )


def intake(files: Any) -> list[SourceFile]:
    """Validate *files* and return one :class:`SourceFile` per item, in order."""
    return [to_source_file(raw.filename, raw.content) for raw in validate_input(files)]
