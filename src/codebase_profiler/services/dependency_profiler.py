"""Dependency profiling — best-effort parsing of recognised manifest files.

Structured manifests are decoded into tolerant pydantic models: unknown keys
are ignored, and anything that fails to decode or validate skips that one
manifest.  Line-oriented manifests (requirements, go.mod, Gemfile) are read
with regexes.
"""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field

from codebase_profiler.domain.entities import DependencyInfo, DependencyType, SourceFile
from codebase_profiler.domain.exceptions import ManifestParseError
from codebase_profiler.services.file_intake import basename

logger = logging.getLogger(__name__)

ManifestReader = Callable[[str, str], list[DependencyInfo]]


@dataclass(frozen=True, slots=True)
class ManifestParser:
    pattern: str
    ecosystem: str
    read: ManifestReader


MANIFEST_PARSERS: list[ManifestParser] = []


def manifest(pattern: str, ecosystem: str) -> Callable[[ManifestReader], ManifestReader]:
    """Register a reader for manifests whose lower-cased basename matches *pattern*."""

    def decorator(read: ManifestReader) -> ManifestReader:
        MANIFEST_PARSERS.append(ManifestParser(pattern=pattern, ecosystem=ecosystem, read=read))
        return read

    return decorator


# ── Shared helpers ──────────────────────────────────────────────────────────

_PEP508_RE = re.compile(
    r"^([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)"  # name
    r"(?:\s*\[[^\]]*\])?"  # extras
    r"\s*(.*)$"  # version specifiers
)
# Bare archive or VCS URLs name no package.
_BARE_URL_RE = re.compile(r"^(?:git|hg|svn|bzr)\+|^[^\s@]*://")


def _pep508(requirement: str) -> tuple[str, str | None] | None:
    line = requirement.split(";", maxsplit=1)[0].strip()
    if _BARE_URL_RE.match(line):
        return None
    m = _PEP508_RE.match(line)
    if not m:
        return None
    version = m.group(2).strip()
    if version.startswith("@"):  # name @ url
        return m.group(1), None
    return m.group(1), (version or None)


def _table_version(spec: Any) -> str | None:
    """Version from a ``"1.2"`` string or a ``{version = "1.2"}`` table."""
    if isinstance(spec, str):
        return spec
    if isinstance(spec, dict) and isinstance(spec.get("version"), str):
        return spec["version"]
    return None


def _dep(name: str, version: str | None, kind: DependencyType, ecosystem: str, source: str) -> DependencyInfo:
    return DependencyInfo(name=name, version=version, type=kind, ecosystem=ecosystem, source=source)


class _Tolerant(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ── npm ─────────────────────────────────────────────────────────────────────


class PackageJson(_Tolerant):
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    peer_dependencies: dict[str, str] = Field(default_factory=dict, alias="peerDependencies")
    optional_dependencies: dict[str, str] = Field(default_factory=dict, alias="optionalDependencies")


@manifest("package.json", "npm")
def read_package_json(content: str, source: str) -> list[DependencyInfo]:
    pkg = PackageJson.model_validate_json(content)
    sections = (
        (pkg.dependencies, DependencyType.PRODUCTION),
        (pkg.dev_dependencies, DependencyType.DEVELOPMENT),
        (pkg.peer_dependencies, DependencyType.PEER),
        (pkg.optional_dependencies, DependencyType.OPTIONAL),
    )
    return [
        _dep(name, version, kind, "npm", source)
        for table, kind in sections
        for name, version in table.items()
    ]


# ── Composer ────────────────────────────────────────────────────────────────


class ComposerJson(_Tolerant):
    require: dict[str, str] = Field(default_factory=dict)
    require_dev: dict[str, str] = Field(default_factory=dict, alias="require-dev")


def _is_platform_package(name: str) -> bool:
    return name == "php" or name.startswith("ext-")


@manifest("composer.json", "composer")
def read_composer_json(content: str, source: str) -> list[DependencyInfo]:
    composer = ComposerJson.model_validate_json(content)
    return [
        _dep(name, version, kind, "composer", source)
        for table, kind in (
            (composer.require, DependencyType.PRODUCTION),
            (composer.require_dev, DependencyType.DEVELOPMENT),
        )
        for name, version in table.items()
        if not _is_platform_package(name)
    ]


# ── PyPI ────────────────────────────────────────────────────────────────────

_DEV_REQUIREMENTS_RE = re.compile(r"dev|test")


@manifest("requirements*.txt", "pypi")
def read_requirements(content: str, source: str) -> list[DependencyInfo]:
    kind = (
        DependencyType.DEVELOPMENT
        if _DEV_REQUIREMENTS_RE.search(basename(source).lower())
        else DependencyType.PRODUCTION
    )
    deps: list[DependencyInfo] = []
    for raw_line in content.splitlines():
        line = raw_line.split(" #", maxsplit=1)[0].strip()
        if not line or line.startswith(("#", "-")):
            continue
        parsed = _pep508(line)
        if parsed:
            deps.append(_dep(*parsed, kind, "pypi", source))
    return deps


class _Project(_Tolerant):
    dependencies: list[str] = Field(default_factory=list)
    optional_dependencies: dict[str, list[str]] = Field(
        default_factory=dict, alias="optional-dependencies"
    )


class _PoetryGroup(_Tolerant):
    dependencies: dict[str, Any] = Field(default_factory=dict)


class _Poetry(_Tolerant):
    dependencies: dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: dict[str, Any] = Field(default_factory=dict, alias="dev-dependencies")
    group: dict[str, _PoetryGroup] = Field(default_factory=dict)


class _Tool(_Tolerant):
    poetry: _Poetry | None = None


class PyProject(_Tolerant):
    project: _Project | None = None
    tool: _Tool | None = None


@manifest("pyproject.toml", "pypi")
def read_pyproject(content: str, source: str) -> list[DependencyInfo]:
    """PEP 621 ``[project]`` tables plus Poetry's ``[tool.poetry]`` tables."""
    pyproject = PyProject.model_validate(tomllib.loads(content))
    deps: list[DependencyInfo] = []

    if pyproject.project is not None:
        requirements = [(r, DependencyType.PRODUCTION) for r in pyproject.project.dependencies]
        requirements += [
            (r, DependencyType.OPTIONAL)
            for extra in pyproject.project.optional_dependencies.values()
            for r in extra
        ]
        for requirement, kind in requirements:
            parsed = _pep508(requirement)
            if parsed:
                deps.append(_dep(*parsed, kind, "pypi", source))

    poetry = pyproject.tool.poetry if pyproject.tool else None
    if poetry is not None:
        tables = [
            (poetry.dependencies, DependencyType.PRODUCTION),
            (poetry.dev_dependencies, DependencyType.DEVELOPMENT),
        ]
        tables += [(g.dependencies, DependencyType.DEVELOPMENT) for g in poetry.group.values()]
        for table, kind in tables:
            deps.extend(
                _dep(name, _table_version(spec), kind, "pypi", source)
                for name, spec in table.items()
                if name.lower() != "python"
            )
    return deps


# ── Cargo ───────────────────────────────────────────────────────────────────


class CargoToml(_Tolerant):
    dependencies: dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: dict[str, Any] = Field(default_factory=dict, alias="dev-dependencies")
    build_dependencies: dict[str, Any] = Field(default_factory=dict, alias="build-dependencies")


@manifest("cargo.toml", "cargo")
def read_cargo_toml(content: str, source: str) -> list[DependencyInfo]:
    cargo = CargoToml.model_validate(tomllib.loads(content))
    return [
        _dep(name, _table_version(spec), kind, "cargo", source)
        for table, kind in (
            (cargo.dependencies, DependencyType.PRODUCTION),
            (cargo.dev_dependencies, DependencyType.DEVELOPMENT),
            (cargo.build_dependencies, DependencyType.DEVELOPMENT),
        )
        for name, spec in table.items()
    ]


# ── Go modules ──────────────────────────────────────────────────────────────

_GO_MODULE_RE = re.compile(r"^module\s+\S+", re.MULTILINE)
_GO_REQUIRE_RE = re.compile(r"^require\s+(\S+)\s+(\S+)")
_GO_BLOCK_ENTRY_RE = re.compile(r"^(\S+)\s+(v\S+)")


@manifest("go.mod", "go")
def read_go_mod(content: str, source: str) -> list[DependencyInfo]:
    if not _GO_MODULE_RE.search(content):
        raise ManifestParseError(f"{source}: missing module directive")

    deps: list[DependencyInfo] = []
    in_block = False
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if line.startswith("require ("):
            in_block = True
            continue
        if in_block and line == ")":
            in_block = False
            continue
        m = (_GO_BLOCK_ENTRY_RE if in_block else _GO_REQUIRE_RE).match(line)
        if m and not line.startswith("//"):
            kind = DependencyType.OPTIONAL if "// indirect" in line else DependencyType.PRODUCTION
            deps.append(_dep(m.group(1), m.group(2), kind, "go", source))
    return deps


# ── RubyGems ────────────────────────────────────────────────────────────────

_GEM_RE = re.compile(r"""^gem\s+['"]([^'"]+)['"](.*)$""")
_GEM_VERSION_RE = re.compile(r"""['"]([~<>=!]*\s*\d[^'"]*)['"]""")
_GROUP_RE = re.compile(r"^group\b(.*)\bdo\b")
_BLOCK_OPEN_RE = re.compile(r"\bdo\s*(?:\|[^|]*\|)?$|^(?:if|unless|case|begin)\b")
_DEV_GROUPS = frozenset({"development", "test"})


@manifest("gemfile", "rubygems")
def read_gemfile(content: str, source: str) -> list[DependencyInfo]:
    """``gem`` lines; those inside a ``:development``/``:test`` group are dev-only."""
    deps: list[DependencyInfo] = []
    blocks: list[bool] = []  # one entry per open block: is it a dev group?
    for raw_line in content.splitlines():
        line = raw_line.split("#", maxsplit=1)[0].strip()
        if not line:
            continue
        if line == "end":
            if blocks:
                blocks.pop()
            continue
        group = _GROUP_RE.match(line)
        if group:
            names = {g.strip().lstrip(":") for g in group.group(1).split(",")}
            blocks.append(bool(names & _DEV_GROUPS))
            continue
        gem = _GEM_RE.match(line)
        if gem:
            version = _GEM_VERSION_RE.search(gem.group(2))
            kind = DependencyType.DEVELOPMENT if any(blocks) else DependencyType.PRODUCTION
            deps.append(_dep(gem.group(1), version.group(1) if version else None, kind, "rubygems", source))
        elif _BLOCK_OPEN_RE.search(line):
            blocks.append(False)
    return deps


# ── Public API ──────────────────────────────────────────────────────────────


def find_parser(filename: str) -> ManifestParser | None:
    name = basename(filename).lower()
    for parser in MANIFEST_PARSERS:
        if fnmatchcase(name, parser.pattern):
            return parser
    return None


def profile_dependencies(files: Iterable[SourceFile]) -> list[DependencyInfo]:
    """Every dependency declared by every recognised manifest, in input order.

    A manifest that cannot be decoded, including one nested too deeply for
    the decoder, is logged and skipped.
    """
    deps: list[DependencyInfo] = []
    for source in files:
        parser = find_parser(source.filename)
        if parser is None or not source.content.strip():
            continue
        try:
            deps.extend(parser.read(source.content, source.filename))
        except (ValueError, TypeError, RecursionError, ManifestParseError) as exc:
            logger.debug("Skipping malformed %s manifest %s: %s", parser.ecosystem, source.filename, exc)
    return deps
