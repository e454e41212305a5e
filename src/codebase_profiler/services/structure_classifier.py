"""Project-structure classification — pick one architectural archetype.

Each archetype owns a list of path rules.  A matching rule adds its delta to
that archetype only; archetypes never subtract from each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from codebase_profiler.domain.entities import ProjectStructure, ProjectType
from codebase_profiler.domain.value_objects import ProjectView

MAX_CONFIDENCE = 100

# Tie-break order.
ARCHETYPE_ORDER: tuple[ProjectType, ...] = (
    ProjectType.WEB,
    ProjectType.MOBILE,
    ProjectType.LIBRARY,
    ProjectType.MICROSERVICE,
    ProjectType.MONOREPO,
    ProjectType.DESKTOP,
)

_ROOT_ENTRY_POINTS = frozenset({"index.js", "index.ts", "main.js", "main.ts"})
_WORKSPACE_ROOTS = frozenset({"packages", "apps", "libs"})


@dataclass(frozen=True, slots=True)
class StructureRule:
    archetype: ProjectType
    delta: int
    indicator: str
    matches: Callable[[ProjectView], bool]


def _has_root_entry_point(view: ProjectView) -> bool:
    return any(path in _ROOT_ENTRY_POINTS for path in view.paths)


def _workspace_package_count(view: ProjectView) -> int:
    count = 0
    for directory in view.directories:
        parts = directory.split("/")
        if len(parts) >= 2 and parts[-2] in _WORKSPACE_ROOTS:
            count += 1
    return count


def _mentions_desktop_shell(view: ProjectView) -> bool:
    return (
        view.has_path("electron")
        or '"electron"' in view.content
        or "@tauri-apps/" in view.content
    )


STRUCTURE_RULES: tuple[StructureRule, ...] = (
    # web
    StructureRule(
        ProjectType.WEB, 20, "Static asset directory",
        lambda v: v.has_segment("public", "static", "assets"),
    ),
    StructureRule(
        ProjectType.WEB, 20, "UI component or page directories",
        lambda v: any(v.has_path(p) for p in ("src/components/", "src/pages/", "src/views/")),
    ),
    StructureRule(
        ProjectType.WEB, 20, "HTML entry point",
        lambda v: v.has_basename("index.html", "app.html"),
    ),
    StructureRule(
        ProjectType.WEB, 10, "package.json manifest",
        lambda v: v.has_basename("package.json"),
    ),
    # mobile
    StructureRule(
        ProjectType.MOBILE, 30, "Native platform directories",
        lambda v: v.has_segment("android", "ios"),
    ),
    StructureRule(
        ProjectType.MOBILE, 30, "Flutter pubspec.yaml",
        lambda v: v.has_basename("pubspec.yaml"),
    ),
    StructureRule(
        ProjectType.MOBILE, 20, "React Native bundler config",
        lambda v: v.has_basename("metro.config.js") or "react-native" in v.content,
    ),
    # library
    StructureRule(
        ProjectType.LIBRARY, 25, "Package entry point at repository root",
        _has_root_entry_point,
    ),
    StructureRule(
        ProjectType.LIBRARY, 20, "Library or build output directories",
        lambda v: v.has_segment("lib", "dist", "build"),
    ),
    StructureRule(
        ProjectType.LIBRARY, 15, "Bundler or compiler config",
        lambda v: any(
            v.has_path(p) for p in ("rollup.config", "webpack.config", "tsconfig.json", ".npmignore")
        ),
    ),
    StructureRule(
        ProjectType.LIBRARY, 25, "Publishable package metadata",
        lambda v: v.has_basename("setup.py", "setup.cfg") or v.has_path("src/lib.rs"),
    ),
    # microservice
    StructureRule(
        ProjectType.MICROSERVICE, 25, "Container definition",
        lambda v: v.has_path("dockerfile") or v.has_path("docker-compose"),
    ),
    StructureRule(
        ProjectType.MICROSERVICE, 20, "Orchestration manifests",
        lambda v: v.has_segment("kubernetes", "k8s", "helm", "charts"),
    ),
    StructureRule(
        ProjectType.MICROSERVICE, 15, "API layer directories",
        lambda v: v.has_segment("api", "routes", "controllers", "middleware"),
    ),
    StructureRule(
        ProjectType.MICROSERVICE, 10, "Service layer directory",
        lambda v: v.has_segment("services"),
    ),
    # monorepo
    StructureRule(
        ProjectType.MONOREPO, 35, "Workspace configuration",
        lambda v: v.has_basename(
            "lerna.json", "nx.json", "workspace.json", "rush.json", "pnpm-workspace.yaml", "turbo.json"
        ),
    ),
    StructureRule(
        ProjectType.MONOREPO, 25, "Multiple workspace packages",
        lambda v: _workspace_package_count(v) > 1,
    ),
    # desktop
    StructureRule(
        ProjectType.DESKTOP, 30, "Electron or Tauri shell",
        _mentions_desktop_shell,
    ),
    StructureRule(
        ProjectType.DESKTOP, 30, "Tauri project directory",
        lambda v: v.has_segment("src-tauri") or v.has_basename("tauri.conf.json"),
    ),
    StructureRule(
        ProjectType.DESKTOP, 15, "Desktop packaging config",
        lambda v: v.has_path("electron-builder") or v.has_basename("forge.config.js"),
    ),
)


def classify_structure(
    view: ProjectView,
    rules: tuple[StructureRule, ...] = STRUCTURE_RULES,
) -> ProjectStructure:
    """Score every archetype and keep the best one.

    Indicators from every archetype that matched are reported, not only
    the winner's.
    """
    scores = dict.fromkeys(ARCHETYPE_ORDER, 0)
    indicators: list[str] = []
    for rule in rules:
        if rule.matches(view):
            scores[rule.archetype] += rule.delta
            indicators.append(rule.indicator)

    winner = ProjectType.UNKNOWN
    best = 0
    for archetype in ARCHETYPE_ORDER:
        if scores[archetype] > best:
            winner, best = archetype, scores[archetype]

    return ProjectStructure(
        type=winner,
        confidence=min(MAX_CONFIDENCE, best),
        indicators=tuple(indicators),
    )
