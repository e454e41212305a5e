"""Framework detection — additive evidence over the whole file set.

Frontend frameworks get hand-written detectors because they combine file
markers, manifest strings and pattern density, and may spawn a
meta-framework.  Backend and mobile frameworks are plain signal tables.
Every family keeps its own acceptance threshold.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Sequence

from codebase_profiler.domain.entities import FrameworkCategory, FrameworkInfo
from codebase_profiler.domain.value_objects import ProjectView

# ── Acceptance thresholds (score must be strictly greater) ──────────────────

REACT_THRESHOLD = 60
VUE_THRESHOLD = 50
ANGULAR_THRESHOLD = 50
SVELTE_THRESHOLD = 50
BACKEND_THRESHOLD = 50
MOBILE_THRESHOLD = 40

# ── Meta-framework indicator minimums ───────────────────────────────────────

NEXTJS_MIN_INDICATORS = 2
NEXTJS_INDICATOR_BONUS = 15
NUXT_MIN_INDICATORS = 1
SVELTEKIT_MIN_INDICATORS = 1
META_FRAMEWORK_BONUS = 20

MAX_SCORE = 100
REACT_DENSITY_CAP = 30
REACT_DENSITY_PER_HIT = 2

_WEB = "web"
_MOBILE = "mobile"


@dataclass(slots=True)
class _Evidence:
    """Running score for one framework while its signals are checked."""

    score: int = 0
    dependencies: list[str] = field(default_factory=list)
    config_files: list[str] = field(default_factory=list)

    def add(self, delta: int, *, dependency: str | None = None, config: str | None = None) -> None:
        self.score += delta
        if dependency and dependency not in self.dependencies:
            self.dependencies.append(dependency)
        if config and config not in self.config_files:
            self.config_files.append(config)

    @property
    def confidence(self) -> int:
        return min(MAX_SCORE, self.score)

    def to_info(
        self,
        name: str,
        language: str,
        category: FrameworkCategory,
        ecosystem: str = _WEB,
        *,
        confidence: int | None = None,
        extra_dependencies: Sequence[str] = (),
        extra_config: Sequence[str] = (),
    ) -> FrameworkInfo:
        return FrameworkInfo(
            name=name,
            language=language,
            confidence=min(MAX_SCORE, self.confidence if confidence is None else confidence),
            category=category,
            ecosystem=ecosystem,
            dependencies=(*self.dependencies, *extra_dependencies),
            config_files=(*self.config_files, *extra_config),
        )


def _has_manifest(view: ProjectView) -> bool:
    return view.has_basename("package.json")


# ── Frontend ────────────────────────────────────────────────────────────────

# One import statement: a single line, or a braced name list that may wrap.
_REACT_IMPORT = re.compile(
    r"""^[ \t]*import\b(?:[\w$*, \t]*\{[^{}]*\}[ \t]*|[^;\n{]*?)\bfrom\s+['"]react['"]""",
    re.MULTILINE,
)
_REACT_PATTERNS = (
    re.compile(r"""import\s+React.*from\s+['"]react['"]"""),
    re.compile(r"""import\s+\{[^}]*\}\s+from\s+['"]react['"]"""),
    re.compile(r"React\.(?:Component|PureComponent|memo|forwardRef)"),
    re.compile(r"\b(?:useState|useEffect|useContext|useReducer|useMemo|useCallback)\b"),
    re.compile(r"JSX\.Element|React\.FC|React\.FunctionComponent"),
    re.compile(r"\b(?:className|onClick|onChange|onSubmit)="),
    re.compile(r"<[A-Z]\w*[^<>]*/?>"),
)
_NEXT_IMPORT = re.compile(r"""['"]next/""")


def detect_react(view: ProjectView) -> list[FrameworkInfo]:
    """React plus Next.js, which is emitted as a separate entry on top."""
    evidence = _Evidence()
    has_tsx = view.has_suffix(".tsx")
    if has_tsx or view.has_suffix(".jsx"):
        evidence.add(35, config="JSX/TSX files")
    if _REACT_IMPORT.search(view.content):
        evidence.add(25, dependency="react")
    if _has_manifest(view):
        if '"react"' in view.content:
            evidence.add(45, dependency="react")
        if '"@types/react"' in view.content:
            evidence.add(15, dependency="@types/react")
        if '"react-dom"' in view.content:
            evidence.add(20, dependency="react-dom")
    hits = sum(len(p.findall(view.content)) for p in _REACT_PATTERNS)
    evidence.add(min(REACT_DENSITY_CAP, hits * REACT_DENSITY_PER_HIT))

    language = "typescript" if has_tsx else "javascript"
    found: list[FrameworkInfo] = []
    if evidence.score > REACT_THRESHOLD:
        found.append(evidence.to_info("React", language, FrameworkCategory.FRONTEND))

    indicators = sum(
        (
            view.has_path("next.config"),
            bool(_NEXT_IMPORT.search(view.content)),
            "getServerSideProps" in view.content,
            "getStaticProps" in view.content,
            "getStaticPaths" in view.content,
            view.has_segment("pages", "app"),
            "next/router" in view.content or "next/navigation" in view.content,
        )
    )
    if indicators >= NEXTJS_MIN_INDICATORS:
        found.append(
            evidence.to_info(
                "Next.js",
                language,
                FrameworkCategory.FULLSTACK,
                confidence=evidence.confidence + indicators * NEXTJS_INDICATOR_BONUS,
                extra_dependencies=("next",),
                extra_config=("next.config.js",),
            )
        )
    return found


_VUE_IMPORT = re.compile(r"""import.*from\s+['"]vue['"]""")
_VUE_SFC_BLOCK = re.compile(r"<template>|<script>|<style>")


def detect_vue(view: ProjectView) -> list[FrameworkInfo]:
    evidence = _Evidence()
    if view.has_suffix(".vue"):
        evidence.add(40, config="Vue single-file components")
    if '"vue"' in view.content or "@vue/" in view.content:
        evidence.add(30, dependency="vue")
    if _VUE_IMPORT.search(view.content):
        evidence.add(20)
    if _VUE_SFC_BLOCK.search(view.content):
        evidence.add(20)

    found: list[FrameworkInfo] = []
    if evidence.score > VUE_THRESHOLD:
        found.append(evidence.to_info("Vue.js", "javascript", FrameworkCategory.FRONTEND))

    indicators = sum((view.has_path("nuxt.config"), bool(re.search(r"\bnuxt\b", view.content))))
    if indicators >= NUXT_MIN_INDICATORS:
        found.append(
            evidence.to_info(
                "Nuxt.js",
                "javascript",
                FrameworkCategory.FULLSTACK,
                confidence=evidence.confidence + META_FRAMEWORK_BONUS,
                extra_dependencies=("nuxt",),
            )
        )
    return found


_ANGULAR_DECORATORS = re.compile(r"@(?:Component|Injectable|NgModule)\b")


def detect_angular(view: ProjectView) -> list[FrameworkInfo]:
    evidence = _Evidence()
    if view.has_basename("angular.json"):
        evidence.add(40, config="angular.json")
    if "@angular/" in view.content:
        evidence.add(30, dependency="@angular/core")
    if _ANGULAR_DECORATORS.search(view.content):
        evidence.add(30)
    if view.has_suffix(".component.ts", ".service.ts"):
        evidence.add(20)
    if evidence.score > ANGULAR_THRESHOLD:
        return [evidence.to_info("Angular", "typescript", FrameworkCategory.FRONTEND)]
    return []


def detect_svelte(view: ProjectView) -> list[FrameworkInfo]:
    evidence = _Evidence()
    if view.has_suffix(".svelte"):
        evidence.add(40, config="Svelte components")
    if '"svelte"' in view.content or "svelte/" in view.content:
        evidence.add(30, dependency="svelte")
    if view.has_path("svelte.config"):
        evidence.add(20, config="svelte.config.js")

    found: list[FrameworkInfo] = []
    if evidence.score > SVELTE_THRESHOLD:
        found.append(evidence.to_info("Svelte", "javascript", FrameworkCategory.FRONTEND))

    indicators = sum(("@sveltejs/kit" in view.content, view.has_basename("app.html")))
    if indicators >= SVELTEKIT_MIN_INDICATORS:
        found.append(
            evidence.to_info(
                "SvelteKit",
                "javascript",
                FrameworkCategory.FULLSTACK,
                confidence=evidence.confidence + META_FRAMEWORK_BONUS,
                extra_dependencies=("@sveltejs/kit",),
            )
        )
    return found


# ── Backend and mobile signal tables ────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Signal:
    """One piece of evidence: a content regex or a path fragment, never both."""

    delta: int
    content: re.Pattern[str] | None = None
    path: str | None = None
    label: str | None = None


@dataclass(frozen=True, slots=True)
class FrameworkRule:
    name: str
    language: str
    category: FrameworkCategory
    ecosystem: str
    threshold: int
    signals: tuple[Signal, ...]

    def evaluate(self, view: ProjectView) -> FrameworkInfo | None:
        evidence = _Evidence()
        for signal in self.signals:
            if signal.content is not None and signal.content.search(view.content):
                evidence.add(signal.delta, dependency=signal.label)
            elif signal.path is not None and view.has_path(signal.path):
                evidence.add(signal.delta, config=signal.label)
        if evidence.score > self.threshold:
            return evidence.to_info(self.name, self.language, self.category, self.ecosystem)
        return None


def _content(delta: int, pattern: str, label: str | None = None) -> Signal:
    return Signal(delta=delta, content=re.compile(pattern), label=label)


def _path(delta: int, fragment: str, label: str | None = None) -> Signal:
    return Signal(delta=delta, path=fragment, label=label or fragment)


BACKEND_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule(
        "Express.js", "javascript", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (
            _content(45, r"""require\(\s*['"]express['"]\s*\)|from\s+['"]express['"]""", "express"),
            _content(40, r"\bapp\.(?:listen|get|post|use)\s*\("),
        ),
    ),
    FrameworkRule(
        "Fastify", "javascript", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (_content(80, r"\bfastify\b|@fastify/", "fastify"),),
    ),
    FrameworkRule(
        "NestJS", "typescript", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (
            _content(75, r"@nestjs/", "@nestjs/core"),
            _content(15, r"@(?:Controller|Injectable|Module)\("),
        ),
    ),
    FrameworkRule(
        "Django", "python", FrameworkCategory.FULLSTACK, _WEB, BACKEND_THRESHOLD,
        (
            _content(70, r"\bdjango\b", "django"),
            _path(40, "manage.py"),
            _path(15, "settings.py"),
        ),
    ),
    FrameworkRule(
        "Flask", "python", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (_content(85, r"from flask import|Flask\(__name__\)", "flask"),),
    ),
    FrameworkRule(
        "FastAPI", "python", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (_content(85, r"\bfastapi\b", "fastapi"),),
    ),
    FrameworkRule(
        "Spring Boot", "java", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (_content(90, r"@SpringBootApplication|spring-boot", "spring-boot"),),
    ),
    FrameworkRule(
        "Spring Framework", "java", FrameworkCategory.BACKEND, _WEB, BACKEND_THRESHOLD,
        (
            _content(60, r"springframework", "spring-core"),
            _content(30, r"@(?:Controller|RestController|Service)\b"),
        ),
    ),
    FrameworkRule(
        "Laravel", "php", FrameworkCategory.FULLSTACK, _WEB, BACKEND_THRESHOLD,
        (
            _content(85, r"Illuminate\\", "laravel/framework"),
            _path(55, "artisan"),
        ),
    ),
    FrameworkRule(
        "Symfony", "php", FrameworkCategory.FULLSTACK, _WEB, BACKEND_THRESHOLD,
        (
            _content(85, r"Symfony\\", "symfony/framework-bundle"),
            _path(55, "symfony.lock"),
        ),
    ),
)

MOBILE_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule(
        "React Native", "javascript", FrameworkCategory.MOBILE, _MOBILE, MOBILE_THRESHOLD,
        (_content(90, r"react-native|@react-native/", "react-native"),),
    ),
    FrameworkRule(
        "Flutter", "dart", FrameworkCategory.MOBILE, _MOBILE, MOBILE_THRESHOLD,
        (
            _content(60, r"package:flutter/|\bflutter\b", "flutter"),
            _path(50, "pubspec.yaml"),
        ),
    ),
    FrameworkRule(
        "Ionic", "javascript", FrameworkCategory.MOBILE, _MOBILE, MOBILE_THRESHOLD,
        (_content(85, r"@ionic/|ionic-angular", "@ionic/core"),),
    ),
)

FRONTEND_DETECTORS: tuple[Callable[[ProjectView], list[FrameworkInfo]], ...] = (
    detect_react,
    detect_vue,
    detect_angular,
    detect_svelte,
)


# ── Public API ──────────────────────────────────────────────────────────────


def detect_frameworks(view: ProjectView) -> list[FrameworkInfo]:
    """Run every family once over the whole file set, best match first."""
    found: list[FrameworkInfo] = []
    for detector in FRONTEND_DETECTORS:
        found.extend(detector(view))
    for rule in (*BACKEND_RULES, *MOBILE_RULES):
        info = rule.evaluate(view)
        if info is not None:
            found.append(info)
    return sorted(found, key=lambda fw: -fw.confidence)
