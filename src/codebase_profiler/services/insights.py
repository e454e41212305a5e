"""Human-facing digests of a finished DetectionResult."""

from __future__ import annotations

from codebase_profiler.domain.entities import DetectionResult

_LANGUAGE_TOOLS: dict[str, tuple[str, ...]] = {
    "javascript": ("ESLint", "SonarJS"),
    "typescript": ("ESLint", "SonarJS"),
    "python": ("Bandit", "PyLint", "Safety"),
    "java": ("SpotBugs", "SonarJava"),
    "csharp": ("SonarC#", "Security Code Scan"),
    "php": ("PHPCS Security", "SonarPHP"),
    "ruby": ("Brakeman", "RuboCop Security"),
    "go": ("Gosec", "StaticCheck"),
    "rust": ("Clippy", "Cargo Audit"),
}

_FRAMEWORK_TOOLS: dict[str, tuple[str, ...]] = {
    "React": ("React Security", "JSX A11y"),
    "Next.js": ("React Security", "JSX A11y"),
    "Angular": ("Angular Security", "TSLint Security"),
    "Vue.js": ("Vue Security",),
    "Django": ("Django Security", "Bandit Django"),
    "Spring Boot": ("Spring Security Analyzer",),
}

UNIVERSAL_TOOLS: tuple[str, ...] = ("Semgrep", "CodeQL", "Secret Scanner")


def _percent(confidence: float) -> str:
    return f"{confidence:g}%"


def language_summary(result: DetectionResult) -> str:
    """One-line digest, e.g. ``Primary: python (78%), Frameworks: FastAPI``."""
    primary = result.primary_language
    summary = f"Primary: {primary.name} ({_percent(primary.confidence)})"
    others = result.all_languages[1:3]
    if others:
        summary += ", Others: " + ", ".join(f"{lang.name} ({_percent(lang.confidence)})" for lang in others)
    if result.frameworks:
        summary += ", Frameworks: " + ", ".join(fw.name for fw in result.frameworks[:2])
    return summary


def recommended_tools(result: DetectionResult) -> list[str]:
    """Analysis tools for the detected stack, de-duplicated, universal ones last."""
    tools: dict[str, None] = {}
    for lang in result.all_languages:
        tools.update(dict.fromkeys(_LANGUAGE_TOOLS.get(lang.name, ())))
    for framework in result.frameworks:
        tools.update(dict.fromkeys(_FRAMEWORK_TOOLS.get(framework.name, ())))
    tools.update(dict.fromkeys(UNIVERSAL_TOOLS))
    return list(tools)
