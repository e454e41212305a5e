"""Security profiling — risky-call scanning and hardening-feature detection.

All regex patterns are pre-compiled.  Hits are counted, not verified: a
pattern inside a comment or string literal still counts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from codebase_profiler.domain.entities import FileAnalysis, RiskLevel, SecurityProfile

# ── Risk categories ─────────────────────────────────────────────────────────

DYNAMIC_CODE = "dynamic code execution"
COMMAND_EXECUTION = "command execution"
DESERIALIZATION = "unsafe deserialization"
DOM_INJECTION = "DOM injection"
REFLECTION = "reflection"

_CATEGORY_ADVICE: dict[str, str] = {
    DYNAMIC_CODE: "Replace eval-style dynamic code execution with explicit dispatch",
    COMMAND_EXECUTION: "Pass argument lists to process APIs instead of shell command strings",
    DESERIALIZATION: "Never deserialize untrusted data with native object loaders",
    DOM_INJECTION: "Sanitize markup before writing it into the DOM",
    REFLECTION: "Restrict reflective type loading to an allow-list",
}

REVIEW_ISSUES = "Review and fix security vulnerabilities"
ADOPT_PRACTICES = "Implement security best practices"

# ── Risky-call patterns ─────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RiskPattern:
    label: str
    category: str
    regex: re.Pattern[str]


def _risk(label: str, category: str, pattern: str) -> RiskPattern:
    return RiskPattern(label=label, category=category, regex=re.compile(pattern))


_JS_PATTERNS = (
    _risk("eval() call", DYNAMIC_CODE, r"\beval\s*\("),
    _risk("innerHTML assignment", DOM_INJECTION, r"\binnerHTML\s*=(?!=)"),
    _risk("document.write() call", DOM_INJECTION, r"\bdocument\.write(?:ln)?\s*\("),
    _risk("setTimeout() with a code string", DYNAMIC_CODE, r"""\bsetTimeout\s*\(\s*["'`]"""),
    _risk("new Function() constructor", DYNAMIC_CODE, r"\bnew\s+Function\s*\("),
)

RISK_PATTERNS: dict[str, tuple[RiskPattern, ...]] = {
    "javascript": _JS_PATTERNS,
    "typescript": _JS_PATTERNS,
    "python": (
        _risk("eval() call", DYNAMIC_CODE, r"\beval\s*\("),
        _risk("exec() call", DYNAMIC_CODE, r"\bexec\s*\("),
        _risk("os.system() call", COMMAND_EXECUTION, r"\bos\.system\s*\("),
        _risk("subprocess.call() call", COMMAND_EXECUTION, r"\bsubprocess\.call\s*\("),
        _risk("pickle.loads() call", DESERIALIZATION, r"\bpickle\.loads?\s*\("),
    ),
    "java": (
        _risk("Runtime.exec() call", COMMAND_EXECUTION, r"\bRuntime\.getRuntime\(\)\.exec\s*\("),
        _risk("ProcessBuilder usage", COMMAND_EXECUTION, r"\bProcessBuilder\b"),
        _risk("Class.forName() call", REFLECTION, r"\bClass\.forName\s*\("),
        _risk("ObjectInputStream.readObject() call", DESERIALIZATION, r"\.readObject\s*\(\s*\)"),
    ),
    "php": (
        _risk("eval() call", DYNAMIC_CODE, r"\beval\s*\("),
        _risk("system() call", COMMAND_EXECUTION, r"\bsystem\s*\("),
        _risk("exec() call", COMMAND_EXECUTION, r"\bexec\s*\("),
        _risk("shell_exec() call", COMMAND_EXECUTION, r"\bshell_exec\s*\("),
        _risk("passthru() call", COMMAND_EXECUTION, r"\bpassthru\s*\("),
        _risk("unserialize() call", DESERIALIZATION, r"\bunserialize\s*\("),
    ),
    "csharp": (
        _risk("Process.Start() call", COMMAND_EXECUTION, r"\bProcess\.Start\s*\("),
        _risk("Assembly.Load() call", REFLECTION, r"\bAssembly\.Load(?:From|File)?\s*\("),
        _risk("Type.GetType() call", REFLECTION, r"\bType\.GetType\s*\("),
        _risk("Activator.CreateInstance() call", REFLECTION, r"\bActivator\.CreateInstance\b"),
        _risk("BinaryFormatter usage", DESERIALIZATION, r"\bBinaryFormatter\b"),
    ),
    "ruby": (
        _risk("eval() call", DYNAMIC_CODE, r"\beval\s*[\s(]"),
        _risk("system() call", COMMAND_EXECUTION, r"\bsystem\s*\("),
        _risk("Marshal.load() call", DESERIALIZATION, r"\bMarshal\.load\b"),
    ),
}

_CATEGORY_BY_LABEL: dict[str, str] = {
    p.label: p.category for patterns in RISK_PATTERNS.values() for p in patterns
}

# ── Hardening features (presence only) ──────────────────────────────────────

SECURITY_FEATURES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Security middleware detected", re.compile(r"helmet|cors|csrf|xss|sanitize", re.IGNORECASE)),
    ("Secure password hashing", re.compile(r"bcrypt|scrypt|argon2", re.IGNORECASE)),
    ("Authentication framework", re.compile(r"jwt|oauth|passport", re.IGNORECASE)),
    ("Secure communication", re.compile(r"https|ssl|tls", re.IGNORECASE)),
)

# ── Risk thresholds (strictly greater than) ─────────────────────────────────

CRITICAL_ISSUES = 10
HIGH_ISSUES = 5
MEDIUM_ISSUES = 2
COMPLIANCE_PENALTY_PER_ISSUE = 5


@dataclass(frozen=True, slots=True)
class FileScan:
    issue_count: int
    findings: tuple[str, ...]


def scan_file(content: str, language: str) -> FileScan:
    """Count risky-call hits for *language*; other languages are not scanned."""
    issues = 0
    findings: list[str] = []
    for pattern in RISK_PATTERNS.get(language, ()):
        hits = len(pattern.regex.findall(content))
        if hits:
            issues += hits
            findings.append(pattern.label)
    return FileScan(issue_count=issues, findings=tuple(findings))


def risk_level(issue_count: int) -> RiskLevel:
    if issue_count > CRITICAL_ISSUES:
        return RiskLevel.CRITICAL
    if issue_count > HIGH_ISSUES:
        return RiskLevel.HIGH
    if issue_count > MEDIUM_ISSUES:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def compliance_level(issue_count: int) -> int:
    return max(0, 100 - COMPLIANCE_PENALTY_PER_ISSUE * issue_count)


def detect_security_features(content: str) -> list[str]:
    return [name for name, pattern in SECURITY_FEATURES if pattern.search(content)]


def profile_security(analyses: Sequence[FileAnalysis], content: str) -> SecurityProfile:
    """Roll per-file hits into one run-wide profile.

    *content* is the whole file set joined, used for the feature checks.
    """
    total = sum(a.security_issue_count for a in analyses)
    patterns = list(dict.fromkeys(f for a in analyses for f in a.security_findings))
    features = detect_security_features(content)

    categories = {_CATEGORY_BY_LABEL[label] for label in patterns if label in _CATEGORY_BY_LABEL}
    recommendations: list[str] = []
    if total > 0:
        recommendations.append(REVIEW_ISSUES)
    recommendations.extend(advice for category, advice in _CATEGORY_ADVICE.items() if category in categories)
    if not features:
        recommendations.append(ADOPT_PRACTICES)

    return SecurityProfile(
        risk_level=risk_level(total),
        vulnerable_patterns=tuple(patterns),
        security_features=tuple(features),
        compliance_level=compliance_level(total),
        recommendations=tuple(recommendations),
    )
