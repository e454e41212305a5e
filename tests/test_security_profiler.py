"""Tests for security_profiler -- risky-call scanning and run-wide risk profile."""

import pytest

from codebase_profiler.domain.entities import RiskLevel
from codebase_profiler.services.security_profiler import (
    ADOPT_PRACTICES,
    REVIEW_ISSUES,
    compliance_level,
    detect_security_features,
    profile_security,
    risk_level,
    scan_file,
)


# ---------------------------------------------------------------------------
# Per-file scanning
# ---------------------------------------------------------------------------


def test_python_eval_is_flagged():
    scan = scan_file("result = eval(user_input)\n", "python")
    assert scan.issue_count == 1
    assert scan.findings == ("eval() call",)


def test_literal_eval_is_not_eval():
    assert scan_file("ast.literal_eval(text)\n", "python").issue_count == 0


def test_every_hit_counts():
    scan = scan_file("eval(a)\neval(b)\nos.system('ls')\n", "python")
    assert scan.issue_count == 3
    assert scan.findings == ("eval() call", "os.system() call")


def test_javascript_dom_sinks():
    content = "el.innerHTML = html;\nif (el.innerHTML == x) {}\ndocument.write('<p>');\n"
    scan = scan_file(content, "javascript")
    assert scan.issue_count == 2
    assert set(scan.findings) == {"innerHTML assignment", "document.write() call"}


def test_php_shell_exec_is_not_also_exec():
    scan = scan_file("<?php shell_exec('ls');", "php")
    assert scan.findings == ("shell_exec() call",)
    assert scan.issue_count == 1


def test_unscanned_language():
    assert scan_file("eval(x)", "go").issue_count == 0


# ---------------------------------------------------------------------------
# Levels
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "issues, level",
    [
        (0, RiskLevel.LOW),
        (2, RiskLevel.LOW),
        (3, RiskLevel.MEDIUM),
        (5, RiskLevel.MEDIUM),
        (6, RiskLevel.HIGH),
        (10, RiskLevel.HIGH),
        (11, RiskLevel.CRITICAL),
    ],
)
def test_risk_level_thresholds(issues, level):
    assert risk_level(issues) is level


def test_compliance_level():
    assert compliance_level(0) == 100
    assert compliance_level(3) == 85
    assert compliance_level(20) == 0
    assert compliance_level(30) == 0


def test_security_features():
    content = "const bcrypt = require('bcrypt');\napp.use(helmet());\n"
    assert detect_security_features(content) == [
        "Security middleware detected",
        "Secure password hashing",
    ]
    assert detect_security_features("") == []


# ---------------------------------------------------------------------------
# Run-wide profile
# ---------------------------------------------------------------------------


def test_profile_rolls_up_file_scans(make_analysis):
    analyses = [
        make_analysis("a.py", "python", security_issue_count=2, security_findings=("eval() call",)),
        make_analysis("b.py", "python", security_issue_count=1, security_findings=("os.system() call",)),
    ]
    profile = profile_security(analyses, "import bcrypt\n")
    assert profile.risk_level is RiskLevel.MEDIUM
    assert profile.compliance_level == 85
    assert profile.vulnerable_patterns == ("eval() call", "os.system() call")
    assert profile.security_features == ("Secure password hashing",)
    assert profile.recommendations[0] == REVIEW_ISSUES
    assert len(profile.recommendations) == 3
    assert ADOPT_PRACTICES not in profile.recommendations


def test_clean_profile_without_features(make_analysis):
    profile = profile_security([make_analysis("a.py", "python")], "x = 1\n")
    assert profile.risk_level is RiskLevel.LOW
    assert profile.compliance_level == 100
    assert profile.vulnerable_patterns == ()
    assert profile.recommendations == (ADOPT_PRACTICES,)


def test_duplicate_findings_are_listed_once(make_analysis):
    analyses = [
        make_analysis(f"{n}.py", "python", security_issue_count=1, security_findings=("eval() call",))
        for n in "ab"
    ]
    assert profile_security(analyses, "").vulnerable_patterns == ("eval() call",)
