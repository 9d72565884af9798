"""Reject literal ``.hidden(true)`` calls in Rust sources."""

from __future__ import annotations

from nits.severity import Severity

from . import CheckRule

RULE_ID = "hidden-true"
HIDDEN_CALL = ".hidden(true)"
RUST_GLOBS = ("*.rs",)
REMEDIATION = (
    "use an explicit deferred-visibility helper instead of the literal call: "
    '".hidden(hidden_unless_forced())"'
)


def get_rule() -> CheckRule:
    return CheckRule(
        id=RULE_ID,
        description=f"literal {HIDDEN_CALL} calls",
        patterns=(HIDDEN_CALL,),
        globs=RUST_GLOBS,
        severity=Severity.FAIL_ON_MATCH,
        fixed_strings=True,
        remediation=REMEDIATION,
    )
