"""Reject issue-tracking markers left in the code.

Outstanding work belongs in the issue tracker, not in comments. Enabled
marker tokens fail the run; ``TODO`` is still listed but disabled until the
existing occurrences are purged, and a separate report-only rule keeps the
current offenders visible in the CI log.

The enabled set is the three tokens below; ``TODO`` is the single token
kept in the table but switched off.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from nits.severity import Severity
from nits.utils.fileio import MarkerToken

from . import CheckRule

RULE_ID = "issue-markers"
REPORT_RULE_ID = "todo-markers"
MARKER_GLOBS = ("*.rs", "*.sh", "*.md")
# Files are searched directly; pathspec wildcards still cover every directory.
MARKER_MAX_DEPTH = 0
REPORT_BANNER = "^^^ +++"
REMEDIATION = "use an issue on the tracker to record outstanding work instead of marking up the code"

DEFAULT_MARKERS: Tuple[MarkerToken, ...] = (
    MarkerToken("XXX"),
    MarkerToken("TBD"),
    MarkerToken("FIXME"),
    MarkerToken("TODO", enabled=False, note="disabled until the outstanding TODOs are purged"),
)
DEFAULT_REPORT_ONLY: Tuple[str, ...] = ("TODO",)


def enabled_tokens(markers: Iterable[MarkerToken]) -> Tuple[str, ...]:
    """Return the tokens that are searched, in table order, without duplicates."""

    tokens: List[str] = []
    for marker in markers:
        if marker.enabled and marker.token not in tokens:
            tokens.append(marker.token)
    return tuple(tokens)


def get_rule(markers: Optional[Sequence[MarkerToken]] = None) -> CheckRule:
    table = DEFAULT_MARKERS if markers is None else tuple(markers)
    tokens = enabled_tokens(table)
    return CheckRule(
        id=RULE_ID,
        description=f"issue markers ({', '.join(tokens) or 'none enabled'})",
        patterns=tokens,
        globs=MARKER_GLOBS,
        severity=Severity.FAIL_ON_MATCH,
        fixed_strings=True,
        remediation=REMEDIATION,
        max_depth=MARKER_MAX_DEPTH,
    )


def get_report_rule(tokens: Optional[Sequence[str]] = None) -> CheckRule:
    report_tokens = DEFAULT_REPORT_ONLY if tokens is None else tuple(tokens)
    return CheckRule(
        id=REPORT_RULE_ID,
        description=f"outstanding {', '.join(report_tokens) or 'markers'} (report only)",
        patterns=tuple(report_tokens),
        globs=MARKER_GLOBS,
        severity=Severity.REPORT_ONLY,
        fixed_strings=True,
        max_depth=MARKER_MAX_DEPTH,
        banner=REPORT_BANNER,
    )
