"""Core result data structures for the nits checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from .severity import Severity

if TYPE_CHECKING:  # pragma: no cover
    from .rules import CheckRule


@dataclass(frozen=True)
class Match:
    """A single line matched by a rule's search.

    ``line`` is ``None`` when git only reports that a binary file matched.
    """

    path: str
    line: Optional[int]
    text: str

    def render(self) -> str:
        if self.line is None:
            return f"Binary file {self.path} matches"
        return f"{self.path}:{self.line}:{self.text}"

    def to_dict(self) -> Dict[str, object]:
        return {"path": self.path, "line": self.line, "text": self.text}


@dataclass
class MatchResult:
    """Matches produced by evaluating one rule."""

    rule: "CheckRule"
    matches: List[Match] = field(default_factory=list)

    @property
    def violated(self) -> bool:
        return self.rule.severity.fails_build and bool(self.matches)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rule": self.rule.id,
            "description": self.rule.description,
            "severity": self.rule.severity.value,
            "count": len(self.matches),
            "violated": self.violated,
            "matches": [match.to_dict() for match in self.matches],
        }


@dataclass
class RunOutcome:
    """Accumulate rule results across a run."""

    results: List[MatchResult] = field(default_factory=list)
    aborted: bool = False

    @property
    def failed(self) -> bool:
        return any(result.violated for result in self.results)

    @property
    def passed(self) -> bool:
        return not self.failed

    def add_result(self, result: MatchResult) -> None:
        self.results.append(result)

    def violations(self) -> List[MatchResult]:
        return [result for result in self.results if result.violated]

    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "passed": self.passed,
            "aborted": self.aborted,
            "results": [result.to_dict() for result in self.results],
        }


def format_rule_report(result: MatchResult) -> str:
    """Render the console block for a single rule.

    Rules without matches render nothing unless they carry a banner, which
    is always emitted so CI log folding stays consistent between runs.
    """

    rule = result.rule
    lines: List[str] = []
    if result.matches:
        lines.append(f"--- {rule.description}")
        lines.extend(match.render() for match in result.matches)
        if rule.severity is Severity.FAIL_ON_MATCH and rule.remediation:
            lines.append(rule.remediation)
    if rule.banner:
        lines.append(rule.banner)
    return "\n".join(lines)


def format_summary(outcome: RunOutcome) -> str:
    """Create a short closing summary for console output."""

    lines: List[str] = []
    for result in outcome.results:
        status = "FAIL" if result.violated else "ok"
        lines.append(
            f"{result.rule.id:<16} {result.rule.severity.label:<7} {len(result.matches):>5}  {status}"
        )
    if outcome.aborted:
        lines.append("stopped at first violation (use --keep-going to run every rule)")
    lines.append(f"Status: {'PASS' if outcome.passed else 'FAIL'}")
    return "\n".join(lines)
