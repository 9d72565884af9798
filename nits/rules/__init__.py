"""Rule registry for the nits checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from nits.result import Match, MatchResult
from nits.severity import Severity
from nits.utils import git_grep

Searcher = Callable[..., List[Match]]


@dataclass
class ScanContext:
    """Bundle inputs shared across rules."""

    repo_root: Path
    search: Searcher = field(default=git_grep)


@dataclass(frozen=True)
class CheckRule:
    """A single pattern search and how its matches affect the run."""

    id: str
    description: str
    patterns: Tuple[str, ...]
    globs: Tuple[str, ...]
    severity: Severity
    fixed_strings: bool = False
    remediation: Optional[str] = None
    max_depth: Optional[int] = None
    banner: Optional[str] = None

    @property
    def active(self) -> bool:
        return bool(self.patterns)

    def check(self, context: ScanContext) -> MatchResult:
        """Run the search for this rule and wrap the matches."""

        matches = context.search(
            context.repo_root,
            self.patterns,
            self.globs,
            fixed_strings=self.fixed_strings,
            max_depth=self.max_depth,
        )
        return MatchResult(rule=self, matches=list(matches))
