"""Severity definitions for nit rules."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate how a rule's matches affect the run."""

    FAIL_ON_MATCH = "FAIL_ON_MATCH"
    REPORT_ONLY = "REPORT_ONLY"

    @property
    def fails_build(self) -> bool:
        """Return ``True`` when matches for this severity fail the run."""

        return self is Severity.FAIL_ON_MATCH

    @property
    def label(self) -> str:
        labels = {
            Severity.FAIL_ON_MATCH: "fail",
            Severity.REPORT_ONLY: "report",
        }
        return labels[self]
