from nits.rules import ScanContext
from nits.rules.issue_markers import (
    DEFAULT_MARKERS,
    REPORT_BANNER,
    enabled_tokens,
    get_report_rule,
    get_rule,
)
from nits.severity import Severity
from nits.utils.fileio import MarkerToken


def test_default_table_keeps_todo_disabled():
    assert enabled_tokens(DEFAULT_MARKERS) == ("XXX", "TBD", "FIXME")
    todo = [marker for marker in DEFAULT_MARKERS if marker.token == "TODO"]
    assert todo and not todo[0].enabled
    assert todo[0].note


def test_enabled_tokens_drops_duplicates():
    markers = [MarkerToken("XXX"), MarkerToken("XXX"), MarkerToken("HACK", enabled=False)]

    assert enabled_tokens(markers) == ("XXX",)


def test_markers_in_scoped_files_are_violations(make_repo):
    repo = make_repo(
        {
            "src/lib.rs": "// FIXME: handle overflow\nfn a() {}\n",
            "ci/run.sh": "# XXX temporary\n",
            "docs/plan.md": "Release date TBD\n",
            "tool.py": "# FIXME python is not scanned\n",
        }
    )

    result = get_rule().check(ScanContext(repo_root=repo))

    assert result.violated
    assert sorted(m.path for m in result.matches) == ["ci/run.sh", "docs/plan.md", "src/lib.rs"]


def test_markers_are_case_sensitive(make_repo):
    repo = make_repo({"lib.rs": "// fixme lowercase is fine\n// Tbd too\n"})

    assert get_rule().check(ScanContext(repo_root=repo)).matches == []


def test_disabled_todo_does_not_fail(make_repo):
    repo = make_repo({"lib.rs": "// TODO: later\n"})

    result = get_rule().check(ScanContext(repo_root=repo))

    assert not result.violated


def test_custom_table_can_disable_every_marker():
    rule = get_rule([MarkerToken("XXX", enabled=False)])

    assert not rule.active
    assert rule.patterns == ()


def test_report_rule_matches_todo_without_failing(make_repo):
    repo = make_repo({"lib.rs": "// TODO: one\n// TODO: two\n", "README.md": "TODO\n"})

    result = get_report_rule().check(ScanContext(repo_root=repo))

    assert len(result.matches) == 3
    assert result.rule.severity is Severity.REPORT_ONLY
    assert result.rule.banner == REPORT_BANNER
    assert not result.violated
