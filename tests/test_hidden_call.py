from nits.rules import ScanContext
from nits.rules.hidden_call import REMEDIATION, get_rule
from nits.severity import Severity


def run_rule(repo):
    return get_rule().check(ScanContext(repo_root=repo))


def test_hidden_true_in_rust_source_is_violation(make_repo):
    lines = ["fn x() {}"] * 9 + ["    Arg::new(\"x\").hidden(true)"]
    repo = make_repo({"lib.rs": "\n".join(lines) + "\n"})

    result = run_rule(repo)

    assert result.violated
    assert [(m.path, m.line) for m in result.matches] == [("lib.rs", 10)]
    assert result.rule.severity is Severity.FAIL_ON_MATCH
    assert "deferred-visibility helper" in REMEDIATION


def test_hidden_true_outside_rust_is_ignored(make_repo):
    repo = make_repo(
        {
            "notes.md": "never call .hidden(true)\n",
            "build.sh": "echo '.hidden(true)'\n",
            "lib.rs.bak": ".hidden(true)\n",
        }
    )

    result = run_rule(repo)

    assert result.matches == []
    assert not result.violated


def test_hidden_true_is_matched_literally(make_repo):
    repo = make_repo(
        {
            "lib.rs": "arg.hidden(hidden_unless_forced())\narg.hiddenXtrue)\narg.hidden(false)\n",
        }
    )

    assert run_rule(repo).matches == []
