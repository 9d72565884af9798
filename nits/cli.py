"""Command-line entry point for the repository nits checker."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Sequence

from .result import MatchResult, RunOutcome, format_rule_report, format_summary
from .rules import CheckRule, ScanContext
from .rules import hidden_call, issue_markers
from .utils.fileio import CONFIG_FILENAME, ConfigError, NitsConfig, load_config
from .utils.git import ToolingFailure, find_repo_root

TOOLING_FAILURE_EXIT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nits",
        description="Fail the build on disallowed calls and issue markers in tracked files.",
    )
    parser.add_argument(
        "--repo",
        default=".",
        help="Any path inside the repository to check (defaults to the current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the nits configuration (defaults to {CONFIG_FILENAME} at the repository root).",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Run every rule and report all violations instead of stopping at the first.",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Also emit a JSON report when set to json (defaults to text only).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., artifacts/nits.json).",
    )
    return parser


def load_rules(config: NitsConfig | None = None) -> List[CheckRule]:
    config = config or NitsConfig()
    return [
        hidden_call.get_rule(),
        issue_markers.get_rule(config.markers),
        issue_markers.get_report_rule(config.report_only),
    ]


def run_checks(context: ScanContext, rules: Sequence[CheckRule], keep_going: bool = False) -> RunOutcome:
    """Evaluate ``rules`` in order.

    Without ``keep_going`` the run stops after the first rule that fails the
    build, so later rules are not searched at all. ``ToolingFailure`` from
    the search propagates to the caller.
    """

    outcome = RunOutcome()
    for index, rule in enumerate(rules):
        if rule.active:
            result = rule.check(context)
        else:
            result = MatchResult(rule=rule)
        outcome.add_result(result)
        if result.violated and not keep_going and index < len(rules) - 1:
            outcome.aborted = True
            break
    return outcome


def resolve_config(repo_root: Path, config_path: str | None) -> NitsConfig:
    if config_path is None:
        return load_config(repo_root / CONFIG_FILENAME)
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    return load_config(path)


def write_output(outcome: RunOutcome, output_path: str | None, report_format: str) -> None:
    for result in outcome.results:
        block = format_rule_report(result)
        if block:
            print(block)
    print(format_summary(outcome))

    if report_format == "json" or output_path:
        payload = json.dumps(outcome.to_dict(), indent=2)
        if output_path:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(payload, encoding="utf-8")
            print(f"\nReport written to {output_path}")
        else:
            print("\nJSON Report")
            print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        repo_root = find_repo_root(Path(args.repo))
        config = resolve_config(repo_root, args.config)
        context = ScanContext(repo_root=repo_root)
        outcome = run_checks(context, load_rules(config), keep_going=args.keep_going or config.keep_going)
    except (ToolingFailure, ConfigError) as exc:
        sys.stderr.write(f"nits: {exc}\n")
        return TOOLING_FAILURE_EXIT
    try:
        write_output(outcome, args.output_path, args.format)
    except OSError as exc:
        sys.stderr.write(f"nits: unable to write report to {args.output_path}: {exc}\n")
        return TOOLING_FAILURE_EXIT
    return outcome.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
