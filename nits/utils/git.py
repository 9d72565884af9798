"""Thin wrappers around the git command line."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from nits.result import Match

GIT = "git"

# git grep exits 1 when nothing matched.
NO_MATCH_STATUS = 1
BINARY_PREFIX = b"Binary file "
BINARY_SUFFIX = b" matches\n"


class ToolingFailure(RuntimeError):
    """Raised when git cannot be run or reports an error."""


def _run_git(args: Sequence[str], cwd: Path) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            [GIT, *args],
            cwd=str(cwd),
            capture_output=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolingFailure(f"{GIT} executable not found") from exc
    except OSError as exc:
        raise ToolingFailure(f"unable to run {GIT} in {cwd}: {exc}") from exc


def _stderr_text(completed: subprocess.CompletedProcess) -> str:
    return completed.stderr.decode("utf-8", errors="replace").strip()


def find_repo_root(path: Path) -> Path:
    """Return the top-level directory of the work tree containing ``path``."""

    path = Path(path)
    if not path.is_dir():
        raise ToolingFailure(f"not a directory: {path}")
    completed = _run_git(["rev-parse", "--show-toplevel"], path)
    if completed.returncode != 0:
        detail = _stderr_text(completed) or f"exit status {completed.returncode}"
        raise ToolingFailure(f"{path} is not inside a git work tree: {detail}")
    return Path(completed.stdout.decode("utf-8").strip())


def build_grep_args(
    patterns: Sequence[str],
    globs: Sequence[str],
    fixed_strings: bool = False,
    max_depth: Optional[int] = None,
) -> List[str]:
    """Assemble the argument list for a ``git grep`` invocation.

    ``grep.column`` is forced off so user or repository config cannot add a
    column field to the records.
    """

    args = ["--no-pager", "-c", "grep.column=false", "grep", "-n", "-z", "--no-color"]
    if fixed_strings:
        args.append("-F")
    if max_depth is not None:
        args.append(f"--max-depth={max_depth}")
    for pattern in patterns:
        args.extend(["-e", pattern])
    args.append("--")
    args.extend(globs)
    return args


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def parse_grep_output(output: bytes) -> List[Match]:
    """Parse ``git grep -n -z`` output into matches.

    Text records are ``path NUL line NUL text`` terminated by a newline. The
    path is read up to its NUL, so it may itself contain a newline. Binary
    files produce ``Binary file <path> matches`` and become matches without
    a line number.
    """

    matches: List[Match] = []
    pos = 0
    end = len(output)
    while pos < end:
        if output.startswith(b"\n", pos):
            pos += 1
            continue
        if output.startswith(BINARY_PREFIX, pos):
            stop = output.find(BINARY_SUFFIX, pos)
            if stop == -1:
                raise ToolingFailure(f"unexpected git grep output: {_decode(output[pos:pos + 200])!r}")
            path = _decode(output[pos + len(BINARY_PREFIX):stop])
            matches.append(Match(path=path, line=None, text=""))
            pos = stop + len(BINARY_SUFFIX)
            continue
        path_end = output.find(b"\0", pos)
        line_end = output.find(b"\0", path_end + 1) if path_end != -1 else -1
        line = output[path_end + 1:line_end] if line_end != -1 else b""
        if not line.isdigit():
            raise ToolingFailure(f"unexpected git grep output: {_decode(output[pos:pos + 200])!r}")
        text_end = output.find(b"\n", line_end + 1)
        if text_end == -1:
            text_end = end
        matches.append(
            Match(
                path=_decode(output[pos:path_end]),
                line=int(line),
                text=_decode(output[line_end + 1:text_end]),
            )
        )
        pos = text_end + 1
    return matches


def git_grep(
    repo_root: Path,
    patterns: Sequence[str],
    globs: Sequence[str],
    fixed_strings: bool = False,
    max_depth: Optional[int] = None,
) -> List[Match]:
    """Search tracked files matching ``globs`` for any of ``patterns``."""

    if not patterns:
        return []
    completed = _run_git(build_grep_args(patterns, globs, fixed_strings, max_depth), repo_root)
    if completed.returncode == NO_MATCH_STATUS:
        return []
    if completed.returncode != 0:
        detail = _stderr_text(completed) or f"exit status {completed.returncode}"
        raise ToolingFailure(f"git grep failed: {detail}")
    return parse_grep_output(completed.stdout)
