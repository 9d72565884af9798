import subprocess
from pathlib import Path

import pytest


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def make_repo(tmp_path, monkeypatch):
    """Build a git work tree with ``files`` tracked (ignored paths stay untracked)."""

    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    def _make(files, name="repo"):
        repo = tmp_path / name
        repo.mkdir()
        _git(repo, "init", "-q")
        for relative, content in files.items():
            path = repo / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        _git(repo, "add", "-A")
        return repo

    return _make
