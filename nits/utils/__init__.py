"""Utility helpers for the nits checker."""

from .fileio import ConfigError, MarkerToken, NitsConfig, load_config
from .git import ToolingFailure, find_repo_root, git_grep

__all__ = [
    "ConfigError",
    "MarkerToken",
    "NitsConfig",
    "load_config",
    "ToolingFailure",
    "find_repo_root",
    "git_grep",
]
