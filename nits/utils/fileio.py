"""Configuration file helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml

CONFIG_FILENAME = ".nits.yaml"
KNOWN_KEYS = {"keep_going", "markers", "report_only"}


class ConfigError(ValueError):
    """Raised when the nits configuration file is malformed."""


@dataclass(frozen=True)
class MarkerToken:
    token: str
    enabled: bool = True
    note: str = ""


@dataclass(frozen=True)
class NitsConfig:
    """Settings read from ``.nits.yaml``; ``None`` fields keep the defaults."""

    keep_going: bool = False
    markers: Optional[Tuple[MarkerToken, ...]] = None
    report_only: Optional[Tuple[str, ...]] = None


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def _parse_marker(item: Any, index: int) -> MarkerToken:
    if isinstance(item, str):
        item = {"token": item}
    if not isinstance(item, dict):
        raise ConfigError(f"markers[{index}] must be a token or a mapping")
    token = item.get("token")
    if not isinstance(token, str) or not token.strip():
        raise ConfigError(f"markers[{index}] is missing a token")
    unknown = set(item) - {"token", "enabled", "note"}
    if unknown:
        raise ConfigError(f"markers[{index}] has unknown keys: {', '.join(sorted(unknown))}")
    enabled = item.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError(f"markers[{index}].enabled must be true or false")
    return MarkerToken(token=token.strip(), enabled=enabled, note=str(item.get("note") or ""))


def _parse_report_only(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(token, str) and token.strip() for token in value):
        raise ConfigError("report_only must be a list of tokens")
    return tuple(token.strip() for token in value)


def load_config(path: Path) -> NitsConfig:
    """Load ``path`` into a :class:`NitsConfig`; a missing file yields defaults."""

    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path} is not valid YAML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"unable to read {path}: {exc}") from exc

    if data is None:
        return NitsConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    unknown = set(data) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"{path} has unknown keys: {', '.join(sorted(unknown))}")

    keep_going = data.get("keep_going", False)
    if not isinstance(keep_going, bool):
        raise ConfigError("keep_going must be true or false")

    markers: Optional[Tuple[MarkerToken, ...]] = None
    if "markers" in data:
        raw_markers = data["markers"]
        if not isinstance(raw_markers, list):
            raise ConfigError("markers must be a list")
        parsed: List[MarkerToken] = [_parse_marker(item, idx) for idx, item in enumerate(raw_markers)]
        markers = tuple(parsed)

    report_only = _parse_report_only(data["report_only"]) if "report_only" in data else None
    return NitsConfig(keep_going=keep_going, markers=markers, report_only=report_only)
