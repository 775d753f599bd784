"""Linker settings and the optional persisted JSON config.

Holds the absolute-prefix allowlist and stream policies consumed by the core.
All file access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "hyperpath"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_ABSOLUTE_PREFIXES = (
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/lib",
    "/lib64",
    "/mnt",
    "/opt",
    "/proc",
    "/root",
    "/run",
    "/sbin",
    "/srv",
    "/sys",
    "/tmp",
    "/usr",
    "/var",
    # macOS roots
    "/Applications",
    "/Library",
    "/System",
    "/Users",
    "/Volumes",
    "/private",
)


def normalize_prefix(prefix: str) -> bytes | None:
    """Normalize a root like ``usr/`` to ``b"/usr"``.

    Prefixes match whole leading segments, so anything that is empty or
    spans more than one segment (``/opt/homebrew``) yields ``None``.
    """
    segment = prefix.strip().strip("/")
    if not segment or "/" in segment:
        return None
    return b"/" + segment.encode("utf-8", errors="surrogateescape")


def _normalize_prefixes(prefixes: Iterable[object]) -> frozenset[bytes]:
    normalized: set[bytes] = set()
    for prefix in prefixes:
        if not isinstance(prefix, str):
            continue
        value = normalize_prefix(prefix)
        if value is not None:
            normalized.add(value)
    return frozenset(normalized)


@dataclass(frozen=True)
class LinkerConfig:
    """Settings that shape classification and output cadence."""

    absolute_prefixes: frozenset[bytes] = _normalize_prefixes(DEFAULT_ABSOLUTE_PREFIXES)
    check_absolute_exists: bool = False
    flush_each_line: bool = True

    def with_extra_prefixes(self, prefixes: list[str]) -> LinkerConfig:
        if not prefixes:
            return self
        return replace(self, absolute_prefixes=self.absolute_prefixes | _normalize_prefixes(prefixes))


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _string_list(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def config_from_mapping(data: dict[str, object]) -> LinkerConfig:
    """Build a ``LinkerConfig`` from decoded JSON, ignoring invalid values.

    ``absolute_prefixes`` replaces the defaults; ``extra_absolute_prefixes``
    extends whichever set is in effect. Booleans must be real JSON booleans.
    """
    config = LinkerConfig()

    replacement = _string_list(data.get("absolute_prefixes"))
    if replacement is not None:
        config = replace(config, absolute_prefixes=_normalize_prefixes(replacement))

    extra = _string_list(data.get("extra_absolute_prefixes"))
    if extra:
        config = config.with_extra_prefixes(extra)

    check_absolute = data.get("check_absolute_exists")
    if isinstance(check_absolute, bool):
        config = replace(config, check_absolute_exists=check_absolute)

    flush_each_line = data.get("flush_each_line")
    if isinstance(flush_each_line, bool):
        config = replace(config, flush_each_line=flush_each_line)

    return config


def load_linker_config(path: Path | None = None) -> LinkerConfig:
    """Load persisted settings merged over the built-in defaults."""
    return config_from_mapping(load_config(path))
