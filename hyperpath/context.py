"""Process-wide host facts used for path classification.

Hostname, home directory, working directory and its entry names are each
queried at most once, on first use, and never refreshed during a run.
"""

from __future__ import annotations

import os
import socket
from functools import cached_property
from pathlib import Path

DEFAULT_HOSTNAME = b"localhost"
_FIELDS = frozenset({"hostname", "home", "cwd", "entries"})


class ProcessContext:
    """Lazily populated, read-only view of the host environment.

    Keyword arguments pin field values up front (tests and callers that
    already know them); any field not given is queried from the OS the
    first time it is read.
    """

    def __init__(self, **known: object) -> None:
        unknown = set(known) - _FIELDS
        if unknown:
            raise TypeError(f"unknown context fields: {', '.join(sorted(unknown))}")
        if "entries" in known:
            known["entries"] = frozenset(known["entries"])  # type: ignore[arg-type]
        self.__dict__.update(known)

    @cached_property
    def hostname(self) -> bytes:
        try:
            name = socket.gethostname()
        except OSError:
            return DEFAULT_HOSTNAME
        return os.fsencode(name) if name else DEFAULT_HOSTNAME

    @cached_property
    def home(self) -> bytes | None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError):
            return None
        return os.fsencode(home)

    @cached_property
    def cwd(self) -> bytes | None:
        try:
            return os.getcwdb()
        except OSError:
            return None

    @cached_property
    def entries(self) -> frozenset[bytes]:
        """Names directly inside ``cwd``; empty when it cannot be listed."""
        if self.cwd is None:
            return frozenset()
        try:
            return frozenset(os.listdir(self.cwd))
        except OSError:
            return frozenset()
