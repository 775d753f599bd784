"""Candidate classification and link-target resolution.

Home and absolute paths are trusted by shape; relative paths must name an
entry of the working directory. The first matching rule wins.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .config import LinkerConfig
from .context import ProcessContext

KIND_HOME = "home"
KIND_ABSOLUTE = "absolute"
KIND_RELATIVE = "relative"


@dataclass(frozen=True)
class ResolvedPath:
    """Accepted candidate: visible ``text`` plus its absolute link ``target``."""

    text: bytes
    kind: str
    target: bytes


def leading_segment(candidate: bytes) -> bytes:
    """Return ``b"/usr"`` for ``b"/usr/local/bin"`` (and for ``b"/usr"``)."""
    end = candidate.find(b"/", 1)
    return candidate if end == -1 else candidate[:end]


def _strip_dot_prefix(candidate: bytes) -> bytes:
    while candidate.startswith(b"./"):
        candidate = candidate[2:].lstrip(b"/")
    return candidate


def _resolve_home(candidate: bytes, context: ProcessContext) -> ResolvedPath | None:
    home = context.home
    if home is None:
        return None
    base = home.rstrip(b"/")
    target = (base + candidate[1:]) or b"/"
    return ResolvedPath(candidate, KIND_HOME, target)


def _resolve_absolute(candidate: bytes, config: LinkerConfig) -> ResolvedPath | None:
    if leading_segment(candidate) not in config.absolute_prefixes:
        return None
    if config.check_absolute_exists and not os.path.lexists(candidate):
        return None
    return ResolvedPath(candidate, KIND_ABSOLUTE, candidate)


def _resolve_relative(candidate: bytes, context: ProcessContext) -> ResolvedPath | None:
    relative = _strip_dot_prefix(candidate)
    first = relative.split(b"/", 1)[0]
    if not first or first not in context.entries:
        return None
    cwd = context.cwd
    if cwd is None:
        return None
    return ResolvedPath(candidate, KIND_RELATIVE, cwd.rstrip(b"/") + b"/" + relative)


def classify(candidate: bytes, context: ProcessContext, config: LinkerConfig) -> ResolvedPath | None:
    """Resolve ``candidate`` or return ``None`` when it should stay plain text.

    Rules, checked in order:
    1. ``~`` or ``~/...``: home-relative, no existence check.
    2. ``/root/...`` whose leading segment is an allowed absolute prefix,
       optionally existence-checked when ``check_absolute_exists`` is set.
    3. First component (after any ``./``) names an entry of the working
       directory: relative to ``cwd``.
    """
    if candidate == b"~" or candidate.startswith(b"~/"):
        return _resolve_home(candidate, context)
    if candidate.startswith(b"/"):
        return _resolve_absolute(candidate, config)
    return _resolve_relative(candidate, context)
