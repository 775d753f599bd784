"""Path-shaped substring extraction for plain-text spans.

Finds whitespace/delimiter-bounded runs of path characters and splits the
text into literal and candidate pieces that reassemble to the input exactly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Bytes 0x80-0xFF are UTF-8 (or other 8-bit) filename characters.
PATH_RUN_RE = re.compile(rb"[A-Za-z0-9/._~\x80-\xff-]+")
DELIMITERS = b":,()\"'"
_SIGNIFICANT_RE = re.compile(rb"[A-Za-z0-9/~\x80-\xff]")
_BOUNDARY_BYTES = frozenset(DELIMITERS + b" \t\r\n\v\f")


@dataclass(frozen=True)
class Piece:
    """Half-open ``[start, end)`` slice of a text span."""

    start: int
    end: int
    is_candidate: bool = False


def has_path_run(data: bytes, start: int = 0, end: int | None = None) -> bool:
    """Return whether ``data[start:end]`` holds any run of path characters."""
    return PATH_RUN_RE.search(data, start, len(data) if end is None else end) is not None


def _is_boundary(text: bytes, index: int) -> bool:
    """Return whether ``text[index]`` may border a candidate.

    Positions outside ``text`` count as boundaries (span edges).
    """
    if index < 0 or index >= len(text):
        return True
    return text[index] in _BOUNDARY_BYTES


def _candidate_bounds(text: bytes, start: int, end: int) -> tuple[int, int] | None:
    """Return the candidate slice inside the run ``text[start:end]``, if any."""
    if not (_is_boundary(text, start - 1) and _is_boundary(text, end)):
        return None

    # file.rs:42:7 -> the 42 and 7 are position annotations, not paths.
    if start > 0 and text[start - 1] == ord(":") and text[start:end].isdigit():
        return None

    # Sentence punctuation ("see README.md.") is not part of the path.
    while end > start and text[end - 1] == ord("."):
        end -= 1
    if end == start:
        return None

    if _SIGNIFICANT_RE.search(text, start, end) is None:
        return None
    return start, end


def extract(text: bytes) -> list[Piece]:
    """Split ``text`` into ordered literal and candidate pieces.

    Pieces are gap-free: joining ``text[p.start:p.end]`` over the result
    reproduces ``text``. Adjacent literal bytes are merged into one piece.
    """
    pieces: list[Piece] = []
    literal_start = 0
    for match in PATH_RUN_RE.finditer(text):
        bounds = _candidate_bounds(text, match.start(), match.end())
        if bounds is None:
            continue
        start, end = bounds
        if start > literal_start:
            pieces.append(Piece(literal_start, start))
        pieces.append(Piece(start, end, is_candidate=True))
        literal_start = end

    if literal_start < len(text):
        pieces.append(Piece(literal_start, len(text)))
    return pieces
