"""Escape-sequence tokenizer for raw terminal output lines.

Splits a line into ordered control and text spans that partition it exactly.
Unrecognized or truncated escapes fall back to text so colors are never lost.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ESC = 0x1B
SPAN_CONTROL = "control"
SPAN_TEXT = "text"

# Anchored at an ESC byte. The two-byte form excludes the introducers of the
# longer forms so a truncated CSI/OSC is not mistaken for a complete escape.
ESCAPE_RE = re.compile(
    rb"\x1b(?:"
    rb"\[[^\x40-\x7e]*[\x40-\x7e]"
    rb"|[\]PX^_][^\x07\x1b]*(?:\x07|\x1b\\)"
    rb"|[\x20-\x2f]+[\x30-\x7e]"
    rb"|[\x30-\x4f\x51-\x57\x59\x5a\x5c\x60-\x7e]"
    rb")"
)


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` byte range of one line, tagged by kind."""

    kind: str
    start: int
    end: int

    @property
    def is_control(self) -> bool:
        return self.kind == SPAN_CONTROL


def tokenize(line: bytes) -> list[Span]:
    """Partition ``line`` into alternating control and text spans.

    Control spans cover one recognized escape sequence each; consecutive
    escapes yield consecutive control spans. Text runs between them are merged,
    so two text spans are never adjacent. An ESC byte that does not start a
    recognized sequence stays part of the surrounding text.
    """
    spans: list[Span] = []
    text_start = 0
    pos = line.find(ESC)
    while pos != -1:
        match = ESCAPE_RE.match(line, pos)
        if match is None:
            pos = line.find(ESC, pos + 1)
            continue
        if pos > text_start:
            spans.append(Span(SPAN_TEXT, text_start, pos))
        spans.append(Span(SPAN_CONTROL, pos, match.end()))
        text_start = match.end()
        pos = line.find(ESC, text_start)

    if text_start < len(line):
        spans.append(Span(SPAN_TEXT, text_start, len(line)))
    return spans


def span_bytes(line: bytes, span: Span) -> bytes:
    return line[span.start:span.end]


def control_sequences(line: bytes) -> list[bytes]:
    """Return the bytes of every control span in ``line``, in order."""
    return [span_bytes(line, span) for span in tokenize(line) if span.is_control]


def strip_control(line: bytes) -> bytes:
    """Return ``line`` with every recognized escape sequence removed."""
    return b"".join(span_bytes(line, span) for span in tokenize(line) if not span.is_control)


def osc8_uri(sequence: bytes) -> bytes | None:
    """Return the URI of an OSC 8 hyperlink sequence, or ``None`` for others.

    An empty URI marks the sequence that closes a hyperlink.
    """
    if not sequence.startswith(b"\x1b]8;"):
        return None
    body = sequence[2:-1] if sequence.endswith(b"\x07") else sequence[2:-2]
    parts = body.split(b";", 2)
    if len(parts) < 3:
        return None
    return parts[2]
