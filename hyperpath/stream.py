"""Line driver: rewrite each input line and stream it to the output.

Lines are handled one at a time in input order. Lines without linkable
paths are written back byte-for-byte.
"""

from __future__ import annotations

from typing import BinaryIO

from .ansi import osc8_uri, tokenize
from .candidates import extract, has_path_run
from .classify import classify
from .config import LinkerConfig
from .context import ProcessContext
from .hyperlink import render_link


def split_terminator(raw: bytes) -> tuple[bytes, bytes]:
    """Split ``raw`` into its body and ``\\r\\n``/``\\n``/empty terminator."""
    if raw.endswith(b"\r\n"):
        return raw[:-2], b"\r\n"
    if raw.endswith(b"\n"):
        return raw[:-1], b"\n"
    return raw, b""


def _link_text(text: bytes, context: ProcessContext, config: LinkerConfig) -> list[bytes] | None:
    """Return rewritten chunks for one text span, or ``None`` when unchanged."""
    out: list[bytes] = []
    changed = False
    for piece in extract(text):
        chunk = text[piece.start:piece.end]
        if piece.is_candidate:
            resolved = classify(chunk, context, config)
            if resolved is not None:
                out.append(render_link(resolved, context.hostname))
                changed = True
                continue
        out.append(chunk)
    return out if changed else None


def link_line(line: bytes, context: ProcessContext, config: LinkerConfig) -> bytes:
    """Return ``line`` with every accepted path wrapped in an OSC 8 link.

    ``line`` must not include its terminator. Control sequences are copied
    verbatim and the visible text is never altered. Text already inside an
    OSC 8 link from the input is left alone. When nothing is linked the input
    object itself is returned.
    """
    if not has_path_run(line):
        return line
    spans = tokenize(line)
    # Escape parameters such as the "31m" of a color code are path-like too.
    if not any(has_path_run(line, span.start, span.end) for span in spans if not span.is_control):
        return line

    out: list[bytes] = []
    changed = False
    inside_link = False
    for span in spans:
        chunk = line[span.start:span.end]
        if span.is_control:
            uri = osc8_uri(chunk)
            if uri is not None:
                inside_link = bool(uri)
        elif not inside_link:
            linked = _link_text(chunk, context, config)
            if linked is not None:
                out.extend(linked)
                changed = True
                continue
        out.append(chunk)
    return b"".join(out) if changed else line


class InputReadError(Exception):
    """Reading the input stream failed before end-of-stream."""


def run_filter(
    reader: BinaryIO,
    writer: BinaryIO,
    context: ProcessContext,
    config: LinkerConfig,
) -> None:
    """Copy ``reader`` to ``writer`` line by line, linking paths on the way.

    Read failures are raised as ``InputReadError``; write failures propagate
    unchanged. A line that fails to read is never partially written.
    """
    while True:
        try:
            raw = reader.readline()
        except OSError as exc:
            raise InputReadError(str(exc)) from exc
        if not raw:
            break
        body, terminator = split_terminator(raw)
        writer.write(link_line(body, context, config) + terminator)
        if config.flush_each_line:
            writer.flush()
    writer.flush()
