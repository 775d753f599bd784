"""OSC 8 hyperlink formatting."""

from __future__ import annotations

from urllib.parse import quote

from .classify import ResolvedPath

OSC = b"\x1b]"
BEL = b"\x07"
LINK_CLOSE = OSC + b"8;;" + BEL


def make_hyperlink(url: bytes, text: bytes) -> bytes:
    return OSC + b"8;;" + url + BEL + text + LINK_CLOSE


def file_url(hostname: bytes, target: bytes) -> bytes:
    """Build ``file://<hostname><target>`` with the path percent-encoded.

    OSC 8 URIs are limited to printable ASCII, so spaces and non-ASCII bytes
    in ``target`` are escaped; plain path characters are left as-is.
    """
    return b"file://" + hostname + quote(target, safe="/").encode("ascii")


def render_link(resolved: ResolvedPath, hostname: bytes) -> bytes:
    """Wrap the original candidate text in a link to its resolved target."""
    return make_hyperlink(file_url(hostname, resolved.target), resolved.text)
