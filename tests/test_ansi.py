"""Tokenizer tests for control/text span partitioning.

Covers each recognized escape form and the fallback of malformed escapes
to plain text, which keeps colors intact for downstream rewriting.
"""

from __future__ import annotations

import unittest

from hyperpath import ansi as ansi_mod
from hyperpath.ansi import SPAN_CONTROL, SPAN_TEXT, Span


def _control(start: int, end: int) -> Span:
    return Span(SPAN_CONTROL, start, end)


def _text(start: int, end: int) -> Span:
    return Span(SPAN_TEXT, start, end)


SAMPLE_LINES = [
    b"",
    b"plain text only",
    b"\x1b[31mmodified:   src/main.rs\x1b[m",
    b"\x1b[1m\x1b[31mbold red\x1b[0m tail",
    b"\x1b]0;window title\x1b\\after",
    b"\x1b(B\x1b[m reset via tput",
    b"dangling \x1b[38;5",
    b"lone \x1b escape \x1b",
    b"\xff\xfe invalid \x1b[32mutf8\x1b[0m",
]


class TokenizeTests(unittest.TestCase):
    def test_plain_text_is_single_text_span(self) -> None:
        self.assertEqual(ansi_mod.tokenize(b"hello"), [_text(0, 5)])

    def test_empty_line_has_no_spans(self) -> None:
        self.assertEqual(ansi_mod.tokenize(b""), [])

    def test_csi_color_sequences_split_around_text(self) -> None:
        spans = ansi_mod.tokenize(b"\x1b[31mred\x1b[0m")
        self.assertEqual(spans, [_control(0, 5), _text(5, 8), _control(8, 12)])

    def test_consecutive_escapes_are_separate_control_spans(self) -> None:
        spans = ansi_mod.tokenize(b"\x1b[1m\x1b[31mX")
        self.assertEqual(spans, [_control(0, 4), _control(4, 9), _text(9, 10)])

    def test_osc_terminated_by_bel(self) -> None:
        spans = ansi_mod.tokenize(b"a\x1b]8;;file:///x\x07b")
        self.assertEqual(spans, [_text(0, 1), _control(1, 16), _text(16, 17)])

    def test_osc_terminated_by_string_terminator(self) -> None:
        spans = ansi_mod.tokenize(b"\x1b]0;title\x1b\\rest")
        self.assertEqual(spans, [_control(0, 11), _text(11, 15)])

    def test_charset_designation_is_control(self) -> None:
        spans = ansi_mod.tokenize(b"\x1b(B\x1b[m")
        self.assertEqual(spans, [_control(0, 3), _control(3, 6)])

    def test_two_byte_escape_is_control(self) -> None:
        self.assertEqual(ansi_mod.tokenize(b"\x1b7x"), [_control(0, 2), _text(2, 3)])

    def test_incomplete_csi_at_end_of_line_degrades_to_text(self) -> None:
        self.assertEqual(ansi_mod.tokenize(b"abc\x1b[31"), [_text(0, 7)])

    def test_unterminated_osc_degrades_to_text(self) -> None:
        self.assertEqual(ansi_mod.tokenize(b"\x1b]8;;file"), [_text(0, 9)])

    def test_lone_and_unknown_escapes_merge_into_text(self) -> None:
        self.assertEqual(ansi_mod.tokenize(b"a\x1b"), [_text(0, 2)])
        self.assertEqual(ansi_mod.tokenize(b"\x1b\x01x"), [_text(0, 3)])

    def test_spans_partition_line_exactly(self) -> None:
        for line in SAMPLE_LINES:
            with self.subTest(line=line):
                spans = ansi_mod.tokenize(line)
                position = 0
                for span in spans:
                    self.assertEqual(span.start, position)
                    self.assertGreater(span.end, span.start)
                    position = span.end
                self.assertEqual(position, len(line))
                self.assertEqual(b"".join(ansi_mod.span_bytes(line, span) for span in spans), line)

    def test_text_spans_are_never_adjacent(self) -> None:
        for line in SAMPLE_LINES:
            with self.subTest(line=line):
                spans = ansi_mod.tokenize(line)
                for left, right in zip(spans, spans[1:]):
                    self.assertFalse(not left.is_control and not right.is_control)


class ControlHelperTests(unittest.TestCase):
    def test_control_sequences_and_strip_control(self) -> None:
        line = b"\x1b[31mmodified:   src/main.rs\x1b[m"
        self.assertEqual(ansi_mod.control_sequences(line), [b"\x1b[31m", b"\x1b[m"])
        self.assertEqual(ansi_mod.strip_control(line), b"modified:   src/main.rs")

    def test_osc8_uri_reads_open_and_close(self) -> None:
        self.assertEqual(ansi_mod.osc8_uri(b"\x1b]8;;file://h/x\x07"), b"file://h/x")
        self.assertEqual(ansi_mod.osc8_uri(b"\x1b]8;id=1;file://h/x\x1b\\"), b"file://h/x")
        self.assertEqual(ansi_mod.osc8_uri(b"\x1b]8;;\x07"), b"")
        self.assertIsNone(ansi_mod.osc8_uri(b"\x1b]0;title\x07"))
        self.assertIsNone(ansi_mod.osc8_uri(b"\x1b[31m"))


if __name__ == "__main__":
    unittest.main()
