"""
Unit tests for header_scanner.py

Tests the header comment state machine on plain line lists and on files.
"""

import os
import tempfile
import unittest

from extraction.errors import (
    EmptyFile,
    HeaderCommentError,
    IncompleteComment,
    MissingDocumentation,
)
from extraction.header_scanner import (
    HeaderCommentScanner,
    ScanState,
    parse_header_comment,
    scan_header_comment,
)


class TestScannerTransitions(unittest.TestCase):
    """Test single-line transitions of the scanner."""

    def test_initial_state(self):
        scanner = HeaderCommentScanner()
        self.assertEqual(scanner.state, ScanState.BEFORE_COMMENT)
        self.assertEqual(scanner.lines_read, 0)

    def test_opening_line_enters_comment(self):
        scanner = HeaderCommentScanner()
        self.assertFalse(scanner.feed("/*"))
        self.assertEqual(scanner.state, ScanState.IN_COMMENT)
        self.assertEqual(scanner.body, [])

    def test_opening_line_with_indent_and_text(self):
        """Text after the opening delimiter is discarded."""
        scanner = HeaderCommentScanner()
        scanner.feed("   /* Author: someone")
        self.assertEqual(scanner.state, ScanState.IN_COMMENT)
        self.assertEqual(scanner.body, [])

    def test_closing_line_finishes(self):
        scanner = HeaderCommentScanner()
        scanner.feed("/*")
        self.assertTrue(scanner.feed("  */  "))
        self.assertEqual(scanner.state, ScanState.DONE)

    def test_decoration_is_stripped(self):
        scanner = HeaderCommentScanner()
        scanner.feed("/*")
        scanner.feed(" ***   Some text   ")
        self.assertEqual(scanner.body, ["Some text"])

    def test_decoration_only_line_dropped(self):
        scanner = HeaderCommentScanner()
        scanner.feed("/*")
        scanner.feed(" *   ")
        scanner.feed("****")
        self.assertEqual(scanner.body, [])

    def test_feed_after_done_is_ignored(self):
        scanner = HeaderCommentScanner()
        scanner.feed("/*")
        scanner.feed(" * a")
        scanner.feed(" */")
        self.assertTrue(scanner.feed(" * b"))
        self.assertEqual(scanner.body, ["a"])

    def test_comment_opening_on_third_line_fails(self):
        scanner = HeaderCommentScanner("fnLate.sqf")
        scanner.feed("private _a = 1;")
        scanner.feed("private _b = 2;")
        with self.assertRaises(MissingDocumentation):
            scanner.feed("/*")


class TestParseHeaderComment(unittest.TestCase):
    """Test full parses over line lists."""

    def test_two_line_comment(self):
        lines = ["/*", " * Line one.", " * Line two.", " */"]
        self.assertEqual(parse_header_comment(lines), "Line one.\r\nLine two.")

    def test_comment_on_second_line(self):
        lines = ["#include \"script_component.hpp\"", "/*", " * Doc", " */", "code;"]
        self.assertEqual(parse_header_comment(lines), "Doc")

    def test_empty_comment_body_is_valid(self):
        self.assertEqual(parse_header_comment(["/*", " *", " */"]), "")

    def test_blank_lines_are_not_counted(self):
        lines = ["", "", "/*", "", " * Doc", "", " */"]
        self.assertEqual(parse_header_comment(lines), "Doc")

    def test_stops_at_closing_line(self):
        lines = ["/*", " * Doc", " */", "/*", " * Other", " */"]
        self.assertEqual(parse_header_comment(lines), "Doc")

    def test_missing_documentation(self):
        lines = ["a = 1;", "b = 2;", "c = 3;"]
        with self.assertRaises(MissingDocumentation):
            parse_header_comment(lines)

    def test_two_lines_without_comment(self):
        with self.assertRaises(MissingDocumentation):
            parse_header_comment(["a = 1;", "b = 2;"])

    def test_empty_file(self):
        with self.assertRaises(EmptyFile):
            parse_header_comment([])

    def test_single_line_file(self):
        with self.assertRaises(EmptyFile):
            parse_header_comment(["/*"])

    def test_incomplete_comment(self):
        with self.assertRaises(IncompleteComment):
            parse_header_comment(["/*", " * Doc", " * More"])

    def test_inline_closing_is_not_a_close(self):
        """Only a line holding nothing but the closing delimiter closes."""
        with self.assertRaises(IncompleteComment):
            parse_header_comment(["/*", " * Doc */", "code;"])

    def test_byte_order_mark_before_opener(self):
        lines = ["\ufeff/*", " * Doc", " */"]
        self.assertEqual(parse_header_comment(lines), "Doc")

    def test_error_message_uses_file_name(self):
        with self.assertRaises(HeaderCommentError) as ctx:
            parse_header_comment([], file_path="/tmp/addon/functions/fnEmpty.sqf")
        self.assertEqual(str(ctx.exception), "fnEmpty.sqf - empty file")
        self.assertEqual(ctx.exception.file_path, "/tmp/addon/functions/fnEmpty.sqf")


class TestScanHeaderCommentFile(unittest.TestCase):
    """Test scanning real files."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, content, newline=""):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w", encoding="utf-8", newline=newline) as f:
            f.write(content)
        return path

    def test_scan_lf_file(self):
        path = self._write(
            "fnDoStuff.sqf",
            "/*\n * Author: Someone\n *\n * Does stuff.\n */\n\nparams [\"_unit\"];\n",
        )
        self.assertEqual(scan_header_comment(path), "Author: Someone\r\nDoes stuff.")

    def test_scan_crlf_file(self):
        path = self._write("fnCrlf.sqf", "/*\r\n * One\r\n\r\n * Two\r\n */\r\n")
        self.assertEqual(scan_header_comment(path), "One\r\nTwo")

    def test_scan_file_with_byte_order_mark(self):
        path = os.path.join(self.tmpdir, "fnBom.sqf")
        with open(path, "wb") as f:
            f.write(b"\xef\xbb\xbf/*\n * Doc line.\n */\ncode;\n")
        self.assertEqual(scan_header_comment(path), "Doc line.")

    def test_scan_missing_documentation(self):
        path = self._write("fnNoDoc.sqf", "a = 1;\nb = 2;\nc = 3;\n")
        with self.assertRaises(MissingDocumentation):
            scan_header_comment(path)

    def test_scan_empty_file(self):
        path = self._write("fnEmpty.sqf", "\n\n")
        with self.assertRaises(EmptyFile):
            scan_header_comment(path)

    def test_scan_nonexistent_file(self):
        with self.assertRaises(FileNotFoundError):
            scan_header_comment(os.path.join(self.tmpdir, "fnMissing.sqf"))


if __name__ == "__main__":
    unittest.main()
