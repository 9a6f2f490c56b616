"""
Tests for the report views and the `zlc` command.
"""

import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from zenlang.lexer.lexer import Lexer
from zenlang.lexer.tokens import TokenCategory
from zenlang.report import (
    category_breakdown, format_error_report, format_identifier_table,
    format_statistics, format_token_stream,
)
from zenlang import cli


SAMPLE = "start\n  declare Count = 1;\n  Count += 2; ## bump\nfinish\n"


class TestReports(unittest.TestCase):

    def setUp(self):
        self.lexer = Lexer(SAMPLE, "sample.zl")
        self.lexer.tokenize()

    def test_token_stream(self):
        text = format_token_stream(self.lexer.tokens)
        self.assertIn('<KEYWORD, "start", Line: 1, Col: 1>', text)
        self.assertIn('<ASSIGN_OP, "+=", Line: 3, Col: 9>', text)
        self.assertNotIn("END_OF_FILE", text)

    def test_category_breakdown(self):
        breakdown = category_breakdown(self.lexer.tokens)
        self.assertEqual(breakdown[TokenCategory.KEYWORD], 3)
        self.assertEqual(breakdown[TokenCategory.IDENTIFIER], 2)
        self.assertEqual(breakdown[TokenCategory.INT_LITERAL], 2)
        self.assertNotIn(TokenCategory.END_OF_FILE, breakdown)
        self.assertEqual(breakdown, dict(self.lexer.category_counts))

    def test_statistics(self):
        text = format_statistics(self.lexer)
        self.assertIn("Total tokens emitted : 11", text)
        self.assertIn("Comments removed     : 1", text)
        self.assertIn("Lines processed      : 5", text)
        self.assertIn("Lexical errors       : 0", text)

    def test_identifier_table(self):
        text = format_identifier_table(self.lexer.symbols)
        self.assertIn("Unique identifiers: 1", text)
        self.assertIn("Count: 2", text)

    def test_empty_identifier_table(self):
        lexer = Lexer("start finish")
        lexer.tokenize()
        self.assertIn("(no identifiers found)", format_identifier_table(lexer.symbols))

    def test_error_report(self):
        self.assertEqual(format_error_report(self.lexer.errors), "No lexical errors detected.")
        lexer = Lexer("X @ $")
        lexer.tokenize()
        text = format_error_report(lexer.errors)
        self.assertIn("(2 error(s))", text)
        self.assertIn(" 1. ERROR [INVALID_CHAR] Line: 1, Col: 3", text)
        self.assertIn(" 2. ERROR [INVALID_CHAR] Line: 1, Col: 5", text)


class TestCommandLine(unittest.TestCase):

    def _write(self, content: str) -> str:
        handle = tempfile.NamedTemporaryFile("w", suffix=".zl", delete=False, encoding="utf-8")
        with handle:
            handle.write(content)
        self.addCleanup(os.remove, handle.name)
        return handle.name

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = cli.main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_all_reports_by_default(self):
        path = self._write(SAMPLE)
        status, out, _ = self._run([path])
        self.assertEqual(status, cli.EXIT_OK)
        for title in ["TOKEN STREAM", "SCAN STATISTICS", "IDENTIFIER TABLE",
                      "No lexical errors detected."]:
            self.assertIn(title, out)

    def test_selected_report(self):
        path = self._write(SAMPLE)
        status, out, _ = self._run([path, "--symbols"])
        self.assertEqual(status, cli.EXIT_OK)
        self.assertIn("IDENTIFIER TABLE", out)
        self.assertNotIn("TOKEN STREAM", out)

    def test_strict_mode(self):
        path = self._write("X @ Y")
        self.assertEqual(self._run([path])[0], cli.EXIT_OK)
        status, out, _ = self._run([path, "--strict", "--errors"])
        self.assertEqual(status, cli.EXIT_LEXICAL_ERRORS)
        self.assertIn("LEXICAL ERROR REPORT  (1 error(s))", out)

    def test_missing_file(self):
        status, _, err = self._run([os.path.join(tempfile.gettempdir(), "no-such-file.zl")])
        self.assertEqual(status, cli.EXIT_IO_ERROR)
        self.assertIn("Cannot read file", err)

    def test_undecodable_file(self):
        handle = tempfile.NamedTemporaryFile("wb", suffix=".zl", delete=False)
        with handle:
            handle.write(b"X = \xff\xfe;\n")
        self.addCleanup(os.remove, handle.name)
        status, out, err = self._run([handle.name])
        self.assertEqual(status, cli.EXIT_IO_ERROR)
        self.assertIn("Cannot read file", err)
        self.assertEqual(out, "")


if __name__ == '__main__':
    unittest.main()
