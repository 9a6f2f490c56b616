"""
Tests for lexical error records and the error log.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from zenlang.lexer.errors import (
    ErrorKind, ErrorLog, ErrorRecord, ErrorRecovery, LexerError, ERROR_CODES,
)


class TestErrorLog(unittest.TestCase):

    def setUp(self):
        self.log = ErrorLog()

    def test_empty_log(self):
        self.assertFalse(self.log.has_errors())
        self.assertEqual(self.log.count(), 0)
        self.assertEqual(self.log.all_messages(), [])
        self.log.raise_first()  # no-op

    def test_record_and_message_format(self):
        self.log.bad_char("@", 1, 7)
        self.assertTrue(self.log.has_errors())
        self.assertEqual(self.log.all_messages(), [
            "ERROR [INVALID_CHAR] Line: 1, Col: 7  lexeme='@'  "
            "-> Character '@' is not part of the ZenLang alphabet"
        ])

    def test_recording_order_is_kept(self):
        self.log.unterminated_comment(1, 1)
        self.log.bad_number("12.", 2, 3, "At least one digit required after the decimal point")
        self.log.bad_escape("\\q", 3, 4)
        self.assertEqual([r.kind for r in self.log], [
            ErrorKind.UNTERMINATED_COMMENT, ErrorKind.BAD_NUMBER, ErrorKind.BAD_ESCAPE,
        ])
        self.assertEqual(len(self.log.by_kind(ErrorKind.BAD_NUMBER)), 1)

    def test_generic_record(self):
        record = self.log.record(ErrorKind.BAD_IDENTIFIER, 4, 2, "Abc", "too long")
        self.assertIsInstance(record, ErrorRecord)
        self.assertEqual(record.position, (4, 2))
        self.assertEqual(self.log.records, (record,))

    def test_non_printable_character(self):
        record = self.log.bad_char("\x07", 1, 1)
        self.assertIn("U+0007", record.detail)

    def test_suggestions_in_message(self):
        record = self.log.bad_char("s", 1, 1, ["start"])
        self.assertIn("did you mean: start?", str(record))

    def test_reset(self):
        self.log.unterminated_string('"abc', 1, 1)
        self.log.unterminated_char("'a", 2, 1)
        self.log.reset()
        self.assertFalse(self.log.has_errors())
        self.assertEqual(len(self.log), 0)

    def test_raise_first(self):
        self.log.bad_char("@", 3, 4)
        self.log.bad_char("$", 5, 6)
        with self.assertRaises(LexerError) as ctx:
            self.log.raise_first("prog.zl")
        self.assertEqual(ctx.exception.record.position, (3, 4))
        self.assertEqual(ctx.exception.code, "L001")

    def test_every_kind_has_a_description(self):
        for kind in ErrorKind:
            self.assertIn(kind.code, ERROR_CODES)


class TestErrorRecovery(unittest.TestCase):

    def test_edit_distance(self):
        self.assertEqual(ErrorRecovery._edit_distance("kitten", "sitting"), 3)
        self.assertEqual(ErrorRecovery._edit_distance("", "loop"), 4)

    def test_keyword_suggestions(self):
        self.assertEqual(ErrorRecovery.suggest_keyword_corrections("retrun")[0], "return")
        self.assertIn("true", ErrorRecovery.suggest_keyword_corrections("ture"))
        self.assertEqual(ErrorRecovery.suggest_keyword_corrections("zzzzzzzz"), [])


if __name__ == '__main__':
    unittest.main()
