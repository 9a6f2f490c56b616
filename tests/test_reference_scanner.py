"""
Cross-check between the hand-coded Lexer and the declarative reference scanner.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from zenlang.lexer.lexer import Lexer
from zenlang.lexer.reference import ReferenceScanner, reference_tokenize, first_divergence
from zenlang.lexer.tokens import TokenCategory


WELL_FORMED = r"""## compute totals
start
  declare Count = 0;
  declare Rate = +2.5e-3;
  declare Name = "zen\tlang \"quoted\"";
  declare Letter = 'z';
  declare Done = false;
  #* loop until
     finished *#
  loop (Count < 10 && !Done) {
    Count++;
    Rate *= 1.5;
    condition (Count % 2 == 0 || Count >= 7) { output Name; } else { Total -= 1; }
    input [Letter], Done: true;
  }
  function Square(X) { return X ** 2; }
  break; continue;
finish
"""


class TestReferenceScanner(unittest.TestCase):

    def _core(self, code: str):
        return Lexer(code, "<test>").tokenize()

    def test_streams_agree_on_well_formed_program(self):
        core = self._core(WELL_FORMED)
        reference = reference_tokenize(WELL_FORMED, "<test>")
        self.assertIsNone(first_divergence(core, reference))
        self.assertEqual(len(core), len(reference))

    def test_streams_agree_line_by_line(self):
        for line in WELL_FORMED.splitlines():
            if "#*" in line or "*#" in line:
                continue
            with self.subTest(line=line):
                self.assertIsNone(first_divergence(self._core(line), reference_tokenize(line)))

    def test_core_has_no_errors_on_well_formed_program(self):
        lexer = Lexer(WELL_FORMED)
        lexer.tokenize()
        self.assertFalse(lexer.has_errors(), lexer.errors.all_messages())

    def test_reference_progresses_on_malformed_input(self):
        code = '@ "abc\n \'xy #* open\n 1.e ~'
        tokens = ReferenceScanner(code).tokenize()
        self.assertEqual(tokens[-1].category, TokenCategory.END_OF_FILE)
        self.assertIn(TokenCategory.INVALID, [t.category for t in tokens])

    def test_reference_positions(self):
        tokens = reference_tokenize("start\n  X = 5;")
        self.assertEqual([(t.text, t.line, t.column) for t in tokens], [
            ("start", 1, 1), ("X", 2, 3), ("=", 2, 5), ("5", 2, 7), (";", 2, 8), ("", 2, 9),
        ])

    def test_first_divergence_reports_index(self):
        core = self._core("X = 1;")
        other = reference_tokenize("X = 2;")
        self.assertEqual(first_divergence(core, other), 2)
        self.assertEqual(first_divergence(core, core[:-1]), len(core) - 1)


if __name__ == '__main__':
    unittest.main()
