#!/usr/bin/env python3
"""
Main test runner for the ZenLang lexer tests.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def smoke_test() -> bool:
    """Scan a small program end to end before running the suites."""
    print("ZenLang Lexer Test Suite")
    print("=" * 60)

    try:
        from zenlang.lexer.lexer import Lexer
        from zenlang.lexer.reference import reference_tokenize, first_divergence
    except ImportError as e:
        print(f"Failed to import lexer modules: {e}")
        return False

    code = """
    start
      declare Total = 0;
      loop (Total < 10) { Total += 2; }
      output "done\\n";
    finish
    """
    lexer = Lexer(code)
    tokens = lexer.tokenize()
    print(f"  Generated {len(tokens)} tokens, {lexer.errors.count()} errors")

    divergence = first_divergence(tokens, reference_tokenize(code))
    if divergence is not None:
        print(f"  Reference scanner diverges at token {divergence}")
        return False
    print("  Reference scanner agrees")
    print()
    return not lexer.has_errors()


def run_all_tests() -> bool:
    if not smoke_test():
        return False

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
