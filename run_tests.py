#!/usr/bin/env python3
"""
Main test runner for structparse tests.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_all_tests():
    """Run all structparse tests."""

    print("structparse Test Suite")
    print("=" * 60)

    try:
        from structparse import parse, dump
    except ImportError as e:
        print(f"Failed to import structparse: {e}")
        return False

    # Smoke-test the pipeline before running the suite
    print("Testing parse pipeline...")
    print(dump(parse("struct Smoke { a: u8, b: [u16; 4] }")))
    print()

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)

    print("=" * 60)
    print(f"Tests run: {result.testsRun}, failures: {len(result.failures)}, errors: {len(result.errors)}")
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
