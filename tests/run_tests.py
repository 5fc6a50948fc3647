#!/usr/bin/env python3
"""Run the campus_events suite: ``python tests/run_tests.py [pattern]``."""
import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

if __name__ == '__main__':
    pattern = sys.argv[1] if len(sys.argv) > 1 else 'test_*.py'
    suite = unittest.defaultTestLoader.discover(
        start_dir=os.path.dirname(__file__),
        pattern=pattern,
    )

    result = unittest.TextTestRunner(verbosity=2).run(suite)

    # Non-zero exit code on any failure
    sys.exit(not result.wasSuccessful())
