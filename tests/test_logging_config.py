"""Tests for songlink/logging_config.py"""

import logging
import sys
import os
import unittest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from songlink.logging_config import setup_logging


class TestSetupLogging(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("songlink")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    def test_configures_once(self):
        """Repeated setup does not stack handlers."""
        logger = setup_logging("DEBUG")
        setup_logging("DEBUG")

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_unknown_level_defaults_to_info(self):
        logger = setup_logging("chatty")
        self.assertEqual(logger.level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
