# -*- coding: utf-8 -*-

import unittest
import logging
import os
from testfixtures import TempDirectory

from .. import cli


class test_cli(unittest.TestCase):
    def setUp(self):
        self.dir = TempDirectory()
        self.logger = logging.getLogger("lkalign_test_cli")
        self.logger.propagate = False

    def tearDown(self):
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
        self.dir.cleanup()

    def test_logfile(self):
        filename = os.path.join(self.dir.path, "test.log")
        self.logger.setLevel(logging.DEBUG)
        cli.logging_cliconfig(self.logger, argv=["--logfile", filename, "--unknown"])
        self.logger.debug("message")
        for handler in self.logger.handlers:
            handler.flush()
        with open(filename) as f:
            content = f.read()
        self.assertIn("DEBUG:lkalign_test_cli: message", content)

    def test_levelsplit(self):
        info = logging.LogRecord("a", logging.INFO, "", 0, "", None, None)
        warning = logging.LogRecord("a", logging.WARNING, "", 0, "", None, None)
        f = cli._LevelSplitFilter(True)
        self.assertFalse(f.filter(info))
        self.assertTrue(f.filter(warning))
        f = cli._LevelSplitFilter(False)
        self.assertTrue(f.filter(info))
        self.assertFalse(f.filter(warning))


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_cli("test_logfile"))
    testSuite.addTest(test_cli("test_levelsplit"))
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
