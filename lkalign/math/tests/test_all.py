# -*- coding: utf-8 -*-

import unittest

from . import test_sampling
from . import test_gradient
from . import test_linalg


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_sampling.main_test_suite())
    testSuite.addTest(test_gradient.main_test_suite())
    testSuite.addTest(test_linalg.main_test_suite())
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
