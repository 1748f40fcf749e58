# -*- coding: utf-8 -*-

import unittest
import logging
import numpy as np
from testfixtures import LogCapture

from .. import linalg


class test_linalg(unittest.TestCase):
    def test_solve(self):
        rng = np.random.RandomState(0)
        a = rng.normal(size=(50, 4))
        x = np.array([1.0, -2.0, 0.5, 3.0])
        b = a.dot(x)
        hessian = a.T.dot(a)
        np.testing.assert_allclose(linalg.solvenormal(hessian, a.T.dot(b)), x)
        np.testing.assert_allclose(
            linalg.invertnormal(hessian).dot(hessian), np.identity(4), atol=1e-10
        )

    def test_degenerate(self):
        singular = np.array([[1.0, 1.0], [1.0, 1.0]])
        self.assertTrue(linalg.isdegenerate(np.zeros((3, 3))))
        self.assertTrue(linalg.isdegenerate(singular))
        self.assertTrue(linalg.isdegenerate(np.array([[np.nan, 0], [0, 1]])))
        self.assertFalse(linalg.isdegenerate(np.identity(3)))

        with LogCapture(level=logging.WARNING) as captured:
            self.assertIsNone(linalg.solvenormal(singular, [1.0, 2.0]))
            self.assertIsNone(linalg.solvenormal(np.identity(2), [np.inf, 2.0]))
            self.assertIsNone(linalg.invertnormal(np.zeros((2, 2))))
        self.assertEqual(len(captured.records), 3)
        for record in captured.records:
            self.assertEqual(record.name, linalg.__name__)
            self.assertEqual(record.levelname, "WARNING")


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_linalg("test_solve"))
    testSuite.addTest(test_linalg("test_degenerate"))
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
