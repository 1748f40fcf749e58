# -*- coding: utf-8 -*-

import unittest
import numpy as np

from .. import instance


class test_instance(unittest.TestCase):
    def test_isarray(self):
        for x in [[1, 2], (10, 10, 10), np.arange(3), np.zeros((2, 2))]:
            self.assertTrue(instance.isarray(x), msg=repr(x))
        for x in [1, 2.5, np.int64(3), np.array(5), "abc", b"abc", None]:
            self.assertFalse(instance.isarray(x), msg=repr(x))

    def test_isnumber(self):
        for x in [1, 2.5, np.int32(3), np.float32(1.5)]:
            self.assertTrue(instance.isnumber(x), msg=repr(x))
        for x in ["1", [1], None]:
            self.assertFalse(instance.isnumber(x), msg=repr(x))
        self.assertTrue(instance.isinteger(np.uint8(1)))
        self.assertFalse(instance.isinteger(1.0))

    def test_dtype(self):
        self.assertTrue(instance.dtype_is_integer(np.uint8))
        self.assertTrue(instance.dtype_is_integer(np.dtype("int16")))
        self.assertFalse(instance.dtype_is_integer(np.float32))


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_instance("test_isarray"))
    testSuite.addTest(test_instance("test_isnumber"))
    testSuite.addTest(test_instance("test_dtype"))
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
