# -*- coding: utf-8 -*-

import unittest

from ..Enum import Enum


class test_Enum(unittest.TestCase):
    def test_members(self):
        colors = Enum(["red", "green"])
        self.assertEqual(colors.red, "red")
        self.assertEqual(colors("green"), "green")
        self.assertIn("red", colors)
        with self.assertRaises(AttributeError):
            colors.blue
        with self.assertRaises(ValueError):
            colors("blue")


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_Enum("test_members"))
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
