# -*- coding: utf-8 -*-

import unittest
import sys
import itertools
from contextlib import contextmanager


class TestCase(unittest.TestCase):
    """Adds parameter grids on top of subTest"""

    @contextmanager
    def subTest(self, **kwargs):
        with super(TestCase, self).subTest(**kwargs):
            yield
        sys.stdout.write(".")
        sys.stdout.flush()

    def run_subtests(self, parameters, func):
        """Call func for every combination of the parameter values

        Args:
            parameters(dict): name -> list of values
            func(callable): called with keyword arguments
        """
        keys = list(parameters.keys())
        values = list(parameters.values())
        for ivalues in itertools.product(*values):
            kwargs = {key: value for key, value in zip(keys, ivalues)}
            with self.subTest(**kwargs):
                func(**kwargs)
