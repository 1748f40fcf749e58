# -*- coding: utf-8 -*-

import unittest
import numpy as np

from ..warp import warp
from ..types import warpType
from ..types import warptraits
from ...testutils.subtest import TestCase
from . import helper_images


class test_warp(TestCase):
    def _randomwarp(self, warptype, seed=0):
        w = warp(warptype)
        p = helper_images.randomparameters(w.nparams, seed=seed)
        if warptype == warpType.perspective:
            p[6:] *= 1e-2
        w.setparameters(p)
        return w

    def test_identity(self):
        def check(warptype=None):
            w = warp(warptype)
            self.assertTrue(w.isidentity())
            self.assertEqual(w.nparams, warptraits(warptype).nparams)
            self.assertEqual(w.traits.paramshape, (w.nparams,))
            np.testing.assert_array_equal(w.getparameters(), np.zeros(w.nparams))
            xy = helper_images.randompoints()
            np.testing.assert_allclose(w(xy), xy)
            w.setparameters(np.ones(w.nparams) * 0.1)
            self.assertFalse(w.isidentity())
            w.setidentity()
            self.assertTrue(w.isidentity())

        self.run_subtests({"warptype": sorted(warpType)}, check)

        w = warp(warpType.similarity)
        np.testing.assert_allclose(w.getcanonical(), [0, 0, 0, 1])

    def test_parameters(self):
        def check(warptype=None):
            w = warp(warptype)
            p = helper_images.randomparameters(w.nparams, seed=1)
            w.setparameters(p)
            np.testing.assert_allclose(w.getparameters(), p, atol=1e-12)
            w2 = w.copy()
            w2.setidentity()
            np.testing.assert_allclose(w.getparameters(), p, atol=1e-12)
            with self.assertRaises(ValueError):
                w.setparameters(np.zeros(w.nparams + 1))

        self.run_subtests({"warptype": sorted(warpType)}, check)

        with self.assertRaises(ValueError):
            warp("shear")
        with self.assertRaises(ValueError):
            warp(warpType.affine).setmatrix(np.identity(2))

    def test_points(self):
        w = warp(warpType.translation)
        w.setparameters([10, 5])
        np.testing.assert_allclose(w([5, 5]), [15, 10])
        np.testing.assert_allclose(w([[5, 0], [5, 1]]), [[15, 10], [10, 6]])

        w = warp(warpType.euclidean)
        w.setparameters([0, 0, np.pi / 2])
        np.testing.assert_allclose(w([1, 0]), [0, 1], atol=1e-12)

        w = warp(warpType.similarity)
        w.setcanonical([1, 2, np.pi / 2, 2])
        np.testing.assert_allclose(w([1, 0]), [1, 4], atol=1e-12)
        np.testing.assert_allclose(w.getcanonical(), [1, 2, np.pi / 2, 2])

        w = warp(warpType.perspective)
        w.setparameters([0, 0, 0, 0, 0, 0, 0.1, 0])
        np.testing.assert_allclose(w([10, 5]), [5, 2.5])
        np.testing.assert_allclose(w.transformcoordinates([10, 5]), [5, 2.5])

    def test_jacobian(self):
        w = warp(warpType.translation)
        np.testing.assert_array_equal(w.jacobian([3, 4]), np.identity(2))

        w = warp(warpType.similarity)
        np.testing.assert_array_equal(
            w.jacobian([10, 10]), [[1, 0, 10, -10], [0, 1, 10, 10]]
        )

        w = warp(warpType.euclidean)
        np.testing.assert_allclose(w.jacobian([10, 10]), [[1, 0, -10], [0, 1, 10]])

        def check(warptype=None):
            w = self._randomwarp(warptype, seed=2)
            p = w.getparameters()
            xy = helper_images.randompoints(n=5, seed=3)
            jac = w.jacobian(xy)
            self.assertEqual(jac.shape, (5, 2, w.nparams))
            np.testing.assert_allclose(w.jacobian(xy[:, 0]), jac[0])

            h = 1e-6
            for i in range(w.nparams):
                dp = np.zeros(w.nparams)
                dp[i] = h
                w.setparameters(p + dp)
                plus = w(xy)
                w.setparameters(p - dp)
                minus = w(xy)
                numerical = (plus - minus) / (2 * h)
                np.testing.assert_allclose(
                    jac[:, :, i], numerical.T, rtol=1e-5, atol=1e-5
                )
            w.setparameters(p)

        self.run_subtests({"warptype": sorted(warpType)}, check)

    def test_update(self):
        def check(warptype=None):
            w = self._randomwarp(warptype, seed=4)
            delta = helper_images.randomparameters(w.nparams, seed=5, scale=0.01)
            if warptype == warpType.perspective:
                delta[6:] *= 1e-2
            wdelta = warp(warptype)
            wdelta.setparameters(delta)
            xy = helper_images.randompoints(seed=6)

            w1 = w.copy()
            w1.updateforwardadditive(delta)
            np.testing.assert_allclose(w1.getparameters(), w.getparameters() + delta)

            w2 = w.copy()
            w2.updateforwardcompositional(delta)
            np.testing.assert_allclose(w2(xy), w(wdelta(xy)))

            w3 = w.copy()
            w3.updateinversecompositional(delta)
            np.testing.assert_allclose(w3(wdelta(xy)), w(xy))
            w3.updateforwardcompositional(delta)
            np.testing.assert_allclose(w3.getmatrix(), w.getmatrix(), atol=1e-12)

            np.testing.assert_allclose(w.inverse()(w(xy)), xy, atol=1e-10)

        self.run_subtests({"warptype": sorted(warpType)}, check)

    def test_scaled(self):
        def check(warptype=None, nlevels=None):
            w = self._randomwarp(warptype, seed=7)
            xy = helper_images.randompoints(seed=8)
            f = 2.0**nlevels
            np.testing.assert_allclose(w.scaled(nlevels)(xy), w(xy / f) * f)
            np.testing.assert_allclose(
                w.scaled(nlevels).scaled(-nlevels).getmatrix(), w.getmatrix()
            )

        self.run_subtests({"warptype": sorted(warpType), "nlevels": [-2, 0, 1]}, check)

    def test_dtype(self):
        w = warp(warpType.affine, dtype=np.float32)
        w.setparameters([1, 2, 0.1, 0, 0, 0.1])
        self.assertEqual(w.getmatrix().dtype, np.float32)
        self.assertEqual(w.copy().getmatrix().dtype, np.float32)
        np.testing.assert_allclose(w.getparameters(), [1, 2, 0.1, 0, 0, 0.1], rtol=1e-6)


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_warp("test_identity"))
    testSuite.addTest(test_warp("test_parameters"))
    testSuite.addTest(test_warp("test_points"))
    testSuite.addTest(test_warp("test_jacobian"))
    testSuite.addTest(test_warp("test_update"))
    testSuite.addTest(test_warp("test_scaled"))
    testSuite.addTest(test_warp("test_dtype"))
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
