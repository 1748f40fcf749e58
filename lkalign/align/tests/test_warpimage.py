# -*- coding: utf-8 -*-

import unittest
import numpy as np
import skimage.transform as sktransform

from ..warpimage import warpimage
from ..warp import warp
from ..types import warpType
from ..types import sampleType
from ...testutils.subtest import TestCase
from . import helper_images


class test_warpimage(TestCase):
    def test_identity(self):
        img = helper_images.noiseimage(shape=(40, 50))
        w = warp(warpType.affine)
        out = warpimage(img, img.shape, w)
        self.assertEqual(out.dtype, img.dtype)
        np.testing.assert_array_equal(out, img)

        out = warpimage(img, (20, 30), w, sampler=sampleType.nearest)
        np.testing.assert_array_equal(out, img[:20, :30])

    def test_translation(self):
        img = helper_images.noiseimage(shape=(40, 50))
        w = warp(warpType.translation)
        w.setparameters([5, 3])
        out = warpimage(img, (10, 10), w)
        np.testing.assert_array_equal(out, img[3:13, 5:15])

    def test_skimage(self):
        img = helper_images.smoothimage(shape=(60, 80)).astype(np.float64)

        def check(warptype=None):
            w = warp(warptype)
            if warptype == warpType.translation:
                w.setparameters([3.3, -2.7])
            elif warptype == warpType.euclidean:
                w.setparameters([4.1, 2.2, 0.1])
            elif warptype == warpType.similarity:
                w.setcanonical([2.5, 6.1, -0.05, 0.9])
            elif warptype == warpType.affine:
                w.setparameters([1.5, 3.2, 0.05, -0.02, 0.03, 0.08])
            else:
                w.setparameters([1.5, 3.2, 0.05, -0.02, 0.03, 0.08, 1e-4, -2e-4])
            out = warpimage(img, img.shape, w)
            ref = sktransform.warp(
                img,
                w.getnumpyhomography(),
                order=1,
                mode="reflect",
                preserve_range=True,
            )

            # Compare where all interpolation taps fall inside the image
            nrow, ncol = img.shape
            y, x = np.mgrid[0:nrow, 0:ncol]
            xs, ys = w(np.vstack([x.ravel(), y.ravel()]))
            inside = (xs >= 0) & (xs <= ncol - 2) & (ys >= 0) & (ys <= nrow - 2)
            inside = inside.reshape(img.shape)
            self.assertTrue(inside.sum() > img.size // 2)
            np.testing.assert_allclose(out[inside], ref[inside], rtol=1e-6, atol=1e-6)

        self.run_subtests({"warptype": sorted(warpType)}, check)

    def test_buffer(self):
        img = helper_images.noiseimage(shape=(40, 50))
        w = warp(warpType.similarity)
        w.setcanonical([10, 10, 0.2, 1.1])
        out = np.zeros((15, 12), dtype=np.float32)
        result = warpimage(img, out.shape, w, out=out)
        self.assertIs(result, out)
        np.testing.assert_array_equal(result, warpimage(img, (15, 12), w))
        with self.assertRaises(ValueError):
            warpimage(img, (16, 12), w, out=out)
        with self.assertRaises(ValueError):
            warpimage(np.zeros((5, 5, 3)), (5, 5), w)


def main_test_suite():
    """Test suite including all test suites"""
    testSuite = unittest.TestSuite()
    testSuite.addTest(test_warpimage("test_identity"))
    testSuite.addTest(test_warpimage("test_translation"))
    testSuite.addTest(test_warpimage("test_skimage"))
    testSuite.addTest(test_warpimage("test_buffer"))
    return testSuite


if __name__ == "__main__":
    import sys

    mysuite = main_test_suite()
    runner = unittest.TextTestRunner()
    if not runner.run(mysuite).wasSuccessful():
        sys.exit(1)
