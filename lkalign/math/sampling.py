# -*- coding: utf-8 -*-
#
#   Copyright (C) 2016 European Synchrotron Radiation Facility, Grenoble, France
#
#   Principal author:   Wout De Nolf (wout.de_nolf@esrf.eu)
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

"""Pixel interpolation of single channel images

Pixel centers are located at integer coordinates: (0, 0) is the center
of the first pixel. Coordinates are given as (x, y) with x the column
and y the row, either as an array of shape (2,) or (2, n).

Image borders are handled by reflection without repeating the edge pixel
(reflect-101: ``gfedcb|abcdefgh|gfedcba``) so any coordinate, however far
outside the image, maps on a valid pixel.
"""

import numpy as np

from ..align.types import sampleType
from ..utils import instance


def reflect101(i, n):
    """Map (floored) pixel indices inside [0, n-1]

    Args:
        i(num or array): pixel indices, floating point values are allowed
        n(int): number of pixels along the axis
    Returns:
        array(int): same shape as i
    """
    i = np.asarray(i, dtype=np.float64)
    if n == 1:
        return np.zeros(i.shape, dtype=np.intp)
    i = np.where(np.isfinite(i), i, 0)
    period = 2 * n - 2
    i = np.mod(i, period)
    i = np.where(i >= n, period - i, i)
    return i.astype(np.intp)


def saturate_cast(values, dtype):
    """Convert to dtype, rounding and clipping for integer types"""
    dtype = np.dtype(dtype)
    if instance.dtype_is_integer(dtype):
        info = np.iinfo(dtype)
        values = np.clip(np.rint(values), info.min, info.max)
    return np.asarray(values).astype(dtype)


class Sampler(object):
    """Interface for reading image values at real valued coordinates"""

    sampletype = None

    def sample(self, img, xy):
        """
        Args:
            img(array): single channel image (nrows x ncols)
            xy(array): (2,) or (2, n) coordinates
        Returns:
            num or array(n): image values, same dtype as img
        """
        img = np.asarray(img)
        if img.ndim != 2:
            raise ValueError(
                "Expected a single channel image, got shape {}".format(img.shape)
            )
        xy = np.asarray(xy, dtype=np.float64)
        values = self._sample(img, xy[0], xy[1])
        values = saturate_cast(values, img.dtype)
        if xy.ndim == 1:
            return values[()]
        return values

    def _sample(self, img, x, y):
        raise NotImplementedError()

    def __call__(self, img, xy):
        return self.sample(img, xy)

    def __repr__(self):
        return "Sampler({})".format(self.sampletype)


class SamplerBilinear(Sampler):
    sampletype = sampleType.bilinear

    def _sample(self, img, x, y):
        nrows, ncols = img.shape
        fx = np.floor(x)
        fy = np.floor(y)
        with np.errstate(invalid="ignore"):
            a = np.where(np.isfinite(x), x - fx, 0)
            b = np.where(np.isfinite(y), y - fy, 0)

        x0 = reflect101(fx, ncols)
        x1 = reflect101(fx + 1, ncols)
        y0 = reflect101(fy, nrows)
        y1 = reflect101(fy + 1, nrows)

        f0 = img[y0, x0].astype(np.float64)
        f1 = img[y0, x1].astype(np.float64)
        f2 = img[y1, x0].astype(np.float64)
        f3 = img[y1, x1].astype(np.float64)

        return (f0 * (1 - a) + f1 * a) * (1 - b) + (f2 * (1 - a) + f3 * a) * b


class SamplerNearest(Sampler):
    sampletype = sampleType.nearest

    def _sample(self, img, x, y):
        nrows, ncols = img.shape
        x0 = reflect101(np.floor(x), ncols)
        y0 = reflect101(np.floor(y), nrows)
        return img[y0, x0]


def sampler(sampletype=sampleType.bilinear):
    """Sampler factory

    Args:
        sampletype(sampleType or Sampler): an existing sampler is returned as is
    Returns:
        Sampler
    """
    if isinstance(sampletype, Sampler):
        return sampletype
    sampletype = sampleType(sampletype)
    if sampletype == sampleType.bilinear:
        return SamplerBilinear()
    else:
        return SamplerNearest()
