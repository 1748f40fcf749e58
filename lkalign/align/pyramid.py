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

import logging
import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)

# Gaussian-like 5-tap smoothing kernel applied before halving
KERNEL = np.array([1, 4, 6, 4, 1], dtype=np.float32) / 16

# Minimal image dimension of a level that may still be halved
MINDIMENSION = 10


def pyrdown(img):
    """Smooth (reflect-101 border) and keep every other row and column

    Args:
        img(array): 2D
    Returns:
        array: shape (floor(rows/2), floor(cols/2))
    """
    img = ndimage.correlate1d(img, KERNEL, axis=0, mode="mirror")
    img = ndimage.correlate1d(img, KERNEL, axis=1, mode="mirror")
    nrow, ncol = img.shape[0] // 2, img.shape[1] // 2
    return img[0 : 2 * nrow : 2, 0 : 2 * ncol : 2]


def maxlevelsforimagesize(shape):
    """Number of pyramid levels supported by an image

    Args:
        shape(tuple): (rows, cols)
    Returns:
        int
    """
    nrow, ncol = shape[0], shape[1]
    n = 0
    while nrow >= MINDIMENSION and ncol >= MINDIMENSION:
        nrow //= 2
        ncol //= 2
        n += 1
    return n


class ImagePyramid(object):
    """Sequence of floating point images (float32 by default),
    coarsest first and finest last.
    Each level is the smoothed and halved version of the next finer level.
    """

    def __init__(self, img=None, nlevels=1, dtype=np.float32):
        self.dtype = np.dtype(dtype)
        self._levels = []
        if img is not None:
            self.create(img, nlevels=nlevels)

    def create(self, img, nlevels=1):
        img = np.asarray(img)
        if img.ndim != 2:
            raise ValueError(
                "Image pyramid requires a 2D image, got {} dimensions".format(img.ndim)
            )
        nlevels = max(int(nlevels), 1)
        levels = [img.astype(self.dtype)]
        for _ in range(nlevels - 1):
            if min(levels[-1].shape) < 2:
                raise ValueError(
                    "Image of shape {} is too small for {} pyramid levels".format(
                        img.shape, nlevels
                    )
                )
            levels.append(pyrdown(levels[-1]))
        self._levels = levels[::-1]
        logger.debug("Image pyramid created: {}".format(self))
        return self

    @classmethod
    def fromlevels(cls, levels):
        levels = list(levels)
        o = cls(dtype=levels[0].dtype if levels else np.float32)
        o._levels = list(levels)
        return o

    @property
    def nlevels(self):
        return len(self._levels)

    def __len__(self):
        return self.nlevels

    def __getitem__(self, index):
        return self._levels[index]

    def __iter__(self):
        return iter(self._levels)

    @property
    def coarsest(self):
        return self._levels[0]

    @property
    def finest(self):
        return self._levels[-1]

    def slice(self, start, count):
        """Sub-pyramid sharing the level arrays"""
        if start < 0 or count < 1 or start + count > self.nlevels:
            raise ValueError(
                "Cannot take {} levels starting at {} from a pyramid with {} levels".format(
                    count, start, self.nlevels
                )
            )
        return self.fromlevels(self._levels[start : start + count])

    def __repr__(self):
        return "ImagePyramid({})".format(
            ", ".join("{}x{}".format(*level.shape) for level in self._levels)
        )
