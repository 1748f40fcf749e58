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

import numpy as np

from ..math.sampling import sampler as _sampler
from ..math.sampling import saturate_cast


def warpimage(src, shape, warp, sampler=None, out=None):
    """Resample an image in the frame of another one:

        dst(x) = src(W(x))

    Args:
        src(array): 2D source image
        shape(tuple): (rows, cols) of the destination
        warp(callable): maps destination to source coordinates
        sampler(Optional(Sampler|sampleType)): bilinear by default
        out(Optional(array)): destination buffer, filled in place
    Returns:
        array: destination image (dtype of src, or of out)
    """
    src = np.asarray(src)
    if src.ndim != 2:
        raise ValueError("Only single-channel 2D images can be warped")
    if out is None:
        out = np.empty(tuple(shape), dtype=src.dtype)
    elif out.shape != tuple(shape):
        raise ValueError(
            "Output buffer has shape {} instead of {}".format(out.shape, tuple(shape))
        )
    if sampler is None:
        sampler = "bilinear"
    sampler = _sampler(sampler)

    nrow, ncol = out.shape
    y, x = np.mgrid[0:nrow, 0:ncol]
    xy = np.vstack([x.ravel(), y.ravel()]).astype(np.float64)
    values = sampler(src, warp(xy))
    out[:] = saturate_cast(values, out.dtype).reshape(out.shape)
    return out
