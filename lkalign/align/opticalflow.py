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

from .alignInverseCompositional import alignInverseCompositional
from .pyramid import ImagePyramid
from .types import warpType
from .warp import warp as _warp

logger = logging.getLogger(__name__)


def trackingwindow(x, y, windowoff, shape):
    """Window around a point, clipped to the image

    Args:
        x(num): column of the point
        y(num): row of the point
        windowoff(int): half window size in pixels
        shape(tuple): (nrow, ncol) of the image
    Returns:
        tuple: left, top, right, bottom with exclusive right and bottom
    """
    nrow, ncol = shape
    left = max(int(x - windowoff), 0)
    top = max(int(y - windowoff), 0)
    right = min(int(x + windowoff), ncol)
    bottom = min(int(y + windowoff), nrow)
    return left, top, right, bottom


def opticalflow(
    prevgray,
    gray,
    points,
    windowoff=15,
    nlevels=3,
    iterations=(10, 10, 10),
    maxerror=100.0,
):
    """Track points from one image to the next by aligning the window
    around each point with a translation warp.

    Args:
        prevgray(array): 2D image in which the points are given
        gray(array): 2D image in which the points are searched
        points(array): (2, n) point coordinates (x, y) in prevgray
        windowoff(Optional(int)): half window size in pixels
        nlevels(Optional(int)): number of pyramid levels
        iterations(Optional(list)): iterations for each level (coarsest first)
        maxerror(Optional(num)): points with a larger final error are lost
    Returns:
        tuple: points(2, n), status(n), errors(n)
    """
    prevgray = np.asarray(prevgray)
    if prevgray.ndim != 2:
        raise ValueError("Optical flow requires 2D images")
    points = np.asarray(points, dtype=np.float64)
    if points.ndim == 1:
        points = points[:, np.newaxis]

    target = ImagePyramid(gray, nlevels=nlevels)
    aligner = alignInverseCompositional()

    newpoints = np.empty_like(points)
    errors = np.empty(points.shape[1], dtype=np.float64)
    for i, (x, y) in enumerate(points.T):
        left, top, right, bottom = trackingwindow(x, y, windowoff, prevgray.shape)
        if right <= left or bottom <= top:
            logger.warning("Point ({}, {}) cannot be tracked".format(x, y))
            newpoints[:, i] = x, y
            errors[i] = np.inf
            continue

        # Template pixel (0, 0) sits at the window corner
        offset = np.array([left - x, top - y])
        w = _warp(warpType.translation)
        w.setparameters([left, top])

        aligner.prepare(
            prevgray[top:bottom, left:right], target, w, nlevels=target.nlevels
        )
        aligner.align(w, maxiterations=iterations)

        newpoints[:, i] = w.getparameters() - offset
        errors[i] = aligner.lasterror

    status = errors < maxerror
    return newpoints, status, errors
