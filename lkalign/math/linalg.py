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
import scipy.linalg

logger = logging.getLogger(__name__)


def isdegenerate(hessian, rcond=None):
    """A Gauss-Newton Hessian carries no usable information when it is
    not finite, zero or numerically singular.

    Args:
        hessian(array): (n x n) symmetric positive semi-definite
        rcond(Optional(num)): relative singular value cut-off
    Returns:
        bool
    """
    hessian = np.asarray(hessian, dtype=np.float64)
    if not np.all(np.isfinite(hessian)):
        return True
    if rcond is None:
        rcond = np.finfo(np.float64).eps * max(hessian.shape) * 10
    s = np.linalg.svd(hessian, compute_uv=False)
    if s[0] <= 0:
        return True
    return s[-1] <= rcond * s[0]


def solvenormal(hessian, b, rcond=None):
    """Solve the normal equations H.x = b of a Gauss-Newton step

    Args:
        hessian(array): (n x n)
        b(array): (n)
        rcond(Optional(num)): see isdegenerate
    Returns:
        array or None: None when the system is degenerate
    """
    b = np.asarray(b, dtype=np.float64)
    if isdegenerate(hessian, rcond=rcond) or not np.all(np.isfinite(b)):
        logger.warning(
            "Degenerate normal equations: the data does not constrain the warp"
        )
        return None
    try:
        return scipy.linalg.solve(
            np.asarray(hessian, dtype=np.float64), b, assume_a="pos"
        )
    except np.linalg.LinAlgError as err:
        logger.warning("Solving the normal equations failed: {}".format(err))
        return None


def invertnormal(hessian, rcond=None):
    """Inverse of a Gauss-Newton Hessian

    Args:
        hessian(array): (n x n)
        rcond(Optional(num)): see isdegenerate
    Returns:
        array or None: None when the Hessian is degenerate
    """
    if isdegenerate(hessian, rcond=rcond):
        logger.warning("Degenerate Hessian: the data does not constrain the warp")
        return None
    try:
        return scipy.linalg.inv(np.asarray(hessian, dtype=np.float64))
    except np.linalg.LinAlgError as err:
        logger.warning("Inverting the Hessian failed: {}".format(err))
        return None
