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

from .types import warpType
from .types import WarpTraits


class PlanarWarp(object):
    """
    Parametrized planar motion W(x; p) of image coordinates,
    stored as a 3x3 homogeneous matrix M:

        [[x'],[y'],[1]] = M . [[x],[y],[1]]

    The warp maps template coordinates to target coordinates.
    Combine warps:
        W(W(x; delta); p) = M(p).M(delta).x (compose from the right)
    """

    warptype = None
    nparams = None

    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)
        self._m = np.identity(3, dtype=self.dtype)

    def __copy__(self):
        w = self.__class__(dtype=self.dtype)
        w._m[:] = self._m
        return w

    def copy(self):
        return self.__copy__()

    @property
    def traits(self):
        return WarpTraits(self.nparams)

    def __repr__(self):
        return "{}({})".format(
            self.__class__.__name__,
            ", ".join("{:g}".format(p) for p in self.getparameters()),
        )

    def __str__(self):
        return self.__repr__()

    def setidentity(self):
        self._m[:] = np.identity(3, dtype=self.dtype)

    def isidentity(self):
        return np.array_equal(self._m, np.identity(3, dtype=self.dtype))

    def getmatrix(self):
        return self._m.copy()

    def setmatrix(self, m):
        m = np.asarray(m)
        if m.shape != (3, 3):
            raise ValueError("Expected a 3x3 matrix, got shape {}".format(m.shape))
        self._m[:] = m

    def getnumpyhomography(self):
        return self.getmatrix()

    def _matrix(self):
        return self._m.astype(np.float64)

    def __call__(self, xy):
        """Warp coordinates

        Args:
            xy(array): (2,) or (2, n)
        Returns:
            array: (2,) or (2, n)
        """
        xy = np.asarray(xy, dtype=np.float64)
        m = self._matrix()
        if xy.ndim == 1:
            return m[0:2, 0:2].dot(xy) + m[0:2, 2]
        else:
            return m[0:2, 0:2].dot(xy) + m[0:2, 2, np.newaxis]

    def transformcoordinates(self, xy):
        return self(xy)

    def _asparameters(self, p):
        p = np.asarray(p, dtype=np.float64)
        if p.size != self.nparams:
            raise ValueError(
                "{} expects {} parameters, got {}".format(
                    self.__class__.__name__, self.nparams, p.size
                )
            )
        return p.ravel()

    def getparameters(self):
        raise NotImplementedError()

    def setparameters(self, p):
        raise NotImplementedError()

    def jacobian(self, xy):
        """Partial derivatives of the warped coordinates with respect to
        the parameters, evaluated at the current parameters.

        Args:
            xy(array): (2,) or (2, n)
        Returns:
            array: (2, nparams) or (n, 2, nparams)
        """
        xy = np.asarray(xy, dtype=np.float64)
        x = np.atleast_1d(xy[0])
        y = np.atleast_1d(xy[1])
        jac = np.zeros((x.size, 2, self.nparams), dtype=np.float64)
        self._fill_jacobian(jac, x, y)
        if xy.ndim == 1:
            return jac[0]
        return jac

    def _fill_jacobian(self, jac, x, y):
        raise NotImplementedError()

    def _deltawarp(self, delta):
        w = self.__class__(dtype=np.float64)
        w.setparameters(delta)
        return w

    def _invertmatrix(self):
        # Block inversion: [[A,t],[0,1]]^-1 = [[A^-1,-A^-1.t],[0,1]]
        m = self._matrix()
        a, b = m[0, 0], m[0, 1]
        c, d = m[1, 0], m[1, 1]
        det = a * d - b * c
        if det == 0:
            raise ValueError("Warp is not invertible")
        ainv = np.array([[d, -b], [-c, a]]) / det
        minv = np.identity(3)
        minv[0:2, 0:2] = ainv
        minv[0:2, 2] = -ainv.dot(m[0:2, 2])
        return minv

    def _setcomposed(self, m):
        self._m[:] = m

    def inverse(self):
        w = self.copy()
        w._setcomposed(self._invertmatrix())
        return w

    def updateforwardadditive(self, delta):
        """p <- p + delta"""
        self.setparameters(self.getparameters() + self._asparameters(delta))

    def updateforwardcompositional(self, delta):
        """M <- M.M(delta)"""
        wdelta = self._deltawarp(delta)
        self._setcomposed(self._matrix().dot(wdelta._matrix()))

    def updateinversecompositional(self, delta):
        """M <- M.M(delta)^-1"""
        wdelta = self._deltawarp(delta)
        self._setcomposed(self._matrix().dot(wdelta._invertmatrix()))

    def scaled(self, nlevels):
        """Same motion expressed in coordinates scaled by 2^nlevels

        Moving to a finer pyramid level (nlevels > 0) multiplies translations,
        moving to a coarser level (nlevels < 0) divides them.
        """
        f = 2.0**nlevels
        w = self.copy()
        m = self._matrix()
        m[0:2, 2] *= f
        m[2, 0:2] /= f
        w._m[:] = m
        return w


class WarpTranslation(PlanarWarp):
    warptype = warpType.translation
    nparams = 2

    def getparameters(self):
        return self._matrix()[0:2, 2]

    def setparameters(self, p):
        p = self._asparameters(p)
        self._m[0:2, 2] = p

    def _fill_jacobian(self, jac, x, y):
        #      tx   ty
        #  x    1    0
        #  y    0    1
        jac[:, 0, 0] = 1
        jac[:, 1, 1] = 1


class WarpEuclidean(PlanarWarp):
    warptype = warpType.euclidean
    nparams = 3

    def getparameters(self):
        m = self._matrix()
        return np.array([m[0, 2], m[1, 2], np.arctan2(m[1, 0], m[0, 0])])

    def setparameters(self, p):
        tx, ty, theta = self._asparameters(p)
        c = np.cos(theta)
        s = np.sin(theta)
        self._m[0:2, :] = [[c, -s, tx], [s, c, ty]]

    def _fill_jacobian(self, jac, x, y):
        #      tx   ty   theta
        #  x    1    0   -sin.x - cos.y
        #  y    0    1    cos.x - sin.y
        theta = self.getparameters()[2]
        c = np.cos(theta)
        s = np.sin(theta)
        jac[:, 0, 0] = 1
        jac[:, 1, 1] = 1
        jac[:, 0, 2] = -s * x - c * y
        jac[:, 1, 2] = c * x - s * y


class WarpSimilarity(PlanarWarp):
    """Rotation, isotropic scaling and translation

    Parameters (tx, ty, a, b) with linear part [[1+a,-b],[b,1+a]].
    Canonical parameters (tx, ty, theta, scale) with
    a = scale.cos(theta) - 1 and b = scale.sin(theta).
    """

    warptype = warpType.similarity
    nparams = 4

    def getparameters(self):
        m = self._matrix()
        return np.array([m[0, 2], m[1, 2], m[0, 0] - 1, m[1, 0]])

    def setparameters(self, p):
        tx, ty, a, b = self._asparameters(p)
        self._m[0:2, :] = [[1 + a, -b, tx], [b, 1 + a, ty]]

    def getcanonical(self):
        """
        Returns:
            array: tx, ty, theta, scale (assumes positive scale)
        """
        m = self._matrix()
        theta = np.arctan2(-m[0, 1], m[0, 0])
        scale = np.sqrt(m[0, 0] ** 2 + m[0, 1] ** 2)
        return np.array([m[0, 2], m[1, 2], theta, scale])

    def setcanonical(self, p):
        p = self._asparameters(p)
        tx, ty, theta, scale = p
        self.setparameters(
            [tx, ty, scale * np.cos(theta) - 1, scale * np.sin(theta)]
        )

    def _fill_jacobian(self, jac, x, y):
        #      tx   ty   a    b
        #  x    1    0   x   -y
        #  y    0    1   y    x
        jac[:, 0, 0] = 1
        jac[:, 1, 1] = 1
        jac[:, 0, 2] = x
        jac[:, 0, 3] = -y
        jac[:, 1, 2] = y
        jac[:, 1, 3] = x


class WarpAffine(PlanarWarp):
    warptype = warpType.affine
    nparams = 6

    def getparameters(self):
        m = self._matrix()
        return np.array(
            [m[0, 2], m[1, 2], m[0, 0] - 1, m[0, 1], m[1, 0], m[1, 1] - 1]
        )

    def setparameters(self, p):
        tx, ty, a00, a01, a10, a11 = self._asparameters(p)
        self._m[0:2, :] = [[1 + a00, a01, tx], [a10, 1 + a11, ty]]

    def _fill_jacobian(self, jac, x, y):
        #      tx   ty   a00  a01  a10  a11
        #  x    1    0    x    y    0    0
        #  y    0    1    0    0    x    y
        jac[:, 0, 0] = 1
        jac[:, 1, 1] = 1
        jac[:, 0, 2] = x
        jac[:, 0, 3] = y
        jac[:, 1, 4] = x
        jac[:, 1, 5] = y


class WarpPerspective(PlanarWarp):
    """Homography normalized to M[2,2] = 1"""

    warptype = warpType.perspective
    nparams = 8

    def __call__(self, xy):
        xy = np.asarray(xy, dtype=np.float64)
        m = self._matrix()
        if xy.ndim == 1:
            xyz = m[:, 0:2].dot(xy) + m[:, 2]
        else:
            xyz = m[:, 0:2].dot(xy) + m[:, 2, np.newaxis]
        return xyz[0:2] / xyz[2]

    def setmatrix(self, m):
        super(WarpPerspective, self).setmatrix(m)
        self._setcomposed(self._matrix())

    def _setcomposed(self, m):
        if m[2, 2] == 0:
            raise ValueError("Homography with M[2,2] = 0 cannot be normalized")
        self._m[:] = m / m[2, 2]

    def getparameters(self):
        m = self._matrix()
        return np.array(
            [
                m[0, 2],
                m[1, 2],
                m[0, 0] - 1,
                m[0, 1],
                m[1, 0],
                m[1, 1] - 1,
                m[2, 0],
                m[2, 1],
            ]
        )

    def setparameters(self, p):
        tx, ty, a00, a01, a10, a11, px, py = self._asparameters(p)
        self._m[:] = [[1 + a00, a01, tx], [a10, 1 + a11, ty], [px, py, 1]]

    def _invertmatrix(self):
        return np.linalg.inv(self._matrix())

    def _fill_jacobian(self, jac, x, y):
        # x' = (m00.x + m01.y + tx)/w   with   w = px.x + py.y + 1
        m = self._matrix()
        w = m[2, 0] * x + m[2, 1] * y + m[2, 2]
        xp = (m[0, 0] * x + m[0, 1] * y + m[0, 2]) / w
        yp = (m[1, 0] * x + m[1, 1] * y + m[1, 2]) / w
        jac[:, 0, 0] = 1 / w
        jac[:, 1, 1] = 1 / w
        jac[:, 0, 2] = x / w
        jac[:, 0, 3] = y / w
        jac[:, 1, 4] = x / w
        jac[:, 1, 5] = y / w
        jac[:, 0, 6] = -x * xp / w
        jac[:, 0, 7] = -y * xp / w
        jac[:, 1, 6] = -x * yp / w
        jac[:, 1, 7] = -y * yp / w


_WARPCLASSES = {
    warpType.translation: WarpTranslation,
    warpType.euclidean: WarpEuclidean,
    warpType.similarity: WarpSimilarity,
    warpType.affine: WarpAffine,
    warpType.perspective: WarpPerspective,
}


def warp(warptype, **kwargs):
    """Warp factory

    Args:
        warptype(warpType)
        dtype(Optional(dtype)): float64 by default
    Returns:
        PlanarWarp: identity warp
    """
    return _WARPCLASSES[warpType(warptype)](**kwargs)
