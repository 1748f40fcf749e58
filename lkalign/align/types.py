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

from ..utils.Enum import Enum

warpType = Enum(["translation", "euclidean", "similarity", "affine", "perspective"])
sampleType = Enum(["bilinear", "nearest"])

# Homogeneous coordinates: M = [[R,T],[P,1]]
#   [[Y'],[1]] = M . [[X],[1]]
#   X' = Y'/Z
#
# translation:                        dof = 2   p = (tx, ty)
# euclidean (rotation + translation): dof = 3   p = (tx, ty, theta)
# similarity (euclidean + scaling):   dof = 4   p = (tx, ty, a, b)
#                                               R = [[1+a,-b],[b,1+a]]
# affine:                             dof = 6   p = (tx, ty, a00-1, a01, a10, a11-1)
# perspective:                        dof = 8   p = (affine, px, py)
#
# Szeliski, "Image alignment and stitching: A tutorial", section 2.1


class WarpTraits(object):
    """Array shapes that go with a warp with nparams parameters"""

    def __init__(self, nparams):
        self._nparams = int(nparams)

    @property
    def nparams(self):
        return self._nparams

    @property
    def paramshape(self):
        return (self._nparams,)

    @property
    def jacobianshape(self):
        return (2, self._nparams)

    @property
    def hessianshape(self):
        return (self._nparams, self._nparams)

    @property
    def sdishape(self):
        return (1, self._nparams)

    def __eq__(self, other):
        if not isinstance(other, WarpTraits):
            return False
        return self._nparams == other._nparams

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self._nparams)

    def __repr__(self):
        return "WarpTraits(nparams={})".format(self._nparams)


NPARAMS = {
    warpType.translation: 2,
    warpType.euclidean: 3,
    warpType.similarity: 4,
    warpType.affine: 6,
    warpType.perspective: 8,
}


def warptraits(warptype):
    return WarpTraits(NPARAMS[warpType(warptype)])
