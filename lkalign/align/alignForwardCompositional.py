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

from .align import align
from .align import SingleStepResult
from .warpimage import warpimage
from ..math.gradient import gradient
from ..math.sampling import sampler as _sampler
from .types import sampleType


class alignForwardCompositional(align):
    """
    Forward compositional Lucas-Kanade (Shum and Szeliski, 2000):

        min_dp sum_x [T(x) - I(W(W(x; dp); p))]^2
        W(x; p) <- W(W(x; dp); p)

    The target is warped into the template frame once per iteration, after
    which gradients are taken on the template grid and combined with the
    warp Jacobian at the identity (precomputed).
    """

    def prepareimpl(self, warp):
        identity = warp.copy()
        identity.setidentity()
        self._nearest = _sampler(sampleType.nearest)
        self._jacobians = []
        self._buffers = []
        self._flat = self.flatlevels(self.templatesteepestdescent(warp))
        for level in range(self.nlevels):
            s = 2 ** (self.nlevels - 1 - level)
            pts = self._templatepoints[level]
            self._jacobians.append(identity.jacobian(pts * s))
            self._buffers.append(
                np.empty(self._templatepyramid[level].shape, dtype=self.dtype)
            )

    def alignimpl(self, warp):
        if self._flat[self.level]:
            return SingleStepResult(None, 0.0, 0)
        s = self.scaleupfactor
        k = self.nlevels - 1 - self.level
        pts = self.templatepoints

        warped = warpimage(
            self.targetimage,
            self.templateimage.shape,
            warp.scaled(-k),
            sampler=self.sampler,
            out=self._buffers[self.level],
        )
        intensities = np.asarray(self._nearest(warped, pts), dtype=np.float64)
        grad = gradient(warped, pts, sampler=self._nearest)
        sdi = np.einsum("ij,ijk->ik", grad, self._jacobians[self.level]) / s

        residuals = self.templatevalues - intensities
        delta = self.solve(sdi, residuals)
        if delta is None:
            return SingleStepResult(None, 0.0, 0)
        return SingleStepResult(delta, np.sum(residuals**2), residuals.size)

    def _updatewarp(self, warp, delta):
        warp.updateforwardcompositional(delta)
