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
from ..math.gradient import gradient


class alignForwardAdditive(align):
    """
    Forward additive Lucas-Kanade (Lucas and Kanade, 1981):

        min_dp sum_x [T(x) - I(W(x; p + dp))]^2
        p <- p + dp

    The target gradient and the warp Jacobian are evaluated
    at the current parameters in every iteration.
    """

    def prepareimpl(self, warp):
        self._flat = self.flatlevels(self.templatesteepestdescent(warp))

    def alignimpl(self, warp):
        if self._flat[self.level]:
            return SingleStepResult(None, 0.0, 0)

        s = self.scaleupfactor
        target = self.targetimage
        pts = self.targetpoints(warp)

        intensities = np.asarray(self.sampler(target, pts), dtype=np.float64)
        grad = gradient(target, pts, sampler=self.sampler)
        jac = warp.jacobian(self.templatepoints * s)
        sdi = np.einsum("ij,ijk->ik", grad, jac) / s

        residuals = self.templatevalues - intensities
        delta = self.solve(sdi, residuals)
        if delta is None:
            return SingleStepResult(None, 0.0, 0)
        return SingleStepResult(delta, np.sum(residuals**2), residuals.size)

    def _updatewarp(self, warp, delta):
        warp.updateforwardadditive(delta)
