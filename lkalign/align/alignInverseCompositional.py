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

from .align import align
from .align import SingleStepResult
from ..math.linalg import invertnormal

logger = logging.getLogger(__name__)


class alignInverseCompositional(align):
    """
    Inverse compositional Lucas-Kanade (Baker and Matthews, 2001):

        min_dp sum_x [T(W(x; dp)) - I(W(x; p))]^2
        W(x; p) <- W(W(x; dp)^-1; p)

    Steepest descent images and the inverse Hessian only depend on the
    template and are computed once per level in prepare.
    """

    def prepareimpl(self, warp):
        self._sdi = self.templatesteepestdescent(warp)
        self._invhessian = [invertnormal(sdi.T.dot(sdi)) for sdi in self._sdi]

    def alignimpl(self, warp):
        target = self.targetimage
        pts = self.targetpoints(warp)

        # Template pixels that fall outside the target do not contribute
        nrow, ncol = target.shape
        valid = (
            (pts[0] >= 0) & (pts[0] <= ncol - 1) & (pts[1] >= 0) & (pts[1] <= nrow - 1)
        )
        nvalid = np.count_nonzero(valid)
        invhessian = self._invhessian[self.level]
        if nvalid == 0 or invhessian is None:
            if nvalid == 0:
                logger.debug("Template warped outside of the target image")
            return SingleStepResult(None, 0.0, 0)

        intensities = np.asarray(self.sampler(target, pts[:, valid]), dtype=np.float64)
        residuals = intensities - self.templatevalues[valid]
        b = self._sdi[self.level][valid].T.dot(residuals)
        delta = invhessian.dot(b)
        return SingleStepResult(delta, np.sum(residuals**2), nvalid)

    def _updatewarp(self, warp, delta):
        warp.updateinversecompositional(delta)
