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
from collections import namedtuple
import numpy as np

from .types import sampleType
from .pyramid import ImagePyramid
from ..math.sampling import sampler as _sampler
from ..math.gradient import gradient
from ..math.linalg import isdegenerate
from ..math.linalg import solvenormal
from ..utils import instance

logger = logging.getLogger(__name__)

# Error reported when an iteration has no constraints
MAXERROR = np.finfo(np.float64).max

SingleStepResult = namedtuple(
    "SingleStepResult", ["delta", "sumsquarederror", "nconstraints"]
)


class align(object):
    """
    Lucas-Kanade alignment of a template on a target image:
    find the warp parameters p that minimize

        sum_x [T(x) - I(W(x; p))]^2

    over all template pixels x. Both images are represented as pyramids
    (index 0 is the coarsest level). Warp parameters always refer to the
    finest level.

    Derived classes implement prepareimpl, alignimpl and _updatewarp.
    """

    def __init__(self, sampletype=sampleType.bilinear, dtype=np.float32):
        self.sampler = _sampler(sampletype)
        self.dtype = np.dtype(dtype)
        self._templatepyramid = None
        self._targetpyramid = None
        self._templatepoints = []
        self._templatevalues = []
        self._level = 0
        self._scaleup = 1
        self._iteration = 0
        self._lasterror = np.inf
        self._preverror = np.inf
        self._lastincrement = None

    def prepare(self, template, target, warp, nlevels=1):
        """Build the image pyramids and precompute what the algorithm needs

        Args:
            template(array): 2D image
            target(array or ImagePyramid): 2D image or prebuilt pyramid
            warp(PlanarWarp): initial warp estimate
            nlevels(Optional(int)): number of pyramid levels
        Returns:
            align
        """
        nlevels = max(int(nlevels), 1)

        template = np.asarray(template)
        if template.ndim != 2:
            raise ValueError(
                "Template must be a 2D image, got shape {}".format(template.shape)
            )
        if isinstance(target, ImagePyramid):
            if target.nlevels < nlevels:
                raise ValueError(
                    "Target pyramid has {} levels, {} levels are required".format(
                        target.nlevels, nlevels
                    )
                )
            targetpyramid = target.slice(target.nlevels - nlevels, nlevels)
        else:
            target = np.asarray(target)
            if target.ndim != 2:
                raise ValueError(
                    "Target must be a 2D image, got shape {}".format(target.shape)
                )
            targetpyramid = ImagePyramid(target, nlevels=nlevels, dtype=self.dtype)

        self._templatepyramid = ImagePyramid(
            template, nlevels=nlevels, dtype=self.dtype
        )
        self._targetpyramid = targetpyramid

        self._templatepoints = []
        self._templatevalues = []
        for img in self._templatepyramid:
            nrow, ncol = img.shape
            y, x = np.mgrid[0:nrow, 0:ncol]
            self._templatepoints.append(
                np.vstack([x.ravel(), y.ravel()]).astype(np.float64)
            )
            self._templatevalues.append(img.ravel().astype(np.float64))

        self._iteration = 0
        self._lastincrement = np.zeros(warp.nparams, dtype=np.float64)
        self.setlevel(0)
        self.prepareimpl(warp)
        return self

    def setlevel(self, level):
        """Select the pyramid level on which the next iterations operate

        Args:
            level(int): 0 is the coarsest level (clamped)
        """
        self._checkprepared()
        self._level = min(max(int(level), 0), self.nlevels - 1)
        self._scaleup = 2 ** (self.nlevels - 1 - self._level)
        self._lasterror = np.inf
        self._preverror = np.inf
        return self

    def align(
        self,
        warp,
        maxiterations=None,
        eps=0.0,
        stoponerrorincrease=False,
        incrementals=None,
    ):
        """Refine the warp parameters

        Args:
            warp(PlanarWarp): modified in place
            maxiterations(Optional(int or list)): iterations on the current level
                (one when None) or iterations for each level (coarsest first)
            eps(Optional(num)): stop when the norm of the increment drops below eps
            stoponerrorincrease(Optional(bool)): stop a level when the error increases
            incrementals(Optional(list)): warp copies after each iteration are appended
        Returns:
            align
        """
        self._checkprepared()
        if maxiterations is None:
            self._step(warp, incrementals)
        elif instance.isarray(maxiterations):
            if len(maxiterations) != self.nlevels:
                raise ValueError(
                    "Expected iterations for {} levels, got {}".format(
                        self.nlevels, len(maxiterations)
                    )
                )
            for level, n in enumerate(maxiterations):
                self.setlevel(level)
                self._iterate(warp, n, eps, stoponerrorincrease, incrementals)
        else:
            self._iterate(warp, maxiterations, eps, stoponerrorincrease, incrementals)
        return self

    def _iterate(self, warp, maxiterations, eps, stoponerrorincrease, incrementals):
        for _ in range(int(maxiterations)):
            self._step(warp, incrementals)
            if np.linalg.norm(self._lastincrement) < eps:
                break
            if stoponerrorincrease and self.errorchange > 0:
                break

    def _step(self, warp, incrementals):
        result = self.alignimpl(warp)
        if result.nconstraints > 0:
            delta = np.asarray(result.delta, dtype=np.float64)
            self._updatewarp(warp, delta)
            error = result.sumsquarederror / result.nconstraints
        else:
            delta = np.zeros(warp.nparams, dtype=np.float64)
            error = MAXERROR
        self._preverror = self._lasterror
        self._lasterror = error
        self._lastincrement = delta
        self._iteration += 1
        if incrementals is not None:
            incrementals.append(warp.copy())
        logger.debug(
            "Level {}, iteration {}: error = {}, |increment| = {}".format(
                self._level,
                self._iteration,
                self._lasterror,
                np.linalg.norm(delta),
            )
        )

    def _checkprepared(self):
        if self._templatepyramid is None:
            raise RuntimeError("Call prepare before aligning")

    def prepareimpl(self, warp):
        pass

    def alignimpl(self, warp):
        """One Gauss-Newton iteration at the current level

        Returns:
            SingleStepResult
        """
        raise NotImplementedError()

    def _updatewarp(self, warp, delta):
        raise NotImplementedError()

    @property
    def lasterror(self):
        return self._lasterror

    @property
    def lastincrement(self):
        return self._lastincrement

    @property
    def iteration(self):
        return self._iteration

    @property
    def level(self):
        return self._level

    @property
    def nlevels(self):
        if self._templatepyramid is None:
            return 0
        return self._templatepyramid.nlevels

    @property
    def errorchange(self):
        """Error of the last iteration minus the error of the one before"""
        if not np.isfinite(self._preverror):
            return -np.inf
        return self._lasterror - self._preverror

    @property
    def scaleupfactor(self):
        """Scale from the current level to the finest level"""
        return self._scaleup

    @property
    def scaledownfactor(self):
        return 1.0 / self._scaleup

    @property
    def templatepyramid(self):
        return self._templatepyramid

    @property
    def targetpyramid(self):
        return self._targetpyramid

    @property
    def templateimage(self):
        return self._templatepyramid[self._level]

    @property
    def targetimage(self):
        return self._targetpyramid[self._level]

    @property
    def templatepoints(self):
        """Template pixel centers of the current level (2 x npixels)"""
        return self._templatepoints[self._level]

    @property
    def templatevalues(self):
        """Template intensities of the current level (npixels)"""
        return self._templatevalues[self._level]

    def targetpoints(self, warp):
        """Template pixels warped into the target of the current level"""
        s = self._scaleup
        return warp(self.templatepoints * s) / s

    @staticmethod
    def solve(sdi, residuals):
        """Gauss-Newton normal equations of the steepest descent images

        Args:
            sdi(array): npixels x nparams
            residuals(array): npixels
        Returns:
            array or None
        """
        hessian = sdi.T.dot(sdi)
        b = sdi.T.dot(residuals)
        return solvenormal(hessian, b)

    def templatesteepestdescent(self, warp):
        """Steepest descent images of the template on every level, with
        the warp Jacobian at the identity

        Args:
            warp(PlanarWarp): only its type is used
        Returns:
            list(array): npixels x nparams per level
        """
        identity = warp.copy()
        identity.setidentity()
        nearest = _sampler(sampleType.nearest)
        sdis = []
        for level in range(self.nlevels):
            s = 2 ** (self.nlevels - 1 - level)
            pts = self._templatepoints[level]
            grad = gradient(self._templatepyramid[level], pts, sampler=nearest)
            jac = identity.jacobian(pts * s)
            sdis.append(np.einsum("ij,ijk->ik", grad, jac) / s)
        return sdis

    def flatlevels(self, sdis):
        """Levels on which the template does not constrain the warp

        Args:
            sdis(list(array)): template steepest descent images per level
        Returns:
            list(bool)
        """
        flat = []
        for level, sdi in enumerate(sdis):
            degenerate = isdegenerate(sdi.T.dot(sdi))
            if degenerate:
                logger.warning(
                    "Template has no usable gradient on level {}, "
                    "the warp will not be updated there".format(level)
                )
            flat.append(degenerate)
        return flat
