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

# Don't use the installed version
import os, sys

sys.path.insert(1, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lkalign.align.alignForwardAdditive import alignForwardAdditive
from lkalign.align.alignForwardCompositional import alignForwardCompositional
from lkalign.align.alignInverseCompositional import alignInverseCompositional
from lkalign.align.warp import warp
from lkalign.align.warpimage import warpimage
from lkalign.align.types import warpType
from lkalign.utils.cli import getLogger

import logging
import numpy as np
from scipy import ndimage
from skimage import data
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon

logger = getLogger(__name__, __file__)
logger.setLevel(logging.INFO)


def targetimage(camera=True):
    if camera:
        return data.camera()
    img = np.random.uniform(0, 255, size=(480, 640))
    img = ndimage.uniform_filter(img, size=5, mode="mirror")
    return img.astype(np.uint8)


def randomwarp(warptype, tplshape, targetshape):
    w = warp(warptype)
    p = np.zeros(w.nparams)
    p[0] = np.random.uniform(0, targetshape[1] - tplshape[1] * 1.2)
    p[1] = np.random.uniform(0, targetshape[0] - tplshape[0] * 1.2)
    if warptype == warpType.euclidean:
        p[2] = np.random.uniform(-0.1, 0.1)
    elif warptype != warpType.translation:
        p[2:] = np.random.uniform(-0.05, 0.05, w.nparams - 2)
    if warptype == warpType.perspective:
        p[6:] *= 1e-3
    w.setparameters(p)
    return w


def templatecorners(w, tplshape):
    nrow, ncol = tplshape
    xy = np.array([[0, ncol, ncol, 0], [0, 0, nrow, nrow]], dtype=float) - 0.5
    return w(xy).T


def alignexample(
    warptype=warpType.similarity,
    alignclass=alignInverseCompositional,
    iterations=(30, 30, 15),
    eps=1e-3,
    camera=True,
):
    # Template: warped part of the target
    target = targetimage(camera=camera)
    tplshape = target.shape[0] // 5, target.shape[1] // 5
    wtrue = randomwarp(warptype, tplshape, target.shape)
    template = warpimage(target, tplshape, wtrue)

    # Perturbate the warp
    w = wtrue.copy()
    p = w.getparameters()
    p[0:2] += np.random.normal(0, 8, 2)
    w.setparameters(p)
    logger.info("True parameters: {}".format(wtrue.getparameters()))
    logger.info("Initial parameters: {}".format(w.getparameters()))

    # Align
    incrementals = [w.copy()]
    o = alignclass()
    o.prepare(template, target, w, nlevels=len(iterations))
    o.align(w, iterations, eps=eps, incrementals=incrementals)
    logger.info(
        "Parameters after {} iterations: {} (error = {})".format(
            o.iteration, w.getparameters(), o.lasterror
        )
    )

    # Show result
    fig, (ax1, ax2, ax3) = plt.subplots(ncols=3, figsize=(12, 4))
    ax1.imshow(target, cmap="gray")
    ax1.add_patch(
        Polygon(templatecorners(wtrue, tplshape), fill=False, color="red", label="true")
    )
    for wi in incrementals[:-1]:
        ax1.add_patch(
            Polygon(
                templatecorners(wi, tplshape), fill=False, color="yellow", alpha=0.3
            )
        )
    ax1.add_patch(
        Polygon(
            templatecorners(w, tplshape), fill=False, color="green", label="aligned"
        )
    )
    ax1.legend()
    ax1.set_title("Target")
    ax2.imshow(template, cmap="gray")
    ax2.set_title("Template")
    ax3.imshow(warpimage(target, tplshape, w), cmap="gray")
    ax3.set_title("Aligned ({})".format(alignclass.__name__))
    plt.show()


if __name__ == "__main__":
    for alignclass in [
        alignForwardAdditive,
        alignForwardCompositional,
        alignInverseCompositional,
    ]:
        alignexample(alignclass=alignclass)
