# -*- coding: utf-8 -*-

import numpy as np

from .sampling import sampler as _sampler


def gradient(img, xy, sampler=None):
    """Central difference approximation of the image gradient

    .. math::

        \\nabla I(x,y) = \\left(\\frac{I(x+1,y)-I(x-1,y)}{2},
                              \\frac{I(x,y+1)-I(x,y-1)}{2}\\right)

    Args:
        img(array): single channel image
        xy(array): (2,) or (2, n) coordinates
        sampler(Optional(Sampler or sampleType)): bilinear by default
    Returns:
        array: (2,) or (n, 2) gradients (dI/dx, dI/dy)
    """
    s = _sampler() if sampler is None else _sampler(sampler)
    xy = np.asarray(xy, dtype=np.float64)
    dx = np.zeros_like(xy)
    dy = np.zeros_like(xy)
    dx[0] = 1
    dy[1] = 1

    def tap(offset):
        return np.asarray(s.sample(img, xy + offset), dtype=np.float64)

    gx = (tap(dx) - tap(-dx)) * 0.5
    gy = (tap(dy) - tap(-dy)) * 0.5
    return np.stack([gx, gy], axis=-1)
