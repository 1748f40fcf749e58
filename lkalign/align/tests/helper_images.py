# -*- coding: utf-8 -*-

import numpy as np
from scipy import ndimage


def noiseimage(shape=(100, 100), seed=0, size=5):
    """Blurred uniform noise (uint8) with enough texture to align on"""
    rng = np.random.RandomState(seed)
    img = rng.uniform(0, 255, size=shape)
    img = ndimage.uniform_filter(img, size=size, mode="mirror")
    img = (img - img.min()) / (img.max() - img.min()) * 255
    return np.round(img).astype(np.uint8)


def smoothimage(shape=(100, 100), seed=0):
    """Smooth random image, suited for larger motions and multiple levels"""
    rng = np.random.RandomState(seed)
    img = rng.uniform(0, 255, size=shape)
    img = ndimage.gaussian_filter(img, sigma=3, mode="mirror")
    img = (img - img.min()) / (img.max() - img.min()) * 255
    return np.round(img).astype(np.uint8)


def randomparameters(nparams, seed=0, scale=0.1):
    """Small random warp parameters (translations in pixels)"""
    rng = np.random.RandomState(seed)
    p = rng.uniform(-scale, scale, nparams)
    p[0:2] *= 100
    return p


def randompoints(n=10, seed=0, extent=50):
    rng = np.random.RandomState(seed)
    return rng.uniform(0, extent, size=(2, n))
