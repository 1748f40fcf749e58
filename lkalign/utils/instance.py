# -*- coding: utf-8 -*-

import collections.abc as collections_abc
import numbers
import numpy as np


def issequence(x):
    return isinstance(x, collections_abc.Sequence) and not isinstance(
        x, (str, bytes)
    )


def isnparray(x):
    return isinstance(x, np.ndarray)


def isarray(x):
    """Sequence or numpy array with at least one dimension"""
    if issequence(x):
        return True
    if isnparray(x):
        return x.ndim > 0
    return False


def isnpnumber(x):
    return issubclass(x.__class__, np.number)


def isnumber(x):
    return isinstance(x, numbers.Number) or isnpnumber(x)


def isinteger(x):
    return isinstance(x, numbers.Integral) or issubclass(x.__class__, np.integer)


def dtype_is_integer(dtype):
    return np.issubdtype(np.dtype(dtype), np.integer)
