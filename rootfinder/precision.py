"""Floating point equality measured in units in the last place (ULP)"""

import numpy as np
import numba as nb

# All bits of a float64 except the sign bit
_MAG_MASK = 0x7FFFFFFFFFFFFFFF


@nb.njit
def _bits(x):
    return np.array([x], dtype=np.float64).view(np.int64)[0]


@nb.njit
def equals(x, y, maxulps=1):
    """
    Test whether two floats are equal to within a number of ULPs

    Parameters
    ----------
    x, y : float
        Values to compare.
    maxulps : int, Default 1
        Number of floating point values allowed between `x` and `y`.
        `0` tests for exact equality, treating `-0.0` and `0.0` as equal.

    Returns
    -------
    bool
        True when fewer than `maxulps` floats lie strictly between `x` and
        `y`.  Values of opposite sign are compared through zero, so `-0.0`,
        `0.0` and the smallest subnormals of either sign are all within
        1 ULP of zero.  Always False when `x` or `y` is NaN.
    """
    if np.isnan(x) or np.isnan(y):
        return False

    ix = _bits(x)
    iy = _bits(y)
    mx = ix & _MAG_MASK
    my = iy & _MAG_MASK

    if (ix < 0) == (iy < 0):
        return abs(mx - my) <= maxulps

    # Opposite signs: the distance is the sum of distances to zero.  Test
    # without adding, which could overflow for large magnitudes.
    return mx <= maxulps and my <= maxulps - mx
