"""
Functions for finding the zero of a univariate function using Brent's method.
"""

import math

import numpy as np
import numba as nb

from .precision import equals

# Default tolerances: relative, absolute, and on the function value
DEFAULT_RTOL = 1e-14
DEFAULT_ATOL = 1e-10
DEFAULT_FTOL = 1e-15

# Outcomes of `bracket`
BRACKETED = 0
AT_ROOT = 1
NO_SIGN_CHANGE = 2

# Smallest positive normal float64.  Anything within 1 ULP of zero is below it.
_TINY = np.finfo(np.float64).tiny


@nb.njit
def brent_guess(f, lo, x, hi, rtol, atol, ftol, args=()):
    """
    Find a zero of a function within a given range, starting from a guess

    Parameters
    ----------
    f : function
        Continuous function of a single variable.
    lo, hi : float
        Range within which to search, satisfying `lo <= hi`.
    x : float
        Initial guess for a root, satisfying `lo <= x <= hi`.
    rtol, atol : float
        Relative and absolute tolerance for convergence.
    ftol : float
        Any `x` with `abs(f(x)) <= ftol` found while searching for a sign
        change is accepted as a root.
    args : tuple
        Additional arguments, beyond the optimization argument, to be passed to `f`.
        Pass `()` when `f` is univariate.

    Returns
    -------
    float
        Value of `x` where `f(x) ~ 0`, or nan when the range or guess is
        invalid or neither `[lo, x]` nor `[x, hi]` contains a sign change.

    Notes
    -----
    This is the compiled counterpart of `rootfinder.BrentSolver.find_root`,
    returning nan where that method raises.  `f` should be a
    `@numba.njit`'ed function.
    """

    # Also catches nan inputs
    if not (lo <= x and x <= hi):
        return np.nan

    a, b, fa, fb, flag, nfev = bracket(f, lo, x, hi, ftol, args)
    if flag == AT_ROOT:
        return a
    if flag == NO_SIGN_CHANGE:
        return np.nan

    root, niter, converged = brent(f, a, b, fa, fb, rtol, atol, 0, args)
    return root


@nb.njit
def brent_vec(f, lo, hi, rtol, atol, ftol, args=()):
    """
    Find a zero of a function in each of many ranges

    Parameters
    ----------
    f : function
        Continuous function of a single variable.
    lo, hi : ndarray
        Lower and upper bounds of each range.  Must have the same shape.
    rtol, atol, ftol : float
        Tolerances, as in `brent_guess`.
    args : tuple
        Additional arguments passed to `f`, shared by all ranges.

    Returns
    -------
    ndarray
        Same shape as `lo`.  Element `n` is a zero of `f` between `lo[n]`
        and `hi[n]`, found using the midpoint as the initial guess, or nan
        if none was found.
    """
    x = np.full(lo.shape, np.nan)
    for n in np.ndindex(lo.shape):
        x[n] = brent_guess(
            f, lo[n], 0.5 * (lo[n] + hi[n]), hi[n], rtol, atol, ftol, args
        )
    return x


@nb.njit
def bracket(f, lo, x, hi, ftol, args=()):
    """
    Find which side of an initial guess a sign change lies on

    `f` is evaluated at `x`, then `lo`, then `hi`, stopping as soon as the
    outcome is known, so each point is evaluated at most once.

    Parameters
    ----------
    f : function
        Continuous function of a single variable.
    lo, x, hi : float
        Lower bound, initial guess, and upper bound, with `lo <= x <= hi`.
    ftol : float
        Tolerance on `abs(f)` for accepting a probed point as a root.
    args : tuple
        Additional arguments beyond the optimization argument.
        Pass `()` when `f` is univariate.

    Returns
    -------
    a, b : float
        When `flag == BRACKETED`, bounds with `f(a) * f(b) < 0`.
        When `flag == AT_ROOT`, both equal the root that was found.
        When `flag == NO_SIGN_CHANGE`, `lo` and `hi`.
    fa, fb : float
        `f` evaluated at `a` and `b`.
    flag : int
        One of `BRACKETED`, `AT_ROOT`, `NO_SIGN_CHANGE`.
    nfev : int
        Number of evaluations of `f`.
    """

    lo = float(lo)
    x = float(x)
    hi = float(hi)

    fx = f(x, *args)
    if abs(fx) <= ftol:
        return x, x, fx, fx, AT_ROOT, 1

    flo = f(lo, *args)
    if abs(flo) <= ftol:
        return lo, lo, flo, flo, AT_ROOT, 2

    # Test the sign of the product, not a difference of magnitudes
    if _negative(fx * flo):
        return lo, x, flo, fx, BRACKETED, 2

    fhi = f(hi, *args)
    if abs(fhi) <= ftol:
        return hi, hi, fhi, fhi, AT_ROOT, 3

    if _negative(fx * fhi):
        return x, hi, fx, fhi, BRACKETED, 3

    return lo, hi, flo, fhi, NO_SIGN_CHANGE, 3


@nb.njit
def _negative(p):
    # True for -0.0 too, which a product of opposite signs underflows to
    return p < 0.0 or (p == 0.0 and math.copysign(1.0, p) < 0.0)


@nb.njit
def brent(f, a, b, fa, fb, rtol, atol, maxiter=0, args=()):
    """
    Find a zero of a univariate function within a given range

    This is a bracketed root-finding method, so `fa` and `fb` must differ in
    sign. If they do, a root is guaranteed to be found.

    Parameters
    ----------
    f : function
        Continuous function of a single variable.
    a, b : float
        Range within which to search.
    fa, fb : float
        `f` evaluated at `a` and `b`, satisfying `fa * fb < 0`.
    rtol, atol : float
        Relative and absolute tolerance.  The search stops when the
        bracket around the best estimate `x` is no wider than
        `2 * (2 * rtol * abs(x) + atol)`.
    maxiter : int, Default 0
        Maximum number of iterations.  `0` means no limit.
    args : tuple
        Additional arguments, beyond the optimization argument, to be passed to `f`.
        Pass `()` when `f` is univariate.

    Returns
    -------
    x : float
        Value where `f(x) ~ 0`.
    niter : int
        Number of iterations, each costing one evaluation of `f`.
    converged : bool
        False only if `maxiter` iterations passed without convergence.

    Notes
    -----
    Follows chapter 4 of

    Richard Brent,
    Algorithms for Minimization Without Derivatives,
    Dover, 2002,
    ISBN: 0-486-41998-3,
    LC: QA402.5.B74.

    Without `maxiter`, termination relies on `atol > 0` or `rtol > 0`.
    A nan from `f` is not trapped.
    """

    a = float(a)
    b = float(b)
    c = a
    fc = fa
    d = b - a
    e = d

    niter = 0
    while True:
        # Keep the best estimate in b
        if abs(fc) < abs(fb):
            a = b
            b = c
            c = a
            fa = fb
            fb = fc
            fc = fa

        tol = 2.0 * rtol * abs(b) + atol
        m = 0.5 * (c - b)

        if abs(m) <= tol or (abs(fb) < _TINY and equals(fb, 0.0)):
            return b, niter, True

        if maxiter > 0 and niter >= maxiter:
            return b, niter, False

        if abs(e) < tol or abs(fa) <= abs(fb):
            # Force bisection
            d = m
            e = d
        else:
            s = fb / fa

            # Exact equality: only two distinct abscissas have been seen.
            # Must not become a proximity test.
            two_points = a == c
            if two_points:
                # Linear interpolation
                p = 2.0 * m * s
                q = 1.0 - s
            else:
                # Inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * m * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)

            if p > 0.0:
                q = -q
            else:
                p = -p

            s = e
            e = d

            if p >= 1.5 * m * q - abs(tol * q) or p >= abs(0.5 * s * q):
                # Wrong direction, or too slow: bisect
                d = m
                e = d
            else:
                d = p / q

        a = b
        fa = fb

        if abs(d) > tol:
            b += d
        elif m > 0.0:
            b += tol
        else:
            b -= tol

        fb = f(b, *args)
        niter += 1

        if (fb > 0.0 and fc > 0.0) or (fb <= 0.0 and fc <= 0.0):
            c = a
            fc = fa
            d = b - a
            e = d
