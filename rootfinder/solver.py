"""Brent's method behind a solver holding fixed tolerances"""

from collections import namedtuple

from numba.core.dispatcher import Dispatcher

from .errors import (
    GuessOutOfRangeError,
    InvalidIntervalError,
    NoBracketingError,
    TooManyIterationsError,
)
from .fzero import (
    AT_ROOT,
    DEFAULT_ATOL,
    DEFAULT_FTOL,
    DEFAULT_RTOL,
    NO_SIGN_CHANGE,
    bracket,
    brent,
)

__all__ = ["BrentSolver", "RootResults"]

RootResults = namedtuple(
    "RootResults", ["root", "iterations", "evaluations"]
)


def _kernels(f):
    # Compiled kernels need a compiled f; anything else runs their Python source
    if isinstance(f, Dispatcher):
        return bracket, brent
    return bracket.py_func, brent.py_func


class BrentSolver:
    """
    Find a zero of a univariate function in a bracketing interval

    A zero `x` is located to within `2 * rtol * abs(x) + atol`, using Brent's
    combination of bisection, secant steps, and inverse quadratic
    interpolation.  The function must be continuous but need not be
    differentiable.

    Parameters
    ----------
    rtol : float, Default 1e-14
        Relative accuracy.
    atol : float, Default 1e-10
        Absolute accuracy.
    ftol : float, Default 1e-15
        Function value accuracy: a probed point `x` with
        `abs(f(x)) <= ftol` is returned at once.

    Other Parameters
    ----------------
    maxiter : int, Default None
        Maximum number of Brent iterations per search.  `None` means no
        limit, and a search always runs until the tolerance is met.
    verbose : bool, Default False
        Whether to print the bracket, number of iterations, and root found
        by each search.

    Notes
    -----
    The tolerances are fixed for the life of the solver, so one solver can
    serve any number of independent searches.

    With `rtol = atol = 0` a search can loop forever unless `maxiter` is set.
    """

    __slots__ = ("_rtol", "_atol", "_ftol", "_maxiter", "_verbose")

    def __init__(self, rtol=DEFAULT_RTOL, atol=DEFAULT_ATOL, ftol=DEFAULT_FTOL, **kw):
        maxiter = kw.pop("maxiter", None)
        verbose = kw.pop("verbose", False)
        if kw:
            raise TypeError(f"Unexpected keyword arguments: {', '.join(kw)}")

        for name, val in (("rtol", rtol), ("atol", atol), ("ftol", ftol)):
            if not val >= 0:  # also rejects nan
                raise ValueError(f"`{name}` must be non-negative; got {val}")

        if maxiter is not None and maxiter < 1:
            raise ValueError(f"`maxiter` must be a positive int or None; got {maxiter}")

        self._rtol = float(rtol)
        self._atol = float(atol)
        self._ftol = float(ftol)
        self._maxiter = maxiter
        self._verbose = bool(verbose)

    @property
    def rtol(self):
        return self._rtol

    @property
    def atol(self):
        return self._atol

    @property
    def ftol(self):
        return self._ftol

    @property
    def maxiter(self):
        return self._maxiter

    def __repr__(self):
        return (
            f"BrentSolver(rtol={self._rtol}, atol={self._atol}, "
            f"ftol={self._ftol}, maxiter={self._maxiter})"
        )

    def find_root(self, f, lo, x, hi=None, args=(), full_output=False):
        """
        Search for a zero of `f` between `lo` and `hi`

        Called as `find_root(f, lo, hi)` or `find_root(f, lo, x, hi)`.  In the
        first form the initial guess is the midpoint of `lo` and `hi`.

        Parameters
        ----------
        f : function
            Continuous function of a single variable, called as
            `f(x, *args)`.  A `@numba.njit`'ed `f` runs the compiled kernels.
        lo, hi : float
            Range within which to search, satisfying `lo <= hi`.
        x : float
            Initial guess, satisfying `lo <= x <= hi`.
        args : tuple
            Additional arguments, beyond the optimization argument, to be passed to `f`.
        full_output : bool, Default False
            If True, return `(root, RootResults)`.

        Returns
        -------
        root : float
            Value in `[lo, hi]` where `f(root) ~ 0`.
        info : RootResults
            Only if `full_output` is True.

        Raises
        ------
        InvalidIntervalError
            If `lo > hi`.
        GuessOutOfRangeError
            If `x` is not in `[lo, hi]`.
        NoBracketingError
            If `f` changes sign neither in `[lo, x]` nor in `[x, hi]`, and
            none of `lo`, `x`, `hi` is a zero to within `ftol`.
        TooManyIterationsError
            If `maxiter` was given and is exceeded.
        """
        if hi is None:
            hi = x
            x = None

        lo = float(lo)
        hi = float(hi)
        if lo > hi:
            raise InvalidIntervalError(lo, hi)

        if x is None:
            x = 0.5 * (lo + hi)
        x = float(x)
        if not (lo <= x <= hi):
            raise GuessOutOfRangeError(x, lo, hi)

        bracket_fn, brent_fn = _kernels(f)

        a, b, fa, fb, flag, nfev = bracket_fn(f, lo, x, hi, self._ftol, args)

        if flag == NO_SIGN_CHANGE:
            raise NoBracketingError(a, fa, b, fb)

        if flag == AT_ROOT:
            root, niter = a, 0
        else:
            maxiter = 0 if self._maxiter is None else self._maxiter
            root, niter, converged = brent_fn(
                f, a, b, fa, fb, self._rtol, self._atol, maxiter, args
            )
            if not converged:
                raise TooManyIterationsError(maxiter, root)

        if self._verbose:
            if flag == AT_ROOT:
                print(f"Root {root} found while bracketing [{lo}, {hi}]")
            else:
                print(f"Root {root} found in [{a}, {b}] after {niter} iterations")

        if full_output:
            return root, RootResults(root, niter, nfev + niter)
        return root
