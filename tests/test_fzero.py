import pytest
import numpy as np
import numba
from rootfinder.fzero import (
    AT_ROOT,
    BRACKETED,
    NO_SIGN_CHANGE,
    bracket,
    brent,
    brent_guess,
    brent_vec,
)

rtol = 1e-14
atol = 1e-8
ftol = 0.0
tol = 1e-6

# Test with univariate function
@numba.njit
def univar(x):
    return x - 2.5


@numba.njit
def univar3(x):
    return (x - 2.5) ** 3


@pytest.mark.parametrize("func", [univar, univar3])
def test_root(func):
    root = brent_guess(func, 0.0, 1.0, 6.0, rtol, atol, ftol)
    assert abs(root - 2.5) < tol


# Test when one end of the search range is a root
def test_ub_eq_root():
    root = brent_guess(univar, 0.0, 1.0, 2.5, rtol, atol, ftol)
    assert root == 2.5


def test_lb_eq_root():
    root = brent_guess(univar, 2.5, 4.0, 6.0, rtol, atol, ftol)
    assert root == 2.5


def test_guess_eq_root():
    root = brent_guess(univar, 0.0, 2.5, 6.0, rtol, atol, ftol)
    assert root == 2.5


# Test function with extra parameters
@numba.njit
def univar_args(x, exp):
    return (x - 2.5) ** exp * (x + 2.5) ** exp


@pytest.mark.parametrize("args", [(1,), (3,)])
def test_root_args(args):
    root = brent_guess(univar_args, 0.0, 1.0, 6.0, rtol, atol, ftol, args)
    assert abs(root - 2.5) < tol


# Test function which does not change sign at its roots, i.e. a quadratic
def test_root_singular():
    root = brent_guess(univar_args, 0.0, 1.0, 6.0, rtol, atol, ftol, (2,))
    assert np.isnan(root)


# Test function which does not change sign at its roots, but which is zero at
# one end of the search range
def test_ub_eq_root_singular():
    root = brent_guess(univar_args, 0.0, 1.0, 2.5, rtol, atol, ftol, (2,))
    assert root == 2.5


def test_lb_eq_root_singular():
    root = brent_guess(univar_args, 2.5, 4.0, 6.0, rtol, atol, ftol, (2,))
    assert root == 2.5


@pytest.mark.parametrize(
    "lo,x,hi", [(6.0, 1.0, 0.0), (0.0, 7.0, 6.0), (0.0, -1.0, 6.0), (np.nan, 1.0, 6.0)]
)
def test_bad_range(lo, x, hi):
    assert np.isnan(brent_guess(univar, lo, x, hi, rtol, atol, ftol))


# A sign change left of the guess is found without evaluating the upper bound
def test_bracket_left():
    a, b, fa, fb, flag, nfev = bracket(univar, 0.0, 4.0, 6.0, ftol)
    assert flag == BRACKETED
    assert (a, b) == (0.0, 4.0)
    assert (fa, fb) == (-2.5, 1.5)
    assert nfev == 2


def test_bracket_right():
    a, b, fa, fb, flag, nfev = bracket(univar, 0.0, 1.0, 6.0, ftol)
    assert flag == BRACKETED
    assert (a, b) == (1.0, 6.0)
    assert fa < 0.0 < fb
    assert nfev == 3


def test_bracket_ftol():
    # f(1.0) = -1.5 is accepted as a root under a loose ftol
    a, b, fa, fb, flag, nfev = bracket(univar, 0.0, 1.0, 6.0, 2.0)
    assert flag == AT_ROOT
    assert a == b == 1.0
    assert nfev == 1


def test_bracket_no_sign_change():
    a, b, fa, fb, flag, nfev = bracket(univar_args, 0.0, 1.0, 6.0, ftol, (2,))
    assert flag == NO_SIGN_CHANGE
    assert (a, b) == (0.0, 6.0)
    assert fa > 0.0 and fb > 0.0
    assert nfev == 3


@numba.njit
def cubic(x):
    return x**3 - x - 2.0


def test_brent_iterations():
    root, niter, converged = brent(cubic, 1.0, 2.0, -2.0, 4.0, rtol, 1e-12)
    assert converged
    assert abs(root - 1.5213797068045676) < 1e-11
    # Superlinear convergence: far fewer steps than bisection's ~40
    assert 0 < niter < 20


def test_brent_maxiter():
    root, niter, converged = brent(cubic, 1.0, 2.0, -2.0, 4.0, rtol, 1e-12, 2)
    assert not converged
    assert niter == 2
    assert 1.0 <= root <= 2.0


# Called from compiled code, many times
@numba.njit
def roots(func, tol):
    root1 = brent_guess(func, -6.0, -1.0, 0.0, 1e-14, tol, 0.0)
    root2 = brent_guess(func, 0.0, 1.0, 6.0, 1e-14, tol, 0.0)
    return root1, root2


@numba.njit
def twin(x):
    return (x - 2.5) * (x + 2.5)


def test_roots_njit():
    root1, root2 = roots(twin, 1e-8)
    assert abs(root1 + 2.5) < tol
    assert abs(root2 - 2.5) < tol


def test_brent_vec():
    lo = np.array([0.0, 0.0, 3.0, 2.5])
    hi = np.array([6.0, 2.5, 6.0, 2.5])
    x = brent_vec(univar, lo, hi, rtol, atol, ftol)
    assert x.shape == lo.shape
    assert abs(x[0] - 2.5) < tol
    assert x[1] == 2.5
    assert np.isnan(x[2])
    assert x[3] == 2.5


def test_brent_vec_2d_args():
    lo = np.zeros((2, 3))
    hi = np.full((2, 3), 6.0)
    x = brent_vec(univar_args, lo, hi, rtol, atol, ftol, (3,))
    assert x.shape == (2, 3)
    assert np.all(np.abs(x - 2.5) < tol)


@numba.njit
def tiny(x):
    return (x - 2.5) * 1e-170


def test_bracket_underflowing_product():
    a, b, fa, fb, flag, nfev = bracket(tiny, 0.0, 4.0, 6.0, 0.0)
    assert fa * fb == 0.0
    assert flag == BRACKETED
    assert (a, b) == (0.0, 4.0)


def test_tiny_root():
    root = brent_guess(tiny, 0.0, 4.0, 6.0, rtol, atol, 0.0)
    assert abs(root - 2.5) < tol


# Exact zero ends the search even with zero tolerances
def test_brent_exact_zero():
    root, niter, converged = brent(univar, 2.0, 3.0, -0.5, 0.5, 0.0, 0.0)
    assert converged
    assert root == 2.5
    assert niter == 1
