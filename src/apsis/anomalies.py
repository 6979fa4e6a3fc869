"""
Anomaly angle conversions
=========================

Stateless maps between the true, eccentric, mean, hyperbolic and mean
hyperbolic anomalies of a Keplerian orbit with eccentricity ``e``.

Elliptic conversions require ``0 <= e < 1`` and hyperbolic ones ``e > 1``.
An eccentricity outside the valid domain returns ``nan`` and issues an
``OrbitalDomainWarning`` (or raises ``ValueError`` under
``config.STRICT_VALIDATION``); check results with ``np.isfinite``.

The closed-form true/eccentric maps use the half-angle tangent form so they
stay well conditioned near f = pi. The two inverse Kepler equations are solved
with Newton-Raphson starting from the mean anomaly itself.

Short aliases following the usual notation are provided, e.g. ``f2E`` for
``true_to_eccentric`` and ``M2E`` for ``mean_to_eccentric``.

Examples
--------
>>> from apsis.anomalies import mean_to_eccentric, eccentric_to_true
>>> E = mean_to_eccentric(1.0, 0.1)
>>> f = eccentric_to_true(E, 0.1)
>>> sol = mean_to_eccentric(1.0, 0.1, full_output=True)
>>> sol.converged
True
"""

import warnings
from typing import NamedTuple
import numpy as np
from .config import config
from .utils import ConvergenceWarning, domain_violation

ELLIPTIC_RANGE = "0 <= e < 1"
HYPERBOLIC_RANGE = "e > 1"


class KeplerSolution(NamedTuple):
    """Result of an inverse Kepler equation solve"""
    anomaly: float
    converged: bool
    iterations: int


def _is_elliptic(e):
    return 0 <= e < 1


def _is_hyperbolic(e):
    return e > 1


# ========== ELLIPTIC ==========
def eccentric_to_true(E, e):
    """
    Map eccentric anomaly to true anomaly.

    Parameters
    ----------
    E : float
        Eccentric anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    float
        True anomaly [rad] in (-pi, pi], or nan for an invalid e
    """
    if not _is_elliptic(e):
        domain_violation("eccentric_to_true", "e", e, ELLIPTIC_RANGE)
        return np.nan
    return float(2*np.arctan2(np.sqrt(1 + e)*np.sin(E/2),
                              np.sqrt(1 - e)*np.cos(E/2)))


def true_to_eccentric(f, e):
    """
    Map true anomaly to eccentric anomaly.

    Parameters
    ----------
    f : float
        True anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    float
        Eccentric anomaly [rad] in (-pi, pi], or nan for an invalid e
    """
    if not _is_elliptic(e):
        domain_violation("true_to_eccentric", "e", e, ELLIPTIC_RANGE)
        return np.nan
    return float(2*np.arctan2(np.sqrt(1 - e)*np.sin(f/2),
                              np.sqrt(1 + e)*np.cos(f/2)))


def eccentric_to_mean(E, e):
    """Kepler's equation, M = E - e sin(E), for 0 <= e < 1"""
    if not _is_elliptic(e):
        domain_violation("eccentric_to_mean", "e", e, ELLIPTIC_RANGE)
        return np.nan
    return float(E - e*np.sin(E))


def mean_to_eccentric(M, e, full_output=False):
    """
    Solve Kepler's equation for the eccentric anomaly.

    Newton-Raphson on E - e sin(E) - M = 0 with E0 = M. The root always lies
    in [M - e, M + e]; steps that leave that bracket are replaced by
    bisection, which keeps the solver convergent as e approaches 1.
    Iterates until the correction drops to config.ANOMALY_TOLERANCE or config.MAX_ITERATIONS
    steps have been taken; in the latter case a ConvergenceWarning is issued
    and the last estimate returned.

    Parameters
    ----------
    M : float
        Mean anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1
    full_output : bool, optional
        If True, return a KeplerSolution carrying the convergence flag
        and iteration count instead of the bare angle

    Returns
    -------
    float or KeplerSolution
        Eccentric anomaly [rad], nan for an invalid e
    """
    if not _is_elliptic(e):
        domain_violation("mean_to_eccentric", "e", e, ELLIPTIC_RANGE)
        solution = KeplerSolution(np.nan, False, 0)
    else:
        solution = _newton_solve(
            lambda E: E - e*np.sin(E) - M,
            lambda E: 1 - e*np.cos(E),
            M, M - e, M + e, f"mean_to_eccentric({M:g}, {e:g})")
    return solution if full_output else solution.anomaly


# ========== HYPERBOLIC ==========
def true_to_hyperbolic(f, e):
    """
    Map true anomaly to hyperbolic anomaly.

    Parameters
    ----------
    f : float
        True anomaly [rad], inside the asymptotes |f| < acos(-1/e)
    e : float
        Eccentricity, e > 1

    Returns
    -------
    float
        Hyperbolic anomaly [rad], or nan for an invalid e or for f on or
        beyond the asymptotes
    """
    if not _is_hyperbolic(e):
        domain_violation("true_to_hyperbolic", "e", e, HYPERBOLIC_RANGE)
        return np.nan
    if 1 + e*np.cos(f) <= 0:
        domain_violation("true_to_hyperbolic", "f", f,
                         f"inside the asymptotes, |f| < {np.arccos(-1/e):g} rad")
        return np.nan
    return float(2*np.arctanh(np.sqrt((e - 1)/(e + 1))*np.tan(f/2)))


def hyperbolic_to_true(H, e):
    """
    Map hyperbolic anomaly to true anomaly.

    Parameters
    ----------
    H : float
        Hyperbolic anomaly [rad]
    e : float
        Eccentricity, e > 1

    Returns
    -------
    float
        True anomaly [rad], or nan for an invalid e
    """
    if not _is_hyperbolic(e):
        domain_violation("hyperbolic_to_true", "e", e, HYPERBOLIC_RANGE)
        return np.nan
    return float(2*np.arctan(np.sqrt((e + 1)/(e - 1))*np.tanh(H/2)))


def hyperbolic_to_mean(H, e):
    """Hyperbolic Kepler equation, N = e sinh(H) - H, for e > 1"""
    if not _is_hyperbolic(e):
        domain_violation("hyperbolic_to_mean", "e", e, HYPERBOLIC_RANGE)
        return np.nan
    return float(e*np.sinh(H) - H)


def mean_to_hyperbolic(N, e, full_output=False):
    """
    Solve the hyperbolic Kepler equation for the hyperbolic anomaly.

    Newton-Raphson on e sinh(H) - H - N = 0 with H0 = N, damped by bisection
    inside [asinh(N/e), asinh(N/(e - 1))] (ordered by the sign of N). The
    guess is clipped into that bracket, so sinh never overflows and the
    returned estimate is finite. Stopping rules as in mean_to_eccentric.

    Parameters
    ----------
    N : float
        Mean hyperbolic anomaly [rad]
    e : float
        Eccentricity, e > 1
    full_output : bool, optional
        If True, return a KeplerSolution instead of the bare angle

    Returns
    -------
    float or KeplerSolution
        Hyperbolic anomaly [rad], nan for an invalid e
    """
    if not _is_hyperbolic(e):
        domain_violation("mean_to_hyperbolic", "e", e, HYPERBOLIC_RANGE)
        solution = KeplerSolution(np.nan, False, 0)
    else:
        # asinh(N/e) and asinh(N/(e - 1)) bracket the root, keeping sinh finite
        lower, upper = sorted((np.arcsinh(N/e), np.arcsinh(N/(e - 1))))
        solution = _newton_solve(
            lambda H: e*np.sinh(H) - H - N,
            lambda H: e*np.cosh(H) - 1,
            N, float(lower), float(upper), f"mean_to_hyperbolic({N:g}, {e:g})")
    return solution if full_output else solution.anomaly


# ========== COMPOSITES ==========
def true_to_mean(f, e):
    """
    Map true anomaly to mean (elliptic) or mean hyperbolic anomaly.

    Dispatches on e: f -> E -> M for 0 <= e < 1, f -> H -> N for e > 1.
    Parabolic and negative eccentricities return nan.
    """
    if _is_elliptic(e):
        return eccentric_to_mean(true_to_eccentric(f, e), e)
    if _is_hyperbolic(e):
        return hyperbolic_to_mean(true_to_hyperbolic(f, e), e)
    domain_violation("true_to_mean", "e", e, f"{ELLIPTIC_RANGE} or {HYPERBOLIC_RANGE}")
    return np.nan


def mean_to_true(M, e):
    """
    Map mean (elliptic) or mean hyperbolic anomaly to true anomaly.

    Inverse of true_to_mean, solving the appropriate Kepler equation.
    """
    if _is_elliptic(e):
        return eccentric_to_true(mean_to_eccentric(M, e), e)
    if _is_hyperbolic(e):
        return hyperbolic_to_true(mean_to_hyperbolic(M, e), e)
    domain_violation("mean_to_true", "e", e, f"{ELLIPTIC_RANGE} or {HYPERBOLIC_RANGE}")
    return np.nan


def _newton_solve(func, fprime, guess, lower, upper, label):
    """
    Newton-Raphson damped by bisection on a bracketing interval

    func must be increasing with its root in [lower, upper]. A Newton step
    that leaves the bracket, or fails to halve the previous correction, is
    replaced by a bisection step, so every iterate stays finite. The guess
    is clipped into the bracket.
    """
    x = min(max(float(guess), lower), upper)
    max_iter = config.MAX_ITERATIONS
    previous = upper - lower
    for iteration in range(1, max_iter + 1):
        fx = func(x)
        if fx > 0:
            upper = x
        else:
            lower = x
        slope = fprime(x)
        x_new = x - fx/slope if slope > 0 else np.nan
        if not lower <= x_new <= upper or abs(x - x_new) > 0.5*previous:
            x_new = 0.5*(lower + upper)
        step = x - x_new
        previous = abs(step)
        x = float(x_new)
        if abs(step) <= config.ANOMALY_TOLERANCE:
            return KeplerSolution(x, True, iteration)
    warnings.warn(
        f"iteration error in {label}: no convergence after {max_iter} "
        f"iterations, returning last estimate {x:g}",
        ConvergenceWarning, stacklevel=3)
    return KeplerSolution(x, False, max_iter)


# short aliases
E2f = eccentric_to_true
f2E = true_to_eccentric
E2M = eccentric_to_mean
M2E = mean_to_eccentric
f2H = true_to_hyperbolic
H2f = hyperbolic_to_true
H2N = hyperbolic_to_mean
N2H = mean_to_hyperbolic
