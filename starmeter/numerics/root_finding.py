"""Scalar root finders with fixed iteration caps.

All solvers are best effort: when no sign change can be found, or the
iteration cap is reached before the requested tolerance, they return the
best estimate they have instead of raising. Callers treat such results as
"did not converge to the requested tolerance".
"""

import logging
import math
from typing import Callable

logger = logging.getLogger(__name__)

DOUBLE_EPSILON = 2.0 ** -52


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def _check_arguments(tolerance: float, expansion_factor: float = 2.0) -> None:
    if not tolerance > 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    if not expansion_factor > 1:
        raise ValueError(f"expansion_factor must be greater than 1, got {expansion_factor}")


def expand_bracket(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    expansion_factor: float = 2.0,
    max_expansions: int = 64,
) -> tuple[float, float, float, float]:
    """Push the upper bound outwards until f changes sign.

    The old upper bound becomes the new lower bound and the upper bound is
    scaled by *expansion_factor*. Returns ``(lower, upper, f(lower), f(upper))``;
    the pair may still share a sign if the cap was reached.
    """
    f_lower = f(lower)
    f_upper = f(upper)

    for _ in range(max_expansions):
        if _sign(f_lower) * _sign(f_upper) <= 0:
            break
        lower, f_lower = upper, f_upper
        upper *= expansion_factor
        f_upper = f(upper)
    else:
        logger.debug(f"No sign change after {max_expansions} expansions (upper={upper:g})")

    return lower, upper, f_lower, f_upper


def bisect(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float,
    max_iterations: int = 64,
) -> float:
    """Plain bisection; returns the midpoint of the final bracket."""
    _check_arguments(tolerance)

    f_lower = f(lower)
    f_upper = f(upper)

    if f_lower == 0:
        return lower
    if f_upper == 0:
        return upper
    if _sign(f_lower) == _sign(f_upper):
        logger.debug(f"bisect: no sign change on [{lower:g}, {upper:g}]")
        return lower if abs(f_lower) < abs(f_upper) else upper

    for _ in range(max_iterations):
        middle = 0.5 * (lower + upper)
        if abs(upper - lower) <= 2 * tolerance:
            return middle

        f_middle = f(middle)
        if f_middle == 0:
            return middle

        if _sign(f_middle) == _sign(f_lower):
            lower, f_lower = middle, f_middle
        else:
            upper = middle

    return 0.5 * (lower + upper)


def brent(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float,
    max_iterations: int = 64,
    expand: bool = False,
    expansion_factor: float = 2.0,
    max_expansions: int = 64,
) -> float:
    """Brent-Dekker root finding.

    Alternates inverse quadratic interpolation (or a secant step) with
    bisection, so it is never slower than bisection but converges
    superlinearly on well-behaved functions. With *expand* the bracket is
    widened first using :func:`expand_bracket`.
    """
    _check_arguments(tolerance, expansion_factor)

    if expand:
        a, b, fa, fb = expand_bracket(f, lower, upper, expansion_factor, max_expansions)
    else:
        a, b = lower, upper
        fa, fb = f(a), f(b)

    if fa == 0:
        return a
    if fb == 0:
        return b
    if _sign(fa) == _sign(fb):
        logger.debug(f"brent: no sign change on [{a:g}, {b:g}]")
        return a if abs(fa) < abs(fb) else b

    c, fc = b, fb
    d = e = b - a

    for _ in range(max_iterations):
        if _sign(fb) == _sign(fc):
            c, fc = a, fa
            d = e = b - a

        # b is always the best estimate, c the other end of the bracket
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol = 2.0 * DOUBLE_EPSILON * abs(b) + 0.5 * tolerance
        half_width = 0.5 * (c - b)

        if abs(half_width) <= tol or fb == 0:
            return b

        if abs(e) >= tol and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # secant
                p = 2.0 * half_width * s
                q = 1.0 - s
            else:
                # inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * half_width * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)

            if p > 0:
                q = -q
            p = abs(p)

            if 2.0 * p < min(3.0 * half_width * q - abs(tol * q), abs(e * q)):
                e = d
                d = p / q
            else:
                d = e = half_width
        else:
            d = e = half_width

        a, fa = b, fb
        if abs(d) > tol:
            b += d
        else:
            b += math.copysign(tol, half_width)
        fb = f(b)

    logger.debug(f"brent: iteration cap {max_iterations} reached near {b:g}")
    return b


def chandrupatla(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float,
    max_iterations: int = 25,
    expansion_factor: float = 2.0,
    max_expansions: int = 64,
) -> float:
    """Chandrupatla's method.

    Keeps the two bracket ends plus the previous end point and takes an
    inverse quadratic interpolation step only when the interpolating
    parabola is known to be monotone on the bracket; otherwise bisects.
    Terminates once the tolerance window covers more than half of the
    remaining bracket. The bracket is expanded first when needed.
    """
    _check_arguments(tolerance, expansion_factor)

    a, b, fa, fb = expand_bracket(f, lower, upper, expansion_factor, max_expansions)
    if fa == 0:
        return a
    if fb == 0:
        return b
    if _sign(fa) == _sign(fb):
        logger.debug(f"chandrupatla: no sign change on [{a:g}, {b:g}]")
        return a if abs(fa) < abs(fb) else b

    t = 0.5
    best = a if abs(fa) < abs(fb) else b

    for _ in range(max_iterations):
        xt = a + t * (b - a)
        ft = f(xt)

        if _sign(ft) == _sign(fa):
            c, fc = a, fa
        else:
            c, b = b, a
            fc, fb = fb, fa
        a, fa = xt, ft

        if abs(fa) < abs(fb):
            best, f_best = a, fa
        else:
            best, f_best = b, fb

        if f_best == 0:
            return best

        tol = 2.0 * tolerance * abs(best) + 2.0 * tolerance
        t_limit = tol / abs(b - c)
        if t_limit > 0.5:
            return best

        xi = (a - b) / (c - b)
        phi = (fa - fb) / (fc - fb)

        if phi * phi < xi and (1 - phi) * (1 - phi) < xi:
            t = (fa / (fb - fa) * fc / (fb - fc)
                 + (c - a) / (b - a) * fa / (fc - fa) * fb / (fc - fb))
        else:
            t = 0.5

        t = min(1 - t_limit, max(t_limit, t))

    logger.debug(f"chandrupatla: iteration cap {max_iterations} reached near {best:g}")
    return best
