"""Gaussian hit-error model helpers and the Beta inverse CDF."""

import math

from scipy import special

from starmeter.numerics.root_finding import bisect

SQRT2 = math.sqrt(2.0)


def erf(x: float) -> float:
    return float(special.erf(x))


def erfinv(y: float) -> float:
    return float(special.erfinv(y))


def hit_probability(window: float, deviation: float) -> float:
    """Probability that a Gaussian hit error with *deviation* lands within +-window."""
    if deviation == 0:
        return 1.0
    if math.isinf(deviation):
        return 0.0
    return erf(window / (SQRT2 * deviation))


def beta_cdf(x: float, alpha: float, beta: float) -> float:
    return float(special.betainc(alpha, beta, x))


def beta_inverse_cdf(p: float, alpha: float, beta: float, tolerance: float = 1e-12) -> float:
    """Quantile of Beta(alpha, beta) at probability *p*.

    Inverts the regularized incomplete beta function by bisection on [0, 1]
    so the result only depends on a fixed number of halvings.
    """
    if alpha <= 0 or beta <= 0:
        raise ValueError(f"Beta parameters must be positive, got alpha={alpha}, beta={beta}")
    if not 0 <= p <= 1:
        raise ValueError(f"p must lie in [0, 1], got {p}")

    if p == 0:
        return 0.0
    if p == 1:
        return 1.0

    return bisect(lambda x: beta_cdf(x, alpha, beta) - p, 0.0, 1.0, tolerance, max_iterations=64)
