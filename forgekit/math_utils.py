"""
EntropyForge Mathematical Utilities
====================================

Entropy estimators and goodness-of-fit statistics used by the password
analyzer and by the generator uniformity self-test.

References:
    [1] Shannon, C. E. (1948). A Mathematical Theory of Communication.
        Bell System Technical Journal, 27(3), 379-423.
    [2] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations ... Philosophical Magazine, 50(302), 157-175.
    [3] Press, W. H. et al. (2007). Numerical Recipes (3rd ed.).
        Cambridge University Press, Section 6.2.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Hashable, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.floating]


# ========================== Entropy Measures ===============================


def shannon_entropy(symbols: Sequence[Hashable]) -> float:
    """Compute the empirical Shannon entropy of a symbol sequence.

    .. math::

        H = -\\sum_{c} p(c) \\, \\log_2 p(c)

    where :math:`p(c)` is the relative frequency of symbol *c* in the
    sequence.  For a ``str`` the symbols are code points.

    Args:
        symbols: Any sized sequence of hashable symbols (str, bytes, list).

    Returns:
        Entropy in bits per symbol. Returns 0.0 for empty input.
    """
    if not symbols:
        return 0.0

    length = len(symbols)
    entropy = 0.0
    for count in Counter(symbols).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


# ======================== Statistical Tests ================================


def category_counts(samples: Iterable[int], categories: int) -> FloatArray:
    """Histogram integer category indices in ``[0, categories)``.

    Args:
        samples: Category index of each observation.
        categories: Number of categories.

    Returns:
        1-D float64 array of length *categories* with occurrence counts.

    Raises:
        ValueError: If an index falls outside ``[0, categories)``.
    """
    arr = np.fromiter(samples, dtype=np.int64)
    if arr.size and (arr.min() < 0 or arr.max() >= categories):
        raise ValueError(
            f"Category index out of range [0, {categories})"
        )
    return np.bincount(arr, minlength=categories).astype(np.float64)


def chi_squared_test(
    observed: FloatArray, expected: FloatArray
) -> tuple[float, float]:
    """Perform Pearson's chi-squared goodness-of-fit test.

    .. math::

        \\chi^2 = \\sum_i \\frac{(O_i - E_i)^2}{E_i}

    The p-value is the regularised upper incomplete gamma function
    ``Q(dof / 2, chi2 / 2)``, matching ``scipy.stats.chi2.sf``.

    Args:
        observed: Observed frequency counts (1-D array of length *k*).
        expected: Expected frequency counts (1-D array of length *k*).

    Returns:
        Tuple of ``(chi2_statistic, p_value)``.

    Raises:
        ValueError: If arrays differ in length or expected contains zeros.
    """
    observed = np.asarray(observed, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)

    if observed.shape != expected.shape:
        raise ValueError("Array shapes must match")
    if np.any(expected <= 0):
        raise ValueError("Expected values must be > 0")

    chi2 = float(np.sum((observed - expected) ** 2 / expected))
    dof = len(observed) - 1

    if dof <= 0:
        return chi2, 1.0

    p_value = _upper_inc_gamma_reg(dof / 2.0, chi2 / 2.0)
    return chi2, p_value


def uniform_chi_squared(observed: FloatArray) -> tuple[float, float]:
    """Chi-squared test of *observed* counts against a uniform distribution."""
    observed = np.asarray(observed, dtype=np.float64)
    total = float(observed.sum())
    if total <= 0:
        raise ValueError("No observations")
    expected = np.full_like(observed, total / len(observed))
    return chi_squared_test(observed, expected)


# --------------- Incomplete gamma helpers (Numerical Recipes, Ch. 6) ------


def _upper_inc_gamma_reg(a: float, x: float) -> float:
    """Regularised upper incomplete gamma Q(a, x) = 1 - P(a, x).

    Uses series expansion for small *x* and the Lentz continued-fraction
    algorithm for large *x*.
    """
    if x <= 0.0 or a <= 0.0:
        return 1.0

    if x < a + 1.0:
        return 1.0 - _gamma_p_series(a, x)
    return _gamma_q_cf(a, x)


def _gamma_p_series(a: float, x: float) -> float:
    """Lower regularised incomplete gamma P(a, x) by series expansion."""
    ap = a
    delta = 1.0 / a
    total = delta
    for _ in range(1000):
        ap += 1.0
        delta *= x / ap
        total += delta
        if abs(delta) < abs(total) * 1e-15:
            break
    return total * math.exp(-x + a * math.log(x) - math.lgamma(a))


def _gamma_q_cf(a: float, x: float) -> float:
    """Upper regularised incomplete gamma Q(a, x) by Lentz continued fraction."""
    tiny = 1e-30
    b = x + 1.0 - a
    c = 1.0 / tiny
    d = 1.0 / b
    f = d
    for i in range(1, 1000):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < tiny:
            d = tiny
        c = b + an / c
        if abs(c) < tiny:
            c = tiny
        d = 1.0 / d
        delta = d * c
        f *= delta
        if abs(delta - 1.0) < 1e-15:
            break
    return f * math.exp(-x + a * math.log(x) - math.lgamma(a))
