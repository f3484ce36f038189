"""
hironaka.algorithms.polynomial.base
===================================

Low-level helpers for working with packed exponent arrays: every monomial of
a polynomial is one row of an ``int64`` matrix with one column per variable.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np
from numba import njit

from hironaka.algorithms.utils.config import FASTMATH


def _exponent_array(monomials: Iterable[Tuple[int, ...]], n_vars: int) -> np.ndarray:
    """Stack exponent tuples into a ``(n_terms, n_vars)`` integer array."""
    rows = list(monomials)
    if not rows:
        return np.zeros((0, n_vars), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64).reshape(len(rows), n_vars)


def _monomial_array(monomial: Sequence[int]) -> np.ndarray:
    return np.asarray(monomial, dtype=np.int64)


@njit(fastmath=FASTMATH, cache=False)
def _first_divisor(leads: np.ndarray, monomial: np.ndarray) -> int:
    """Index of the first row of ``leads`` dividing ``monomial`` or -1."""
    n_gens, n_vars = leads.shape
    for i in range(n_gens):
        divides = True
        for k in range(n_vars):
            if leads[i, k] > monomial[k]:
                divides = False
                break
        if divides:
            return i
    return -1


@njit(fastmath=FASTMATH, cache=False)
def _ceil_weighted_degrees(exponents: np.ndarray, numerators: np.ndarray, denominator: int) -> np.ndarray:
    """Compute ``ceil(sum_k a_k * numerators[k] / denominator)`` for every row ``a``.

    ``denominator`` must be positive; the ceiling is taken with floor division
    on the negated sum so that the computation stays in integers.
    """
    n_terms, n_vars = exponents.shape
    out = np.zeros(n_terms, dtype=np.int64)
    for i in range(n_terms):
        acc = 0
        for k in range(n_vars):
            acc += exponents[i, k] * numerators[k]
        out[i] = -((-acc) // denominator)
    return out
