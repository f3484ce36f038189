"""
hironaka.algorithms.groebner.division
=====================================

Multivariate division with quotients and unit.

For generators ``g_1, ..., g_n`` and a polynomial ``f`` the engine returns a
unit ``u``, quotients ``q_j`` and a remainder ``r`` with

    u * f = q_1 * g_1 + ... + q_n * g_n + r.

For global orderings ``u = 1`` and plain division is used: with
``complete_reduction`` every term of the remainder is irreducible, otherwise
only its leading term is. For local orderings Mora's normal form is used; the
remainder is a weak normal form and ``u`` is a unit of the localization
(its leading monomial is ``1``).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np
from sympy.polys.monomials import monomial_div, monomial_mul

from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.polynomial.base import (_exponent_array,
                                                 _first_divisor,
                                                 _monomial_array)
from hironaka.algorithms.polynomial.orderings import MonomialOrdering
from hironaka.algorithms.polynomial.polynomial import (Monomial, Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import (OrderingError,
                                                  RingMismatchError)
from hironaka.utils.log_config import logger


def _identity_matrix(ring: PolynomialRing, n: int) -> np.ndarray:
    out = _zero_matrix(ring, n, n)
    for i in range(n):
        out[i, i] = ring.one
    return out


def _zero_matrix(ring: PolynomialRing, m: int, n: int) -> np.ndarray:
    out = np.empty((m, n), dtype=object)
    for idx in np.ndindex(m, n):
        out[idx] = ring.zero
    return out


def _sub_scaled_term(target: Dict[Monomial, object], poly: Polynomial, monomial: Monomial, coeff) -> None:
    """In place ``target -= coeff * x**monomial * poly`` on a coefficient dict."""
    for m, c in poly.iter_terms():
        mm = monomial_mul(m, monomial)
        v = target.get(mm)
        v = -(coeff * c) if v is None else v - coeff * c
        if v:
            target[mm] = v
        else:
            target.pop(mm, None)


def _check_ordering(ring: PolynomialRing, ordering: MonomialOrdering) -> None:
    if ordering.nvars != ring.ngens:
        raise OrderingError(f"Ordering {ordering!r} does not belong to {ring!r}.")


class _MoraEntry:
    """Element of Mora's reducer set together with its representation.

    The entry satisfies ``poly = a * f - sum_j q[j] * g_j`` where ``f`` is the
    polynomial being reduced.
    """

    __slots__ = ("poly", "lm", "lc", "ecart", "a", "q")

    def __init__(self, poly: Dict[Monomial, object], lm: Monomial, ecart: int,
                 a: Optional[Polynomial], q: Optional[List[Polynomial]]):
        self.poly = poly
        self.lm = lm
        self.lc = poly[lm]
        self.ecart = ecart
        self.a = a
        self.q = q


class DivisionEngine:
    """Divide polynomials by a fixed list of generators.

    Parameters
    ----------
    gens : IdealGens
        Divisors. Zero generators are allowed and receive zero quotients.
    ordering : MonomialOrdering, optional
        Monomial ordering; defaults to the ordering attached to ``gens``.
    """

    def __init__(self, gens: IdealGens, ordering: MonomialOrdering = None):
        self._gens = gens
        self._ring = gens.ring
        self._ordering = ordering or gens.ordering
        _check_ordering(self._ring, self._ordering)
        self._active = [j for j, g in enumerate(gens) if g]
        self._leads = [gens[j].leading_monomial(self._ordering) for j in self._active]
        self._lcs = [gens[j].coeffs[m] for j, m in zip(self._active, self._leads)]
        self._lead_array = _exponent_array(self._leads, self._ring.ngens)

    @property
    def ordering(self) -> MonomialOrdering:
        return self._ordering

    def divide(self, f: Polynomial, complete_reduction: bool = False,
               track: bool = True) -> Tuple[Polynomial, List[Polynomial], Polynomial]:
        """Return ``(unit, quotients, remainder)`` for ``f``.

        With ``track`` set to ``False`` the unit and quotients are not
        accumulated and returned as ``None``.
        """
        if f.ring != self._ring:
            raise RingMismatchError(f"Cannot divide an element of {f.ring} by generators over {self._ring}.")
        if self._ordering.is_global:
            return self._divide_global(f, complete_reduction, track)
        return self._divide_local(f, track)

    def remainder(self, f: Polynomial, complete_reduction: bool = False) -> Polynomial:
        return self.divide(f, complete_reduction, track=False)[2]

    def _divide_global(self, f, complete_reduction, track):
        ring = self._ring
        K = ring.domain
        ordering = self._ordering
        quotients = [dict() for _ in self._gens] if track else None
        rest: Dict[Monomial, object] = dict(f.coeffs)
        remainder: Dict[Monomial, object] = {}

        while rest:
            m = ordering.max(rest)
            c = rest[m]
            k = _first_divisor(self._lead_array, _monomial_array(m)) if self._active else -1
            if k < 0:
                if not complete_reduction:
                    remainder.update(rest)
                    break
                remainder[m] = c
                del rest[m]
                continue
            j = self._active[k]
            d = monomial_div(m, self._leads[k])
            coeff = K.quo(c, self._lcs[k])
            _sub_scaled_term(rest, self._gens[j], d, coeff)
            rest.pop(m, None)
            if track:
                quotients[j][d] = quotients[j].get(d, K.zero) + coeff

        if not track:
            return None, None, Polynomial._new(ring, remainder)
        quots = [Polynomial._new(ring, {m: c for m, c in q.items() if c}) for q in quotients]
        return ring.one, quots, Polynomial._new(ring, remainder)

    def _divide_by_unit(self, f, k, track):
        """Divide ``f`` by the generator ``k`` whose leading monomial is ``1``.

        With ``g`` that generator and ``c`` its leading coefficient,
        ``(g / c) * f = (f / c) * g`` is a valid division with zero remainder.
        """
        ring = self._ring
        if not track:
            return None, None, ring.zero
        j = self._active[k]
        inv = ring.domain.quo(ring.domain.one, self._lcs[k])
        one = ring._zero_monomial
        quots = [ring.zero] * len(self._gens)
        quots[j] = f.mul_term(one, inv)
        return self._gens[j].mul_term(one, inv), quots, ring.zero

    def _divide_local(self, f, track):
        ring = self._ring
        K = ring.domain
        ordering = self._ordering
        n = len(self._gens)
        zero = ring.zero

        if f:
            for k, lm in enumerate(self._leads):
                if not any(lm):
                    return self._divide_by_unit(f, k, track)

        # Reducers are kept sorted by ecart, so the first divisor has minimal ecart
        reducers: List[_MoraEntry] = []
        for k, j in enumerate(self._active):
            g = self._gens[j]
            q = None
            if track:
                q = [zero] * n
                q[j] = -ring.one
            reducers.append(_MoraEntry(dict(g.coeffs), self._leads[k], g.ecart(ordering),
                                       zero if track else None, q))
        reducers.sort(key=lambda e: e.ecart)
        leads = _exponent_array([t.lm for t in reducers], ring.ngens)

        h: Dict[Monomial, object] = dict(f.coeffs)
        unit = ring.one if track else None
        quots = [zero] * n if track else None

        while h:
            lm = ordering.max(h)
            k = _first_divisor(leads, _monomial_array(lm)) if reducers else -1
            if k < 0:
                break
            t = reducers[k]
            ecart_h = max(sum(m) for m in h) - sum(lm)
            if t.ecart > ecart_h:
                pos = next((i for i, e in enumerate(reducers) if e.ecart > ecart_h), len(reducers))
                reducers.insert(pos, _MoraEntry(dict(h), lm, ecart_h, unit, quots))
                leads = np.insert(leads, pos, _monomial_array(lm), axis=0)
            d = monomial_div(lm, t.lm)
            coeff = K.quo(h[lm], t.lc)
            _sub_scaled_term(h, Polynomial._new(ring, t.poly), d, coeff)
            h.pop(lm, None)
            if track:
                unit = unit - t.a.mul_term(d, coeff)
                quots = [qj - tq.mul_term(d, coeff) for qj, tq in zip(quots, t.q)]

        return unit, quots, Polynomial._new(ring, h)


def _reduce_with_quotients_and_unit(I: IdealGens, J: IdealGens, ordering: MonomialOrdering = None,
                                    complete_reduction: bool = False):
    """Divide every element of ``I`` by ``J``.

    Returns
    -------
    tuple
        ``(U, Q, R)`` with ``U`` an ``m x m`` diagonal object array of
        units, ``Q`` an ``m x n`` object array of quotients and ``R`` a list
        of ``m`` remainders such that ``U . I = Q . J + R``.
    """
    if I.ring != J.ring:
        raise RingMismatchError(f"Base rings must be the same, got {I.ring} and {J.ring}.")
    ring = J.ring
    ordering = ordering or ring.default_ordering
    m, n = len(I), len(J)
    U = _identity_matrix(ring, m)
    Q = _zero_matrix(ring, m, n)
    R: List[Polynomial] = []
    engine = DivisionEngine(J, ordering)
    for i, f in enumerate(I):
        u, quots, r = engine.divide(f, complete_reduction)
        U[i, i] = u
        for j, q in enumerate(quots):
            Q[i, j] = q
        R.append(r)
    logger.debug("Divided %d polynomials by %d generators under %r", m, n, ordering)
    return U, Q, R


def _reduce(I: IdealGens, J: IdealGens, ordering: MonomialOrdering = None,
            complete_reduction: bool = False) -> List[Polynomial]:
    """Remainders of the elements of ``I`` modulo ``J``."""
    if I.ring != J.ring:
        raise RingMismatchError(f"Base rings must be the same, got {I.ring} and {J.ring}.")
    engine = DivisionEngine(J, ordering or J.ring.default_ordering)
    return [engine.remainder(f, complete_reduction) for f in I]
