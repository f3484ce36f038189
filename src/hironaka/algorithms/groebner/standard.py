"""
hironaka.algorithms.groebner.standard
=====================================

Standard bases by Buchberger's algorithm (global orderings) and Mora's
tangent cone algorithm (local orderings).

Both variants share the pair loop; they differ only in the normal form used
to reduce S-polynomials: plain division for well-orderings, Mora's ecart
driven weak normal form otherwise.
"""

from __future__ import annotations

from typing import List, Sequence, Set, Tuple

from sympy.polys.monomials import monomial_div, monomial_divides, monomial_lcm

from hironaka.algorithms.groebner.division import DivisionEngine
from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.polynomial.orderings import MonomialOrdering
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import OrderingError, UsageError
from hironaka.utils.log_config import logger


def spolynomial(f: Polynomial, g: Polynomial, ordering: MonomialOrdering) -> Polynomial:
    """S-polynomial of ``f`` and ``g`` with monic leading terms."""
    K = f.ring.domain
    lm_f = f.leading_monomial(ordering)
    lm_g = g.leading_monomial(ordering)
    lcm = monomial_lcm(lm_f, lm_g)
    return (f.mul_term(monomial_div(lcm, lm_f), K.quo(K.one, f.coeffs[lm_f]))
            - g.mul_term(monomial_div(lcm, lm_g), K.quo(K.one, g.coeffs[lm_g])))


def _coprime(a: Tuple[int, ...], b: Tuple[int, ...]) -> bool:
    return all(x == 0 or y == 0 for x, y in zip(a, b))


def _normal_form(f: Polynomial, basis: Sequence[Polynomial], ordering: MonomialOrdering,
                 complete_reduction: bool = False) -> Polynomial:
    gens = IdealGens(f.ring, basis, ordering)
    return DivisionEngine(gens, ordering).remainder(f, complete_reduction)


def _minimalize(basis: List[Polynomial], ordering: MonomialOrdering) -> List[Polynomial]:
    """Drop elements whose leading monomial is divisible by another one."""
    leads = [g.leading_monomial(ordering) for g in basis]
    keep = []
    for i, lm in enumerate(leads):
        redundant = False
        for j, other in enumerate(leads):
            if i == j or not monomial_divides(other, lm):
                continue
            # Equal leading monomials: keep the first occurrence
            if other != lm or j < i:
                redundant = True
                break
        if not redundant:
            keep.append(basis[i])
    return keep


def _buchberger(gens: Sequence[Polynomial], ordering: MonomialOrdering) -> List[Polynomial]:
    basis: List[Polynomial] = []
    for g in gens:
        if g:
            g = g.monic(ordering)
            if g not in basis:
                basis.append(g)
    if not basis:
        return []

    leads = [g.leading_monomial(ordering) for g in basis]
    # A generator with leading monomial 1 is a unit
    if any(not any(lm) for lm in leads):
        return [basis[0].ring.one]
    pending: Set[Tuple[int, int]] = {(i, j) for j in range(len(basis)) for i in range(j)}
    processed = 0

    while pending:
        # Normal selection strategy: smallest lcm first
        i, j = min(pending, key=lambda p: (sum(monomial_lcm(leads[p[0]], leads[p[1]])), p))
        pending.remove((i, j))
        lcm = monomial_lcm(leads[i], leads[j])
        if _coprime(leads[i], leads[j]):
            continue
        if any(
            k not in (i, j)
            and monomial_divides(leads[k], lcm)
            and (min(i, k), max(i, k)) not in pending
            and (min(j, k), max(j, k)) not in pending
            for k in range(len(basis))
        ):
            continue

        processed += 1
        h = _normal_form(spolynomial(basis[i], basis[j], ordering), basis, ordering)
        if h:
            h = h.monic(ordering)
            if not any(h.leading_monomial(ordering)):
                return [h.ring.one]
            new = len(basis)
            basis.append(h)
            leads.append(h.leading_monomial(ordering))
            pending.update((k, new) for k in range(new))

    logger.debug("Standard basis under %r: %d S-polynomials reduced, %d elements before minimalization",
                 ordering, processed, len(basis))
    return basis


def _interreduce(basis: List[Polynomial], ordering: MonomialOrdering) -> List[Polynomial]:
    out = []
    for i, g in enumerate(basis):
        others = basis[:i] + basis[i + 1:]
        r = _normal_form(g, others, ordering, complete_reduction=True) if others else g
        out.append(r.monic(ordering))
    return out


def standard_basis(gens: Sequence[Polynomial], ordering: MonomialOrdering,
                   ring: PolynomialRing = None) -> IdealGens:
    """Compute a standard basis of the ideal generated by ``gens``.

    Parameters
    ----------
    gens : sequence of Polynomial
        Generators, all over the same ring.
    ordering : MonomialOrdering
        Global or local monomial ordering.
    ring : PolynomialRing, optional
        Needed only when ``gens`` is empty.

    Returns
    -------
    IdealGens
        For a global ordering the reduced Gröbner basis; for a local ordering
        a minimal standard basis. Elements are monic, sorted by increasing
        leading monomial and flagged as a standard basis for ``ordering``.
    """
    gens = list(gens)
    if ring is None:
        if not gens:
            raise UsageError("Cannot infer the base ring of an empty generator list.")
        ring = gens[0].ring
    if ordering.nvars != ring.ngens:
        raise OrderingError(f"Ordering {ordering!r} does not belong to {ring!r}.")
    basis = _minimalize(_buchberger(gens, ordering), ordering)
    if ordering.is_global:
        basis = _interreduce(basis, ordering)
    basis.sort(key=lambda g: ordering.key(g.leading_monomial(ordering)))
    return IdealGens(ring, basis, ordering, is_standard_basis=True)


def groebner_basis(gens: Sequence[Polynomial], ordering: MonomialOrdering,
                   ring: PolynomialRing = None) -> IdealGens:
    """Reduced Gröbner basis; ``ordering`` must be global."""
    if not ordering.is_global:
        raise OrderingError("Monomial ordering must be global.")
    return standard_basis(gens, ordering, ring)
