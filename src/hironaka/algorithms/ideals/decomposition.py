"""
hironaka.algorithms.ideals.decomposition
========================================

Minimal primes, radicals and primary decompositions.

Minimal primes are found by factorization-driven splitting: whenever a
Gröbner basis element (degrevlex first, then lex) factors as
``p_1^e_1 ... p_r^e_r`` with ``r > 1`` or some ``e_i > 1``, the ideal is
replaced by the ideals ``I + <p_i>``, which have the same minimal primes
altogether. Ideals whose bases only contain irreducible elements are taken
as prime. This is exact for ideals whose components are cut out by
triangular sets with factors over the coefficient field (principal ideals,
monomial ideals, unions of linear subspaces, rational points), and may
report a non-prime component when irreducibility only fails over an
extension of the field.

Primary decompositions are exact for principal and monomial ideals. In
general the isolated components ``I : s_i^infinity`` are formed, with
``s_i`` vanishing on every minimal prime but the ``i``-th one; they are
returned when each is certainly primary and they intersect back to ``I``.
Otherwise :class:`NotImplementedError` is raised.
"""

from __future__ import annotations

from typing import FrozenSet, List, Optional, Sequence, Tuple

import sympy as sp
from sympy.polys.monomials import monomial_divides, monomial_lcm
from sympy.polys.polyerrors import PolynomialError

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.orderings import degrevlex, lex
from hironaka.algorithms.polynomial.polynomial import Monomial, Polynomial
from hironaka.algorithms.utils.exceptions import BackendError
from hironaka.utils.log_config import logger


def _factors(g: Polynomial) -> List[Tuple[Polynomial, int]]:
    """Irreducible factors of ``g`` with multiplicities, constants dropped."""
    ring = g.ring
    try:
        _, factors = sp.Poly(g.to_sympy(), *ring.symbols, domain=ring.domain).factor_list()
    except (NotImplementedError, PolynomialError) as exc:
        raise BackendError(f"Cannot factor {g} over {ring.domain}.") from exc
    return [(ring.from_sympy(p.as_expr()), int(e)) for p, e in factors]


def _splitting_factors(ideal: Ideal) -> Optional[List[Polynomial]]:
    ring = ideal.ring
    for ordering in (degrevlex(ring), lex(ring)):
        for g in ideal.groebner_basis(ordering):
            if g.is_constant:
                continue
            factors = _factors(g)
            if len(factors) > 1 or factors[0][1] > 1:
                return [p for p, _ in factors]
    return None


def _drop_redundant(ideals: Sequence[Ideal]) -> List[Ideal]:
    """Keep the inclusion-minimal ideals, each once."""
    out: List[Ideal] = []
    for i, P in enumerate(ideals):
        redundant = False
        for j, Q in enumerate(ideals):
            if i == j or not Q.is_subset(P):
                continue
            if not P.is_subset(Q) or j < i:
                redundant = True
                break
        if not redundant:
            out.append(P)
    return out


def minimal_primes(ideal: Ideal) -> List[Ideal]:
    """Minimal prime ideals over ``ideal``; empty for the unit ideal."""
    work = [ideal]
    leaves: List[Ideal] = []
    while work:
        J = work.pop()
        if J.is_one():
            continue
        factors = _splitting_factors(J)
        if factors is None:
            leaves.append(J)
        else:
            work.extend(J + Ideal(J.ring, [p]) for p in factors)
    primes = _drop_redundant(leaves)
    logger.debug("Found %d minimal primes from %d branches", len(primes), len(leaves))
    return primes


def radical(ideal: Ideal) -> Ideal:
    primes = minimal_primes(ideal)
    if not primes:
        return Ideal(ideal.ring, [ideal.ring.one])
    return primes[0].intersect(*primes[1:])


def is_prime(ideal: Ideal) -> bool:
    primes = minimal_primes(ideal)
    return len(primes) == 1 and primes[0] == ideal


def _is_zero_dimensional(ideal: Ideal) -> bool:
    leads = [g.leading_monomial(degrevlex(ideal.ring)) for g in ideal.groebner_basis(degrevlex(ideal.ring))]
    n = ideal.ring.ngens
    for i in range(n):
        if not any(m[i] > 0 and sum(m) == m[i] for m in leads):
            return False
    return True


def _minimize_monomials(monos) -> FrozenSet[Monomial]:
    monos = set(monos)
    return frozenset(
        m for m in monos
        if not any(o != m and monomial_divides(o, m) for o in monos)
    )


def _irreducible_monomial_components(monos: FrozenSet[Monomial]) -> List[FrozenSet[Monomial]]:
    """Split a monomial ideal into ideals generated by pure powers."""
    work = [monos]
    out = []
    while work:
        current = work.pop()
        for m in current:
            support = [i for i, e in enumerate(m) if e]
            if len(support) > 1:
                i = support[0]
                power = tuple(e if k == i else 0 for k, e in enumerate(m))
                cofactor = tuple(0 if k == i else e for k, e in enumerate(m))
                rest = current - {m}
                work.append(_minimize_monomials(rest | {power}))
                work.append(_minimize_monomials(rest | {cofactor}))
                break
        else:
            out.append(current)
    return out


def _monomial_subset(a: FrozenSet[Monomial], b: FrozenSet[Monomial]) -> bool:
    return all(any(monomial_divides(g, m) for g in b) for m in a)


def _monomial_primary_decomposition(ideal: Ideal, gens: Sequence[Polynomial]) -> List[Tuple[Ideal, Ideal]]:
    ring = ideal.ring
    monos = _minimize_monomials(g.monomials()[0] for g in gens)
    components = list(dict.fromkeys(_irreducible_monomial_components(monos)))
    components = [
        c for c in components
        if not any(o != c and _monomial_subset(o, c) for o in components)
    ]
    grouped = {}
    for c in components:
        support = tuple(sorted(i for m in c for i, e in enumerate(m) if e))
        grouped.setdefault(support, []).append(c)

    out = []
    one = ring.domain.one
    for support, group in grouped.items():
        merged = group[0]
        for c in group[1:]:
            merged = _minimize_monomials(monomial_lcm(a, b) for a in merged for b in c)
        Q = Ideal(ring, [Polynomial._new(ring, {m: one}) for m in merged])
        P = Ideal(ring, [ring.gens[i] for i in support])
        out.append((Q, P))
    return out


def _is_certainly_primary(Q: Ideal, P: Ideal) -> bool:
    if Q == P:
        return True
    gens = Q.groebner_basis().gens
    if len(gens) == 1:
        return len(_factors(gens[0])) == 1
    return _is_zero_dimensional(Q)


def primary_decomposition(ideal: Ideal) -> List[Tuple[Ideal, Ideal]]:
    """Primary decomposition as a list of ``(primary, associated prime)`` pairs.

    Raises
    ------
    NotImplementedError
        If ``ideal`` has components this backend cannot certify, such as
        embedded components of a non-monomial ideal.
    """
    ring = ideal.ring
    if ideal.is_one():
        return []
    if ideal.is_zero():
        return [(Ideal(ring), Ideal(ring))]

    gens = ideal.groebner_basis().gens
    if len(gens) == 1:
        return [(Ideal(ring, [p ** e]), Ideal(ring, [p])) for p, e in _factors(gens[0])]
    if all(g.is_term for g in gens):
        return _monomial_primary_decomposition(ideal, gens)

    primes = minimal_primes(ideal)
    out = []
    for i, P in enumerate(primes):
        s = ring.one
        for j, other in enumerate(primes):
            if j != i:
                s = s * next(g for g in other.gens if g not in P)
        Q = ideal.saturation(s)
        if not _is_certainly_primary(Q, P):
            raise NotImplementedError(f"Cannot certify the {P}-component of {ideal} as primary.")
        out.append((Q, P))
    if out[0][0].intersect(*[Q for Q, _ in out[1:]]) != ideal:
        raise NotImplementedError(f"{ideal} has embedded components.")
    return out
