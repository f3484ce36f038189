"""
hironaka.algorithms.groebner.fast
=================================

Finite-field degree reverse lexicographic engine.

Thin wrapper around sympy's ``groebner`` (signature based ``f5b`` variant)
and ``reduced`` for prime fields. Failures raised inside sympy are re-raised
as :class:`~hironaka.algorithms.utils.exceptions.BackendError` with the
original exception chained.
"""

from __future__ import annotations

from typing import List, Sequence

import sympy as sp

from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.polynomial.orderings import degrevlex
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import BackendError
from hironaka.utils.log_config import logger


def _fast_groebner_basis(gens: Sequence[Polynomial], ring: PolynomialRing) -> IdealGens:
    """Reduced degrevlex Gröbner basis computed by sympy's F5B."""
    exprs = [g.to_sympy() for g in gens if g]
    ordering = degrevlex(ring)
    if not exprs:
        return IdealGens(ring, [], ordering, is_standard_basis=True)
    try:
        basis = sp.groebner(exprs, *ring.symbols, order="grevlex",
                            domain=ring.domain, method="f5b")
    except Exception as exc:
        raise BackendError(f"Fast Gröbner engine failed on {len(exprs)} generators over {ring}.") from exc
    polys = [ring.from_sympy(b) for b in basis.exprs]
    polys = [p.monic(ordering) for p in polys]
    polys.sort(key=lambda p: ordering.key(p.leading_monomial(ordering)))
    logger.debug("F5B basis over %s has %d elements", ring.domain, len(polys))
    return IdealGens(ring, polys, ordering, is_standard_basis=True)


def _fast_normal_form(A: Sequence[Polynomial], basis: IdealGens) -> List[Polynomial]:
    """Fully reduced degrevlex remainders of ``A`` modulo ``basis``."""
    ring = basis.ring
    if not len(basis):
        return list(A)
    exprs = [g.to_sympy() for g in basis]
    out = []
    for f in A:
        if not f:
            out.append(f)
            continue
        try:
            _, r = sp.reduced(f.to_sympy(), exprs, *ring.symbols,
                              order="grevlex", domain=ring.domain)
        except Exception as exc:
            raise BackendError(f"Fast normal form failed for {f}.") from exc
        out.append(ring.from_sympy(r))
    return out
