"""
Buchberger criterion checks for standard and Gröbner bases.
"""

from __future__ import annotations

from typing import Sequence, Union

from hironaka.algorithms.groebner.division import _reduce
from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.groebner.standard import spolynomial
from hironaka.algorithms.polynomial.orderings import MonomialOrdering
from hironaka.algorithms.polynomial.polynomial import Polynomial
from hironaka.algorithms.utils.exceptions import (DomainError, OrderingError,
                                                  UsageError)
from hironaka.utils.log_config import logger


def is_standard_basis(F: Union[IdealGens, Sequence[Polynomial]], ordering: MonomialOrdering = None) -> bool:
    """Test whether ``F`` is a standard basis of the ideal it generates.

    Every S-polynomial of a pair of generators is reduced by ``F``; the first
    non-zero remainder answers ``False``. A positive answer is cached on
    ``F`` (when it is an :class:`IdealGens`) so that later calls with the same
    ordering return at once.

    Parameters
    ----------
    F : IdealGens or sequence of Polynomial
        Candidate basis.
    ordering : MonomialOrdering, optional
        Defaults to the default ordering of the base ring.

    Raises
    ------
    DomainError
        If the coefficient domain is not exact.
    """
    if not isinstance(F, IdealGens):
        F = list(F)
        if not F:
            raise UsageError("Cannot infer the base ring of an empty generator list.")
        F = IdealGens(F[0].ring, F)
    ring = F.ring
    if not ring.is_exact:
        raise DomainError("Standard basis checks need an exact coefficient domain.")
    ordering = ordering or ring.default_ordering
    if F.is_standard_basis_for(ordering):
        return True

    gens = [g for g in F if g]
    for i in range(len(gens)):
        for j in range(i + 1, len(gens)):
            sp = spolynomial(gens[i], gens[j], ordering)
            if _reduce(IdealGens(ring, [sp]), F, ordering)[0]:
                logger.debug("S-polynomial of generators %d and %d does not reduce to zero", i, j)
                return False

    F.mark_standard_basis(ordering)
    return True


def is_groebner_basis(F: Union[IdealGens, Sequence[Polynomial]], ordering: MonomialOrdering = None) -> bool:
    """Like :func:`is_standard_basis` but only for global orderings.

    Raises
    ------
    OrderingError
        If ``ordering`` is local.
    """
    if ordering is None:
        if isinstance(F, IdealGens):
            ring = F.ring
        else:
            F = list(F)
            if not F:
                raise UsageError("Cannot infer the base ring of an empty generator list.")
            ring = F[0].ring
        ordering = ring.default_ordering
    if not ordering.is_global:
        raise OrderingError("Ordering must be global.")
    return is_standard_basis(F, ordering)
