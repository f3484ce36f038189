"""
hironaka.algorithms.groebner.reduce
===================================

Public reduction entry points.

The functions accept one polynomial or a list of polynomials, and a list of
generators or an :class:`IdealGens`, and funnel every combination into the
generator-set to generator-set division of
:mod:`hironaka.algorithms.groebner.division`.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Union

from hironaka.algorithms.groebner.division import (_identity_matrix,
                                                   _reduce,
                                                   _reduce_with_quotients_and_unit,
                                                   _zero_matrix)
from hironaka.algorithms.groebner.fast import (_fast_groebner_basis,
                                               _fast_normal_form)
from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.polynomial.orderings import (MonomialOrdering,
                                                      degrevlex)
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.config import FAST_PATH_MAX_CHARACTERISTIC
from hironaka.algorithms.utils.exceptions import (DomainError,
                                                  RingMismatchError,
                                                  UsageError)
from hironaka.utils.log_config import logger

Generators = Union[Sequence[Polynomial], IdealGens]


def _as_gens(F: Generators, ring: PolynomialRing = None) -> IdealGens:
    if isinstance(F, IdealGens):
        if ring is not None and F.ring != ring:
            raise RingMismatchError(f"Base rings must be the same, got {ring} and {F.ring}.")
        return F
    F = list(F)
    if ring is None:
        if not F:
            raise UsageError("Cannot infer the base ring of an empty generator list.")
        ring = F[0].ring
    for g in F:
        if isinstance(g, Polynomial) and g.ring != ring:
            raise RingMismatchError(f"Base rings must be the same, got {ring} and {g.ring}.")
    return IdealGens(ring, F)


def reduce(f: Union[Polynomial, Sequence[Polynomial], IdealGens], F: Generators,
           ordering: MonomialOrdering = None, complete_reduction: bool = False):
    """Remainder of ``f`` modulo the generators ``F``.

    Parameters
    ----------
    f : Polynomial, list of Polynomial or IdealGens
        What to reduce. A polynomial returns a polynomial; a list or an
        :class:`IdealGens` returns a list of the same length.
    F : list of Polynomial or IdealGens
        Divisors.
    ordering : MonomialOrdering, optional
        Defaults to the default ordering of the base ring.
    complete_reduction : bool, default False
        Reduce every term instead of only the leading ones. Ignored for
        local orderings, where the remainder is a weak normal form.

    Examples
    --------
    >>> R = PolynomialRing(QQ, "x, y")
    >>> x, y = R.gens
    >>> str(reduce(y**3, [x**2, x*y - y**3]))
    'x*y'
    """
    G = F if isinstance(F, IdealGens) else list(F)
    if isinstance(f, Polynomial):
        if not len(G):
            return f
        J = _as_gens(G, f.ring)
        return _reduce(IdealGens(f.ring, [f]), J, ordering, complete_reduction)[0]
    if isinstance(f, IdealGens):
        return _reduce(f, _as_gens(G, f.ring), ordering, complete_reduction)
    f = list(f)
    if not f:
        return []
    if not len(G):
        return f
    J = _as_gens(G, f[0].ring)
    return _reduce(IdealGens(J.ring, f), J, ordering, complete_reduction)


def reduce_with_quotients_and_unit(f: Union[Polynomial, Sequence[Polynomial], IdealGens], F: Generators,
                                   ordering: MonomialOrdering = None, complete_reduction: bool = False):
    """Unit, quotients and remainders of ``f`` divided by ``F``.

    Returns ``(U, Q, R)`` such that ``U . f = Q . F + R`` where ``U`` is a
    square diagonal object array of units (the identity for global
    orderings), ``Q`` an object array with one row per input and one column
    per generator, and ``R`` the remainder (a polynomial for polynomial
    input, a list otherwise).

    Examples
    --------
    >>> R = PolynomialRing(QQ, "x")
    >>> x, = R.gens
    >>> U, Q, r = reduce_with_quotients_and_unit(x, [x + 1], ordering=neglex(R))
    >>> str(U[0, 0]), str(Q[0, 0]), str(r)
    ('x + 1', 'x', '0')
    """
    if isinstance(f, Polynomial):
        ring = f.ring
        G = F if isinstance(F, IdealGens) else list(F)
        if not len(G):
            return _identity_matrix(ring, 1), _zero_matrix(ring, 1, 0), f
        U, Q, R = _reduce_with_quotients_and_unit(IdealGens(ring, [f]), _as_gens(G, ring),
                                                  ordering, complete_reduction)
        return U, Q, R[0]
    if isinstance(f, IdealGens):
        return _reduce_with_quotients_and_unit(f, _as_gens(F, f.ring), ordering, complete_reduction)
    f = list(f)
    if not f:
        raise UsageError("At least one polynomial must be given.")
    ring = f[0].ring
    G = F if isinstance(F, IdealGens) else list(F)
    if not len(G):
        return _identity_matrix(ring, len(f)), _zero_matrix(ring, len(f), 0), f
    return _reduce_with_quotients_and_unit(IdealGens(ring, f), _as_gens(G, ring),
                                           ordering, complete_reduction)


def reduce_with_quotients(f: Union[Polynomial, Sequence[Polynomial], IdealGens], F: Generators,
                          ordering: MonomialOrdering = None, complete_reduction: bool = False):
    """Quotients and remainders of ``f`` divided by ``F``; see
    :func:`reduce_with_quotients_and_unit` for the shapes."""
    _, Q, R = reduce_with_quotients_and_unit(f, F, ordering, complete_reduction)
    return Q, R


class NormalFormStrategy(Enum):
    FAST_FINITE_FIELD = "fast_finite_field"
    GENERAL_PURPOSE = "general_purpose"


def select_normal_form_strategy(ring: PolynomialRing, ordering: MonomialOrdering) -> NormalFormStrategy:
    """Pick the engine for :func:`normal_form`.

    The fast engine is used for degrevlex on ungraded rings over prime
    fields of characteristic below ``FAST_PATH_MAX_CHARACTERISTIC``.
    """
    domain = ring.domain
    if (ordering == degrevlex(ring)
            and not ring.is_graded
            and getattr(domain, "is_FiniteField", False)
            and domain.characteristic() < FAST_PATH_MAX_CHARACTERISTIC):
        return NormalFormStrategy.FAST_FINITE_FIELD
    return NormalFormStrategy.GENERAL_PURPOSE


def normal_form(A: Union[Polynomial, Sequence[Polynomial]], ideal, ordering: MonomialOrdering = None):
    """Normal form of ``A`` modulo ``ideal``.

    Parameters
    ----------
    A : Polynomial or list of Polynomial
        Elements of the base ring of ``ideal``.
    ideal : Ideal
        The ideal; its standard basis for ``ordering`` is computed on first
        use and cached on the ideal.
    ordering : MonomialOrdering, optional
        Defaults to the default ordering of the base ring.

    Raises
    ------
    DomainError
        If the coefficient domain is not exact.
    """
    ring = ideal.ring
    if not ring.is_exact:
        raise DomainError("Normal forms are only available over exact coefficient domains.")
    ordering = ordering or ring.default_ordering
    single = isinstance(A, Polynomial)
    polys = [A] if single else list(A)
    for f in polys:
        if f.ring != ring:
            raise RingMismatchError(f"Base rings must be the same, got {f.ring} and {ring}.")

    strategy = select_normal_form_strategy(ring, ordering)
    logger.debug("normal_form: %s strategy for %r", strategy.value, ordering)
    if strategy is NormalFormStrategy.FAST_FINITE_FIELD:
        basis = ideal.cached_basis(ordering)
        if basis is None:
            basis = _fast_groebner_basis(ideal.gens, ring)
            ideal.store_basis(basis)
        out = _fast_normal_form(polys, basis)
    else:
        basis = ideal.standard_basis(ordering)
        out = reduce(polys, basis, ordering, complete_reduction=ordering.is_global)
    return out[0] if single else out
