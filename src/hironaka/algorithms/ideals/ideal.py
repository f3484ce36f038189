"""
hironaka.algorithms.ideals.ideal
================================

Ideals of polynomial rings with cached standard bases.

Elimination-based constructions (intersection, saturation) adjoin fresh
leading variables and compute a Gröbner basis for a block ordering that
eliminates them.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple, Union

from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.groebner.reduce import normal_form, reduce
from hironaka.algorithms.groebner.standard import standard_basis
from hironaka.algorithms.polynomial.orderings import (MonomialOrdering,
                                                      degrevlex,
                                                      elimination_ordering)
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import (OrderingError,
                                                  RingMismatchError,
                                                  UsageError)
from hironaka.utils.log_config import logger


class Ideal:
    """Ideal of a polynomial ring given by generators.

    Parameters
    ----------
    ring : PolynomialRing
        Base ring.
    gens : iterable, optional
        Generators; anything ``ring`` can convert. Zero generators are
        dropped. No generators gives the zero ideal.

    Notes
    -----
    Equality is mathematical (mutual containment), so ideals are not
    hashable.
    """

    def __init__(self, ring: PolynomialRing, gens: Iterable = ()):
        self._ring = ring
        converted = []
        for g in gens:
            if isinstance(g, Polynomial) and g.ring != ring:
                raise RingMismatchError(f"Generator {g} does not live in {ring}.")
            g = ring(g)
            if g and g not in converted:
                converted.append(g)
        self._gens = IdealGens(ring, converted)
        self._bases: Dict[MonomialOrdering, IdealGens] = {}

    @property
    def ring(self) -> PolynomialRing:
        return self._ring

    @property
    def gens(self) -> Tuple[Polynomial, ...]:
        return self._gens.gens

    @property
    def ngens(self) -> int:
        return len(self._gens)

    def _membership_ordering(self) -> MonomialOrdering:
        ordering = self._ring.default_ordering
        return ordering if ordering.is_global else degrevlex(self._ring)

    def cached_basis(self, ordering: MonomialOrdering) -> Optional[IdealGens]:
        return self._bases.get(ordering)

    def store_basis(self, basis: IdealGens) -> None:
        """Record ``basis``, which must carry the standard basis flag for its ordering."""
        if not basis.is_standard_basis_for(basis.ordering):
            raise UsageError("Only flagged standard bases can be cached on an ideal.")
        self._bases[basis.ordering] = basis

    def standard_basis(self, ordering: MonomialOrdering = None) -> IdealGens:
        """Standard basis for ``ordering`` (cached per ordering)."""
        ordering = ordering or self._ring.default_ordering
        basis = self._bases.get(ordering)
        if basis is None:
            basis = standard_basis(list(self._gens), ordering, self._ring)
            self._bases[ordering] = basis
        return basis

    def groebner_basis(self, ordering: MonomialOrdering = None) -> IdealGens:
        ordering = ordering or self._membership_ordering()
        if not ordering.is_global:
            raise OrderingError("Monomial ordering must be global.")
        return self.standard_basis(ordering)

    def normal_form(self, f, ordering: MonomialOrdering = None):
        return normal_form(f, self, ordering)

    def contains(self, f) -> bool:
        f = self._ring(f)
        if not f:
            return True
        basis = self.groebner_basis(self._membership_ordering())
        return not reduce(f, basis, basis.ordering)

    __contains__ = contains

    def is_subset(self, other: "Ideal") -> bool:
        self._check_ring(other)
        return all(g in other for g in self.gens)

    def __eq__(self, other):
        if not isinstance(other, Ideal):
            return NotImplemented
        if self._ring != other._ring:
            return False
        return self.is_subset(other) and other.is_subset(self)

    __hash__ = None

    def is_zero(self) -> bool:
        return not self._gens

    def is_one(self) -> bool:
        return self._ring.one in self

    def _check_ring(self, other: "Ideal") -> None:
        if self._ring != other._ring:
            raise RingMismatchError(f"Ideals live in different rings: {self._ring} and {other._ring}.")

    def __add__(self, other: "Ideal") -> "Ideal":
        self._check_ring(other)
        return Ideal(self._ring, self.gens + other.gens)

    def __mul__(self, other: "Ideal") -> "Ideal":
        self._check_ring(other)
        return Ideal(self._ring, [f * g for f in self.gens for g in other.gens])

    def __pow__(self, n: int) -> "Ideal":
        if n < 0:
            raise UsageError(f"Exponent must be non-negative, got {n}.")
        result = Ideal(self._ring, [self._ring.one])
        for _ in range(n):
            result = result * self
        return result

    def _extended(self, count: int) -> Tuple[PolynomialRing, List[int]]:
        names = self._ring.fresh_names(count)
        ring = self._ring.extend(names)
        return ring, list(range(count, count + self._ring.ngens))

    def eliminate(self, k: int, ring: PolynomialRing = None) -> "Ideal":
        """Intersection with the subring of the last ``ngens - k`` variables.

        The result lives in ``ring``, which must have exactly those variables
        (in order); by default a ring named after them is built.
        """
        n = self._ring.ngens
        if ring is None:
            ring = PolynomialRing(self._ring.domain, self._ring.names[k:])
        if ring.ngens != n - k:
            raise UsageError(f"Target ring must have {n - k} variables.")
        if k == 0:
            return Ideal(ring, [g.embed(ring, range(n)) for g in self.gens])
        basis = self.groebner_basis(elimination_ordering(self._ring, k))
        keep = []
        for g in basis:
            if all(not any(m[:k]) for m in g.monomials()):
                keep.append(_project(g, ring, k))
        return Ideal(ring, keep)

    def intersect(self, *others: "Ideal") -> "Ideal":
        """Intersection via ``t I + (1 - t) J`` and elimination of ``t``."""
        result = self
        for other in others:
            result = result._intersect_one(other)
        return result

    def _intersect_one(self, other: "Ideal") -> "Ideal":
        self._check_ring(other)
        if self.is_zero() or other.is_zero():
            return Ideal(self._ring)
        ext, positions = self._extended(1)
        t = ext.gens[0]
        gens = [t * g.embed(ext, positions) for g in self.gens]
        gens += [(1 - t) * g.embed(ext, positions) for g in other.gens]
        return Ideal(ext, gens).eliminate(1, self._ring)

    def quotient(self, other: Union["Ideal", Polynomial]) -> "Ideal":
        """Ideal quotient ``self : other``."""
        if isinstance(other, Ideal):
            self._check_ring(other)
            result = Ideal(self._ring, [self._ring.one])
            for f in other.gens:
                result = result.intersect(self._quotient_principal(f))
            return result
        return self._quotient_principal(self._ring(other))

    def _quotient_principal(self, f: Polynomial) -> "Ideal":
        if not f:
            return Ideal(self._ring, [self._ring.one])
        meet = self.intersect(Ideal(self._ring, [f]))
        return Ideal(self._ring, [g.divexact(f) for g in meet.gens])

    def saturation(self, other: Union["Ideal", Polynomial]) -> "Ideal":
        """Saturation ``self : other^infinity``.

        A principal saturation uses the Rabinowitsch trick: adjoin ``t``,
        add ``1 - t f`` and eliminate ``t``. For a general ideal the
        saturations by its generators are intersected.
        """
        if isinstance(other, Ideal):
            self._check_ring(other)
            result = Ideal(self._ring, [self._ring.one])
            for f in other.gens:
                result = result.intersect(self._saturation_principal(f))
            return result
        return self._saturation_principal(self._ring(other))

    def _saturation_principal(self, f: Polynomial) -> "Ideal":
        if not f:
            return Ideal(self._ring, [self._ring.one])
        if f.is_constant or self.is_zero():
            return Ideal(self._ring, self.gens)
        ext, positions = self._extended(1)
        t = ext.gens[0]
        gens = [g.embed(ext, positions) for g in self.gens]
        gens.append(1 - t * f.embed(ext, positions))
        return Ideal(ext, gens).eliminate(1, self._ring)

    def saturation_with_index(self, other: Union["Ideal", Polynomial]) -> Tuple["Ideal", int]:
        """Saturation together with the number of strict quotient steps."""
        current = self
        k = 0
        while True:
            nxt = current.quotient(other)
            if nxt.is_subset(current):
                break
            current = nxt
            k += 1
        logger.debug("Saturation stabilized after %d steps", k)
        return current, k

    def map(self, images, ring: PolynomialRing) -> "Ideal":
        """Image ideal under the ring map sending the variables to ``images``."""
        return Ideal(ring, [g.substitute(images) for g in self.gens])

    def radical(self) -> "Ideal":
        from hironaka.algorithms.ideals.decomposition import radical
        return radical(self)

    def minimal_primes(self) -> List["Ideal"]:
        from hironaka.algorithms.ideals.decomposition import minimal_primes
        return minimal_primes(self)

    def primary_decomposition(self) -> List[Tuple["Ideal", "Ideal"]]:
        from hironaka.algorithms.ideals.decomposition import \
            primary_decomposition
        return primary_decomposition(self)

    def is_prime(self) -> bool:
        from hironaka.algorithms.ideals.decomposition import is_prime
        return is_prime(self)

    def __repr__(self):
        return f"Ideal({', '.join(str(g) for g in self.gens)})"

    def __str__(self):
        return f"Ideal ({', '.join(str(g) for g in self.gens)})"


def _project(g: Polynomial, ring: PolynomialRing, k: int) -> Polynomial:
    """Drop the first ``k`` (vanishing) exponents of every monomial of ``g``."""
    return Polynomial._new(ring, {m[k:]: c for m, c in g.iter_terms()})
