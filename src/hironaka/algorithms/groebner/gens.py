"""
hironaka.algorithms.groebner.gens
=================================

Ordered generator sets with a cached standard-basis flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from hironaka.algorithms.polynomial.orderings import MonomialOrdering
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import RingMismatchError


@dataclass
class _BasisCell:
    """Mutable cache cell owned by one :class:`IdealGens`.

    ``is_basis`` is meaningful only together with ``ordering``; both are
    cleared whenever the generator sequence changes.
    """
    ordering: Optional[MonomialOrdering] = None
    is_basis: bool = False

    def invalidate(self) -> None:
        self.ordering = None
        self.is_basis = False


class IdealGens(Sequence):
    """Ordered generators of an ideal over a single ring.

    Parameters
    ----------
    ring : PolynomialRing
        Common parent of all generators.
    gens : iterable
        Generators; anything ``ring`` can convert is accepted.
    ordering : MonomialOrdering, optional
        Ordering the generators are attached to. Defaults to the ring's
        default ordering.
    is_standard_basis : bool, default False
        Declare the generators a standard basis for ``ordering``. Only code
        that has just computed such a basis should pass ``True``.

    Notes
    -----
    The flag and its ordering are written by a single owner at a time: the
    verifier, the standard basis engine, or the mutating methods below which
    invalidate it.
    """

    def __init__(self, ring: PolynomialRing, gens: Iterable = (),
                 ordering: MonomialOrdering = None, is_standard_basis: bool = False):
        self._ring = ring
        self._gens: List[Polynomial] = [self._convert(g) for g in gens]
        self._ordering = ordering or ring.default_ordering
        self._cell = _BasisCell()
        if is_standard_basis:
            self._cell.ordering = self._ordering
            self._cell.is_basis = True

    def _convert(self, g) -> Polynomial:
        if isinstance(g, Polynomial) and g.ring != self._ring:
            raise RingMismatchError(f"Generator {g} does not live in {self._ring}.")
        return self._ring(g)

    @property
    def ring(self) -> PolynomialRing:
        return self._ring

    @property
    def ordering(self) -> MonomialOrdering:
        return self._ordering

    @property
    def gens(self):
        return tuple(self._gens)

    @property
    def cached_ordering(self) -> Optional[MonomialOrdering]:
        return self._cell.ordering

    def is_standard_basis_for(self, ordering: MonomialOrdering) -> bool:
        """Return the cached flag; ``False`` when nothing is known for ``ordering``."""
        return self._cell.is_basis and self._cell.ordering == ordering

    def mark_standard_basis(self, ordering: MonomialOrdering) -> None:
        self._cell.ordering = ordering
        self._cell.is_basis = True

    def __getitem__(self, index):
        return self._gens[index]

    def __len__(self):
        return len(self._gens)

    def __iter__(self) -> Iterator[Polynomial]:
        return iter(self._gens)

    def __setitem__(self, index, value):
        self._gens[index] = self._convert(value)
        self._cell.invalidate()

    def append(self, g) -> None:
        self._gens.append(self._convert(g))
        self._cell.invalidate()

    def extend(self, gens: Iterable) -> None:
        self._gens.extend(self._convert(g) for g in gens)
        self._cell.invalidate()

    def copy(self) -> "IdealGens":
        out = IdealGens(self._ring, self._gens, self._ordering)
        out._cell.ordering = self._cell.ordering
        out._cell.is_basis = self._cell.is_basis
        return out

    def __repr__(self):
        return f"IdealGens({', '.join(str(g) for g in self._gens)})"
