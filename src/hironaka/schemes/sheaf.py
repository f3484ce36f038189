"""
hironaka.schemes.sheaf
======================

Ideal sheaves on coverings.

An :class:`IdealSheaf` stores one ideal per chart index. Seed data on some
charts is propagated to the others through the glueing graph by
:func:`extend`; charts that cannot be reached from the seed are given the
zero ideal.
"""

from __future__ import annotations

import io
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.polynomial import Polynomial
from hironaka.algorithms.utils.config import (SIMPLIFY_COEFFICIENT_RANGE,
                                              SIMPLIFY_SEED)
from hironaka.algorithms.utils.exceptions import (ConsistencyError,
                                                  RingMismatchError,
                                                  UsageError)
from hironaka.schemes.covering import (Covering, ProjectiveSpace,
                                       RationalFunction)
from hironaka.utils.log_config import logger


def extend(covering: Covering, ideals: Dict[int, Ideal]) -> Dict[int, Ideal]:
    """Fill in the charts missing from ``ideals`` in place and return it.

    Starting from the seeded charts, every neighbour ``V`` of a processed
    chart ``U`` without an entry receives the saturated ideal of the closure
    in ``V`` of ``V(ideals[U])`` restricted to the overlap.
    """
    dirty = list(ideals)
    while dirty:
        u = dirty.pop()
        for v in covering.neighbor_patches(u):
            if v in ideals:
                continue
            ideals[v] = covering.transport(v, u, ideals[u])
            logger.debug("Extended ideal from chart %d to chart %d", u, v)
            if v not in dirty:
                dirty.append(v)
    for i in covering.indices:
        if i not in ideals:
            logger.warning("Chart %d is not reachable from the seed charts; using the zero ideal", i)
            ideals[i] = covering[i].zero_ideal()
    return ideals


class IdealSheaf:
    """Sheaf of ideals given by one ideal per chart.

    Parameters
    ----------
    covering : Covering
        The scheme, as a covering by charts.
    ideals : mapping of int to Ideal
        Seed ideals keyed by chart index. Missing charts are filled in on
        first access by :func:`extend`.
    check : bool, default True
        Copy the seed and verify that the given ideals agree on every glued
        overlap. With ``False`` the given ideal objects are stored as they
        are.

    Raises
    ------
    ConsistencyError
        If ``check`` is set and two seed ideals disagree on an overlap.
    """

    def __init__(self, covering: Covering, ideals: Mapping[int, Ideal], check: bool = True):
        self._covering = covering
        self._ideals: Dict[int, Ideal] = {}
        for i, ideal in ideals.items():
            covering._check_index(i)
            if ideal.ring != covering[i].ring:
                raise RingMismatchError(f"Ideal for chart {i} does not live in {covering[i].ring}.")
            self._ideals[i] = Ideal(ideal.ring, ideal.gens) if check else ideal
        self._complete = False
        if check:
            self._validate()

    @classmethod
    def from_chart(cls, covering: Covering, index: int, gens: Sequence) -> "IdealSheaf":
        """Sheaf generated by ``gens`` on chart ``index``, extended to all charts."""
        seed = {index: covering[index].ideal(gens)}
        return cls(covering, extend(covering, seed), check=False)

    @classmethod
    def from_projective(cls, space: ProjectiveSpace, gens: Sequence[Polynomial], check: bool = False) -> "IdealSheaf":
        """Sheaf of a homogeneous ideal on projective space."""
        ideals = {}
        for g in gens:
            if not g.is_homogeneous():
                raise UsageError(f"{g} is not homogeneous.")
        for i in space.indices:
            ideals[i] = space[i].ideal([space.dehomogenize(i, g) for g in gens])
        return cls(space, ideals, check=check)

    @classmethod
    def zero(cls, covering: Covering) -> "IdealSheaf":
        return cls(covering, {i: covering[i].zero_ideal() for i in covering.indices}, check=False)

    @classmethod
    def from_closed_embeddings(cls, covering: Covering, images: Mapping[int, Ideal]) -> "IdealSheaf":
        """Sheaf of the image of a covering morphism of closed embeddings.

        ``images`` maps a chart index to the ideal of the embedded patch;
        charts no patch lands in get the unit ideal.
        """
        ideals = {}
        for i in covering.indices:
            ideals[i] = covering[i].ideal(images[i].gens) if i in images else covering[i].unit_ideal()
        return cls(covering, ideals, check=False)

    @classmethod
    def unchecked(cls, covering: Covering, ideals: Mapping[int, Ideal]) -> "IdealSheaf":
        return cls(covering, ideals, check=False)

    @property
    def covering(self) -> Covering:
        return self._covering

    scheme = covering

    def _validate(self) -> None:
        for i in self._ideals:
            for j in self._covering.neighbor_patches(i):
                if j <= i or j not in self._ideals:
                    continue
                if not self._covering.agree_on_overlap(i, j, self._ideals[i], self._ideals[j]):
                    raise ConsistencyError(f"Ideals on charts {i} and {j} do not agree on their overlap.")
                if not self._covering.agree_on_overlap(j, i, self._ideals[j], self._ideals[i]):
                    raise ConsistencyError(f"Ideals on charts {j} and {i} do not agree on their overlap.")

    def _completed(self) -> Dict[int, Ideal]:
        if not self._complete:
            extend(self._covering, self._ideals)
            self._complete = True
        return self._ideals

    def __call__(self, index: int) -> Ideal:
        self._covering._check_index(index)
        if index in self._ideals:
            return self._ideals[index]
        return self._completed()[index]

    __getitem__ = __call__

    @property
    def ideal_dict(self) -> Dict[int, Ideal]:
        return dict(self._completed())

    def _check_same_covering(self, other: "IdealSheaf") -> None:
        if self._covering is not other._covering:
            raise UsageError("Ideal sheaves are not defined over the same scheme.")

    def __add__(self, other: "IdealSheaf") -> "IdealSheaf":
        self._check_same_covering(other)
        return IdealSheaf(self._covering, {i: self(i) + other(i) for i in self._covering.indices}, check=False)

    def __mul__(self, other: "IdealSheaf") -> "IdealSheaf":
        self._check_same_covering(other)
        ideals = {i: self._covering[i].ideal((self(i) * other(i)).gens) for i in self._covering.indices}
        return IdealSheaf(self._covering, ideals, check=False)

    def is_subset(self, other: "IdealSheaf") -> bool:
        self._check_same_covering(other)
        return all(self(i).is_subset(other(i)) for i in self._covering.indices)

    def __eq__(self, other):
        if not isinstance(other, IdealSheaf):
            return NotImplemented
        if self._covering is not other._covering:
            return False
        return all(self(i) == other(i) for i in self._covering.indices)

    __hash__ = None

    def simplify(self, seed: Optional[int] = None) -> "IdealSheaf":
        """Replace every chart ideal by random combinations of its generators.

        Generators are added one at a time until they generate the chart
        ideal together with the modulus. Mutates the sheaf and returns it.
        """
        rng = np.random.default_rng(SIMPLIFY_SEED if seed is None else seed)
        low, high = SIMPLIFY_COEFFICIENT_RANGE
        for i in self._covering.indices:
            chart = self._covering[i]
            ideal = self(i)
            gens = [g for g in ideal.gens if g not in chart.modulus]
            new_gens: List[Polynomial] = []
            current = chart.ideal()
            while not ideal.is_subset(current):
                candidate = chart.ring.zero
                while candidate in current:
                    coeffs = rng.integers(low, high + 1, size=len(gens))
                    candidate = chart.ring.zero
                    for c, g in zip(coeffs, gens):
                        candidate = candidate + g.scale(int(c))
                new_gens.append(candidate)
                current = chart.ideal(new_gens)
            logger.debug("Chart %d: %d generators simplified to %d", i, len(ideal.gens), len(new_gens))
            self._ideals[i] = current
        return self

    def subscheme(self) -> Covering:
        """Covering of the closed subscheme cut out by the sheaf."""
        return self._covering.subscheme(self._completed())

    def is_prime(self) -> bool:
        return all(self(i).is_one() or self(i).is_prime() for i in self._covering.indices)

    def radical(self) -> "IdealSheaf":
        return IdealSheaf(self._covering, {i: self(i).radical() for i in self._covering.indices}, check=False)

    def order_on_divisor(self, f: RationalFunction, check: bool = True) -> int:
        """Order of vanishing of ``f`` along the prime divisor given by the sheaf.

        The order is computed on the chart where the sheaf has the smallest
        generators among those where it is neither zero nor the unit ideal.

        Raises
        ------
        UsageError
            If ``check`` is set and the sheaf is not prime, or if the sheaf
            is trivial on every chart.
        """
        if f._covering is not self._covering:
            raise UsageError("Function and ideal sheaf are not defined on the same scheme.")
        if check and not self.is_prime():
            raise UsageError("Ideal sheaf must be prime.")
        candidates = []
        for i in self._covering.indices:
            if not self._covering.has_glueing(i, f.chart):
                continue
            ideal = self(i)
            if ideal.is_one() or ideal == self._covering[i].zero_ideal():
                continue
            candidates.append((sum(g.total_degree() for g in ideal.gens), i))
        if not candidates:
            raise UsageError("Ideal sheaf is trivial on every chart the function can be evaluated on.")
        _, index = min(candidates)
        J = self(index)
        modulus = self._covering[index].modulus
        num, den = f.on(index)

        def order(g: Polynomial) -> int:
            return _minimal_power_such_that(J, lambda x: (x + modulus).quotient(g).is_subset(J))[0] - 1

        num_mult = order(num)
        den_mult = order(den)
        return num_mult - den_mult

    def show_details(self) -> str:
        """Multi-line description of the sheaf, chart by chart."""
        out = io.StringIO()
        out.write(f"Ideal sheaf on {self._covering!r}\n")
        for i in self._covering.indices:
            chart = self._covering[i]
            if i in self._ideals:
                out.write(f"  {i}: {chart.name}: {self._ideals[i]}\n")
            else:
                out.write(f"  {i}: {chart.name}: (not computed)\n")
        return out.getvalue()

    def __repr__(self):
        return f"IdealSheaf({self._covering!r}, {len(self._ideals)} charts known)"


def _minimal_power_such_that(ideal: Ideal, predicate: Callable[[Ideal], bool]) -> Tuple[int, Ideal]:
    """Smallest ``k >= 0`` with ``predicate(ideal**k)``, found by doubling and bisection."""
    whole = Ideal(ideal.ring, [ideal.ring.one])
    if predicate(whole):
        return 0, whole
    if predicate(ideal):
        return 1, ideal
    # Powers ideal**(2**k) with the last one known to fail on top
    stack = [(1, ideal)]
    while True:
        k, power = stack[-1]
        square = power * power
        if predicate(square):
            break
        stack.append((2 * k, square))
    lo, lo_power = stack.pop()
    hi, hi_power = 2 * lo, lo_power * lo_power
    # predicate(lo_power) is False and predicate(hi_power) is True
    while stack:
        k, power = stack.pop()
        mid, mid_power = lo + k, lo_power * power
        if predicate(mid_power):
            hi, hi_power = mid, mid_power
        else:
            lo, lo_power = mid, mid_power
    return hi, hi_power


def pushforward(sheaf: IdealSheaf) -> IdealSheaf:
    """Push a sheaf on a subscheme forward along the inclusion."""
    ambient = sheaf.covering.ambient
    if ambient is None:
        raise UsageError("Ideal sheaf does not live on a closed subscheme.")
    return IdealSheaf(ambient, {i: ambient[i].ideal(sheaf(i).gens) for i in ambient.indices}, check=False)


def smooth_lci_covering(sheaf: IdealSheaf):
    raise NotImplementedError("smooth_lci_covering is not implemented")
