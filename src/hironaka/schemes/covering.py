"""
hironaka.schemes.covering
=========================

Coverings of schemes by affine charts glued along principal open subsets.

Charts live in an arena: a :class:`Covering` owns the list of charts and
every other structure refers to a chart by its integer index in that list.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from sympy.polys.domains import QQ

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import (RingMismatchError,
                                                  UsageError)
from hironaka.schemes.chart import Chart, RingMap
from hironaka.utils.log_config import logger


class Glueing:
    """Identification of ``D(first_domain)`` in chart ``first`` with
    ``D(second_domain)`` in chart ``second``.

    Parameters
    ----------
    first, second : int
        Chart indices.
    first_domain : Polynomial
        Function on the first chart whose non-vanishing locus is the overlap.
    second_domain : Polynomial
        Same on the second chart.
    to_first : RingMap
        Pulls functions of the second chart back to the overlap in the first.
    to_second : RingMap
        Pulls functions of the first chart back to the overlap in the second.
    """

    def __init__(self, first: int, second: int, first_domain: Polynomial, second_domain: Polynomial,
                 to_first: RingMap, to_second: RingMap):
        if to_first.codomain != first_domain.ring or to_second.codomain != second_domain.ring:
            raise RingMismatchError("Glueing maps must land in the rings of the glueing domains.")
        if to_first.domain != second_domain.ring or to_second.domain != first_domain.ring:
            raise RingMismatchError("Glueing maps must start from the rings of the opposite charts.")
        self.first = int(first)
        self.second = int(second)
        self.first_domain = first_domain
        self.second_domain = second_domain
        self.to_first = to_first
        self.to_second = to_second

    @classmethod
    def identity(cls, index: int, ring: PolynomialRing) -> "Glueing":
        ident = RingMap.identity(ring)
        return cls(index, index, ring.one, ring.one, ident, ident)

    def inverse(self) -> "Glueing":
        return Glueing(self.second, self.first, self.second_domain, self.first_domain,
                       self.to_second, self.to_first)

    @property
    def glueing_domains(self) -> Tuple[Polynomial, Polynomial]:
        return self.first_domain, self.second_domain

    @property
    def glueing_morphisms(self) -> Tuple[RingMap, RingMap]:
        return self.to_first, self.to_second

    def __repr__(self):
        return f"Glueing({self.first} <-> {self.second} along D({self.first_domain}) ~ D({self.second_domain}))"


class Covering:
    """Charts and the glueings between them.

    Parameters
    ----------
    charts : iterable of Chart
        The affine patches; their position is their index.
    glueings : iterable of Glueing, optional
        Each glueing is stored together with its inverse.
    ambient : Covering, optional
        Covering this one is a closed subscheme of, chart by chart.
    """

    def __init__(self, charts: Iterable[Chart] = (), glueings: Iterable[Glueing] = (),
                 ambient: "Covering" = None):
        self._charts: List[Chart] = list(charts)
        self._glueings: Dict[Tuple[int, int], Glueing] = {}
        self._ambient = ambient
        for g in glueings:
            self.add_glueing(g)

    @property
    def charts(self) -> Tuple[Chart, ...]:
        return tuple(self._charts)

    @property
    def indices(self) -> range:
        return range(len(self._charts))

    @property
    def ambient(self) -> Optional["Covering"]:
        return self._ambient

    def __len__(self):
        return len(self._charts)

    def __getitem__(self, index: int) -> Chart:
        return self._charts[index]

    def __iter__(self) -> Iterator[Chart]:
        return iter(self._charts)

    def index(self, chart: Chart) -> int:
        for i, c in enumerate(self._charts):
            if c is chart:
                return i
        raise UsageError(f"{chart!r} is not a chart of this covering.")

    def add_chart(self, chart: Chart) -> int:
        self._charts.append(chart)
        return len(self._charts) - 1

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._charts):
            raise UsageError(f"Chart index {index} out of range for a covering with {len(self)} charts.")

    def add_glueing(self, glueing: Glueing) -> None:
        i, j = glueing.first, glueing.second
        self._check_index(i)
        self._check_index(j)
        if glueing.first_domain.ring != self._charts[i].ring or glueing.second_domain.ring != self._charts[j].ring:
            raise RingMismatchError(f"Glueing {glueing!r} does not match the rings of charts {i} and {j}.")
        self._glueings[(i, j)] = glueing
        self._glueings[(j, i)] = glueing.inverse()

    def has_glueing(self, i: int, j: int) -> bool:
        return i == j or (i, j) in self._glueings

    def glueing(self, i: int, j: int) -> Glueing:
        """Glueing with ``first == i`` and ``second == j``."""
        if i == j:
            self._check_index(i)
            return Glueing.identity(i, self._charts[i].ring)
        try:
            return self._glueings[(i, j)]
        except KeyError:
            raise UsageError(f"Charts {i} and {j} are not glued.") from None

    def glueing_graph(self) -> Dict[int, Set[int]]:
        """Adjacency sets of the undirected glueing graph."""
        graph: Dict[int, Set[int]] = {i: set() for i in self.indices}
        for i, j in self._glueings:
            if i != j:
                graph[i].add(j)
        return graph

    def neighbor_patches(self, i: int) -> List[int]:
        self._check_index(i)
        return sorted(j for (a, j) in self._glueings if a == i and j != i)

    def glueing_domains(self, i: int, j: int) -> Tuple[Polynomial, Polynomial]:
        return self.glueing(i, j).glueing_domains

    def glueing_morphisms(self, i: int, j: int) -> Tuple[RingMap, RingMap]:
        return self.glueing(i, j).glueing_morphisms

    def restrict(self, i: int, j: int, ideal: Ideal) -> Ideal:
        """Ideal on chart ``i`` restricted to the overlap with chart ``j``.

        The restriction is expressed on chart ``i`` as the saturation by the
        function defining the overlap.
        """
        f_i, _ = self.glueing_domains(i, j)
        return (ideal + self._charts[i].modulus).saturation(f_i)

    def transport(self, i: int, j: int, ideal: Ideal) -> Ideal:
        """Ideal on chart ``j`` moved through the overlap onto chart ``i``.

        The result is the saturated ideal of the closure in chart ``i`` of
        the part of ``V(ideal)`` lying over the overlap.
        """
        g = self.glueing(i, j)
        pulled = g.to_first.pullback(ideal)
        return (pulled + self._charts[i].modulus).saturation(g.first_domain)

    def agree_on_overlap(self, i: int, j: int, ideal_i: Ideal, ideal_j: Ideal) -> bool:
        return self.restrict(i, j, ideal_i) == self.transport(i, j, ideal_j)

    closure = transport

    def subscheme(self, ideals: Mapping[int, Ideal]) -> "Covering":
        """Closed subscheme chart by chart; the glueing data are reused."""
        charts = [c.subscheme(ideals[i]) for i, c in enumerate(self._charts)]
        sub = Covering(charts, ambient=self)
        for (i, j), g in self._glueings.items():
            if i < j:
                sub.add_glueing(g)
        return sub

    def __repr__(self):
        return f"Covering({len(self)} charts, {len(self._glueings) // 2} glueings)"


class RationalFunction:
    """Element of the function field given on one chart as a fraction.

    Parameters
    ----------
    covering : Covering
        Where the function lives.
    chart : int
        Index of the chart the fraction is given on.
    numerator, denominator : Polynomial
        Representatives over the ring of that chart.
    """

    def __init__(self, covering: Covering, chart: int, numerator: Polynomial, denominator: Polynomial = None):
        ring = covering[chart].ring
        self._covering = covering
        self._chart = chart
        self._numerator = ring(numerator)
        self._denominator = ring(denominator) if denominator is not None else ring.one
        if not self._denominator:
            raise UsageError("Denominator must be non-zero.")

    @property
    def chart(self) -> int:
        return self._chart

    def on(self, index: int) -> Tuple[Polynomial, Polynomial]:
        """Numerator and denominator on chart ``index``.

        Only charts glued directly to the defining chart are supported.
        """
        if index == self._chart:
            return self._numerator, self._denominator
        to_index = self._covering.glueing(index, self._chart).to_first
        a, b = to_index(self._numerator)
        c, d = to_index(self._denominator)
        return a * d, b * c


def affine_space(n: int, domain=QQ, names: Sequence[str] = None) -> Covering:
    """Affine ``n``-space covered by one chart."""
    names = names or [f"x{i + 1}" for i in range(n)]
    return Covering([Chart(PolynomialRing(domain, names), name=f"A^{n}")])


class ProjectiveSpace(Covering):
    """Projective space with its standard affine charts ``s_i != 0``.

    Chart ``i`` has the variables ``s_j / s_i`` (``j != i``), named
    ``{name_j}_{i}``; it overlaps chart ``j`` where ``s_j / s_i`` does not
    vanish.
    """

    def __init__(self, n: int, domain=QQ, names: Sequence[str] = None):
        names = tuple(names or [f"s{i}" for i in range(n + 1)])
        if len(names) != n + 1:
            raise UsageError(f"Projective {n}-space needs {n + 1} homogeneous variable names.")
        self._homogeneous_ring = PolynomialRing(domain, names, grading=[[1]] * (n + 1))
        charts = []
        for i in range(n + 1):
            chart_names = [f"{names[j]}_{i}" for j in range(n + 1) if j != i]
            charts.append(Chart(PolynomialRing(domain, chart_names), name=f"U{i}"))
        super().__init__(charts)

        for i in range(n + 1):
            for j in range(i + 1, n + 1):
                self.add_glueing(self._standard_glueing(i, j))
        logger.debug("Built projective %d-space with %d charts", n, n + 1)

    @property
    def homogeneous_ring(self) -> PolynomialRing:
        return self._homogeneous_ring

    def _coordinate(self, chart: int, j: int) -> Polynomial:
        """The function ``s_j / s_chart`` on the given chart, ``j != chart``."""
        ring = self[chart].ring
        return ring.gens[j if j < chart else j - 1]

    def _transition(self, i: int, j: int) -> RingMap:
        """Pull functions of chart ``j`` back to chart ``i``."""
        n = self._homogeneous_ring.ngens
        target = self[i].ring
        u_j = self._coordinate(i, j)
        images = []
        for k in range(n):
            if k == j:
                continue
            # s_k / s_j = (s_k / s_i) / (s_j / s_i)
            num = target.one if k == i else self._coordinate(i, k)
            images.append((num, u_j))
        return RingMap(self[j].ring, target, images)

    def _standard_glueing(self, i: int, j: int) -> Glueing:
        return Glueing(i, j, self._coordinate(i, j), self._coordinate(j, i),
                       self._transition(i, j), self._transition(j, i))

    def dehomogenize(self, i: int, f: Polynomial) -> Polynomial:
        """Set ``s_i = 1`` in a homogeneous polynomial."""
        if f.ring != self._homogeneous_ring:
            raise RingMismatchError(f"{f} is not an element of {self._homogeneous_ring}.")
        target = self[i].ring
        images = [target.one if k == i else self._coordinate(i, k)
                  for k in range(self._homogeneous_ring.ngens)]
        return f.substitute(images)


def projective_space(n: int, domain=QQ, names: Sequence[str] = None) -> ProjectiveSpace:
    return ProjectiveSpace(n, domain, names)
