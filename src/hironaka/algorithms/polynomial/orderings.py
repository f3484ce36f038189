"""
hironaka.algorithms.polynomial.orderings
========================================

Monomial orderings on exponent tuples.

The comparison keys are sympy :class:`~sympy.polys.orderings.MonomialOrder`
instances: a monomial is larger than another one when its key is larger. An
ordering is *global* when every non-constant monomial is larger than ``1``
(a well-ordering, suitable for Buchberger's algorithm) and *local* otherwise
(``1`` is the largest monomial, suitable for computations in the localization
at the origin).
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from sympy.polys.orderings import MonomialOrder
from sympy.polys.orderings import grevlex as _grevlex
from sympy.polys.orderings import grlex as _grlex
from sympy.polys.orderings import ilex as _ilex
from sympy.polys.orderings import lex as _lex

from hironaka.algorithms.utils.exceptions import OrderingError


class _NegDegLexOrder(MonomialOrder):
    """Negative degree lexicographic order (lowest total degree first)."""
    alias = "negdeglex"
    is_global = False

    def __call__(self, monomial):
        return (-sum(monomial), monomial)


class _NegDegRevLexOrder(MonomialOrder):
    """Negative degree reverse lexicographic order."""
    alias = "negdegrevlex"
    is_global = False

    def __call__(self, monomial):
        return (-sum(monomial), tuple(reversed([-m for m in monomial])))


class _BlockOrder(MonomialOrder):
    """Product of degree reverse lexicographic orders on consecutive blocks.

    Monomials are compared block by block from the left; the first block that
    differs decides. With blocks ``(k, n - k)`` every monomial involving one
    of the first ``k`` variables is larger than all monomials free of them,
    which makes the order an elimination order for those variables.
    """
    alias = "block"
    is_global = True

    def __init__(self, sizes: Sequence[int]):
        self.sizes = tuple(int(s) for s in sizes)

    def __call__(self, monomial):
        key = []
        start = 0
        for size in self.sizes:
            key.append(_grevlex(monomial[start:start + size]))
            start += size
        return tuple(key)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.sizes})"

    def __eq__(self, other):
        return isinstance(other, _BlockOrder) and self.sizes == other.sizes

    def __hash__(self):
        return hash((self.__class__, self.sizes))


_NAMED_ORDERS = {
    "lex": _lex,
    "deglex": _grlex,
    "degrevlex": _grevlex,
    "neglex": _ilex,
    "negdeglex": _NegDegLexOrder(),
    "negdegrevlex": _NegDegRevLexOrder(),
}


class MonomialOrdering:
    """Total order on the monomials of a ring with ``nvars`` variables.

    Parameters
    ----------
    order : sympy.polys.orderings.MonomialOrder
        Key function on exponent tuples.
    nvars : int
        Number of variables of the ring the ordering belongs to.
    name : str, optional
        Display name; defaults to the alias of ``order``.
    """

    __slots__ = ("_order", "_nvars", "_name")

    def __init__(self, order: MonomialOrder, nvars: int, name: str = None):
        self._order = order
        self._nvars = int(nvars)
        self._name = name if name is not None else str(order.alias)

    @property
    def name(self) -> str:
        return self._name

    @property
    def nvars(self) -> int:
        return self._nvars

    @property
    def order(self) -> MonomialOrder:
        return self._order

    @property
    def is_global(self) -> bool:
        return self._order.is_global is True

    @property
    def is_local(self) -> bool:
        return not self.is_global

    def key(self, monomial: Tuple[int, ...]):
        return self._order(monomial)

    def greater(self, a: Tuple[int, ...], b: Tuple[int, ...]) -> bool:
        """Return ``True`` when ``a`` is strictly larger than ``b``."""
        return self._order(a) > self._order(b)

    def max(self, monomials: Iterable[Tuple[int, ...]]) -> Tuple[int, ...]:
        return max(monomials, key=self._order)

    def sorted(self, monomials: Iterable[Tuple[int, ...]], reverse: bool = True):
        """Sort monomials, largest first unless ``reverse`` is ``False``."""
        return sorted(monomials, key=self._order, reverse=reverse)

    def __eq__(self, other):
        if not isinstance(other, MonomialOrdering):
            return NotImplemented
        return self._nvars == other._nvars and self._order == other._order

    def __hash__(self):
        return hash((self._nvars, self._order))

    def __repr__(self):
        return f"{self._name}({self._nvars})"


def make_ordering(name: str, nvars: int) -> MonomialOrdering:
    """Build a named ordering for a ring with ``nvars`` variables.

    Raises
    ------
    OrderingError
        If ``name`` is not one of ``lex``, ``deglex``, ``degrevlex``,
        ``neglex``, ``negdeglex`` or ``negdegrevlex``.
    """
    try:
        order = _NAMED_ORDERS[name]
    except KeyError:
        raise OrderingError(f"Unknown monomial ordering '{name}'. "
                            f"Choose one of {sorted(_NAMED_ORDERS)}.") from None
    return MonomialOrdering(order, nvars, name)


def lex(ring) -> MonomialOrdering:
    return make_ordering("lex", ring.ngens)


def deglex(ring) -> MonomialOrdering:
    return make_ordering("deglex", ring.ngens)


def degrevlex(ring) -> MonomialOrdering:
    return make_ordering("degrevlex", ring.ngens)


def neglex(ring) -> MonomialOrdering:
    return make_ordering("neglex", ring.ngens)


def negdeglex(ring) -> MonomialOrdering:
    return make_ordering("negdeglex", ring.ngens)


def negdegrevlex(ring) -> MonomialOrdering:
    return make_ordering("negdegrevlex", ring.ngens)


def elimination_ordering(ring, k: int) -> MonomialOrdering:
    """Global ordering eliminating the first ``k`` variables of ``ring``."""
    n = ring.ngens
    if not 0 < k < n:
        raise OrderingError(f"Cannot eliminate {k} of {n} variables.")
    return MonomialOrdering(_BlockOrder((k, n - k)), n, f"elim{k}")
