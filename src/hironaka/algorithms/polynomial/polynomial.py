"""
hironaka.algorithms.polynomial.polynomial
=========================================

Sparse multivariate polynomials over sympy coefficient domains.

A :class:`PolynomialRing` fixes the coefficient domain (``QQ``, ``GF(p)``,
``RR``...), the variable names, an optional grading and the default monomial
ordering. A :class:`Polynomial` is an immutable mapping from exponent tuples
to non-zero domain elements.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import symengine as se
import sympy as sp
from sympy.polys.domains import QQ
from sympy.polys.monomials import monomial_div, monomial_mul
from sympy.polys.polyerrors import CoercionFailed, PolynomialError

from hironaka.algorithms.polynomial.base import _exponent_array
from hironaka.algorithms.polynomial.orderings import (MonomialOrdering,
                                                      make_ordering)
from hironaka.algorithms.utils.config import DEFAULT_ORDERING
from hironaka.algorithms.utils.exceptions import (DomainError,
                                                  RingMismatchError,
                                                  UsageError)

Monomial = Tuple[int, ...]


class PolynomialRing:
    """Polynomial ring ``domain[names]``.

    Parameters
    ----------
    domain : sympy.polys.domains.Domain, default QQ
        Coefficient domain.
    names : str or sequence of str
        Variable names, either as a sequence or as one comma or space
        separated string.
    grading : sequence of sequence of int, optional
        Degree vector of every variable. ``None`` for an ungraded ring.
    default_ordering : str, optional
        Name of the monomial ordering used when an operation is called
        without an explicit one. Defaults to ``degrevlex``.

    Notes
    -----
    Two rings compare equal when their domain, variable names and grading
    agree, so polynomials built from separately constructed but identical
    rings can be combined.
    """

    def __init__(self, domain=QQ, names="x", grading=None, default_ordering: str = None):
        if isinstance(names, str):
            names = [n for n in names.replace(",", " ").split() if n]
        names = tuple(str(n) for n in names)
        if len(set(names)) != len(names):
            raise UsageError(f"Variable names must be distinct, got {names}.")

        self._domain = domain
        self._names = names
        if grading is not None:
            grading = tuple(tuple(int(w) for w in np.atleast_1d(row)) for row in grading)
            if len(grading) != len(names):
                raise UsageError(f"Grading has {len(grading)} entries for {len(names)} variables.")
        self._grading = grading
        self._ordering_name = default_ordering or DEFAULT_ORDERING
        self._default_ordering = make_ordering(self._ordering_name, len(names))
        self._symbols = tuple(sp.Symbol(n) for n in names)
        self._locals = dict(zip(names, self._symbols))
        self._zero_monomial = (0,) * len(names)

    @property
    def domain(self):
        return self._domain

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def ngens(self) -> int:
        return len(self._names)

    @property
    def symbols(self) -> Tuple[sp.Symbol, ...]:
        return self._symbols

    @property
    def grading(self):
        return self._grading

    @property
    def is_graded(self) -> bool:
        return self._grading is not None

    @property
    def is_exact(self) -> bool:
        return bool(self._domain.is_Exact)

    @property
    def characteristic(self) -> int:
        return int(self._domain.characteristic())

    @property
    def default_ordering(self) -> MonomialOrdering:
        return self._default_ordering

    @property
    def gens(self) -> Tuple["Polynomial", ...]:
        one = self._domain.one
        return tuple(
            Polynomial._new(self, {tuple(int(i == k) for i in range(self.ngens)): one})
            for k in range(self.ngens)
        )

    @property
    def zero(self) -> "Polynomial":
        return Polynomial._new(self, {})

    @property
    def one(self) -> "Polynomial":
        return Polynomial._new(self, {self._zero_monomial: self._domain.one})

    def gen(self, name: str) -> "Polynomial":
        """Return the variable called ``name``."""
        try:
            return self.gens[self._names.index(name)]
        except ValueError:
            raise UsageError(f"{self!r} has no variable named '{name}'.") from None

    def monomial(self, exponents: Sequence[int], coeff=1) -> "Polynomial":
        return Polynomial(self, {tuple(exponents): coeff})

    def extend(self, names: Sequence[str], front: bool = True, default_ordering: str = None) -> "PolynomialRing":
        """Return the ungraded ring with the variables ``names`` added.

        Parameters
        ----------
        names : sequence of str
            New variable names.
        front : bool, default True
            Prepend the new variables (as needed for elimination orderings)
            instead of appending them.
        """
        names = tuple(names)
        new_names = names + self._names if front else self._names + names
        return PolynomialRing(self._domain, new_names, default_ordering=default_ordering)

    def fresh_names(self, count: int, stem: str = "_t") -> List[str]:
        """Return ``count`` variable names not used by this ring."""
        out = []
        i = 0
        while len(out) < count:
            candidate = f"{stem}{i}"
            if candidate not in self._names:
                out.append(candidate)
            i += 1
        return out

    def from_sympy(self, expr) -> "Polynomial":
        try:
            poly = sp.Poly(expr, *self._symbols, domain=self._domain)
        except (PolynomialError, CoercionFailed) as exc:
            raise UsageError(f"Cannot convert {expr} into an element of {self}.") from exc
        convert = self._domain.from_sympy
        return Polynomial._new(self, {
            tuple(m): convert(c) for m, c in poly.terms() if c != 0
        })

    def from_symengine(self, expr) -> "Polynomial":
        return self.from_sympy(sp.sympify(expr))

    def __call__(self, value) -> "Polynomial":
        """Convert ``value`` into an element of this ring."""
        if isinstance(value, Polynomial):
            if value.ring != self:
                raise RingMismatchError(f"Polynomial over {value.ring} is not an element of {self}.")
            return value
        if isinstance(value, str):
            return self.from_sympy(sp.sympify(value, locals=self._locals))
        if isinstance(value, se.Basic):
            return self.from_symengine(value)
        if isinstance(value, sp.Basic):
            return self.from_sympy(value)
        return Polynomial(self, {self._zero_monomial: value})

    def __eq__(self, other):
        if not isinstance(other, PolynomialRing):
            return NotImplemented
        return (self._domain == other._domain and self._names == other._names
                and self._grading == other._grading)

    def __hash__(self):
        return hash((self._domain, self._names, self._grading))

    def __repr__(self):
        return f"PolynomialRing({self._domain}, {', '.join(self._names)})"

    def __str__(self):
        return f"{self._domain}[{', '.join(self._names)}]"


class Polynomial:
    """Immutable sparse polynomial.

    Parameters
    ----------
    ring : PolynomialRing
        Parent ring.
    coeffs : mapping of tuple of int to coefficient, optional
        Exponent tuple to coefficient. Coefficients are converted into the
        domain of ``ring`` and zero coefficients are dropped.
    """

    __slots__ = ("_ring", "_coeffs", "_hash")

    def __init__(self, ring: PolynomialRing, coeffs: Optional[Mapping[Monomial, object]] = None):
        convert = ring.domain.convert
        n = ring.ngens
        clean: Dict[Monomial, object] = {}
        for exps, c in (coeffs or {}).items():
            exps = tuple(int(e) for e in exps)
            if len(exps) != n:
                raise UsageError(f"Exponent tuple length {len(exps)} must match number of variables {n}.")
            if min(exps, default=0) < 0:
                raise UsageError(f"Negative exponent in {exps}.")
            try:
                c = convert(c)
            except CoercionFailed as exc:
                raise DomainError(f"Coefficient {c!r} is not an element of {ring.domain}.") from exc
            if c:
                clean[exps] = clean[exps] + c if exps in clean else c
        self._ring = ring
        self._coeffs = {m: c for m, c in clean.items() if c}
        self._hash = None

    @classmethod
    def _new(cls, ring: PolynomialRing, coeffs: Dict[Monomial, object]) -> "Polynomial":
        # Trusted constructor: coefficients are non-zero domain elements.
        obj = cls.__new__(cls)
        obj._ring = ring
        obj._coeffs = coeffs
        obj._hash = None
        return obj

    @property
    def ring(self) -> PolynomialRing:
        return self._ring

    @property
    def coeffs(self) -> Mapping[Monomial, object]:
        return MappingProxyType(self._coeffs)

    def monomials(self) -> List[Monomial]:
        return list(self._coeffs)

    def iter_terms(self) -> Iterator[Tuple[Monomial, object]]:
        """Yield (exponent_tuple, coefficient) pairs for each term."""
        yield from self._coeffs.items()

    def terms(self, ordering: MonomialOrdering = None) -> List[Tuple[Monomial, object]]:
        """Return the terms sorted from the largest monomial down."""
        ordering = ordering or self._ring.default_ordering
        return [(m, self._coeffs[m]) for m in ordering.sorted(self._coeffs)]

    def exponent_array(self) -> np.ndarray:
        return _exponent_array(self._coeffs, self._ring.ngens)

    def __len__(self):
        return len(self._coeffs)

    def __bool__(self):
        return bool(self._coeffs)

    @property
    def is_zero(self) -> bool:
        return not self._coeffs

    @property
    def is_constant(self) -> bool:
        return not self._coeffs or set(self._coeffs) == {self._ring._zero_monomial}

    @property
    def is_term(self) -> bool:
        return len(self._coeffs) == 1

    def constant_coefficient(self):
        return self._coeffs.get(self._ring._zero_monomial, self._ring.domain.zero)

    def total_degree(self) -> int:
        """Maximum total degree of a term, ``-1`` for the zero polynomial."""
        if not self._coeffs:
            return -1
        return max(sum(m) for m in self._coeffs)

    def degree(self, index: int) -> int:
        """Degree in the variable at position ``index``."""
        if not self._coeffs:
            return -1
        return max(m[index] for m in self._coeffs)

    def is_homogeneous(self) -> bool:
        return len({sum(m) for m in self._coeffs}) <= 1

    def leading_monomial(self, ordering: MonomialOrdering = None) -> Monomial:
        if not self._coeffs:
            raise UsageError("The zero polynomial has no leading monomial.")
        return (ordering or self._ring.default_ordering).max(self._coeffs)

    def leading_coefficient(self, ordering: MonomialOrdering = None):
        return self._coeffs[self.leading_monomial(ordering)]

    def leading_term(self, ordering: MonomialOrdering = None) -> "Polynomial":
        m = self.leading_monomial(ordering)
        return Polynomial._new(self._ring, {m: self._coeffs[m]})

    def ecart(self, ordering: MonomialOrdering = None) -> int:
        """Total degree minus the degree of the leading monomial."""
        return self.total_degree() - sum(self.leading_monomial(ordering))

    def monic(self, ordering: MonomialOrdering = None) -> "Polynomial":
        if not self._coeffs:
            return self
        lc = self.leading_coefficient(ordering)
        K = self._ring.domain
        if lc == K.one:
            return self
        return Polynomial._new(self._ring, {m: K.quo(c, lc) for m, c in self._coeffs.items()})

    def scale(self, c) -> "Polynomial":
        c = self._ring.domain.convert(c)
        if not c:
            return self._ring.zero
        return Polynomial._new(self._ring, {m: v * c for m, v in self._coeffs.items() if v * c})

    def mul_term(self, monomial: Monomial, coeff) -> "Polynomial":
        """Multiply by the single term ``coeff * x**monomial``."""
        if not coeff:
            return self._ring.zero
        out = {}
        for m, c in self._coeffs.items():
            v = c * coeff
            if v:
                out[monomial_mul(m, monomial)] = v
        return Polynomial._new(self._ring, out)

    def _coerce(self, other):
        if isinstance(other, Polynomial):
            if other._ring != self._ring:
                raise RingMismatchError(f"Cannot combine polynomials over {self._ring} and {other._ring}.")
            return other
        if isinstance(other, (int, sp.Rational)) or self._ring.domain.of_type(other):
            return self._ring(other if not isinstance(other, sp.Basic) else self._ring.domain.from_sympy(other))
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        out = dict(self._coeffs)
        for m, c in other._coeffs.items():
            s = out.get(m)
            if s is None:
                out[m] = c
                continue
            s = s + c
            if s:
                out[m] = s
            else:
                del out[m]
        return Polynomial._new(self._ring, out)

    __radd__ = __add__

    def __neg__(self):
        return Polynomial._new(self._ring, {m: -c for m, c in self._coeffs.items()})

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        out: Dict[Monomial, object] = {}
        for m1, c1 in self._coeffs.items():
            for m2, c2 in other._coeffs.items():
                m = monomial_mul(m1, m2)
                s = out.get(m)
                out[m] = c1 * c2 if s is None else s + c1 * c2
        return Polynomial._new(self._ring, {m: c for m, c in out.items() if c})

    __rmul__ = __mul__

    def __pow__(self, n: int):
        if not isinstance(n, (int, np.integer)) or n < 0:
            raise UsageError(f"Exponent must be a non-negative integer, got {n!r}.")
        result = self._ring.one
        base = self
        n = int(n)
        while n:
            if n & 1:
                result = result * base
            n >>= 1
            if n:
                base = base * base
        return result

    def divexact(self, other: "Polynomial") -> "Polynomial":
        """Exact quotient ``self / other``.

        Raises
        ------
        UsageError
            If ``other`` is zero or does not divide ``self``.
        """
        other = self._coerce(other)
        if not other:
            raise UsageError("Division by the zero polynomial.")
        ordering = make_ordering("degrevlex", self._ring.ngens)
        K = self._ring.domain
        lm = other.leading_monomial(ordering)
        lc = other._coeffs[lm]
        quotient: Dict[Monomial, object] = {}
        rest = self
        while rest:
            m = rest.leading_monomial(ordering)
            d = monomial_div(m, lm)
            if d is None:
                raise UsageError(f"{other} does not divide {self}.")
            c = K.quo(rest._coeffs[m], lc)
            quotient[d] = c
            rest = rest - other.mul_term(d, c)
        return Polynomial._new(self._ring, quotient)

    def substitute(self, images: Sequence["Polynomial"]) -> "Polynomial":
        """Evaluate at ``images``, one polynomial per variable, all over one ring."""
        if len(images) != self._ring.ngens:
            raise UsageError(f"Expected {self._ring.ngens} images, got {len(images)}.")
        if not images:
            return self
        target = images[0].ring
        powers: Dict[Tuple[int, int], Polynomial] = {}
        result = target.zero
        for m, c in self._coeffs.items():
            term = target(target.domain.convert_from(c, self._ring.domain))
            for i, e in enumerate(m):
                if e:
                    key = (i, e)
                    if key not in powers:
                        powers[key] = images[i] ** e
                    term = term * powers[key]
            result = result + term
        return result

    def embed(self, target: PolynomialRing, positions: Sequence[int]) -> "Polynomial":
        """Rename variables into ``target``: variable ``i`` becomes ``positions[i]``."""
        n = target.ngens
        out = {}
        for m, c in self._coeffs.items():
            new = [0] * n
            for i, e in enumerate(m):
                new[positions[i]] = e
            out[tuple(new)] = c
        return Polynomial._new(target, out)

    def to_sympy(self):
        K = self._ring.domain
        return sp.Add(*[
            K.to_sympy(c) * sp.Mul(*[s ** e for s, e in zip(self._ring.symbols, m) if e])
            for m, c in self._coeffs.items()
        ])

    def to_symengine(self):
        symbols = [se.Symbol(n) for n in self._ring.names]
        K = self._ring.domain
        expr = se.Integer(0)
        for m, c in self._coeffs.items():
            term = se.sympify(K.to_sympy(c))
            for s, e in zip(symbols, m):
                if e:
                    term = term * s ** e
            expr = expr + term
        return expr

    def __eq__(self, other):
        if isinstance(other, Polynomial):
            return self._ring == other._ring and self._coeffs == other._coeffs
        coerced = self._coerce(other)
        if coerced is NotImplemented:
            return NotImplemented
        return self._coeffs == coerced._coeffs

    def __hash__(self):
        if self._hash is None:
            self._hash = hash((self._ring, frozenset(self._coeffs.items())))
        return self._hash

    def __str__(self):
        if not self._coeffs:
            return "0"
        K = self._ring.domain
        parts = []
        for m, c in self.terms():
            var_str = "*".join(
                name if e == 1 else f"{name}**{e}"
                for name, e in zip(self._ring.names, m) if e
            )
            coeff_str = str(K.to_sympy(c))
            if not var_str:
                parts.append(coeff_str)
            elif coeff_str == "1":
                parts.append(var_str)
            elif coeff_str == "-1":
                parts.append(f"-{var_str}")
            else:
                if " " in coeff_str or "+" in coeff_str or "-" in coeff_str[1:]:
                    coeff_str = f"({coeff_str})"
                parts.append(f"{coeff_str}*{var_str}")
        return " + ".join(parts).replace(" + -", " - ")

    def __repr__(self):
        return f"Polynomial({self}, ring={self._ring!r})"
