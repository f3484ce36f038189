import numpy as np
import pytest
import symengine as se
import sympy as sp
from sympy.polys.domains import GF, QQ

from hironaka.algorithms.polynomial.base import (_ceil_weighted_degrees,
                                                 _exponent_array,
                                                 _first_divisor)
from hironaka.algorithms.polynomial.orderings import (deglex, degrevlex,
                                                      elimination_ordering,
                                                      lex, make_ordering,
                                                      negdeglex, negdegrevlex,
                                                      neglex)
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import (OrderingError,
                                                  RingMismatchError,
                                                  UsageError)


@pytest.fixture
def ring():
    return PolynomialRing(QQ, "x, y, z")


def test_ring_basics(ring):
    x, y, z = ring.gens
    assert ring.ngens == 3
    assert ring.names == ("x", "y", "z")
    assert ring.is_exact
    assert ring.characteristic == 0
    assert not ring.is_graded
    assert ring.default_ordering == degrevlex(ring)
    assert ring.gen("y") == y
    assert PolynomialRing(QQ, ["x", "y", "z"]) == ring
    with pytest.raises(UsageError):
        PolynomialRing(QQ, "x, x")


def test_arithmetic(ring):
    x, y, z = ring.gens
    assert (x + y) ** 2 == x**2 + 2 * x * y + y**2
    assert (x - x).is_zero
    assert 1 - x == -(x - 1)
    assert (x * y - 3) * 2 == 2 * x * y - 6
    assert (x + 1) ** 0 == ring.one
    assert ring.zero * x == 0


def test_coefficient_domain_reduction():
    R = PolynomialRing(GF(7), "x")
    x, = R.gens
    assert not (7 * x)
    assert (3 * x) * 5 == x
    assert R.characteristic == 7


def test_conversion_from_strings_and_expressions(ring):
    x, y, z = ring.gens
    assert ring("x**2*y - 3*x + 1") == x**2 * y - 3 * x + 1
    sx, sy = sp.symbols("x y")
    assert ring(sx**2 + sy) == x**2 + y
    assert ring.from_symengine(se.Symbol("z") ** 2 + 1) == z**2 + 1
    assert (x + 2 * y).to_sympy() == sx + 2 * sy
    assert ring.from_symengine((x * y - z).to_symengine()) == x * y - z
    with pytest.raises(UsageError):
        ring("w + 1")


def test_str(ring):
    x, y, z = ring.gens
    assert str(x**2 * y - 3 * x + 1) == "x**2*y - 3*x + 1"
    assert str(ring.zero) == "0"


def test_ring_mismatch(ring):
    other = PolynomialRing(QQ, "a, b")
    with pytest.raises(RingMismatchError):
        ring.gens[0] + other.gens[0]
    with pytest.raises(RingMismatchError):
        ring(other.gens[0])


def test_divexact(ring):
    x, y, z = ring.gens
    assert (x**2 - y**2).divexact(x - y) == x + y
    assert (6 * x * z).divexact(3 * z) == 2 * x
    with pytest.raises(UsageError):
        x.divexact(y)
    with pytest.raises(UsageError):
        x.divexact(ring.zero)


def test_substitute_and_embed(ring):
    x, y, z = ring.gens
    f = x**2 + y * z
    assert f.substitute([y, x, ring.one]) == y**2 + x
    big = PolynomialRing(QQ, "t, x, y, z")
    t, X, Y, Z = big.gens
    assert f.embed(big, [1, 2, 3]) == X**2 + Y * Z


def test_degrees(ring):
    x, y, z = ring.gens
    f = x**3 * y + z
    assert f.total_degree() == 4
    assert f.degree(0) == 3
    assert ring.zero.total_degree() == -1
    assert (x**2 + y * z).is_homogeneous()
    assert not f.is_homogeneous()


def test_global_orderings(ring):
    x, y, z = ring.gens
    f = x * z + y**2
    assert f.leading_monomial(degrevlex(ring)) == (0, 2, 0)
    assert f.leading_monomial(deglex(ring)) == (1, 0, 1)
    assert (x + y**5).leading_monomial(lex(ring)) == (1, 0, 0)
    assert degrevlex(ring).is_global and lex(ring).is_global


def test_local_orderings(ring):
    x, y, z = ring.gens
    f = 1 + x
    for ordering in (neglex(ring), negdeglex(ring), negdegrevlex(ring)):
        assert ordering.is_local
        assert f.leading_monomial(ordering) == (0, 0, 0)
    assert (x + y).leading_monomial(neglex(ring)) == (0, 1, 0)
    assert (x + x**2 + y**3).ecart(negdegrevlex(ring)) == 2


def test_elimination_ordering():
    R = PolynomialRing(QQ, "t, x, y")
    t, x, y = R.gens
    ordering = elimination_ordering(R, 1)
    assert ordering.is_global
    assert (t + x**5 * y**5).leading_monomial(ordering) == (1, 0, 0)
    with pytest.raises(OrderingError):
        elimination_ordering(R, 3)
    with pytest.raises(OrderingError):
        make_ordering("random", 3)


def test_monic_and_terms(ring):
    x, y, z = ring.gens
    f = 2 * x**2 + 4 * y
    assert f.monic() == x**2 + 2 * y
    assert [m for m, _ in f.terms()] == [(2, 0, 0), (0, 1, 0)]
    assert f.leading_term() == 2 * x**2


def test_divisor_kernels():
    leads = np.array([[2, 0], [1, 1]], dtype=np.int64)
    mono = np.array([1, 2], dtype=np.int64)
    assert _first_divisor(leads, mono) == 1
    assert _first_divisor(leads, np.array([0, 3], dtype=np.int64)) == -1


def test_ceil_weighted_degrees():
    exps = _exponent_array([(1, 0), (0, 1), (1, 1)], 2)
    out = _ceil_weighted_degrees(exps, np.array([1, 3], dtype=np.int64), 2)
    assert list(out) == [1, 2, 2]
    neg = _ceil_weighted_degrees(_exponent_array([(1, 0)], 2), np.array([-1, 0], dtype=np.int64), 2)
    assert list(neg) == [0]
    assert _exponent_array([], 3).shape == (0, 3)


def test_polynomial_validation(ring):
    with pytest.raises(UsageError):
        Polynomial(ring, {(1, 0): 1})
    p = Polynomial(ring, {(1, 0, 0): 0, (0, 1, 0): 2})
    assert p == 2 * ring.gens[1]
