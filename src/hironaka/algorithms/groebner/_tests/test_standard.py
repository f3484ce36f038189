import pytest
from sympy.polys.domains import GF, QQ, RR

from hironaka.algorithms.groebner.gens import IdealGens
from hironaka.algorithms.groebner.reduce import reduce
from hironaka.algorithms.groebner.standard import (groebner_basis,
                                                   spolynomial,
                                                   standard_basis)
from hironaka.algorithms.groebner.verify import (is_groebner_basis,
                                                 is_standard_basis)
from hironaka.algorithms.polynomial.orderings import (degrevlex, lex,
                                                      negdeglex, negdegrevlex,
                                                      neglex)
from hironaka.algorithms.polynomial.polynomial import PolynomialRing
from hironaka.algorithms.utils.exceptions import (DomainError, OrderingError,
                                                  UsageError)


def _assert_same_elements(actual, expected):
    assert len(actual) == len(expected)
    for g in expected:
        assert g in list(actual)


def test_groebner_basis_finite_field():
    R = PolynomialRing(GF(11), "x, y")
    x, y = R.gens
    ordering = degrevlex(R)
    G = groebner_basis([x**2, x * y - y**2], ordering)
    _assert_same_elements(G, [x**2, x * y - y**2, y**3])
    assert G.is_standard_basis_for(ordering)
    assert reduce(y**3, G, ordering) == 0


def test_groebner_basis_sorted_and_monic():
    R = PolynomialRing(QQ, "x, y, z")
    x, y, z = R.gens
    ordering = lex(R)
    G = groebner_basis([2 * x - y, y**2 - 3 * z], ordering)
    for g in G:
        assert g.leading_coefficient(ordering) == 1
    leads = [g.leading_monomial(ordering) for g in G]
    assert leads == ordering.sorted(leads, reverse=False)


def test_groebner_basis_local_rejected():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    with pytest.raises(OrderingError):
        groebner_basis([x], neglex(R))


def test_standard_basis_idempotent():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    ordering = degrevlex(R)
    G = standard_basis([x**3 - y, x * y**2 - x], ordering)
    H = standard_basis(list(G), ordering)
    _assert_same_elements(H, list(G))


def test_standard_basis_local():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    ordering = neglex(R)
    F = [x**2 + y, x * y - y]
    assert not is_standard_basis(F, ordering)
    G = standard_basis(F, ordering)
    assert G.is_standard_basis_for(ordering)
    assert is_standard_basis(IdealGens(R, list(G)), ordering)


def test_standard_basis_contains_generators_locally():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    ordering = negdegrevlex(R)
    F = [x**2 - y**3, x * y + x**3]
    G = standard_basis(F, ordering)
    for f in F:
        assert reduce(f, G, ordering) == 0


def test_spolynomial():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    ordering = degrevlex(R)
    assert spolynomial(x**2, x * y - y**2, ordering) == x * y**2
    assert spolynomial(2 * x, x + y, ordering) == -y


def test_is_standard_basis_cached():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    ordering = degrevlex(R)
    F = IdealGens(R, [x, y])
    assert is_standard_basis(F, ordering)
    assert F.is_standard_basis_for(ordering)
    assert not F.is_standard_basis_for(lex(R))
    F.append(x + y**2)
    assert not F.is_standard_basis_for(ordering)
    F[2] = x
    assert F.cached_ordering is None


def test_is_groebner_basis():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    assert not is_groebner_basis([x**2, x * y - y**2], degrevlex(R))
    assert is_groebner_basis([x**2, x * y - y**2, y**3], degrevlex(R))
    with pytest.raises(OrderingError):
        is_groebner_basis([x], neglex(R))


def test_is_standard_basis_inexact():
    R = PolynomialRing(RR, "x")
    x, = R.gens
    with pytest.raises(DomainError):
        is_standard_basis([x])


@pytest.mark.parametrize("make_ordering", [negdeglex, negdegrevlex, neglex])
def test_standard_basis_local_unit(make_ordering):
    R = PolynomialRing(QQ, "x, y, z")
    x, y, z = R.gens
    ordering = make_ordering(R)
    F = [x**2 * z**2 + 3 * y - 3, -x * y**2 * z - x * y + 2 * y * z]
    G = standard_basis(F, ordering)
    assert list(G) == [R.one]
    assert is_standard_basis(F, ordering)


def test_standard_basis_unit_ideal_global():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    G = groebner_basis([x * y - 1, x], degrevlex(R))
    assert list(G) == [R.one]


def test_empty_generators():
    R = PolynomialRing(QQ, "x, y")
    with pytest.raises(UsageError):
        standard_basis([], degrevlex(R))
    with pytest.raises(UsageError):
        is_groebner_basis([])
    with pytest.raises(UsageError):
        is_standard_basis([])
    assert len(standard_basis([], degrevlex(R), ring=R)) == 0
