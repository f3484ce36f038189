import pytest
from sympy.polys.domains import QQ

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.polynomial import PolynomialRing
from hironaka.algorithms.utils.exceptions import (MapDomainError,
                                                  RingMismatchError,
                                                  UsageError)
from hironaka.schemes.chart import Chart, RingMap
from hironaka.schemes.covering import (Covering, Glueing, RationalFunction,
                                       affine_space, projective_space)


@pytest.fixture
def p1():
    return projective_space(1, names=["x", "y"])


@pytest.fixture
def p2():
    return projective_space(2, names=["x", "y", "z"])


def test_projective_charts(p2):
    assert len(p2) == 3
    assert [c.name for c in p2] == ["U0", "U1", "U2"]
    assert p2[0].ring.names == ("y_0", "z_0")
    assert p2[2].ring.names == ("x_2", "y_2")
    assert p2.neighbor_patches(0) == [1, 2]
    assert p2.glueing_graph() == {0: {1, 2}, 1: {0, 2}, 2: {0, 1}}
    assert p2.homogeneous_ring.is_graded


def test_ring_map_with_denominators(p1):
    y0, = p1[0].ring.gens
    x1, = p1[1].ring.gens
    to_first = p1.glueing(0, 1).to_first
    assert to_first.domain == p1[1].ring
    num, den = to_first(x1**2 + 1)
    assert num == 1 + y0**2
    assert den == y0**2
    with pytest.raises(MapDomainError):
        to_first(y0)
    with pytest.raises(MapDomainError):
        to_first.pullback(Ideal(p1[0].ring, [y0]))


def test_ring_map_identity():
    R = PolynomialRing(QQ, "a, b")
    a, b = R.gens
    ident = RingMap.identity(R)
    assert ident(a * b + 1) == (a * b + 1, R.one)
    with pytest.raises(UsageError):
        RingMap(R, R, [a])


def test_glueing_domains(p2):
    f, g = p2.glueing_domains(0, 1)
    assert f == p2[0].ring.gen("y_0")
    assert g == p2[1].ring.gen("x_1")
    f, g = p2.glueing_domains(1, 0)
    assert f == p2[1].ring.gen("x_1")
    first, second = p2.glueing_morphisms(0, 1)
    assert first.codomain == p2[0].ring and second.codomain == p2[1].ring


def test_identity_glueing(p2):
    g = p2.glueing(1, 1)
    assert g.first_domain == 1
    with pytest.raises(UsageError):
        p2.glueing(0, 5)


def test_dehomogenize(p2):
    x, y, z = p2.homogeneous_ring.gens
    y0, z0 = p2[0].ring.gens
    assert p2.dehomogenize(0, x * y - z**2) == y0 - z0**2
    with pytest.raises(RingMismatchError):
        p2.dehomogenize(0, y0)


def test_restrict_and_transport(p2):
    y0, z0 = p2[0].ring.gens
    x2, y2 = p2[2].ring.gens
    line = Ideal(p2[0].ring, [y0])
    assert p2.transport(2, 0, line) == Ideal(p2[2].ring, [y2])
    assert p2.transport(1, 0, line).is_one()
    assert p2.restrict(0, 1, line).is_one()
    assert p2.closure(2, 0, line) == Ideal(p2[2].ring, [y2])


def test_glueing_ring_mismatch():
    R = PolynomialRing(QQ, "a")
    S = PolynomialRing(QQ, "b")
    a, = R.gens
    b, = S.gens
    phi = RingMap(S, R, [a])
    psi = RingMap(R, S, [b])
    cov = Covering([Chart(R), Chart(S)])
    cov.add_glueing(Glueing(0, 1, a, b, phi, psi))
    assert cov.has_glueing(1, 0)
    with pytest.raises(RingMismatchError):
        Glueing(0, 1, a, b, psi, phi)


def test_rational_function(p1):
    y0, = p1[0].ring.gens
    x1, = p1[1].ring.gens
    f = RationalFunction(p1, 1, x1, x1 + 1)
    num, den = f.on(0)
    assert num == y0
    assert den == y0 * (1 + y0)
    with pytest.raises(UsageError):
        RationalFunction(p1, 1, x1, 0)


def test_affine_space():
    A = affine_space(3)
    assert len(A) == 1
    assert A[0].ring.names == ("x1", "x2", "x3")
    assert A.neighbor_patches(0) == []


def test_subscheme(p2):
    ideals = {i: p2[i].ideal([p2.dehomogenize(i, p2.homogeneous_ring.gens[0])]) for i in p2.indices}
    sub = p2.subscheme(ideals)
    assert sub.ambient is p2
    assert len(sub) == 3
    assert sub[2].modulus == Ideal(p2[2].ring, [p2[2].ring.gen("x_2")])
    assert sub.neighbor_patches(1) == [0, 2]
