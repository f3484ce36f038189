import pytest
from sympy.polys.domains import QQ

from hironaka.algorithms.ideals.decomposition import (is_prime,
                                                      minimal_primes,
                                                      primary_decomposition,
                                                      radical)
from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.orderings import degrevlex, neglex
from hironaka.algorithms.polynomial.polynomial import PolynomialRing
from hironaka.algorithms.utils.exceptions import (OrderingError,
                                                  RingMismatchError)


@pytest.fixture
def ring():
    return PolynomialRing(QQ, "x, y, z")


def _contains_ideal(ideals, expected):
    return any(I == expected for I in ideals)


def _assert_decomposition(actual, expected):
    assert len(actual) == len(expected)
    for Q, P in expected:
        assert any(Q == Q2 and P == P2 for Q2, P2 in actual)


def test_construction(ring):
    x, y, z = ring.gens
    I = Ideal(ring, [x, 0, x, "y**2"])
    assert I.gens == (x, y**2)
    assert Ideal(ring).is_zero()
    assert Ideal(ring, [2]).is_one()
    other = PolynomialRing(QQ, "a")
    with pytest.raises(RingMismatchError):
        Ideal(ring, [other.gens[0]])


def test_membership_and_equality(ring):
    x, y, z = ring.gens
    I = Ideal(ring, [x])
    assert x * y in I
    assert y not in I
    assert 0 in I
    assert Ideal(ring, [x, y]) == Ideal(ring, [x + y, x - y])
    assert Ideal(ring, [x**2]).is_subset(I)
    assert not I.is_subset(Ideal(ring, [x**2]))


def test_arithmetic(ring):
    x, y, z = ring.gens
    I = Ideal(ring, [x])
    J = Ideal(ring, [y])
    assert I + J == Ideal(ring, [x, y])
    assert I * J == Ideal(ring, [x * y])
    assert (I + J) ** 2 == Ideal(ring, [x**2, x * y, y**2])
    assert I ** 0 == Ideal(ring, [1])


def test_cached_bases(ring):
    x, y, z = ring.gens
    I = Ideal(ring, [x**2, x * y - y**2])
    G = I.groebner_basis()
    assert I.groebner_basis() is G
    assert I.cached_basis(degrevlex(ring)) is G
    with pytest.raises(OrderingError):
        I.groebner_basis(neglex(ring))
    S = I.standard_basis(neglex(ring))
    assert S.is_standard_basis_for(neglex(ring))


def test_eliminate():
    R = PolynomialRing(QQ, "t, x, y")
    t, x, y = R.gens
    E = Ideal(R, [t - x, t**2 - y]).eliminate(1)
    x2, y2 = E.ring.gens
    assert E.ring == PolynomialRing(QQ, "x, y")
    assert E == Ideal(E.ring, [x2**2 - y2])


def test_intersect(ring):
    x, y, z = ring.gens
    assert Ideal(ring, [x]).intersect(Ideal(ring, [y])) == Ideal(ring, [x * y])
    assert Ideal(ring, [x, y]).intersect(Ideal(ring, [y, z]), Ideal(ring, [z, x])) == \
        Ideal(ring, [x * y, y * z, z * x])
    assert Ideal(ring, [x]).intersect(Ideal(ring)).is_zero()


def test_quotient(ring):
    x, y, z = ring.gens
    assert Ideal(ring, [x * y]).quotient(Ideal(ring, [x])) == Ideal(ring, [y])
    assert Ideal(ring, [x**2, x * y]).quotient(x) == Ideal(ring, [x, y])
    assert Ideal(ring, [x]).quotient(ring.zero).is_one()


def test_saturation(ring):
    x, y, z = ring.gens
    assert Ideal(ring, [x**2 * y]).saturation(y) == Ideal(ring, [x**2])
    assert Ideal(ring, [x * y, x * z]).saturation(x).is_one()
    assert Ideal(ring, [x * y, x * z]).saturation(Ideal(ring, [y, z])) == Ideal(ring, [x])


def test_saturation_with_index():
    S = PolynomialRing(QQ, "x1, x2, e")
    x1, x2, e = S.gens
    J, k = Ideal(S, [x1 * e**2 + x2 * e**3]).saturation_with_index(e)
    assert J == Ideal(S, [x1 + x2 * e])
    assert k == 2
    J, k = Ideal(S, [x1]).saturation_with_index(Ideal(S, [e]))
    assert J == Ideal(S, [x1])
    assert k == 0


def test_map(ring):
    x, y, z = ring.gens
    assert Ideal(ring, [x * y]).map([x, x, z], ring) == Ideal(ring, [x**2])


def test_minimal_primes(ring):
    x, y, z = ring.gens
    primes = minimal_primes(Ideal(ring, [x * y]))
    assert len(primes) == 2
    assert _contains_ideal(primes, Ideal(ring, [x]))
    assert _contains_ideal(primes, Ideal(ring, [y]))
    assert minimal_primes(Ideal(ring, [x**2, x * y])) == [Ideal(ring, [x])]
    assert minimal_primes(Ideal(ring, [1])) == []


def test_radical_and_prime(ring):
    x, y, z = ring.gens
    assert radical(Ideal(ring, [x**2, x * y])) == Ideal(ring, [x])
    assert Ideal(ring, [x**3 * y**2]).radical() == Ideal(ring, [x * y])
    assert is_prime(Ideal(ring, [x, y - 1]))
    assert not is_prime(Ideal(ring, [x * y]))
    assert not Ideal(ring, [x**2]).is_prime()


def test_primary_decomposition_principal(ring):
    x, y, z = ring.gens
    _assert_decomposition(
        primary_decomposition(Ideal(ring, [x**2 * y])),
        [(Ideal(ring, [x**2]), Ideal(ring, [x])), (Ideal(ring, [y]), Ideal(ring, [y]))],
    )


def test_primary_decomposition_monomial(ring):
    x, y, z = ring.gens
    _assert_decomposition(
        Ideal(ring, [x**2, x * y]).primary_decomposition(),
        [(Ideal(ring, [x]), Ideal(ring, [x])), (Ideal(ring, [x**2, y]), Ideal(ring, [x, y]))],
    )


def test_primary_decomposition_general(ring):
    x, y, z = ring.gens
    I = Ideal(ring, [x * (y - 1), y * (y - 1)])
    _assert_decomposition(
        primary_decomposition(I),
        [(Ideal(ring, [y - 1]), Ideal(ring, [y - 1])), (Ideal(ring, [x, y]), Ideal(ring, [x, y]))],
    )


def test_primary_decomposition_trivial(ring):
    assert primary_decomposition(Ideal(ring, [1])) == []
    [(Q, P)] = primary_decomposition(Ideal(ring))
    assert Q.is_zero() and P.is_zero()
