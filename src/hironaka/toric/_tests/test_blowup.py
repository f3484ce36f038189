import pytest
from sympy.polys.domains import QQ

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.polynomial import PolynomialRing
from hironaka.algorithms.utils.exceptions import (RingMismatchError,
                                                  UsageError)
from hironaka.toric.blowup import (ToricBlowupMorphism, blow_up_affine_space,
                                   cox_ring_module_homomorphism,
                                   minimal_supercone_coordinates,
                                   strict_transform,
                                   strict_transform_with_index,
                                   total_transform)

P2_RAYS = [[1, 0], [0, 1], [-1, -1]]
P2_CONES = [[0, 1], [1, 2], [2, 0]]


@pytest.fixture
def blowup():
    return blow_up_affine_space(2, [2, 3])


def test_rings(blowup):
    assert blowup.codomain_ring.names == ("x1", "x2")
    assert blowup.domain_ring.names == ("x1", "x2", "e")
    assert blowup.index_of_exceptional_ray == 2
    assert blowup.exceptional_variable == blowup.domain_ring.gen("e")


def test_supercone_coordinates(blowup):
    coords = blowup.minimal_supercone_coordinates_of_exceptional_ray()
    assert coords == (QQ(2), QQ(3))
    assert blowup.minimal_supercone_coordinates_of_exceptional_ray() is coords


def test_minimal_supercone_coordinates_of_fan():
    assert minimal_supercone_coordinates(P2_RAYS, P2_CONES, [1, 1]) == (QQ(1), QQ(1), QQ(0))
    assert minimal_supercone_coordinates(P2_RAYS, P2_CONES, [-1, 0]) == (QQ(0), QQ(1), QQ(1))
    with pytest.raises(UsageError):
        minimal_supercone_coordinates([[1, 0], [0, 1]], [[0, 1]], [-1, 0])


def test_module_homomorphism(blowup):
    x1, x2 = blowup.codomain_ring.gens
    X1, X2, e = blowup.domain_ring.gens
    image = cox_ring_module_homomorphism(blowup, x1 + x2)
    assert image == X1 * e**2 + X2 * e**3
    assert cox_ring_module_homomorphism(blowup, x1 * x2 - 1) == X1 * X2 * e**5 - 1
    with pytest.raises(RingMismatchError):
        cox_ring_module_homomorphism(blowup, e)


def test_rational_coordinates():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    f = ToricBlowupMorphism(R, ["1/2", "1/3"])
    X, Y, e = f.domain_ring.gens
    assert cox_ring_module_homomorphism(f, x**2 + y + x * y) == X**2 * e + Y * e + X * Y * e
    assert cox_ring_module_homomorphism(f, x**3 * y**3) == X**3 * Y**3 * e**3


def test_transforms(blowup):
    x1, x2 = blowup.codomain_ring.gens
    X1, X2, e = blowup.domain_ring.gens
    I = Ideal(blowup.codomain_ring, [x1 + x2])
    assert total_transform(blowup, I) == Ideal(blowup.domain_ring, [X1 * e**2 + X2 * e**3])
    assert strict_transform(blowup, I) == Ideal(blowup.domain_ring, [X1 + X2 * e])
    J, k = strict_transform_with_index(blowup, I)
    assert J == Ideal(blowup.domain_ring, [X1 + X2 * e])
    assert k == 2


def test_existing_ray():
    f = blow_up_affine_space(2, [1, 0])
    x1, x2 = f.codomain_ring.gens
    assert f.domain_ring == f.codomain_ring
    assert f.exceptional_variable == x1
    assert cox_ring_module_homomorphism(f, x1 * x2 + 1) == x1 * x2 + 1


def test_preconditions():
    R = PolynomialRing(QQ, "x, y")
    x, y = R.gens
    I = Ideal(R, [x + y])
    torus = ToricBlowupMorphism(R, [1, 1], has_torusfactor=True)
    for transform in (total_transform, strict_transform, strict_transform_with_index):
        with pytest.raises(UsageError):
            transform(torus, I)
    with pytest.raises(UsageError):
        total_transform(ToricBlowupMorphism(R, [1, 1], is_orbifold=False), I)
    singular = ToricBlowupMorphism(R, [1, 1], is_smooth=False)
    with pytest.raises(UsageError):
        strict_transform_with_index(singular, I)
    X, Y, e = singular.domain_ring.gens
    assert strict_transform(singular, I) == Ideal(singular.domain_ring, [X + Y])


def test_invalid_construction():
    R = PolynomialRing(QQ, "x, e")
    with pytest.raises(UsageError):
        ToricBlowupMorphism(R, [1])
    with pytest.raises(UsageError):
        ToricBlowupMorphism(R, [1, 1])
    with pytest.raises(UsageError):
        blow_up_affine_space(2, [-1, 1])
