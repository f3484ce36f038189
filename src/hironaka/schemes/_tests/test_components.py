import pytest

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.utils.exceptions import ConsistencyError
from hironaka.schemes.components import (_assign, associated_points,
                                         match_on_intersections,
                                         minimal_associated_points,
                                         primary_decomposition)
from hironaka.schemes.covering import affine_space, projective_space
from hironaka.schemes.sheaf import IdealSheaf


@pytest.fixture
def p2():
    return projective_space(2, names=["x", "y", "z"])


def _contains_sheaf(sheaves, expected):
    return any(s == expected for s in sheaves)


def test_minimal_associated_points_of_two_lines(p2):
    x, y, z = p2.homogeneous_ring.gens
    sheaf = IdealSheaf.from_projective(p2, [x * y])
    comps = minimal_associated_points(sheaf)
    assert len(comps) == 2
    assert _contains_sheaf(comps, IdealSheaf.from_projective(p2, [x]))
    assert _contains_sheaf(comps, IdealSheaf.from_projective(p2, [y]))
    assert all(c.is_prime() for c in comps)


def test_associated_points_affine():
    plane = affine_space(2)
    x1, x2 = plane[0].ring.gens
    sheaf = IdealSheaf(plane, {0: Ideal(plane[0].ring, [x1**2, x1 * x2])})
    points = associated_points(sheaf)
    assert len(points) == 2
    assert _contains_sheaf(points, IdealSheaf(plane, {0: Ideal(plane[0].ring, [x1])}))
    assert _contains_sheaf(points, IdealSheaf(plane, {0: Ideal(plane[0].ring, [x1, x2])}))
    assert len(minimal_associated_points(sheaf)) == 1


def test_unit_sheaf_has_no_components(p2):
    one = IdealSheaf.from_projective(p2, [p2.homogeneous_ring.one])
    assert minimal_associated_points(one) == []
    assert primary_decomposition(one) == []


def test_match_on_intersections(p2):
    x_1, z_1 = p2[1].ring.gens
    y0, z0 = p2[0].ring.gens
    x2, y2 = p2[2].ring.gens
    records = [{2: Ideal(p2[2].ring, [x2])}, {2: Ideal(p2[2].ring, [y2])}]
    assert match_on_intersections(p2, 1, Ideal(p2[1].ring, [x_1]), records) == [0]
    assert match_on_intersections(p2, 0, Ideal(p2[0].ring, [y0]), records) == [1]


def test_match_on_intersections_contradiction(p2):
    x_1, z_1 = p2[1].ring.gens
    y0, z0 = p2[0].ring.gens
    x2, y2 = p2[2].ring.gens
    record = {1: Ideal(p2[1].ring, [x_1]), 0: Ideal(p2[0].ring, [y0])}
    comp = Ideal(p2[2].ring, [x2])
    with pytest.raises(ConsistencyError):
        match_on_intersections(p2, 2, comp, [record])
    assert match_on_intersections(p2, 2, comp, [record], check=False) == []


def test_assign_merges_records():
    plane = affine_space(1)
    R = plane[0].ring
    a, b, c, d = (Ideal(R, [R.gens[0] - k]) for k in range(4))
    records = [{0: a}, {1: b}, {2: c}]
    merged = _assign(records, 3, d, [0, 2])
    assert len(merged) == 2
    assert merged[0] == {1: b}
    assert set(merged[1]) == {0, 2, 3}
    assert _assign([], 0, a, []) == [{0: a}]


def test_primary_decomposition_on_projective_plane(p2):
    x, y, z = p2.homogeneous_ring.gens
    sheaf = IdealSheaf.from_projective(p2, [x**2 * y])
    pairs = primary_decomposition(sheaf)
    assert len(pairs) == 2
    expected = [
        (IdealSheaf.from_projective(p2, [x**2]), IdealSheaf.from_projective(p2, [x])),
        (IdealSheaf.from_projective(p2, [y]), IdealSheaf.from_projective(p2, [y])),
    ]
    for Q, P in expected:
        assert any(Q == Q2 and P == P2 for Q2, P2 in pairs)
