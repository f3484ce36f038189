"""
hironaka.toric.blowup
=====================

Total and strict transforms of ideals under toric blowups.

A blowup ``f: Y -> X`` is the star subdivision of the fan of ``X`` along a
ray with primitive generator ``v``. Only what the transforms need is kept:
the Cox ring of ``X``, the minimal supercone coordinates ``p`` of ``v``, and
a few properties of the fan of ``X``. The Cox ring of ``Y`` is the Cox ring
of ``X`` with the exceptional variable ``e`` appended.
"""

from __future__ import annotations

from functools import reduce as _fold
from math import gcd
from typing import Sequence, Tuple, Union

import numpy as np
import sympy as sp
from sympy.polys.domains import QQ

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.base import _ceil_weighted_degrees
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.core import _HironakaBase
from hironaka.algorithms.utils.exceptions import (RingMismatchError,
                                                  UsageError)
from hironaka.utils.log_config import logger


def minimal_supercone_coordinates(rays: Sequence[Sequence[int]], cones: Sequence[Sequence[int]],
                                  v: Sequence[int]) -> Tuple:
    """Coordinates of ``v`` in the rays of a simplicial cone containing it.

    Parameters
    ----------
    rays : sequence of sequence of int
        Ray generators of the fan.
    cones : sequence of sequence of int
        Maximal cones as lists of ray indices.
    v : sequence of int
        Vector in the support of the fan.

    Returns
    -------
    tuple
        One ``QQ`` element per ray, zero for rays outside the cone used.

    Raises
    ------
    UsageError
        If no simplicial cone contains ``v``.
    """
    target = sp.Matrix(list(v))
    for cone in cones:
        A = sp.Matrix([list(rays[i]) for i in cone]).T
        if A.rank() < len(cone):
            continue
        try:
            solution, params = A.gauss_jordan_solve(target)
        except ValueError:
            continue
        if params.shape[0] or any(c < 0 for c in solution):
            continue
        coords = [sp.Integer(0)] * len(rays)
        for k, i in enumerate(cone):
            coords[i] = solution[k]
        return tuple(QQ.from_sympy(c) for c in coords)
    raise UsageError(f"{list(v)} is not in the support of a simplicial cone of the fan.")


class ToricBlowupMorphism(_HironakaBase):
    """Star subdivision of a toric variety along a ray.

    Parameters
    ----------
    codomain_ring : PolynomialRing
        Cox ring of the variety ``X`` being blown up.
    coordinates : sequence
        Minimal supercone coordinates of the new ray, one per variable of
        ``codomain_ring`` (anything ``sympy.Rational`` accepts).
    has_torusfactor : bool, default False
        Whether the rays of ``X`` fail to span the lattice.
    is_orbifold : bool, default True
        Whether the fan of ``X`` is simplicial.
    is_smooth : bool, default True
        Whether ``X`` is smooth.
    exceptional_name : str, default "e"
        Name of the exceptional variable.
    existing_ray : int, optional
        Index of the ray of ``X`` equal to the new ray. The subdivision is
        then trivial and both Cox rings coincide.
    """

    def __init__(self, codomain_ring: PolynomialRing, coordinates: Sequence, has_torusfactor: bool = False,
                 is_orbifold: bool = True, is_smooth: bool = True, exceptional_name: str = "e",
                 existing_ray: int = None):
        super().__init__()
        if len(coordinates) != codomain_ring.ngens:
            raise UsageError(f"Expected {codomain_ring.ngens} coordinates, got {len(coordinates)}.")
        self._codomain_ring = codomain_ring
        self._coordinates = tuple(QQ.from_sympy(sp.Rational(c)) for c in coordinates)
        self.has_torusfactor = has_torusfactor
        self.is_orbifold = is_orbifold
        self.is_smooth = is_smooth
        if existing_ray is None:
            if exceptional_name in codomain_ring.names:
                raise UsageError(f"Exceptional variable name '{exceptional_name}' is already in use.")
            self._domain_ring = codomain_ring.extend([exceptional_name], front=False)
            self._exceptional_index = codomain_ring.ngens
        else:
            self._domain_ring = codomain_ring
            self._exceptional_index = int(existing_ray)

    @property
    def codomain_ring(self) -> PolynomialRing:
        return self._codomain_ring

    @property
    def domain_ring(self) -> PolynomialRing:
        return self._domain_ring

    @property
    def index_of_exceptional_ray(self) -> int:
        return self._exceptional_index

    @property
    def exceptional_variable(self) -> Polynomial:
        return self._domain_ring.gens[self._exceptional_index]

    def minimal_supercone_coordinates_of_exceptional_ray(self) -> Tuple:
        coords = self.cache_get("supercone_coordinates")
        if coords is None:
            coords = self.cache_set("supercone_coordinates", self._coordinates)
        return coords

    def _integral_weights(self) -> Tuple[np.ndarray, int]:
        """Numerators over a common denominator of the supercone coordinates."""
        weights = self.cache_get("integral_weights")
        if weights is None:
            coords = self.minimal_supercone_coordinates_of_exceptional_ray()
            den = _fold(lambda a, b: a * b // gcd(a, b), (int(c.denominator) for c in coords), 1)
            nums = np.array([int(c.numerator) * (den // int(c.denominator)) for c in coords], dtype=np.int64)
            weights = self.cache_set("integral_weights", (nums, den))
        return weights

    def __repr__(self):
        return f"ToricBlowupMorphism({self._domain_ring} -> {self._codomain_ring})"


def cox_ring_module_homomorphism(f: ToricBlowupMorphism, g: Union[Polynomial, Ideal]):
    """Send every monomial ``x^a`` to ``x^a * e^ceil(a . p)``.

    The map is additive and termwise but not multiplicative. Ideals are sent
    to the ideal generated by the images of their generators.
    """
    S = f.domain_ring
    if isinstance(g, Ideal):
        return Ideal(S, [cox_ring_module_homomorphism(f, h) for h in g.gens])
    R = f.codomain_ring
    if g.ring != R:
        raise RingMismatchError("g must be an element of the Cox ring of the codomain of f")
    if R.ngens == S.ngens:
        return g.substitute(S.gens)
    nums, den = f._integral_weights()
    terms = list(g.iter_terms())
    exps = g.exponent_array()
    extra = _ceil_weighted_degrees(exps, nums, den)
    return Polynomial._new(S, {m + (int(k),): c for (m, c), k in zip(terms, extra)})


def _require_no_torusfactor(f: ToricBlowupMorphism) -> None:
    if f.has_torusfactor:
        raise UsageError("Only implemented when there are no torus factors")


def total_transform(f: ToricBlowupMorphism, I: Ideal) -> Ideal:
    """Ideal of the scheme-theoretic preimage in the Cox ring of the blowup."""
    _require_no_torusfactor(f)
    if not f.is_orbifold:
        raise UsageError("Only implemented when the fan is simplicial")
    return cox_ring_module_homomorphism(f, I)


def strict_transform(f: ToricBlowupMorphism, I: Ideal) -> Ideal:
    """Total transform saturated by the exceptional variable."""
    _require_no_torusfactor(f)
    J = cox_ring_module_homomorphism(f, I)
    return J.saturation(f.exceptional_variable)


def strict_transform_with_index(f: ToricBlowupMorphism, I: Ideal) -> Tuple[Ideal, int]:
    """Strict transform and the multiplicity of the total transform along ``e``."""
    _require_no_torusfactor(f)
    if not f.is_smooth:
        raise UsageError("Only implemented when the fan is smooth")
    J = total_transform(f, I)
    strict, k = J.saturation_with_index(Ideal(f.domain_ring, [f.exceptional_variable]))
    logger.debug("Strict transform has index %d", k)
    return strict, k


def blow_up_affine_space(n: int, ray: Sequence[int], domain=QQ, names: Sequence[str] = None,
                         exceptional_name: str = "e") -> ToricBlowupMorphism:
    """Blowup of affine ``n``-space along the ray through ``ray``.

    ``ray`` must be a non-zero vector of the positive orthant; it is replaced
    by its primitive generator.
    """
    ray = [int(r) for r in ray]
    if len(ray) != n or any(r < 0 for r in ray) or not any(ray):
        raise UsageError(f"Ray {ray} is not a non-zero vector of the positive orthant of dimension {n}.")
    common = _fold(gcd, ray, 0)
    ray = [r // common for r in ray]
    names = names or [f"x{i + 1}" for i in range(n)]
    R = PolynomialRing(domain, names)
    rays = [[int(i == k) for i in range(n)] for k in range(n)]
    coords = minimal_supercone_coordinates(rays, [list(range(n))], ray)
    existing = rays.index(ray) if ray in rays else None
    return ToricBlowupMorphism(R, [QQ.to_sympy(c) for c in coords], exceptional_name=exceptional_name,
                               existing_ray=existing)
