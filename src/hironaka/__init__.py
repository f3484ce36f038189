"""Polynomial division, standard bases and ideal sheaves.

The :mod:`hironaka.algorithms` package holds the polynomial kernel, the
division and standard basis engines and ideals; :mod:`hironaka.schemes`
builds charts, coverings and ideal sheaves on top of them and
:mod:`hironaka.toric` computes transforms under toric blowups.
"""

from .algorithms import (DivisionEngine, Ideal, IdealGens, MonomialOrdering,
                         NormalFormStrategy, Polynomial, PolynomialRing,
                         deglex, degrevlex, elimination_ordering,
                         groebner_basis, is_groebner_basis, is_standard_basis,
                         lex, negdeglex, negdegrevlex, neglex, normal_form,
                         reduce, reduce_with_quotients,
                         reduce_with_quotients_and_unit,
                         select_normal_form_strategy, standard_basis)
from .schemes import (Chart, Covering, Glueing, IdealSheaf, ProjectiveSpace,
                      RationalFunction, RingMap, affine_space,
                      projective_space)
from .toric import (ToricBlowupMorphism, blow_up_affine_space,
                    cox_ring_module_homomorphism, strict_transform,
                    strict_transform_with_index, total_transform)

__all__ = [
    "DivisionEngine",
    "Ideal",
    "IdealGens",
    "MonomialOrdering",
    "NormalFormStrategy",
    "Polynomial",
    "PolynomialRing",
    "deglex",
    "degrevlex",
    "elimination_ordering",
    "groebner_basis",
    "is_groebner_basis",
    "is_standard_basis",
    "lex",
    "negdeglex",
    "negdegrevlex",
    "neglex",
    "normal_form",
    "reduce",
    "reduce_with_quotients",
    "reduce_with_quotients_and_unit",
    "select_normal_form_strategy",
    "standard_basis",
    "Chart",
    "Covering",
    "Glueing",
    "IdealSheaf",
    "ProjectiveSpace",
    "RationalFunction",
    "RingMap",
    "affine_space",
    "projective_space",
    "ToricBlowupMorphism",
    "blow_up_affine_space",
    "cox_ring_module_homomorphism",
    "strict_transform",
    "strict_transform_with_index",
    "total_transform",
]
