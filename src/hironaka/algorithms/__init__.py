""" Public API for the :mod:`~hironaka.algorithms` package.
"""

from .groebner import (DivisionEngine, IdealGens, NormalFormStrategy,
                       groebner_basis, is_groebner_basis, is_standard_basis,
                       normal_form, reduce, reduce_with_quotients,
                       reduce_with_quotients_and_unit,
                       select_normal_form_strategy, standard_basis)
from .ideals import Ideal
from .polynomial import (MonomialOrdering, Polynomial, PolynomialRing,
                         deglex, degrevlex, elimination_ordering, lex,
                         negdeglex, negdegrevlex, neglex)

__all__ = [
    "DivisionEngine",
    "IdealGens",
    "NormalFormStrategy",
    "groebner_basis",
    "is_groebner_basis",
    "is_standard_basis",
    "normal_form",
    "reduce",
    "reduce_with_quotients",
    "reduce_with_quotients_and_unit",
    "select_normal_form_strategy",
    "standard_basis",
    "Ideal",
    "MonomialOrdering",
    "Polynomial",
    "PolynomialRing",
    "deglex",
    "degrevlex",
    "elimination_ordering",
    "lex",
    "negdeglex",
    "negdegrevlex",
    "neglex",
]
