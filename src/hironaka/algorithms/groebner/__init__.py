from .division import DivisionEngine
from .gens import IdealGens
from .reduce import (NormalFormStrategy, normal_form, reduce,
                     reduce_with_quotients, reduce_with_quotients_and_unit,
                     select_normal_form_strategy)
from .standard import groebner_basis, spolynomial, standard_basis
from .verify import is_groebner_basis, is_standard_basis

__all__ = [
    "DivisionEngine",
    "IdealGens",
    "NormalFormStrategy",
    "normal_form",
    "reduce",
    "reduce_with_quotients",
    "reduce_with_quotients_and_unit",
    "select_normal_form_strategy",
    "groebner_basis",
    "standard_basis",
    "spolynomial",
    "is_groebner_basis",
    "is_standard_basis",
]
