from .orderings import (MonomialOrdering, deglex, degrevlex,
                        elimination_ordering, lex, make_ordering, negdeglex,
                        negdegrevlex, neglex)
from .polynomial import Polynomial, PolynomialRing

__all__ = [
    "Polynomial",
    "PolynomialRing",
    "MonomialOrdering",
    "make_ordering",
    "lex",
    "deglex",
    "degrevlex",
    "neglex",
    "negdeglex",
    "negdegrevlex",
    "elimination_ordering",
]
