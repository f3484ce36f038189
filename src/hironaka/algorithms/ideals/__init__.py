from .decomposition import (is_prime, minimal_primes, primary_decomposition,
                            radical)
from .ideal import Ideal

__all__ = [
    "Ideal",
    "is_prime",
    "minimal_primes",
    "primary_decomposition",
    "radical",
]
