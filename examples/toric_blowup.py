"""Example script: strict transform of a plane curve under a weighted blowup.

python examples/toric_blowup.py
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from hironaka import Ideal, blow_up_affine_space, strict_transform_with_index
from hironaka.utils.log_config import logger


def main() -> None:
    """Blow up the cusp ``x1^3 - x2^2`` along the ray (2, 3)."""
    f = blow_up_affine_space(2, [2, 3])
    x1, x2 = f.codomain_ring.gens
    cusp = Ideal(f.codomain_ring, [x1**3 - x2**2])

    strict, index = strict_transform_with_index(f, cusp)
    logger.info("Strict transform: %s", strict)
    logger.info("Multiplicity along the exceptional divisor: %d", index)


if __name__ == "__main__":
    main()
