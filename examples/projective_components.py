"""Example script: irreducible components of a reducible plane curve.

python examples/projective_components.py
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from hironaka import IdealSheaf, projective_space
from hironaka.schemes import minimal_associated_points
from hironaka.utils.log_config import logger


def main() -> None:
    """Split the union of a line and a conic in the projective plane."""
    P2 = projective_space(2, names=["x", "y", "z"])
    x, y, z = P2.homogeneous_ring.gens
    curve = IdealSheaf.from_projective(P2, [x * (x * y - z**2)])

    for k, comp in enumerate(minimal_associated_points(curve)):
        logger.info("Component %d:\n%s", k, comp.show_details())


if __name__ == "__main__":
    main()
