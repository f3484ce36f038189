from .chart import Chart, RingMap
from .components import (associated_points, match_on_intersections,
                         minimal_associated_points, primary_decomposition)
from .covering import (Covering, Glueing, ProjectiveSpace, RationalFunction,
                       affine_space, projective_space)
from .sheaf import IdealSheaf, extend, pushforward, smooth_lci_covering

__all__ = [
    "Chart",
    "RingMap",
    "Covering",
    "Glueing",
    "ProjectiveSpace",
    "RationalFunction",
    "affine_space",
    "projective_space",
    "IdealSheaf",
    "extend",
    "pushforward",
    "smooth_lci_covering",
    "associated_points",
    "match_on_intersections",
    "minimal_associated_points",
    "primary_decomposition",
]
