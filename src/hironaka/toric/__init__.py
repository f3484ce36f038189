from .blowup import (ToricBlowupMorphism, blow_up_affine_space,
                     cox_ring_module_homomorphism,
                     minimal_supercone_coordinates, strict_transform,
                     strict_transform_with_index, total_transform)

__all__ = [
    "ToricBlowupMorphism",
    "blow_up_affine_space",
    "cox_ring_module_homomorphism",
    "minimal_supercone_coordinates",
    "strict_transform",
    "strict_transform_with_index",
    "total_transform",
]
