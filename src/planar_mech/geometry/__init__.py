# MIT License (see LICENSE)
"""
Planar geometry: Lie-group transforms and shape primitives.

This subpackage provides:
    - Rotation (SO(2)) with exp/log maps and validation.
    - Transform (SE(2)) homogeneous transforms with composition, inverse,
      point application and decomposition back to a Configuration.
    - Circle, Box, Polygon shapes with area, centroid, inertia and vertices.

Typical usage:
    from planar_mech.geometry import Rotation, Transform

    T = Transform(np.pi / 2, (1.0, 0.0))
    p = T @ Vec2(1.0, 0.0)          # -> Vec2(1.0, 1.0)
    q = (T @ T.inverse()).configuration()
"""
from .rotations import Rotation, exp_so2, log_so2, is_rotation_matrix
from .transforms import Transform, exp_se2, log_se2, is_transform_matrix
from .shapes import Circle, Box, Polygon, Shape

__all__ = [
    # SO(2)
    "Rotation",
    "exp_so2",
    "log_so2",
    "is_rotation_matrix",
    # SE(2)
    "Transform",
    "exp_se2",
    "log_se2",
    "is_transform_matrix",
    # Shapes
    "Circle",
    "Box",
    "Polygon",
    "Shape",
]
