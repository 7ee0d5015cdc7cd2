# MIT License (see LICENSE)
"""
SO(2): planar rotations as 2×2 orthogonal matrices with determinant 1.

The group operation is the matrix product, the inverse is the transpose,
and the exponential/logarithm maps convert between an angle and a matrix:

    exp(θ) = [[cos θ, -sin θ],
              [sin θ,  cos θ]]
    log(R) = atan2(R[1, 0], R[0, 0])

Composition uses the ``@`` operator:
    Rotation @ Rotation  -> Rotation   (group product)
    Rotation @ Transform -> Transform  (rotates rotation block and translation)
    Rotation @ vector    -> Vec2       (R v)
"""
from __future__ import annotations

import numpy as np

from ..errors import InvalidArgument
from ..types import Vec2
from ..util import approx_equal, f64


def is_rotation_matrix(R) -> bool:
    """True if R is 2×2 with det(R) ≈ 1 and RᵗR ≈ I."""
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (2, 2):
        return False
    return approx_equal(np.linalg.det(R), 1.0) and approx_equal(R.T @ R, np.eye(2))


def exp_so2(theta: float) -> np.ndarray:
    """
    Exponential map: angle [rad] -> 2×2 rotation matrix.

    Raises:
        InvalidArgument: If theta is not a scalar.
    """
    if np.ndim(theta) != 0:
        raise InvalidArgument(f"theta must be a scalar angle, got shape {np.shape(theta)}")
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=np.float64)


def log_so2(R: Rotation | np.ndarray) -> float:
    """
    Logarithm map: rotation -> angle in (-π, π].

    Group membership is re-validated first, since a Rotation's matrix can be
    reached (and mutated) through numpy views.

    Raises:
        InvalidArgument: If the matrix is not a member of SO(2).
    """
    M = R.matrix if isinstance(R, Rotation) else np.asarray(R, dtype=np.float64)
    if not is_rotation_matrix(M):
        raise InvalidArgument("R must be a valid member of SO(2)")
    return float(np.arctan2(M[1, 0], M[0, 0]))


class Rotation:
    """
    An element of SO(2).

    Construct from an angle with ``Rotation(theta)`` (always valid), or from
    a raw matrix with ``Rotation.from_matrix(R)`` (validated). A 2-D array
    passed to ``Rotation(...)`` takes the validated path as well.

    Attributes:
        matrix: The 2×2 float64 rotation matrix.
    """

    __slots__ = ("matrix",)

    def __init__(self, theta: float = 0.0) -> None:
        if np.ndim(theta) == 2:
            self.matrix = Rotation.from_matrix(theta).matrix
        else:
            self.matrix = exp_so2(theta)

    @classmethod
    def from_matrix(cls, R) -> Rotation:
        """
        Wrap an existing 2×2 matrix.

        Raises:
            InvalidArgument: If R is not 2×2, det(R) ≉ 1 or RᵗR ≉ I.
        """
        R = f64(R)
        if not is_rotation_matrix(R):
            raise InvalidArgument("R must be a valid member of SO(2)")
        return cls._wrap(R)

    @classmethod
    def identity(cls) -> Rotation:
        return cls(0.0)

    @classmethod
    def _wrap(cls, R: np.ndarray) -> Rotation:
        # Internal constructor for products of valid rotations.
        rot = cls.__new__(cls)
        rot.matrix = R
        return rot

    # ------------------------------------------------------------------
    # Group operations
    # ------------------------------------------------------------------

    def compose(self, other: Rotation) -> Rotation:
        """Group product self ∘ other."""
        return Rotation._wrap(self.matrix @ other.matrix)

    def inverse(self) -> Rotation:
        """Inverse rotation (the transpose)."""
        return Rotation._wrap(self.matrix.T.copy())

    def apply(self, v) -> Vec2:
        """Rotate a 2D vector: R v."""
        x, y = self.matrix @ f64(v)
        return Vec2(float(x), float(y))

    def log(self) -> float:
        return log_so2(self)

    @property
    def angle(self) -> float:
        """Orientation angle in (-π, π]."""
        return log_so2(self)

    def __matmul__(self, other):
        if isinstance(other, Rotation):
            return self.compose(other)
        # Local import: transforms depends on this module.
        from .transforms import Transform
        if isinstance(other, Transform):
            return other.rotated_by(self)
        return self.apply(other)

    def __getitem__(self, idx):
        return self.matrix[idx]

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self.matrix, dtype=dtype or np.float64)

    def isapprox(self, other: Rotation) -> bool:
        """Approximate equality of the underlying matrices."""
        return approx_equal(self.matrix, other.matrix)

    def __repr__(self) -> str:
        return f"Rotation(theta={np.arctan2(self.matrix[1, 0], self.matrix[0, 0])})"
