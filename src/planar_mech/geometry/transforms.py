# MIT License (see LICENSE)
"""
SE(2): planar rigid transforms as 3×3 homogeneous matrices.

A transform T = (R, t) is stored as

    [[R00, R01, tx],
     [R10, R11, ty],
     [  0,   0,  1]]

Group operations:
    T1 ∘ T2   = (R1 R2, R1 t2 + t1)
    T⁻¹       = (Rᵗ, -Rᵗ t)
    T(v)      = R v + t

Mixed compositions are distinct operations, not one commutative product:
    T ∘ R  multiplies the rotation block only; translation is unchanged.
    R ∘ T  rotates both the rotation block and the translation vector.

With the ``@`` operator:
    Transform @ Transform -> Transform
    Transform @ Rotation  -> Transform (T ∘ R)
    Rotation  @ Transform -> Transform (R ∘ T)
    Transform @ vector    -> Vec2      (R v + t)
"""
from __future__ import annotations

import numpy as np

from ..errors import InvalidArgument
from ..types import Configuration, Vec2
from ..util import approx_equal, eye, f64
from .rotations import Rotation, exp_so2, is_rotation_matrix, log_so2


def is_transform_matrix(T) -> bool:
    """True if T is 3×3, its 2×2 block is in SO(2) and its bottom row is (0, 0, 1)."""
    T = np.asarray(T, dtype=np.float64)
    if T.shape != (3, 3):
        return False
    return is_rotation_matrix(T[:2, :2]) and approx_equal(T[2], (0.0, 0.0, 1.0))


def exp_se2(theta: float, r) -> np.ndarray:
    """
    Build the homogeneous matrix for rotation angle theta and translation r.

    Raises:
        InvalidArgument: If r is not a 2-dimensional vector.
    """
    r = f64(r).reshape(-1)
    if r.shape != (2,):
        raise InvalidArgument("r must be a 2-dimensional vector")
    T = eye(3)
    T[:2, :2] = exp_so2(theta)
    T[:2, 2] = r
    return T


def log_se2(T: Transform) -> tuple[float, Vec2]:
    """Decompose a transform into (angle, translation)."""
    return log_so2(T.matrix[:2, :2]), T.translation()


class Transform:
    """
    An element of SE(2).

    ``Transform(theta, translation)`` uses the exponential map directly and is
    always valid. ``from_matrix`` validates raw input, and a 2-D array passed
    as ``theta`` is routed there too; ``from_rotation`` and
    ``from_configuration`` cover the remaining constructors.

    Attributes:
        matrix: The 3×3 float64 homogeneous matrix.
    """

    __slots__ = ("matrix",)

    def __init__(self, theta: float = 0.0, translation=(0.0, 0.0)) -> None:
        if np.ndim(theta) == 2:
            if np.any(f64(translation) != 0.0):
                raise InvalidArgument("translation cannot be combined with a raw matrix")
            self.matrix = Transform.from_matrix(theta).matrix
        else:
            self.matrix = exp_se2(theta, translation)

    @classmethod
    def from_matrix(cls, T) -> Transform:
        """
        Wrap an existing 3×3 homogeneous matrix.

        Raises:
            InvalidArgument: If T is not a valid member of SE(2).
        """
        T = f64(T)
        if not is_transform_matrix(T):
            raise InvalidArgument("T must be a valid member of SE(2)")
        return cls._wrap(T)

    @classmethod
    def from_rotation(cls, R: Rotation, translation=(0.0, 0.0)) -> Transform:
        """
        Build from a Rotation and a translation vector.

        Raises:
            InvalidArgument: If R's matrix is no longer in SO(2) or the
                translation is not 2-dimensional.
        """
        if not is_rotation_matrix(R.matrix):
            raise InvalidArgument("R must be a valid member of SO(2)")
        t = f64(translation).reshape(-1)
        if t.shape != (2,):
            raise InvalidArgument("r must be a 2-dimensional vector")
        T = eye(3)
        T[:2, :2] = R.matrix
        T[:2, 2] = t
        return cls._wrap(T)

    @classmethod
    def from_configuration(cls, q: Configuration) -> Transform:
        """The transform whose pose is q = (θ, x, y)."""
        theta, x, y = q
        return cls(theta, (x, y))

    @classmethod
    def identity(cls) -> Transform:
        return cls._wrap(eye(3))

    @classmethod
    def _wrap(cls, T: np.ndarray) -> Transform:
        tf = cls.__new__(cls)
        tf.matrix = T
        return tf

    # ------------------------------------------------------------------
    # Group operations
    # ------------------------------------------------------------------

    def compose(self, other: Transform) -> Transform:
        """Group product self ∘ other (homogeneous matrix product)."""
        return Transform._wrap(self.matrix @ other.matrix)

    def compose_rotation(self, R: Rotation) -> Transform:
        """T ∘ R: rotation block becomes R_T R, translation is unchanged."""
        T = self.matrix.copy()
        T[:2, :2] = self.matrix[:2, :2] @ R.matrix
        return Transform._wrap(T)

    def rotated_by(self, R: Rotation) -> Transform:
        """R ∘ T: rotation block becomes R R_T, translation becomes R t."""
        T = eye(3)
        T[:2, :2] = R.matrix @ self.matrix[:2, :2]
        T[:2, 2] = R.matrix @ self.matrix[:2, 2]
        return Transform._wrap(T)

    def inverse(self) -> Transform:
        """Analytic inverse (Rᵗ, -Rᵗ t)."""
        Rt = self.matrix[:2, :2].T
        T = eye(3)
        T[:2, :2] = Rt
        T[:2, 2] = -Rt @ self.matrix[:2, 2]
        return Transform._wrap(T)

    def apply(self, v) -> Vec2:
        """Map a point: R v + t."""
        x, y = self.matrix[:2, :2] @ f64(v) + self.matrix[:2, 2]
        return Vec2(float(x), float(y))

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def rotation(self) -> Rotation:
        """The rotation block, validated as a member of SO(2)."""
        return Rotation.from_matrix(self.matrix[:2, :2])

    def translation(self) -> Vec2:
        return Vec2(float(self.matrix[0, 2]), float(self.matrix[1, 2]))

    def orientation(self) -> float:
        return log_so2(self.matrix[:2, :2])

    def configuration(self) -> Configuration:
        """Minimal (θ, x, y) pose; inverse of ``from_configuration`` up to 2π."""
        return Configuration(self.orientation(), float(self.matrix[0, 2]), float(self.matrix[1, 2]))

    def log(self) -> tuple[float, Vec2]:
        return log_se2(self)

    def __matmul__(self, other):
        if isinstance(other, Transform):
            return self.compose(other)
        if isinstance(other, Rotation):
            return self.compose_rotation(other)
        return self.apply(other)

    def __getitem__(self, idx):
        return self.matrix[idx]

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self.matrix, dtype=dtype or np.float64)

    def isapprox(self, other: Transform) -> bool:
        """Approximate equality of the underlying matrices."""
        return approx_equal(self.matrix, other.matrix)

    def __repr__(self) -> str:
        theta = float(np.arctan2(self.matrix[1, 0], self.matrix[0, 0]))
        return f"Transform(theta={theta}, translation=({self.matrix[0, 2]}, {self.matrix[1, 2]}))"
