# MIT License (see LICENSE)
"""
Plain value types for planar kinematics.

Defines the numeric records exchanged between the geometry layer and the
kinematic tree:
- Vec2: a 2D vector (x, y).
- Configuration: minimal pose (θ, x, y), θ in radians, never normalized.
- Velocity: (ω, x, y) angular + linear velocity.
- Acceleration: (α, x, y) angular + linear acceleration.
- Wrench: (τ, x, y) torque + force.

Configuration, Velocity, Acceleration and Wrench share a shape but are
independent types; none is a subtype of another. All are immutable and
convert to float64 numpy arrays through ``np.asarray`` / ``to_array()``.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .errors import InvalidArgument


class _Record:
    """Sequence/numpy interop shared by the fixed-size value records."""

    __slots__ = ()
    _fields: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[float]:
        return (getattr(self, name) for name in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, i: int) -> float:
        return getattr(self, self._fields[i])

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(tuple(self), dtype=dtype or np.float64)

    def to_array(self) -> np.ndarray:
        """Return the record as a float64 array in field order."""
        return np.array(tuple(self), dtype=np.float64)

    @classmethod
    def from_array(cls, values):
        """Build the record from any length-matching sequence of numbers."""
        values = [float(v) for v in values]
        if len(values) != len(cls._fields):
            raise InvalidArgument(
                f"{cls.__name__} needs {len(cls._fields)} values, got {len(values)}"
            )
        return cls(*values)


@dataclass(frozen=True)
class Vec2(_Record):
    """
    A 2-dimensional vector.

    Attributes:
        x: x-coordinate.
        y: y-coordinate.
    """
    x: float = 0.0
    y: float = 0.0

    _fields = ("x", "y")

    def __add__(self, other) -> Vec2:
        ox, oy = other
        return Vec2(self.x + ox, self.y + oy)

    def __sub__(self, other) -> Vec2:
        ox, oy = other
        return Vec2(self.x - ox, self.y - oy)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, k: float) -> Vec2:
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def dot(self, other) -> float:
        ox, oy = other
        return self.x * ox + self.y * oy

    def norm(self) -> float:
        return math.hypot(self.x, self.y)


X_HAT = Vec2(1.0, 0.0)
Y_HAT = Vec2(0.0, 1.0)


@dataclass(frozen=True)
class Configuration(_Record):
    """
    Minimal pose of a frame in the plane.

    Attributes:
        theta: Orientation angle [rad], counterclockwise from +x. Any real
               value is valid; callers must not assume it lies in (-π, π].
        x: x-coordinate of the frame origin [m].
        y: y-coordinate of the frame origin [m].
    """
    theta: float = 0.0
    x: float = 0.0
    y: float = 0.0

    _fields = ("theta", "x", "y")

    @property
    def orientation(self) -> float:
        return self.theta

    @property
    def position(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class Velocity(_Record):
    """
    Planar twist: angular velocity ω [rad/s] and linear velocity (x, y) [m/s].
    """
    omega: float = 0.0
    x: float = 0.0
    y: float = 0.0

    _fields = ("omega", "x", "y")

    @property
    def angular(self) -> float:
        return self.omega

    @property
    def linear(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class Acceleration(_Record):
    """
    Angular acceleration α [rad/s²] and linear acceleration (x, y) [m/s²].
    """
    alpha: float = 0.0
    x: float = 0.0
    y: float = 0.0

    _fields = ("alpha", "x", "y")

    @property
    def angular(self) -> float:
        return self.alpha

    @property
    def linear(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class Wrench(_Record):
    """
    Planar wrench: torque τ [N·m] and force (x, y) [N].
    """
    tau: float = 0.0
    x: float = 0.0
    y: float = 0.0

    _fields = ("tau", "x", "y")

    def __add__(self, other: Wrench) -> Wrench:
        return Wrench(self.tau + other.tau, self.x + other.x, self.y + other.y)

    @property
    def torque(self) -> float:
        return self.tau

    @property
    def force(self) -> Vec2:
        return Vec2(self.x, self.y)
