# MIT License (see LICENSE)
"""
Planar shape primitives and their mass properties.

Every shape provides:
    - area():            enclosed area [m²]
    - centroid():        area centroid in shape-local coordinates
    - inertia(density):  polar moment of inertia about the centroid for a
                         uniform areal density [kg/m²]
    - vertices():        outline in shape-local coordinates, CCW

Formulas for solid planar shapes (m = ρ A):
    Circle:  A = π r²,  I = ½ m r²
    Box:     A = w h,   I = m (w² + h²) / 12
    Polygon: shoelace area/centroid, second moment about the centroid.

Reference: https://en.wikipedia.org/wiki/List_of_moments_of_inertia
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..constants import CIRCLE_VERTEX_STEP
from ..errors import InvalidArgument
from ..types import Vec2, X_HAT
from ..util import approx_equal
from .rotations import Rotation


def _check_density(density: float) -> None:
    if density <= 0:
        raise InvalidArgument(f"Density must be positive, got {density}")


@dataclass(frozen=True)
class Circle:
    """
    Circle centred on the body origin.

    Attributes:
        radius: Radius in meters (> 0).
    """
    radius: float

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise InvalidArgument(f"Radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))

    def area(self) -> float:
        return float(np.pi * self.radius ** 2)

    def centroid(self) -> Vec2:
        return Vec2(0.0, 0.0)

    def inertia(self, density: float) -> float:
        _check_density(density)
        m = density * self.area()
        return 0.5 * m * self.radius ** 2

    def vertices(self, step: float = CIRCLE_VERTEX_STEP) -> list[Vec2]:
        """Polygonal approximation, CCW starting on the +x axis."""
        angles = np.arange(0.0, 2 * np.pi - step / 2, step)
        return [Rotation(phi).apply(self.radius * X_HAT) for phi in angles]


@dataclass(frozen=True)
class Box:
    """
    Rectangle centred on the body origin.

    Attributes:
        width: Extent along the local x-axis (> 0).
        height: Extent along the local y-axis (> 0).
    """
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise InvalidArgument(f"Width must be positive, got {self.width}")
        if self.height <= 0:
            raise InvalidArgument(f"Height must be positive, got {self.height}")
        object.__setattr__(self, "width", float(self.width))
        object.__setattr__(self, "height", float(self.height))

    @classmethod
    def square(cls, size: float) -> Box:
        return cls(size, size)

    def area(self) -> float:
        return self.width * self.height

    def centroid(self) -> Vec2:
        return Vec2(0.0, 0.0)

    def inertia(self, density: float) -> float:
        _check_density(density)
        m = density * self.area()
        return (m / 12) * (self.width ** 2 + self.height ** 2)

    def vertices(self) -> list[Vec2]:
        """Four corners, CCW starting bottom-left."""
        hw, hh = self.width / 2, self.height / 2
        return [Vec2(-hw, -hh), Vec2(hw, -hh), Vec2(hw, hh), Vec2(-hw, hh)]


@dataclass(frozen=True, eq=False)
class Polygon:
    """
    Convex polygon given by its vertices in counter-clockwise order.

    Centroid and inertia are only meaningful for convex input; convexity is
    not checked.

    Attributes:
        points: Array [N, 2] of local-frame vertices, N >= 3.
    """
    points: np.ndarray

    def __post_init__(self) -> None:
        try:
            rows = [tuple(p) for p in self.points]
        except TypeError:
            raise InvalidArgument("Polygon vertices must be given as an [N, 2] array of points") from None
        if any(len(r) != 2 for r in rows):
            raise InvalidArgument("Polygon vertices must be 2D points")
        pts = np.array(rows, dtype=np.float64).reshape(-1, 2)
        if len(pts) < 3:
            raise InvalidArgument("Polygon must have at least 3 vertices")
        if approx_equal(self._cross_terms(pts).sum(), 0.0):
            raise InvalidArgument("Polygon has zero area (collinear or repeated vertices)")
        object.__setattr__(self, "points", pts)

    def _cross_terms(self, pts: np.ndarray) -> np.ndarray:
        nxt = np.roll(pts, -1, axis=0)
        return pts[:, 0] * nxt[:, 1] - nxt[:, 0] * pts[:, 1]

    def area(self) -> float:
        """Shoelace area; positive regardless of winding."""
        return float(abs(self._cross_terms(self.points).sum()) / 2)

    def centroid(self) -> Vec2:
        pts = self.points
        nxt = np.roll(pts, -1, axis=0)
        cross = self._cross_terms(pts)
        # signed area keeps the centroid correct for either winding
        a6 = 3.0 * cross.sum()
        cx = float(((pts[:, 0] + nxt[:, 0]) * cross).sum() / a6)
        cy = float(((pts[:, 1] + nxt[:, 1]) * cross).sum() / a6)
        return Vec2(cx, cy)

    def inertia(self, density: float) -> float:
        """Polar moment about the centroid: ρ |Σ cᵢ (xᵢ²+xᵢxⱼ+xⱼ²+yᵢ²+yᵢyⱼ+yⱼ²)| / 12."""
        _check_density(density)
        pts = self.points - np.asarray(self.centroid())
        nxt = np.roll(pts, -1, axis=0)
        cross = self._cross_terms(pts)
        term = (
            pts[:, 0] ** 2 + pts[:, 0] * nxt[:, 0] + nxt[:, 0] ** 2
            + pts[:, 1] ** 2 + pts[:, 1] * nxt[:, 1] + nxt[:, 1] ** 2
        )
        return float(density * abs((cross * term).sum()) / 12)

    def vertices(self) -> list[Vec2]:
        return [Vec2(float(x), float(y)) for x, y in self.points]


# Union type for shape dispatch
Shape = Circle | Box | Polygon
