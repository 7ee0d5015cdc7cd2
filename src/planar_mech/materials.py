# MIT License (see LICENSE)
"""
Material properties for rigid bodies.

In 2D the density is an areal density, so a body's mass is
``shape.area() * material.density``. Restitution and friction are carried
for downstream consumers; the kinematics core only reads the density.
"""
from __future__ import annotations
from dataclasses import dataclass

from .errors import InvalidArgument


@dataclass(frozen=True)
class Material:
    """
    Physical properties of a body material.

    Attributes:
        density: Mass per unit area ρ [kg/m²]. Must be positive.
        restitution: Coefficient of restitution (0 = inelastic, 1 = elastic).
        static_friction: Static friction coefficient μₛ.
        kinetic_friction: Kinetic friction coefficient μₖ.
        color: Display color name for presentation layers.
    """
    density: float = 7850.0
    restitution: float = 0.6
    static_friction: float = 0.7
    kinetic_friction: float = 0.5
    color: str = "black"

    def __post_init__(self) -> None:
        if self.density <= 0:
            raise InvalidArgument(f"Density must be positive, got {self.density}")


WOOD = Material(600.0, 0.4, 0.5, 0.3, "brown")
STEEL = Material(7850.0, 0.6, 0.7, 0.5, "gray")
RUBBER = Material(1100.0, 0.8, 0.9, 0.7, "magenta")
ICE = Material(920.0, 0.05, 0.05, 0.03, "lightblue")
