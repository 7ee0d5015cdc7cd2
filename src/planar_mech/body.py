# MIT License (see LICENSE)
"""
Rigid bodies: the nodes of a kinematic tree.

A body carries its shape and material, the mass properties derived from
them, and the mutable state written by forward kinematics:

    m = ρ · A(shape)          mass, fixed at construction
    I = inertia(shape, ρ)     moment of inertia about the centroid
    q = (θ, x, y)             world configuration
    q̇ = (ω, ẋ, ẏ)             velocity
    F = (τ, Fx, Fy)           accumulated external wrench

Topology is stored by id only: ``parent`` is the id of the parent body (or
None for a root) and ``children`` lists child ids in joint-registration
order. Both are written exclusively by ``World.add_joint``.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .constants import STANDARD_GRAVITY
from .errors import InvalidArgument
from .geometry.shapes import Shape
from .geometry.transforms import Transform
from .materials import Material
from .types import Configuration, Velocity, Vec2, Wrench
from .util import f64


@dataclass(eq=False)
class RigidBody:
    """
    A planar rigid body.

    Attributes:
        id: Unique identifier within the owning Mechanism / World.
        shape: Geometry (Circle, Box or Polygon).
        material: Material providing the areal density.
        configuration: World pose (θ, x, y). Authoritative for root bodies;
                       overwritten by forward kinematics for all others.
        velocity: Body velocity (ω, ẋ, ẏ).
        wrench: Accumulated external wrench (τ, Fx, Fy). Nothing in the
                kinematics core consumes it; it is stored for callers.
        parent: Parent body id, or None for a root (read-only for users).
        children: Child body ids in registration order (read-only for users).
    """
    id: str
    shape: Shape
    material: Material = field(default_factory=Material)
    configuration: Configuration = field(default_factory=Configuration)
    velocity: Velocity = field(default_factory=Velocity)
    wrench: Wrench = field(default_factory=Wrench)

    parent: str | None = field(default=None, init=False)
    children: list[str] = field(default_factory=list, init=False)

    _mass: float = field(default=0.0, init=False, repr=False)
    _inertia: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        """Derive mass and inertia once from shape and material."""
        self._mass = self.shape.area() * self.material.density
        self._inertia = self.shape.inertia(self.material.density)

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def inertia(self) -> float:
        """Moment of inertia about the centroid [kg·m²]."""
        return self._inertia

    @property
    def is_root(self) -> bool:
        return self.parent is None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    def get_configuration(self) -> Configuration:
        return self.configuration

    def get_velocity(self) -> Velocity:
        return self.velocity

    def set_configuration(self, q: Configuration) -> None:
        self.configuration = q if isinstance(q, Configuration) else Configuration.from_array(q)

    def set_velocity(self, qd: Velocity) -> None:
        self.velocity = qd if isinstance(qd, Velocity) else Velocity.from_array(qd)

    def get_state_vector(self) -> np.ndarray:
        """State x = [θ, x, y, ω, ẋ, ẏ]."""
        return np.concatenate([self.configuration.to_array(), self.velocity.to_array()])

    def set_state(self, x) -> None:
        """
        Set configuration and velocity from x = [θ, x, y, ω, ẋ, ẏ].

        Raises:
            InvalidArgument: If x does not have exactly 6 entries.
        """
        x = f64(x).reshape(-1)
        if x.shape != (6,):
            raise InvalidArgument(f"x must be a 6-dimensional vector, got {x.size} entries")
        self.configuration = Configuration.from_array(x[:3])
        self.velocity = Velocity.from_array(x[3:])

    # ------------------------------------------------------------------
    # Dynamics quantities (read-only)
    # ------------------------------------------------------------------

    def get_mass_matrix(self) -> np.ndarray:
        """Diagonal M = diag(I, m, m), ordered like (θ, x, y)."""
        return np.diag([self._inertia, self._mass, self._mass])

    def get_generalized_forces_vector(self) -> np.ndarray:
        """The accumulated wrench as [τ, Fx, Fy]."""
        return self.wrench.to_array()

    def apply_wrench(self, w: Wrench) -> None:
        """Add w to the accumulated wrench."""
        self.wrench = self.wrench + (w if isinstance(w, Wrench) else Wrench.from_array(w))

    def clear_wrench(self) -> None:
        self.wrench = Wrench()

    def kinetic_energy(self) -> float:
        """T = ½ m |v|² + ½ I ω²."""
        v = self.velocity.linear
        omega = self.velocity.angular
        return 0.5 * self._mass * v.dot(v) + 0.5 * self._inertia * omega * omega

    def potential_energy(self, g: float = STANDARD_GRAVITY) -> float:
        """V = m g y, with y the world height of the body origin."""
        return self._mass * g * self.configuration.y

    def energy(self, g: float = STANDARD_GRAVITY) -> float:
        """Total mechanical energy T + V."""
        return self.kinetic_energy() + self.potential_energy(g)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def transform(self) -> Transform:
        """World transform of the body frame."""
        return Transform.from_configuration(self.configuration)

    def local_to_world(self, local_point) -> Vec2:
        """Map a point from body coordinates to world coordinates."""
        return self.transform().apply(local_point)

    def world_to_local(self, world_point) -> Vec2:
        """Map a point from world coordinates to body coordinates."""
        return self.transform().inverse().apply(world_point)

    def world_vertices(self) -> list[Vec2]:
        """Shape outline mapped into the world frame."""
        T = self.transform()
        return [T.apply(v) for v in self.shape.vertices()]
