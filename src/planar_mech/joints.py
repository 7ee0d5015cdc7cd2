# MIT License (see LICENSE)
"""
Joints: the edges of a kinematic tree.

A joint connects exactly one parent body to exactly one child body, both
referenced by id. It stores two fixed offsets and the scalar joint state:

    parent_offset  joint location in the parent body frame
    child_offset   offset from the joint frame to the child body frame

and induces a local transform J(q) from its scalar coordinate q alone. The
world pose of the child is

    T_child = T_parent ∘ Trans(parent_offset) ∘ J(q) ∘ Trans(child_offset)

The variant set is closed:
    FixedJoint      J = identity, zero degrees of freedom
    RevoluteJoint   J = pure rotation by θ
    PrismaticJoint  J = pure translation by p along the local x-axis

Every variant has the same interface: ``get_transform``,
``get_joint_coordinate``, ``get_joint_velocity``, ``apply_joint_coordinate``
and ``apply_joint_velocity``. A joint on its own does not link bodies; the
tree edges are established when it is registered with a World.
"""
from __future__ import annotations
from dataclasses import dataclass, field

from .geometry.transforms import Transform
from .types import Vec2


def _as_vec2(v) -> Vec2:
    return v if isinstance(v, Vec2) else Vec2.from_array(v)


@dataclass(eq=False)
class _JointBase:
    """Fields shared by every joint variant."""
    id: str
    parent: str
    child: str
    parent_offset: Vec2 = field(default_factory=Vec2)
    child_offset: Vec2 = field(default_factory=Vec2)

    def __post_init__(self) -> None:
        self.parent_offset = _as_vec2(self.parent_offset)
        self.child_offset = _as_vec2(self.child_offset)

    def parent_transform(self) -> Transform:
        """Translation from the parent body frame to the joint frame."""
        return Transform(0.0, self.parent_offset)

    def child_transform(self) -> Transform:
        """Translation from the joint frame to the child body frame."""
        return Transform(0.0, self.child_offset)

    def child_world_transform(self, parent_world: Transform) -> Transform:
        """World transform of the child given the parent's world transform."""
        return parent_world @ self.parent_transform() @ self.get_transform() @ self.child_transform()


@dataclass(eq=False)
class FixedJoint(_JointBase):
    """
    Rigid attachment. Still visited during traversal and still occupies one
    slot in the coordinate and velocity vectors (always 0.0).
    """
    kind = "fixed"

    def get_transform(self) -> Transform:
        return Transform.identity()

    def get_joint_coordinate(self) -> float:
        return 0.0

    def get_joint_velocity(self) -> float:
        return 0.0

    def apply_joint_coordinate(self, value: float) -> None:
        pass

    def apply_joint_velocity(self, value: float) -> None:
        pass


@dataclass(eq=False)
class RevoluteJoint(_JointBase):
    """
    Hinge about the joint origin.

    Attributes:
        angle: Joint angle θ [rad].
        omega: Joint angular velocity ω [rad/s].
    """
    angle: float = 0.0
    omega: float = 0.0

    kind = "revolute"

    def get_transform(self) -> Transform:
        return Transform(self.angle, (0.0, 0.0))

    def get_joint_coordinate(self) -> float:
        return self.angle

    def get_joint_velocity(self) -> float:
        return self.omega

    def apply_joint_coordinate(self, value: float) -> None:
        self.angle = float(value)

    def apply_joint_velocity(self, value: float) -> None:
        self.omega = float(value)


@dataclass(eq=False)
class PrismaticJoint(_JointBase):
    """
    Slider along the joint frame's x-axis.

    Attributes:
        displacement: Linear displacement p [m].
        rate: Linear velocity ṗ [m/s].
    """
    displacement: float = 0.0
    rate: float = 0.0

    kind = "prismatic"

    def get_transform(self) -> Transform:
        return Transform(0.0, (self.displacement, 0.0))

    def get_joint_coordinate(self) -> float:
        return self.displacement

    def get_joint_velocity(self) -> float:
        return self.rate

    def apply_joint_coordinate(self, value: float) -> None:
        self.displacement = float(value)

    def apply_joint_velocity(self, value: float) -> None:
        self.rate = float(value)


# Union type for joint dispatch
Joint = FixedJoint | RevoluteJoint | PrismaticJoint
JOINT_TYPES: tuple[type, ...] = (FixedJoint, RevoluteJoint, PrismaticJoint)
