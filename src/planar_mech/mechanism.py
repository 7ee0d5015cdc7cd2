# MIT License (see LICENSE)
"""
Mechanisms: kinematic trees of bodies and joints, and forward kinematics.

A Mechanism owns an id -> RigidBody map and an id -> Joint map. Its joint
coordinate and velocity vectors are laid out in the canonical traversal
order:

    for each root body, in body-registration order:
        visit the body
        for each child id in body.children (joint-registration order):
            if this mechanism owns the joint linking body -> child:
                visit the joint, then recurse into child

This pre-order walk is also the propagation order of forward kinematics,
so every parent pose is final before any child reads it:

    root:   T_world = Transform(q_root)          (stored pose is authoritative)
    child:  T_world = T_parent ∘ Trans(parent_offset) ∘ J(q) ∘ Trans(child_offset)

A root is a body with no incoming joint owned by this mechanism: either it
has no parent, or it is attached through a joint registered on the World
alone (e.g. an arm mounted on a base body). Edges leaving the mechanism
through such World-level joints are not followed here; ``World.update_kinematics``
propagates the whole forest, World-level joints included.

Parent/child links on the bodies are established by ``World.add_joint``;
until a mechanism has been registered with a World its joints are not part
of any tree and every traversal is rejected.

Structure:
    - User creates bodies and joints, adds them to a Mechanism.
    - User registers the Mechanism with a World (World.add_mechanism).
    - User calls initialize(), then apply_joint_coordinates(q) as needed.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .body import RigidBody
from .errors import InvalidArgument, NotFound
from .geometry.transforms import Transform
from .joints import JOINT_TYPES, Joint
from .util import f64

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Mechanism:
    """
    A kinematic tree (or forest) of rigid bodies connected by joints.

    Attributes:
        id: Unique mechanism identifier.
        bodies: Owning id -> RigidBody store, in registration order.
        joints: Owning id -> Joint store, in registration order.

    Bodies and joints passed to the constructor go through ``add_body`` and
    ``add_joint`` and are validated the same way.
    """
    id: str
    bodies: dict[str, RigidBody] = field(default_factory=dict)
    joints: dict[str, Joint] = field(default_factory=dict)

    def __post_init__(self) -> None:
        bodies, joints = self.bodies, self.joints
        self.bodies = {}
        self.joints = {}
        # (parent id, child id) -> joint id
        self._links: dict[tuple[str, str], str] = {}
        for key, body in bodies.items():
            if key != body.id:
                raise InvalidArgument(f"Body key {key!r} does not match body id {body.id!r}")
            self.add_body(body)
        for key, joint in joints.items():
            if key != joint.id:
                raise InvalidArgument(f"Joint key {key!r} does not match joint id {joint.id!r}")
            self.add_joint(joint)

    @property
    def num_bodies(self) -> int:
        return len(self.bodies)

    @property
    def num_joints(self) -> int:
        return len(self.joints)

    # ------------------------------------------------------------------
    # Registration & lookup
    # ------------------------------------------------------------------

    def get_body(self, body_id: str) -> RigidBody:
        """
        Look up a body by id.

        Raises:
            NotFound: If no such body is registered.
        """
        body = self.bodies.get(body_id)
        if body is None:
            raise NotFound(f"Body {body_id!r} not found in mechanism {self.id!r}")
        return body

    def get_joint(self, joint_id: str) -> Joint:
        """
        Look up a joint by id.

        Raises:
            NotFound: If no such joint is registered.
        """
        joint = self.joints.get(joint_id)
        if joint is None:
            raise NotFound(f"Joint {joint_id!r} not found in mechanism {self.id!r}")
        return joint

    def add_body(self, body: RigidBody) -> RigidBody:
        """
        Register a body.

        Raises:
            InvalidArgument: If the object is not a RigidBody or the id is taken.
        """
        if not isinstance(body, RigidBody):
            raise InvalidArgument(f"Expected a RigidBody, got {type(body).__name__}")
        if body.id in self.bodies:
            raise InvalidArgument(f"Body {body.id!r} already exists in mechanism {self.id!r}")
        self.bodies[body.id] = body
        logger.debug("mechanism %r: added body %r", self.id, body.id)
        return body

    def add_joint(self, joint: Joint) -> Joint:
        """
        Register a joint between two bodies of this mechanism.

        Does not link the bodies; that happens when the mechanism is added to
        a World.

        Raises:
            InvalidArgument: If the object is not a joint, the id is taken, or
                another joint of this mechanism already has the same child.
            NotFound: If the parent or child body is not in this mechanism.
        """
        if not isinstance(joint, JOINT_TYPES):
            raise InvalidArgument(f"Expected a joint, got {type(joint).__name__}")
        if joint.id in self.joints:
            raise InvalidArgument(f"Joint {joint.id!r} already exists in mechanism {self.id!r}")
        self.get_body(joint.parent)
        self.get_body(joint.child)
        for other in self.joints.values():
            if other.child == joint.child:
                raise InvalidArgument(
                    f"Body {joint.child!r} is already the child of joint {other.id!r} in mechanism {self.id!r}"
                )
        self.joints[joint.id] = joint
        self._links[(joint.parent, joint.child)] = joint.id
        logger.debug(
            "mechanism %r: added %s joint %r (%r -> %r)",
            self.id, joint.kind, joint.id, joint.parent, joint.child,
        )
        return joint

    def find_joint_linking(self, parent: str, child: str) -> Joint:
        """
        The joint whose parent is ``parent`` and whose child is ``child``.

        Raises:
            NotFound: If no registered joint links the two bodies.
        """
        joint_id = self._links.get((parent, child))
        if joint_id is None:
            raise NotFound(f"No joint links parent {parent!r} -> child {child!r}")
        return self.joints[joint_id]

    def _owns_edge(self, parent: str | None, child: str) -> bool:
        return (parent, child) in self._links

    def find_root_body_ids(self) -> list[str]:
        """
        Ids of bodies with no incoming joint of this mechanism, in
        registration order.

        Covers bodies without a parent and bodies hung from a World-level
        joint. Their stored configuration is the starting pose of a
        kinematics pass.
        """
        return [bid for bid, body in self.bodies.items() if not self._owns_edge(body.parent, bid)]

    # ------------------------------------------------------------------
    # Canonical traversal
    # ------------------------------------------------------------------

    def _check_attached(self) -> None:
        for joint in self.joints.values():
            child = self.get_body(joint.child)
            if child.parent != joint.parent:
                raise InvalidArgument(
                    f"Joint {joint.id!r} is not attached to a kinematic tree; "
                    f"register mechanism {self.id!r} with a World first"
                )

    def _walk(self) -> Iterator[tuple[Joint | None, RigidBody]]:
        """
        Yield (incoming joint, body) pairs in canonical order.

        Roots are yielded with joint None. The walk uses an explicit stack so
        long chains are not limited by the interpreter recursion depth.
        """
        self._check_attached()
        for root_id in self.find_root_body_ids():
            stack: list[tuple[Joint | None, RigidBody]] = [(None, self.bodies[root_id])]
            while stack:
                joint, body = stack.pop()
                yield joint, body
                edges = [
                    (self.find_joint_linking(body.id, child_id), self.bodies[child_id])
                    for child_id in body.children
                    if self._owns_edge(body.id, child_id)
                ]
                # reversed so the first registered child is popped first
                stack.extend(reversed(edges))

    def traverse_bodies(self) -> list[RigidBody]:
        """All bodies in canonical order."""
        return [body for _, body in self._walk()]

    def traverse_joints(self) -> list[Joint]:
        """All joints in canonical order (the coordinate-vector layout)."""
        return [joint for joint, _ in self._walk() if joint is not None]

    # ------------------------------------------------------------------
    # Joint coordinates
    # ------------------------------------------------------------------

    def get_joint_coordinates(self) -> np.ndarray:
        """Joint coordinates in canonical order; fixed joints contribute 0.0."""
        return np.array([j.get_joint_coordinate() for j in self.traverse_joints()], dtype=np.float64)

    def get_joint_velocities(self) -> np.ndarray:
        """Joint velocities in canonical order; fixed joints contribute 0.0."""
        return np.array([j.get_joint_velocity() for j in self.traverse_joints()], dtype=np.float64)

    @property
    def q(self) -> np.ndarray:
        return self.get_joint_coordinates()

    @property
    def qd(self) -> np.ndarray:
        return self.get_joint_velocities()

    def _check_length(self, values, name: str) -> np.ndarray:
        values = f64(values).reshape(-1)
        if values.size != self.num_joints:
            raise InvalidArgument(
                f"{name} must have the same number of elements as mechanism {self.id!r} "
                f"has joints ({self.num_joints}), got {values.size}"
            )
        return values

    def apply_joint_coordinates(self, q) -> None:
        """
        Overwrite every joint coordinate, then recompute all body poses.

        Raises:
            InvalidArgument: If len(q) differs from the joint count.
        """
        q = self._check_length(q, "q")
        for joint, value in zip(self.traverse_joints(), q, strict=True):
            joint.apply_joint_coordinate(float(value))
        self.update_kinematics()

    def apply_joint_velocities(self, qd) -> None:
        """
        Overwrite every joint velocity, then recompute all body poses.

        Raises:
            InvalidArgument: If len(qd) differs from the joint count.
        """
        qd = self._check_length(qd, "qd")
        for joint, value in zip(self.traverse_joints(), qd, strict=True):
            joint.apply_joint_velocity(float(value))
        self.update_kinematics()

    # ------------------------------------------------------------------
    # Forward kinematics
    # ------------------------------------------------------------------

    def update_kinematics(self) -> None:
        """
        Propagate world poses from the roots to the leaves.

        Root configurations are read as-is. Each other body's configuration is
        recomputed from its parent's world transform, which the canonical
        order guarantees was already updated in this pass. Only this
        mechanism's bodies are written.
        """
        world: dict[str, Transform] = {}
        for joint, body in self._walk():
            if joint is None:
                T = body.transform()
            else:
                T = joint.child_world_transform(world[joint.parent])
                body.configuration = T.configuration()
            world[body.id] = T
        logger.debug("mechanism %r: kinematics updated for %d bodies", self.id, len(world))

    def initialize(self) -> None:
        """Bring every body pose in line with the current joint state."""
        self.update_kinematics()
