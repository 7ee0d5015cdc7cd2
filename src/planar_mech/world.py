# MIT License (see LICENSE)
"""
The World: global registry of bodies, joints and mechanisms.

The World is the topology authority. ``add_joint`` is the only place where
a child's ``parent`` id is set and the child id is appended to the parent's
``children`` list, after checking that:
    - both bodies are registered,
    - the child has no parent yet (each body has at most one parent),
    - the new edge does not close a cycle.
A rejected joint leaves every registry and body untouched.

``add_mechanism`` imports the mechanism's bodies and then its joints through
the same validations. The import is not transactional: if it fails midway,
the bodies and joints imported so far stay registered and the error
propagates to the caller.

Joints may also be registered on the World alone, for example to mount a
mechanism's root on a base body or to hang a payload from one of its links.
``update_kinematics`` walks the whole forest from the parentless bodies, so
those joints are propagated together with the mechanisms' own.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

from . import invariants
from .body import RigidBody
from .errors import InvalidArgument, KinematicsError, NotFound
from .geometry.transforms import Transform
from .joints import JOINT_TYPES, Joint
from .mechanism import Mechanism
from .util import f64

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class World:
    """
    Container for every mechanism of a simulation.

    Attributes:
        gravity: Gravity vector [gx, gy] in m/s² (default: Earth gravity).
                 Potential energies use the magnitude g = -gy.
        bodies: Global id -> RigidBody registry.
        joints: Global id -> Joint registry.
        mechanisms: Global id -> Mechanism registry.
    """
    gravity: tuple[float, float] = (0.0, -9.81)
    bodies: dict[str, RigidBody] = field(default_factory=dict)
    joints: dict[str, Joint] = field(default_factory=dict)
    mechanisms: dict[str, Mechanism] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._g = f64(self.gravity)
        if self._g.shape != (2,):
            raise InvalidArgument(f"gravity must be a 2-dimensional vector, got {self.gravity!r}")
        # child body id -> id of the joint that links it to its parent
        self._parent_joint: dict[str, str] = {}
        for joint in self.joints.values():
            self._parent_joint[joint.child] = joint.id

    @property
    def g(self) -> float:
        """Scalar gravity used for potential energy (positive when gravity points down)."""
        return float(-self._g[1])

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_body(self, body_id: str) -> RigidBody:
        """
        Raises:
            NotFound: If the body is not registered.
        """
        body = self.bodies.get(body_id)
        if body is None:
            raise NotFound(f"Body {body_id!r} not found in world")
        return body

    def get_joint(self, joint_id: str) -> Joint:
        """
        Raises:
            NotFound: If the joint is not registered.
        """
        joint = self.joints.get(joint_id)
        if joint is None:
            raise NotFound(f"Joint {joint_id!r} not found in world")
        return joint

    def get_mechanism(self, mech_id: str) -> Mechanism:
        """
        Raises:
            NotFound: If the mechanism is not registered.
        """
        mech = self.mechanisms.get(mech_id)
        if mech is None:
            raise NotFound(f"Mechanism {mech_id!r} not found in world")
        return mech

    def find_joint_linking(self, parent: str, child: str) -> Joint:
        """
        Raises:
            NotFound: If no registered joint links parent -> child.
        """
        joint_id = self._parent_joint.get(child)
        if joint_id is not None and self.joints[joint_id].parent == parent:
            return self.joints[joint_id]
        raise NotFound(f"No joint links parent {parent!r} -> child {child!r}")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_body(self, body: RigidBody) -> RigidBody:
        """
        Raises:
            InvalidArgument: If the object is not a RigidBody or the id is taken.
        """
        if not isinstance(body, RigidBody):
            raise InvalidArgument(f"Expected a RigidBody, got {type(body).__name__}")
        if body.id in self.bodies:
            raise InvalidArgument(f"Body {body.id!r} already exists in world")
        self.bodies[body.id] = body
        logger.debug("world: added body %r", body.id)
        return body

    def _is_ancestor(self, candidate: str, body_id: str) -> bool:
        """True if ``candidate`` is body_id or lies on its parent chain."""
        current: str | None = body_id
        while current is not None:
            if current == candidate:
                return True
            current = self.bodies[current].parent
        return False

    def add_joint(self, joint: Joint) -> Joint:
        """
        Register a joint and link its parent and child bodies.

        Raises:
            InvalidArgument: Not a joint, duplicate joint id, child already has
                a parent, or the edge would create a cycle.
            NotFound: Parent or child body is not registered.
        """
        if not isinstance(joint, JOINT_TYPES):
            raise InvalidArgument(f"Expected a joint, got {type(joint).__name__}")
        if joint.id in self.joints:
            raise InvalidArgument(f"Joint {joint.id!r} already exists in world")
        if joint.parent not in self.bodies:
            raise NotFound(f"Parent body {joint.parent!r} not found in world")
        if joint.child not in self.bodies:
            raise NotFound(f"Child body {joint.child!r} not found in world")

        parent = self.bodies[joint.parent]
        child = self.bodies[joint.child]
        if child.parent is not None:
            raise InvalidArgument(f"Body {child.id!r} already has a parent {child.parent!r}")
        if self._is_ancestor(child.id, parent.id):
            raise InvalidArgument(
                f"Joint {joint.id!r} would close a cycle: {child.id!r} is an ancestor of {parent.id!r}"
            )

        self.joints[joint.id] = joint
        self._parent_joint[child.id] = joint.id
        child.parent = parent.id
        parent.children.append(child.id)
        logger.debug("world: added %s joint %r (%r -> %r)", joint.kind, joint.id, parent.id, child.id)
        return joint

    def add_mechanism(self, mech: Mechanism) -> Mechanism:
        """
        Import a mechanism's bodies, then its joints, then register it.

        Raises:
            InvalidArgument: Duplicate mechanism id, or any body/joint
                validation failure during the import.
            NotFound: A joint refers to a body that is not registered.
        """
        if mech.id in self.mechanisms:
            raise InvalidArgument(f"Mechanism {mech.id!r} already exists in world")
        try:
            for body in mech.bodies.values():
                self.add_body(body)
            for joint in mech.joints.values():
                self.add_joint(joint)
        except KinematicsError:
            # No rollback: whatever was imported stays registered.
            logger.error("world: import of mechanism %r failed; world left partially populated", mech.id)
            raise
        self.mechanisms[mech.id] = mech
        logger.debug(
            "world: added mechanism %r (%d bodies, %d joints)",
            mech.id, mech.num_bodies, mech.num_joints,
        )
        return mech

    # ------------------------------------------------------------------
    # Kinematics & energy
    # ------------------------------------------------------------------

    def update_kinematics(self) -> None:
        """
        Propagate world poses over every registered body.

        Same rule as ``Mechanism.update_kinematics``, applied to the whole
        forest: parentless bodies keep their stored pose, every other body is
        placed through the joint linking it to its parent, whether that joint
        belongs to a mechanism or to the World alone.
        """
        poses: dict[str, Transform] = {}
        for root_id in [bid for bid, body in self.bodies.items() if body.parent is None]:
            stack = [root_id]
            while stack:
                body = self.bodies[stack.pop()]
                if body.parent is None:
                    T = body.transform()
                else:
                    joint = self.joints[self._parent_joint[body.id]]
                    T = joint.child_world_transform(poses[joint.parent])
                    body.configuration = T.configuration()
                poses[body.id] = T
                # reversed so the first registered child is popped first
                stack.extend(reversed(body.children))
        logger.debug("world: kinematics updated for %d bodies", len(poses))

    def initialize(self) -> None:
        """Bring every body pose in line with the current joint state."""
        self.update_kinematics()

    def kinetic_energy(self) -> float:
        return invariants.kinetic_energy(self.bodies.values())

    def potential_energy(self) -> float:
        return invariants.potential_energy(self.bodies.values(), self.g)

    def total_energy(self) -> float:
        return invariants.total_energy(self.bodies.values(), self.g)
