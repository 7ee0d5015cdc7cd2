# MIT License (see LICENSE)
"""
planar_mech - planar rigid-body mechanisms and forward kinematics.

This package models 2D mechanisms as trees of rigid bodies connected by
joints and computes each body's world pose from the joint coordinates.

Main entry points:
    - World: Global registry and topology authority.
    - Mechanism: A kinematic tree with canonical joint ordering and
      forward-kinematics propagation.
    - RigidBody: A tree node with shape-derived mass properties and pose.
    - FixedJoint, RevoluteJoint, PrismaticJoint: Joint variants.
    - Rotation, Transform: SO(2) / SE(2) group elements.

Submodules:
    - geometry: Lie-group transforms and shape primitives.
    - io: JSON serialization/deserialization.
    - invariants: System energy and momentum.

Example:
    from planar_mech import World, Mechanism, RigidBody, RevoluteJoint, Box

    mech = Mechanism("arm")
    mech.add_body(RigidBody("base", Box(1.0, 0.5)))
    mech.add_body(RigidBody("link", Box(2.0, 0.25)))
    mech.add_joint(RevoluteJoint("shoulder", "base", "link", child_offset=(0.875, 0.0)))

    world = World()
    world.add_mechanism(mech)
    mech.apply_joint_coordinates([np.pi / 2])
"""
from .errors import KinematicsError, InvalidArgument, NotFound
from .types import Vec2, Configuration, Velocity, Acceleration, Wrench, X_HAT, Y_HAT
from .geometry import Rotation, Transform, Circle, Box, Polygon
from .materials import Material, WOOD, STEEL, RUBBER, ICE
from .body import RigidBody
from .joints import Joint, FixedJoint, RevoluteJoint, PrismaticJoint
from .mechanism import Mechanism
from .world import World

__all__ = [
    # Errors
    "KinematicsError",
    "InvalidArgument",
    "NotFound",
    # Value types
    "Vec2",
    "Configuration",
    "Velocity",
    "Acceleration",
    "Wrench",
    "X_HAT",
    "Y_HAT",
    # Geometry
    "Rotation",
    "Transform",
    "Circle",
    "Box",
    "Polygon",
    # Materials
    "Material",
    "WOOD",
    "STEEL",
    "RUBBER",
    "ICE",
    # Tree
    "RigidBody",
    "Joint",
    "FixedJoint",
    "RevoluteJoint",
    "PrismaticJoint",
    "Mechanism",
    "World",
]
