# MIT License (see LICENSE)
"""
JSON serialization and deserialization for worlds.

The format is human-readable and round-trips the kinematic tree, the joint
state and the body poses.

JSON Schema Overview:
---------------------
{
  "gravity": [float, float],         # Default: [0.0, -9.81]
  "bodies": [
    {
      "id": string,                  # Required, unique
      "shape": {                     # Required
        "type": "circle" | "box" | "polygon",
        "radius": float,             # If circle
        "width": float,              # If box
        "height": float,             # If box
        "vertices": [[x,y], ...]     # If polygon (CCW)
      },
      "material": {                  # Optional
        "density": float,            # Default: 7850
        "restitution": float,        # Default: 0.6
        "staticFriction": float,     # Default: 0.7
        "kineticFriction": float,    # Default: 0.5
        "color": string              # Default: "black"
      },
      "configuration": [θ, x, y],    # Default: [0, 0, 0]
      "velocity": [ω, vx, vy]        # Default: [0, 0, 0]
    }
  ],
  "mechanisms": [                    # Optional
    {
      "id": string,
      "bodies": [string, ...],       # Body ids, in registration order
      "joints": [<joint>, ...]       # In registration order
    }
  ],
  "joints": [<joint>, ...]           # Optional, joints owned by no mechanism
}

<joint>:
{
  "type": "fixed" | "revolute" | "prismatic",
  "id": string, "parent": string, "child": string,
  "parentOffset": [x, y],            # Default: [0, 0]
  "childOffset": [x, y],             # Default: [0, 0]
  "coordinate": float,               # Revolute angle / prismatic displacement
  "velocity": float                  # Joint rate
}

Loading goes through the regular World/Mechanism registration calls, so a
document describing a cycle, a body with two parents or a dangling id is
rejected with the same errors as the equivalent API calls.
"""
from __future__ import annotations
import json
import logging
from typing import Any

import numpy as np

from ..body import RigidBody
from ..errors import InvalidArgument, NotFound
from ..geometry.shapes import Box, Circle, Polygon
from ..joints import FixedJoint, Joint, PrismaticJoint, RevoluteJoint
from ..materials import Material
from ..mechanism import Mechanism
from ..types import Configuration, Velocity
from ..world import World

logger = logging.getLogger(__name__)

_DEFAULT_MATERIAL = Material()


def load_world_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a world file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_world(path: str) -> World:
    """
    Load and construct a World from a JSON file.

    Bodies that belong to no mechanism are registered first, then each
    mechanism, then the world-level joints. Kinematics are not recomputed;
    call ``World.initialize()`` when needed.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        InvalidArgument: If the document is malformed or violates a tree rule.
        NotFound: If a mechanism or joint refers to an unknown body id.
    """
    world = world_from_json(load_world_raw(path))
    logger.debug("loaded world from %s (%d bodies, %d joints)", path, len(world.bodies), len(world.joints))
    return world


def world_from_json(data: dict[str, Any]) -> World:
    """Build a World from an already-parsed document."""
    world = World(gravity=tuple(data.get("gravity", [0.0, -9.81])))

    bodies: dict[str, RigidBody] = {}
    for body_data in data.get("bodies", []):
        body = body_from_json(body_data)
        if body.id in bodies:
            raise InvalidArgument(f"Duplicate body id {body.id!r} in document")
        bodies[body.id] = body

    mech_data_list = data.get("mechanisms", [])
    owned = {bid for m in mech_data_list for bid in m.get("bodies", [])}

    for body in bodies.values():
        if body.id not in owned:
            world.add_body(body)

    for m_data in mech_data_list:
        if "id" not in m_data:
            raise InvalidArgument("Mechanism definition missing required 'id' field.")
        mech = Mechanism(str(m_data["id"]))
        for bid in m_data.get("bodies", []):
            if bid not in bodies:
                raise NotFound(f"Mechanism {mech.id!r} refers to unknown body {bid!r}")
            mech.add_body(bodies[bid])
        for j_data in m_data.get("joints", []):
            mech.add_joint(joint_from_json(j_data))
        world.add_mechanism(mech)

    for j_data in data.get("joints", []):
        world.add_joint(joint_from_json(j_data))

    return world


def _require(d: dict[str, Any], key: str, what: str) -> Any:
    if key not in d:
        raise InvalidArgument(f"{what} definition missing required '{key}' field.")
    return d[key]


def shape_from_json(shape_data: dict[str, Any]):
    """Parse a shape dictionary; dimension checks happen in the shape constructors."""
    shape_type = shape_data.get("type")
    if shape_type == "circle":
        return Circle(float(_require(shape_data, "radius", "Circle")))
    if shape_type == "box":
        return Box(
            float(_require(shape_data, "width", "Box")),
            float(_require(shape_data, "height", "Box")),
        )
    if shape_type == "polygon":
        return Polygon(np.array(_require(shape_data, "vertices", "Polygon"), dtype=np.float64))
    raise InvalidArgument(f"Unknown shape type: '{shape_type}'")


def body_from_json(d: dict[str, Any]) -> RigidBody:
    """
    Parse a single rigid body definition.

    Parent/children links are not part of a body record; they are rebuilt
    from the joints.
    """
    body_id = str(_require(d, "id", "Body"))
    shape = shape_from_json(_require(d, "shape", "Body"))

    mat_data = d.get("material", {})
    material = Material(
        density=float(mat_data.get("density", _DEFAULT_MATERIAL.density)),
        restitution=float(mat_data.get("restitution", _DEFAULT_MATERIAL.restitution)),
        static_friction=float(mat_data.get("staticFriction", _DEFAULT_MATERIAL.static_friction)),
        kinetic_friction=float(mat_data.get("kineticFriction", _DEFAULT_MATERIAL.kinetic_friction)),
        color=str(mat_data.get("color", _DEFAULT_MATERIAL.color)),
    )

    return RigidBody(
        id=body_id,
        shape=shape,
        material=material,
        configuration=Configuration.from_array(d.get("configuration", [0.0, 0.0, 0.0])),
        velocity=Velocity.from_array(d.get("velocity", [0.0, 0.0, 0.0])),
    )


def joint_from_json(d: dict[str, Any]) -> Joint:
    """Parse a single joint definition."""
    j_type = d.get("type")
    common = dict(
        id=str(_require(d, "id", "Joint")),
        parent=str(_require(d, "parent", "Joint")),
        child=str(_require(d, "child", "Joint")),
        parent_offset=tuple(d.get("parentOffset", [0.0, 0.0])),
        child_offset=tuple(d.get("childOffset", [0.0, 0.0])),
    )
    if j_type == "fixed":
        return FixedJoint(**common)
    if j_type == "revolute":
        return RevoluteJoint(
            **common,
            angle=float(d.get("coordinate", 0.0)),
            omega=float(d.get("velocity", 0.0)),
        )
    if j_type == "prismatic":
        return PrismaticJoint(
            **common,
            displacement=float(d.get("coordinate", 0.0)),
            rate=float(d.get("velocity", 0.0)),
        )
    raise InvalidArgument(f"Unknown joint type: '{j_type}'")


def shape_to_json(shape) -> dict[str, Any]:
    if isinstance(shape, Circle):
        return {"type": "circle", "radius": shape.radius}
    if isinstance(shape, Box):
        return {"type": "box", "width": shape.width, "height": shape.height}
    if isinstance(shape, Polygon):
        return {"type": "polygon", "vertices": shape.points.tolist()}
    raise TypeError(f"Cannot serialize unknown shape type: {type(shape)}")


def body_to_json(body: RigidBody) -> dict[str, Any]:
    """
    Serialize a RigidBody to a dictionary (round-trip compatible).

    Material and velocity are omitted when they equal the defaults.
    """
    result: dict[str, Any] = {
        "id": body.id,
        "shape": shape_to_json(body.shape),
        "configuration": list(body.configuration),
    }
    if body.velocity != Velocity():
        result["velocity"] = list(body.velocity)

    mat = body.material
    if mat != _DEFAULT_MATERIAL:
        result["material"] = {
            "density": mat.density,
            "restitution": mat.restitution,
            "staticFriction": mat.static_friction,
            "kineticFriction": mat.kinetic_friction,
            "color": mat.color,
        }
    return result


def joint_to_json(joint: Joint) -> dict[str, Any]:
    """Serialize a joint, including its current coordinate and rate."""
    if not isinstance(joint, (FixedJoint, RevoluteJoint, PrismaticJoint)):
        raise TypeError(f"Cannot serialize unknown joint type: {type(joint)}")
    result: dict[str, Any] = {
        "type": joint.kind,
        "id": joint.id,
        "parent": joint.parent,
        "child": joint.child,
        "parentOffset": list(joint.parent_offset),
        "childOffset": list(joint.child_offset),
    }
    if not isinstance(joint, FixedJoint):
        result["coordinate"] = joint.get_joint_coordinate()
        result["velocity"] = joint.get_joint_velocity()
    return result


def world_to_json(world: World) -> dict[str, Any]:
    """
    Serialize a complete World to a dictionary.

    Captured state includes gravity, every body and its pose, each
    mechanism's membership and joints, and joints owned by no mechanism.
    """
    mech_joint_ids = {jid for m in world.mechanisms.values() for jid in m.joints}
    result: dict[str, Any] = {
        "gravity": [float(g) for g in world.gravity],
        "bodies": [body_to_json(b) for b in world.bodies.values()],
    }
    if world.mechanisms:
        result["mechanisms"] = [
            {
                "id": m.id,
                "bodies": list(m.bodies),
                "joints": [joint_to_json(j) for j in m.joints.values()],
            }
            for m in world.mechanisms.values()
        ]
    free_joints = [joint_to_json(j) for jid, j in world.joints.items() if jid not in mech_joint_ids]
    if free_joints:
        result["joints"] = free_joints
    return result


def save_world(world: World, path: str, indent: int = 2) -> None:
    """Save a World instance to a JSON file on disk."""
    data = world_to_json(world)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
