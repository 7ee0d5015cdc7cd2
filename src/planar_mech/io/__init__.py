# MIT License (see LICENSE)
"""
Input/Output utilities for planar mechanisms.

This subpackage provides:
    - JSON serialization: Save and load worlds to/from JSON files.
    - Round-trip support: the tree, joint state and body poses come back
      identically, including the canonical joint order.

Typical usage:
    from planar_mech.io import load_world, save_world, world_to_json

    world = load_world("arm.json")
    world.initialize()
    save_world(world, "arm_out.json")
"""
from .json_io import (
    load_world,
    load_world_raw,
    world_from_json,
    save_world,
    world_to_json,
    body_to_json,
    body_from_json,
    joint_to_json,
    joint_from_json,
)

__all__ = [
    # Loading
    "load_world",
    "load_world_raw",
    "world_from_json",
    # Saving
    "save_world",
    # Serialization
    "world_to_json",
    "body_to_json",
    "body_from_json",
    "joint_to_json",
    "joint_from_json",
]
