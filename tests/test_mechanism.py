import logging

import numpy as np
import pytest

from planar_mech.body import RigidBody
from planar_mech.errors import InvalidArgument, NotFound
from planar_mech.geometry import Box, Circle
from planar_mech.joints import FixedJoint, PrismaticJoint, RevoluteJoint
from planar_mech.materials import Material
from planar_mech.mechanism import Mechanism
from planar_mech.types import Configuration, Vec2
from planar_mech.world import World

D = 0.125
W0, H0 = 1.0, 0.5
W1, H1 = 2.0, 0.25
W2, H2 = 2.0, 0.25


def three_link_arm() -> tuple[World, Mechanism]:
    """link1 (root) -joint1-> link2 -joint2-> link3."""
    mech = Mechanism("arm")
    mech.add_body(RigidBody("link1", Box(W0, H0), Material(color="grey")))
    mech.add_body(RigidBody("link2", Box(W1, H1), Material(color="grey")))
    mech.add_body(RigidBody("link3", Box(W2, H2), Material(color="grey")))
    mech.add_joint(RevoluteJoint(
        "joint1", parent="link1", child="link2",
        parent_offset=(0.0, 0.0), child_offset=(W1 / 2 - D, 0.0),
    ))
    mech.add_joint(RevoluteJoint(
        "joint2", parent="link2", child="link3",
        parent_offset=(W1 / 2 - D, 0.0), child_offset=(W2 / 2 - D, 0.0),
    ))
    world = World()
    world.add_mechanism(mech)
    mech.initialize()
    return world, mech


def assert_pose(body: RigidBody, theta: float, x: float, y: float) -> None:
    q = body.configuration
    # compare angles on the circle so pi and -pi agree
    assert np.cos(q.theta) == pytest.approx(np.cos(theta), abs=1e-9)
    assert np.sin(q.theta) == pytest.approx(np.sin(theta), abs=1e-9)
    assert (q.x, q.y) == pytest.approx((x, y), abs=1e-9)


def test_three_link_chain_straight():
    _, mech = three_link_arm()
    a = W1 / 2 - D
    assert_pose(mech.get_body("link1"), 0.0, 0.0, 0.0)
    assert_pose(mech.get_body("link2"), 0.0, a, 0.0)
    # tip is the straight-line sum of the offsets
    assert_pose(mech.get_body("link3"), 0.0, 3 * a, 0.0)


def test_three_link_chain_rotates_subtree_about_first_pivot():
    _, mech = three_link_arm()
    mech.apply_joint_coordinates([np.pi / 2, 0.0])
    a = W1 / 2 - D
    tip = Vec2(3 * a, 0.0)
    rotated = Vec2(-tip.y, tip.x)
    assert_pose(mech.get_body("link2"), np.pi / 2, 0.0, a)
    assert_pose(mech.get_body("link3"), np.pi / 2, rotated.x, rotated.y)
    # the root is not moved by its children
    assert_pose(mech.get_body("link1"), 0.0, 0.0, 0.0)


def test_three_link_chain_other_configurations():
    _, mech = three_link_arm()
    a = W1 / 2 - D

    mech.apply_joint_coordinates([0.0, np.pi / 2])
    assert_pose(mech.get_body("link2"), 0.0, a, 0.0)
    assert_pose(mech.get_body("link3"), np.pi / 2, 2 * a, a)

    mech.apply_joint_coordinates([np.pi / 2, np.pi / 2])
    assert_pose(mech.get_body("link3"), np.pi, -a, 2 * a)


def test_revolute_quarter_turn_with_zero_offsets():
    mech = Mechanism("pair")
    parent = mech.add_body(RigidBody("parent", Circle(0.1), configuration=Configuration(0.4, 1.0, -2.0)))
    child = mech.add_body(RigidBody("child", Circle(0.1)))
    mech.add_joint(RevoluteJoint("hinge", parent="parent", child="child"))
    World().add_mechanism(mech)

    mech.apply_joint_coordinates([np.pi / 2])
    assert child.configuration.theta - parent.configuration.theta == pytest.approx(np.pi / 2)
    assert (child.configuration.x, child.configuration.y) == pytest.approx((1.0, -2.0))


def test_root_pose_is_authoritative():
    _, mech = three_link_arm()
    root = mech.get_body("link1")
    root.set_configuration(Configuration(np.pi, 5.0, 1.0))
    mech.update_kinematics()
    a = W1 / 2 - D
    assert root.configuration == Configuration(np.pi, 5.0, 1.0)
    assert_pose(mech.get_body("link2"), np.pi, 5.0 - a, 1.0)
    assert_pose(mech.get_body("link3"), np.pi, 5.0 - 3 * a, 1.0)


def test_prismatic_joint_slides_along_parent_axis():
    mech = Mechanism("rail")
    base = mech.add_body(RigidBody("base", Box(4.0, 0.2)))
    cart = mech.add_body(RigidBody("cart", Box(0.5, 0.5)))
    mech.add_joint(PrismaticJoint("slide", parent="base", child="cart", parent_offset=(0.0, 0.5)))
    World().add_mechanism(mech)

    mech.apply_joint_coordinates([2.0])
    assert_pose(cart, 0.0, 2.0, 0.5)

    base.set_configuration(Configuration(np.pi / 2, 0.0, 0.0))
    mech.update_kinematics()
    assert_pose(cart, np.pi / 2, -0.5, 2.0)


def branched_mechanism() -> Mechanism:
    """
    base -a-> left -c-> left_tip
         -b-> right
    Joints registered a, b, c; bodies registered in a scrambled order.
    """
    mech = Mechanism("tree")
    for bid in ["right", "left_tip", "base", "left"]:
        mech.add_body(RigidBody(bid, Circle(0.1)))
    mech.add_joint(RevoluteJoint("a", parent="base", child="left", parent_offset=(-1.0, 0.0)))
    mech.add_joint(PrismaticJoint("b", parent="base", child="right", parent_offset=(1.0, 0.0)))
    mech.add_joint(RevoluteJoint("c", parent="left", child="left_tip", child_offset=(0.0, 1.0)))
    World().add_mechanism(mech)
    return mech


def test_canonical_order_is_depth_first_in_registration_order():
    mech = branched_mechanism()
    assert [j.id for j in mech.traverse_joints()] == ["a", "c", "b"]
    assert [b.id for b in mech.traverse_bodies()] == ["base", "left", "left_tip", "right"]
    assert mech.find_root_body_ids() == ["base"]


def test_coordinates_follow_canonical_order():
    mech = branched_mechanism()
    mech.apply_joint_coordinates([0.1, 0.2, 0.3])
    assert mech.get_joint("a").get_joint_coordinate() == pytest.approx(0.1)
    assert mech.get_joint("c").get_joint_coordinate() == pytest.approx(0.2)
    assert mech.get_joint("b").get_joint_coordinate() == pytest.approx(0.3)
    assert np.allclose(mech.get_joint_coordinates(), [0.1, 0.2, 0.3])
    assert np.allclose(mech.q, [0.1, 0.2, 0.3])


@pytest.mark.parametrize("q", [
    [0.0, 0.0, 0.0],
    [1.0, -2.0, 0.5],
    [np.pi, 3 * np.pi, -7.0],
])
def test_coordinate_round_trip(q):
    mech = branched_mechanism()
    mech.apply_joint_coordinates(np.array(q))
    assert np.allclose(mech.get_joint_coordinates(), q)


def test_velocity_round_trip_and_recompute():
    mech = branched_mechanism()
    mech.get_joint("a").apply_joint_coordinate(np.pi / 2)
    mech.apply_joint_velocities([0.5, -0.5, 2.0])
    assert np.allclose(mech.get_joint_velocities(), [0.5, -0.5, 2.0])
    assert np.allclose(mech.qd, [0.5, -0.5, 2.0])
    # applying velocities also refreshes the poses
    assert_pose(mech.get_body("left_tip"), np.pi / 2, -2.0, 0.0)


def test_fixed_joints_occupy_a_slot():
    mech = Mechanism("welded")
    mech.add_body(RigidBody("a", Circle(0.1)))
    mech.add_body(RigidBody("b", Circle(0.1)))
    mech.add_body(RigidBody("c", Circle(0.1)))
    mech.add_joint(FixedJoint("weld", parent="a", child="b", parent_offset=(1.0, 0.0)))
    mech.add_joint(RevoluteJoint("hinge", parent="b", child="c", parent_offset=(1.0, 0.0)))
    World().add_mechanism(mech)

    assert mech.num_joints == 2
    mech.apply_joint_coordinates([5.0, np.pi / 2])
    assert np.allclose(mech.get_joint_coordinates(), [0.0, np.pi / 2])
    assert np.allclose(mech.get_joint_velocities(), [0.0, 0.0])
    assert_pose(mech.get_body("b"), 0.0, 1.0, 0.0)
    assert_pose(mech.get_body("c"), np.pi / 2, 2.0, 0.0)


def test_multiple_roots():
    mech = Mechanism("pair_of_arms")
    for bid in ["r1", "c1", "r2", "c2"]:
        mech.add_body(RigidBody(bid, Circle(0.1)))
    mech.get_body("r2").set_configuration(Configuration(0.0, 10.0, 0.0))
    mech.add_joint(RevoluteJoint("j2", parent="r2", child="c2", child_offset=(1.0, 0.0)))
    mech.add_joint(RevoluteJoint("j1", parent="r1", child="c1", child_offset=(1.0, 0.0)))
    World().add_mechanism(mech)

    assert mech.find_root_body_ids() == ["r1", "r2"]
    assert [j.id for j in mech.traverse_joints()] == ["j1", "j2"]
    mech.apply_joint_coordinates([0.0, np.pi])
    assert_pose(mech.get_body("c1"), 0.0, 1.0, 0.0)
    assert_pose(mech.get_body("c2"), np.pi, 9.0, 0.0)


def test_long_chain_does_not_hit_recursion_limit():
    n = 1500
    mech = Mechanism("snake")
    for i in range(n):
        mech.add_body(RigidBody(f"b{i}", Circle(0.1)))
    for i in range(1, n):
        mech.add_joint(RevoluteJoint(f"j{i}", parent=f"b{i - 1}", child=f"b{i}", child_offset=(1.0, 0.0)))
    World().add_mechanism(mech)
    mech.initialize()
    assert mech.get_body(f"b{n - 1}").configuration.x == pytest.approx(n - 1)


def test_apply_rejects_wrong_length():
    _, mech = three_link_arm()
    with pytest.raises(InvalidArgument):
        mech.apply_joint_coordinates([0.0])
    with pytest.raises(InvalidArgument):
        mech.apply_joint_velocities([0.0, 0.0, 0.0])
    assert np.allclose(mech.get_joint_coordinates(), [0.0, 0.0])


def test_lookup_failures():
    _, mech = three_link_arm()
    with pytest.raises(NotFound):
        mech.get_body("nope")
    with pytest.raises(NotFound):
        mech.get_joint("nope")
    with pytest.raises(NotFound):
        mech.find_joint_linking("link1", "link3")
    assert mech.find_joint_linking("link2", "link3").id == "joint2"


def test_registration_rules():
    mech = Mechanism("m")
    mech.add_body(RigidBody("a", Circle(0.1)))
    with pytest.raises(InvalidArgument):
        mech.add_body(RigidBody("a", Circle(0.2)))
    with pytest.raises(InvalidArgument):
        mech.add_body("a")

    mech.add_body(RigidBody("b", Circle(0.1)))
    mech.add_joint(RevoluteJoint("j", parent="a", child="b"))
    with pytest.raises(InvalidArgument):
        mech.add_joint(RevoluteJoint("j", parent="b", child="a"))
    with pytest.raises(NotFound):
        mech.add_joint(RevoluteJoint("k", parent="a", child="ghost"))
    with pytest.raises(InvalidArgument):
        mech.add_joint(object())
    assert mech.num_bodies == 2
    assert mech.num_joints == 1


def test_constructor_registers_through_add():
    a = RigidBody("a", Circle(0.1))
    b = RigidBody("b", Circle(0.1))
    mech = Mechanism("m", bodies={"a": a, "b": b}, joints={"j": RevoluteJoint("j", parent="a", child="b")})
    assert list(mech.bodies) == ["a", "b"]
    assert mech.find_joint_linking("a", "b").id == "j"
    with pytest.raises(InvalidArgument):
        Mechanism("bad", bodies={"x": a})


def test_unattached_mechanism_is_rejected():
    mech = Mechanism("loose")
    mech.add_body(RigidBody("a", Circle(0.1)))
    mech.add_body(RigidBody("b", Circle(0.1)))
    mech.add_joint(RevoluteJoint("j", parent="a", child="b"))
    with pytest.raises(InvalidArgument):
        mech.get_joint_coordinates()
    with pytest.raises(InvalidArgument):
        mech.initialize()


def test_update_logs_at_debug(caplog):
    _, mech = three_link_arm()
    with caplog.at_level(logging.DEBUG, logger="planar_mech.mechanism"):
        mech.update_kinematics()
    assert any("kinematics updated for 3 bodies" in r.getMessage() for r in caplog.records)


def test_body_can_be_the_child_of_one_joint_only():
    mech = Mechanism("m")
    for bid in ["a", "b", "c"]:
        mech.add_body(RigidBody(bid, Circle(0.1)))
    mech.add_joint(RevoluteJoint("ac", parent="a", child="c"))
    with pytest.raises(InvalidArgument):
        mech.add_joint(RevoluteJoint("bc", parent="b", child="c"))
    with pytest.raises(InvalidArgument):
        mech.add_joint(PrismaticJoint("ac2", parent="a", child="c"))
    assert list(mech.joints) == ["ac"]


def test_roots_before_registration_are_all_bodies():
    mech = Mechanism("loose")
    mech.add_body(RigidBody("a", Circle(0.1)))
    mech.add_body(RigidBody("b", Circle(0.1)))
    mech.add_joint(RevoluteJoint("j", parent="a", child="b"))
    assert mech.find_root_body_ids() == ["a", "b"]
    World().add_mechanism(mech)
    assert mech.find_root_body_ids() == ["a"]
