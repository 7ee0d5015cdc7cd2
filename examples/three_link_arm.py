from planar_mech.world import World
from planar_mech.mechanism import Mechanism
from planar_mech.body import RigidBody
from planar_mech.geometry import Box
from planar_mech.joints import RevoluteJoint
from planar_mech.materials import Material
import numpy as np

world = World()
mech = Mechanism("mech")

w0, h0 = 1.0, 0.5
w1, h1 = 2.0, 0.25
w2, h2 = 2.0, 0.25
d = 0.125

po1, co1 = (0.0, 0.0), (w1 / 2 - d, 0.0)
po2, co2 = (w1 / 2 - d, 0.0), (w2 / 2 - d, 0.0)

mech.add_body(RigidBody("link1", Box(w0, h0), Material(color="grey")))
mech.add_body(RigidBody("link2", Box(w1, h1), Material(color="grey")))
mech.add_body(RigidBody("link3", Box(w2, h2), Material(color="grey")))

mech.add_joint(RevoluteJoint("joint1", parent="link1", child="link2", parent_offset=po1, child_offset=co1))
mech.add_joint(RevoluteJoint("joint2", parent="link2", child="link3", parent_offset=po2, child_offset=co2))

world.add_mechanism(mech)
mech.initialize()

for q in [(0.0, 0.0), (0.0, np.pi / 2), (np.pi / 2, 0.0), (np.pi / 2, np.pi / 2)]:
    mech.apply_joint_coordinates(q)
    print("q =", np.round(mech.q, 4))
    for body in mech.traverse_bodies():
        c = body.configuration
        print(f"  {body.id:6s} theta={c.theta:+.4f}  x={c.x:+.4f}  y={c.y:+.4f}")
    tip = mech.get_body("link3").local_to_world((w2 / 2, 0.0))
    print(f"  tip    ({tip.x:+.4f}, {tip.y:+.4f})")
    print()
