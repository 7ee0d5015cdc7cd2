"""
Microbenchmark: forward-kinematics time vs chain length.
Run:
  python benchmarks/bench_kinematics.py
"""
import time
import numpy as np
from planar_mech.world import World
from planar_mech.mechanism import Mechanism
from planar_mech.body import RigidBody
from planar_mech.geometry import Box
from planar_mech.joints import RevoluteJoint

def run(n: int, passes: int = 50):
    mech = Mechanism("chain")
    for i in range(n):
        mech.add_body(RigidBody(f"link{i}", Box(1.0, 0.1)))
    for i in range(1, n):
        mech.add_joint(RevoluteJoint(f"joint{i}", parent=f"link{i-1}", child=f"link{i}",
                                     parent_offset=(0.5, 0.0), child_offset=(0.5, 0.0)))
    World().add_mechanism(mech)

    rng = np.random.default_rng(12345)
    qs = rng.uniform(-np.pi, np.pi, size=(passes, n - 1))

    # warmup
    mech.initialize()

    t0 = time.perf_counter()
    for q in qs:
        mech.apply_joint_coordinates(q)
    t1 = time.perf_counter()
    return (t1 - t0) / passes

if __name__ == "__main__":
    for n in [10, 50, 100, 250, 500]:
        per_pass = run(n)
        print(f"N={n:4d}  fk={1e3*per_pass:8.3f} ms  passes/s={1/per_pass:8.1f}")
