import numpy as np
import pytest

from planar_mech.body import RigidBody
from planar_mech.errors import InvalidArgument
from planar_mech.geometry import Box, Circle
from planar_mech.invariants import kinetic_energy, linear_momentum, potential_energy, total_energy
from planar_mech.materials import ICE, STEEL, WOOD, Material
from planar_mech.types import Configuration, Velocity, Vec2, Wrench


def make_box(**kwargs) -> RigidBody:
    return RigidBody("box", Box(2.0, 1.0), Material(density=10.0), **kwargs)


def test_mass_properties_derived_from_shape_and_material():
    body = make_box()
    assert body.mass == pytest.approx(20.0)
    assert body.inertia == pytest.approx(10.0 * 5 / 6)
    with pytest.raises(AttributeError):
        body.mass = 1.0


def test_mass_matrix_order_is_inertia_mass_mass():
    body = make_box()
    M = body.get_mass_matrix()
    assert M.shape == (3, 3)
    assert np.allclose(np.diag(M), (body.inertia, body.mass, body.mass))
    assert np.count_nonzero(M - np.diag(np.diag(M))) == 0


def test_new_body_is_an_unlinked_root():
    body = make_box()
    assert body.parent is None
    assert body.children == []
    assert body.is_root
    assert body.configuration == Configuration()
    assert body.velocity == Velocity()
    assert body.wrench == Wrench()


def test_energies():
    body = make_box(configuration=Configuration(0.0, 1.0, 3.0), velocity=Velocity(2.0, 3.0, 4.0))
    ke = 0.5 * 20.0 * 25.0 + 0.5 * body.inertia * 4.0
    assert body.kinetic_energy() == pytest.approx(ke)
    assert body.potential_energy() == pytest.approx(20.0 * 9.81 * 3.0)
    assert body.potential_energy(g=1.62) == pytest.approx(20.0 * 1.62 * 3.0)
    assert body.energy() == pytest.approx(ke + 20.0 * 9.81 * 3.0)

    # potential energy grows with height
    body.set_configuration(Configuration(0.0, 1.0, 4.0))
    assert body.potential_energy() > 20.0 * 9.81 * 3.0


def test_state_vector_round_trip():
    body = make_box()
    body.set_state([0.1, 1.0, 2.0, 0.5, -1.0, 0.0])
    assert body.get_configuration() == Configuration(0.1, 1.0, 2.0)
    assert body.get_velocity() == Velocity(0.5, -1.0, 0.0)
    assert np.allclose(body.get_state_vector(), [0.1, 1.0, 2.0, 0.5, -1.0, 0.0])
    with pytest.raises(InvalidArgument):
        body.set_state([1.0, 2.0, 3.0])


def test_wrench_accumulates_and_clears():
    body = make_box()
    body.apply_wrench(Wrench(1.0, 2.0, 3.0))
    body.apply_wrench([0.5, -2.0, 1.0])
    assert np.allclose(body.get_generalized_forces_vector(), (1.5, 0.0, 4.0))
    body.clear_wrench()
    assert body.wrench == Wrench()


def test_local_world_mapping():
    body = make_box(configuration=Configuration(np.pi / 2, 10.0, 0.0))
    p = body.local_to_world((1.0, 0.0))
    assert np.allclose(p, (10.0, 1.0))
    assert np.allclose(body.world_to_local(p), (1.0, 0.0))

    corners = body.world_vertices()
    assert len(corners) == 4
    # bottom-left corner (-1, -0.5) rotated by 90 degrees then shifted
    assert np.allclose(corners[0], (10.5, -1.0))


def test_system_invariants():
    a = RigidBody("a", Circle(1.0), Material(density=1.0), velocity=Velocity(0.0, 1.0, 0.0))
    b = RigidBody("b", Circle(1.0), Material(density=1.0), velocity=Velocity(0.0, -1.0, 0.0),
                  configuration=Configuration(0.0, 0.0, 2.0))
    assert np.allclose(linear_momentum([a, b]), (0.0, 0.0))
    assert kinetic_energy([a, b]) == pytest.approx(np.pi)
    assert potential_energy([a, b], g=9.81) == pytest.approx(np.pi * 9.81 * 2.0)
    assert total_energy([a, b]) == pytest.approx(np.pi + np.pi * 9.81 * 2.0)


def test_vec2_helpers():
    v = Vec2(3.0, 4.0)
    assert v.norm() == pytest.approx(5.0)
    assert v + (1.0, 1.0) == Vec2(4.0, 5.0)
    assert 2 * v == Vec2(6.0, 8.0)
    assert -v == Vec2(-3.0, -4.0)
    assert v.dot(Vec2(1.0, 0.0)) == 3.0
    x, y = v
    assert (x, y) == (3.0, 4.0)
    with pytest.raises(InvalidArgument):
        Configuration.from_array([1.0, 2.0])


def test_material_defaults_and_validation():
    assert Material() == Material(7850.0, 0.6, 0.7, 0.5, "black")
    assert STEEL.density == Material().density
    assert WOOD.density < ICE.density < STEEL.density
    with pytest.raises(InvalidArgument):
        Material(density=0.0)
    with pytest.raises(InvalidArgument):
        Material(density=-5.0)
    with pytest.raises(AttributeError):
        WOOD.density = 1.0
