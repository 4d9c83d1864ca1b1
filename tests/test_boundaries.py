import numpy as np
from physics_anim.types import Body
from physics_anim.core.boundaries import clamp_in_box, reflect_in_box, wrap_in_box
from physics_anim.core.integrators import scaled_dt, euler_step, drift, limit_speed


def test_reflect_point_particle():
    """Crossing x = 0 with e = 0.8: v -> -0.8 v and x clamped to the wall."""
    b = Body(position=(-5.0, 50.0), velocity=(-10.0, 3.0))
    hits = reflect_in_box(b, 0.0, 0.0, 100.0, 100.0, restitution=0.8, margin=0.0)

    assert hits == 1
    assert np.allclose(b.velocity, [8.0, 3.0])
    assert np.allclose(b.position, [0.0, 50.0])


def test_reflect_disk_uses_radius():
    b = Body(position=(95.0, 50.0), velocity=(5.0, 0.0), radius=10.0)
    reflect_in_box(b, 0.0, 0.0, 100.0, 100.0, restitution=0.8)

    assert np.allclose(b.position, [90.0, 50.0])
    assert np.allclose(b.velocity, [-4.0, 0.0])


def test_reflect_corner_hits_both_axes():
    b = Body(position=(105.0, -2.0), velocity=(1.0, -1.0))
    assert reflect_in_box(b, 0.0, 0.0, 100.0, 100.0, restitution=1.0, margin=0.0) == 2
    assert np.allclose(b.position, [100.0, 0.0])
    assert np.allclose(b.velocity, [-1.0, 1.0])


def test_inside_box_untouched():
    b = Body(position=(50.0, 50.0), velocity=(1.0, 1.0), radius=5.0)
    assert reflect_in_box(b, 0.0, 0.0, 100.0, 100.0, restitution=0.5) == 0
    assert np.allclose(b.velocity, [1.0, 1.0])


def test_wrap_to_opposite_edge():
    b = Body(position=(-1.0, 601.0))
    assert wrap_in_box(b, 800.0, 600.0)
    assert np.allclose(b.position, [800.0, 0.0])

    b = Body(position=(801.0, 300.0))
    wrap_in_box(b, 800.0, 600.0)
    assert np.allclose(b.position, [0.0, 300.0])


def test_scaled_dt():
    assert np.isclose(scaled_dt(16.0), 0.016)
    assert np.isclose(scaled_dt(16.0, speed=2.0, time_scale=5.0), 0.16)


def test_semi_implicit_euler_order():
    """
    Velocity first, then position with the new velocity:
      v = 0 + 10·0.1 = 1,  x = 0 + 1·0.1 = 0.1
    """
    b = Body()
    euler_step(b, (0.0, 10.0), 0.1)
    assert np.allclose(b.velocity, [0.0, 1.0])
    assert np.allclose(b.position, [0.0, 0.1])


def test_drift_and_speed_limit():
    b = Body(velocity=(3.0, 4.0))
    assert np.isclose(drift(b, 2.0), 10.0)
    assert np.allclose(b.position, [6.0, 8.0])

    assert not limit_speed(b, 10.0, 0.5)
    assert limit_speed(b, 4.0, 0.5)
    assert np.allclose(b.velocity, [1.5, 2.0])


def test_clamp_keeps_velocity():
    """clamp_in_box only moves the body back inside; velocity is untouched."""
    b = Body(position=(-0.4, 103.0), velocity=(-2.0, 1.0), radius=5.0)
    clamp_in_box(b, 0.0, 0.0, 100.0, 100.0)
    assert np.allclose(b.position, [5.0, 95.0])
    assert np.allclose(b.velocity, [-2.0, 1.0])

    p = Body(position=(50.0, 100.2))
    clamp_in_box(p, 0.0, 0.0, 100.0, 100.0, margin=0.0)
    assert np.allclose(p.position, [50.0, 100.0])
