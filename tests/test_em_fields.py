import numpy as np
import pytest
from physics_anim import Animation
from physics_anim.animations.electric_fields import field_at


def test_default_charges_and_editing():
    anim = Animation("electric-fields", seed=0)
    src = anim.sources()
    assert [s.sign for s in src] == [1, -1]
    assert np.allclose(src[0].position, [240.0, 300.0])
    assert np.allclose(src[1].position, [560.0, 300.0])

    anim.add_charge("negative", 100, 100)
    anim.add_charge("positive", 700, 500)
    assert anim.stats()["charge_count"] == 4

    anim.clear_charges()
    assert anim.stats()["charge_count"] == 2

    with pytest.raises(ValueError):
        anim.add_charge("neutral", 10, 10)


def test_field_between_dipole_points_to_negative():
    """Midway between + and - the field points from + toward -."""
    anim = Animation("electric-fields")
    e = field_at(anim.state, (400.0, 300.0))
    print("E mid", e)
    assert e[0] > 0
    assert np.isclose(e[1], 0.0)


def test_tracers_wrap_inside_viewport():
    anim = Animation("electric-fields", seed=9)
    anim.set("fieldStrength", 3.0)
    for _ in range(200):
        anim.update(16.0)
    pos = anim.snapshot(with_field=False).positions
    assert np.all((pos[:, 0] >= 0) & (pos[:, 0] <= 800))
    assert np.all((pos[:, 1] >= 0) & (pos[:, 1] <= 600))
    assert all(len(p.trail) == 30 for p in anim.bodies())


def test_electric_field_grid():
    """Arrow grid every 30 px, excluding the edges: 26 x 19 samples."""
    snap = Animation("electric-fields").snapshot()
    assert snap.field_samples.shape == (26 * 19, 4)
    assert np.allclose(snap.source_signs, [1.0, -1.0])


def test_magnets_add_clear_and_strength():
    anim = Animation("magnetic-fields", seed=0)
    assert anim.stats()["magnet_count"] == 1
    anim.add_magnet(100, 100)
    anim.set("fieldStrength", 3.0)
    assert [m.magnitude for m in anim.sources()] == [3.0, 3.0]

    anim.clear_magnets()
    assert anim.stats()["magnet_count"] == 0


def test_no_magnets_means_straight_lines():
    """B = 0 everywhere: velocities never change."""
    anim = Animation("magnetic-fields", seed=4)
    anim.clear_magnets()
    v0 = anim.snapshot().velocities.copy()
    for _ in range(50):
        anim.update(16.0)
    assert np.array_equal(anim.snapshot().velocities, v0)


def test_opposite_charges_curve_opposite_ways():
    anim = Animation("magnetic-fields", seed=0)
    anim.set("particleCount", 2)
    a, b = anim.bodies()
    for body, q in ((a, 1.0), (b, -1.0)):
        body.position[:] = (300.0, 300.0)
        body.velocity[:] = (20.0, 0.0)
        body.charge = q
    anim.update(16.0)
    print("vy", a.velocity[1], b.velocity[1])
    assert a.velocity[1] < 0 < b.velocity[1]
