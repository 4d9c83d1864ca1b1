import numpy as np
import pytest
from physics_anim import Animation, Snapshot, Viewport
from physics_anim.types import Body, Source


def test_snapshot_is_read_only():
    anim = Animation("collision-physics", seed=0)
    snap = anim.snapshot()
    with pytest.raises(ValueError):
        snap.positions[0, 0] = 1.0
    with pytest.raises(ValueError):
        snap.velocities[0] = 0.0


def test_snapshot_detached_from_state():
    anim = Animation("collision-physics", seed=0)
    snap = anim.snapshot()
    before = snap.positions.copy()
    for _ in range(10):
        anim.update(16.0)
    assert np.array_equal(snap.positions, before)
    assert not np.array_equal(anim.snapshot().positions, before)


def test_snapshot_shapes():
    snap = Snapshot.build("x", 0.0, bodies=[], sources=[])
    assert snap.positions.shape == (0, 2)
    assert snap.radii.shape == (0,)
    assert snap.source_positions.shape == (0, 2)
    assert snap.field_samples is None

    bodies = [Body(position=(1, 2), radius=3, charge=-1), Body(position=(4, 5))]
    snap = Snapshot.build("y", 16.0, bodies, [Source((0, 0), sign=-1, magnitude=2.0)])
    assert np.allclose(snap.positions, [[1, 2], [4, 5]])
    assert np.allclose(snap.charges, [-1, 0])
    assert np.allclose(snap.source_signs, [-2.0])


def test_magnetic_snapshot_field_grid():
    snap = Animation("magnetic-fields").snapshot()
    # 40 px grid: 19 columns x 14 rows, arrows drawn along +y
    assert snap.field_samples.shape == (19 * 14, 4)
    assert np.all(snap.field_samples[:, 2] == 0.0)
    assert snap.field_samples.flags.writeable is False
    assert Animation("pendulum").snapshot().field_samples is None


def test_viewport_validation():
    with pytest.raises(ValueError):
        Viewport(-1, 10)
