import math
import numpy as np
from physics_anim import Animation


def test_small_angle_period():
    """
    Small-angle period, in scaled seconds:
      T = 2π·sqrt((L/100) / (g·9.8)),  L = 120 px  ->  T ≈ 2.1987
    One wall-clock ms advances 3 ms of simulation, so the measured
    period is T·1000/3 ≈ 732.9 ms.
    """
    anim = Animation("pendulum", seed=0)
    anim.set("initialAngle", 5.0)
    anim.set("damping", 0.0)

    for _ in range(5000):
        anim.update(1.0)

    T = 2 * math.pi * math.sqrt(1.2 / 9.8) * 1000 / 3
    measured = anim.stats()["measured_period"]
    err = abs(measured - T) / T
    print("period", measured, "exp", T, "relerr", err)

    assert len(anim.state.periods) >= 5
    assert err <= 0.01


def test_initial_angle_in_degrees():
    anim = Animation("pendulum")
    anim.set("initial_angle", 30)
    assert np.isclose(anim.state.angle, math.radians(30))
    assert np.isclose(anim.stats()["angle"], 30.0)

    anim.reset()
    assert np.isclose(anim.stats()["angle"], 30.0)
    assert anim.stats()["angular_velocity"] == 0.0


def test_drag_shrinks_swing():
    """Without drag the swing keeps its amplitude; with drag it decays."""
    free = Animation("pendulum")
    free.set("damping", 0.0)
    damped = Animation("pendulum")
    damped.set("damping", 0.5)

    peak_free = 0.0
    peak_damped = 0.0
    for i in range(6000):
        free.update(1.0)
        damped.update(1.0)
        if i >= 5000:
            peak_free = max(peak_free, abs(free.state.angle))
            peak_damped = max(peak_damped, abs(damped.state.angle))

    print("late peaks", math.degrees(peak_free), math.degrees(peak_damped))
    assert abs(peak_free - math.pi / 4) < 0.02
    assert peak_damped < 0.8 * peak_free


def test_bob_hangs_below_pivot():
    anim = Animation("pendulum", width=800, height=600)
    anim.set("initialAngle", 0.0)
    bob = anim.bodies()[0]
    assert np.allclose(bob.position, [400.0, 180.0 + 120.0])
    assert bob.radius == 15.0

    stats = anim.stats()
    assert stats["kinetic_energy"] == 0.0
    assert stats["potential_energy"] == 0.0


def test_history_toggles():
    anim = Animation("pendulum")
    anim.set("showPath", True)
    anim.set("showPhaseSpace", True)
    for _ in range(10):
        anim.update(16.0)
    assert len(anim.state.path) == 10
    assert len(anim.state.phase_space) == 10

    anim.set("showPath", False)
    assert len(anim.state.path) == 0
