import math
import numpy as np
from physics_anim import Animation
from physics_anim.animations.orbital import MAX_ECCENTRICITY, MIN_CENTRAL_MASS, MIN_SEMI_MAJOR_AXIS


def test_perigee_apogee_after_full_orbit():
    """
    r(θ) = a(1 - e²) / (1 + e·cos θ):
      perigee = a(1 - e) = 160,  apogee = a(1 + e) = 240   (a = 200, e = 0.2)
    """
    anim = Animation("orbital-motion", seed=0)
    for _ in range(700):
        anim.update(160.0)
        assert 0.0 <= anim.state.angle < 2 * math.pi

    s = anim.stats()
    print("perigee", s["perigee"], "apogee", s["apogee"])
    assert np.isclose(s["perigee"], 160.0, rtol=1e-3)
    assert np.isclose(s["apogee"], 240.0, rtol=1e-3)


def test_kepler_period_and_speed():
    """T = 2π·sqrt(a³/M); the speed shown is ω·r."""
    anim = Animation("orbital-motion")
    anim.set("centralMass", 4.0)
    T = 2 * math.pi * math.sqrt(200.0 ** 3 / 4.0)
    assert np.isclose(anim.stats()["period"], T)

    anim.update(100.0)
    s = anim.stats()
    omega = 2 * math.pi / T
    assert np.isclose(s["speed"], omega * s["distance"])


def test_circular_orbit_keeps_radius():
    anim = Animation("orbital-motion")
    anim.set("eccentricity", 0.0)
    for _ in range(50):
        anim.update(160.0)
        assert np.isclose(anim.stats()["distance"], 200.0)

    s = anim.stats()
    assert np.isclose(s["perigee"], s["apogee"])


def test_elements_follow_setters():
    anim = Animation("orbital-motion")
    anim.set("semiMajorAxis", 100.0)
    anim.set("eccentricity", 0.6)
    st = anim.state
    assert np.isclose(st.semi_minor_axis, 80.0)
    assert np.isclose(st.focal_distance, 60.0)
    assert len(st.orbit_path) == 181
    assert np.allclose(st.orbit_path[0], (400.0 + 40.0, 300.0))


def test_orbit_setters_stay_in_range():
    """e >= 1 is held at 0.99 and a zero central mass at a small floor, so the orbit stays finite."""
    anim = Animation("orbital-motion")
    anim.set("eccentricity", 1.0)
    assert anim.state.eccentricity == MAX_ECCENTRICITY
    anim.set("eccentricity", 3.0)
    assert anim.state.eccentricity == MAX_ECCENTRICITY
    anim.set("eccentricity", -0.5)
    assert anim.state.eccentricity == 0.0

    anim.set("centralMass", 0.0)
    assert anim.state.central_mass == MIN_CENTRAL_MASS
    anim.set("semiMajorAxis", 0.0)
    assert anim.state.semi_major_axis == MIN_SEMI_MAJOR_AXIS

    anim.set("eccentricity", 1.5)
    for _ in range(20):
        anim.update(160.0)
    s = anim.stats()
    assert math.isfinite(s["period"])
    assert math.isfinite(s["speed"]) and math.isfinite(s["distance"])
