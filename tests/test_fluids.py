import numpy as np
import pytest
from physics_anim import Animation
from physics_anim.animations.fluid_flow import classify_flow, flow_velocity
from physics_anim.animations.bernoulli import pressure_drop


def test_reynolds_number_regimes():
    """Re = round(flow_rate·50 / viscosity): 50, 2500, 5000."""
    anim = Animation("fluid-flow", seed=0)
    anim.set("flowRate", 1.0)
    assert anim.stats()["reynolds_number"] == 50
    assert anim.stats()["flow_type"] == "Laminar"

    anim.set("flowRate", 50.0)
    assert anim.stats()["flow_type"] == "Transitional"

    anim.set("flowRate", 100.0)
    assert anim.stats()["reynolds_number"] == 5000
    assert anim.stats()["flow_type"] == "Turbulent"

    anim.set("viscosity", 4.0)
    assert anim.stats()["reynolds_number"] == 1250
    assert anim.stats()["flow_type"] == "Laminar"

    assert classify_flow(2299) == "Laminar"
    assert classify_flow(2300) == "Transitional"
    assert classify_flow(4000) == "Turbulent"


def test_reynolds_override_and_modes():
    anim = Animation("fluid-flow")
    anim.set("reynoldsNumber", 3000)
    assert anim.state.flow_type == "Transitional"
    assert anim.state.flow_rate == 1.0

    anim.set("visualizationMode", "streamlines")
    with pytest.raises(ValueError):
        anim.set("visualizationMode", "smoke")
    assert anim.state.visualization_mode == "streamlines"


def test_free_stream_and_pointer():
    anim = Animation("fluid-flow", seed=1)
    st, vp = anim.state, anim.viewport
    v = flow_velocity(st, 100.0, 300.0, vp, anim.rng)
    assert np.allclose(v, [1.0, 0.0])

    # Pointer 20 px to the right pulls with weight (40 - 20) / 40 = 0.5
    anim.set_pointer(120.0, 300.0)
    v = flow_velocity(st, 100.0, 300.0, vp, anim.rng)
    assert np.allclose(v, [1.0 + 0.5 * 1.2, 0.0])

    anim.set_pointer(None)
    assert st.pointer is None
    anim.set_pointer(0.0, 50.0)
    assert st.pointer is None


def test_flow_particles_recycle():
    anim = Animation("fluid-flow", seed=2)
    anim.set("flowRate", 3.0)
    for _ in range(400):
        anim.update(16.0)
    for p in anim.bodies():
        assert -50 <= p.position[0] <= 800 + 50
        assert p.life <= 10000


def test_bernoulli_speedup_in_constriction():
    """Continuity: inside 300 < x < 500 the particle moves 1.5x its inlet speed."""
    anim = Animation("bernoulli", seed=0)
    st = anim.state
    p = st.particles[0]
    p.position[:] = (400.0, 300.0)
    anim.update(16.0)
    assert np.isclose(p.velocity[0], 1.5 * st.inlet_speeds[0])

    p.position[:] = (100.0, 300.0)
    anim.update(16.0)
    assert np.isclose(p.velocity[0], st.inlet_speeds[0])


def test_bernoulli_pressure_drop():
    """Δp = ½ρ(v₂² - v₁²) with v₂ = 1.5·v₁:  ½·1·(2.25 - 1) = 0.625"""
    anim = Animation("bernoulli")
    assert np.isclose(anim.stats()["pressure_drop"], 0.625)
    assert np.isclose(pressure_drop(anim.state), 0.625)

    anim.set("fluidDensity", 2.0)
    assert np.isclose(anim.stats()["pressure_drop"], 1.25)

    with pytest.raises(ValueError):
        anim.set("visualizationMode", "streamlines")


def test_bernoulli_particles_stay_in_pipe():
    anim = Animation("bernoulli", seed=5)
    for _ in range(300):
        anim.update(16.0)
    for p in anim.bodies():
        assert 150.0 <= p.position[1] <= 450.0


def test_pointer_as_a_parameter():
    anim = Animation("fluid-flow", seed=1)
    anim.set("pointer", (100.0, 100.0))
    assert anim.state.pointer == (100.0, 100.0)
    anim.set_many({"pointer": None})
    assert anim.state.pointer is None

    with pytest.raises(ValueError):
        anim.set("pointer", 5.0)
    with pytest.raises(ValueError):
        anim.set("pointer", (1.0, 2.0, 3.0))


def test_max_particles_respawns_immediately():
    flow = Animation("fluid-flow", seed=4)
    flow.set("maxParticles", 20)
    assert len(flow.bodies()) == 20

    pipe = Animation("bernoulli", seed=4)
    pipe.set("maxParticles", 10)
    assert len(pipe.bodies()) == 10
    assert len(pipe.state.inlet_speeds) == 10
    for _ in range(50):
        pipe.update(16.0)
    assert len(pipe.bodies()) == 10
