import io
from physics_anim import Animation
from physics_anim.renderer import DebugRenderer, bind_stats, format_value, lookup_path


def test_bind_pendulum_stats():
    anim = Animation("pendulum")
    sink = {"angle-value": "", "time-value": "", "period-value": ""}
    mappings = {
        "angle-value": {"path": "angle", "format": "angle"},
        "time-value": {"path": "time", "format": "time"},
        "period-value": {"path": "theoretical_period", "format": "decimal", "decimal_places": 3},
        "energy-value": {"path": "total_energy", "format": "decimal"},
    }
    anim.update(1500.0)
    anim.set("initialAngle", 12.34)

    written = bind_stats(anim.stats(), mappings, sink)
    print(sink)
    assert written == 3
    assert "energy-value" not in sink
    assert sink["angle-value"] == "12.3°"
    assert sink["time-value"] == "1.5s"
    assert sink["period-value"] == f"{anim.stats()['theoretical_period']:.3f}"


def test_formats():
    assert format_value(0.256, {"format": "percentage", "transform": lambda v: v * 100, "decimal_places": 0}) == "26%"
    assert format_value(300, {"format": "unit", "suffix": " K"}) == "300 K"
    assert format_value(True, {"format": "boolean"}) == "Active"
    assert format_value(False, {"format": "boolean"}) == "Hidden"
    assert format_value("laminar", {"format": "capitalize"}) == "Laminar"
    assert format_value("boyle", {"format": "uppercase"}) == "BOYLE"
    assert format_value(None, {"format": "decimal", "fallback": "N/A"}) == "N/A"
    assert format_value(None, {}) == ""
    assert format_value(7, {}) == "7"


def test_nested_paths():
    stats = {"orbit": {"perigee": 160.0, "apogee": None}}
    assert lookup_path(stats, "orbit.perigee") == 160.0
    assert lookup_path(stats, "orbit.apogee") is None
    assert lookup_path(stats, "orbit.period") is None
    assert lookup_path(stats, "orbit.perigee.value") is None

    sink = {"apogee": "old"}
    bind_stats(stats, {"apogee": {"path": "orbit.apogee", "fallback": "-"}}, sink)
    assert sink["apogee"] == "-"


def test_debug_renderer_output():
    out = io.StringIO()
    anim = Animation("electric-fields", seed=0)
    anim.set("particleCount", 3)
    DebugRenderer(output=out, max_bodies=2).render_snapshot(anim.snapshot(with_field=False))

    text = out.getvalue()
    print(text)
    assert text.startswith("=== electric-fields t=0.0ms ===")
    assert "(3 bodies, showing 2)" in text
    assert "source +1.00 @ (240.0, 300.0)" in text
    assert "[1]" in text and "[2]" not in text
    assert "charge_count=2" in text
