import logging
from physics_anim import AnimationConfig
from physics_anim.renderer import bind_stats

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

# PHYSICS_ANIM_SEED / _WIDTH / _HEIGHT override the defaults
anim = AnimationConfig.from_env("gas-laws", params={"lawType": "charles"}).build()
anim.set("temperature", 450)

panel = {"p": "", "v": "", "t": "", "law": ""}
mappings = {
    "p": {"path": "pressure", "format": "decimal", "decimal_places": 3},
    "v": {"path": "volume", "format": "unit", "suffix": " px"},
    "t": {"path": "temperature", "format": "unit", "suffix": " K"},
    "law": {"path": "law_type", "format": "capitalize"},
}

for second in range(1, 6):
    for _ in range(60):
        anim.update(16.0)
    bind_stats(anim.stats(), mappings, panel)
    print(f"t={second}s", panel)
