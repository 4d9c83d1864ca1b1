from physics_anim import Animation
from physics_anim.renderer import DebugRenderer

anim = Animation("electric-fields", seed=7)
anim.set("particleCount", 6)
anim.add_charge("negative", 200.0, 150.0)
anim.add_charge("positive", 600.0, 450.0)

renderer = DebugRenderer(verbose=True)
for frame in range(120):
    anim.update(16.0)
    if frame % 40 == 0:
        renderer.render_snapshot(anim.snapshot(with_field=False))

samples = anim.snapshot().field_samples
print("field arrows:", len(samples), "strongest |E|:", float((samples[:, 2:] ** 2).sum(axis=1).max() ** 0.5))
