from physics_anim import Animation
import math

anim = Animation("pendulum", seed=1)
anim.set("initialAngle", 10.0)
anim.set("damping", 0.0)
anim.handle_control("playPause")

for _ in range(4000):
    anim.frame(1.0)

s = anim.stats()
print("angle", s["angle"], "max amplitude", s["max_amplitude"])
print("measured period (ms):", s["measured_period"],
      "small-angle:", 2 * math.pi * math.sqrt(1.2 / 9.8) * 1000 / 3)
