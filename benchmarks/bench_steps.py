"""
Microbenchmark: time per frame vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
from physics_anim import Animation
from physics_anim.profiler import Profiler

KINDS = ("brownian-motion", "gas-laws", "diffusion", "electric-fields", "collision-physics")


def run(kind: str, n: int, steps: int = 300):
    prof = Profiler()
    anim = Animation(kind, seed=12345, profiler=prof)  # determinism
    count_param = "ball_count" if kind == "collision-physics" else "particle_count"
    anim.set(count_param, n)
    if kind == "gas-laws":
        anim.set("particle_collisions", True)
    if kind == "diffusion":
        anim.start_diffusion()

    # warmup
    for _ in range(30):
        anim.update(16.0)
    prof.clear()

    t0 = time.perf_counter()
    for _ in range(steps):
        anim.update(16.0)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.times.summary()


if __name__ == "__main__":
    for kind in KINDS:
        for n in [10, 50, 100, 250]:
            per_step, summary = run(kind, n)
            print(f"{kind:<18} N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            if "step" in summary:
                print("  step", summary["step"])
        print()
