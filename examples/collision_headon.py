from physics_anim import Animation
from physics_anim.core import kinetic_energy, linear_momentum

anim = Animation("collision-physics", seed=0)
anim.set_many({"gravity": 0.0, "restitution": 1.0, "collisionType": "head-on"})

balls = anim.bodies()
p0 = linear_momentum(balls)
ke0 = kinetic_energy(balls)

for _ in range(60):
    anim.update(16.0)

balls = anim.bodies()
p1 = linear_momentum(balls)
ke1 = kinetic_energy(balls)

print("p0", p0, "p1", p1, "dp", p1 - p0)
print("ke0", ke0, "ke1", ke1, "(friction drains", ke0 - ke1, ")")
print("v_final a,b:", balls[0].velocity, balls[1].velocity)
print("collisions:", anim.stats()["collision_count"])
