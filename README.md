# particlesim

A small particle and rigid-body force simulation library, written in plain
Python with no third-party dependencies.

Particles carry a position, velocity, accumulated force, damping and a
lifetime, and are stepped with Euler integration. Force generators push them
around: gravity, drag, uniform wind, whirlwinds, springs, buoyancy, and an
alternating horizontal push for rigid bodies. Emitters release batches of
particles with Gaussian or uniform scatter, and fireworks burst into further
emitters when they expire.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

- `particlesim.vector` – `Vector3`, an immutable 3D vector with `+`, `-`,
  negation, scalar `*` and `/`, plus `magnitude()`, `unit_and_length()`,
  `dot()` and `cross()`. `unit_and_length()` of a zero vector gives a zero
  vector and a length of zero.
- `particlesim.particle` – `Particle`, `Projectile` and `CannonBall`.
  `Particle.integrate(t)` returns `False` once the particle has outlived its
  `time_to_live` or left the play area (y outside −10…50, x outside −50…50);
  the caller discards it. `Particle.box(pos, size)` builds a static cube of
  infinite mass that never expires. `clone()`, `add_force()`,
  `clear_force()` and `move(dx, dy, dz)` do what their names say.
- `particlesim.forces` – `GravityForceGenerator`, `DragGenerator`,
  `UniformWindGenerator` (drag relative to an air flow inside a cubic zone),
  `WhirlWindGenerator`, `SpringForceGenerator` (with
  `SpringForceGenerator.anchored(k, resting_length, anchor)` for a fixed
  anchor point), `FloatGenerator` (buoyancy on particles and rigid bodies),
  `HorizontalForceGenerator` (rigid bodies only), and
  `ParticleForceRegistry`, which pairs generators with particles. Every
  generator has `enabled` and `toggle()`.
- `particlesim.rigid` – `RigidBody` (position, velocities, mass, shape, and
  accumulated force and torque), `RigidBodyForceRegistry`, and the spawners
  `StaticRigidBodyGenerator` (one row of three boxes) and
  `UniformRigidBodyGenerator` (up to ten scattered boxes or spheres).
- `particlesim.generators` – `GaussianParticleGenerator`,
  `UniformParticleGenerator`, `CircleParticleGenerator` and `FireWork`.
  A Gaussian generator may be given a `ParticleForceRegistry` and a list of
  forces to attach to each particle it emits; forces without a registry
  raise `ValueError`.
- `particlesim.camera` – `Camera`, a free-look camera: W/A/S/D through
  `handle_key()`, mouse turning through `handle_mouse()` and
  `handle_motion()`, and `toggle_movement()`.
- `particlesim.player` – `PlayerController`, which turns W/A/S/D into torque
  on a `RigidBody`, tests collisions with particles by centre distance
  (`collides_with()`), and resets the body to its starting position.
- `particlesim.system` – `ParticleSystem`, which owns particles, emitters and
  a force registry, and offers the demos and level pieces built on them:
  `create_particle_generator()` with a `GeneratorKind` (FOUNTAIN, SNOW,
  LASER; FIREWORK builds nothing), `create_firework()` for keys E, R, T, Y,
  U and I, `create_physics_particle()` for keys z, x, c and v (other keys
  raise `ValueError`), `control_force_generators()`, the spring, slinky and
  float demos, `create_particle_cannon()`, `create_drag_zone()`,
  `create_water_zone()`, `create_bouncy_zone()`, `update_player_trail()`,
  `check_player_collision()` and `launch_win_fireworks()`.
  `update(t)` applies forces, integrates, bursts expired fireworks and runs
  the emitters.

Anything random takes an optional `random.Random`, so runs can be made
repeatable.

## Example

```python
from particlesim.forces import GravityForceGenerator, ParticleForceRegistry
from particlesim.particle import Particle
from particlesim.vector import Vector3

ball = Particle(Vector3(0, 10, 0), Vector3(0, 0, 0), 1.0, 20.0)
registry = ParticleForceRegistry()
registry.add(GravityForceGenerator(Vector3(0, -9.8, 0)), ball)

for _ in range(10):
    registry.update_forces(0.1)
    if not ball.integrate(0.1):
        break
print(ball.pos)
```

A whole scene runs through `ParticleSystem`:

```python
import random

from particlesim.system import GeneratorKind, ParticleSystem
from particlesim.vector import Vector3

system = ParticleSystem(random.Random(1))
system.create_particle_generator(GeneratorKind.FOUNTAIN, Vector3(0, 0, 0), Vector3(0, 5, 5))
system.create_firework("E")
for _ in range(60):
    system.update(1 / 30)
print(len(system.particles))
```

## What it does not do

- There is no window, rendering or command-line program; the package is a
  library to be driven from your own loop.
- Rigid bodies are not simulated. `RigidBody` only collects force and
  torque, and the generators only create bodies; moving them is up to the
  caller's physics step.
- There is no explosion force. The `v` demo particle is spawned with a
  random mass and position but no force acting on it.
- There is no level builder that lays out zones; the zone methods of
  `ParticleSystem` are the building blocks.