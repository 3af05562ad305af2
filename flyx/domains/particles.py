"""
Particle Flyweights
===================

A particle system where thousands of short-lived particles share a few
particle types. The type carries the shape, texture and physics constants;
each particle carries its own position, velocity, color, size and lifetime.

Physics per step of ``dt`` seconds:
    vx' = vx * (1 - air_resistance * dt)
    vy' = vy + gravity * dt
    x'  = x + vx' * dt
    y'  = y + vy' * dt

Spawning uses a numpy Generator so a seeded system is reproducible.
"""

import math
from dataclasses import dataclass, replace
from numbers import Real
from typing import List, Optional

import numpy as np

from ..errors import InvalidKeyError
from ..keys import FlyweightKey
from ..registry import FlyweightRegistry, SharingReport


@dataclass(frozen=True)
class Velocity:
    vx: float
    vy: float


@dataclass(frozen=True)
class ParticlePhysics:
    gravity: float
    air_resistance: float
    bounce_coefficient: float


@dataclass(frozen=True)
class ParticleKey(FlyweightKey):
    shape: str
    texture: str
    physics: ParticlePhysics

    def validate(self) -> None:
        super().validate()
        if not isinstance(self.physics, ParticlePhysics):
            raise InvalidKeyError(self, "physics must be a ParticlePhysics")
        values = (
            self.physics.gravity,
            self.physics.air_resistance,
            self.physics.bounce_coefficient,
        )
        if not all(isinstance(v, Real) and not isinstance(v, bool) for v in values):
            raise InvalidKeyError(self, "physics constants must be real numbers")
        if not all(math.isfinite(v) for v in values):
            raise InvalidKeyError(self, "physics constants must be finite")
        if self.physics.air_resistance < 0:
            raise InvalidKeyError(self, "air_resistance must be non-negative")


# Predefined particle types
EXPLOSION = ParticleKey("circle", "fire", ParticlePhysics(0.5, 0.1, 0.0))
SMOKE = ParticleKey("cloud", "smoke", ParticlePhysics(-0.1, 0.05, 0.0))
SPARK = ParticleKey("star", "electric", ParticlePhysics(0.8, 0.02, 0.7))


class ParticleType:
    """Shared particle type: shape, texture and physics."""

    __slots__ = ("_shape", "_texture", "_physics")

    def __init__(self, shape: str, texture: str, physics: ParticlePhysics):
        self._shape = shape
        self._texture = texture
        self._physics = physics

    @classmethod
    def from_key(cls, key: ParticleKey) -> "ParticleType":
        return cls(key.shape, key.texture, key.physics)

    @property
    def shape(self) -> str:
        return self._shape

    @property
    def texture(self) -> str:
        return self._texture

    @property
    def physics(self) -> ParticlePhysics:
        return self._physics

    def render(
        self, x: float, y: float, velocity: Velocity, color: str, size: float
    ) -> str:
        return (
            f"Rendering {self._shape} particle ({self._texture}) at ({x}, {y}) "
            f"with velocity ({velocity.vx}, {velocity.vy}), color: {color}, size: {size}"
        )

    def update(self, particle: "Particle", dt: float) -> "Particle":
        """Advance a particle's position and velocity by ``dt``."""
        physics = self._physics
        vx = particle.velocity.vx * (1 - physics.air_resistance * dt)
        vy = particle.velocity.vy + physics.gravity * dt
        return replace(
            particle,
            x=particle.x + vx * dt,
            y=particle.y + vy * dt,
            velocity=Velocity(vx, vy),
        )

    def __repr__(self) -> str:
        return f"ParticleType({self._shape!r}, {self._texture!r}, {self._physics!r})"


def particle_registry(**kwargs) -> FlyweightRegistry[ParticleKey, ParticleType]:
    kwargs.setdefault("name", "particle-types")
    return FlyweightRegistry(ParticleType.from_key, **kwargs)


@dataclass(frozen=True)
class Particle:
    x: float
    y: float
    velocity: Velocity
    color: str
    size: float
    lifetime: float
    particle_type: ParticleType

    def render(self) -> str:
        return self.particle_type.render(
            self.x, self.y, self.velocity, self.color, self.size
        )

    def update(self, dt: float) -> "Particle":
        updated = self.particle_type.update(self, dt)
        return replace(updated, lifetime=self.lifetime - dt)

    def is_alive(self) -> bool:
        return self.lifetime > 0


class ParticleSystem:
    """
    Spawns, advances and renders particles that share particle types.

    Args:
        registry: Registry of particle types, possibly shared with other systems
        seed: Seed for the spawn random generator
    """

    def __init__(
        self,
        registry: FlyweightRegistry[ParticleKey, ParticleType],
        seed: Optional[int] = None,
    ):
        self._registry = registry
        self._rng = np.random.default_rng(seed)
        self._particles: List[Particle] = []

    @staticmethod
    def _check_count(count: int) -> None:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

    def add_explosion(self, x: float, y: float, count: int) -> None:
        """Emit ``count`` particles radially, evenly spaced in angle."""
        self._check_count(count)
        explosion = self._registry.get_or_create(EXPLOSION)
        angles = np.radians(np.arange(count) * 360.0 / max(count, 1))
        speeds = 2.0 + self._rng.random(count) * 3.0
        vxs = np.cos(angles) * speeds
        vys = np.sin(angles) * speeds
        colors = np.where(self._rng.random(count) > 0.5, "red", "orange")
        sizes = 1.0 + self._rng.random(count) * 2.0
        lifetimes = 2.0 + self._rng.random(count) * 3.0

        for i in range(count):
            self._particles.append(
                Particle(
                    x,
                    y,
                    Velocity(float(vxs[i]), float(vys[i])),
                    str(colors[i]),
                    float(sizes[i]),
                    float(lifetimes[i]),
                    explosion,
                )
            )

    def add_smoke(self, x: float, y: float, count: int) -> None:
        """Emit ``count`` slowly rising gray particles around ``x``."""
        self._check_count(count)
        smoke = self._registry.get_or_create(SMOKE)
        vxs = (self._rng.random(count) - 0.5) * 0.5
        vys = -0.5 - self._rng.random(count) * 1.0
        xs = x + (self._rng.random(count) - 0.5) * 2.0
        sizes = 2.0 + self._rng.random(count) * 3.0
        lifetimes = 5.0 + self._rng.random(count) * 5.0

        for i in range(count):
            self._particles.append(
                Particle(
                    float(xs[i]),
                    y,
                    Velocity(float(vxs[i]), float(vys[i])),
                    "gray",
                    float(sizes[i]),
                    float(lifetimes[i]),
                    smoke,
                )
            )

    def add_sparks(self, x: float, y: float, count: int) -> None:
        """Emit ``count`` fast, short-lived sparks in random directions."""
        self._check_count(count)
        spark = self._registry.get_or_create(SPARK)
        angles = self._rng.uniform(0.0, 2 * np.pi, count)
        speeds = 4.0 + self._rng.random(count) * 4.0
        vxs = np.cos(angles) * speeds
        vys = np.sin(angles) * speeds
        colors = np.where(self._rng.random(count) > 0.5, "yellow", "white")
        sizes = 0.5 + self._rng.random(count) * 0.5
        lifetimes = 0.5 + self._rng.random(count) * 1.0

        for i in range(count):
            self._particles.append(
                Particle(
                    x,
                    y,
                    Velocity(float(vxs[i]), float(vys[i])),
                    str(colors[i]),
                    float(sizes[i]),
                    float(lifetimes[i]),
                    spark,
                )
            )

    def update(self, dt: float) -> None:
        """Advance every particle by ``dt`` and drop the dead ones."""
        advanced = (particle.update(dt) for particle in self._particles)
        self._particles = [p for p in advanced if p.is_alive()]

    @property
    def particles(self) -> List[Particle]:
        return list(self._particles)

    def render(self) -> List[str]:
        return [particle.render() for particle in self._particles]

    def particle_count(self) -> int:
        return len(self._particles)

    def particle_type_count(self) -> int:
        return self._registry.count()

    def report(self) -> SharingReport:
        return self._registry.report(self.particle_count())

    def memory_efficiency(self) -> str:
        report = self.report()
        return (
            f"Active particles: {report.instances}, "
            f"Particle types: {report.flyweights}, "
            f"Memory efficiency: {int(report.ratio)}:1 ratio"
        )
