"""A simple 2D particle emitter on the XZ plane."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .matrix import Vector3D, rotation_y


@dataclass(frozen=True)
class Color:
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b
        yield self.a


@dataclass
class Particle:
    position: Vector3D
    velocity: Vector3D
    color: Color
    size: float
    age: int = 0
    dead: bool = False


SpriteDrawer = Callable[[int, float, float, float, Color], None]


@dataclass
class Particle2DSystem:
    """Emits one particle per update inside a cone of directions."""

    center: Vector3D = Vector3D()
    main_velocity: Vector3D = Vector3D()
    begin: Vector3D = Vector3D()
    half_angle: int = 0
    particle_lifetime: int = 1
    start_color: Color = Color()
    end_color: Color = Color()
    start_size: float = 1.0
    end_size: float = 1.0
    max_system_lifetime: int = 0
    system_age: int = 0
    is_dead: bool = False
    particles: list[Particle] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def set_particle_lifetime(self, lifetime: int) -> None:
        if lifetime <= 0:
            raise ValueError("particle lifetime must be positive")
        self.particle_lifetime = lifetime

    def set_position(self, x: float, y: float, z: float) -> None:
        self.center = Vector3D(x, y, z)

    def set_direction_intervals(self, velocity: Vector3D, half_angle: int) -> None:
        """Set the main velocity and the spread of emitted directions."""
        self.main_velocity = velocity
        self.half_angle = half_angle
        self.begin = velocity.transform(rotation_y(-(half_angle / 2.0) * 0.0175))

    def set_colors(self, start: Color, end: Color) -> None:
        self.start_color = start
        self.end_color = end

    def set_sizes(self, start: float, end: float) -> None:
        self.start_size = start
        self.end_size = end

    def set_system_lifetime(self, lifetime: int) -> None:
        """Limit the emitter to ``lifetime`` updates; 0 means forever."""
        self.max_system_lifetime = lifetime
        self.system_age = 0

    def _age(self, particle: Particle) -> None:
        lifetime = self.particle_lifetime
        particle.age += 1
        particle.position = particle.position + particle.velocity

        color_step = 1.0 / lifetime
        size_step = abs(self.end_size - self.start_size) / lifetime
        if particle.size < self.end_size:
            particle.size += size_step
        if particle.size > self.end_size:
            particle.size -= size_step

        particle.color = Color(*(
            value - color_step if end < value else value + color_step
            for value, end in zip(particle.color, self.end_color)
        ))
        if particle.age >= lifetime:
            particle.dead = True

    def _spawn(self) -> Particle:
        if self.half_angle <= 0:
            raise ValueError("direction intervals are not set")
        angle = 0.175 * (self.rng.randrange(self.half_angle) + 1)
        a = math.cos(angle)
        b = math.sin(angle)
        velocity = Vector3D(
            self.begin.x * a + self.begin.z * b,
            0.0,
            -self.begin.x * b + self.begin.z * a,
        ).normalize()
        return Particle(
            position=Vector3D(self.center.x, self.center.y, self.center.z),
            velocity=velocity,
            color=self.start_color,
            size=self.start_size,
        )

    def update(self) -> None:
        """Age live particles, drop dead ones and emit a new one."""
        for particle in self.particles:
            if not particle.dead:
                self._age(particle)
        self.particles = [p for p in self.particles if not p.dead]

        if self.max_system_lifetime > 0:
            self.system_age += 1
            if self.system_age >= self.max_system_lifetime:
                self.is_dead = True

        if not self.is_dead:
            self.particles.append(self._spawn())

    def draw(self, draw_sprite: SpriteDrawer, pic_index: int,
             shift: Vector3D = Vector3D()) -> None:
        """Call ``draw_sprite(pic_index, x, y, size, color)`` per live particle.

        Screen x comes from the particle's x and screen y from its z.
        """
        for particle in self.particles:
            if not particle.dead:
                draw_sprite(pic_index,
                            particle.position.x + shift.x,
                            particle.position.z + shift.z,
                            particle.size,
                            particle.color)

    def destroy(self) -> None:
        self.particles.clear()
        self.is_dead = True