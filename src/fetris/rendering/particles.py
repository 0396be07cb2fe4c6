"""Drifting background particles shown behind the menu screens."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List

from fetris.constants import (
    MAX_PARTICLES,
    PARTICLE_DECAY_PER_FRAME,
    PARTICLE_SPAWN_INTERVAL,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
)


@dataclass(slots=True)
class Particle:
    x: float
    y: float
    speed_x: float
    speed_y: float
    size: float
    lifetime: float = 1.0

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifetime)


@dataclass
class ParticleField:
    width: float = SCREEN_WIDTH
    height: float = SCREEN_HEIGHT
    max_particles: int = MAX_PARTICLES
    spawn_interval: float = PARTICLE_SPAWN_INTERVAL
    decay: float = PARTICLE_DECAY_PER_FRAME
    rng: random.Random = field(default_factory=random.Random)
    particles: List[Particle] = field(default_factory=list)
    _since_spawn: float = 0.0

    def _new_particle(self) -> Particle:
        return Particle(
            x=float(self.rng.randrange(int(self.width))),
            y=float(self.rng.randrange(int(self.height))),
            speed_x=(self.rng.random() - 0.5) * 2,
            speed_y=(self.rng.random() - 0.5) * 2,
            size=self.rng.random() * 2 + 1,
        )

    def update(self, dt: float) -> None:
        """Advance one frame: maybe spawn, move, decay, bounce off the edges."""
        self._since_spawn += dt
        if self._since_spawn >= self.spawn_interval:
            self._since_spawn = 0.0
            if len(self.particles) < self.max_particles:
                self.particles.append(self._new_particle())

        alive: List[Particle] = []
        for particle in self.particles:
            particle.x += particle.speed_x
            particle.y += particle.speed_y
            particle.lifetime -= self.decay
            if particle.lifetime <= 0:
                continue
            if particle.x < 0 or particle.x > self.width:
                particle.speed_x *= -1
            if particle.y < 0 or particle.y > self.height:
                particle.speed_y *= -1
            alive.append(particle)
        self.particles = alive

    def render(self, arcade) -> None:
        for particle in self.particles:
            alpha = int(255 * particle.alpha * 0.3)
            # Screen y grows upwards in arcade.
            arcade.draw_circle_filled(particle.x, self.height - particle.y, particle.size, (255, 255, 255, alpha))
