import random

from fetris.rendering.particles import Particle, ParticleField


def test_particle_count_is_capped():
    field = ParticleField(width=200, height=100, max_particles=5, spawn_interval=0.05, rng=random.Random(2))
    for _ in range(50):
        field.update(0.05)
        assert len(field.particles) <= 5
    assert len(field.particles) == 5
    for particle in field.particles:
        assert 0 < particle.lifetime <= 1.0


def test_spawning_waits_for_the_interval():
    field = ParticleField(width=200, height=100, spawn_interval=0.05, rng=random.Random(2))
    field.update(0.02)
    assert field.particles == []
    field.update(0.04)
    assert len(field.particles) == 1


def test_particles_decay_and_expire():
    field = ParticleField(width=200, height=100, spawn_interval=1000.0, decay=0.25)
    field.particles = [Particle(x=50, y=50, speed_x=0, speed_y=0, size=1)]
    field.update(0.0)
    assert field.particles[0].lifetime == 0.75
    assert field.particles[0].alpha == 0.75
    for _ in range(3):
        field.update(0.0)
    assert field.particles == []


def test_particles_bounce_off_the_edges():
    field = ParticleField(width=200, height=100, spawn_interval=1000.0)
    field.particles = [Particle(x=0.5, y=99.5, speed_x=-1.0, speed_y=1.0, size=1)]
    field.update(0.0)
    particle = field.particles[0]
    assert particle.speed_x == 1.0
    assert particle.speed_y == -1.0
