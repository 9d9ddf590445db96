import math

import numpy as np
import pytest

from swarmtrail.config import FlockingConfig, ParticleConfig, SimulationConfig
from swarmtrail.particle_system import ParticleSystem

W, H = 400, 400


def test_particles_spawn_around_target(rng):
    system = ParticleSystem(100, 100, 50, "255, 0, 0", rng=rng)

    assert len(system) == 50
    assert system.color == (255, 0, 0)
    for p in system:
        assert abs(p.x - 100) <= 10 and abs(p.y - 100) <= 10
        assert (p.target_x, p.target_y) == (100, 100)
        assert p.color == (255, 0, 0)
        assert p.heading == pytest.approx(math.atan2(100 - p.y, 100 - p.x))


def test_count_defaults_to_config(rng):
    system = ParticleSystem(0, 0, config=SimulationConfig(particles_per_target=7), rng=rng)
    assert len(system) == 7


@pytest.mark.parametrize("count", [0, -3])
def test_needs_particles(rng, count):
    with pytest.raises(ValueError):
        ParticleSystem(0, 0, count, rng=rng)


def test_rejects_bad_color(rng):
    with pytest.raises(ValueError):
        ParticleSystem(0, 0, 5, "red", rng=rng)


def test_update_retargets_every_particle(rng):
    system = ParticleSystem(100, 100, 10, rng=rng)

    system.update(W, H, 300, 250)

    assert (system.target_x, system.target_y) == (300, 250)
    assert all((p.target_x, p.target_y) == (300, 250) for p in system)


def test_update_without_target_clears_it(rng):
    system = ParticleSystem(100, 100, 10, rng=rng)

    system.update(W, H)

    assert not system.has_target
    assert all(p.target_x is None and p.target_y is None for p in system)


def test_settles_around_stationary_target(rng):
    config = SimulationConfig(particle=ParticleConfig(max_speed=0.2, min_speed=0.0))
    system = ParticleSystem(100, 100, 10, "255,0,0", config=config, rng=rng)

    for _ in range(200):
        system.update(W, H, 100, 100)

    for p in system:
        assert math.hypot(p.x - 100, p.y - 100) < 5
        assert 0.0 <= p.speed <= 0.2


def test_drifts_without_target(rng):
    system = ParticleSystem(200, 200, 30, rng=rng)
    system.update(W, H, 200, 200)

    for _ in range(50):
        system.update(W, H)
        for p in system:
            assert p.radius <= p.x <= W - p.radius
            assert p.radius <= p.y <= H - p.radius
            assert 1.0 <= p.speed <= 3.0


def test_trails_persist_across_target_loss(rng):
    system = ParticleSystem(200, 200, 5, rng=rng)
    for _ in range(10):
        system.update(W, H, 200, 200)
    system.update(W, H)

    assert all(len(p.trail) == 11 for p in system)


def test_draw_delegates_in_pool_order(rng, surface):
    system = ParticleSystem(200, 200, 3, rng=rng)
    for _ in range(4):
        system.update(W, H, 210, 190)

    system.draw(surface)

    circles = surface.of_kind("circle")
    assert len(circles) == 12
    expected = [(r.x, r.y) for p in system for r in p.trail]
    assert [(c[1], c[2]) for c in circles] == expected


def flocking_config():
    return SimulationConfig(flocking=FlockingConfig(enabled=True, neighbourhood_radius=40))


def test_flocking_changes_motion():
    plain = ParticleSystem(200, 200, 20, rng=np.random.default_rng(3))
    flock = ParticleSystem(200, 200, 20, config=flocking_config(), rng=np.random.default_rng(3))

    for _ in range(5):
        plain.update(W, H, 250, 250)
        flock.update(W, H, 250, 250)

    moved = [(a.x, a.y) != (b.x, b.y) for a, b in zip(plain, flock)]
    assert any(moved)


def test_flocking_is_order_independent():
    forward = ParticleSystem(200, 200, 20, config=flocking_config(), rng=np.random.default_rng(5))
    backward = ParticleSystem(200, 200, 20, config=flocking_config(), rng=np.random.default_rng(5))
    backward.particles.reverse()

    for _ in range(5):
        forward.update(W, H, 220, 180)
        backward.update(W, H, 220, 180)

    for a, b in zip(forward.particles, reversed(backward.particles)):
        assert a.x == pytest.approx(b.x, abs=1e-6)
        assert a.y == pytest.approx(b.y, abs=1e-6)
        assert a.speed == pytest.approx(b.speed, abs=1e-6)


def test_flocking_respects_speed_band():
    system = ParticleSystem(200, 200, 50, config=flocking_config(), rng=np.random.default_rng(9))
    for tick in range(100):
        if tick < 60:
            system.update(W, H, 200, 200)
        else:
            system.update(W, H)
        assert all(1.0 <= p.speed <= 3.0 for p in system)
