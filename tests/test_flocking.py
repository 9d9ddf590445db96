import numpy as np
import pytest

from swarmtrail.config import FlockingConfig
from swarmtrail.flocking import FlockSnapshot, Neighbourhood, flocking_force
from swarmtrail.particle import Particle


def neighbourhood(positions, velocities=None):
    positions = np.array(positions, dtype=float).reshape(-1, 2)
    if velocities is None:
        velocities = np.zeros_like(positions)
    return Neighbourhood(positions, np.array(velocities, dtype=float).reshape(-1, 2))


def only(**weights):
    params = dict(cohesion_weight=0.0, separation_weight=0.0, alignment_weight=0.0)
    params.update(weights)
    return FlockingConfig(enabled=True, **params)


def test_no_neighbours_no_force():
    force = flocking_force(0, 0, 1, 0, neighbourhood([]), FlockingConfig())
    assert force.tolist() == [0.0, 0.0]


def test_neighbours_out_of_range_ignored():
    force = flocking_force(0, 0, 1, 0, neighbourhood([(100, 0)]), FlockingConfig())
    assert force.tolist() == [0.0, 0.0]


def test_cohesion_pulls_to_centroid():
    force = flocking_force(0, 0, 0, 0, neighbourhood([(10, 0), (0, 10)]), only(cohesion_weight=1.0))
    assert force == pytest.approx([5.0, 5.0])


def test_separation_is_inverse_square():
    config = only(separation_weight=1.0)
    near = flocking_force(0, 0, 0, 0, neighbourhood([(2, 0)]), config)
    nearer = flocking_force(0, 0, 0, 0, neighbourhood([(1, 0)]), config)

    assert near == pytest.approx([-0.25, 0.0])
    assert nearer == pytest.approx([-1.0, 0.0])


def test_separation_only_inside_half_radius():
    config = only(separation_weight=1.0)
    force = flocking_force(0, 0, 0, 0, neighbourhood([(20, 0)]), config)
    assert force.tolist() == [0.0, 0.0]


def test_coincident_neighbour_has_no_separation():
    force = flocking_force(5, 5, 0, 0, neighbourhood([(5, 5)]), FlockingConfig())
    assert np.all(np.isfinite(force))
    assert force == pytest.approx([0.0, 0.0])


def test_alignment_pulls_toward_mean_velocity():
    hood = neighbourhood([(5, 0), (0, 5)], [(1, 0), (3, 0)])
    force = flocking_force(0, 0, 0, 0, hood, only(alignment_weight=1.0))
    assert force == pytest.approx([2.0, 0.0])


def test_weights_scale_components():
    hood = neighbourhood([(10, 0)], [(1, 0)])
    single = flocking_force(0, 0, 0, 0, hood, only(cohesion_weight=1.0))
    doubled = flocking_force(0, 0, 0, 0, hood, only(cohesion_weight=2.0))
    assert doubled == pytest.approx(2 * single)


def test_snapshot_excludes_self(rng):
    particles = [Particle(x, 0, None, None, rng=rng) for x in (0, 10, 20)]
    snapshot = FlockSnapshot.capture(particles)

    hood = snapshot.neighbourhood(1)

    assert len(snapshot) == 3
    assert len(hood) == 2
    assert hood.positions[:, 0].tolist() == [0.0, 20.0]


def test_snapshot_is_frozen(rng):
    particles = [Particle(x, 0, None, None, rng=rng) for x in (0, 10)]
    snapshot = FlockSnapshot.capture(particles)

    particles[0].x = 99

    assert snapshot.positions[0, 0] == 0.0
    assert snapshot.velocities[1] == pytest.approx([particles[1].vx, particles[1].vy])
