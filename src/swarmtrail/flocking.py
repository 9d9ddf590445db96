"""
Boid-style flocking forces.

Neighbour state is read from a snapshot of the whole pool captured before
any particle of the tick moves, so the result does not depend on the order
particles are updated in.
"""

import numpy as np

from swarmtrail.config import FlockingConfig


class Neighbourhood:
    """Positions and velocities of every other particle in the pool."""

    def __init__(self, positions: np.ndarray, velocities: np.ndarray):
        self.positions = positions
        self.velocities = velocities

    def __len__(self):
        return len(self.positions)


class FlockSnapshot:
    """Frozen (N, 2) position and velocity arrays of a particle pool."""

    def __init__(self, positions: np.ndarray, velocities: np.ndarray):
        self.positions = positions
        self.velocities = velocities

    @classmethod
    def capture(cls, particles) -> "FlockSnapshot":
        positions = np.array([(p.x, p.y) for p in particles], dtype=float).reshape(-1, 2)
        velocities = np.array([(p.vx, p.vy) for p in particles], dtype=float).reshape(-1, 2)
        return cls(positions, velocities)

    def __len__(self):
        return len(self.positions)

    def neighbourhood(self, index: int) -> Neighbourhood:
        """View of the pool as seen by particle `index` (itself excluded)."""
        mask = np.ones(len(self.positions), dtype=bool)
        mask[index] = False
        return Neighbourhood(self.positions[mask], self.velocities[mask])


def flocking_force(x, y, vx, vy, neighbours: Neighbourhood, config: FlockingConfig) -> np.ndarray:
    """
    Weighted sum of cohesion, separation and alignment for one particle.
    Returns a zero vector when nothing is within the neighbourhood radius.
    """
    force = np.zeros(2)
    if len(neighbours) == 0:
        return force

    position = np.array([x, y], dtype=float)
    offsets = neighbours.positions - position
    distances = np.hypot(offsets[:, 0], offsets[:, 1])

    in_range = distances < config.neighbourhood_radius
    if not np.any(in_range):
        return force

    # Cohesion: pull toward the centroid of the neighbours
    centroid = neighbours.positions[in_range].mean(axis=0)
    cohesion = centroid - position

    # Separation: inverse-square push away from close neighbours.
    # Coincident neighbours have no direction and are skipped.
    close = in_range & (distances < config.neighbourhood_radius / 2) & (distances > 0)
    separation = np.zeros(2)
    if np.any(close):
        d = distances[close][:, None]
        separation = -(offsets[close] / d) / d**2
        separation = separation.sum(axis=0)

    # Alignment: pull toward the neighbours' mean velocity
    alignment = neighbours.velocities[in_range].mean(axis=0) - np.array([vx, vy], dtype=float)

    force = (
        config.cohesion_weight * cohesion
        + config.separation_weight * separation
        + config.alignment_weight * alignment
    )
    return force
