import logging
from typing import Iterator, List, Optional

import numpy as np

from swarmtrail.colors import ColorLike, parse_color
from swarmtrail.config import SimulationConfig
from swarmtrail.constants import DEFAULT_COLOR
from swarmtrail.flocking import FlockSnapshot
from swarmtrail.particle import Particle

logger = logging.getLogger(__name__)


class ParticleSystem:
    """
    A fixed pool of particles that accelerate toward and hover around one
    target point, leaving trails.

    A single system stands for "this tracked point over time": the target is
    moved by mutating shared state rather than by building new particles, so
    trails and momentum carry across target updates and target loss.
    """

    def __init__(
        self,
        target_x: float,
        target_y: float,
        count: Optional[int] = None,
        color: ColorLike = DEFAULT_COLOR,
        config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or SimulationConfig()
        count = self.config.particles_per_target if count is None else count
        if count <= 0:
            raise ValueError(f"A particle system needs at least one particle, got {count}")

        rng = rng or np.random.default_rng()
        self.color = parse_color(color)
        self.target_x: Optional[float] = target_x
        self.target_y: Optional[float] = target_y

        jitter = self.config.spawn_jitter
        offsets = rng.uniform(-jitter, jitter, size=(count, 2))
        self.particles: List[Particle] = [
            Particle(
                target_x + dx,
                target_y + dy,
                target_x,
                target_y,
                color=self.color,
                config=self.config,
                rng=rng,
            )
            for dx, dy in offsets
        ]
        logger.debug(f"Created {count} particles around ({target_x:.1f}, {target_y:.1f})")

    def __len__(self):
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    @property
    def has_target(self) -> bool:
        return self.target_x is not None and self.target_y is not None

    def update(
        self,
        canvas_width,
        canvas_height,
        target_x: Optional[float] = None,
        target_y: Optional[float] = None,
    ) -> None:
        """
        Advance every particle one tick toward the given target. Omitting the
        target leaves the particles drifting on their own momentum.
        """
        if target_x is None or target_y is None:
            self.target_x = self.target_y = None
        else:
            self.target_x, self.target_y = target_x, target_y

        for particle in self.particles:
            if self.has_target:
                particle.retarget(self.target_x, self.target_y)
            else:
                particle.clear_target()

        if not self.config.flocking.enabled:
            for particle in self.particles:
                particle.update(canvas_width, canvas_height)
            return

        # Every particle sees the pool as it was before this tick
        snapshot = FlockSnapshot.capture(self.particles)
        for i, particle in enumerate(self.particles):
            particle.update(canvas_width, canvas_height, snapshot.neighbourhood(i))

    def draw(self, surface) -> None:
        for particle in self.particles:
            particle.draw(surface)
