"""
Runtime configuration for the swarm simulation.

The different particle behaviours (with or without a minimum speed, flocking
on or off, shrinking trails, the order in which friction and the speed clamp
are applied) are all expressed here rather than as separate particle classes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from swarmtrail.constants import (
    ACCELERATION,
    ALIGNMENT_WEIGHT,
    BACKGROUND_DIM,
    COHESION_WEIGHT,
    FLOCK_HEADING_BLEND,
    FLOCK_SPEED_GAIN,
    FRICTION,
    MAX_SPEED,
    MIN_SPEED,
    NEIGHBOURHOOD_RADIUS,
    PARTICLE_RADIUS,
    PARTICLES_PER_TARGET,
    SEPARATION_WEIGHT,
    SPAWN_JITTER,
    SPEED_FLOOR,
    STEER_SMOOTHING,
    TRAIL_OPACITY,
    TRAIL_OPACITY_STEP,
    TRAIL_RADIUS_STEP,
)


class FrictionModel(Enum):
    """Order in which friction and the speed limits are applied each tick."""

    # speed *= friction, then clamp into [floor, max_speed]
    DECAY_THEN_CLAMP = "decay_then_clamp"
    # clamp to max_speed while steering, speed *= friction, then floor
    CLAMP_THEN_DECAY = "clamp_then_decay"


class BlendMode(Enum):
    """How trail dots are composited onto the canvas."""

    ADD = "add"  # canvas "lighter": overlapping trails brighten
    ALPHA = "alpha"


@dataclass
class ParticleConfig:
    acceleration: float = ACCELERATION
    max_speed: float = MAX_SPEED
    min_speed: float = MIN_SPEED
    use_min_speed: bool = True
    friction: float = FRICTION
    radius: float = PARTICLE_RADIUS
    steer_smoothing: float = STEER_SMOOTHING
    friction_model: FrictionModel = FrictionModel.DECAY_THEN_CLAMP

    def __post_init__(self):
        if not 0 < self.friction <= 1:
            raise ValueError(f"friction must be in (0, 1], got {self.friction}")
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if self.speed_floor > self.max_speed:
            raise ValueError(
                f"speed floor {self.speed_floor} exceeds max_speed {self.max_speed}"
            )

    @property
    def speed_floor(self) -> float:
        """Lowest speed a particle is allowed to settle at."""
        return self.min_speed if self.use_min_speed else SPEED_FLOOR


@dataclass
class TrailConfig:
    initial_opacity: float = TRAIL_OPACITY
    opacity_step: float = TRAIL_OPACITY_STEP
    radius_step: float = TRAIL_RADIUS_STEP

    def __post_init__(self):
        if self.initial_opacity <= 0:
            raise ValueError(f"initial_opacity must be positive, got {self.initial_opacity}")
        if self.opacity_step <= 0:
            raise ValueError(f"opacity_step must be positive, got {self.opacity_step}")
        if self.radius_step < 0:
            raise ValueError(f"radius_step must not be negative, got {self.radius_step}")


@dataclass
class FlockingConfig:
    enabled: bool = False
    neighbourhood_radius: float = NEIGHBOURHOOD_RADIUS
    cohesion_weight: float = COHESION_WEIGHT
    separation_weight: float = SEPARATION_WEIGHT
    alignment_weight: float = ALIGNMENT_WEIGHT
    heading_blend: float = FLOCK_HEADING_BLEND
    speed_gain: float = FLOCK_SPEED_GAIN

    def __post_init__(self):
        if self.neighbourhood_radius <= 0:
            raise ValueError(
                f"neighbourhood_radius must be positive, got {self.neighbourhood_radius}"
            )


@dataclass
class RenderConfig:
    debug: bool = False  # line from each particle to its target, target markers
    blend: BlendMode = BlendMode.ADD
    background_dim: float = BACKGROUND_DIM
    mirror: bool = True

    def __post_init__(self):
        if not 0 <= self.background_dim <= 1:
            raise ValueError(f"background_dim must be in [0, 1], got {self.background_dim}")


@dataclass
class SimulationConfig:
    particle: ParticleConfig = field(default_factory=ParticleConfig)
    trail: TrailConfig = field(default_factory=TrailConfig)
    flocking: FlockingConfig = field(default_factory=FlockingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    particles_per_target: int = PARTICLES_PER_TARGET
    spawn_jitter: float = SPAWN_JITTER
    # None keeps idle systems forever; otherwise evict after this many idle ticks
    max_idle_ticks: Optional[int] = None

    def __post_init__(self):
        if self.particles_per_target <= 0:
            raise ValueError(
                f"particles_per_target must be positive, got {self.particles_per_target}"
            )
        if self.max_idle_ticks is not None and self.max_idle_ticks < 0:
            raise ValueError(f"max_idle_ticks must not be negative, got {self.max_idle_ticks}")
