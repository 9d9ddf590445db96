import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional

import numpy as np

from swarmtrail.colors import ColorLike, palette_cycle, parse_color
from swarmtrail.config import SimulationConfig
from swarmtrail.constants import DEBUG_MARKER_COLOR, DEBUG_MARKER_RADIUS, FINGERTIP_COLORS
from swarmtrail.particle_system import ParticleSystem
from swarmtrail.targets import TargetPoint

logger = logging.getLogger(__name__)


class TrackState(Enum):
    UNSEEN = "unseen"  # no system exists for the identity
    ACTIVE = "active"  # target seen this tick
    IDLE = "idle"  # known but absent; particles drift


@dataclass
class TrackedSwarm:
    system: ParticleSystem
    state: TrackState = TrackState.ACTIVE
    idle_ticks: int = 0


class Orchestrator:
    """
    Owns one particle system per target identity and drives the per-frame
    update/draw cycle.

    Systems are created on first sight of an identity and kept when it
    disappears, so its swarm drifts and disperses instead of vanishing.
    Idle systems are only evicted when `max_idle_ticks` is configured.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        colors: Optional[Mapping[str, ColorLike]] = None,
        tracked_names: Optional[Iterable[str]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or SimulationConfig()
        self.colors = dict(FINGERTIP_COLORS if colors is None else colors)
        self.tracked_names = None if tracked_names is None else frozenset(tracked_names)
        self.rng = rng or np.random.default_rng()
        self._palette = palette_cycle()
        self._tracks: Dict[str, TrackedSwarm] = {}
        self._live_targets: Dict[str, TargetPoint] = {}

    def __len__(self):
        return len(self._tracks)

    def __contains__(self, name):
        return name in self._tracks

    @property
    def systems(self) -> Dict[str, ParticleSystem]:
        return {name: track.system for name, track in self._tracks.items()}

    def state_of(self, name: str) -> TrackState:
        track = self._tracks.get(name)
        return TrackState.UNSEEN if track is None else track.state

    def _color_for(self, name):
        if name in self.colors:
            return parse_color(self.colors[name])
        return next(self._palette)

    def _spawn(self, point: TargetPoint) -> TrackedSwarm:
        system = ParticleSystem(
            point.x,
            point.y,
            color=self._color_for(point.name),
            config=self.config,
            rng=self.rng,
        )
        logger.info(f"[+] New swarm for '{point.name}' at ({point.x:.1f}, {point.y:.1f})")
        return TrackedSwarm(system)

    def step(self, points: Iterable[TargetPoint], canvas_width, canvas_height) -> None:
        """Advance every known swarm by one tick given the targets seen this tick."""
        seen = {}
        for point in points:
            if self.tracked_names is not None and point.name not in self.tracked_names:
                continue
            seen[point.name] = point
        self._live_targets = seen

        for name, point in seen.items():
            track = self._tracks.get(name)
            if track is None:
                track = self._tracks[name] = self._spawn(point)
            elif track.state is TrackState.IDLE:
                logger.debug(f"'{name}' reacquired after {track.idle_ticks} idle ticks")
            track.state = TrackState.ACTIVE
            track.idle_ticks = 0
            track.system.update(canvas_width, canvas_height, point.x, point.y)

        for name, track in list(self._tracks.items()):
            if name in seen:
                continue
            if track.state is TrackState.ACTIVE:
                logger.debug(f"'{name}' lost, swarm drifting")
            track.state = TrackState.IDLE
            track.idle_ticks += 1

            max_idle = self.config.max_idle_ticks
            if max_idle is not None and track.idle_ticks > max_idle:
                logger.info(f"[-] Evicting swarm for '{name}' (idle longer than {max_idle} ticks)")
                del self._tracks[name]
                continue
            track.system.update(canvas_width, canvas_height)

    def draw(self, surface) -> None:
        for track in self._tracks.values():
            track.system.draw(surface)

        if self.config.render.debug:
            for point in self._live_targets.values():
                surface.circle(point.x, point.y, DEBUG_MARKER_RADIUS, DEBUG_MARKER_COLOR, 1.0)
