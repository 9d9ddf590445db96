"""
Sources of named target points.

A real deployment feeds points from a pose/keypoint detector; the swarm only
needs a list of named 2D points per tick. `FingertipOrbits` stands in for the
detector in the demo, and `TargetFeed` polls any source at its own cadence,
independent of the render frame rate.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from swarmtrail.constants import FINGERTIP_COLORS, POLL_INTERVAL


@dataclass(frozen=True)
class TargetPoint:
    name: str
    x: float
    y: float


class TargetSource(Protocol):
    def poll(self, t: float) -> List[TargetPoint]:
        ...


class FingertipOrbits:
    """
    Synthetic fingertips tracing Lissajous curves around the canvas centre.

    Every `dropout_period` seconds all fingertips vanish for
    `dropout_duration` seconds, as when a hand leaves the camera view.
    """

    def __init__(
        self,
        width,
        height,
        names: Sequence[str] = tuple(FINGERTIP_COLORS),
        dropout_period: Optional[float] = 6.0,
        dropout_duration: float = 1.5,
    ):
        self.width = width
        self.height = height
        self.names = list(names)
        self.dropout_period = dropout_period
        self.dropout_duration = dropout_duration

    def is_dropped(self, t: float) -> bool:
        if not self.dropout_period:
            return False
        return (t % self.dropout_period) >= self.dropout_period - self.dropout_duration

    def poll(self, t: float) -> List[TargetPoint]:
        if self.is_dropped(t):
            return []

        cx, cy = self.width / 2, self.height / 2
        # Keep the whole figure inside the middle 60% of the canvas
        ax, ay = self.width * 0.3, self.height * 0.3
        points = []
        for i, name in enumerate(self.names):
            phase = i * 2 * math.pi / max(1, len(self.names))
            x = cx + ax * math.sin(0.7 * t + phase)
            y = cy + ay * math.sin(1.1 * t + 2 * phase)
            points.append(TargetPoint(name, x, y))
        return points


class TargetFeed:
    """
    Polls a target source no more often than `poll_interval` seconds and
    serves the latest result in between.
    """

    def __init__(self, source: TargetSource, poll_interval: float = POLL_INTERVAL):
        if poll_interval < 0:
            raise ValueError(f"poll_interval must not be negative, got {poll_interval}")
        self.source = source
        self.poll_interval = poll_interval
        self.last_poll: Optional[float] = None
        self.points: List[TargetPoint] = []
        self.polls = 0

    def points_at(self, t: float) -> List[TargetPoint]:
        if self.last_poll is None or t - self.last_poll >= self.poll_interval or t < self.last_poll:
            self.points = list(self.source.poll(t))
            self.last_poll = t
            self.polls += 1
        return self.points
