import math
from typing import List, Optional

import numpy as np

from swarmtrail.colors import Color
from swarmtrail.config import FrictionModel, SimulationConfig
from swarmtrail.constants import DEBUG_LINE_COLOR
from swarmtrail.flocking import Neighbourhood, flocking_force
from swarmtrail.trail import TrailRenderer


def wrap_angle(angle):
    """Wrap an angle in radians into (-pi, pi]."""
    angle = math.fmod(angle + math.pi, 2 * math.pi)
    if angle <= 0:
        angle += 2 * math.pi
    return angle - math.pi


class Particle:
    """
    A particle that steers toward a target and leaves a fading trail.

    Motion is described by a heading (radians) and a scalar speed. Heading
    and speed are eased toward the target rather than snapped, which makes
    particles sweep around their target in arcs. Only the trail is drawn,
    never the particle itself.
    """

    def __init__(
        self,
        x: float,
        y: float,
        target_x: Optional[float],
        target_y: Optional[float],
        color: Color = (255, 155, 50),
        config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        config = config or SimulationConfig()
        rng = rng or np.random.default_rng()
        physics = config.particle

        self.x = float(x)
        self.y = float(y)
        self.target_x = target_x
        self.target_y = target_y
        self.color = color

        self.acceleration = physics.acceleration
        self.max_speed = physics.max_speed
        self.speed_floor = physics.speed_floor
        self.friction = physics.friction
        self.friction_model = physics.friction_model
        self.radius = physics.radius
        self.steer_smoothing = physics.steer_smoothing

        self.trail_config = config.trail
        self.flocking = config.flocking
        self.debug = config.render.debug

        self.speed = rng.random() * 2 - 1
        if self.has_target:
            self.heading = math.atan2(target_y - self.y, target_x - self.x)
        else:
            self.heading = 0.0
        self.trail: List[TrailRenderer] = []

    @property
    def has_target(self) -> bool:
        return self.target_x is not None and self.target_y is not None

    @property
    def vx(self) -> float:
        return self.speed * math.cos(self.heading)

    @property
    def vy(self) -> float:
        return self.speed * math.sin(self.heading)

    def retarget(self, x: float, y: float) -> None:
        self.target_x = x
        self.target_y = y

    def clear_target(self) -> None:
        self.target_x = None
        self.target_y = None

    def update(self, canvas_width, canvas_height, neighbours: Optional[Neighbourhood] = None) -> None:
        """Advance the particle by one tick."""
        self._seek()
        if neighbours is not None and self.flocking.enabled:
            self._flock(neighbours)
        self._apply_friction()

        self.x += self.speed * math.cos(self.heading)
        self.y += self.speed * math.sin(self.heading)

        self._bounce(canvas_width, canvas_height)
        self._emit_trail()

    def _seek(self):
        """Ease heading and speed toward the target. No target, no force."""
        if not self.has_target:
            return

        dx = self.target_x - self.x
        dy = self.target_y - self.y
        distance = math.hypot(dx, dy)

        # On top of the target there is no direction to turn to
        if distance > 0:
            target_heading = math.atan2(dy, dx)
            difference = wrap_angle(target_heading - self.heading)
            self.heading = wrap_angle(self.heading + difference * self.steer_smoothing)

        desired_speed = distance * self.acceleration
        self.speed += (desired_speed - self.speed) * self.acceleration

    def _flock(self, neighbours):
        force = flocking_force(self.x, self.y, self.vx, self.vy, neighbours, self.flocking)
        magnitude = math.hypot(force[0], force[1])
        if magnitude == 0:
            return

        target_heading = math.atan2(force[1], force[0])
        difference = wrap_angle(target_heading - self.heading)
        self.heading = wrap_angle(self.heading + difference * self.flocking.heading_blend)
        self.speed += magnitude * self.flocking.speed_gain

    def _apply_friction(self):
        if self.friction_model is FrictionModel.CLAMP_THEN_DECAY:
            self.speed = min(self.speed, self.max_speed) * self.friction
            self.speed = max(self.speed, self.speed_floor)
        else:
            self.speed *= self.friction
            self.speed = min(max(self.speed, self.speed_floor), self.max_speed)

    def _bounce(self, canvas_width, canvas_height):
        """Reflect off the canvas edges and keep the whole dot on the canvas."""
        r = self.radius
        if self.x - r < 0 or self.x + r > canvas_width:
            self.heading = wrap_angle(math.pi - self.heading)
            self.x = max(r, min(self.x, canvas_width - r))
        if self.y - r < 0 or self.y + r > canvas_height:
            self.heading = wrap_angle(-self.heading)
            self.y = max(r, min(self.y, canvas_height - r))

    def _emit_trail(self):
        # Surviving dots keep creation order
        self.trail = [renderer for renderer in self.trail if renderer.update()]
        self.trail.append(
            TrailRenderer(
                self.x,
                self.y,
                radius=self.radius,
                opacity=self.trail_config.initial_opacity,
                color=self.color,
                opacity_step=self.trail_config.opacity_step,
                radius_step=self.trail_config.radius_step,
            )
        )

    def draw(self, surface) -> None:
        """Draw the trail oldest first, so the newest dot ends up on top."""
        if self.debug and self.has_target:
            surface.line(self.x, self.y, self.target_x, self.target_y, DEBUG_LINE_COLOR, 1)
        for renderer in self.trail:
            renderer.draw(surface)
