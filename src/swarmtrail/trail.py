from swarmtrail.colors import Color
from swarmtrail.constants import TRAIL_OPACITY, TRAIL_OPACITY_STEP, TRAIL_RADIUS_STEP

# Decayed values this close to zero count as zero, so expiry happens on a
# deterministic tick despite floating point drift.
_EPSILON = 1e-9


def _decay(value, step):
    value -= step
    return 0.0 if value < _EPSILON else value


class TrailRenderer:
    """
    A fading dot left behind at a past position of a particle.
    It never moves; each update fades (and optionally shrinks) it until it
    is no longer visible.
    """

    def __init__(
        self,
        x: float,
        y: float,
        radius: float = 1.0,
        opacity: float = TRAIL_OPACITY,
        color: Color = (255, 155, 50),
        opacity_step: float = TRAIL_OPACITY_STEP,
        radius_step: float = TRAIL_RADIUS_STEP,
    ):
        self.x = x
        self.y = y
        self.radius = radius
        self.opacity = opacity
        self.color = color
        self.opacity_step = opacity_step
        self.radius_step = radius_step

    @property
    def visible(self) -> bool:
        if self.opacity <= 0:
            return False
        # Radius only limits visibility when trails shrink
        return self.radius_step <= 0 or self.radius > 0

    def update(self) -> bool:
        """Age the dot by one tick. Returns True while it should still be drawn."""
        self.opacity = _decay(self.opacity, self.opacity_step)
        if self.radius_step > 0:
            self.radius = _decay(self.radius, self.radius_step)
        return self.visible

    def draw(self, surface) -> None:
        surface.circle(self.x, self.y, self.radius, self.color, self.opacity)
