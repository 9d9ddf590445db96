import logging

from swarmtrail.canvas import CanvasSurface
from swarmtrail.orchestrator import Orchestrator
from swarmtrail.targets import TargetFeed

logger = logging.getLogger(__name__)


class SwarmRenderer:
    """
    Glues a target feed, the swarm orchestrator and a canvas together.
    Every call to `make_frame` is one simulation tick.
    """

    def __init__(self, feed: TargetFeed, orchestrator: Orchestrator, width, height):
        self.feed = feed
        self.orchestrator = orchestrator
        self.w = width
        self.h = height
        self.canvas = CanvasSurface(width, height, orchestrator.config.render)
        self.frames = 0

    def make_frame(self, t, background=None):
        """
        The callback function for MoviePy.
        Generates a single BGR video frame at time t.
        """
        # 1. Targets (refreshed at the feed's own cadence)
        points = self.feed.points_at(t)

        # 2. Fresh canvas, dimmed background if one is given
        self.canvas.clear(background)

        # 3. Advance and draw every swarm
        self.orchestrator.step(points, self.w, self.h)
        self.orchestrator.draw(self.canvas)

        self.frames += 1
        if self.frames % 100 == 0:
            logger.debug(f"Frame {self.frames}: {len(self.orchestrator)} swarms, {len(points)} targets")

        return self.canvas.to_image()
