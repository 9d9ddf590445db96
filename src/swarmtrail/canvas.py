import cv2
import numpy as np

from swarmtrail.colors import to_bgr
from swarmtrail.config import BlendMode, RenderConfig

# Fractional bits for sub-pixel circle placement (cv2 `shift` argument)
SHIFT = 4
_SCALE = 1 << SHIFT


class CanvasSurface:
    """
    Drawing surface backed by a BGR uint8 frame, drawn on with OpenCV.

    Colours passed in are RGB. Dots are composited either additively (bright
    where trails overlap) or by plain alpha blending.
    """

    def __init__(self, width, height, config: RenderConfig = None):
        self.width = int(width)
        self.height = int(height)
        self.config = config or RenderConfig()
        self.frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def clear(self, background=None) -> None:
        """
        Start a new frame: black, or the background image (e.g. a camera
        frame) darkened by `background_dim`.
        """
        if background is None:
            self.frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)
            return

        if background.shape[:2] != (self.height, self.width):
            background = cv2.resize(background, (self.width, self.height))
        keep = 1.0 - self.config.background_dim
        self.frame = cv2.convertScaleAbs(background, alpha=keep)

    def circle(self, x, y, radius, color, opacity) -> None:
        """Filled, anti-aliased circle at sub-pixel position (x, y)."""
        if opacity <= 0 or radius <= 0:
            return

        # Only blend the patch the circle covers
        reach = int(np.ceil(radius)) + 1
        x0 = max(int(np.floor(x)) - reach, 0)
        y0 = max(int(np.floor(y)) - reach, 0)
        x1 = min(int(np.ceil(x)) + reach + 1, self.width)
        y1 = min(int(np.ceil(y)) + reach + 1, self.height)
        if x0 >= x1 or y0 >= y1:
            return

        roi = self.frame[y0:y1, x0:x1]
        center = (int(round((x - x0) * _SCALE)), int(round((y - y0) * _SCALE)))
        scaled_radius = max(1, int(round(radius * _SCALE)))
        bgr = to_bgr(color)
        opacity = min(float(opacity), 1.0)

        if self.config.blend is BlendMode.ADD:
            layer = np.zeros_like(roi)
            cv2.circle(layer, center, scaled_radius, bgr, -1, cv2.LINE_AA, SHIFT)
            self.frame[y0:y1, x0:x1] = cv2.addWeighted(roi, 1.0, layer, opacity, 0)
        else:
            overlay = roi.copy()
            cv2.circle(overlay, center, scaled_radius, bgr, -1, cv2.LINE_AA, SHIFT)
            self.frame[y0:y1, x0:x1] = cv2.addWeighted(overlay, opacity, roi, 1 - opacity, 0)

    def line(self, x0, y0, x1, y1, color, thickness=1) -> None:
        start = (int(round(x0 * _SCALE)), int(round(y0 * _SCALE)))
        end = (int(round(x1 * _SCALE)), int(round(y1 * _SCALE)))
        cv2.line(self.frame, start, end, to_bgr(color), max(1, int(thickness)), cv2.LINE_AA, SHIFT)

    def to_image(self, mirror=None) -> np.ndarray:
        """The finished frame, flipped horizontally for a mirrored (selfie) view."""
        mirror = self.config.mirror if mirror is None else mirror
        if mirror:
            return cv2.flip(self.frame, 1)
        return self.frame.copy()
