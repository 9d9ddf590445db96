import numpy as np
import pytest


class RecordingSurface:
    """Stands in for a canvas and remembers every draw call."""

    def __init__(self):
        self.calls = []

    def circle(self, x, y, radius, color, opacity):
        self.calls.append(("circle", x, y, radius, color, opacity))

    def line(self, x0, y0, x1, y1, color, thickness=1):
        self.calls.append(("line", x0, y0, x1, y1, color, thickness))

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def surface():
    return RecordingSurface()
