"""
Rasterizer - one full pass over the pixel grid

Traversal is column-major: the outer loop walks columns (x), the inner loop
walks rows (y). Each column is shaded with one vectorized call per channel,
and every pass reads the channel indices and domain exactly once, at the
start, so a mutation made while a pass is being consumed only shows up in
the next pass.
"""

from collections import namedtuple

import numpy as np

from .formulas import shade

Pixel = namedtuple("Pixel", ["x", "y", "color"])


class Rasterizer:
    """Produces frames from a ChannelSelection and a CoordinateMapper."""

    def __init__(self, selection, mapper):
        self.selection = selection
        self.mapper = mapper

    @property
    def width(self):
        return self.mapper.width

    @property
    def height(self):
        return self.mapper.height

    def _snapshot(self):
        return self.selection.as_tuple(), self.mapper.domain

    def _columns(self, indices, domain):
        """Yield (x, ys, rgb) per column; rgb is (H, 3) float64."""
        ys = self.mapper.rows_y(domain)
        for col in range(self.mapper.width):
            x = self.mapper.column_x(col, domain)
            xs = np.full(ys.shape, x, dtype=np.float64)
            yield x, ys, shade(indices, xs, ys)

    def pixels(self):
        """
        Lazy sequence of the W x H pixels of one frame.

        State is captured when this is called, not when iteration starts.
        Colors are floats and are not clamped.
        """
        indices, domain = self._snapshot()
        return self._iter_pixels(indices, domain)

    def _iter_pixels(self, indices, domain):
        for x, ys, rgb in self._columns(indices, domain):
            for row in range(len(ys)):
                r, g, b = rgb[row]
                yield Pixel(x, float(ys[row]), (float(r), float(g), float(b)))

    def render(self):
        """
        Full frame as an array.

        Returns:
            (H, W, 3) float64 array, row r / column c holding the color of
            grid cell (c, r). Row 0 is y_min.
        """
        indices, domain = self._snapshot()
        frame = np.empty((self.mapper.height, self.mapper.width, 3), dtype=np.float64)
        for col, (_x, _ys, rgb) in enumerate(self._columns(indices, domain)):
            frame[:, col, :] = rgb
        return frame
