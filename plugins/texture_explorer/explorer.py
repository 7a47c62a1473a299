"""
TextureExplorer - headless core with zero pygame dependency

Owns the whole configuration of one explorer: grid size, coordinate
domain, channel selection and the random generator used by randomize().
The pygame viewer and the CLI snapshot mode both drive this object.

Usage:
    from texture_explorer.explorer import TextureExplorer
    tex = TextureExplorer(500, 500)
    tex.set_texture(3)
    frame = tex.render_float()  # (H, W, 3) float64, unclamped
    tex.save("texture.png")
"""

import time

from .channels import ChannelSelection
from .domain import DEFAULT_DOMAIN, CoordinateMapper
from .export import FILENAME, frame_to_surface, save_png, snapshot_grid
from .formulas import get_expression
from .rasterizer import Rasterizer

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 500


class TextureExplorer:

    def __init__(self, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT,
                 domain=DEFAULT_DOMAIN, red=0, green=0, blue=0, rng=None,
                 filename=FILENAME):
        """
        Args:
            width, height: Pixel grid size (fixed for the explorer's life)
            domain: (x_min, x_max, y_min, y_max) sampled by the grid
            red, green, blue: Initial formula indices (0-9, 10 = off)
            rng: numpy Generator for randomize(); seeded from OS entropy
                 when omitted
            filename: PNG path written by save()
        """
        self.mapper = CoordinateMapper(width, height, domain)
        self.selection = ChannelSelection(red, green, blue, rng=rng)
        self.rasterizer = Rasterizer(self.selection, self.mapper)
        self.filename = filename
        self.last_render_ms = 0.0

    @property
    def width(self):
        return self.mapper.width

    @property
    def height(self):
        return self.mapper.height

    @property
    def domain(self):
        return self.mapper.domain

    @property
    def indices(self):
        return self.selection.as_tuple()

    # --- Configuration ---

    def set_channel(self, channel, index):
        self.selection.set_channel(channel, index)

    def set_texture(self, index):
        self.selection.set_all(index)

    def randomize(self):
        return self.selection.randomize()

    def set_domain(self, x_min, x_max, y_min, y_max):
        return self.mapper.set_domain(x_min, x_max, y_min, y_max)

    # --- Rendering ---

    def pixels(self):
        """Lazy column-major stream of Pixel(x, y, (r, g, b))."""
        return self.rasterizer.pixels()

    def render_float(self):
        """Rasterize one frame: (H, W, 3) float64, row 0 = y_min."""
        start = time.perf_counter()
        frame = self.rasterizer.render()
        self.last_render_ms = (time.perf_counter() - start) * 1000.0
        return frame

    def render_surface(self):
        """Rasterize one frame as a (W, H, 3) uint8 surface array."""
        return frame_to_surface(self.render_float())

    # --- Export ---

    def snapshot(self, buffer=None, origin="top"):
        """
        Row-major (H, W, 3) uint8 grid of the displayed pixels.

        Args:
            buffer: (W, H, 3) surface captured from the display. When None
                    a fresh frame is rendered, as a headless stand-in.
            origin: row order of `buffer`, see export.snapshot_grid
        """
        if buffer is None:
            buffer = self.render_surface()
            origin = "top"
        return snapshot_grid(buffer, origin=origin)

    def save(self, path=None, buffer=None, origin="top"):
        """Write the displayed pixels to a PNG file. Raises ExportError."""
        return save_png(self.snapshot(buffer, origin), path or self.filename)

    # --- Info ---

    @property
    def stats(self):
        d = self.domain
        return {
            "red": self.selection.label("red"),
            "green": self.selection.label("green"),
            "blue": self.selection.label("blue"),
            "domain": (d.x_min, d.x_max, d.y_min, d.y_max),
            "size": (self.width, self.height),
            "render_ms": self.last_render_ms,
        }

    def describe(self):
        """Multi-line summary of the active formulas and domain."""
        r, g, b = self.indices
        d = self.domain
        return "\n".join([
            f"R[{self.selection.label('red')}]  {get_expression('red', r)}",
            f"G[{self.selection.label('green')}]  {get_expression('green', g)}",
            f"B[{self.selection.label('blue')}]  {get_expression('blue', b)}",
            f"x [{d.x_min:g}, {d.x_max:g})  y [{d.y_min:g}, {d.y_max:g})",
        ])
