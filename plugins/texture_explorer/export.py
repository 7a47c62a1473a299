"""
Export Adapter - display surfaces and PNG files

Three steps sit between a rendered frame and a file on disk:

  frame_to_surface  float frame (H, W, 3) -> 8-bit surface array (W, H, 3),
                    clamped, y flipped so y_min is at the bottom of the window
  snapshot_grid     surface array (W, H, 3) -> row-major grid (H, W, 3)
  save_png          row-major grid -> lossless PNG via Pillow

Surface arrays use the pygame.surfarray convention (indexed [x, y], row 0
at the top of the window), so the viewer can hand its canvas straight to
snapshot_grid without re-rendering anything.
"""

import numpy as np
from PIL import Image

from .errors import ExportError

FILENAME = "texture.png"


def frame_to_surface(frame):
    """
    Convert a float frame to an 8-bit surface array.

    This is where render-sink clamping happens: values are clipped to
    [0, 1] and rounded to 0-255.

    Args:
        frame: (H, W, 3) float array, row 0 = y_min

    Returns:
        (W, H, 3) uint8 array indexed [x, y], y = 0 at the top
    """
    rgb8 = np.rint(np.clip(frame, 0.0, 1.0) * 255.0).astype(np.uint8)
    # Bottom-up rows -> top-down screen rows, then swap to [x, y]
    return np.ascontiguousarray(rgb8[::-1].swapaxes(0, 1))


def snapshot_grid(buffer, origin="top"):
    """
    Repackage a captured surface buffer as a row-major RGB8 grid.

    No formula evaluation happens here; the result depends only on
    `buffer`, so repeated calls on the same buffer give identical grids.

    Args:
        buffer: (W, H, 3) array indexed [x, y] (pygame.surfarray layout)
        origin: "top" if buffer row 0 is the top of the image (pygame),
                "bottom" if it is the bottom (OpenGL read-back)

    Returns:
        (H, W, 3) uint8 C-contiguous array, first row = top of the image
    """
    buffer = np.asarray(buffer)
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ExportError(f"Expected a (W, H, 3) pixel buffer, got shape {buffer.shape}")
    if buffer.dtype != np.uint8:
        raise ExportError(f"Expected an 8-bit (uint8) pixel buffer, got {buffer.dtype}")
    if buffer.shape[0] == 0 or buffer.shape[1] == 0:
        raise ExportError(f"Pixel buffer is empty: {buffer.shape}")
    if origin not in ("top", "bottom"):
        raise ExportError(f"Unknown buffer origin: {origin!r}")

    grid = buffer.swapaxes(0, 1)
    if origin == "bottom":
        grid = grid[::-1]
    return np.ascontiguousarray(grid, dtype=np.uint8)


def save_png(grid, path=FILENAME):
    """
    Write a row-major RGB8 grid to a PNG file.

    Raises:
        ExportError: if the image cannot be built or written. The
            in-memory state of the caller is untouched either way.
    """
    grid = np.asarray(grid)
    if grid.ndim != 3 or grid.shape[2] != 3:
        raise ExportError(f"Expected an (H, W, 3) RGB grid, got shape {grid.shape}")
    if grid.dtype != np.uint8:
        raise ExportError(f"Expected an 8-bit (uint8) RGB grid, got {grid.dtype}")
    try:
        img = Image.fromarray(np.ascontiguousarray(grid, dtype=np.uint8))
        img.save(path, format="PNG")
    except (OSError, ValueError, TypeError) as e:
        raise ExportError(f"Could not save {path}: {e}") from e
    return path
