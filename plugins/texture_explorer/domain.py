"""
Coordinate Domain and Mapper

Maps integer pixel positions (col, row) of a W x H grid onto the continuous
rectangle [x_min, x_max) x [y_min, y_max):

    x = x_min + col * (x_max - x_min) / W
    y = y_min + row * (y_max - y_min) / H

The grid is half-open, so (x_max, y_max) itself is never sampled.
"""

import math
from collections import namedtuple

import numpy as np

from .errors import InvalidArgument, InvalidDomain

DOMAIN_LIMIT = 1e9

CoordinateDomain = namedtuple("CoordinateDomain", ["x_min", "x_max", "y_min", "y_max"])

DEFAULT_DOMAIN = CoordinateDomain(-100.0, 100.0, -100.0, 100.0)


def validate_domain(x_min, x_max, y_min, y_max):
    """Return a CoordinateDomain, or raise InvalidDomain."""
    try:
        bounds = [float(v) for v in (x_min, x_max, y_min, y_max)]
    except (TypeError, ValueError) as e:
        raise InvalidDomain(
            f"Domain bounds must be numbers, got {(x_min, x_max, y_min, y_max)!r}") from e
    for v in bounds:
        if not math.isfinite(v) or abs(v) > DOMAIN_LIMIT:
            raise InvalidDomain(
                f"Bound {v} outside [-{DOMAIN_LIMIT:,.0f}, {DOMAIN_LIMIT:,.0f}]")
    domain = CoordinateDomain(*bounds)
    if domain.x_min >= domain.x_max:
        raise InvalidDomain(f"x_min ({domain.x_min}) must be less than x_max ({domain.x_max})")
    if domain.y_min >= domain.y_max:
        raise InvalidDomain(f"y_min ({domain.y_min}) must be less than y_max ({domain.y_max})")
    return domain


class CoordinateMapper:
    """Pixel grid -> continuous plane, over a reconfigurable domain."""

    def __init__(self, width, height, domain=DEFAULT_DOMAIN):
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidArgument(f"Grid {name} must be a positive integer, got {value!r}")
        self.width = width
        self.height = height
        self.domain = validate_domain(*domain)

    def set_domain(self, x_min, x_max, y_min, y_max):
        """Replace the domain. On InvalidDomain the old domain is kept."""
        self.domain = validate_domain(x_min, x_max, y_min, y_max)
        return self.domain

    def map(self, col, row, domain=None):
        """Continuous (x, y) for a single grid cell."""
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise InvalidArgument(
                f"Cell ({col}, {row}) outside {self.width}x{self.height} grid")
        d = domain or self.domain
        x = d.x_min + col * (d.x_max - d.x_min) / self.width
        y = d.y_min + row * (d.y_max - d.y_min) / self.height
        return x, y

    def column_x(self, col, domain=None):
        d = domain or self.domain
        return d.x_min + col * (d.x_max - d.x_min) / self.width

    def rows_y(self, domain=None):
        """y for every row, as a float64 array of length H."""
        d = domain or self.domain
        rows = np.arange(self.height, dtype=np.float64)
        return d.y_min + rows * (d.y_max - d.y_min) / self.height


def _ask_bound(ask, prompt):
    reply = ask(prompt)
    while True:
        try:
            value = float(reply)
        except ValueError:
            value = None
        if value is not None and math.isfinite(value) and abs(value) <= DOMAIN_LIMIT:
            return value
        reply = ask(f"Please enter a float between -{DOMAIN_LIMIT:,.0f} "
                    f"and {DOMAIN_LIMIT:,.0f}: ")


def read_domain(ask=input, out=print):
    """
    Interactively read a new domain from the terminal.

    Asks for X min, X max, Y min, Y max in turn. Each value is re-asked
    until it is a number within +/-1e9, and each maximum is re-asked until
    it is greater than its minimum.

    Args:
        ask: prompt function returning the user's reply (default: input)
        out: message sink for validation hints (default: print)

    Returns:
        CoordinateDomain (already validated)
    """
    x_min = _ask_bound(ask, "Enter new X minimum: ")
    x_max = _ask_bound(ask, "Enter new X maximum: ")
    while x_max <= x_min:
        out("X maximum must be greater than X minimum!")
        x_max = _ask_bound(ask, "Enter new X maximum: ")

    y_min = _ask_bound(ask, "Enter new Y minimum: ")
    y_max = _ask_bound(ask, "Enter new Y maximum: ")
    while y_max <= y_min:
        out("Y maximum must be greater than Y minimum!")
        y_max = _ask_bound(ask, "Enter new Y maximum: ")

    return validate_domain(x_min, x_max, y_min, y_max)
