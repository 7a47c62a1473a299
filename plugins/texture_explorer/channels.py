"""
Channel Selection State

Holds the formula index for each of the red, green and blue channels.
Indices 0-9 select a formula, 10 switches the channel off. Mutations are
validated before anything is written, so a rejected call never leaves a
half-applied selection behind.
"""

from enum import Enum

import numpy as np

from .errors import InvalidArgument
from .formulas import OFF, check_index


class Channel(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


CHANNELS = (Channel.RED, Channel.GREEN, Channel.BLUE)

NUM_TEXTURES = 10  # presets 0-9; "off" is never a preset


def parse_channel(channel):
    """Accept a Channel or its name ("red", "Green", ...)."""
    if isinstance(channel, Channel):
        return channel
    if isinstance(channel, str):
        try:
            return Channel(channel.lower())
        except ValueError:
            pass
    raise InvalidArgument(f"Unknown channel: {channel!r}. "
                          f"Expected one of {[c.value for c in CHANNELS]}")


class ChannelSelection:
    """Three independent formula indices, one per channel."""

    def __init__(self, red=0, green=0, blue=0, rng=None):
        """
        Args:
            red, green, blue: Initial formula indices in [0, 10]
            rng: numpy Generator used by randomize(). A fresh
                 default_rng() is created when omitted.
        """
        self._indices = {
            Channel.RED: check_index(red, OFF),
            Channel.GREEN: check_index(green, OFF),
            Channel.BLUE: check_index(blue, OFF),
        }
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def red(self):
        return self._indices[Channel.RED]

    @property
    def green(self):
        return self._indices[Channel.GREEN]

    @property
    def blue(self):
        return self._indices[Channel.BLUE]

    def get(self, channel):
        return self._indices[parse_channel(channel)]

    def as_tuple(self):
        """(red, green, blue) snapshot of the current indices."""
        return (self.red, self.green, self.blue)

    def set_channel(self, channel, index):
        """Select formula `index` (0-10, 10 = off) for one channel."""
        channel = parse_channel(channel)
        self._indices[channel] = check_index(index, OFF)

    def set_all(self, index):
        """Texture preset: the same formula (0-9) on all three channels."""
        index = check_index(index, NUM_TEXTURES - 1)
        for channel in CHANNELS:
            self._indices[channel] = index

    def randomize(self):
        """Pick an independent uniform formula in 0-9 for each channel."""
        picks = self.rng.integers(0, NUM_TEXTURES, size=len(CHANNELS))
        for channel, pick in zip(CHANNELS, picks):
            self._indices[channel] = int(pick)
        return self.as_tuple()

    def label(self, channel):
        index = self.get(channel)
        return "off" if index == OFF else str(index)

    def __repr__(self):
        return (f"ChannelSelection(red={self.red}, green={self.green}, "
                f"blue={self.blue})")
