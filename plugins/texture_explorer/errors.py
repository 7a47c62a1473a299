"""
Error types raised by the texture explorer core.

Every configuration-mutating call validates before committing, so any of
these exceptions means the explorer state is exactly what it was before
the call.
"""


class TextureError(ValueError):
    """Base class for all texture explorer errors."""


class InvalidArgument(TextureError):
    """Formula index, channel name or grid size out of range."""


class InvalidDomain(TextureError):
    """Malformed coordinate bounds."""


class ExportError(TextureError):
    """Image buffer could not be packaged or written to disk."""
