"""
Exception types raised by the travel map data pipeline.

Loader failures are terminal for one dataset's render pass only; the pipeline
catches them at the pass boundary and reports them through the error surface.
"""


class TravelMapError(Exception):
    """Base class for every error raised by the travel map package."""


class TransportError(TravelMapError):
    """A dataset fetch did not come back with a success status."""

    def __init__(self, message, url=None, status_code=None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FormatError(TravelMapError):
    """A dataset payload parsed but is not a usable feature collection."""

    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class ConfigError(TravelMapError):
    """The settings export could not be read or holds unusable values."""
