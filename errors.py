"""Exceptions raised by the filter core and its codec boundary."""


class FilterLabError(Exception):
    """Base class for every error the UI shell reports to the user."""


class DecodeFailure(FilterLabError):
    """Source file could not be read or decoded into a raster."""


class EncodeFailure(FilterLabError):
    """Output raster could not be written to the requested file."""


class InvalidParameter(FilterLabError, ValueError):
    """Algorithm parameter outside its declared range."""


class NoOutputAvailable(FilterLabError):
    """Save requested before any filter produced an output."""
