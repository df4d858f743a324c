"""Exceptions raised by the surface readers.

All reader errors derive from :class:`ValueError`, so callers that already
guard mesh loading with ``except ValueError`` keep working.  Failures to
open or read a file surface as the builtin :class:`OSError`.
"""


class SurfaceReadError(ValueError):
    """The content of a surface file could not be parsed."""


class TruncatedDataError(SurfaceReadError):
    """A file holds fewer tokens or bytes than its header declares."""


class UnrecognizedFormatError(SurfaceReadError):
    """A marker byte or magic number does not match the expected format."""
