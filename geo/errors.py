"""
Purpose: Error taxonomy shared by every package.

- InsufficientGeometryError: fewer coordinates than a computation needs
- UpstreamDataMissingError: routing / step data absent where the caller needs it

A region with zero width or height is not an error: the projector checks
BoundingRegion.is_degenerate and maps it to the viewport center.
Label placement never fails either (see rendering.labeler.LabelPlacement.degraded).
"""


class DirectionsError(Exception):
    """Base class for walking-directions errors."""
    pass


class InsufficientGeometryError(DirectionsError):
    """Not enough coordinates to build a segment or a bounding region."""
    pass


class UpstreamDataMissingError(DirectionsError):
    """Route geometry or navigation steps are missing."""
    pass
