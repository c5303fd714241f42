"""
Exceptions raised by the aperture primitives.

Only malformed inputs raise. A box or mask that simply does not overlap
a data grid is a normal outcome and is reported with a ``None`` (or empty)
result instead.

Example:
    >>> from apertures import BoundingBox, InvalidBound
    >>>
    >>> try:
    ...     BoundingBox(5, 2, 0, 1)
    ... except InvalidBound as e:
    ...     print(e)
    ixmin must be <= ixmax (got 5 > 2)
"""

from __future__ import annotations


class ApertureError(ValueError):
    """Base class for aperture errors."""


class InvalidBound(ApertureError):
    """A bounding box lower bound exceeds its upper bound."""


class ShapeMismatch(ApertureError):
    """Two arrays that must share a shape do not."""
