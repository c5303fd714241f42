"""
Integer pixel bounding boxes.

A BoundingBox is a half-open rectangle of pixel indices: it covers the
columns ``ixmin <= x < ixmax`` and the rows ``iymin <= y < iymax``, using
the same convention as Python slices. Bounds may be negative or lie past
the edge of any image; the box itself knows nothing about image sizes.

Pixel-center convention:
    Integer index ``i`` is the pixel whose area spans ``[i - 0.5, i + 0.5)``
    in continuous coordinates.

Example:
    >>> from apertures import BoundingBox
    >>>
    >>> box = BoundingBox(ixmin=2, ixmax=5, iymin=1, iymax=3)
    >>> box.shape
    (2, 3)
    >>> box.get_overlap_slices((4, 4))
    ((slice(1, 3, None), slice(2, 4, None)), (slice(0, 2, None), slice(0, 2, None)))
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral, Real

from apertures.exceptions import InvalidBound, ShapeMismatch

Slices2D = tuple[slice, slice]


def _as_index(name: str, value: object) -> int:
    """Normalize a bound to a Python int, rejecting bools and floats."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidBound(f"{name} must be an integer (got {value!r})")
    return int(value)


@dataclass(frozen=True)
class BoundingBox:
    """A rectangular bounding box in integer pixel indices.

    The upper values (``ixmax`` and ``iymax``) are exclusive. Equal lower
    and upper values describe an empty box.

    Attributes:
        ixmin: First column (inclusive)
        ixmax: Last column (exclusive)
        iymin: First row (inclusive)
        iymax: Last row (exclusive)

    Raises:
        InvalidBound: If a lower bound exceeds its upper bound, or a
            bound is not an integer.
    """

    ixmin: int
    ixmax: int
    iymin: int
    iymax: int

    def __post_init__(self) -> None:
        for name in ("ixmin", "ixmax", "iymin", "iymax"):
            object.__setattr__(self, name, _as_index(name, getattr(self, name)))

        if self.ixmin > self.ixmax:
            raise InvalidBound(f"ixmin must be <= ixmax (got {self.ixmin} > {self.ixmax})")
        if self.iymin > self.iymax:
            raise InvalidBound(f"iymin must be <= iymax (got {self.iymin} > {self.iymax})")

    @classmethod
    def from_float(cls, xmin: float, xmax: float, ymin: float, ymax: float) -> BoundingBox:
        """Create the smallest box enclosing a float-coordinate rectangle.

        Uses the pixel-center convention, so the float rectangle
        ``(-0.5, 0.5, -0.5, 0.5)`` maps onto the single pixel ``(0, 1, 0, 1)``.

        Args:
            xmin: Left edge
            xmax: Right edge
            ymin: Bottom edge
            ymax: Top edge

        Returns:
            Enclosing BoundingBox

        Raises:
            InvalidBound: If a value is not finite or the rounded bounds
                are out of order.

        Example:
            >>> BoundingBox.from_float(1.2, 3.7, -0.6, 0.4)
            BoundingBox(ixmin=1, ixmax=5, iymin=-1, iymax=1)
        """
        values = {"xmin": xmin, "xmax": xmax, "ymin": ymin, "ymax": ymax}
        for name, value in values.items():
            if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
                raise InvalidBound(f"{name} must be a finite number (got {value!r})")

        return cls(
            ixmin=math.floor(xmin + 0.5),
            ixmax=math.ceil(xmax + 0.5),
            iymin=math.floor(ymin + 0.5),
            iymax=math.ceil(ymax + 0.5),
        )

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        """``(height, width)`` of the box."""
        return (self.iymax - self.iymin, self.ixmax - self.ixmin)

    @property
    def center(self) -> tuple[float, float]:
        """``(y, x)`` centroid of the covered pixel indices."""
        return (
            0.5 * (self.iymax - 1 + self.iymin),
            0.5 * (self.ixmax - 1 + self.ixmin),
        )

    @property
    def extent(self) -> tuple[float, float, float, float]:
        """``(xmin, xmax, ymin, ymax)`` of the pixel edges.

        Suitable for drawing the box outline aligned with pixel edges
        (for example as the ``extent`` of an image plot).
        """
        return (
            self.ixmin - 0.5,
            self.ixmax - 0.5,
            self.iymin - 0.5,
            self.iymax - 0.5,
        )

    @property
    def is_empty(self) -> bool:
        """True if the box covers no pixels."""
        return self.ixmin == self.ixmax or self.iymin == self.iymax

    @property
    def slices(self) -> Slices2D:
        """``(row_slice, column_slice)`` for indexing an array directly.

        Raises:
            InvalidBound: If a lower bound is negative, since a negative
                slice start would wrap around the array.
        """
        if self.ixmin < 0 or self.iymin < 0:
            raise InvalidBound(
                "slices are only defined for non-negative lower bounds; "
                "use get_overlap_slices() instead"
            )
        return (slice(self.iymin, self.iymax), slice(self.ixmin, self.ixmax))

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(ixmin, ixmax, iymin, iymax)``."""
        return (self.ixmin, self.ixmax, self.iymin, self.iymax)

    def contains(self, other: BoundingBox) -> bool:
        """Check whether every pixel of ``other`` lies inside this box."""
        if other.is_empty:
            return True
        return (
            self.ixmin <= other.ixmin
            and other.ixmax <= self.ixmax
            and self.iymin <= other.iymin
            and other.iymax <= self.iymax
        )

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------

    def union(self, other: BoundingBox) -> BoundingBox:
        """Smallest box containing both boxes."""
        if not isinstance(other, BoundingBox):
            raise TypeError(f"union requires a BoundingBox, got {type(other).__name__}")

        return BoundingBox(
            ixmin=min(self.ixmin, other.ixmin),
            ixmax=max(self.ixmax, other.ixmax),
            iymin=min(self.iymin, other.iymin),
            iymax=max(self.iymax, other.iymax),
        )

    def intersection(self, other: BoundingBox) -> BoundingBox:
        """Box covering the pixels shared by both boxes.

        Disjoint boxes give the canonical empty box ``(0, 0, 0, 0)``.
        """
        if not isinstance(other, BoundingBox):
            raise TypeError(f"intersection requires a BoundingBox, got {type(other).__name__}")

        ixmin = max(self.ixmin, other.ixmin)
        ixmax = min(self.ixmax, other.ixmax)
        iymin = max(self.iymin, other.iymin)
        iymax = min(self.iymax, other.iymax)

        if ixmax < ixmin or iymax < iymin:
            return BoundingBox(0, 0, 0, 0)

        return BoundingBox(ixmin=ixmin, ixmax=ixmax, iymin=iymin, iymax=iymax)

    def __or__(self, other: object) -> BoundingBox:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> BoundingBox:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self.intersection(other)

    # ------------------------------------------------------------------
    # Overlap with an array
    # ------------------------------------------------------------------

    def get_overlap_slices(
        self, shape: Sequence[int]
    ) -> tuple[Slices2D, Slices2D] | tuple[None, None]:
        """Slices for the overlap between this box and a ``(ny, nx)`` array.

        Args:
            shape: Shape of the large array, ``(ny, nx)``

        Returns:
            ``(large_slices, small_slices)``. ``large_slices`` index the
            large array; ``small_slices`` index an array shaped like this
            box. Both select regions of identical shape. ``(None, None)``
            if there is no overlap.

        Raises:
            ShapeMismatch: If ``shape`` has fewer than two dimensions.
        """
        if len(shape) < 2:
            raise ShapeMismatch(f"expected a 2D shape (ny, nx), got {tuple(shape)}")

        ny, nx = int(shape[0]), int(shape[1])

        if self.ixmin >= nx or self.iymin >= ny or self.ixmax <= 0 or self.iymax <= 0:
            return None, None

        # an empty box has nothing to overlap, even when it sits inside the array
        if self.is_empty:
            return None, None

        ylo = max(self.iymin, 0)
        yhi = min(self.iymax, ny)
        xlo = max(self.ixmin, 0)
        xhi = min(self.ixmax, nx)

        large = (slice(ylo, yhi), slice(xlo, xhi))
        small = (
            slice(ylo - self.iymin, yhi - self.iymin),
            slice(xlo - self.ixmin, xhi - self.ixmin),
        )
        return large, small


def get_overlap_slices(
    box: BoundingBox, ny: int, nx: int
) -> tuple[Slices2D, Slices2D] | tuple[None, None]:
    """Functional form of :meth:`BoundingBox.get_overlap_slices`."""
    return box.get_overlap_slices((ny, nx))
