"""
Aperture masks: fractional pixel weights placed on a pixel grid.

An ApertureMask pairs a 2D array of fractional coverage weights with the
BoundingBox that locates it. Every operation against a data array first
asks the box for the overlap slices, so masks that hang off the edge of
(or miss) the data are handled uniformly:

- full overlap: the data region is used as-is
- partial overlap: missing pixels take a fill value
- no overlap: the operation returns ``None`` (``get_values`` returns an
  empty array)

Example:
    >>> import numpy as np
    >>> from apertures import ApertureMask, BoundingBox
    >>>
    >>> mask = ApertureMask(np.ones((3, 3)), BoundingBox(-1, 2, -1, 2))
    >>> data = np.arange(16.0).reshape(4, 4)
    >>> mask.cutout(data, fill_value=np.nan)
    array([[nan, nan, nan],
           [nan,  0.,  1.],
           [nan,  4.,  5.]])
    >>> mask.get_values(data)
    array([0., 1., 4., 5.])

Batch use with co-registered arrays:
    >>> cutouts = mask.get_overlap_cutouts(data.shape, mask=flags)
    >>> values = mask.get_values(data, cutouts=cutouts)
    >>> errors = mask.get_values(error, cutouts=cutouts)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import structlog

from apertures.boundingbox import BoundingBox, Slices2D
from apertures.exceptions import ShapeMismatch

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OverlapCutouts:
    """Overlap of a mask with a data grid, shared by co-registered arrays.

    Iterating yields ``(slices, weights, pixel_mask)``, so the result
    unpacks as a triple.

    Attributes:
        slices: ``(row_slice, column_slice)`` into the data grid
        weights: Mask weights over the overlapping region
        pixel_mask: True where a pixel contributes (non-zero weight and
            not excluded by the external mask)
        shape: ``(ny, nx)`` of the grid the overlap was computed for
    """

    slices: Slices2D | None
    weights: np.ndarray | None
    pixel_mask: np.ndarray | None
    shape: tuple[int, int] | None = None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.slices, self.weights, self.pixel_mask))

    @property
    def has_overlap(self) -> bool:
        """True if the mask and the data grid intersect."""
        return self.slices is not None


def _as_2d(data: Any, name: str = "data") -> np.ndarray:
    """Convert to an array and check it is two-dimensional."""
    arr = np.asanyarray(data)
    if arr.ndim != 2:
        raise ShapeMismatch(f"{name} must be a 2D array (got ndim={arr.ndim})")
    return arr


class ApertureMask:
    """Fractional aperture weights located on the pixel grid.

    Instances are immutable: the weights are copied to a read-only
    float array at construction and ``zero_mask`` is derived once.

    Attributes:
        weights: 2D float array of fractional pixel coverage
        box: BoundingBox locating ``weights``
        zero_mask: Read-only boolean array, True where the weight is
            exactly zero

    Raises:
        ShapeMismatch: If ``weights`` is not 2D or its shape differs from
            ``box.shape``.

    Example:
        >>> mask = ApertureMask(weights, BoundingBox(10, 15, 20, 25))
        >>> flux = mask.multiply(image)
        >>> if flux is None:
        ...     print("aperture misses the image")
    """

    __slots__ = ("_weights", "_box", "_zero_mask")

    def __init__(self, weights: Any, box: BoundingBox):
        if not isinstance(box, BoundingBox):
            raise TypeError(f"box must be a BoundingBox, got {type(box).__name__}")

        arr = np.array(weights, dtype=float)
        if arr.ndim != 2:
            raise ShapeMismatch(f"mask weights must be a 2D array (got ndim={arr.ndim})")
        if arr.shape != box.shape:
            raise ShapeMismatch(
                f"mask weights shape {arr.shape} does not match bounding box shape {box.shape}"
            )

        zero_mask = arr == 0
        arr.flags.writeable = False
        zero_mask.flags.writeable = False

        self._weights = arr
        self._box = box
        self._zero_mask = zero_mask

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def box(self) -> BoundingBox:
        return self._box

    @property
    def zero_mask(self) -> np.ndarray:
        return self._zero_mask

    @property
    def shape(self) -> tuple[int, int]:
        """``(height, width)`` of the mask."""
        return self._box.shape

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> np.ndarray:
        if dtype is None and not copy:
            return self._weights
        return np.array(self._weights, dtype=dtype)

    def __repr__(self) -> str:
        return f"ApertureMask(shape={self.shape}, box={self._box!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApertureMask):
            return NotImplemented
        return self._box == other._box and np.array_equal(self._weights, other._weights)

    __hash__ = None  # type: ignore[assignment]

    def get_overlap_slices(
        self, shape: Sequence[int]
    ) -> tuple[Slices2D, Slices2D] | tuple[None, None]:
        """Overlap slices between the mask box and a ``(ny, nx)`` array.

        See :meth:`BoundingBox.get_overlap_slices`.
        """
        return self._box.get_overlap_slices(shape)

    def to_image(self, shape: Sequence[int], fill: float = 0.0) -> np.ndarray | None:
        """Embed the mask weights into an array of the given shape.

        Args:
            shape: ``(ny, nx)`` of the output image
            fill: Value of pixels outside the mask

        Returns:
            Float array of ``shape``, or None if the mask does not
            overlap it
        """
        large, small = self.get_overlap_slices(shape)
        if large is None:
            logger.debug("mask_no_overlap", op="to_image", box=self._box.as_tuple(), shape=tuple(shape))
            return None

        image = np.full(tuple(shape[:2]), fill, dtype=float)
        image[large] = self._weights[small]
        return image

    def cutout(
        self,
        data: Any,
        fill_value: float = 0,
        force_copy: bool = False,
    ) -> np.ndarray | None:
        """Extract the region of ``data`` aligned with the mask.

        If the mask lies entirely inside ``data`` the result is a view into
        ``data`` (writes go through) unless ``force_copy`` is set. Partial
        overlaps always produce a new array, with pixels outside ``data``
        set to ``fill_value``.

        Args:
            data: 2D array
            fill_value: Value for pixels outside ``data``
            force_copy: Return a copy even for a full overlap

        Returns:
            Array shaped like the mask, or None if there is no overlap

        Raises:
            ShapeMismatch: If ``data`` is not 2D
        """
        data = _as_2d(data)
        large, small = self.get_overlap_slices(data.shape)
        if large is None:
            logger.debug("mask_no_overlap", op="cutout", box=self._box.as_tuple(), shape=data.shape)
            return None

        cutout = data[large]
        if cutout.shape == self.shape:
            return cutout.copy() if force_copy else cutout

        dtype = np.result_type(data.dtype, np.min_scalar_type(fill_value))
        result = np.full(self.shape, fill_value, dtype=dtype)
        result[small] = cutout
        return result

    def multiply(self, data: Any, fill_value: float = 0) -> np.ndarray | None:
        """Multiply the mask weights by the aligned region of ``data``.

        Pixels where the weight is zero are set to ``fill_value``.

        Args:
            data: 2D array
            fill_value: Value for pixels outside ``data`` or with zero weight

        Returns:
            Weighted array shaped like the mask, or None if there is no
            overlap
        """
        cutout = self.cutout(data, fill_value=fill_value, force_copy=True)
        if cutout is None:
            return None

        with np.errstate(invalid="ignore"):
            weighted = cutout * self._weights
        weighted[self._zero_mask] = fill_value
        return weighted

    def get_overlap_cutouts(self, shape: Sequence[int], mask: Any = None) -> OverlapCutouts:
        """Compute the overlap once for a set of co-registered arrays.

        Args:
            shape: ``(ny, nx)`` of the data arrays
            mask: Optional boolean array of ``shape``; True marks pixels to
                exclude

        Returns:
            OverlapCutouts; all fields but ``shape`` are None if there is no
            overlap

        Raises:
            ShapeMismatch: If ``mask`` does not have ``shape``
        """
        shape = tuple(int(n) for n in shape[:2])

        if mask is not None:
            mask = np.asanyarray(mask)
            if mask.shape != shape:
                logger.warning("mask_shape_mismatch", mask_shape=mask.shape, data_shape=shape)
                raise ShapeMismatch(
                    f"mask shape {mask.shape} does not match data shape {shape}"
                )

        large, small = self.get_overlap_slices(shape)
        if large is None:
            logger.debug(
                "mask_no_overlap", op="get_overlap_cutouts", box=self._box.as_tuple(), shape=shape
            )
            return OverlapCutouts(None, None, None, shape)

        weights = self._weights[small]
        pixel_mask = weights > 0
        if mask is not None:
            pixel_mask &= ~mask[large].astype(bool)

        return OverlapCutouts(large, weights, pixel_mask, shape)

    def get_values(
        self,
        data: Any,
        mask: Any = None,
        *,
        cutouts: OverlapCutouts | None = None,
    ) -> np.ndarray:
        """Weighted data values of the pixels covered by the mask.

        Args:
            data: 2D array
            mask: Optional boolean array; True marks pixels to exclude
            cutouts: Precomputed result of :meth:`get_overlap_cutouts`
                for ``data.shape``; ``mask`` is ignored when given

        Returns:
            1D float array in row-major order; empty if there is no overlap

        Raises:
            ShapeMismatch: If ``data`` is not 2D or ``cutouts`` were computed
                for another grid shape
        """
        data = _as_2d(data)
        if cutouts is None:
            cutouts = self.get_overlap_cutouts(data.shape, mask=mask)
        elif cutouts.shape is not None and data.shape != cutouts.shape:
            raise ShapeMismatch(
                f"cutouts for shape {cutouts.shape} do not fit data of shape {data.shape}"
            )

        if not cutouts.has_overlap:
            return np.array([], dtype=float)

        if cutouts.weights.shape != data[cutouts.slices].shape:
            raise ShapeMismatch(
                f"precomputed cutouts do not fit data of shape {data.shape}"
            )

        values = cutouts.weights * data[cutouts.slices]
        return np.asarray(values[cutouts.pixel_mask], dtype=float)
