"""
Apertures

Pixel-overlap primitives for aperture photometry: integer bounding boxes
placed anywhere on (or off) an image, and fractional-weight aperture
masks that can be cut out of, embedded into, or multiplied with image
data of any size.

Features:
- Half-open integer BoundingBox with union, intersection and float conversion
- Overlap slices between a box and an array of arbitrary shape
- ApertureMask cutout / multiply / to_image / get_values
- Shared overlap cutouts for co-registered data, error and flag arrays

No overlap between a mask and the data is not an error: those operations
return None (get_values returns an empty array).

Example:
    >>> import numpy as np
    >>> from apertures import ApertureMask, BoundingBox
    >>>
    >>> box = BoundingBox.from_float(7.5, 10.5, 3.5, 6.5)
    >>> mask = ApertureMask(np.ones(box.shape), box)
    >>> weighted = mask.multiply(image)
    >>> if weighted is not None:
    ...     print(weighted.sum())
"""

__version__ = "0.1.0"

from apertures.boundingbox import BoundingBox, get_overlap_slices
from apertures.config.settings import Settings, get_settings
from apertures.exceptions import ApertureError, InvalidBound, ShapeMismatch
from apertures.mask import ApertureMask, OverlapCutouts

__all__ = [
    "ApertureError",
    "ApertureMask",
    "BoundingBox",
    "InvalidBound",
    "OverlapCutouts",
    "Settings",
    "ShapeMismatch",
    "__version__",
    "get_overlap_slices",
    "get_settings",
]
