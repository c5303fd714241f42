"""
Pytest configuration and shared fixtures for the apertures package.

Example usage in tests:
    def test_something(image, edge_mask):
        cutout = edge_mask.cutout(image, fill_value=np.nan)
        assert cutout.shape == edge_mask.shape
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import numpy as np
import pytest

from apertures import ApertureMask, BoundingBox
from apertures.config.settings import get_settings
from tests.fixtures.factories import MaskFactory

# ============================================================================
# DATA FIXTURES
# ============================================================================


@pytest.fixture
def image() -> np.ndarray:
    """Provide a 6x8 float image whose value encodes its position.

    ``image[y, x] == 10 * y + x``.
    """
    yy, xx = np.mgrid[0:6, 0:8]
    return (10 * yy + xx).astype(float)


@pytest.fixture
def int_image() -> np.ndarray:
    """Provide a 6x8 integer image with ``image[y, x] == 10 * y + x``."""
    yy, xx = np.mgrid[0:6, 0:8]
    return (10 * yy + xx).astype(np.int64)


# ============================================================================
# MASK FIXTURES
# ============================================================================


@pytest.fixture
def mask_factory() -> type[MaskFactory]:
    """Provide the MaskFactory class."""
    return MaskFactory


@pytest.fixture
def inner_mask() -> ApertureMask:
    """Provide a 2x3 ramp mask lying fully inside the 6x8 image."""
    return MaskFactory.ramp(BoundingBox(ixmin=2, ixmax=5, iymin=1, iymax=3))


@pytest.fixture
def edge_mask() -> ApertureMask:
    """Provide a 3x3 ramp mask hanging off the top-left corner of the image."""
    return MaskFactory.ramp(BoundingBox(ixmin=-1, ixmax=2, iymin=-1, iymax=2))


@pytest.fixture
def outside_mask() -> ApertureMask:
    """Provide a mask entirely to the right of the 6x8 image."""
    return MaskFactory.uniform(BoundingBox(ixmin=8, ixmax=11, iymin=0, iymax=3))


@pytest.fixture
def holey_mask() -> ApertureMask:
    """Provide a 3x3 mask inside the image with zero weights on the diagonal."""
    weights = np.full((3, 3), 0.5)
    np.fill_diagonal(weights, 0.0)
    return ApertureMask(weights, BoundingBox(ixmin=1, ixmax=4, iymin=1, iymax=4))


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================


@pytest.fixture
def clean_settings(tmp_path, monkeypatch) -> Iterator[None]:
    """Isolate settings from the working directory and APERTURES_* variables."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("APERTURES_"):
            monkeypatch.delenv(key)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

