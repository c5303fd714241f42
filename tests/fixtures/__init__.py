"""
Test fixtures for the apertures package.

- MaskFactory: Build ApertureMask instances with known weights
"""

from tests.fixtures.factories import MaskFactory

__all__ = [
    "MaskFactory",
]
