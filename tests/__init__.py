"""
Apertures - Test Suite

Test Organization:
- test_boundingbox.py: BoundingBox construction, geometry, set operations, overlap slices
- test_mask.py: ApertureMask cutout, multiply, to_image and value extraction
- test_config.py: Settings loading and environment overrides
- test_utils.py: Logging setup

Fixtures are in tests/fixtures/:
- factories.py: MaskFactory for building masks

Run tests:
    $ pytest tests/ -v
"""
