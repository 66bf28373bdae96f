"""
Shared fixtures for media core tests.
"""

import numpy as np
import pytest


@pytest.fixture
def solid_frame():
    """Factory for a frame filled with one RGBA color."""

    def _make(color, width=7, height=7):
        frame = np.empty((height, width, 4), dtype=np.uint8)
        frame[...] = color
        return frame

    return _make


@pytest.fixture
def random_frame():
    """A 16x24 frame of random RGBA values."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
