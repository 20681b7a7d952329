"""
Pytest configuration and shared fixtures.
"""

import pytest

from chuk_mcp_theory.core.chord import Chord, generate_chord
from chuk_mcp_theory.core.scale import Key, ScaleType


@pytest.fixture
def c_major() -> Key:
    """C5 major (root pitch 60)."""
    return Key(60, ScaleType.MAJOR)


@pytest.fixture
def a_minor() -> Key:
    """A4 natural minor (root pitch 57)."""
    return Key(57, ScaleType.MINOR_NATURAL)


@pytest.fixture
def c_major_triad() -> Chord:
    """C major triad in root position: [60, 64, 67]."""
    return generate_chord(60, "major")
