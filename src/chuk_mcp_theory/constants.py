"""
Constants and enums for the theory engine.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal

# Pitch range (MIDI note numbers)
PITCH_MIN = 0
PITCH_MAX = 127
SEMITONES_PER_OCTAVE = 12

# Equal-temperament reference
A4_PITCH = 69
A4_FREQUENCY = 440.0

# Reference pitches (pitch 60 is C5 by this package's octave convention)
MIDDLE_C = 60
PIANO_LOWEST = 21  # A1
PIANO_HIGHEST = 108  # C9


class HarmonicFunction(str, Enum):
    """
    The role a chord plays in a key.

    Assigned by scale degree, not by chord quality.
    """

    TONIC = "tonic"
    SUBDOMINANT = "subdominant"
    DOMINANT = "dominant"
    PREDOMINANT = "predominant"


# Degree (1-based) to harmonic function. 7 is the leading tone, grouped with dominant.
DEGREE_FUNCTIONS: dict[int, HarmonicFunction] = {
    1: HarmonicFunction.TONIC,
    2: HarmonicFunction.PREDOMINANT,
    3: HarmonicFunction.PREDOMINANT,
    4: HarmonicFunction.SUBDOMINANT,
    5: HarmonicFunction.DOMINANT,
    6: HarmonicFunction.PREDOMINANT,
    7: HarmonicFunction.DOMINANT,
}

# Voice-leading rating thresholds (average semitones moved per chord change)
VOICE_LEADING_EXCELLENT = 5.0
VOICE_LEADING_GOOD = 10.0

VoiceLeadingRating = Literal["excellent", "good", "fair"]

Difficulty = Literal["beginner", "intermediate", "advanced"]


class ErrorMessages:
    """Standardized error messages."""

    PITCH_OUT_OF_RANGE = "Pitch {value} is outside the valid range 0-127."
    PITCH_NOT_INTEGER = "Pitch must be an integer, got {value!r}."
    INTERVAL_OUT_OF_RANGE = "Interval {value} is outside 0-12 semitones. Normalize it first."
    FREQUENCY_NOT_POSITIVE = "Frequency must be a positive finite number, got {value}."
    INVALID_NAME = "Invalid pitch name: {value!r}. Expected format like 'C5', 'F#3' or 'Bb4'."
    UNKNOWN_SCALE = "Unknown scale type: {value!r}."
    UNKNOWN_CHORD = "Unknown chord quality: {value!r}."
    INVALID_DEGREE = "Degree {value!r} does not resolve to a diatonic chord in {key}."
    DEGREE_OUT_OF_SCALE = "Degree {value} is outside 1-{size} for this scale."
    OCTAVE_COUNT = "Octave count must be at least 1, got {value}."
    CHORD_SIZE = "Chord size must be at least 3, got {value}."
    INVERSION_NEGATIVE = "Inversion index must be >= 0, got {value}."
    EMPTY_PROGRESSION = "Degree sequence must not be empty."
    UNKNOWN_TEMPLATE = "Unknown progression template: {value!r}."
    NO_VOICING = "No voicing of {value} fits within the pitch range."
