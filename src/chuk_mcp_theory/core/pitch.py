"""
Pitch primitives - PitchClass, Interval, and pitch conversions.

A pitch is an integer 0-127 (MIDI note number), semitone-quantized,
with pitch 69 = 440 Hz in equal temperament.

Octave convention: the octave number is pitch // 12, so pitch 60 is "C5",
pitch 69 is "A5" and pitch 0 is "C0". Names and numbers round-trip exactly
under this convention.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar, overload

from chuk_mcp_theory.constants import (
    A4_FREQUENCY,
    A4_PITCH,
    PIANO_HIGHEST,
    PIANO_LOWEST,
    PITCH_MAX,
    PITCH_MIN,
    SEMITONES_PER_OCTAVE,
    ErrorMessages,
)
from chuk_mcp_theory.errors import InvalidNameError, RangeError, ValidationError

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

_LETTER_VALUES: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_INTERVAL_NAMES: list[str] = [
    "unison",
    "minor 2nd",
    "major 2nd",
    "minor 3rd",
    "major 3rd",
    "perfect 4th",
    "tritone",
    "perfect 5th",
    "minor 6th",
    "major 6th",
    "minor 7th",
    "major 7th",
    "octave",
]

_NAME_PATTERN = re.compile(r"^(?P<letter>[A-Za-z])(?P<accidental>[#b]?)(?P<octave>-?\d+)$")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled at serialization.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> Interval:
        """Get the interval from this pitch class to another (ascending)."""
        return Interval((other.value - self.value) % 12)

    def to_pitch(self, octave: int = 5) -> int:
        """Convert to a pitch number. C5 = 60."""
        return validate_pitch(self.value + octave * SEMITONES_PER_OCTAVE)

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_pitch(cls, pitch: int) -> PitchClass:
        """Extract pitch class from a pitch number."""
        return cls(pitch % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db'."""
        name = name.strip()

        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))

        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))

        # Enum names (C, Cs, D, Ds, etc.)
        name_upper = name.upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise InvalidNameError(ErrorMessages.INVALID_NAME.format(value=name), name)


@total_ordering
class Interval:
    """
    Distance between pitches in semitones.

    Scales are interval patterns, chords are interval stacks,
    voice leading is a sum of interval sizes.

    Immutable and hashable.
    """

    __slots__ = ("_semitones",)
    _semitones: int

    UNISON: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    TRITONE: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    MINOR_SIXTH: ClassVar[Interval]
    MAJOR_SIXTH: ClassVar[Interval]
    MINOR_SEVENTH: ClassVar[Interval]
    MAJOR_SEVENTH: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    def __init__(self, semitones: int) -> None:
        """Create an interval with the given number of semitones."""
        object.__setattr__(self, "_semitones", semitones)

    @property
    def semitones(self) -> int:
        """Number of semitones in this interval."""
        return self._semitones

    @property
    def name(self) -> str:
        """Canonical name, reduced into the octave ('major 3rd', 'octave')."""
        if self._semitones != 0 and self._semitones % 12 == 0:
            return "octave"
        return _INTERVAL_NAMES[abs(self._semitones) % 12]

    def invert(self) -> Interval:
        """
        Invert the interval within an octave.

        M3 (4) -> m6 (8)
        P5 (7) -> P4 (5)
        P8 (12) -> P1 (0), and P1 -> P8
        """
        reduced = self._semitones % 12
        if reduced == 0:
            return Interval(0 if self._semitones else 12)
        return Interval(12 - reduced)

    def __add__(self, other: Interval) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval(self._semitones + other._semitones)

    def __sub__(self, other: Interval) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval(self._semitones - other._semitones)

    def __neg__(self) -> Interval:
        return Interval(-self._semitones)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones == other._semitones)

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones < other._semitones)

    def __hash__(self) -> int:
        return hash(self._semitones)

    def __repr__(self) -> str:
        return f"Interval({self._semitones})"

    def __str__(self) -> str:
        return self.name


Interval.UNISON = Interval(0)
Interval.MINOR_SECOND = Interval(1)
Interval.MAJOR_SECOND = Interval(2)
Interval.MINOR_THIRD = Interval(3)
Interval.MAJOR_THIRD = Interval(4)
Interval.PERFECT_FOURTH = Interval(5)
Interval.TRITONE = Interval(6)
Interval.PERFECT_FIFTH = Interval(7)
Interval.MINOR_SIXTH = Interval(8)
Interval.MAJOR_SIXTH = Interval(9)
Interval.MINOR_SEVENTH = Interval(10)
Interval.MAJOR_SEVENTH = Interval(11)
Interval.OCTAVE = Interval(12)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_pitch(pitch: int) -> int:
    """
    Check that a pitch is an integer within 0-127.

    Returns:
        The pitch, unchanged

    Raises:
        ValidationError: If the pitch is not an integer
        RangeError: If the pitch is outside 0-127
    """
    if isinstance(pitch, bool) or not isinstance(pitch, int):
        raise ValidationError(ErrorMessages.PITCH_NOT_INTEGER.format(value=pitch), pitch)
    if not PITCH_MIN <= pitch <= PITCH_MAX:
        raise RangeError(ErrorMessages.PITCH_OUT_OF_RANGE.format(value=pitch), pitch)
    return pitch


# ---------------------------------------------------------------------------
# Name conversion
# ---------------------------------------------------------------------------


def pitch_to_name(pitch: int, prefer_flats: bool = False) -> str:
    """
    Convert a pitch number to a name like 'C5' or 'F#3'.

    The octave is pitch // 12 (60 -> "C5", 69 -> "A5", 0 -> "C0").

    Args:
        pitch: Pitch number (0-127)
        prefer_flats: Spell black keys with flats instead of sharps

    Returns:
        Pitch name
    """
    validate_pitch(pitch)
    octave, pitch_class = divmod(pitch, SEMITONES_PER_OCTAVE)
    return f"{PitchClass(pitch_class).spell(prefer_flats)}{octave}"


def name_to_pitch(name: str) -> int:
    """
    Parse a name of the form <letter>[#|b]<octave> into a pitch number.

    Inverse of pitch_to_name. Flats are accepted as input ('Db5' == 61).

    Raises:
        InvalidNameError: Malformed string or unrecognized letter
        RangeError: The named pitch is outside 0-127
    """
    if not isinstance(name, str):
        raise InvalidNameError(ErrorMessages.INVALID_NAME.format(value=name), name)

    match = _NAME_PATTERN.match(name.strip())
    if match is None:
        raise InvalidNameError(ErrorMessages.INVALID_NAME.format(value=name), name)

    letter = match.group("letter")
    if letter not in _LETTER_VALUES:
        raise InvalidNameError(ErrorMessages.INVALID_NAME.format(value=name), name)

    value = _LETTER_VALUES[letter]
    accidental = match.group("accidental")
    if accidental == "#":
        value += 1
    elif accidental == "b":
        value -= 1

    pitch = int(match.group("octave")) * SEMITONES_PER_OCTAVE + value
    if not PITCH_MIN <= pitch <= PITCH_MAX:
        raise RangeError(ErrorMessages.PITCH_OUT_OF_RANGE.format(value=pitch), pitch)
    return pitch


# ---------------------------------------------------------------------------
# Frequency conversion
# ---------------------------------------------------------------------------


def pitch_to_frequency(pitch: int) -> float:
    """
    Convert a pitch number to frequency in Hz (equal temperament).

    f = 440 * 2^((pitch - 69) / 12), so pitch 69 is exactly 440.0.
    """
    validate_pitch(pitch)
    return A4_FREQUENCY * 2 ** ((pitch - A4_PITCH) / SEMITONES_PER_OCTAVE)


def frequency_to_pitch(frequency: float) -> int:
    """
    Convert a frequency in Hz to the nearest pitch number.

    Not exactly invertible: rounds to the nearest semitone (halves round up).

    Raises:
        ValidationError: Frequency is not a positive finite number
        RangeError: The nearest pitch is outside 0-127
    """
    if not math.isfinite(frequency) or frequency <= 0:
        raise ValidationError(
            ErrorMessages.FREQUENCY_NOT_POSITIVE.format(value=frequency), frequency
        )
    exact = A4_PITCH + SEMITONES_PER_OCTAVE * math.log2(frequency / A4_FREQUENCY)
    pitch = math.floor(exact + 0.5)
    if not PITCH_MIN <= pitch <= PITCH_MAX:
        raise RangeError(ErrorMessages.PITCH_OUT_OF_RANGE.format(value=pitch), pitch)
    return pitch


# ---------------------------------------------------------------------------
# Intervals and arithmetic
# ---------------------------------------------------------------------------


def interval_name(semitones: int) -> str:
    """
    Name an interval of 0-12 semitones ('unison' ... 'octave').

    Raises:
        RangeError: For negative or > 12 inputs. Callers wanting compound
            intervals reduced should pass semitones % 12.
    """
    if not 0 <= semitones <= SEMITONES_PER_OCTAVE:
        raise RangeError(ErrorMessages.INTERVAL_OUT_OF_RANGE.format(value=semitones), semitones)
    return _INTERVAL_NAMES[semitones]


def pitch_offset(from_pitch: int, to_pitch: int) -> int:
    """Signed semitone distance (positive = up)."""
    return to_pitch - from_pitch


@overload
def transpose(pitches: int, semitones: int) -> int: ...


@overload
def transpose(pitches: Sequence[int], semitones: int) -> list[int]: ...


def transpose(pitches: int | Sequence[int], semitones: int) -> int | list[int]:
    """
    Transpose a pitch or a sequence of pitches.

    Raises:
        RangeError: If any result leaves 0-127 (never wraps or clamps)
    """
    if isinstance(pitches, int):
        return validate_pitch(validate_pitch(pitches) + semitones)
    return [validate_pitch(validate_pitch(p) + semitones) for p in pitches]


@overload
def clamp_pitch(pitches: int, low: int = ..., high: int = ...) -> int: ...


@overload
def clamp_pitch(pitches: Sequence[int], low: int = ..., high: int = ...) -> list[int]: ...


def clamp_pitch(
    pitches: int | Sequence[int], low: int = PITCH_MIN, high: int = PITCH_MAX
) -> int | list[int]:
    """
    Clamp pitches into [low, high].

    Playback boundary only. Generation never clamps - it raises RangeError.
    """
    if isinstance(pitches, int):
        return max(low, min(high, pitches))
    return [max(low, min(high, p)) for p in pitches]


def is_in_piano_range(pitch: int) -> bool:
    """True if the pitch is on an 88-key piano (pitches 21-108)."""
    return PIANO_LOWEST <= pitch <= PIANO_HIGHEST
