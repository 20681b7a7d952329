"""
Scale primitives - ScaleType, ScaleDefinition, Key, and scale generation.

Scales are semitone offsets from a root. Keys are scale types applied to a
root pitch. The definition table is built once at import and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from chuk_mcp_theory.constants import SEMITONES_PER_OCTAVE, ErrorMessages
from chuk_mcp_theory.core.pitch import PitchClass, name_to_pitch, pitch_to_name, validate_pitch
from chuk_mcp_theory.errors import (
    InvalidDegreeError,
    RangeError,
    UnknownScaleError,
    ValidationError,
)


def _normalize_id(value: str) -> str:
    return value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")


class ScaleType(str, Enum):
    """
    Closed vocabulary of scale identifiers.

    Values are the wire identifiers accepted by the tools.
    """

    MAJOR = "major"
    MINOR_NATURAL = "minorNatural"
    MINOR_HARMONIC = "minorHarmonic"
    MINOR_MELODIC = "minorMelodic"
    DORIAN = "dorian"
    PHRYGIAN = "phrygian"
    LYDIAN = "lydian"
    MIXOLYDIAN = "mixolydian"
    AEOLIAN = "aeolian"
    LOCRIAN = "locrian"
    MAJOR_PENTATONIC = "majorPentatonic"
    MINOR_PENTATONIC = "minorPentatonic"
    BLUES = "blues"
    WHOLE_TONE = "wholeTone"

    @property
    def definition(self) -> ScaleDefinition:
        """The static definition for this scale."""
        return SCALE_DEFINITIONS[self]

    @classmethod
    def parse(cls, value: ScaleType | str) -> ScaleType:
        """
        Resolve a scale identifier.

        Accepts members, canonical ids ('minorNatural') and common aliases
        ('minor', 'natural_minor', 'ionian'). Case and separators are ignored.

        Raises:
            UnknownScaleError: If the identifier is not recognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            scale = _SCALE_LOOKUP.get(_normalize_id(value))
            if scale is not None:
                return scale
        raise UnknownScaleError(ErrorMessages.UNKNOWN_SCALE.format(value=value), value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScaleDefinition:
    """
    A scale's semitone pattern plus display metadata.

    Intervals are cumulative offsets from the root: strictly increasing,
    starting at 0, all below 12. The octave is implicit.
    """

    name: str
    intervals: tuple[int, ...]
    description: str = ""
    degrees: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Scale pattern must start at 0, got {self.intervals}")
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:])):
            raise ValueError(f"Scale pattern must be strictly increasing, got {self.intervals}")
        if self.intervals[-1] >= SEMITONES_PER_OCTAVE:
            raise ValueError(f"Scale pattern must stay below 12, got {self.intervals}")
        if self.degrees and len(self.degrees) != len(self.intervals):
            raise ValueError(f"Scale '{self.name}' needs one degree label per interval")

    @property
    def size(self) -> int:
        """Number of notes per octave (7 diatonic, 5 pentatonic, ...)."""
        return len(self.intervals)


SCALE_DEFINITIONS: MappingProxyType[ScaleType, ScaleDefinition] = MappingProxyType(
    {
        ScaleType.MAJOR: ScaleDefinition(
            "Major",
            (0, 2, 4, 5, 7, 9, 11),
            "Bright, happy, resolved",
            ("I", "II", "III", "IV", "V", "VI", "VII"),
        ),
        ScaleType.MINOR_NATURAL: ScaleDefinition(
            "Minor (Natural)",
            (0, 2, 3, 5, 7, 8, 10),
            "Dark, introspective, melancholic",
            ("I", "II", "IIIb", "IV", "V", "VIb", "VIIb"),
        ),
        ScaleType.MINOR_HARMONIC: ScaleDefinition(
            "Minor (Harmonic)",
            (0, 2, 3, 5, 7, 8, 11),
            "Dark with classical harmonic strength",
            ("I", "II", "IIIb", "IV", "V", "VIb", "VII"),
        ),
        ScaleType.MINOR_MELODIC: ScaleDefinition(
            "Minor (Melodic)",
            (0, 2, 3, 5, 7, 9, 11),
            "Dark but with melodic ease",
            ("I", "II", "IIIb", "IV", "V", "VI", "VII"),
        ),
        ScaleType.DORIAN: ScaleDefinition(
            "Dorian",
            (0, 2, 3, 5, 7, 9, 10),
            "Jazzy, funky, slightly dark",
            ("I", "II", "IIIb", "IV", "V", "VI", "VIIb"),
        ),
        ScaleType.PHRYGIAN: ScaleDefinition(
            "Phrygian",
            (0, 1, 3, 5, 7, 8, 10),
            "Spanish, exotic, ominous",
            ("I", "IIb", "IIIb", "IV", "V", "VIb", "VIIb"),
        ),
        ScaleType.LYDIAN: ScaleDefinition(
            "Lydian",
            (0, 2, 4, 6, 7, 9, 11),
            "Bright, ethereal, whimsical",
            ("I", "II", "III", "#IV", "V", "VI", "VII"),
        ),
        ScaleType.MIXOLYDIAN: ScaleDefinition(
            "Mixolydian",
            (0, 2, 4, 5, 7, 9, 10),
            "Bluesy, dominant, rock-oriented",
            ("I", "II", "III", "IV", "V", "VI", "VIIb"),
        ),
        ScaleType.AEOLIAN: ScaleDefinition(
            "Aeolian",
            (0, 2, 3, 5, 7, 8, 10),
            "Dark, introspective",
            ("I", "II", "IIIb", "IV", "V", "VIb", "VIIb"),
        ),
        ScaleType.LOCRIAN: ScaleDefinition(
            "Locrian",
            (0, 1, 3, 5, 6, 8, 10),
            "Dark, dissonant, unstable",
            ("I", "IIb", "IIIb", "IV", "Vb", "VIb", "VIIb"),
        ),
        ScaleType.MAJOR_PENTATONIC: ScaleDefinition(
            "Major Pentatonic",
            (0, 2, 4, 7, 9),
            "Pentatonic, musical, versatile",
            ("I", "II", "III", "V", "VI"),
        ),
        ScaleType.MINOR_PENTATONIC: ScaleDefinition(
            "Minor Pentatonic",
            (0, 3, 5, 7, 10),
            "Pentatonic blues, versatile",
            ("I", "IIIb", "IV", "V", "VIIb"),
        ),
        ScaleType.BLUES: ScaleDefinition(
            "Blues",
            (0, 3, 5, 6, 7, 10),
            "Blues, rock, with blue notes",
            ("I", "IIIb", "IV", "Vb", "V", "VIIb"),
        ),
        ScaleType.WHOLE_TONE: ScaleDefinition(
            "Whole Tone",
            (0, 2, 4, 6, 8, 10),
            "Dreamy, ambiguous, no tonal center",
            ("I", "II", "III", "#IV", "#V", "#VI"),
        ),
    }
)

# Canonical ids plus aliases, keyed by normalized form
_SCALE_LOOKUP: dict[str, ScaleType] = {_normalize_id(s.value): s for s in ScaleType}
_SCALE_LOOKUP.update(
    {
        "ionian": ScaleType.MAJOR,
        "minor": ScaleType.MINOR_NATURAL,
        "naturalminor": ScaleType.MINOR_NATURAL,
        "harmonicminor": ScaleType.MINOR_HARMONIC,
        "melodicminor": ScaleType.MINOR_MELODIC,
        "pentatonic": ScaleType.MAJOR_PENTATONIC,
        "pentatonicmajor": ScaleType.MAJOR_PENTATONIC,
        "pentatonicminor": ScaleType.MINOR_PENTATONIC,
    }
)

_DEGREE_NAMES: tuple[str, ...] = (
    "Tonic",
    "Supertonic",
    "Mediant",
    "Subdominant",
    "Dominant",
    "Submediant",
    "Leading Tone",
)


@dataclass(frozen=True)
class ScaleDegreeInfo:
    """Descriptive information about one position of a scale."""

    degree: int  # 1-based position in the scale
    roman: str  # label from the scale definition, e.g. 'IIIb'
    name: str  # functional name, e.g. 'Mediant'
    offset: int  # semitones above the root


def get_scale_definition(scale: ScaleType | str) -> ScaleDefinition:
    """Look up the static definition for a scale identifier."""
    return ScaleType.parse(scale).definition


def available_scales() -> list[str]:
    """All canonical scale identifiers, in definition order."""
    return [scale.value for scale in ScaleType]


def generate_scale(root: int, scale: ScaleType | str, octave_count: int = 1) -> list[int]:
    """
    Generate the pitches of a scale across one or more octaves.

    Emits root + 12*o + d for every octave o and offset d, then closes
    the top octave with root + 12*octave_count. The result has
    len(pattern) * octave_count + 1 notes.

    Args:
        root: Root pitch (0-127)
        scale: Scale identifier
        octave_count: Number of octaves (>= 1)

    Returns:
        Ascending list of pitches

    Raises:
        UnknownScaleError: Unknown scale identifier
        ValidationError: octave_count < 1
        RangeError: Root or any generated note outside 0-127
    """
    definition = get_scale_definition(scale)
    validate_pitch(root)
    if isinstance(octave_count, bool) or not isinstance(octave_count, int) or octave_count < 1:
        raise ValidationError(ErrorMessages.OCTAVE_COUNT.format(value=octave_count), octave_count)

    top = root + SEMITONES_PER_OCTAVE * octave_count
    if top > 127:
        raise RangeError(ErrorMessages.PITCH_OUT_OF_RANGE.format(value=top), top)

    notes = [
        root + SEMITONES_PER_OCTAVE * octave + offset
        for octave in range(octave_count)
        for offset in definition.intervals
    ]
    notes.append(top)
    return notes


def scale_note_names(
    root: int,
    scale: ScaleType | str,
    octave_count: int = 1,
    prefer_flats: bool = False,
) -> list[str]:
    """Generate a scale and render every note as a name ('C5', 'D5', ...)."""
    return [pitch_to_name(p, prefer_flats) for p in generate_scale(root, scale, octave_count)]


def get_scale_degree(degree: int, scale: ScaleType | str) -> ScaleDegreeInfo:
    """
    Describe a scale position.

    Raises:
        InvalidDegreeError: If degree is outside 1..scale size
    """
    definition = get_scale_definition(scale)
    is_int = isinstance(degree, int) and not isinstance(degree, bool)
    if not is_int or not 1 <= degree <= definition.size:
        raise InvalidDegreeError(
            ErrorMessages.DEGREE_OUT_OF_SCALE.format(value=degree, size=definition.size), degree
        )

    index = degree - 1
    roman = definition.degrees[index] if definition.degrees else str(degree)
    name = _DEGREE_NAMES[index] if index < len(_DEGREE_NAMES) else f"Degree {degree}"
    return ScaleDegreeInfo(degree, roman, name, definition.intervals[index])


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch plus a scale type.

    This is the context for resolving scale degrees to actual pitches.
    Keys are passed as parameters, never stored globally.

    Examples:
        Key(60, ScaleType.MAJOR) = C5 major
        Key(62, ScaleType.DORIAN) = D5 dorian
    """

    root: int
    scale: ScaleType

    def __post_init__(self) -> None:
        validate_pitch(self.root)
        object.__setattr__(self, "scale", ScaleType.parse(self.scale))

    @property
    def definition(self) -> ScaleDefinition:
        return self.scale.definition

    @property
    def tonic(self) -> PitchClass:
        return PitchClass.from_pitch(self.root)

    def scale_pitches(self, octave_count: int = 1) -> list[int]:
        """Pitches of this key's scale starting at the root."""
        return generate_scale(self.root, self.scale, octave_count)

    def degree_to_pitch(self, degree: int) -> int:
        """
        Resolve a 1-based scale degree to a pitch at or above the root.

        Degrees beyond the scale size wrap into higher octaves.
        """
        if degree < 1:
            raise InvalidDegreeError(
                ErrorMessages.DEGREE_OUT_OF_SCALE.format(value=degree, size=self.definition.size),
                degree,
            )
        octave, index = divmod(degree - 1, self.definition.size)
        return validate_pitch(
            self.root + self.definition.intervals[index] + SEMITONES_PER_OCTAVE * octave
        )

    def contains(self, pitch: int) -> bool:
        """True if the pitch's class belongs to this key's scale."""
        return (pitch - self.root) % SEMITONES_PER_OCTAVE in self.definition.intervals

    def __str__(self) -> str:
        return f"{pitch_to_name(self.root)} {self.scale.value}"

    def __repr__(self) -> str:
        return f"Key({self.root}, {self.scale.value!r})"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C5_major', 'D4 dorian', 'F#3_minorNatural'.

        Raises:
            InvalidNameError: Malformed root name
            UnknownScaleError: Unknown scale identifier
        """
        parts = name.replace("_", " ", 1).split(maxsplit=1)
        if len(parts) < 2:
            raise UnknownScaleError(ErrorMessages.UNKNOWN_SCALE.format(value=name), name)
        return cls(name_to_pitch(parts[0]), ScaleType.parse(parts[1]))
