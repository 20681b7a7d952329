"""
Chord primitives - ChordQuality, Chord, DiatonicChord, and harmonization.

Chords are stacks of intervals. Chord qualities define the interval pattern.
Diatonic chords are built by stacking every other scale tone, then
classified by measuring the resulting intervals - so harmonization is
correct for any scale, not just major and minor.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType

from chuk_mcp_theory.constants import (
    DEGREE_FUNCTIONS,
    SEMITONES_PER_OCTAVE,
    ErrorMessages,
    HarmonicFunction,
)
from chuk_mcp_theory.core.pitch import (
    PitchClass,
    pitch_to_frequency,
    pitch_to_name,
    validate_pitch,
)
from chuk_mcp_theory.core.scale import ScaleType, generate_scale, get_scale_definition
from chuk_mcp_theory.errors import (
    InvalidDegreeError,
    UnknownChordError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ROMAN_NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")


def _normalize_id(value: str) -> str:
    return value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")


class ChordQuality(str, Enum):
    """
    Closed vocabulary of chord qualities.

    Values are the wire identifiers accepted by the tools.
    """

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    SUS2 = "sus2"
    SUS4 = "sus4"
    MAJOR_7 = "major7"
    DOMINANT_7 = "dominant7"
    MINOR_7 = "minor7"
    MINOR_MAJOR_7 = "minorMajor7"
    HALF_DIMINISHED_7 = "halfDiminished7"
    DIMINISHED_7 = "diminished7"
    AUGMENTED_MAJOR_7 = "augmentedMajor7"

    @property
    def definition(self) -> ChordDefinition:
        """The static definition for this quality."""
        return CHORD_DEFINITIONS[self]

    @property
    def is_minor(self) -> bool:
        """True for qualities built on a minor third (written lowercase as numerals)."""
        intervals = self.definition.intervals
        return 3 in intervals and 4 not in intervals

    @classmethod
    def parse(cls, value: ChordQuality | str) -> ChordQuality:
        """
        Resolve a chord quality identifier.

        Accepts members, canonical ids ('dominant7') and common aliases
        ('dom7', 'maj7', 'm7b5', '7'). Case and separators are ignored,
        except for the case-sensitive symbols 'm' and 'M'.

        Raises:
            UnknownChordError: If the identifier is not recognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            quality = _CASE_SENSITIVE_ALIASES.get(stripped) or _CHORD_LOOKUP.get(
                _normalize_id(stripped)
            )
            if quality is not None:
                return quality
        raise UnknownChordError(ErrorMessages.UNKNOWN_CHORD.format(value=value), value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChordDefinition:
    """
    A chord quality's intervals from the root plus display metadata.

    Intervals are measured from the root, not stacked.
    For example, a major triad is root + M3 + P5 (0, 4, 7 semitones).
    """

    name: str
    intervals: tuple[int, ...]
    symbol: str = ""  # chord-symbol suffix: 'm', '°', 'maj7', ...
    numeral_suffix: str = ""  # roman-numeral suffix: '°', '+', 'Δ7', ...
    description: str = ""

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Chord intervals must start at 0, got {self.intervals}")
        if any(b <= a for a, b in zip(self.intervals, self.intervals[1:])):
            raise ValueError(f"Chord intervals must be strictly increasing, got {self.intervals}")

    @property
    def size(self) -> int:
        return len(self.intervals)


CHORD_DEFINITIONS: MappingProxyType[ChordQuality, ChordDefinition] = MappingProxyType(
    {
        ChordQuality.MAJOR: ChordDefinition("Major", (0, 4, 7), "", "", "Happy, bright, resolved"),
        ChordQuality.MINOR: ChordDefinition(
            "Minor", (0, 3, 7), "m", "", "Sad, dark, introspective"
        ),
        ChordQuality.DIMINISHED: ChordDefinition(
            "Diminished", (0, 3, 6), "°", "°", "Unstable, needs resolution"
        ),
        ChordQuality.AUGMENTED: ChordDefinition(
            "Augmented", (0, 4, 8), "+", "+", "Tense, unusual, exotic"
        ),
        ChordQuality.SUS2: ChordDefinition(
            "Suspended 2nd", (0, 2, 7), "sus2", "sus2", "Open, unresolved, airy"
        ),
        ChordQuality.SUS4: ChordDefinition(
            "Suspended 4th", (0, 5, 7), "sus4", "sus4", "Suspended, wants to resolve to major"
        ),
        ChordQuality.MAJOR_7: ChordDefinition(
            "Major 7th", (0, 4, 7, 11), "maj7", "Δ7", "Jazz, sophisticated, bright"
        ),
        ChordQuality.DOMINANT_7: ChordDefinition(
            "Dominant 7th", (0, 4, 7, 10), "7", "7", "Blues, funk, dominant tension"
        ),
        ChordQuality.MINOR_7: ChordDefinition(
            "Minor 7th", (0, 3, 7, 10), "m7", "7", "Jazz, funk, dark and smooth"
        ),
        ChordQuality.MINOR_MAJOR_7: ChordDefinition(
            "Minor Major 7th", (0, 3, 7, 11), "m(maj7)", "Δ7", "Jazz, mysterious"
        ),
        ChordQuality.HALF_DIMINISHED_7: ChordDefinition(
            "Half Diminished 7th", (0, 3, 6, 10), "ø7", "ø7", "Jazz, pre-dominant tension"
        ),
        ChordQuality.DIMINISHED_7: ChordDefinition(
            "Diminished 7th", (0, 3, 6, 9), "°7", "°7", "Symmetric, maximally unstable"
        ),
        ChordQuality.AUGMENTED_MAJOR_7: ChordDefinition(
            "Augmented Major 7th", (0, 4, 8, 11), "+maj7", "+Δ7", "Bright, unsettled"
        ),
    }
)

_CHORD_LOOKUP: dict[str, ChordQuality] = {_normalize_id(q.value): q for q in ChordQuality}
_CHORD_LOOKUP.update(
    {
        "maj": ChordQuality.MAJOR,
        "min": ChordQuality.MINOR,
        "dim": ChordQuality.DIMINISHED,
        "aug": ChordQuality.AUGMENTED,
        "maj7": ChordQuality.MAJOR_7,
        "dom7": ChordQuality.DOMINANT_7,
        "7": ChordQuality.DOMINANT_7,
        "min7": ChordQuality.MINOR_7,
        "minmaj7": ChordQuality.MINOR_MAJOR_7,
        "halfdim7": ChordQuality.HALF_DIMINISHED_7,
        "m7b5": ChordQuality.HALF_DIMINISHED_7,
        "dim7": ChordQuality.DIMINISHED_7,
        "augmaj7": ChordQuality.AUGMENTED_MAJOR_7,
    }
)

# 'm' vs 'M' only differ by case, so they bypass normalization
_CASE_SENSITIVE_ALIASES: dict[str, ChordQuality] = {
    "M": ChordQuality.MAJOR,
    "m": ChordQuality.MINOR,
    "M7": ChordQuality.MAJOR_7,
    "m7": ChordQuality.MINOR_7,
}

# Measured interval shape -> quality, for classification
_QUALITY_BY_INTERVALS: dict[tuple[int, ...], ChordQuality] = {
    definition.intervals: quality for quality, definition in CHORD_DEFINITIONS.items()
}


def get_chord_definition(quality: ChordQuality | str) -> ChordDefinition:
    """Look up the static definition for a chord quality identifier."""
    return ChordQuality.parse(quality).definition


def available_chords() -> list[str]:
    """All canonical chord quality identifiers, in definition order."""
    return [quality.value for quality in ChordQuality]


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord: sounding pitches plus the quality they spell.

    root is the pitch of the chord root inside this voicing (it moves up an
    octave when the root is inverted). notes are ascending. quality is None
    only for diatonic stacks that match no known chord definition.
    """

    root: int
    quality: ChordQuality | None
    notes: tuple[int, ...]
    inversion: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "notes", tuple(self.notes))
        for pitch in (self.root, *self.notes):
            validate_pitch(pitch)
        if not self.notes:
            raise ValidationError("Chord must contain at least one note.", self.notes)
        if any(b <= a for a, b in zip(self.notes, self.notes[1:])):
            raise ValidationError(f"Chord notes must be ascending, got {self.notes}", self.notes)
        if not 0 <= self.inversion < len(self.notes):
            raise ValidationError(
                f"Inversion must be in 0-{len(self.notes) - 1}, got {self.inversion}",
                self.inversion,
            )

    @property
    def size(self) -> int:
        return len(self.notes)

    @property
    def bass(self) -> int:
        """Lowest sounding pitch."""
        return self.notes[0]

    @property
    def root_class(self) -> PitchClass:
        return PitchClass.from_pitch(self.root)

    @property
    def pitch_classes(self) -> tuple[PitchClass, ...]:
        return tuple(PitchClass.from_pitch(p) for p in self.notes)

    @property
    def intervals(self) -> tuple[int, ...]:
        """Semitones of each note above the bass."""
        return tuple(p - self.notes[0] for p in self.notes)

    @property
    def note_names(self) -> tuple[str, ...]:
        return tuple(pitch_to_name(p) for p in self.notes)

    @property
    def frequencies(self) -> tuple[float, ...]:
        return tuple(pitch_to_frequency(p) for p in self.notes)

    @property
    def symbol(self) -> str:
        """Chord symbol like 'Am', 'G7' or 'C/E' for inversions."""
        if self.quality is not None:
            suffix = self.quality.definition.symbol
        else:
            above_root = sorted({(p - self.root) % SEMITONES_PER_OCTAVE for p in self.notes})
            suffix = "(" + ",".join(str(i) for i in above_root) + ")"

        result = f"{self.root_class.spell()}{suffix}"
        if self.bass % SEMITONES_PER_OCTAVE != self.root % SEMITONES_PER_OCTAVE:
            result += f"/{PitchClass.from_pitch(self.bass).spell()}"
        return result

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class DiatonicChord:
    """
    A chord harmonized from a scale, tagged with its place in the key.

    Wraps a Chord; the wrapped chord is replaced (never mutated) when the
    voice-leading optimizer picks another voicing.
    """

    chord: Chord
    degree: int  # 1-based scale position
    roman_numeral: str
    harmonic_function: HarmonicFunction

    @property
    def root(self) -> int:
        return self.chord.root

    @property
    def quality(self) -> ChordQuality | None:
        return self.chord.quality

    @property
    def notes(self) -> tuple[int, ...]:
        return self.chord.notes

    @property
    def inversion(self) -> int:
        return self.chord.inversion

    @property
    def size(self) -> int:
        return self.chord.size

    @property
    def symbol(self) -> str:
        return self.chord.symbol

    @property
    def note_names(self) -> tuple[str, ...]:
        return self.chord.note_names

    def with_chord(self, chord: Chord) -> DiatonicChord:
        """Copy with a different voicing of the same chord."""
        return replace(self, chord=chord)

    def __str__(self) -> str:
        return f"{self.roman_numeral} ({self.chord.symbol})"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def generate_chord(root: int, quality: ChordQuality | str) -> Chord:
    """
    Build a chord in root position.

    Args:
        root: Root pitch (0-127)
        quality: Chord quality identifier

    Returns:
        Chord with notes root + offset for each offset, inversion 0

    Raises:
        UnknownChordError: Unknown quality
        RangeError: Root or any note outside 0-127
    """
    chord_quality = ChordQuality.parse(quality)
    validate_pitch(root)
    notes = tuple(root + offset for offset in chord_quality.definition.intervals)
    return Chord(root, chord_quality, notes)


def _rotate(notes: Sequence[int], root: int, steps: int) -> tuple[list[int], int]:
    """Move the lowest note up an octave, steps times. Tracks the root's pitch."""
    rotated = list(notes)
    for _ in range(steps):
        lowest = rotated.pop(0)
        rotated.append(lowest + SEMITONES_PER_OCTAVE)
        if lowest == root:
            root += SEMITONES_PER_OCTAVE
    return rotated, root


def invert_chord(chord: Chord, inversion_index: int) -> Chord:
    """
    Invert a chord by moving its lowest note up an octave, repeatedly.

    invert_chord([60, 64, 67], 1) -> [64, 67, 72]. The index is relative to
    the chord's current voicing; an index equal to the chord size yields the
    same pitch content a full octave up (allowed, not an error).

    Raises:
        ValidationError: Negative index
        RangeError: A raised note leaves 0-127
    """
    if isinstance(inversion_index, bool) or not isinstance(inversion_index, int):
        raise ValidationError(
            ErrorMessages.INVERSION_NEGATIVE.format(value=inversion_index), inversion_index
        )
    if inversion_index < 0:
        raise ValidationError(
            ErrorMessages.INVERSION_NEGATIVE.format(value=inversion_index), inversion_index
        )

    notes, root = _rotate(chord.notes, chord.root, inversion_index)
    # Chord validation raises RangeError for notes pushed above 127
    return Chord(
        root=root,
        quality=chord.quality,
        notes=tuple(notes),
        inversion=(chord.inversion + inversion_index) % chord.size,
    )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_chord(notes: Sequence[int]) -> ChordQuality | None:
    """
    Classify a root-position stack by its measured intervals.

    Intervals are measured above the lowest note and compared against
    every chord definition. Returns None if nothing matches.
    """
    ordered = sorted(notes)
    if not ordered:
        return None
    shape = tuple(p - ordered[0] for p in ordered)
    return _QUALITY_BY_INTERVALS.get(shape)


def roman_numeral_for(
    degree: int, quality: ChordQuality | None, notes: Sequence[int] = ()
) -> str:
    """
    Render the roman numeral for a chord on a scale degree.

    Uppercase for major-third chords, lowercase for minor-third chords,
    followed by the quality's numeral suffix ('°', '+', '7', 'Δ7', 'ø7').
    Unclassified stacks take their case from the third above the root.
    """
    if not 1 <= degree <= len(ROMAN_NUMERALS):
        raise InvalidDegreeError(
            ErrorMessages.DEGREE_OUT_OF_SCALE.format(value=degree, size=len(ROMAN_NUMERALS)),
            degree,
        )
    numeral = ROMAN_NUMERALS[degree - 1]

    if quality is not None:
        cased = numeral.lower() if quality.is_minor else numeral
        return cased + quality.definition.numeral_suffix

    if notes:
        above_root = {(p - notes[0]) % SEMITONES_PER_OCTAVE for p in notes}
        if 3 in above_root and 4 not in above_root:
            return numeral.lower()
    return numeral


def harmonic_function_for(degree: int) -> HarmonicFunction:
    """
    Conventional function by degree.

    1 tonic, 4 subdominant, 5 dominant, 7 (leading tone) dominant,
    2/3/6 predominant.
    """
    function = DEGREE_FUNCTIONS.get(degree)
    if function is None:
        raise InvalidDegreeError(
            ErrorMessages.DEGREE_OUT_OF_SCALE.format(value=degree, size=len(DEGREE_FUNCTIONS)),
            degree,
        )
    return function


# ---------------------------------------------------------------------------
# Harmonization
# ---------------------------------------------------------------------------


def generate_diatonic_chords(
    root: int, scale: ScaleType | str, chord_size: int = 3
) -> list[DiatonicChord]:
    """
    Harmonize every degree of a scale.

    For degree i, stacks scale positions i, i+2, i+4, ... (every other
    scale tone). Positions past the end of the scale wrap with an added
    octave. The same skip-one rule applies to every scale and chord size.

    Args:
        root: Root pitch of the key (0-127)
        scale: Scale identifier
        chord_size: Notes per chord (3 = triads, 4 = sevenths, ...)

    Returns:
        One DiatonicChord per scale degree, in degree order

    Raises:
        UnknownScaleError: Unknown scale
        ValidationError: chord_size < 3
        RangeError: Any stacked note outside 0-127
    """
    definition = get_scale_definition(scale)
    validate_pitch(root)
    if isinstance(chord_size, bool) or not isinstance(chord_size, int) or chord_size < 3:
        raise ValidationError(ErrorMessages.CHORD_SIZE.format(value=chord_size), chord_size)

    # One octave of the scale, without the closing octave note
    scale_notes = generate_scale(root, scale, 1)[:-1]
    size = definition.size

    chords: list[DiatonicChord] = []
    for index in range(size):
        notes = []
        for step in range(chord_size):
            octave, position = divmod(index + 2 * step, size)
            notes.append(scale_notes[position] + SEMITONES_PER_OCTAVE * octave)

        quality = classify_chord(notes)
        degree = index + 1
        chords.append(
            DiatonicChord(
                chord=Chord(notes[0], quality, tuple(notes)),
                degree=degree,
                roman_numeral=roman_numeral_for(degree, quality, notes),
                harmonic_function=harmonic_function_for(degree),
            )
        )

    logger.debug(
        "Harmonized %s on %d: %s",
        definition.name,
        root,
        " ".join(c.roman_numeral for c in chords),
    )
    return chords
