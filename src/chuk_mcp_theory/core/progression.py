"""
Chord progressions - resolving roman numerals in a key and voice-leading them.

A progression is an ordered list of diatonic chords. The first chord stays
in root position; every later chord is re-voiced against the one before it
so the whole sequence moves as little as possible.

Labels follow the diatonic chords of the key:
    I, ii, iii, IV, V, vi, vii°      (triads in major)
    V7, ii7, IΔ7, viiø7              (sevenths)
    1, 4, 5                          (plain degree numbers pick the triad)

Secondary dominants (V/V), borrowed chords and accidentals (bVII) are not
diatonic and do not resolve.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from chuk_mcp_theory.constants import (
    MIDDLE_C,
    VOICE_LEADING_EXCELLENT,
    VOICE_LEADING_GOOD,
    Difficulty,
    ErrorMessages,
    HarmonicFunction,
    VoiceLeadingRating,
)
from chuk_mcp_theory.core.chord import (
    ROMAN_NUMERALS,
    Chord,
    DiatonicChord,
    generate_diatonic_chords,
)
from chuk_mcp_theory.core.scale import Key, ScaleType
from chuk_mcp_theory.core.voicing import best_voicing_for, voice_leading_distance
from chuk_mcp_theory.errors import InvalidDegreeError, ValidationError

logger = logging.getLogger(__name__)

Label = str | int

_LABEL_PATTERN = re.compile(r"^(?P<numeral>[IViv]+)(?P<suffix>.*)$")
_LABEL_SEPARATORS = re.compile(r"[\s\-,]+")

# Alternate spellings of quality marks, rewritten in order
_SUFFIX_ALIASES: tuple[tuple[str, str], ...] = (
    ("m7b5", "ø7"),
    ("maj", "Δ"),
    ("dim", "°"),
    ("aug", "+"),
    ("M", "Δ"),
    ("o", "°"),
)
# Marks that may be omitted from a label; Δ must always be written
_QUALITY_MARKS = "°+ø"


# ---------------------------------------------------------------------------
# Harmonic function metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HarmonicFunctionInfo:
    """Display metadata for a harmonic function."""

    name: str
    symbol: str
    description: str
    stability: str
    examples: tuple[str, ...] = ()


HARMONIC_FUNCTION_INFO: MappingProxyType[HarmonicFunction, HarmonicFunctionInfo] = (
    MappingProxyType(
        {
            HarmonicFunction.TONIC: HarmonicFunctionInfo(
                "Tonic", "T", "Home, rest, resolution", "stable", ("I", "iii", "vi")
            ),
            HarmonicFunction.SUBDOMINANT: HarmonicFunctionInfo(
                "Subdominant", "S", "Move away from tonic", "stable", ("IV", "ii")
            ),
            HarmonicFunction.DOMINANT: HarmonicFunctionInfo(
                "Dominant", "D", "Tension, wants to resolve", "unstable", ("V", "vii°")
            ),
            HarmonicFunction.PREDOMINANT: HarmonicFunctionInfo(
                "Pre-dominant",
                "PD",
                "Lead to dominant",
                "stable-unstable",
                ("ii", "iii", "vi", "IV"),
            ),
        }
    )
)


@dataclass(frozen=True)
class ChordFunctionInfo:
    """
    How a roman numeral chord tends to behave.

    primary is 'unknown' for labels outside the table.
    """

    label: str
    primary: str
    secondary: tuple[str, ...] = ()
    qualities: tuple[str, ...] = ()

    @property
    def harmonic_function(self) -> HarmonicFunction | None:
        """The matching HarmonicFunction, if primary names one."""
        return _PRIMARY_FUNCTIONS.get(self.primary)


_PRIMARY_FUNCTIONS: dict[str, HarmonicFunction] = {
    "tonic": HarmonicFunction.TONIC,
    "subdominant": HarmonicFunction.SUBDOMINANT,
    "dominant": HarmonicFunction.DOMINANT,
    "pre-dominant": HarmonicFunction.PREDOMINANT,
}

# Numeral -> (primary, secondary, qualities)
_CHORD_FUNCTIONS: MappingProxyType[str, tuple[str, tuple[str, ...], tuple[str, ...]]] = (
    MappingProxyType(
        {
            "I": ("tonic", (), ("stable", "resolved")),
            "i": ("tonic", (), ("stable", "resolved")),
            "ii": ("pre-dominant", ("subdominant",), ("stable", "smooth")),
            "ii°": ("pre-dominant", (), ("unstable", "darkens")),
            "iii": ("relative", ("tonic",), ("stable", "warm")),
            "III": ("relative", ("subdominant",), ("stable", "bright")),
            "IV": ("subdominant", (), ("stable", "moving-away")),
            "iv": ("subdominant", (), ("stable", "dark")),
            "V": ("dominant", (), ("unstable", "tension")),
            "v": ("dominant", (), ("unstable", "dark-tension")),
            "VI": ("subdominant", ("tonic-alternative",), ("stable", "peaceful")),
            "vi": ("relative", ("tonic-alternative",), ("stable", "sad")),
            "VII": ("dominant-like", ("dominant",), ("unstable", "unusual")),
            "vii°": ("dominant", (), ("unstable", "very-tense")),
        }
    )
)


# ---------------------------------------------------------------------------
# Progression value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoiceLeadingAnalysis:
    """Summary of how far the voices move across a progression."""

    total_distance: int
    average_distance: float
    rating: VoiceLeadingRating
    distances: tuple[int, ...]
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Progression:
    """
    An ordered, voiced sequence of diatonic chords in a key.

    distances[i] is the voice-leading distance from chords[i] to
    chords[i + 1]. labels keep the caller's spelling of each chord.
    """

    key: Key
    chords: tuple[DiatonicChord, ...]
    distances: tuple[int, ...] = ()
    labels: tuple[str, ...] = ()
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "chords", tuple(self.chords))
        object.__setattr__(self, "distances", tuple(self.distances))
        object.__setattr__(self, "labels", tuple(self.labels))
        if not self.chords:
            raise ValidationError(ErrorMessages.EMPTY_PROGRESSION, self.chords)
        if len(self.distances) != len(self.chords) - 1:
            raise ValidationError(
                f"Expected {len(self.chords) - 1} distances, got {len(self.distances)}",
                self.distances,
            )

    def __len__(self) -> int:
        return len(self.chords)

    def __iter__(self) -> Iterator[DiatonicChord]:
        return iter(self.chords)

    def __getitem__(self, index: int) -> DiatonicChord:
        return self.chords[index]

    @property
    def roman_numerals(self) -> list[str]:
        return [c.roman_numeral for c in self.chords]

    @property
    def symbols(self) -> list[str]:
        return [c.symbol for c in self.chords]

    @property
    def total_distance(self) -> int:
        return sum(self.distances)

    def analyze(self) -> VoiceLeadingAnalysis:
        return analyze_voice_leading(self)

    def __str__(self) -> str:
        return f"{' - '.join(self.roman_numerals)} in {self.key}"


# ---------------------------------------------------------------------------
# Label resolution
# ---------------------------------------------------------------------------


def _strip_marks(numeral: str) -> str:
    return "".join(ch for ch in numeral if ch not in _QUALITY_MARKS)


def _parse_label(label: Label, key: Key) -> tuple[int, str, bool]:
    """
    Split a label into (degree, normalized spelling, wants seventh).

    Raises:
        InvalidDegreeError: Label is not a plain diatonic degree
    """
    size = key.definition.size

    def invalid() -> InvalidDegreeError:
        return InvalidDegreeError(ErrorMessages.INVALID_DEGREE.format(value=label, key=key), label)

    if isinstance(label, bool):
        raise invalid()
    if isinstance(label, int):
        if not 1 <= label <= size:
            raise invalid()
        return label, "", False
    if not isinstance(label, str):
        raise invalid()
    if label.strip().isdigit():
        degree = int(label.strip())
        if not 1 <= degree <= size:
            raise invalid()
        return degree, "", False

    match = _LABEL_PATTERN.match(label.strip())
    if match is None:
        raise invalid()

    numeral = match.group("numeral")
    if not (numeral.isupper() or numeral.islower()):
        raise invalid()
    if numeral.upper() not in ROMAN_NUMERALS:
        raise invalid()
    degree = ROMAN_NUMERALS.index(numeral.upper()) + 1
    if degree > size:
        raise invalid()

    suffix = match.group("suffix")
    for alias, mark in _SUFFIX_ALIASES:
        suffix = suffix.replace(alias, mark)
    # Δ and ø only exist as sevenths
    if ("Δ" in suffix or "ø" in suffix) and "7" not in suffix:
        suffix += "7"

    return degree, numeral + suffix, "7" in suffix


def _match_chord(label: Label, spelling: str, chord: DiatonicChord, key: Key) -> DiatonicChord:
    """
    Check a spelled label against the diatonic chord on its degree.

    Omitted °, + and ø marks are accepted. Δ must be written: a bare 7 on a
    major-seventh degree (I7 in major) reads as a dominant seventh, which
    is not diatonic there.
    """
    if not spelling:
        return chord
    canonical = chord.roman_numeral
    if spelling in (canonical, _strip_marks(canonical)):
        return chord
    raise InvalidDegreeError(ErrorMessages.INVALID_DEGREE.format(value=label, key=key), label)


class _Harmonizer:
    """Harmonizes a key lazily, once per chord size."""

    def __init__(self, key: Key) -> None:
        self.key = key
        self._chords: dict[int, list[DiatonicChord]] = {}

    def chords(self, chord_size: int) -> list[DiatonicChord]:
        if chord_size not in self._chords:
            self._chords[chord_size] = generate_diatonic_chords(
                self.key.root, self.key.scale, chord_size
            )
        return self._chords[chord_size]

    def resolve(self, label: Label) -> DiatonicChord:
        degree, spelling, seventh = _parse_label(label, self.key)
        chord = self.chords(4 if seventh else 3)[degree - 1]
        resolved = _match_chord(label, spelling, chord, self.key)
        logger.debug("Resolved %r in %s to %s", label, self.key, resolved)
        return resolved


def resolve_degree(label: Label, key: Key) -> DiatonicChord:
    """
    Resolve one roman numeral or degree number to a diatonic chord.

    The numeral's case must match the chord on that degree (ii, not II, in
    major). Quality marks may be omitted (vii and vii° both resolve in
    major) but a mark that is given must match. A trailing 7 selects the
    diatonic seventh chord.

    Examples:
        resolve_degree("V", Key(60, "major"))    -> V (G)
        resolve_degree("V7", Key(60, "major"))   -> V7 (G7)
        resolve_degree(2, Key(60, "major"))      -> ii (Dm)

    Raises:
        InvalidDegreeError: Label does not name a diatonic chord in key
    """
    return _Harmonizer(key).resolve(label)


def split_labels(degrees: str | Sequence[Label]) -> list[Label]:
    """Accept 'I IV V I', 'I-IV-V-I' or a list of labels."""
    if isinstance(degrees, str):
        return [part for part in _LABEL_SEPARATORS.split(degrees.strip()) if part]
    return list(degrees)


def analyze_chord_function(label: Label, scale: ScaleType | str = "major") -> ChordFunctionInfo:
    """
    Describe the harmonic role of a roman numeral.

    Sevenths and alternate marks are reduced to their triad first, so V7
    reads as V and viiø7 as vii°. Degree numbers are converted to the
    diatonic triad's numeral in scale. Labels outside the table come back
    with primary 'unknown' rather than raising.

    Examples:
        analyze_chord_function("V")             -> primary 'dominant'
        analyze_chord_function(6, "minor")      -> VI, primary 'subdominant'
        analyze_chord_function("bVII")          -> primary 'unknown'

    Raises:
        UnknownScaleError: Unknown scale
    """
    scale_type = ScaleType.parse(scale)
    numeral = _function_numeral(label, scale_type)
    entry = _CHORD_FUNCTIONS.get(numeral) if numeral is not None else None
    if entry is None:
        return ChordFunctionInfo(label=str(label), primary="unknown")
    primary, secondary, qualities = entry
    return ChordFunctionInfo(
        label=str(label), primary=primary, secondary=secondary, qualities=qualities
    )


def _function_numeral(label: Label, scale: ScaleType) -> str | None:
    if isinstance(label, bool):
        return None
    if isinstance(label, str) and label.strip().isdigit():
        label = int(label.strip())
    if isinstance(label, int):
        if not 1 <= label <= scale.definition.size:
            return None
        # Any root works; only the numeral is read
        triad = generate_diatonic_chords(MIDDLE_C, scale)[label - 1]
        return _strip_sevenths(triad.roman_numeral)
    if not isinstance(label, str):
        return None

    match = _LABEL_PATTERN.match(label.strip())
    if match is None:
        return None
    suffix = match.group("suffix")
    for alias, mark in _SUFFIX_ALIASES:
        suffix = suffix.replace(alias, mark)
    return _strip_sevenths(match.group("numeral") + suffix)


def _strip_sevenths(numeral: str) -> str:
    return numeral.replace("7", "").replace("Δ", "").replace("ø", "°")


def generate_progression(
    root: int, scale: ScaleType | str, degrees: str | Sequence[Label]
) -> Progression:
    """
    Build a voice-led progression from roman numerals in a key.

    Every label is resolved before anything is voiced, so one bad label
    fails the whole request. The first chord stays in root position; each
    later chord takes the voicing closest to the chord before it.

    Args:
        root: Root pitch of the key (0-127)
        scale: Scale identifier
        degrees: Roman numerals or degree numbers, as a list or a string
            like 'I-IV-V-I'

    Returns:
        Progression with one chord per label

    Raises:
        UnknownScaleError: Unknown scale
        RangeError: Root or any chord note outside 0-127
        ValidationError: Empty degree sequence
        InvalidDegreeError: A label does not resolve in the key
    """
    key = Key(root, scale)
    labels = split_labels(degrees)
    if not labels:
        raise ValidationError(ErrorMessages.EMPTY_PROGRESSION, degrees)

    harmonizer = _Harmonizer(key)
    resolved = [harmonizer.resolve(label) for label in labels]

    voiced: list[DiatonicChord] = [resolved[0]]
    distances: list[int] = []
    for diatonic in resolved[1:]:
        result = best_voicing_for(voiced[-1].chord, diatonic.chord)
        voiced.append(diatonic.with_chord(result.chord))
        distances.append(result.distance)

    progression = Progression(
        key=key,
        chords=tuple(voiced),
        distances=tuple(distances),
        labels=tuple(str(label) for label in labels),
    )
    logger.debug("Generated %s (total distance %d)", progression, progression.total_distance)
    return progression


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


def rate_voice_leading(average_distance: float) -> VoiceLeadingRating:
    """excellent below 5 semitones per change, good below 10, else fair."""
    if average_distance < VOICE_LEADING_EXCELLENT:
        return "excellent"
    if average_distance < VOICE_LEADING_GOOD:
        return "good"
    return "fair"


def analyze_voice_leading(
    progression: Progression | Sequence[Chord | DiatonicChord | Sequence[int]],
) -> VoiceLeadingAnalysis:
    """
    Measure the voice movement across consecutive chords.

    Accepts a Progression or any sequence of chords or pitch lists, so
    hand-voiced sequences can be compared with generated ones. A single
    chord has no transitions and rates excellent with average 0.0.
    """
    if isinstance(progression, Progression):
        voicings = [list(c.notes) for c in progression.chords]
    else:
        voicings = [
            list(c.notes) if isinstance(c, (Chord, DiatonicChord)) else sorted(c)
            for c in progression
        ]

    distances = tuple(voice_leading_distance(a, b) for a, b in zip(voicings, voicings[1:]))
    total = sum(distances)
    average = total / len(distances) if distances else 0.0
    rating = rate_voice_leading(average)

    suggestions: list[str] = []
    if rating != "excellent":
        suggestions.append("Consider applying voice leading inversions")
    for index, distance in enumerate(distances):
        if distance > 12:
            suggestions.append(
                f"Chord {index + 1} to {index + 2} moves {distance} semitones; "
                "try a closer inversion"
            )

    return VoiceLeadingAnalysis(
        total_distance=total,
        average_distance=average,
        rating=rating,
        distances=distances,
        suggestions=tuple(suggestions),
    )


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProgressionTemplate:
    """A named progression stored as roman numerals, playable in any key."""

    id: str
    name: str
    numerals: tuple[str, ...]
    description: str = ""
    genres: tuple[str, ...] = field(default_factory=tuple)
    feel: str = ""
    difficulty: Difficulty = "beginner"
    repeatable: bool = False
    bars: int | None = None


_TEMPLATES: tuple[ProgressionTemplate, ...] = (
    # Cadences
    ProgressionTemplate(
        "perfectCadence",
        "Perfect Cadence",
        ("V", "I"),
        "Dominant to Tonic, strong resolution",
        ("classical", "universal"),
        "resolved, satisfied",
    ),
    ProgressionTemplate(
        "plagalCadence",
        "Plagal Cadence",
        ("IV", "I"),
        'Subdominant to Tonic, like "Amen"',
        ("classical", "hymns"),
        "resolved, peaceful",
    ),
    ProgressionTemplate(
        "deceptiveCadence",
        "Deceptive Cadence",
        ("V", "vi"),
        "Dominant expects I but gets vi (relative minor)",
        ("classical",),
        "unexpected, sad turn",
        "intermediate",
    ),
    # Pop
    ProgressionTemplate(
        "popProgression",
        "Popular Pop Progression",
        ("I", "V", "vi", "IV"),
        "One of the most common progressions in modern pop",
        ("pop", "rock"),
        "uplifting, energetic",
        repeatable=True,
    ),
    ProgressionTemplate(
        "sadProgression",
        "Sad Pop Progression",
        ("vi", "IV", "I", "V"),
        "Starts on the relative minor, resolves happy",
        ("pop", "ballads"),
        "emotional journey",
        repeatable=True,
    ),
    ProgressionTemplate(
        "circleOfFifths",
        "Circle of Fifths",
        ("I", "IV", "vii°", "iii", "vi", "ii", "V", "I"),
        "Each root a fifth below the previous",
        ("baroque", "classical", "jazz"),
        "sophisticated, musical journey",
        "advanced",
    ),
    # Jazz
    ProgressionTemplate(
        "jazzTurnaround",
        "Jazz Turnaround",
        ("vi", "ii", "V", "I"),
        "Common ending progression in jazz standards",
        ("jazz", "standards"),
        "sophisticated, smooth",
        "intermediate",
        repeatable=True,
    ),
    ProgressionTemplate(
        "iiVI",
        "ii-V-I",
        ("ii", "V", "I"),
        "Most common progression in jazz, very smooth",
        ("jazz", "blues"),
        "smooth, professional",
        "intermediate",
        repeatable=True,
    ),
    ProgressionTemplate(
        "iiVI7",
        "ii7-V7-IΔ7",
        ("ii7", "V7", "IΔ7"),
        "The ii-V-I with diatonic sevenths",
        ("jazz",),
        "lush, resolved",
        "intermediate",
        repeatable=True,
    ),
    # Blues
    ProgressionTemplate(
        "blues12Bar",
        "12-Bar Blues",
        ("I", "I", "I", "I", "IV", "IV", "I", "I", "V", "IV", "I", "V"),
        "Classic 12-bar blues structure",
        ("blues", "rock"),
        "soulful, groovy",
        bars=12,
    ),
    ProgressionTemplate(
        "blues12BarMinor",
        "12-Bar Blues (Minor)",
        ("i", "i", "i", "i", "iv", "iv", "i", "i", "v", "iv", "i", "v"),
        "Classic 12-bar blues in a minor key",
        ("blues", "rock", "metal"),
        "dark, bluesy",
        bars=12,
    ),
    # Vamps
    ProgressionTemplate(
        "singleChord",
        "Single Chord Vamp",
        ("I",),
        "Focus on rhythm and timbre, not harmony",
        ("minimalism", "ambient", "techno"),
        "meditative, hypnotic",
        repeatable=True,
    ),
    ProgressionTemplate(
        "twoChordVamp",
        "Two Chord Vamp",
        ("I", "IV"),
        "Simple back and forth, very effective",
        ("rock", "pop", "folk"),
        "driving, energetic",
        repeatable=True,
    ),
)

PROGRESSION_TEMPLATES: MappingProxyType[str, ProgressionTemplate] = MappingProxyType(
    {template.id: template for template in _TEMPLATES}
)

_TEMPLATE_LOOKUP: dict[str, ProgressionTemplate] = {
    template.id.lower(): template for template in _TEMPLATES
}
# Older template ids
_TEMPLATE_LOOKUP.update(
    {
        "iimv": PROGRESSION_TEMPLATES["iiVI"],
        "bluesprogression12bar": PROGRESSION_TEMPLATES["blues12Bar"],
    }
)


def get_progression_template(name: str) -> ProgressionTemplate:
    """
    Look up a template by id (case-insensitive).

    Raises:
        ValidationError: Unknown template id
    """
    template = _TEMPLATE_LOOKUP.get(name.strip().lower()) if isinstance(name, str) else None
    if template is None:
        raise ValidationError(ErrorMessages.UNKNOWN_TEMPLATE.format(value=name), name)
    return template


def available_progressions() -> list[str]:
    """All template ids, in definition order."""
    return list(PROGRESSION_TEMPLATES)


def get_progressions_by_genre(genre: str) -> list[ProgressionTemplate]:
    """Templates whose genre tags contain genre (case-insensitive substring)."""
    needle = genre.strip().lower()
    return [t for t in _TEMPLATES if any(needle in g.lower() for g in t.genres)]


def generate_template_progression(
    root: int, scale: ScaleType | str, name: str
) -> Progression:
    """
    Generate a named template in a key.

    Templates are spelled for the key family they are written in:
    blues12BarMinor needs a minor scale, the rest a major-type scale.

    Raises:
        ValidationError: Unknown template id
        InvalidDegreeError: Template numerals do not fit the scale
    """
    template = get_progression_template(name)
    return replace(generate_progression(root, scale, template.numerals), name=template.id)
