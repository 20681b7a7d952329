"""
Tests for chord construction and diatonic harmonization.

Tests cover:
- ChordQuality parsing and definitions
- generate_chord, invert_chord, classify_chord
- Chord symbols and value semantics
- generate_diatonic_chords for triads, sevenths and non-diatonic scales
"""

import pytest

from chuk_mcp_theory.constants import HarmonicFunction
from chuk_mcp_theory.core.chord import (
    CHORD_DEFINITIONS,
    Chord,
    ChordQuality,
    available_chords,
    classify_chord,
    generate_chord,
    generate_diatonic_chords,
    get_chord_definition,
    harmonic_function_for,
    invert_chord,
    roman_numeral_for,
)
from chuk_mcp_theory.errors import (
    InvalidDegreeError,
    RangeError,
    UnknownChordError,
    UnknownScaleError,
    ValidationError,
)


class TestChordQuality:
    """Tests for ChordQuality parsing and definitions."""

    def test_every_quality_has_definition(self) -> None:
        """The definition table covers the whole enum."""
        assert set(CHORD_DEFINITIONS) == set(ChordQuality)
        assert "dominant7" in available_chords()

    def test_parse_aliases(self) -> None:
        """Ids, aliases and case-sensitive symbols resolve."""
        assert ChordQuality.parse("major") == ChordQuality.MAJOR
        assert ChordQuality.parse("dom7") == ChordQuality.DOMINANT_7
        assert ChordQuality.parse("7") == ChordQuality.DOMINANT_7
        assert ChordQuality.parse("m7b5") == ChordQuality.HALF_DIMINISHED_7
        assert ChordQuality.parse("half_diminished_7") == ChordQuality.HALF_DIMINISHED_7
        assert ChordQuality.parse("m") == ChordQuality.MINOR
        assert ChordQuality.parse("M") == ChordQuality.MAJOR
        assert ChordQuality.parse("M7") == ChordQuality.MAJOR_7
        assert ChordQuality.parse("m7") == ChordQuality.MINOR_7

    def test_parse_unknown(self) -> None:
        """Unknown qualities raise UnknownChordError."""
        with pytest.raises(UnknownChordError):
            ChordQuality.parse("madeUpQuality")
        with pytest.raises(UnknownChordError):
            get_chord_definition("")

    def test_is_minor(self) -> None:
        """Minor-third qualities are flagged minor."""
        assert ChordQuality.MINOR.is_minor
        assert ChordQuality.DIMINISHED.is_minor
        assert ChordQuality.HALF_DIMINISHED_7.is_minor
        assert not ChordQuality.MAJOR.is_minor
        assert not ChordQuality.DOMINANT_7.is_minor
        assert not ChordQuality.SUS4.is_minor


class TestGenerateChord:
    """Tests for generate_chord."""

    def test_c_major(self, c_major_triad: Chord) -> None:
        """Root position C major."""
        assert c_major_triad.notes == (60, 64, 67)
        assert c_major_triad.root == 60
        assert c_major_triad.quality == ChordQuality.MAJOR
        assert c_major_triad.inversion == 0

    def test_sevenths(self) -> None:
        """Seventh chords add a fourth note."""
        assert generate_chord(67, "dominant7").notes == (67, 71, 74, 77)
        assert generate_chord(62, "minor7").notes == (62, 65, 69, 72)
        assert generate_chord(71, "halfDiminished7").notes == (71, 74, 77, 81)

    def test_unknown_quality(self) -> None:
        """Unknown quality raises UnknownChordError."""
        with pytest.raises(UnknownChordError):
            generate_chord(60, "madeUpQuality")

    def test_out_of_range(self) -> None:
        """Notes above 127 raise RangeError, never clamp."""
        with pytest.raises(RangeError):
            generate_chord(125, "major")
        with pytest.raises(RangeError):
            generate_chord(-1, "major")

    def test_names_and_frequencies(self, c_major_triad: Chord) -> None:
        """Display data derives from the notes."""
        assert c_major_triad.note_names == ("C5", "E5", "G5")
        assert c_major_triad.frequencies[0] == pytest.approx(261.6256, rel=1e-4)

    def test_symbols(self) -> None:
        """Chord symbols use the quality's suffix."""
        assert generate_chord(60, "major").symbol == "C"
        assert generate_chord(69, "minor").symbol == "Am"
        assert generate_chord(67, "dominant7").symbol == "G7"
        assert generate_chord(71, "diminished").symbol == "B°"
        assert str(generate_chord(62, "minor7")) == "Dm7"

    def test_value_semantics(self) -> None:
        """Equal chords compare equal; chords are immutable."""
        chord = generate_chord(60, "major")
        assert chord == generate_chord(60, "major")
        with pytest.raises(AttributeError):
            chord.root = 61  # type: ignore[misc]

    def test_chord_validation(self) -> None:
        """Chords must be non-empty and ascending."""
        with pytest.raises(ValidationError):
            Chord(60, ChordQuality.MAJOR, ())
        with pytest.raises(ValidationError):
            Chord(60, ChordQuality.MAJOR, (67, 64, 60))
        with pytest.raises(ValidationError):
            Chord(60, ChordQuality.MAJOR, (60, 64, 67), inversion=3)


class TestInvertChord:
    """Tests for invert_chord."""

    def test_first_inversion(self, c_major_triad: Chord) -> None:
        """The lowest note moves up an octave."""
        inverted = invert_chord(c_major_triad, 1)
        assert inverted.notes == (64, 67, 72)
        assert inverted.inversion == 1
        assert inverted.root == 72
        assert inverted.symbol == "C/E"

    def test_second_inversion(self, c_major_triad: Chord) -> None:
        """Two steps put the fifth in the bass."""
        inverted = invert_chord(c_major_triad, 2)
        assert inverted.notes == (67, 72, 76)
        assert inverted.inversion == 2

    def test_zero_is_identity(self, c_major_triad: Chord) -> None:
        """Index 0 returns the same voicing."""
        assert invert_chord(c_major_triad, 0) == c_major_triad

    def test_full_cycle_is_octave_up(self, c_major_triad: Chord) -> None:
        """An index equal to the size gives the chord an octave higher."""
        inverted = invert_chord(c_major_triad, 3)
        assert inverted.notes == (72, 76, 79)
        assert inverted.inversion == 0

    def test_output_ascending(self) -> None:
        """Inversions stay ascending for every step."""
        chord = generate_chord(48, "dominant7")
        for steps in range(6):
            notes = invert_chord(chord, steps).notes
            assert list(notes) == sorted(notes)

    def test_relative_to_current_voicing(self, c_major_triad: Chord) -> None:
        """Inverting an inversion accumulates."""
        twice = invert_chord(invert_chord(c_major_triad, 1), 1)
        assert twice == invert_chord(c_major_triad, 2)

    def test_negative_index(self, c_major_triad: Chord) -> None:
        """Negative indices raise ValidationError."""
        with pytest.raises(ValidationError):
            invert_chord(c_major_triad, -1)

    def test_out_of_range(self) -> None:
        """Raising a note past 127 raises RangeError."""
        with pytest.raises(RangeError):
            invert_chord(generate_chord(116, "major"), 1)


class TestClassifyChord:
    """Tests for classify_chord."""

    def test_triads(self) -> None:
        """Triad shapes classify by intervals above the bass."""
        assert classify_chord([60, 64, 67]) == ChordQuality.MAJOR
        assert classify_chord([62, 65, 69]) == ChordQuality.MINOR
        assert classify_chord([71, 74, 77]) == ChordQuality.DIMINISHED
        assert classify_chord([60, 64, 68]) == ChordQuality.AUGMENTED

    def test_sevenths(self) -> None:
        """Seventh shapes classify too."""
        assert classify_chord([67, 71, 74, 77]) == ChordQuality.DOMINANT_7
        assert classify_chord([60, 64, 67, 71]) == ChordQuality.MAJOR_7
        assert classify_chord([71, 74, 77, 81]) == ChordQuality.HALF_DIMINISHED_7

    def test_unknown_shape(self) -> None:
        """Unmatched shapes return None."""
        assert classify_chord([60, 65, 70]) is None
        assert classify_chord([]) is None


class TestRomanNumerals:
    """Tests for numeral and function helpers."""

    def test_case_and_suffix(self) -> None:
        """Case follows the third; suffix follows the quality."""
        assert roman_numeral_for(1, ChordQuality.MAJOR) == "I"
        assert roman_numeral_for(2, ChordQuality.MINOR) == "ii"
        assert roman_numeral_for(7, ChordQuality.DIMINISHED) == "vii°"
        assert roman_numeral_for(3, ChordQuality.AUGMENTED) == "III+"
        assert roman_numeral_for(5, ChordQuality.DOMINANT_7) == "V7"
        assert roman_numeral_for(1, ChordQuality.MAJOR_7) == "IΔ7"
        assert roman_numeral_for(7, ChordQuality.HALF_DIMINISHED_7) == "viiø7"

    def test_unclassified(self) -> None:
        """Unclassified stacks take case from the third."""
        assert roman_numeral_for(1, None, [60, 65, 70]) == "I"
        assert roman_numeral_for(1, None, [60, 63, 70]) == "i"

    def test_degree_out_of_range(self) -> None:
        """Degrees outside 1-7 raise InvalidDegreeError."""
        with pytest.raises(InvalidDegreeError):
            roman_numeral_for(8, ChordQuality.MAJOR)
        with pytest.raises(InvalidDegreeError):
            harmonic_function_for(0)

    def test_functions(self) -> None:
        """Function follows the degree."""
        assert harmonic_function_for(1) == HarmonicFunction.TONIC
        assert harmonic_function_for(4) == HarmonicFunction.SUBDOMINANT
        assert harmonic_function_for(5) == HarmonicFunction.DOMINANT
        assert harmonic_function_for(7) == HarmonicFunction.DOMINANT
        assert harmonic_function_for(2) == HarmonicFunction.PREDOMINANT
        assert harmonic_function_for(6) == HarmonicFunction.PREDOMINANT


class TestDiatonicChords:
    """Tests for generate_diatonic_chords."""

    def test_c_major_qualities(self) -> None:
        """C major triads: major, minor, minor, major, major, minor, diminished."""
        chords = generate_diatonic_chords(60, "major")
        assert [c.quality for c in chords] == [
            ChordQuality.MAJOR,
            ChordQuality.MINOR,
            ChordQuality.MINOR,
            ChordQuality.MAJOR,
            ChordQuality.MAJOR,
            ChordQuality.MINOR,
            ChordQuality.DIMINISHED,
        ]
        assert [c.roman_numeral for c in chords] == [
            "I", "ii", "iii", "IV", "V", "vi", "vii°",
        ]  # fmt: skip

    def test_c_major_notes(self) -> None:
        """Triads stack every other scale tone, wrapping with an octave."""
        chords = generate_diatonic_chords(60, "major")
        assert chords[0].notes == (60, 64, 67)
        assert chords[4].notes == (67, 71, 74)
        assert chords[6].notes == (71, 74, 77)
        assert all(c.inversion == 0 for c in chords)

    def test_functions(self) -> None:
        """Each chord carries its degree and function."""
        chords = generate_diatonic_chords(60, "major")
        assert [c.degree for c in chords] == list(range(1, 8))
        assert chords[0].harmonic_function == HarmonicFunction.TONIC
        assert chords[3].harmonic_function == HarmonicFunction.SUBDOMINANT
        assert chords[4].harmonic_function == HarmonicFunction.DOMINANT
        assert chords[6].harmonic_function == HarmonicFunction.DOMINANT
        assert chords[1].harmonic_function == HarmonicFunction.PREDOMINANT

    def test_transposes_with_root(self) -> None:
        """Qualities are the same in every major key."""
        reference = [c.quality for c in generate_diatonic_chords(60, "major")]
        for root in range(40, 80):
            assert [c.quality for c in generate_diatonic_chords(root, "major")] == reference

    def test_sevenths(self) -> None:
        """chord_size=4 gives diatonic sevenths."""
        chords = generate_diatonic_chords(60, "major", chord_size=4)
        assert [c.roman_numeral for c in chords] == [
            "IΔ7", "ii7", "iii7", "IVΔ7", "V7", "vi7", "viiø7",
        ]  # fmt: skip
        assert chords[4].notes == (67, 71, 74, 77)

    def test_harmonic_minor(self) -> None:
        """Harmonic minor yields an augmented III and a major V."""
        chords = generate_diatonic_chords(57, "minorHarmonic")
        assert [c.roman_numeral for c in chords] == [
            "i", "ii°", "III+", "iv", "V", "VI", "vii°",
        ]  # fmt: skip

    def test_natural_minor(self, a_minor) -> None:
        """Natural minor has a minor v."""
        chords = generate_diatonic_chords(a_minor.root, a_minor.scale)
        assert [c.roman_numeral for c in chords] == [
            "i", "ii°", "III", "iv", "v", "VI", "VII",
        ]  # fmt: skip

    def test_dorian(self) -> None:
        """Modes harmonize by measurement, not lookup."""
        chords = generate_diatonic_chords(62, "dorian")
        assert [c.roman_numeral for c in chords] == [
            "i", "ii", "III", "IV", "v", "vi°", "VII",
        ]  # fmt: skip

    def test_pentatonic_unclassified(self) -> None:
        """Pentatonic stacks that match no chord have no quality."""
        chords = generate_diatonic_chords(60, "minorPentatonic")
        assert len(chords) == 5
        assert chords[0].notes == (60, 65, 70)
        assert chords[0].quality is None
        assert chords[0].roman_numeral == "I"

    def test_whole_tone_all_augmented(self) -> None:
        """Whole-tone stacks are all augmented."""
        chords = generate_diatonic_chords(60, "wholeTone")
        assert len(chords) == 6
        assert all(c.quality == ChordQuality.AUGMENTED for c in chords)

    def test_wide_stacks_wrap(self) -> None:
        """Chord sizes beyond the scale keep stacking upward."""
        chords = generate_diatonic_chords(48, "majorPentatonic", chord_size=6)
        notes = chords[0].notes
        assert len(notes) == 6
        assert list(notes) == sorted(notes)
        assert notes[-1] - notes[0] > 12

    def test_validation(self) -> None:
        """Bad scale, small chord size and out-of-range roots are rejected."""
        with pytest.raises(UnknownScaleError):
            generate_diatonic_chords(60, "nope")
        with pytest.raises(ValidationError):
            generate_diatonic_chords(60, "major", chord_size=2)
        with pytest.raises(RangeError):
            generate_diatonic_chords(120, "major")
