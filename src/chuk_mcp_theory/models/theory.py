"""
Serializable views of the theory engine's value objects.

The core types are plain frozen dataclasses. These pydantic models are the
key-value form handed to the UI and playback layers: pitches come with
their names and frequencies so consumers never recompute them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_theory.constants import HarmonicFunction, VoiceLeadingRating
from chuk_mcp_theory.core.chord import Chord, DiatonicChord
from chuk_mcp_theory.core.pitch import name_to_pitch, pitch_to_frequency, pitch_to_name
from chuk_mcp_theory.core.progression import (
    HARMONIC_FUNCTION_INFO,
    ChordFunctionInfo,
    Progression,
    VoiceLeadingAnalysis,
    generate_progression,
)
from chuk_mcp_theory.core.scale import Key
from chuk_mcp_theory.core.voicing import VoicingResult

PROGRESSION_SCHEMA = "progression/v1"


class ChordModel(BaseModel):
    """A concrete chord with display data."""

    root: int = Field(..., ge=0, le=127, description="Root pitch inside this voicing")
    root_name: str = Field(..., description="Root pitch name (e.g., 'C5')")
    quality: str | None = Field(None, description="Chord quality id, None if unclassified")
    symbol: str = Field(..., description="Chord symbol (e.g., 'Am', 'G7', 'C/E')")
    notes: list[int] = Field(..., min_length=1, description="Ascending pitches")
    note_names: list[str] = Field(..., description="Names of the pitches")
    frequencies: list[float] = Field(..., description="Frequencies in Hz")
    inversion: int = Field(0, ge=0, description="0 = root position")

    model_config = {"frozen": True}

    @classmethod
    def from_chord(cls, chord: Chord) -> ChordModel:
        return cls(
            root=chord.root,
            root_name=pitch_to_name(chord.root),
            quality=chord.quality.value if chord.quality is not None else None,
            symbol=chord.symbol,
            notes=list(chord.notes),
            note_names=list(chord.note_names),
            frequencies=[round(f, 3) for f in chord.frequencies],
            inversion=chord.inversion,
        )


class DiatonicChordModel(ChordModel):
    """A chord tagged with its place in the key."""

    degree: int = Field(..., ge=1, le=7, description="1-based scale degree")
    roman_numeral: str = Field(..., description="Roman numeral (e.g., 'ii', 'V7', 'vii°')")
    harmonic_function: HarmonicFunction = Field(..., description="Role of the chord in the key")
    function_symbol: str = Field(..., description="T, S, D or PD")

    @classmethod
    def from_diatonic(cls, chord: DiatonicChord) -> DiatonicChordModel:
        base = ChordModel.from_chord(chord.chord)
        return cls(
            **base.model_dump(),
            degree=chord.degree,
            roman_numeral=chord.roman_numeral,
            harmonic_function=chord.harmonic_function,
            function_symbol=HARMONIC_FUNCTION_INFO[chord.harmonic_function].symbol,
        )


class ScaleModel(BaseModel):
    """A generated scale in a key."""

    key: str = Field(..., description="Key label (e.g., 'C5 major')")
    root: int = Field(..., ge=0, le=127, description="Root pitch")
    scale: str = Field(..., description="Scale type id")
    name: str = Field(..., description="Display name")
    description: str = Field("", description="Character of the scale")
    intervals: list[int] = Field(..., description="Semitone offsets from the root")
    degrees: list[str] = Field(default_factory=list, description="Degree labels")
    octave_count: int = Field(1, ge=1, description="Octaves generated")
    pitches: list[int] = Field(..., description="Pitches, closed with the octave")
    note_names: list[str] = Field(..., description="Names of the pitches")
    frequencies: list[float] = Field(..., description="Frequencies in Hz")

    model_config = {"frozen": True}

    @classmethod
    def from_key(cls, key: Key, octave_count: int = 1, prefer_flats: bool = False) -> ScaleModel:
        definition = key.definition
        pitches = key.scale_pitches(octave_count)
        return cls(
            key=str(key),
            root=key.root,
            scale=key.scale.value,
            name=definition.name,
            description=definition.description,
            intervals=list(definition.intervals),
            degrees=list(definition.degrees),
            octave_count=octave_count,
            pitches=pitches,
            note_names=[pitch_to_name(p, prefer_flats) for p in pitches],
            frequencies=[round(pitch_to_frequency(p), 3) for p in pitches],
        )


class VoicingModel(BaseModel):
    """The best voicing of a chord after another."""

    previous: list[int] = Field(..., description="Pitches of the chord being left")
    chord: ChordModel = Field(..., description="Chosen voicing")
    distance: int = Field(..., ge=0, description="Total semitones moved")

    model_config = {"frozen": True}

    @classmethod
    def from_result(cls, result: VoicingResult, previous: Chord | list[int]) -> VoicingModel:
        notes = list(previous.notes) if isinstance(previous, Chord) else sorted(previous)
        return cls(
            previous=notes,
            chord=ChordModel.from_chord(result.chord),
            distance=result.distance,
        )


class VoiceLeadingAnalysisModel(BaseModel):
    """Voice movement summary for a progression."""

    total_distance: int = Field(..., ge=0)
    average_distance: float = Field(..., ge=0)
    rating: VoiceLeadingRating
    distances: list[int] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_analysis(cls, analysis: VoiceLeadingAnalysis) -> VoiceLeadingAnalysisModel:
        return cls(
            total_distance=analysis.total_distance,
            average_distance=round(analysis.average_distance, 3),
            rating=analysis.rating,
            distances=list(analysis.distances),
            suggestions=list(analysis.suggestions),
        )


class ProgressionModel(BaseModel):
    """
    A voiced progression ready for display, playback or export.

    The YAML form stores only what is needed to regenerate the progression
    (key and labels) plus the voiced notes for reference.
    """

    key: str = Field(..., description="Key label (e.g., 'C5 major')")
    root: int = Field(..., ge=0, le=127, description="Key root pitch")
    scale: str = Field(..., description="Scale type id")
    name: str | None = Field(None, description="Template id, if generated from one")
    labels: list[str] = Field(..., min_length=1, description="Labels as requested")
    chords: list[DiatonicChordModel] = Field(..., min_length=1, description="Voiced chords")
    distances: list[int] = Field(default_factory=list, description="Distance per transition")
    analysis: VoiceLeadingAnalysisModel

    model_config = {"frozen": True}

    @property
    def total_distance(self) -> int:
        return sum(self.distances)

    @classmethod
    def from_progression(cls, progression: Progression) -> ProgressionModel:
        return cls(
            key=str(progression.key),
            root=progression.key.root,
            scale=progression.key.scale.value,
            name=progression.name,
            labels=list(progression.labels),
            chords=[DiatonicChordModel.from_diatonic(c) for c in progression.chords],
            distances=list(progression.distances),
            analysis=VoiceLeadingAnalysisModel.from_analysis(progression.analyze()),
        )

    def to_yaml_dict(self) -> dict[str, Any]:
        """
        Convert to a dict suitable for YAML serialization.

        This produces the canonical progression file format.
        """
        return {
            "schema": PROGRESSION_SCHEMA,
            "name": self.name,
            "key": {"root": pitch_to_name(self.root), "scale": self.scale},
            "progression": list(self.labels),
            "chords": [
                {
                    "roman": c.roman_numeral,
                    "symbol": c.symbol,
                    "function": c.harmonic_function.value,
                    "notes": list(c.notes),
                    "names": list(c.note_names),
                }
                for c in self.chords
            ],
            "voice_leading": {
                "distances": list(self.distances),
                "total": self.total_distance,
                "rating": self.analysis.rating,
            },
        }

    @classmethod
    def from_yaml_dict(cls, data: dict[str, Any]) -> ProgressionModel:
        """
        Rebuild a progression from its YAML form.

        Only the key and labels are read; chords are regenerated so the
        result always reflects the current voicing rules.
        """
        key_data = data["key"]
        progression = generate_progression(
            name_to_pitch(key_data["root"]), key_data["scale"], data["progression"]
        )
        model = cls.from_progression(progression)
        if data.get("name"):
            return model.model_copy(update={"name": data["name"]})
        return model


class HarmonicFunctionModel(BaseModel):
    """Display metadata for one harmonic function."""

    function: HarmonicFunction
    name: str
    symbol: str = Field(..., description="T, S, D or PD")
    description: str = ""
    stability: str = ""
    examples: list[str] = Field(default_factory=list, description="Typical numerals")

    model_config = {"frozen": True}

    @classmethod
    def from_function(cls, function: HarmonicFunction) -> HarmonicFunctionModel:
        info = HARMONIC_FUNCTION_INFO[function]
        return cls(
            function=function,
            name=info.name,
            symbol=info.symbol,
            description=info.description,
            stability=info.stability,
            examples=list(info.examples),
        )


class ChordFunctionModel(BaseModel):
    """The harmonic role of a roman numeral."""

    label: str = Field(..., description="Label as requested")
    primary: str = Field(..., description="Primary role, 'unknown' if not recognized")
    secondary: list[str] = Field(default_factory=list)
    qualities: list[str] = Field(default_factory=list)
    function: HarmonicFunctionModel | None = Field(
        None, description="Function metadata when primary is a harmonic function"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_info(cls, info: ChordFunctionInfo) -> ChordFunctionModel:
        function = info.harmonic_function
        function_model = (
            HarmonicFunctionModel.from_function(function) if function is not None else None
        )
        return cls(
            label=info.label,
            primary=info.primary,
            secondary=list(info.secondary),
            qualities=list(info.qualities),
            function=function_model,
        )
