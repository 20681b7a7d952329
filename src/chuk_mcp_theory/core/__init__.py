"""
Core theory engine - pure, synchronous, deterministic.

Layers, each building on the one before:
- pitch: pitch numbers, names, frequencies, intervals
- scale: ScaleType patterns, scale generation, Key
- chord: ChordQuality, Chord, inversions, diatonic harmonization
- voicing: voice-leading distance and best-voicing search
- progression: roman numeral resolution, voice-led progressions, templates
"""

from chuk_mcp_theory.core.chord import (
    Chord,
    ChordDefinition,
    ChordQuality,
    DiatonicChord,
    available_chords,
    classify_chord,
    generate_chord,
    generate_diatonic_chords,
    get_chord_definition,
    invert_chord,
)
from chuk_mcp_theory.core.pitch import (
    Interval,
    PitchClass,
    clamp_pitch,
    frequency_to_pitch,
    interval_name,
    is_in_piano_range,
    name_to_pitch,
    pitch_to_frequency,
    pitch_to_name,
    transpose,
    validate_pitch,
)
from chuk_mcp_theory.core.progression import (
    HARMONIC_FUNCTION_INFO,
    PROGRESSION_TEMPLATES,
    ChordFunctionInfo,
    Progression,
    ProgressionTemplate,
    VoiceLeadingAnalysis,
    analyze_voice_leading,
    analyze_chord_function,
    available_progressions,
    generate_progression,
    generate_template_progression,
    get_progression_template,
    get_progressions_by_genre,
    resolve_degree,
)
from chuk_mcp_theory.core.scale import (
    Key,
    ScaleDefinition,
    ScaleType,
    available_scales,
    generate_scale,
    get_scale_definition,
    get_scale_degree,
    scale_note_names,
)
from chuk_mcp_theory.core.voicing import (
    VoicingResult,
    best_voicing,
    best_voicing_for,
    rank_voicings,
    voice_leading_distance,
    voicing_candidates,
)

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    "validate_pitch",
    "pitch_to_name",
    "name_to_pitch",
    "pitch_to_frequency",
    "frequency_to_pitch",
    "interval_name",
    "transpose",
    "clamp_pitch",
    "is_in_piano_range",
    # Scale
    "ScaleType",
    "ScaleDefinition",
    "Key",
    "generate_scale",
    "scale_note_names",
    "get_scale_definition",
    "get_scale_degree",
    "available_scales",
    # Chord
    "ChordQuality",
    "ChordDefinition",
    "Chord",
    "DiatonicChord",
    "generate_chord",
    "invert_chord",
    "classify_chord",
    "generate_diatonic_chords",
    "get_chord_definition",
    "available_chords",
    # Voicing
    "VoicingResult",
    "voice_leading_distance",
    "best_voicing",
    "best_voicing_for",
    "rank_voicings",
    "voicing_candidates",
    # Progression
    "Progression",
    "ProgressionTemplate",
    "VoiceLeadingAnalysis",
    "ChordFunctionInfo",
    "HARMONIC_FUNCTION_INFO",
    "PROGRESSION_TEMPLATES",
    "generate_progression",
    "generate_template_progression",
    "resolve_degree",
    "analyze_voice_leading",
    "analyze_chord_function",
    "get_progression_template",
    "get_progressions_by_genre",
    "available_progressions",
]
