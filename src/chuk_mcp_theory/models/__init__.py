"""
Pydantic models for the theory engine.

This module provides:
- ChordModel: A chord with names and frequencies
- DiatonicChordModel: A chord with degree, numeral and function
- ScaleModel: A generated scale in a key
- VoicingModel: Result of a best-voicing search
- ProgressionModel: A voiced progression, with YAML export
- VoiceLeadingAnalysisModel: Voice movement summary
- ChordFunctionModel: Harmonic role of a roman numeral
- HarmonicFunctionModel: Function metadata with example numerals
"""

from chuk_mcp_theory.models.theory import (
    PROGRESSION_SCHEMA,
    ChordFunctionModel,
    ChordModel,
    DiatonicChordModel,
    HarmonicFunctionModel,
    ProgressionModel,
    ScaleModel,
    VoiceLeadingAnalysisModel,
    VoicingModel,
)

__all__ = [
    "PROGRESSION_SCHEMA",
    "ChordFunctionModel",
    "ChordModel",
    "DiatonicChordModel",
    "HarmonicFunctionModel",
    "ProgressionModel",
    "ScaleModel",
    "VoiceLeadingAnalysisModel",
    "VoicingModel",
]
