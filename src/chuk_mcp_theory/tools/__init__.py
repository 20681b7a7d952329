"""
MCP tool implementations.

Tools are organized by domain:
- pitch - Pitch, name and frequency conversion, interval names
- scales - Scale generation and degree lookup
- chords - Chords, inversions, diatonic harmonization, voicing
- progressions - Voice-led progressions, templates, YAML export
"""

from chuk_mcp_theory.tools.chords import register_chord_tools
from chuk_mcp_theory.tools.pitch import register_pitch_tools
from chuk_mcp_theory.tools.progressions import register_progression_tools
from chuk_mcp_theory.tools.scales import register_scale_tools

__all__ = [
    "register_chord_tools",
    "register_pitch_tools",
    "register_progression_tools",
    "register_scale_tools",
]
