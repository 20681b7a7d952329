#!/usr/bin/env python3
"""
Async Theory MCP Server using chuk-mcp-server

This server provides MCP tools for music theory: scales, chords,
diatonic harmony and voice-led chord progressions. Every tool is a pure
computation over static interval tables - there is no state to manage.

The server provides tools for:
- Converting between pitch numbers, names and frequencies
- Generating scales in any of the built-in scale types
- Building, inverting and classifying chords
- Harmonizing scales into diatonic triads and sevenths
- Finding the smoothest voicing from one chord to the next
- Describing the harmonic role of a roman numeral
- Generating progressions from roman numerals or named templates
- Exporting and importing progressions as YAML
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_theory.core.chord import available_chords
from chuk_mcp_theory.core.progression import available_progressions
from chuk_mcp_theory.core.scale import available_scales
from chuk_mcp_theory.tools import (
    register_chord_tools,
    register_pitch_tools,
    register_progression_tools,
    register_scale_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-theory")

# Register all tools
pitch_tools = register_pitch_tools(mcp)
scale_tools = register_scale_tools(mcp)
chord_tools = register_chord_tools(mcp)
progression_tools = register_progression_tools(mcp)

# Export tool functions for direct access
theory_pitch_info = pitch_tools["theory_pitch_info"]
theory_interval_name = pitch_tools["theory_interval_name"]

theory_generate_scale = scale_tools["theory_generate_scale"]
theory_list_scales = scale_tools["theory_list_scales"]
theory_scale_degree = scale_tools["theory_scale_degree"]

theory_generate_chord = chord_tools["theory_generate_chord"]
theory_invert_chord = chord_tools["theory_invert_chord"]
theory_diatonic_chords = chord_tools["theory_diatonic_chords"]
theory_best_voicing = chord_tools["theory_best_voicing"]
theory_chord_function = chord_tools["theory_chord_function"]
theory_list_chords = chord_tools["theory_list_chords"]

theory_generate_progression = progression_tools["theory_generate_progression"]
theory_template_progression = progression_tools["theory_template_progression"]
theory_list_progressions = progression_tools["theory_list_progressions"]
theory_export_yaml = progression_tools["theory_export_yaml"]
theory_import_yaml = progression_tools["theory_import_yaml"]

logger.info("CHUK Theory MCP Server initialized")
logger.info(f"  Scales: {len(available_scales())}")
logger.info(f"  Chord qualities: {len(available_chords())}")
logger.info(f"  Progression templates: {len(available_progressions())}")
