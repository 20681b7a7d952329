"""
Tests for MCP tools.

Tests the MCP tool implementations for pitches, scales, chords
and progressions.
"""

import json

import pytest
import yaml

from chuk_mcp_theory.core.chord import ChordQuality
from chuk_mcp_theory.core.progression import PROGRESSION_TEMPLATES
from chuk_mcp_theory.core.scale import ScaleType


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


class TestRegistration:
    """Tests for tool registration."""

    def test_all_tools_registered(self):
        """Every register function hands its tools to the server."""
        from chuk_mcp_theory.tools import (
            register_chord_tools,
            register_pitch_tools,
            register_progression_tools,
            register_scale_tools,
        )

        mcp = MockMCPServer("test")
        returned = {}
        for register in (
            register_pitch_tools,
            register_scale_tools,
            register_chord_tools,
            register_progression_tools,
        ):
            returned.update(register(mcp))

        assert returned.keys() == mcp.tools.keys()
        assert all(name.startswith("theory_") for name in mcp.tools)
        assert len(mcp.tools) == 16


class TestPitchTools:
    """Tests for pitch tools."""

    @pytest.mark.asyncio
    async def test_pitch_info_from_name(self):
        """Describe a pitch given its name."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_pitch_info"](name="A5"))
        assert data["status"] == "success"
        assert data["pitch"] == 69
        assert data["octave"] == 5
        assert data["pitch_class"] == 9
        assert data["frequency"] == 440.0
        assert data["in_piano_range"] is True

    @pytest.mark.asyncio
    async def test_pitch_info_from_frequency(self):
        """Frequencies snap to the nearest pitch."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_pitch_info"](frequency=261.0))
        assert data["status"] == "success"
        assert data["pitch"] == 60
        assert data["name"] == "C5"
        assert data["input_frequency"] == 261.0

    @pytest.mark.asyncio
    async def test_pitch_info_flats(self):
        """Black keys can be spelled with flats."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_pitch_info"](pitch=61, prefer_flats=True))
        assert data["name"] == "Db5"
        assert data["pitch_class_name"] == "Db"

    @pytest.mark.asyncio
    async def test_pitch_info_needs_one_input(self):
        """Exactly one representation must be given."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        for kwargs in ({}, {"pitch": 60, "name": "C5"}):
            data = json.loads(await tools["theory_pitch_info"](**kwargs))
            assert data["status"] == "error"
            assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_pitch_info_errors(self):
        """Out-of-range pitches and bad names are reported by type."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_pitch_info"](pitch=128))
        assert data["error_type"] == "RangeError"

        data = json.loads(await tools["theory_pitch_info"](name="H5"))
        assert data["error_type"] == "InvalidNameError"

    @pytest.mark.asyncio
    async def test_interval_from_semitones(self):
        """Name an interval and its inversion."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_interval_name"](semitones=7))
        assert data["status"] == "success"
        assert data["name"] == "perfect 5th"
        assert data["inversion"] == {"semitones": 5, "name": "perfect 4th"}

    @pytest.mark.asyncio
    async def test_interval_between_pitches(self):
        """The interval between two pitches is measured upward."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_interval_name"](from_pitch=67, to_pitch=60))
        assert data["semitones"] == 7
        assert data["name"] == "perfect 5th"

    @pytest.mark.asyncio
    async def test_interval_errors(self):
        """Compound intervals and missing inputs are rejected."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_interval_name"](semitones=13))
        assert data["error_type"] == "RangeError"

        data = json.loads(await tools["theory_interval_name"](from_pitch=60))
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_octave_inverts_to_unison(self):
        """The inversion of an octave is a unison."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_interval_name"](semitones=12))
        assert data["name"] == "octave"
        assert data["inversion"] == {"semitones": 0, "name": "unison"}

    @pytest.mark.asyncio
    async def test_pitch_info_nan_frequency(self):
        """A NaN frequency is a validation error, not a crash."""
        from chuk_mcp_theory.tools.pitch import register_pitch_tools

        tools = register_pitch_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_pitch_info"](frequency=float("nan")))
        assert data["status"] == "error"
        assert data["error_type"] == "ValidationError"


class TestScaleTools:
    """Tests for scale tools."""

    @pytest.mark.asyncio
    async def test_generate_scale(self):
        """Generate a two-octave scale."""
        from chuk_mcp_theory.tools.scales import register_scale_tools

        tools = register_scale_tools(MockMCPServer("test"))

        result = await tools["theory_generate_scale"](
            root=57, scale="minorPentatonic", octave_count=2
        )
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["scale"]["pitches"] == [57, 60, 62, 64, 67, 69, 72, 74, 76, 79, 81]
        assert data["scale"]["note_names"][0] == "A4"

    @pytest.mark.asyncio
    async def test_generate_scale_errors(self):
        """Scale errors are reported by type."""
        from chuk_mcp_theory.tools.scales import register_scale_tools

        tools = register_scale_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_generate_scale"](root=60, scale="nope"))
        assert data["error_type"] == "UnknownScaleError"

        data = json.loads(await tools["theory_generate_scale"](root=120))
        assert data["error_type"] == "RangeError"

        data = json.loads(await tools["theory_generate_scale"](root=60, octave_count=0))
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_list_scales(self):
        """List every scale type."""
        from chuk_mcp_theory.tools.scales import register_scale_tools

        tools = register_scale_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_list_scales"]())
        assert data["status"] == "success"
        assert data["count"] == len(ScaleType)
        blues = next(s for s in data["scales"] if s["id"] == "blues")
        assert blues["size"] == 6

    @pytest.mark.asyncio
    async def test_scale_degree(self):
        """Describe the dominant of a major scale."""
        from chuk_mcp_theory.tools.scales import register_scale_tools

        tools = register_scale_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_scale_degree"](degree=5))
        assert data["roman"] == "V"
        assert data["name"] == "Dominant"
        assert data["offset"] == 7

        data = json.loads(await tools["theory_scale_degree"](degree=8))
        assert data["error_type"] == "InvalidDegreeError"


class TestChordTools:
    """Tests for chord tools."""

    @pytest.mark.asyncio
    async def test_generate_chord(self):
        """Build a dominant seventh."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_generate_chord"](root=67, quality="dom7"))
        assert data["status"] == "success"
        assert data["chord"]["notes"] == [67, 71, 74, 77]
        assert data["chord"]["quality"] == "dominant7"
        assert data["chord"]["symbol"] == "G7"

    @pytest.mark.asyncio
    async def test_generate_inverted_chord(self):
        """Build a chord in first inversion."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_generate_chord"](root=60, inversion=1))
        assert data["chord"]["notes"] == [64, 67, 72]
        assert data["chord"]["symbol"] == "C/E"

    @pytest.mark.asyncio
    async def test_generate_chord_unknown(self):
        """Unknown qualities are reported."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_generate_chord"](root=60, quality="nope"))
        assert data["status"] == "error"
        assert data["error_type"] == "UnknownChordError"

    @pytest.mark.asyncio
    async def test_invert_chord(self):
        """Invert a chord given as pitches."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_invert_chord"](notes=[67, 60, 64], inversion=2))
        assert data["chord"]["notes"] == [67, 72, 76]
        assert data["chord"]["inversion"] == 2

        data = json.loads(await tools["theory_invert_chord"](notes=[]))
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_diatonic_sevenths(self):
        """Harmonize C major in sevenths."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_diatonic_chords"](root=60, chord_size=4))
        assert data["key"] == "C5 major"
        assert data["roman_numerals"] == ["IΔ7", "ii7", "iii7", "IVΔ7", "V7", "vi7", "viiø7"]
        assert data["chords"][4]["function_symbol"] == "D"

        data = json.loads(await tools["theory_diatonic_chords"](root=60, chord_size=2))
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_best_voicing(self):
        """C to F keeps the common tone."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_best_voicing"](previous=[60, 64, 67], root=65))
        assert data["status"] == "success"
        assert data["voicing"]["chord"]["notes"] == [60, 65, 69]
        assert data["voicing"]["distance"] == 3
        assert data["root_position_distance"] == 15

    @pytest.mark.asyncio
    async def test_best_voicing_errors(self):
        """Empty previous chords and out-of-range roots are rejected."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_best_voicing"](previous=[], root=65))
        assert data["error_type"] == "ValidationError"

        data = json.loads(await tools["theory_best_voicing"](previous=[60, 64, 67], root=125))
        assert data["error_type"] == "RangeError"

    @pytest.mark.asyncio
    async def test_chord_function(self):
        """Describe the dominant with its function metadata."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_chord_function"](label="V7"))
        assert data["status"] == "success"
        info = data["chord_function"]
        assert info["label"] == "V7"
        assert info["primary"] == "dominant"
        assert info["function"]["symbol"] == "D"
        assert info["function"]["examples"] == ["V", "vii°"]

    @pytest.mark.asyncio
    async def test_chord_function_unknown(self):
        """Unknown numerals succeed with an unknown role; bad scales fail."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_chord_function"](label="bVII"))
        assert data["chord_function"]["primary"] == "unknown"
        assert data["chord_function"]["function"] is None

        data = json.loads(await tools["theory_chord_function"](label="V", scale="nope"))
        assert data["error_type"] == "UnknownScaleError"

    @pytest.mark.asyncio
    async def test_list_chords(self):
        """List every chord quality."""
        from chuk_mcp_theory.tools.chords import register_chord_tools

        tools = register_chord_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_list_chords"]())
        assert data["count"] == len(ChordQuality)
        assert data["chords"][0]["id"] == "major"


class TestProgressionTools:
    """Tests for progression tools."""

    @pytest.mark.asyncio
    async def test_generate_progression(self):
        """Generate I-IV-V-I from a string."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(
            await tools["theory_generate_progression"](root=60, degrees="I-IV-V-I")
        )
        assert data["status"] == "success"
        progression = data["progression"]
        assert progression["distances"] == [3, 6, 3]
        assert progression["analysis"]["rating"] == "excellent"
        assert [c["notes"] for c in progression["chords"]] == [
            [60, 64, 67],
            [60, 65, 69],
            [59, 62, 67],
            [60, 64, 67],
        ]

    @pytest.mark.asyncio
    async def test_generate_progression_errors(self):
        """Bad labels and empty input are reported by type."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(
            await tools["theory_generate_progression"](root=60, degrees=["I", "II"])
        )
        assert data["error_type"] == "InvalidDegreeError"

        data = json.loads(await tools["theory_generate_progression"](root=60, degrees=""))
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_template_progression(self):
        """Generate a template in D major."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(
            await tools["theory_template_progression"](name="jazzTurnaround", root=62)
        )
        assert data["status"] == "success"
        assert data["progression"]["name"] == "jazzTurnaround"
        assert data["progression"]["labels"] == ["vi", "ii", "V", "I"]

        data = json.loads(await tools["theory_template_progression"](name="nope"))
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_template_defaults_to_middle_c(self):
        """Without a root the template is built on pitch 60."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_template_progression"](name="popProgression"))
        assert data["status"] == "success"
        assert data["progression"]["root"] == 60
        assert data["progression"]["key"] == "C5 major"

    @pytest.mark.asyncio
    async def test_list_progressions(self):
        """List templates, optionally by genre."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_list_progressions"]())
        assert data["count"] == len(PROGRESSION_TEMPLATES)

        data = json.loads(await tools["theory_list_progressions"](genre="jazz"))
        ids = {p["id"] for p in data["progressions"]}
        assert ids == {"circleOfFifths", "jazzTurnaround", "iiVI", "iiVI7"}

    @pytest.mark.asyncio
    async def test_export_yaml(self):
        """Export a template as YAML."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_export_yaml"](root=60, template="popProgression"))
        assert data["status"] == "success"
        content = yaml.safe_load(data["yaml"])
        assert content["schema"] == "progression/v1"
        assert content["key"] == {"root": "C5", "scale": "major"}
        assert content["progression"] == ["I", "V", "vi", "IV"]

    @pytest.mark.asyncio
    async def test_export_yaml_needs_one_source(self):
        """Either degrees or a template, not both or neither."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_export_yaml"](root=60))
        assert data["error_type"] == "ValidationError"

        data = json.loads(
            await tools["theory_export_yaml"](root=60, degrees="I-V", template="iiVI")
        )
        assert data["error_type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_import_yaml(self):
        """An export imports back to the same progression."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        exported = json.loads(
            await tools["theory_export_yaml"](root=57, scale="minor", degrees="i-iv-v-i")
        )
        data = json.loads(await tools["theory_import_yaml"](content=exported["yaml"]))
        assert data["status"] == "success"
        assert data["progression"]["key"] == "A4 minorNatural"
        assert data["progression"]["labels"] == ["i", "iv", "v", "i"]

    @pytest.mark.asyncio
    async def test_import_yaml_invalid(self):
        """YAML without key and progression is rejected."""
        from chuk_mcp_theory.tools.progressions import register_progression_tools

        tools = register_progression_tools(MockMCPServer("test"))

        data = json.loads(await tools["theory_import_yaml"](content="just text"))
        assert data["status"] == "error"
        assert data["error_type"] == "ValidationError"
