"""
Chord tools - MCP tools for chord construction, harmonization and voicing.

Tools for building and inverting chords, harmonizing a scale, finding
the smoothest voicing of one chord after another, and describing the
harmonic role of a roman numeral.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.core.chord import (
    Chord,
    ChordQuality,
    classify_chord,
    generate_chord,
    generate_diatonic_chords,
    invert_chord,
)
from chuk_mcp_theory.core.progression import analyze_chord_function
from chuk_mcp_theory.core.scale import Key
from chuk_mcp_theory.core.voicing import best_voicing, voice_leading_distance
from chuk_mcp_theory.errors import TheoryError, ValidationError
from chuk_mcp_theory.models import (
    ChordFunctionModel,
    ChordModel,
    DiatonicChordModel,
    VoicingModel,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_chord_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register chord tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_generate_chord(root: int, quality: str = "major", inversion: int = 0) -> str:
        """
        Build a chord from a root and quality.

        Args:
            root: Root pitch (0-127, 60 = C5)
            quality: Chord quality (major, minor, dominant7, m7b5, ...)
            inversion: Number of times to move the lowest note up an octave

        Returns:
            JSON string with notes, names, frequencies and symbol

        Example:
            theory_generate_chord(root=67, quality="dominant7")
        """
        try:
            chord = generate_chord(root, quality)
            if inversion:
                chord = invert_chord(chord, inversion)

            return json.dumps(
                {"status": "success", "chord": ChordModel.from_chord(chord).model_dump(mode="json")}
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to generate chord")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_generate_chord"] = theory_generate_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_invert_chord(notes: list[int], inversion: int = 1) -> str:
        """
        Invert a chord given as pitches.

        The lowest note moves up an octave, inversion times. The root and
        quality are read from the notes as a root-position stack.

        Args:
            notes: Chord pitches, lowest first (e.g., [60, 64, 67])
            inversion: Number of steps (>= 0)

        Returns:
            JSON string with the inverted chord

        Example:
            theory_invert_chord(notes=[60, 64, 67], inversion=1)
        """
        try:
            if not notes:
                raise ValidationError("Chord must contain at least one note.", notes)
            ordered = sorted(notes)
            chord = Chord(ordered[0], classify_chord(ordered), tuple(ordered))
            inverted = invert_chord(chord, inversion)

            return json.dumps(
                {
                    "status": "success",
                    "chord": ChordModel.from_chord(inverted).model_dump(mode="json"),
                }
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to invert chord")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_invert_chord"] = theory_invert_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_diatonic_chords(root: int, scale: str = "major", chord_size: int = 3) -> str:
        """
        Harmonize every degree of a scale.

        Chords are stacked from every other scale tone, so this works for
        modes, harmonic and melodic minor as well as major.

        Args:
            root: Root pitch of the key (0-127)
            scale: Scale type
            chord_size: Notes per chord (3 = triads, 4 = sevenths)

        Returns:
            JSON string with one chord per degree, with numeral and function

        Example:
            theory_diatonic_chords(root=60, scale="major", chord_size=4)
        """
        try:
            key = Key(root, scale)
            chords = generate_diatonic_chords(key.root, key.scale, chord_size)

            return json.dumps(
                {
                    "status": "success",
                    "key": str(key),
                    "chords": [
                        DiatonicChordModel.from_diatonic(c).model_dump(mode="json") for c in chords
                    ],
                    "roman_numerals": [c.roman_numeral for c in chords],
                }
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to harmonize scale")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_diatonic_chords"] = theory_diatonic_chords

    @mcp.tool  # type: ignore[arg-type]
    async def theory_best_voicing(previous: list[int], root: int, quality: str = "major") -> str:
        """
        Find the smoothest voicing of the next chord.

        Tries every inversion of the next chord an octave down, in place
        and an octave up, and keeps the one that moves the fewest
        semitones from the previous chord.

        Args:
            previous: Pitches of the chord being left
            root: Root pitch of the next chord
            quality: Chord quality of the next chord

        Returns:
            JSON string with the chosen voicing, its distance and the
            root-position distance for comparison

        Example:
            theory_best_voicing(previous=[60, 64, 67], root=65, quality="major")
        """
        try:
            if not previous:
                raise ValidationError("Previous chord must contain at least one note.", previous)
            result = best_voicing(previous, root, quality)
            root_position = generate_chord(root, quality)

            return json.dumps(
                {
                    "status": "success",
                    "voicing": VoicingModel.from_result(result, previous).model_dump(mode="json"),
                    "root_position_distance": voice_leading_distance(previous, root_position),
                }
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to find voicing")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_best_voicing"] = theory_best_voicing

    @mcp.tool  # type: ignore[arg-type]
    async def theory_chord_function(label: str, scale: str = "major") -> str:
        """
        Describe the harmonic role of a roman numeral.

        Sevenths read as their triad (V7 as V). Degree numbers are read as
        the diatonic triad on that degree of the scale. Unrecognized labels
        return primary 'unknown'.

        Args:
            label: Roman numeral (e.g., 'V', 'ii', 'vii°') or degree number
            scale: Scale type, used for degree numbers

        Returns:
            JSON string with primary and secondary roles, qualities and, when
            the role is a harmonic function, its symbol and example numerals

        Example:
            theory_chord_function(label="vi")
        """
        try:
            info = analyze_chord_function(label, scale)

            return json.dumps(
                {
                    "status": "success",
                    "chord_function": ChordFunctionModel.from_info(info).model_dump(mode="json"),
                }
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to analyze chord function")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_chord_function"] = theory_chord_function

    @mcp.tool  # type: ignore[arg-type]
    async def theory_list_chords() -> str:
        """
        List available chord qualities.

        Returns:
            JSON string with quality ids, names, intervals and symbols

        Example:
            theory_list_chords()
        """
        try:
            chords = [
                {
                    "id": quality.value,
                    "name": quality.definition.name,
                    "intervals": list(quality.definition.intervals),
                    "symbol": quality.definition.symbol,
                    "description": quality.definition.description,
                }
                for quality in ChordQuality
            ]

            return json.dumps({"status": "success", "chords": chords, "count": len(chords)})
        except Exception as e:
            logger.exception("Failed to list chords")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_list_chords"] = theory_list_chords

    return tools
