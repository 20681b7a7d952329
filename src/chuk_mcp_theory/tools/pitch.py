"""
Pitch tools - MCP tools for pitch, name and frequency conversion.

Tools for describing a pitch given any of its three representations
and for naming intervals.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.core.pitch import (
    Interval,
    PitchClass,
    frequency_to_pitch,
    interval_name,
    is_in_piano_range,
    name_to_pitch,
    pitch_to_frequency,
    pitch_to_name,
    validate_pitch,
)
from chuk_mcp_theory.errors import TheoryError, ValidationError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_pitch_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register pitch conversion tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_pitch_info(
        pitch: int | None = None,
        name: str | None = None,
        frequency: float | None = None,
        prefer_flats: bool = False,
    ) -> str:
        """
        Describe a pitch from its number, name or frequency.

        Give exactly one of pitch, name or frequency. Frequencies snap to
        the nearest pitch. Pitch 60 is C5 and pitch 69 is A5 = 440 Hz.

        Args:
            pitch: Pitch number (0-127)
            name: Pitch name like 'C5', 'F#3' or 'Bb4'
            frequency: Frequency in Hz
            prefer_flats: Spell black keys with flats

        Returns:
            JSON string with pitch number, names, pitch class and frequency

        Example:
            theory_pitch_info(name="A5")
        """
        try:
            given = [v for v in (pitch, name, frequency) if v is not None]
            if len(given) != 1:
                raise ValidationError("Give exactly one of pitch, name or frequency.", given)

            if pitch is not None:
                resolved = validate_pitch(pitch)
            elif name is not None:
                resolved = name_to_pitch(name)
            else:
                resolved = frequency_to_pitch(float(frequency))  # type: ignore[arg-type]

            pitch_class = PitchClass.from_pitch(resolved)
            result: dict[str, Any] = {
                "pitch": resolved,
                "name": pitch_to_name(resolved, prefer_flats),
                "pitch_class": int(pitch_class),
                "pitch_class_name": pitch_class.spell(prefer_flats),
                "octave": resolved // 12,
                "frequency": round(pitch_to_frequency(resolved), 3),
                "in_piano_range": is_in_piano_range(resolved),
            }
            if frequency is not None:
                result["input_frequency"] = frequency

            return json.dumps({"status": "success", **result})
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to describe pitch")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_pitch_info"] = theory_pitch_info

    @mcp.tool  # type: ignore[arg-type]
    async def theory_interval_name(
        semitones: int | None = None,
        from_pitch: int | None = None,
        to_pitch: int | None = None,
    ) -> str:
        """
        Name an interval.

        Give either semitones (0-12) or two pitches. Between two pitches
        the distance is taken upward from the lower one and must be
        within an octave.

        Args:
            semitones: Interval size in semitones
            from_pitch: First pitch (0-127)
            to_pitch: Second pitch (0-127)

        Returns:
            JSON string with the interval name and its inversion

        Example:
            theory_interval_name(semitones=7)
            theory_interval_name(from_pitch=60, to_pitch=64)
        """
        try:
            if semitones is None:
                if from_pitch is None or to_pitch is None:
                    raise ValidationError(
                        "Give semitones, or both from_pitch and to_pitch.", semitones
                    )
                semitones = abs(validate_pitch(to_pitch) - validate_pitch(from_pitch))

            name_ = interval_name(semitones)
            interval = Interval(semitones)

            return json.dumps(
                {
                    "status": "success",
                    "semitones": semitones,
                    "name": name_,
                    "inversion": {
                        "semitones": interval.invert().semitones,
                        "name": interval.invert().name,
                    },
                }
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to name interval")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_interval_name"] = theory_interval_name

    return tools
