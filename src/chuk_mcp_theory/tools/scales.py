"""
Scale tools - MCP tools for scale generation and discovery.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.core.scale import Key, ScaleType, get_scale_degree
from chuk_mcp_theory.errors import TheoryError
from chuk_mcp_theory.models import ScaleModel

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_scale_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register scale tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_generate_scale(
        root: int,
        scale: str = "major",
        octave_count: int = 1,
        prefer_flats: bool = False,
    ) -> str:
        """
        Generate the pitches of a scale.

        The result starts at the root and closes on the root one
        octave_count higher. Every note must stay within 0-127.

        Args:
            root: Root pitch (0-127, 60 = C5)
            scale: Scale type (major, minorNatural, dorian, blues, ...)
            octave_count: Octaves to generate (>= 1)
            prefer_flats: Spell black keys with flats

        Returns:
            JSON string with pitches, names, frequencies and intervals

        Example:
            theory_generate_scale(root=57, scale="minorPentatonic", octave_count=2)
        """
        try:
            key = Key(root, scale)
            model = ScaleModel.from_key(key, octave_count, prefer_flats)

            return json.dumps({"status": "success", "scale": model.model_dump(mode="json")})
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to generate scale")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_generate_scale"] = theory_generate_scale

    @mcp.tool  # type: ignore[arg-type]
    async def theory_list_scales() -> str:
        """
        List available scale types.

        Returns:
            JSON string with scale ids, names, sizes and descriptions

        Example:
            theory_list_scales()
        """
        try:
            scales = [
                {
                    "id": scale_type.value,
                    "name": scale_type.definition.name,
                    "size": scale_type.definition.size,
                    "intervals": list(scale_type.definition.intervals),
                    "description": scale_type.definition.description,
                }
                for scale_type in ScaleType
            ]

            return json.dumps({"status": "success", "scales": scales, "count": len(scales)})
        except Exception as e:
            logger.exception("Failed to list scales")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_list_scales"] = theory_list_scales

    @mcp.tool  # type: ignore[arg-type]
    async def theory_scale_degree(degree: int, scale: str = "major") -> str:
        """
        Describe one degree of a scale.

        Args:
            degree: 1-based scale degree
            scale: Scale type

        Returns:
            JSON string with the degree label, functional name and offset

        Example:
            theory_scale_degree(degree=5, scale="major")
        """
        try:
            info = get_scale_degree(degree, scale)

            return json.dumps(
                {
                    "status": "success",
                    "degree": info.degree,
                    "roman": info.roman,
                    "name": info.name,
                    "offset": info.offset,
                }
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to describe scale degree")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_scale_degree"] = theory_scale_degree

    return tools
