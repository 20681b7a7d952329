"""
Progression tools - MCP tools for voice-led chord progressions.

Tools for generating progressions from roman numerals or named
templates, listing templates, and exporting/importing the YAML form.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

from chuk_mcp_theory.constants import MIDDLE_C
from chuk_mcp_theory.core.progression import (
    PROGRESSION_TEMPLATES,
    Progression,
    generate_progression,
    generate_template_progression,
    get_progressions_by_genre,
)
from chuk_mcp_theory.errors import TheoryError, ValidationError
from chuk_mcp_theory.models import ProgressionModel

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _build(
    root: int, scale: str, degrees: list[str] | str | None, template: str | None
) -> Progression:
    """Generate from explicit degrees or from a template id, not both."""
    if (degrees is None) == (template is None):
        raise ValidationError("Give either degrees or template.", degrees)
    if template is not None:
        return generate_template_progression(root, scale, template)
    return generate_progression(root, scale, degrees)  # type: ignore[arg-type]


def register_progression_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register progression tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_generate_progression(
        root: int, degrees: list[str] | str, scale: str = "major"
    ) -> str:
        """
        Generate a voice-led chord progression.

        Labels are roman numerals of the key's diatonic chords (I, ii, V7,
        vii°) or degree numbers. The first chord is in root position;
        each later chord takes the inversion closest to the one before.

        Args:
            root: Root pitch of the key (0-127, 60 = C5)
            degrees: Labels as a list, or a string like "I-IV-V-I"
            scale: Scale type

        Returns:
            JSON string with voiced chords, distances and analysis

        Example:
            theory_generate_progression(root=60, degrees=["ii7", "V7", "IΔ7"])
        """
        try:
            progression = generate_progression(root, scale, degrees)
            model = ProgressionModel.from_progression(progression)

            return json.dumps(
                {"status": "success", "progression": model.model_dump(mode="json")}
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to generate progression")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_generate_progression"] = theory_generate_progression

    @mcp.tool  # type: ignore[arg-type]
    async def theory_template_progression(
        name: str, root: int = MIDDLE_C, scale: str = "major"
    ) -> str:
        """
        Generate a named progression template in a key.

        Args:
            name: Template id (see theory_list_progressions)
            root: Root pitch of the key
            scale: Scale type (use a minor scale for minor templates)

        Returns:
            JSON string with the voiced progression

        Example:
            theory_template_progression(name="jazzTurnaround", root=62)
        """
        try:
            progression = generate_template_progression(root, scale, name)
            model = ProgressionModel.from_progression(progression)

            return json.dumps(
                {"status": "success", "progression": model.model_dump(mode="json")}
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to generate template progression")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_template_progression"] = theory_template_progression

    @mcp.tool  # type: ignore[arg-type]
    async def theory_list_progressions(genre: str | None = None) -> str:
        """
        List progression templates.

        Args:
            genre: Optional genre filter (e.g., 'jazz', 'pop', 'blues')

        Returns:
            JSON string with template summaries

        Example:
            theory_list_progressions(genre="jazz")
        """
        try:
            templates = (
                get_progressions_by_genre(genre)
                if genre
                else list(PROGRESSION_TEMPLATES.values())
            )

            return json.dumps(
                {
                    "status": "success",
                    "progressions": [
                        {
                            "id": t.id,
                            "name": t.name,
                            "numerals": list(t.numerals),
                            "description": t.description,
                            "genres": list(t.genres),
                            "feel": t.feel,
                            "difficulty": t.difficulty,
                            "repeatable": t.repeatable,
                        }
                        for t in templates
                    ],
                    "count": len(templates),
                }
            )
        except Exception as e:
            logger.exception("Failed to list progressions")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_list_progressions"] = theory_list_progressions

    @mcp.tool  # type: ignore[arg-type]
    async def theory_export_yaml(
        root: int,
        scale: str = "major",
        degrees: list[str] | str | None = None,
        template: str | None = None,
    ) -> str:
        """
        Export a progression as YAML.

        Give either degrees or a template id. The YAML holds the key and
        labels (enough to regenerate) plus the voiced notes.

        Args:
            root: Root pitch of the key
            scale: Scale type
            degrees: Labels as a list or a string like "I-V-vi-IV"
            template: Template id

        Returns:
            JSON string containing the YAML content

        Example:
            theory_export_yaml(root=60, template="popProgression")
        """
        try:
            model = ProgressionModel.from_progression(_build(root, scale, degrees, template))
            yaml_content = yaml.safe_dump(
                model.to_yaml_dict(),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

            return json.dumps({"status": "success", "yaml": yaml_content}, ensure_ascii=False)
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to export YAML")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_export_yaml"] = theory_export_yaml

    @mcp.tool  # type: ignore[arg-type]
    async def theory_import_yaml(content: str) -> str:
        """
        Regenerate a progression from its YAML export.

        Only the key and labels are read; the chords are voiced again.

        Args:
            content: YAML text produced by theory_export_yaml

        Returns:
            JSON string with the regenerated progression

        Example:
            theory_import_yaml(content=yaml_text)
        """
        try:
            data = yaml.safe_load(content)
            if not isinstance(data, dict) or "key" not in data or "progression" not in data:
                raise ValidationError("YAML must contain 'key' and 'progression'.", content)
            model = ProgressionModel.from_yaml_dict(data)

            return json.dumps(
                {"status": "success", "progression": model.model_dump(mode="json")}
            )
        except TheoryError as e:
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )
        except Exception as e:
            logger.exception("Failed to import YAML")
            return json.dumps(
                {"status": "error", "error_type": type(e).__name__, "message": str(e)}
            )

    tools["theory_import_yaml"] = theory_import_yaml

    return tools
