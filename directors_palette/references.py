"""Reference extraction: characters, locations and props named in a story.

The extraction itself is an LLM call (OpenAI chat completions in JSON mode);
the reply is validated into StoryReferences.  format_reference_constraints()
renders approved references as the constraint block fed to breakdown prompts.
"""
from __future__ import annotations

import json
from typing import Optional

import openai
from openai import OpenAI
from pydantic import ValidationError

from directors_palette.config import Settings, get_settings
from directors_palette.exceptions import ConfigurationError, UpstreamError
from directors_palette.logging_config import get_logger
from directors_palette.models import Reference, StoryReferences

logger = get_logger(__name__)

_SYSTEM_PROMPT = (
    "You are a script supervisor extracting ONLY actual elements from the story. "
    'STORY: """{story}"""'
)

_EXTRACTION_PROMPT = """
Analyze this story and extract ONLY the actual characters, locations, and props that appear in the text.
DO NOT invent or add any elements not explicitly mentioned in the story.

For each element, provide:
- A unique ID (e.g., "char-1", "loc-1", "prop-1")
- A reference handle (e.g., "@john", "@warehouse", "@briefcase")
- The actual name from the story
- A brief visual description suitable for {style} style
- Appearances (which parts of the story they appear in)

Also identify:
- Key themes and moods in the story
- Suggested visual treatments that would work well

CRITICAL RULES:
1. ONLY extract elements that are EXPLICITLY mentioned in the story text
2. Do NOT create or imagine any characters, locations, or props not in the story
3. If a character is mentioned by name, use that exact name
4. If a location is described, use that description
5. Be conservative - when in doubt, don't include it

Director Notes to consider: {notes}

Return ONLY valid JSON with this exact structure:
{{
  "characters": [{{"id": "...", "reference": "@...", "name": "...", "description": "...", "appearances": ["..."]}}],
  "locations": [...same shape...],
  "props": [...same shape...],
  "themes": ["..."],
  "suggestedTreatments": [{{"id": "...", "name": "...", "description": "..."}}]
}}
"""


def _build_client(settings: Settings) -> OpenAI:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY")
    return OpenAI(api_key=settings.openai_api_key)


def extract_story_references(
    story: str,
    director: str = "",
    director_notes: str = "",
    *,
    client: Optional[OpenAI] = None,
    settings: Optional[Settings] = None,
) -> StoryReferences:
    """Ask the LLM for the characters, locations and props in *story*.

    Args:
        story:          Narrative text.
        director:       Director whose style the descriptions should suit.
        director_notes: Free-form notes passed through to the prompt.
        client:         OpenAI client; built from settings when omitted.
        settings:       Settings; read from the environment when omitted.

    Raises:
        ConfigurationError: no client given and no API key configured.
        UpstreamError:      the API call failed or the reply is not valid
                            StoryReferences JSON.
    """
    settings = settings or get_settings()
    client = client or _build_client(settings)

    prompt = _EXTRACTION_PROMPT.format(
        style=director or "cinematic",
        notes=director_notes or "None",
    )
    logger.info("Extracting story references (%d chars, model=%s)", len(story), settings.openai_model)

    try:
        response = client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": _SYSTEM_PROMPT.format(story=story)},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )
    except openai.APIStatusError as exc:
        raise UpstreamError(
            "Reference extraction failed", status_code=exc.status_code, body=exc.message
        ) from exc
    except openai.APIError as exc:
        raise UpstreamError(f"Reference extraction failed: {exc}") from exc

    content = response.choices[0].message.content or ""
    try:
        references = StoryReferences.model_validate(json.loads(content))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise UpstreamError(f"LLM returned invalid references: {exc}") from exc

    logger.info(
        "Extracted references: %d characters, %d locations, %d props",
        len(references.characters), len(references.locations), len(references.props),
    )
    return references


def _format_reference_list(references: list[Reference]) -> str:
    lines = [f"{r.reference} - {r.name}: {r.description}" for r in references]
    return "\n".join(lines) or "None specified"


def format_reference_constraints(references: StoryReferences, director_notes: str = "") -> str:
    """Append the approved-reference constraint block to *director_notes*."""
    return f"""
{director_notes}

CRITICAL REFERENCE CONSTRAINTS:
You MUST use ONLY these approved references in your shot list:

CHARACTERS (use these exact references):
{_format_reference_list(references.characters)}

LOCATIONS (use these exact references):
{_format_reference_list(references.locations)}

PROPS (use these exact references):
{_format_reference_list(references.props)}

DO NOT introduce any characters, locations, or props not listed above.
Use the exact @reference handles provided (e.g., @john, @warehouse).
Focus on creative shot composition using only these approved elements.
"""
