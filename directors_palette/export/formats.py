"""Shot list rendering: plain text, numbered list, JSON and CSV.

The render mode is picked once per call from ExportConfig.format.
"""
from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, List, Optional, Sequence

from directors_palette.export.compose import apply_prefix_suffix
from directors_palette.export.variables import replace_variables
from directors_palette.models import ExportConfig, ExportFormat, ExportVariables, ShotData, utc_now_iso

CSV_HEADERS = ("Shot Number", "Description", "Chapter", "Section", "Director Style")


def process_description(
    shot: ShotData,
    config: ExportConfig,
    variables: ExportVariables,
) -> str:
    """Substitute @tokens (shot chapter/section win over globals), then wrap."""
    shot_variables = variables.model_copy(
        update={
            "chapter": shot.chapter or variables.chapter,
            "section": shot.section or variables.section,
        }
    )
    processed = replace_variables(shot.description, shot_variables)
    return apply_prefix_suffix(processed, config.prefix, config.suffix)


def _csv_line(fields: Sequence[Any]) -> str:
    # QUOTE_ALL doubles embedded quotes; embedded newlines stay inside the field.
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n").writerow(fields)
    return buf.getvalue()[:-1]


def _json_entry(shot: ShotData, index: int, description: str, config: ExportConfig) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "id": shot.id,
        "shotNumber": index + 1,
        "description": description,
    }
    if shot.chapter is not None:
        entry["chapter"] = shot.chapter
    if shot.section is not None:
        entry["section"] = shot.section
    if config.include_metadata and shot.metadata is not None:
        entry["metadata"] = shot.metadata.to_wire()
    return entry


def format_shots(
    shots: Sequence[ShotData],
    config: ExportConfig,
    variables: ExportVariables,
    *,
    exported_at: Optional[str] = None,
) -> str:
    """Render *shots* in the format selected by *config*.

    Args:
        shots:       Shots in export order; numbering starts at 1.
        config:      Prefix/suffix, format, separator and metadata switch.
        variables:   Global @token values.
        exported_at: ISO 8601 stamp for the JSON envelope; defaults to now.
    """
    descriptions = [process_description(shot, config, variables) for shot in shots]

    if config.format == ExportFormat.NUMBERED:
        return config.separator.join(f"{i + 1}. {d}" for i, d in enumerate(descriptions))

    if config.format == ExportFormat.JSON:
        document = {
            "shots": [
                _json_entry(shot, i, d, config)
                for i, (shot, d) in enumerate(zip(shots, descriptions))
            ],
            "totalShots": len(shots),
            "exportConfig": config.model_dump(mode="json", by_alias=True),
            "exportedAt": exported_at or utc_now_iso(),
        }
        return json.dumps(document, indent=2, ensure_ascii=False)

    if config.format == ExportFormat.CSV:
        rows: List[str] = [
            _csv_line([
                i + 1,
                d,
                shot.chapter or "",
                shot.section or "",
                (shot.metadata.director_style if shot.metadata else None) or "",
            ])
            for i, (shot, d) in enumerate(zip(shots, descriptions))
        ]
        return f"{_csv_line(CSV_HEADERS)}\n" + "\n".join(rows)

    return config.separator.join(descriptions)
