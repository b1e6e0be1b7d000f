"""Bulk shot export: variable substitution, formatting, filenames, files."""
from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from directors_palette.exceptions import ExportError
from directors_palette.export.formats import format_shots
from directors_palette.export.variables import create_artist_tag
from directors_palette.logging_config import get_logger
from directors_palette.models import (
    ExportConfig,
    ExportFormat,
    ExportResult,
    ExportVariables,
    ProjectType,
    ShotData,
)

logger = get_logger(__name__)

_EXTENSIONS = {
    ExportFormat.JSON: "json",
    ExportFormat.CSV: "csv",
}


def process_shots_for_export(
    shots: Sequence[ShotData],
    config: ExportConfig,
    variables: Optional[ExportVariables] = None,
    *,
    exported_at: Optional[str] = None,
) -> ExportResult:
    """Run a full export and time it.

    An artist tag is derived from artist_name when one is given.  With
    use_artist_descriptions set and a description available, @artist renders
    the description instead of the name.
    """
    start = time.perf_counter()
    variables = variables or ExportVariables()

    updates = {}
    if variables.artist_name:
        updates["artist_tag"] = create_artist_tag(variables.artist_name)
    if config.use_artist_descriptions and variables.artist_description:
        updates["artist_name"] = variables.artist_description
    effective = variables.model_copy(update=updates)

    formatted = format_shots(shots, config, effective, exported_at=exported_at)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    logger.debug(
        "Exported %d shots as %s in %.3f ms", len(shots), config.format.value, elapsed_ms
    )
    return ExportResult(
        formatted_text=formatted,
        total_shots=len(shots),
        processing_time=elapsed_ms,
        config=config,
    )


def get_suggested_filename(
    config: ExportConfig,
    project_type: ProjectType,
    artist_name: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Suggest a filename such as ``music-video-drake-shots-2026-10-17-14-05-09.txt``."""
    now = now or datetime.now()
    base = (
        f"{project_type}-{create_artist_tag(artist_name)}-shots"
        if artist_name
        else f"{project_type}-shots"
    )
    extension = _EXTENSIONS.get(config.format, "txt")
    return f"{base}-{now:%Y-%m-%d}-{now:%H-%M-%S}.{extension}"


def write_export_file(content: str, path: Union[str, Path]) -> Path:
    """Write *content* as UTF-8 to *path*, creating parent directories.

    Returns the written path.

    Raises:
        ExportError: the directory or file cannot be written.
    """
    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Cannot write export to {out_path}: {exc}") from exc
    logger.info("Wrote export to %s", out_path)
    return out_path
