"""Shot export pipeline: @token substitution, prefix/suffix and formatting."""

from directors_palette.export.compose import apply_prefix_suffix
from directors_palette.export.formats import CSV_HEADERS, format_shots
from directors_palette.export.processor import (
    get_suggested_filename,
    process_shots_for_export,
    write_export_file,
)
from directors_palette.export.variables import create_artist_tag, replace_variables

__all__ = [
    "apply_prefix_suffix",
    "create_artist_tag",
    "CSV_HEADERS",
    "format_shots",
    "get_suggested_filename",
    "process_shots_for_export",
    "replace_variables",
    "write_export_file",
]
