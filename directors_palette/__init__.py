# Director's Palette: shot export and post-production transfer
from .export import apply_prefix_suffix, create_artist_tag, process_shots_for_export, replace_variables
from .models import ExportConfig, ExportFormat, ExportVariables, PostProductionShot, ShotData
from .transfer import has_transferred_shots, retrieve_transferred_shots, store_shots_for_transfer

__all__ = [
    "apply_prefix_suffix",
    "create_artist_tag",
    "ExportConfig",
    "ExportFormat",
    "ExportVariables",
    "has_transferred_shots",
    "PostProductionShot",
    "process_shots_for_export",
    "replace_variables",
    "retrieve_transferred_shots",
    "ShotData",
    "store_shots_for_transfer",
]
