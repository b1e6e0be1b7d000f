import json

import jsonschema

from .schema_loader import load_schema


def validate_transfer_envelope(data: dict) -> None:
    """Validate a transfer envelope dict against TransferEnvelope.v1.json.

    Raises jsonschema.ValidationError if non-conformant.
    """
    jsonschema.validate(data, load_schema("TransferEnvelope.v1.json"))


def validate_export_document(data) -> None:
    """Validate a JSON-format export against ShotExport.v1.json.

    Accepts the parsed dict or the formatted JSON text produced by
    format_shots().  Raises jsonschema.ValidationError if non-conformant.
    """
    if isinstance(data, str):
        data = json.loads(data)
    jsonschema.validate(data, load_schema("ShotExport.v1.json"))
