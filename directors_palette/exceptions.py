"""Exception types raised by directors_palette."""
from typing import Optional


class DirectorsPaletteError(Exception):
    """Base exception for all directors_palette errors."""

    def __init__(self, message: str, error_code: str = "DIRECTORS_PALETTE_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ConfigurationError(DirectorsPaletteError):
    """Raised when a required setting (e.g. OPENAI_API_KEY) is missing."""

    def __init__(self, setting: str):
        super().__init__(f"Missing {setting}", error_code="CONFIGURATION_ERROR")
        self.setting = setting


class UpstreamError(DirectorsPaletteError):
    """Raised when the LLM provider fails or returns an unusable reply."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        if body:
            message = f"{message}: {body}"
        super().__init__(message, error_code="UPSTREAM_ERROR")
        self.status_code = status_code
        self.body = body


class ExportError(DirectorsPaletteError):
    """Raised when an export cannot be produced or written."""

    def __init__(self, message: str):
        super().__init__(message, error_code="EXPORT_ERROR")
