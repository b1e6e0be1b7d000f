"""@token substitution and artist tag normalization.

Pure functions: no I/O, no external state.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

from directors_palette.models import ExportVariables

_DEFAULT_ARTIST_TAG = "artist"

# token name → ExportVariables attribute.  Alternation order puts the longer
# artist tokens first so "@artist-desc" is never read as "@artist" + "-desc".
_TOKEN_FIELDS: Dict[str, str] = {
    "artist-desc": "artist_description",
    "artist-tag": "artist_tag",
    "artist": "artist_name",
    "director": "director",
    "chapter": "chapter",
    "section": "section",
    "location": "location",
}

_TOKEN_RE = re.compile(
    r"@(" + "|".join(re.escape(t) for t in _TOKEN_FIELDS) + r")(?!\w)",
    re.IGNORECASE,
)

# "$" between letters reads as "s" (A$AP -> asap).
_DOLLAR_S_RE = re.compile(r"(?<=[a-z])\$(?=[a-z])")
_TAG_STRIP_RE = re.compile(r"[^a-z0-9\s_-]")
_WHITESPACE_RE = re.compile(r"\s+")
_UNDERSCORES_RE = re.compile(r"_+")


def create_artist_tag(artist_name: Optional[str]) -> str:
    """Normalize an artist name into a tag.

        "Jay-Z"      → "jay-z"
        "Lil Wayne"  → "lil_wayne"
        "A$AP Rocky" → "asap_rocky"

    Returns "artist" when nothing usable remains.  Idempotent.
    """
    if not artist_name:
        return _DEFAULT_ARTIST_TAG
    tag = _DOLLAR_S_RE.sub("s", artist_name.lower())
    tag = _TAG_STRIP_RE.sub("", tag)
    tag = _WHITESPACE_RE.sub("_", tag)
    tag = _UNDERSCORES_RE.sub("_", tag).strip("_")
    return tag or _DEFAULT_ARTIST_TAG


def replace_variables(description: str, variables: ExportVariables) -> str:
    """Replace @tokens in *description* with values from *variables*.

    Matching is case-insensitive.  Tokens whose variable is missing or empty,
    and @words that are not known tokens, are left verbatim.
    """

    def _substitute(match: re.Match) -> str:
        value = getattr(variables, _TOKEN_FIELDS[match.group(1).lower()])
        return value if value else match.group(0)

    return _TOKEN_RE.sub(_substitute, description)
