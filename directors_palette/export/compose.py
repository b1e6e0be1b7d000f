"""Prefix/suffix composition around a processed shot description."""
from __future__ import annotations

# A suffix starting with one of these attaches directly: "shot" + ", 4K".
_ATTACHING_PUNCTUATION = (",", ".", ";", ":", "!", "?")


def apply_prefix_suffix(description: str, prefix: str, suffix: str) -> str:
    """Wrap *description* in the trimmed *prefix* and *suffix*.

    Empty (or whitespace-only) prefix/suffix are no-ops.  A single space joins
    the prefix; the suffix gets a single space unless it opens with
    punctuation, in which case a leading space is kept only if the caller
    wrote one.
    """
    trimmed_prefix = prefix.strip()
    trimmed_suffix = suffix.strip()

    result = description
    if trimmed_prefix:
        result = f"{trimmed_prefix} {result}"

    if trimmed_suffix:
        attaches = trimmed_suffix.startswith(_ATTACHING_PUNCTUATION) and not suffix[:1].isspace()
        result = f"{result}{'' if attaches else ' '}{trimmed_suffix}"

    return result
