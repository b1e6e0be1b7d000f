"""Wildcard prompt expansion.

``_name_`` placeholders expand to every line of the named wildcard; several
placeholders in one prompt expand to their cartesian product.
"""
from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from directors_palette.logging_config import get_logger

logger = get_logger(__name__)

_WILDCARD_RE = re.compile(r"_([a-zA-Z0-9_]+)_")
_VALID_NAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")

WARNING_THRESHOLD = 50
DANGER_THRESHOLD = 100
MAX_NAME_LENGTH = 50


@dataclass(frozen=True)
class WildCard:
    """A named list of entries, one per line of content."""

    name: str
    content: str
    category: Optional[str] = None


@dataclass
class WildCardParseResult:
    is_valid: bool
    has_wildcards: bool
    original_prompt: str
    wildcard_names: List[str] = field(default_factory=list)
    expanded_prompts: List[str] = field(default_factory=list)
    total_combinations: int = 0
    warnings: List[str] = field(default_factory=list)
    cross_combination: bool = False


def extract_wildcard_names(prompt: str) -> List[str]:
    """"A _character_ in _location_" → ["character", "location"]."""
    return _WILDCARD_RE.findall(prompt)


def parse_wildcard_content(content: str) -> List[str]:
    """Split wildcard content into trimmed, non-empty lines."""
    return [line.strip() for line in content.splitlines() if line.strip()]


def generate_combinations(prompt: str, wildcard_map: Mapping[str, Sequence[str]]) -> List[str]:
    """Expand every wildcard in *prompt* into the cartesian product of its entries.

    A wildcard missing from *wildcard_map*, or empty, expands to its bare name.
    """
    names = extract_wildcard_names(prompt)
    if not names:
        return [prompt]

    entry_lists: List[Sequence[str]] = []
    for name in names:
        entries = wildcard_map.get(name) or []
        if not entries:
            logger.warning("Wild card '_%s_' not found or empty", name)
            entries = [name]
        entry_lists.append(entries)

    prompts: List[str] = []
    for combination in itertools.product(*entry_lists):
        result = prompt
        for name, entry in zip(names, combination):
            result = result.replace(f"_{name}_", entry)
        prompts.append(result.strip())
    return prompts


def parse_wildcard_prompt(prompt: str, user_wildcards: Sequence[WildCard]) -> WildCardParseResult:
    names = extract_wildcard_names(prompt)
    if not names:
        return WildCardParseResult(
            is_valid=True,
            has_wildcards=False,
            original_prompt=prompt,
            expanded_prompts=[prompt],
            total_combinations=1,
        )

    by_name: Dict[str, WildCard] = {wc.name: wc for wc in user_wildcards}
    missing = [name for name in names if name not in by_name]
    cross = len(names) > 1
    if missing:
        return WildCardParseResult(
            is_valid=False,
            has_wildcards=True,
            original_prompt=prompt,
            wildcard_names=names,
            warnings=[
                "Missing wild cards: " + ", ".join(f"_{name}_" for name in missing)
            ],
            cross_combination=cross,
        )

    wildcard_map = {name: parse_wildcard_content(by_name[name].content) for name in names}
    expanded = generate_combinations(prompt, wildcard_map)
    total = len(expanded)

    warnings: List[str] = []
    if total > DANGER_THRESHOLD:
        warnings.append(f"DANGER: {total} combinations will use significant credits!")
    elif total > WARNING_THRESHOLD:
        warnings.append(f"WARNING: {total} combinations detected")
    if cross:
        warnings.append(f"Cross-combination: {len(names)} wild cards combined")

    return WildCardParseResult(
        is_valid=True,
        has_wildcards=True,
        original_prompt=prompt,
        wildcard_names=names,
        expanded_prompts=expanded,
        total_combinations=total,
        warnings=warnings,
        cross_combination=cross,
    )


def calculate_wildcard_cost(
    prompt: str,
    user_wildcards: Sequence[WildCard],
    credits_per_image: int,
) -> Dict[str, object]:
    result = parse_wildcard_prompt(prompt, user_wildcards)
    if not result.is_valid:
        return {"total_cost": 0, "image_count": 0, "is_valid": False, "warnings": result.warnings}
    image_count = len(result.expanded_prompts)
    return {
        "total_cost": image_count * credits_per_image,
        "image_count": image_count,
        "is_valid": True,
        "warnings": result.warnings,
    }


def validate_wildcard_name(name: str) -> List[str]:
    """Return a list of errors for a proposed wildcard name (empty = valid)."""
    if not name.strip():
        return ["Name cannot be empty"]
    if not _VALID_NAME_RE.match(name):
        return ["Name can only contain letters, numbers, and underscores"]
    if len(name) > MAX_NAME_LENGTH:
        return [f"Name must be {MAX_NAME_LENGTH} characters or less"]
    return []
