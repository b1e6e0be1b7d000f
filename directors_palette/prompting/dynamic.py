"""Dynamic prompt expansion.

Two syntaxes:

    "an apple [in a garden, in a car, in space]"   → one prompt per option
    "show _character_ in _location_"               → wildcard cross-product

Wildcards take priority; only the first bracket group is expanded.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from directors_palette.prompting.wildcards import WildCard, parse_wildcard_prompt

_BRACKET_RE = re.compile(r"\[([^\[\]]+)\]")
_ANY_BRACKET_RE = re.compile(r"\[([^\[\]]*)\]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class DynamicPromptConfig:
    max_options: int = 10
    max_preview: int = 5
    trim_whitespace: bool = True


DEFAULT_CONFIG = DynamicPromptConfig()


@dataclass
class DynamicPromptResult:
    is_valid: bool
    has_brackets: bool
    has_wildcards: bool
    original_prompt: str
    expanded_prompts: List[str] = field(default_factory=list)
    preview_count: int = 0
    total_count: int = 0
    bracket_content: Optional[str] = None
    options: Optional[List[str]] = None
    wildcard_names: Optional[List[str]] = None
    warnings: List[str] = field(default_factory=list)
    is_cross_combination: bool = False


def parse_dynamic_prompt(
    prompt: str,
    config: Optional[DynamicPromptConfig] = None,
    user_wildcards: Sequence[WildCard] = (),
) -> DynamicPromptResult:
    """Expand *prompt* into concrete prompts.

    Invalid results (no options, too many options, missing wildcards) carry an
    empty expanded_prompts list.
    """
    config = config or DEFAULT_CONFIG

    wc = parse_wildcard_prompt(prompt, user_wildcards)
    if wc.has_wildcards:
        return DynamicPromptResult(
            is_valid=wc.is_valid,
            has_brackets=False,
            has_wildcards=True,
            original_prompt=prompt,
            expanded_prompts=wc.expanded_prompts,
            wildcard_names=wc.wildcard_names,
            preview_count=min(len(wc.expanded_prompts), config.max_preview),
            total_count=wc.total_combinations,
            warnings=wc.warnings,
            is_cross_combination=wc.cross_combination,
        )

    match = _BRACKET_RE.search(prompt)
    if match is None:
        return DynamicPromptResult(
            is_valid=True,
            has_brackets=False,
            has_wildcards=False,
            original_prompt=prompt,
            expanded_prompts=[prompt],
            preview_count=1,
            total_count=1,
        )

    bracket_content = match.group(1)
    before, after = prompt[: match.start()], prompt[match.end():]

    options = bracket_content.split(",")
    if config.trim_whitespace:
        options = [o.strip() for o in options if o.strip()]

    if not options or len(options) > config.max_options:
        return DynamicPromptResult(
            is_valid=False,
            has_brackets=True,
            has_wildcards=False,
            original_prompt=prompt,
            bracket_content=bracket_content,
            options=options,
            total_count=len(options),
        )

    expanded = []
    for option in options:
        text = before + option + after
        if config.trim_whitespace:
            text = _WHITESPACE_RE.sub(" ", text).strip()
        expanded.append(text)

    return DynamicPromptResult(
        is_valid=True,
        has_brackets=True,
        has_wildcards=False,
        original_prompt=prompt,
        expanded_prompts=expanded,
        bracket_content=bracket_content,
        options=options,
        preview_count=min(len(expanded), config.max_preview),
        total_count=len(expanded),
    )


def get_prompt_preview(prompt: str, config: Optional[DynamicPromptConfig] = None) -> List[str]:
    config = config or DEFAULT_CONFIG
    result = parse_dynamic_prompt(prompt, config)
    if not result.is_valid or not result.has_brackets:
        return result.expanded_prompts
    return result.expanded_prompts[: config.max_preview]


def has_valid_brackets(prompt: str) -> bool:
    result = parse_dynamic_prompt(prompt)
    return result.is_valid and result.has_brackets


def calculate_dynamic_prompt_cost(
    prompt: str,
    credits_per_image: int,
    config: Optional[DynamicPromptConfig] = None,
    user_wildcards: Sequence[WildCard] = (),
) -> Dict[str, object]:
    """Credits needed to render every expansion of *prompt*."""
    result = parse_dynamic_prompt(prompt, config, user_wildcards)
    if not result.is_valid:
        return {"total_cost": 0, "image_count": 0, "is_valid": False}
    image_count = len(result.expanded_prompts)
    return {
        "total_cost": image_count * credits_per_image,
        "image_count": image_count,
        "is_valid": True,
    }


def validate_bracket_syntax(prompt: str) -> Dict[str, object]:
    """Check bracket usage while the user types.

    Returns ``{"is_valid": True}`` or ``{"is_valid": False, "error": ...,
    "suggestion": ...}``.
    """
    opened = prompt.count("[")
    closed = prompt.count("]")

    if opened > closed:
        return {
            "is_valid": False,
            "error": "Missing closing bracket ]",
            "suggestion": "Add ] to close your options",
        }
    if closed > opened:
        return {
            "is_valid": False,
            "error": "Missing opening bracket [",
            "suggestion": "Add [ before your options",
        }
    if opened > 1:
        return {
            "is_valid": False,
            "error": "Multiple brackets not supported",
            "suggestion": "Use only one [option1, option2] per prompt",
        }

    match = _ANY_BRACKET_RE.search(prompt)
    if match and not match.group(1).strip():
        return {
            "is_valid": False,
            "error": "Empty brackets",
            "suggestion": "Add options inside brackets: [option1, option2]",
        }
    return {"is_valid": True}
