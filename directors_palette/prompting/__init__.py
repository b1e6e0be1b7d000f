"""Dynamic prompt expansion: [bracket, options] and _wildcard_ placeholders."""

from directors_palette.prompting.dynamic import (
    DynamicPromptConfig,
    DynamicPromptResult,
    calculate_dynamic_prompt_cost,
    get_prompt_preview,
    has_valid_brackets,
    parse_dynamic_prompt,
    validate_bracket_syntax,
)
from directors_palette.prompting.wildcards import (
    WildCard,
    WildCardParseResult,
    calculate_wildcard_cost,
    extract_wildcard_names,
    generate_combinations,
    parse_wildcard_content,
    parse_wildcard_prompt,
    validate_wildcard_name,
)

__all__ = [
    "calculate_dynamic_prompt_cost",
    "calculate_wildcard_cost",
    "DynamicPromptConfig",
    "DynamicPromptResult",
    "extract_wildcard_names",
    "generate_combinations",
    "get_prompt_preview",
    "has_valid_brackets",
    "parse_dynamic_prompt",
    "parse_wildcard_content",
    "parse_wildcard_prompt",
    "validate_bracket_syntax",
    "validate_wildcard_name",
    "WildCard",
    "WildCardParseResult",
]
