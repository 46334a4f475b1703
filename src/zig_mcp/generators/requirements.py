"""
Requirement parsing for code generation.

Maps a free-form prompt onto GenerationRequirements by plain substring
matching. There is no stemming and no negation handling: "do not add
error handling" still requests error handling.
"""

from collections.abc import Mapping
from types import MappingProxyType

from zig_mcp.models import GenerationRequirements

FEATURE_KEYWORDS: tuple[str, ...] = (
    "create",
    "implement",
    "build",
    "function",
    "struct",
    "type",
    "enum",
    "union",
)

FLAG_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "error_handling": ("error", "handle", "catch", "try", "fail"),
        "testing": ("test", "verify", "check", "validate"),
        "performance": ("fast", "optimize", "performance", "efficient", "speed"),
    }
)


def parse_requirements(prompt: str, context: str | None = None) -> GenerationRequirements:
    """Extract generation requirements from a prompt.

    Prompt and optional context are joined and lowercased into one search
    text. Every feature keyword found is added to the feature set; each
    flag is set when any of its keywords appears.

    Args:
        prompt: Natural-language request (may be empty).
        context: Extra text searched together with the prompt.

    Returns:
        Frozen GenerationRequirements.

    Example:
        >>> req = parse_requirements("Create a struct with tests")
        >>> sorted(req.features), req.testing, req.error_handling
        (['create', 'struct'], True, False)
    """
    text = " ".join(part for part in (prompt, context) if part).lower()
    features = frozenset(word for word in FEATURE_KEYWORDS if word in text)
    flags = {
        flag: any(word in text for word in words) for flag, words in FLAG_KEYWORDS.items()
    }
    return GenerationRequirements(features=features, **flags)
