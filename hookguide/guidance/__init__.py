"""
hookguide guidance infrastructure.

This package holds everything a host needs to decide when the bundled
security guidance for Uniswap V4 hooks applies, and to hand its text to
an AI coding assistant.

Core Components:
- GuidanceEntry: Immutable advisory document with triggers and body
- ActivationMatcher: Case-insensitive trigger and command matching
- GuidanceRegistry: Catalog of installed entries with unique ids
- loader: SKILL.md parsing, validation and directory discovery
- retrieval: Rendering activated entries into a context block

Usage:
    from hookguide.guidance import load_registry, retrieve

    registry = load_registry()
    text = retrieve("Create a basic afterSwap hook", registry)
"""

# Base types
from .base import (
    ActivationMatch,
    GuidanceEntry,
    normalize_triggers,
)

# Matcher
from .matcher import (
    ActivationMatcher,
    MatcherConfig,
    match_entries,
)

# Registry
from .registry import (
    GuidanceRegistry,
    get_registry,
    register_entry,
    reset_registry,
)

# Metadata header
from .schema import (
    GuidanceMetadata,
    extract_triggers,
)

# Loading
from .loader import (
    GuidanceLoadError,
    builtin_guidance_dir,
    discover,
    load_directory,
    load_guidance_file,
    load_registry,
    parse_guidance,
)

# Retrieval
from .retrieval import (
    compose_context,
    retrieve,
)

__all__ = [
    # Base types
    "ActivationMatch",
    "GuidanceEntry",
    "normalize_triggers",
    # Matcher
    "ActivationMatcher",
    "MatcherConfig",
    "match_entries",
    # Registry
    "GuidanceRegistry",
    "get_registry",
    "register_entry",
    "reset_registry",
    # Metadata header
    "GuidanceMetadata",
    "extract_triggers",
    # Loading
    "GuidanceLoadError",
    "builtin_guidance_dir",
    "discover",
    "load_directory",
    "load_guidance_file",
    "load_registry",
    "parse_guidance",
    # Retrieval
    "compose_context",
    "retrieve",
]
