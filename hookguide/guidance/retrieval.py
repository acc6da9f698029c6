"""
Retrieval of activated guidance into an assistant context block.

Activated entries are appended as plain Markdown, each introduced by an
HTML comment marker so a host can tell where one document ends and the
next begins. Guidance is additive: every activated entry is included,
in match order.
"""

from __future__ import annotations

from typing import Iterable

from .base import ActivationMatch
from .matcher import ActivationMatcher
from .registry import GuidanceRegistry

MARKER_TEMPLATE = "<!-- guidance: {id} -->"


def compose_context(matches: Iterable[ActivationMatch]) -> str:
    """Render activated entries into a single Markdown block.

    Args:
        matches: Activation results, typically from ActivationMatcher.match

    Returns:
        The concatenated guidance text, or "" when nothing activated
    """
    sections = []
    for match in matches:
        body = match.entry.body.strip()
        sections.append(f"{MARKER_TEMPLATE.format(id=match.entry.id)}\n\n{body}\n")
    return "\n".join(sections)


def retrieve(
    context: str | None,
    registry: GuidanceRegistry,
    matcher: ActivationMatcher | None = None,
) -> str:
    """Match a context against a registry and return the guidance text."""
    return compose_context(registry.activate(context, matcher))
