"""
Base guidance abstractions for hookguide.

A guidance entry is one loadable advisory document: a slug identifier,
a set of trigger keywords, and an opaque Markdown body that a host
injects into an assistant's context when the entry activates.

Key concepts:
- GuidanceEntry: Immutable document record with triggers and body
- ActivationMatch: Result of matching an entry against a context string
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Slug ids double as invocation commands, so no whitespace or slashes.
ENTRY_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")

DEFAULT_COMMAND_PREFIX = "/"


def normalize_triggers(triggers: Any) -> tuple[str, ...]:
    """Strip, drop blanks, and collapse case-insensitive duplicates.

    The first spelling of a duplicated trigger wins, so
    ``["Uniswap", "uniswap"]`` normalizes to ``("Uniswap",)``.

    Args:
        triggers: Iterable of trigger strings

    Returns:
        Tuple of cleaned triggers in declaration order
    """
    seen: set[str] = set()
    result: list[str] = []
    for trigger in triggers or ():
        text = str(trigger).strip()
        if not text:
            continue
        key = text.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(text)
    return tuple(result)


@dataclass(frozen=True)
class GuidanceEntry:
    """A single loadable guidance document.

    Entries are read-only reference text. The matcher never mutates
    them and a host discards them at the end of an interaction.

    Attributes:
        id: Stable slug identifier, unique within a registry
        triggers: Keywords or phrases matched case-insensitively
        body: Markdown payload injected into the assistant context
        description: Free text from the metadata header
        version: Optional document version
        source: Path the entry was loaded from, if any

    Example:
        entry = GuidanceEntry(
            id="uniswap-v4-hooks",
            triggers=("uniswap", "beforeSwap"),
            body="# Uniswap V4 hook security ...",
        )
        entry.command  # "/uniswap-v4-hooks"
    """
    id: str
    triggers: tuple[str, ...]
    body: str = ""
    description: str = ""
    version: str | None = None
    source: Path | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        """Validate id and normalize triggers."""
        if not self.id:
            raise ValueError("Guidance entry id must not be empty")
        if not ENTRY_ID_PATTERN.match(self.id):
            raise ValueError(
                f"Invalid guidance entry id {self.id!r}: "
                "use lowercase letters, digits and '-'"
            )
        triggers = normalize_triggers(self.triggers)
        if not triggers:
            raise ValueError(f"Guidance entry '{self.id}' declares no triggers")
        # frozen dataclass: bypass __setattr__ for the normalized value
        object.__setattr__(self, "triggers", triggers)

    @property
    def command(self) -> str:
        """Explicit invocation token under the default prefix."""
        return self.command_for(DEFAULT_COMMAND_PREFIX)

    def command_for(self, prefix: str) -> str:
        """Explicit invocation token under a configured prefix."""
        return f"{prefix}{self.id}"

    @property
    def folded_triggers(self) -> tuple[str, ...]:
        """Triggers case-folded for matching, aligned with ``triggers``."""
        return tuple(t.casefold() for t in self.triggers)

    def get_info(self, command_prefix: str = DEFAULT_COMMAND_PREFIX) -> dict[str, Any]:
        """Get entry metadata for listings and JSON output.

        Args:
            command_prefix: Prefix the host uses for invocation tokens

        Returns:
            Dictionary with id, description, version, triggers,
            command, source and any extra header keys
        """
        return {
            "id": self.id,
            "description": self.description,
            "version": self.version,
            "triggers": list(self.triggers),
            "command": self.command_for(command_prefix),
            "source": str(self.source) if self.source else None,
            "metadata": dict(self.metadata),
        }

    def __repr__(self) -> str:
        return f"<GuidanceEntry(id={self.id!r}, triggers={len(self.triggers)})>"


@dataclass(frozen=True)
class ActivationMatch:
    """Result of matching one entry against a context string.

    Attributes:
        entry: The activated guidance entry
        matched_triggers: Triggers found in the context, in the entry's
            declaration order
        via_command: Whether the explicit invocation token was present

    Example:
        match = matcher.match("/uniswap-v4-hooks review this", entries)[0]
        match.via_command  # True
    """
    entry: GuidanceEntry
    matched_triggers: tuple[str, ...] = ()
    via_command: bool = False

    @property
    def activated(self) -> bool:
        return self.via_command or bool(self.matched_triggers)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entry.id,
            "matched_triggers": list(self.matched_triggers),
            "via_command": self.via_command,
        }
