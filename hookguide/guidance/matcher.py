"""
Activation matching for guidance entries.

This module provides the ActivationMatcher class that decides which
guidance entries a host should surface for a given context string.
The matcher supports:
- Case-insensitive trigger matching on plain substrings
- Explicit invocation via slash-style command tokens
- Additive results (every matching entry activates)

Usage:
    from hookguide.guidance.matcher import ActivationMatcher

    matcher = ActivationMatcher()
    for match in matcher.match("Create a basic afterSwap hook", entries):
        print(match.entry.id, match.matched_triggers)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from .base import DEFAULT_COMMAND_PREFIX, ActivationMatch, GuidanceEntry

logger = logging.getLogger(__name__)


@dataclass
class MatcherConfig:
    """Configuration for the activation matcher.

    Attributes:
        command_prefix: Prefix that marks an explicit invocation token.
            Tokens count only at the start of the context or after
            whitespace, so paths like ``src/uniswap-v4-hooks`` are not
            commands.

    Example:
        matcher = ActivationMatcher(MatcherConfig(command_prefix="!"))
    """
    command_prefix: str = DEFAULT_COMMAND_PREFIX

    def __post_init__(self) -> None:
        if not self.command_prefix or any(c.isspace() for c in self.command_prefix):
            raise ValueError(
                f"command_prefix must be non-empty without whitespace, got {self.command_prefix!r}"
            )


class ActivationMatcher:
    """Decides which guidance entries activate for a context string.

    Matching is a pure function of the context and the entries. It
    never mutates either and holds no state between calls, so one
    matcher can be shared across threads.

    An entry activates when:
    - **Trigger**: any trigger occurs as a case-insensitive substring
      of the context (no word boundaries, so ``function beforeSwap(``
      matches ``beforeSwap``)
    - **Command**: an invocation token like ``/uniswap-v4-hooks``
      appears in the context and equals the entry id

    Example:
        matcher = ActivationMatcher()
        matches = matcher.match("/uniswap-v4-hooks review this", entries)
        assert matches[0].via_command
    """

    def __init__(self, config: MatcherConfig | None = None) -> None:
        """Initialize the matcher.

        Args:
            config: Optional matcher configuration
        """
        self._config = config or MatcherConfig()
        self._command_re = re.compile(
            r"(?:^|(?<=\s))" + re.escape(self._config.command_prefix) + r"([A-Za-z0-9][\w-]*)"
        )

    @property
    def command_prefix(self) -> str:
        return self._config.command_prefix

    def command_for(self, entry: GuidanceEntry) -> str:
        """Invocation token that activates *entry* under this matcher."""
        return entry.command_for(self._config.command_prefix)

    def extract_commands(self, context: str | None) -> set[str]:
        """Extract explicit invocation ids from a context string.

        Args:
            context: Free text (user message, file content, command line)

        Returns:
            Set of ids named by prefix tokens, without the prefix

        Example:
            matcher.extract_commands("  /uniswap-v4-hooks  review")
            # {"uniswap-v4-hooks"}
        """
        if not context:
            return set()
        return set(self._command_re.findall(context))

    def match_entry(
        self,
        context: str | None,
        entry: GuidanceEntry,
        commands: set[str] | None = None,
    ) -> ActivationMatch | None:
        """Match a single entry.

        Args:
            context: The context string to scan
            entry: The guidance entry to test
            commands: Pre-extracted command ids, to avoid rescanning

        Returns:
            ActivationMatch if the entry activates, None otherwise
        """
        text = (context or "").casefold()
        if commands is None:
            commands = self.extract_commands(context)

        matched = tuple(
            trigger
            for trigger, folded in zip(entry.triggers, entry.folded_triggers)
            if folded in text
        )
        via_command = entry.id in commands

        if not matched and not via_command:
            return None
        return ActivationMatch(entry=entry, matched_triggers=matched, via_command=via_command)

    def match(
        self,
        context: str | None,
        entries: Iterable[GuidanceEntry],
    ) -> list[ActivationMatch]:
        """Return every entry that activates for the context.

        Results keep the order of ``entries``. An empty list is a normal
        outcome and means no guidance applies.

        Args:
            context: The context string to scan
            entries: Installed guidance entries

        Returns:
            List of ActivationMatch, one per activated entry
        """
        commands = self.extract_commands(context)
        matches: list[ActivationMatch] = []
        for entry in entries:
            result = self.match_entry(context, entry, commands)
            if result is not None:
                matches.append(result)

        logger.debug(
            "Matched %d guidance entries (commands=%s)",
            len(matches),
            sorted(commands),
        )
        return matches


def match_entries(
    context: str | None,
    entries: Iterable[GuidanceEntry],
    config: MatcherConfig | None = None,
) -> list[ActivationMatch]:
    """Match entries with a one-off matcher.

    Convenience wrapper around ``ActivationMatcher(config).match``.
    """
    return ActivationMatcher(config).match(context, entries)
