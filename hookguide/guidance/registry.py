"""
Guidance registry for installed entries.

This module provides the GuidanceRegistry class, the catalog of
guidance entries a host has installed. The registry enforces unique
ids and keeps registration order, which is also the order activated
entries are reported in.

Usage:
    from hookguide.guidance.registry import get_registry, register_entry

    register_entry(entry)
    matches = get_registry().activate("Create a basic afterSwap hook")
"""

from __future__ import annotations

from typing import Any, Iterator

from .base import DEFAULT_COMMAND_PREFIX, ActivationMatch, GuidanceEntry
from .matcher import ActivationMatcher


class GuidanceRegistry:
    """Registry of installed guidance entries.

    Attributes:
        _entries: Mapping of entry ids to entries, in registration order

    Example:
        registry = GuidanceRegistry()
        registry.register(entry)

        if "uniswap-v4-hooks" in registry:
            entry = registry.get("uniswap-v4-hooks")

        for match in registry.activate("beforeSwap reentrancy?"):
            print(match.entry.id)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[str, GuidanceEntry] = {}

    def register(self, entry: GuidanceEntry) -> None:
        """Register a guidance entry.

        Args:
            entry: The entry to register

        Raises:
            ValueError: If an entry with the same id is already registered
        """
        if entry.id in self._entries:
            existing = self._entries[entry.id]
            raise ValueError(
                f"Guidance entry '{entry.id}' already registered"
                + (f" from {existing.source}" if existing.source else "")
            )
        self._entries[entry.id] = entry

    def unregister(self, entry_id: str) -> bool:
        """Unregister an entry.

        Returns:
            True if the entry was found and removed, False otherwise
        """
        return self._entries.pop(entry_id, None) is not None

    def get(self, entry_id: str) -> GuidanceEntry | None:
        return self._entries.get(entry_id)

    def list_ids(self) -> list[str]:
        return list(self._entries.keys())

    def list_all(self, command_prefix: str = DEFAULT_COMMAND_PREFIX) -> list[dict[str, Any]]:
        """List all registered entries with metadata.

        Args:
            command_prefix: Prefix used to render each entry's command

        Returns:
            List of dictionaries from GuidanceEntry.get_info()
        """
        return [entry.get_info(command_prefix) for entry in self._entries.values()]

    def activate(
        self,
        context: str | None,
        matcher: ActivationMatcher | None = None,
    ) -> list[ActivationMatch]:
        """Match every registered entry against a context string.

        Args:
            context: The context string to scan
            matcher: Matcher to use; a default matcher if None

        Returns:
            Activated entries in registration order
        """
        matcher = matcher or ActivationMatcher()
        return matcher.match(context, self._entries.values())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __iter__(self) -> Iterator[GuidanceEntry]:
        return iter(self._entries.values())


# Global registry instance
_registry: GuidanceRegistry | None = None


def get_registry() -> GuidanceRegistry:
    """Get the global guidance registry, creating it on first use."""
    global _registry
    if _registry is None:
        _registry = GuidanceRegistry()
    return _registry


def register_entry(entry: GuidanceEntry) -> None:
    """Register an entry in the global registry.

    Raises:
        ValueError: If an entry with the same id is already registered
    """
    get_registry().register(entry)


def reset_registry() -> None:
    """Reset the global registry to empty state.

    Primarily useful for testing to ensure clean state between tests.
    """
    global _registry
    if _registry is not None:
        _registry.clear()
    _registry = None
