"""Parse, validate, and discover guidance documents on disk.

A guidance document is a Markdown file with a YAML metadata header:

    ---
    name: uniswap-v4-hooks
    description: Security-first guidance for "Uniswap V4" hooks
    triggers: [uniswap, beforeSwap, afterSwap]
    ---
    # Body ...

Directories are scanned for ``<entry>/SKILL.md`` files and for top-level
``*.md`` files that start with a header. In non-strict mode a document
that fails to load is logged and skipped, the same way a host refuses to
register a malformed entry without failing the rest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from .base import GuidanceEntry
from .registry import GuidanceRegistry
from .schema import GuidanceMetadata

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"

_BUILTIN_DIR = Path(__file__).resolve().parent / "data"

_FENCE = "---"


class GuidanceLoadError(Exception):
    """Raised when a guidance document cannot be registered.

    Attributes:
        source: Path or label of the document that failed.
        reason: Reason for the failure.
        original: Original exception if any.
    """

    def __init__(
        self,
        source: str | Path | None,
        reason: str,
        original: Exception | None = None,
    ):
        self.source = source
        self.reason = reason
        self.original = original
        label = source if source is not None else "<string>"
        super().__init__(f"Failed to load guidance '{label}': {reason}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def split_front_matter(text: str, source: str | Path | None = None) -> tuple[dict, str]:
    """Split a document into its YAML header mapping and Markdown body.

    Raises:
        GuidanceLoadError: If the header is missing, unterminated, not
            valid YAML, or not a mapping.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _FENCE:
        raise GuidanceLoadError(source, "missing '---' metadata header")

    for index in range(1, len(lines)):
        if lines[index].strip() == _FENCE:
            header_text = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            break
    else:
        raise GuidanceLoadError(source, "metadata header is not terminated by '---'")

    try:
        header = yaml.safe_load(header_text)
    except yaml.YAMLError as exc:
        raise GuidanceLoadError(source, "metadata header is not valid YAML", exc) from exc

    if not isinstance(header, dict):
        raise GuidanceLoadError(source, "metadata header must be a mapping")
    return header, body.lstrip("\n")


def parse_guidance(text: str, source: str | Path | None = None) -> GuidanceEntry:
    """Parse document text into a validated GuidanceEntry.

    Raises:
        GuidanceLoadError: If the header is malformed or fails validation.
    """
    header, body = split_front_matter(text, source)
    try:
        meta = GuidanceMetadata.model_validate(header)
    except ValidationError as exc:
        raise GuidanceLoadError(source, _summarize(exc), exc) from exc

    extra = dict(meta.model_extra or {})
    return GuidanceEntry(
        id=meta.name,
        triggers=tuple(meta.triggers),
        body=body,
        description=meta.description,
        version=meta.version,
        source=Path(source) if source is not None else None,
        metadata=extra,
    )


def load_guidance_file(path: str | Path) -> GuidanceEntry:
    """Load and validate a single guidance document.

    Raises:
        FileNotFoundError: If the file does not exist.
        GuidanceLoadError: If the document is unreadable, not UTF-8, or
            malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Guidance document not found at {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        raise GuidanceLoadError(path, f"cannot read document: {exc}", exc) from exc
    return parse_guidance(text, source=path)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def discover(directory: str | Path) -> list[Path]:
    """List guidance documents in a directory, sorted by path.

    Picks up ``<sub>/SKILL.md`` in immediate subdirectories and top-level
    ``*.md`` files whose first line is a ``---`` fence. README and other
    plain Markdown files are ignored.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.debug("Guidance directory does not exist: %s", directory)
        return []

    found: list[Path] = []
    for item in sorted(directory.iterdir()):
        if item.is_dir():
            skill = item / SKILL_FILENAME
            if skill.is_file():
                found.append(skill)
        elif item.is_file() and item.suffix.lower() == ".md" and _has_header(item):
            found.append(item)
    return found


def load_directory(directory: str | Path, strict: bool = False) -> list[GuidanceEntry]:
    """Load every guidance document found in *directory*.

    Args:
        directory: Directory to scan.
        strict: Raise on the first failure instead of skipping it.

    Raises:
        GuidanceLoadError: In strict mode, if any document fails.
    """
    entries: list[GuidanceEntry] = []
    paths = discover(directory)
    logger.info("Found %d guidance documents in %s", len(paths), directory)
    for path in paths:
        try:
            entries.append(load_guidance_file(path))
        except GuidanceLoadError as exc:
            if strict:
                raise
            logger.warning("Skipping guidance document: %s", exc)
    return entries


def builtin_guidance_dir() -> Path:
    """Directory holding the guidance documents shipped with the package."""
    return _BUILTIN_DIR


def load_registry(
    extra_dirs: Iterable[str | Path] = (),
    include_builtin: bool = True,
    strict: bool = False,
    registry: GuidanceRegistry | None = None,
) -> GuidanceRegistry:
    """Build a registry from the bundled and extra guidance directories.

    Bundled entries register first. A later document reusing an id is a
    duplicate: it raises in strict mode and is skipped otherwise.

    Raises:
        GuidanceLoadError: In strict mode, for malformed documents.
        ValueError: In strict mode, for duplicate ids.
    """
    registry = registry if registry is not None else GuidanceRegistry()
    directories: list[Path] = [builtin_guidance_dir()] if include_builtin else []
    directories.extend(Path(d) for d in extra_dirs)

    for directory in directories:
        for entry in load_directory(directory, strict=strict):
            try:
                registry.register(entry)
            except ValueError as exc:
                if strict:
                    raise
                logger.warning("Skipping %s: %s", entry.source, exc)

    logger.info("Registered %d guidance entries", len(registry))
    return registry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _has_header(path: Path) -> bool:
    try:
        with path.open(encoding="utf-8") as fh:
            return fh.readline().lstrip("\ufeff").strip() == _FENCE
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return False


def _summarize(exc: ValidationError) -> str:
    """Collapse a pydantic ValidationError into one line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "header"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
