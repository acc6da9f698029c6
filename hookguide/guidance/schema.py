"""Pydantic model for the metadata header of a guidance document.

The header is the YAML block between ``---`` fences at the top of a
SKILL.md file. Hosts register an entry only when ``name`` and
``description`` are present and at least one trigger can be resolved.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import ENTRY_ID_PATTERN, normalize_triggers

# Quoted phrases in a description, e.g. Triggers on "v4 hook", 'beforeSwap'.
_QUOTED_PHRASE = re.compile(r"""["“]([^"”\n]+)["”]|'([^'\n]+)'""")


def extract_triggers(description: str) -> list[str]:
    """Pull quoted phrases out of a free-text description.

    Only used when a header has no explicit ``triggers`` list.
    Apostrophes inside words (``What's``) do not open a quote.
    """
    found: list[str] = []
    for double, single in _QUOTED_PHRASE.findall(_mask_apostrophes(description)):
        phrase = (double or single).replace("\x00", "'").strip()
        if phrase:
            found.append(phrase)
    return list(normalize_triggers(found))


def _mask_apostrophes(text: str) -> str:
    # Replace in-word apostrophes with a character the regex ignores.
    return re.sub(r"(?<=\w)'(?=\w)", "\x00", text)


class GuidanceMetadata(BaseModel):
    """Metadata header of a guidance document."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, description="Stable entry id (slug)")
    description: str = Field(..., min_length=1, description="When the guidance applies")
    triggers: list[str] = Field(default_factory=list, description="Activation keywords")
    version: str | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        v = v.strip()
        if not ENTRY_ID_PATTERN.match(v):
            raise ValueError(
                f"name must be a lowercase slug (letters, digits, '-'), got {v!r}"
            )
        return v

    @field_validator("description")
    @classmethod
    def _strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("description must not be blank")
        return v

    @field_validator("triggers", mode="before")
    @classmethod
    def _coerce_triggers(cls, v: object) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [part for part in (p.strip() for p in v.split(",")) if part]
        return list(normalize_triggers(v))  # type: ignore[arg-type]

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, v: object) -> str | None:
        # YAML reads ``version: 1.0`` as a float
        return None if v is None else str(v)

    @model_validator(mode="after")
    def _resolve_triggers(self) -> "GuidanceMetadata":
        if not self.triggers:
            self.triggers = extract_triggers(self.description)
        if not self.triggers:
            raise ValueError(
                f"guidance '{self.name}' has no triggers: add a 'triggers' list "
                "or quote the activation keywords in the description"
            )
        return self
