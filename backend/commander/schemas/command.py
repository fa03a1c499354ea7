"""Command Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - JSON uses camelCase (howTo); Python uses snake_case (how_to) via aliases
    - howTo, line, platform: stripped, non-empty; howTo at most 250 chars
    - CommandCreate and CommandUpdate share one validation path (CommandFields)
    - CommandPatch carries only optional fields; unknown keys rejected

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - PatchOperation.op as Literal: Pydantic rejects unsupported ops at the boundary
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commander.core.domain_types import HOW_TO_MAX_LENGTH


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty or whitespace")
    return v


class CommandFields(BaseModel):
    """Writable Command fields — the full-record shape used by create and update."""
    model_config = ConfigDict(populate_by_name=True)

    how_to: str = Field(alias="howTo", min_length=1, max_length=HOW_TO_MAX_LENGTH)
    line: str = Field(min_length=1)
    platform: str = Field(min_length=1)

    @field_validator("how_to", "line", "platform")
    @classmethod
    def strip_fields(cls, v: str) -> str:
        return _strip_required(v)


class CommandCreate(CommandFields):
    """Command creation body."""


class CommandUpdate(CommandFields):
    """Full update body — also the transient target of partial updates."""


class CommandRead(BaseModel):
    """Command response — public-facing command data."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    how_to: str = Field(alias="howTo")
    line: str
    platform: str


class CommandPatch(BaseModel):
    """Merge-style partial update: only the fields present are changed."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    how_to: str | None = Field(None, alias="howTo")
    line: str | None = None
    platform: str | None = None


class PatchOperation(BaseModel):
    """Single JSON Patch (RFC 6902) operation targeting an update-shape field."""
    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "replace", "remove", "test"]
    path: str
    value: Any = None


class DuplicateResponse(BaseModel):
    """Body returned when create/update hits a uniqueness rule."""
    message: str
