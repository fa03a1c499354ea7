"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CommandId wraps the store-generated integer key
    - Patchable fields encoded as an Enum keyed by their JSON name — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CommandId = NewType("CommandId", int)


# ─── Enums ───────────────────────────────────────────────────────

class CommandField(str, Enum):
    """Writable Command fields, valued by their JSON (camelCase) name."""
    HOW_TO = "howTo"
    LINE = "line"
    PLATFORM = "platform"


class PatchOp(str, Enum):
    """JSON Patch operations accepted by partial update."""
    ADD = "add"
    REPLACE = "replace"
    REMOVE = "remove"
    TEST = "test"


# ─── Limits ──────────────────────────────────────────────────────

HOW_TO_MAX_LENGTH = 250

# Range of the 32-bit integer primary key column
COMMAND_ID_MIN = -(2**31)
COMMAND_ID_MAX = 2**31 - 1
