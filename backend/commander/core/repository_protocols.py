"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO through an AsyncSession
    - Reads return None / empty lists for absence; only constraint violations raise
"""

from typing import Protocol, Sequence

from commander.core.domain_types import CommandId


class CommandLike(Protocol):
    """Structural contract for Command records passed across the boundary."""
    id: int | None
    how_to: str
    line: str
    platform: str


class CommandRepository(Protocol):
    """Contract for Command persistence — implemented by shell."""
    async def get_all(self) -> Sequence[CommandLike]: ...
    async def get_by_id(self, command_id: CommandId) -> CommandLike | None: ...
    async def get_by_platform(self, platform: str) -> Sequence[CommandLike]: ...
    async def create(self, command: CommandLike | None) -> None: ...
    async def update(self, command: CommandLike | None) -> None: ...
    async def delete(self, command: CommandLike | None) -> None: ...
    async def commit(self) -> bool: ...
