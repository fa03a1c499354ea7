"""Command Repository — the single mediator of reads and writes to the commands table.

Invariants:
    - Reads never raise for absence: get_by_id returns None, list reads return []
    - create pre-checks line, then how_to; first match wins, one error per call
    - create/update/delete only stage work; nothing is durable until commit()
    - update performs no uniqueness pre-check (store constraint is the backstop)
    - Store uniqueness violations surface as DuplicateCommandError, never raw IntegrityError

Design Decisions:
    - One repository per request around the request's AsyncSession (ADR: no shared state)
    - update issues an explicit UPDATE of the full record instead of relying on
      mutation of a tracked instance
"""

import logging
from typing import Sequence

from sqlalchemy import select, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from commander.core.domain_types import CommandId
from commander.core.errors import (
    DuplicateCommandError, ErrorContext, InvalidArgumentError,
)
from commander.models.command import Command

logger = logging.getLogger(__name__)

DUPLICATE_LINE_MESSAGE = "Command already exists"
DUPLICATE_HOW_TO_MESSAGE = "There is already a command with that description"


class SqlCommandRepository:
    """SQLAlchemy-backed implementation of CommandRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> Sequence[Command]:
        result = await self.db.execute(select(Command).order_by(Command.id))
        return result.scalars().all()

    async def get_by_id(self, command_id: CommandId) -> Command | None:
        result = await self.db.execute(
            select(Command).where(Command.id == command_id),
        )
        return result.scalar_one_or_none()

    async def get_by_platform(self, platform: str) -> Sequence[Command]:
        result = await self.db.execute(
            select(Command)
            .where(Command.platform == platform)
            .order_by(Command.id)
        )
        return result.scalars().all()

    async def create(self, command: Command | None) -> None:
        """Stage a new Command after checking line and how_to are unused."""
        if command is None:
            raise InvalidArgumentError("command")

        if await self._exists(Command.line == command.line):
            logger.info(
                "Rejected duplicate line", extra={"field": "line"},
            )
            raise DuplicateCommandError(DUPLICATE_LINE_MESSAGE, "line")

        if await self._exists(Command.how_to == command.how_to):
            logger.info(
                "Rejected duplicate howTo", extra={"field": "howTo"},
            )
            raise DuplicateCommandError(DUPLICATE_HOW_TO_MESSAGE, "howTo")

        self.db.add(command)

    async def update(self, command: Command | None) -> None:
        """Stage an explicit write of every field of the desired record."""
        if command is None:
            raise InvalidArgumentError("command")
        try:
            await self.db.execute(
                sql_update(Command)
                .where(Command.id == command.id)
                .values(
                    how_to=command.how_to,
                    line=command.line,
                    platform=command.platform,
                )
            )
        except IntegrityError as e:
            await self.db.rollback()
            raise _duplicate_from_integrity_error(e, command.id)

    async def delete(self, command: Command | None) -> None:
        if command is None:
            raise InvalidArgumentError("command")
        await self.db.delete(command)

    async def commit(self) -> bool:
        """Flush staged changes in one transaction. Failures raise, never return False."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise _duplicate_from_integrity_error(e)
        return True

    async def _exists(self, condition) -> bool:
        result = await self.db.execute(
            select(Command.id).where(condition).limit(1),
        )
        return result.scalar_one_or_none() is not None


def _duplicate_from_integrity_error(
    exc: IntegrityError, command_id: int | None = None,
) -> DuplicateCommandError:
    """Map a store unique-constraint violation to the matching domain error."""
    logger.warning(
        f"Store rejected write: {exc.orig}",
        extra={"command_id": command_id, "error_code": "DUPLICATE_COMMAND"},
    )
    context = ErrorContext(command_id=command_id)
    if "how_to" in str(exc.orig):
        return DuplicateCommandError(DUPLICATE_HOW_TO_MESSAGE, "howTo", context)
    return DuplicateCommandError(DUPLICATE_LINE_MESSAGE, "line", context)
