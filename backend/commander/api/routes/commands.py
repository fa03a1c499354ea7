"""Commands Routes — CRUD endpoints for the Command resource.

Invariants:
    - Each handler makes exactly one repository call, plus commit() for mutations
    - GET /platform registered before GET /{command_id} so the literal segment wins
    - Absent rows → 404; duplicates → 400 {"message": ...}; failed patch validation → 422
    - Responses built by explicit mapping functions, never raw ORM objects

Design Decisions:
    - Repository injected per request via Depends(get_command_repository)
    - Duplicate errors translated here (not the global handler): the body shape
      {"message": ...} is specific to this resource
"""

import logging
from typing import Annotated

from fastapi import (
    APIRouter, Body, Depends, HTTPException, Path, Query, Request, Response, status,
)
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from commander.core.domain_types import COMMAND_ID_MAX, COMMAND_ID_MIN, CommandId
from commander.core.errors import DuplicateCommandError, ResourceNotFoundError
from commander.core.repository_protocols import CommandRepository
from commander.infrastructure.database import get_db
from commander.models.command import Command
from commander.schemas.command import (
    CommandCreate, CommandPatch, CommandRead, CommandUpdate,
    DuplicateResponse, PatchOperation,
)
from commander.services.command_mapping import (
    to_command_model, to_command_read, to_command_reads, to_command_update,
)
from commander.services.command_patch import apply_command_patch
from commander.services.command_repository import SqlCommandRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/commands", tags=["commands"])

# Ids outside the key column range are rejected (400) before reaching the store
CommandIdPath = Annotated[int, Path(ge=COMMAND_ID_MIN, le=COMMAND_ID_MAX)]


def get_command_repository(
    db: AsyncSession = Depends(get_db),
) -> CommandRepository:
    return SqlCommandRepository(db)


async def get_command_or_404(
    command_id: int, repository: CommandRepository,
) -> Command:
    """Get command or raise 404."""
    command = await repository.get_by_id(CommandId(command_id))
    if command is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND,
            detail=ResourceNotFoundError(
                "Command", str(command_id),
            ).to_response(),
        )
    return command


def _duplicate_response(exc: DuplicateCommandError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=DuplicateResponse(message=exc.message).model_dump(),
    )


@router.get("", response_model=list[CommandRead])
async def get_all_commands(
    repository: CommandRepository = Depends(get_command_repository),
):
    """Get all commands."""
    return to_command_reads(await repository.get_all())


@router.get("/platform", response_model=list[CommandRead])
async def get_commands_by_platform(
    platform: str = Query(""),
    repository: CommandRepository = Depends(get_command_repository),
):
    """Get all the commands of the specified platform (exact match)."""
    return to_command_reads(await repository.get_by_platform(platform))


@router.get(
    "/{command_id}", response_model=CommandRead, name="get_command_by_id",
    responses={404: {"description": "There isn't a command with the specified ID"}},
)
async def get_command_by_id(
    command_id: CommandIdPath,
    repository: CommandRepository = Depends(get_command_repository),
):
    """Get the command with the specified ID."""
    return to_command_read(await get_command_or_404(command_id, repository))


@router.post(
    "", response_model=CommandRead, status_code=status.HTTP_201_CREATED,
    responses={400: {"model": DuplicateResponse}},
)
async def create_command(
    body: CommandCreate,
    request: Request,
    response: Response,
    repository: CommandRepository = Depends(get_command_repository),
):
    """Create a command. howTo and line must both be unused."""
    command = to_command_model(body)
    try:
        await repository.create(command)
        await repository.commit()
    except DuplicateCommandError as e:
        return _duplicate_response(e)

    logger.info(
        "Command created",
        extra={"command_id": command.id, "platform": command.platform},
    )
    response.headers["Location"] = str(
        request.url_for("get_command_by_id", command_id=str(command.id)),
    )
    return to_command_read(command)


@router.put(
    "/{command_id}", status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": DuplicateResponse}},
)
async def update_command(
    command_id: CommandIdPath,
    body: CommandUpdate,
    repository: CommandRepository = Depends(get_command_repository),
):
    """Replace every field of a command."""
    existing = await get_command_or_404(command_id, repository)
    try:
        await repository.update(to_command_model(body, command_id=existing.id))
        await repository.commit()
    except DuplicateCommandError as e:
        return _duplicate_response(e)

    logger.info("Command updated", extra={"command_id": existing.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{command_id}", status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": DuplicateResponse}},
)
async def partial_update_command(
    command_id: CommandIdPath,
    body: Annotated[CommandPatch | list[PatchOperation], Body()],
    repository: CommandRepository = Depends(get_command_repository),
):
    """Partially update a command from a merge object or a JSON Patch document.

    The patch is applied to a snapshot and re-validated before anything is
    written; a failure leaves the stored command untouched (422).
    """
    existing = await get_command_or_404(command_id, repository)
    patched = apply_command_patch(to_command_update(existing), body)
    try:
        await repository.update(to_command_model(patched, command_id=existing.id))
        await repository.commit()
    except DuplicateCommandError as e:
        return _duplicate_response(e)

    logger.info("Command patched", extra={"command_id": existing.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{command_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_command(
    command_id: CommandIdPath,
    repository: CommandRepository = Depends(get_command_repository),
):
    """Delete the command with the specified ID."""
    existing = await get_command_or_404(command_id, repository)
    await repository.delete(existing)
    await repository.commit()
    logger.info("Command deleted", extra={"command_id": command_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
