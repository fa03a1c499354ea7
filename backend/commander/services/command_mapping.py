"""Command Mapping — explicit conversions between the ORM model and API schemas.

Invariants:
    - Every field copy is spelled out; no reflection or name-matching
    - Responses carry exactly id, howTo, line, platform
"""

from commander.models.command import Command
from commander.schemas.command import (
    CommandFields, CommandRead, CommandUpdate,
)


def to_command_read(command: Command) -> CommandRead:
    return CommandRead(
        id=command.id,
        how_to=command.how_to,
        line=command.line,
        platform=command.platform,
    )


def to_command_reads(commands) -> list[CommandRead]:
    return [to_command_read(c) for c in commands]


def to_command_model(
    fields: CommandFields, command_id: int | None = None,
) -> Command:
    """Build a transient Command; command_id set only for updates of an existing row."""
    command = Command(
        how_to=fields.how_to,
        line=fields.line,
        platform=fields.platform,
    )
    if command_id is not None:
        command.id = command_id
    return command


def to_command_update(command: Command) -> CommandUpdate:
    """Snapshot a stored Command into the update shape (partial-update target)."""
    return CommandUpdate(
        how_to=command.how_to,
        line=command.line,
        platform=command.platform,
    )
