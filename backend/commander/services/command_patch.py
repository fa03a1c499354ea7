"""Command Patch — apply a partial update to a transient CommandUpdate and re-validate.

Invariants:
    - The stored Command is never touched here; input is a snapshot, output a new object
    - Result is validated by CommandUpdate, the same schema full updates use
    - Any failure (bad path, failed test op, blank or removed field) raises
      CommandValidationError with per-field details — nothing partial is returned

Design Decisions:
    - Two accepted shapes: merge object (CommandPatch) and JSON Patch op list.
      Both reduce to a {field: value} change set before validation
    - remove sets the field to None so the required-field check rejects it
"""

import logging

from pydantic import ValidationError

from commander.core.domain_types import CommandField, PatchOp
from commander.core.errors import CommandValidationError
from commander.schemas.command import CommandPatch, CommandUpdate, PatchOperation

logger = logging.getLogger(__name__)


def apply_command_patch(
    current: CommandUpdate, patch: CommandPatch | list[PatchOperation],
) -> CommandUpdate:
    """Return the patched, re-validated update shape. Raises CommandValidationError."""
    if isinstance(patch, CommandPatch):
        changes = patch.model_dump(by_alias=True, exclude_unset=True)
    else:
        changes = changes_from_operations(current, patch)

    document = current.model_dump(by_alias=True)
    document.update(changes)
    try:
        return CommandUpdate.model_validate(document)
    except ValidationError as e:
        logger.info(f"Patch rejected: {e.error_count()} field error(s)")
        raise CommandValidationError(_details_from_validation_error(e))


def changes_from_operations(
    current: CommandUpdate, operations: list[PatchOperation],
) -> dict:
    """Reduce JSON Patch operations to a {json_field: value} change set.

    Operations apply in order against the running document, so a later
    ``test`` sees earlier replacements.
    """
    document = current.model_dump(by_alias=True)
    changes: dict = {}
    errors: list[dict] = []

    for index, operation in enumerate(operations):
        field = _field_from_path(operation.path)
        if field is None:
            errors.append(_detail(
                f"[{index}].path",
                f"The target location '{operation.path}' is not a patchable field",
                "patch_path",
            ))
            continue

        op = PatchOp(operation.op)
        if op is PatchOp.TEST:
            if document[field.value] != operation.value:
                errors.append(_detail(
                    field.value,
                    f"The current value does not match the test value '{operation.value}'",
                    "patch_test_failed",
                ))
            continue

        value = None if op is PatchOp.REMOVE else operation.value
        document[field.value] = value
        changes[field.value] = value

    if errors:
        raise CommandValidationError(errors)
    return changes


def _field_from_path(path: str) -> CommandField | None:
    """Resolve a single-segment JSON Pointer ('/line') to its field."""
    if path[:1] != "/" or "/" in path[1:]:
        return None
    name = path[1:]
    for field in CommandField:
        if field.value.lower() == name.lower():
            return field
    return None


def _details_from_validation_error(exc: ValidationError) -> list[dict]:
    return [
        _detail(
            ".".join(str(loc) for loc in e["loc"]) or "body",
            e["msg"],
            e["type"],
        )
        for e in exc.errors()
    ]


def _detail(field: str, message: str, error_type: str) -> dict:
    return {"field": field, "message": message, "type": error_type}
