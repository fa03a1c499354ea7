"""Command patch application — pure transformation of a snapshot, no DB.

Invariants:
    - Merge objects change only present keys; explicit null counts as present
    - JSON Patch ops apply in order; test ops see earlier replacements
    - Every failure raises CommandValidationError and returns nothing partial
"""

import pytest

from commander.core.errors import CommandValidationError
from commander.schemas.command import CommandPatch, CommandUpdate, PatchOperation
from commander.services.command_patch import apply_command_patch, changes_from_operations


@pytest.fixture
def current():
    return CommandUpdate(how_to="Run a project", line="run x", platform="Linux")


def _ops(*raw):
    return [PatchOperation.model_validate(op) for op in raw]


def test_merge_patch_changes_single_field(current):
    patched = apply_command_patch(current, CommandPatch(platform="Windows"))
    assert patched.platform == "Windows"
    assert patched.how_to == "Run a project"
    assert patched.line == "run x"


def test_merge_patch_does_not_mutate_snapshot(current):
    apply_command_patch(current, CommandPatch(line="run y"))
    assert current.line == "run x"


def test_empty_merge_patch_returns_equal_record(current):
    assert apply_command_patch(current, CommandPatch()) == current


def test_merge_patch_blank_field_fails_validation(current):
    with pytest.raises(CommandValidationError) as exc_info:
        apply_command_patch(current, CommandPatch(platform="  "))
    assert exc_info.value.http_status == 422
    assert exc_info.value.details[0]["field"] == "platform"


def test_merge_patch_null_field_fails_validation(current):
    patch = CommandPatch.model_validate({"howTo": None})
    with pytest.raises(CommandValidationError) as exc_info:
        apply_command_patch(current, patch)
    assert exc_info.value.details[0]["field"] == "howTo"


def test_json_patch_replace_and_add(current):
    patched = apply_command_patch(current, _ops(
        {"op": "replace", "path": "/howTo", "value": "Start a project"},
        {"op": "add", "path": "/platform", "value": "Mac"},
    ))
    assert (patched.how_to, patched.platform) == ("Start a project", "Mac")


def test_json_patch_path_is_case_insensitive(current):
    patched = apply_command_patch(current, _ops(
        {"op": "replace", "path": "/HowTo", "value": "Start"},
    ))
    assert patched.how_to == "Start"


def test_json_patch_remove_required_field_fails(current):
    with pytest.raises(CommandValidationError):
        apply_command_patch(current, _ops({"op": "remove", "path": "/line"}))


def test_json_patch_test_sees_earlier_replace(current):
    changes = changes_from_operations(current, _ops(
        {"op": "replace", "path": "/platform", "value": "Windows"},
        {"op": "test", "path": "/platform", "value": "Windows"},
    ))
    assert changes == {"platform": "Windows"}


def test_json_patch_failed_test_reports_field(current):
    with pytest.raises(CommandValidationError) as exc_info:
        changes_from_operations(current, _ops(
            {"op": "test", "path": "/line", "value": "other"},
        ))
    assert exc_info.value.details[0]["type"] == "patch_test_failed"


def test_json_patch_unknown_path_collects_every_error(current):
    with pytest.raises(CommandValidationError) as exc_info:
        changes_from_operations(current, _ops(
            {"op": "replace", "path": "/id", "value": 9},
            {"op": "replace", "path": "/owner", "value": "me"},
        ))
    fields = [d["field"] for d in exc_info.value.details]
    assert fields == ["[0].path", "[1].path"]


@pytest.mark.parametrize("path", ["line", "///line", "/line/0", "", "/"])
def test_json_patch_path_must_be_single_segment_pointer(current, path):
    with pytest.raises(CommandValidationError) as exc_info:
        changes_from_operations(current, _ops(
            {"op": "replace", "path": path, "value": "run y"},
        ))
    assert exc_info.value.details[0]["type"] == "patch_path"
