"""Domain Types — verifies field enum and identity wrappers."""

from commander.core.domain_types import CommandField, CommandId, PatchOp


def test_command_id_wraps_int():
    assert CommandId(5) == 5


def test_command_field_values_are_json_names():
    assert [f.value for f in CommandField] == ["howTo", "line", "platform"]


def test_patch_op_has_four_ops():
    assert {op.value for op in PatchOp} == {"add", "replace", "remove", "test"}
