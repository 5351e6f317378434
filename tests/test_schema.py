"""Tests for the validator combinators.

Tests cover:
- ScalarValidator evaluation order
- ArrayValidator cardinality and per-item paths
- RecordValidator strict/optional records
- NeverValidator
- Refinements (plugins, unique items)
"""

import pytest
from unittest.mock import AsyncMock

from formforge.core.types import MISSING
from formforge.validation.schema import (
    ArrayValidator,
    Check,
    NeverValidator,
    PluginRefinement,
    RecordValidator,
    ScalarValidator,
    UniqueItemsRefinement,
)
from formforge.validation.types import ConfigurationError, ErrorKind


def is_str(value):
    return isinstance(value, str)


STRING_SHAPE = Check(code="INVALID_TYPE", kind=ErrorKind.SHAPE, test=is_str, message="Not text")
SHORT = Check(
    code="MAX_LENGTH", kind=ErrorKind.BOUND, test=lambda v: len(v) <= 3, message="Too long"
)
DIGITS = Check(
    code="PATTERN", kind=ErrorKind.FORMAT, test=lambda v: v.isdigit(), message="Digits only"
)


# =============================================================================
# ScalarValidator Tests
# =============================================================================


class TestScalarValidator:
    """Tests for the scalar pipeline."""

    @pytest.mark.asyncio
    async def test_empty_value_passes_when_not_required(self):
        validator = ScalarValidator(shape=STRING_SHAPE, checks=[SHORT])

        assert await validator.validate(MISSING) == []
        assert await validator.validate(None) == []
        assert await validator.validate("  ") == []

    @pytest.mark.asyncio
    async def test_empty_value_fails_when_required(self):
        validator = ScalarValidator(required=True, required_message="Required", shape=STRING_SHAPE)

        errors = await validator.validate(MISSING, ("name",))

        assert len(errors) == 1
        assert errors[0].code == "REQUIRED"
        assert errors[0].kind == ErrorKind.REQUIRED
        assert errors[0].path == ("name",)
        assert errors[0].message == "Required"

    @pytest.mark.asyncio
    async def test_shape_failure_skips_other_checks(self):
        validator = ScalarValidator(shape=STRING_SHAPE, checks=[SHORT, DIGITS])

        errors = await validator.validate(12345)

        assert [e.code for e in errors] == ["INVALID_TYPE"]
        assert errors[0].kind == ErrorKind.SHAPE

    @pytest.mark.asyncio
    async def test_all_checks_reported(self):
        validator = ScalarValidator(shape=STRING_SHAPE, checks=[DIGITS, SHORT])

        errors = await validator.validate("abcdef")

        assert [e.code for e in errors] == ["PATTERN", "MAX_LENGTH"]

    @pytest.mark.asyncio
    async def test_normalize_runs_first(self):
        validator = ScalarValidator(
            required=True,
            required_message="Required",
            shape=STRING_SHAPE,
            normalize=lambda v: MISSING if v == "" else v,
            is_empty=lambda v: v is MISSING,
        )

        errors = await validator.validate("")

        assert [e.code for e in errors] == ["REQUIRED"]

    @pytest.mark.asyncio
    async def test_refinement_runs_after_checks_pass(self):
        refinement = AsyncMock()
        refinement.refine = AsyncMock(return_value=[])
        validator = ScalarValidator(shape=STRING_SHAPE, checks=[SHORT], refinements=[refinement])

        assert await validator.validate("abc", ("f",)) == []
        refinement.refine.assert_awaited_once_with("abc", ("f",))

    @pytest.mark.asyncio
    async def test_refinement_skipped_when_checks_fail(self):
        refinement = AsyncMock()
        refinement.refine = AsyncMock(return_value=[])
        validator = ScalarValidator(shape=STRING_SHAPE, checks=[SHORT], refinements=[refinement])

        errors = await validator.validate("abcdef")

        assert [e.code for e in errors] == ["MAX_LENGTH"]
        refinement.refine.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repeated_calls_are_independent(self):
        validator = ScalarValidator(shape=STRING_SHAPE, checks=[SHORT])

        first = await validator.validate("abcdef")
        second = await validator.validate("abcdef")

        assert first == second


# =============================================================================
# ArrayValidator Tests
# =============================================================================


class TestArrayValidator:
    """Tests for array-of(item) validation."""

    def make_validator(self, **kwargs):
        return ArrayValidator(
            item=ScalarValidator(shape=STRING_SHAPE, checks=[DIGITS]),
            shape_message="Not a list",
            required_message="At least one",
            max_items_message="Too many",
            **kwargs,
        )

    @pytest.mark.asyncio
    async def test_absent_is_empty_array(self):
        validator = self.make_validator()

        assert await validator.validate(MISSING) == []
        assert await validator.validate(None) == []

    @pytest.mark.asyncio
    async def test_required_means_at_least_one_item(self):
        validator = self.make_validator(required=True)

        errors = await validator.validate([], ("f",))

        assert len(errors) == 1
        assert errors[0].code == "MIN_ITEMS"
        assert errors[0].kind == ErrorKind.REQUIRED
        assert errors[0].message == "At least one"

    @pytest.mark.asyncio
    async def test_non_list_is_shape_error(self):
        errors = await self.make_validator().validate("123", ("f",))

        assert [e.code for e in errors] == ["INVALID_TYPE"]
        assert errors[0].message == "Not a list"

    @pytest.mark.asyncio
    async def test_item_errors_carry_index(self):
        errors = await self.make_validator().validate(["1", "x", "2", "y"], ("f",))

        assert [e.path for e in errors] == [("f", 1), ("f", 3)]
        assert all(e.code == "PATTERN" for e in errors)

    @pytest.mark.asyncio
    async def test_max_items(self):
        errors = await self.make_validator(max_items=2).validate(["1", "2", "3"])

        assert [e.code for e in errors] == ["MAX_ITEMS"]
        assert errors[0].kind == ErrorKind.BOUND


# =============================================================================
# RecordValidator Tests
# =============================================================================


class TestRecordValidator:
    """Tests for records with named children."""

    @pytest.mark.asyncio
    async def test_missing_children_validated_as_missing(self):
        record = RecordValidator(fields={
            "a": ScalarValidator(required=True, required_message="A", shape=STRING_SHAPE),
            "b": ScalarValidator(shape=STRING_SHAPE),
        })

        errors = await record.validate({})

        assert [(e.path, e.code) for e in errors] == [(("a",), "REQUIRED")]

    @pytest.mark.asyncio
    async def test_absent_record_treated_as_empty(self):
        record = RecordValidator(fields={
            "a": ScalarValidator(required=True, required_message="A", shape=STRING_SHAPE),
        })

        errors = await record.validate(None, ("outer",))

        assert [e.path for e in errors] == [("outer", "a")]

    @pytest.mark.asyncio
    async def test_optional_record_passes_when_absent(self):
        record = RecordValidator(
            fields={"a": ScalarValidator(required=True, required_message="A")},
            optional=True,
        )

        assert await record.validate(None) == []
        assert await record.validate(MISSING) == []

    @pytest.mark.asyncio
    async def test_non_object_is_shape_error(self):
        errors = await RecordValidator(shape_message="Not an object").validate([1, 2])

        assert [e.code for e in errors] == ["INVALID_TYPE"]
        assert errors[0].message == "Not an object"

    @pytest.mark.asyncio
    async def test_strict_rejects_unknown_keys(self):
        record = RecordValidator(fields={"a": ScalarValidator()}, strict=True)

        errors = await record.validate({"a": "1", "z": True, "y": False}, ("r",))

        assert [e.path for e in errors] == [("r", "y"), ("r", "z")]
        assert all(e.code == "UNRECOGNIZED_KEY" for e in errors)

    @pytest.mark.asyncio
    async def test_lenient_ignores_unknown_keys(self):
        record = RecordValidator(fields={"a": ScalarValidator()})

        assert await record.validate({"a": "1", "z": True}) == []


# =============================================================================
# NeverValidator Tests
# =============================================================================


class TestNeverValidator:
    """Tests for enumerations without options."""

    @pytest.mark.asyncio
    async def test_blank_value_is_rejected(self):
        validator = NeverValidator(field_key="choice", message="No options")

        errors = await validator.validate("", ("choice",))

        assert [e.code for e in errors] == ["NO_OPTIONS"]
        assert errors[0].message == "No options"

    @pytest.mark.asyncio
    async def test_concrete_value_is_configuration_error(self):
        validator = NeverValidator(field_key="choice", message="No options")

        with pytest.raises(ConfigurationError, match="choice"):
            await validator.validate("option1")


# =============================================================================
# Refinement Tests
# =============================================================================


class TestPluginRefinement:
    """Tests for the remote plugin refinement."""

    @pytest.mark.asyncio
    async def test_message_becomes_remote_violation(self):
        validate_remote = AsyncMock(return_value="Rejected by registry")
        refinement = PluginRefinement(plugins=("kvk",), validate_remote=validate_remote)

        errors = await refinement.refine("12345678", ("kvk",))

        validate_remote.assert_awaited_once_with(["kvk"], "12345678")
        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.REMOTE
        assert errors[0].code == "PLUGIN"
        assert errors[0].message == "Rejected by registry"

    @pytest.mark.asyncio
    async def test_no_message_passes(self):
        validate_remote = AsyncMock(return_value=None)
        refinement = PluginRefinement(plugins=("kvk",), validate_remote=validate_remote)

        assert await refinement.refine("12345678", ()) == []


class TestUniqueItemsRefinement:
    """Tests for the cross-item uniqueness refinement."""

    @pytest.mark.asyncio
    async def test_later_duplicates_flagged_at_their_index(self):
        refinement = UniqueItemsRefinement(key="id", message=lambda v: f"{v} twice")
        items = [{"id": "a"}, {"id": "b"}, {"id": "a"}, {"id": "a"}]

        errors = await refinement.refine(items, ("list",))

        assert [e.path for e in errors] == [("list", 2), ("list", 3)]
        assert all(e.kind == ErrorKind.CROSS_ITEM for e in errors)
        assert errors[0].message == "a twice"

    @pytest.mark.asyncio
    async def test_blank_identifiers_not_compared(self):
        refinement = UniqueItemsRefinement(key="id", message=lambda v: "dup")
        items = [{"id": ""}, {"id": ""}, {}, {"id": None}, {"id": None}]

        assert await refinement.refine(items, ()) == []

    @pytest.mark.asyncio
    async def test_identifiers_of_different_types_are_distinct(self):
        refinement = UniqueItemsRefinement(key="id", message=lambda v: "dup")
        items = [{"id": 1}, {"id": True}, {"id": 1.0}, {"id": "1"}]

        assert await refinement.refine(items, ()) == []

    @pytest.mark.asyncio
    async def test_false_and_zero_are_distinct(self):
        refinement = UniqueItemsRefinement(key="id", message=lambda v: "dup")

        assert await refinement.refine([{"id": 0}, {"id": False}], ()) == []

    @pytest.mark.asyncio
    async def test_same_type_still_duplicates(self):
        refinement = UniqueItemsRefinement(key="id", message=lambda v: "dup")
        items = [{"id": True}, {"id": 2.5}, {"id": True}, {"id": 2.5}]

        errors = await refinement.refine(items, ())

        assert [e.path for e in errors] == [(2,), (3,)]

    @pytest.mark.asyncio
    async def test_reported_once_at_array_path(self):
        refinement = UniqueItemsRefinement(
            key="type", message=lambda v: f"{v} twice", per_item=False
        )
        items = [{"type": "email"}, {"type": "email"}, {"type": "email"}, {"type": "phone"}]

        errors = await refinement.refine(items, ("profile",))

        assert len(errors) == 1
        assert errors[0].path == ("profile",)
        assert errors[0].message == "email twice"
