"""Schema builders for choice kinds: select, radio, selectboxes and checkbox.

Enumerations are validated against the live option list of the definition.
"""

from dataclasses import dataclass, field
from typing import Any

from formforge.core.types import MISSING, ComponentDefinition
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import (
    field_key,
    initial_values,
    is_empty_text,
    is_required,
    plugin_refinements,
    validate_rules,
    wrap_multiple,
)
from formforge.registry.types import BehaviorBundle
from formforge.validation.messages import (
    INVALID_OPTION_MESSAGE,
    NO_OPTIONS_MESSAGE,
    invalid_type_message,
    required_message,
    resolve_message,
)
from formforge.validation.schema import (
    Check,
    NeverValidator,
    Path,
    RecordValidator,
    Refinement,
    ScalarValidator,
    Validator,
    is_absent,
    run_refinements,
)
from formforge.validation.types import (
    ConfigurationError,
    ErrorKind,
    ValidationContext,
    Violation,
)

MIN_COUNT_MESSAGE = MessageDescriptor(
    id="selectboxes.minSelectedCount",
    default_message=(
        "You must select at least {minSelectedCount, plural, "
        "one {{minSelectedCount, number} item} "
        "other {{minSelectedCount, number} items}}."
    ),
    description="Selectboxes minimum selected count error message",
)

MAX_COUNT_MESSAGE = MessageDescriptor(
    id="selectboxes.maxSelectedCount",
    default_message=(
        "You can only select up to {maxSelectedCount, plural, "
        "one {{maxSelectedCount, number} item} "
        "other {{maxSelectedCount, number} items}}."
    ),
    description="Selectboxes maximum selected count error message",
)


def option_values(definition: ComponentDefinition, *path: str) -> list[Any]:
    """The ``value`` of every option at ``path`` in the definition.

    Raises:
        ConfigurationError: If the definition has no option list there
    """
    node: Any = definition
    for part in path:
        node = node.get(part) if isinstance(node, dict) else None
    if not isinstance(node, list):
        raise ConfigurationError(
            f"Component '{definition.get('key')}' of type '{definition.get('type')}' "
            f"has no option list at '{'.'.join(path)}'"
        )
    return [option.get("value") for option in node if isinstance(option, dict)]


def _enum_validator(
    definition: ComponentDefinition,
    context: ValidationContext,
    members: list[Any],
) -> Validator:
    if not members:
        return NeverValidator(
            field_key=field_key(definition),
            message=context.format_message(NO_OPTIONS_MESSAGE),
        )
    allowed = frozenset(members)
    return ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=Check(
            code="INVALID_OPTION",
            kind=ErrorKind.SHAPE,
            test=lambda value: isinstance(value, str) and value in allowed,
            message=context.format_message(INVALID_OPTION_MESSAGE),
        ),
        refinements=plugin_refinements(definition, context),
    )


def build_select_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    members = option_values(definition, "data", "values")
    item = _enum_validator(definition, context, members)
    if not members:
        return {field_key(definition): item}
    return {field_key(definition): wrap_multiple(definition, context, item)}


def build_radio_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    members = option_values(definition, "values")
    return {field_key(definition): _enum_validator(definition, context, members)}


# =============================================================================
# Selectboxes
# =============================================================================


@dataclass
class SelectboxesValidator:
    """Validates a record of option value -> checked flag.

    Every option must be present as a boolean and no other keys are allowed.
    An unchecked, non-required field passes regardless of the counts;
    ``min_count`` takes priority over the plain required check.
    """

    record: RecordValidator
    required: bool
    required_message: str
    min_count: int | None = None
    min_message: str = ""
    max_count: int | None = None
    max_message: str = ""
    refinements: list[Refinement] = field(default_factory=list)

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        if is_absent(value):
            if not self.required:
                return []
            return [self._violation(self.required_message, "REQUIRED", ErrorKind.REQUIRED, path)]

        violations = await self.record.validate(value, path)
        if violations:
            return violations

        num_checked = sum(1 for checked in value.values() if checked)
        if not self.required and num_checked == 0:
            return []

        if self.min_count is not None:
            if num_checked < self.min_count:
                violations.append(
                    self._violation(self.min_message, "MIN_SELECTED", ErrorKind.BOUND, path)
                )
        elif self.required and num_checked < 1:
            violations.append(
                self._violation(self.required_message, "REQUIRED", ErrorKind.REQUIRED, path)
            )

        if self.max_count is not None and num_checked > self.max_count:
            violations.append(
                self._violation(self.max_message, "MAX_SELECTED", ErrorKind.BOUND, path)
            )

        if violations:
            return violations
        return await run_refinements(self.refinements, value, path)

    @staticmethod
    def _violation(message: str, code: str, kind: ErrorKind, path: Path) -> Violation:
        return Violation(message=message, code=code, kind=kind, path=path)


def build_selectboxes_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    rules = validate_rules(definition)
    min_count = rules.get("minSelectedCount")
    max_count = rules.get("maxSelectedCount")
    invalid_type = invalid_type_message(definition, context)

    checkbox = ScalarValidator(
        required=True,
        required_message=invalid_type,
        shape=Check(
            code="INVALID_TYPE",
            kind=ErrorKind.SHAPE,
            test=lambda value: isinstance(value, bool),
            message=invalid_type,
        ),
        is_empty=is_absent,
    )
    record = RecordValidator(
        fields={str(option): checkbox for option in option_values(definition, "values")},
        shape_message=invalid_type,
        strict=True,
    )

    validator = SelectboxesValidator(
        record=record,
        required=is_required(definition),
        required_message=required_message(definition, context),
        min_count=min_count,
        min_message=resolve_message(
            definition, "minSelectedCount", context, MIN_COUNT_MESSAGE,
            {"minSelectedCount": min_count},
        ),
        max_count=max_count,
        max_message=resolve_message(
            definition, "maxSelectedCount", context, MAX_COUNT_MESSAGE,
            {"maxSelectedCount": max_count},
        ),
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): validator}


def is_empty_selectboxes(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    if not isinstance(value, dict):
        return True
    return not any(value.values())


def selectboxes_initial_values(definition: ComponentDefinition, registry: Any) -> dict[str, Any]:
    """Every option explicitly unchecked, overlaid with ``defaultValue``."""
    values = {str(option): False for option in option_values(definition, "values")}
    values.update(definition.get("defaultValue") or {})
    return {field_key(definition): values}


# =============================================================================
# Checkbox
# =============================================================================


def _is_unchecked(value: Any) -> bool:
    return value is MISSING or value is None or value is False


def build_checkbox_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """A required checkbox must be checked."""
    validator = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=Check(
            code="INVALID_TYPE",
            kind=ErrorKind.SHAPE,
            test=lambda value: isinstance(value, bool),
            message=invalid_type_message(definition, context),
        ),
        refinements=plugin_refinements(definition, context),
        is_empty=_is_unchecked,
    )
    return {field_key(definition): validator}


def is_empty_checkbox(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    return _is_unchecked(value)


SELECT_BUNDLE = BehaviorBundle(
    build_schema=build_select_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

RADIO_BUNDLE = BehaviorBundle(
    build_schema=build_radio_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

SELECTBOXES_BUNDLE = BehaviorBundle(
    build_schema=build_selectboxes_schema,
    is_empty=is_empty_selectboxes,
    get_initial_values=selectboxes_initial_values,
)

CHECKBOX_BUNDLE = BehaviorBundle(
    build_schema=build_checkbox_schema,
    is_empty=is_empty_checkbox,
    get_initial_values=initial_values(False),
)
