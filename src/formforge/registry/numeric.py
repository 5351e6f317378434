"""Schema builders for numeric kinds: number and currency.

``None`` is the canonical empty value of a numeric field. A required field
coerces ``None`` to a missing value first, so the required check fires for
it instead of the shape check.
"""

import math
from typing import Any, Callable

from formforge.core.types import MISSING, ComponentDefinition, is_number
from formforge.i18n.locale import format_currency, format_number
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import (
    bound_check,
    field_key,
    initial_values,
    is_empty_value,
    is_required,
    plugin_refinements,
    validate_rules,
)
from formforge.registry.types import BehaviorBundle
from formforge.validation.messages import (
    invalid_type_message,
    required_message,
    resolve_message,
)
from formforge.validation.schema import Check, ScalarValidator, Validator, is_absent
from formforge.validation.types import ErrorKind, ValidationContext

GREATER_THAN_MAX_MESSAGE = MessageDescriptor(
    id="number.max",
    default_message="The value must be {max} or less.",
    description="Validation error for number greater than maximum value.",
)

LESS_THAN_MIN_MESSAGE = MessageDescriptor(
    id="number.min",
    default_message="The value must be {min} or greater.",
    description="Validation error for number less than minimum value.",
)


def _null_as_missing(value: Any) -> Any:
    return MISSING if value is None else value


def _is_finite_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def _build_numeric_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
    format_bound: Callable[[float], str],
) -> dict[str, Validator]:
    rules = validate_rules(definition)
    required = is_required(definition)
    minimum, maximum = rules.get("min"), rules.get("max")

    checks: list[Check] = []
    if maximum is not None:
        checks.append(bound_check(
            "MAX_VALUE",
            lambda value: value <= maximum,
            resolve_message(
                definition, "max", context, GREATER_THAN_MAX_MESSAGE,
                {"max": format_bound(maximum)},
            ),
        ))
    if minimum is not None:
        checks.append(bound_check(
            "MIN_VALUE",
            lambda value: value >= minimum,
            resolve_message(
                definition, "min", context, LESS_THAN_MIN_MESSAGE,
                {"min": format_bound(minimum)},
            ),
        ))

    validator = ScalarValidator(
        required=required,
        required_message=required_message(definition, context),
        shape=Check(
            code="INVALID_NUMBER",
            kind=ErrorKind.SHAPE,
            test=_is_finite_number,
            message=invalid_type_message(definition, context),
        ),
        checks=checks,
        refinements=plugin_refinements(definition, context),
        is_empty=is_absent,
        normalize=_null_as_missing if required else None,
    )
    return {field_key(definition): validator}


def build_number_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    return _build_numeric_schema(
        definition,
        context,
        lambda bound: format_number(bound, context.locale),
    )


def build_currency_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Bounds are rendered in the field's currency, e.g. ``€ 10,00`` for nl."""
    currency = definition.get("currency") or "EUR"
    return _build_numeric_schema(
        definition,
        context,
        lambda bound: format_currency(bound, currency, context.locale),
    )


NUMBER_BUNDLE = BehaviorBundle(
    build_schema=build_number_schema,
    is_empty=is_empty_value,
    get_initial_values=initial_values(None),
)

CURRENCY_BUNDLE = BehaviorBundle(
    build_schema=build_currency_schema,
    is_empty=is_empty_value,
    get_initial_values=initial_values(None),
)
