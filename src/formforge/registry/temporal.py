"""Schema builders for date, datetime and time.

Values are only accepted as complete, zero-padded, separator-exact strings;
anything else fails the shape check before a bound is looked at. Bounds are
compared on parsed values, never on strings.
"""

from datetime import date, datetime
from typing import Any

from formforge.core.types import ComponentDefinition
from formforge.i18n.locale import (
    format_date_bound,
    format_datetime_bound,
    parse_date,
    parse_datetime,
    parse_time,
    to_instant,
)
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import (
    bound_check,
    field_key,
    initial_values,
    is_empty_text,
    is_required,
    plugin_refinements,
    validate_rules,
    wrap_multiple,
)
from formforge.registry.types import BehaviorBundle
from formforge.validation.messages import required_message, resolve_message
from formforge.validation.schema import Check, ScalarValidator, Validator
from formforge.validation.types import ConfigurationError, ErrorKind, ValidationContext

INVALID_DATE_MESSAGE = MessageDescriptor(
    id="date.invalid",
    default_message="Invalid input",
    description="Invalid input validation error for date field",
)

DATE_MIN_MESSAGE = MessageDescriptor(
    id="date.min",
    default_message="The date must be {min} or later.",
    description="Validation error for a date before the minimum date.",
)

DATE_MAX_MESSAGE = MessageDescriptor(
    id="date.max",
    default_message="The date must be {max} or earlier.",
    description="Validation error for a date after the maximum date.",
)

INVALID_DATETIME_MESSAGE = MessageDescriptor(
    id="datetime.invalid",
    default_message=(
        "The datetime must consist of a date and a time stamp, separated by a space "
        "(e.g. 10/30/2025 5:34 PM)."
    ),
    description="Invalid input validation error for datetime field",
)

DATETIME_MIN_MESSAGE = MessageDescriptor(
    id="datetime.min",
    default_message="The datetime must be later than or equal to {min}.",
    description="Validation error for datetime less than minimum date.",
)

DATETIME_MAX_MESSAGE = MessageDescriptor(
    id="datetime.max",
    default_message="The datetime must be earlier than or equal to {max}.",
    description="Validation error for datetime greater than maximum date.",
)

TIME_STRUCTURE_MESSAGE = MessageDescriptor(
    id="time.invalid",
    default_message="Hour must be between 0-23 and minute between 0-59",
    description="Validation error describing shape of time format.",
)

TIME_MIN_MESSAGE = MessageDescriptor(
    id="time.min",
    default_message="Time must be after {minTime}",
    description="Validation error describing the value is not after the minimum time.",
)

TIME_MAX_MESSAGE = MessageDescriptor(
    id="time.max",
    default_message="Time must be before {maxTime}",
    description="Validation error describing the value is not before the maximum time.",
)

TIME_PERIOD_MESSAGE = MessageDescriptor(
    id="time.period",
    default_message="Time must be in-between {minTime} and {maxTime}",
    description="Validation error for a time outside the minimum and maximum time.",
)


def _bound_error(definition: ComponentDefinition, name: str, value: Any) -> ConfigurationError:
    return ConfigurationError(
        f"Component '{definition.get('key')}' has an unparseable {name}: {value!r}"
    )


# =============================================================================
# Date
# =============================================================================


def _date_bounds(definition: ComponentDefinition) -> tuple[Any, Any]:
    picker = definition.get("datePicker") or {}
    rules = validate_rules(definition)
    return (
        picker.get("minDate") or rules.get("minDate"),
        picker.get("maxDate") or rules.get("maxDate"),
    )


def _parse_date_bound(definition: ComponentDefinition, name: str, value: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        moment = parse_datetime(value, require_seconds=False)
        if moment is None:
            raise _bound_error(definition, name, value)
        parsed = moment.date()
    return parsed


def build_date_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    min_raw, max_raw = _date_bounds(definition)

    checks: list[Check] = []
    if min_raw:
        min_date = _parse_date_bound(definition, "minDate", min_raw)
        checks.append(bound_check(
            "MIN_DATE",
            lambda value: parse_date(value) >= min_date,
            resolve_message(
                definition, "minDate", context, DATE_MIN_MESSAGE,
                {"min": format_date_bound(min_date, context.locale)},
            ),
        ))
    if max_raw:
        max_date = _parse_date_bound(definition, "maxDate", max_raw)
        checks.append(bound_check(
            "MAX_DATE",
            lambda value: parse_date(value) <= max_date,
            resolve_message(
                definition, "maxDate", context, DATE_MAX_MESSAGE,
                {"max": format_date_bound(max_date, context.locale)},
            ),
        ))

    item = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=Check(
            code="INVALID_DATE",
            kind=ErrorKind.FORMAT,
            test=lambda value: parse_date(value) is not None,
            message=resolve_message(definition, "invalid_date", context, INVALID_DATE_MESSAGE),
        ),
        checks=checks,
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): wrap_multiple(definition, context, item)}


# =============================================================================
# Datetime
# =============================================================================


def build_datetime_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Bounds come from ``datePicker``; they may omit the seconds.

    Date-times without an offset are read in the formatter's timezone.
    """
    picker = definition.get("datePicker") or {}
    timezone = context.intl.timezone

    def instant(value: str) -> datetime:
        return to_instant(parse_datetime(value), timezone)

    def bound(name: str) -> datetime | None:
        raw = picker.get(name)
        if not raw:
            return None
        parsed = parse_datetime(raw, require_seconds=False)
        if parsed is None:
            raise _bound_error(definition, f"datePicker.{name}", raw)
        return to_instant(parsed, timezone)

    checks: list[Check] = []
    min_datetime, max_datetime = bound("minDate"), bound("maxDate")
    if min_datetime is not None:
        checks.append(bound_check(
            "MIN_DATETIME",
            lambda value: instant(value) >= min_datetime,
            resolve_message(
                definition, "minDate", context, DATETIME_MIN_MESSAGE,
                {"min": format_datetime_bound(min_datetime, context.locale, timezone)},
            ),
        ))
    if max_datetime is not None:
        checks.append(bound_check(
            "MAX_DATETIME",
            lambda value: instant(value) <= max_datetime,
            resolve_message(
                definition, "maxDate", context, DATETIME_MAX_MESSAGE,
                {"max": format_datetime_bound(max_datetime, context.locale, timezone)},
            ),
        ))

    validator = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=Check(
            code="INVALID_DATETIME",
            kind=ErrorKind.FORMAT,
            test=lambda value: parse_datetime(value) is not None,
            message=resolve_message(
                definition, "invalid_datetime", context, INVALID_DATETIME_MESSAGE
            ),
        ),
        checks=checks,
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): validator}


# =============================================================================
# Time
# =============================================================================


def _time_window_check(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> Check | None:
    """Build the min/max time check.

    - only one bound: the value must be on the right side of it
    - minTime < maxTime: the value must lie within the window
    - minTime > maxTime: the window spans midnight (e.g. 08:00 - 01:00), so
      only values after maxTime and before minTime are rejected
    """
    rules = validate_rules(definition)
    min_raw, max_raw = rules.get("minTime"), rules.get("maxTime")
    min_time = parse_time(min_raw) if min_raw else None
    max_time = parse_time(max_raw) if max_raw else None
    if min_raw and min_time is None:
        raise _bound_error(definition, "minTime", min_raw)
    if max_raw and max_time is None:
        raise _bound_error(definition, "maxTime", max_raw)

    substitutions = {"minTime": min_raw, "maxTime": max_raw}

    def message(constraint: str, descriptor: MessageDescriptor) -> str:
        return resolve_message(definition, constraint, context, descriptor, substitutions)

    if min_time is not None and max_time is not None:
        if min_time < max_time:
            def in_window(value: str) -> bool:
                return min_time <= parse_time(value) <= max_time
        else:
            def in_window(value: str) -> bool:
                parsed = parse_time(value)
                return not (max_time < parsed < min_time)
        return bound_check("TIME_PERIOD", in_window, message("invalid_time", TIME_PERIOD_MESSAGE))

    if min_time is not None:
        return bound_check(
            "MIN_TIME",
            lambda value: parse_time(value) >= min_time,
            message("minTime", TIME_MIN_MESSAGE),
        )
    if max_time is not None:
        return bound_check(
            "MAX_TIME",
            lambda value: parse_time(value) <= max_time,
            message("maxTime", TIME_MAX_MESSAGE),
        )
    return None


def build_time_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    window = _time_window_check(definition, context)
    item = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=Check(
            code="INVALID_TIME",
            kind=ErrorKind.FORMAT,
            test=lambda value: parse_time(value) is not None,
            message=context.format_message(TIME_STRUCTURE_MESSAGE),
        ),
        checks=[window] if window else [],
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): wrap_multiple(definition, context, item)}


DATE_BUNDLE = BehaviorBundle(
    build_schema=build_date_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

DATETIME_BUNDLE = BehaviorBundle(
    build_schema=build_datetime_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

TIME_BUNDLE = BehaviorBundle(
    build_schema=build_time_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

