"""Schema builders for text kinds: textfield, textarea, email, cosign, phoneNumber, signature."""

import re
from typing import Any

from formforge.core.types import MISSING, ComponentDefinition
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import (
    anchor_pattern,
    bound_check,
    field_key,
    format_check,
    initial_values,
    is_empty_text,
    is_required,
    plugin_refinements,
    regex_test,
    string_shape,
    validate_rules,
    wrap_multiple,
)
from formforge.registry.types import BehaviorBundle
from formforge.validation.messages import required_message, resolve_message
from formforge.validation.schema import Check, ScalarValidator, Validator
from formforge.validation.types import ValidationContext

MAX_LENGTH_MESSAGE = MessageDescriptor(
    id="text.maxLength",
    default_message="There are too many characters provided.",
    description="Validation error for text that exceeds the max length.",
)

PATTERN_MESSAGE = MessageDescriptor(
    id="text.pattern",
    default_message="The submitted value does not match the pattern: {pattern}.",
    description="Validation error for text that does not match the pattern.",
)

INVALID_EMAIL_MESSAGE = MessageDescriptor(
    id="email.invalid",
    default_message="Invalid email address.",
    description="Validation error for invalid email.",
)

INVALID_PHONE_NUMBER_MESSAGE = MessageDescriptor(
    id="phoneNumber.invalid",
    default_message=(
        "Invalid phone number - a phone number may only contain digits, "
        "the + or - sign or spaces."
    ),
    description="Validation error for invalid phone number.",
)

INVALID_SIGNATURE_MESSAGE = MessageDescriptor(
    id="signature.invalid",
    default_message="The signature value must be a base64-encoded png.",
    description="Validation error for signature",
)

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)

# Base phone number shape; a narrower pattern can be set on the definition
PHONE_NUMBER_PATTERN = re.compile(r"^[+0-9][- 0-9]+$")

SIGNATURE_PREFIX = "data:image/png;base64,"


def _pattern_check(
    definition: ComponentDefinition,
    context: ValidationContext,
    default: MessageDescriptor,
) -> Check | None:
    pattern = validate_rules(definition).get("pattern")
    if not pattern:
        return None
    return format_check(
        "PATTERN",
        regex_test(anchor_pattern(pattern)),
        resolve_message(definition, "pattern", context, default, {"pattern": pattern}),
    )


def build_text_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Schema for textfield and textarea."""
    max_length = validate_rules(definition).get("maxLength")

    checks: list[Check] = []
    pattern_check = _pattern_check(definition, context, PATTERN_MESSAGE)
    if pattern_check:
        checks.append(pattern_check)
    if max_length is not None:
        checks.append(bound_check(
            "MAX_LENGTH",
            lambda value: len(value) <= max_length,
            resolve_message(
                definition,
                "maxLength",
                context,
                MAX_LENGTH_MESSAGE,
                {"field": definition.get("label", ""), "maxLength": max_length},
            ),
        ))

    item = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        checks=checks,
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): wrap_multiple(definition, context, item)}


def _empty_string_as_missing(value: Any) -> Any:
    return MISSING if value == "" else value


def build_email_validator(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> ScalarValidator:
    return ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        checks=[format_check(
            "INVALID_EMAIL",
            regex_test(EMAIL_PATTERN),
            context.format_message(INVALID_EMAIL_MESSAGE),
        )],
        refinements=plugin_refinements(definition, context),
        normalize=_empty_string_as_missing,
    )


def build_email_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    item = build_email_validator(definition, context)
    return {field_key(definition): wrap_multiple(definition, context, item)}


def build_cosign_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """The co-signer's email address. Never repeated, even with ``multiple`` set."""
    return {field_key(definition): build_email_validator(definition, context)}


def build_phone_number_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    invalid = context.format_message(INVALID_PHONE_NUMBER_MESSAGE)
    checks = [format_check("INVALID_PHONE_NUMBER", regex_test(PHONE_NUMBER_PATTERN), invalid)]
    pattern_check = _pattern_check(definition, context, INVALID_PHONE_NUMBER_MESSAGE)
    if pattern_check:
        checks.append(pattern_check)

    item = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        checks=checks,
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): wrap_multiple(definition, context, item)}


def build_signature_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    validator = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        checks=[format_check(
            "INVALID_SIGNATURE",
            lambda value: value.startswith(SIGNATURE_PREFIX),
            context.format_message(INVALID_SIGNATURE_MESSAGE),
        )],
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): validator}


TEXT_BUNDLE = BehaviorBundle(
    build_schema=build_text_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

EMAIL_BUNDLE = BehaviorBundle(
    build_schema=build_email_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

COSIGN_BUNDLE = BehaviorBundle(
    build_schema=build_cosign_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

PHONE_NUMBER_BUNDLE = BehaviorBundle(
    build_schema=build_phone_number_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

SIGNATURE_BUNDLE = BehaviorBundle(
    build_schema=build_signature_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)
