"""Schema builders for pattern-matched kinds: postcode, licenseplate, bsn and iban."""

import re
from typing import Any

from schwifty import IBAN
from schwifty.exceptions import SchwiftyException

from formforge.core.types import ComponentDefinition
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import (
    anchor_pattern,
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
from formforge.validation.schema import Check, Refinement, ScalarValidator, Validator
from formforge.validation.types import ValidationContext

POSTCODE_PATTERN = re.compile(r"^[1-9][0-9]{3} ?(?!sa|sd|ss|SA|SD|SS)[a-zA-Z]{2}$")

LICENSE_PLATE_PATTERN = re.compile(r"^[a-zA-Z0-9]{1,3}\-[a-zA-Z0-9]{1,3}\-[a-zA-Z0-9]{1,3}$")

BSN_STRUCTURE_PATTERN = re.compile(r"^[0-9]{9}$")

POSTCODE_INVALID_MESSAGE = MessageDescriptor(
    id="postcode.invalid",
    default_message="Invalid Dutch postcode",
    description="Validation error for postcode.",
)

LICENSE_PLATE_INVALID_MESSAGE = MessageDescriptor(
    id="licenseplate.invalid",
    default_message="Invalid Dutch license plate",
    description="Validation error for license plate.",
)

BSN_STRUCTURE_MESSAGE = MessageDescriptor(
    id="bsn.structure",
    default_message="A BSN must be 9 digits.",
    description="Validation error describing shape of BSN.",
)

BSN_INVALID_MESSAGE = MessageDescriptor(
    id="bsn.invalid",
    default_message="Invalid BSN.",
    description="Validation error for BSN that does not pass the 11-test.",
)

IBAN_INVALID_MESSAGE = MessageDescriptor(
    id="iban.invalid",
    default_message="Invalid IBAN",
    description="Validation error for IBAN that does not pass the mod-97 test.",
)


def is_valid_bsn(value: str) -> bool:
    """The eleven-test: weights 9..2 for the first eight digits, -1 for the last.

    See https://nl.wikipedia.org/wiki/Burgerservicenummer#11-proef
    """
    if not BSN_STRUCTURE_PATTERN.fullmatch(value):
        return False
    weights = (9, 8, 7, 6, 5, 4, 3, 2, -1)
    return sum(weight * int(digit) for weight, digit in zip(weights, value)) % 11 == 0


def bsn_checks(context: ValidationContext) -> list[Check]:
    """Structure and eleven-test checks; the eleven-test only judges 9-digit values."""
    return [
        format_check(
            "INVALID_BSN_STRUCTURE",
            regex_test(BSN_STRUCTURE_PATTERN),
            context.format_message(BSN_STRUCTURE_MESSAGE),
        ),
        format_check(
            "INVALID_BSN",
            lambda value: not BSN_STRUCTURE_PATTERN.fullmatch(value) or is_valid_bsn(value),
            context.format_message(BSN_INVALID_MESSAGE),
        ),
    ]


def build_bsn_validator(
    context: ValidationContext,
    required: bool,
    required_message: str,
    shape: Check,
    refinements: list[Refinement] | None = None,
) -> ScalarValidator:
    return ScalarValidator(
        required=required,
        required_message=required_message,
        shape=shape,
        checks=bsn_checks(context),
        refinements=refinements or [],
    )


def _patterned_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
    base: re.Pattern[str],
    code: str,
    invalid: MessageDescriptor,
) -> dict[str, Validator]:
    checks = [format_check(code, regex_test(base), context.format_message(invalid))]
    # a custom pattern applies on top of the built-in one
    pattern: Any = validate_rules(definition).get("pattern")
    if pattern and pattern != base.pattern:
        checks.append(format_check(
            "PATTERN",
            regex_test(anchor_pattern(pattern)),
            resolve_message(definition, "pattern", context, invalid),
        ))

    item = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        checks=checks,
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): wrap_multiple(definition, context, item)}


def build_postcode_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    return _patterned_schema(
        definition, context, POSTCODE_PATTERN, "INVALID_POSTCODE", POSTCODE_INVALID_MESSAGE
    )


def build_license_plate_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    return _patterned_schema(
        definition,
        context,
        LICENSE_PLATE_PATTERN,
        "INVALID_LICENSE_PLATE",
        LICENSE_PLATE_INVALID_MESSAGE,
    )


def build_bsn_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    validator = build_bsn_validator(
        context,
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        refinements=plugin_refinements(definition, context),
    )
    return {field_key(definition): validator}


POSTCODE_BUNDLE = BehaviorBundle(
    build_schema=build_postcode_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

LICENSE_PLATE_BUNDLE = BehaviorBundle(
    build_schema=build_license_plate_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)

BSN_BUNDLE = BehaviorBundle(
    build_schema=build_bsn_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)


# =============================================================================
# IBAN
# =============================================================================


def is_valid_iban(value: str) -> bool:
    """Country structure, length and mod-97 check digits.

    The value may be in print format: spaces and lower case are accepted.
    """
    try:
        IBAN(value)
    except SchwiftyException:
        return False
    return True


def build_iban_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    item = ScalarValidator(
        required=is_required(definition),
        required_message=required_message(definition, context),
        shape=string_shape(definition, context),
        checks=[format_check(
            "INVALID_IBAN",
            is_valid_iban,
            context.format_message(IBAN_INVALID_MESSAGE),
        )],
    )
    return {field_key(definition): wrap_multiple(definition, context, item)}


IBAN_BUNDLE = BehaviorBundle(
    build_schema=build_iban_schema,
    is_empty=is_empty_text,
    get_initial_values=initial_values(""),
)
