"""Structured personal-data kinds: children, partners and addressNL.

Children and partners hold arrays of fixed sub-records, typically prefilled
from a government registry. An addressNL value is a single record whose
sub-fields are only meaningful together.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from formforge.core.types import ComponentDefinition, is_blank
from formforge.i18n.locale import parse_date, parse_datetime
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import (
    anchor_pattern,
    bound_check,
    field_key,
    format_check,
    is_required,
    regex_test,
    string_shape,
)
from formforge.registry.patterned import POSTCODE_PATTERN, build_bsn_validator
from formforge.registry.types import BehaviorBundle
from formforge.validation.messages import (
    REQUIRED_MESSAGE,
    invalid_type_message,
    required_message,
)
from formforge.validation.schema import (
    ArrayValidator,
    Check,
    Path,
    RecordValidator,
    ScalarValidator,
    UniqueItemsRefinement,
    Validator,
    is_absent,
)
from formforge.validation.types import ErrorKind, ValidationContext, Violation

DATE_OF_BIRTH_MIN_DATE_MESSAGE = MessageDescriptor(
    id="personal.dateOfBirth.min",
    default_message="Date of birth must be within the last 120 years.",
    description="Validation error for a date of birth before the minimum date.",
)

DATE_OF_BIRTH_MAX_DATE_MESSAGE = MessageDescriptor(
    id="personal.dateOfBirth.max",
    default_message="Date of birth cannot be in the future.",
    description="Validation error for a date of birth after the maximum date.",
)

DATE_OF_BIRTH_INVALID_MESSAGE = MessageDescriptor(
    id="personal.dateOfBirth.invalid",
    default_message="The format of the date of birth is incorrect.",
    description="Validation error for a date of birth with an invalid format.",
)

DUPLICATE_BSN_MESSAGE = MessageDescriptor(
    id="children.duplicateBsn",
    default_message=(
        "The BSN {bsn} is used for multiple children. Each child must have a unique BSN."
    ),
    description="Validation error for duplicate children.bsn values.",
)

LAST_NAME_REQUIRED_MESSAGE = MessageDescriptor(
    id="partners.lastName.required",
    default_message="You must provide a last name.",
    description="Validation error for required partners.lastName field.",
)

POSTCODE_INVALID_MESSAGE = MessageDescriptor(
    id="addressNL.postcode.invalid",
    default_message="Postcode must be four digits followed by two letters (e.g. 1234 AB).",
    description="Validation error for addressNL.postcode that does not match the postcode regex.",
)

HOUSE_NUMBER_INVALID_MESSAGE = MessageDescriptor(
    id="addressNL.houseNumber.invalid",
    default_message="House number must be a number with up to five digits (e.g. 456).",
    description="Validation error for addressNL.houseNumber field.",
)

HOUSE_LETTER_INVALID_MESSAGE = MessageDescriptor(
    id="addressNL.houseLetter.invalid",
    default_message="House letter must be a single letter.",
    description="Validation error for addressNL.houseLetter field.",
)

HOUSE_NUMBER_ADDITION_INVALID_MESSAGE = MessageDescriptor(
    id="addressNL.houseNumberAddition.invalid",
    default_message="House number addition must be up to four letters and digits.",
    description="Validation error for addressNL.houseNumberAddition field.",
)

STREET_NAME_INVALID_MESSAGE = MessageDescriptor(
    id="addressNL.streetName.required",
    default_message="You must provide a street name.",
    description="Validation error for required addressNL.streetName field.",
)

CITY_INVALID_MESSAGE = MessageDescriptor(
    id="addressNL.city.required",
    default_message="You must provide a city.",
    description="Validation error for required addressNL.city field.",
)

HOUSE_NUMBER_MISSING_MESSAGE = MessageDescriptor(
    id="addressNL.houseNumber.missing",
    default_message="You must provide a house number.",
    description="Validation error when addressNL.postcode is provided but not houseNumber",
)

POSTCODE_MISSING_MESSAGE = MessageDescriptor(
    id="addressNL.postcode.missing",
    default_message="You must provide a postcode.",
    description="Validation error when addressNL.houseNumber is provided but not postcode",
)

HOUSE_NUMBER_PATTERN = r"^\d{1,5}$"
HOUSE_LETTER_PATTERN = r"^[a-zA-Z]$"
HOUSE_NUMBER_ADDITION_PATTERN = r"^([a-zA-Z0-9]){1,4}$"


def _sub_field_required(context: ValidationContext, field: str, label: str) -> str:
    return context.format_message(REQUIRED_MESSAGE, {"field": field, "fieldLabel": label})


def _optional(shape: Check, checks: list[Check] | None = None) -> ScalarValidator:
    return ScalarValidator(required=False, shape=shape, checks=checks or [])


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def _parse_birth_date(value: str) -> date | None:
    parsed = parse_date(value)
    if parsed is None:
        moment = parse_datetime(value)
        parsed = moment.date() if moment else None
    return parsed


def build_date_of_birth_validator(
    context: ValidationContext,
    required_message: str,
    today: date | None = None,
) -> ScalarValidator:
    """A date of birth within the last 120 years, at the latest yesterday."""
    today = today or date.today()
    min_date = _years_before(today, 120)
    max_date = today - timedelta(days=1)

    return ScalarValidator(
        required=True,
        required_message=required_message,
        shape=Check(
            code="INVALID_DATE",
            kind=ErrorKind.FORMAT,
            test=lambda value: isinstance(value, str) and _parse_birth_date(value) is not None,
            message=context.format_message(DATE_OF_BIRTH_INVALID_MESSAGE),
        ),
        checks=[
            bound_check(
                "MIN_DATE",
                lambda value: _parse_birth_date(value) >= min_date,
                context.format_message(DATE_OF_BIRTH_MIN_DATE_MESSAGE),
            ),
            bound_check(
                "MAX_DATE",
                lambda value: _parse_birth_date(value) <= max_date,
                context.format_message(DATE_OF_BIRTH_MAX_DATE_MESSAGE),
            ),
        ],
    )


def _manual_marker(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> ScalarValidator:
    # __addedManually is either true or absent
    return _optional(Check(
        code="INVALID_TYPE",
        kind=ErrorKind.SHAPE,
        test=lambda value: value is True,
        message=invalid_type_message(definition, context),
    ))


def _optional_string(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> ScalarValidator:
    return _optional(string_shape(definition, context))


# =============================================================================
# Children
# =============================================================================


def build_child_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> RecordValidator:
    """Validator for a single child record."""
    return RecordValidator(
        fields={
            "bsn": build_bsn_validator(
                context,
                required=True,
                required_message=_sub_field_required(context, "children.bsn", "BSN"),
                shape=string_shape(definition, context),
            ),
            "firstNames": ScalarValidator(
                required=True,
                required_message=_sub_field_required(
                    context, "children.firstNames", "First name"
                ),
                shape=string_shape(definition, context),
            ),
            "dateOfBirth": build_date_of_birth_validator(
                context,
                _sub_field_required(context, "children.dateOfBirth", "Date of birth"),
            ),
            "selected": ScalarValidator(
                shape=Check(
                    code="INVALID_TYPE",
                    kind=ErrorKind.SHAPE,
                    test=lambda value: isinstance(value, bool),
                    message=invalid_type_message(definition, context),
                ),
                is_empty=is_absent,
            ),
            "__addedManually": _manual_marker(definition, context),
            "__id": _optional_string(definition, context),
        },
        shape_message=invalid_type_message(definition, context),
    )


def build_children_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Array of child records; no BSN may occur twice."""
    validator = ArrayValidator(
        item=build_child_schema(definition, context),
        shape_message=invalid_type_message(definition, context),
        required=is_required(definition),
        required_message=required_message(definition, context),
        refinements=[UniqueItemsRefinement(
            key="bsn",
            message=lambda bsn: context.format_message(DUPLICATE_BSN_MESSAGE, {"bsn": bsn}),
            code="DUPLICATE_BSN",
        )],
    )
    return {field_key(definition): validator}


# =============================================================================
# Partners
# =============================================================================


def build_partners_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Array of partner records.

    Duplicate BSNs across partners cannot occur for registry-fetched data and
    are not checked.
    """
    partner = RecordValidator(
        fields={
            "bsn": build_bsn_validator(
                context,
                required=True,
                required_message=_sub_field_required(context, "partners.bsn", "BSN"),
                shape=string_shape(definition, context),
            ),
            "initials": _optional_string(definition, context),
            "affixes": _optional_string(definition, context),
            "lastName": ScalarValidator(
                required=True,
                required_message=context.format_message(LAST_NAME_REQUIRED_MESSAGE),
                shape=string_shape(definition, context),
            ),
            "dateOfBirth": build_date_of_birth_validator(
                context,
                _sub_field_required(context, "partners.dateOfBirth", "Date of birth"),
            ),
            "__addedManually": _manual_marker(definition, context),
        },
        shape_message=invalid_type_message(definition, context),
    )
    validator = ArrayValidator(
        item=partner,
        shape_message=invalid_type_message(definition, context),
        required=is_required(definition),
        required_message=required_message(definition, context),
    )
    return {field_key(definition): validator}


def is_empty_collection(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    return not value


def empty_collection_initial_values(
    definition: ComponentDefinition,
    registry: Any,
) -> dict[str, Any]:
    default = definition.get("defaultValue")
    return {field_key(definition): default if isinstance(default, list) else []}


# =============================================================================
# AddressNL
# =============================================================================

ADDRESS_FIELDS = (
    "postcode",
    "houseNumber",
    "houseLetter",
    "houseNumberAddition",
    "streetName",
    "city",
)


@dataclass(frozen=True)
class PartialAddressRefinement:
    """For an optional address, postcode and house number go together.

    With address derivation enabled, a started address also needs street
    name and city.
    """

    derive_address: bool
    house_number_message: str
    postcode_message: str
    street_name_message: str
    city_message: str

    async def refine(self, value: Any, path: Path) -> list[Violation]:
        if not (value.get("postcode") or value.get("houseNumber")):
            return []

        missing: list[tuple[str, str]] = []
        if not value.get("houseNumber"):
            missing.append(("houseNumber", self.house_number_message))
        if not value.get("postcode"):
            missing.append(("postcode", self.postcode_message))
        if self.derive_address and not value.get("streetName"):
            missing.append(("streetName", self.street_name_message))
        if self.derive_address and not value.get("city"):
            missing.append(("city", self.city_message))

        return [
            Violation(
                message=message,
                code="INCOMPLETE_ADDRESS",
                kind=ErrorKind.REQUIRED,
                path=path + (key,),
            )
            for key, message in missing
        ]


def _custom_pattern(
    definition: ComponentDefinition,
    sub_field: str,
) -> tuple[str | None, str | None]:
    sub = ((definition.get("openForms") or {}).get("components") or {}).get(sub_field) or {}
    pattern = (sub.get("validate") or {}).get("pattern")
    message = (sub.get("errors") or {}).get("pattern")
    return pattern, message


def build_address_nl_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Validator for a Dutch address record.

    A required address needs postcode and house number, the minimal atoms to
    resolve an address. With ``deriveAddress`` street name and city are
    required too. House letter and addition are always optional.
    """
    required = is_required(definition)
    derive_address = bool(definition.get("deriveAddress"))
    required_text = required_message(definition, context)
    string = string_shape(definition, context)

    postcode_invalid = context.format_message(POSTCODE_INVALID_MESSAGE)
    # a custom pattern applies on top of the default one, which is always less strict
    postcode_checks = [format_check(
        "INVALID_POSTCODE",
        regex_test(re.compile(POSTCODE_PATTERN.pattern, re.IGNORECASE)),
        postcode_invalid,
    )]
    postcode_pattern, postcode_message = _custom_pattern(definition, "postcode")
    if postcode_pattern:
        postcode_checks.append(format_check(
            "PATTERN",
            regex_test(re.compile(postcode_pattern, re.IGNORECASE)),
            postcode_message or postcode_invalid,
        ))

    street_name_text = context.format_message(STREET_NAME_INVALID_MESSAGE)
    city_text = context.format_message(CITY_INVALID_MESSAGE)
    city_checks: list[Check] = []
    city_pattern, city_message = _custom_pattern(definition, "city")
    if city_pattern:
        city_checks.append(format_check(
            "PATTERN", regex_test(anchor_pattern(city_pattern)), city_message or city_text
        ))

    record = RecordValidator(
        fields={
            "postcode": ScalarValidator(
                required=required,
                required_message=required_text,
                shape=string,
                checks=postcode_checks,
            ),
            "houseNumber": ScalarValidator(
                required=required,
                required_message=required_text,
                shape=string,
                checks=[format_check(
                    "INVALID_HOUSE_NUMBER",
                    regex_test(HOUSE_NUMBER_PATTERN),
                    context.format_message(HOUSE_NUMBER_INVALID_MESSAGE),
                )],
            ),
            "houseLetter": _optional(string, [format_check(
                "INVALID_HOUSE_LETTER",
                regex_test(HOUSE_LETTER_PATTERN),
                context.format_message(HOUSE_LETTER_INVALID_MESSAGE),
            )]),
            "houseNumberAddition": _optional(string, [format_check(
                "INVALID_HOUSE_NUMBER_ADDITION",
                regex_test(HOUSE_NUMBER_ADDITION_PATTERN),
                context.format_message(HOUSE_NUMBER_ADDITION_INVALID_MESSAGE),
            )]),
            "streetName": ScalarValidator(
                required=required and derive_address,
                required_message=street_name_text,
                shape=string,
            ),
            "city": ScalarValidator(
                required=required and derive_address,
                required_message=city_text,
                shape=string,
                checks=city_checks,
            ),
        },
        shape_message=invalid_type_message(definition, context),
        optional=not required,
    )
    if not required:
        record.refinements.append(PartialAddressRefinement(
            derive_address=derive_address,
            house_number_message=context.format_message(HOUSE_NUMBER_MISSING_MESSAGE),
            postcode_message=context.format_message(POSTCODE_MISSING_MESSAGE),
            street_name_message=street_name_text,
            city_message=city_text,
        ))
    return {field_key(definition): record}


def is_empty_address(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    if not isinstance(value, dict):
        return True
    return all(is_blank(value.get(name)) for name in ADDRESS_FIELDS)


def address_initial_values(definition: ComponentDefinition, registry: Any) -> dict[str, Any]:
    values = {name: "" for name in ADDRESS_FIELDS}
    values.update(definition.get("defaultValue") or {})
    return {field_key(definition): values}


CHILDREN_BUNDLE = BehaviorBundle(
    build_schema=build_children_schema,
    is_empty=is_empty_collection,
    get_initial_values=empty_collection_initial_values,
)

PARTNERS_BUNDLE = BehaviorBundle(
    build_schema=build_partners_schema,
    is_empty=is_empty_collection,
    get_initial_values=empty_collection_initial_values,
)

ADDRESS_NL_BUNDLE = BehaviorBundle(
    build_schema=build_address_nl_schema,
    is_empty=is_empty_address,
    get_initial_values=address_initial_values,
)
