"""The customerProfile kind: digital addresses a customer can be reached at.

A value is an array of ``{"type", "address", "preferenceUpdate"}`` records.
Each record is validated against the rules of its own address type, and a
type may occur at most once.
"""

from dataclasses import dataclass
from typing import Any

from formforge.core.types import MISSING, ComponentDefinition
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import field_key, format_check, is_required, regex_test, string_shape
from formforge.registry.text import (
    EMAIL_PATTERN,
    INVALID_EMAIL_MESSAGE,
    INVALID_PHONE_NUMBER_MESSAGE,
    PHONE_NUMBER_PATTERN,
)
from formforge.registry.types import BehaviorBundle
from formforge.validation.messages import (
    INVALID_OPTION_MESSAGE,
    REQUIRED_MESSAGE,
    invalid_type_message,
)
from formforge.validation.schema import (
    ArrayValidator,
    Check,
    Path,
    RecordValidator,
    ScalarValidator,
    UniqueItemsRefinement,
    Validator,
)
from formforge.validation.types import (
    ConfigurationError,
    ErrorKind,
    ValidationContext,
    Violation,
)

DIGITAL_ADDRESS_TYPES = ("email", "phoneNumber")

PREFERENCE_UPDATES = ("useOnlyOnce", "isNewPreferred")

# Sub-fields that make a digital address non-empty; ``type`` is always set
DIGITAL_ADDRESS_FIELD_NAMES = ("address", "preferenceUpdate")

FIELD_LABELS = {
    "email": MessageDescriptor(
        id="customerProfile.email.label",
        default_message="Email",
        description="Label for customerProfile email input",
    ),
    "phoneNumber": MessageDescriptor(
        id="customerProfile.phoneNumber.label",
        default_message="Phone number",
        description="Label for customerProfile phoneNumber input",
    ),
}

REQUIRED_PROFILE_MESSAGE = MessageDescriptor(
    id="customerProfile.required",
    default_message="At least one digital address should be provided.",
    description="Validation error for required customerProfile without digital addresses",
)

DUPLICATE_DIGITAL_ADDRESS_TYPES_MESSAGE = MessageDescriptor(
    id="customerProfile.duplicateType",
    default_message=(
        "You cannot submit multiple digital addresses for the type {digitalAddressType}."
    ),
    description=(
        "Validation error for customerProfile with multiple digital addresses "
        "for the same type"
    ),
)


def _digital_address_types(definition: ComponentDefinition) -> tuple[str, ...]:
    types = definition.get("digitalAddressTypes") or []
    unknown = [t for t in types if t not in DIGITAL_ADDRESS_TYPES]
    if unknown or not types:
        raise ConfigurationError(
            f"Component '{definition.get('key')}' needs digitalAddressTypes from "
            f"{list(DIGITAL_ADDRESS_TYPES)}, got {types!r}"
        )
    return tuple(types)


def _is_unset(value: Any) -> bool:
    # an empty string is the cleared input; null is not an address
    return value is MISSING or value == ""


# =============================================================================
# Validators
# =============================================================================


def _address_check(address_type: str, context: ValidationContext) -> Check:
    if address_type == "email":
        return format_check(
            "INVALID_EMAIL",
            regex_test(EMAIL_PATTERN),
            context.format_message(INVALID_EMAIL_MESSAGE),
        )
    return format_check(
        "INVALID_PHONE_NUMBER",
        regex_test(PHONE_NUMBER_PATTERN),
        context.format_message(INVALID_PHONE_NUMBER_MESSAGE),
    )


def build_digital_address_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
    address_type: str,
    required: bool,
) -> RecordValidator:
    """Validator for one digital address record of ``address_type``."""
    label = context.format_message(FIELD_LABELS[address_type])
    invalid_option = context.format_message(INVALID_OPTION_MESSAGE)

    return RecordValidator(
        fields={
            "type": ScalarValidator(required=True),
            "address": ScalarValidator(
                required=required,
                required_message=context.format_message(
                    REQUIRED_MESSAGE, {"field": "address", "fieldLabel": label}
                ),
                shape=string_shape(definition, context),
                checks=[_address_check(address_type, context)],
                is_empty=_is_unset,
            ),
            "preferenceUpdate": ScalarValidator(
                shape=Check(
                    code="INVALID_OPTION",
                    kind=ErrorKind.FORMAT,
                    test=lambda value: value in PREFERENCE_UPDATES,
                    message=invalid_option,
                ),
                is_empty=lambda value: value is MISSING,
            ),
        },
        shape_message=invalid_type_message(definition, context),
        strict=True,
    )


@dataclass
class DigitalAddressValidator:
    """Dispatches each item to the validator of its ``type``.

    Items of a type that is not allowed for the component fail on ``type``.
    """

    schemas: dict[str, Validator]
    shape_message: str
    unknown_type_message: str

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        if not isinstance(value, dict):
            return [Violation(
                message=self.shape_message,
                code="INVALID_TYPE",
                kind=ErrorKind.SHAPE,
                path=path,
            )]
        address_type = value.get("type")
        schema = self.schemas.get(address_type) if isinstance(address_type, str) else None
        if schema is None:
            return [Violation(
                message=self.unknown_type_message,
                code="INVALID_OPTION",
                kind=ErrorKind.FORMAT,
                path=path + ("type",),
            )]
        return await schema.validate(value, path)


@dataclass(frozen=True)
class AtLeastOneAddressRefinement:
    """A required profile needs at least one filled-in address."""

    message: str

    async def refine(self, value: Any, path: Path) -> list[Violation]:
        if any(item.get("address") for item in value):
            return []
        return [Violation(
            message=self.message,
            code="REQUIRED",
            kind=ErrorKind.REQUIRED,
            path=path,
        )]


def build_customer_profile_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Array of digital addresses, one per allowed type at most.

    Address sub-fields are only required when the component is required and
    allows a single address type. With several types, a required profile
    needs any one address filled in.
    """
    types = _digital_address_types(definition)
    required = is_required(definition)
    required_addresses = required and len(types) == 1

    refinements = []
    if required:
        refinements.append(
            AtLeastOneAddressRefinement(context.format_message(REQUIRED_PROFILE_MESSAGE))
        )
    refinements.append(UniqueItemsRefinement(
        key="type",
        message=lambda address_type: context.format_message(
            DUPLICATE_DIGITAL_ADDRESS_TYPES_MESSAGE, {"digitalAddressType": address_type}
        ),
        code="DUPLICATE_DIGITAL_ADDRESS_TYPE",
        per_item=False,
    ))

    validator = ArrayValidator(
        item=DigitalAddressValidator(
            schemas={
                address_type: build_digital_address_schema(
                    definition, context, address_type, required_addresses
                )
                for address_type in types
            },
            shape_message=invalid_type_message(definition, context),
            unknown_type_message=context.format_message(INVALID_OPTION_MESSAGE),
        ),
        shape_message=invalid_type_message(definition, context),
        refinements=refinements,
    )
    return {field_key(definition): validator}


# =============================================================================
# Emptiness and initial values
# =============================================================================


def is_empty_customer_profile(
    definition: ComponentDefinition,
    value: Any,
    registry: Any,
) -> bool:
    if not isinstance(value, list) or not value:
        return True
    return not any(
        isinstance(item, dict) and any(item.get(name) for name in DIGITAL_ADDRESS_FIELD_NAMES)
        for item in value
    )


def customer_profile_initial_values(
    definition: ComponentDefinition,
    registry: Any,
) -> dict[str, Any]:
    """The ``defaultValue`` when set, else one blank address per allowed type."""
    default = definition.get("defaultValue")
    if isinstance(default, list) and default:
        if any(isinstance(item, list) for item in default):
            raise ConfigurationError(
                f"Component '{definition.get('key')}' has a nested defaultValue"
            )
        return {field_key(definition): default}
    return {field_key(definition): [
        {"type": address_type, "address": "", "preferenceUpdate": "useOnlyOnce"}
        for address_type in definition.get("digitalAddressTypes") or []
    ]}


CUSTOMER_PROFILE_BUNDLE = BehaviorBundle(
    build_schema=build_customer_profile_schema,
    is_empty=is_empty_customer_profile,
    get_initial_values=customer_profile_initial_values,
)
