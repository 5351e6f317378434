"""Default messages shared by several schema builders."""

from typing import Any

from formforge.i18n.messages import MessageDescriptor
from formforge.validation.types import ValidationContext

REQUIRED_MESSAGE = MessageDescriptor(
    id="validation.required",
    default_message="The required field {fieldLabel} must be filled in.",
    description="Validation error for a required field without a value.",
)

INVALID_TYPE_MESSAGE = MessageDescriptor(
    id="validation.invalidType",
    default_message="The value of {fieldLabel} has an invalid type.",
    description="Validation error for a value of the wrong JSON type.",
)

INVALID_OPTION_MESSAGE = MessageDescriptor(
    id="validation.invalidOption",
    default_message="Invalid option selected.",
    description="Validation error for a value that is not one of the field's options.",
)

NO_OPTIONS_MESSAGE = MessageDescriptor(
    id="validation.noOptions",
    default_message="There are no options to choose from.",
    description="Validation error for an enumerated field without any options.",
)


def resolve_message(
    definition: dict[str, Any],
    constraint: str,
    context: ValidationContext,
    descriptor: MessageDescriptor,
    values: dict[str, Any] | None = None,
) -> str:
    """Resolve a constraint message: the field's ``errors`` override wins."""
    override = (definition.get("errors") or {}).get(constraint)
    if override:
        return override
    return context.format_message(descriptor, values)


def required_message(definition: dict[str, Any], context: ValidationContext) -> str:
    return resolve_message(
        definition,
        "required",
        context,
        REQUIRED_MESSAGE,
        {"field": definition.get("key", ""), "fieldLabel": definition.get("label", "")},
    )


def invalid_type_message(definition: dict[str, Any], context: ValidationContext) -> str:
    return context.format_message(
        INVALID_TYPE_MESSAGE, {"fieldLabel": definition.get("label", "")}
    )
