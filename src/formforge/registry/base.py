"""Building blocks shared by the per-kind schema builders."""

import re
from typing import Any, Callable

from formforge.core.types import MISSING, ComponentDefinition, is_blank
from formforge.registry.types import InitialValues
from formforge.validation.messages import invalid_type_message, required_message
from formforge.validation.schema import (
    ArrayValidator,
    Check,
    PluginRefinement,
    Refinement,
    Validator,
)
from formforge.validation.types import ConfigurationError, ErrorKind, ValidationContext


def field_key(definition: ComponentDefinition) -> str:
    """The definition's key; a definition without one cannot be validated."""
    key = definition.get("key")
    if not isinstance(key, str) or not key:
        raise ConfigurationError(
            f"Component of type '{definition.get('type')}' has no 'key'"
        )
    return key


def validate_rules(definition: ComponentDefinition) -> dict[str, Any]:
    return definition.get("validate") or {}


def is_required(definition: ComponentDefinition) -> bool:
    return bool(validate_rules(definition).get("required"))


def anchor_pattern(pattern: str) -> str:
    """Anchor a Formio pattern to the whole value (Formio adds ^ and $ implicitly)."""
    if not pattern.startswith("^"):
        pattern = f"^{pattern}"
    if not pattern.endswith("$"):
        pattern = f"{pattern}$"
    return pattern


def regex_test(pattern: str | re.Pattern[str]) -> Callable[[Any], bool]:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return lambda value: compiled.fullmatch(value) is not None


def string_shape(definition: ComponentDefinition, context: ValidationContext) -> Check:
    return Check(
        code="INVALID_TYPE",
        kind=ErrorKind.SHAPE,
        test=lambda value: isinstance(value, str),
        message=invalid_type_message(definition, context),
    )


def format_check(code: str, test: Callable[[Any], bool], message: str) -> Check:
    return Check(code=code, kind=ErrorKind.FORMAT, test=test, message=message)


def bound_check(code: str, test: Callable[[Any], bool], message: str) -> Check:
    return Check(code=code, kind=ErrorKind.BOUND, test=test, message=message)


def plugin_refinements(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> list[Refinement]:
    """The remote plugin refinement, if ``validate.plugins`` names any."""
    plugins = validate_rules(definition).get("plugins") or []
    if not plugins:
        return []
    return [PluginRefinement(plugins=tuple(plugins), validate_remote=context.validate_remote)]


def wrap_multiple(
    definition: ComponentDefinition,
    context: ValidationContext,
    item: Validator,
) -> Validator:
    """Array-wrap a scalar validator when the definition sets ``multiple``."""
    if not definition.get("multiple"):
        return item
    return ArrayValidator(
        item=item,
        shape_message=invalid_type_message(definition, context),
        required=is_required(definition),
        required_message=required_message(definition, context),
    )


# =============================================================================
# Emptiness and Initial Values
# =============================================================================


def is_empty_text(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    """Missing, null or whitespace-only; arrays when empty or all elements blank.

    Looks at the actual data type, since stored data may predate a change of
    the definition's ``multiple`` flag.
    """
    if isinstance(value, list):
        return all(is_blank(element) for element in value)
    return is_blank(value)


def is_empty_value(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    """Missing or null only: ``0`` and ``False`` are values."""
    if isinstance(value, list):
        return all(element is None for element in value)
    return value is MISSING or value is None


def initial_values(empty: Any) -> InitialValues:
    """Initial values from ``defaultValue``, falling back to ``empty``.

    Fields with ``multiple`` start as an empty list.
    """

    def get_initial_values(definition: ComponentDefinition, registry: Any) -> dict[str, Any]:
        default = definition.get("defaultValue")
        if default is None:
            default = [] if definition.get("multiple") else empty
        if definition.get("multiple") and not isinstance(default, list):
            default = [default]
        return {field_key(definition): default}

    return get_initial_values
