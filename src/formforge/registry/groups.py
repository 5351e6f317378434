"""Container kinds: editgrid (repeating group), fieldset, columns and content.

An editgrid's items are validated by recursively composing its nested
definitions, so editgrids nest to any depth. Layout containers have no value
of their own; they contribute their nested fields' validators to the
enclosing record.
"""

from typing import Any

from formforge.core.types import ComponentDefinition
from formforge.i18n.messages import MessageDescriptor
from formforge.registry.base import field_key, is_required, validate_rules
from formforge.registry.registry import is_empty
from formforge.registry.types import BehaviorBundle
from formforge.validation.compose import build_validation_schema, build_validation_schemas
from formforge.validation.messages import (
    invalid_type_message,
    required_message,
    resolve_message,
)
from formforge.validation.schema import ArrayValidator, UniqueItemsRefinement, Validator
from formforge.validation.types import ConfigurationError, ValidationContext

MAX_ITEMS_MESSAGE = MessageDescriptor(
    id="editgrid.maxLength",
    default_message="Ensure the number of items is less than or equal to {maxLength}.",
    description="Validation error for editgrid that exceeds max length.",
)

DUPLICATE_VALUE_MESSAGE = MessageDescriptor(
    id="editgrid.unique",
    default_message=(
        "The value {value} is used more than once. "
        "Each item must have a unique {fieldLabel}."
    ),
    description="Validation error for an editgrid sub-field value shared by several items.",
)


def nested_components(definition: ComponentDefinition) -> list[ComponentDefinition]:
    """The definitions nested in a container, across all columns for ``columns``.

    Raises:
        ConfigurationError: If the nested definitions are not lists
    """
    if definition.get("type") == "columns":
        columns = definition.get("columns") or []
        if not isinstance(columns, list):
            raise ConfigurationError(f"Columns '{definition.get('key')}' must be a list")
        components: list[ComponentDefinition] = []
        for column in columns:
            column_components = column.get("components") or []
            if not isinstance(column_components, list):
                raise ConfigurationError(
                    f"Column components of '{definition.get('key')}' must be a list"
                )
            components.extend(column_components)
        return components

    components = definition.get("components") or []
    if not isinstance(components, list):
        raise ConfigurationError(f"Components of '{definition.get('key')}' must be a list")
    return components


# =============================================================================
# Editgrid
# =============================================================================


def _unique_refinement(
    definition: ComponentDefinition,
    context: ValidationContext,
    sub_key: str,
) -> UniqueItemsRefinement:
    label = sub_key
    for child in nested_components(definition):
        if child.get("key") == sub_key and child.get("label"):
            label = child["label"]

    def message(value: Any) -> str:
        return resolve_message(
            definition, "unique", context, DUPLICATE_VALUE_MESSAGE,
            {"value": value, "fieldLabel": label},
        )

    return UniqueItemsRefinement(key=sub_key, message=message)


def build_editgrid_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """Array of per-item records composed from the nested definitions.

    ``validate.unique`` lists the item sub-keys whose values may not repeat
    across items.
    """
    rules = validate_rules(definition)
    max_length = rules.get("maxLength")

    item = build_validation_schema(nested_components(definition), context)
    validator = ArrayValidator(
        item=item,
        shape_message=invalid_type_message(definition, context),
        required=is_required(definition),
        required_message=required_message(definition, context),
        max_items=max_length,
        max_items_message=resolve_message(
            definition, "maxLength", context, MAX_ITEMS_MESSAGE, {"maxLength": max_length}
        ),
        refinements=[
            _unique_refinement(definition, context, sub_key)
            for sub_key in rules.get("unique") or []
        ],
    )
    return {field_key(definition): validator}


def is_empty_editgrid(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    """No items, or every item's children empty by their own kind's rule."""
    if not value:
        return True
    children = {child.get("key"): child for child in nested_components(definition)}
    for item in value:
        if not isinstance(item, dict):
            return False
        for key, child_value in item.items():
            child = children.get(key)
            if child is not None and not is_empty(child, child_value, registry):
                return False
    return True


def editgrid_initial_values(definition: ComponentDefinition, registry: Any) -> dict[str, Any]:
    # the items are not prefilled, only the grid's own default
    default = definition.get("defaultValue")
    return {field_key(definition): default if isinstance(default, list) else []}


# =============================================================================
# Layout
# =============================================================================


def build_layout_schema(
    definition: ComponentDefinition,
    context: ValidationContext,
) -> dict[str, Validator]:
    """The nested fields' validators, keyed by their own (possibly dotted) keys."""
    return build_validation_schemas(nested_components(definition), context)


def layout_initial_values(definition: ComponentDefinition, registry: Any) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for child in nested_components(definition):
        bundle = registry.lookup(child)
        if bundle is not None and bundle.get_initial_values is not None:
            values.update(bundle.get_initial_values(child, registry))
    return values


EDITGRID_BUNDLE = BehaviorBundle(
    build_schema=build_editgrid_schema,
    is_empty=is_empty_editgrid,
    get_initial_values=editgrid_initial_values,
)

LAYOUT_BUNDLE = BehaviorBundle(
    build_schema=build_layout_schema,
    get_initial_values=layout_initial_values,
)

CONTENT_BUNDLE = BehaviorBundle()
