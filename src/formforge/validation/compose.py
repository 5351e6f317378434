"""Composition of per-field validators into one validator over a value record.

``build_validation_schemas`` is the flat union of every field's contribution.
``compose_validation_schemas`` turns that flat mapping into nested records,
since a dotted key like ``"address.street"`` addresses a nested object in the
submission data.
"""

import logging
from typing import Any

from formforge.core.types import ComponentDefinition
from formforge.validation.schema import RecordValidator, Validator
from formforge.validation.types import ConfigurationError, ValidationContext

logger = logging.getLogger(__name__)


def build_validation_schemas(
    components: list[ComponentDefinition],
    context: ValidationContext,
) -> dict[str, Validator]:
    """Build the flat ``{key: validator}`` mapping for sibling definitions.

    Kinds without a schema builder (decorative content) contribute nothing,
    and so do kinds the registry does not know. A duplicate key is logged and
    the later definition wins.

    Raises:
        ConfigurationError: If ``components`` is not a list
    """
    if not isinstance(components, list):
        raise ConfigurationError(f"Expected a list of components, got {type(components).__name__}")

    schemas: dict[str, Validator] = {}
    for definition in components:
        bundle = context.lookup(definition)
        if bundle is None:
            logger.warning(
                "Skipping component '%s' of unknown kind '%s'",
                definition.get("key"),
                definition.get("type"),
            )
            continue
        if bundle.build_schema is None:
            logger.debug("Skipping component '%s' without validation", definition.get("key"))
            continue

        for key, validator in bundle.build_schema(definition, context).items():
            if key in schemas:
                logger.warning("Duplicate component key '%s'; the last definition wins", key)
            schemas[key] = validator
    return schemas


def compose_validation_schemas(schemas: dict[str, Validator]) -> RecordValidator:
    """Nest a flat mapping with dotted keys into records.

    ``{"a.b": v1, "a.c": v2, "d": v3}`` becomes
    ``Record(a=Record(b=v1, c=v2), d=v3)``.
    """
    tree: dict[str, Any] = {}
    for key, validator in schemas.items():
        *parents, leaf = key.split(".")
        node = tree
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                if child is not None:
                    logger.warning("Component key '%s' is shadowed by nested keys", part)
                child = node[part] = {}
            node = child
        if isinstance(node.get(leaf), dict):
            logger.warning("Component key '%s' shadows nested keys", key)
        node[leaf] = validator
    return _to_record(tree)


def _to_record(tree: dict[str, Any]) -> RecordValidator:
    return RecordValidator(fields={
        key: _to_record(node) if isinstance(node, dict) else node
        for key, node in tree.items()
    })


def build_validation_schema(
    components: list[ComponentDefinition],
    context: ValidationContext,
) -> RecordValidator:
    """Build one validator over the record holding ``components``' values."""
    return compose_validation_schemas(build_validation_schemas(components, context))
