"""Behavior bundles stored in the component registry."""

from dataclasses import dataclass
from typing import Any, Callable

from formforge.core.types import ComponentDefinition
from formforge.validation.schema import Validator
from formforge.validation.types import RegistryLookup, ValidationContext

# (definition, context) -> {field key: validator}
SchemaBuilder = Callable[[ComponentDefinition, ValidationContext], dict[str, Validator]]

# (definition, value, registry) -> True when value is the kind's "no value"
IsEmpty = Callable[[ComponentDefinition, Any, RegistryLookup], bool]

# (definition, registry) -> {field key: initial value}
InitialValues = Callable[[ComponentDefinition, RegistryLookup], dict[str, Any]]


@dataclass(frozen=True)
class BehaviorBundle:
    """Everything the engine knows about one component kind.

    Attributes:
        build_schema: Schema builder; ``None`` for decorative kinds without a value
        is_empty: Kind-specific emptiness predicate
        get_initial_values: Builds the initial submission values for a definition
    """

    build_schema: SchemaBuilder | None = None
    is_empty: IsEmpty | None = None
    get_initial_values: InitialValues | None = None
