"""Component registry for formforge.

Maps a component kind tag ("textfield", "editgrid", ...) to its BehaviorBundle.
Dispatch is always a single table lookup on the definition's ``type``.
"""

import logging
from typing import Any

from formforge.core.types import MISSING, ComponentDefinition, ComponentType
from formforge.registry.types import BehaviorBundle
from formforge.validation.types import ConfigurationError

logger = logging.getLogger(__name__)


def _kind_of(kind_or_definition: str | ComponentDefinition) -> str:
    if isinstance(kind_or_definition, dict):
        kind = kind_or_definition.get("type", "")
    else:
        kind = kind_or_definition
    if isinstance(kind, ComponentType):
        return kind.value
    return str(kind)


class ComponentRegistry:
    """Registry of behavior bundles keyed by component kind.

    Bundles are registered once at setup time. Decorative kinds are registered
    with a bundle without schema builder, so composition skips them instead of
    treating them as unknown.

    Example:
        registry = ComponentRegistry()
        registry.register("textfield", BehaviorBundle(build_schema=build_textfield))

        bundle = registry.lookup({"type": "textfield", "key": "name"})
    """

    def __init__(self) -> None:
        self._bundles: dict[str, BehaviorBundle] = {}

    def register(self, kind: str | ComponentType, bundle: BehaviorBundle) -> None:
        """Register the bundle for a kind.

        Idempotent - re-registering a kind keeps the first bundle.
        """
        name = _kind_of(kind)
        if name in self._bundles:
            return
        self._bundles[name] = bundle
        logger.debug("Registered component kind '%s'", name)

    def lookup(self, kind_or_definition: str | ComponentDefinition) -> BehaviorBundle | None:
        """Find the bundle for a kind or a definition; ``None`` when unknown."""
        return self._bundles.get(_kind_of(kind_or_definition))

    def get(self, kind_or_definition: str | ComponentDefinition) -> BehaviorBundle:
        """Get the bundle for a kind that must be known.

        Raises:
            ConfigurationError: If the kind is not registered
        """
        name = _kind_of(kind_or_definition)
        bundle = self._bundles.get(name)
        if bundle is None:
            raise ConfigurationError(
                f"Component kind '{name}' is not registered. "
                "Available kinds: " + ", ".join(self.list_registered())
            )
        return bundle

    def is_registered(self, kind: str | ComponentType) -> bool:
        return _kind_of(kind) in self._bundles

    def list_registered(self) -> list[str]:
        return sorted(self._bundles)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._bundles.clear()


default_registry = ComponentRegistry()


def is_empty(definition: ComponentDefinition, value: Any, registry: Any) -> bool:
    """Dispatch to the kind's emptiness predicate.

    Kinds without a predicate treat only a missing value or ``None`` as empty.
    """
    bundle = registry.lookup(definition)
    if bundle is None or bundle.is_empty is None:
        return value is MISSING or value is None
    return bundle.is_empty(definition, value, registry)


def extract_initial_values(
    components: list[ComponentDefinition],
    registry: Any,
) -> dict[str, Any]:
    """Collect the initial submission values for a list of definitions.

    Dotted keys are expanded into nested objects, mirroring how composition
    nests their validators.
    """
    values: dict[str, Any] = {}
    for definition in components:
        bundle = registry.lookup(definition)
        if bundle is None or bundle.get_initial_values is None:
            continue
        for key, value in bundle.get_initial_values(definition, registry).items():
            set_in(values, key, value)
    return values


def set_in(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    """Set ``value`` at ``dotted_key``, creating intermediate objects."""
    *parents, leaf = dotted_key.split(".")
    node = target
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value
