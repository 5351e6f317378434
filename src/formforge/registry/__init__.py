"""Component-kind registry and the built-in component kinds.

Usage:
    from formforge.registry import default_registry, register_builtin_components

    # At application startup
    register_builtin_components()

    bundle = default_registry.lookup({"type": "textfield", "key": "name"})
"""

from formforge.core.types import ComponentType
from formforge.registry.choices import (
    CHECKBOX_BUNDLE,
    RADIO_BUNDLE,
    SELECT_BUNDLE,
    SELECTBOXES_BUNDLE,
)
from formforge.registry.groups import CONTENT_BUNDLE, EDITGRID_BUNDLE, LAYOUT_BUNDLE
from formforge.registry.numeric import CURRENCY_BUNDLE, NUMBER_BUNDLE
from formforge.registry.patterned import (
    BSN_BUNDLE,
    IBAN_BUNDLE,
    LICENSE_PLATE_BUNDLE,
    POSTCODE_BUNDLE,
)
from formforge.registry.personal import ADDRESS_NL_BUNDLE, CHILDREN_BUNDLE, PARTNERS_BUNDLE
from formforge.registry.profile import CUSTOMER_PROFILE_BUNDLE
from formforge.registry.registry import (
    ComponentRegistry,
    default_registry,
    extract_initial_values,
    is_empty,
)
from formforge.registry.temporal import DATE_BUNDLE, DATETIME_BUNDLE, TIME_BUNDLE
from formforge.registry.text import (
    COSIGN_BUNDLE,
    EMAIL_BUNDLE,
    PHONE_NUMBER_BUNDLE,
    SIGNATURE_BUNDLE,
    TEXT_BUNDLE,
)
from formforge.registry.types import BehaviorBundle

BUILTIN_BUNDLES: dict[ComponentType, BehaviorBundle] = {
    # basic
    ComponentType.TEXTFIELD: TEXT_BUNDLE,
    ComponentType.TEXTAREA: TEXT_BUNDLE,
    ComponentType.EMAIL: EMAIL_BUNDLE,
    ComponentType.PHONE_NUMBER: PHONE_NUMBER_BUNDLE,
    ComponentType.NUMBER: NUMBER_BUNDLE,
    ComponentType.CURRENCY: CURRENCY_BUNDLE,
    ComponentType.DATE: DATE_BUNDLE,
    ComponentType.DATETIME: DATETIME_BUNDLE,
    ComponentType.TIME: TIME_BUNDLE,
    ComponentType.CHECKBOX: CHECKBOX_BUNDLE,
    ComponentType.SELECT: SELECT_BUNDLE,
    ComponentType.SELECTBOXES: SELECTBOXES_BUNDLE,
    ComponentType.RADIO: RADIO_BUNDLE,
    ComponentType.SIGNATURE: SIGNATURE_BUNDLE,
    # special types
    ComponentType.POSTCODE: POSTCODE_BUNDLE,
    ComponentType.LICENSE_PLATE: LICENSE_PLATE_BUNDLE,
    ComponentType.BSN: BSN_BUNDLE,
    ComponentType.EDITGRID: EDITGRID_BUNDLE,
    ComponentType.CHILDREN: CHILDREN_BUNDLE,
    ComponentType.PARTNERS: PARTNERS_BUNDLE,
    ComponentType.ADDRESS_NL: ADDRESS_NL_BUNDLE,
    ComponentType.IBAN: IBAN_BUNDLE,
    ComponentType.COSIGN: COSIGN_BUNDLE,
    ComponentType.CUSTOMER_PROFILE: CUSTOMER_PROFILE_BUNDLE,
    # layout
    ComponentType.FIELDSET: LAYOUT_BUNDLE,
    ComponentType.COLUMNS: LAYOUT_BUNDLE,
    ComponentType.CONTENT: CONTENT_BUNDLE,
}


def register_builtin_components(registry: ComponentRegistry | None = None) -> ComponentRegistry:
    """Register every built-in component kind.

    Idempotent. Registers into the default registry unless one is given.
    """
    target = registry if registry is not None else default_registry
    for kind, bundle in BUILTIN_BUNDLES.items():
        target.register(kind, bundle)
    return target


__all__ = [
    "BUILTIN_BUNDLES",
    "BehaviorBundle",
    "ComponentRegistry",
    "default_registry",
    "extract_initial_values",
    "is_empty",
    "register_builtin_components",
]
