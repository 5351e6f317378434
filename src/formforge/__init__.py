"""formforge — validation for declarative form definitions.

Usage:
    from formforge import FormValidationService, build_context

    service = FormValidationService(components, build_context(locale="nl"))
    result = await service.validate(submission)
    for error in result.errors:
        print(error.field, error.message)
"""

# services first: it pulls in the registry, which depends on validation
from formforge.validation.services import (
    FormValidationService,
    build_context,
    validate_submission,
)
from formforge.config import FormforgeConfig
from formforge.registry import (
    BehaviorBundle,
    ComponentRegistry,
    default_registry,
    register_builtin_components,
)
from formforge.validation.plugins import PluginRegistry
from formforge.validation.types import (
    ConfigurationError,
    ErrorKind,
    ValidationContext,
    ValidationResult,
    Violation,
)

__all__ = [
    "BehaviorBundle",
    "ComponentRegistry",
    "ConfigurationError",
    "ErrorKind",
    "FormValidationService",
    "FormforgeConfig",
    "PluginRegistry",
    "ValidationContext",
    "ValidationResult",
    "Violation",
    "build_context",
    "default_registry",
    "register_builtin_components",
    "validate_submission",
]
