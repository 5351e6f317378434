"""Validation engine for form submissions.

This package provides:
- types: Violation, ValidationResult, ValidationContext, ConfigurationError
- schema: composable validators (scalar, array, record, never)
- compose: per-field validators composed into one record validator
- plugins: registry backing the remote plugin callback
- services: FormValidationService, the top-level validate call
"""

from formforge.validation.compose import (
    build_validation_schema,
    build_validation_schemas,
    compose_validation_schemas,
)
from formforge.validation.schema import (
    ArrayValidator,
    NeverValidator,
    RecordValidator,
    ScalarValidator,
    Validator,
)
from formforge.validation.types import (
    ConfigurationError,
    ErrorKind,
    ValidationContext,
    ValidationResult,
    Violation,
)

__all__ = [
    "ArrayValidator",
    "ConfigurationError",
    "ErrorKind",
    "NeverValidator",
    "RecordValidator",
    "ScalarValidator",
    "ValidationContext",
    "ValidationResult",
    "Validator",
    "Violation",
    "build_validation_schema",
    "build_validation_schemas",
    "compose_validation_schemas",
]
