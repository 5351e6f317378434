"""Validation service for formforge.

This module provides the top-level entry points:
1. FormValidationService: builds the validator for a component tree once and
   validates submissions against it
2. build_context: assembles a ValidationContext from plain settings
3. validate_submission: one-shot convenience wrapper
"""

import logging
from pathlib import Path
from typing import Any

from formforge.core.types import ComponentDefinition
from formforge.i18n.messages import IntlFormatter
from formforge.registry import default_registry, register_builtin_components
from formforge.registry.registry import ComponentRegistry, extract_initial_values
from formforge.validation.compose import build_validation_schema
from formforge.validation.types import (
    ConfigurationError,
    RemoteValidate,
    ValidationContext,
    ValidationResult,
    no_remote_validation,
)

logger = logging.getLogger(__name__)


def build_context(
    locale: str = "en",
    validate_remote: RemoteValidate | None = None,
    registry: ComponentRegistry | None = None,
    catalog_dir: Path | None = None,
    timezone: str = "Europe/Amsterdam",
) -> ValidationContext:
    """Create a validation context.

    Without an explicit registry the default registry is used, with the
    built-in component kinds registered.
    """
    if registry is None:
        registry = register_builtin_components(default_registry)
    return ValidationContext(
        intl=IntlFormatter.for_locale(locale, catalog_dir=catalog_dir, timezone=timezone),
        registry=registry,
        validate_remote=validate_remote or no_remote_validation,
    )


class FormValidationService:
    """Validates submissions for one component tree.

    The validator is built once, when the service is created. Definitions
    are treated as immutable: when they change, create a new service.

    Example:
        service = FormValidationService(components, build_context(locale="nl"))
        result = await service.validate({"name": "Jan"})
        if not result.valid:
            print(result.errors_by_path())
    """

    def __init__(self, components: list[ComponentDefinition], context: ValidationContext):
        self.components = components
        self.context = context
        self.schema = build_validation_schema(components, context)
        logger.debug(
            "Built validator with %d top-level fields for locale '%s'",
            len(self.schema.fields),
            context.locale,
        )

    async def validate(self, values: Any) -> ValidationResult:
        """Validate a submission value tree.

        Invalid input is reported in the result. Exceptions raised by a
        remote plugin callback are not validation failures and propagate.

        Raises:
            ConfigurationError: If the definitions cannot validate this input
        """
        try:
            errors = await self.schema.validate(values)
        except ConfigurationError:
            raise
        except Exception:
            logger.exception("Validation aborted by an unexpected error")
            raise

        logger.info("Validation finished with %d violation(s)", len(errors))
        return ValidationResult(valid=not errors, errors=errors)

    def initial_values(self) -> dict[str, Any]:
        """The empty submission for this component tree."""
        return extract_initial_values(self.components, self.context.registry)


async def validate_submission(
    components: list[ComponentDefinition],
    values: Any,
    locale: str = "en",
    validate_remote: RemoteValidate | None = None,
    registry: ComponentRegistry | None = None,
    catalog_dir: Path | None = None,
    timezone: str = "Europe/Amsterdam",
) -> ValidationResult:
    """Build the validator for ``components`` and validate ``values`` once."""
    context = build_context(
        locale=locale,
        validate_remote=validate_remote,
        registry=registry,
        catalog_dir=catalog_dir,
        timezone=timezone,
    )
    return await FormValidationService(components, context).validate(values)
