"""Core types for the formforge validation engine.

This module defines the types threaded through schema building and validation:
- Violation / ErrorKind: a single structured validation failure
- ValidationResult: the outcome of validating a whole value tree
- ValidationContext: the collaborators every schema builder receives
- ConfigurationError: raised for definitions the engine cannot reconcile
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, Union

if TYPE_CHECKING:
    from formforge.registry.types import BehaviorBundle

PathSegment = Union[str, int]


class ErrorKind(Enum):
    """Taxonomy of validation failures.

    SHAPE: value is not representable in the field's kind at all
    FORMAT: right primitive type, wrong structure (pattern, malformed date)
    BOUND: structurally valid but outside a min/max/length/count bound
    REQUIRED: the kind's empty representation while the field is required
    CROSS_ITEM: conflicts with a sibling item in the same collection
    REMOTE: rejected by a remote validation plugin
    """

    SHAPE = "shape"
    FORMAT = "format"
    BOUND = "bound"
    REQUIRED = "required"
    CROSS_ITEM = "cross_item"
    REMOTE = "remote"


@dataclass(frozen=True)
class Violation:
    """A single validation failure.

    Attributes:
        message: Human-readable, localized message
        code: Machine-readable error code (e.g., "MIN_VALUE")
        kind: Which class of failure this is
        path: Location in the value tree; strings are keys, ints are array indices
    """

    message: str
    code: str
    kind: ErrorKind
    path: tuple[PathSegment, ...] = ()

    @property
    def field(self) -> str:
        """Dotted path of the offending value, e.g. ``children.1.bsn``."""
        return ".".join(str(segment) for segment in self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "kind": self.kind.value,
            "field": self.field,
        }


@dataclass
class ValidationResult:
    """Result of validating a submission value tree.

    Attributes:
        valid: True if no violations were found
        errors: All violations, in field declaration order
    """

    valid: bool
    errors: list[Violation] = field(default_factory=list)

    def errors_by_path(self) -> dict[str, list[str]]:
        """Group violation messages by dotted field path."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }


class ConfigurationError(Exception):
    """A field definition or registry setup the engine cannot reconcile.

    This signals a programming or configuration mistake, never invalid user input.
    """


class MessageFormatter(Protocol):
    """Locale-aware message formatting, as consumed by schema builders."""

    locale: str
    timezone: str

    def format_message(self, descriptor: Any, values: dict[str, Any] | None = None) -> str:
        ...


class RegistryLookup(Protocol):
    """Registry accessor used for recursive schema building."""

    def lookup(self, kind: Any) -> "BehaviorBundle | None":
        ...


# validate_remote(plugin_names, value) -> error message, or None when valid
RemoteValidate = Callable[[list[str], Any], Awaitable[Union[str, None]]]


async def no_remote_validation(plugins: list[str], value: Any) -> str | None:
    """Remote validation callback that accepts every value."""
    return None


@dataclass(frozen=True)
class ValidationContext:
    """Collaborators passed through the whole schema-building walk.

    Attributes:
        intl: Locale-aware message formatter
        registry: Component registry, used by container kinds to recurse
        validate_remote: Async callback running the named remote plugins for a value
    """

    intl: MessageFormatter
    registry: RegistryLookup
    validate_remote: RemoteValidate = no_remote_validation

    @property
    def locale(self) -> str:
        return self.intl.locale

    def format_message(self, descriptor: Any, values: dict[str, Any] | None = None) -> str:
        return self.intl.format_message(descriptor, values)

    def lookup(self, kind: Any) -> "BehaviorBundle | None":
        return self.registry.lookup(kind)
