"""Composable validators for submission value trees.

Schema builders assemble these combinators into one validator per field:
- ScalarValidator: normalize -> empty/required -> shape -> checks -> refinements
- ArrayValidator: array-of(item) with cardinality bounds and whole-array refinements
- RecordValidator: fixed named children, validated concurrently
- NeverValidator: enumerations without options; accepts nothing

Every validator exposes ``async validate(value, path=()) -> list[Violation]``
and callers always await it, whether or not a remote refinement is involved.
Missing keys are passed as ``MISSING``.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from formforge.core.types import MISSING, is_blank
from formforge.validation.types import (
    ConfigurationError,
    ErrorKind,
    PathSegment,
    RemoteValidate,
    Violation,
)

Path = tuple[PathSegment, ...]


class Validator(Protocol):
    """Protocol for every composable validator."""

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        """Validate ``value`` located at ``path`` and return all violations."""
        ...


class Refinement(Protocol):
    """Asynchronous check run after all synchronous checks of a value passed."""

    async def refine(self, value: Any, path: Path) -> list[Violation]:
        ...


def is_absent(value: Any) -> bool:
    return value is MISSING or value is None


# =============================================================================
# Checks and Refinements
# =============================================================================


@dataclass(frozen=True)
class Check:
    """A synchronous predicate with the violation it produces on failure.

    Attributes:
        code: Machine-readable error code
        kind: Failure class reported when ``test`` returns False
        test: Returns True when the value satisfies the constraint
        message: Already resolved (overridden or localized) message
    """

    code: str
    kind: ErrorKind
    test: Callable[[Any], bool]
    message: str

    def run(self, value: Any, path: Path) -> Violation | None:
        if self.test(value):
            return None
        return Violation(message=self.message, code=self.code, kind=self.kind, path=path)


@dataclass(frozen=True)
class PluginRefinement:
    """Runs the named remote plugins for a value through the context callback."""

    plugins: tuple[str, ...]
    validate_remote: RemoteValidate

    async def refine(self, value: Any, path: Path) -> list[Violation]:
        message = await self.validate_remote(list(self.plugins), value)
        if not message:
            return []
        return [Violation(message=message, code="PLUGIN", kind=ErrorKind.REMOTE, path=path)]


@dataclass(frozen=True)
class UniqueItemsRefinement:
    """Flags array items whose identifier repeats an earlier item's identifier.

    By default one violation is attached to each later duplicate, at
    ``path + (index,)``. With ``per_item`` unset, each duplicated identifier is
    reported once, at ``path``. Items without an identifier are not compared,
    and identifiers of different JSON types never match (``1`` is not ``True``).

    Attributes:
        key: Name of the identifying sub-field of each item
        message: Builds the violation message from the duplicated value
        code: Error code for the violation
        per_item: Attach violations to the offending items rather than the array
    """

    key: str
    message: Callable[[Any], str]
    code: str = "DUPLICATE_VALUE"
    per_item: bool = True

    async def refine(self, value: Any, path: Path) -> list[Violation]:
        seen: set[tuple[type, Any]] = set()
        reported: set[tuple[type, Any]] = set()
        violations: list[Violation] = []
        for index, item in enumerate(value):
            if not isinstance(item, dict):
                continue
            identifier = item.get(self.key, MISSING)
            if is_blank(identifier) or not isinstance(identifier, (str, int, float)):
                continue
            marker = (type(identifier), identifier)
            if marker not in seen:
                seen.add(marker)
                continue
            if not self.per_item:
                if marker in reported:
                    continue
                reported.add(marker)
            violations.append(Violation(
                message=self.message(identifier),
                code=self.code,
                kind=ErrorKind.CROSS_ITEM,
                path=path + (index,) if self.per_item else path,
            ))
        return violations


async def run_refinements(
    refinements: list[Refinement],
    value: Any,
    path: Path,
) -> list[Violation]:
    """Run refinements in declaration order, collecting every violation."""
    violations: list[Violation] = []
    for refinement in refinements:
        violations.extend(await refinement.refine(value, path))
    return violations


# =============================================================================
# Validators
# =============================================================================


@dataclass
class ScalarValidator:
    """Validator for a single scalar value.

    Evaluation order:
    1. ``normalize`` maps legacy representations (e.g. ``""`` for email)
    2. empty values produce a REQUIRED violation or pass, depending on ``required``
    3. ``shape`` runs; on failure nothing else runs
    4. every entry of ``checks`` runs independently, all violations collected
    5. ``refinements`` run only when steps 3 and 4 found nothing
    """

    required: bool = False
    required_message: str = ""
    shape: Check | None = None
    checks: list[Check] = field(default_factory=list)
    refinements: list[Refinement] = field(default_factory=list)
    is_empty: Callable[[Any], bool] = is_blank
    normalize: Callable[[Any], Any] | None = None

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        if self.normalize is not None:
            value = self.normalize(value)

        if self.is_empty(value):
            if not self.required:
                return []
            return [Violation(
                message=self.required_message,
                code="REQUIRED",
                kind=ErrorKind.REQUIRED,
                path=path,
            )]

        if self.shape is not None:
            shape_error = self.shape.run(value, path)
            if shape_error:
                return [shape_error]

        violations = [v for v in (check.run(value, path) for check in self.checks) if v]
        if violations:
            return violations

        return await run_refinements(self.refinements, value, path)


@dataclass
class ArrayValidator:
    """Validator for an array whose elements share one item validator.

    ``MISSING``/``None`` and ``[]`` are the empty array; ``required`` means at
    least one element. Whole-array refinements run once shape, cardinality and
    every element passed.
    """

    item: Validator
    shape_message: str
    required: bool = False
    required_message: str = ""
    max_items: int | None = None
    max_items_message: str = ""
    refinements: list[Refinement] = field(default_factory=list)

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        if is_absent(value):
            value = []
        if not isinstance(value, list):
            return [Violation(
                message=self.shape_message,
                code="INVALID_TYPE",
                kind=ErrorKind.SHAPE,
                path=path,
            )]

        violations: list[Violation] = []
        if self.required and not value:
            violations.append(Violation(
                message=self.required_message,
                code="MIN_ITEMS",
                kind=ErrorKind.REQUIRED,
                path=path,
            ))
        if self.max_items is not None and len(value) > self.max_items:
            violations.append(Violation(
                message=self.max_items_message,
                code="MAX_ITEMS",
                kind=ErrorKind.BOUND,
                path=path,
            ))

        results = await asyncio.gather(*(
            self.item.validate(item, path + (index,))
            for index, item in enumerate(value)
        ))
        for item_violations in results:
            violations.extend(item_violations)

        if violations:
            return violations
        return await run_refinements(self.refinements, value, path)


@dataclass
class RecordValidator:
    """Validator for a record with a fixed set of named children.

    Absent children are validated as ``MISSING``. With ``strict`` set, keys
    not declared in ``fields`` are shape violations. A missing or ``None``
    record is validated as an empty record, unless ``optional`` is set, in
    which case it passes as a whole.
    """

    fields: dict[str, Validator] = field(default_factory=dict)
    shape_message: str = "Expected an object."
    strict: bool = False
    optional: bool = False
    refinements: list[Refinement] = field(default_factory=list)

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        if is_absent(value):
            if self.optional:
                return []
            value = {}
        if not isinstance(value, dict):
            return [Violation(
                message=self.shape_message,
                code="INVALID_TYPE",
                kind=ErrorKind.SHAPE,
                path=path,
            )]

        violations: list[Violation] = []
        if self.strict:
            for extra in sorted(value.keys() - self.fields.keys()):
                violations.append(Violation(
                    message=self.shape_message,
                    code="UNRECOGNIZED_KEY",
                    kind=ErrorKind.SHAPE,
                    path=path + (extra,),
                ))

        results = await asyncio.gather(*(
            validator.validate(value.get(key, MISSING), path + (key,))
            for key, validator in self.fields.items()
        ))
        for field_violations in results:
            violations.extend(field_violations)

        if violations:
            return violations
        return await run_refinements(self.refinements, value, path)


@dataclass
class NeverValidator:
    """Validator for an enumeration that has no options at all.

    Empty values fail with ``message``. A concrete value cannot be checked
    against an empty option list, which is a configuration mistake.
    """

    field_key: str
    message: str

    async def validate(self, value: Any, path: Path = ()) -> list[Violation]:
        if is_blank(value):
            return [Violation(
                message=self.message,
                code="NO_OPTIONS",
                kind=ErrorKind.SHAPE,
                path=path,
            )]
        raise ConfigurationError(
            f"Field '{self.field_key}' has no options to validate {value!r} against"
        )
