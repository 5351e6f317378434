"""Message descriptors and the locale-aware message formatter.

Messages are declared next to the code that raises them as MessageDescriptor
constants carrying an id and an English default. At runtime an IntlFormatter
resolves the descriptor against a translation catalog for its locale and
interpolates the substitutions.

Supported template syntax (an ICU MessageFormat subset):
- {name}                       - plain substitution (numbers are locale formatted)
- {name, number}               - locale formatted number
- {name, plural, one {...} other {...}}  - CLDR plural categories, =N exact
  matches, and # for the formatted count inside a branch
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from formforge.core.types import is_number

logger = logging.getLogger(__name__)

_CATALOG_DIR = Path(__file__).parent / "catalogs"


@dataclass(frozen=True)
class MessageDescriptor:
    """A translatable message.

    Attributes:
        id: Catalog lookup key
        default_message: English template used when the catalog has no entry
        description: Context for translators
    """

    id: str
    default_message: str
    description: str = ""


class MessageFormatError(ValueError):
    """A message template could not be parsed."""


def babel_locale(locale: str) -> Locale:
    """Parse a BCP 47 (``nl-NL``) or POSIX (``nl_NL``) tag into a babel Locale."""
    try:
        return Locale.parse(locale.replace("-", "_"))
    except (UnknownLocaleError, ValueError) as exc:
        raise ValueError(f"Unknown locale '{locale}'") from exc


def load_catalog(locale: str, catalog_dir: Path | None = None) -> dict[str, str]:
    """Load the message catalog for a locale.

    Looks for ``<language>.yaml`` in the bundled catalogs and, if given, in
    ``catalog_dir`` (whose entries win). A locale without a catalog yields an
    empty mapping, so the English defaults apply.
    """
    language = babel_locale(locale).language
    messages: dict[str, str] = {}

    for directory in (_CATALOG_DIR, catalog_dir):
        if directory is None:
            continue
        path = directory / f"{language}.yaml"
        if not path.exists():
            continue
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise MessageFormatError(f"Catalog {path} must be a mapping of id to message")
        messages.update({str(k): str(v) for k, v in data.items()})
        logger.debug("Loaded %d messages from %s", len(data), path)

    return messages


@dataclass
class IntlFormatter:
    """Formats message descriptors for one locale.

    Attributes:
        locale: Active locale tag (e.g. "nl", "en-US")
        messages: Catalog of translated templates keyed by descriptor id
        timezone: IANA zone used to interpret date-times without an offset
    """

    locale: str = "en"
    messages: dict[str, str] = field(default_factory=dict)
    timezone: str = "Europe/Amsterdam"

    @classmethod
    def for_locale(
        cls,
        locale: str,
        catalog_dir: Path | None = None,
        timezone: str = "Europe/Amsterdam",
    ) -> "IntlFormatter":
        """Create a formatter with the catalog for ``locale`` loaded."""
        return cls(
            locale=locale,
            messages=load_catalog(locale, catalog_dir),
            timezone=timezone,
        )

    def format_message(
        self,
        descriptor: MessageDescriptor,
        values: dict[str, Any] | None = None,
    ) -> str:
        """Resolve the descriptor's template and interpolate ``values``."""
        template = self.messages.get(descriptor.id, descriptor.default_message)
        return format_template(template, values or {}, self.locale)


# =============================================================================
# Template Formatting
# =============================================================================


def _matching_brace(template: str, start: int) -> int:
    depth = 0
    for index in range(start, len(template)):
        char = template[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    raise MessageFormatError(f"Unbalanced braces in message: {template!r}")


def format_template(
    template: str,
    values: dict[str, Any],
    locale: str,
    count: str | None = None,
) -> str:
    """Interpolate ``values`` into an ICU-style template.

    ``count`` is the formatted number that replaces ``#`` inside plural branches.
    """
    parts: list[str] = []
    index = 0
    while index < len(template):
        char = template[index]
        if char == "{":
            end = _matching_brace(template, index)
            parts.append(_format_argument(template[index + 1:end], values, locale))
            index = end + 1
        elif char == "#" and count is not None:
            parts.append(count)
            index += 1
        else:
            parts.append(char)
            index += 1
    return "".join(parts)


def _format_value(value: Any, locale: str) -> str:
    if is_number(value):
        return format_decimal(value, locale=babel_locale(locale))
    return "" if value is None else str(value)


def _format_argument(body: str, values: dict[str, Any], locale: str) -> str:
    name, _, rest = body.partition(",")
    name = name.strip()
    if name not in values:
        # Unknown placeholders are kept verbatim
        return "{" + body + "}"

    value = values[name]
    if not rest:
        return _format_value(value, locale)

    arg_type, _, options = rest.strip().partition(",")
    arg_type = arg_type.strip()
    if arg_type == "number":
        return _format_value(value, locale)
    if arg_type == "plural":
        return _format_plural(value, options, values, locale)
    raise MessageFormatError(f"Unsupported argument type '{arg_type}' in {{{body}}}")


def _parse_branches(options: str) -> dict[str, str]:
    branches: dict[str, str] = {}
    index = 0
    while index < len(options):
        if options[index].isspace():
            index += 1
            continue
        brace = options.find("{", index)
        if brace == -1:
            raise MessageFormatError(f"Malformed plural options: {options!r}")
        selector = options[index:brace].strip()
        end = _matching_brace(options, brace)
        branches[selector] = options[brace + 1:end]
        index = end + 1
    return branches


def _format_plural(value: Any, options: str, values: dict[str, Any], locale: str) -> str:
    branches = _parse_branches(options)
    if "other" not in branches:
        raise MessageFormatError("Plural argument requires an 'other' branch")

    formatted = _format_value(value, locale)
    branch = branches.get(f"={value}")
    if branch is None:
        category = babel_locale(locale).plural_form(value) if is_number(value) else "other"
        branch = branches.get(category, branches["other"])
    return format_template(branch, values, locale, count=formatted)
