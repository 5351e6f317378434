"""Locale-aware parsing and formatting of dates, times and numbers.

Nothing here is cached: every helper derives what it needs from the locale
tag it is called with. The field order and separators of a locale's short
date format are discovered by formatting a fixed reference date with Babel
and reading back where the year, month and day ended up.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo

from babel import dates, numbers

from formforge.i18n.messages import babel_locale

# 31 May 2023: day, month and year are mutually distinguishable, and the
# afternoon hour reveals whether the locale uses a 12-hour clock.
REFERENCE_DATETIME = datetime(2023, 5, 31, 15, 16, 45)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?$"
)
ISO_DATETIME_BOUND_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:\d{2})?$"
)
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")

_LOCALE_TIME_PATTERN = re.compile(r"^(\d{1,2})(\D)(\d{2})(?:\2(\d{2}))?$")


@dataclass(frozen=True)
class DateLocaleMeta:
    """How a locale writes a short numeric date.

    Attributes:
        parts_order: "year", "month" and "day" in display order
        separator: Text between the first two parts (e.g. "/", "-", ".")
    """

    parts_order: tuple[str, ...]
    separator: str


@dataclass(frozen=True)
class DateTimeLocaleMeta:
    date: DateLocaleMeta
    time_separator: str
    is_24_hour: bool


def _date_tokens(formatted: str) -> list[re.Match[str]]:
    return list(re.finditer(r"\d+", formatted))


def get_date_locale_meta(locale: str) -> DateLocaleMeta:
    """Derive part order and separator from the locale's ``yMd`` date format."""
    formatted = dates.format_skeleton("yMd", REFERENCE_DATETIME, locale=babel_locale(locale))
    tokens = _date_tokens(formatted)
    by_value = {
        str(REFERENCE_DATETIME.year): "year",
        str(REFERENCE_DATETIME.month): "month",
        f"{REFERENCE_DATETIME.month:02d}": "month",
        str(REFERENCE_DATETIME.day): "day",
    }
    parts_order = tuple(by_value[token.group()] for token in tokens if token.group() in by_value)
    separator = formatted[tokens[0].end():tokens[1].start()] if len(tokens) > 1 else "-"
    return DateLocaleMeta(parts_order=parts_order, separator=separator)


def get_datetime_locale_meta(locale: str) -> DateTimeLocaleMeta:
    """Derive date meta plus the clock convention from the locale's short time."""
    formatted = dates.format_time(REFERENCE_DATETIME, "short", locale=babel_locale(locale))
    tokens = _date_tokens(formatted)
    time_separator = formatted[tokens[0].end():tokens[1].start()] if len(tokens) > 1 else ":"
    return DateTimeLocaleMeta(
        date=get_date_locale_meta(locale),
        time_separator=time_separator,
        is_24_hour=tokens[0].group() == str(REFERENCE_DATETIME.hour),
    )


# =============================================================================
# Parsing
# =============================================================================


def _parse_locale_date(value: str, meta: DateLocaleMeta) -> date | None:
    pieces = value.split(meta.separator) if meta.separator else []
    if len(pieces) != len(meta.parts_order) or len(pieces) != 3:
        return None
    parts = dict(zip(meta.parts_order, (piece.strip() for piece in pieces)))
    if not all(piece.isdigit() for piece in parts.values()):
        return None
    if len(parts["year"]) != 4 or len(parts["month"]) > 2 or len(parts["day"]) > 2:
        return None
    try:
        return date(int(parts["year"]), int(parts["month"]), int(parts["day"]))
    except ValueError:
        return None


def parse_date(value: Any, meta: DateLocaleMeta | None = None) -> date | None:
    """Parse a date string; ``None`` when it is not a valid, complete date.

    Without ``meta`` only zero-padded ISO ``YYYY-MM-DD`` is accepted. With it,
    the locale's numeric format is used and single-digit day/month are fine.
    """
    if not isinstance(value, str):
        return None
    if meta is not None:
        return _parse_locale_date(value.strip(), meta)
    if not ISO_DATE_PATTERN.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _parse_locale_time(tokens: list[str], meta: DateTimeLocaleMeta) -> time | None:
    if meta.is_24_hour:
        if len(tokens) != 1:
            return None
        period = None
    else:
        if len(tokens) != 2:
            return None
        period = tokens[1].upper().replace(".", "")
        if period not in ("AM", "PM"):
            return None

    match = _LOCALE_TIME_PATTERN.fullmatch(tokens[0])
    if not match or match.group(2) != meta.time_separator:
        return None
    hour, minute = int(match.group(1)), int(match.group(3))
    second = int(match.group(4) or 0)

    if period is not None:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if period == "PM" else 0)
    try:
        return time(hour, minute, second)
    except ValueError:
        return None


def parse_datetime(
    value: Any,
    meta: DateTimeLocaleMeta | None = None,
    require_seconds: bool = True,
) -> datetime | None:
    """Parse a date-time string; ``None`` when it is not a complete date-time.

    Without ``meta`` the value must be ISO 8601 with a ``T`` separator and an
    optional ``Z``/offset suffix; ``require_seconds=False`` also accepts the
    ``YYYY-MM-DDTHH:MM`` form used for configured bounds. With ``meta`` the
    value is "<locale date>[,] <locale time>[ AM|PM]".
    """
    if not isinstance(value, str):
        return None

    if meta is None:
        pattern = ISO_DATETIME_PATTERN if require_seconds else ISO_DATETIME_BOUND_PATTERN
        if not pattern.fullmatch(value):
            return None
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None

    tokens = value.split()
    if len(tokens) < 2:
        return None
    parsed_date = _parse_locale_date(tokens[0].rstrip(","), meta.date)
    parsed_time = _parse_locale_time(tokens[1:], meta)
    if parsed_date is None or parsed_time is None:
        return None
    return datetime.combine(parsed_date, parsed_time)


def parse_time(value: Any) -> time | None:
    """Parse zero-padded ``HH:MM`` or ``HH:MM:SS``; ``None`` otherwise."""
    if not isinstance(value, str):
        return None
    match = TIME_PATTERN.fullmatch(value)
    if not match:
        return None
    return time(int(match.group(1)), int(match.group(2)), int(match.group(3) or 0))


def to_instant(value: datetime, timezone: str) -> datetime:
    """Attach ``timezone`` to naive date-times so they compare as instants."""
    if value.tzinfo is None:
        return value.replace(tzinfo=ZoneInfo(timezone))
    return value


# =============================================================================
# Formatting
# =============================================================================


def format_number(value: float | int, locale: str) -> str:
    return numbers.format_decimal(value, locale=babel_locale(locale))


def format_currency(value: float | int, currency: str, locale: str) -> str:
    """Format an amount in ``currency``, e.g. ``€ 10,00`` for nl and ``€10.00`` for en."""
    return numbers.format_currency(value, currency, locale=babel_locale(locale))


def format_date_bound(value: date, locale: str) -> str:
    """Short numeric date in the locale's order, e.g. ``8-10-2025`` for nl."""
    moment = datetime.combine(value, time())
    return dates.format_skeleton("yMd", moment, locale=babel_locale(locale))


def format_datetime_bound(value: datetime, locale: str, timezone: str) -> str:
    """Numeric date plus short time, joined with the locale's date-time pattern.

    Offset-aware values are shown in ``timezone``; naive values as given.
    """
    if value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)
    babel = babel_locale(locale)
    date_part = dates.format_skeleton("yMd", value, locale=babel)
    time_part = dates.format_time(value, "short", locale=babel)
    pattern = str(dates.get_datetime_format("short", locale=babel)).replace("'", "")
    return pattern.replace("{1}", date_part).replace("{0}", time_part)
