"""Message catalogs and locale-aware parsing and formatting.

Usage:
    from formforge.i18n import get_date_locale_meta, parse_date

    meta = get_date_locale_meta("nl")
    parse_date("31-5-2023", meta)  # date(2023, 5, 31)
    parse_date("2023-05-31")       # ISO input needs no meta
"""

from formforge.i18n.locale import (
    DateLocaleMeta,
    DateTimeLocaleMeta,
    format_currency,
    format_date_bound,
    format_datetime_bound,
    format_number,
    get_date_locale_meta,
    get_datetime_locale_meta,
    parse_date,
    parse_datetime,
    parse_time,
    to_instant,
)
from formforge.i18n.messages import IntlFormatter, MessageDescriptor, load_catalog

__all__ = [
    "DateLocaleMeta",
    "DateTimeLocaleMeta",
    "IntlFormatter",
    "MessageDescriptor",
    "format_currency",
    "format_date_bound",
    "format_datetime_bound",
    "format_number",
    "get_date_locale_meta",
    "get_datetime_locale_meta",
    "load_catalog",
    "parse_date",
    "parse_datetime",
    "parse_time",
    "to_instant",
]
