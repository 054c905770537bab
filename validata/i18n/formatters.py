"""Formatter Registry

Locale-aware stringification of message parameters, selected by the
runtime type of the value. Lookup walks the value type's MRO, so a
formatter registered for a base class covers its subclasses unless a more
specific one is registered. Unknown types fall back to str().

Registries are immutable; `with_formatter` returns an extended copy.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from validata.core.logging import i18n_logger
from .catalog import LocaleBundle

Formatter = Callable[[Any, LocaleBundle], str]


def default_formatter(value: Any, bundle: LocaleBundle) -> str: return str(value)


def _localize_separators(text: str, bundle: LocaleBundle) -> str:
    numbers = bundle.numbers
    return text.translate({ord(","): numbers.grouping_separator, ord("."): numbers.decimal_separator})


def format_integer(value: int, bundle: LocaleBundle) -> str:
    return _localize_separators(f"{value:,}", bundle)


def format_float(value: float, bundle: LocaleBundle) -> str:
    if not math.isfinite(value): return str(value)
    text = f"{value:,.{bundle.numbers.max_fraction_digits}f}"
    if "." in text: text = text.rstrip("0").rstrip(".")
    return _localize_separators(text, bundle)


def format_decimal(value: Decimal, bundle: LocaleBundle) -> str:
    if not value.is_finite(): return str(value)
    return _localize_separators(f"{value:,f}", bundle)


def format_fraction(value: Fraction, bundle: LocaleBundle) -> str:
    return format_float(float(value), bundle)


def format_boolean(value: bool, bundle: LocaleBundle) -> str:
    return bundle.booleans.true if value else bundle.booleans.false


def format_enum(value: Enum, bundle: LocaleBundle) -> str: return value.name


def _date_fields(value: date | time, bundle: LocaleBundle) -> dict[str, Any]:
    dates = bundle.dates
    fields: dict[str, Any] = {}
    if isinstance(value, date):
        fields.update(year=value.year, month=value.month, day=value.day,
            month_name=dates.month_names[value.month - 1], month_abbr=dates.month_abbreviations[value.month - 1])
    if isinstance(value, (datetime, time)):
        fields.update(hour=value.hour, hour12=value.hour % 12 or 12, minute=value.minute, second=value.second,
            ampm=dates.am_pm[value.hour >= 12])
    return fields


def is_start_of_day(value: datetime) -> bool:
    return value.time() == time.min


def format_datetime(value: datetime, bundle: LocaleBundle) -> str:
    """Date-only pattern at the start of the day, date and time otherwise."""
    pattern = bundle.dates.date if is_start_of_day(value) else bundle.dates.datetime
    return pattern.format_map(_date_fields(value, bundle))


def format_date(value: date, bundle: LocaleBundle) -> str:
    return bundle.dates.date.format_map(_date_fields(value, bundle))


def format_time(value: time, bundle: LocaleBundle) -> str:
    return bundle.dates.time.format_map(_date_fields(value, bundle))


class FormatterRegistry:
    """Immutable type -> formatter table with MRO lookup.

    Lists and tuples render as their formatted elements joined in order;
    sets render sorted so messages stay deterministic. Registering a
    formatter for a collection type overrides this.
    """

    def __init__(self, formatters: Mapping[type, Formatter] | Iterable[tuple[type, Formatter]] = (),
                 fallback: Formatter = default_formatter):
        self._formatters: Mapping[type, Formatter] = MappingProxyType(dict(formatters))
        self._fallback = fallback

    def get(self, value_type: type) -> Formatter:
        mro = value_type.__mro__
        if issubclass(value_type, Enum):
            # enum classes ahead of their data-type mixins (str, int)
            mro = [cls for cls in mro if issubclass(cls, Enum)] + [cls for cls in mro if not issubclass(cls, Enum)]
        for cls in mro:
            if (formatter := self._formatters.get(cls)) is not None: return formatter
        if issubclass(value_type, (list, tuple)): return self._format_sequence
        if issubclass(value_type, (set, frozenset)): return self._format_set
        return self._fallback

    def __contains__(self, value_type: type) -> bool: return value_type in self._formatters

    def with_formatter(self, value_type: type, formatter: Formatter) -> FormatterRegistry:
        return FormatterRegistry({**self._formatters, value_type: formatter}, self._fallback)

    def format(self, value: Any, bundle: LocaleBundle) -> str:
        """Format `value` for `bundle`; never raises."""
        try:
            return self.get(type(value))(value, bundle)
        except Exception as e:
            i18n_logger().warning("formatter_failed", value_type=type(value).__name__,
                locale=bundle.locale or "default", error=str(e))
            return default_formatter(value, bundle)

    def _format_sequence(self, values: Iterable[Any], bundle: LocaleBundle) -> str:
        return ", ".join(self.format(v, bundle) for v in values)

    def _format_set(self, values: Iterable[Any], bundle: LocaleBundle) -> str:
        return ", ".join(sorted(self.format(v, bundle) for v in values))


def default_formatters() -> FormatterRegistry:
    """Registry for numbers, booleans, enums, dates and times."""
    return FormatterRegistry({
        str: default_formatter,
        bool: format_boolean,
        int: format_integer,
        float: format_float,
        Decimal: format_decimal,
        Fraction: format_fraction,
        Enum: format_enum,
        datetime: format_datetime,
        date: format_date,
        time: format_time,
    })
