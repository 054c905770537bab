"""Localized violation messages: locales, YAML catalog, formatters, resolver."""

from .locales import Locale, SupportedLocales
from .catalog import (
    MESSAGES_DIR,
    BooleanConventions,
    DateConventions,
    LocaleBundle,
    MessageCatalog,
    NumberConventions,
    default_catalog,
    load_bundle,
)
from .formatters import Formatter, FormatterRegistry, default_formatter, default_formatters
from .resolver import (
    MessageResolver,
    default_resolver,
    format_all_locales,
    interpolate,
    resolve_message,
)

__all__ = [
    "Locale",
    "SupportedLocales",
    "MESSAGES_DIR",
    "BooleanConventions",
    "DateConventions",
    "LocaleBundle",
    "MessageCatalog",
    "NumberConventions",
    "default_catalog",
    "load_bundle",
    "Formatter",
    "FormatterRegistry",
    "default_formatter",
    "default_formatters",
    "MessageResolver",
    "default_resolver",
    "format_all_locales",
    "interpolate",
    "resolve_message",
]
