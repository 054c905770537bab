"""Message Resolution

Turns a violation into a localized message:

1. resolve the locale through its fallback chain (exact, language, default)
2. look up the template for the constraint tag
3. build placeholders: {value} is the offending value, then one entry per
   constraint parameter in declaration order (a parameter named "value"
   replaces the offending value)
4. format each placeholder by its runtime type for the resolved locale
5. substitute {name} placeholders textually

Resolution never raises: a missing template degrades to
"<path>: <Tag>(<param>=<raw>, ...)" and unformattable values to str().
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Iterable, Mapping

from validata.core.logging import i18n_logger
from validata.violations import ConstraintViolation, ConstraintViolationMessage
from .catalog import LocaleBundle, MessageCatalog, default_catalog
from .formatters import Formatter, FormatterRegistry, default_formatters
from .locales import Locale

PLACEHOLDER = re.compile(r"\{(\w+)\}")


def interpolate(template: str, values: Mapping[str, str]) -> str:
    """Replace {name} placeholders present in `values`; others stay as written."""
    return PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def untemplated_message(violation: ConstraintViolation) -> str:
    params = ", ".join(f"{k}={v!r}" for k, v in violation.constraint.message_params.items())
    return f"{violation.property}: {violation.constraint.name}({params})"


class MessageResolver:
    """Resolves violation messages against an explicit catalog and formatter registry."""

    def __init__(self, catalog: MessageCatalog, formatters: FormatterRegistry | None = None):
        self.catalog = catalog
        self.formatters = formatters or default_formatters()

    def message_params(self, violation: ConstraintViolation, bundle: LocaleBundle) -> dict[str, str]:
        raw: dict[str, Any] = {"value": violation.value, **violation.constraint.message_params}
        return {name: self.formatters.format(value, bundle) for name, value in raw.items()}

    def resolve(self, violation: ConstraintViolation, locale: Locale | str | None = None) -> str:
        key = self.catalog.resolve_key(locale)
        bundle = self.catalog.bundle(key)
        constraint = violation.constraint
        template = self.catalog.template(key, constraint.message_key, constraint.name)
        if template is None:
            i18n_logger().debug("message_template_missing", constraint=constraint.name,
                locale=bundle.locale or "default")
            return untemplated_message(violation)
        return interpolate(template, self.message_params(violation, bundle))

    def resolve_all(self, violations: Iterable[ConstraintViolation],
                    locale: Locale | str | None = None) -> list[ConstraintViolationMessage]:
        return [ConstraintViolationMessage(property=v.property, constraint=v.constraint, value=v.value,
            message=self.resolve(v, locale)) for v in violations]

    def format_all_locales(self, value: Any, formatter: Formatter | None = None) -> dict[Locale, str]:
        """Format `value` once per catalog locale."""
        result: dict[Locale, str] = {}
        for locale in self.catalog.locales:
            bundle = self.catalog.bundle(locale)
            result[locale] = formatter(value, bundle) if formatter else self.formatters.format(value, bundle)
        return result


@lru_cache(maxsize=1)
def default_resolver() -> MessageResolver:
    """Resolver over the packaged catalog and default formatters, built once."""
    return MessageResolver(default_catalog(), default_formatters())


def resolve_message(violation: ConstraintViolation, locale: Locale | str | None = None,
                    resolver: MessageResolver | None = None) -> str:
    return (resolver or default_resolver()).resolve(violation, locale)


def format_all_locales(value: Any, formatter: Formatter | None = None,
                       resolver: MessageResolver | None = None) -> dict[Locale, str]:
    return (resolver or default_resolver()).format_all_locales(value, formatter)
