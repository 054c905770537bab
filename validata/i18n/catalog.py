"""Message Catalog

Locale bundles loaded from YAML: message templates keyed by constraint tag
plus the number, date and boolean conventions the formatters need. The
catalog is built once and is read-only afterwards.

Bundle file layout (one file per locale, any name ending in .yaml):

    locale: pt_BR
    numbers:
      decimal_separator: ","
      grouping_separator: "."
    dates:
      date: "{day:02d}/{month:02d}/{year}"
      datetime: "{day:02d}/{month:02d}/{year} {hour:02d}:{minute:02d}:{second:02d}"
    messages:
      Between: "Deve estar entre {start} e {end}"

Several directories can be layered: a bundle for a locale that already
exists overrides the fields it sets and merges its messages over the
existing ones.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from validata.core.config import get_settings
from validata.core.errors import CatalogError
from validata.core.logging import i18n_logger
from .locales import Locale

MESSAGES_DIR = Path(__file__).parent / "messages"

_EN_MONTHS = ("January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December")


class NumberConventions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    decimal_separator: str = "."
    grouping_separator: str = ","
    max_fraction_digits: int = Field(default=3, ge=0)


class DateConventions(BaseModel):
    """str.format patterns over year, month, month_name, month_abbr, day,
    hour, hour12, minute, second, ampm."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    date: str = "{month_abbr} {day}, {year}"
    datetime: str = "{month_abbr} {day}, {year} {hour12}:{minute:02d}:{second:02d} {ampm}"
    time: str = "{hour12}:{minute:02d}:{second:02d} {ampm}"
    month_names: tuple[str, ...] = Field(default=_EN_MONTHS, min_length=12, max_length=12)
    month_abbreviations: tuple[str, ...] = Field(default=tuple(m[:3] for m in _EN_MONTHS), min_length=12, max_length=12)
    am_pm: tuple[str, str] = ("AM", "PM")


class BooleanConventions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    true: str = "true"
    false: str = "false"


class LocaleBundle(BaseModel):
    """Everything the resolver needs for one locale."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    locale: str = ""
    numbers: NumberConventions = NumberConventions()
    dates: DateConventions = DateConventions()
    booleans: BooleanConventions = BooleanConventions()
    messages: dict[str, str] = Field(default_factory=dict)

    @field_validator("locale", mode="before")
    @classmethod
    def canonical_locale(cls, v: Any) -> str:
        if v is not None and not isinstance(v, (str, Locale)):
            raise ValueError(f"locale must be a string, got {type(v).__name__} {v!r}; quote YAML keywords such as no or on")
        return str(Locale.parse(v))

    @property
    def key(self) -> str: return Locale.parse(self.locale).key

    def merged_with(self, override: LocaleBundle) -> LocaleBundle:
        """Layer `override` on top: explicitly set fields win, messages merge."""
        update = {name: getattr(override, name) for name in override.model_fields_set if name != "messages"}
        update["messages"] = {**self.messages, **override.messages}
        return self.model_copy(update=update)


def load_bundle(path: Path) -> LocaleBundle:
    """Load one YAML bundle, raising CatalogError on malformed content."""
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return LocaleBundle.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise CatalogError(f"Invalid message bundle {path.name}: {e}", source=str(path)) from e


class MessageCatalog:
    """Read-only mapping of locale key to bundle with locale fallback."""

    def __init__(self, bundles: Iterable[LocaleBundle]):
        layered: dict[str, LocaleBundle] = {}
        for bundle in bundles:
            layered[bundle.key] = layered[bundle.key].merged_with(bundle) if bundle.key in layered else bundle
        if "" not in layered:
            raise CatalogError("Message catalog has no default bundle (locale: \"\")")
        self._bundles: Mapping[str, LocaleBundle] = MappingProxyType(layered)

    @classmethod
    def from_directories(cls, *directories: Path | str) -> MessageCatalog:
        """Load every *.yaml bundle from each directory, later directories layered on top."""
        bundles = [load_bundle(path) for directory in directories for path in sorted(Path(directory).glob("*.yaml"))]
        catalog = cls(bundles)
        i18n_logger().debug("catalog_loaded", locales=[str(locale) or "default" for locale in catalog.locales],
            sources=[str(d) for d in directories])
        return catalog

    @classmethod
    def from_messages(cls, messages: Mapping[str, Mapping[str, str]]) -> MessageCatalog:
        """Build a catalog from {locale tag: {constraint tag: template}} with default conventions."""
        return cls(LocaleBundle(locale=tag, messages=dict(templates)) for tag, templates in messages.items())

    @property
    def locales(self) -> tuple[Locale, ...]:
        return tuple(Locale.parse(b.locale) for b in self._bundles.values())

    @property
    def default_bundle(self) -> LocaleBundle: return self._bundles[""]

    def __contains__(self, locale: Locale | str) -> bool:
        return Locale.parse(locale).key in self._bundles

    def resolve_key(self, locale: Locale | str | None) -> str:
        """First key of the locale's fallback chain present in the catalog."""
        requested = Locale.parse(locale)
        for key in requested.fallback_chain():
            if key in self._bundles:
                if key != requested.key:
                    i18n_logger().debug("locale_fallback", requested=str(requested), resolved=key or "default")
                return key
        return ""

    def bundle(self, locale: Locale | str | None) -> LocaleBundle:
        return self._bundles[self.resolve_key(locale)]

    def template(self, locale: Locale | str | None, *tags: str) -> str | None:
        """First template along the locale's fallback chain.

        Each bundle is asked for every tag in order before moving on to the
        next, less specific bundle.
        """
        for key in Locale.parse(locale).fallback_chain():
            bundle = self._bundles.get(key)
            if bundle is None: continue
            for tag in tags:
                if tag in bundle.messages: return bundle.messages[tag]
        return None


@lru_cache(maxsize=1)
def default_catalog() -> MessageCatalog:
    """Packaged bundles layered with VALIDATA_CATALOG_DIRS, built once."""
    return MessageCatalog.from_directories(MESSAGES_DIR, *get_settings().CATALOG_DIRS)
