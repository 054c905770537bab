"""Locale keys and the supported locale set."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Locale:
    """Language, country and variant, e.g. Locale("pt", "BR").

    The empty locale Locale() is the default/fallback locale.
    """
    language: str = ""
    country: str = ""
    variant: str = ""

    @classmethod
    def parse(cls, tag: Locale | str | None) -> Locale:
        """Parse "pt_BR", "pt-br", "de_DE.UTF-8" or "" into a Locale."""
        if isinstance(tag, Locale): return tag
        if not tag: return cls()
        base = tag.split(".", 1)[0].split("@", 1)[0].replace("-", "_")
        language, _, rest = base.partition("_")
        country, _, variant = rest.partition("_")
        return cls(language.lower(), country.upper(), variant)

    @property
    def key(self) -> str:
        """Normalized, case-insensitive catalog key ("pt_br")."""
        return "_".join(p for p in (self.language, self.country, self.variant) if p).lower()

    @property
    def is_default(self) -> bool: return not self.key

    def fallback_chain(self) -> tuple[str, ...]:
        """Keys to try in order: exact, language only, default."""
        chain: list[str] = []
        for key in (self.key, self.language.lower(), ""):
            if key not in chain: chain.append(key)
        return tuple(chain)

    def __str__(self) -> str:
        return "_".join(p for p in (self.language, self.country, self.variant) if p)


class SupportedLocales:
    """Locales shipped with the packaged message catalog."""
    DEFAULT = Locale()
    EN = Locale("en")
    DE = Locale("de")
    PT_BR = Locale("pt", "BR")

    ALL: tuple[Locale, ...] = (DEFAULT, DE, EN, PT_BR)
