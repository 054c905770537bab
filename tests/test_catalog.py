"""Locales and the YAML-backed message catalog."""
from __future__ import annotations

import json

import pytest

from validata import ConstraintViolation, NotNull, resolve_message
from validata.core.errors import CatalogError, ErrorCode
from validata.i18n import (
    MESSAGES_DIR,
    Locale,
    LocaleBundle,
    MessageCatalog,
    SupportedLocales,
    default_catalog,
    load_bundle,
)


# =============================================================================
# Locale
# =============================================================================

@pytest.mark.parametrize(
    "tag,expected",
    [
        ("pt_BR", Locale("pt", "BR")),
        ("pt-br", Locale("pt", "BR")),
        ("de_DE.UTF-8", Locale("de", "DE")),
        ("EN", Locale("en")),
        ("", Locale()),
        (None, Locale()),
    ],
)
def test_locale_parse(tag, expected):
    assert Locale.parse(tag) == expected


def test_locale_key_and_display():
    locale = Locale.parse("pt-br")
    assert locale.key == "pt_br"
    assert str(locale) == "pt_BR"
    assert Locale().is_default


def test_fallback_chain():
    assert Locale("pt", "BR").fallback_chain() == ("pt_br", "pt", "")
    assert Locale("de").fallback_chain() == ("de", "")
    assert Locale().fallback_chain() == ("",)


# =============================================================================
# Catalog construction
# =============================================================================

def test_packaged_catalog_covers_supported_locales():
    assert set(default_catalog().locales) == set(SupportedLocales.ALL)


def test_catalog_requires_default_bundle():
    with pytest.raises(CatalogError):
        MessageCatalog([LocaleBundle(locale="de")])


def test_bundle_locale_is_canonicalized():
    assert LocaleBundle(locale="pt-br").locale == "pt_BR"
    assert LocaleBundle(locale="pt-br").key == "pt_br"


def test_resolve_key_and_membership():
    catalog = default_catalog()
    assert catalog.resolve_key("pt_BR") == "pt_br"
    assert catalog.resolve_key("de_CH") == "de"
    assert catalog.resolve_key("it") == ""
    assert "PT-BR" in catalog
    assert "it" not in catalog


def test_packaged_conventions():
    catalog = default_catalog()
    assert catalog.bundle("de").numbers.decimal_separator == ","
    assert catalog.bundle("pt_BR").booleans.true == "verdadeiro"
    assert catalog.default_bundle.dates.month_abbreviations[11] == "Dec"


# =============================================================================
# Layering and loading errors
# =============================================================================

def test_later_directories_override_messages(tmp_path):
    (tmp_path / "de.yaml").write_text('locale: de\nmessages:\n  NotNull: "Pflichtfeld"\n', encoding="utf-8")
    catalog = MessageCatalog.from_directories(MESSAGES_DIR, tmp_path)

    assert catalog.template("de", "NotNull") == "Pflichtfeld"
    assert catalog.template("de", "Between") == "Muss zwischen {start} und {end} liegen"
    assert catalog.bundle("de").numbers.grouping_separator == "."


def test_new_locale_needs_only_a_bundle(tmp_path):
    (tmp_path / "fr.yaml").write_text(
        'locale: fr\nbooleans:\n  "true": vrai\n  "false": faux\nmessages:\n  NotNull: "Ne doit pas être nul"\n',
        encoding="utf-8",
    )
    catalog = MessageCatalog.from_directories(MESSAGES_DIR, tmp_path)
    assert Locale("fr") in catalog.locales
    assert catalog.template("fr_CA", "NotNull") == "Ne doit pas être nul"
    assert catalog.template("fr", "Between") == "Must be between {start} and {end}"


def test_extra_catalog_dirs_from_settings(tmp_path, monkeypatch):
    (tmp_path / "en.yaml").write_text('locale: en\nmessages:\n  NotNull: "Required"\n', encoding="utf-8")
    monkeypatch.setenv("VALIDATA_CATALOG_DIRS", json.dumps([str(tmp_path)]))

    assert resolve_message(ConstraintViolation("id", NotNull()), "en") == "Required"
    assert resolve_message(ConstraintViolation("id", NotNull()), "de") == "Darf nicht null sein"


@pytest.mark.parametrize(
    "content",
    [
        "locale: de\nunknown_section: 1\n",
        "locale: de\ndates:\n  month_names: [Jan]\n",
        "locale: [de\n",
        "locale: no\n",
        "locale: 42\n",
    ],
)
def test_malformed_bundle_raises_catalog_error(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CatalogError) as exc_info:
        load_bundle(path)
    assert exc_info.value.source == str(path)
    assert exc_info.value.to_app_error().code is ErrorCode.E9010_CATALOG_INVALID


def test_quoted_yaml_keyword_locale_loads(tmp_path):
    path = tmp_path / "nb.yaml"
    path.write_text('locale: "no"\nmessages:\n  NotNull: "Kan ikke vaere null"\n', encoding="utf-8")
    bundle = load_bundle(path)
    assert bundle.locale == "no"
    assert Locale.parse(bundle.locale) == Locale("no")


def test_unquoted_yaml_keyword_locale_names_the_problem(tmp_path):
    path = tmp_path / "nb.yaml"
    path.write_text("locale: no\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="locale must be a string"):
        load_bundle(path)


def test_missing_bundle_file_raises_catalog_error(tmp_path):
    with pytest.raises(CatalogError):
        load_bundle(tmp_path / "absent.yaml")
