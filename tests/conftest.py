"""Shared fixtures for the validata test-suite.

The domain objects mirror a typical request payload: an employee with a
nested address and a list of phones. Catalog fixtures are built in memory so
message assertions do not depend on the packaged YAML wording.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pytest

from validata.core.config import get_settings
from validata.i18n import MessageCatalog, MessageResolver, default_catalog, default_resolver


@dataclass
class Phone:
    number: str | None = None
    kind: str | None = None


@dataclass
class Address:
    street: str | None = None
    city: str | None = None
    zip_code: str | None = None


@dataclass
class Employee:
    id: int | None = None
    name: str | None = None
    email: str | None = None
    salary: Any = None
    hired: date | None = None
    address: Address | None = None
    phones: list[Phone | None] | None = field(default=None)
    tags: list[str] | None = None


@pytest.fixture
def employee() -> Employee:
    return Employee(
        id=1,
        name="Ada Lovelace",
        email="ada@example.com",
        salary=1200.5,
        hired=date(2018, 12, 31),
        address=Address(street="10 Downing St", city="London", zip_code="SW1A2AA"),
        phones=[Phone(number="5551234", kind="home"), Phone(number="5559876", kind="work")],
        tags=["math", "engines"],
    )


@pytest.fixture
def catalog() -> MessageCatalog:
    """Small in-memory catalog with a default, a language and a regional bundle."""
    return MessageCatalog.from_messages({
        "": {
            "Between": "must be between {start} and {end}",
            "NotNull": "must not be null",
            "Equals": "must be equal to {value}",
            "Size": "size must be between {min} and {max}",
            "In": "must be one of {values}",
        },
        "pt": {
            "Between": "deve estar entre {start} e {end}",
        },
        "pt_BR": {
            "NotNull": "não deve ser nulo",
        },
    })


@pytest.fixture
def resolver(catalog: MessageCatalog) -> MessageResolver:
    return MessageResolver(catalog)


@pytest.fixture(autouse=True)
def _reset_cached_defaults():
    """Settings, catalog and resolver are cached per process; isolate tests that touch env."""
    for cached in (get_settings, default_catalog, default_resolver):
        cached.cache_clear()
    yield
    for cached in (get_settings, default_catalog, default_resolver):
        cached.cache_clear()
