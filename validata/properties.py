"""Property accessors.

A property is read through an injected (name, get) pair rather than runtime
schema metadata, so any object shape can be validated: dataclasses, plain
objects, pydantic models or decoded JSON mappings.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable


def read_property(target: Any, name: str) -> Any:
    """Default accessor: mapping key lookup, attribute access otherwise.

    A missing mapping key reads as absent (None); a missing attribute is a
    programmer error and raises AttributeError.
    """
    if isinstance(target, Mapping): return target.get(name)
    return getattr(target, name)


@dataclass(frozen=True, slots=True)
class Property:
    """Named property with its accessor function."""
    name: str
    get: Callable[[Any], Any]

    @classmethod
    def of(cls, name: str, get: Callable[[Any], Any] | None = None) -> Property:
        if get is None:
            return cls(name, lambda target: read_property(target, name))
        return cls(name, get)

    def read(self, target: Any) -> Any: return self.get(target)
