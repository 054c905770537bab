"""Constraint Descriptors

A constraint identifies a violated rule kind plus its parameters. Constraints
are pure data: frozen dataclasses whose class name is the tag and whose fields,
in declaration order, are the message parameters.

    Between(start=0, end=10).name            -> "Between"
    Between(start=0, end=10).message_params  -> {"start": 0, "end": 10}

Equality is tag + parameters, so constraints compare naturally in tests and
collapse in violation sets.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from typing import Any, Callable, Iterable


def _distinct(values: Iterable[Any]) -> tuple[Any, ...]:
    """Order-preserving de-duplication that tolerates unhashable items."""
    result: list[Any] = []
    for value in values:
        if value not in result:
            result.append(value)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class Constraint:
    """Base class for all constraints."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def message_params(self) -> dict[str, Any]:
        """Constraint parameters in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def message_key(self) -> str:
        """Catalog key tried before `name` when resolving a message."""
        return self.name


@dataclass(frozen=True, slots=True)
class _ValuesConstraint(Constraint):
    """Constraint over a collection of values, normalized to a distinct tuple."""
    values: tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "values", _distinct(self.values))


@dataclass(frozen=True, slots=True)
class _RangeConstraint(Constraint):
    min: int = 0
    max: int = sys.maxsize

    @property
    def message_key(self) -> str:
        if self.max == sys.maxsize and self.min > 0: return f"{self.name}.min"
        if self.min == 0 and self.max < sys.maxsize: return f"{self.name}.max"
        return self.name


# ============================================================================
# Any type
# ============================================================================

@dataclass(frozen=True, slots=True)
class Null(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotNull(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Equals(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class NotEquals(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class In(_ValuesConstraint):
    pass


@dataclass(frozen=True, slots=True)
class NotIn(_ValuesConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Valid(Constraint):
    """Custom predicate. Compares by predicate identity."""
    validator: Callable[[Any], bool]


# ============================================================================
# Strings and collections
# ============================================================================

@dataclass(frozen=True, slots=True)
class Empty(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotEmpty(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Blank(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotBlank(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Size(_RangeConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Contains(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class ContainsAll(_ValuesConstraint):
    pass


@dataclass(frozen=True, slots=True)
class ContainsAny(_ValuesConstraint):
    pass


@dataclass(frozen=True, slots=True)
class NotContain(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class NotContainAll(_ValuesConstraint):
    pass


@dataclass(frozen=True, slots=True)
class NotContainAny(_ValuesConstraint):
    pass


@dataclass(frozen=True, slots=True)
class StartsWith(Constraint):
    prefix: str


@dataclass(frozen=True, slots=True)
class NotStartWith(Constraint):
    prefix: str


@dataclass(frozen=True, slots=True)
class EndsWith(Constraint):
    suffix: str


@dataclass(frozen=True, slots=True)
class NotEndWith(Constraint):
    suffix: str


@dataclass(frozen=True, slots=True)
class Matches(Constraint):
    regex: str


@dataclass(frozen=True, slots=True)
class NotMatch(Constraint):
    regex: str


@dataclass(frozen=True, slots=True)
class Email(Constraint):
    pass


# ============================================================================
# Comparables
# ============================================================================

@dataclass(frozen=True, slots=True)
class Less(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class LessOrEqual(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class Greater(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class GreaterOrEqual(Constraint):
    value: Any


@dataclass(frozen=True, slots=True)
class Between(Constraint):
    start: Any
    end: Any


@dataclass(frozen=True, slots=True)
class NotBetween(Constraint):
    start: Any
    end: Any


# ============================================================================
# Numbers
# ============================================================================

@dataclass(frozen=True, slots=True)
class Zero(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotZero(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class One(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotOne(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Positive(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotPositive(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Negative(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotNegative(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Even(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class Odd(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class IntegerDigits(_RangeConstraint):
    pass


@dataclass(frozen=True, slots=True)
class DecimalDigits(_RangeConstraint):
    pass


# ============================================================================
# Temporal
# ============================================================================

@dataclass(frozen=True, slots=True)
class Today(Constraint):
    pass


@dataclass(frozen=True, slots=True)
class NotToday(Constraint):
    pass


# Constraints whose rules check presence itself rather than treating absence as valid
PRESENCE_CONSTRAINTS: frozenset[type[Constraint]] = frozenset({Null, NotNull, NotEmpty, NotBlank})
