"""Rule Catalogue

A rule pairs a constraint descriptor with the predicate that checks it. The
catalogue is closed: every rule the property DSL offers is built here, and
the traversal engine and message resolver only ever see the Rule/Constraint
pair.

Every predicate treats an absent value (None) as valid, except the presence
rules (is_null, is_not_null, is_not_empty, is_not_blank) whose purpose is
presence itself.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable

from validata import constraints as c

# RFC 5322 simplified pattern
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

Clock = Callable[[], date]


@dataclass(frozen=True, slots=True)
class Rule:
    """A constraint together with its predicate."""
    constraint: c.Constraint
    predicate: Callable[[Any], bool]

    def __call__(self, value: Any) -> bool: return self.predicate(value)


def _values(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Accept both vararg and single-iterable call styles."""
    if len(args) == 1 and isinstance(args[0], Iterable) and not isinstance(args[0], (str, bytes)):
        return tuple(args[0])
    return args


def _optional(check: Callable[[Any], bool]) -> Callable[[Any], bool]:
    """Wrap a predicate so that absent values pass."""
    return lambda value: value is None or check(value)


def _fold(text: str) -> str: return text.casefold()


# ============================================================================
# Any type
# ============================================================================

def is_null() -> Rule: return Rule(c.Null(), lambda value: value is None)


def is_not_null() -> Rule: return Rule(c.NotNull(), lambda value: value is not None)


def is_equal_to(expected: Any) -> Rule:
    return Rule(c.Equals(expected), _optional(lambda value: value == expected))


def is_not_equal_to(expected: Any) -> Rule:
    return Rule(c.NotEquals(expected), _optional(lambda value: value != expected))


def is_in(*values: Any) -> Rule:
    options = _values(values)
    return Rule(c.In(options), _optional(lambda value: value in options))


def is_not_in(*values: Any) -> Rule:
    options = _values(values)
    return Rule(c.NotIn(options), _optional(lambda value: value not in options))


def is_valid(validator: Callable[[Any], bool]) -> Rule:
    return Rule(c.Valid(validator), _optional(lambda value: bool(validator(value))))


# ============================================================================
# Strings and collections
# ============================================================================

def is_empty() -> Rule: return Rule(c.Empty(), _optional(lambda value: len(value) == 0))


def is_not_empty() -> Rule: return Rule(c.NotEmpty(), lambda value: value is not None and len(value) > 0)


def is_blank() -> Rule: return Rule(c.Blank(), _optional(lambda value: not value.strip()))


def is_not_blank() -> Rule: return Rule(c.NotBlank(), lambda value: value is not None and bool(value.strip()))


def is_equal_to_ignoring_case(expected: str) -> Rule:
    return Rule(c.Equals(expected), _optional(lambda value: _fold(value) == _fold(expected)))


def is_not_equal_to_ignoring_case(expected: str) -> Rule:
    return Rule(c.NotEquals(expected), _optional(lambda value: _fold(value) != _fold(expected)))


def is_in_ignoring_case(*values: str) -> Rule:
    options = _values(values)
    folded = {_fold(v) for v in options}
    return Rule(c.In(options), _optional(lambda value: _fold(value) in folded))


def is_not_in_ignoring_case(*values: str) -> Rule:
    options = _values(values)
    folded = {_fold(v) for v in options}
    return Rule(c.NotIn(options), _optional(lambda value: _fold(value) not in folded))


def has_size(min: int = 0, max: int = c.Size().max) -> Rule:
    return Rule(c.Size(min, max), _optional(lambda value: min <= len(value) <= max))


def contains(item: Any) -> Rule:
    return Rule(c.Contains(item), _optional(lambda value: item in value))


def contains_ignoring_case(item: str) -> Rule:
    return Rule(c.Contains(item), _optional(lambda value: _fold(item) in _fold(value)))


def contains_all(*items: Any) -> Rule:
    options = _values(items)
    return Rule(c.ContainsAll(options), _optional(lambda value: all(i in value for i in options)))


def contains_all_ignoring_case(*items: str) -> Rule:
    options = _values(items)
    return Rule(c.ContainsAll(options), _optional(lambda value: all(_fold(i) in _fold(value) for i in options)))


def contains_any(*items: Any) -> Rule:
    options = _values(items)
    return Rule(c.ContainsAny(options), _optional(lambda value: any(i in value for i in options)))


def contains_any_ignoring_case(*items: str) -> Rule:
    options = _values(items)
    return Rule(c.ContainsAny(options), _optional(lambda value: any(_fold(i) in _fold(value) for i in options)))


def does_not_contain(item: Any) -> Rule:
    return Rule(c.NotContain(item), _optional(lambda value: item not in value))


def does_not_contain_ignoring_case(item: str) -> Rule:
    return Rule(c.NotContain(item), _optional(lambda value: _fold(item) not in _fold(value)))


def does_not_contain_all(*items: Any) -> Rule:
    options = _values(items)
    return Rule(c.NotContainAll(options), _optional(lambda value: not all(i in value for i in options)))


def does_not_contain_all_ignoring_case(*items: str) -> Rule:
    options = _values(items)
    return Rule(c.NotContainAll(options),
        _optional(lambda value: not all(_fold(i) in _fold(value) for i in options)))


def does_not_contain_any(*items: Any) -> Rule:
    options = _values(items)
    return Rule(c.NotContainAny(options), _optional(lambda value: not any(i in value for i in options)))


def does_not_contain_any_ignoring_case(*items: str) -> Rule:
    options = _values(items)
    return Rule(c.NotContainAny(options),
        _optional(lambda value: not any(_fold(i) in _fold(value) for i in options)))


def starts_with(prefix: str) -> Rule:
    return Rule(c.StartsWith(prefix), _optional(lambda value: value.startswith(prefix)))


def starts_with_ignoring_case(prefix: str) -> Rule:
    return Rule(c.StartsWith(prefix), _optional(lambda value: _fold(value).startswith(_fold(prefix))))


def does_not_start_with(prefix: str) -> Rule:
    return Rule(c.NotStartWith(prefix), _optional(lambda value: not value.startswith(prefix)))


def ends_with(suffix: str) -> Rule:
    return Rule(c.EndsWith(suffix), _optional(lambda value: value.endswith(suffix)))


def ends_with_ignoring_case(suffix: str) -> Rule:
    return Rule(c.EndsWith(suffix), _optional(lambda value: _fold(value).endswith(_fold(suffix))))


def does_not_end_with(suffix: str) -> Rule:
    return Rule(c.NotEndWith(suffix), _optional(lambda value: not value.endswith(suffix)))


def matches(regex: str | re.Pattern) -> Rule:
    compiled = re.compile(regex)
    return Rule(c.Matches(compiled.pattern), _optional(lambda value: compiled.fullmatch(value) is not None))


def does_not_match(regex: str | re.Pattern) -> Rule:
    compiled = re.compile(regex)
    return Rule(c.NotMatch(compiled.pattern), _optional(lambda value: compiled.fullmatch(value) is None))


def is_email() -> Rule: return Rule(c.Email(), _optional(lambda value: EMAIL_PATTERN.fullmatch(value) is not None))


# ============================================================================
# Comparables
# ============================================================================

def is_less_than(bound: Any) -> Rule:
    return Rule(c.Less(bound), _optional(lambda value: value < bound))


def is_less_than_or_equal_to(bound: Any) -> Rule:
    return Rule(c.LessOrEqual(bound), _optional(lambda value: value <= bound))


def is_greater_than(bound: Any) -> Rule:
    return Rule(c.Greater(bound), _optional(lambda value: value > bound))


def is_greater_than_or_equal_to(bound: Any) -> Rule:
    return Rule(c.GreaterOrEqual(bound), _optional(lambda value: value >= bound))


def is_between(start: Any, end: Any) -> Rule:
    """Inclusive on both ends."""
    return Rule(c.Between(start, end), _optional(lambda value: start <= value <= end))


def is_not_between(start: Any, end: Any) -> Rule:
    return Rule(c.NotBetween(start, end), _optional(lambda value: not start <= value <= end))


# ============================================================================
# Numbers
# ============================================================================

def _digits(value: int | float | Decimal) -> tuple[str, str]:
    """Integer and fraction digits of the absolute value's decimal text."""
    number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    integer, _, fraction = format(abs(number), "f").partition(".")
    return integer, fraction.rstrip("0")


def is_zero() -> Rule: return Rule(c.Zero(), _optional(lambda value: value == 0))


def is_not_zero() -> Rule: return Rule(c.NotZero(), _optional(lambda value: value != 0))


def is_one() -> Rule: return Rule(c.One(), _optional(lambda value: value == 1))


def is_not_one() -> Rule: return Rule(c.NotOne(), _optional(lambda value: value != 1))


def is_positive() -> Rule: return Rule(c.Positive(), _optional(lambda value: value > 0))


def is_not_positive() -> Rule: return Rule(c.NotPositive(), _optional(lambda value: value <= 0))


def is_negative() -> Rule: return Rule(c.Negative(), _optional(lambda value: value < 0))


def is_not_negative() -> Rule: return Rule(c.NotNegative(), _optional(lambda value: value >= 0))


def is_even() -> Rule: return Rule(c.Even(), _optional(lambda value: value % 2 == 0))


def is_odd() -> Rule: return Rule(c.Odd(), _optional(lambda value: value % 2 != 0))


def has_integer_digits(min: int = 0, max: int = c.IntegerDigits().max) -> Rule:
    return Rule(c.IntegerDigits(min, max), _optional(lambda value: min <= len(_digits(value)[0]) <= max))


has_digits = has_integer_digits


def has_decimal_digits(min: int = 0, max: int = c.DecimalDigits().max) -> Rule:
    return Rule(c.DecimalDigits(min, max), _optional(lambda value: min <= len(_digits(value)[1]) <= max))


# ============================================================================
# Temporal
# ============================================================================

def _calendar_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def is_today(clock: Clock = date.today) -> Rule:
    return Rule(c.Today(), _optional(lambda value: _calendar_date(value) == clock()))


def is_not_today(clock: Clock = date.today) -> Rule:
    return Rule(c.NotToday(), _optional(lambda value: _calendar_date(value) != clock()))
