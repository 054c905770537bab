"""Validation Context and Traversal Engine

A Validator is the per-object accumulator of one validation run. Rules are
declared per property through chaining handles; nested objects and
collections open child validators whose violations are merged back with
their property path prefixed.

Usage:
    from validata import validate

    validate(employee, lambda v: (
        v.field("name").is_not_blank().has_size(min=3, max=80),
        v.field("address").validate(lambda a: a.field("city").is_not_null()),
        v.field("phones").validate_for_each(lambda p: p.field("number").matches(r"\\d+")),
    ))

    # or as a context manager
    with Validator(employee) as v:
        v.field("id").is_not_null().is_positive()
    # Raises ConstraintViolationError if any violation was recorded

Semantics:
- First violation wins per property: once a property has a recorded
  violation, later rules on the same property are skipped.
- Absent values (None) are never descended into.
- The target is never mutated.
- There is no cycle guard: object graphs must be acyclic along the nested
  rules declared on them.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Generic, Iterable, TypeVar

from validata import rules
from validata.constraints import Constraint
from validata.core.logging import validation_logger
from validata.properties import Property
from validata.violations import ConstraintViolation, ConstraintViolationError, ViolationSet

E = TypeVar("E")
T = TypeVar("T")

Block = Callable[["Validator[Any]"], Any]


class Validator(Generic[E]):
    """Validation context bound to one target object."""

    def __init__(self, target: E):
        self.target, self.violations = target, ViolationSet()

    def __enter__(self) -> Validator[E]: return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None: self.raise_if_violations()
        return False

    def field(self, name: str, get: Callable[[E], Any] | None = None) -> PropertyRules[E]:
        """Rule handle for the property `name`, read with `get` or the default accessor."""
        return PropertyRules(self, Property.of(name, get))

    def evaluate(self, property_name: str, value: Any, constraint: Constraint,
                 predicate: Callable[[Any], bool]) -> bool:
        """Record a violation of `constraint` unless `predicate(value)` holds.

        No-op when the property already has a violation. Returns True when
        the property has no violation afterwards.
        """
        if self.violations.has_property(property_name): return False
        if predicate(value): return True
        self.violations.add(ConstraintViolation(property=property_name, constraint=constraint, value=value))
        validation_logger().debug("constraint_violated", property=property_name, constraint=constraint.name)
        return False

    def descend(self, property_name: str, child: Any, block: Block) -> None:
        """Validate a nested object and absorb its violations as `name.path`."""
        if child is None: return
        self._absorb(property_name, child, block)

    def descend_each(self, property_name: str, children: Iterable[Any] | None, block: Block) -> None:
        """Validate each element of a collection and absorb violations as `name[i].path`."""
        if children is None: return
        for index, child in enumerate(children):
            if child is not None: self._absorb(f"{property_name}[{index}]", child, block)

    def _absorb(self, prefix: str, child: Any, block: Block) -> None:
        nested = Validator(child)
        block(nested)
        self.violations.update(v.prefixed(prefix) for v in nested.violations)

    def finish(self) -> tuple[ConstraintViolation, ...]:
        """Frozen snapshot of the violations recorded so far."""
        return self.violations.freeze()

    @property
    def has_violations(self) -> bool: return bool(self.violations)

    def raise_if_violations(self) -> None:
        if self.violations:
            validation_logger().debug("validation_failed", target=type(self.target).__name__,
                violation_count=len(self.violations))
            raise ConstraintViolationError(self.finish())


def validate(target: E, block: Block) -> E:
    """Validate `target` with the rules declared in `block`.

    Returns the target unchanged so calls can be chained; raises
    ConstraintViolationError carrying every violation otherwise.
    """
    validator = Validator(target)
    block(validator)
    validator.raise_if_violations()
    return target


class PropertyRules(Generic[E]):
    """Chaining rule handle for one property of a validator's target.

    Every rule method returns the same handle.
    """

    __slots__ = ("_validator", "_property")

    def __init__(self, validator: Validator[E], prop: Property):
        self._validator, self._property = validator, prop

    @property
    def name(self) -> str: return self._property.name

    @property
    def value(self) -> Any: return self._property.read(self._validator.target)

    def check(self, rule: rules.Rule) -> PropertyRules[E]:
        """Evaluate any rule against this property."""
        self._validator.evaluate(self.name, self.value, rule.constraint, rule.predicate)
        return self

    # ------------------------------------------------------------------
    # Nested traversal
    # ------------------------------------------------------------------

    def validate(self, block: Block) -> PropertyRules[E]:
        self._validator.descend(self.name, self.value, block)
        return self

    def validate_for_each(self, block: Block) -> PropertyRules[E]:
        self._validator.descend_each(self.name, self.value, block)
        return self

    # ------------------------------------------------------------------
    # Any type
    # ------------------------------------------------------------------

    def is_null(self) -> PropertyRules[E]: return self.check(rules.is_null())

    def is_not_null(self) -> PropertyRules[E]: return self.check(rules.is_not_null())

    def is_equal_to(self, expected: Any) -> PropertyRules[E]: return self.check(rules.is_equal_to(expected))

    def is_not_equal_to(self, expected: Any) -> PropertyRules[E]: return self.check(rules.is_not_equal_to(expected))

    def is_in(self, *values: Any) -> PropertyRules[E]: return self.check(rules.is_in(*values))

    def is_not_in(self, *values: Any) -> PropertyRules[E]: return self.check(rules.is_not_in(*values))

    def is_valid(self, validator: Callable[[Any], bool]) -> PropertyRules[E]:
        return self.check(rules.is_valid(validator))

    # ------------------------------------------------------------------
    # Strings and collections
    # ------------------------------------------------------------------

    def is_empty(self) -> PropertyRules[E]: return self.check(rules.is_empty())

    def is_not_empty(self) -> PropertyRules[E]: return self.check(rules.is_not_empty())

    def is_blank(self) -> PropertyRules[E]: return self.check(rules.is_blank())

    def is_not_blank(self) -> PropertyRules[E]: return self.check(rules.is_not_blank())

    def is_equal_to_ignoring_case(self, expected: str) -> PropertyRules[E]:
        return self.check(rules.is_equal_to_ignoring_case(expected))

    def is_not_equal_to_ignoring_case(self, expected: str) -> PropertyRules[E]:
        return self.check(rules.is_not_equal_to_ignoring_case(expected))

    def is_in_ignoring_case(self, *values: str) -> PropertyRules[E]:
        return self.check(rules.is_in_ignoring_case(*values))

    def is_not_in_ignoring_case(self, *values: str) -> PropertyRules[E]:
        return self.check(rules.is_not_in_ignoring_case(*values))

    def has_size(self, min: int = 0, max: int | None = None) -> PropertyRules[E]:
        return self.check(rules.has_size(min) if max is None else rules.has_size(min, max))

    def contains(self, item: Any) -> PropertyRules[E]: return self.check(rules.contains(item))

    def contains_ignoring_case(self, item: str) -> PropertyRules[E]:
        return self.check(rules.contains_ignoring_case(item))

    def contains_all(self, *items: Any) -> PropertyRules[E]: return self.check(rules.contains_all(*items))

    def contains_all_ignoring_case(self, *items: str) -> PropertyRules[E]:
        return self.check(rules.contains_all_ignoring_case(*items))

    def contains_any(self, *items: Any) -> PropertyRules[E]: return self.check(rules.contains_any(*items))

    def contains_any_ignoring_case(self, *items: str) -> PropertyRules[E]:
        return self.check(rules.contains_any_ignoring_case(*items))

    def does_not_contain(self, item: Any) -> PropertyRules[E]: return self.check(rules.does_not_contain(item))

    def does_not_contain_ignoring_case(self, item: str) -> PropertyRules[E]:
        return self.check(rules.does_not_contain_ignoring_case(item))

    def does_not_contain_all(self, *items: Any) -> PropertyRules[E]:
        return self.check(rules.does_not_contain_all(*items))

    def does_not_contain_all_ignoring_case(self, *items: str) -> PropertyRules[E]:
        return self.check(rules.does_not_contain_all_ignoring_case(*items))

    def does_not_contain_any(self, *items: Any) -> PropertyRules[E]:
        return self.check(rules.does_not_contain_any(*items))

    def does_not_contain_any_ignoring_case(self, *items: str) -> PropertyRules[E]:
        return self.check(rules.does_not_contain_any_ignoring_case(*items))

    def starts_with(self, prefix: str) -> PropertyRules[E]: return self.check(rules.starts_with(prefix))

    def starts_with_ignoring_case(self, prefix: str) -> PropertyRules[E]:
        return self.check(rules.starts_with_ignoring_case(prefix))

    def does_not_start_with(self, prefix: str) -> PropertyRules[E]:
        return self.check(rules.does_not_start_with(prefix))

    def ends_with(self, suffix: str) -> PropertyRules[E]: return self.check(rules.ends_with(suffix))

    def ends_with_ignoring_case(self, suffix: str) -> PropertyRules[E]:
        return self.check(rules.ends_with_ignoring_case(suffix))

    def does_not_end_with(self, suffix: str) -> PropertyRules[E]: return self.check(rules.does_not_end_with(suffix))

    def matches(self, regex: str) -> PropertyRules[E]: return self.check(rules.matches(regex))

    def does_not_match(self, regex: str) -> PropertyRules[E]: return self.check(rules.does_not_match(regex))

    def is_email(self) -> PropertyRules[E]: return self.check(rules.is_email())

    # ------------------------------------------------------------------
    # Comparables
    # ------------------------------------------------------------------

    def is_less_than(self, bound: Any) -> PropertyRules[E]: return self.check(rules.is_less_than(bound))

    def is_less_than_or_equal_to(self, bound: Any) -> PropertyRules[E]:
        return self.check(rules.is_less_than_or_equal_to(bound))

    def is_greater_than(self, bound: Any) -> PropertyRules[E]: return self.check(rules.is_greater_than(bound))

    def is_greater_than_or_equal_to(self, bound: Any) -> PropertyRules[E]:
        return self.check(rules.is_greater_than_or_equal_to(bound))

    def is_between(self, start: Any, end: Any) -> PropertyRules[E]: return self.check(rules.is_between(start, end))

    def is_not_between(self, start: Any, end: Any) -> PropertyRules[E]:
        return self.check(rules.is_not_between(start, end))

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def is_zero(self) -> PropertyRules[E]: return self.check(rules.is_zero())

    def is_not_zero(self) -> PropertyRules[E]: return self.check(rules.is_not_zero())

    def is_one(self) -> PropertyRules[E]: return self.check(rules.is_one())

    def is_not_one(self) -> PropertyRules[E]: return self.check(rules.is_not_one())

    def is_positive(self) -> PropertyRules[E]: return self.check(rules.is_positive())

    def is_not_positive(self) -> PropertyRules[E]: return self.check(rules.is_not_positive())

    def is_negative(self) -> PropertyRules[E]: return self.check(rules.is_negative())

    def is_not_negative(self) -> PropertyRules[E]: return self.check(rules.is_not_negative())

    def is_even(self) -> PropertyRules[E]: return self.check(rules.is_even())

    def is_odd(self) -> PropertyRules[E]: return self.check(rules.is_odd())

    def has_integer_digits(self, min: int = 0, max: int | None = None) -> PropertyRules[E]:
        return self.check(rules.has_integer_digits(min) if max is None else rules.has_integer_digits(min, max))

    has_digits = has_integer_digits

    def has_decimal_digits(self, min: int = 0, max: int | None = None) -> PropertyRules[E]:
        return self.check(rules.has_decimal_digits(min) if max is None else rules.has_decimal_digits(min, max))

    # ------------------------------------------------------------------
    # Temporal
    # ------------------------------------------------------------------

    def is_today(self, clock: rules.Clock = date.today) -> PropertyRules[E]: return self.check(rules.is_today(clock))

    def is_not_today(self, clock: rules.Clock = date.today) -> PropertyRules[E]:
        return self.check(rules.is_not_today(clock))
