"""Traversal engine: first-violation-wins, absence, path composition, failure condition."""
from __future__ import annotations

import time
from datetime import date

import pytest

from tests.conftest import Address, Employee, Phone
from validata import (
    Between,
    ConstraintViolation,
    ConstraintViolationError,
    Email,
    IntegerDigits,
    NotBlank,
    NotNull,
    Positive,
    Size,
    Validator,
    validate,
)


def _violations(target, block) -> tuple[ConstraintViolation, ...]:
    with pytest.raises(ConstraintViolationError) as exc_info:
        validate(target, block)
    return exc_info.value.violations


# =============================================================================
# validate() entry point
# =============================================================================

def test_valid_object_is_returned_unchanged(employee):
    """A passing validation returns the very same target."""
    result = validate(employee, lambda v: (
        v.field("id").is_not_null().is_positive(),
        v.field("name").is_not_blank().has_size(min=3, max=80),
    ))
    assert result is employee


def test_between_scenario():
    """{value: 50} checked with is_between(0, 10) yields exactly one violation."""
    violations = _violations({"value": 50}, lambda v: v.field("value").is_between(0, 10))
    assert violations == (ConstraintViolation(property="value", constraint=Between(0, 10), value=50),)


def test_first_violation_wins_per_property():
    """A missing id violates NotNull only; is_positive is not reported."""
    violations = _violations(Employee(id=None), lambda v: v.field("id").is_not_null().is_positive())
    assert violations == (ConstraintViolation("id", NotNull(), None),)


def test_later_rule_reported_when_earlier_passes():
    violations = _violations(Employee(id=-3), lambda v: v.field("id").is_not_null().is_positive())
    assert violations == (ConstraintViolation("id", Positive(), -3),)


def test_separate_properties_each_report_a_violation():
    violations = _violations(Employee(id=None, name=" "), lambda v: (
        v.field("id").is_not_null(),
        v.field("name").is_not_blank(),
    ))
    assert [x.property for x in violations] == ["id", "name"]
    assert violations[1].constraint == NotBlank()


def test_repeated_declaration_of_same_property_is_skipped():
    """Rules declared again on a property that already failed record nothing."""
    def block(v):
        v.field("name").has_size(min=5)
        v.field("name").is_equal_to("x")

    violations = _violations(Employee(name="abc"), block)
    assert violations == (ConstraintViolation("name", Size(5), "abc"),)


def test_absent_values_pass_non_presence_rules():
    """None passes every rule except the presence rules."""
    validate(Employee(), lambda v: (
        v.field("name").has_size(min=3).matches(r"[A-Z].*").is_email(),
        v.field("id").is_positive().is_between(1, 10).is_even(),
        v.field("hired").is_today(),
    ))


# =============================================================================
# Nested traversal
# =============================================================================

def test_nested_object_path_composition():
    """A failing city rule under address is reported as address.city."""
    target = Employee(address=Address(city=""))
    violations = _violations(target, lambda v: v.field("address").validate(
        lambda a: a.field("city").is_not_blank()))
    assert violations == (ConstraintViolation("address.city", NotBlank(), ""),)


def test_collection_path_composition():
    """Only the second phone fails and is reported with its index."""
    target = Employee(phones=[Phone(number="123"), Phone(number="12a")])
    violations = _violations(target, lambda v: v.field("phones").validate_for_each(
        lambda p: p.field("number").matches(r"\d+")))
    assert [x.property for x in violations] == ["phones[1].number"]
    assert violations[0].value == "12a"


def test_absent_nested_object_is_not_descended():
    validate(Employee(address=None), lambda v: v.field("address").validate(
        lambda a: a.field("city").is_not_null()))


def test_absent_collection_and_elements_are_skipped():
    """None collections are skipped; None elements keep their index slot."""
    validate(Employee(phones=None), lambda v: v.field("phones").validate_for_each(
        lambda p: p.field("number").is_not_null()))

    target = Employee(phones=[None, Phone(number=None)])
    violations = _violations(target, lambda v: v.field("phones").validate_for_each(
        lambda p: p.field("number").is_not_null()))
    assert [x.property for x in violations] == ["phones[1].number"]


def test_deeply_nested_paths():
    data = {"company": {"staff": [{"address": {"city": None}}]}}
    violations = _violations(data, lambda v: v.field("company").validate(
        lambda c: c.field("staff").validate_for_each(
            lambda s: s.field("address").validate(
                lambda a: a.field("city").is_not_null()))))
    assert violations[0].property == "company.staff[0].address.city"


def test_large_collection_failures_are_recorded_in_linear_time():
    """Every element failing still reports once per index without rescanning the set."""
    target = Employee(phones=[Phone(number=None) for _ in range(8000)])
    started = time.perf_counter()
    violations = _violations(target, lambda v: v.field("phones").validate_for_each(
        lambda p: p.field("number").is_not_null()))
    elapsed = time.perf_counter() - started

    assert len(violations) == 8000
    assert violations[0].property == "phones[0].number"
    assert violations[-1].property == "phones[7999].number"
    assert elapsed < 5.0


def test_nested_rules_and_own_rules_on_same_property():
    """A nested violation under address does not block rules on address itself."""
    target = Employee(address=Address(city=None))
    violations = _violations(target, lambda v: v.field("address")
        .validate(lambda a: a.field("city").is_not_null())
        .is_null())
    assert [x.property for x in violations] == ["address.city", "address"]


# =============================================================================
# Idempotence and immutability
# =============================================================================

def test_validation_is_idempotent(employee):
    employee.name = ""
    employee.phones[0].number = None

    def block(v):
        v.field("name").is_not_blank()
        v.field("phones").validate_for_each(lambda p: p.field("number").is_not_null())

    first = _violations(employee, block)
    second = _violations(employee, block)
    assert set(map(repr, first)) == set(map(repr, second))
    assert first == second


def test_target_is_not_mutated(employee):
    before = repr(employee)
    with pytest.raises(ConstraintViolationError):
        validate(employee, lambda v: v.field("id").is_negative())
    assert repr(employee) == before


# =============================================================================
# Validator context
# =============================================================================

def test_context_manager_raises_on_exit():
    with pytest.raises(ConstraintViolationError) as exc_info:
        with Validator(Employee(id=0)) as v:
            v.field("id").is_not_zero()
    assert exc_info.value.violations[0].property == "id"


def test_context_manager_does_not_mask_other_errors():
    with pytest.raises(KeyError):
        with Validator(Employee(id=None)) as v:
            v.field("id").is_not_null()
            raise KeyError("boom")


def test_finish_returns_frozen_snapshot_without_raising():
    v = Validator(Employee(id=None, name=""))
    v.field("id").is_not_null()
    v.field("name").is_not_empty()
    snapshot = v.finish()
    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 2
    assert v.has_violations


def test_evaluate_is_noop_after_first_violation():
    calls = []

    def predicate(value):
        calls.append(value)
        return True

    v = Validator({"x": 1})
    assert v.evaluate("x", 1, Positive(), lambda value: False) is False
    assert v.evaluate("x", 1, NotNull(), predicate) is False
    assert calls == []
    assert len(v.violations) == 1


def test_custom_accessor():
    """An injected getter replaces attribute lookup."""
    violations = _violations(Employee(name="ab"), lambda v: v.field("display", lambda e: e.name.upper())
        .has_size(min=3))
    assert violations == (ConstraintViolation("display", Size(3), "AB"),)


def test_mapping_target_missing_key_reads_as_absent():
    violations = _violations({}, lambda v: v.field("name").is_not_null())
    assert violations[0].constraint == NotNull()


def test_unknown_attribute_raises_attribute_error():
    with pytest.raises(AttributeError):
        validate(Employee(), lambda v: v.field("nickname").is_not_null())


def test_rule_on_incompatible_type_raises_type_error():
    with pytest.raises(TypeError):
        validate({"id": 5}, lambda v: v.field("id").has_size(min=1))


# =============================================================================
# Rule declaration surface
# =============================================================================

def test_full_rule_surface_on_valid_employee(employee):
    """Every chaining method is wired to its rule; a valid employee passes them all."""
    validate(employee, lambda v: (
        v.field("id").is_not_null().is_equal_to(1).is_not_equal_to(2).is_in(1, 2, 3).is_not_in(0)
            .is_valid(lambda i: i < 100).is_one().is_not_zero().is_positive().is_not_negative().is_odd()
            .is_less_than(10).is_less_than_or_equal_to(1).is_greater_than(0).is_greater_than_or_equal_to(1)
            .is_between(1, 5).is_not_between(2, 5).has_integer_digits(max=1).has_digits(1, 1),
        v.field("name").is_not_blank().is_not_empty().has_size(min=3, max=80)
            .is_equal_to_ignoring_case("ada lovelace").is_not_equal_to_ignoring_case("bob")
            .is_in_ignoring_case("ADA LOVELACE").is_not_in_ignoring_case("bob")
            .starts_with("Ada").starts_with_ignoring_case("ada").does_not_start_with("Bob")
            .ends_with("lace").ends_with_ignoring_case("LACE").does_not_end_with("x")
            .contains("Love").contains_ignoring_case("love").contains_all("Ada", "Love")
            .contains_all_ignoring_case("ada", "love").contains_any("x", "Ada").contains_any_ignoring_case("x", "ada")
            .does_not_contain("Bob").does_not_contain_ignoring_case("bob").does_not_contain_all("Ada", "Bob")
            .does_not_contain_all_ignoring_case("ada", "bob").does_not_contain_any("Bob", "Eve")
            .does_not_contain_any_ignoring_case("bob", "eve").matches(r"[A-Za-z ]+").does_not_match(r"\d+"),
        v.field("email").is_email(),
        v.field("salary").is_positive().is_not_one().has_decimal_digits(max=2),
        v.field("hired").is_not_today().is_less_than(date(2020, 1, 1)),
        v.field("tags").is_not_empty().has_size(2, 2).contains("math").does_not_contain("art"),
        v.field("address").is_not_null().validate(lambda a: a.field("zip_code").has_size(7, 7)),
        v.field("phones").validate_for_each(lambda p: p.field("kind").is_in("home", "work")),
    ))


def test_email_with_trailing_newline_is_rejected():
    violations = _violations(Employee(email="ada@example.com\n"), lambda v: v.field("email").is_email())
    assert violations == (ConstraintViolation("email", Email(), "ada@example.com\n"),)


def test_has_digits_chains_and_reports_integer_digits():
    violations = _violations(Employee(id=12345), lambda v: v.field("id").has_digits(max=3))
    assert violations == (ConstraintViolation("id", IntegerDigits(0, 3), 12345),)


def test_blank_empty_and_null_rules_pass_on_matching_values():
    validate(Employee(name="  ", tags=[]), lambda v: (
        v.field("id").is_null(),
        v.field("name").is_blank(),
        v.field("tags").is_empty(),
    ))


def test_handle_exposes_name_and_current_value(employee):
    v = Validator(employee)
    handle = v.field("name")
    assert handle.name == "name"
    assert handle.value == "Ada Lovelace"
    assert handle.is_not_null() is handle
