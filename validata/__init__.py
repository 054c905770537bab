"""Declarative Object Validation

Rules are declared per property against any object (dataclasses, plain
objects, pydantic models, mappings); the engine walks nested objects and
collections, keeps the first failing rule per property path and raises one
ConstraintViolationError carrying every violation. Violations resolve to
localized messages through a YAML message catalog.

Usage:
    from validata import validate, ConstraintViolationError, resolve_message

    try:
        validate(employee, lambda v: (
            v.field("id").is_not_null().is_positive(),
            v.field("name").is_not_blank().has_size(min=3, max=80),
            v.field("address").validate(lambda a: a.field("city").is_not_blank()),
        ))
    except ConstraintViolationError as e:
        for violation in e.violations:
            print(violation.property, resolve_message(violation, "pt_BR"))
"""

from .constraints import (
    Constraint,
    Null,
    NotNull,
    Equals,
    NotEquals,
    In,
    NotIn,
    Valid,
    Empty,
    NotEmpty,
    Blank,
    NotBlank,
    Size,
    Contains,
    ContainsAll,
    ContainsAny,
    NotContain,
    NotContainAll,
    NotContainAny,
    StartsWith,
    NotStartWith,
    EndsWith,
    NotEndWith,
    Matches,
    NotMatch,
    Email,
    Less,
    LessOrEqual,
    Greater,
    GreaterOrEqual,
    Between,
    NotBetween,
    Zero,
    NotZero,
    One,
    NotOne,
    Positive,
    NotPositive,
    Negative,
    NotNegative,
    Even,
    Odd,
    IntegerDigits,
    DecimalDigits,
    Today,
    NotToday,
)
from .properties import Property, read_property
from .rules import Rule
from .violations import (
    ConstraintViolation,
    ConstraintViolationError,
    ConstraintViolationMessage,
    ViolationSet,
)
from .validator import PropertyRules, Validator, validate
from .i18n import (
    Locale,
    SupportedLocales,
    MessageCatalog,
    MessageResolver,
    FormatterRegistry,
    format_all_locales,
    resolve_message,
)

__all__ = [
    # Engine
    "validate",
    "Validator",
    "PropertyRules",
    "Property",
    "read_property",
    "Rule",
    # Violations
    "ConstraintViolation",
    "ConstraintViolationError",
    "ConstraintViolationMessage",
    "ViolationSet",
    # Messages
    "Locale",
    "SupportedLocales",
    "MessageCatalog",
    "MessageResolver",
    "FormatterRegistry",
    "format_all_locales",
    "resolve_message",
    # Constraints
    "Constraint",
    "Null",
    "NotNull",
    "Equals",
    "NotEquals",
    "In",
    "NotIn",
    "Valid",
    "Empty",
    "NotEmpty",
    "Blank",
    "NotBlank",
    "Size",
    "Contains",
    "ContainsAll",
    "ContainsAny",
    "NotContain",
    "NotContainAll",
    "NotContainAny",
    "StartsWith",
    "NotStartWith",
    "EndsWith",
    "NotEndWith",
    "Matches",
    "NotMatch",
    "Email",
    "Less",
    "LessOrEqual",
    "Greater",
    "GreaterOrEqual",
    "Between",
    "NotBetween",
    "Zero",
    "NotZero",
    "One",
    "NotOne",
    "Positive",
    "NotPositive",
    "Negative",
    "NotNegative",
    "Even",
    "Odd",
    "IntegerDigits",
    "DecimalDigits",
    "Today",
    "NotToday",
]
