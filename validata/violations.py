"""Constraint Violations

Violation records, the insertion-ordered set they accumulate in, and the
single failure condition raised once traversal of the root object completes.

Error Format (ConstraintViolationError.to_dict):
{
    "error": {
        "type": "constraint_violation",
        "message": "Validation failed",
        "error_count": 1,
        "errors": [
            {
                "property": "address.city",
                "constraint": "NotBlank",
                "params": {},
                "value": "",
                "message": "Must not be blank"
            }
        ]
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from validata.constraints import (
    Between,
    Constraint,
    DecimalDigits,
    Email,
    Greater,
    GreaterOrEqual,
    IntegerDigits,
    Less,
    LessOrEqual,
    Matches,
    NotBetween,
    NotBlank,
    NotEmpty,
    NotMatch,
    NotNull,
    Size,
)
from validata.core.errors import AppError, ErrorCode, ErrorContext

if TYPE_CHECKING:
    from validata.i18n.locales import Locale
    from validata.i18n.resolver import MessageResolver


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    """A constraint that failed for a property path and value.

    - property: dotted/bracketed path from the root object (e.g. "phones[1].number")
    - constraint: the violated constraint with its parameters
    - value: the offending value (None when absent)
    """
    property: str
    constraint: Constraint
    value: Any = None

    def prefixed(self, prefix: str) -> ConstraintViolation:
        """Copy with `prefix` prepended to the property path."""
        return ConstraintViolation(property=f"{prefix}.{self.property}", constraint=self.constraint, value=self.value)

    def to_dict(self) -> dict[str, Any]:
        return {"property": self.property, "constraint": self.constraint.name,
            "params": self.constraint.message_params, "value": self.value}


@dataclass(frozen=True, slots=True)
class ConstraintViolationMessage:
    """A violation together with its resolved, localized message."""
    property: str
    constraint: Constraint
    value: Any
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"property": self.property, "constraint": self.constraint.name,
            "params": self.constraint.message_params, "value": self.value, "message": self.message}


class ViolationSet:
    """Insertion-ordered set of violations.

    Equal (property, value, constraint) triples collapse to one entry.
    Membership is by equality so unhashable offending values are fine.
    Entries are also indexed by property path, so equality is only ever
    checked among the few violations recorded for the same path.
    """

    __slots__ = ("_items", "_by_property")

    def __init__(self, violations: Iterable[ConstraintViolation] = ()):
        self._items: list[ConstraintViolation] = []
        self._by_property: dict[str, list[ConstraintViolation]] = {}
        self.update(violations)

    def add(self, violation: ConstraintViolation) -> bool:
        """Add a violation. Returns False when an equal one was already present."""
        same_path = self._by_property.setdefault(violation.property, [])
        if violation in same_path: return False
        same_path.append(violation)
        self._items.append(violation)
        return True

    def update(self, violations: Iterable[ConstraintViolation]) -> None:
        for violation in violations: self.add(violation)

    def has_property(self, property: str) -> bool:
        return property in self._by_property

    def freeze(self) -> tuple[ConstraintViolation, ...]: return tuple(self._items)

    def __contains__(self, violation: object) -> bool:
        if not isinstance(violation, ConstraintViolation): return False
        return violation in self._by_property.get(violation.property, ())

    def __iter__(self) -> Iterator[ConstraintViolation]: return iter(self._items)

    def __len__(self) -> int: return len(self._items)

    def __bool__(self) -> bool: return bool(self._items)

    def __repr__(self) -> str: return f"ViolationSet({self._items!r})"


_ERROR_CODES: dict[type[Constraint], ErrorCode] = {
    NotNull: ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    NotEmpty: ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    NotBlank: ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    Matches: ErrorCode.E2002_INVALID_FORMAT,
    NotMatch: ErrorCode.E2002_INVALID_FORMAT,
    Email: ErrorCode.E2002_INVALID_FORMAT,
    Size: ErrorCode.E2003_OUT_OF_RANGE,
    Less: ErrorCode.E2003_OUT_OF_RANGE,
    LessOrEqual: ErrorCode.E2003_OUT_OF_RANGE,
    Greater: ErrorCode.E2003_OUT_OF_RANGE,
    GreaterOrEqual: ErrorCode.E2003_OUT_OF_RANGE,
    Between: ErrorCode.E2003_OUT_OF_RANGE,
    NotBetween: ErrorCode.E2003_OUT_OF_RANGE,
    IntegerDigits: ErrorCode.E2003_OUT_OF_RANGE,
    DecimalDigits: ErrorCode.E2003_OUT_OF_RANGE,
}


def error_code_for(constraint: Constraint) -> ErrorCode:
    """Application error code reported for a single violated constraint."""
    return _ERROR_CODES.get(type(constraint), ErrorCode.E2005_CONSTRAINT_VIOLATION)


class ConstraintViolationError(Exception):
    """Raised when validation of a root object produced any violation.

    Carries the whole, de-duplicated violation set in recording order.
    """

    def __init__(self, violations: Iterable[ConstraintViolation], message: str = "Validation failed"):
        self.violations: tuple[ConstraintViolation, ...] = ViolationSet(violations).freeze()
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if not self.violations: return self.message
        if len(self.violations) == 1:
            v = self.violations[0]
            return f"{v.property}: {v.constraint.name}"
        return f"{self.message} ({len(self.violations)} violations)"

    @property
    def field_errors(self) -> dict[str, ConstraintViolation]:
        """Violations keyed by property path (at most one per path)."""
        return {v.property: v for v in self.violations}

    @property
    def first_error(self) -> ConstraintViolation | None: return self.violations[0] if self.violations else None

    def get_violation(self, property: str) -> ConstraintViolation | None:
        return next((v for v in self.violations if v.property == property), None)

    def messages(self, resolver: MessageResolver | None = None,
                 locale: Locale | str | None = None) -> list[ConstraintViolationMessage]:
        """Resolve every violation to a localized message."""
        from validata.i18n.resolver import default_resolver

        return (resolver or default_resolver()).resolve_all(self.violations, locale)

    def to_dict(self, resolver: MessageResolver | None = None, locale: Locale | str | None = None) -> dict[str, Any]:
        """Serialize with localized messages for API responses."""
        return {"error": {"type": "constraint_violation", "message": self.message,
            "error_count": len(self.violations), "errors": [m.to_dict() for m in self.messages(resolver, locale)]}}

    def to_app_error(self, resolver: MessageResolver | None = None, locale: Locale | str | None = None) -> AppError:
        """Convert to AppError for the host application's error handling."""
        from validata.i18n.locales import Locale

        messages = self.messages(resolver, locale)
        context = ErrorContext(origin="validation")

        if len(messages) == 1:
            m = messages[0]
            error = AppError(code=error_code_for(m.constraint), message=f"{m.property}: {m.message}",
                context=context, metadata={"property": m.property, "constraint": m.constraint.name,
                "value": m.value}, cause=self)
        else:
            error = AppError(code=ErrorCode.E2000_VALIDATION_GENERIC,
                message=f"Validation failed: {len(messages)} violations", context=context,
                metadata={"error_count": len(messages), "errors": [m.to_dict() for m in messages]}, cause=self)
        return error.with_metadata(locale=str(Locale.parse(locale))) if locale else error
