"""Field checks used by the step validators.

A check pairs a predicate over one stored value with the message shown when
the predicate fails. Checks never see hidden fields: the step validator
skips them before any check runs.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import PropertyCategory, TransactionType
from property_wizard.rules.fields import is_empty

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NIGERIAN_PHONE_PATTERN = re.compile(r"^(\+234|0)[789][01]\d{8}$")
PERSON_NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")
CAC_NUMBER_PATTERN = re.compile(r"^RC\d{6,7}$")

CrossCheck = Callable[[Mapping[str, Any], DiscriminatorSet], dict[str, str]]


@dataclass(frozen=True)
class FieldCheck:
    predicate: Callable[[Any], bool]
    message: str

    def passes(self, value: Any) -> bool:
        return self.predicate(value)


@dataclass(frozen=True)
class FieldRule:
    """Ordered checks for one field; the first failing check wins."""

    field_id: str
    checks: tuple[FieldCheck, ...]

    def first_error(self, value: Any) -> str | None:
        for check in self.checks:
            if not check.passes(value):
                return check.message
        return None


def rule(field_id: str, *checks: FieldCheck) -> FieldRule:
    return FieldRule(field_id=field_id, checks=checks)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Check builders
# ---------------------------------------------------------------------------


def required(label: str) -> FieldCheck:
    """Fail on empty values, including text that is only whitespace."""
    return FieldCheck(
        lambda value: not is_empty(value.strip() if isinstance(value, str) else value),
        f"{label} is required",
    )


def positive(label: str) -> FieldCheck:
    return FieldCheck(
        lambda value: _is_number(value) and value > 0,
        f"{label} must be a positive number",
    )


def at_least(minimum: int | float, label: str) -> FieldCheck:
    return FieldCheck(
        lambda value: _is_number(value) and value >= minimum,
        f"{label} must be at least {minimum}",
    )


def between(minimum: int | float, maximum: int | float, label: str) -> FieldCheck:
    return FieldCheck(
        lambda value: _is_number(value) and minimum <= value <= maximum,
        f"{label} must be between {minimum} and {maximum}",
    )


def min_items(count: int, noun: str) -> FieldCheck:
    return FieldCheck(
        lambda value: len(value or ()) >= count,
        f"Please select at least {count} {noun}",
    )


def max_items(count: int, noun: str) -> FieldCheck:
    return FieldCheck(
        lambda value: len(value or ()) <= count,
        f"You can select a maximum of {count} {noun}",
    )


def max_length(limit: int, label: str) -> FieldCheck:
    return FieldCheck(
        lambda value: len(value or "") <= limit,
        f"{label} must be less than {limit} characters",
    )


def matches(pattern: re.Pattern[str], message: str) -> FieldCheck:
    return FieldCheck(lambda value: bool(pattern.match(str(value).strip())), message)


def optional(check: FieldCheck) -> FieldCheck:
    """Apply ``check`` only when a value was given."""
    return FieldCheck(
        lambda value: is_empty(value) or check.passes(value),
        check.message,
    )


def valid_email() -> FieldCheck:
    return matches(EMAIL_PATTERN, "Please enter a valid email address")


def nigerian_phone() -> FieldCheck:
    return FieldCheck(
        lambda value: bool(NIGERIAN_PHONE_PATTERN.match(re.sub(r"\s", "", str(value)))),
        "Please enter a valid Nigerian phone number",
    )


def person_name(label: str) -> tuple[FieldCheck, ...]:
    """Letters and spaces, 2 to 50 characters."""
    return (
        required(label),
        FieldCheck(
            lambda value: len(str(value).strip()) >= 2,
            f"{label} must be at least 2 characters",
        ),
        FieldCheck(
            lambda value: len(str(value).strip()) <= 50,
            f"{label} must be less than 50 characters",
        ),
        matches(PERSON_NAME_PATTERN, f"{label} can only contain letters and spaces"),
    )


def discriminators_chosen(
    categories: Mapping[TransactionType, tuple[PropertyCategory, ...]],
    type_field: str,
    category_field: str,
) -> CrossCheck:
    """Require a transaction type, and a category when the type offers any."""

    def check(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
        if discriminators.transaction_type is None:
            return {type_field: "Property type is required"}
        offered = categories.get(discriminators.transaction_type, ())
        if offered and discriminators.category is None:
            return {category_field: "Property category is required"}
        return {}

    return check
