"""Visibility predicate combinators.

A rule is a plain function of the discriminators and the current values
(read only for dependent choices such as ``rentalType``). Flow tables map
each field id to one rule built from these helpers.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import PropertyCategory, TransactionType

Rule = Callable[[DiscriminatorSet, Mapping[str, Any]], bool]


def for_types(*types: TransactionType) -> Rule:
    def rule(discriminators: DiscriminatorSet, values: Mapping[str, Any]) -> bool:
        return discriminators.is_type(*types)

    return rule


def for_categories(*categories: PropertyCategory) -> Rule:
    def rule(discriminators: DiscriminatorSet, values: Mapping[str, Any]) -> bool:
        return discriminators.is_category(*categories)

    return rule


def except_categories(*categories: PropertyCategory) -> Rule:
    """Holds while no category is chosen or the chosen one is not listed."""

    def rule(discriminators: DiscriminatorSet, values: Mapping[str, Any]) -> bool:
        return not discriminators.is_category(*categories)

    return rule


def when_value(field_id: str, expected: Any) -> Rule:
    def rule(discriminators: DiscriminatorSet, values: Mapping[str, Any]) -> bool:
        return values.get(field_id) == expected

    return rule


def all_of(*rules: Rule) -> Rule:
    def rule(discriminators: DiscriminatorSet, values: Mapping[str, Any]) -> bool:
        return all(r(discriminators, values) for r in rules)

    return rule


def any_of(*rules: Rule) -> Rule:
    def rule(discriminators: DiscriminatorSet, values: Mapping[str, Any]) -> bool:
        return any(r(discriminators, values) for r in rules)

    return rule
