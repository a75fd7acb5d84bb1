"""Field visibility queries.

Answers "is this field relevant for the current selection?" from the rule
table of a flow. Pure and total: unknown field ids are treated as visible,
and the same inputs always give the same answer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import FlowKind
from property_wizard.rules import get_flow


def is_visible(
    field_id: str,
    discriminators: DiscriminatorSet,
    dependent_values: Mapping[str, Any] | None = None,
    flow: FlowKind = FlowKind.BRIEF,
) -> bool:
    """Return whether ``field_id`` is shown under ``discriminators``.

    Args:
        field_id: Any field id; ids without a rule are visible.
        discriminators: Current transaction type and category.
        dependent_values: Values of dependent choices such as ``rentalType``.
        flow: Which flow's rule table to consult.
    """
    return get_flow(flow).is_visible(field_id, discriminators, dependent_values)


def visible_fields(
    discriminators: DiscriminatorSet,
    values: Mapping[str, Any] | None = None,
    flow: FlowKind = FlowKind.BRIEF,
) -> list[str]:
    """Return every visible field id of the flow, in registry order."""
    definition = get_flow(flow)
    return [
        field_id
        for field_id in definition.fields
        if definition.is_visible(field_id, discriminators, values)
    ]


def hidden_fields(
    discriminators: DiscriminatorSet,
    values: Mapping[str, Any] | None = None,
    flow: FlowKind = FlowKind.BRIEF,
) -> list[str]:
    definition = get_flow(flow)
    return [
        field_id
        for field_id in definition.fields
        if not definition.is_visible(field_id, discriminators, values)
    ]
