"""Step descriptors and per-step validation.

A flow declares its steps once (``StepSpec``). For a given transaction type
the flow picks an ordered layout of step ids, and ``step_set`` turns that
layout into indexed ``StepDescriptor`` objects whose ``field_ids`` come
from the field registry, so every field belongs to exactly one step.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from property_wizard.rules.checks import CrossCheck, FieldRule

if TYPE_CHECKING:
    from property_wizard.domain.discriminators import DiscriminatorSet
    from property_wizard.domain.enums import TransactionType
    from property_wizard.rules.flow import FlowDefinition


@dataclass(frozen=True)
class StepSpec:
    """Declarative validation rules of one step.

    Attributes:
        step_id: Stable id, also used as ``owner_step`` by field descriptors.
        title: Label shown in the step indicator.
        rules: Per-field checks; skipped while the field is hidden.
        cross_checks: Step-level checks spanning several fields or the
            discriminators. Each returns ``{field_id: message}``.
    """

    step_id: str
    title: str
    rules: tuple[FieldRule, ...] = ()
    cross_checks: tuple[CrossCheck, ...] = ()


@dataclass(frozen=True)
class StepDescriptor:
    """One step of a concrete step set."""

    index: int
    step_id: str
    title: str
    field_ids: tuple[str, ...]
    spec: StepSpec
    flow: FlowDefinition

    def validate(
        self,
        values: Mapping[str, Any],
        discriminators: DiscriminatorSet,
    ) -> dict[str, str]:
        """Return ``{field_id: message}`` for every failing visible field.

        A hidden field is never required, whatever its value.
        """
        errors: dict[str, str] = {}
        for field_rule in self.spec.rules:
            if not self.flow.is_visible(field_rule.field_id, discriminators, values):
                continue
            message = field_rule.first_error(values.get(field_rule.field_id))
            if message is not None:
                errors[field_rule.field_id] = message

        for cross_check in self.spec.cross_checks:
            for field_id, message in cross_check(values, discriminators).items():
                errors.setdefault(field_id, message)
        return errors

    def visible_fields(
        self,
        values: Mapping[str, Any],
        discriminators: DiscriminatorSet,
    ) -> list[str]:
        return [
            field_id
            for field_id in self.field_ids
            if self.flow.is_visible(field_id, discriminators, values)
        ]


def step_set(flow: FlowDefinition, transaction_type: TransactionType | None) -> tuple[StepDescriptor, ...]:
    """Build the ordered, contiguously indexed steps for a transaction type.

    Args:
        flow: The flow whose layout and fields are used.
        transaction_type: Selected type, or None before the first choice.

    Returns:
        Step descriptors indexed ``0..N-1``.
    """
    layout = flow.layout_for(transaction_type)
    descriptors = []
    for index, step_id in enumerate(layout):
        spec = flow.steps[step_id]
        field_ids = tuple(
            descriptor.field_id
            for descriptor in flow.fields.values()
            if descriptor.owner_step == step_id
        )
        descriptors.append(
            StepDescriptor(
                index=index,
                step_id=step_id,
                title=spec.title,
                field_ids=field_ids,
                spec=spec,
                flow=flow,
            )
        )
    return tuple(descriptors)
