"""Immutable wizard state and the seed used to open a flow."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import FlowKind, PropertyCategory, TransactionType
from property_wizard.rules import FlowDefinition, StepDescriptor, get_flow


@dataclass(frozen=True)
class WizardSeed:
    """Data a flow is opened with, e.g. when answering a matched preference.

    Attributes:
        transaction_type: Preselected transaction type.
        category: Preselected category (must be valid for the type).
        values: Prefilled field values; hidden ones are dropped.
        matched_brief_id: Brief this submission answers, sent as ``matchedBriefId``.
        matching_preference_id: Preference this brief answers, sent as
            ``matchingPreferenceId``.
    """

    transaction_type: TransactionType | None = None
    category: PropertyCategory | None = None
    values: Mapping[str, Any] = field(default_factory=dict)
    matched_brief_id: str | None = None
    matching_preference_id: str | None = None


@dataclass(frozen=True)
class WizardState:
    """Snapshot of one wizard session.

    Never mutated: every event produces a new instance. Invariants:
        0 <= current_step <= furthest_visited_step <= step_count - 1
        a hidden field holds its kind's empty value
    """

    flow: FlowKind
    discriminators: DiscriminatorSet
    values: Mapping[str, Any]
    touched: frozenset[str] = frozenset()
    errors: Mapping[str, str] = field(default_factory=dict)
    current_step: int = 0
    furthest_visited_step: int = 0
    matched_brief_id: str | None = None
    matching_preference_id: str | None = None

    def __post_init__(self) -> None:
        # Freeze the mappings so no caller can edit a shared snapshot.
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    @classmethod
    def initial(cls, flow: FlowKind) -> WizardState:
        definition = get_flow(flow)
        return cls(flow=flow, discriminators=DiscriminatorSet(), values=definition.empty_values())

    @property
    def definition(self) -> FlowDefinition:
        return get_flow(self.flow)

    @property
    def steps(self) -> tuple[StepDescriptor, ...]:
        return self.definition.step_set(self.discriminators.transaction_type)

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> StepDescriptor:
        return self.steps[self.current_step]

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.step_count - 1

    def value(self, field_id: str) -> Any:
        return self.values.get(field_id)

    def evolve(self, **changes: Any) -> WizardState:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "flow": self.flow.value,
            "discriminators": self.discriminators.to_dict(),
            "values": dict(self.values),
            "touched": sorted(self.touched),
            "errors": dict(self.errors),
            "current_step": self.current_step,
            "furthest_visited_step": self.furthest_visited_step,
            "matched_brief_id": self.matched_brief_id,
            "matching_preference_id": self.matching_preference_id,
        }
