"""Flow definition: the data tables that drive one wizard."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from property_wizard.domain.exceptions import InvalidDiscriminatorError, UnknownFieldError
from property_wizard.rules.steps import StepDescriptor, StepSpec, step_set

if TYPE_CHECKING:
    from property_wizard.domain.discriminators import DiscriminatorSet
    from property_wizard.domain.enums import FlowKind, PropertyCategory, TransactionType
    from property_wizard.rules.fields import FieldDescriptor
    from property_wizard.rules.predicates import Rule


@dataclass(frozen=True)
class FlowDefinition:
    """Everything the engine needs to know about one wizard.

    Attributes:
        kind: Which wizard this is.
        fields: Field registry keyed by field id.
        visibility: Field id -> predicate. Fields without an entry are
            always visible.
        steps: Step id -> validation spec.
        layouts: Transaction type -> ordered step ids. The ``None`` key is
            the layout shown before a type is chosen.
        categories: Transaction type -> categories offered for it.
        dependent_resets: Field id -> fields emptied when it changes.
        type_field: Error key used when no transaction type is chosen.
        category_field: Error key used when no category is chosen.
    """

    kind: FlowKind
    fields: Mapping[str, FieldDescriptor]
    visibility: Mapping[str, Rule]
    steps: Mapping[str, StepSpec]
    layouts: Mapping[TransactionType | None, tuple[str, ...]]
    categories: Mapping[TransactionType, tuple[PropertyCategory, ...]]
    dependent_resets: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    type_field: str = "propertyType"
    category_field: str = "propertyCategory"

    def is_visible(
        self,
        field_id: str,
        discriminators: DiscriminatorSet,
        values: Mapping[str, Any] | None = None,
    ) -> bool:
        rule = self.visibility.get(field_id)
        if rule is None:
            return True
        return rule(discriminators, values or {})

    def descriptor(self, field_id: str) -> FieldDescriptor:
        try:
            return self.fields[field_id]
        except KeyError:
            raise UnknownFieldError(field_id, self.kind.value) from None

    def layout_for(self, transaction_type: TransactionType | None) -> tuple[str, ...]:
        return self.layouts.get(transaction_type, self.layouts[None])

    def step_set(self, transaction_type: TransactionType | None) -> tuple[StepDescriptor, ...]:
        return step_set(self, transaction_type)

    def categories_for(self, transaction_type: TransactionType | None) -> tuple[PropertyCategory, ...]:
        if transaction_type is None:
            return ()
        return self.categories.get(transaction_type, ())

    def check_category(
        self,
        transaction_type: TransactionType | None,
        category: PropertyCategory | None,
    ) -> None:
        """Raise InvalidDiscriminatorError unless ``category`` is offered."""
        if category is None:
            return
        if category not in self.categories_for(transaction_type):
            raise InvalidDiscriminatorError(
                transaction_type.value if transaction_type else None,
                category.value,
            )

    def empty_values(self) -> dict[str, Any]:
        return {field_id: descriptor.empty for field_id, descriptor in self.fields.items()}
