"""Events accepted by the wizard reducer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from property_wizard.domain.enums import PropertyCategory, TransactionType


@dataclass(frozen=True)
class SelectTransactionType:
    transaction_type: TransactionType


@dataclass(frozen=True)
class SelectCategory:
    category: PropertyCategory | None


@dataclass(frozen=True)
class SetValue:
    field_id: str
    value: Any


@dataclass(frozen=True)
class NextStep:
    pass


@dataclass(frozen=True)
class PreviousStep:
    pass


@dataclass(frozen=True)
class JumpToStep:
    target: int


@dataclass(frozen=True)
class ResetWizard:
    pass


WizardEvent = (
    SelectTransactionType
    | SelectCategory
    | SetValue
    | NextStep
    | PreviousStep
    | JumpToStep
    | ResetWizard
)
