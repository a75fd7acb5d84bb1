"""Wizard layer — immutable state, events, reducer and the session facade."""

from property_wizard.wizard.events import (
    JumpToStep,
    NextStep,
    PreviousStep,
    ResetWizard,
    SelectCategory,
    SelectTransactionType,
    SetValue,
    WizardEvent,
)
from property_wizard.wizard.invalidation import on_discriminator_change
from property_wizard.wizard.reducer import apply
from property_wizard.wizard.session import WizardSession, build_initial_state
from property_wizard.wizard.state import WizardSeed, WizardState

__all__ = [
    "JumpToStep",
    "NextStep",
    "PreviousStep",
    "ResetWizard",
    "SelectCategory",
    "SelectTransactionType",
    "SetValue",
    "WizardEvent",
    "on_discriminator_change",
    "apply",
    "WizardSession",
    "build_initial_state",
    "WizardSeed",
    "WizardState",
]
