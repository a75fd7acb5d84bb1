"""Domain layer — pure business vocabulary with zero framework dependencies."""

from property_wizard.domain.collaborators import (
    RegionDirectory,
    SubmissionClient,
    SubmissionResult,
)
from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import (
    FieldKind,
    FlowKind,
    PropertyCategory,
    RentalType,
    SubmissionPhase,
    SubmitterRole,
    TransactionType,
)
from property_wizard.domain.exceptions import (
    FieldHiddenError,
    InvalidDiscriminatorError,
    PayloadNotReadyError,
    SubmissionFailedError,
    UnknownFieldError,
    UnknownRegionError,
    WizardError,
    WizardLockedError,
)
from property_wizard.domain.state_machine import SubmissionLifecycle

__all__ = [
    "RegionDirectory",
    "SubmissionClient",
    "SubmissionResult",
    "DiscriminatorSet",
    "FieldKind",
    "FlowKind",
    "PropertyCategory",
    "RentalType",
    "SubmissionPhase",
    "SubmitterRole",
    "TransactionType",
    "FieldHiddenError",
    "InvalidDiscriminatorError",
    "PayloadNotReadyError",
    "SubmissionFailedError",
    "UnknownFieldError",
    "UnknownRegionError",
    "WizardError",
    "WizardLockedError",
    "SubmissionLifecycle",
]
