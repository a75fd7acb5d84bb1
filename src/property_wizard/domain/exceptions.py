"""Domain exceptions for the property submission wizard.

These exceptions are framework-agnostic and represent misuse of the engine
(an event that can never be legal) or a failed submission. Field validation
problems are not exceptions: they are attached to the wizard state.
"""

from __future__ import annotations

from typing import Any


class WizardError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "WIZARD_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Discriminator Errors ---


class InvalidDiscriminatorError(WizardError):
    """Raised when a category is not offered for the chosen transaction type.

    Example: Shortlet -> Land (shortlets are residential only).
    """

    def __init__(self, transaction_type: str | None, category: str) -> None:
        super().__init__(
            message=f"Category '{category}' is not available for transaction type '{transaction_type}'",
            code="INVALID_CATEGORY",
        )
        self.transaction_type = transaction_type
        self.category = category


# --- Field Errors ---


class UnknownFieldError(WizardError):
    """Raised when an event names a field id the flow does not define."""

    def __init__(self, field_id: str, flow: str) -> None:
        super().__init__(
            message=f"Unknown field '{field_id}' for the {flow} flow",
            code="UNKNOWN_FIELD",
        )
        self.field_id = field_id


class FieldHiddenError(WizardError):
    """Raised when a value is set on a field hidden by the current discriminators."""

    def __init__(self, field_id: str) -> None:
        super().__init__(
            message=f"Field '{field_id}' is not visible for the current selection",
            code="FIELD_HIDDEN",
        )
        self.field_id = field_id


class UnknownRegionError(WizardError):
    """Raised when a state or LGA is not known to the region directory."""

    def __init__(self, level: str, value: str) -> None:
        super().__init__(
            message=f"Unknown {level}: {value}",
            code="UNKNOWN_REGION",
        )
        self.level = level
        self.value = value


# --- Wizard Lifecycle Errors ---


class PayloadNotReadyError(WizardError):
    """Raised when the final payload is requested before every step is valid."""

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message=message, code="PAYLOAD_NOT_READY")
        self.errors = errors or {}


class WizardLockedError(WizardError):
    """Raised when an event arrives while a submission is in flight."""

    def __init__(self, phase: str) -> None:
        super().__init__(
            message=f"Wizard is locked while {phase}",
            code="WIZARD_LOCKED",
        )
        self.phase = phase


# --- Submission Errors ---


class SubmissionFailedError(WizardError):
    """Raised when the submission client reports or raises a failure.

    The wizard keeps every value so the user can retry.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="SUBMISSION_FAILED")
        self.details = details or {}
