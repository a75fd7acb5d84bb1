"""Collaborator Protocols.

Defines the interfaces of the services the wizard talks to but does not own:
the gazetteer that lists states, LGAs and areas, and the client that sends
the final payload. These are Protocols (structural subtyping) so concrete
implementations don't need to inherit from a base class.

The domain layer has ZERO imports from HTTP clients or upload services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class SubmissionResult:
    """Output from a submission client.

    Attributes:
        success: Whether the backend accepted the payload.
        reference: Identifier assigned by the backend, if any.
        message: Human-readable outcome, shown to the user on failure.
        details: Raw response data for logging.
    """

    success: bool
    reference: str | None = None
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "reference": self.reference,
            "message": self.message,
            "details": self.details,
        }


@runtime_checkable
class SubmissionClient(Protocol):
    """Protocol that sends a finished payload to the backend.

    Concrete implementations:
        - infrastructure/submission_client.py (DryRunSubmissionClient)

    Retry policy belongs to the implementation, not to the wizard.
    """

    async def submit(self, payload: dict[str, Any]) -> SubmissionResult:
        """Send the payload.

        Args:
            payload: Wire-ready dict produced by the payload builder.

        Returns:
            A SubmissionResult; a failure may also be raised as an exception.
        """
        ...


@runtime_checkable
class RegionDirectory(Protocol):
    """Protocol for the gazetteer used by the location fields."""

    def states_of(self) -> list[str]:
        ...

    def lgas_of(self, state: str) -> list[str]:
        ...

    def areas_of(self, state: str, lga: str) -> list[str]:
        ...
