"""Dry-run submission client.

Stands in for the listings API in simulations and tests: it validates the
payload against the wire schemas, records it and returns a configurable
outcome with zero network calls.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from property_wizard.domain.collaborators import SubmissionResult
from property_wizard.logging_config import get_logger
from property_wizard.schemas.briefs import BRIEF_PAYLOAD_ADAPTER
from property_wizard.schemas.preferences import PREFERENCE_PAYLOAD_ADAPTER

logger = get_logger(__name__)


class DryRunSubmissionClient:
    """Instant submission client for dry-run simulations.

    Args:
        should_pass: Whether the "backend" accepts valid payloads.
        message: Message returned on a configured failure.
        raise_error: Raise this exception instead of returning a result,
            to simulate a transport failure.

    Attributes:
        submitted: Every payload received, in order.
    """

    def __init__(
        self,
        should_pass: bool = True,
        message: str = "Submission rejected (dry-run mode)",
        raise_error: Exception | None = None,
    ) -> None:
        self.should_pass = should_pass
        self.message = message
        self.raise_error = raise_error
        self.submitted: list[dict[str, Any]] = []

    async def submit(self, payload: dict[str, Any]) -> SubmissionResult:
        self.submitted.append(payload)
        if self.raise_error is not None:
            raise self.raise_error

        adapter = BRIEF_PAYLOAD_ADAPTER if "briefType" in payload else PREFERENCE_PAYLOAD_ADAPTER
        try:
            adapter.validate_python(payload)
        except ValidationError as exc:
            logger.warning("dry_run.payload_invalid", error_count=exc.error_count())
            return SubmissionResult(
                success=False,
                message="Payload failed schema validation",
                details={"errors": exc.errors(include_url=False)},
            )

        if not self.should_pass:
            return SubmissionResult(success=False, message=self.message, details={"mode": "dry-run"})

        reference = str(uuid4())
        logger.info("dry_run.accepted", reference=reference)
        return SubmissionResult(success=True, reference=reference, details={"mode": "dry-run"})
