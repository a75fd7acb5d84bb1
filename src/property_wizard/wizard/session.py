"""Wizard Session — the object a UI holds for one open wizard.

Owns the current WizardState and the submission lifecycle, and is the only
place where the two meet:

    - events go through ``dispatch`` (refused while a submission is in flight)
    - rendering asks ``current_visible_fields`` / ``field_error``
    - the step indicator asks ``can_advance`` / ``can_go_back`` / ``can_jump_to``
    - the last step asks ``final_payload`` / ``disclosure_text`` and ``submit``

Every state change itself happens in the pure reducer; the session adds the
lock, the optional region checks and the async hand-off to the client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

from statemachine.exceptions import TransitionNotAllowed

from property_wizard.domain.enums import (
    FlowKind,
    PropertyCategory,
    SubmissionPhase,
    SubmitterRole,
    TransactionType,
)
from property_wizard.domain.exceptions import (
    PayloadNotReadyError,
    SubmissionFailedError,
    UnknownRegionError,
    WizardLockedError,
)
from property_wizard.domain.state_machine import SubmissionLifecycle
from property_wizard.logging_config import get_logger, wizard_context
from property_wizard.services import disclosure
from property_wizard.services.payload_builder import build
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
from property_wizard.wizard.invalidation import apply_seed_values
from property_wizard.wizard.reducer import apply
from property_wizard.wizard.state import WizardSeed, WizardState

if TYPE_CHECKING:
    from collections.abc import Mapping

    from property_wizard.config import CommissionRate
    from property_wizard.domain.collaborators import (
        RegionDirectory,
        SubmissionClient,
        SubmissionResult,
    )
    from property_wizard.rules.steps import StepDescriptor
    from property_wizard.schemas.briefs import BriefPayload
    from property_wizard.schemas.preferences import PreferencePayload

logger = get_logger(__name__)


def _contains(names: list[str], wanted: str) -> bool:
    lowered = wanted.strip().lower()
    return any(name.lower() == lowered for name in names)


def build_initial_state(flow: FlowKind, seed: WizardSeed | None = None) -> WizardState:
    """Create the opening state of a flow, applying an optional seed.

    Seeded values that are hidden for the seeded discriminators are dropped.
    """
    state = WizardState.initial(flow)
    if seed is None:
        return state
    if seed.transaction_type is not None:
        state = apply(SelectTransactionType(seed.transaction_type), state)
    if seed.category is not None:
        state = apply(SelectCategory(seed.category), state)
    if seed.values:
        state = apply_seed_values(state, seed.values)
    return state.evolve(
        matched_brief_id=seed.matched_brief_id,
        matching_preference_id=seed.matching_preference_id,
    )


class WizardSession:
    """One open wizard: current state plus submission lifecycle.

    Usage:
        session = WizardSession(FlowKind.BRIEF)
        session.select_transaction_type(TransactionType.RENT)
        session.select_category(PropertyCategory.RESIDENTIAL)
        session.set_value("price", "1,500,000")
        session.next()
        ...
        result = await session.submit(client)
    """

    def __init__(
        self,
        flow: FlowKind = FlowKind.BRIEF,
        *,
        seed: WizardSeed | None = None,
        region_directory: RegionDirectory | None = None,
        session_id: str | None = None,
    ) -> None:
        self._flow = FlowKind(flow)
        self._regions = region_directory
        self._lifecycle = SubmissionLifecycle()
        self._state = build_initial_state(self._flow, seed)
        self.session_id = session_id or str(uuid4())
        self.last_result: SubmissionResult | None = None

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def flow(self) -> FlowKind:
        return self._flow

    @property
    def phase(self) -> SubmissionPhase:
        return SubmissionPhase(self._lifecycle.status)

    @property
    def steps(self) -> tuple[StepDescriptor, ...]:
        return self._state.steps

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def dispatch(self, event: WizardEvent) -> WizardState:
        """Apply an event to the session state.

        Raises:
            WizardLockedError: A submission is in flight.
            UnknownRegionError: A state or LGA is not in the region directory.
            WizardError: Any error raised by the reducer.
        """
        if self._lifecycle.is_locked:
            raise WizardLockedError(self._lifecycle.status)
        with wizard_context(self._flow.value, self.session_id):
            if isinstance(event, SetValue) and self._regions is not None:
                self._check_region(event)
            self._state = apply(event, self._state)
        return self._state

    def select_transaction_type(self, transaction_type: TransactionType | str) -> WizardState:
        return self.dispatch(SelectTransactionType(TransactionType(transaction_type)))

    def select_category(self, category: PropertyCategory | str | None) -> WizardState:
        return self.dispatch(SelectCategory(PropertyCategory(category) if category is not None else None))

    def set_value(self, field_id: str, value: Any) -> WizardState:
        return self.dispatch(SetValue(field_id, value))

    def set_values(self, values: Mapping[str, Any]) -> WizardState:
        for field_id, value in values.items():
            self.set_value(field_id, value)
        return self._state

    def next(self) -> WizardState:
        return self.dispatch(NextStep())

    def previous(self) -> WizardState:
        return self.dispatch(PreviousStep())

    def jump_to(self, step: int) -> WizardState:
        return self.dispatch(JumpToStep(step))

    def reset(self) -> WizardState:
        return self.dispatch(ResetWizard())

    def _check_region(self, event: SetValue) -> None:
        value = event.value
        if not value:
            return
        if event.field_id == "state":
            if not _contains(self._regions.states_of(), str(value)):
                raise UnknownRegionError("state", str(value))
        elif event.field_id in ("lga", "lgas"):
            known = self._regions.lgas_of(str(self._state.value("state") or ""))
            names = [value] if isinstance(value, str) else list(value)
            for name in names:
                if not _contains(known, name):
                    raise UnknownRegionError("local government area", name)

    # ------------------------------------------------------------------
    # Queries for rendering
    # ------------------------------------------------------------------

    def current_visible_fields(self, step: int | None = None) -> list[str]:
        """Return the visible field ids of ``step`` (default: current step)."""
        index = self._state.current_step if step is None else step
        steps = self.steps
        if not 0 <= index < len(steps):
            raise ValueError(f"Step {index} is out of range (0..{len(steps) - 1})")
        return steps[index].visible_fields(self._state.values, self._state.discriminators)

    def field_error(self, field_id: str) -> str | None:
        return self._state.errors.get(field_id)

    def can_advance(self) -> bool:
        if self._lifecycle.is_locked or self._state.is_last_step:
            return False
        return not self._state.current.validate(self._state.values, self._state.discriminators)

    def can_go_back(self) -> bool:
        return not self._lifecycle.is_locked and self._state.current_step > 0

    def can_jump_to(self, step: int) -> bool:
        return not self._lifecycle.is_locked and 0 <= step <= self._state.furthest_visited_step

    def state_options(self) -> list[str]:
        return self._regions.states_of() if self._regions is not None else []

    def lga_options(self) -> list[str]:
        state_name = self._state.value("state")
        if self._regions is None or not state_name:
            return []
        return self._regions.lgas_of(state_name)

    def area_options(self, lga: str | None = None) -> list[str]:
        state_name = self._state.value("state")
        lga = lga or self._state.value("lga")
        if self._regions is None or not state_name or not lga:
            return []
        return self._regions.areas_of(state_name, lga)

    # ------------------------------------------------------------------
    # Final step
    # ------------------------------------------------------------------

    def validate_all(self) -> dict[str, str]:
        """Errors of every step, in step order."""
        errors: dict[str, str] = {}
        for step in self.steps:
            for field_id, message in step.validate(self._state.values, self._state.discriminators).items():
                errors.setdefault(field_id, message)
        return errors

    def final_payload(self) -> BriefPayload | PreferencePayload:
        """Build the payload for the current values.

        Raises:
            PayloadNotReadyError: Not on the last step, or any step is invalid.
        """
        if not self._state.is_last_step:
            raise PayloadNotReadyError("The payload is only available on the last step")
        errors = self.validate_all()
        if errors:
            raise PayloadNotReadyError("Some steps still have invalid values", errors=errors)
        return build(
            self._state.values,
            self._state.discriminators,
            self._flow,
            matched_brief_id=self._state.matched_brief_id,
            matching_preference_id=self._state.matching_preference_id,
        )

    def disclosure_text(
        self,
        role: SubmitterRole,
        name: str | None = None,
        rate_table: Mapping[TransactionType, CommissionRate] | None = None,
    ) -> str:
        """Commission consent sentence for the current transaction type.

        ``name`` defaults to the first and last name entered in the brief.
        """
        transaction_type = self._state.discriminators.transaction_type
        if transaction_type is None:
            raise PayloadNotReadyError("Choose a transaction type before the disclosure")
        if name is None:
            parts = (self._state.value("firstName"), self._state.value("lastName"))
            name = " ".join(str(part).strip() for part in parts if part)
        return disclosure.generate(transaction_type, role, name, rate_table)

    async def submit(self, client: SubmissionClient) -> SubmissionResult:
        """Send the final payload and reset the wizard on success.

        On failure the values are kept, the session returns to editing and
        the failure is raised so the caller can show it and let the user retry.

        Raises:
            WizardLockedError: A submission is already in flight.
            PayloadNotReadyError: The wizard is not ready to submit.
            SubmissionFailedError: The client rejected the payload or raised.
        """
        if self._lifecycle.is_locked:
            raise WizardLockedError(self._lifecycle.status)
        with wizard_context(self._flow.value, self.session_id):
            payload = self.final_payload().to_wire()

            try:
                self._lifecycle.begin_submission()
            except TransitionNotAllowed as exc:
                raise WizardLockedError(self._lifecycle.status) from exc
            logger.info(
                "submission.started",
                transaction_type=payload.get("propertyType") or payload.get("preferenceType"),
            )

            try:
                result = await client.submit(payload)
            except Exception as exc:
                self._lifecycle.submission_failed()
                logger.exception("submission.failed")
                raise SubmissionFailedError(
                    str(exc) or "Submission failed",
                    details={"error_type": type(exc).__name__},
                ) from exc

            self.last_result = result
            if not result.success:
                self._lifecycle.submission_failed()
                logger.warning("submission.rejected", message=result.message)
                raise SubmissionFailedError(result.message or "Submission was rejected", details=result.to_dict())

            self._lifecycle.submission_succeeded()
            logger.info("submission.succeeded", reference=result.reference)
            self._state = WizardState.initial(self._flow)
            self._lifecycle = SubmissionLifecycle()
            return result
