"""Submission Lifecycle State Machine Guard.

Uses python-statemachine to enforce the phases a wizard session goes through
around the external submission call. While a submission is in flight the
session refuses every form event, so a double click cannot send two payloads
and a late edit cannot race the response.

Transition table:
    EDITING       -> SUBMITTING       (begin_submission)
    SUBMITTING    -> SUBMITTED        (submission_succeeded)
    SUBMITTING    -> EDITING          (submission_failed)
"""

from __future__ import annotations

from statemachine import State, StateMachine


class SubmissionLifecycle(StateMachine):
    """State machine that guards the submit round trip of a wizard session.

    Usage:
        sm = SubmissionLifecycle()
        sm.begin_submission()  # transitions to SUBMITTING
        sm.status              # "SUBMITTING"
    """

    # --- States ---
    EDITING = State("EDITING", initial=True)
    SUBMITTING = State("SUBMITTING")
    SUBMITTED = State("SUBMITTED", final=True)

    # --- Events / Transitions ---
    begin_submission = EDITING.to(SUBMITTING)
    submission_succeeded = SUBMITTING.to(SUBMITTED)
    submission_failed = SUBMITTING.to(EDITING)

    def __init__(self, current_status: str = "EDITING") -> None:
        """Initialize the state machine at a given phase.

        Args:
            current_status: The current SubmissionPhase value (e.g., "SUBMITTING").
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches SubmissionPhase)."""
        return str(self.current_state.value)

    @property
    def is_locked(self) -> bool:
        """True while the form must not accept edits."""
        return self.status == "SUBMITTING"

    def get_allowed_events(self) -> list[str]:
        """Return a list of event names that can fire from the current state."""
        return [event.id for event in self.allowed_events]
