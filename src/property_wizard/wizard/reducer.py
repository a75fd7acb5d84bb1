"""Wizard reducer: ``apply(event, state) -> state``.

The only way wizard state changes. There is no ambient state: the same event
applied to the same state always yields the same result, which is what lets
a UI replay, undo or test a session step by step.

Transitions:
    SelectTransactionType  -> invalidate, back to step 0 when the step layout changes
    SelectCategory         -> invalidate, furthest step capped at current
    SetValue               -> coerce, reset dependents, re-check known errors
    NextStep               -> validate current step; advance or attach errors
    PreviousStep           -> step - 1 (never below 0)
    JumpToStep             -> only to an already visited step
    ResetWizard            -> initial state of the same flow
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import PropertyCategory, TransactionType
from property_wizard.domain.exceptions import FieldHiddenError
from property_wizard.logging_config import get_logger
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
from property_wizard.wizard.invalidation import on_discriminator_change, on_value_change
from property_wizard.wizard.state import WizardState

logger = get_logger(__name__)


def _select_transaction_type(event: SelectTransactionType, state: WizardState) -> WizardState:
    transaction_type = TransactionType(event.transaction_type)
    category = state.discriminators.category
    if category is not None and category not in state.definition.categories_for(transaction_type):
        category = None
    return on_discriminator_change(state, DiscriminatorSet(transaction_type, category))


def _select_category(event: SelectCategory, state: WizardState) -> WizardState:
    category = PropertyCategory(event.category) if event.category is not None else None
    state.definition.check_category(state.discriminators.transaction_type, category)
    return on_discriminator_change(state, state.discriminators.with_category(category))


def _recheck_errors(state: WizardState, field_id: str) -> WizardState:
    """Refresh the errors of the step that owns ``field_id``.

    Only fields that already show an error are updated; a field the user has
    not been told about yet does not get a new error while typing.
    """
    owner = state.definition.fields[field_id].owner_step
    step = next((s for s in state.steps if s.step_id == owner), None)
    if step is None:
        return state
    owned = set(step.field_ids)
    if not owned.intersection(state.errors):
        return state

    fresh = step.validate(state.values, state.discriminators)
    errors = dict(state.errors)
    for errored_id in owned.intersection(state.errors):
        if errored_id in fresh:
            errors[errored_id] = fresh[errored_id]
        else:
            del errors[errored_id]
    return state.evolve(errors=errors)


def _set_value(event: SetValue, state: WizardState) -> WizardState:
    definition = state.definition
    definition.descriptor(event.field_id)
    if not definition.is_visible(event.field_id, state.discriminators, state.values):
        raise FieldHiddenError(event.field_id)

    updated = on_value_change(state, event.field_id, event.value)
    if updated is state:
        return state
    return _recheck_errors(updated, event.field_id)


def _next_step(event: NextStep, state: WizardState) -> WizardState:
    step = state.current
    errors = step.validate(state.values, state.discriminators)
    if errors:
        logger.info(
            "wizard.step.rejected",
            flow=state.flow.value,
            step=step.step_id,
            fields=sorted(errors),
        )
        visible = step.visible_fields(state.values, state.discriminators)
        return state.evolve(errors=errors, touched=state.touched | set(visible) | set(errors))

    target = min(state.current_step + 1, state.step_count - 1)
    logger.info("wizard.step.advanced", flow=state.flow.value, step=target)
    return state.evolve(
        errors={},
        current_step=target,
        furthest_visited_step=max(state.furthest_visited_step, target),
    )


def _previous_step(event: PreviousStep, state: WizardState) -> WizardState:
    if state.current_step == 0:
        return state
    return state.evolve(current_step=state.current_step - 1, errors={})


def _jump_to_step(event: JumpToStep, state: WizardState) -> WizardState:
    if not 0 <= event.target <= state.furthest_visited_step:
        logger.debug("wizard.jump.ignored", target=event.target, furthest=state.furthest_visited_step)
        return state
    if event.target == state.current_step:
        return state
    return state.evolve(current_step=event.target, errors={})


def _reset(event: ResetWizard, state: WizardState) -> WizardState:
    return WizardState.initial(state.flow)


_HANDLERS: dict[type, Callable[[Any, WizardState], WizardState]] = {
    SelectTransactionType: _select_transaction_type,
    SelectCategory: _select_category,
    SetValue: _set_value,
    NextStep: _next_step,
    PreviousStep: _previous_step,
    JumpToStep: _jump_to_step,
    ResetWizard: _reset,
}


def apply(event: WizardEvent, state: WizardState) -> WizardState:
    """Apply one event to a state and return the resulting state.

    Args:
        event: Any wizard event.
        state: The current state (left untouched).

    Returns:
        The new state, or ``state`` itself when the event changes nothing.

    Raises:
        InvalidDiscriminatorError: Category not offered for the transaction type.
        UnknownFieldError: SetValue names a field the flow does not define.
        FieldHiddenError: SetValue targets a field hidden by the discriminators.
        TypeError: The event type is not supported.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported wizard event: {type(event).__name__}")
    return handler(event, state)
