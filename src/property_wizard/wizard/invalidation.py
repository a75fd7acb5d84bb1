"""Dependent-Field Invalidator.

Keeps the wizard state consistent with the visibility rules:

    - after a discriminator change, every clearable field that is now hidden
      is reset to its empty value and forgotten (untouched, no error);
    - an actual change of transaction type or category also resets the
      category-sensitive fields, because a price or a feature list chosen
      for a flat means nothing for a plot of land;
    - editing a field resets the fields that depend on it (state -> LGA ->
      area) and re-runs the hidden-field pass for dependent choices such as
      ``rentalType``.

Clearing repeats until nothing changes, so a cleared dependency also clears
the fields it was keeping visible.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from property_wizard.logging_config import get_logger
from property_wizard.rules.fields import is_empty

if TYPE_CHECKING:
    from property_wizard.domain.discriminators import DiscriminatorSet
    from property_wizard.rules.flow import FlowDefinition
    from property_wizard.wizard.state import WizardState

logger = get_logger(__name__)


def clear_hidden(
    definition: FlowDefinition,
    discriminators: DiscriminatorSet,
    values: dict[str, Any],
) -> set[str]:
    """Empty every clearable hidden field in ``values`` (in place).

    Returns:
        The ids of the fields that were cleared.
    """
    cleared: set[str] = set()
    changed = True
    while changed:
        changed = False
        for field_id, descriptor in definition.fields.items():
            if not descriptor.clear_on_change or is_empty(values.get(field_id)):
                continue
            if not definition.is_visible(field_id, discriminators, values):
                values[field_id] = descriptor.empty
                cleared.add(field_id)
                changed = True
    return cleared


def seed_defaults(
    definition: FlowDefinition,
    discriminators: DiscriminatorSet,
    values: dict[str, Any],
) -> None:
    """Give visible, empty fields their descriptor default (in place)."""
    for field_id, descriptor in definition.fields.items():
        if descriptor.default is None or not is_empty(values.get(field_id)):
            continue
        if definition.is_visible(field_id, discriminators, values):
            values[field_id] = descriptor.default


def _forget(state: WizardState, cleared: set[str], extra_errors: tuple[str, ...] = ()) -> dict:
    errors = {
        field_id: message
        for field_id, message in state.errors.items()
        if field_id not in cleared and field_id not in extra_errors
    }
    return {"touched": state.touched - cleared, "errors": errors}


def on_discriminator_change(state: WizardState, new_discriminators: DiscriminatorSet) -> WizardState:
    """Return the state after moving to ``new_discriminators``.

    Selecting the discriminators the state already has returns the same
    state object. The caller is responsible for checking that the category
    is valid for the transaction type.

    Args:
        state: Current wizard state.
        new_discriminators: The transaction type and category to move to.

    Returns:
        A consistent state: hidden fields empty, step reset when the layout changes.
    """
    old_discriminators = state.discriminators
    if new_discriminators == old_discriminators:
        return state

    definition = state.definition
    values = dict(state.values)
    cleared: set[str] = set()

    for field_id, descriptor in definition.fields.items():
        if descriptor.category_sensitive and descriptor.clear_on_change and not is_empty(values[field_id]):
            values[field_id] = descriptor.empty
            cleared.add(field_id)

    cleared |= clear_hidden(definition, new_discriminators, values)
    seed_defaults(definition, new_discriminators, values)

    layout_changed = definition.layout_for(old_discriminators.transaction_type) != definition.layout_for(
        new_discriminators.transaction_type
    )
    if layout_changed:
        current_step, furthest = 0, 0
    else:
        current_step, furthest = state.current_step, state.current_step

    logger.info(
        "wizard.invalidated",
        flow=state.flow.value,
        old=old_discriminators.to_dict(),
        new=new_discriminators.to_dict(),
        cleared=sorted(cleared),
    )
    return state.evolve(
        discriminators=new_discriminators,
        values=values,
        current_step=current_step,
        furthest_visited_step=furthest,
        **_forget(state, cleared, (definition.type_field, definition.category_field)),
    )


def on_value_change(state: WizardState, field_id: str, raw_value: Any) -> WizardState:
    """Return the state after storing ``raw_value`` in ``field_id``.

    The value is coerced to the field kind first; storing the value the
    field already holds returns the same state object. Visibility of
    ``field_id`` itself is the caller's concern.
    """
    definition = state.definition
    descriptor = definition.descriptor(field_id)
    value = descriptor.coerce(raw_value)
    if state.values.get(field_id) == value:
        return state

    values = dict(state.values)
    values[field_id] = value
    cleared: set[str] = set()

    for dependent_id in definition.dependent_resets.get(field_id, ()):
        if not is_empty(values[dependent_id]):
            values[dependent_id] = definition.fields[dependent_id].empty
            cleared.add(dependent_id)

    cleared |= clear_hidden(definition, state.discriminators, values)
    if cleared:
        logger.debug("wizard.dependents.cleared", field=field_id, cleared=sorted(cleared))

    forgotten = _forget(state, cleared)
    return state.evolve(
        values=values,
        touched=forgotten["touched"] | {field_id},
        errors=forgotten["errors"],
    )


def apply_seed_values(
    state: WizardState,
    seed_values: Mapping[str, Any],
) -> WizardState:
    """Store prefilled values, dropping any that are hidden for the state."""
    definition = state.definition
    values = dict(state.values)
    for field_id, raw in seed_values.items():
        values[field_id] = definition.descriptor(field_id).coerce(raw)
    clear_hidden(definition, state.discriminators, values)
    seed_defaults(definition, state.discriminators, values)
    return state.evolve(values=values)
