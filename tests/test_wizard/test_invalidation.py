"""Tests for the dependent-field invalidator.

These tests verify that:
    1. After any discriminator change, every hidden field is empty.
    2. Re-selecting the same discriminators changes nothing.
    3. Location fields reset their dependents.
    4. Defaults are seeded only where the field is visible.
"""

from __future__ import annotations

import itertools

import pytest

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import FlowKind, PropertyCategory, TransactionType
from property_wizard.rules.fields import is_empty
from property_wizard.wizard.events import SelectCategory, SelectTransactionType, SetValue
from property_wizard.wizard.invalidation import (
    apply_seed_values,
    clear_hidden,
    on_discriminator_change,
    on_value_change,
)
from property_wizard.wizard.reducer import apply
from property_wizard.wizard.state import WizardState

ALL_SELECTIONS = [
    DiscriminatorSet(transaction_type, category)
    for transaction_type in TransactionType
    for category in (None, *PropertyCategory)
]


def _filled_state(flow: FlowKind = FlowKind.BRIEF) -> WizardState:
    """A state of ``flow`` with every field holding a non-empty value."""
    state = WizardState.initial(flow)
    values = {}
    for field_id, descriptor in state.definition.fields.items():
        sample = {"text": "x", "count": 2, "amount": 1000, "list": ("a",), "flag": True}
        values[field_id] = sample[descriptor.kind.value]
    if flow is FlowKind.BRIEF:
        values["rentalType"] = "Lease"
    return state.evolve(values=values)


class TestConsistency:
    @pytest.mark.parametrize("flow", [FlowKind.BRIEF, FlowKind.PREFERENCE])
    @pytest.mark.parametrize(
        ("old", "new"),
        list(itertools.product(ALL_SELECTIONS[::3], ALL_SELECTIONS[1::3])),
    )
    def test_hidden_fields_are_empty_after_any_transition(
        self, flow: FlowKind, old: DiscriminatorSet, new: DiscriminatorSet
    ) -> None:
        state = _filled_state(flow).evolve(discriminators=old)
        result = on_discriminator_change(state, new)
        definition = result.definition
        for field_id in definition.fields:
            if not definition.is_visible(field_id, new, result.values):
                assert is_empty(result.values[field_id]), field_id

    def test_category_change_clears_category_sensitive_fields(self) -> None:
        state = _filled_state().evolve(
            discriminators=DiscriminatorSet(TransactionType.SALE, PropertyCategory.RESIDENTIAL)
        )
        result = on_discriminator_change(
            state, DiscriminatorSet(TransactionType.SALE, PropertyCategory.COMMERCIAL)
        )
        assert result.values["price"] == 0
        assert result.values["features"] == ()
        assert result.values["firstName"] == "x"
        assert result.values["phone"] == "x"

    def test_cleared_fields_lose_errors_and_touched(self) -> None:
        state = _filled_state().evolve(
            discriminators=DiscriminatorSet(TransactionType.SALE, PropertyCategory.RESIDENTIAL),
            errors={"bedrooms": "Number of bedrooms is required", "email": "Please enter a valid email address"},
            touched=frozenset({"bedrooms", "email"}),
        )
        result = on_discriminator_change(state, DiscriminatorSet(TransactionType.SALE, PropertyCategory.LAND))
        assert "bedrooms" not in result.errors
        assert "bedrooms" not in result.touched
        assert result.errors["email"] == "Please enter a valid email address"


class TestRentLeaseAcrossCategories:
    def test_lease_hold_survives_category_switch(self) -> None:
        state = WizardState.initial(FlowKind.BRIEF)
        state = apply(SelectTransactionType(TransactionType.RENT), state)
        state = apply(SelectCategory(PropertyCategory.RESIDENTIAL), state)
        state = apply(SetValue("rentalType", "Lease"), state)
        state = apply(SetValue("leaseHold", "500000"), state)

        state = apply(SelectCategory(PropertyCategory.LAND), state)

        assert state.values["rentalType"] == "Lease"
        assert state.values["leaseHold"] == "500000"

    def test_lease_hold_cleared_when_rental_type_changes(self) -> None:
        state = WizardState.initial(FlowKind.BRIEF)
        state = apply(SelectTransactionType(TransactionType.RENT), state)
        state = apply(SetValue("rentalType", "Lease"), state)
        state = apply(SetValue("holdDuration", "10 years"), state)

        state = apply(SetValue("rentalType", "Rent"), state)

        assert state.values["holdDuration"] == ""

    def test_lease_hold_cleared_when_leaving_rent(self) -> None:
        state = WizardState.initial(FlowKind.BRIEF)
        state = apply(SelectTransactionType(TransactionType.RENT), state)
        state = apply(SetValue("rentalType", "Lease"), state)
        state = apply(SetValue("leaseHold", "5 years"), state)

        state = apply(SelectTransactionType(TransactionType.SALE), state)

        assert state.values["rentalType"] == ""
        assert state.values["leaseHold"] == ""


class TestIdempotence:
    def test_same_selection_returns_same_state(self) -> None:
        state = WizardState.initial(FlowKind.BRIEF)
        state = apply(SelectTransactionType(TransactionType.SALE), state)
        state = apply(SelectCategory(PropertyCategory.RESIDENTIAL), state)
        state = apply(SetValue("price", "1,000,000"), state)

        again = apply(SelectCategory(PropertyCategory.RESIDENTIAL), state)
        assert again is state
        again = apply(SelectTransactionType(TransactionType.SALE), state)
        assert again is state

    def test_same_value_returns_same_state(self) -> None:
        state = apply(SelectTransactionType(TransactionType.SALE), WizardState.initial(FlowKind.BRIEF))
        state = on_value_change(state, "price", "2,000")
        assert on_value_change(state, "price", 2000) is state


class TestDependentResets:
    def test_state_change_clears_lga_and_area(self) -> None:
        state = WizardState.initial(FlowKind.BRIEF)
        for field_id, value in (("state", "Lagos"), ("lga", "Ikeja"), ("area", "GRA")):
            state = on_value_change(state, field_id, value)

        state = on_value_change(state, "state", "Abuja")

        assert state.values["lga"] == ""
        assert state.values["area"] == ""

    def test_lga_change_keeps_state(self) -> None:
        state = WizardState.initial(FlowKind.BRIEF)
        for field_id, value in (("state", "Lagos"), ("lga", "Ikeja"), ("area", "GRA")):
            state = on_value_change(state, field_id, value)

        state = on_value_change(state, "lga", "Eti-Osa")

        assert state.values["state"] == "Lagos"
        assert state.values["area"] == ""

    def test_preference_state_change_clears_areas(self) -> None:
        state = WizardState.initial(FlowKind.PREFERENCE)
        state = on_value_change(state, "state", "Lagos")
        state = on_value_change(state, "lgas", ["Ikeja"])
        state = on_value_change(state, "customLocation", "Near the airport")

        state = on_value_change(state, "state", "Abuja")

        assert state.values["lgas"] == ()
        assert state.values["customLocation"] == ""


class TestDefaults:
    def test_shortlet_defaults_seeded(self) -> None:
        state = apply(SelectTransactionType(TransactionType.SHORTLET), WizardState.initial(FlowKind.BRIEF))
        assert state.values["checkIn"] == "15:00"
        assert state.values["checkOut"] == "11:00"
        assert state.values["minStay"] == 1
        assert state.values["cancellationPolicy"] == "flexible"

    def test_defaults_removed_when_hidden(self) -> None:
        state = apply(SelectTransactionType(TransactionType.SHORTLET), WizardState.initial(FlowKind.BRIEF))
        state = apply(SelectTransactionType(TransactionType.SALE), state)
        assert state.values["checkIn"] == ""
        assert state.values["minStay"] == 0

    def test_seed_values_drop_hidden_fields(self) -> None:
        state = apply(SelectTransactionType(TransactionType.SALE), WizardState.initial(FlowKind.BRIEF))
        state = apply_seed_values(state, {"price": "5,000,000", "nightly": "40,000"})
        assert state.values["price"] == 5_000_000
        assert state.values["nightly"] == 0


class TestClearHidden:
    def test_returns_cleared_ids(self) -> None:
        state = _filled_state()
        values = dict(state.values)
        cleared = clear_hidden(
            state.definition,
            DiscriminatorSet(TransactionType.SALE, PropertyCategory.LAND),
            values,
        )
        assert {"bedrooms", "nightly", "rentalType", "leaseHold"} <= cleared
        assert "landSize" not in cleared
        assert "phone" not in cleared
