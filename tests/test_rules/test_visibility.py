"""Tests for the field visibility rules of both flows."""

from __future__ import annotations

import pytest

from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import FlowKind, PropertyCategory, TransactionType
from property_wizard.rules.visibility import hidden_fields, is_visible, visible_fields

SALE_LAND = DiscriminatorSet(TransactionType.SALE, PropertyCategory.LAND)
RENT_RESIDENTIAL = DiscriminatorSet(TransactionType.RENT, PropertyCategory.RESIDENTIAL)


class TestBriefVisibility:
    @pytest.mark.parametrize("field_id", ["propertyCondition", "typeOfBuilding", "bedrooms"])
    def test_sale_land_hides_building_fields(self, field_id: str) -> None:
        assert is_visible(field_id, SALE_LAND) is False

    @pytest.mark.parametrize("field_id", ["landSize", "documents"])
    def test_sale_land_shows_land_fields(self, field_id: str) -> None:
        assert is_visible(field_id, SALE_LAND) is True

    @pytest.mark.parametrize("category", [None, *PropertyCategory])
    def test_shortlet_never_shows_land_size(self, category: PropertyCategory | None) -> None:
        discriminators = DiscriminatorSet(TransactionType.SHORTLET, category)
        assert is_visible("landSize", discriminators) is False
        for field_id in ("shortletDuration", "maxGuests", "streetAddress"):
            assert is_visible(field_id, discriminators) is True

    def test_lease_fields_follow_rental_type(self) -> None:
        assert is_visible("leaseHold", RENT_RESIDENTIAL, {"rentalType": "Rent"}) is False
        assert is_visible("leaseHold", RENT_RESIDENTIAL, {"rentalType": "Lease"}) is True
        assert is_visible("holdDuration", RENT_RESIDENTIAL, {"rentalType": "Lease"}) is True

    def test_lease_fields_ignore_category(self) -> None:
        rent_land = DiscriminatorSet(TransactionType.RENT, PropertyCategory.LAND)
        assert is_visible("leaseHold", rent_land, {"rentalType": "Lease"}) is True

    def test_tenant_criteria_only_for_built_rentals(self) -> None:
        assert is_visible("rentalConditions", RENT_RESIDENTIAL) is True
        rent_land = DiscriminatorSet(TransactionType.RENT, PropertyCategory.LAND)
        assert is_visible("rentalConditions", rent_land) is False

    def test_rent_land_size_only_for_commercial(self) -> None:
        rent_commercial = DiscriminatorSet(TransactionType.RENT, PropertyCategory.COMMERCIAL)
        assert is_visible("landSize", rent_commercial) is True
        assert is_visible("landSize", RENT_RESIDENTIAL) is False

    def test_nothing_conditional_before_a_type_is_chosen(self) -> None:
        empty = DiscriminatorSet()
        assert is_visible("landSize", empty) is False
        assert is_visible("price", empty) is True

    def test_unknown_field_is_visible(self) -> None:
        assert is_visible("somethingNew", SALE_LAND) is True

    def test_contact_fields_always_visible(self) -> None:
        for discriminators in (SALE_LAND, RENT_RESIDENTIAL, DiscriminatorSet()):
            assert is_visible("phone", discriminators) is True


class TestPreferenceVisibility:
    def test_developer_contact_only_for_joint_venture(self) -> None:
        jv = DiscriminatorSet(TransactionType.JOINT_VENTURE)
        buy = DiscriminatorSet(TransactionType.SALE)
        assert is_visible("companyName", jv, flow=FlowKind.PREFERENCE) is True
        assert is_visible("fullName", jv, flow=FlowKind.PREFERENCE) is False
        assert is_visible("companyName", buy, flow=FlowKind.PREFERENCE) is False
        assert is_visible("fullName", buy, flow=FlowKind.PREFERENCE) is True

    def test_booking_fields_only_for_shortlet(self) -> None:
        shortlet = DiscriminatorSet(TransactionType.SHORTLET)
        rent = DiscriminatorSet(TransactionType.RENT, PropertyCategory.RESIDENTIAL)
        assert is_visible("checkInDate", shortlet, flow=FlowKind.PREFERENCE) is True
        assert is_visible("checkInDate", rent, flow=FlowKind.PREFERENCE) is False

    def test_bedrooms_only_for_residential(self) -> None:
        commercial = DiscriminatorSet(TransactionType.SALE, PropertyCategory.COMMERCIAL)
        residential = DiscriminatorSet(TransactionType.SALE, PropertyCategory.RESIDENTIAL)
        assert is_visible("minBedrooms", commercial, flow=FlowKind.PREFERENCE) is False
        assert is_visible("minBedrooms", residential, flow=FlowKind.PREFERENCE) is True


class TestFieldLists:
    def test_visible_and_hidden_partition_the_registry(self) -> None:
        visible = set(visible_fields(SALE_LAND))
        hidden = set(hidden_fields(SALE_LAND))
        assert visible.isdisjoint(hidden)
        assert "landSize" in visible
        assert "bedrooms" in hidden

    def test_same_inputs_same_answer(self) -> None:
        assert visible_fields(RENT_RESIDENTIAL) == visible_fields(RENT_RESIDENTIAL)
