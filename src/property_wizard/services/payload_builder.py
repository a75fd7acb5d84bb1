"""Payload Builder — turns a flat form state into a wire payload variant.

The form keeps one flat value per field id. The backend expects one of
several nested shapes depending on the transaction type. The builder reads
only visible, non-empty values, so a key that does not apply to the
selection is never present in the result.

Usage:
    payload = build(state.values, state.discriminators)
    wire = payload.to_wire()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from property_wizard.config import get_settings
from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import FlowKind, TransactionType
from property_wizard.domain.exceptions import PayloadNotReadyError
from property_wizard.logging_config import get_logger
from property_wizard.rules import FlowDefinition, get_flow
from property_wizard.rules.fields import is_empty
from property_wizard.schemas.briefs import (
    AdditionalFeatures,
    Availability,
    BriefLocation,
    BriefPayload,
    DocumentOnProperty,
    HouseRules,
    JointVentureBriefPayload,
    LandSize,
    OwnerContact,
    PropertyDetails,
    Pricing,
    RentBriefPayload,
    SaleBriefPayload,
    ShortletBriefPayload,
    TenantCriteria,
)
from property_wizard.schemas.preferences import (
    BookingDetails,
    Budget,
    BuyPreferencePayload,
    BuyPropertyDetails,
    ContactInfo,
    DevelopmentDetails,
    DeveloperContactInfo,
    FeaturePreferences,
    JointVenturePreferencePayload,
    PreferenceLocation,
    PreferencePayload,
    RentPreferencePayload,
    RentPropertyDetails,
    ShortletPreferencePayload,
)

logger = get_logger(__name__)


class _Form:
    """Read-only view of the values that are visible for a selection."""

    def __init__(
        self,
        definition: FlowDefinition,
        values: Mapping[str, Any],
        discriminators: DiscriminatorSet,
    ) -> None:
        self._definition = definition
        self._values = values
        self._discriminators = discriminators

    def visible(self, field_id: str) -> bool:
        return self._definition.is_visible(field_id, self._discriminators, self._values)

    def get(self, field_id: str) -> Any:
        """Value of a visible, non-empty field, else None."""
        value = self._values.get(field_id)
        if is_empty(value) or not self.visible(field_id):
            return None
        if isinstance(value, str):
            return value.strip() or None
        return value

    def number(self, field_id: str) -> int | float:
        return self.get(field_id) or 0

    def flag(self, field_id: str) -> bool:
        return bool(self.get(field_id))

    def items(self, field_id: str) -> list[str]:
        return list(self.get(field_id) or ())


# ---------------------------------------------------------------------------
# Brief payloads
# ---------------------------------------------------------------------------


def _additional_features(form: _Form) -> AdditionalFeatures | None:
    counts = {
        "no_of_bedroom": form.get("bedrooms"),
        "no_of_bathroom": form.get("bathrooms"),
        "no_of_toilet": form.get("toilets"),
        "no_of_car_park": form.get("parkingSpaces"),
        "max_guests": form.get("maxGuests"),
    }
    if all(count is None for count in counts.values()):
        return None
    return AdditionalFeatures(**counts)


def _land_size(form: _Form) -> LandSize | None:
    size = form.get("landSize")
    if size is None:
        return None
    return LandSize(measurement_type=form.get("measurementType"), size=size)


def _property_details(form: _Form) -> PropertyDetails | None:
    details = PropertyDetails(
        property_condition=form.get("propertyCondition"),
        type_of_building=form.get("typeOfBuilding"),
        additional_features=_additional_features(form),
        land_size=_land_size(form),
    )
    if details == PropertyDetails():
        return None
    return details


def _owner_name(form: _Form) -> str | None:
    parts = [form.get("firstName"), form.get("lastName")]
    return " ".join(part for part in parts if part) or None


def _brief_common(
    form: _Form,
    discriminators: DiscriminatorSet,
    matched_brief_id: str | None,
    matching_preference_id: str | None,
) -> dict[str, Any]:
    return {
        "property_category": discriminators.category,
        "location": BriefLocation(
            state=form.get("state"),
            local_government=form.get("lga"),
            area=form.get("area"),
            street_address=form.get("streetAddress"),
        ),
        "price": form.get("price"),
        "features": form.items("features"),
        "owner": OwnerContact(
            full_name=_owner_name(form),
            phone_number=form.get("phone"),
            email=form.get("email"),
        ),
        "are_you_the_owner": form.flag("isLegalOwner"),
        "ownership_documents": form.items("ownershipDocuments"),
        "pictures": form.items("pictures"),
        "videos": form.items("videos"),
        "description": form.get("description"),
        "additional_info": form.get("additionalInfo"),
        "matched_brief_id": matched_brief_id,
        "matching_preference_id": matching_preference_id,
    }


def _documents(form: _Form) -> list[DocumentOnProperty]:
    return [DocumentOnProperty(doc_name=name) for name in form.items("documents")]


def _build_sale(form: _Form, common: dict[str, Any]) -> SaleBriefPayload:
    return SaleBriefPayload(
        **common,
        property_details=_property_details(form),
        doc_on_property=_documents(form),
        is_tenanted=form.get("isTenanted"),
    )


def _build_rent(form: _Form, common: dict[str, Any]) -> RentBriefPayload:
    tenant_criteria = None
    if form.visible("rentalConditions"):
        tenant_criteria = TenantCriteria(
            rental_conditions=form.items("rentalConditions"),
            employment_type=form.get("employmentType"),
            tenant_gender_preference=form.get("tenantGenderPreference"),
        )
    return RentBriefPayload(
        **common,
        property_details=_property_details(form),
        rental_type=form.get("rentalType"),
        lease_hold=form.get("leaseHold"),
        hold_duration=form.get("holdDuration"),
        tenant_criteria=tenant_criteria,
        is_tenanted=form.get("isTenanted"),
    )


def _build_joint_venture(form: _Form, common: dict[str, Any]) -> JointVentureBriefPayload:
    return JointVentureBriefPayload(
        **common,
        property_details=_property_details(form),
        doc_on_property=_documents(form),
        jv_conditions=form.items("jvConditions"),
        is_tenanted=form.get("isTenanted"),
    )


def _build_shortlet(form: _Form, common: dict[str, Any]) -> ShortletBriefPayload:
    return ShortletBriefPayload(
        **common,
        shortlet_duration=form.get("shortletDuration"),
        type_of_building=form.get("typeOfBuilding"),
        property_condition=form.get("propertyCondition"),
        additional_features=_additional_features(form) or AdditionalFeatures(),
        availability=Availability(min_stay=form.get("minStay"), max_stay=form.get("maxStay")),
        pricing=Pricing(
            nightly=form.get("nightly"),
            weekly_discount=form.number("weeklyDiscount"),
            monthly_discount=form.number("monthlyDiscount"),
            cleaning_fee=form.number("cleaningFee"),
            security_deposit=form.number("securityDeposit"),
            cancellation_policy=form.get("cancellationPolicy"),
        ),
        house_rules=HouseRules(
            check_in=form.get("checkIn"),
            check_out=form.get("checkOut"),
            smoking=form.flag("smokingAllowed"),
            pets=form.flag("petsAllowed"),
            parties=form.flag("partiesAllowed"),
            other_rules=form.get("otherRules"),
        ),
        payment_method=form.get("paymentMethod"),
    )


_BRIEF_BUILDERS = {
    TransactionType.SALE: _build_sale,
    TransactionType.RENT: _build_rent,
    TransactionType.JOINT_VENTURE: _build_joint_venture,
    TransactionType.SHORTLET: _build_shortlet,
}


# ---------------------------------------------------------------------------
# Preference payloads
# ---------------------------------------------------------------------------


def _preference_common(form: _Form) -> dict[str, Any]:
    return {
        "location": PreferenceLocation(
            state=form.get("state"),
            local_government_areas=form.items("lgas"),
            selected_areas=form.items("areas"),
            custom_location=form.get("customLocation"),
        ),
        "budget": Budget(
            min_price=form.get("minPrice"),
            max_price=form.get("maxPrice"),
            currency=get_settings().currency,
        ),
        "features": FeaturePreferences(
            base_features=form.items("basicFeatures"),
            premium_features=form.items("premiumFeatures"),
            comfort_features=form.items("comfortFeatures") if form.visible("comfortFeatures") else None,
            auto_adjust_to_features=form.flag("autoAdjustToBudget"),
        ),
        "additional_notes": form.get("additionalNotes"),
    }


def _contact_info(form: _Form) -> ContactInfo:
    return ContactInfo(
        full_name=form.get("fullName"),
        email=form.get("email"),
        phone_number=form.get("phoneNumber"),
    )


def _category_key(discriminators: DiscriminatorSet) -> str | None:
    return discriminators.category.value.lower() if discriminators.category else None


def _build_buy_preference(
    form: _Form, discriminators: DiscriminatorSet, common: dict[str, Any]
) -> BuyPreferencePayload:
    return BuyPreferencePayload(
        **common,
        property_details=BuyPropertyDetails(
            property_type=_category_key(discriminators),
            building_type=form.get("buildingType"),
            min_bedrooms=form.get("minBedrooms"),
            min_bathrooms=form.get("minBathrooms"),
            property_condition=form.get("propertyCondition"),
            purpose=form.get("purpose"),
            land_size=form.get("landSize"),
            measurement_unit=form.get("measurementUnit"),
            document_types=form.items("documentTypes"),
            land_conditions=form.items("landConditions") if form.visible("landConditions") else None,
        ),
        contact_info=_contact_info(form),
        nearby_landmark=form.get("nearbyLandmark"),
    )


def _build_rent_preference(
    form: _Form, discriminators: DiscriminatorSet, common: dict[str, Any]
) -> RentPreferencePayload:
    return RentPreferencePayload(
        **common,
        property_details=RentPropertyDetails(
            property_type=_category_key(discriminators),
            building_type=form.get("buildingType"),
            min_bedrooms=form.get("minBedrooms"),
            min_bathrooms=form.get("minBathrooms"),
            lease_term=form.get("leaseTerm"),
            property_condition=form.get("propertyCondition"),
            purpose=form.get("purpose"),
            land_size=form.get("landSize"),
            measurement_unit=form.get("measurementUnit"),
        ),
        contact_info=_contact_info(form),
    )


def _build_joint_venture_preference(
    form: _Form, discriminators: DiscriminatorSet, common: dict[str, Any]
) -> JointVenturePreferencePayload:
    return JointVenturePreferencePayload(
        **common,
        development_details=DevelopmentDetails(
            min_land_size=form.get("landSize"),
            measurement_unit=form.get("measurementUnit"),
            jv_type=form.get("jvType"),
            property_type=_category_key(discriminators),
            expected_structure_type=form.get("expectedStructureType"),
            timeline=form.get("timeline"),
            document_types=form.items("documentTypes"),
            land_conditions=form.items("landConditions") if form.visible("landConditions") else None,
        ),
        contact_info=DeveloperContactInfo(
            company_name=form.get("companyName"),
            contact_person=form.get("contactPerson"),
            email=form.get("email"),
            phone_number=form.get("phoneNumber"),
            cac_registration_number=form.get("cacRegistrationNumber"),
        ),
        partner_expectations=form.get("partnerExpectations"),
    )


def _build_shortlet_preference(
    form: _Form, discriminators: DiscriminatorSet, common: dict[str, Any]
) -> ShortletPreferencePayload:
    return ShortletPreferencePayload(
        **common,
        booking_details=BookingDetails(
            property_type=form.get("shortletType"),
            min_bedrooms=form.get("minBedrooms"),
            min_bathrooms=form.get("minBathrooms"),
            number_of_guests=form.get("numberOfGuests"),
            check_in_date=form.get("checkInDate"),
            check_out_date=form.get("checkOutDate"),
            travel_type=form.get("travelType"),
        ),
        contact_info=_contact_info(form),
        nearby_landmark=form.get("nearbyLandmark"),
    )


_PREFERENCE_BUILDERS = {
    TransactionType.SALE: _build_buy_preference,
    TransactionType.RENT: _build_rent_preference,
    TransactionType.JOINT_VENTURE: _build_joint_venture_preference,
    TransactionType.SHORTLET: _build_shortlet_preference,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _validation_errors(exc: ValidationError) -> dict[str, str]:
    return {".".join(str(part) for part in error["loc"]): error["msg"] for error in exc.errors()}


def build(
    values: Mapping[str, Any],
    discriminators: DiscriminatorSet,
    flow: FlowKind = FlowKind.BRIEF,
    *,
    matched_brief_id: str | None = None,
    matching_preference_id: str | None = None,
) -> BriefPayload | PreferencePayload:
    """Assemble the payload variant for the selected transaction type.

    Args:
        values: Flat form values keyed by field id.
        discriminators: Selected transaction type and category.
        flow: Which flow the values belong to.
        matched_brief_id: Brief being answered (brief flow only).
        matching_preference_id: Preference being answered (brief flow only).

    Returns:
        A pydantic payload model; call ``to_wire()`` for the JSON dict.

    Raises:
        PayloadNotReadyError: No transaction type, or a required value is missing.
    """
    transaction_type = discriminators.transaction_type
    if transaction_type is None:
        raise PayloadNotReadyError("Cannot build a payload before a transaction type is chosen")

    form = _Form(get_flow(flow), values, discriminators)
    try:
        if flow == FlowKind.BRIEF:
            common = _brief_common(form, discriminators, matched_brief_id, matching_preference_id)
            payload = _BRIEF_BUILDERS[transaction_type](form, common)
        else:
            common = _preference_common(form)
            payload = _PREFERENCE_BUILDERS[transaction_type](form, discriminators, common)
    except ValidationError as exc:
        errors = _validation_errors(exc)
        logger.warning(
            "payload.incomplete",
            flow=str(flow),
            transaction_type=transaction_type.value,
            errors=errors,
        )
        raise PayloadNotReadyError("Payload is missing required values", errors=errors) from exc

    logger.debug("payload.built", flow=str(flow), transaction_type=transaction_type.value)
    return payload
