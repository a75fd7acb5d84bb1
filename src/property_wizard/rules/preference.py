"""Preference flow tables ("tell us what you are looking for").

Buyers, tenants and shortlet guests go location -> property & budget ->
features -> contact. Developers (joint venture) introduce themselves first
and get an extra terms step:
    contact -> location -> property-budget -> terms -> features
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from property_wizard.config import get_settings
from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import FieldKind, FlowKind, PropertyCategory, TransactionType
from property_wizard.formatting import format_naira
from property_wizard.rules.checks import (
    CAC_NUMBER_PATTERN,
    PERSON_NAME_PATTERN,
    CrossCheck,
    between,
    discriminators_chosen,
    matches,
    max_length,
    min_items,
    nigerian_phone,
    optional,
    positive,
    required,
    rule,
    valid_email,
)
from property_wizard.rules.fields import describe, index_fields, is_empty
from property_wizard.rules.flow import FlowDefinition
from property_wizard.rules.predicates import (
    all_of,
    any_of,
    except_categories,
    for_categories,
    for_types,
)
from property_wizard.rules.reference import minimum_budget
from property_wizard.rules.steps import StepSpec

SALE = TransactionType.SALE
RENT = TransactionType.RENT
JV = TransactionType.JOINT_VENTURE
SHORTLET = TransactionType.SHORTLET

RESIDENTIAL = PropertyCategory.RESIDENTIAL
COMMERCIAL = PropertyCategory.COMMERCIAL
LAND = PropertyCategory.LAND

LOCATION = "location"
PROPERTY_BUDGET = "property-budget"
FEATURES = "features"
CONTACT = "contact"
TERMS = "terms"

_AMOUNT = FieldKind.AMOUNT
_COUNT = FieldKind.COUNT
_LIST = FieldKind.LIST

PREFERENCE_FIELDS = index_fields(
    [
        # Location
        describe("state", LOCATION, label="State"),
        describe("lgas", LOCATION, _LIST, "Local government areas"),
        describe("areas", LOCATION, _LIST, "Areas"),
        describe("customLocation", LOCATION, label="Custom location"),
        # Property & budget
        describe("minPrice", PROPERTY_BUDGET, _AMOUNT, "Minimum price", category_sensitive=True),
        describe("maxPrice", PROPERTY_BUDGET, _AMOUNT, "Maximum price", category_sensitive=True),
        describe("buildingType", PROPERTY_BUDGET, label="Building type", category_sensitive=True),
        describe("propertyCondition", PROPERTY_BUDGET, label="Property condition", category_sensitive=True),
        describe("minBedrooms", PROPERTY_BUDGET, label="Minimum bedrooms", category_sensitive=True),
        describe("minBathrooms", PROPERTY_BUDGET, _COUNT, "Minimum bathrooms", category_sensitive=True),
        describe("purpose", PROPERTY_BUDGET, label="Purpose", category_sensitive=True),
        describe("leaseTerm", PROPERTY_BUDGET, label="Lease term", category_sensitive=True),
        describe("landSize", PROPERTY_BUDGET, _AMOUNT, "Land size", category_sensitive=True),
        describe("measurementUnit", PROPERTY_BUDGET, label="Measurement unit", category_sensitive=True),
        describe("documentTypes", PROPERTY_BUDGET, _LIST, "Document types", category_sensitive=True),
        describe("landConditions", PROPERTY_BUDGET, _LIST, "Land conditions", category_sensitive=True),
        describe("shortletType", PROPERTY_BUDGET, label="Property type", category_sensitive=True),
        describe("numberOfGuests", PROPERTY_BUDGET, _COUNT, "Number of guests", category_sensitive=True),
        describe("checkInDate", PROPERTY_BUDGET, label="Check-in date", category_sensitive=True),
        describe("checkOutDate", PROPERTY_BUDGET, label="Check-out date", category_sensitive=True),
        describe("travelType", PROPERTY_BUDGET, label="Travel type", category_sensitive=True),
        # Features
        describe("basicFeatures", FEATURES, _LIST, "Basic features", category_sensitive=True),
        describe("premiumFeatures", FEATURES, _LIST, "Premium features", category_sensitive=True),
        describe("comfortFeatures", FEATURES, _LIST, "Comfort features", category_sensitive=True),
        describe("autoAdjustToBudget", FEATURES, FieldKind.FLAG, "Auto adjust", category_sensitive=True),
        # Contact
        describe("fullName", CONTACT, label="Full name"),
        describe("email", CONTACT, label="Email", clear_on_change=False),
        describe("phoneNumber", CONTACT, label="Phone number", clear_on_change=False),
        describe("companyName", CONTACT, label="Company name"),
        describe("contactPerson", CONTACT, label="Contact person"),
        describe("cacRegistrationNumber", CONTACT, label="CAC registration number"),
        describe("nearbyLandmark", CONTACT, label="Nearby landmark"),
        describe("additionalNotes", CONTACT, label="Additional notes", clear_on_change=False),
        # Joint venture terms
        describe("jvType", TERMS, label="JV type", category_sensitive=True),
        describe("expectedStructureType", TERMS, label="Expected structure type", category_sensitive=True),
        describe("timeline", TERMS, label="Timeline", category_sensitive=True),
        describe("partnerExpectations", TERMS, label="Partner expectations", category_sensitive=True),
    ]
)

# ---------------------------------------------------------------------------
# Visibility rules
# ---------------------------------------------------------------------------

_BUILT = all_of(for_types(SALE, RENT), except_categories(LAND))
_SHORTLET = for_types(SHORTLET)
_JV = for_types(JV)

PREFERENCE_VISIBILITY = {
    "buildingType": _BUILT,
    "propertyCondition": _BUILT,
    "minBathrooms": any_of(_BUILT, _SHORTLET),
    "minBedrooms": any_of(all_of(for_types(SALE, RENT), for_categories(RESIDENTIAL)), _SHORTLET),
    "purpose": for_types(SALE, RENT),
    "leaseTerm": for_types(RENT),
    "landSize": for_types(SALE, RENT, JV),
    "measurementUnit": for_types(SALE, RENT, JV),
    "documentTypes": for_types(SALE, JV),
    "landConditions": all_of(for_types(SALE, JV), for_categories(LAND)),
    "shortletType": _SHORTLET,
    "numberOfGuests": _SHORTLET,
    "checkInDate": _SHORTLET,
    "checkOutDate": _SHORTLET,
    "travelType": _SHORTLET,
    "comfortFeatures": _SHORTLET,
    "fullName": for_types(SALE, RENT, SHORTLET),
    "nearbyLandmark": for_types(SALE, SHORTLET),
    "companyName": _JV,
    "contactPerson": _JV,
    "cacRegistrationNumber": _JV,
    "jvType": _JV,
    "timeline": _JV,
    "partnerExpectations": _JV,
    "expectedStructureType": all_of(_JV, except_categories(LAND)),
}

# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

PREFERENCE_CATEGORIES = {
    SALE: (RESIDENTIAL, COMMERCIAL, LAND),
    RENT: (RESIDENTIAL, COMMERCIAL, LAND),
    JV: (RESIDENTIAL, COMMERCIAL, LAND),
    SHORTLET: (),
}


def _areas_or_custom(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
    areas = values.get("areas") or ()
    limit = get_settings().max_preference_areas
    if len(areas) > limit:
        return {"areas": f"You can select a maximum of {limit} areas"}
    if not areas and is_empty(values.get("customLocation")):
        return {"areas": "Please select at least 1 area or enter a custom location"}
    return {}


def _budget_range(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
    min_price = values.get("minPrice") or 0
    max_price = values.get("maxPrice") or 0
    if not min_price or not max_price:
        return {}
    if max_price <= min_price:
        return {"maxPrice": "Maximum price must be greater than minimum price"}
    if discriminators.transaction_type is None:
        return {}
    threshold = minimum_budget(values.get("state"), discriminators.transaction_type)
    if min_price < threshold:
        return {"minPrice": f"{format_naira(threshold)} is the minimum required for this location."}
    return {}


def _land_size_required(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
    needs_size = discriminators.is_type(JV) or (
        discriminators.is_type(SALE, RENT) and discriminators.is_category(LAND)
    )
    errors: dict[str, str] = {}
    if needs_size and is_empty(values.get("landSize")):
        errors["landSize"] = "Land size is required"
    if not is_empty(values.get("landSize")) and is_empty(values.get("measurementUnit")):
        errors["measurementUnit"] = "Measurement unit is required"
    return errors


def _parse_date(raw: Any) -> date | None:
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        return None


def _stay_dates(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
    if not discriminators.is_type(SHORTLET):
        return {}
    errors: dict[str, str] = {}
    check_in = _parse_date(values.get("checkInDate"))
    check_out = _parse_date(values.get("checkOutDate"))
    if values.get("checkInDate") and check_in is None:
        errors["checkInDate"] = "Please enter a valid date"
    if values.get("checkOutDate") and check_out is None:
        errors["checkOutDate"] = "Please enter a valid date"
    if check_in and check_out and check_out <= check_in:
        errors["checkOutDate"] = "Check-out date must be after check-in date"
    return errors


def _notes_length(field_id: str, label: str) -> CrossCheck:
    def check(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
        limit = get_settings().max_notes_length
        if len(values.get(field_id) or "") > limit:
            return {field_id: f"{label} must be less than {limit} characters"}
        return {}

    return check


PREFERENCE_STEPS = {
    LOCATION: StepSpec(
        step_id=LOCATION,
        title="Location",
        rules=(
            rule("state", required("State")),
            rule("lgas", min_items(1, "local government area")),
        ),
        cross_checks=(_areas_or_custom,),
    ),
    PROPERTY_BUDGET: StepSpec(
        step_id=PROPERTY_BUDGET,
        title="Property Details & Budget",
        rules=(
            rule("minPrice", required("Minimum price"), positive("Minimum price")),
            rule("maxPrice", required("Maximum price"), positive("Maximum price")),
            rule("buildingType", required("Building type")),
            rule("propertyCondition", required("Property condition")),
            rule("minBedrooms", required("Minimum bedrooms")),
            rule("purpose", required("Purpose")),
            rule("leaseTerm", required("Lease term")),
            rule("landSize", optional(positive("Land size"))),
            rule("documentTypes", min_items(1, "document type")),
            rule("landConditions", min_items(1, "land condition")),
            rule("shortletType", required("Property type")),
            rule("numberOfGuests", required("Number of guests"), between(1, 20, "Number of guests")),
            rule("checkInDate", required("Check-in date")),
            rule("checkOutDate", required("Check-out date")),
            rule("travelType", required("Travel type")),
        ),
        cross_checks=(
            discriminators_chosen(PREFERENCE_CATEGORIES, "preferenceType", "propertyType"),
            _budget_range,
            _land_size_required,
            _stay_dates,
        ),
    ),
    FEATURES: StepSpec(step_id=FEATURES, title="Features & Amenities"),
    CONTACT: StepSpec(
        step_id=CONTACT,
        title="Contact Information",
        rules=(
            rule(
                "fullName",
                required("Full name"),
                max_length(100, "Full name"),
                matches(PERSON_NAME_PATTERN, "Full name can only contain letters and spaces"),
            ),
            rule("email", required("Email"), valid_email()),
            rule("phoneNumber", required("Phone number"), nigerian_phone()),
            rule("companyName", required("Company name"), max_length(200, "Company name")),
            rule(
                "contactPerson",
                required("Contact person"),
                matches(PERSON_NAME_PATTERN, "Contact person can only contain letters and spaces"),
            ),
            rule(
                "cacRegistrationNumber",
                optional(
                    matches(
                        CAC_NUMBER_PATTERN,
                        "Please enter a valid CAC registration number (e.g. RC1234567)",
                    )
                ),
            ),
        ),
        cross_checks=(_notes_length("additionalNotes", "Additional notes"),),
    ),
    TERMS: StepSpec(
        step_id=TERMS,
        title="Joint Venture Terms",
        rules=(
            rule("jvType", required("JV type")),
            rule("timeline", required("Timeline")),
            rule("expectedStructureType", required("Expected structure type")),
        ),
        cross_checks=(_notes_length("partnerExpectations", "Partner expectations"),),
    ),
}

PREFERENCE_FLOW = FlowDefinition(
    kind=FlowKind.PREFERENCE,
    fields=PREFERENCE_FIELDS,
    visibility=PREFERENCE_VISIBILITY,
    steps=PREFERENCE_STEPS,
    layouts={
        None: (LOCATION, PROPERTY_BUDGET, FEATURES, CONTACT),
        JV: (CONTACT, LOCATION, PROPERTY_BUDGET, TERMS, FEATURES),
    },
    categories=PREFERENCE_CATEGORIES,
    dependent_resets={"state": ("lgas", "areas", "customLocation")},
    type_field="preferenceType",
    category_field="propertyType",
)
