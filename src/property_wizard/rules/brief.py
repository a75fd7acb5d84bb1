"""Brief flow tables ("post a property").

Four steps for every transaction type:
    basic-details        -> category, location, price, building and size
    features-conditions  -> documents, tenancy, JV terms, shortlet booking rules
    media                -> pictures and videos (already uploaded URLs)
    owner-declaration    -> contact details and ownership confirmation
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from property_wizard.config import get_settings
from property_wizard.domain.discriminators import DiscriminatorSet
from property_wizard.domain.enums import (
    FieldKind,
    FlowKind,
    PropertyCategory,
    RentalType,
    TransactionType,
)
from property_wizard.rules.checks import (
    at_least,
    between,
    discriminators_chosen,
    min_items,
    nigerian_phone,
    person_name,
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
    when_value,
)
from property_wizard.rules.steps import StepSpec

SALE = TransactionType.SALE
RENT = TransactionType.RENT
JV = TransactionType.JOINT_VENTURE
SHORTLET = TransactionType.SHORTLET

RESIDENTIAL = PropertyCategory.RESIDENTIAL
COMMERCIAL = PropertyCategory.COMMERCIAL
LAND = PropertyCategory.LAND

BASIC_DETAILS = "basic-details"
FEATURES_CONDITIONS = "features-conditions"
MEDIA = "media"
OWNER_DECLARATION = "owner-declaration"

# ---------------------------------------------------------------------------
# Field registry
# ---------------------------------------------------------------------------

_AMOUNT = FieldKind.AMOUNT
_COUNT = FieldKind.COUNT
_LIST = FieldKind.LIST
_FLAG = FieldKind.FLAG

BRIEF_FIELDS = index_fields(
    [
        # Basic details
        describe("state", BASIC_DETAILS, label="State", category_sensitive=True),
        describe("lga", BASIC_DETAILS, label="Local Government", category_sensitive=True),
        describe("area", BASIC_DETAILS, label="Area", category_sensitive=True),
        describe("streetAddress", BASIC_DETAILS, label="Street address", category_sensitive=True),
        describe("price", BASIC_DETAILS, _AMOUNT, "Price", category_sensitive=True),
        describe("propertyCondition", BASIC_DETAILS, label="Property condition", category_sensitive=True),
        describe("typeOfBuilding", BASIC_DETAILS, label="Type of building", category_sensitive=True),
        describe("bedrooms", BASIC_DETAILS, _COUNT, "Number of bedrooms", category_sensitive=True),
        describe("bathrooms", BASIC_DETAILS, _COUNT, "Number of bathrooms", category_sensitive=True),
        describe("toilets", BASIC_DETAILS, _COUNT, "Number of toilets", category_sensitive=True),
        describe("parkingSpaces", BASIC_DETAILS, _COUNT, "Parking spaces", category_sensitive=True),
        describe("maxGuests", BASIC_DETAILS, _COUNT, "Maximum guests", category_sensitive=True),
        describe("landSize", BASIC_DETAILS, _AMOUNT, "Land size", category_sensitive=True),
        describe("measurementType", BASIC_DETAILS, label="Measurement type", category_sensitive=True),
        describe("rentalType", BASIC_DETAILS, label="Rental type"),
        describe("leaseHold", BASIC_DETAILS, label="Lease hold"),
        describe("holdDuration", BASIC_DETAILS, label="Hold duration"),
        describe("shortletDuration", BASIC_DETAILS, label="Shortlet duration", category_sensitive=True),
        # Features and conditions
        describe("features", FEATURES_CONDITIONS, _LIST, "Features", category_sensitive=True),
        describe("documents", FEATURES_CONDITIONS, _LIST, "Documents", category_sensitive=True),
        describe("jvConditions", FEATURES_CONDITIONS, _LIST, "JV conditions", category_sensitive=True),
        describe("rentalConditions", FEATURES_CONDITIONS, _LIST, "Rental conditions", category_sensitive=True),
        describe("employmentType", FEATURES_CONDITIONS, label="Employment type", category_sensitive=True),
        describe(
            "tenantGenderPreference",
            FEATURES_CONDITIONS,
            label="Tenant gender preference",
            category_sensitive=True,
        ),
        describe("isTenanted", FEATURES_CONDITIONS, label="Tenancy status", category_sensitive=True),
        describe("description", FEATURES_CONDITIONS, label="Description", category_sensitive=True),
        describe("additionalInfo", FEATURES_CONDITIONS, label="Additional information", category_sensitive=True),
        describe("minStay", FEATURES_CONDITIONS, _COUNT, "Minimum stay", category_sensitive=True, default=1),
        describe("maxStay", FEATURES_CONDITIONS, _COUNT, "Maximum stay", category_sensitive=True),
        describe("nightly", FEATURES_CONDITIONS, _AMOUNT, "Nightly rate", category_sensitive=True),
        describe("weeklyDiscount", FEATURES_CONDITIONS, _AMOUNT, "Weekly discount", category_sensitive=True),
        describe("monthlyDiscount", FEATURES_CONDITIONS, _AMOUNT, "Monthly discount", category_sensitive=True),
        describe("cleaningFee", FEATURES_CONDITIONS, _AMOUNT, "Cleaning fee", category_sensitive=True),
        describe("securityDeposit", FEATURES_CONDITIONS, _AMOUNT, "Security deposit", category_sensitive=True),
        describe(
            "cancellationPolicy",
            FEATURES_CONDITIONS,
            label="Cancellation policy",
            category_sensitive=True,
            default="flexible",
        ),
        describe("checkIn", FEATURES_CONDITIONS, label="Check-in time", category_sensitive=True, default="15:00"),
        describe("checkOut", FEATURES_CONDITIONS, label="Check-out time", category_sensitive=True, default="11:00"),
        describe("smokingAllowed", FEATURES_CONDITIONS, _FLAG, "Smoking allowed", category_sensitive=True),
        describe("petsAllowed", FEATURES_CONDITIONS, _FLAG, "Pets allowed", category_sensitive=True),
        describe("partiesAllowed", FEATURES_CONDITIONS, _FLAG, "Parties allowed", category_sensitive=True),
        describe("otherRules", FEATURES_CONDITIONS, label="Other rules", category_sensitive=True),
        describe("paymentMethod", FEATURES_CONDITIONS, label="Payment method", category_sensitive=True),
        # Media
        describe("pictures", MEDIA, _LIST, "Pictures", category_sensitive=True),
        describe("videos", MEDIA, _LIST, "Videos", category_sensitive=True),
        # Owner declaration
        describe("firstName", OWNER_DECLARATION, label="First name", clear_on_change=False),
        describe("lastName", OWNER_DECLARATION, label="Last name", clear_on_change=False),
        describe("email", OWNER_DECLARATION, label="Email", clear_on_change=False),
        describe("phone", OWNER_DECLARATION, label="Phone number", clear_on_change=False),
        describe("isLegalOwner", OWNER_DECLARATION, _FLAG, "Legal owner", clear_on_change=False),
        describe(
            "ownershipDocuments",
            OWNER_DECLARATION,
            _LIST,
            "Ownership documents",
            clear_on_change=False,
        ),
    ]
)

# ---------------------------------------------------------------------------
# Visibility rules
# ---------------------------------------------------------------------------

_BUILDING = all_of(for_types(SALE, RENT, SHORTLET), for_categories(RESIDENTIAL, COMMERCIAL))
_LAND_SIZE = any_of(for_types(SALE, JV), all_of(for_types(RENT), for_categories(COMMERCIAL)))
_LEASE = all_of(for_types(RENT), when_value("rentalType", RentalType.LEASE.value))
_TENANT = all_of(for_types(RENT), except_categories(LAND))
_SHORTLET = for_types(SHORTLET)

_SHORTLET_ONLY = (
    "shortletDuration",
    "streetAddress",
    "maxGuests",
    "minStay",
    "maxStay",
    "nightly",
    "weeklyDiscount",
    "monthlyDiscount",
    "cleaningFee",
    "securityDeposit",
    "cancellationPolicy",
    "checkIn",
    "checkOut",
    "smokingAllowed",
    "petsAllowed",
    "partiesAllowed",
    "otherRules",
    "paymentMethod",
)

BRIEF_VISIBILITY = {
    "propertyCondition": _BUILDING,
    "typeOfBuilding": _BUILDING,
    "bedrooms": _BUILDING,
    "bathrooms": _BUILDING,
    "toilets": _BUILDING,
    "parkingSpaces": _BUILDING,
    "landSize": _LAND_SIZE,
    "measurementType": _LAND_SIZE,
    "rentalType": for_types(RENT),
    "leaseHold": _LEASE,
    "holdDuration": _LEASE,
    "documents": for_types(SALE, JV),
    "jvConditions": for_types(JV),
    "rentalConditions": _TENANT,
    "employmentType": _TENANT,
    "tenantGenderPreference": _TENANT,
    "isTenanted": for_types(SALE, RENT, JV),
    **{field_id: _SHORTLET for field_id in _SHORTLET_ONLY},
}

# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

BRIEF_CATEGORIES = {
    SALE: (RESIDENTIAL, COMMERCIAL, LAND),
    RENT: (RESIDENTIAL, COMMERCIAL, LAND),
    JV: (RESIDENTIAL, COMMERCIAL, LAND, PropertyCategory.MIXED_DEVELOPMENT),
    SHORTLET: (RESIDENTIAL,),
}


def _stay_range(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
    if not discriminators.is_type(SHORTLET):
        return {}
    max_stay = values.get("maxStay")
    if is_empty(max_stay):
        return {}
    if max_stay < (values.get("minStay") or 0):
        return {"maxStay": "Maximum stay must not be less than minimum stay"}
    return {}


def _enough_pictures(values: Mapping[str, Any], discriminators: DiscriminatorSet) -> dict[str, str]:
    minimum = get_settings().min_brief_pictures
    if len(values.get("pictures") or ()) < minimum:
        return {"pictures": f"Please upload at least {minimum} images"}
    return {}


BRIEF_STEPS = {
    BASIC_DETAILS: StepSpec(
        step_id=BASIC_DETAILS,
        title="Basic Details",
        rules=(
            rule("state", required("State")),
            rule("lga", required("Local Government")),
            rule("area", required("Area")),
            rule("price", required("Price"), positive("Price")),
            rule("propertyCondition", required("Property condition")),
            rule("typeOfBuilding", required("Type of building")),
            rule("bedrooms", required("Number of bedrooms"), at_least(1, "Number of bedrooms")),
            rule("rentalType", required("Rental type")),
            rule("leaseHold", required("Lease hold")),
            rule("shortletDuration", required("Shortlet duration")),
            rule("streetAddress", required("Street address")),
            rule("maxGuests", required("Maximum guests"), at_least(1, "Maximum guests")),
            rule("landSize", required("Land size"), positive("Land size")),
            rule("measurementType", required("Measurement type")),
        ),
        cross_checks=(discriminators_chosen(BRIEF_CATEGORIES, "propertyType", "propertyCategory"),),
    ),
    FEATURES_CONDITIONS: StepSpec(
        step_id=FEATURES_CONDITIONS,
        title="Features & Conditions",
        rules=(
            rule("isTenanted", required("Tenancy status")),
            rule("documents", min_items(1, "document")),
            rule("jvConditions", min_items(1, "JV condition")),
            rule("minStay", at_least(1, "Minimum stay")),
            rule("nightly", required("Nightly rate"), positive("Nightly rate")),
            rule("cancellationPolicy", required("Cancellation policy")),
            rule("weeklyDiscount", between(0, 100, "Weekly discount")),
            rule("monthlyDiscount", between(0, 100, "Monthly discount")),
            rule("checkIn", required("Check-in time")),
            rule("checkOut", required("Check-out time")),
        ),
        cross_checks=(_stay_range,),
    ),
    MEDIA: StepSpec(
        step_id=MEDIA,
        title="Upload Media",
        cross_checks=(_enough_pictures,),
    ),
    OWNER_DECLARATION: StepSpec(
        step_id=OWNER_DECLARATION,
        title="Owner Declaration",
        rules=(
            rule("firstName", *person_name("First name")),
            rule("lastName", *person_name("Last name")),
            rule("email", required("Email"), valid_email()),
            rule("phone", required("Phone number"), nigerian_phone()),
        ),
    ),
}

BRIEF_FLOW = FlowDefinition(
    kind=FlowKind.BRIEF,
    fields=BRIEF_FIELDS,
    visibility=BRIEF_VISIBILITY,
    steps=BRIEF_STEPS,
    layouts={None: (BASIC_DETAILS, FEATURES_CONDITIONS, MEDIA, OWNER_DECLARATION)},
    categories=BRIEF_CATEGORIES,
    dependent_resets={"state": ("lga", "area"), "lga": ("area",)},
)
