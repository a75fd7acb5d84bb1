"""Pydantic schemas for preference payloads.

One model per preference type, discriminated on ``preferenceType``. The
``preferenceMode`` names the role the backend files the preference under.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from property_wizard.schemas.base import WireModel

# ---------------------------------------------------------------------------
# Nested objects
# ---------------------------------------------------------------------------


class PreferenceLocation(WireModel):
    state: str
    local_government_areas: list[str] = Field(..., min_length=1)
    selected_areas: list[str] = Field(default_factory=list)
    custom_location: str | None = None


class Budget(WireModel):
    min_price: int | float = Field(..., gt=0)
    max_price: int | float = Field(..., gt=0)
    currency: str = "NGN"


class FeaturePreferences(WireModel):
    base_features: list[str] = Field(default_factory=list)
    premium_features: list[str] = Field(default_factory=list)
    comfort_features: list[str] | None = None
    auto_adjust_to_features: bool = False


class ContactInfo(WireModel):
    full_name: str
    email: str
    phone_number: str


class DeveloperContactInfo(WireModel):
    company_name: str
    contact_person: str
    email: str
    phone_number: str
    cac_registration_number: str | None = None


class BuyPropertyDetails(WireModel):
    property_type: str
    building_type: str | None = None
    min_bedrooms: str | None = None
    min_bathrooms: int | None = None
    property_condition: str | None = None
    purpose: str
    land_size: int | float | None = None
    measurement_unit: str | None = None
    document_types: list[str] = Field(default_factory=list)
    land_conditions: list[str] | None = None


class RentPropertyDetails(WireModel):
    property_type: str
    building_type: str | None = None
    min_bedrooms: str | None = None
    min_bathrooms: int | None = None
    lease_term: str
    property_condition: str | None = None
    purpose: str
    land_size: int | float | None = None
    measurement_unit: str | None = None


class DevelopmentDetails(WireModel):
    min_land_size: int | float = Field(..., gt=0)
    measurement_unit: str
    jv_type: str
    property_type: str
    expected_structure_type: str | None = None
    timeline: str
    document_types: list[str] = Field(default_factory=list)
    land_conditions: list[str] | None = None


class BookingDetails(WireModel):
    property_type: str
    min_bedrooms: str
    min_bathrooms: int | None = None
    number_of_guests: int = Field(..., ge=1, le=20)
    check_in_date: str
    check_out_date: str
    travel_type: str


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class PreferencePayloadBase(WireModel):
    location: PreferenceLocation
    budget: Budget
    features: FeaturePreferences
    additional_notes: str | None = None


class BuyPreferencePayload(PreferencePayloadBase):
    preference_type: Literal["buy"] = "buy"
    preference_mode: Literal["buy"] = "buy"
    property_details: BuyPropertyDetails
    contact_info: ContactInfo
    nearby_landmark: str | None = None


class RentPreferencePayload(PreferencePayloadBase):
    preference_type: Literal["rent"] = "rent"
    preference_mode: Literal["tenant"] = "tenant"
    property_details: RentPropertyDetails
    contact_info: ContactInfo


class JointVenturePreferencePayload(PreferencePayloadBase):
    preference_type: Literal["joint-venture"] = "joint-venture"
    preference_mode: Literal["developer"] = "developer"
    development_details: DevelopmentDetails
    contact_info: DeveloperContactInfo
    partner_expectations: str | None = None


class ShortletPreferencePayload(PreferencePayloadBase):
    preference_type: Literal["shortlet"] = "shortlet"
    preference_mode: Literal["shortlet"] = "shortlet"
    booking_details: BookingDetails
    contact_info: ContactInfo
    nearby_landmark: str | None = None


PreferencePayload = Annotated[
    BuyPreferencePayload
    | RentPreferencePayload
    | JointVenturePreferencePayload
    | ShortletPreferencePayload,
    Field(discriminator="preference_type"),
]

PREFERENCE_PAYLOAD_ADAPTER: TypeAdapter[PreferencePayload] = TypeAdapter(PreferencePayload)
