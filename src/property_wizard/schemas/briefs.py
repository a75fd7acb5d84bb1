"""Pydantic schemas for property brief payloads.

One model per transaction type, discriminated on ``briefType``. Wire keys
follow the listings API, including its historical ``addtionalInfo``
spelling.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from property_wizard.domain.enums import PropertyCategory
from property_wizard.schemas.base import WireModel

# ---------------------------------------------------------------------------
# Nested objects
# ---------------------------------------------------------------------------


class BriefLocation(WireModel):
    state: str
    local_government: str
    area: str
    street_address: str | None = None


class OwnerContact(WireModel):
    full_name: str
    phone_number: str
    email: str


class LandSize(WireModel):
    measurement_type: str
    size: int | float = Field(..., gt=0)


class AdditionalFeatures(WireModel):
    no_of_bedroom: int | None = None
    no_of_bathroom: int | None = None
    no_of_toilet: int | None = None
    no_of_car_park: int | None = None
    max_guests: int | None = None


class PropertyDetails(WireModel):
    """Building and size facts; only the parts that apply are set."""

    property_condition: str | None = None
    type_of_building: str | None = None
    additional_features: AdditionalFeatures | None = None
    land_size: LandSize | None = None


class DocumentOnProperty(WireModel):
    doc_name: str
    is_provided: bool = True


class TenantCriteria(WireModel):
    rental_conditions: list[str] = Field(default_factory=list)
    employment_type: str | None = None
    tenant_gender_preference: str | None = None


class Availability(WireModel):
    min_stay: int = Field(..., ge=1)
    max_stay: int | None = None


class Pricing(WireModel):
    nightly: int | float = Field(..., gt=0)
    weekly_discount: int | float = 0
    monthly_discount: int | float = 0
    cleaning_fee: int | float = 0
    security_deposit: int | float = 0
    cancellation_policy: str


class HouseRules(WireModel):
    check_in: str
    check_out: str
    smoking: bool = False
    pets: bool = False
    parties: bool = False
    other_rules: str | None = None


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class BriefPayloadBase(WireModel):
    """Keys every brief carries."""

    property_category: PropertyCategory
    location: BriefLocation
    price: int | float = Field(..., gt=0)
    features: list[str] = Field(default_factory=list)
    owner: OwnerContact
    are_you_the_owner: bool
    ownership_documents: list[str] = Field(default_factory=list)
    pictures: list[str] = Field(default_factory=list)
    videos: list[str] = Field(default_factory=list)
    description: str | None = None
    additional_info: str | None = Field(default=None, alias="addtionalInfo")
    matched_brief_id: str | None = None
    matching_preference_id: str | None = None


class SaleBriefPayload(BriefPayloadBase):
    property_type: Literal["sell"] = "sell"
    brief_type: Literal["Outright Sales"] = "Outright Sales"
    property_details: PropertyDetails | None = None
    doc_on_property: list[DocumentOnProperty]
    is_tenanted: str


class RentBriefPayload(BriefPayloadBase):
    property_type: Literal["rent"] = "rent"
    brief_type: Literal["Rent"] = "Rent"
    property_details: PropertyDetails | None = None
    rental_type: str
    lease_hold: str | None = None
    hold_duration: str | None = None
    tenant_criteria: TenantCriteria | None = None
    is_tenanted: str


class JointVentureBriefPayload(BriefPayloadBase):
    property_type: Literal["jv"] = "jv"
    brief_type: Literal["Joint Venture"] = "Joint Venture"
    property_details: PropertyDetails | None = None
    doc_on_property: list[DocumentOnProperty]
    jv_conditions: list[str]
    is_tenanted: str


class ShortletBriefPayload(BriefPayloadBase):
    property_type: Literal["shortlet"] = "shortlet"
    brief_type: Literal["Shortlet"] = "Shortlet"
    shortlet_duration: str
    type_of_building: str
    property_condition: str | None = None
    additional_features: AdditionalFeatures
    availability: Availability
    pricing: Pricing
    house_rules: HouseRules
    payment_method: str | None = None


BriefPayload = Annotated[
    SaleBriefPayload | RentBriefPayload | JointVentureBriefPayload | ShortletBriefPayload,
    Field(discriminator="brief_type"),
]

BRIEF_PAYLOAD_ADAPTER: TypeAdapter[BriefPayload] = TypeAdapter(BriefPayload)
