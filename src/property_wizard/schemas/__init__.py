"""Pydantic payload schemas for the brief and preference submissions."""

from property_wizard.schemas.base import WireModel
from property_wizard.schemas.briefs import (
    BRIEF_PAYLOAD_ADAPTER,
    BriefPayload,
    JointVentureBriefPayload,
    RentBriefPayload,
    SaleBriefPayload,
    ShortletBriefPayload,
)
from property_wizard.schemas.preferences import (
    PREFERENCE_PAYLOAD_ADAPTER,
    BuyPreferencePayload,
    JointVenturePreferencePayload,
    PreferencePayload,
    RentPreferencePayload,
    ShortletPreferencePayload,
)

__all__ = [
    "WireModel",
    "BRIEF_PAYLOAD_ADAPTER",
    "BriefPayload",
    "JointVentureBriefPayload",
    "RentBriefPayload",
    "SaleBriefPayload",
    "ShortletBriefPayload",
    "PREFERENCE_PAYLOAD_ADAPTER",
    "BuyPreferencePayload",
    "JointVenturePreferencePayload",
    "PreferencePayload",
    "RentPreferencePayload",
    "ShortletPreferencePayload",
]
