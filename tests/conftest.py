"""Shared test fixtures for the property wizard test suite.

Provides:
    - Valid per-step values for every brief and preference variant
    - A factory that walks a session to its last step
    - A region table and a fresh settings cache per test
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from property_wizard.config import get_settings
from property_wizard.domain.enums import FlowKind, PropertyCategory, TransactionType
from property_wizard.wizard.session import WizardSession

PICTURES = [f"https://cdn.example.com/p/{i}.jpg" for i in range(1, 5)]

BRIEF_CONTACT = {
    "firstName": "Adaeze",
    "lastName": "Okafor",
    "email": "adaeze@example.com",
    "phone": "08031234567",
    "isLegalOwner": True,
}

LAGOS_LOCATION = {"state": "Lagos", "lga": "Ikeja", "area": "GRA"}

# (transaction type, category) -> values per step, in step order
BRIEF_STEPS: dict[tuple[TransactionType, PropertyCategory], list[dict]] = {
    (TransactionType.SALE, PropertyCategory.RESIDENTIAL): [
        {
            **LAGOS_LOCATION,
            "price": "45,000,000",
            "propertyCondition": "New Building",
            "typeOfBuilding": "Bungalow",
            "bedrooms": 3,
            "measurementType": "Plot",
            "landSize": "1",
        },
        {"isTenanted": "No", "documents": ["C of O"], "features": ["Borehole"]},
        {"pictures": PICTURES},
        BRIEF_CONTACT,
    ],
    (TransactionType.RENT, PropertyCategory.RESIDENTIAL): [
        {
            **LAGOS_LOCATION,
            "price": "2,500,000",
            "rentalType": "Rent",
            "propertyCondition": "New Building",
            "typeOfBuilding": "Flat",
            "bedrooms": 2,
        },
        {
            "isTenanted": "No",
            "rentalConditions": ["No pets"],
            "employmentType": "Employed",
            "tenantGenderPreference": "Any",
        },
        {"pictures": PICTURES},
        BRIEF_CONTACT,
    ],
    (TransactionType.RENT, PropertyCategory.LAND): [
        {**LAGOS_LOCATION, "price": "800,000", "rentalType": "Lease", "leaseHold": "5 years"},
        {"isTenanted": "No"},
        {"pictures": PICTURES},
        BRIEF_CONTACT,
    ],
    (TransactionType.JOINT_VENTURE, PropertyCategory.LAND): [
        {**LAGOS_LOCATION, "price": "120,000,000", "measurementType": "sqm", "landSize": "1,200"},
        {"isTenanted": "No", "documents": ["Survey Plan"], "jvConditions": ["60/40 split"]},
        {"pictures": PICTURES},
        BRIEF_CONTACT,
    ],
    (TransactionType.SHORTLET, PropertyCategory.RESIDENTIAL): [
        {
            **LAGOS_LOCATION,
            "streetAddress": "12 Admiralty Way",
            "price": "85,000",
            "shortletDuration": "Daily",
            "propertyCondition": "Fairly Used",
            "typeOfBuilding": "Apartment",
            "bedrooms": 2,
            "maxGuests": 4,
        },
        {"nightly": "85,000", "cleaningFee": "10,000"},
        {"pictures": PICTURES},
        BRIEF_CONTACT,
    ],
}

PREFERENCE_CONTACT = {"fullName": "Ngozi Eze", "email": "ngozi@example.com", "phoneNumber": "07012345678"}

PREFERENCE_LOCATION = {"state": "Lagos", "lgas": ["Eti-Osa"], "areas": ["Lekki"]}

# step id -> values; walked in the session's own step order
PREFERENCE_STEPS: dict[tuple[TransactionType, PropertyCategory | None], dict[str, dict]] = {
    (TransactionType.SALE, PropertyCategory.RESIDENTIAL): {
        "location": PREFERENCE_LOCATION,
        "property-budget": {
            "minPrice": "50,000,000",
            "maxPrice": "90,000,000",
            "buildingType": "Detached",
            "propertyCondition": "New",
            "minBedrooms": "3",
            "purpose": "For living",
            "documentTypes": ["C of O"],
        },
        "features": {"basicFeatures": ["Security"]},
        "contact": PREFERENCE_CONTACT,
    },
    (TransactionType.RENT, PropertyCategory.COMMERCIAL): {
        "location": PREFERENCE_LOCATION,
        "property-budget": {
            "minPrice": "1,000,000",
            "maxPrice": "3,000,000",
            "buildingType": "Office",
            "propertyCondition": "New",
            "purpose": "Office",
            "leaseTerm": "1 year",
        },
        "features": {},
        "contact": PREFERENCE_CONTACT,
    },
    (TransactionType.JOINT_VENTURE, PropertyCategory.LAND): {
        "contact": {
            "companyName": "Skyline Developers Ltd",
            "contactPerson": "Ibrahim Musa",
            "email": "ibrahim@skyline.ng",
            "phoneNumber": "08101234567",
        },
        "location": PREFERENCE_LOCATION,
        "property-budget": {
            "minPrice": "20,000,000",
            "maxPrice": "200,000,000",
            "landSize": "1200",
            "measurementUnit": "sqm",
            "documentTypes": ["Survey Plan"],
            "landConditions": ["Dry land"],
        },
        "terms": {"jvType": "Equity Split", "timeline": "12-24 months"},
        "features": {},
    },
    (TransactionType.SHORTLET, None): {
        "location": PREFERENCE_LOCATION,
        "property-budget": {
            "minPrice": "50,000",
            "maxPrice": "150,000",
            "shortletType": "Studio",
            "minBedrooms": "1",
            "numberOfGuests": 2,
            "checkInDate": "2026-12-20",
            "checkOutDate": "2026-12-27",
            "travelType": "Leisure",
        },
        "features": {"comfortFeatures": ["Wi-Fi"]},
        "contact": PREFERENCE_CONTACT,
    },
}

REGIONS = {
    "Lagos": {"Ikeja": ["Allen", "GRA"], "Eti-Osa": ["Lekki", "Ajah"]},
    "Abuja": {"Abuja Municipal": ["Maitama", "Wuse"]},
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so environment overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def regions() -> dict:
    return REGIONS


@pytest.fixture
def brief_at_last_step() -> Callable[..., WizardSession]:
    """Return a factory: (transaction type, category) -> session on its last step."""

    def factory(
        transaction_type: TransactionType,
        category: PropertyCategory,
        **session_kwargs,
    ) -> WizardSession:
        session = WizardSession(FlowKind.BRIEF, **session_kwargs)
        session.select_transaction_type(transaction_type)
        session.select_category(category)
        steps = BRIEF_STEPS[(transaction_type, category)]
        for index, values in enumerate(steps):
            session.set_values(values)
            if index < len(steps) - 1:
                session.next()
                assert session.state.current_step == index + 1, session.state.errors
        return session

    return factory


@pytest.fixture
def preference_at_last_step() -> Callable[..., WizardSession]:
    """Return a factory: (transaction type, category) -> preference session on its last step."""

    def factory(
        transaction_type: TransactionType,
        category: PropertyCategory | None,
    ) -> WizardSession:
        session = WizardSession(FlowKind.PREFERENCE)
        session.select_transaction_type(transaction_type)
        if category is not None:
            session.select_category(category)
        values_by_step = PREFERENCE_STEPS[(transaction_type, category)]
        while True:
            session.set_values(values_by_step[session.state.current.step_id])
            if session.state.is_last_step:
                return session
            before = session.state.current_step
            session.next()
            assert session.state.current_step == before + 1, session.state.errors

    return factory
