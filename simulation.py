"""Property Wizard — End-to-End Simulation.

Walks the submission wizards the way a user would, with the dry-run
submission client standing in for the listings API:

    Scenario 1: Landlord Rent Brief
        - Owner opens the brief flow, picks Rent / Residential
        - Tries to skip ahead with an empty step -> errors attached, no move
        - Fills every step, switches category once (dependent fields cleared)
        - Submits -> accepted, wizard reset

    Scenario 2: Shortlet Host, Backend Rejects First Attempt
        - Host fills a shortlet brief (defaults seeded for check-in/out)
        - First submission rejected -> values kept, phase back to EDITING
        - Retry -> accepted

    Scenario 3: Buyer and Developer Preferences
        - Buyer in Lagos enters a budget under the Lagos threshold -> rejected
        - Budget corrected -> submitted
        - Developer JV preference walks its 5-step layout

Usage:
    uv run python simulation.py
    uv run python simulation.py --scenario 2
    uv run python simulation.py --json-logs
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Any

# ---------------------------------------------------------------------------
# Configure structured logging BEFORE importing app modules
# ---------------------------------------------------------------------------
from property_wizard.logging_config import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False)
logger = get_logger("simulation")

REGIONS = {
    "Lagos": {
        "Ikeja": ["Allen", "GRA", "Opebi"],
        "Eti-Osa": ["Lekki", "Ajah", "Victoria Island"],
    },
    "Abuja": {
        "Abuja Municipal": ["Maitama", "Wuse", "Garki"],
    },
}

PICTURES = [f"https://cdn.example.com/listing/{i}.jpg" for i in range(1, 5)]


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------
def banner(text: str) -> None:
    width = 70
    print("\n" + "=" * width)
    print(f"  {text}")
    print("=" * width + "\n")


def section(text: str) -> None:
    print(f"\n--- {text} ---\n")


def print_step(session: Any) -> None:
    state = session.state
    step = state.current
    print(f"  Step {state.current_step + 1}/{state.step_count}: {step.title}")
    print(f"  Visible fields: {', '.join(session.current_visible_fields())}")


def print_errors(session: Any) -> None:
    for field_id, message in sorted(session.state.errors.items()):
        print(f"  ✗ {field_id}: {message}")


def print_payload(payload: dict) -> None:
    for key in sorted(payload):
        print(f"    {key}: {payload[key]}")


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------
async def scenario_1_rent_brief() -> None:
    """Owner posts a residential rent brief."""
    from property_wizard.domain.enums import FlowKind, PropertyCategory, SubmitterRole, TransactionType
    from property_wizard.infrastructure import DryRunSubmissionClient, StaticRegionDirectory
    from property_wizard.wizard import WizardSession

    banner("SCENARIO 1: Landlord Rent Brief")
    session = WizardSession(FlowKind.BRIEF, region_directory=StaticRegionDirectory(REGIONS))
    client = DryRunSubmissionClient()

    session.select_transaction_type(TransactionType.RENT)
    session.select_category(PropertyCategory.COMMERCIAL)
    print_step(session)

    section("Next on an empty step")
    session.next()
    print_errors(session)

    section("Switching category to Residential")
    session.set_value("landSize", "600")
    session.select_category(PropertyCategory.RESIDENTIAL)
    print(f"  landSize after switch: {session.state.value('landSize')!r}")
    print_step(session)

    session.set_values(
        {
            "state": "Lagos",
            "lga": "Ikeja",
            "area": "GRA",
            "price": "2,500,000",
            "rentalType": "Rent",
            "propertyCondition": "New Building",
            "typeOfBuilding": "Detached Duplex",
            "bedrooms": 4,
            "bathrooms": 4,
            "toilets": 5,
        }
    )
    session.next()
    print_step(session)

    session.set_values(
        {
            "isTenanted": "No",
            "features": ["Swimming Pool", "Gym"],
            "rentalConditions": ["No pets"],
            "employmentType": "Employed",
        }
    )
    session.next()
    session.set_value("pictures", PICTURES)
    session.next()
    print_step(session)

    session.set_values(
        {
            "firstName": "Adaeze",
            "lastName": "Okafor",
            "email": "adaeze@example.com",
            "phone": "08031234567",
            "isLegalOwner": True,
        }
    )
    section("Disclosure")
    print(f"  {session.disclosure_text(SubmitterRole.OWNER)}")

    section("Payload")
    print_payload(session.final_payload().to_wire())

    result = await session.submit(client)
    print(f"\n  ✅ Submitted, reference {result.reference}")
    print(f"  Wizard reset to step {session.state.current_step + 1}, phase {session.phase}")


async def scenario_2_shortlet_retry() -> None:
    """Shortlet host whose first submission is rejected."""
    from property_wizard.domain.enums import FlowKind, PropertyCategory, SubmitterRole, TransactionType
    from property_wizard.domain.exceptions import SubmissionFailedError
    from property_wizard.infrastructure import DryRunSubmissionClient
    from property_wizard.wizard import WizardSeed, WizardSession

    banner("SCENARIO 2: Shortlet Host, Backend Rejects First Attempt")
    seed = WizardSeed(
        transaction_type=TransactionType.SHORTLET,
        category=PropertyCategory.RESIDENTIAL,
        matching_preference_id="pref-1042",
    )
    session = WizardSession(FlowKind.BRIEF, seed=seed)
    print(f"  Seeded check-in {session.state.value('checkIn')}, check-out {session.state.value('checkOut')}")

    session.set_values(
        {
            "state": "Lagos",
            "lga": "Eti-Osa",
            "area": "Lekki",
            "streetAddress": "12 Admiralty Way",
            "price": "85,000",
            "shortletDuration": "Daily",
            "propertyCondition": "Fairly Used",
            "typeOfBuilding": "Apartment",
            "bedrooms": 2,
            "maxGuests": 4,
        }
    )
    session.next()
    session.set_values({"nightly": "85,000", "cleaningFee": "10,000", "minStay": 2, "petsAllowed": True})
    session.next()
    session.set_value("pictures", PICTURES)
    session.next()
    session.set_values(
        {
            "firstName": "Tunde",
            "lastName": "Bakare",
            "email": "tunde@example.com",
            "phone": "+2348091234567",
        }
    )
    print(f"  {session.disclosure_text(SubmitterRole.AGENT)}")

    section("First attempt")
    try:
        await session.submit(DryRunSubmissionClient(should_pass=False, message="Listing service unavailable"))
    except SubmissionFailedError as exc:
        print(f"  ❌ {exc.message}")
        print(f"  Phase {session.phase}, nightly still {session.state.value('nightly')}")

    section("Retry")
    result = await session.submit(DryRunSubmissionClient())
    print(f"  ✅ Submitted, reference {result.reference}")


async def scenario_3_preferences() -> None:
    """Buyer and developer preferences."""
    from property_wizard.domain.enums import FlowKind, PropertyCategory, TransactionType
    from property_wizard.infrastructure import DryRunSubmissionClient, StaticRegionDirectory
    from property_wizard.wizard import WizardSession

    banner("SCENARIO 3: Buyer and Developer Preferences")
    client = DryRunSubmissionClient()
    regions = StaticRegionDirectory(REGIONS)

    section("Buyer")
    buyer = WizardSession(FlowKind.PREFERENCE, region_directory=regions)
    buyer.select_transaction_type(TransactionType.SALE)
    buyer.set_values({"state": "Lagos", "lgas": ["Eti-Osa"], "areas": ["Lekki", "Ajah"]})
    buyer.next()
    buyer.select_category(PropertyCategory.RESIDENTIAL)
    buyer.set_values(
        {
            "minPrice": "3,000,000",
            "maxPrice": "90,000,000",
            "buildingType": "Detached",
            "propertyCondition": "New",
            "minBedrooms": "3",
            "purpose": "For living",
            "documentTypes": ["C of O"],
        }
    )
    buyer.next()
    print_errors(buyer)
    buyer.set_value("minPrice", "50,000,000")
    buyer.next()
    buyer.set_values({"basicFeatures": ["Security"], "autoAdjustToBudget": True})
    buyer.next()
    buyer.set_values({"fullName": "Ngozi Eze", "email": "ngozi@example.com", "phoneNumber": "07012345678"})
    print_payload(buyer.final_payload().to_wire())
    await buyer.submit(client)

    section("Developer")
    developer = WizardSession(FlowKind.PREFERENCE)
    developer.select_transaction_type(TransactionType.JOINT_VENTURE)
    print(f"  Steps: {[step.step_id for step in developer.steps]}")
    developer.set_values(
        {
            "companyName": "Skyline Developers Ltd",
            "contactPerson": "Ibrahim Musa",
            "email": "ibrahim@skyline.ng",
            "phoneNumber": "08101234567",
            "cacRegistrationNumber": "RC1234567",
        }
    )
    developer.next()
    developer.set_values({"state": "Abuja", "lgas": ["Abuja Municipal"], "customLocation": "Near Jabi Lake"})
    developer.next()
    developer.select_category(PropertyCategory.LAND)
    developer.set_values(
        {
            "minPrice": "20,000,000",
            "maxPrice": "200,000,000",
            "landSize": "1200",
            "measurementUnit": "sqm",
            "documentTypes": ["Survey Plan"],
            "landConditions": ["Dry land"],
        }
    )
    developer.next()
    developer.set_values({"jvType": "Equity Split", "timeline": "12-24 months"})
    developer.next()
    print_step(developer)
    print_payload(developer.final_payload().to_wire())
    await developer.submit(client)
    print(f"\n  ✅ {len(client.submitted)} preferences submitted")


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
SCENARIOS = {
    1: scenario_1_rent_brief,
    2: scenario_2_shortlet_retry,
    3: scenario_3_preferences,
}


async def run_all() -> None:
    print("\n" + "🏠" * 35)
    print("  PROPERTY WIZARD — DRY-RUN SIMULATION")
    print("🏠" * 35 + "\n")

    for scenario in SCENARIOS.values():
        await scenario()

    print("\n" + "=" * 70)
    print("  ✅ ALL SCENARIOS COMPLETED SUCCESSFULLY")
    print("=" * 70 + "\n")


async def run_scenario(num: int) -> None:
    if num not in SCENARIOS:
        print(f"Unknown scenario {num}. Available: {', '.join(str(n) for n in SCENARIOS)}")
        return
    await SCENARIOS[num]()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Property Wizard Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        help="Run a specific scenario (1, 2, or 3). Default: run all.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines instead of colored console output.",
    )
    args = parser.parse_args()

    if args.json_logs:
        setup_logging(log_level="INFO", json_logs=True)

    if args.scenario == 0:
        asyncio.run(run_all())
    else:
        asyncio.run(run_scenario(args.scenario))
