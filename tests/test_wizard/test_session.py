"""Tests for WizardSession: lock, region checks, final payload and submit.

Submission tests use the DryRunSubmissionClient (zero network calls).
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from property_wizard.domain.collaborators import RegionDirectory, SubmissionResult
from property_wizard.domain.enums import (
    FlowKind,
    PropertyCategory,
    SubmissionPhase,
    SubmitterRole,
    TransactionType,
)
from property_wizard.domain.exceptions import (
    PayloadNotReadyError,
    SubmissionFailedError,
    UnknownRegionError,
    WizardLockedError,
)
from property_wizard.infrastructure import DryRunSubmissionClient, StaticRegionDirectory
from property_wizard.rules.fields import is_empty
from property_wizard.wizard import WizardSeed, WizardSession


class _SlowClient:
    """Client that waits until released, to observe the in-flight lock."""

    def __init__(self) -> None:
        self.release = asyncio.Event()

    async def submit(self, payload: dict[str, Any]) -> SubmissionResult:
        await self.release.wait()
        return SubmissionResult(success=True, reference="ref-1")


class TestSubmit:
    @pytest.mark.asyncio
    async def test_success_resets_wizard(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.SALE, PropertyCategory.RESIDENTIAL)
        client = DryRunSubmissionClient()

        result = await session.submit(client)

        assert result.success is True
        assert result.reference
        assert len(client.submitted) == 1
        assert client.submitted[0]["briefType"] == "Outright Sales"
        assert session.phase == SubmissionPhase.EDITING
        assert session.state.current_step == 0
        assert session.state.discriminators.transaction_type is None
        assert session.last_result is result

    @pytest.mark.asyncio
    async def test_rejection_keeps_values(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.RENT, PropertyCategory.RESIDENTIAL)

        with pytest.raises(SubmissionFailedError, match="Listing service unavailable") as exc_info:
            await session.submit(DryRunSubmissionClient(should_pass=False, message="Listing service unavailable"))

        assert exc_info.value.code == "SUBMISSION_FAILED"
        assert session.phase == SubmissionPhase.EDITING
        assert session.state.values["price"] == 2_500_000
        assert session.state.is_last_step

        # Retry succeeds
        result = await session.submit(DryRunSubmissionClient())
        assert result.success is True

    @pytest.mark.asyncio
    async def test_client_exception_wrapped(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.JOINT_VENTURE, PropertyCategory.LAND)
        client = DryRunSubmissionClient(raise_error=ConnectionError("timed out"))

        with pytest.raises(SubmissionFailedError, match="timed out") as exc_info:
            await session.submit(client)

        assert exc_info.value.details == {"error_type": "ConnectionError"}
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert session.phase == SubmissionPhase.EDITING

    @pytest.mark.asyncio
    async def test_events_refused_while_submitting(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.SHORTLET, PropertyCategory.RESIDENTIAL)
        client = _SlowClient()

        task = asyncio.create_task(session.submit(client))
        await asyncio.sleep(0)
        assert session.phase == SubmissionPhase.SUBMITTING
        assert session.can_go_back() is False

        with pytest.raises(WizardLockedError):
            session.select_category(PropertyCategory.RESIDENTIAL)
        with pytest.raises(WizardLockedError):
            session.set_value("price", "1")
        with pytest.raises(WizardLockedError):
            await session.submit(DryRunSubmissionClient())

        client.release.set()
        result = await task
        assert result.reference == "ref-1"
        assert session.phase == SubmissionPhase.EDITING

    @pytest.mark.asyncio
    async def test_not_ready_before_last_step(self) -> None:
        session = WizardSession(FlowKind.BRIEF)
        session.select_transaction_type(TransactionType.SALE)
        client = DryRunSubmissionClient()

        with pytest.raises(PayloadNotReadyError, match="last step"):
            await session.submit(client)
        assert client.submitted == []

    @pytest.mark.asyncio
    async def test_preference_submit(self, preference_at_last_step) -> None:
        session = preference_at_last_step(TransactionType.JOINT_VENTURE, PropertyCategory.LAND)
        client = DryRunSubmissionClient()

        result = await session.submit(client)

        assert result.success is True
        assert client.submitted[0]["preferenceMode"] == "developer"


class TestFinalPayload:
    def test_invalid_step_reported(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.SALE, PropertyCategory.RESIDENTIAL)
        session.jump_to(0)
        session.set_value("price", "0")
        session.jump_to(3)

        with pytest.raises(PayloadNotReadyError) as exc_info:
            session.final_payload()
        assert exc_info.value.errors == {"price": "Price is required"}

    def test_seed_ids_reach_payload(self, brief_at_last_step) -> None:
        seed = WizardSeed(
            transaction_type=TransactionType.SALE,
            category=PropertyCategory.RESIDENTIAL,
            matching_preference_id="pref-9",
        )
        session = brief_at_last_step(TransactionType.SALE, PropertyCategory.RESIDENTIAL, seed=seed)
        wire = session.final_payload().to_wire()
        assert "matchedBriefId" not in wire
        assert wire["matchingPreferenceId"] == "pref-9"

    def test_validate_all_on_fresh_session(self) -> None:
        session = WizardSession(FlowKind.BRIEF)
        errors = session.validate_all()
        assert errors["propertyType"] == "Property type is required"
        assert errors["pictures"] == "Please upload at least 4 images"


BRIEF_VARIANTS = [
    (TransactionType.SALE, PropertyCategory.RESIDENTIAL),
    (TransactionType.RENT, PropertyCategory.RESIDENTIAL),
    (TransactionType.RENT, PropertyCategory.LAND),
    (TransactionType.JOINT_VENTURE, PropertyCategory.LAND),
    (TransactionType.SHORTLET, PropertyCategory.RESIDENTIAL),
]

PREFERENCE_VARIANTS = [
    (TransactionType.SALE, PropertyCategory.RESIDENTIAL),
    (TransactionType.RENT, PropertyCategory.COMMERCIAL),
    (TransactionType.JOINT_VENTURE, PropertyCategory.LAND),
    (TransactionType.SHORTLET, None),
]


def _assert_valid_wizard_builds(make, transaction_type, category) -> None:
    """Blank each filled field in turn: a wizard with no step errors must build."""
    filled = make(transaction_type, category)
    definition = filled.state.definition
    filled_fields = [
        field_id
        for field_id, value in filled.state.values.items()
        if not is_empty(value) and definition.is_visible(field_id, filled.state.discriminators, filled.state.values)
    ]
    assert filled_fields

    for field_id in filled_fields:
        session = make(transaction_type, category)
        session.set_value(field_id, definition.fields[field_id].empty)
        if session.validate_all():
            continue
        try:
            session.final_payload()
        except PayloadNotReadyError as exc:
            pytest.fail(f"{field_id} blanked: steps valid but payload failed with {exc.errors}")


class TestStepRulesCoverPayload:
    @pytest.mark.parametrize(("transaction_type", "category"), BRIEF_VARIANTS)
    def test_brief(self, brief_at_last_step, transaction_type, category) -> None:
        _assert_valid_wizard_builds(brief_at_last_step, transaction_type, category)

    @pytest.mark.parametrize(("transaction_type", "category"), PREFERENCE_VARIANTS)
    def test_preference(self, preference_at_last_step, transaction_type, category) -> None:
        _assert_valid_wizard_builds(preference_at_last_step, transaction_type, category)

    def test_blank_cancellation_policy_is_a_step_error(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.SHORTLET, PropertyCategory.RESIDENTIAL)
        session.set_value("cancellationPolicy", "")

        assert session.validate_all() == {"cancellationPolicy": "Cancellation policy is required"}
        with pytest.raises(PayloadNotReadyError) as exc_info:
            session.final_payload()
        assert exc_info.value.errors == {"cancellationPolicy": "Cancellation policy is required"}

    def test_whitespace_only_text_is_required_error(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.SHORTLET, PropertyCategory.RESIDENTIAL)
        session.set_value("checkIn", "   ")
        assert session.validate_all() == {"checkIn": "Check-in time is required"}


class TestSeed:
    def test_seed_preselects_and_drops_hidden_values(self) -> None:
        seed = WizardSeed(
            transaction_type=TransactionType.SHORTLET,
            category=PropertyCategory.RESIDENTIAL,
            values={"price": "85,000", "landSize": "500"},
            matching_preference_id="pref-1042",
        )
        session = WizardSession(FlowKind.BRIEF, seed=seed)

        assert session.state.discriminators.category is PropertyCategory.RESIDENTIAL
        assert session.state.values["price"] == 85_000
        assert session.state.values["landSize"] == 0
        assert session.state.values["checkIn"] == "15:00"
        assert session.state.matching_preference_id == "pref-1042"


class TestRegions:
    def _session(self, regions: dict) -> WizardSession:
        return WizardSession(FlowKind.BRIEF, region_directory=StaticRegionDirectory(regions))

    def test_directory_satisfies_protocol(self, regions: dict) -> None:
        assert isinstance(StaticRegionDirectory(regions), RegionDirectory)

    def test_unknown_state_rejected(self, regions: dict) -> None:
        session = self._session(regions)
        with pytest.raises(UnknownRegionError, match="Unknown state: Kano"):
            session.set_value("state", "Kano")

    def test_lga_must_belong_to_state(self, regions: dict) -> None:
        session = self._session(regions)
        session.set_value("state", "lagos")
        session.set_value("lga", "Ikeja")
        with pytest.raises(UnknownRegionError, match="Abuja Municipal"):
            session.set_value("lga", "Abuja Municipal")

    def test_options(self, regions: dict) -> None:
        session = self._session(regions)
        assert session.state_options() == ["Lagos", "Abuja"]
        assert session.lga_options() == []
        session.set_value("state", "Lagos")
        session.set_value("lga", "Eti-Osa")
        assert session.lga_options() == ["Ikeja", "Eti-Osa"]
        assert session.area_options() == ["Lekki", "Ajah"]

    def test_preference_lgas_checked(self, regions: dict) -> None:
        session = WizardSession(FlowKind.PREFERENCE, region_directory=StaticRegionDirectory(regions))
        session.set_value("state", "Abuja")
        with pytest.raises(UnknownRegionError):
            session.set_values({"lgas": ["Abuja Municipal", "Ikeja"]})


class TestRenderingQueries:
    def test_visible_fields_of_current_step(self) -> None:
        session = WizardSession(FlowKind.BRIEF)
        session.select_transaction_type(TransactionType.SALE)
        session.select_category(PropertyCategory.LAND)
        visible = session.current_visible_fields()
        assert "landSize" in visible
        assert "bedrooms" not in visible
        assert "documents" not in visible

    def test_visible_fields_step_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            WizardSession(FlowKind.BRIEF).current_visible_fields(step=9)

    def test_navigation_helpers(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.RENT, PropertyCategory.LAND)
        assert session.can_advance() is False
        assert session.can_go_back() is True
        assert session.can_jump_to(1) is True
        session.jump_to(1)
        assert session.can_advance() is True
        assert session.can_jump_to(4) is False

    def test_field_error(self) -> None:
        session = WizardSession(FlowKind.BRIEF)
        session.select_transaction_type(TransactionType.SALE)
        session.next()
        assert session.field_error("price") == "Price is required"
        assert session.field_error("phone") is None


class TestDisclosure:
    def test_name_taken_from_contact_step(self, brief_at_last_step) -> None:
        session = brief_at_last_step(TransactionType.SALE, PropertyCategory.RESIDENTIAL)
        text = session.disclosure_text(SubmitterRole.OWNER)
        assert text.startswith("I, Adaeze Okafor, agree that Khabiteq Realty shall earn 10%")

    def test_needs_transaction_type(self) -> None:
        with pytest.raises(PayloadNotReadyError):
            WizardSession(FlowKind.BRIEF).disclosure_text(SubmitterRole.OWNER, name="Ada")
