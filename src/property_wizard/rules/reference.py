"""Static reference data: minimum budgets per location and transaction type."""

from __future__ import annotations

from property_wizard.domain.enums import TransactionType

DEFAULT_LOCATION = "default"

BUDGET_THRESHOLDS: dict[str, dict[TransactionType, int]] = {
    "lagos": {
        TransactionType.SALE: 5_000_000,
        TransactionType.RENT: 200_000,
        TransactionType.JOINT_VENTURE: 10_000_000,
        TransactionType.SHORTLET: 15_000,
    },
    "abuja": {
        TransactionType.SALE: 8_000_000,
        TransactionType.RENT: 300_000,
        TransactionType.JOINT_VENTURE: 15_000_000,
        TransactionType.SHORTLET: 25_000,
    },
    DEFAULT_LOCATION: {
        TransactionType.SALE: 2_000_000,
        TransactionType.RENT: 100_000,
        TransactionType.JOINT_VENTURE: 5_000_000,
        TransactionType.SHORTLET: 10_000,
    },
}


def minimum_budget(state: str | None, transaction_type: TransactionType) -> int:
    """Return the minimum budget for a state, falling back to the default row.

    Matching is case-insensitive, so "Lagos" and "lagos" share a row.
    """
    key = (state or "").strip().lower()
    row = BUDGET_THRESHOLDS.get(key, BUDGET_THRESHOLDS[DEFAULT_LOCATION])
    return row[transaction_type]
