"""The discriminator pair that decides which fields a form shows."""

from __future__ import annotations

from dataclasses import dataclass, replace

from property_wizard.domain.enums import PropertyCategory, TransactionType


@dataclass(frozen=True)
class DiscriminatorSet:
    """Transaction type and property category, both unset until chosen.

    Attributes:
        transaction_type: Primary discriminator (sell, rent, jv, shortlet).
        category: Secondary discriminator. Must be valid for the
            transaction type in the flow it is used with.
    """

    transaction_type: TransactionType | None = None
    category: PropertyCategory | None = None

    def with_transaction_type(self, transaction_type: TransactionType | None) -> DiscriminatorSet:
        return replace(self, transaction_type=transaction_type)

    def with_category(self, category: PropertyCategory | None) -> DiscriminatorSet:
        return replace(self, category=category)

    def is_type(self, *types: TransactionType) -> bool:
        return self.transaction_type is not None and self.transaction_type in types

    def is_category(self, *categories: PropertyCategory) -> bool:
        return self.category is not None and self.category in categories

    def to_dict(self) -> dict:
        return {
            "transaction_type": self.transaction_type.value if self.transaction_type else None,
            "category": self.category.value if self.category else None,
        }
