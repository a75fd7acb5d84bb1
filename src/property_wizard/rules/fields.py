"""Field descriptors: the static facts about every form field.

Each flow registers one descriptor per field id. A descriptor names the step
that owns the field, the value kind and how the field reacts when the
discriminators change.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from property_wizard.domain.enums import FieldKind
from property_wizard.formatting import parse_amount

_EMPTY_VALUES: dict[FieldKind, Any] = {
    FieldKind.TEXT: "",
    FieldKind.COUNT: 0,
    FieldKind.AMOUNT: 0,
    FieldKind.LIST: (),
    FieldKind.FLAG: False,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Static description of one form field.

    Attributes:
        field_id: Key of the value in the wizard state.
        owner_step: Id of the single step that renders and validates it.
        kind: Value shape; decides coercion and the empty value.
        label: Human label used in validation messages.
        clear_on_change: Reset to empty when it becomes hidden.
        category_sensitive: Also reset when the transaction type or the
            category changes, even if it stays visible.
        default: Value seeded when the field becomes visible while empty.
    """

    field_id: str
    owner_step: str
    kind: FieldKind = FieldKind.TEXT
    label: str = ""
    clear_on_change: bool = True
    category_sensitive: bool = False
    default: Any = None

    @property
    def empty(self) -> Any:
        return _EMPTY_VALUES[self.kind]

    @property
    def display_label(self) -> str:
        return self.label or self.field_id

    def coerce(self, raw: Any) -> Any:
        """Convert raw input into the stored representation for this kind."""
        if raw is None:
            return self.empty
        if self.kind is FieldKind.TEXT:
            return str(raw)
        if self.kind is FieldKind.FLAG:
            return bool(raw)
        if self.kind is FieldKind.LIST:
            if isinstance(raw, str):
                return (raw,) if raw else ()
            return tuple(raw)

        number = parse_amount(raw)
        if number is None:
            return self.empty
        if self.kind is FieldKind.COUNT:
            return int(number)
        return number


def is_empty(value: Any) -> bool:
    """True for every kind's empty representation ("", 0, (), False, None)."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, tuple, list)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def describe(
    field_id: str,
    owner_step: str,
    kind: FieldKind = FieldKind.TEXT,
    label: str = "",
    *,
    clear_on_change: bool = True,
    category_sensitive: bool = False,
    default: Any = None,
) -> FieldDescriptor:
    """Shorthand used by the flow tables."""
    return FieldDescriptor(
        field_id=field_id,
        owner_step=owner_step,
        kind=kind,
        label=label,
        clear_on_change=clear_on_change,
        category_sensitive=category_sensitive,
        default=default,
    )


def index_fields(descriptors: Iterable[FieldDescriptor]) -> dict[str, FieldDescriptor]:
    """Build the field registry of a flow, rejecting duplicate ids."""
    registry: dict[str, FieldDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.field_id in registry:
            raise ValueError(f"Duplicate field id '{descriptor.field_id}'")
        registry[descriptor.field_id] = descriptor
    return registry
