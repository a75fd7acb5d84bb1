"""Domain enumerations for the property submission wizard.

These enums define the discriminators and labels shared by every layer.
They are framework-agnostic (no pydantic, no structlog imports).
"""

import enum


class TransactionType(enum.StrEnum):
    """Primary discriminator: what the submitter wants to do with the property.

    Values match the ``propertyType`` sent by the brief flow.
    """

    SALE = "sell"
    RENT = "rent"
    JOINT_VENTURE = "jv"
    SHORTLET = "shortlet"


class PropertyCategory(enum.StrEnum):
    """Secondary discriminator: the kind of property."""

    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    LAND = "Land"
    MIXED_DEVELOPMENT = "Mixed Development"


class RentalType(enum.StrEnum):
    """Dependent choice that only exists for rent briefs."""

    RENT = "Rent"
    LEASE = "Lease"


class SubmitterRole(enum.StrEnum):
    """Who is filling in the form. Drives the disclosure wording."""

    OWNER = "landowner"
    AGENT = "agent"


class FlowKind(enum.StrEnum):
    """The two wizards driven by the engine."""

    BRIEF = "brief"
    PREFERENCE = "preference"


class FieldKind(enum.StrEnum):
    """Value shape of a form field.

    The kind decides how raw input is coerced and what the empty value is.
    """

    TEXT = "text"
    COUNT = "count"
    AMOUNT = "amount"
    LIST = "list"
    FLAG = "flag"


class SubmissionPhase(enum.StrEnum):
    """Lifecycle of a wizard session around the external submission call.

    Transitions are enforced by SubmissionLifecycle.
    See domain/state_machine.py for the transition table.
    """

    EDITING = "EDITING"
    SUBMITTING = "SUBMITTING"
    SUBMITTED = "SUBMITTED"
