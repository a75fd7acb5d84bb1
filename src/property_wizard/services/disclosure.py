"""Disclosure Text Generator — the commission consent sentence.

Shown above the submit button of the brief flow. The wording depends on who
is submitting and on the transaction type; the percentage comes from the
commission table. The text is derived on demand and never stored.

Templates:
    owner,  sell / jv  -> share of the total transaction value
    owner,  rent       -> share of the final rental deal value
    owner,  shortlet   -> share of the total value generated
    agent,  rent       -> fixed sentence, no commission collected
    agent,  otherwise  -> share of the agent's own commission
"""

from __future__ import annotations

from collections.abc import Mapping

from property_wizard.config import CommissionRate, get_settings
from property_wizard.domain.enums import SubmitterRole, TransactionType
from property_wizard.formatting import format_rate

AGENT_RENTAL_NOTICE = "I understand that Khabiteq does not collect commission on agent rental deals."

_OWNER_TEMPLATES: dict[TransactionType, str] = {
    TransactionType.SALE: (
        "I, {name}, agree that {company} shall earn {rate}% of the total value "
        "generated from this transaction as commission when the deal is closed."
    ),
    TransactionType.JOINT_VENTURE: (
        "I, {name}, agree that {company} shall earn {rate}% of the total value "
        "generated from this transaction as commission when the deal is closed."
    ),
    TransactionType.RENT: (
        "I, {name}, agree that {company} shall earn {rate}% of the final rental "
        "deal value as commission when the deal is closed."
    ),
    TransactionType.SHORTLET: (
        "I, {name}, agree that {company} shall earn {rate}% of the total value "
        "generated from this transaction when the deal is closed."
    ),
}

_AGENT_TEMPLATE = (
    "I, {name}, agree that {company} shall earn {rate}% of the total commission "
    "accrued to me when the deal is closed."
)


def generate(
    transaction_type: TransactionType,
    role: SubmitterRole,
    name: str,
    rate_table: Mapping[TransactionType, CommissionRate] | None = None,
    *,
    company: str | None = None,
) -> str:
    """Return the disclosure sentence for a submitter.

    Args:
        transaction_type: Selected transaction type.
        role: Owner or agent.
        name: Submitter's display name, inserted verbatim.
        rate_table: Commission per transaction type; defaults to settings.
        company: Company name; defaults to settings.

    Returns:
        The disclosure text. Same inputs always give the same text.

    Raises:
        KeyError: The rate table has no entry for the transaction type.
    """
    transaction_type = TransactionType(transaction_type)
    role = SubmitterRole(role)
    if role is SubmitterRole.AGENT and transaction_type is TransactionType.RENT:
        return AGENT_RENTAL_NOTICE

    settings = get_settings()
    rates = rate_table if rate_table is not None else settings.commission_rates
    entry = rates[transaction_type]

    if role is SubmitterRole.AGENT:
        template, rate = _AGENT_TEMPLATE, entry.agent
    else:
        template, rate = _OWNER_TEMPLATES[transaction_type], entry.owner

    return template.format(
        name=name,
        company=company or settings.company_name,
        rate=format_rate(rate),
    )
