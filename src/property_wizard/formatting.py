"""Amount parsing and display helpers.

The wizard keeps raw numbers in its state. Thousands separators and the
naira sign only exist at render time, so a value typed as ``"1,500,000"``
is stored as ``1500000``.
"""

from __future__ import annotations

import math
import re

NAIRA_SIGN = "₦"

# Separators, currency marks and whitespace; anything else must be a number
_DECORATION = re.compile(r"[,\s₦]|^NGN", re.IGNORECASE)
_PLAIN_NUMBER = re.compile(r"-?(\d+(\.\d*)?|\.\d+)")


def parse_amount(raw: object) -> int | float | None:
    """Parse user input into a raw number.

    Integral values come back as ``int``. The sign is kept, so ``"-500"``
    parses to ``-500`` and is left for the positive checks to reject.
    Returns None for empty input and for anything that is not a plain
    decimal once separators and the currency sign are removed (``"1e6"``,
    ``"1.2.3"``, ``"5k"``).
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        return int(raw) if raw.is_integer() else raw

    cleaned = _DECORATION.sub("", str(raw).strip())
    if not _PLAIN_NUMBER.fullmatch(cleaned):
        return None
    number = float(cleaned)
    return int(number) if number.is_integer() else number


def format_amount(value: int | float | None) -> str:
    """Render a raw number with thousands separators ("" for empty)."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}"
    return f"{int(value):,}"


def format_naira(value: int | float | None) -> str:
    rendered = format_amount(value)
    return f"{NAIRA_SIGN}{rendered}" if rendered else ""


def format_rate(rate: int | float) -> str:
    """Render a percentage without a trailing ``.0`` (10.0 -> "10", 7.5 -> "7.5")."""
    if float(rate).is_integer():
        return str(int(rate))
    return f"{rate:g}"
