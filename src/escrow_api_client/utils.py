import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

Number = Union[int, float, str, Decimal]


def format_amount(amount: Number) -> str:
    """Render an amount with exactly two decimals, e.g. 100 -> "100.00"."""
    return str(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.fullmatch(email or ""))


def days_to_seconds(days: Union[int, float]) -> int:
    return int(days * 24 * 60 * 60)
