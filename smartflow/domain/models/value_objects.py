"""
Value Objects for the domain layer.
Immutable objects that represent values shared by several entities.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
import re

from smartflow.domain.models.base import ValidationError


HEX_COLOR_PATTERN = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")

TWO_PLACES = Decimal("0.01")


class BillableStatus(str, Enum):
    """Whether tracked time is chargeable to a client."""
    BILLABLE = "billable"
    NON_BILLABLE = "non_billable"
    INTERNAL = "internal"


@dataclass(frozen=True)
class HexColor:
    """Display colour in #RGB or #RRGGBB notation."""

    value: str

    def __post_init__(self):
        if not HEX_COLOR_PATTERN.match(self.value):
            raise ValidationError("Color must be a valid hex color code", "color")

    def __str__(self) -> str:
        return self.value


def minutes_to_hours(minutes: int) -> Decimal:
    """Convert a minute count to hours with two decimal places."""
    return (Decimal(minutes) / Decimal(60)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def percentage(part: int, whole: int) -> Decimal:
    """part/whole*100 rounded to two decimals; zero when whole is zero."""
    if not whole:
        return Decimal("0.00")
    return (Decimal(part) * Decimal(100) / Decimal(whole)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
