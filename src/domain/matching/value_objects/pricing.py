"""
Pricing Value Objects.

BudgetRange is what the customer is willing to pay; PriceSchedule is how an
artist quotes. The price score compares the top of the budget with the
artist's representative price.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from src.domain.shared.exceptions import InvalidInputError


def _validate_amount(field_name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(
            f"{field_name} must be a number, got {type(value).__name__}",
            field_name=field_name,
        )
    if not math.isfinite(value):
        raise InvalidInputError(
            f"{field_name} must be finite, got {value}", field_name=field_name
        )
    if value < 0:
        raise InvalidInputError(
            f"{field_name} cannot be negative, got {value}", field_name=field_name
        )


@dataclass(frozen=True)
class BudgetRange:
    """
    Customer budget (currency units, e.g. JPY).

    Attributes:
        min_amount: Lower bound of the budget (optional)
        max_amount: Upper bound of the budget; the representative budget

    Examples:
        >>> BudgetRange(min_amount=20000, max_amount=40000).representative_amount
        40000
    """

    max_amount: float
    min_amount: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_amount is None:
            raise InvalidInputError("max_amount is required", field_name="max_amount")
        _validate_amount("max_amount", self.max_amount)
        _validate_amount("min_amount", self.min_amount)
        if self.min_amount is not None and self.min_amount > self.max_amount:
            raise InvalidInputError(
                f"min_amount ({self.min_amount}) cannot exceed "
                f"max_amount ({self.max_amount})",
                field_name="min_amount",
            )

    @property
    def representative_amount(self) -> float:
        return self.max_amount

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BudgetRange":
        if not isinstance(data, dict):
            raise InvalidInputError("budget must be an object", field_name="budget")
        return cls(max_amount=data.get("max_amount"), min_amount=data.get("min_amount"))

    def to_dict(self) -> dict[str, Any]:
        return {"min_amount": self.min_amount, "max_amount": self.max_amount}


@dataclass(frozen=True)
class PriceSchedule:
    """
    How an artist prices a session.

    The representative price is resolved in order:
        1. average_price (observed average per piece)
        2. hourly_rate * average_session_hours
        3. base_price (starting price)

    Returns None from representative_price() when nothing is known.
    """

    average_price: Optional[float] = None
    hourly_rate: Optional[float] = None
    average_session_hours: Optional[float] = None
    base_price: Optional[float] = None

    def __post_init__(self) -> None:
        _validate_amount("average_price", self.average_price)
        _validate_amount("hourly_rate", self.hourly_rate)
        _validate_amount("average_session_hours", self.average_session_hours)
        _validate_amount("base_price", self.base_price)

    def representative_price(self) -> Optional[float]:
        if self.average_price is not None:
            return float(self.average_price)
        if self.hourly_rate is not None and self.average_session_hours is not None:
            return float(self.hourly_rate) * float(self.average_session_hours)
        if self.base_price is not None:
            return float(self.base_price)
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PriceSchedule":
        if not isinstance(data, dict):
            raise InvalidInputError("pricing must be an object", field_name="pricing")
        return cls(
            average_price=data.get("average_price"),
            hourly_rate=data.get("hourly_rate"),
            average_session_hours=data.get("average_session_hours"),
            base_price=data.get("base_price"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "average_price": self.average_price,
            "hourly_rate": self.hourly_rate,
            "average_session_hours": self.average_session_hours,
            "base_price": self.base_price,
        }
