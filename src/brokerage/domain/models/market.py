"""Historical price data."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PricePoint:
    """Daily close for a security; one per (security, date)."""

    security_id: str
    price_date: date
    close_price: Decimal
