"""Trade and order input models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.domain.models.enums import OrderSide


@dataclass(frozen=True)
class Trade:
    """
    Executed trade (source of truth for holdings and P&L).

    Immutable once recorded; trades are never edited or deleted.
    """

    trade_id: str
    account_id: str
    security_id: str
    side: OrderSide
    quantity: Decimal
    price: Decimal
    trade_time_est: datetime
    request_id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.side, str) and not isinstance(self.side, OrderSide):
            object.__setattr__(self, "side", OrderSide(self.side.upper()))

    @property
    def amount(self) -> Decimal:
        """Gross traded amount (quantity × price)."""
        return self.quantity * self.price


@dataclass
class NewOrder:
    """Input data for placing an order."""

    account_id: str
    security_id: str
    side: OrderSide
    quantity: Decimal
    price: Decimal
    request_id: Optional[str] = None  # Caller-supplied idempotency key

    def __post_init__(self) -> None:
        if isinstance(self.side, str) and not isinstance(self.side, OrderSide):
            self.side = OrderSide(self.side.upper())
