"""Domain layer - pure business models with no external dependencies."""

from brokerage.domain.models import (
    OrderSide,
    User,
    Account,
    Security,
    Trade,
    NewOrder,
    Holding,
    PricePoint,
    CashEntry,
    AccountScope,
    UserScope,
)

__all__ = [
    "OrderSide",
    "User",
    "Account",
    "Security",
    "Trade",
    "NewOrder",
    "Holding",
    "PricePoint",
    "CashEntry",
    "AccountScope",
    "UserScope",
]
