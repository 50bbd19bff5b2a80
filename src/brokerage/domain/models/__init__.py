"""Domain models package."""

from brokerage.domain.models.enums import OrderSide, CashFlowKind, TopAssetMetric
from brokerage.domain.models.user import User, Account
from brokerage.domain.models.security import Security
from brokerage.domain.models.trade import Trade, NewOrder
from brokerage.domain.models.holding import Holding
from brokerage.domain.models.market import PricePoint
from brokerage.domain.models.cash import CashEntry, classify_cash_type
from brokerage.domain.models.scope import AccountScope, UserScope, PortfolioScope

__all__ = [
    "OrderSide",
    "CashFlowKind",
    "TopAssetMetric",
    "User",
    "Account",
    "Security",
    "Trade",
    "NewOrder",
    "Holding",
    "PricePoint",
    "CashEntry",
    "classify_cash_type",
    "AccountScope",
    "UserScope",
    "PortfolioScope",
]
