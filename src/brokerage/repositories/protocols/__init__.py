"""Repository protocol definitions (interfaces)."""

from brokerage.repositories.protocols.account_repo import AccountRepository, UserRepository
from brokerage.repositories.protocols.security_repo import SecurityRepository
from brokerage.repositories.protocols.trade_repo import TradeRepository, HoldingRepository
from brokerage.repositories.protocols.market_repo import PriceRepository, CashRepository

__all__ = [
    "AccountRepository",
    "UserRepository",
    "SecurityRepository",
    "TradeRepository",
    "HoldingRepository",
    "PriceRepository",
    "CashRepository",
]
