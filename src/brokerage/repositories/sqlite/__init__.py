"""Raw sqlite3 repository implementations."""

from brokerage.repositories.sqlite.database import SqliteDatabase
from brokerage.repositories.sqlite.account_repo import (
    SqliteUserRepository,
    SqliteAccountRepository,
)
from brokerage.repositories.sqlite.security_repo import SqliteSecurityRepository
from brokerage.repositories.sqlite.trade_repo import (
    SqliteTradeRepository,
    SqliteHoldingRepository,
)
from brokerage.repositories.sqlite.market_repo import (
    SqlitePriceRepository,
    SqliteCashRepository,
)

__all__ = [
    "SqliteDatabase",
    "SqliteUserRepository",
    "SqliteAccountRepository",
    "SqliteSecurityRepository",
    "SqliteTradeRepository",
    "SqliteHoldingRepository",
    "SqlitePriceRepository",
    "SqliteCashRepository",
]
