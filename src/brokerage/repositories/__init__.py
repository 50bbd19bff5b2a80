"""Repository layer - data access abstractions and implementations."""

from brokerage.repositories.protocols import (
    AccountRepository,
    UserRepository,
    SecurityRepository,
    TradeRepository,
    HoldingRepository,
    PriceRepository,
    CashRepository,
)
from brokerage.repositories.factory import (
    RepositoryBundle,
    build_repositories,
    sqlalchemy_repositories,
    sqlite_repositories,
)

__all__ = [
    "AccountRepository",
    "UserRepository",
    "SecurityRepository",
    "TradeRepository",
    "HoldingRepository",
    "PriceRepository",
    "CashRepository",
    "RepositoryBundle",
    "build_repositories",
    "sqlalchemy_repositories",
    "sqlite_repositories",
]
