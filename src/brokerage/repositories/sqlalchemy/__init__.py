"""SQLAlchemy repository implementations."""

from brokerage.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_url,
    reset_database,
    storage_errors,
    Base,
)
from brokerage.repositories.sqlalchemy.account_repo import (
    SqlAlchemyUserRepository,
    SqlAlchemyAccountRepository,
)
from brokerage.repositories.sqlalchemy.security_repo import SqlAlchemySecurityRepository
from brokerage.repositories.sqlalchemy.trade_repo import (
    SqlAlchemyTradeRepository,
    SqlAlchemyHoldingRepository,
)
from brokerage.repositories.sqlalchemy.market_repo import (
    SqlAlchemyPriceRepository,
    SqlAlchemyCashRepository,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_url",
    "reset_database",
    "storage_errors",
    "Base",
    "SqlAlchemyUserRepository",
    "SqlAlchemyAccountRepository",
    "SqlAlchemySecurityRepository",
    "SqlAlchemyTradeRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyPriceRepository",
    "SqlAlchemyCashRepository",
]
