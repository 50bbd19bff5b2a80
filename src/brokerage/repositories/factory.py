"""Explicit storage backend selection."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from sqlalchemy.orm import Session

from brokerage.config.settings import StorageBackend
from brokerage.repositories.protocols import (
    AccountRepository,
    CashRepository,
    HoldingRepository,
    PriceRepository,
    SecurityRepository,
    TradeRepository,
    UserRepository,
)
from brokerage.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCashRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyPriceRepository,
    SqlAlchemySecurityRepository,
    SqlAlchemyTradeRepository,
    SqlAlchemyUserRepository,
)
from brokerage.repositories.sqlite import (
    SqliteAccountRepository,
    SqliteCashRepository,
    SqliteDatabase,
    SqliteHoldingRepository,
    SqlitePriceRepository,
    SqliteSecurityRepository,
    SqliteTradeRepository,
    SqliteUserRepository,
)


@dataclass
class RepositoryBundle:
    """Every repository the engine needs, all backed by one storage adapter."""

    users: UserRepository
    accounts: AccountRepository
    securities: SecurityRepository
    trades: TradeRepository
    holdings: HoldingRepository
    prices: PriceRepository
    cash: CashRepository


def sqlalchemy_repositories(db: Session) -> RepositoryBundle:
    """Repositories sharing one SQLAlchemy session."""
    return RepositoryBundle(
        users=SqlAlchemyUserRepository(db),
        accounts=SqlAlchemyAccountRepository(db),
        securities=SqlAlchemySecurityRepository(db),
        trades=SqlAlchemyTradeRepository(db),
        holdings=SqlAlchemyHoldingRepository(db),
        prices=SqlAlchemyPriceRepository(db),
        cash=SqlAlchemyCashRepository(db),
    )


def sqlite_repositories(db: SqliteDatabase) -> RepositoryBundle:
    """Repositories over a raw sqlite3 database file."""
    return RepositoryBundle(
        users=SqliteUserRepository(db),
        accounts=SqliteAccountRepository(db),
        securities=SqliteSecurityRepository(db),
        trades=SqliteTradeRepository(db),
        holdings=SqliteHoldingRepository(db),
        prices=SqlitePriceRepository(db),
        cash=SqliteCashRepository(db),
    )


def build_repositories(
    backend: Union[StorageBackend, str],
    *,
    session: Optional[Session] = None,
    sqlite_path: Optional[Path] = None,
    init_schema: bool = False,
) -> RepositoryBundle:
    """
    Build the repository bundle for a statically known backend.

    Args:
        backend: StorageBackend member (or its string value)
        session: Required for StorageBackend.SQLALCHEMY
        sqlite_path: Required for StorageBackend.SQLITE
        init_schema: Create missing sqlite tables first; the app does this once at startup
    """
    backend = StorageBackend(backend)
    if backend is StorageBackend.SQLALCHEMY:
        if session is None:
            raise ValueError("A SQLAlchemy session is required for the sqlalchemy backend")
        return sqlalchemy_repositories(session)
    if backend is StorageBackend.SQLITE:
        if sqlite_path is None:
            raise ValueError("A database path is required for the sqlite backend")
        db = SqliteDatabase(sqlite_path)
        if init_schema:
            db.init_schema()
        return sqlite_repositories(db)
    raise ValueError(f"Unknown storage backend: {backend}")
