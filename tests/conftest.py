"""
Pytest configuration and fixtures for brokerage engine tests.

This module provides:
- In-memory SQLite (SQLAlchemy) and temp-file sqlite3 database fixtures
- A repository bundle fixture parametrized over both storage backends
- Factory helpers for users, accounts, securities, prices, cash and trades
- Time helpers for Eastern timezone
- Service fixtures and a FastAPI test client
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from brokerage.main import app
from brokerage.config.settings import Settings, StorageBackend, reset_settings, set_settings
from brokerage.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from brokerage.repositories.sqlalchemy import orm_models  # noqa: F401
from brokerage.repositories.sqlite import SqliteDatabase
from brokerage.repositories.factory import RepositoryBundle, build_repositories
from brokerage.services import (
    AccountService,
    HoldingsLedger,
    OrderService,
    PortfolioService,
)
from brokerage.domain.models import (
    Account,
    CashEntry,
    NewOrder,
    OrderSide,
    PricePoint,
    Security,
    Trade,
    User,
)
from brokerage.core.timezone import EASTERN_TZ


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path):
    """Point settings at a temp data directory for every test."""
    reset_settings()
    reset_database()
    set_settings(Settings(data_dir=tmp_path, storage_backend=StorageBackend.SQLALCHEMY))
    yield
    reset_database()
    reset_settings()


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_db(tmp_path) -> SqliteDatabase:
    """Provide an initialized temp-file sqlite3 database."""
    db = SqliteDatabase(tmp_path / "brokerage-test.db")
    db.init_schema()
    return db


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture(params=[StorageBackend.SQLALCHEMY, StorageBackend.SQLITE], ids=["sqlalchemy", "sqlite"])
def repos(request, tmp_path) -> RepositoryBundle:
    """Repository bundle for each storage backend in turn."""
    if request.param is StorageBackend.SQLALCHEMY:
        session = request.getfixturevalue("test_session")
        return build_repositories(StorageBackend.SQLALCHEMY, session=session)
    return build_repositories(StorageBackend.SQLITE, sqlite_path=tmp_path / "bundle.db", init_schema=True)


@pytest.fixture
def sqlite_repos(tmp_path) -> RepositoryBundle:
    """Repository bundle over raw sqlite3 only."""
    return build_repositories(StorageBackend.SQLITE, sqlite_path=tmp_path / "sqlite-only.db", init_schema=True)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def holdings_ledger(repos) -> HoldingsLedger:
    """Provide test HoldingsLedger."""
    return HoldingsLedger(repos.holdings, repos.trades)


@pytest.fixture
def order_service(repos, holdings_ledger) -> OrderService:
    """Provide test OrderService."""
    return OrderService(
        account_repo=repos.accounts,
        security_repo=repos.securities,
        trade_repo=repos.trades,
        holdings_ledger=holdings_ledger,
    )


@pytest.fixture
def portfolio_service(repos) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(repos)


@pytest.fixture
def account_service(repos) -> AccountService:
    """Provide test AccountService."""
    return AccountService(user_repo=repos.users, account_repo=repos.accounts)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def user_factory(repos) -> Callable[..., User]:
    """Factory for creating test users."""

    def _create_user(username: Optional[str] = None) -> User:
        username = username or f"user-{uuid.uuid4().hex[:8]}"
        return repos.users.create(
            User(
                user_id=str(uuid.uuid4()),
                username=username,
                full_name=username.title(),
                email=f"{username}@example.com",
                created_at_est=eastern_datetime(2024, 1, 2),
            )
        )

    return _create_user


@pytest.fixture
def account_factory(repos, user_factory) -> Callable[..., Account]:
    """Factory for creating test accounts (with a fresh user unless given)."""

    def _create_account(
        user: Optional[User] = None,
        name: str = "Brokerage",
        is_active: bool = True,
    ) -> Account:
        owner = user or user_factory()
        return repos.accounts.create(
            Account(
                account_id=str(uuid.uuid4()),
                user_id=owner.user_id,
                name=name,
                is_active=is_active,
                created_at_est=eastern_datetime(2024, 1, 2),
            )
        )

    return _create_account


@pytest.fixture
def security_factory(repos) -> Callable[..., Security]:
    """Factory for creating test securities keyed by ticker."""

    def _create_security(
        ticker: str,
        company_name: str = "",
        sector: Optional[str] = "Technology",
        is_active: bool = True,
    ) -> Security:
        return repos.securities.create(
            Security(
                security_id=ticker.upper(),
                ticker=ticker,
                company_name=company_name or f"{ticker.upper()} Corp.",
                sector=sector,
                listed_in="NASDAQ",
                is_active=is_active,
            )
        )

    return _create_security


@pytest.fixture
def price_factory(repos) -> Callable[..., list[PricePoint]]:
    """Factory for adding closing prices: price_factory("AAPL", (date, "185.50"), ...)."""

    def _add_prices(security_id: str, *points: tuple[date, str]) -> list[PricePoint]:
        price_points = [
            PricePoint(security_id=security_id, price_date=d, close_price=Decimal(p))
            for d, p in points
        ]
        repos.prices.add_many(price_points)
        return price_points

    return _add_prices


@pytest.fixture
def cash_factory(repos) -> Callable[..., CashEntry]:
    """Factory for adding cash ledger entries."""

    def _add_cash(
        account_id: str,
        amount: str,
        entry_type: str = "Deposit",
        txn_date: Optional[datetime] = None,
    ) -> CashEntry:
        return repos.cash.add(
            CashEntry(
                entry_id=str(uuid.uuid4()),
                account_id=account_id,
                txn_date=txn_date or eastern_datetime(2024, 1, 2),
                amount=Decimal(amount),
                type=entry_type,
            )
        )

    return _add_cash


@pytest.fixture
def trade_factory(holdings_ledger) -> Callable[..., Trade]:
    """Factory for posting trades at explicit times through the ledger."""

    def _post_trade(
        account_id: str,
        security_id: str,
        side: OrderSide,
        quantity: str,
        price: str,
        trade_time_est: Optional[datetime] = None,
    ) -> Trade:
        trade = Trade(
            trade_id=str(uuid.uuid4()),
            account_id=account_id,
            security_id=security_id,
            side=side,
            quantity=Decimal(quantity),
            price=Decimal(price),
            trade_time_est=trade_time_est or eastern_datetime(2024, 1, 3),
        )
        recorded, _ = holdings_ledger.post(trade)
        return recorded

    return _post_trade


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def api_repos(test_session) -> RepositoryBundle:
    """SQLAlchemy repositories on the same engine the API client uses."""
    return build_repositories(StorageBackend.SQLALCHEMY, session=test_session)


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def make_trade(
    side: OrderSide,
    quantity: str,
    price: str,
    security_id: str = "AAPL",
    account_id: str = "acct-1",
    trade_time_est: Optional[datetime] = None,
) -> Trade:
    """In-memory trade for pure-function tests."""
    return Trade(
        trade_id=str(uuid.uuid4()),
        account_id=account_id,
        security_id=security_id,
        side=side,
        quantity=Decimal(quantity),
        price=Decimal(price),
        trade_time_est=trade_time_est or eastern_datetime(2024, 1, 3),
    )


def make_order(
    account_id: str,
    security_id: str,
    side: OrderSide,
    quantity: str,
    price: str,
    request_id: Optional[str] = None,
) -> NewOrder:
    """Helper to create order input."""
    return NewOrder(
        account_id=account_id,
        security_id=security_id,
        side=side,
        quantity=Decimal(quantity),
        price=Decimal(price),
        request_id=request_id,
    )


def price_series(security_id: str, closes: list[str], start: date = date(2024, 1, 2)) -> list[PricePoint]:
    """Consecutive-day price points for pure-function tests."""
    return [
        PricePoint(
            security_id=security_id,
            price_date=date.fromordinal(start.toordinal() + i),
            close_price=Decimal(c),
        )
        for i, c in enumerate(closes)
    ]
