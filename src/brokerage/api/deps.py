"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from brokerage.config.settings import get_settings
from brokerage.repositories.factory import RepositoryBundle, build_repositories
from brokerage.repositories.sqlalchemy.database import get_db
from brokerage.services import (
    AccountService,
    HoldingsLedger,
    OrderService,
    PortfolioService,
)


def get_repositories(db: Session = Depends(get_db)) -> RepositoryBundle:
    """Provide the repository bundle for the configured storage backend."""
    settings = get_settings()
    return build_repositories(
        settings.storage_backend,
        session=db,
        sqlite_path=settings.get_database_path(),
    )


def get_account_service(
    repos: RepositoryBundle = Depends(get_repositories),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(user_repo=repos.users, account_repo=repos.accounts)


def get_portfolio_service(
    repos: RepositoryBundle = Depends(get_repositories),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(repos)


def get_order_service(
    repos: RepositoryBundle = Depends(get_repositories),
) -> OrderService:
    """Provide OrderService instance."""
    return OrderService(
        account_repo=repos.accounts,
        security_repo=repos.securities,
        trade_repo=repos.trades,
        holdings_ledger=HoldingsLedger(repos.holdings, repos.trades),
    )
