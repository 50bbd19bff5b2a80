"""Application context for in-process service management.

Holds the selected storage backend and hands out services bound to it,
without going through HTTP.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.config.settings import Settings, StorageBackend, get_settings, set_settings
from brokerage.repositories.factory import RepositoryBundle, build_repositories
from brokerage.repositories.sqlalchemy.database import (
    get_session,
    init_db_with_url,
    reset_database,
)
from brokerage.services import (
    AccountService,
    HoldingsLedger,
    OrderService,
    PortfolioService,
)


class AppContext:
    """
    Explicit session state: one storage backend and the services over it.

    Switching backends means building a new context (or calling initialize
    again); nothing is resolved by name at runtime.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._session: Optional[Session] = None
        self._repos: Optional[RepositoryBundle] = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._account_service: Optional[AccountService] = None
        self._portfolio_service: Optional[PortfolioService] = None
        self._order_service: Optional[OrderService] = None

    def initialize(
        self,
        backend: Optional[StorageBackend] = None,
        data_dir: Optional[Path] = None,
    ) -> None:
        """
        Initialize or reinitialize against a backend and data directory.

        Args:
            backend: Storage backend; defaults to the configured one
            data_dir: Data directory; defaults to the configured one
        """
        base = self._settings or get_settings()
        updates = {}
        if backend is not None:
            updates["storage_backend"] = StorageBackend(backend)
        if data_dir is not None:
            updates["data_dir"] = data_dir
        self._settings = base.model_copy(update=updates) if updates else base
        set_settings(self._settings)

        self.close()
        reset_database()
        if self._settings.storage_backend is StorageBackend.SQLALCHEMY:
            init_db_with_url(self._settings.get_database_url())

        self._repos = None
        self._account_service = None
        self._portfolio_service = None
        self._order_service = None
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def backend(self) -> StorageBackend:
        """The storage backend this context is bound to."""
        return (self._settings or get_settings()).storage_backend

    @property
    def repositories(self) -> RepositoryBundle:
        """Repository bundle for the selected backend."""
        if not self._initialized:
            self.initialize()
        if self._repos is None:
            settings = self._settings or get_settings()
            if settings.storage_backend is StorageBackend.SQLALCHEMY:
                self._session = get_session()
            self._repos = build_repositories(
                settings.storage_backend,
                session=self._session,
                sqlite_path=settings.get_database_path(),
                init_schema=True,
            )
        return self._repos

    # Service accessors
    @property
    def accounts(self) -> AccountService:
        """Get the AccountService instance."""
        if self._account_service is None:
            repos = self.repositories
            self._account_service = AccountService(repos.users, repos.accounts)
        return self._account_service

    @property
    def portfolio(self) -> PortfolioService:
        """Get the PortfolioService instance."""
        if self._portfolio_service is None:
            self._portfolio_service = PortfolioService(self.repositories)
        return self._portfolio_service

    @property
    def orders(self) -> OrderService:
        """Get the OrderService instance."""
        if self._order_service is None:
            repos = self.repositories
            self._order_service = OrderService(
                account_repo=repos.accounts,
                security_repo=repos.securities,
                trade_repo=repos.trades,
                holdings_ledger=HoldingsLedger(repos.holdings, repos.trades),
            )
        return self._order_service

    def close(self) -> None:
        """Clean up resources."""
        if self._session is not None:
            self._session.close()
            self._session = None
        self._repos = None
        self._account_service = None
        self._portfolio_service = None
        self._order_service = None


_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
