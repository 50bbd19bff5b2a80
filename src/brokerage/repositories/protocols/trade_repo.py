"""Trade and holding repository protocols."""

from datetime import datetime
from typing import Protocol, Optional

from brokerage.domain.models import Holding, Trade


class TradeRepository(Protocol):
    """Interface for the append-only trade ledger."""

    def record_execution(self, trade: Trade, holding: Holding) -> Trade:
        """
        Insert a trade and upsert the resulting holding in one storage transaction.

        Either both writes land or neither does.
        """
        ...

    def get_by_request_id(self, request_id: str) -> Optional[Trade]:
        """Find a trade recorded under a caller-supplied request ID."""
        ...

    def list_by_accounts(
        self,
        account_ids: list[str],
        until: Optional[datetime] = None,
    ) -> list[Trade]:
        """List trades for accounts, ordered by trade time, optionally up to a cutoff."""
        ...

    def list_recent(self, account_id: str, limit: int) -> list[Trade]:
        """List the newest trades for an account, newest first."""
        ...


class HoldingRepository(Protocol):
    """Interface for derived holding state."""

    def get(self, account_id: str, security_id: str) -> Optional[Holding]:
        """Get the holding for an (account, security) pair."""
        ...

    def list_by_accounts(
        self,
        account_ids: list[str],
        include_zero: bool = False,
    ) -> list[Holding]:
        """List holdings for accounts; zero-quantity rows are skipped by default."""
        ...

    def upsert(self, holding: Holding) -> Holding:
        """Insert or replace a holding row."""
        ...
