"""Price history and cash ledger repository protocols."""

from datetime import date
from typing import Protocol, Optional

from brokerage.domain.models import CashEntry, PricePoint


class PriceRepository(Protocol):
    """Interface for daily close prices."""

    def add_many(self, points: list[PricePoint]) -> None:
        """Insert or replace price points (one per security/date)."""
        ...

    def latest_prices(
        self,
        security_ids: list[str],
        as_of: Optional[date] = None,
    ) -> dict[str, PricePoint]:
        """Most recent price on or before as_of (or overall) per security."""
        ...

    def latest_price_date(self, security_ids: list[str]) -> Optional[date]:
        """Newest price date across the given securities."""
        ...

    def list_range(
        self,
        security_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[PricePoint]:
        """Prices for a security within [start, end], ascending by date."""
        ...


class CashRepository(Protocol):
    """Interface for the cash ledger."""

    def add(self, entry: CashEntry) -> CashEntry:
        """Persist a cash ledger entry."""
        ...

    def list_by_accounts(self, account_ids: list[str]) -> list[CashEntry]:
        """List cash entries for accounts, ordered by date."""
        ...

    def list_recent(self, account_id: str, limit: int) -> list[CashEntry]:
        """List the newest cash entries for an account, newest first."""
        ...
