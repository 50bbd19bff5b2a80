"""Latest-price lookup."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from brokerage.domain.models import PricePoint
from brokerage.repositories.protocols import PriceRepository


class PriceResolver:
    """
    Resolves the closing price on the latest date <= as_of for each security.

    Securities without any qualifying price are absent from the result;
    valuation treats them as priced at zero.
    """

    def __init__(self, price_repo: PriceRepository):
        self._price_repo = price_repo

    def resolve_points(
        self,
        security_ids: Iterable[str],
        as_of: Optional[date] = None,
    ) -> dict[str, PricePoint]:
        ids = sorted(set(security_ids))
        if not ids:
            return {}
        return self._price_repo.latest_prices(ids, as_of)

    def resolve(
        self,
        security_ids: Iterable[str],
        as_of: Optional[date] = None,
    ) -> dict[str, Decimal]:
        """Map security_id -> close price."""
        return {
            security_id: point.close_price
            for security_id, point in self.resolve_points(security_ids, as_of).items()
        }

    def latest_price_date(self, security_ids: Iterable[str]) -> Optional[date]:
        """Most recent price date across the given securities."""
        ids = sorted(set(security_ids))
        if not ids:
            return None
        return self._price_repo.latest_price_date(ids)
