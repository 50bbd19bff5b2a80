"""Mark-to-market valuation of an account's holdings."""

from datetime import date
from decimal import Decimal
from typing import Optional

from brokerage.domain.models import Holding
from brokerage.domain.views import HoldingView
from brokerage.repositories.protocols import HoldingRepository, SecurityRepository
from brokerage.services.price_resolver import PriceResolver

ZERO = Decimal("0")


class HoldingsValuator:
    """
    Values non-zero holdings at the latest price on or before a date.

    A security with no price is valued at zero rather than skipped, so its
    unrealized P&L shows the full cost basis as a loss.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        security_repo: SecurityRepository,
        price_resolver: PriceResolver,
    ):
        self._holding_repo = holding_repo
        self._security_repo = security_repo
        self._prices = price_resolver

    def value(self, account_id: str, as_of: Optional[date] = None) -> list[HoldingView]:
        holdings = self._holding_repo.list_by_accounts([account_id])
        return self.value_holdings(holdings, as_of)

    def value_holdings(
        self,
        holdings: list[Holding],
        as_of: Optional[date] = None,
    ) -> list[HoldingView]:
        """Value an explicit list of holdings; zero-quantity rows are dropped."""
        open_holdings = [h for h in holdings if h.quantity != ZERO]
        security_ids = [h.security_id for h in open_holdings]
        prices = self._prices.resolve(security_ids, as_of)
        securities = self._security_repo.get_many(security_ids) if security_ids else {}

        views = []
        for holding in open_holdings:
            price = prices.get(holding.security_id, ZERO)
            security = securities.get(holding.security_id)
            views.append(
                HoldingView(
                    account_id=holding.account_id,
                    security_id=holding.security_id,
                    quantity=holding.quantity,
                    avg_cost=holding.avg_cost,
                    latest_price=price,
                    market_value=holding.quantity * price,
                    unrealized_pl=(price - holding.avg_cost) * holding.quantity,
                    ticker=security.ticker if security else "",
                    company_name=security.company_name if security else "",
                    sector=(security.sector or "") if security else "",
                )
            )
        return views
