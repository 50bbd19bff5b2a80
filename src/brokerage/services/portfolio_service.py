"""Portfolio reporting facade."""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from brokerage.config.settings import get_settings
from brokerage.core.exceptions import NotFoundError
from brokerage.core.timezone import end_of_day_eastern, today_eastern
from brokerage.domain.models import (
    AccountScope,
    CashEntry,
    PortfolioScope,
    Security,
    TopAssetMetric,
    UserScope,
)
from brokerage.domain.views import (
    HoldingView,
    OverviewView,
    ReturnPoint,
    SnapshotView,
    TradeSummaryView,
)
from brokerage.repositories.factory import RepositoryBundle
from brokerage.services.holdings_valuator import HoldingsValuator
from brokerage.services.overview_aggregator import PortfolioOverviewAggregator
from brokerage.services.price_resolver import PriceResolver
from brokerage.services.realized_pnl import compute_realized_pnl
from brokerage.services.return_series import compute_return_series, compute_volatility

ZERO = Decimal("0")


class PortfolioService:
    """
    Read-side portfolio queries over one repository bundle.

    Valuation, overview and analytics all share the same price resolution,
    so every backend reports identical figures for identical data.
    """

    def __init__(self, repos: RepositoryBundle):
        self._repos = repos
        self._prices = PriceResolver(repos.prices)
        self._valuator = HoldingsValuator(repos.holdings, repos.securities, self._prices)
        self._aggregator = PortfolioOverviewAggregator(
            user_repo=repos.users,
            account_repo=repos.accounts,
            holding_repo=repos.holdings,
            trade_repo=repos.trades,
            cash_repo=repos.cash,
            security_repo=repos.securities,
            price_resolver=self._prices,
        )

    # Holdings and overview

    def value_holdings(self, account_id: str, as_of: Optional[date] = None) -> list[HoldingView]:
        self._require_account(account_id)
        return self._valuator.value(account_id, as_of)

    def get_overview(self, scope: PortfolioScope) -> OverviewView:
        return self._aggregator.overview(scope)

    def get_account_overview(self, account_id: str) -> OverviewView:
        return self._aggregator.overview(AccountScope(account_id))

    def get_user_overview(self, user_id: str) -> OverviewView:
        return self._aggregator.overview(UserScope(user_id))

    def get_portfolio_snapshot(
        self,
        account_id: str,
        as_of: Optional[date] = None,
    ) -> SnapshotView:
        """
        Value an account as of a date.

        Without as_of, the latest price date across the account's open
        holdings is used (today when none are priced). Realized P&L covers
        trades up to the end of that day, Eastern time.
        """
        self._require_account(account_id)
        holdings = self._repos.holdings.list_by_accounts([account_id])

        effective = as_of
        if effective is None:
            effective = self._prices.latest_price_date(h.security_id for h in holdings) or today_eastern()

        views = self._valuator.value_holdings(holdings, effective)
        trades = self._repos.trades.list_by_accounts([account_id], until=end_of_day_eastern(effective))
        pnl = compute_realized_pnl(trades)

        snapshot = SnapshotView(
            account_id=account_id,
            as_of_date=effective,
            total_market_value=sum((v.market_value for v in views), ZERO),
            total_unrealized_pl=sum((v.unrealized_pl for v in views), ZERO),
            total_realized_pl=pnl.realized_pl,
            holdings=views,
        )
        if pnl.invested_capital > ZERO:
            snapshot.total_return_pct = (
                snapshot.total_market_value + pnl.realized_pl
            ) / pnl.invested_capital - 1
        return snapshot

    def get_top_assets(
        self,
        account_id: str,
        top_n: Optional[int] = None,
        metric: Union[TopAssetMetric, str, None] = None,
    ) -> list[HoldingView]:
        """Largest holdings by market value, unrealized P&L or return on cost."""
        if not isinstance(metric, TopAssetMetric):
            metric = TopAssetMetric.parse(metric)
        limit = top_n if top_n is not None else get_settings().top_assets_limit
        if limit <= 0:
            return []

        views = self.value_holdings(account_id)
        if metric == TopAssetMetric.UNREALIZED_PL:
            views.sort(key=lambda v: v.unrealized_pl, reverse=True)
        elif metric == TopAssetMetric.RETURN_PCT:
            # Zero-cost positions have no return on cost and rank last.
            views.sort(
                key=lambda v: (
                    v.cost_basis != ZERO,
                    v.unrealized_pl / v.cost_basis if v.cost_basis != ZERO else ZERO,
                ),
                reverse=True,
            )
        else:
            views.sort(key=lambda v: v.market_value, reverse=True)
        return views[:limit]

    # Activity

    def get_recent_trades(self, account_id: str, take: Optional[int] = None) -> list[TradeSummaryView]:
        """Newest trades first, with tickers."""
        self._require_account(account_id)
        limit = take if take is not None else get_settings().recent_activity_limit
        if limit <= 0:
            return []
        trades = self._repos.trades.list_recent(account_id, limit)
        securities = self._repos.securities.get_many(sorted({t.security_id for t in trades})) if trades else {}
        return [
            TradeSummaryView(
                trade_id=t.trade_id,
                account_id=t.account_id,
                security_id=t.security_id,
                ticker=securities[t.security_id].ticker if t.security_id in securities else "",
                side=t.side.value,
                quantity=t.quantity,
                price=t.price,
                trade_time_est=t.trade_time_est,
            )
            for t in trades
        ]

    def get_recent_cash_activity(self, account_id: str, take: Optional[int] = None) -> list[CashEntry]:
        """Newest cash ledger entries first."""
        self._require_account(account_id)
        limit = take if take is not None else get_settings().recent_activity_limit
        if limit <= 0:
            return []
        return self._repos.cash.list_recent(account_id, limit)

    # Analytics

    def get_return_series(
        self,
        security_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[ReturnPoint]:
        security = self._require_security(security_id)
        prices = self._repos.prices.list_range(security_id, start, end)
        return compute_return_series(prices, ticker=security.ticker)

    def get_volatility(
        self,
        security_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Optional[Decimal]:
        self._require_security(security_id)
        return compute_volatility(self._repos.prices.list_range(security_id, start, end))

    def list_securities(self, active_only: bool = False) -> list[Security]:
        return self._repos.securities.list_all(active_only=active_only)

    def _require_account(self, account_id: str) -> None:
        if self._repos.accounts.get_by_id(account_id) is None:
            raise NotFoundError("Account", account_id)

    def _require_security(self, security_id: str) -> Security:
        security = self._repos.securities.get_by_id(security_id)
        if security is None:
            raise NotFoundError("Security", security_id)
        return security
