"""Account and user level portfolio overview."""

from collections import OrderedDict
from decimal import Decimal
from typing import Iterable

from brokerage.core.exceptions import NotFoundError
from brokerage.domain.models import (
    AccountScope,
    CashEntry,
    CashFlowKind,
    Holding,
    PortfolioScope,
    Security,
    UserScope,
)
from brokerage.domain.views import CashSummary, OverviewView, SecuritySummaryView
from brokerage.repositories.protocols import (
    AccountRepository,
    CashRepository,
    HoldingRepository,
    SecurityRepository,
    TradeRepository,
    UserRepository,
)
from brokerage.services.price_resolver import PriceResolver
from brokerage.services.realized_pnl import compute_realized_pnl

ZERO = Decimal("0")


def summarize_cash(entries: Iterable[CashEntry]) -> CashSummary:
    """
    Cash balance plus deposit and withdrawal buckets.

    Buckets sum the stored amounts as-is, so a withdrawal stored as a negative
    amount yields a negative withdrawals total.
    """
    summary = CashSummary()
    for entry in entries:
        summary.cash_balance += entry.amount
        kind = entry.kind
        if kind == CashFlowKind.DEPOSIT:
            summary.deposits += entry.amount
        elif kind == CashFlowKind.WITHDRAWAL:
            summary.withdrawals += entry.amount
    return summary


def summarize_securities(
    holdings: Iterable[Holding],
    prices: dict[str, Decimal],
    securities: dict[str, Security],
) -> list[SecuritySummaryView]:
    """
    Group non-zero holdings by security across accounts.

    Quantities are summed and average costs weighted by quantity. Ordered by
    market value, largest first.
    """
    quantities: "OrderedDict[str, Decimal]" = OrderedDict()
    costs: dict[str, Decimal] = {}
    for holding in holdings:
        if holding.quantity == ZERO:
            continue
        quantities[holding.security_id] = quantities.get(holding.security_id, ZERO) + holding.quantity
        costs[holding.security_id] = costs.get(holding.security_id, ZERO) + holding.cost_basis

    summaries = []
    for security_id, quantity in quantities.items():
        avg_cost = costs[security_id] / quantity if quantity != ZERO else ZERO
        price = prices.get(security_id, ZERO)
        security = securities.get(security_id)
        summaries.append(
            SecuritySummaryView(
                security_id=security_id,
                quantity=quantity,
                avg_cost=avg_cost,
                latest_price=price,
                market_value=quantity * price,
                unrealized_pl=(price - avg_cost) * quantity,
                ticker=security.ticker if security else "",
                company_name=security.company_name if security else "",
            )
        )

    summaries.sort(key=lambda s: s.market_value, reverse=True)
    return summaries


class PortfolioOverviewAggregator:
    """Aggregates holdings, cash and trade history for an account or a user."""

    def __init__(
        self,
        user_repo: UserRepository,
        account_repo: AccountRepository,
        holding_repo: HoldingRepository,
        trade_repo: TradeRepository,
        cash_repo: CashRepository,
        security_repo: SecurityRepository,
        price_resolver: PriceResolver,
    ):
        self._user_repo = user_repo
        self._account_repo = account_repo
        self._holding_repo = holding_repo
        self._trade_repo = trade_repo
        self._cash_repo = cash_repo
        self._security_repo = security_repo
        self._prices = price_resolver

    def resolve_accounts(self, scope: PortfolioScope) -> list[str]:
        """Account IDs covered by a scope; raises NotFoundError for unknown owners."""
        if isinstance(scope, AccountScope):
            if self._account_repo.get_by_id(scope.account_id) is None:
                raise NotFoundError("Account", scope.account_id)
            return [scope.account_id]
        if isinstance(scope, UserScope):
            if self._user_repo.get_by_id(scope.user_id) is None:
                raise NotFoundError("User", scope.user_id)
            return [a.account_id for a in self._account_repo.list_by_user(scope.user_id)]
        raise TypeError(f"Unsupported portfolio scope: {scope!r}")

    def overview(self, scope: PortfolioScope) -> OverviewView:
        account_ids = self.resolve_accounts(scope)

        view = OverviewView(
            account_id=scope.account_id if isinstance(scope, AccountScope) else None,
            user_id=scope.user_id if isinstance(scope, UserScope) else None,
        )
        if not account_ids:
            return view

        holdings = self._holding_repo.list_by_accounts(account_ids)
        security_ids = sorted({h.security_id for h in holdings})
        prices = self._prices.resolve(security_ids)
        securities = self._security_repo.get_many(security_ids) if security_ids else {}

        view.securities = summarize_securities(holdings, prices, securities)
        view.total_security_value = sum((s.market_value for s in view.securities), ZERO)
        view.total_unrealized_pl = sum((s.unrealized_pl for s in view.securities), ZERO)

        cash = summarize_cash(self._cash_repo.list_by_accounts(account_ids))
        view.cash_balance = cash.cash_balance
        view.deposits = cash.deposits
        view.withdrawals = cash.withdrawals
        view.net_contribution = cash.net_contribution

        view.total_realized_pl = compute_realized_pnl(
            self._trade_repo.list_by_accounts(account_ids)
        ).realized_pl

        view.total_portfolio_value = view.total_security_value + view.cash_balance
        if view.net_contribution > ZERO:
            view.total_return_pct = (
                view.total_portfolio_value - view.net_contribution
            ) / view.net_contribution
        return view
