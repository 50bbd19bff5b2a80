"""View models for engine outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class HoldingView:
    """A valued holding within one account."""

    account_id: str
    security_id: str
    quantity: Decimal
    avg_cost: Decimal
    latest_price: Decimal
    market_value: Decimal
    unrealized_pl: Decimal
    ticker: str = ""
    company_name: str = ""
    sector: str = ""

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.avg_cost


@dataclass
class SecuritySummaryView:
    """One security aggregated across every holding in an overview scope."""

    security_id: str
    quantity: Decimal
    avg_cost: Decimal
    latest_price: Decimal
    market_value: Decimal
    unrealized_pl: Decimal
    ticker: str = ""
    company_name: str = ""


@dataclass
class RealizedPnL:
    """Realized gain/loss and invested capital over a set of trades."""

    realized_pl: Decimal = field(default_factory=lambda: Decimal("0"))
    invested_capital: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class CashSummary:
    """Cash balance and contribution buckets over a set of ledger entries."""

    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    deposits: Decimal = field(default_factory=lambda: Decimal("0"))
    withdrawals: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def net_contribution(self) -> Decimal:
        return self.deposits - self.withdrawals


@dataclass
class OverviewView:
    """Aggregated value, P&L and contributions for an account or a user."""

    account_id: Optional[str] = None
    user_id: Optional[str] = None
    securities: list[SecuritySummaryView] = field(default_factory=list)
    total_security_value: Decimal = field(default_factory=lambda: Decimal("0"))
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    total_portfolio_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_unrealized_pl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_realized_pl: Decimal = field(default_factory=lambda: Decimal("0"))
    deposits: Decimal = field(default_factory=lambda: Decimal("0"))
    withdrawals: Decimal = field(default_factory=lambda: Decimal("0"))
    net_contribution: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return_pct: Optional[Decimal] = None


@dataclass
class SnapshotView:
    """Point-in-time valuation of a single account."""

    account_id: str
    as_of_date: date
    total_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_unrealized_pl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_realized_pl: Optional[Decimal] = None
    total_return_pct: Optional[Decimal] = None
    holdings: list[HoldingView] = field(default_factory=list)


@dataclass
class ReturnPoint:
    """
    Daily and cumulative return for one price observation.

    cum_return_approx is a running sum of daily returns, not a compounded
    product.
    """

    security_id: str
    price_date: date
    close_price: Decimal
    daily_return: Optional[Decimal] = None
    cum_return_approx: Optional[Decimal] = None
    ticker: str = ""


@dataclass
class TradeSummaryView:
    """Executed trade enriched with security details."""

    trade_id: str
    account_id: str
    security_id: str
    ticker: str
    side: str
    quantity: Decimal
    price: Decimal
    trade_time_est: datetime


@dataclass
class AccountSummaryView:
    """Account listing row."""

    account_id: str
    name: str
    username: str
    account_type: str
    is_active: bool
    created_at_est: Optional[datetime] = None


@dataclass
class UserSummaryView:
    """User listing row with account counts."""

    user_id: str
    username: str
    full_name: str
    email: str
    account_count: int = 0
    active_account_count: int = 0
