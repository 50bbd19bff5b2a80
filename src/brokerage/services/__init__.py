"""Service layer."""

from brokerage.services.holdings_ledger import HoldingsLedger, apply_trade, replay_trades
from brokerage.services.order_validator import OrderExecutionValidator
from brokerage.services.realized_pnl import compute_realized_pnl
from brokerage.services.return_series import (
    daily_returns,
    compute_return_series,
    compute_volatility,
)
from brokerage.services.price_resolver import PriceResolver
from brokerage.services.holdings_valuator import HoldingsValuator
from brokerage.services.overview_aggregator import (
    PortfolioOverviewAggregator,
    summarize_cash,
    summarize_securities,
)
from brokerage.services.order_service import OrderService, KeyedLocks
from brokerage.services.portfolio_service import PortfolioService
from brokerage.services.account_service import AccountService, NewAccount

__all__ = [
    "HoldingsLedger",
    "apply_trade",
    "replay_trades",
    "OrderExecutionValidator",
    "compute_realized_pnl",
    "daily_returns",
    "compute_return_series",
    "compute_volatility",
    "PriceResolver",
    "HoldingsValuator",
    "PortfolioOverviewAggregator",
    "summarize_cash",
    "summarize_securities",
    "OrderService",
    "KeyedLocks",
    "PortfolioService",
    "AccountService",
    "NewAccount",
]
