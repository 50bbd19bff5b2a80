"""View models for service outputs."""

from brokerage.domain.views.portfolio import (
    HoldingView,
    SecuritySummaryView,
    RealizedPnL,
    CashSummary,
    OverviewView,
    SnapshotView,
    ReturnPoint,
    TradeSummaryView,
    AccountSummaryView,
    UserSummaryView,
)

__all__ = [
    "HoldingView",
    "SecuritySummaryView",
    "RealizedPnL",
    "CashSummary",
    "OverviewView",
    "SnapshotView",
    "ReturnPoint",
    "TradeSummaryView",
    "AccountSummaryView",
    "UserSummaryView",
]
