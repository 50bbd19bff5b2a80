"""Enumerations for domain models."""

from enum import Enum
from typing import Optional


class OrderSide(str, Enum):
    """Side of an order or executed trade."""

    BUY = "BUY"
    SELL = "SELL"


class CashFlowKind(str, Enum):
    """Contribution bucket a cash ledger entry falls into."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    OTHER = "OTHER"


class TopAssetMetric(str, Enum):
    """Ranking metrics for top-asset queries."""

    MARKET_VALUE = "marketvalue"
    UNREALIZED_PL = "unrealizedpl"
    RETURN_PCT = "returnpct"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TopAssetMetric":
        """Parse a user-supplied metric name; unknown names rank by market value."""
        key = (value or "").strip().lower().replace("_", "").replace(" ", "")
        for metric in cls:
            if metric.value == key:
                return metric
        return cls.MARKET_VALUE
