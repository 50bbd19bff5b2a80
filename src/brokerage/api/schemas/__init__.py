"""Pydantic schemas for API request/response."""

from brokerage.api.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountListResponse,
    UserResponse,
    UserListResponse,
)
from brokerage.api.schemas.order import OrderRequest, TradeResponse
from brokerage.api.schemas.portfolio import (
    HoldingResponse,
    HoldingListResponse,
    SecuritySummaryResponse,
    OverviewResponse,
    SnapshotResponse,
    TradeSummaryResponse,
    CashEntryResponse,
)
from brokerage.api.schemas.security import (
    SecurityResponse,
    ReturnPointResponse,
    ReturnSeriesResponse,
    VolatilityResponse,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "AccountListResponse",
    "UserResponse",
    "UserListResponse",
    "OrderRequest",
    "TradeResponse",
    "HoldingResponse",
    "HoldingListResponse",
    "SecuritySummaryResponse",
    "OverviewResponse",
    "SnapshotResponse",
    "TradeSummaryResponse",
    "CashEntryResponse",
    "SecurityResponse",
    "ReturnPointResponse",
    "ReturnSeriesResponse",
    "VolatilityResponse",
]
