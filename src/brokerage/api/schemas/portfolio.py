"""Pydantic schemas for portfolio reporting endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """Response schema for a valued holding."""

    model_config = {"from_attributes": True}

    account_id: str
    security_id: str
    ticker: str
    company_name: str
    sector: str
    quantity: Decimal
    avg_cost: Decimal
    latest_price: Decimal
    market_value: Decimal
    unrealized_pl: Decimal


class HoldingListResponse(BaseModel):
    """Response schema for an account's holdings."""

    holdings: list[HoldingResponse]
    total_market_value: Decimal
    total_unrealized_pl: Decimal


class SecuritySummaryResponse(BaseModel):
    """Response schema for one security in an overview."""

    model_config = {"from_attributes": True}

    security_id: str
    ticker: str
    company_name: str
    quantity: Decimal
    avg_cost: Decimal
    latest_price: Decimal
    market_value: Decimal
    unrealized_pl: Decimal


class OverviewResponse(BaseModel):
    """Response schema for an account or user overview."""

    model_config = {"from_attributes": True}

    account_id: Optional[str] = None
    user_id: Optional[str] = None
    securities: list[SecuritySummaryResponse]
    total_security_value: Decimal
    cash_balance: Decimal
    total_portfolio_value: Decimal
    total_unrealized_pl: Decimal
    total_realized_pl: Decimal
    deposits: Decimal
    withdrawals: Decimal
    net_contribution: Decimal
    total_return_pct: Optional[Decimal] = None


class SnapshotResponse(BaseModel):
    """Response schema for a dated account snapshot."""

    model_config = {"from_attributes": True}

    account_id: str
    as_of_date: date
    total_market_value: Decimal
    total_unrealized_pl: Decimal
    total_realized_pl: Optional[Decimal] = None
    total_return_pct: Optional[Decimal] = None
    holdings: list[HoldingResponse]


class TradeSummaryResponse(BaseModel):
    """Response schema for a recent trade."""

    model_config = {"from_attributes": True}

    trade_id: str
    account_id: str
    security_id: str
    ticker: str
    side: str
    quantity: Decimal
    price: Decimal
    trade_time_est: datetime


class CashEntryResponse(BaseModel):
    """Response schema for a cash ledger entry."""

    model_config = {"from_attributes": True}

    entry_id: str
    account_id: str
    txn_date: datetime
    amount: Decimal
    type: str
    reference: Optional[str] = None
