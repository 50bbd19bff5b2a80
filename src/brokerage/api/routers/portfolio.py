"""Account-level portfolio reporting endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage.api.deps import get_portfolio_service
from brokerage.api.schemas import (
    CashEntryResponse,
    HoldingListResponse,
    HoldingResponse,
    OverviewResponse,
    SnapshotResponse,
    TradeSummaryResponse,
)
from brokerage.core.exceptions import InvalidInputError
from brokerage.core.timezone import parse_date
from brokerage.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def parse_as_of(value: Optional[str]) -> Optional[date]:
    """Parse an optional as-of date in any format dateutil understands."""
    if value is None or not value.strip():
        return None
    try:
        return parse_date(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidInputError(f"Invalid as_of date: {value}") from exc


@router.get("/{account_id}/holdings", response_model=HoldingListResponse)
def get_holdings(
    account_id: str,
    as_of: Optional[str] = Query(None, description="Value at the latest price on or before this date"),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingListResponse:
    """Valued non-zero holdings of an account."""
    views = portfolio.value_holdings(account_id, parse_as_of(as_of))
    return HoldingListResponse(
        holdings=[HoldingResponse.model_validate(v) for v in views],
        total_market_value=sum((v.market_value for v in views), Decimal("0")),
        total_unrealized_pl=sum((v.unrealized_pl for v in views), Decimal("0")),
    )


@router.get("/{account_id}/overview", response_model=OverviewResponse)
def get_account_overview(
    account_id: str,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> OverviewResponse:
    return OverviewResponse.model_validate(portfolio.get_account_overview(account_id))


@router.get("/{account_id}/snapshot", response_model=SnapshotResponse)
def get_snapshot(
    account_id: str,
    as_of: Optional[str] = Query(None, description="Defaults to the latest price date"),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> SnapshotResponse:
    return SnapshotResponse.model_validate(portfolio.get_portfolio_snapshot(account_id, parse_as_of(as_of)))


@router.get("/{account_id}/top-assets", response_model=list[HoldingResponse])
def get_top_assets(
    account_id: str,
    top_n: Optional[int] = Query(None, ge=0),
    metric: Optional[str] = Query(None, description="marketvalue, unrealizedpl or returnpct"),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> list[HoldingResponse]:
    views = portfolio.get_top_assets(account_id, top_n, metric)
    return [HoldingResponse.model_validate(v) for v in views]


@router.get("/{account_id}/trades", response_model=list[TradeSummaryResponse])
def get_recent_trades(
    account_id: str,
    take: Optional[int] = Query(None, ge=0),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> list[TradeSummaryResponse]:
    """Newest trades first."""
    return [TradeSummaryResponse.model_validate(t) for t in portfolio.get_recent_trades(account_id, take)]


@router.get("/{account_id}/cash", response_model=list[CashEntryResponse])
def get_recent_cash_activity(
    account_id: str,
    take: Optional[int] = Query(None, ge=0),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> list[CashEntryResponse]:
    """Newest cash ledger entries first."""
    entries = portfolio.get_recent_cash_activity(account_id, take)
    return [CashEntryResponse.model_validate(e) for e in entries]
