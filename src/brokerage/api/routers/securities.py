"""Security listing and price analytics endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage.api.deps import get_portfolio_service
from brokerage.api.schemas import (
    ReturnPointResponse,
    ReturnSeriesResponse,
    SecurityResponse,
    VolatilityResponse,
)
from brokerage.services import PortfolioService

router = APIRouter(prefix="/securities", tags=["securities"])


@router.get("", response_model=list[SecurityResponse])
def list_securities(
    active_only: bool = Query(False),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> list[SecurityResponse]:
    """Securities ordered by ticker."""
    return [SecurityResponse.model_validate(s) for s in portfolio.list_securities(active_only)]


@router.get("/{security_id}/returns", response_model=ReturnSeriesResponse)
def get_return_series(
    security_id: str,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> ReturnSeriesResponse:
    """Daily and additive cumulative returns over the price history."""
    points = portfolio.get_return_series(security_id, start, end)
    return ReturnSeriesResponse(
        security_id=security_id,
        ticker=points[0].ticker if points else "",
        points=[ReturnPointResponse.model_validate(p) for p in points],
    )


@router.get("/{security_id}/volatility", response_model=VolatilityResponse)
def get_volatility(
    security_id: str,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> VolatilityResponse:
    """Population standard deviation of daily returns."""
    return VolatilityResponse(
        security_id=security_id,
        volatility=portfolio.get_volatility(security_id, start, end),
        start=start,
        end=end,
    )
