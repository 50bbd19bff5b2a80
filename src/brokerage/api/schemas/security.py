"""Pydantic schemas for security endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class SecurityResponse(BaseModel):
    """Response schema for a security."""

    model_config = {"from_attributes": True}

    security_id: str
    ticker: str
    company_name: str
    sector: Optional[str] = None
    listed_in: Optional[str] = None
    is_active: bool


class ReturnPointResponse(BaseModel):
    """Response schema for one day of a return series."""

    model_config = {"from_attributes": True}

    price_date: date
    close_price: Decimal
    daily_return: Optional[Decimal] = None
    cum_return_approx: Optional[Decimal] = None


class ReturnSeriesResponse(BaseModel):
    """Response schema for a security's return series."""

    security_id: str
    ticker: str
    points: list[ReturnPointResponse]


class VolatilityResponse(BaseModel):
    """Response schema for daily-return volatility."""

    security_id: str
    volatility: Optional[Decimal] = None
    start: Optional[date] = None
    end: Optional[date] = None
