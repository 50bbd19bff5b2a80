"""Pydantic schemas for order endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from brokerage.domain.models.enums import OrderSide


class OrderRequest(BaseModel):
    """Request schema for placing an order."""

    account_id: str
    security_id: str
    side: OrderSide
    quantity: Decimal
    price: Decimal
    request_id: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Idempotency key; a repeat returns the original trade",
    )


class TradeResponse(BaseModel):
    """Response schema for an executed trade."""

    model_config = {"from_attributes": True}

    trade_id: str
    account_id: str
    security_id: str
    side: OrderSide
    quantity: Decimal
    price: Decimal
    trade_time_est: datetime
    request_id: Optional[str] = None
