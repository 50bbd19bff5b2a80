"""Order placement endpoints."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_order_service
from brokerage.api.schemas import OrderRequest, TradeResponse
from brokerage.domain.models import NewOrder
from brokerage.services import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=TradeResponse, status_code=201)
def place_order(
    data: OrderRequest,
    service: OrderService = Depends(get_order_service),
) -> TradeResponse:
    """
    Execute a buy or sell.

    Sells beyond the quantity held are rejected with INSUFFICIENT_QUANTITY.
    """
    trade = service.place_order(
        NewOrder(
            account_id=data.account_id,
            security_id=data.security_id,
            side=data.side,
            quantity=data.quantity,
            price=data.price,
            request_id=data.request_id,
        )
    )
    return TradeResponse.model_validate(trade)
