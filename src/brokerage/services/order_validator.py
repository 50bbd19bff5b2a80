"""Pre-trade order validation."""

from decimal import Decimal
from typing import Optional

from brokerage.core.exceptions import InsufficientQuantityError, InvalidInputError
from brokerage.domain.models import OrderSide
from brokerage.services.holdings_ledger import PRICE_STEP, QUANTITY_STEP, HoldingsLedger


def _has_finer_precision(value: Decimal, step: Decimal) -> bool:
    return value.quantize(step) != value


class OrderExecutionValidator:
    """
    Validates an order before it is recorded as a trade.

    Buys are always permitted: there is no check against the account's cash
    balance. Sells may not exceed the quantity currently held; selling the
    exact quantity held is allowed. Prices carry at most 4 decimal places and
    quantities at most 8.
    """

    def __init__(self, holdings_ledger: HoldingsLedger):
        self._ledger = holdings_ledger

    def validate(
        self,
        account_id: str,
        security_id: str,
        side: OrderSide,
        quantity: Decimal,
        price: Optional[Decimal] = None,
    ) -> None:
        """Raise InvalidInputError or InsufficientQuantityError; return None when OK."""
        if quantity is None or quantity <= 0:
            raise InvalidInputError(f"{side.value} requires quantity > 0")
        if price is not None and price <= 0:
            raise InvalidInputError(f"{side.value} requires price > 0")
        if _has_finer_precision(quantity, QUANTITY_STEP):
            raise InvalidInputError(f"Quantity {quantity} has more than 8 decimal places")
        if price is not None and _has_finer_precision(price, PRICE_STEP):
            raise InvalidInputError(f"Price {price} has more than 4 decimal places")

        if side == OrderSide.SELL:
            available = self._ledger.current_quantity(account_id, security_id)
            if quantity > available:
                raise InsufficientQuantityError(
                    account_id, security_id, available=available, requested=quantity
                )
