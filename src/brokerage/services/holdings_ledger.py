"""Average-cost holdings ledger."""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Iterable, Optional

from brokerage.core.exceptions import InsufficientQuantityError
from brokerage.domain.models import Holding, OrderSide, Trade
from brokerage.repositories.protocols import HoldingRepository, TradeRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Finest increments every storage adapter keeps exactly
PRICE_STEP = Decimal("0.0001")
QUANTITY_STEP = Decimal("0.00000001")
AVG_COST_STEP = Decimal("0.00000001")


def apply_trade(holding: Optional[Holding], trade: Trade) -> Holding:
    """
    Merge an executed trade into a holding and return the new holding.

    BUY:  qty' = qty + q; avg' = (qty*avg + q*price) / qty'
    SELL: qty' = qty - q; avg unchanged (also when qty' reaches zero)

    The merged average is rounded half-even to 8 decimal places.
    A buy onto an empty or retired holding re-establishes the average cost
    from that buy alone.
    """
    old_qty = holding.quantity if holding else ZERO
    old_avg = holding.avg_cost if holding else ZERO

    if trade.side == OrderSide.BUY:
        new_qty = old_qty + trade.quantity
        if new_qty == ZERO:
            new_avg = ZERO
        else:
            new_avg = ((old_qty * old_avg + trade.quantity * trade.price) / new_qty).quantize(AVG_COST_STEP)
        return Holding(
            account_id=trade.account_id,
            security_id=trade.security_id,
            quantity=new_qty,
            avg_cost=new_avg,
        )

    if trade.quantity > old_qty:
        raise InsufficientQuantityError(
            trade.account_id, trade.security_id, available=old_qty, requested=trade.quantity
        )
    return Holding(
        account_id=trade.account_id,
        security_id=trade.security_id,
        quantity=old_qty - trade.quantity,
        avg_cost=old_avg,
    )


def replay_trades(trades: Iterable[Trade]) -> dict[tuple[str, str], Holding]:
    """Rebuild holdings from scratch by applying trades in the given order."""
    holdings: "OrderedDict[tuple[str, str], Holding]" = OrderedDict()
    for trade in trades:
        key = (trade.account_id, trade.security_id)
        holdings[key] = apply_trade(holdings.get(key), trade)
    return dict(holdings)


class HoldingsLedger:
    """
    Sole writer of holding state.

    Every executed trade is posted here: the current holding is read, the
    trade merged in, and the trade plus the new holding persisted together.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        trade_repo: TradeRepository,
    ):
        self._holding_repo = holding_repo
        self._trade_repo = trade_repo

    def get_holding(self, account_id: str, security_id: str) -> Optional[Holding]:
        """Current holding for an (account, security) pair, if any."""
        return self._holding_repo.get(account_id, security_id)

    def current_quantity(self, account_id: str, security_id: str) -> Decimal:
        """Quantity currently held; zero when no holding exists."""
        holding = self._holding_repo.get(account_id, security_id)
        return holding.quantity if holding else ZERO

    def apply(self, trade: Trade) -> Holding:
        """Read the current holding and return it with the trade merged in (not persisted)."""
        current = self._holding_repo.get(trade.account_id, trade.security_id)
        return apply_trade(current, trade)

    def post(self, trade: Trade) -> tuple[Trade, Holding]:
        """Apply a trade to its holding and persist both atomically."""
        updated = self.apply(trade)
        recorded = self._trade_repo.record_execution(trade, updated)
        logger.debug(
            "Posted %s %s x %s @ %s to account %s: qty=%s avg_cost=%s",
            trade.side.value,
            trade.security_id,
            trade.quantity,
            trade.price,
            trade.account_id,
            updated.quantity,
            updated.avg_cost,
        )
        return recorded, updated
