"""Realized P&L over a trade history (whole-history average cost)."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from brokerage.domain.models import OrderSide, Trade
from brokerage.domain.views import RealizedPnL

ZERO = Decimal("0")


def compute_realized_pnl(trades: Iterable[Trade]) -> RealizedPnL:
    """
    Realized gain/loss and invested capital for a set of trades.

    Per security, every sell is priced against the average cost of ALL buys in
    the supplied set, regardless of order. A sell that precedes the buys is
    still matched to their eventual average. Not lot-matched.
    """
    buy_qty: dict[str, Decimal] = defaultdict(lambda: ZERO)
    buy_cost: dict[str, Decimal] = defaultdict(lambda: ZERO)
    sell_qty: dict[str, Decimal] = defaultdict(lambda: ZERO)
    sell_proceeds: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for trade in trades:
        if trade.side == OrderSide.BUY:
            buy_qty[trade.security_id] += trade.quantity
            buy_cost[trade.security_id] += trade.quantity * trade.price
        elif trade.side == OrderSide.SELL:
            sell_qty[trade.security_id] += trade.quantity
            sell_proceeds[trade.security_id] += trade.quantity * trade.price

    result = RealizedPnL()
    for security_id in set(buy_qty) | set(sell_qty):
        total_buy_qty = buy_qty[security_id]
        total_buy_cost = buy_cost[security_id]
        avg_buy_cost = total_buy_cost / total_buy_qty if total_buy_qty > 0 else ZERO

        result.invested_capital += total_buy_cost
        result.realized_pl += sell_proceeds[security_id] - sell_qty[security_id] * avg_buy_cost

    return result
