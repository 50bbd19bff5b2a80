"""Daily/cumulative return series and volatility over a price history."""

from decimal import Decimal
from typing import Optional, Sequence

from brokerage.domain.models import PricePoint
from brokerage.domain.views import ReturnPoint

ZERO = Decimal("0")


def daily_returns(prices: Sequence[PricePoint]) -> list[Optional[Decimal]]:
    """
    Simple daily return for each price point, aligned with the input.

    The first point, and any point whose previous close is zero, has no return.
    """
    returns: list[Optional[Decimal]] = []
    previous_close: Optional[Decimal] = None
    for point in prices:
        if previous_close is not None and previous_close != ZERO:
            returns.append((point.close_price - previous_close) / previous_close)
        else:
            returns.append(None)
        previous_close = point.close_price
    return returns


def compute_return_series(
    prices: Sequence[PricePoint],
    ticker: str = "",
) -> list[ReturnPoint]:
    """
    One ReturnPoint per price point, in input (ascending date) order.

    The cumulative figure is the running SUM of daily returns, an additive
    approximation; it stays None until the first defined daily return.
    """
    points: list[ReturnPoint] = []
    cumulative: Optional[Decimal] = None
    for point, daily in zip(prices, daily_returns(prices)):
        if daily is not None:
            cumulative = (cumulative or ZERO) + daily
        points.append(
            ReturnPoint(
                security_id=point.security_id,
                price_date=point.price_date,
                close_price=point.close_price,
                daily_return=daily,
                cum_return_approx=cumulative,
                ticker=ticker,
            )
        )
    return points


def compute_volatility(prices: Sequence[PricePoint]) -> Optional[Decimal]:
    """Population standard deviation of daily returns; None with fewer than 2 returns."""
    returns = [r for r in daily_returns(prices) if r is not None]
    if len(returns) < 2:
        return None

    count = Decimal(len(returns))
    mean = sum(returns, ZERO) / count
    variance = sum(((r - mean) ** 2 for r in returns), ZERO) / count
    return variance.sqrt()
