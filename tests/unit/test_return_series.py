"""
Unit tests for return series and volatility.
"""

from decimal import Decimal

from brokerage.services import compute_return_series, compute_volatility, daily_returns

from tests.conftest import price_series


class TestReturnSeries:
    """Tests for compute_return_series()."""

    def test_daily_and_cumulative_returns(self):
        """
        GIVEN closes [100, 110, 99]
        WHEN I compute the return series
        THEN points are (None, None), (0.10, 0.10), (-0.10, 0.0)
        """
        points = compute_return_series(price_series("AAPL", ["100", "110", "99"]), ticker="AAPL")

        assert [(p.daily_return, p.cum_return_approx) for p in points] == [
            (None, None),
            (Decimal("0.1"), Decimal("0.1")),
            (Decimal("-0.1"), Decimal("0.0")),
        ]
        assert all(p.ticker == "AAPL" for p in points)
        assert [p.close_price for p in points] == [Decimal("100"), Decimal("110"), Decimal("99")]

    def test_cumulative_is_additive_not_compounded(self):
        """
        GIVEN closes [100, 110, 121] (two +10% days)
        WHEN I compute the return series
        THEN the cumulative figure is 0.20, not the compounded 0.21
        """
        points = compute_return_series(price_series("AAPL", ["100", "110", "121"]))

        assert points[-1].cum_return_approx == Decimal("0.2")

    def test_zero_previous_close_has_no_return(self):
        """
        GIVEN a zero close followed by a positive close
        WHEN I compute daily returns
        THEN the day after the zero close has no return
        """
        assert daily_returns(price_series("X", ["0", "5", "10"])) == [None, None, Decimal("1")]

    def test_empty_series(self):
        """
        GIVEN no prices
        WHEN I compute the return series
        THEN the result is empty
        """
        assert compute_return_series([]) == []


class TestVolatility:
    """Tests for compute_volatility()."""

    def test_population_standard_deviation(self):
        """
        GIVEN closes [100, 110, 99] (returns 0.10 and -0.10)
        WHEN I compute volatility
        THEN the population standard deviation is 0.1
        """
        assert compute_volatility(price_series("AAPL", ["100", "110", "99"])) == Decimal("0.1")

    def test_fewer_than_two_returns(self):
        """
        GIVEN only two closes (one return)
        WHEN I compute volatility
        THEN the result is None
        """
        assert compute_volatility(price_series("AAPL", ["100", "110"])) is None
        assert compute_volatility([]) is None

    def test_constant_prices(self):
        """
        GIVEN flat closes
        WHEN I compute volatility
        THEN volatility is zero
        """
        assert compute_volatility(price_series("AAPL", ["50", "50", "50", "50"])) == Decimal("0")
