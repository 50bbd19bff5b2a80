"""
Unit tests for OrderExecutionValidator.

Tests cover:
- Buys always permitted (no cash check)
- Oversell rejection with available/requested
- Exact sell-out allowed
- Non-positive quantity and price rejected
"""

from decimal import Decimal
from typing import Optional

import pytest

from brokerage.core.exceptions import (
    InsufficientQuantityError,
    InvalidInputError,
    ValidationError,
)
from brokerage.domain.models import Holding, OrderSide
from brokerage.services import HoldingsLedger, OrderExecutionValidator


class InMemoryHoldingRepository:
    """Holding repository backed by a dict."""

    def __init__(self, holdings: Optional[list[Holding]] = None):
        self._rows = {(h.account_id, h.security_id): h for h in holdings or []}

    def get(self, account_id: str, security_id: str) -> Optional[Holding]:
        return self._rows.get((account_id, security_id))

    def list_by_accounts(self, account_ids, include_zero=False):
        return [
            h for h in self._rows.values()
            if h.account_id in account_ids and (include_zero or h.quantity != 0)
        ]

    def upsert(self, holding: Holding) -> Holding:
        self._rows[(holding.account_id, holding.security_id)] = holding
        return holding


@pytest.fixture
def validator() -> OrderExecutionValidator:
    """Validator over an account holding 5 AAPL."""
    repo = InMemoryHoldingRepository([Holding("acct-1", "AAPL", Decimal("5"), Decimal("100"))])
    return OrderExecutionValidator(HoldingsLedger(repo, trade_repo=None))


class TestValidateSell:
    """Sell-side checks."""

    def test_oversell_rejected_with_quantities(self, validator):
        """
        GIVEN an account holding 5 AAPL
        WHEN I validate a SELL of 6
        THEN InsufficientQuantityError carries available 5 and requested 6
        """
        with pytest.raises(InsufficientQuantityError) as exc_info:
            validator.validate("acct-1", "AAPL", OrderSide.SELL, Decimal("6"), Decimal("100"))

        assert exc_info.value.available == Decimal("5")
        assert exc_info.value.requested == Decimal("6")
        assert "available 5" in exc_info.value.message

    def test_exact_sell_out_allowed(self, validator):
        """
        GIVEN an account holding 5 AAPL
        WHEN I validate a SELL of exactly 5
        THEN validation passes
        """
        assert validator.validate("acct-1", "AAPL", OrderSide.SELL, Decimal("5"), Decimal("100")) is None

    def test_sell_of_unheld_security_rejected(self, validator):
        """
        GIVEN no MSFT holding
        WHEN I validate a SELL of MSFT
        THEN available is reported as 0
        """
        with pytest.raises(InsufficientQuantityError) as exc_info:
            validator.validate("acct-1", "MSFT", OrderSide.SELL, Decimal("1"))

        assert exc_info.value.available == Decimal("0")


class TestValidateBuy:
    """Buy-side checks."""

    def test_buy_always_permitted(self, validator):
        """
        GIVEN an account with no cash recorded anywhere
        WHEN I validate a large BUY
        THEN validation passes (buys are not checked against cash)
        """
        assert validator.validate("acct-1", "MSFT", OrderSide.BUY, Decimal("1000000"), Decimal("400")) is None

    @pytest.mark.parametrize("quantity", [Decimal("0"), Decimal("-1")])
    def test_non_positive_quantity_rejected(self, validator, quantity):
        """
        GIVEN a quantity <= 0
        WHEN I validate a BUY
        THEN InvalidInputError is raised
        """
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate("acct-1", "AAPL", OrderSide.BUY, quantity, Decimal("100"))

        assert exc_info.value.code == "INVALID_INPUT"
        assert isinstance(exc_info.value, ValidationError)

    def test_non_positive_price_rejected(self, validator):
        """
        GIVEN a price of 0
        WHEN I validate a BUY
        THEN InvalidInputError is raised
        """
        with pytest.raises(InvalidInputError):
            validator.validate("acct-1", "AAPL", OrderSide.BUY, Decimal("1"), Decimal("0"))


class TestValidatePrecision:
    """Prices keep 4 decimal places and quantities 8 in every adapter."""

    def test_price_with_five_decimals_rejected(self, validator):
        """
        GIVEN a price of 100.12345
        WHEN I validate a BUY
        THEN InvalidInputError names the price
        """
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate("acct-1", "AAPL", OrderSide.BUY, Decimal("3"), Decimal("100.12345"))

        assert "4 decimal places" in exc_info.value.message

    def test_quantity_with_nine_decimals_rejected(self, validator):
        """
        GIVEN a quantity of 0.123456789
        WHEN I validate a BUY
        THEN InvalidInputError names the quantity
        """
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate("acct-1", "AAPL", OrderSide.BUY, Decimal("0.123456789"), Decimal("100"))

        assert "8 decimal places" in exc_info.value.message

    @pytest.mark.parametrize(
        "quantity, price",
        [
            (Decimal("0.12345678"), Decimal("100.1234")),
            (Decimal("5"), Decimal("100.12340000")),
        ],
    )
    def test_values_at_storage_precision_accepted(self, validator, quantity, price):
        """
        GIVEN values with at most 8 / 4 significant decimal places
        WHEN I validate a BUY
        THEN validation passes
        """
        assert validator.validate("acct-1", "AAPL", OrderSide.BUY, quantity, price) is None
