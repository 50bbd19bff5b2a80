"""
Unit tests for cash classification and overview grouping helpers.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from brokerage.domain.models import (
    CashEntry,
    CashFlowKind,
    Holding,
    Security,
    TopAssetMetric,
    classify_cash_type,
)
from brokerage.services import summarize_cash, summarize_securities


def cash(amount: str, entry_type: str) -> CashEntry:
    return CashEntry(
        entry_id=entry_type + amount,
        account_id="acct-1",
        txn_date=datetime(2024, 1, 2),
        amount=Decimal(amount),
        type=entry_type,
    )


class TestClassifyCashType:
    """Tests for classify_cash_type()."""

    @pytest.mark.parametrize("entry_type", ["Deposit", "DEPOSIT_ACH", "dividend", "Credit Interest"])
    def test_deposit_prefixes(self, entry_type):
        assert classify_cash_type(entry_type) == CashFlowKind.DEPOSIT

    @pytest.mark.parametrize("entry_type", ["Withdrawal", "withdraw", "Fee", "DEBIT card"])
    def test_withdrawal_prefixes(self, entry_type):
        assert classify_cash_type(entry_type) == CashFlowKind.WITHDRAWAL

    @pytest.mark.parametrize("entry_type", ["Transfer", "Interest", "", "Trade settlement"])
    def test_other(self, entry_type):
        assert classify_cash_type(entry_type) == CashFlowKind.OTHER


class TestSummarizeCash:
    """Tests for summarize_cash()."""

    def test_buckets_and_balance(self):
        """
        GIVEN deposits of 1000 and 200, a withdrawal of 400 and an untyped entry
        WHEN I summarize the cash
        THEN deposits 1200, withdrawals 400, net contribution 800, balance sums all
        """
        summary = summarize_cash([
            cash("1000", "Deposit"),
            cash("200", "Dividend"),
            cash("400", "Withdrawal"),
            cash("-50", "Transfer"),
        ])

        assert summary.deposits == Decimal("1200")
        assert summary.withdrawals == Decimal("400")
        assert summary.net_contribution == Decimal("800")
        assert summary.cash_balance == Decimal("1550")

    def test_stored_amounts_summed_as_is(self):
        """
        GIVEN a withdrawal stored as a negative amount
        WHEN I summarize the cash
        THEN the withdrawals bucket is negative (amounts are not sign-normalized)
        """
        summary = summarize_cash([cash("1000", "Deposit"), cash("-300", "Withdrawal")])

        assert summary.withdrawals == Decimal("-300")
        assert summary.net_contribution == Decimal("1300")
        assert summary.cash_balance == Decimal("700")


class TestSummarizeSecurities:
    """Tests for summarize_securities()."""

    def test_groups_across_accounts_with_weighted_cost(self):
        """
        GIVEN 10 AAPL @ 100 in one account and 30 AAPL @ 120 in another
        WHEN I summarize securities
        THEN AAPL is one row of 40 @ 115
        """
        rows = summarize_securities(
            [
                Holding("a", "AAPL", Decimal("10"), Decimal("100")),
                Holding("b", "AAPL", Decimal("30"), Decimal("120")),
            ],
            prices={"AAPL": Decimal("130")},
            securities={"AAPL": Security("AAPL", "AAPL", "Apple Inc.")},
        )

        assert len(rows) == 1
        assert rows[0].quantity == Decimal("40")
        assert rows[0].avg_cost == Decimal("115")
        assert rows[0].market_value == Decimal("5200")
        assert rows[0].unrealized_pl == Decimal("600")
        assert rows[0].company_name == "Apple Inc."

    def test_ordered_by_market_value_and_zero_rows_skipped(self):
        """
        GIVEN holdings of different sizes, one retired, one unpriced
        WHEN I summarize securities
        THEN rows are ordered by market value descending without the retired one
        """
        rows = summarize_securities(
            [
                Holding("a", "SMALL", Decimal("1"), Decimal("10")),
                Holding("a", "BIG", Decimal("100"), Decimal("10")),
                Holding("a", "GONE", Decimal("0"), Decimal("10")),
                Holding("a", "NOPRICE", Decimal("5"), Decimal("10")),
            ],
            prices={"SMALL": Decimal("10"), "BIG": Decimal("10")},
            securities={},
        )

        assert [r.security_id for r in rows] == ["BIG", "SMALL", "NOPRICE"]
        assert rows[-1].latest_price == Decimal("0")
        assert rows[-1].unrealized_pl == Decimal("-50")


class TestTopAssetMetric:
    """Tests for TopAssetMetric.parse()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, TopAssetMetric.MARKET_VALUE),
            ("", TopAssetMetric.MARKET_VALUE),
            ("Market Value", TopAssetMetric.MARKET_VALUE),
            ("unrealized_pl", TopAssetMetric.UNREALIZED_PL),
            (" UnrealizedPL ", TopAssetMetric.UNREALIZED_PL),
            ("RETURNPCT", TopAssetMetric.RETURN_PCT),
            ("bogus", TopAssetMetric.MARKET_VALUE),
        ],
    )
    def test_parse(self, raw, expected):
        assert TopAssetMetric.parse(raw) == expected
