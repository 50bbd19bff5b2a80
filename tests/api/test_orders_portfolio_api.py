"""
API tests for order placement, portfolio reporting and securities.
"""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from brokerage.domain.models import CashEntry, PricePoint, Security

from tests.conftest import eastern_datetime


@pytest.fixture
def seeded(client: TestClient, api_repos):
    """An account, AAPL/MSFT securities and three days of AAPL closes."""
    api_repos.securities.create(Security("AAPL", "AAPL", "Apple Inc.", sector="Technology"))
    api_repos.securities.create(Security("MSFT", "MSFT", "Microsoft Corp.", is_active=False))
    api_repos.prices.add_many([
        PricePoint("AAPL", date(2024, 6, 12), Decimal("100")),
        PricePoint("AAPL", date(2024, 6, 13), Decimal("110")),
        PricePoint("AAPL", date(2024, 6, 14), Decimal("99")),
    ])
    account = client.post("/accounts", json={"username": "trader", "account_name": "Main"}).json()
    return account["account_id"]


def buy(client, account_id, quantity, price, **extra):
    return client.post("/orders", json={
        "account_id": account_id,
        "security_id": "AAPL",
        "side": "BUY",
        "quantity": quantity,
        "price": price,
        **extra,
    })


class TestOrdersAPI:
    """Tests for POST /orders."""

    def test_buy_then_holdings(self, client: TestClient, seeded):
        """
        GIVEN an empty account
        WHEN I buy 10 @ 100 and 10 @ 120
        THEN holdings show 20 @ 110 valued at the latest close
        """
        assert buy(client, seeded, "10", "100").status_code == 201
        assert buy(client, seeded, "10", "120").status_code == 201

        data = client.get(f"/portfolio/{seeded}/holdings").json()

        assert len(data["holdings"]) == 1
        holding = data["holdings"][0]
        assert Decimal(holding["quantity"]) == Decimal("20")
        assert Decimal(holding["avg_cost"]) == Decimal("110")
        assert Decimal(holding["latest_price"]) == Decimal("99")
        assert Decimal(data["total_market_value"]) == Decimal("1980")
        assert holding["company_name"] == "Apple Inc."

    def test_oversell_is_400(self, client: TestClient, seeded):
        """
        GIVEN a holding of 5
        WHEN I POST a SELL of 6
        THEN response is 400 with INSUFFICIENT_QUANTITY
        """
        buy(client, seeded, "5", "100")

        response = client.post("/orders", json={
            "account_id": seeded,
            "security_id": "AAPL",
            "side": "SELL",
            "quantity": "6",
            "price": "100",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_QUANTITY"

    def test_non_positive_quantity_is_400(self, client: TestClient, seeded):
        response = buy(client, seeded, "0", "100")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    def test_bad_side_is_422(self, client: TestClient, seeded):
        response = client.post("/orders", json={
            "account_id": seeded,
            "security_id": "AAPL",
            "side": "SHORT",
            "quantity": "1",
            "price": "1",
        })

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert "side" in body["message"]

    def test_unknown_security_is_404(self, client: TestClient, seeded):
        response = client.post("/orders", json={
            "account_id": seeded,
            "security_id": "ZZZZ",
            "side": "BUY",
            "quantity": "1",
            "price": "1",
        })

        assert response.status_code == 404

    def test_idempotent_request_id(self, client: TestClient, seeded):
        """
        GIVEN an order placed with request_id "abc"
        WHEN it is retried
        THEN the same trade comes back and the position is not doubled
        """
        first = buy(client, seeded, "10", "100", request_id="abc").json()
        second = buy(client, seeded, "10", "100", request_id="abc").json()

        assert first["trade_id"] == second["trade_id"]
        holdings = client.get(f"/portfolio/{seeded}/holdings").json()["holdings"]
        assert Decimal(holdings[0]["quantity"]) == Decimal("10")


class TestPortfolioAPI:
    """Tests for /portfolio endpoints."""

    def test_overview_and_snapshot(self, client: TestClient, seeded):
        buy(client, seeded, "10", "100")

        overview = client.get(f"/portfolio/{seeded}/overview").json()
        snapshot = client.get(f"/portfolio/{seeded}/snapshot", params={"as_of": "06/13/2024"}).json()

        assert Decimal(overview["total_security_value"]) == Decimal("990")
        assert Decimal(overview["total_unrealized_pl"]) == Decimal("-10")
        assert snapshot["as_of_date"] == "2024-06-13"
        assert Decimal(snapshot["total_market_value"]) == Decimal("1100")

    def test_holdings_as_of(self, client: TestClient, seeded):
        buy(client, seeded, "1", "100")

        data = client.get(f"/portfolio/{seeded}/holdings", params={"as_of": "2024-06-12"}).json()

        assert Decimal(data["holdings"][0]["latest_price"]) == Decimal("100")

    def test_bad_as_of_is_400(self, client: TestClient, seeded):
        response = client.get(f"/portfolio/{seeded}/snapshot", params={"as_of": "not a date"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    def test_recent_trades_and_top_assets(self, client: TestClient, seeded):
        buy(client, seeded, "1", "100")
        buy(client, seeded, "2", "100")

        trades = client.get(f"/portfolio/{seeded}/trades", params={"take": 1}).json()
        top = client.get(f"/portfolio/{seeded}/top-assets", params={"metric": "unrealizedpl"}).json()

        assert len(trades) == 1
        assert trades[0]["ticker"] == "AAPL"
        assert [t["security_id"] for t in top] == ["AAPL"]

    def test_recent_cash(self, client: TestClient, seeded, api_repos):
        api_repos.cash.add(CashEntry("c1", seeded, eastern_datetime(2024, 6, 1), Decimal("500"), "Deposit"))

        entries = client.get(f"/portfolio/{seeded}/cash").json()

        assert [e["entry_id"] for e in entries] == ["c1"]
        assert Decimal(entries[0]["amount"]) == Decimal("500")

    def test_unknown_account_is_404(self, client: TestClient):
        assert client.get("/portfolio/nope/overview").status_code == 404
        assert client.get("/portfolio/nope/holdings").status_code == 404


class TestSecuritiesAPI:
    """Tests for /securities endpoints."""

    def test_list(self, client: TestClient, seeded):
        all_tickers = [s["ticker"] for s in client.get("/securities").json()]
        active = [s["ticker"] for s in client.get("/securities", params={"active_only": True}).json()]

        assert all_tickers == ["AAPL", "MSFT"]
        assert active == ["AAPL"]

    def test_returns_and_volatility(self, client: TestClient, seeded):
        series = client.get("/securities/AAPL/returns").json()
        vol = client.get("/securities/AAPL/volatility").json()

        assert series["ticker"] == "AAPL"
        assert [p["daily_return"] for p in series["points"]][0] is None
        assert Decimal(series["points"][1]["daily_return"]) == Decimal("0.1")
        assert Decimal(series["points"][2]["cum_return_approx"]) == Decimal("0")
        assert Decimal(vol["volatility"]) == Decimal("0.1")

    def test_unknown_security_is_404(self, client: TestClient):
        assert client.get("/securities/NOPE/returns").status_code == 404
