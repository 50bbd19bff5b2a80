#!/usr/bin/env python3
"""
Seed a demo brokerage database.

Creates a user with two accounts, a handful of securities, ~90 days of closing
prices, cash funding, and a stream of buys and sells placed through the order
service (so holdings are built exactly as in production).

Usage:
  BROKERAGE_DATA_DIR=/tmp/demo python scripts/generate_demo_data.py [--backend sqlite]
"""

import argparse
import random
import uuid
from datetime import datetime, timedelta
from decimal import Decimal

from brokerage.app_context import AppContext
from brokerage.config.settings import StorageBackend
from brokerage.core.exceptions import InsufficientQuantityError
from brokerage.core.timezone import EASTERN_TZ, today_eastern
from brokerage.domain.models import (
    CashEntry,
    NewOrder,
    OrderSide,
    PricePoint,
    Security,
)
from brokerage.services import NewAccount

STOCKS = [
    ("AAPL", "Apple Inc.", "Technology", 180.0),
    ("MSFT", "Microsoft Corp.", "Technology", 420.0),
    ("JPM", "JPMorgan Chase & Co.", "Financials", 195.0),
    ("XOM", "Exxon Mobil Corp.", "Energy", 110.0),
    ("JNJ", "Johnson & Johnson", "Health Care", 155.0),
]


def generate_demo_data(backend: StorageBackend, days: int = 90, seed: int = 7) -> None:
    """Populate the configured database with demo data."""
    rng = random.Random(seed)
    ctx = AppContext()
    ctx.initialize(backend=backend)
    repos = ctx.repositories

    account_ids = []
    for name, account_type in (("Main Brokerage", "Individual"), ("Retirement", "IRA")):
        summary = ctx.accounts.create_account(
            NewAccount(
                username="demo",
                account_name=name,
                full_name="Demo Investor",
                email="demo@example.com",
                account_type=account_type,
            )
        )
        account_ids.append(summary.account_id)
        print(f"✓ Account '{name}' created ({summary.account_id})")

    today = today_eastern()
    start = today - timedelta(days=days)
    closes: dict[str, dict] = {}
    for ticker, company, sector, base_price in STOCKS:
        security = repos.securities.get_by_id(ticker) or repos.securities.create(
            Security(security_id=ticker, ticker=ticker, company_name=company, sector=sector, listed_in="NYSE")
        )
        price = base_price
        points = []
        for offset in range(days + 1):
            day = start + timedelta(days=offset)
            if day.weekday() >= 5:
                continue
            price *= 1 + rng.gauss(0.0005, 0.015)
            points.append(
                PricePoint(
                    security_id=security.security_id,
                    price_date=day,
                    close_price=Decimal(str(round(price, 2))),
                )
            )
        repos.prices.add_many(points)
        closes[security.security_id] = {p.price_date: p.close_price for p in points}
    print(f"✓ {len(STOCKS)} securities with prices from {start} to {today}")

    for account_id in account_ids:
        repos.cash.add(
            CashEntry(
                entry_id=str(uuid.uuid4()),
                account_id=account_id,
                txn_date=EASTERN_TZ.localize(datetime.combine(start, datetime.min.time())),
                amount=Decimal("50000"),
                type="Deposit",
                reference="Initial funding",
            )
        )

    placed = rejected = 0
    for _ in range(40):
        account_id = rng.choice(account_ids)
        security_id = rng.choice(list(closes))
        day = rng.choice(sorted(closes[security_id]))
        side = OrderSide.BUY if rng.random() < 0.7 else OrderSide.SELL
        try:
            ctx.orders.place_order(
                NewOrder(
                    account_id=account_id,
                    security_id=security_id,
                    side=side,
                    quantity=Decimal(rng.randint(1, 20)),
                    price=closes[security_id][day],
                )
            )
            placed += 1
        except InsufficientQuantityError:
            rejected += 1
    print(f"✓ {placed} orders executed, {rejected} oversells rejected")

    for account_id in account_ids:
        overview = ctx.portfolio.get_account_overview(account_id)
        print(
            f"  {account_id}: value ${overview.total_portfolio_value:,.2f}, "
            f"unrealized ${overview.total_unrealized_pl:,.2f}, "
            f"realized ${overview.total_realized_pl:,.2f}"
        )
    ctx.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--backend",
        choices=[b.value for b in StorageBackend],
        default=StorageBackend.SQLALCHEMY.value,
    )
    parser.add_argument("--days", type=int, default=90)
    args = parser.parse_args()
    generate_demo_data(StorageBackend(args.backend), days=args.days)


if __name__ == "__main__":
    main()
