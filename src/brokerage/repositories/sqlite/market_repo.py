"""sqlite3 implementations of PriceRepository and CashRepository."""

import sqlite3
from datetime import date
from typing import Optional

from brokerage.domain.models import CashEntry, PricePoint
from brokerage.repositories.sqlite.database import (
    SqliteDatabase,
    date_from_db,
    date_to_db,
    dec_from_db,
    dec_to_db,
    dt_from_db,
    dt_to_db,
    placeholders,
)


class SqlitePriceRepository:
    """sqlite3-backed price history repository."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def add_many(self, points: list[PricePoint]) -> None:
        """Insert or replace price points."""
        with self._db.transaction("add_prices", count=len(points)) as conn:
            conn.executemany(
                "INSERT OR REPLACE INTO price_history (security_id, price_date, close_price) "
                "VALUES (?, ?, ?)",
                [
                    (p.security_id, date_to_db(p.price_date), dec_to_db(p.close_price))
                    for p in points
                ],
            )

    def latest_prices(
        self,
        security_ids: list[str],
        as_of: Optional[date] = None,
    ) -> dict[str, PricePoint]:
        """Most recent price on or before as_of per security."""
        if not security_ids:
            return {}
        inner = (
            "SELECT security_id, MAX(price_date) AS price_date FROM price_history "
            f"WHERE security_id IN ({placeholders(security_ids)})"
        )
        params: list = list(security_ids)
        if as_of is not None:
            inner += " AND price_date <= ?"
            params.append(date_to_db(as_of))
        inner += " GROUP BY security_id"
        sql = (
            "SELECT p.security_id, p.price_date, p.close_price FROM price_history p "
            f"JOIN ({inner}) m ON p.security_id = m.security_id AND p.price_date = m.price_date"
        )
        with self._db.transaction(
            "latest_prices", security_ids=security_ids, as_of=as_of
        ) as conn:
            rows = conn.execute(sql, params).fetchall()
        return {r["security_id"]: self._price_to_domain(r) for r in rows}

    def latest_price_date(self, security_ids: list[str]) -> Optional[date]:
        """Newest price date across the given securities."""
        if not security_ids:
            return None
        with self._db.transaction("latest_price_date", security_ids=security_ids) as conn:
            row = conn.execute(
                "SELECT MAX(price_date) AS latest FROM price_history "
                f"WHERE security_id IN ({placeholders(security_ids)})",
                list(security_ids),
            ).fetchone()
        return date_from_db(row["latest"]) if row and row["latest"] else None

    def list_range(
        self,
        security_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[PricePoint]:
        """Prices for a security within [start, end], ascending by date."""
        sql = "SELECT * FROM price_history WHERE security_id = ?"
        params: list = [security_id]
        if start is not None:
            sql += " AND price_date >= ?"
            params.append(date_to_db(start))
        if end is not None:
            sql += " AND price_date <= ?"
            params.append(date_to_db(end))
        sql += " ORDER BY price_date"
        with self._db.transaction(
            "list_prices", security_id=security_id, start=start, end=end
        ) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._price_to_domain(r) for r in rows]

    @staticmethod
    def _price_to_domain(row: sqlite3.Row) -> PricePoint:
        return PricePoint(
            security_id=row["security_id"],
            price_date=date_from_db(row["price_date"]),
            close_price=dec_from_db(row["close_price"]),
        )


class SqliteCashRepository:
    """sqlite3-backed cash ledger repository."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def add(self, entry: CashEntry) -> CashEntry:
        """Persist a cash ledger entry."""
        with self._db.transaction("add_cash_entry", account_id=entry.account_id) as conn:
            conn.execute(
                "INSERT INTO cash_ledger (entry_id, account_id, txn_date, amount, type, reference) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    entry.entry_id,
                    entry.account_id,
                    dt_to_db(entry.txn_date),
                    dec_to_db(entry.amount),
                    entry.type,
                    entry.reference,
                ),
            )
        return entry

    def list_by_accounts(self, account_ids: list[str]) -> list[CashEntry]:
        """List cash entries for accounts, ordered by date."""
        if not account_ids:
            return []
        with self._db.transaction("list_cash_entries", account_ids=account_ids) as conn:
            rows = conn.execute(
                f"SELECT * FROM cash_ledger WHERE account_id IN ({placeholders(account_ids)}) "
                "ORDER BY txn_date",
                list(account_ids),
            ).fetchall()
        return [self._to_domain(r) for r in rows]

    def list_recent(self, account_id: str, limit: int) -> list[CashEntry]:
        """List the newest cash entries for an account, newest first."""
        with self._db.transaction("list_recent_cash", account_id=account_id) as conn:
            rows = conn.execute(
                "SELECT * FROM cash_ledger WHERE account_id = ? ORDER BY txn_date DESC LIMIT ?",
                (account_id, limit),
            ).fetchall()
        return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> CashEntry:
        return CashEntry(
            entry_id=row["entry_id"],
            account_id=row["account_id"],
            txn_date=dt_from_db(row["txn_date"]),
            amount=dec_from_db(row["amount"]),
            type=row["type"],
            reference=row["reference"],
        )
