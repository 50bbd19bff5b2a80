"""sqlite3 implementations of TradeRepository and HoldingRepository."""

import sqlite3
from datetime import datetime
from typing import Optional

from brokerage.domain.models import Holding, Trade
from brokerage.repositories.sqlite.database import (
    SqliteDatabase,
    dec_from_db,
    dec_to_db,
    dt_from_db,
    dt_to_db,
    placeholders,
)

_UPSERT_HOLDING = (
    "INSERT INTO holdings (account_id, security_id, quantity, avg_cost) "
    "VALUES (?, ?, ?, ?) "
    "ON CONFLICT (account_id, security_id) "
    "DO UPDATE SET quantity = excluded.quantity, avg_cost = excluded.avg_cost"
)


def _holding_params(holding: Holding) -> tuple:
    return (
        holding.account_id,
        holding.security_id,
        dec_to_db(holding.quantity),
        dec_to_db(holding.avg_cost),
    )


class SqliteTradeRepository:
    """sqlite3-backed trade ledger."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def record_execution(self, trade: Trade, holding: Holding) -> Trade:
        """Insert the trade and upsert the holding in one transaction."""
        with self._db.transaction(
            "record_execution",
            account_id=trade.account_id,
            security_id=trade.security_id,
        ) as conn:
            conn.execute(
                "INSERT INTO trades "
                "(trade_id, account_id, security_id, side, quantity, price, "
                "trade_time_est, request_id) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    trade.trade_id,
                    trade.account_id,
                    trade.security_id,
                    trade.side.value,
                    dec_to_db(trade.quantity),
                    dec_to_db(trade.price),
                    dt_to_db(trade.trade_time_est),
                    trade.request_id,
                ),
            )
            conn.execute(_UPSERT_HOLDING, _holding_params(holding))
        return trade

    def get_by_request_id(self, request_id: str) -> Optional[Trade]:
        """Find a trade recorded under a caller-supplied request ID."""
        with self._db.transaction("get_trade_by_request", request_id=request_id) as conn:
            row = conn.execute(
                "SELECT * FROM trades WHERE request_id = ?", (request_id,)
            ).fetchone()
        return self._to_domain(row) if row else None

    def list_by_accounts(
        self,
        account_ids: list[str],
        until: Optional[datetime] = None,
    ) -> list[Trade]:
        """List trades for accounts, ordered by trade time."""
        if not account_ids:
            return []
        sql = f"SELECT * FROM trades WHERE account_id IN ({placeholders(account_ids)})"
        params: list = list(account_ids)
        if until is not None:
            sql += " AND trade_time_est <= ?"
            params.append(dt_to_db(until))
        sql += " ORDER BY trade_time_est"
        with self._db.transaction("list_trades", account_ids=account_ids) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._to_domain(r) for r in rows]

    def list_recent(self, account_id: str, limit: int) -> list[Trade]:
        """List the newest trades for an account, newest first."""
        with self._db.transaction("list_recent_trades", account_id=account_id) as conn:
            rows = conn.execute(
                "SELECT * FROM trades WHERE account_id = ? "
                "ORDER BY trade_time_est DESC LIMIT ?",
                (account_id, limit),
            ).fetchall()
        return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Trade:
        return Trade(
            trade_id=row["trade_id"],
            account_id=row["account_id"],
            security_id=row["security_id"],
            side=row["side"],
            quantity=dec_from_db(row["quantity"]),
            price=dec_from_db(row["price"]),
            trade_time_est=dt_from_db(row["trade_time_est"]),
            request_id=row["request_id"],
        )


class SqliteHoldingRepository:
    """sqlite3-backed holding repository."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def get(self, account_id: str, security_id: str) -> Optional[Holding]:
        """Get the holding for an (account, security) pair."""
        with self._db.transaction(
            "get_holding", account_id=account_id, security_id=security_id
        ) as conn:
            row = conn.execute(
                "SELECT * FROM holdings WHERE account_id = ? AND security_id = ?",
                (account_id, security_id),
            ).fetchone()
        return self._to_domain(row) if row else None

    def list_by_accounts(
        self,
        account_ids: list[str],
        include_zero: bool = False,
    ) -> list[Holding]:
        """List holdings for accounts."""
        if not account_ids:
            return []
        with self._db.transaction("list_holdings", account_ids=account_ids) as conn:
            rows = conn.execute(
                f"SELECT * FROM holdings WHERE account_id IN ({placeholders(account_ids)}) "
                "ORDER BY account_id, security_id",
                list(account_ids),
            ).fetchall()
        holdings = [self._to_domain(r) for r in rows]
        # Quantities are stored as text, so zero can have several spellings
        if not include_zero:
            holdings = [h for h in holdings if h.is_open]
        return holdings

    def upsert(self, holding: Holding) -> Holding:
        """Insert or replace a holding row."""
        with self._db.transaction(
            "upsert_holding",
            account_id=holding.account_id,
            security_id=holding.security_id,
        ) as conn:
            conn.execute(_UPSERT_HOLDING, _holding_params(holding))
        return holding

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Holding:
        return Holding(
            account_id=row["account_id"],
            security_id=row["security_id"],
            quantity=dec_from_db(row["quantity"]),
            avg_cost=dec_from_db(row["avg_cost"]),
        )
