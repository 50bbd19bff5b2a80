"""Raw sqlite3 connection handling and schema."""

import logging
import sqlite3
from contextlib import closing, contextmanager
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from brokerage.core.exceptions import PersistenceError
from brokerage.core.timezone import to_eastern, to_storage

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id TEXT PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    full_name TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT '',
    created_at_est TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS accounts (
    account_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id),
    name TEXT NOT NULL,
    account_type TEXT NOT NULL DEFAULT 'Individual',
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at_est TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS securities (
    security_id TEXT PRIMARY KEY,
    ticker TEXT NOT NULL UNIQUE,
    company_name TEXT NOT NULL DEFAULT '',
    sector TEXT,
    listed_in TEXT,
    is_active INTEGER NOT NULL DEFAULT 1
);
CREATE TABLE IF NOT EXISTS trades (
    trade_id TEXT PRIMARY KEY,
    account_id TEXT NOT NULL REFERENCES accounts(account_id),
    security_id TEXT NOT NULL REFERENCES securities(security_id),
    side TEXT NOT NULL,
    quantity TEXT NOT NULL,
    price TEXT NOT NULL,
    trade_time_est TEXT NOT NULL,
    request_id TEXT UNIQUE
);
CREATE INDEX IF NOT EXISTS ix_trades_account_time ON trades(account_id, trade_time_est);
CREATE TABLE IF NOT EXISTS holdings (
    account_id TEXT NOT NULL REFERENCES accounts(account_id),
    security_id TEXT NOT NULL REFERENCES securities(security_id),
    quantity TEXT NOT NULL,
    avg_cost TEXT NOT NULL,
    PRIMARY KEY (account_id, security_id)
);
CREATE TABLE IF NOT EXISTS price_history (
    security_id TEXT NOT NULL REFERENCES securities(security_id),
    price_date TEXT NOT NULL,
    close_price TEXT NOT NULL,
    PRIMARY KEY (security_id, price_date)
);
CREATE TABLE IF NOT EXISTS cash_ledger (
    entry_id TEXT PRIMARY KEY,
    account_id TEXT NOT NULL REFERENCES accounts(account_id),
    txn_date TEXT NOT NULL,
    amount TEXT NOT NULL,
    type TEXT NOT NULL,
    reference TEXT
);
"""


class SqliteDatabase:
    """
    File-backed sqlite3 database.

    Each operation opens its own connection; `transaction()` commits on
    success and rolls back on any error.
    """

    def __init__(self, db_path: Union[str, Path]):
        self._db_path = str(db_path)

    @property
    def path(self) -> str:
        return self._db_path

    def init_schema(self) -> None:
        """Create tables if they do not exist."""
        with self.transaction("init_schema", db_path=self._db_path) as conn:
            conn.executescript(SCHEMA)

    @contextmanager
    def transaction(self, operation: str, **context: Any) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside one transaction; wrap sqlite3 errors."""
        try:
            with closing(sqlite3.connect(self._db_path)) as conn:
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA foreign_keys = ON")
                with conn:
                    yield conn
        except sqlite3.Error as exc:
            logger.error("sqlite3 failure in %s %s: %s", operation, context, exc)
            raise PersistenceError(operation, context, exc) from exc


def placeholders(values: list[Any]) -> str:
    """Comma-separated '?' markers for an IN clause."""
    return ", ".join("?" for _ in values)


def dec_to_db(value: Decimal) -> str:
    return str(value)


def dec_from_db(value: Optional[str]) -> Decimal:
    return Decimal(value) if value not in (None, "") else Decimal("0")


def dt_to_db(value: datetime) -> str:
    return to_storage(value).isoformat(sep=" ")


def dt_from_db(value: str) -> datetime:
    return to_eastern(datetime.fromisoformat(value))


def date_to_db(value: date) -> str:
    return value.isoformat()


def date_from_db(value: str) -> date:
    return date.fromisoformat(value)
