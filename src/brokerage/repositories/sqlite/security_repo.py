"""sqlite3 implementation of SecurityRepository."""

import sqlite3
from typing import Optional

from brokerage.domain.models import Security
from brokerage.repositories.sqlite.database import SqliteDatabase, placeholders


class SqliteSecurityRepository:
    """sqlite3-backed security master repository."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        with self._db.transaction("create_security", security_id=security.security_id) as conn:
            conn.execute(
                "INSERT INTO securities "
                "(security_id, ticker, company_name, sector, listed_in, is_active) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    security.security_id,
                    security.ticker,
                    security.company_name,
                    security.sector,
                    security.listed_in,
                    1 if security.is_active else 0,
                ),
            )
        return security

    def get_by_id(self, security_id: str) -> Optional[Security]:
        """Retrieve security by ID."""
        with self._db.transaction("get_security", security_id=security_id) as conn:
            row = conn.execute(
                "SELECT * FROM securities WHERE security_id = ?", (security_id,)
            ).fetchone()
        return self._to_domain(row) if row else None

    def get_many(self, security_ids: list[str]) -> dict[str, Security]:
        """Retrieve securities keyed by ID."""
        if not security_ids:
            return {}
        with self._db.transaction("get_securities", count=len(security_ids)) as conn:
            rows = conn.execute(
                f"SELECT * FROM securities WHERE security_id IN ({placeholders(security_ids)})",
                list(security_ids),
            ).fetchall()
        return {r["security_id"]: self._to_domain(r) for r in rows}

    def list_all(self, active_only: bool = False) -> list[Security]:
        """List securities ordered by ticker."""
        sql = "SELECT * FROM securities"
        if active_only:
            sql += " WHERE is_active = 1"
        sql += " ORDER BY ticker"
        with self._db.transaction("list_securities", active_only=active_only) as conn:
            rows = conn.execute(sql).fetchall()
        return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Security:
        return Security(
            security_id=row["security_id"],
            ticker=row["ticker"],
            company_name=row["company_name"] or "",
            sector=row["sector"],
            listed_in=row["listed_in"],
            is_active=bool(row["is_active"]),
        )
