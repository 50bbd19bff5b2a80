"""SQLAlchemy implementations of PriceRepository and CashRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from brokerage.core.timezone import to_eastern, to_storage
from brokerage.domain.models import CashEntry, PricePoint
from brokerage.repositories.sqlalchemy.database import storage_errors
from brokerage.repositories.sqlalchemy.orm_models import CashLedgerORM, PriceHistoryORM


class SqlAlchemyPriceRepository:
    """SQLAlchemy-backed price history repository."""

    def __init__(self, db: Session):
        self._db = db

    def add_many(self, points: list[PricePoint]) -> None:
        """Insert or replace price points."""
        with storage_errors(self._db, "add_prices", count=len(points)):
            for point in points:
                self._db.merge(
                    PriceHistoryORM(
                        security_id=point.security_id,
                        price_date=point.price_date,
                        close_price=point.close_price,
                    )
                )
            self._db.commit()

    def latest_prices(
        self,
        security_ids: list[str],
        as_of: Optional[date] = None,
    ) -> dict[str, PricePoint]:
        """Most recent price on or before as_of per security."""
        if not security_ids:
            return {}
        with storage_errors(self._db, "latest_prices", security_ids=security_ids, as_of=as_of):
            latest = self._db.query(
                PriceHistoryORM.security_id.label("security_id"),
                func.max(PriceHistoryORM.price_date).label("price_date"),
            ).filter(PriceHistoryORM.security_id.in_(security_ids))
            if as_of is not None:
                latest = latest.filter(PriceHistoryORM.price_date <= as_of)
            latest = latest.group_by(PriceHistoryORM.security_id).subquery()

            rows = (
                self._db.query(PriceHistoryORM)
                .join(
                    latest,
                    and_(
                        PriceHistoryORM.security_id == latest.c.security_id,
                        PriceHistoryORM.price_date == latest.c.price_date,
                    ),
                )
                .all()
            )
            return {r.security_id: self._price_to_domain(r) for r in rows}

    def latest_price_date(self, security_ids: list[str]) -> Optional[date]:
        """Newest price date across the given securities."""
        if not security_ids:
            return None
        with storage_errors(self._db, "latest_price_date", security_ids=security_ids):
            return (
                self._db.query(func.max(PriceHistoryORM.price_date))
                .filter(PriceHistoryORM.security_id.in_(security_ids))
                .scalar()
            )

    def list_range(
        self,
        security_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[PricePoint]:
        """Prices for a security within [start, end], ascending by date."""
        with storage_errors(
            self._db, "list_prices", security_id=security_id, start=start, end=end
        ):
            query = self._db.query(PriceHistoryORM).filter(
                PriceHistoryORM.security_id == security_id
            )
            if start is not None:
                query = query.filter(PriceHistoryORM.price_date >= start)
            if end is not None:
                query = query.filter(PriceHistoryORM.price_date <= end)
            query = query.order_by(PriceHistoryORM.price_date)
            return [self._price_to_domain(p) for p in query.all()]

    @staticmethod
    def _price_to_domain(orm: PriceHistoryORM) -> PricePoint:
        """Convert ORM price to domain model."""
        return PricePoint(
            security_id=orm.security_id,
            price_date=orm.price_date,
            close_price=Decimal(str(orm.close_price)),
        )


class SqlAlchemyCashRepository:
    """SQLAlchemy-backed cash ledger repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, entry: CashEntry) -> CashEntry:
        """Persist a cash ledger entry."""
        with storage_errors(self._db, "add_cash_entry", account_id=entry.account_id):
            orm_entry = CashLedgerORM(
                entry_id=entry.entry_id,
                account_id=entry.account_id,
                txn_date=to_storage(entry.txn_date),
                amount=entry.amount,
                type=entry.type,
                reference=entry.reference,
            )
            self._db.add(orm_entry)
            self._db.commit()
            self._db.refresh(orm_entry)
            return self._to_domain(orm_entry)

    def list_by_accounts(self, account_ids: list[str]) -> list[CashEntry]:
        """List cash entries for accounts, ordered by date."""
        if not account_ids:
            return []
        with storage_errors(self._db, "list_cash_entries", account_ids=account_ids):
            orm_entries = (
                self._db.query(CashLedgerORM)
                .filter(CashLedgerORM.account_id.in_(account_ids))
                .order_by(CashLedgerORM.txn_date)
                .all()
            )
            return [self._to_domain(e) for e in orm_entries]

    def list_recent(self, account_id: str, limit: int) -> list[CashEntry]:
        """List the newest cash entries for an account, newest first."""
        with storage_errors(self._db, "list_recent_cash", account_id=account_id):
            orm_entries = (
                self._db.query(CashLedgerORM)
                .filter(CashLedgerORM.account_id == account_id)
                .order_by(CashLedgerORM.txn_date.desc())
                .limit(limit)
                .all()
            )
            return [self._to_domain(e) for e in orm_entries]

    @staticmethod
    def _to_domain(orm: CashLedgerORM) -> CashEntry:
        """Convert ORM model to domain model."""
        return CashEntry(
            entry_id=orm.entry_id,
            account_id=orm.account_id,
            txn_date=to_eastern(orm.txn_date),
            amount=Decimal(str(orm.amount)),
            type=orm.type,
            reference=orm.reference,
        )
