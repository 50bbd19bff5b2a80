"""SQLAlchemy implementations of TradeRepository and HoldingRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_eastern, to_storage
from brokerage.domain.models import Holding, Trade
from brokerage.repositories.sqlalchemy.database import storage_errors
from brokerage.repositories.sqlalchemy.orm_models import HoldingORM, TradeORM


def _apply_holding_row(db: Session, holding: Holding) -> HoldingORM:
    """Stage an insert or update of a holding row (no commit)."""
    orm_holding = (
        db.query(HoldingORM)
        .filter(
            HoldingORM.account_id == holding.account_id,
            HoldingORM.security_id == holding.security_id,
        )
        .first()
    )
    if orm_holding:
        orm_holding.quantity = holding.quantity
        orm_holding.avg_cost = holding.avg_cost
    else:
        orm_holding = HoldingORM(
            account_id=holding.account_id,
            security_id=holding.security_id,
            quantity=holding.quantity,
            avg_cost=holding.avg_cost,
        )
        db.add(orm_holding)
    return orm_holding


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed trade ledger."""

    def __init__(self, db: Session):
        self._db = db

    def record_execution(self, trade: Trade, holding: Holding) -> Trade:
        """Insert the trade and upsert the holding in one commit."""
        with storage_errors(
            self._db,
            "record_execution",
            account_id=trade.account_id,
            security_id=trade.security_id,
        ):
            orm_trade = self._to_orm(trade)
            self._db.add(orm_trade)
            _apply_holding_row(self._db, holding)
            self._db.commit()
            self._db.refresh(orm_trade)
            return self._to_domain(orm_trade)

    def get_by_request_id(self, request_id: str) -> Optional[Trade]:
        """Find a trade recorded under a caller-supplied request ID."""
        with storage_errors(self._db, "get_trade_by_request", request_id=request_id):
            orm_trade = self._db.query(TradeORM).filter(
                TradeORM.request_id == request_id
            ).first()
            return self._to_domain(orm_trade) if orm_trade else None

    def list_by_accounts(
        self,
        account_ids: list[str],
        until: Optional[datetime] = None,
    ) -> list[Trade]:
        """List trades for accounts, ordered by trade time."""
        if not account_ids:
            return []
        with storage_errors(self._db, "list_trades", account_ids=account_ids):
            query = self._db.query(TradeORM).filter(TradeORM.account_id.in_(account_ids))
            if until is not None:
                query = query.filter(TradeORM.trade_time_est <= to_storage(until))
            query = query.order_by(TradeORM.trade_time_est)
            return [self._to_domain(t) for t in query.all()]

    def list_recent(self, account_id: str, limit: int) -> list[Trade]:
        """List the newest trades for an account, newest first."""
        with storage_errors(self._db, "list_recent_trades", account_id=account_id):
            orm_trades = (
                self._db.query(TradeORM)
                .filter(TradeORM.account_id == account_id)
                .order_by(TradeORM.trade_time_est.desc())
                .limit(limit)
                .all()
            )
            return [self._to_domain(t) for t in orm_trades]

    @staticmethod
    def _to_orm(trade: Trade) -> TradeORM:
        """Convert domain model to ORM model."""
        return TradeORM(
            trade_id=trade.trade_id,
            account_id=trade.account_id,
            security_id=trade.security_id,
            side=trade.side,
            quantity=trade.quantity,
            price=trade.price,
            trade_time_est=to_storage(trade.trade_time_est),
            request_id=trade.request_id,
        )

    @staticmethod
    def _to_domain(orm: TradeORM) -> Trade:
        """Convert ORM model to domain model."""
        return Trade(
            trade_id=orm.trade_id,
            account_id=orm.account_id,
            security_id=orm.security_id,
            side=orm.side,
            quantity=Decimal(str(orm.quantity)),
            price=Decimal(str(orm.price)),
            trade_time_est=to_eastern(orm.trade_time_est),
            request_id=orm.request_id,
        )


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, account_id: str, security_id: str) -> Optional[Holding]:
        """Get the holding for an (account, security) pair."""
        with storage_errors(
            self._db, "get_holding", account_id=account_id, security_id=security_id
        ):
            orm_holding = (
                self._db.query(HoldingORM)
                .filter(
                    HoldingORM.account_id == account_id,
                    HoldingORM.security_id == security_id,
                )
                .first()
            )
            return self._to_domain(orm_holding) if orm_holding else None

    def list_by_accounts(
        self,
        account_ids: list[str],
        include_zero: bool = False,
    ) -> list[Holding]:
        """List holdings for accounts."""
        if not account_ids:
            return []
        with storage_errors(self._db, "list_holdings", account_ids=account_ids):
            query = self._db.query(HoldingORM).filter(HoldingORM.account_id.in_(account_ids))
            if not include_zero:
                query = query.filter(HoldingORM.quantity != 0)
            query = query.order_by(HoldingORM.account_id, HoldingORM.security_id)
            return [self._to_domain(h) for h in query.all()]

    def upsert(self, holding: Holding) -> Holding:
        """Insert or replace a holding row."""
        with storage_errors(
            self._db,
            "upsert_holding",
            account_id=holding.account_id,
            security_id=holding.security_id,
        ):
            orm_holding = _apply_holding_row(self._db, holding)
            self._db.commit()
            self._db.refresh(orm_holding)
            return self._to_domain(orm_holding)

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            account_id=orm.account_id,
            security_id=orm.security_id,
            quantity=Decimal(str(orm.quantity)) if orm.quantity else Decimal("0"),
            avg_cost=Decimal(str(orm.avg_cost)) if orm.avg_cost else Decimal("0"),
        )
