"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Boolean,
    ForeignKey,
    Numeric,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from brokerage.repositories.sqlalchemy.database import Base
from brokerage.core.timezone import now_eastern, to_storage
from brokerage.domain.models.enums import OrderSide


def _now_storage():
    return to_storage(now_eastern())


class UserORM(Base):
    """SQLAlchemy model for User."""

    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    username = Column(String(100), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    created_at_est = Column(DateTime, nullable=False, default=_now_storage)

    accounts = relationship("AccountORM", back_populates="user")


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    name = Column(String(255), nullable=False)
    account_type = Column(String(50), nullable=False, default="Individual")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at_est = Column(DateTime, nullable=False, default=_now_storage)

    user = relationship("UserORM", back_populates="accounts")


class SecurityORM(Base):
    """SQLAlchemy model for Security."""

    __tablename__ = "securities"

    security_id = Column(String(36), primary_key=True)
    ticker = Column(String(20), unique=True, nullable=False)
    company_name = Column(String(255), nullable=False, default="")
    sector = Column(String(100), nullable=True)
    listed_in = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class TradeORM(Base):
    """SQLAlchemy model for Trade (append-only ledger)."""

    __tablename__ = "trades"

    trade_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    security_id = Column(String(36), ForeignKey("securities.security_id"), nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    price = Column(Numeric(precision=18, scale=4), nullable=False)
    trade_time_est = Column(DateTime, nullable=False)
    request_id = Column(String(64), nullable=True, unique=True)

    __table_args__ = (Index("ix_trades_account_time", "account_id", "trade_time_est"),)


class HoldingORM(Base):
    """SQLAlchemy model for Holding (derived position state)."""

    __tablename__ = "holdings"

    account_id = Column(String(36), ForeignKey("accounts.account_id"), primary_key=True)
    security_id = Column(String(36), ForeignKey("securities.security_id"), primary_key=True)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("0"))
    avg_cost = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("0"))


class PriceHistoryORM(Base):
    """SQLAlchemy model for daily close prices."""

    __tablename__ = "price_history"

    security_id = Column(String(36), ForeignKey("securities.security_id"), primary_key=True)
    price_date = Column(Date, primary_key=True)
    close_price = Column(Numeric(precision=18, scale=4), nullable=False)


class CashLedgerORM(Base):
    """SQLAlchemy model for cash ledger entries."""

    __tablename__ = "cash_ledger"

    entry_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    txn_date = Column(DateTime, nullable=False)
    amount = Column(Numeric(precision=18, scale=2), nullable=False)
    type = Column(String(50), nullable=False)
    reference = Column(String(255), nullable=True)
