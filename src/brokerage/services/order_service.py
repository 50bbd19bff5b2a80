"""Order placement."""

import logging
import threading
import uuid
from decimal import Decimal
from typing import Optional

from brokerage.core.exceptions import AppError, InvalidInputError, NotFoundError, PersistenceError
from brokerage.core.timezone import now_eastern
from brokerage.domain.models import NewOrder, Trade
from brokerage.repositories.protocols import (
    AccountRepository,
    SecurityRepository,
    TradeRepository,
)
from brokerage.services.holdings_ledger import HoldingsLedger
from brokerage.services.order_validator import OrderExecutionValidator

logger = logging.getLogger(__name__)


class KeyedLocks:
    """Registry of one lock per key, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[tuple, threading.Lock] = {}

    def get(self, key: tuple) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock


# Shared across OrderService instances so per-request services still serialize.
_position_locks = KeyedLocks()


class OrderService:
    """
    Places orders as executed trades.

    Validation, trade recording and holding merge run under a per
    (account, security) lock; the trade and its new holding are persisted in
    one transaction. A repeated request_id returns the trade already recorded
    for the same account and security; reusing it for a different position is
    rejected.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        security_repo: SecurityRepository,
        trade_repo: TradeRepository,
        holdings_ledger: HoldingsLedger,
        validator: Optional[OrderExecutionValidator] = None,
        locks: Optional[KeyedLocks] = None,
    ):
        self._account_repo = account_repo
        self._security_repo = security_repo
        self._trade_repo = trade_repo
        self._ledger = holdings_ledger
        self._validator = validator or OrderExecutionValidator(holdings_ledger)
        self._locks = locks or _position_locks

    def place_order(self, order: NewOrder) -> Trade:
        """
        Execute an order.

        Raises:
            InvalidInputError: Bad quantity or price, or request_id reused elsewhere
            NotFoundError: Unknown account or security
            InsufficientQuantityError: Sell exceeds the quantity held
        """
        existing = self._already_executed(order)
        if existing is not None:
            return existing

        if self._account_repo.get_by_id(order.account_id) is None:
            raise NotFoundError("Account", order.account_id)
        if self._security_repo.get_by_id(order.security_id) is None:
            raise NotFoundError("Security", order.security_id)

        with self._locks.get((order.account_id, order.security_id)):
            existing = self._already_executed(order)
            if existing is not None:
                return existing

            try:
                self._validator.validate(
                    order.account_id,
                    order.security_id,
                    order.side,
                    order.quantity,
                    order.price,
                )
            except AppError as exc:
                logger.warning(
                    "Rejected %s order for %s in account %s: %s",
                    order.side.value,
                    order.security_id,
                    order.account_id,
                    exc.message,
                )
                raise

            trade = Trade(
                trade_id=str(uuid.uuid4()),
                account_id=order.account_id,
                security_id=order.security_id,
                side=order.side,
                quantity=Decimal(order.quantity),
                price=Decimal(order.price),
                trade_time_est=now_eastern(),
                request_id=order.request_id,
            )
            try:
                recorded, holding = self._ledger.post(trade)
            except PersistenceError:
                # A concurrent order under another position lock may have taken the key
                existing = self._already_executed(order)
                if existing is not None:
                    return existing
                raise

        logger.info(
            "Executed %s %s x %s @ %s in account %s (trade %s, position %s)",
            recorded.side.value,
            recorded.security_id,
            recorded.quantity,
            recorded.price,
            recorded.account_id,
            recorded.trade_id,
            holding.quantity,
        )
        return recorded

    def _already_executed(self, order: NewOrder) -> Optional[Trade]:
        """Trade previously recorded under the order's request_id, if any."""
        if not order.request_id:
            return None
        existing = self._trade_repo.get_by_request_id(order.request_id)
        if existing is None:
            return None
        if (existing.account_id, existing.security_id) != (order.account_id, order.security_id):
            raise InvalidInputError(
                f"request_id {order.request_id} was already used for "
                f"{existing.security_id} in account {existing.account_id}"
            )
        logger.info("Order %s already executed as trade %s", order.request_id, existing.trade_id)
        return existing
