"""Cash ledger entries and contribution classification."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.domain.models.enums import CashFlowKind

DEPOSIT_PREFIXES = ("deposit", "dividend", "credit")
WITHDRAWAL_PREFIXES = ("withdraw", "fee", "debit")


def classify_cash_type(entry_type: str) -> CashFlowKind:
    """Classify a cash ledger type by case-insensitive prefix."""
    normalized = (entry_type or "").lower()
    if normalized.startswith(DEPOSIT_PREFIXES):
        return CashFlowKind.DEPOSIT
    if normalized.startswith(WITHDRAWAL_PREFIXES):
        return CashFlowKind.WITHDRAWAL
    return CashFlowKind.OTHER


@dataclass(frozen=True)
class CashEntry:
    """
    Signed cash movement on an account.

    Read-only to the engine; owned by external ingestion.
    """

    entry_id: str
    account_id: str
    txn_date: datetime
    amount: Decimal
    type: str
    reference: Optional[str] = None

    @property
    def kind(self) -> CashFlowKind:
        return classify_cash_type(self.type)
