"""Holding model (derived per account/security state)."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Holding:
    """
    Position in one security within one account.

    IMPORTANT: Never edit directly; only HoldingsLedger produces new holdings
    by applying trades. A zero quantity marks a retired position.
    """

    account_id: str
    security_id: str
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_cost: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def is_open(self) -> bool:
        return self.quantity != Decimal("0")

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.avg_cost
