"""Query scopes for portfolio reporting."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AccountScope:
    """A single account."""

    account_id: str


@dataclass(frozen=True)
class UserScope:
    """Every account owned by a user, pooled as one."""

    user_id: str


PortfolioScope = Union[AccountScope, UserScope]
