"""User and Account domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """Owner of one or more brokerage accounts."""

    user_id: str
    username: str
    full_name: str = ""
    email: str = ""
    created_at_est: Optional[datetime] = field(default=None)


@dataclass
class Account:
    """
    Brokerage account (the unit of scope for holdings, trades and cash).

    Every account belongs to exactly one user.
    """

    account_id: str
    user_id: str
    name: str
    account_type: str = "Individual"
    is_active: bool = True
    created_at_est: Optional[datetime] = field(default=None)
