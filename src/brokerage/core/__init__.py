"""Core utilities and shared functionality."""

from brokerage.core.timezone import (
    now_eastern,
    today_eastern,
    to_eastern,
    end_of_day_eastern,
    to_storage,
    parse_date,
    EASTERN_TZ,
)
from brokerage.core.exceptions import (
    AppError,
    ValidationError,
    InvalidInputError,
    NotFoundError,
    InsufficientQuantityError,
    PersistenceError,
)

__all__ = [
    "now_eastern",
    "today_eastern",
    "to_eastern",
    "end_of_day_eastern",
    "to_storage",
    "parse_date",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "InvalidInputError",
    "NotFoundError",
    "InsufficientQuantityError",
    "PersistenceError",
]
