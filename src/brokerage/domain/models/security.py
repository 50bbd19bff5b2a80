"""Security master data."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Security:
    """A tradable instrument."""

    security_id: str
    ticker: str
    company_name: str = ""
    sector: Optional[str] = None
    listed_in: Optional[str] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        self.ticker = self.ticker.strip().upper()
