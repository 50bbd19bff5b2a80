"""Security master repository protocol."""

from typing import Protocol, Optional

from brokerage.domain.models import Security


class SecurityRepository(Protocol):
    """Interface for security master data access."""

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        ...

    def get_by_id(self, security_id: str) -> Optional[Security]:
        """Retrieve security by ID."""
        ...

    def get_many(self, security_ids: list[str]) -> dict[str, Security]:
        """Retrieve securities keyed by ID; unknown IDs are omitted."""
        ...

    def list_all(self, active_only: bool = False) -> list[Security]:
        """List securities ordered by ticker."""
        ...
