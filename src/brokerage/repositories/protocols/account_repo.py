"""User and account repository protocols."""

from typing import Protocol, Optional

from brokerage.domain.models import Account, User


class UserRepository(Protocol):
    """Interface for user data access."""

    def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        ...

    def list_all(self) -> list[User]:
        """List all users ordered by username."""
        ...


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts ordered by name."""
        ...

    def list_by_user(self, user_id: str) -> list[Account]:
        """List every account owned by a user."""
        ...

    def set_active_for_user(self, user_id: str, is_active: bool) -> int:
        """Flip is_active on all of a user's accounts; returns rows touched."""
        ...
