"""sqlite3 implementations of UserRepository and AccountRepository."""

import sqlite3
from typing import Optional

from brokerage.core.timezone import now_eastern
from brokerage.domain.models import Account, User
from brokerage.repositories.sqlite.database import SqliteDatabase, dt_from_db, dt_to_db


class SqliteUserRepository:
    """sqlite3-backed user repository."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def create(self, user: User) -> User:
        """Persist a new user."""
        created = user.created_at_est or now_eastern()
        with self._db.transaction("create_user", user_id=user.user_id) as conn:
            conn.execute(
                "INSERT INTO users (user_id, username, full_name, email, created_at_est) "
                "VALUES (?, ?, ?, ?, ?)",
                (user.user_id, user.username, user.full_name, user.email, dt_to_db(created)),
            )
        return User(
            user_id=user.user_id,
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            created_at_est=created,
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        with self._db.transaction("get_user", user_id=user_id) as conn:
            row = conn.execute("SELECT * FROM users WHERE user_id = ?", (user_id,)).fetchone()
        return self._to_domain(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        with self._db.transaction("get_user_by_username", username=username) as conn:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[User]:
        """List all users ordered by username."""
        with self._db.transaction("list_users") as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY username").fetchall()
        return [self._to_domain(r) for r in rows]

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> User:
        return User(
            user_id=row["user_id"],
            username=row["username"],
            full_name=row["full_name"] or "",
            email=row["email"] or "",
            created_at_est=dt_from_db(row["created_at_est"]),
        )


class SqliteAccountRepository:
    """sqlite3-backed account repository."""

    def __init__(self, db: SqliteDatabase):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        created = account.created_at_est or now_eastern()
        with self._db.transaction("create_account", account_id=account.account_id) as conn:
            conn.execute(
                "INSERT INTO accounts "
                "(account_id, user_id, name, account_type, is_active, created_at_est) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    account.account_id,
                    account.user_id,
                    account.name,
                    account.account_type,
                    1 if account.is_active else 0,
                    dt_to_db(created),
                ),
            )
        return Account(
            account_id=account.account_id,
            user_id=account.user_id,
            name=account.name,
            account_type=account.account_type,
            is_active=account.is_active,
            created_at_est=created,
        )

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        with self._db.transaction("get_account", account_id=account_id) as conn:
            row = conn.execute(
                "SELECT * FROM accounts WHERE account_id = ?", (account_id,)
            ).fetchone()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Account]:
        """List all accounts ordered by name."""
        with self._db.transaction("list_accounts") as conn:
            rows = conn.execute("SELECT * FROM accounts ORDER BY name").fetchall()
        return [self._to_domain(r) for r in rows]

    def list_by_user(self, user_id: str) -> list[Account]:
        """List every account owned by a user."""
        with self._db.transaction("list_accounts_by_user", user_id=user_id) as conn:
            rows = conn.execute(
                "SELECT * FROM accounts WHERE user_id = ? ORDER BY name", (user_id,)
            ).fetchall()
        return [self._to_domain(r) for r in rows]

    def set_active_for_user(self, user_id: str, is_active: bool) -> int:
        """Flip is_active on all of a user's accounts."""
        with self._db.transaction("set_accounts_active", user_id=user_id) as conn:
            cur = conn.execute(
                "UPDATE accounts SET is_active = ? WHERE user_id = ?",
                (1 if is_active else 0, user_id),
            )
            return cur.rowcount

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Account:
        return Account(
            account_id=row["account_id"],
            user_id=row["user_id"],
            name=row["name"],
            account_type=row["account_type"],
            is_active=bool(row["is_active"]),
            created_at_est=dt_from_db(row["created_at_est"]),
        )
