"""SQLAlchemy implementations of UserRepository and AccountRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_eastern, to_storage, now_eastern
from brokerage.domain.models import Account, User
from brokerage.repositories.sqlalchemy.database import storage_errors
from brokerage.repositories.sqlalchemy.orm_models import AccountORM, UserORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed user repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, user: User) -> User:
        """Persist a new user."""
        with storage_errors(self._db, "create_user", user_id=user.user_id):
            orm_user = UserORM(
                user_id=user.user_id,
                username=user.username,
                full_name=user.full_name,
                email=user.email,
                created_at_est=to_storage(user.created_at_est or now_eastern()),
            )
            self._db.add(orm_user)
            self._db.commit()
            self._db.refresh(orm_user)
            return self._to_domain(orm_user)

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        with storage_errors(self._db, "get_user", user_id=user_id):
            orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
            return self._to_domain(orm_user) if orm_user else None

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        with storage_errors(self._db, "get_user_by_username", username=username):
            orm_user = self._db.query(UserORM).filter(UserORM.username == username).first()
            return self._to_domain(orm_user) if orm_user else None

    def list_all(self) -> list[User]:
        """List all users ordered by username."""
        with storage_errors(self._db, "list_users"):
            orm_users = self._db.query(UserORM).order_by(UserORM.username).all()
            return [self._to_domain(u) for u in orm_users]

    @staticmethod
    def _to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            username=orm.username,
            full_name=orm.full_name or "",
            email=orm.email or "",
            created_at_est=to_eastern(orm.created_at_est) if orm.created_at_est else None,
        )


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        with storage_errors(self._db, "create_account", account_id=account.account_id):
            orm_account = AccountORM(
                account_id=account.account_id,
                user_id=account.user_id,
                name=account.name,
                account_type=account.account_type,
                is_active=account.is_active,
                created_at_est=to_storage(account.created_at_est or now_eastern()),
            )
            self._db.add(orm_account)
            self._db.commit()
            self._db.refresh(orm_account)
            return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        with storage_errors(self._db, "get_account", account_id=account_id):
            orm_account = self._db.query(AccountORM).filter(
                AccountORM.account_id == account_id
            ).first()
            return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts ordered by name."""
        with storage_errors(self._db, "list_accounts"):
            orm_accounts = self._db.query(AccountORM).order_by(AccountORM.name).all()
            return [self._to_domain(a) for a in orm_accounts]

    def list_by_user(self, user_id: str) -> list[Account]:
        """List every account owned by a user."""
        with storage_errors(self._db, "list_accounts_by_user", user_id=user_id):
            orm_accounts = (
                self._db.query(AccountORM)
                .filter(AccountORM.user_id == user_id)
                .order_by(AccountORM.name)
                .all()
            )
            return [self._to_domain(a) for a in orm_accounts]

    def set_active_for_user(self, user_id: str, is_active: bool) -> int:
        """Flip is_active on all of a user's accounts."""
        with storage_errors(self._db, "set_accounts_active", user_id=user_id):
            touched = (
                self._db.query(AccountORM)
                .filter(AccountORM.user_id == user_id)
                .update({AccountORM.is_active: is_active}, synchronize_session=False)
            )
            self._db.commit()
            return touched

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            user_id=orm.user_id,
            name=orm.name,
            account_type=orm.account_type,
            is_active=bool(orm.is_active),
            created_at_est=to_eastern(orm.created_at_est) if orm.created_at_est else None,
        )
