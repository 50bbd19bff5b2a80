"""Account and user directory."""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from brokerage.core.exceptions import NotFoundError, ValidationError
from brokerage.core.timezone import now_eastern
from brokerage.domain.models import Account, User
from brokerage.domain.views import AccountSummaryView, UserSummaryView
from brokerage.repositories.protocols import AccountRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class NewAccount:
    """Input data for opening an account (and its user, when new)."""

    username: str
    account_name: str
    full_name: str = ""
    email: str = ""
    account_type: str = "Individual"


class AccountService:
    """Lists, opens and deactivates accounts."""

    def __init__(
        self,
        user_repo: UserRepository,
        account_repo: AccountRepository,
    ):
        self._user_repo = user_repo
        self._account_repo = account_repo

    def list_accounts(self) -> list[AccountSummaryView]:
        """Active accounts ordered by owner then account."""
        users = {u.user_id: u for u in self._user_repo.list_all()}
        accounts = [a for a in self._account_repo.list_all() if a.is_active]
        accounts.sort(key=lambda a: (a.user_id, a.account_id))
        return [self._to_summary(a, users.get(a.user_id)) for a in accounts]

    def get_account(self, account_id: str) -> AccountSummaryView:
        """Get an active account."""
        account = self._account_repo.get_by_id(account_id)
        if account is None or not account.is_active:
            raise NotFoundError("Account", account_id)
        return self._to_summary(account, self._user_repo.get_by_id(account.user_id))

    def create_account(self, data: NewAccount) -> AccountSummaryView:
        """
        Open an account for a user.

        The user is looked up by username and created when missing.
        """
        username = (data.username or "").strip()
        account_name = (data.account_name or "").strip()
        if not username:
            raise ValidationError("username is required")
        if not account_name:
            raise ValidationError("account_name is required")

        user = self._user_repo.get_by_username(username)
        if user is None:
            user = self._user_repo.create(
                User(
                    user_id=str(uuid.uuid4()),
                    username=username,
                    full_name=data.full_name,
                    email=data.email,
                    created_at_est=now_eastern(),
                )
            )
            logger.info("Created user %s (%s)", user.username, user.user_id)

        account = self._account_repo.create(
            Account(
                account_id=str(uuid.uuid4()),
                user_id=user.user_id,
                name=account_name,
                account_type=data.account_type or "Individual",
                is_active=True,
                created_at_est=now_eastern(),
            )
        )
        logger.info("Opened account %s for user %s", account.account_id, user.username)
        return self._to_summary(account, user)

    def list_users(self) -> list[UserSummaryView]:
        """Users ordered by username, with total and active account counts."""
        counts: dict[str, list[int]] = {}
        for account in self._account_repo.list_all():
            total_active = counts.setdefault(account.user_id, [0, 0])
            total_active[0] += 1
            if account.is_active:
                total_active[1] += 1

        users = sorted(self._user_repo.list_all(), key=lambda u: u.username)
        return [
            UserSummaryView(
                user_id=u.user_id,
                username=u.username,
                full_name=u.full_name,
                email=u.email,
                account_count=counts.get(u.user_id, [0, 0])[0],
                active_account_count=counts.get(u.user_id, [0, 0])[1],
            )
            for u in users
        ]

    def delete_user(self, user_id: str) -> bool:
        """
        Deactivate every account a user owns.

        The user row itself is kept. Returns False when the user does not exist.
        """
        if self._user_repo.get_by_id(user_id) is None:
            return False
        changed = self._account_repo.set_active_for_user(user_id, False)
        logger.info("Deactivated %d account(s) for user %s", changed, user_id)
        return True

    @staticmethod
    def _to_summary(account: Account, user: Optional[User]) -> AccountSummaryView:
        return AccountSummaryView(
            account_id=account.account_id,
            name=account.name,
            username=user.username if user else "",
            account_type=account.account_type,
            is_active=account.is_active,
            created_at_est=account.created_at_est,
        )
