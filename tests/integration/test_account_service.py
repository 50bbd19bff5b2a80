"""
Integration tests for AccountService across both storage backends.
"""

import pytest

from brokerage.core.exceptions import NotFoundError, ValidationError
from brokerage.services import NewAccount


class TestCreateAccount:
    """Tests for create_account()."""

    def test_creates_user_and_account(self, account_service, repos):
        """
        GIVEN no users
        WHEN I open an account for "alice"
        THEN the user and an active account exist
        """
        summary = account_service.create_account(
            NewAccount(username="alice", account_name="Main", full_name="Alice A.", email="a@example.com")
        )

        assert summary.username == "alice"
        assert summary.name == "Main"
        assert summary.is_active is True
        assert summary.account_type == "Individual"
        assert summary.created_at_est is not None
        assert repos.users.get_by_username("alice").full_name == "Alice A."

    def test_reuses_existing_user(self, account_service, repos):
        """
        GIVEN a user "alice" with one account
        WHEN I open a second account for "alice"
        THEN no new user is created
        """
        account_service.create_account(NewAccount(username="alice", account_name="Main"))
        account_service.create_account(NewAccount(username="alice", account_name="IRA", account_type="IRA"))

        users = repos.users.list_all()

        assert len(users) == 1
        assert len(repos.accounts.list_by_user(users[0].user_id)) == 2

    @pytest.mark.parametrize("username, account_name", [("", "Main"), ("alice", "  ")])
    def test_required_fields(self, account_service, username, account_name):
        with pytest.raises(ValidationError):
            account_service.create_account(NewAccount(username=username, account_name=account_name))


class TestListAndGet:
    """Tests for list_accounts(), get_account() and list_users()."""

    def test_list_accounts_only_active(self, account_service, user_factory, account_factory):
        """
        GIVEN one active and one inactive account
        WHEN I list accounts
        THEN only the active one is returned with its username
        """
        user = user_factory("bob")
        active = account_factory(user=user, name="Active")
        account_factory(user=user, name="Closed", is_active=False)

        accounts = account_service.list_accounts()

        assert [a.account_id for a in accounts] == [active.account_id]
        assert accounts[0].username == "bob"

    def test_get_inactive_account_not_found(self, account_service, account_factory):
        """
        GIVEN an inactive account
        WHEN I get it
        THEN NotFoundError is raised
        """
        closed = account_factory(is_active=False)

        with pytest.raises(NotFoundError):
            account_service.get_account(closed.account_id)

    def test_list_users_counts(self, account_service, user_factory, account_factory):
        """
        GIVEN carol with 2 accounts (1 active) and dave with none
        WHEN I list users
        THEN counts are reported per user, ordered by username
        """
        carol = user_factory("carol")
        user_factory("dave")
        account_factory(user=carol)
        account_factory(user=carol, is_active=False)

        users = account_service.list_users()

        assert [(u.username, u.account_count, u.active_account_count) for u in users] == [
            ("carol", 2, 1),
            ("dave", 0, 0),
        ]


class TestDeleteUser:
    """Tests for delete_user()."""

    def test_deactivates_all_accounts(self, account_service, repos, user_factory, account_factory):
        """
        GIVEN a user with two active accounts
        WHEN I delete the user
        THEN both accounts are inactive and the user row remains
        """
        user = user_factory("erin")
        account_factory(user=user)
        account_factory(user=user)

        assert account_service.delete_user(user.user_id) is True

        assert all(not a.is_active for a in repos.accounts.list_by_user(user.user_id))
        assert repos.users.get_by_id(user.user_id) is not None
        assert account_service.list_accounts() == []

    def test_missing_user(self, account_service):
        assert account_service.delete_user("missing") is False
