"""Tests for the account rules service."""

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from account_rules.core.settings import Settings
from account_rules.models import Account
from account_rules.services.account_rules import (
    AccountNotFoundError,
    AccountRulesService,
    count_by_year,
)


def rules_for(db_session, **overrides) -> AccountRulesService:
    values = {
        "environment": "test",
        "requires_subscription": True,
        "number_of_allowed_contacts_free_account": 3,
    }
    values.update(overrides)
    return AccountRulesService(db_session, Settings(**values))


class TestHasLimitations:
    """Subscription limitation rule."""

    def test_exempt_account_has_no_limitations(self):
        rules = rules_for(None)
        for status in ("none", "active", "past_due", "cancelled"):
            account = Account(
                has_access_to_paid_version_for_free=True,
                subscription_status=status,
            )
            assert rules.has_limitations(account) is False

    def test_no_limitations_when_subscriptions_not_required(self):
        rules = rules_for(None, requires_subscription=False)
        account = Account(
            has_access_to_paid_version_for_free=False,
            subscription_status="none",
        )
        assert rules.has_limitations(account) is False

    def test_subscribed_account_has_no_limitations(self):
        rules = rules_for(None)
        account = Account(
            has_access_to_paid_version_for_free=False,
            subscription_status="active",
        )
        assert rules.has_limitations(account) is False

    def test_unsubscribed_account_has_limitations(self):
        rules = rules_for(None)
        account = Account(
            has_access_to_paid_version_for_free=False,
            subscription_status="none",
        )
        assert rules.has_limitations(account) is True

    def test_expired_subscription_has_limitations(self):
        rules = rules_for(None)
        account = Account(
            has_access_to_paid_version_for_free=False,
            subscription_status="active",
            subscription_ends_at=datetime.now(timezone.utc) - timedelta(days=1),
        )
        assert account.is_subscribed is False
        assert rules.has_limitations(account) is True


class TestContactLimit:
    """Free tier contact limit rule."""

    @pytest.mark.asyncio
    async def test_reached_at_exactly_the_limit(self, db_session, factory):
        account = await factory.account()
        await factory.contacts(account, 3)

        assert await rules_for(db_session).has_reached_contact_limit(account) is True

    @pytest.mark.asyncio
    async def test_not_reached_one_below_the_limit(self, db_session, factory):
        account = await factory.account()
        await factory.contacts(account, 2)

        assert await rules_for(db_session).has_reached_contact_limit(account) is False

    @pytest.mark.asyncio
    async def test_partial_contacts_are_not_counted(self, db_session, factory):
        account = await factory.account()
        await factory.contacts(account, 2)
        await factory.contacts(account, 1, is_partial=True)

        rules = rules_for(db_session)
        assert await rules.has_reached_contact_limit(account) is False
        assert await rules_for(
            db_session, number_of_allowed_contacts_free_account=2
        ).has_reached_contact_limit(account) is True

    @pytest.mark.asyncio
    async def test_inactive_contacts_are_not_counted(self, db_session, factory):
        account = await factory.account()
        await factory.contacts(account, 2, is_active=False)
        await factory.contacts(account, 3, is_active=True)

        assert await rules_for(db_session).has_reached_contact_limit(account) is True
        assert await rules_for(
            db_session, number_of_allowed_contacts_free_account=4
        ).has_reached_contact_limit(account) is False

    @pytest.mark.asyncio
    async def test_contacts_of_other_accounts_are_not_counted(self, db_session, factory):
        account = await factory.account()
        other = await factory.account(name="Other")
        await factory.contacts(other, 5)

        assert await rules_for(db_session).has_reached_contact_limit(account) is False


class TestCanDowngrade:
    """Downgrade eligibility rule."""

    @pytest.mark.asyncio
    async def test_single_user_without_invitations_under_limit(self, db_session, factory):
        account = await factory.account()
        await factory.users(account, 1)
        await factory.contacts(account, 3)

        assert await rules_for(db_session).can_downgrade(account) is True

    @pytest.mark.asyncio
    async def test_cannot_downgrade_with_several_users(self, db_session, factory):
        account = await factory.account()
        await factory.users(account, 2)

        assert await rules_for(db_session).can_downgrade(account) is False

    @pytest.mark.asyncio
    async def test_cannot_downgrade_with_pending_invitations(self, db_session, factory):
        account = await factory.account()
        await factory.users(account, 1)
        await factory.invitations(account, 1)

        assert await rules_for(db_session).can_downgrade(account) is False

    @pytest.mark.asyncio
    async def test_cannot_downgrade_with_too_many_contacts(self, db_session, factory):
        account = await factory.account()
        await factory.users(account, 1)
        await factory.contacts(account, 4)

        assert await rules_for(db_session).can_downgrade(account) is False

    @pytest.mark.asyncio
    async def test_partial_and_inactive_contacts_count_toward_downgrade(self, db_session, factory):
        account = await factory.account()
        await factory.users(account, 1)
        await factory.contacts(account, 2)
        await factory.contacts(account, 1, is_partial=True)
        await factory.contacts(account, 1, is_active=False)

        assert await rules_for(db_session).can_downgrade(account) is False

    @pytest.mark.asyncio
    async def test_cannot_downgrade_without_users(self, db_session, factory):
        account = await factory.account()

        assert await rules_for(db_session).can_downgrade(account) is False


class TestYearlyStatistics:
    """Yearly activity and call aggregation."""

    @pytest.mark.asyncio
    async def test_yearly_activities_statistics(self, db_session, factory):
        account = await factory.account()
        await factory.activities(account, 4, datetime(2018, 3, 2))
        await factory.activities(account, 2, datetime(1992, 3, 2))

        statistics = await rules_for(db_session).get_yearly_activities_statistics(account)

        assert statistics == {1992: 2, 2018: 4}

    @pytest.mark.asyncio
    async def test_yearly_call_statistics(self, db_session, factory):
        account = await factory.account()
        (contact,) = await factory.contacts(account, 1)
        await factory.calls(contact, 4, datetime(2018, 3, 2))
        await factory.calls(contact, 2, datetime(1992, 3, 2))

        statistics = await rules_for(db_session).get_yearly_call_statistics(account)

        assert statistics == {1992: 2, 2018: 4}

    @pytest.mark.asyncio
    async def test_statistics_are_empty_without_records(self, db_session, factory):
        account = await factory.account()
        rules = rules_for(db_session)

        assert await rules.get_yearly_activities_statistics(account) == {}
        assert await rules.get_yearly_call_statistics(account) == {}

    def test_count_by_year_uses_the_timestamp_getter(self):
        records = [
            SimpleNamespace(at=datetime(2020, 12, 31, 23, 59)),
            SimpleNamespace(at=datetime(2021, 1, 1)),
            SimpleNamespace(at=datetime(2020, 1, 1)),
        ]

        assert count_by_year(records, lambda record: record.at) == {2020: 2, 2021: 1}

    def test_count_by_year_on_empty_input(self):
        assert count_by_year([], lambda record: record) == {}


@pytest.mark.asyncio
async def test_get_account_raises_for_unknown_id(db_session):
    with pytest.raises(AccountNotFoundError):
        await rules_for(db_session).get_account(uuid.uuid4())
