"""Account-level business rules: subscription limitations, free tier limits and statistics.

The rules read an account's related records through the injected async
session and compare counts against configuration. Nothing here writes to
the database.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from account_rules.core.settings import Settings, get_settings
from account_rules.models import Account, Activity, Call, Contact, Invitation, User

logger = logging.getLogger(__name__)


class AccountRulesError(Exception):
    """Base exception for account rules errors."""
    pass


class AccountNotFoundError(AccountRulesError):
    """Raised when an account cannot be found."""
    pass


def count_by_year(
    records: Iterable[Any],
    get_timestamp: Callable[[Any], datetime],
) -> Dict[int, int]:
    """
    Count records per calendar year of their timestamp.

    Args:
        records: Records to bucket, in any order
        get_timestamp: Returns the timestamp of a record

    Returns:
        Dict[int, int]: Year mapped to the number of records in that year
    """
    years: Dict[int, int] = {}
    for record in records:
        year = get_timestamp(record).year
        years[year] = years.get(year, 0) + 1
    return years


class AccountRulesService:
    """
    Business rules gating what an account may do on the free tier.

    Provides:
    - Subscription limitation checks
    - Free tier contact limit checks
    - Downgrade eligibility
    - Yearly activity and call statistics
    """

    def __init__(self, db_session: AsyncSession, settings: Optional[Settings] = None):
        """
        Initialize the AccountRulesService.

        Args:
            db_session: Async database session
            settings: Settings supplying the subscription flag and contact limit
        """
        self.db = db_session
        self.settings = settings or get_settings()

    @property
    def contact_limit(self) -> int:
        """Maximum number of contacts allowed on a free account."""
        return self.settings.number_of_allowed_contacts_free_account

    async def get_account(self, account_id: uuid.UUID) -> Account:
        """
        Get an account by ID.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        result = await self.db.execute(select(Account).where(Account.id == account_id))
        account = result.scalar_one_or_none()
        if not account:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def has_limitations(self, account: Account) -> bool:
        """Indicate whether the account is restricted by the free plan."""
        if account.has_access_to_paid_version_for_free:
            return False

        if not self.settings.requires_subscription:
            return False

        if account.is_subscribed:
            return False

        return True

    async def has_reached_contact_limit(self, account: Account) -> bool:
        """Indicate whether the account's real, active contacts fill the free tier."""
        number_of_contacts = await self._count(
            Contact, account, Contact.real_and_active()
        )
        reached = number_of_contacts >= self.contact_limit
        logger.debug(
            f"Account {account.id} has {number_of_contacts} real active contacts "
            f"(limit {self.contact_limit}, reached={reached})"
        )
        return reached

    async def can_downgrade(self, account: Account) -> bool:
        """Check whether the account satisfies every rule for moving to the free plan."""
        can_downgrade = True
        number_of_users = await self._count(User, account)
        number_pending_invitations = await self._count(Invitation, account)
        number_of_contacts = await self._count(Contact, account)

        # the account must have exactly one user
        if number_of_users != 1:
            can_downgrade = False

        # no pending invitations may remain
        if number_pending_invitations > 0:
            can_downgrade = False

        # contacts must fit within the free tier
        if number_of_contacts > self.contact_limit:
            can_downgrade = False

        logger.debug(
            f"Account {account.id} downgrade check: users={number_of_users}, "
            f"invitations={number_pending_invitations}, contacts={number_of_contacts}, "
            f"allowed={can_downgrade}"
        )
        return can_downgrade

    async def get_yearly_activities_statistics(self, account: Account) -> Dict[int, int]:
        """Get the number of activities grouped by year."""
        return await self._yearly_statistics(account, Activity.happened_at)

    async def get_yearly_call_statistics(self, account: Account) -> Dict[int, int]:
        """Get the number of calls grouped by year."""
        return await self._yearly_statistics(account, Call.called_at)

    async def _yearly_statistics(self, account: Account, timestamp_column) -> Dict[int, int]:
        """Bucket the records behind a timestamp column by year, newest first."""
        model = timestamp_column.class_
        query = (
            select(timestamp_column)
            .where(model.account_id == account.id)
            .order_by(desc(timestamp_column))
        )
        result = await self.db.execute(query)
        return count_by_year(result.scalars(), lambda timestamp: timestamp)

    async def _count(self, model, account: Account, *criteria) -> int:
        """Count rows of a model owned by the account matching extra criteria."""
        query = (
            select(func.count())
            .select_from(model)
            .where(model.account_id == account.id, *criteria)
        )
        result = await self.db.execute(query)
        return result.scalar_one()
