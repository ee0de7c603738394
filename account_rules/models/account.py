"""Account model for subscription state and free tier limits."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Index, String, Uuid
)
from sqlalchemy.orm import relationship

from .base import TimestampMixin
from account_rules.core.database import Base


SUBSCRIPTION_STATUSES = ("none", "active", "past_due", "cancelled")

_SUBSCRIPTION_STATUS_CHECK = (
    "subscription_status IN ("
    + ", ".join(f"'{s}'" for s in SUBSCRIPTION_STATUSES)
    + ")"
)


class Account(Base, TimestampMixin):
    """
    Account model representing the owner of a personal CRM.

    Every user, invitation, contact, activity and call belongs to one
    account. The account carries the subscription state that decides
    whether free tier limitations apply.

    Key Features:
    - Subscription status lifecycle (none, active, past_due, cancelled)
    - Exemption flag granting the paid version for free
    - Owned collections queried by the account rules service
    """

    __tablename__ = "accounts"

    # Core Identity Fields
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID for account identity"
    )

    name = Column(
        String(255),
        nullable=True,
        comment="Display name of the account"
    )

    # Subscription Fields
    has_access_to_paid_version_for_free = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="True if the account is exempt from the subscription requirement"
    )

    subscription_status = Column(
        String(20),
        nullable=False,
        default="none",
        comment="Subscription status: none, active, past_due, cancelled"
    )

    subscription_plan = Column(
        String(100),
        nullable=True,
        comment="Name of the subscribed plan, if any"
    )

    subscription_ends_at = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="End of the current subscription period (null for open ended)"
    )

    __table_args__ = (
        CheckConstraint(
            _SUBSCRIPTION_STATUS_CHECK,
            name="valid_subscription_status"
        ),
        Index("idx_accounts_subscription_status", "subscription_status"),
    )

    # Relationships
    users = relationship("User", back_populates="account", cascade="all, delete-orphan")
    invitations = relationship("Invitation", back_populates="account", cascade="all, delete-orphan")
    contacts = relationship("Contact", back_populates="account", cascade="all, delete-orphan")
    activities = relationship("Activity", back_populates="account", cascade="all, delete-orphan")
    calls = relationship("Call", back_populates="account", cascade="all, delete-orphan")

    @property
    def is_subscribed(self) -> bool:
        """Check if the account holds a current paid subscription."""
        if self.subscription_status != "active":
            return False
        if self.subscription_ends_at is None:
            return True
        ends_at = self.subscription_ends_at
        if ends_at.tzinfo is None:
            ends_at = ends_at.replace(tzinfo=timezone.utc)
        return ends_at > datetime.now(timezone.utc)

    def __repr__(self) -> str:
        """String representation of the account."""
        return f"<Account(id={self.id}, subscription_status='{self.subscription_status}')>"
