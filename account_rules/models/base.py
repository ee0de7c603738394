"""Base model classes and mixins."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import declared_attr

from account_rules.core.database import Base


class TimestampMixin:
    """Mixin for adding created_at and updated_at timestamps."""

    created_at = Column(
        DateTime(timezone=True),
        default=func.now(),
        nullable=False,
        comment="Record creation timestamp"
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="Record last update timestamp"
    )


class AccountOwnedModel(Base, TimestampMixin):
    """
    Base model for records that belong to exactly one account.

    Provides the UUID primary key, the owning account foreign key and
    timestamp tracking. Users, invitations, contacts, activities and calls
    all inherit from it so account-scoped queries read the same way.
    """

    __abstract__ = True

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID"
    )

    @declared_attr
    def account_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
            comment="Owning account UUID"
        )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id}, account_id={self.account_id})>"
