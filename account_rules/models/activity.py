"""Activity model for things that happened with contacts."""

from sqlalchemy import Column, DateTime, Index, Text
from sqlalchemy.orm import relationship

from .base import AccountOwnedModel


class Activity(AccountOwnedModel):
    """An activity logged on an account."""

    __tablename__ = "activities"

    summary = Column(
        Text,
        nullable=True,
        comment="Short description of the activity"
    )

    happened_at = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the activity took place"
    )

    __table_args__ = (
        Index("idx_activities_account_happened_at", "account_id", "happened_at"),
    )

    # Relationships
    account = relationship("Account", back_populates="activities")
