"""Call model for phone calls logged against a contact."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship

from .base import AccountOwnedModel


class Call(AccountOwnedModel):
    """A phone call with a contact."""

    __tablename__ = "calls"

    contact_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
        comment="Contact UUID the call was made with"
    )

    content = Column(
        Text,
        nullable=True,
        comment="Notes about the call"
    )

    called_at = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the call took place"
    )

    __table_args__ = (
        Index("idx_calls_account_called_at", "account_id", "called_at"),
        Index("idx_calls_contact_id", "contact_id"),
    )

    # Relationships
    account = relationship("Account", back_populates="calls")
    contact = relationship("Contact", back_populates="calls")
