"""Contact model for people tracked inside an account."""

from sqlalchemy import Boolean, Column, Index, String, and_
from sqlalchemy.orm import relationship

from .base import AccountOwnedModel


class Contact(AccountOwnedModel):
    """
    A contact belonging to exactly one account.

    Contacts are either real or partial. Partial contacts are placeholders
    created implicitly (for example as a relative of a real contact) and do
    not count toward the free tier limit.
    """

    __tablename__ = "contacts"

    first_name = Column(
        String(100),
        nullable=False,
        comment="Contact's first name"
    )

    last_name = Column(
        String(100),
        nullable=True,
        comment="Contact's last name"
    )

    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        comment="False once the contact has been archived"
    )

    is_partial = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="True for placeholder contacts that are not fully formed"
    )

    __table_args__ = (
        Index("idx_contacts_account_state", "account_id", "is_partial", "is_active"),
    )

    # Relationships
    account = relationship("Account", back_populates="contacts")
    calls = relationship("Call", back_populates="contact", cascade="all, delete-orphan")

    @classmethod
    def real(cls):
        """Filter clause selecting fully-formed contacts."""
        return cls.is_partial.is_(False)

    @classmethod
    def active(cls):
        """Filter clause selecting contacts that are not archived."""
        return cls.is_active.is_(True)

    @classmethod
    def real_and_active(cls):
        """Filter clause for contacts counted against the free tier limit."""
        return and_(cls.real(), cls.active())
