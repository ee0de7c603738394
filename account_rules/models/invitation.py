"""Invitation model for pending user invitations."""

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import AccountOwnedModel


class Invitation(AccountOwnedModel):
    """
    A pending invitation for someone to join an account.

    Invitations are deleted once accepted, so every stored row is pending.
    """

    __tablename__ = "invitations"

    email = Column(
        String(255),
        nullable=False,
        comment="Email address the invitation was sent to"
    )

    invited_by_user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="User UUID who sent the invitation"
    )

    # Relationships
    account = relationship("Account", back_populates="invitations")
    invited_by = relationship("User", foreign_keys=[invited_by_user_id])
