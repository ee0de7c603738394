"""User model for people who sign in to an account."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import AccountOwnedModel


class User(AccountOwnedModel):
    """A user with access to an account."""

    __tablename__ = "users"

    email = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="Primary email address, must be unique across platform"
    )

    first_name = Column(
        String(100),
        nullable=True,
        comment="User's first name"
    )

    last_name = Column(
        String(100),
        nullable=True,
        comment="User's last name"
    )

    # Relationships
    account = relationship("Account", back_populates="users")
