"""Database models for the account rules service."""

from .base import AccountOwnedModel, TimestampMixin
from .account import Account
from .user import User
from .invitation import Invitation
from .contact import Contact
from .activity import Activity
from .call import Call

__all__ = [
    "AccountOwnedModel",
    "TimestampMixin",
    "Account",
    "User",
    "Invitation",
    "Contact",
    "Activity",
    "Call",
]
