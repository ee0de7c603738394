"""Account rules response schemas."""

from typing import Dict
from uuid import UUID

from pydantic import Field, computed_field

from .base import BaseSchema


class AccountLimitationsResponse(BaseSchema):
    """Free tier rule evaluation for an account."""

    account_id: UUID = Field(description="Account identifier")
    has_limitations: bool = Field(
        description="True if the account is restricted by the free plan"
    )
    has_reached_contact_limit: bool = Field(
        description="True if real, active contacts fill the free tier"
    )
    can_downgrade: bool = Field(
        description="True if the account may move to the free plan"
    )
    contact_limit: int = Field(
        ge=0, description="Contacts allowed on a free account"
    )


class YearlyStatisticsResponse(BaseSchema):
    """Yearly counts for a single record type."""

    account_id: UUID = Field(description="Account identifier")
    record_type: str = Field(description="Record type: activities or calls")
    years: Dict[int, int] = Field(description="Number of records per year")

    @computed_field
    @property
    def total(self) -> int:
        """Total number of records across all years."""
        return sum(self.years.values())


class AccountStatisticsResponse(BaseSchema):
    """Yearly activity and call counts for an account."""

    account_id: UUID = Field(description="Account identifier")
    activities: Dict[int, int] = Field(description="Number of activities per year")
    calls: Dict[int, int] = Field(description="Number of calls per year")
