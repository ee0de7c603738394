"""Pydantic schemas for API request/response validation."""

from .base import (
    BaseSchema,
    HealthCheckResponse,
    JSONAPIError,
    JSONAPIErrorResponse,
)
from .account import (
    AccountLimitationsResponse,
    AccountStatisticsResponse,
    YearlyStatisticsResponse,
)

__all__ = [
    # Base schemas
    "BaseSchema",
    "HealthCheckResponse",
    "JSONAPIError",
    "JSONAPIErrorResponse",
    # Account schemas
    "AccountLimitationsResponse",
    "AccountStatisticsResponse",
    "YearlyStatisticsResponse",
]
