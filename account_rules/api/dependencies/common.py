"""Common FastAPI dependencies."""

from uuid import UUID

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from account_rules.core.database import get_db_session
from account_rules.core.settings import Settings, get_settings
from account_rules.services.account_rules import AccountRulesService


def get_account_rules_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AccountRulesService:
    """Get account rules service instance."""
    return AccountRulesService(session, settings)


def validate_uuid_param(uuid_str: str, param_name: str = "id") -> UUID:
    """Validate and parse UUID parameter."""
    try:
        return UUID(uuid_str)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "invalid_uuid",
                "message": f"Invalid UUID format for {param_name}",
                "code": "INVALID_UUID_FORMAT"
            }
        )
