"""Account rules API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from account_rules.api.dependencies.common import (
    get_account_rules_service,
    validate_uuid_param,
)
from account_rules.models.account import Account
from account_rules.schemas.account import (
    AccountLimitationsResponse,
    AccountStatisticsResponse,
    YearlyStatisticsResponse,
)
from account_rules.schemas.base import JSONAPIErrorResponse
from account_rules.services.account_rules import (
    AccountNotFoundError,
    AccountRulesService,
)

logger = logging.getLogger(__name__)
router = APIRouter(
    responses={
        400: {"model": JSONAPIErrorResponse},
        404: {"model": JSONAPIErrorResponse},
    }
)


async def get_account_or_404(
    account_id: str,
    service: AccountRulesService,
) -> Account:
    """Load the account named in the path or raise a 404."""
    account_uuid = validate_uuid_param(account_id, "account_id")
    try:
        return await service.get_account(account_uuid)
    except AccountNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "message": "Account not found",
                "code": "ACCOUNT_NOT_FOUND"
            }
        )


@router.get("/{account_id}/limitations", response_model=AccountLimitationsResponse)
async def get_account_limitations(
    account_id: str,
    service: AccountRulesService = Depends(get_account_rules_service),
):
    """
    Evaluate the free tier rules for an account.

    Returns whether the account is limited by the free plan, whether it
    has filled its contact allowance, and whether it may downgrade.
    """
    account = await get_account_or_404(account_id, service)

    response = AccountLimitationsResponse(
        account_id=account.id,
        has_limitations=service.has_limitations(account),
        has_reached_contact_limit=await service.has_reached_contact_limit(account),
        can_downgrade=await service.can_downgrade(account),
        contact_limit=service.contact_limit,
    )
    logger.info(
        f"Evaluated limitations for account {account.id}: "
        f"limited={response.has_limitations}, can_downgrade={response.can_downgrade}"
    )
    return response


@router.get("/{account_id}/statistics", response_model=AccountStatisticsResponse)
async def get_account_statistics(
    account_id: str,
    service: AccountRulesService = Depends(get_account_rules_service),
):
    """Get yearly activity and call counts for an account."""
    account = await get_account_or_404(account_id, service)

    return AccountStatisticsResponse(
        account_id=account.id,
        activities=await service.get_yearly_activities_statistics(account),
        calls=await service.get_yearly_call_statistics(account),
    )


@router.get("/{account_id}/statistics/activities", response_model=YearlyStatisticsResponse)
async def get_activity_statistics(
    account_id: str,
    service: AccountRulesService = Depends(get_account_rules_service),
):
    """Get the number of activities per year for an account."""
    account = await get_account_or_404(account_id, service)

    return YearlyStatisticsResponse(
        account_id=account.id,
        record_type="activities",
        years=await service.get_yearly_activities_statistics(account),
    )


@router.get("/{account_id}/statistics/calls", response_model=YearlyStatisticsResponse)
async def get_call_statistics(
    account_id: str,
    service: AccountRulesService = Depends(get_account_rules_service),
):
    """Get the number of calls per year for an account."""
    account = await get_account_or_404(account_id, service)

    return YearlyStatisticsResponse(
        account_id=account.id,
        record_type="calls",
        years=await service.get_yearly_call_statistics(account),
    )
