"""
Referral API Endpoints

- Click logging (JSON and redirect link)
- Stats by code and for the current user
- Current user's referrals and commissions
"""

from typing import List
from urllib.parse import urlencode

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from app.api.deps import Store, CurrentUser
from app.config import settings
from app.core.exceptions import ReferralCodeNotFoundError
from app.schemas.referral import (
    ClickCreate,
    ClickResponse,
    ReferralStats,
    ReferralResponse,
    CommissionResponse,
)
from app.services.referral_service import ReferralService

router = APIRouter(tags=["Referrals"])


def _client_info(request: Request) -> dict:
    return {
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


# ============================================================================
# Clicks
# ============================================================================

@router.post("/click", response_model=ClickResponse)
async def record_click(
    request: Request,
    data: ClickCreate,
    store: Store,
):
    """Log a click on a referral link."""
    service = ReferralService(store)
    try:
        service.record_click(data.code, **_client_info(request))
    except ReferralCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return ClickResponse(code=data.code, clicks=service.count_clicks(data.code))


@router.get("/r/{code}", response_class=RedirectResponse)
async def follow_referral_link(
    code: str,
    request: Request,
    store: Store,
):
    """Log a click and send the visitor to the landing page with ?ref=code."""
    try:
        ReferralService(store).record_click(code, **_client_info(request))
    except ReferralCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    separator = "&" if "?" in settings.LANDING_URL else "?"
    return RedirectResponse(
        url=f"{settings.LANDING_URL}{separator}{urlencode({'ref': code})}",
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


# ============================================================================
# Stats
# ============================================================================

@router.get("/stats/{code}", response_model=ReferralStats)
async def get_code_stats(
    code: str,
    store: Store,
):
    """Clicks, orders, revenue and commissions for a referral code."""
    try:
        return ReferralStats(**ReferralService(store).get_stats(code))
    except ReferralCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("/me/stats", response_model=ReferralStats)
async def get_my_stats(
    current_user: CurrentUser,
    store: Store,
):
    """Stats for the current user's own referral code."""
    return ReferralStats(**ReferralService(store).get_stats(current_user.code))


# ============================================================================
# Current user's network
# ============================================================================

@router.get("/me/referrals", response_model=List[ReferralResponse])
async def get_my_referrals(
    current_user: CurrentUser,
    store: Store,
):
    """Users who signed up with the current user's code."""
    referrals = ReferralService(store).list_referrals(current_user)
    return [ReferralResponse.model_validate(u) for u in referrals]


@router.get("/me/commissions", response_model=List[CommissionResponse])
async def get_my_commissions(
    current_user: CurrentUser,
    store: Store,
):
    """Every commission the current user has earned."""
    commissions = ReferralService(store).list_commissions(current_user)
    return [CommissionResponse.model_validate(c) for c in commissions]
