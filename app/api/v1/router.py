from fastapi import APIRouter

from app.api.v1.endpoints import (
    # Access Control
    auth,
    # Referral Tracking
    referrals,
    # Orders & Commissions
    orders,
)


# Create main API router. Routes are served from the root path.
api_router = APIRouter()

# ==================== Authentication ====================
api_router.include_router(auth.router)

# ==================== Clicks & Stats ====================
api_router.include_router(referrals.router)

# ==================== Orders ====================
api_router.include_router(orders.router)
