# Services module
from app.services.auth_service import AuthService
from app.services.commission_service import CommissionService
from app.services.order_service import OrderService
from app.services.referral_service import ReferralService

__all__ = [
    "AuthService",
    "CommissionService",
    "OrderService",
    "ReferralService",
]
