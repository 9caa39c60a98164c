from fastapi import APIRouter, HTTPException, status

from app.api.deps import Store
from app.core.exceptions import ReferralCodeNotFoundError
from app.schemas.order import OrderCreate, OrderResponse, PayoutEntry
from app.services.order_service import OrderService

router = APIRouter(tags=["Orders"])


@router.post("/order", response_model=OrderResponse)
async def create_order(
    data: OrderCreate,
    store: Store,
):
    """
    Create an order attributed to a referral code.

    Pays level 1 to the code owner and the remaining levels up the
    owner's referral chain. Calling twice creates two orders.
    """
    try:
        result = OrderService(store).create_order(
            amount=data.amount,
            code=data.code,
            buyer_email=data.buyer_email,
        )
    except ReferralCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return OrderResponse(
        order_id=result.order.id,
        amount=result.order.amount,
        code=result.order.code,
        buyer_email=result.order.buyer_email,
        payouts=[PayoutEntry.model_validate(p) for p in result.payouts],
        total_commission=result.total_commission,
    )
