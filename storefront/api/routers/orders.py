# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id, get_notification_service
from storefront.api.responses import ok, paged
from storefront.data.database import get_db
from storefront.domain.schemas import (
    Envelope,
    ListParams,
    OrderCreate,
    OrderOut,
    OrderStatus,
    OrderSummaryOut,
    PageEnvelope,
)
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.query_service import QueryService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, notification_service: NotificationService | None = None):
    return OrderService(db, notification_service)


@router.post("", response_model=Envelope[OrderOut], status_code=201)
def create_order(
    payload: OrderCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
):
    """
    Places an order from the payload items or from the caller's cart.
    The cart is not cleared here, call DELETE /cart afterwards.
    """
    return ok(get_service(db, notifications).create_order(user_id, payload))


@router.get("", response_model=PageEnvelope[OrderSummaryOut])
def list_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    status: OrderStatus | None = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    params = ListParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
    return paged(QueryService(db).list_orders(params, status=status, user_id=user_id))


@router.get("/{order_id}", response_model=Envelope[OrderOut])
def get_order(
    order_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return ok(get_service(db).get_order(order_id, user_id))
