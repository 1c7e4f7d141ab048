# storefront/api/routers/admin_orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.responses import ok, paged
from storefront.data.database import get_db
from storefront.domain.schemas import (
    Envelope,
    ListParams,
    OrderOut,
    OrderStatus,
    OrderStatusUpdate,
    OrderSummaryOut,
    PageEnvelope,
)
from storefront.services.order_service import OrderService
from storefront.services.query_service import QueryService

router = APIRouter(prefix="/admin/orders", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=PageEnvelope[OrderSummaryOut])
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, description="Substring of the order id"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    status: OrderStatus | None = None,
    db: Session = Depends(get_db),
):
    params = ListParams(page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order)
    return paged(QueryService(db).list_orders(params, status=status))


@router.get("/{order_id}", response_model=Envelope[OrderOut])
def get_order(order_id: str, db: Session = Depends(get_db)):
    return ok(OrderService(db).get_order_admin(order_id))


@router.patch("/{order_id}/status", response_model=Envelope[OrderOut])
def update_order_status(order_id: str, payload: OrderStatusUpdate, db: Session = Depends(get_db)):
    return ok(OrderService(db).update_status(order_id, payload.status))
