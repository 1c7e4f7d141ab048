# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.api.responses import ok
from storefront.data.database import get_db
from storefront.domain.schemas import (
    BulkAddIn,
    CartOut,
    CollectionAddIn,
    Envelope,
    ItemIn,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=Envelope[CartOut])
def get_cart(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return ok(get_service(db).get_cart(user_id))


@router.post("/items", response_model=Envelope[CartOut])
def add_item(
    payload: ItemIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return ok(get_service(db).single_add(user_id, payload.product_id, payload.quantity))


@router.post("/bulk", response_model=Envelope[CartOut])
def bulk_add(
    payload: BulkAddIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return ok(svc.bulk_add(user_id, payload.product_ids, payload.quantity, payload.origin_tag))


@router.post("/collections", response_model=Envelope[CartOut])
def add_collection(
    payload: CollectionAddIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Adds every product of a collection, tagged with the collection id."""
    return ok(get_service(db).add_collection(user_id, payload.collection_id, payload.quantity))


@router.delete("/items/{product_id}", response_model=Envelope[CartOut])
def remove_item(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return ok(get_service(db).remove_item(user_id, product_id))


@router.delete("", response_model=Envelope[CartOut])
def clear_cart(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return ok(get_service(db).clear(user_id))
