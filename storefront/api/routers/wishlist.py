# storefront/api/routers/wishlist.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.api.responses import ok
from storefront.data.database import get_db
from storefront.domain.schemas import Envelope, WishlistItemIn, WishlistOut
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session):
    return WishlistService(db)


@router.get("", response_model=Envelope[WishlistOut])
def get_wishlist(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return ok(get_service(db).get_wishlist(user_id))


@router.post("/items", response_model=Envelope[WishlistOut])
def add_item(
    payload: WishlistItemIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return ok(get_service(db).add(user_id, payload.product_id))


@router.delete("/items/{product_id}", response_model=Envelope[WishlistOut])
def remove_item(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return ok(get_service(db).remove(user_id, product_id))
