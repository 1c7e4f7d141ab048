# storefront/repos/cart_repo.py
from typing import Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.database import new_id, utcnow
from storefront.data.models import CartModel, CartItemModel
from storefront.repos.dialect import upsert_insert


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_or_create_cart(self, user_id: str) -> CartModel:
        cart = self.get_cart_by_user(user_id)
        if cart:
            return cart

        #insert-if-absent, a concurrent creator makes this a no-op
        stmt = upsert_insert(self.db, CartModel).values(
            id=new_id(),
            user_id=user_id,
            created_at=utcnow(),
        )
        self.db.execute(stmt.on_conflict_do_nothing(index_elements=["user_id"]))
        self.db.commit()

        #re-read, returns the winner's cart if we lost the race
        return self.get_cart_by_user(user_id)

    def get_cart_with_items(self, user_id: str):
        cart = self.get_cart_by_user(user_id)
        if not cart:
            return None, []
        return cart, self.get_cart_items(cart.id)

    def get_cart_items(self, cart_id: str) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .options(selectinload(CartItemModel.product))
                .order_by(CartItemModel.created_at, CartItemModel.id)
            ).scalars()
        )

    def upsert_items(self, cart_id: str, product_ids: Iterable[str], quantity: int, collection_id: str | None):
        """
        One multi-row write keyed by (cart_id, product_id).
        Existing rows get quantity and origin tag replaced, not summed.
        """
        now = utcnow()
        rows = [
            {
                "id": new_id(),
                "cart_id": cart_id,
                "product_id": pid,
                "quantity": quantity,
                "collection_id": collection_id,
                "created_at": now,
                "updated_at": now,
            }
            for pid in product_ids
        ]
        if not rows:
            return

        stmt = upsert_insert(self.db, CartItemModel).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "product_id"],
            set_={
                "quantity": stmt.excluded.quantity,
                "collection_id": stmt.excluded.collection_id,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        self.db.execute(stmt)

    def delete_cart_item(self, cart_id: str, product_id: str) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )
        return res.rowcount

    def clear_items(self, cart_id: str) -> int:
        res = self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
