# storefront/repos/wishlist_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.database import new_id, utcnow
from storefront.data.models import WishlistItemModel
from storefront.repos.dialect import upsert_insert


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_items(self, user_id: str) -> List[WishlistItemModel]:
        return list(
            self.db.execute(
                select(WishlistItemModel)
                .where(WishlistItemModel.user_id == user_id)
                .options(selectinload(WishlistItemModel.product))
                .order_by(WishlistItemModel.created_at.desc(), WishlistItemModel.id)
            ).scalars()
        )

    def add_item(self, user_id: str, product_id: str) -> bool:
        """Insert-if-absent, returns False when the product was already listed."""
        stmt = upsert_insert(self.db, WishlistItemModel).values(
            id=new_id(),
            user_id=user_id,
            product_id=product_id,
            created_at=utcnow(),
        )
        res = self.db.execute(stmt.on_conflict_do_nothing(index_elements=["user_id", "product_id"]))
        return res.rowcount > 0

    def delete_item(self, user_id: str, product_id: str) -> int:
        res = self.db.execute(
            delete(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.product_id == product_id,
            )
        )
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
