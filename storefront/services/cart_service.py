# storefront/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import InvalidInput, NotFound, UpstreamFailure
from storefront.repos.cart_repo import CartRepo
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for pid in ids:
        if pid and pid not in seen:
            seen.add(pid)
            out.append(pid)
    return out


class CartService:
    """
    Simple cqrs split for the cart domain
    commands (bulk_add, single_add, add_collection, remove_item, clear) write and then re-read
    query (get_cart) is read only
    Concurrency is left to the store's unique constraints, no app-level locks.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)

    #query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        cart, items = self.repo.get_cart_with_items(user_id)

        #no cart yet is a normal state
        if not cart:
            return {"cart_id": None, "items": [], "total": Decimal("0.00")}

        total = sum((i.product.price * i.quantity for i in items), Decimal("0.00"))

        return {
            "cart_id": cart.id,
            "items": [
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "collection_id": i.collection_id,
                    "product": {
                        "id": i.product.id,
                        "name": i.product.name,
                        "price": i.product.price,
                        "images": i.product.images or [],
                        "slug": i.product.slug,
                    },
                }
                for i in items
            ],
            "total": total,
        }

    #commands
    def bulk_add(
        self,
        user_id: str,
        product_ids: Iterable[str],
        quantity: int,
        origin_tag: str | None = None,
    ) -> Dict[str, Any]:
        if not isinstance(quantity, int) or quantity <= 0:
            raise InvalidInput("Quantity must be a positive integer")

        ids = _dedupe(product_ids)
        if not ids:
            logger.info(f"Nothing to add for user {user_id}, returning current cart")
            return self.get_cart(user_id)

        found = {p.id for p in self.catalog.get_active_products(ids)}
        missing = [pid for pid in ids if pid not in found]
        if missing:
            raise NotFound(f"Product not found: {', '.join(missing)}")

        try:
            cart = self.repo.get_or_create_cart(user_id)
            self.repo.upsert_items(cart.id, ids, quantity, origin_tag)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Cart upsert failed for user {user_id}: {e}")
            raise UpstreamFailure("Failed to update cart")

        logger.info(f"Upserted {len(ids)} items into cart {cart.id} with quantity {quantity}")

        return self.get_cart(user_id)

    def single_add(self, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        return self.bulk_add(user_id, [product_id], quantity)

    def add_collection(self, user_id: str, collection_id: str, quantity: int) -> Dict[str, Any]:
        collection = self.catalog.get_active_collection(collection_id)
        if not collection:
            raise NotFound("Collection not found")

        product_ids = self.catalog.get_collection_product_ids(collection_id)
        #inactive members are skipped, only explicit bulk ids are strict
        active = {p.id for p in self.catalog.get_active_products(product_ids)}
        skipped = len(product_ids) - len(active)
        product_ids = [pid for pid in product_ids if pid in active]
        logger.info(
            f"Adding collection {collection_id} ({len(product_ids)} products, {skipped} inactive skipped) for user {user_id}"
        )

        return self.bulk_add(user_id, product_ids, quantity, origin_tag=collection_id)

    def remove_item(self, user_id: str, product_id: str) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            return self.get_cart(user_id)

        try:
            removed = self.repo.delete_cart_item(cart.id, product_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Removing product {product_id} from cart {cart.id} failed: {e}")
            raise UpstreamFailure("Failed to update cart")

        logger.info(f"Removed product {product_id} from cart {cart.id} ({removed} rows)")
        return self.get_cart(user_id)

    def clear(self, user_id: str) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            logger.info(f"No cart to clear for user {user_id}")
            return self.get_cart(user_id)

        try:
            removed = self.repo.clear_items(cart.id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Clearing cart {cart.id} failed: {e}")
            raise UpstreamFailure("Failed to clear cart")

        logger.info(f"Cart {cart.id} cleared, {removed} items removed")
        return self.get_cart(user_id)
