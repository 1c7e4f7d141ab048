# storefront/services/wishlist_service.py
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import NotFound, UpstreamFailure
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    """
    Per-user product set. Adding a listed product again is a success,
    removing an unlisted one too.
    """

    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.catalog = CatalogRepo(db)

    def get_wishlist(self, user_id: str) -> Dict[str, Any]:
        items = self.repo.get_items(user_id)
        return {
            "items": [
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "created_at": i.created_at,
                    "product": {
                        "id": i.product.id,
                        "name": i.product.name,
                        "price": i.product.price,
                        "images": i.product.images or [],
                        "slug": i.product.slug,
                    },
                }
                for i in items
            ]
        }

    def add(self, user_id: str, product_id: str) -> Dict[str, Any]:
        if not self.catalog.get_active_products([product_id]):
            raise NotFound(f"Product not found: {product_id}")

        try:
            added = self.repo.add_item(user_id, product_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Wishlist add failed for user {user_id}: {e}")
            raise UpstreamFailure("Failed to update wishlist")

        if added:
            logger.info(f"Product {product_id} added to wishlist of user {user_id}")
        else:
            logger.info(f"Product {product_id} already in wishlist of user {user_id}")
        return self.get_wishlist(user_id)

    def remove(self, user_id: str, product_id: str) -> Dict[str, Any]:
        try:
            removed = self.repo.delete_item(user_id, product_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Wishlist remove failed for user {user_id}: {e}")
            raise UpstreamFailure("Failed to update wishlist")

        logger.info(f"Removed product {product_id} from wishlist of user {user_id} ({removed} rows)")
        return self.get_wishlist(user_id)
