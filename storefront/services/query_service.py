# storefront/services/query_service.py
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from storefront.data.models import CollectionModel, OrderModel, ProductModel
from storefront.domain.errors import NotFound
from storefront.domain.schemas import ListParams
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.pagination import Page, contains_ci, empty_page, paginate, resolve_sort
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# public sort keys -> columns, nothing else is ever ordered by
PRODUCT_SORT = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "created_at": ProductModel.created_at,
    "rating": ProductModel.rating,
    "units_sold": ProductModel.units_sold,
}
ADMIN_PRODUCT_SORT = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "created_at": ProductModel.created_at,
    "stock_quantity": ProductModel.stock_quantity,
}
COLLECTION_SORT = {
    "created_at": CollectionModel.created_at,
    "name": CollectionModel.name,
    "price": CollectionModel.price,
}
ORDER_SORT = {
    "created_at": OrderModel.created_at,
    "total_amount": OrderModel.total_amount,
    "status": OrderModel.status,
}
MY_ORDER_SORT = {
    "created_at": OrderModel.created_at,
    "total_amount": OrderModel.total_amount,
}


class QueryService:
    """Read-only listings for public and admin callers."""

    def __init__(self, db: Session):
        self.db = db
        self.catalog = CatalogRepo(db)

    def _category_id(self, slug: str) -> str | None:
        category = self.catalog.get_category_by_slug(slug)
        return category.id if category else None

    def list_public_products(
        self,
        params: ListParams,
        category: str | None = None,
        price_gte: Decimal | None = None,
        price_lte: Decimal | None = None,
        trending: bool | None = None,
        featured: bool | None = None,
        new_arrival: bool | None = None,
    ) -> Page:
        stmt = select(ProductModel).where(ProductModel.is_active.is_(True))

        if params.search:
            stmt = stmt.where(contains_ci(ProductModel.name, params.search))
        if price_gte is not None:
            stmt = stmt.where(ProductModel.price >= price_gte)
        if price_lte is not None:
            stmt = stmt.where(ProductModel.price <= price_lte)
        if trending is not None:
            stmt = stmt.where(ProductModel.is_trending.is_(trending))
        if featured is not None:
            stmt = stmt.where(ProductModel.is_featured.is_(featured))
        if new_arrival is not None:
            stmt = stmt.where(ProductModel.is_new_arrival.is_(new_arrival))

        if category:
            category_id = self._category_id(category)
            if category_id is None:
                logger.info(f"Category slug '{category}' not found, returning empty page")
                return empty_page(params.page)
            stmt = stmt.where(ProductModel.category_id == category_id)

        stmt = stmt.order_by(
            resolve_sort(PRODUCT_SORT, params.sort_by, params.sort_order, "name", "asc"),
            ProductModel.id,
        )
        return paginate(self.db, stmt, params.page, params.limit)

    def get_public_product(self, slug: str) -> ProductModel:
        product = self.catalog.get_product_by_slug(slug)
        if not product or not product.is_active:
            raise NotFound("Product not found")
        return product

    def list_categories(self):
        return self.catalog.list_categories()

    def list_public_collections(
        self,
        params: ListParams,
        price_gte: Decimal | None = None,
        price_lte: Decimal | None = None,
    ) -> Page:
        stmt = select(CollectionModel).where(CollectionModel.status == "active")

        if params.search:
            stmt = stmt.where(
                or_(
                    contains_ci(CollectionModel.name, params.search),
                    contains_ci(CollectionModel.description, params.search),
                )
            )
        if price_gte is not None:
            stmt = stmt.where(CollectionModel.price >= price_gte)
        if price_lte is not None:
            stmt = stmt.where(CollectionModel.price <= price_lte)

        stmt = stmt.order_by(
            resolve_sort(COLLECTION_SORT, params.sort_by, params.sort_order, "created_at", "desc"),
            CollectionModel.id,
        )
        return paginate(self.db, stmt, params.page, params.limit)

    # admin
    def list_admin_products(
        self,
        params: ListParams,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> Page:
        stmt = select(ProductModel)

        if params.search:
            stmt = stmt.where(contains_ci(ProductModel.name, params.search))
        if is_active is not None:
            stmt = stmt.where(ProductModel.is_active.is_(is_active))
        if category:
            category_id = self._category_id(category)
            if category_id is None:
                return empty_page(params.page)
            stmt = stmt.where(ProductModel.category_id == category_id)

        stmt = stmt.order_by(
            resolve_sort(ADMIN_PRODUCT_SORT, params.sort_by, params.sort_order, "created_at", "desc"),
            ProductModel.id,
        )
        return paginate(self.db, stmt, params.page, params.limit)

    def list_orders(self, params: ListParams, status: str | None = None, user_id: str | None = None) -> Page:
        """Admin listing when user_id is None, otherwise the caller's own orders."""
        stmt = select(OrderModel)

        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        if params.search:
            stmt = stmt.where(contains_ci(OrderModel.id, params.search))
        if status:
            stmt = stmt.where(OrderModel.status == status)

        sort_columns = ORDER_SORT if user_id is None else MY_ORDER_SORT
        stmt = stmt.order_by(
            resolve_sort(sort_columns, params.sort_by, params.sort_order, "created_at", "desc"),
            OrderModel.id,
        )
        return paginate(self.db, stmt, params.page, params.limit)
