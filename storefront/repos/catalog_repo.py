# storefront/repos/catalog_repo.py
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models import (
    CategoryModel,
    CollectionItemModel,
    CollectionModel,
    ProductModel,
)


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    # products
    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.slug == slug)
        ).scalar_one_or_none()

    def get_active_products(self, product_ids: Iterable[str]) -> List[ProductModel]:
        ids = list(product_ids)
        if not ids:
            return []
        return list(
            self.db.execute(
                select(ProductModel).where(
                    ProductModel.id.in_(ids),
                    ProductModel.is_active.is_(True),
                )
            ).scalars()
        )

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        return product

    # categories
    def get_category(self, category_id: str) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()

    def list_categories(self) -> List[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars())

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        return category

    # collections
    def get_active_collection(self, collection_id: str) -> CollectionModel | None:
        return self.db.execute(
            select(CollectionModel).where(
                CollectionModel.id == collection_id,
                CollectionModel.status == "active",
            )
        ).scalar_one_or_none()

    def get_collection_product_ids(self, collection_id: str) -> List[str]:
        return list(
            self.db.execute(
                select(CollectionItemModel.product_id).where(
                    CollectionItemModel.collection_id == collection_id
                )
            ).scalars()
        )

    def delete(self, obj):
        self.db.delete(obj)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, obj):
        self.db.refresh(obj)
