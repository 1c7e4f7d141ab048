# storefront/services/admin_service.py
from typing import Any, Dict, Iterable, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models import CategoryModel, ProductModel
from storefront.domain.errors import (
    Conflict,
    DomainError,
    InvalidInput,
    NotFound,
    UpstreamFailure,
    classify_integrity_error,
    FOREIGN_KEY_VIOLATION,
    NOT_NULL_VIOLATION,
    UNIQUE_VIOLATION,
)
from storefront.domain.field_maps import CATEGORY_FIELD_MAP, PRODUCT_FIELD_MAP, to_storage_fields
from storefront.domain.schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from storefront.repos.catalog_repo import CatalogRepo
from storefront.services.image_store import ImageStore, normalize_image_paths
from storefront.utils.slug import generate_slug
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORY_NAME_MIN = 2
CATEGORY_NAME_MAX = 100
_OPTIONAL_CATEGORY_FIELDS = ("description", "image_url")


def _blank_to_none(fields: Dict[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    for key in keys:
        if fields.get(key) == "":
            fields[key] = None
    return fields


class AdminService:
    """
    Back-office writes for categories and products.
    Callers are already checked by the admin dependency.
    """

    def __init__(self, db: Session, image_store: ImageStore | None = None):
        self.repo = CatalogRepo(db)
        self.image_store = image_store or ImageStore()

    # =====================================================
    # helpers
    # =====================================================
    @staticmethod
    def _validate_category_name(name: Any) -> str:
        if not isinstance(name, str) or not CATEGORY_NAME_MIN <= len(name.strip()) <= CATEGORY_NAME_MAX:
            raise InvalidInput("Invalid category name provided.")
        return name.strip()

    def _commit(self, entity: str, conflict_message: str) -> None:
        try:
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise self._store_error(e, entity, conflict_message)

    @staticmethod
    def _store_error(exc: SQLAlchemyError, entity: str, conflict_message: str) -> DomainError:
        logger.error(f"Store rejected {entity} write: {exc}")
        if not isinstance(exc, IntegrityError):
            return UpstreamFailure(f"Failed to save {entity}.")

        kind = classify_integrity_error(exc)
        details = str(exc.orig)
        if kind == UNIQUE_VIOLATION:
            return Conflict(conflict_message)
        if kind == NOT_NULL_VIOLATION:
            return InvalidInput("A required field is missing or null.", details=details)
        if kind == FOREIGN_KEY_VIOLATION:
            return InvalidInput(f"The {entity} references a record that does not exist.", details=details)
        return UpstreamFailure(f"Failed to save {entity}.", details=details)

    def _cleanup_images(self, paths: List[str] | None, product_id: str) -> None:
        """Best effort, the record write has already been committed."""
        targets = normalize_image_paths(paths or [])
        if not targets:
            return
        try:
            self.image_store.delete_objects(targets)
            logger.info(f"Deleted {len(targets)} images of product {product_id}")
        except Exception as e:
            logger.warning(f"Image cleanup failed for product {product_id} ({targets}): {e}")

    # =====================================================
    # categories
    # =====================================================
    def get_category(self, category_id: str) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFound(f"Category not found with ID: {category_id}")
        return category

    def create_category(self, payload: CategoryCreate) -> CategoryModel:
        fields = to_storage_fields(payload.model_dump(by_alias=True, exclude_unset=True), CATEGORY_FIELD_MAP)
        fields["name"] = self._validate_category_name(fields.get("name"))
        fields = _blank_to_none(fields, _OPTIONAL_CATEGORY_FIELDS)

        slug = generate_slug(fields["name"])
        if not slug:
            raise InvalidInput("Invalid category name provided.")

        conflict = f'A category with the name "{fields["name"]}" already exists.'
        category = self.repo.add_category(CategoryModel(slug=slug, **fields))
        self._commit("category", conflict)

        logger.info(f"Category {category.id} '{category.name}' created")
        return category

    def update_category(self, category_id: str, payload: CategoryUpdate) -> CategoryModel:
        category = self.get_category(category_id)

        fields = to_storage_fields(payload.model_dump(by_alias=True, exclude_unset=True), CATEGORY_FIELD_MAP)
        if "name" in fields:
            fields["name"] = self._validate_category_name(fields["name"])
            fields["slug"] = generate_slug(fields["name"])
            if not fields["slug"]:
                raise InvalidInput("Invalid category name provided.")
        fields = _blank_to_none(fields, _OPTIONAL_CATEGORY_FIELDS)

        if not fields:
            return category

        for column, value in fields.items():
            setattr(category, column, value)

        conflict = f'A category with the name "{fields.get("name", category.name)}" already exists.'
        self._commit("category", conflict)

        logger.info(f"Category {category_id} updated: {sorted(fields)}")
        return category

    def delete_category(self, category_id: str) -> None:
        category = self.get_category(category_id)
        try:
            self.repo.delete(category)
            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            logger.error(f"Category {category_id} delete refused: {e}")
            raise Conflict("Category is still referenced and cannot be deleted.", details=str(e.orig))
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise self._store_error(e, "category", "")

        logger.info(f"Category {category_id} deleted")

    # =====================================================
    # products
    # =====================================================
    def get_product(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound(f"Product not found with ID: {product_id}")
        return product

    def create_product(self, payload: ProductCreate) -> ProductModel:
        if not payload.slug or not payload.slug.strip():
            raise InvalidInput("Slug is required and must be a non-empty string.")

        fields = to_storage_fields(payload.model_dump(by_alias=True, exclude_unset=True), PRODUCT_FIELD_MAP)
        fields["slug"] = fields["slug"].strip()

        conflict = f'A product with the slug "{fields["slug"]}" already exists.'
        product = self.repo.add_product(ProductModel(**fields))
        self._commit("product", conflict)

        logger.info(f"Product {product.id} '{product.slug}' created")
        return product

    def update_product(self, product_id: str, payload: ProductUpdate) -> ProductModel:
        """
        Use Case: product update with optional image cleanup.

        The row update decides the outcome, images listed in
        `imagesToDelete` are removed afterwards and failures are only logged.
        """
        product = self.get_product(product_id)

        fields = to_storage_fields(
            payload.model_dump(by_alias=True, exclude_unset=True, exclude={"images_to_delete"}),
            PRODUCT_FIELD_MAP,
        )
        if "slug" in fields:
            if not isinstance(fields["slug"], str) or not fields["slug"].strip():
                raise InvalidInput("Slug is required and must be a non-empty string.")
            fields["slug"] = fields["slug"].strip()

        for column, value in fields.items():
            setattr(product, column, value)

        conflict = f'A product with the slug "{fields.get("slug", product.slug)}" already exists.'
        self._commit("product", conflict)

        logger.info(f"Product {product_id} updated: {sorted(fields)}")

        self._cleanup_images(payload.images_to_delete, product_id)

        self.repo.refresh(product)
        return product

    def delete_product(self, product_id: str) -> None:
        product = self.get_product(product_id)
        images = list(product.images or [])

        try:
            self.repo.delete(product)
            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            logger.error(f"Product {product_id} delete refused: {e}")
            raise Conflict("Product is referenced by existing orders and cannot be deleted.")
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise self._store_error(e, "product", "")

        logger.info(f"Product {product_id} deleted")
        self._cleanup_images(images, product_id)
