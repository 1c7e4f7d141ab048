# storefront/api/routers/admin_catalog.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_image_store, require_admin
from storefront.api.responses import ok, paged
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    DeletedOut,
    Envelope,
    ListParams,
    PageEnvelope,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from storefront.services.admin_service import AdminService
from storefront.services.image_store import ImageStore
from storefront.services.query_service import QueryService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_service(db: Session, image_store: ImageStore | None = None):
    return AdminService(db, image_store)


# categories
@router.get("/categories", response_model=Envelope[List[CategoryOut]])
def list_categories(db: Session = Depends(get_db)):
    return ok(QueryService(db).list_categories())


@router.get("/categories/{category_id}", response_model=Envelope[CategoryOut])
def get_category(category_id: str, db: Session = Depends(get_db)):
    return ok(get_service(db).get_category(category_id))


@router.post("/categories", response_model=Envelope[CategoryOut], status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    return ok(get_service(db).create_category(payload))


@router.put("/categories/{category_id}", response_model=Envelope[CategoryOut])
def update_category(category_id: str, payload: CategoryUpdate, db: Session = Depends(get_db)):
    return ok(get_service(db).update_category(category_id, payload))


@router.delete("/categories/{category_id}", response_model=Envelope[DeletedOut])
def delete_category(category_id: str, db: Session = Depends(get_db)):
    get_service(db).delete_category(category_id)
    return ok({"id": category_id})


# products
@router.get("/products", response_model=PageEnvelope[ProductOut])
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    category: str | None = Query(None, description="Category slug"),
    is_active: bool | None = Query(None, alias="isActive"),
    db: Session = Depends(get_db),
):
    params = ListParams(page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order)
    return paged(QueryService(db).list_admin_products(params, category=category, is_active=is_active))


@router.get("/products/{product_id}", response_model=Envelope[ProductOut])
def get_product(product_id: str, db: Session = Depends(get_db)):
    return ok(get_service(db).get_product(product_id))


@router.post("/products", response_model=Envelope[ProductOut], status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return ok(get_service(db).create_product(payload))


@router.put("/products/{product_id}", response_model=Envelope[ProductOut])
def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
):
    return ok(get_service(db, image_store).update_product(product_id, payload))


@router.delete("/products/{product_id}", response_model=Envelope[DeletedOut])
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
):
    get_service(db, image_store).delete_product(product_id)
    return ok({"id": product_id})
