# storefront/api/routers/catalog.py
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.responses import ok, paged
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CategoryOut,
    CollectionOut,
    Envelope,
    ListParams,
    PageEnvelope,
    ProductOut,
)
from storefront.services.query_service import QueryService

router = APIRouter(tags=["catalog"])

MAX_LIMIT = 100


def get_service(db: Session):
    return QueryService(db)


@router.get("/products", response_model=PageEnvelope[ProductOut])
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=MAX_LIMIT),
    search: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    category: str | None = Query(None, description="Category slug"),
    price_gte: Decimal | None = None,
    price_lte: Decimal | None = None,
    trending: bool | None = None,
    featured: bool | None = None,
    new_arrival: bool | None = Query(None, alias="newArrival"),
    db: Session = Depends(get_db),
):
    params = ListParams(page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order)
    result = get_service(db).list_public_products(
        params,
        category=category,
        price_gte=price_gte,
        price_lte=price_lte,
        trending=trending,
        featured=featured,
        new_arrival=new_arrival,
    )
    return paged(result)


@router.get("/products/{slug}", response_model=Envelope[ProductOut])
def get_product(slug: str, db: Session = Depends(get_db)):
    return ok(get_service(db).get_public_product(slug))


@router.get("/categories", response_model=Envelope[List[CategoryOut]])
def list_categories(db: Session = Depends(get_db)):
    return ok(get_service(db).list_categories())


@router.get("/collections", response_model=PageEnvelope[CollectionOut])
def list_collections(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_LIMIT),
    search: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    price_gte: Decimal | None = None,
    price_lte: Decimal | None = None,
    db: Session = Depends(get_db),
):
    params = ListParams(page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order)
    return paged(get_service(db).list_public_collections(params, price_gte=price_gte, price_lte=price_lte))
