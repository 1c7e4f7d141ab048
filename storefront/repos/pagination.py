# storefront/repos/pagination.py
import math
from dataclasses import dataclass
from typing import Any, List, Mapping

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


@dataclass
class Page:
    items: List[Any]
    count: int
    current_page: int
    total_pages: int


def total_pages(count: int, limit: int) -> int:
    return math.ceil(count / limit) if count else 0


def empty_page(page: int) -> Page:
    return Page(items=[], count=0, current_page=page, total_pages=0)


def resolve_sort(sort_columns: Mapping[str, Any], sort_by: str | None, sort_order: str | None, default: str, default_order: str):
    """Only whitelisted keys reach ORDER BY, anything else falls back to the default."""
    column = sort_columns.get(sort_by) if sort_by else None
    if column is None:
        column = sort_columns[default]
    order = (sort_order or "").lower()
    if order not in ("asc", "desc"):
        order = default_order
    return column.asc() if order == "asc" else column.desc()


def contains_ci(column, term: str):
    """Case-insensitive substring match, % and _ in the term are literal."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def paginate(db: Session, stmt: Select, page: int, limit: int) -> Page:
    count = db.execute(select(func.count()).select_from(stmt.order_by(None).subquery())).scalar_one()
    items = list(db.execute(stmt.offset((page - 1) * limit).limit(limit)).scalars().unique())
    return Page(items=items, count=count, current_page=page, total_pages=total_pages(count, limit))
