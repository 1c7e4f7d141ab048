# storefront/api/responses.py
from typing import Any

from storefront.repos.pagination import Page


def ok(data: Any) -> dict:
    return {"success": True, "data": data}


def paged(page: Page) -> dict:
    return {
        "success": True,
        "data": page.items,
        "count": page.count,
        "current_page": page.current_page,
        "total_pages": page.total_pages,
    }
