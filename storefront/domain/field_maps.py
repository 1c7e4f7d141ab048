# storefront/domain/field_maps.py
"""
Public (camelCase) payload names -> storage column names.

Each table is the single place where an entity's wire names are translated,
keys missing from a table are not writable through the API.
"""
from typing import Any, Dict, Mapping

PRODUCT_FIELD_MAP: Dict[str, str] = {
    "name": "name",
    "slug": "slug",
    "description": "description",
    "price": "price",
    "originalPrice": "original_price",
    "stockQuantity": "stock_quantity",
    "categoryId": "category_id",
    "isActive": "is_active",
    "images": "images",
    "isTrending": "is_trending",
    "isFeatured": "is_featured",
    "isNewArrival": "is_new_arrival",
    "rating": "rating",
    "reviewCount": "review_count",
    "sellerName": "seller_name",
    "sellerLocation": "seller_location",
    "unitsSold": "units_sold",
}

CATEGORY_FIELD_MAP: Dict[str, str] = {
    "name": "name",
    "description": "description",
    "imageUrl": "image_url",
}


def to_storage_fields(payload: Mapping[str, Any], field_map: Mapping[str, str]) -> Dict[str, Any]:
    return {field_map[key]: value for key, value in payload.items() if key in field_map}
