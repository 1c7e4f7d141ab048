#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.collection import CollectionModel, CollectionItemModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.wishlist_item import WishlistItemModel

__all__ = [
    "CategoryModel",
    "ProductModel",
    "CollectionModel",
    "CollectionItemModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "WishlistItemModel",
]
