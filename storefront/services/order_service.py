# storefront/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models import OrderModel, OrderItemModel
from storefront.domain.errors import InvalidInput, NotFound, UpstreamFailure
from storefront.domain.schemas import OrderCreate
from storefront.repos.cart_repo import CartRepo
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")

# created -> processing -> fulfilled, cancel allowed until fulfilled
STATUS_TRANSITIONS = {
    "created": {"processing", "cancelled"},
    "processing": {"fulfilled", "cancelled"},
    "fulfilled": set(),
    "cancelled": set(),
}


def order_to_dict(order: OrderModel, with_items: bool = True) -> Dict[str, Any]:
    data = {
        "id": order.id,
        "user_id": order.user_id,
        "shipping_address": order.shipping_address,
        "total_amount": order.total_amount,
        "status": order.status,
        "created_at": order.created_at,
    }
    if with_items:
        data["items"] = [
            {
                "id": i.id,
                "product_id": i.product_id,
                "quantity": i.quantity,
                "price": i.price,
            }
            for i in order.items
        ]
    return data


class OrderService:
    """
    Order domain, separate from CartService.
    An order is header + items written in one transaction, never a header alone.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.notification_service = notification_service or NotificationService()

    def _lines_from_cart(self, user_id: str) -> List[Tuple[str, int]]:
        cart = self.carts.get_cart_by_user(user_id)
        if not cart:
            return []
        return [(i.product_id, i.quantity) for i in self.carts.get_cart_items(cart.id)]

    @staticmethod
    def _merge_lines(lines: List[Tuple[str, int]]) -> List[Tuple[str, int]]:
        merged: Dict[str, int] = {}
        for product_id, quantity in lines:
            merged[product_id] = merged.get(product_id, 0) + quantity
        return list(merged.items())

    def create_order(self, user_id: str, payload: OrderCreate) -> Dict[str, Any]:
        """
        Use Case: place an order.

        1. items from the payload or, when absent, from the user's cart
        2. prices taken from the catalog, total computed here
        3. header + items inserted and committed together
        4. admin notification (async)

        The cart is left alone, the client clears it as a separate step.
        """
        if payload.items is None:
            lines = self._lines_from_cart(user_id)
        else:
            lines = [(i.product_id, i.quantity) for i in payload.items]
        lines = self._merge_lines(lines)

        if not lines:
            raise InvalidInput("Order must contain at least one item")

        products = {p.id: p for p in self.catalog.get_active_products(pid for pid, _ in lines)}
        missing = [pid for pid, _ in lines if pid not in products]
        if missing:
            raise NotFound(f"Product not found: {', '.join(missing)}")

        priced = [(pid, qty, products[pid].price) for pid, qty in lines]
        total = sum((price * qty for _, qty, price in priced), Decimal("0.00")).quantize(CENTS)

        try:
            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    shipping_address=payload.shipping_address.model_dump(by_alias=True, exclude_none=True),
                    total_amount=total,
                    status="created",
                )
            )
            self.repo.add_items(
                [
                    OrderItemModel(order_id=order.id, product_id=pid, quantity=qty, price=price)
                    for pid, qty, price in priced
                ]
            )
            self.repo.commit()
        except SQLAlchemyError as e:
            #no half-written orders, the header goes away with the items
            self.repo.rollback()
            logger.error(f"Order creation failed for user {user_id}, rolled back: {e}")
            raise UpstreamFailure("Failed to create order")

        logger.info(f"Order {order.id} created for user {user_id}, {len(priced)} items, total {total}")

        self.notification_service.send_order_notification(user_id, order.id, str(total))

        return order_to_dict(self.repo.get_order(order.id))

    def get_order(self, order_id: str, user_id: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        #other users' orders look the same as missing ones
        if not order or order.user_id != user_id:
            raise NotFound("Order not found")

        return order_to_dict(order)

    def get_order_admin(self, order_id: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")
        return order_to_dict(order)

    def update_status(self, order_id: str, status: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        if status == order.status:
            return order_to_dict(order)

        if status not in STATUS_TRANSITIONS.get(order.status, set()):
            raise InvalidInput(f"Cannot change order status from '{order.status}' to '{status}'")

        try:
            order = self.repo.update_order_status(order, status)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Status update failed for order {order_id}: {e}")
            raise UpstreamFailure("Failed to update order status")

        logger.info(f"Order {order_id} moved to {status}")
        return order_to_dict(order)
