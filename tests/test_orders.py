from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from storefront.data.models import CartItemModel, OrderItemModel, OrderModel
from storefront.repos.order_repo import OrderRepo

from tests.factories import make_order, make_product

ADDRESS = {"fullName": "Abebe Kebede", "street": "Bole Rd 12", "city": "Addis Ababa", "country": "ET"}


def _count(db, model):
    return db.scalar(select(func.count()).select_from(model))


def test_order_from_cart_snapshots_prices(client, user_headers, db, notifications):
    a = make_product(db, "A", "10.00")
    b = make_product(db, "B", "2.50")
    client.post("/cart/items", json={"productId": a.id, "quantity": 2}, headers=user_headers)
    client.post("/cart/items", json={"productId": b.id, "quantity": 3}, headers=user_headers)

    resp = client.post("/orders", json={"shippingAddress": ADDRESS}, headers=user_headers)

    assert resp.status_code == 201
    order = resp.json()["data"]
    assert order["userId"] == "user-1"
    assert order["status"] == "created"
    assert Decimal(order["totalAmount"]) == Decimal("27.50")
    assert order["shippingAddress"]["city"] == "Addis Ababa"
    prices = {i["productId"]: (i["quantity"], Decimal(i["price"])) for i in order["items"]}
    assert prices == {a.id: (2, Decimal("10.00")), b.id: (3, Decimal("2.50"))}

    # cart is cleared by the client, not by order creation
    assert _count(db, CartItemModel) == 2
    assert notifications.sent == [("user-1", order["id"], "27.50")]


def test_explicit_items_are_merged_and_priced_from_catalog(client, user_headers, db):
    a = make_product(db, "A", "4.00")
    items = [
        {"productId": a.id, "quantity": 1, "price": "0.01"},
        {"productId": a.id, "quantity": 2},
    ]

    resp = client.post("/orders", json={"shippingAddress": ADDRESS, "items": items}, headers=user_headers)

    order = resp.json()["data"]
    assert len(order["items"]) == 1
    assert order["items"][0]["quantity"] == 3
    assert Decimal(order["totalAmount"]) == Decimal("12.00")


def test_price_change_does_not_touch_existing_order(client, user_headers, db):
    a = make_product(db, "A", "4.00")
    order_id = client.post(
        "/orders",
        json={"shippingAddress": ADDRESS, "items": [{"productId": a.id, "quantity": 1}]},
        headers=user_headers,
    ).json()["data"]["id"]

    a.price = Decimal("99.00")
    db.commit()

    order = client.get(f"/orders/{order_id}", headers=user_headers).json()["data"]
    assert Decimal(order["items"][0]["price"]) == Decimal("4.00")
    assert Decimal(order["totalAmount"]) == Decimal("4.00")


def test_empty_cart_order_is_invalid(client, user_headers, db, notifications):
    resp = client.post("/orders", json={"shippingAddress": ADDRESS}, headers=user_headers)

    assert resp.status_code == 400
    assert _count(db, OrderModel) == 0
    assert notifications.sent == []


def test_empty_item_list_is_invalid(client, user_headers):
    resp = client.post("/orders", json={"shippingAddress": ADDRESS, "items": []}, headers=user_headers)

    assert resp.status_code == 400


def test_unknown_product_is_not_found(client, user_headers, db):
    resp = client.post(
        "/orders",
        json={"shippingAddress": ADDRESS, "items": [{"productId": "ghost", "quantity": 1}]},
        headers=user_headers,
    )

    assert resp.status_code == 404
    assert _count(db, OrderModel) == 0


def test_missing_address_fields_are_invalid(client, user_headers, db):
    a = make_product(db, "A", "4.00")

    resp = client.post(
        "/orders",
        json={"shippingAddress": {"street": "x"}, "items": [{"productId": a.id, "quantity": 1}]},
        headers=user_headers,
    )

    assert resp.status_code == 400
    assert "city" in resp.json()["details"]


def test_failed_item_insert_leaves_no_header(client, user_headers, db, monkeypatch, notifications):
    a = make_product(db, "A", "4.00")

    def broken(self, items):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(OrderRepo, "add_items", broken)

    resp = client.post(
        "/orders",
        json={"shippingAddress": ADDRESS, "items": [{"productId": a.id, "quantity": 1}]},
        headers=user_headers,
    )

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Failed to create order"}
    assert _count(db, OrderModel) == 0
    assert _count(db, OrderItemModel) == 0
    assert notifications.sent == []


def test_other_users_order_is_not_found(client, user_headers, other_headers, db):
    a = make_product(db, "A", "4.00")
    order = make_order(db, "user-1", a)

    assert client.get(f"/orders/{order.id}", headers=user_headers).status_code == 200
    resp = client.get(f"/orders/{order.id}", headers=other_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Order not found"


def test_my_orders_are_paginated(client, user_headers, db):
    a = make_product(db, "A", "4.00")
    for _ in range(12):
        make_order(db, "user-1", a)
    make_order(db, "user-2", a)

    first = client.get("/orders", headers=user_headers).json()
    second = client.get("/orders?page=2", headers=user_headers).json()

    assert first["count"] == 12
    assert first["totalPages"] == 2
    assert len(first["data"]) == 10
    assert len(second["data"]) == 2
    assert {o["userId"] for o in first["data"] + second["data"]} == {"user-1"}


def test_admin_lists_and_filters_orders(client, admin_headers, db):
    a = make_product(db, "A", "4.00")
    make_order(db, "user-1", a)
    shipped = make_order(db, "user-2", a, status="processing")

    everything = client.get("/admin/orders", headers=admin_headers).json()
    processing = client.get("/admin/orders?status=processing", headers=admin_headers).json()
    by_id = client.get(f"/admin/orders?search={shipped.id[:8].upper()}", headers=admin_headers).json()

    assert everything["count"] == 2
    assert [o["id"] for o in processing["data"]] == [shipped.id]
    assert [o["id"] for o in by_id["data"]] == [shipped.id]


def test_admin_status_transitions(client, admin_headers, db):
    a = make_product(db, "A", "4.00")
    order = make_order(db, "user-1", a)
    url = f"/admin/orders/{order.id}/status"

    assert client.patch(url, json={"status": "processing"}, headers=admin_headers).json()["data"]["status"] == "processing"
    assert client.patch(url, json={"status": "processing"}, headers=admin_headers).status_code == 200
    assert client.patch(url, json={"status": "created"}, headers=admin_headers).status_code == 400
    assert client.patch(url, json={"status": "fulfilled"}, headers=admin_headers).json()["data"]["status"] == "fulfilled"
    assert client.patch(url, json={"status": "cancelled"}, headers=admin_headers).status_code == 400


def test_admin_status_rejects_unknown_values(client, admin_headers, db):
    a = make_product(db, "A", "4.00")
    order = make_order(db, "user-1", a)

    resp = client.patch(f"/admin/orders/{order.id}/status", json={"status": "lost"}, headers=admin_headers)

    assert resp.status_code == 400


def test_admin_order_detail_and_missing(client, admin_headers, db):
    a = make_product(db, "A", "4.00")
    order = make_order(db, "user-1", a, quantity=2)

    detail = client.get(f"/admin/orders/{order.id}", headers=admin_headers).json()["data"]

    assert detail["items"][0]["quantity"] == 2
    assert client.get("/admin/orders/nope", headers=admin_headers).status_code == 404


def test_non_admin_cannot_change_status(client, user_headers, db):
    a = make_product(db, "A", "4.00")
    order = make_order(db, "user-1", a)

    resp = client.patch(f"/admin/orders/{order.id}/status", json={"status": "cancelled"}, headers=user_headers)

    assert resp.status_code == 403
