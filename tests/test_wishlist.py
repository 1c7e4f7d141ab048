from sqlalchemy import func, select

from storefront.data.models import WishlistItemModel
from storefront.repos.wishlist_repo import WishlistRepo

from tests.factories import make_product


def _product_ids(resp):
    return [i["productId"] for i in resp.json()["data"]["items"]]


def test_empty_wishlist(client, user_headers):
    resp = client.get("/wishlist", headers=user_headers)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"items": []}}


def test_wishlist_requires_token(client):
    assert client.get("/wishlist").status_code == 401


def test_adding_twice_keeps_one_row(client, user_headers, db):
    product = make_product(db, "Sneaker", "25.00")
    product_id = product.id

    first = client.post("/wishlist/items", json={"productId": product_id}, headers=user_headers)
    second = client.post("/wishlist/items", json={"productId": product_id}, headers=user_headers)

    assert first.status_code == second.status_code == 200
    assert _product_ids(second) == [product_id]
    assert second.json()["data"]["items"][0]["product"]["slug"] == "sneaker"
    assert db.scalar(select(func.count()).select_from(WishlistItemModel)) == 1


def test_unknown_or_inactive_product_is_not_found(client, user_headers, db):
    hidden = make_product(db, "Hidden", is_active=False)

    assert client.post("/wishlist/items", json={"productId": "ghost"}, headers=user_headers).status_code == 404
    assert client.post("/wishlist/items", json={"productId": hidden.id}, headers=user_headers).status_code == 404
    assert db.scalar(select(func.count()).select_from(WishlistItemModel)) == 0


def test_missing_product_id_is_invalid(client, user_headers):
    resp = client.post("/wishlist/items", json={}, headers=user_headers)

    assert resp.status_code == 400


def test_remove_is_idempotent(client, user_headers, db):
    a = make_product(db, "A")
    b = make_product(db, "B")
    client.post("/wishlist/items", json={"productId": a.id}, headers=user_headers)
    client.post("/wishlist/items", json={"productId": b.id}, headers=user_headers)

    resp = client.delete(f"/wishlist/items/{a.id}", headers=user_headers)
    again = client.delete(f"/wishlist/items/{a.id}", headers=user_headers)

    assert _product_ids(resp) == [b.id]
    assert again.status_code == 200
    assert _product_ids(again) == [b.id]


def test_wishlists_are_per_user(client, user_headers, other_headers, db):
    a = make_product(db, "A")
    client.post("/wishlist/items", json={"productId": a.id}, headers=user_headers)

    assert _product_ids(client.get("/wishlist", headers=other_headers)) == []


def test_repo_reports_whether_row_was_inserted(db):
    product_id = make_product(db, "A").id
    repo = WishlistRepo(db)

    assert repo.add_item("user-1", product_id) is True
    assert repo.add_item("user-1", product_id) is False
    repo.commit()

    assert [i.product_id for i in repo.get_items("user-1")] == [product_id]
