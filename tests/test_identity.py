import pytest
import requests

from storefront.api.deps import extract_bearer
from storefront.services.identity_client import IdentityClient

from tests.conftest import ADMIN_TOKEN


class _Response:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Bearer abc", "abc"),
        ("bearer  abc ", "abc"),
        ("Basic abc", None),
        ("Bearer", None),
        ("Bearer   ", None),
    ],
)
def test_extract_bearer(header, expected):
    assert extract_bearer(header) == expected


def test_missing_header_is_unauthenticated(client):
    resp = client.get("/cart")

    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Missing Authorization header"}


def test_malformed_header_is_unauthenticated(client):
    resp = client.get("/cart", headers={"Authorization": "Token user-token"})

    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_unknown_token_is_unauthenticated(client):
    resp = client.get("/cart", headers={"Authorization": "Bearer nope"})

    assert resp.status_code == 401
    assert resp.json()["error"] == "Authentication failed"


def test_non_admin_is_forbidden(client, user_headers):
    resp = client.get("/admin/categories", headers=user_headers)

    assert resp.status_code == 403
    assert resp.json() == {"success": False, "error": "Admin privileges required"}


def test_admin_route_requires_token(client):
    assert client.get("/admin/orders").status_code == 401


def test_admin_is_allowed_and_token_checked_once(client, admin_headers, identity):
    resp = client.get("/admin/categories", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": []}
    assert identity.verify_calls == 1


def test_admin_predicate_failure_is_upstream_error(client, admin_headers, identity):
    identity.admin_error = requests.ConnectionError("down")

    resp = client.get("/admin/categories", headers=admin_headers)

    assert resp.status_code == 500
    assert resp.json()["success"] is False


def test_public_routes_need_no_token(client):
    assert client.get("/products").status_code == 200
    assert client.get("/categories").status_code == 200


def test_verify_token_returns_user_id(monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append((url, headers))
        return _Response(200, {"id": "user-9", "email": "x@example.com"})

    monkeypatch.setattr(requests, "get", fake_get)
    client = IdentityClient(base_url="http://auth.test/", api_key="key")

    assert client.verify_token(ADMIN_TOKEN) == "user-9"
    assert calls == [("http://auth.test/user", {"apikey": "key", "Authorization": f"Bearer {ADMIN_TOKEN}"})]


@pytest.mark.parametrize("response", [_Response(401, {"msg": "bad jwt"}), _Response(200, None), _Response(200, {"email": "x"})])
def test_verify_token_rejections_return_none(monkeypatch, response):
    monkeypatch.setattr(requests, "get", lambda *a, **kw: response)

    assert IdentityClient(base_url="http://auth.test").verify_token("t") is None


def test_is_admin_reads_boolean_body(monkeypatch):
    sent = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        sent.update(url=url, json=json)
        return _Response(200, True)

    monkeypatch.setattr(requests, "post", fake_post)

    assert IdentityClient(base_url="http://auth.test").is_admin("user-1") is True
    assert sent == {"url": "http://auth.test/rpc/is_admin", "json": {"user_id": "user-1"}}


def test_is_admin_false_for_non_true_body(monkeypatch):
    monkeypatch.setattr(requests, "post", lambda *a, **kw: _Response(200, "true"))

    assert IdentityClient(base_url="http://auth.test").is_admin("user-1") is False
