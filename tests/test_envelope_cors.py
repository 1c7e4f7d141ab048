import pytest

from storefront import main
from storefront.services import notification_service
from storefront.services.notification_service import NotificationService


@pytest.mark.parametrize("path", ["/cart", "/admin/products/123", "/does/not/exist"])
def test_preflight_is_answered_on_any_path(client, path):
    resp = client.options(path, headers={"Origin": "https://shop.example.com", "Access-Control-Request-Method": "POST"})

    assert resp.status_code == 200
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] in ("*", "https://shop.example.com")
    assert "authorization" in resp.headers["access-control-allow-headers"]


def test_preflight_respects_configured_origins(client, monkeypatch):
    monkeypatch.setattr(main, "CORS_ORIGINS", ["https://shop.example.com"])

    allowed = client.options("/cart", headers={"Origin": "https://shop.example.com"})
    foreign = client.options("/cart", headers={"Origin": "https://evil.example.com"})

    assert allowed.headers["access-control-allow-origin"] == "https://shop.example.com"
    assert foreign.status_code == 200
    assert foreign.content == b""
    assert "access-control-allow-origin" not in foreign.headers


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/nowhere")

    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_wrong_method_uses_error_envelope(client):
    resp = client.put("/health")

    assert resp.status_code == 405
    assert resp.json()["success"] is False


def test_health(client):
    assert client.get("/health").json() == {"success": True, "data": {"status": "ok"}}


def test_malformed_json_is_invalid_input(client, user_headers):
    resp = client.post("/cart/items", content=b"{not json", headers={**user_headers, "Content-Type": "application/json"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid input"


def test_notification_enqueue_failure_is_swallowed(monkeypatch):
    def broken(*args, **kwargs):
        raise ConnectionError("broker down")

    monkeypatch.setattr(notification_service.send_admin_notification_task, "delay", broken)

    NotificationService.send_order_notification("user-1", "order-1", "9.99")


def test_notification_task_reports_failed_delivery(monkeypatch):
    def broken(payload):
        raise notification_service.RequestException("push down")

    monkeypatch.setattr(notification_service, "_push", broken)

    result = notification_service.send_admin_notification_task.run("new_order", "New order", "body", {})

    assert result == {"type": "new_order", "status": "failed"}


def test_notification_task_sends_payload(monkeypatch):
    sent = []
    monkeypatch.setattr(notification_service, "_push", sent.append)

    result = notification_service.send_admin_notification_task.run("new_order", "New order", "body", {"orderId": "o1"})

    assert result["status"] == "sent"
    assert sent == [{"type": "new_order", "title": "New order", "body": "body", "data": {"orderId": "o1"}}]
