# storefront/services/notification_service.py
import requests
from requests import RequestException

from storefront.celery_worker import celery_app
from storefront.utils.retry import http_retry
from storefront.utils.settings import PUSH_SERVICE_URL, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Admin push notifications, fire-and-forget.
    Delivery runs in a Celery worker, a failed enqueue is only logged.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str, total_amount: str):
        try:
            send_admin_notification_task.delay(
                "new_order",
                "New order",
                f"Order {order_id} placed, total {total_amount}",
                {"orderId": order_id, "userId": user_id},
            )
        except Exception as e:
            logger.error(f"Could not enqueue notification for order {order_id}: {e}")


@http_retry()
def _push(payload: dict):
    resp = requests.post(PUSH_SERVICE_URL, json=payload, timeout=HTTP_TIMEOUT_SECONDS)
    resp.raise_for_status()


@celery_app.task(name="storefront.services.notification_service.send_admin_notification_task")
def send_admin_notification_task(kind: str, title: str, body: str, data: dict):
    payload = {"type": kind, "title": title, "body": body, "data": data}
    try:
        _push(payload)
    except RequestException as e:
        logger.warning(f"[NOTIFICATION] push delivery failed for {kind}: {e}")
        return {"type": kind, "status": "failed"}

    logger.info(f"[NOTIFICATION] {kind}: {body}")
    return {"type": kind, "status": "sent"}
